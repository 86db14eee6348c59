"""
Schemas - Manifest
File: manifest.py

Purpose: Typed representation of the archive's top-level descriptor.

The manifest names the format version and the locations (relative to the
extraction root) of the summary and patches directories:

    {"version": 1.0, "summaryRoot": "summary", "patchesRoot": "patch"}
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ManifestCorruptError
from .versioning import UNSET_MANIFEST_VERSION, is_valid_manifest_version


class Manifest(BaseModel):
    """Manifest describing a transformation result archive."""

    # Unknown keys are ignored so newer producers can add fields
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    version: float = Field(
        default=UNSET_MANIFEST_VERSION,
        description="Format version; zero means unset and is rejected",
    )
    summary_root: str = Field(
        ...,
        alias="summaryRoot",
        description="Directory holding summary.md, relative to the extraction root",
    )
    patches_root: str = Field(
        ...,
        alias="patchesRoot",
        description="Directory holding the patch files, relative to the extraction root",
    )
    artifacts_root: Optional[str] = Field(
        default=None,
        alias="artifactsRoot",
        description="Directory holding auxiliary build artifacts (not consumed)",
    )

    @classmethod
    def from_dict(cls, data: Any) -> "Manifest":
        """
        Build a manifest from decoded JSON.

        Raises:
            ManifestCorruptError: If required fields are missing or the
                version is unset.
        """
        try:
            manifest = cls.model_validate(data)
        except ValidationError as e:
            raise ManifestCorruptError(
                f"{e.error_count()} validation error(s)",
                details={"errors": e.errors(include_url=False)},
            ) from e
        if not is_valid_manifest_version(manifest.version):
            raise ManifestCorruptError(
                f"version must be a positive number, got {manifest.version}",
                details={"version": manifest.version},
            )
        return manifest

    @classmethod
    def parse(cls, text: str) -> "Manifest":
        """Parse manifest JSON text."""
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestCorruptError(str(e)) from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "Manifest":
        """Read and parse a manifest file."""
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ManifestCorruptError(f"cannot read {path.name}: {e}") from e
        return cls.parse(text)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the archive's camelCase keys."""
        return self.model_dump(by_alias=True, exclude_none=True)
