"""
Transformation Artifacts
File: bundle.py

Purpose: The immutable, fully validated result of loading a transformation
archive.

The archive format branch (legacy single patch vs. described multi patch) is
decided once by the loader and carried as a tagged variant, so downstream
code never needs to re-probe the extracted files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from core.schemas.description import PatchInfo
from core.schemas.manifest import Manifest
from core.schemas.summary import TransformationSummary
from core.schemas.verification import CheckResult


class PatchFile(BaseModel):
    """A patch file resolved inside the extraction workspace.

    The content is read eagerly so the bundle stays usable if the workspace
    is cleared.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    filename: str = Field(..., min_length=1)
    path: Path = Field(..., description="Absolute path of the extracted patch")
    data: bytes = Field(..., repr=False)

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")

    @property
    def size(self) -> int:
        return len(self.data)

    @classmethod
    def read(cls, path: Path, filename: str | None = None) -> "PatchFile":
        return cls(filename=filename or path.name, path=path, data=path.read_bytes())


class LegacySinglePatch(BaseModel):
    """Archive without a description: exactly one fixed-name patch."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["legacy_single_patch"] = "legacy_single_patch"
    patch: PatchFile


class DescribedMultiPatch(BaseModel):
    """Archive with a description file ordering one or more patches."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["described_multi_patch"] = "described_multi_patch"
    description_file: Path
    entries: tuple[PatchInfo, ...]
    patches: tuple[PatchFile, ...]

    @model_validator(mode="after")
    def _check_alignment(self) -> "DescribedMultiPatch":
        if len(self.entries) != len(self.patches):
            raise ValueError(
                f"Description lists {len(self.entries)} patches but "
                f"{len(self.patches)} were resolved"
            )
        for info, patch in zip(self.entries, self.patches):
            if Path(info.filename).name != patch.path.name:
                raise ValueError(
                    f"Patch order mismatch: expected {info.filename}, got {patch.filename}"
                )
        return self


PatchSet = Annotated[
    Union[LegacySinglePatch, DescribedMultiPatch],
    Field(discriminator="kind"),
]


class Bundle(BaseModel):
    """
    Transformation result bundle.

    Owns references to extracted files but not the extraction root's
    lifecycle; see workspace.clear_extraction_cache.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    source_archive_path: Path = Field(
        ...,
        description="Archive the bundle was loaded from",
    )
    manifest: Manifest
    patch_set: PatchSet
    summary: TransformationSummary
    summary_file: Path = Field(
        ...,
        description="Extracted summary.md, for hosts that render it from disk",
    )
    workspace: Path = Field(
        ...,
        description="Private extraction directory of this load",
    )
    warnings: tuple[CheckResult, ...] = Field(
        default=(),
        description="Non-fatal conditions found while loading",
    )

    @model_validator(mode="after")
    def _check_patches(self) -> "Bundle":
        if not self.patches:
            raise ValueError("Bundle must contain at least one patch")
        return self

    @property
    def is_legacy(self) -> bool:
        return isinstance(self.patch_set, LegacySinglePatch)

    @property
    def patches(self) -> tuple[PatchFile, ...]:
        """Patches in application order."""
        if isinstance(self.patch_set, LegacySinglePatch):
            return (self.patch_set.patch,)
        return self.patch_set.patches

    @property
    def description(self) -> Optional[tuple[PatchInfo, ...]]:
        """Patch descriptions, or None for legacy single-patch archives."""
        if isinstance(self.patch_set, DescribedMultiPatch):
            return self.patch_set.entries
        return None

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0
