"""
Schemas - Patch Description
File: description.py

Purpose: Optional per-patch metadata shipped next to the patches.

    {"content": [{"filename": "01-upgrade.patch", "name": "...", "isSuccessful": true}, ...]}

Order of `content` defines patch application order.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import DescriptionCorruptError


class PatchInfo(BaseModel):
    """Metadata for a single patch file."""

    # Producer-specific metadata keys are preserved
    model_config = ConfigDict(extra="allow", frozen=True, populate_by_name=True)

    filename: str = Field(
        ...,
        description="Patch file name, relative to the patches root",
        min_length=1,
    )
    name: Optional[str] = Field(
        default=None,
        description="Short display name of the patch",
    )
    is_successful: Optional[bool] = Field(
        default=None,
        alias="isSuccessful",
        description="Whether the producer applied this step successfully",
    )
    description: Optional[str] = Field(default=None)


class DescriptionContent(BaseModel):
    """Ordered list of patch descriptions."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    content: list[PatchInfo] = Field(default_factory=list)

    @property
    def filenames(self) -> list[str]:
        return [info.filename for info in self.content]

    @classmethod
    def parse(cls, text: str, filename: str = "<description>") -> "DescriptionContent":
        """
        Parse description JSON text.

        Raises:
            DescriptionCorruptError: On malformed JSON or missing fields.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise DescriptionCorruptError(filename, str(e)) from e
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DescriptionCorruptError(filename, f"{e.error_count()} validation error(s)") from e

    @classmethod
    def from_file(cls, path: str | Path) -> "DescriptionContent":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise DescriptionCorruptError(path.name, str(e)) from e
        return cls.parse(text, filename=path.name)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)
