"""
Schemas - Transformation Summary
File: summary.py

Purpose: Holder for the human-readable summary shipped in the archive.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import SummaryInvalidError, SummaryNotFoundError


class TransformationSummary(BaseModel):
    """Free-text Markdown summary, kept verbatim."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: str = Field(..., description="Full summary content")

    @property
    def title(self) -> Optional[str]:
        """First top-level Markdown heading, if any."""
        for line in self.text.splitlines():
            stripped = line.strip()
            if stripped.startswith("# "):
                return stripped[2:].strip()
        return None

    @classmethod
    def from_file(cls, path: str | Path) -> "TransformationSummary":
        """
        Load the summary from disk.

        Bytes that are not valid UTF-8 are replaced with U+FFFD.

        Raises:
            SummaryNotFoundError: If the file does not exist.
            SummaryInvalidError: If the path is not a regular file or unreadable.
        """
        path = Path(path)
        if not path.exists():
            raise SummaryNotFoundError(str(path))
        if not path.is_file():
            raise SummaryInvalidError(str(path))
        try:
            return cls(text=path.read_text(encoding="utf-8", errors="replace"))
        except OSError as e:
            raise SummaryInvalidError(str(path)) from e
