"""
Transformation Artifacts
File: workspace.py

Purpose: Isolated extraction directories for bundle loads.

All loads share one process-wide extraction root, but each load expands into
its own uniquely named subdirectory so concurrent loads of different archives
never overwrite each other's manifest or patch files. Directories of
successful loads are kept until the cache is cleared explicitly.
"""

from __future__ import annotations

import logging
import re
import shutil
import tempfile
import threading
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

EXTRACTION_DIR_NAME = "codeTransformArtifacts"

_root_lock = threading.Lock()
_extraction_root: Optional[Path] = None

_UNSAFE_PREFIX_CHARS = re.compile(r"[^A-Za-z0-9_.-]+")


def get_extraction_root(base: str | Path | None = None) -> Path:
    """
    Return the shared extraction root, creating it on first use.

    Args:
        base: Explicit root directory. When None, a process-wide directory
            created with mkdtemp under the system temp dir is used.
    """
    global _extraction_root
    if base is not None:
        root = Path(base)
        root.mkdir(parents=True, exist_ok=True)
        return root

    with _root_lock:
        if _extraction_root is None or not _extraction_root.is_dir():
            # Unpredictable name, owner-only permissions
            _extraction_root = Path(tempfile.mkdtemp(prefix=EXTRACTION_DIR_NAME)).resolve()
        return _extraction_root


def clear_extraction_cache(base: str | Path | None = None) -> None:
    """Remove the extraction root and everything extracted into it."""
    global _extraction_root
    with _root_lock:
        root = Path(base) if base is not None else _extraction_root
        if base is None:
            _extraction_root = None
    if root is not None and root.exists():
        logger.info(f"Clearing extraction cache at {root}")
        shutil.rmtree(root, ignore_errors=True)


class ExtractionWorkspace:
    """A single load's private extraction directory."""

    def __init__(self, path: Path) -> None:
        self.path = path

    @classmethod
    def create(cls, archive_path: str | Path, base: str | Path | None = None) -> "ExtractionWorkspace":
        """Create a fresh, uniquely named directory under the extraction root."""
        root = get_extraction_root(base)
        stem = _UNSAFE_PREFIX_CHARS.sub("_", Path(archive_path).stem)[:64] or "artifact"
        path = Path(tempfile.mkdtemp(prefix=f"{stem}-", dir=root)).resolve()
        logger.debug(f"Created extraction workspace {path}")
        return cls(path)

    def resolve(self, relative: str) -> Path:
        """
        Resolve a manifest-relative path inside this workspace.

        Raises:
            ValueError: If the path escapes the workspace.
        """
        base = self.path.resolve()
        target = (base / relative).resolve()
        if target != base and base not in target.parents:
            raise ValueError(f"Path escapes extraction workspace: {relative}")
        return target

    def cleanup(self) -> None:
        """Remove this workspace from disk."""
        if self.path.exists():
            shutil.rmtree(self.path, ignore_errors=True)
            logger.debug(f"Removed extraction workspace {self.path}")

    def __repr__(self) -> str:
        return f"ExtractionWorkspace(path={str(self.path)!r})"
