"""
Transformation Artifacts
File: extract.py

Purpose: Expand a downloaded result archive into a working directory.

Expansion reports failure with a False return value rather than raising; the
loader turns that into ArchiveCorruptError. Only a missing archive raises.
"""

from __future__ import annotations

import logging
import shutil
import zipfile
import zlib
from pathlib import Path

from core.config.runtime import DEFAULT_MAX_ENTRIES, DEFAULT_MAX_TOTAL_BYTES
from core.schemas.errors import ArchiveNotFoundError

logger = logging.getLogger(__name__)

MAX_PATH_DEPTH = 50
MAX_PATH_COMPONENT_LENGTH = 255


class UnsafeArchiveError(Exception):
    """Archive entry or archive totals rejected before expansion."""
    pass


def validate_entry_name(filename: str) -> None:
    """
    Validate a zip entry path.

    Rejects NUL bytes, absolute paths, drive letters, `..` components and
    paths that are too deep or have overlong components.
    """
    if "\x00" in filename:
        raise UnsafeArchiveError(f"Null byte in filename: {filename!r}")

    if filename.startswith("/") or filename.startswith("\\"):
        raise UnsafeArchiveError(f"Absolute path not allowed: {filename}")

    # Windows drive letter
    if len(filename) > 1 and filename[1] == ":":
        raise UnsafeArchiveError(f"Windows absolute path not allowed: {filename}")

    components = filename.replace("\\", "/").split("/")
    if len(components) > MAX_PATH_DEPTH:
        raise UnsafeArchiveError(f"Path too deep ({len(components)} levels): {filename}")

    for component in components:
        if component == "..":
            raise UnsafeArchiveError(f"Directory traversal not allowed: {filename}")
        if len(component) > MAX_PATH_COMPONENT_LENGTH:
            raise UnsafeArchiveError(
                f"Path component too long ({len(component)} chars): {component[:50]}..."
            )


def is_symlink(info: zipfile.ZipInfo) -> bool:
    """Check the Unix mode bits stored in external_attr for a symlink."""
    unix_mode = (info.external_attr >> 16) & 0xFFFF
    return (unix_mode & 0o170000) == 0o120000


def validate_archive(
    zf: zipfile.ZipFile,
    *,
    max_entries: int = DEFAULT_MAX_ENTRIES,
    max_total_bytes: int = DEFAULT_MAX_TOTAL_BYTES,
) -> None:
    """Validate every entry and the archive totals."""
    infos = zf.infolist()
    if len(infos) > max_entries:
        raise UnsafeArchiveError(
            f"Too many files in archive: {len(infos)} (max: {max_entries})"
        )

    total_size = 0
    for info in infos:
        validate_entry_name(info.filename)
        if is_symlink(info):
            raise UnsafeArchiveError(f"Symlinks not allowed: {info.filename}")
        total_size += info.file_size
        if total_size > max_total_bytes:
            raise UnsafeArchiveError(
                f"Total uncompressed size exceeds limit: {total_size} bytes "
                f"(max: {max_total_bytes})"
            )


def expand_archive(
    archive_path: str | Path,
    destination: str | Path,
    *,
    max_entries: int = DEFAULT_MAX_ENTRIES,
    max_total_bytes: int = DEFAULT_MAX_TOTAL_BYTES,
) -> bool:
    """
    Expand all entries of a zip archive into `destination`.

    Relative entry paths are preserved.

    Args:
        archive_path: Path to the zip archive
        destination: Directory to expand into (created if missing)
        max_entries: Maximum number of entries accepted
        max_total_bytes: Maximum total uncompressed size accepted

    Returns:
        True if the archive was fully expanded, False on a corrupt or unsafe
        archive or an I/O error.

    Raises:
        ArchiveNotFoundError: If `archive_path` does not exist.
    """
    archive = Path(archive_path)
    if not archive.exists():
        raise ArchiveNotFoundError(str(archive))

    dest = Path(destination)
    try:
        dest.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(archive, "r") as zf:
            validate_archive(zf, max_entries=max_entries, max_total_bytes=max_total_bytes)
            for info in zf.infolist():
                target = dest / info.filename
                if info.is_dir():
                    target.mkdir(parents=True, exist_ok=True)
                    continue
                target.parent.mkdir(parents=True, exist_ok=True)
                with zf.open(info) as src, open(target, "wb") as out:
                    shutil.copyfileobj(src, out)
    except (zipfile.BadZipFile, zlib.error, NotImplementedError) as e:
        logger.error(f"Could not unzip artifact {archive}: {e}")
        return False
    except UnsafeArchiveError as e:
        logger.error(f"Rejected unsafe artifact {archive}: {e}")
        return False
    except (OSError, EOFError) as e:
        logger.error(f"I/O error while expanding {archive}: {e}")
        return False

    logger.debug(f"Expanded {archive} into {dest}")
    return True
