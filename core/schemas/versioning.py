"""
Schemas - Versioning
File: versioning.py

Purpose: Centralize manifest format version constants.
This file must remain tiny and have no imports from other schema files
to avoid circular dependencies.
"""

# Highest manifest version this loader understands
MAX_SUPPORTED_MANIFEST_VERSION: float = 1.0

# Zero is reserved as "unset" and never a legitimate version
UNSET_MANIFEST_VERSION: float = 0.0


def is_valid_manifest_version(version: float) -> bool:
    """Check that a manifest version is set and positive."""
    return version > UNSET_MANIFEST_VERSION


def is_supported_manifest_version(
    version: float,
    max_supported: float = MAX_SUPPORTED_MANIFEST_VERSION,
) -> bool:
    """
    Check if a manifest version is fully understood by this loader.

    Newer versions are still loaded on a best-effort basis; callers record a
    warning instead of failing.
    """
    return is_valid_manifest_version(version) and version <= max_supported
