"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Version constants
from .versioning import (
    MAX_SUPPORTED_MANIFEST_VERSION,
    UNSET_MANIFEST_VERSION,
    is_supported_manifest_version,
    is_valid_manifest_version,
)

# Error models and exceptions
from .errors import (
    ArchiveCorruptError,
    ArchiveNotFoundError,
    BundleError,
    BundleException,
    DescriptionCorruptError,
    ErrorCodes,
    InvalidManifestError,
    ManifestCorruptError,
    ManifestNotFoundError,
    PatchNotFoundError,
    SummaryInvalidError,
    SummaryNotFoundError,
)

# Verification schemas
from .verification import (
    CheckResult,
    CheckSeverity,
    VerificationResult,
)

# Archive content schemas
from .manifest import Manifest
from .description import DescriptionContent, PatchInfo
from .summary import TransformationSummary


# Define __all__ for explicit public API
__all__ = [
    # Versioning
    "MAX_SUPPORTED_MANIFEST_VERSION",
    "UNSET_MANIFEST_VERSION",
    "is_supported_manifest_version",
    "is_valid_manifest_version",
    # Errors
    "BundleError",
    "BundleException",
    "ErrorCodes",
    "ArchiveNotFoundError",
    "ArchiveCorruptError",
    "ManifestNotFoundError",
    "ManifestCorruptError",
    "InvalidManifestError",
    "DescriptionCorruptError",
    "PatchNotFoundError",
    "SummaryNotFoundError",
    "SummaryInvalidError",
    # Verification
    "CheckResult",
    "CheckSeverity",
    "VerificationResult",
    # Archive content
    "Manifest",
    "PatchInfo",
    "DescriptionContent",
    "TransformationSummary",
]
