"""
Schemas - Errors
File: errors.py

Purpose: Error taxonomy for transformation bundle ingestion.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used by the bundle loader."""

    # Archive Errors
    ARCHIVE_NOT_FOUND = "ARCHIVE_NOT_FOUND"
    ARCHIVE_CORRUPT = "ARCHIVE_CORRUPT"

    # Manifest Errors
    MANIFEST_NOT_FOUND = "MANIFEST_NOT_FOUND"
    MANIFEST_CORRUPT = "MANIFEST_CORRUPT"
    INVALID_MANIFEST = "INVALID_MANIFEST"

    # Patch Errors
    DESCRIPTION_CORRUPT = "DESCRIPTION_CORRUPT"
    PATCH_NOT_FOUND = "PATCH_NOT_FOUND"

    # Summary Errors
    SUMMARY_NOT_FOUND = "SUMMARY_NOT_FOUND"
    SUMMARY_INVALID = "SUMMARY_INVALID"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class BundleError(BaseModel):
    """
    Error model for structured error communication.

    Used when a load failure is reported as data (for example inside a
    VerificationResult) instead of being raised.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MANIFEST_CORRUPT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the load can be retried against a fresh archive",
    )

    def to_exception(self) -> "BundleException":
        """Convert this error model to a raised exception."""
        return BundleException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class BundleException(Exception):
    """
    Base exception for all bundle ingestion errors.

    Every subclass is terminal to a load call.
    """

    def __init__(
        self,
        message: str,
        code: str = "BUNDLE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> BundleError:
        """Convert this exception to a BundleError model."""
        return BundleError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class ArchiveNotFoundError(BundleException):
    """Raised when the input archive path does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(
            message=f"Could not find artifact: {path}",
            code=ErrorCodes.ARCHIVE_NOT_FOUND,
            details={"path": path},
        )


class ArchiveCorruptError(BundleException):
    """Raised when the archive could not be expanded."""

    def __init__(self, path: str, details: dict[str, Any] | None = None) -> None:
        self.path = path
        full_details = details or {}
        full_details["path"] = path
        super().__init__(
            message=f"Could not unzip artifact: {path}",
            code=ErrorCodes.ARCHIVE_CORRUPT,
            details=full_details,
            # A re-downloaded archive may expand cleanly
            retryable=True,
        )


class ManifestNotFoundError(BundleException):
    """Raised when no manifest file exists in the expanded archive."""

    def __init__(self, filename: str) -> None:
        super().__init__(
            message=f"Could not find manifest ({filename}) in artifact",
            code=ErrorCodes.MANIFEST_NOT_FOUND,
            details={"filename": filename},
        )


class ManifestCorruptError(BundleException):
    """Raised when the manifest cannot be deserialized or has no version."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            message=f"Unable to deserialize the manifest: {message}",
            code=ErrorCodes.MANIFEST_CORRUPT,
            details=details,
        )


class InvalidManifestError(BundleException):
    """Raised when a root referenced by the manifest is not a directory."""

    def __init__(self, field_name: str, root: str, reason: str = "was not a directory") -> None:
        self.field_name = field_name
        self.root = root
        super().__init__(
            message=f"Expected {field_name} '{root}' {reason}",
            code=ErrorCodes.INVALID_MANIFEST,
            details={"field": field_name, "root": root},
        )


class DescriptionCorruptError(BundleException):
    """Raised when the patch description file cannot be deserialized."""

    def __init__(self, filename: str, message: str) -> None:
        self.filename = filename
        super().__init__(
            message=f"Unable to deserialize patch description {filename}: {message}",
            code=ErrorCodes.DESCRIPTION_CORRUPT,
            details={"filename": filename},
        )


class PatchNotFoundError(BundleException):
    """Raised when a required patch file is absent."""

    def __init__(self, filename: str, directory: str | None = None) -> None:
        self.filename = filename
        details: dict[str, Any] = {"filename": filename}
        if directory:
            details["directory"] = directory
        super().__init__(
            message=f"Patch file not found: {filename}",
            code=ErrorCodes.PATCH_NOT_FOUND,
            details=details,
        )


class SummaryNotFoundError(BundleException):
    """Raised when the summary file is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Could not find transformation summary: {path}",
            code=ErrorCodes.SUMMARY_NOT_FOUND,
            details={"path": path},
        )


class SummaryInvalidError(BundleException):
    """Raised when the summary path is not a regular file."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"The summary in the downloaded zip had an unknown format: {path}",
            code=ErrorCodes.SUMMARY_INVALID,
            details={"path": path},
        )
