"""
Schemas - Verification
File: verification.py

Purpose: Standard result format for validation steps.
Non-fatal conditions (such as a manifest newer than this loader) are reported
as warning-level checks, kept apart from the raised error taxonomy.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .errors import BundleError


# Severity levels for checks
CheckSeverity = Literal["info", "warn", "error"]


class CheckResult(BaseModel):
    """
    Result of a single validation check.

    Checks are atomic validation steps that can pass or fail.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    check_id: str = Field(
        ...,
        description="Unique identifier for this check",
        min_length=1,
    )
    ok: bool = Field(
        ...,
        description="Whether the check passed",
    )
    severity: CheckSeverity = Field(
        ...,
        description="Severity level of this check",
    )
    message: str = Field(
        ...,
        description="Human-readable message describing the result",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional details about the check",
    )

    @property
    def is_error(self) -> bool:
        """Check if this is an error-level failure."""
        return not self.ok and self.severity == "error"

    @property
    def is_warning(self) -> bool:
        """Check if this is a warning."""
        return self.severity == "warn"

    @classmethod
    def passed(
        cls,
        check_id: str,
        message: str = "Check passed",
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        """Create a passed check result."""
        return cls(
            check_id=check_id,
            ok=True,
            severity="info",
            message=message,
            details=details or {},
        )

    @classmethod
    def warning(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        """Create a warning check result."""
        return cls(
            check_id=check_id,
            ok=True,  # Warnings don't fail the check
            severity="warn",
            message=message,
            details=details or {},
        )

    @classmethod
    def failed(
        cls,
        check_id: str,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> "CheckResult":
        """Create a failed check result."""
        return cls(
            check_id=check_id,
            ok=False,
            severity="error",
            message=message,
            details=details or {},
        )


class VerificationResult(BaseModel):
    """
    Complete result of a validation run.

    This is the standard format for reporting validation outcomes
    without using exceptions.
    """

    model_config = ConfigDict(extra="forbid")

    ok: bool = Field(
        ...,
        description="Overall validation success",
    )
    checks: list[CheckResult] = Field(
        default_factory=list,
        description="Individual check results",
    )
    error: BundleError | None = Field(
        default=None,
        description="Error details if validation encountered an exception",
    )

    @property
    def has_errors(self) -> bool:
        """Check if any checks failed with error severity."""
        return any(check.is_error for check in self.checks)

    @property
    def has_warnings(self) -> bool:
        """Check if any checks produced warnings."""
        return any(check.is_warning for check in self.checks)

    @property
    def error_count(self) -> int:
        return sum(1 for check in self.checks if check.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for check in self.checks if check.is_warning)

    def get_failed_checks(self) -> list[CheckResult]:
        """Get all failed checks."""
        return [check for check in self.checks if not check.ok]

    def get_error_messages(self) -> list[str]:
        """Get all error messages."""
        return [check.message for check in self.checks if check.is_error]

    @classmethod
    def success(cls, checks: list[CheckResult] | None = None) -> "VerificationResult":
        """Create a successful validation result."""
        return cls(ok=True, checks=checks or [])

    @classmethod
    def failure(
        cls,
        checks: list[CheckResult],
        error: BundleError | None = None,
    ) -> "VerificationResult":
        """Create a failed validation result."""
        return cls(ok=False, checks=checks, error=error)

    def add_check(self, check: CheckResult) -> None:
        """Add a check result."""
        self.checks.append(check)
        # Update ok status if we added a failed check
        if not check.ok:
            self.ok = False
