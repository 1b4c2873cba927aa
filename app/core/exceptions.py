"""
Application exception hierarchy.

Lower layers (attachment parsing, the participant directory) raise these
exceptions; services catch them at their boundary and convert them to
ServiceResult failures, so views never see a raw domain exception.

Exception Hierarchy:
    BaseApplicationError (base)
    ├── ValidationError - Malformed input (maps to HTTP 400)
    └── NotFoundError - Record absent or not visible to caller (maps to HTTP 404)

Usage:
    from core.exceptions import NotFoundError

    raise NotFoundError(
        f"Principal {principal_id} not found",
        error_code="PARTICIPANT_NOT_FOUND",
    )
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from typing import Any


class BaseApplicationError(Exception):
    """
    Base class for application errors.

    Attributes:
        message: Human-readable description
        error_code: Machine-readable code for client handling
        details: Extra context (field errors, offending ids)
    """

    default_error_code: str = "APPLICATION_ERROR"

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.default_error_code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Render as an API error body."""
        result: dict[str, Any] = {
            "error": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            result["details"] = self.details
        return result

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ValidationError(BaseApplicationError):
    """
    Raised when input is structurally invalid.

    Example:
        raise ValidationError(
            "Location attachments require latitude and longitude",
            error_code="MISSING_COORDINATES",
        )
    """

    default_error_code: str = "VALIDATION_ERROR"


class NotFoundError(BaseApplicationError):
    """
    Raised when a requested record does not exist.

    Also used where the caller is not allowed to know whether the record
    exists; the message must not reveal which case applied.
    """

    default_error_code: str = "NOT_FOUND"
