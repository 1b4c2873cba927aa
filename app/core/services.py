"""
Service layer primitives shared by every domain app.

This module provides:
- ServiceResult: Typed success/failure wrapper returned by service methods
- BaseService: Base class with logging, transaction and error conversion helpers

Service Layer Conventions:
    - Views deal with HTTP, models with persistence, services with rules.
    - Expected failures (bad input, missing records, ownership) are returned
      as ServiceResult.failure() with a machine-readable error_code.
    - Store failures are converted once, at the service boundary, through
      BaseService.handle_exception() so they surface as INTERNAL_ERROR.

Usage:
    from core.services import BaseService, ServiceResult

    class ThreadService(BaseService):
        @classmethod
        def rename(cls, thread, title) -> ServiceResult[Thread]:
            if not title.strip():
                return ServiceResult.failure("Title is required", "EMPTY_TITLE")

            with cls.atomic():
                thread.title = title.strip()
                thread.save(update_fields=["title", "updated_at"])

            return ServiceResult.success(thread)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Generic, TypeVar

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator
    from typing import Any

T = TypeVar("T")

INTERNAL_ERROR = "INTERNAL_ERROR"


@dataclass
class ServiceResult(Generic[T]):
    """
    Outcome of a service operation.

    Attributes:
        success: Whether the operation succeeded
        data: Payload on success
        error: Human-readable message on failure
        error_code: Machine-readable code the view layer maps to a status
        errors: Optional field-level details

    Example:
        result = MessageService.send_message(thread_id, user, "Hi")
        if result:
            payload = result.data
        else:
            log(result.error_code)
    """

    success: bool
    data: T | None = None
    error: str | None = None
    error_code: str | None = None
    errors: dict[str, list[str]] | None = field(default=None)

    @classmethod
    def success(cls, data: T) -> ServiceResult[T]:
        """Build a successful result carrying ``data``."""
        return cls(success=True, data=data)

    @classmethod
    def failure(
        cls,
        error: str,
        error_code: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> ServiceResult[T]:
        """
        Build a failed result.

        Args:
            error: Human-readable error message
            error_code: Machine-readable error code
            errors: Field-level errors, if any

        Returns:
            ServiceResult with success=False
        """
        return cls(
            success=False,
            error=error,
            error_code=error_code,
            errors=errors,
        )

    @classmethod
    def from_exception(
        cls, exc: Exception, error_code: str | None = None
    ) -> ServiceResult[T]:
        """
        Build a failed result from an exception.

        Application errors (core.exceptions) carry their own message and
        code; anything else falls back to the class name.
        """
        message = getattr(exc, "message", None) or str(exc)
        code = error_code or getattr(exc, "error_code", None)
        return cls(
            success=False,
            error=message,
            error_code=code or exc.__class__.__name__.upper(),
        )

    def to_response(self) -> dict[str, Any]:
        """
        Render the failure as an API error body.

        Returns:
            {"error": ..., "error_code": ...} plus "errors" when present
        """
        if self.success:
            return {"success": True, "data": self.data}

        response: dict[str, Any] = {"error": self.error}
        if self.error_code:
            response["error_code"] = self.error_code
        if self.errors:
            response["errors"] = self.errors
        return response

    def __bool__(self) -> bool:
        return self.success


class BaseService:
    """
    Base class for stateless service classes.

    Subclasses expose classmethods only. Each class gets its own logger
    named ``<module>.<ClassName>`` so log output can be filtered per service.
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """Return the logger for this service class."""
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Run the enclosed block in a database transaction.

        Nested use creates a savepoint, so a service may call another
        service's atomic section without committing early.
        """
        with transaction.atomic():
            yield

    @classmethod
    def handle_exception(
        cls,
        exc: Exception,
        context: str = "",
        error_code: str = INTERNAL_ERROR,
        log_level: int = logging.ERROR,
    ) -> ServiceResult:
        """
        Log an unexpected exception and convert it to a failed result.

        Args:
            exc: The caught exception
            context: What the service was doing, for the log line
            error_code: Code for the resulting failure
            log_level: Level to log at (default ERROR)

        Returns:
            ServiceResult.failure with a generic message; the original
            error text is only written to the log.
        """
        logger = cls.get_logger()
        message = f"{context}: {exc}" if context else str(exc)
        logger.log(log_level, message, exc_info=True)
        return ServiceResult.failure(
            "An internal error occurred",
            error_code=error_code,
        )
