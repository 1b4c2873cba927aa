"""
Tests for the shared service layer primitives.

This module tests:
- ServiceResult: success/failure construction, truthiness, response bodies
- BaseService: per-class loggers, transactions, exception conversion
"""

import logging

import pytest
from django.db import DatabaseError

from authentication.models import User
from core.exceptions import NotFoundError, ValidationError
from core.services import INTERNAL_ERROR, BaseService, ServiceResult


class SampleService(BaseService):
    pass


# =============================================================================
# TestServiceResult
# =============================================================================


class TestServiceResult:
    """
    Tests for ServiceResult.

    Verifies:
    - Factory methods set the right fields
    - A failed result is falsy even though the object exists
    - Application exceptions keep their own message and code
    """

    def test_success_carries_data(self):
        result = ServiceResult.success({"thread_id": 7})

        assert result.success is True
        assert result.data == {"thread_id": 7}
        assert result.error is None
        assert result.error_code is None

    def test_failure_carries_message_and_code(self):
        result = ServiceResult.failure("Thread not found", "THREAD_NOT_FOUND")

        assert result.success is False
        assert result.data is None
        assert result.error == "Thread not found"
        assert result.error_code == "THREAD_NOT_FOUND"

    def test_failure_is_falsy(self):
        """
        Why it matters: Callers holding an optional failure must compare
        against None; a plain truthiness check would skip every failure.
        """
        assert not ServiceResult.failure("nope", "X")
        assert ServiceResult.success(None)

    def test_from_application_exception_keeps_code(self):
        exc = NotFoundError("Participant not found", error_code="PARTICIPANT_NOT_FOUND")

        result = ServiceResult.from_exception(exc)

        assert result.success is False
        assert result.error == "Participant not found"
        assert result.error_code == "PARTICIPANT_NOT_FOUND"

    def test_from_exception_explicit_code_wins(self):
        exc = ValidationError("bad coordinates", error_code="INVALID_COORDINATES")

        result = ServiceResult.from_exception(exc, error_code="OVERRIDE")

        assert result.error_code == "OVERRIDE"

    def test_from_plain_exception_uses_class_name(self):
        result = ServiceResult.from_exception(KeyError("missing"))

        assert result.error_code == "KEYERROR"

    def test_to_response_for_failure(self):
        result = ServiceResult.failure(
            "Invalid",
            "INVALID_ATTACHMENT",
            errors={"attachment_data": ["must be a string"]},
        )

        assert result.to_response() == {
            "error": "Invalid",
            "error_code": "INVALID_ATTACHMENT",
            "errors": {"attachment_data": ["must be a string"]},
        }

    def test_to_response_omits_empty_fields(self):
        assert ServiceResult.failure("Invalid").to_response() == {"error": "Invalid"}


# =============================================================================
# TestBaseService
# =============================================================================


class TestBaseService:
    """
    Tests for BaseService helpers.

    Verifies:
    - Logger naming per service class
    - atomic() rolls back on error
    - handle_exception() hides the original error text from callers
    """

    def test_logger_named_after_service(self):
        logger = SampleService.get_logger()

        assert logger.name == f"{__name__}.SampleService"

    @pytest.mark.django_db
    def test_atomic_rolls_back_on_error(self):
        with pytest.raises(RuntimeError):
            with SampleService.atomic():
                User.objects.create_user(email="rollback@example.com", password="x")
                raise RuntimeError("boom")

        assert not User.objects.filter(email="rollback@example.com").exists()

    def test_handle_exception_returns_internal_error(self, caplog):
        """
        Why it matters: Store failures must surface as a generic
        INTERNAL_ERROR; the driver message only belongs in the log.
        """
        with caplog.at_level(logging.ERROR):
            result = SampleService.handle_exception(
                DatabaseError("connection reset"),
                context="Failed to send message",
            )

        assert result.success is False
        assert result.error_code == INTERNAL_ERROR
        assert "connection reset" not in result.error
        assert "Failed to send message: connection reset" in caplog.text

    def test_handle_exception_custom_level(self, caplog):
        with caplog.at_level(logging.WARNING):
            SampleService.handle_exception(
                DatabaseError("slow"),
                log_level=logging.WARNING,
            )

        assert caplog.records[-1].levelno == logging.WARNING
