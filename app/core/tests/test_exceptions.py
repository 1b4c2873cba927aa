"""
Tests for the application exception hierarchy.
"""

from core.exceptions import BaseApplicationError, NotFoundError, ValidationError


class TestApplicationErrors:
    def test_default_error_codes(self):
        assert ValidationError("bad").error_code == "VALIDATION_ERROR"
        assert NotFoundError("gone").error_code == "NOT_FOUND"

    def test_subclasses_share_base(self):
        assert issubclass(ValidationError, BaseApplicationError)
        assert issubclass(NotFoundError, BaseApplicationError)

    def test_to_dict_includes_details_only_when_present(self):
        bare = NotFoundError("gone", error_code="THREAD_NOT_FOUND")
        detailed = NotFoundError(
            "gone",
            error_code="PARTICIPANT_NOT_FOUND",
            details={"principal_id": 42},
        )

        assert bare.to_dict() == {"error": "gone", "error_code": "THREAD_NOT_FOUND"}
        assert detailed.to_dict()["details"] == {"principal_id": 42}

    def test_str_includes_code(self):
        exc = ValidationError("Latitude is required", error_code="MISSING_COORDINATES")

        assert str(exc) == "[MISSING_COORDINATES] Latitude is required"
