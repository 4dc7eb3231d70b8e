"""Tests for shared/exceptions.py."""

from shared.exceptions import (
    OrionError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
)


class TestOrionError:
    def test_orion_error_message(self):
        """OrionError should store message."""
        error = OrionError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_orion_error_default_code(self):
        """OrionError should default code to class name."""
        error = OrionError("Test error")
        assert error.code == "OrionError"

    def test_orion_error_custom_code(self):
        error = OrionError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_orion_error_default_details(self):
        """OrionError should default details to empty dict."""
        error = OrionError("Test error")
        assert error.details == {}

    def test_orion_error_to_dict(self):
        error = OrionError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"

    def test_default_status_code(self):
        assert OrionError("boom").status_code == 500


class TestStatusCodes:
    def test_not_found(self):
        assert NotFoundError("missing").status_code == 404

    def test_validation(self):
        assert ValidationError("bad").status_code == 400

    def test_conflict_maps_to_bad_request(self):
        """Duplicate registrations are reported as 400, not 409."""
        assert ConflictError("dup").status_code == 400

    def test_authentication(self):
        assert AuthenticationError("Unauthorized").status_code == 401

    def test_authorization(self):
        assert AuthorizationError("Forbidden").status_code == 403

    def test_subclasses_inherit_from_orion_error(self):
        for cls in (NotFoundError, ValidationError, ConflictError, AuthenticationError, AuthorizationError):
            assert issubclass(cls, OrionError)


class TestExternalServiceError:
    def test_records_service(self):
        error = ExternalServiceError("Stripe down", service="stripe")
        assert error.service == "stripe"
        assert error.details["service"] == "stripe"
        assert error.status_code == 500

    def test_merges_details(self):
        error = ExternalServiceError("Stripe down", service="stripe", details={"operation": "checkout"})
        assert error.details == {"operation": "checkout", "service": "stripe"}
