"""Tests for the error taxonomy."""
import pytest

from careforme.core.exceptions import (
    AuthenticationError, BusinessLogicError, ConfigurationError, ExternalServiceError,
    RateLimitError, ResourceNotFoundError, ValidationError
)


class TestErrorEnvelope:
    """Test status codes and the JSON envelope."""

    @pytest.mark.parametrize("error,status,code", [
        (ConfigurationError("missing key"), 500, "CONFIGURATION_ERROR"),
        (AuthenticationError(), 401, "AUTHENTICATION_ERROR"),
        (ValidationError("bad"), 400, "VALIDATION_ERROR"),
        (ResourceNotFoundError("Doctor", "doc1"), 404, "RESOURCE_NOT_FOUND"),
        (ExternalServiceError("Firestore", "offline"), 502, "EXTERNAL_SERVICE_ERROR"),
        (RateLimitError(30), 429, "RATE_LIMIT_EXCEEDED"),
        (BusinessLogicError("busy"), 409, "BUSINESS_LOGIC_ERROR"),
    ])
    def test_status_and_code(self, error, status, code):
        assert error.status_code == status
        assert error.to_dict()["error"]["code"] == code

    def test_validation_field_in_details(self):
        error = ValidationError("Invalid email address", field="email", details={"value": "x"})

        assert error.details == {"value": "x", "field": "email"}

    def test_not_found_message(self):
        error = ResourceNotFoundError("Doctor", "doc9")

        assert error.message == "Doctor doc9 does not exist"
        assert error.details == {"resource_type": "Doctor", "resource_id": "doc9"}

    def test_external_service_details(self):
        error = ExternalServiceError("Firestore", "Failed to delete doctor", {"doctor_id": "doc1"})

        assert error.message == "Firestore: Failed to delete doctor"
        assert error.details == {"doctor_id": "doc1", "service": "Firestore"}

    def test_configuration_setting(self):
        error = ConfigurationError("FIREBASE_WEB_API_KEY is not configured", setting="FIREBASE_WEB_API_KEY")

        assert error.details == {"setting": "FIREBASE_WEB_API_KEY"}
