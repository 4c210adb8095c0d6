"""Error taxonomy of the admin backend.

Every error carries the HTTP status the API answers with and a stable
``error_code`` clients can switch on. ``to_dict`` renders the JSON error
envelope returned by the Flask error handlers.
"""
from typing import Optional, Dict, Any


class CareForMeException(Exception):
    """Root of the admin backend errors."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Error envelope: ``{"error": {"code", "message", "details"}}``."""
        return {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "details": self.details
            }
        }


class ConfigurationError(CareForMeException):
    """Firebase credentials or API keys are missing or unusable."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, setting: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if setting:
            details["setting"] = setting
        super().__init__(message, details=details)


class AuthenticationError(CareForMeException):
    """Bad admin credentials, or a missing, expired or revoked ID token."""

    status_code = 401
    error_code = "AUTHENTICATION_ERROR"

    def __init__(self, message: str = "Not signed in", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)


class ValidationError(CareForMeException):
    """A doctor form, filter or settings payload was rejected.

    ``field`` names the offending input so the admin UI can highlight it.
    """

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if field:
            details["field"] = field
        super().__init__(message, details=details)


class ResourceNotFoundError(CareForMeException):
    """No stored document under the requested id."""

    status_code = 404
    error_code = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_type: str, resource_id: Optional[str] = None):
        message = f"{resource_type} {resource_id} does not exist" if resource_id else f"{resource_type} does not exist"
        super().__init__(message, details={"resource_type": resource_type, "resource_id": resource_id})


class ExternalServiceError(CareForMeException):
    """Firestore or Firebase Auth failed; local state was left untouched."""

    status_code = 502
    error_code = "EXTERNAL_SERVICE_ERROR"

    def __init__(self, service: str, message: str, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        details["service"] = service
        super().__init__(f"{service}: {message}", details=details)


class RateLimitError(CareForMeException):
    """Too many admin API calls from one account or address."""

    status_code = 429
    error_code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, retry_after: Optional[int] = None):
        super().__init__(
            "Too many requests, slow down",
            details={"retry_after": retry_after} if retry_after else None
        )


class BusinessLogicError(CareForMeException):
    """The doctor record is busy with another write, or its state forbids the change."""

    status_code = 409
    error_code = "BUSINESS_LOGIC_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details=details)
