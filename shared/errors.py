"""
Shared error handling for the Moodle access client.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel

from shared.logging import request_id_var


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class MoodleClientException(Exception):
    """Base exception for the Moodle access client."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id_var.get(),
            code=self.code,
            message=self.message,
            details=self.details
        )


class MoodleApiError(MoodleClientException):
    """Moodle returned an exception envelope."""

    def __init__(self, message: str = "Moodle web service error", details: Optional[Dict[str, Any]] = None):
        super().__init__("MOODLE_EXCEPTION", message, details)


class UnexpectedResponseError(MoodleClientException):
    """Response body did not have the expected shape."""

    def __init__(self, message: str = "Server returned unexpected response.", details: Optional[Dict[str, Any]] = None):
        super().__init__("UNEXPECTED_RESPONSE", message, details)


class FetchError(MoodleClientException):
    """Transport-level errors."""

    def __init__(self, message: str = "Fetch failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("FETCH_ERROR", message, details)


class NotFoundError(MoodleClientException):
    """Lookup found nothing where something was required."""

    def __init__(self, message: str = "Not found", details: Optional[Dict[str, Any]] = None):
        super().__init__("NOT_FOUND", message, details)


class AmbiguousMatchError(MoodleClientException):
    """Lookup matched more than one account."""

    def __init__(self, message: str = "Multiple moodle accounts match", details: Optional[Dict[str, Any]] = None):
        super().__init__("AMBIGUOUS_MATCH", message, details)


class ValidationError(MoodleClientException):
    """Validation-related errors."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("VALIDATION_ERROR", message, details)


class ConfigurationError(MoodleClientException):
    """Required settings are missing."""

    def __init__(self, message: str = "Configuration error", details: Optional[Dict[str, Any]] = None):
        super().__init__("CONFIGURATION_ERROR", message, details)


class RestrictionDecodeError(MoodleClientException):
    """Restriction payload could not be decoded."""

    def __init__(self, message: str = "Invalid restriction payload", details: Optional[Dict[str, Any]] = None):
        super().__init__("RESTRICTION_DECODE_ERROR", message, details)


class MailDeliveryError(MoodleClientException):
    """SMTP delivery errors."""

    def __init__(self, message: str = "Mail delivery failed", details: Optional[Dict[str, Any]] = None):
        super().__init__("MAIL_DELIVERY_ERROR", message, details)
