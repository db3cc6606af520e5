"""
Centralized error types for the service.

Every foreseeable failure is raised as a ``ServiceError`` carrying the HTTP
status and a stable machine-readable code; the API layer turns it into JSON.
"""

from typing import Any, Dict, Optional


class ServiceError(Exception):
    """Base class for failures that map to a structured JSON error."""

    status_code = 500
    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details

    def to_dict(self, expose_details: bool = False) -> Dict[str, Any]:
        """
        Build the response body for this error.

        Args:
            expose_details: Include the underlying message, if any

        Returns:
            Dictionary with ``error``, ``code`` and optionally ``details``
        """
        body = {"error": self.message, "code": self.code}
        if expose_details and self.details:
            body["details"] = self.details
        return body


class ValidationError(ServiceError):
    """Bad, missing or malformed input."""

    status_code = 400
    code = "INVALID_INPUT"


class ConfigurationError(ServiceError):
    """Server misconfiguration that needs operator action."""

    status_code = 500
    code = "MISSING_API_KEY"


class NotFoundError(ServiceError):
    status_code = 404
    code = "NO_CAPTIONS_AVAILABLE"


class TranscriptFetchError(ServiceError):
    """The transcript could not be retrieved from upstream."""

    status_code = 500
    code = "TRANSCRIPT_FETCH_FAILED"


class RateLimitError(ServiceError):
    status_code = 429
    code = "RATE_LIMIT_EXCEEDED"


class PayloadTooLargeError(ServiceError):
    status_code = 413
    code = "PAYLOAD_TOO_LARGE"
