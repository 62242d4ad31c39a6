"""
Error taxonomy for the Qiita client.

Every non-2xx response maps to an APIError subclass chosen by status code.
"""

from typing import Any


class QiitaError(Exception):
    """Base error class for client errors."""

    default_message = "Qiita client error"

    def __init__(self, message: str | None = None, details: dict | None = None):
        self._message = message or self.default_message
        super().__init__(self._message)
        self.details = details or {}

    @property
    def message(self) -> str:
        return self._message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class ConfigurationError(QiitaError):
    """The client is not configured well enough to send a request."""

    default_message = "Qiita host not configured. Set base_url before calling the API"


class ValidationError(QiitaError):
    """Validation error for local input/data issues (not API errors)."""

    default_message = "Invalid data"


class APIError(QiitaError):
    """API error with status code and message."""

    default_message = "Qiita API request failed"

    def __init__(
        self,
        message: str | None = None,
        status: int = 0,
        details: dict | None = None,
        error_type: str | None = None,
    ):
        super().__init__(message, details)
        self.status = status
        self.error_type = error_type

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.status:
            result["status"] = self.status
        if self.error_type:
            result["type"] = self.error_type
        return result


class UnauthorizedError(APIError):
    """HTTP 401."""

    default_message = "Unauthorized: the access token is missing or invalid"


class ForbiddenError(APIError):
    """HTTP 403."""

    default_message = "Forbidden: the access token lacks the required scope"


class NotFoundError(APIError):
    """HTTP 404."""

    default_message = "Not found"


class RateLimitError(APIError):
    """HTTP 429."""

    default_message = "Rate limit exceeded"


class InternalServerError(APIError):
    """HTTP 500."""

    default_message = "Qiita internal server error"


STATUS_ERRORS: dict[int, type[APIError]] = {
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    429: RateLimitError,
    500: InternalServerError,
}


def error_for_status(status: int, data: Any) -> APIError:
    """
    Build the error matching an unsuccessful response.

    Args:
        status: HTTP status code (non-2xx)
        data: Parsed response body (JSON value or raw text)

    Returns:
        An APIError subclass instance; APIError itself for unmapped statuses

    """
    error_class = STATUS_ERRORS.get(status, APIError)
    message = None
    error_type = None
    details = None

    if isinstance(data, dict):
        details = data
        # Handle {"message": "..."}, {"error": "..."} and {"error": {"message": "..."}}
        error_field = data.get("error")
        if isinstance(data.get("message"), str):
            message = data["message"]
        elif isinstance(error_field, str):
            message = error_field
        elif isinstance(error_field, dict):
            message = error_field.get("message")
        if isinstance(data.get("type"), str):
            error_type = data["type"]

    return error_class(message, status=status, details=details, error_type=error_type)

