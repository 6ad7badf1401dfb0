"""Error hierarchy for collection, export and push operations.

Every error carries an HTTP status code and a machine-readable code so the
API layer can turn it into a response with a single handler, and the CLI
and batch results can report it as structured data.
"""

from typing import Any


class PushError(Exception):
    """Base exception for all termpush errors."""

    status_code = 500
    error_code = "INTERNAL_ERROR"

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dict for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(PushError):
    """A required parameter is missing or an input is malformed."""

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message, {"field": field} if field else None)


class NotFoundError(PushError):
    """Project or project locale does not exist."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, resource: str, identifier: str | None = None):
        msg = f"{resource} not found"
        details: dict[str, Any] = {"resource": resource}
        if identifier:
            msg = f"{resource} not found: {identifier}"
            details["id"] = identifier
        super().__init__(msg, details)


class AuthzError(PushError):
    """Caller is unknown or lacks permission for the project action."""

    status_code = 401
    error_code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class UnsupportedFormatError(PushError, ValueError):
    """Export format identifier (or format version) is not supported."""

    status_code = 400
    error_code = "UNSUPPORTED_FORMAT"

    def __init__(self, format_id: str, available: list[str] | None = None):
        msg = f"Unsupported format: {format_id}"
        if available:
            msg = f"{msg}. Available: {', '.join(available)}"
        super().__init__(msg, {"format": format_id})


class SinkError(PushError):
    """Upload to the storage sink failed."""

    status_code = 502
    error_code = "SINK_ERROR"
