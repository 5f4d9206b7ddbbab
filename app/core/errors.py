"""Error hierarchy for the TODO API.

Every error carries an HTTP status, a stable code and a user-facing
message. ``to_response()`` produces the error envelope returned by the
global handlers in ``app.api.error_handlers``.
"""

from typing import Any, Optional


class AppError(Exception):
    """Base class for all domain errors surfaced to API callers."""

    http_status = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, errors: Optional[list[dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)

    def to_response(self) -> dict:
        body: dict[str, Any] = {"status": "error", "message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class ValidationError(AppError):
    """Malformed input. ``errors`` holds one ``{path, message}`` per field."""
    http_status = 400
    code = "VALIDATION_ERROR"
    default_message = "Validation failed"


class BadRequestError(AppError):
    http_status = 400
    code = "BAD_REQUEST"
    default_message = "Bad request"


class UnauthorizedError(AppError):
    http_status = 401
    code = "UNAUTHORIZED"
    default_message = "Authentication required"


class ForbiddenError(AppError):
    http_status = 403
    code = "FORBIDDEN"
    default_message = "You do not have permission to access this resource"


class NotFoundError(AppError):
    http_status = 404
    code = "NOT_FOUND"
    default_message = "Resource not found"


class ConflictError(AppError):
    http_status = 409
    code = "CONFLICT"
    default_message = "Resource already exists"
