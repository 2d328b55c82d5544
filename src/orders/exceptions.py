"""Error taxonomy for the orders service.

Malformed input, unknown orders and illegal transitions are reported with
protean's ``ValidationError``, ``ObjectNotFoundError`` and
``InvalidOperationError``. The kinds below cover what protean has no notion
of. The HTTP layer maps all of them onto status codes and the
``{success, error}`` envelope without inspecting messages.
"""

from typing import Any


class OrderingError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500
    code = "INTERNAL_ERROR"
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, details: Any = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> dict:
        error = {"code": self.code, "message": self.message}
        if self.details is not None:
            error["details"] = self.details
        return error


class UserNotFoundError(OrderingError):
    status_code = 400
    code = "USER_NOT_FOUND"
    default_message = "User not found"


class ForbiddenError(OrderingError):
    status_code = 403
    code = "FORBIDDEN"
    default_message = "Insufficient permissions"


class InternalError(OrderingError):
    pass


class AuthenticationError(OrderingError):
    status_code = 401
    code = "INVALID_TOKEN"
    default_message = "Invalid or expired token"

    def __init__(self, message: str | None = None, code: str | None = None):
        if code:
            self.code = code
        super().__init__(message)
