from typing import Any, Mapping, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer.

    Attributes:
        message: human-readable message
        details: optional mapping with extra context (field errors, validation info)
        code: optional machine-readable error code
        http_status: suggested HTTP status code for handlers
    """

    http_status = 500
    default_message = "Service error"

    def __init__(self, message: Optional[str] = None, details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        message = message or self.default_message
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class ServiceValidationError(ServiceError):
    """Raised when input data has the wrong shape (non-string name, non-boolean diet flag, ...)."""

    http_status = 400
    default_message = "Invalid input"


class NotFoundError(ServiceError):
    """Raised when a resource is missing or belongs to another user.

    Both cases produce the same error so callers cannot probe for ids they do not own.
    """

    http_status = 404
    default_message = "Not found"


class ConflictError(ServiceError):
    """Raised when a unique field is already taken (e.g., duplicate email).

    Surfaced as 400 at the HTTP boundary.
    """

    http_status = 400
    default_message = "Conflict"


class UnauthorizedError(ServiceError):
    """Raised when the session token is missing or does not resolve to a user."""

    http_status = 401
    default_message = "Unauthorized"
