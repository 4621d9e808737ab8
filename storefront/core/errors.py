"""Application error taxonomy. Each error carries the HTTP status it maps to."""

from typing import Any


class StorefrontError(Exception):
    """Base error; rendered as {"message": ...} by the handlers in main.py."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(StorefrontError):
    """Malformed or missing input."""

    status_code = 400

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        self.errors = errors
        super().__init__(message)


class AuthenticationError(StorefrontError):
    """Bad credentials or an invalid/expired access token."""

    status_code = 401


class AuthorizationError(StorefrontError):
    """Authenticated, but the role is not permitted on this route."""

    status_code = 403


class ForbiddenError(StorefrontError):
    """CSRF mismatch, or a revoked/expired refresh token."""

    status_code = 403


class NotFoundError(StorefrontError):
    status_code = 404


class ConflictError(StorefrontError):
    """Duplicate value for a unique field."""

    status_code = 409


class StorageError(StorefrontError):
    """Underlying store failure. The message is always generic."""

    status_code = 500

    def __init__(self, message: str = "Database error occurred", cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
