"""
Custom exception classes for the application.

All exceptions inherit from AppException and include:
- error_code: Machine-readable error code
- message: Human-readable error message
- status_code: HTTP status code to return
"""

from typing import Any


class AppException(Exception):
    """Base exception for all application errors."""

    error_code: str = "internal_error"
    message: str = "An unexpected error occurred"
    status_code: int = 500

    def __init__(
        self,
        message: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
        status_code: int | None = None,
    ):
        self.message = message or self.message
        self.error_code = error_code or self.error_code
        self.status_code = status_code or self.status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for logging."""
        result = {
            "code": self.error_code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class UnknownUserError(AppException):
    """Raised when a username does not resolve to an existing user."""

    error_code = "unknown_user"
    message = "Unknown user"
    status_code = 400

    def __init__(self, username: str):
        self.username = username
        super().__init__(
            message=f"user {username} does not exist",
            details={"user": username},
        )


class ParseError(AppException):
    """Raised when JSON text is malformed or is not an object."""

    error_code = "parse_error"
    message = "Invalid preferences JSON"
    status_code = 400


class NotFoundError(AppException):
    """Raised by the store when a user id lookup finds nothing."""

    error_code = "not_found"
    message = "Resource not found"
    status_code = 500


class StorageError(AppException):
    """Raised when a storage operation fails."""

    error_code = "storage_error"
    message = "Storage operation failed"
    status_code = 500
