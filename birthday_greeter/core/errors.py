"""Error taxonomy shared by the storage layer, the date logic and the HTTP handlers.

Every error carries the HTTP status it maps to and a single-line public message.
The message is what the client sees; internal detail stays in the logs.
"""

from __future__ import annotations

from fastapi import status


class GreeterError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidUsernameError(GreeterError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "username must contain only letters"


class InvalidPayloadError(GreeterError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid JSON"


class InvalidDateError(GreeterError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "invalid date format, use YYYY-MM-DD"


class DateNotInPastError(GreeterError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "date of birth must be before today"


class UserNotFoundError(GreeterError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "user not found"


class StorageError(GreeterError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "database error"


class DatabaseUnavailableError(GreeterError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    message = "database unreachable"


__all__ = [
    "GreeterError",
    "InvalidUsernameError",
    "InvalidPayloadError",
    "InvalidDateError",
    "DateNotInPastError",
    "UserNotFoundError",
    "StorageError",
    "DatabaseUnavailableError",
]
