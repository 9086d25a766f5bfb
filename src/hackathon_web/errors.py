"""
hackathon_web.errors

Failure taxonomy and normalization.

Responsibilities:
- Define the application's error types (each carrying a status code and message).
- Map any exception to the `(status_code, message)` pair shown on the error page.
"""

from __future__ import annotations

from dataclasses import dataclass

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_401_UNAUTHORIZED,
    HTTP_404_NOT_FOUND,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

DEFAULT_ERROR_MESSAGE = "Oh No, Something Went Wrong!"
NOT_FOUND_MESSAGE = "Page Not Found"
INVALID_FORM_MESSAGE = "Invalid form submission"


class AppError(Exception):
    """
    Base failure raised by handlers and pipeline stages.

    `message` may be empty; the error page then falls back to the default text.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str | None = None

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message if message is not None else self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message or "")


class NotFoundError(AppError):
    status_code = HTTP_404_NOT_FOUND
    default_message = NOT_FOUND_MESSAGE


class AuthenticationError(AppError):
    status_code = HTTP_401_UNAUTHORIZED
    default_message = "Password or username is incorrect"


class DuplicateUserError(AppError):
    status_code = HTTP_409_CONFLICT
    default_message = "A user with the given username is already registered"


@dataclass(frozen=True, slots=True)
class ErrorContext:
    status_code: int
    message: str

    @property
    def is_server_error(self) -> bool:
        return self.status_code >= HTTP_500_INTERNAL_SERVER_ERROR


def normalize_exception(exc: BaseException) -> ErrorContext:
    """
    The only place a failure's status line is decided.

    Messages of unexpected exceptions are never surfaced; they may contain
    internal detail.
    """

    status_code = HTTP_500_INTERNAL_SERVER_ERROR
    message: str | None = None

    if isinstance(exc, AppError):
        status_code = exc.status_code
        message = exc.message
    elif isinstance(exc, StarletteHTTPException):
        status_code = exc.status_code
        if status_code == HTTP_404_NOT_FOUND:
            message = NOT_FOUND_MESSAGE
        elif isinstance(exc.detail, str):
            message = exc.detail
    elif isinstance(exc, (RequestValidationError, ValidationError)):
        status_code = HTTP_400_BAD_REQUEST
        message = INVALID_FORM_MESSAGE

    return ErrorContext(status_code=status_code, message=message or DEFAULT_ERROR_MESSAGE)


# --- Module Notes -----------------------------------------------------------
# Rendering lives in `pipeline.errors`; this module stays free of templating so
# repositories and the credential store can raise these types directly.
