"""
API error translation - Domain exceptions to HTTP responses.

Every error leaving the API is one of the stable codes below. Server-side
failures are logged with full detail and answered with an opaque message.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from src.api.models import ErrorResponse
from src.domain.exceptions import (
    CredentialTooLong,
    DuplicateIdentity,
    HashingFailed,
    InvalidEmail,
    InvalidUsername,
    PasswordMismatch,
    RegistrationError,
    StoreOperationFailed,
    StoreUnavailable,
    TermsNotAccepted,
    TokenIssuanceFailed,
    WeakPassword,
)

logger = logging.getLogger(__name__)

INVALID_REQUEST_DATA = "INVALID_REQUEST_DATA"
WEAK_PASSWORD = "WEAK_PASSWORD"
PASSWORD_MISMATCH = "PASSWORD_MISMATCH"
OPERATION_FAILED = "OPERATION_FAILED"
AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

# exception type -> (HTTP status, error code, public message)
ERROR_MAP: dict[type[RegistrationError], tuple[int, str, str]] = {
    TermsNotAccepted: (status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_DATA, "Terms must be accepted"),
    InvalidUsername: (status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_DATA, "Invalid username"),
    InvalidEmail: (status.HTTP_400_BAD_REQUEST, INVALID_REQUEST_DATA, "Invalid email"),
    PasswordMismatch: (status.HTTP_400_BAD_REQUEST, PASSWORD_MISMATCH, "Passwords do not match"),
    WeakPassword: (status.HTTP_400_BAD_REQUEST, WEAK_PASSWORD, "Weak password"),
    CredentialTooLong: (
        status.HTTP_400_BAD_REQUEST,
        INVALID_REQUEST_DATA,
        "Password too long (max 72 bytes)",
    ),
    DuplicateIdentity: (
        status.HTTP_409_CONFLICT,
        OPERATION_FAILED,
        "Username or email already exists",
    ),
    HashingFailed: (status.HTTP_500_INTERNAL_SERVER_ERROR, OPERATION_FAILED, "Server error"),
    StoreUnavailable: (status.HTTP_500_INTERNAL_SERVER_ERROR, OPERATION_FAILED, "Server error"),
    StoreOperationFailed: (status.HTTP_500_INTERNAL_SERVER_ERROR, OPERATION_FAILED, "Server error"),
    TokenIssuanceFailed: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        AUTHENTICATION_FAILED,
        "Failed to generate tokens",
    ),
}

_FALLBACK = (status.HTTP_500_INTERNAL_SERVER_ERROR, OPERATION_FAILED, "Server error")


def error_response(status_code: int, message: str, code: str) -> JSONResponse:
    body = ErrorResponse(message=message, code=code)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def translate(exc: RegistrationError) -> JSONResponse:
    """Map a domain exception onto its stable HTTP response."""
    status_code, code, message = ERROR_MAP.get(type(exc), _FALLBACK)
    return error_response(status_code, message, code)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Input values are left out, they may hold passwords
    problems = [(".".join(str(part) for part in err["loc"]), err["type"]) for err in exc.errors()]
    logger.info("Invalid request data on %s: %s", request.url.path, problems)
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid request data", INVALID_REQUEST_DATA)


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    status_code, code, message = _FALLBACK
    return error_response(status_code, message, code)


def install_error_handlers(app: FastAPI) -> None:
    """Register the error translators on an application."""
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
