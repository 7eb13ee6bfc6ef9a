"""Exception Handlers.

도메인/서비스 예외를 공통 응답 envelope 로 변환합니다.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException

from catalog.core.exceptions import (
    AdminRegistrationDisabledError,
    CatalogError,
    CompressionError,
    EmailAlreadyRegisteredError,
    EntityNotFoundError,
    FieldValidationError,
    ForbiddenRoleError,
    ImageValidationError,
    InvalidCredentialsError,
    InvalidPasswordError,
    InvalidTokenError,
    MissingTokenError,
    StorageError,
    UploadError,
)
from catalog.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

UPLOAD_FAILED_MESSAGE = "Image upload failed. Please try again."

# exception type → (status, code, public message); None keeps exc.message
_ERROR_TABLE: dict[type[CatalogError], tuple[int, str, str | None]] = {
    ImageValidationError: (status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Invalid image upload"),
    FieldValidationError: (status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Validation failed"),
    EmailAlreadyRegisteredError: (
        status.HTTP_400_BAD_REQUEST,
        "VALIDATION_ERROR",
        "Registration failed",
    ),
    InvalidPasswordError: (status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", "Password rejected"),
    MissingTokenError: (status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Authentication required"),
    InvalidTokenError: (status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Authentication required"),
    InvalidCredentialsError: (status.HTTP_401_UNAUTHORIZED, "UNAUTHORIZED", "Login failed"),
    ForbiddenRoleError: (status.HTTP_403_FORBIDDEN, "FORBIDDEN", "Access denied"),
    AdminRegistrationDisabledError: (status.HTTP_403_FORBIDDEN, "FORBIDDEN", "Access denied"),
    EntityNotFoundError: (status.HTTP_404_NOT_FOUND, "NOT_FOUND", None),
    UploadError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "UPLOAD_FAILED", UPLOAD_FAILED_MESSAGE),
    CompressionError: (
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "UPLOAD_FAILED",
        UPLOAD_FAILED_MESSAGE,
    ),
    StorageError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "UPLOAD_FAILED", UPLOAD_FAILED_MESSAGE),
}

_HTTP_ERROR_CODES = {
    status.HTTP_400_BAD_REQUEST: "BAD_REQUEST",
    status.HTTP_401_UNAUTHORIZED: "UNAUTHORIZED",
    status.HTTP_403_FORBIDDEN: "FORBIDDEN",
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
    status.HTTP_409_CONFLICT: "CONFLICT",
    status.HTTP_500_INTERNAL_SERVER_ERROR: "INTERNAL_SERVER_ERROR",
}


def _error_response(
    status_code: int,
    *,
    message: str,
    error: str,
    code: str,
    field: str | None = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, error=error, code=code, field=field)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


def _request_extra(request: Request, status_code: int, code: str) -> dict[str, object]:
    return {
        "http.request.method": request.method,
        "url.path": request.url.path,
        "http.response.status_code": status_code,
        "error.code": code,
    }


async def catalog_exception_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Map domain errors through ``_ERROR_TABLE``."""
    for exc_type in type(exc).__mro__:
        if exc_type in _ERROR_TABLE:
            status_code, code, public_message = _ERROR_TABLE[exc_type]
            break
    else:
        return await general_exception_handler(request, exc)

    extra = _request_extra(request, status_code, code)
    if status_code >= 500:
        # internal detail is logged, never returned
        logger.error(f"{type(exc).__name__}: {exc.message}", extra=extra, exc_info=exc)
        return _error_response(
            status_code, message=public_message, error="Upload failed", code=code
        )

    logger.warning(f"HTTP {status_code} {code}: {exc.message}", extra=extra)
    return _error_response(
        status_code,
        message=public_message or exc.message,
        error=exc.message,
        code=code,
        field=getattr(exc, "field", None),
    )


async def validation_exception_handler(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    """Request validation errors are reported as 400, not FastAPI's default 422."""
    errors = exc.errors()
    first_error = errors[0] if errors else {}

    loc = [
        str(part)
        for part in first_error.get("loc", ())
        if part not in ("body", "query", "path", "form")
    ]
    field = ".".join(loc) or None
    reason = first_error.get("msg", "Validation error")

    extra = _request_extra(request, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR")
    extra["error.field"] = field
    logger.warning(f"Validation error: {reason}", extra=extra)

    return _error_response(
        status.HTTP_400_BAD_REQUEST,
        message="Validation failed",
        error=f"{field}: {reason}" if field else reason,
        code="VALIDATION_ERROR",
        field=field,
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    code = _HTTP_ERROR_CODES.get(exc.status_code, "UNKNOWN_ERROR")
    log_level = logging.WARNING if exc.status_code < 500 else logging.ERROR
    logger.log(
        log_level,
        f"HTTP {exc.status_code} {code}: {exc.detail}",
        extra=_request_extra(request, exc.status_code, code),
    )
    response = _error_response(
        exc.status_code,
        message=str(exc.detail),
        error=str(exc.detail),
        code=code,
    )
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything unmapped, database errors included."""
    extra = _request_extra(request, status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_SERVER_ERROR")
    extra["error.type"] = type(exc).__name__
    logger.error(f"Unexpected error: {type(exc).__name__}", extra=extra, exc_info=exc)
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        message="An unexpected error occurred",
        error="Internal server error",
        code="INTERNAL_SERVER_ERROR",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """예외 핸들러 등록."""
    app.add_exception_handler(CatalogError, catalog_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
