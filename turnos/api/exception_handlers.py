"""
Exception handlers for FastAPI application.

Every error response uses the same envelope:
``{"error": true, "message": ..., "status_code": ..., "details": ...}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from turnos.core.domain import (
    AppointmentConflictException,
    AuthorizationException,
    DomainException,
    EntityNotFoundException,
    IntegrationException,
    OrphanedCalendarEventException,
    SlotUnavailableException,
    ValidationException,
)

logger = logging.getLogger(__name__)

HTTP_422 = 422

# Orden: las subclases más específicas primero
DOMAIN_STATUS_CODES: list[tuple[type[DomainException], int]] = [
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (SlotUnavailableException, status.HTTP_409_CONFLICT),
    (AppointmentConflictException, status.HTTP_409_CONFLICT),
    (ValidationException, HTTP_422),
    (AuthorizationException, status.HTTP_403_FORBIDDEN),
    (OrphanedCalendarEventException, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (IntegrationException, status.HTTP_502_BAD_GATEWAY),
]


def status_code_for(exc: DomainException) -> int:
    for exc_type, status_code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def _error_response(status_code: int, message: str, details=None, headers=None) -> JSONResponse:
    content = {"error": True, "message": message, "status_code": status_code}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    if not isinstance(exc, StarletteHTTPException):
        return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc))
    return _error_response(exc.status_code, exc.detail, headers=getattr(exc, "headers", None))


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate domain exceptions to HTTP responses."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{exc.code} on {request.method} {request.url.path}: {exc.message}", exc_info=exc)
    else:
        logger.warning(f"{exc.code} on {request.method} {request.url.path}: {exc.message}")

    return _error_response(status_code, exc.message, details={"code": exc.code, **exc.details})


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors with detailed error messages."""
    if not isinstance(exc, RequestValidationError | ValidationError):
        return _error_response(HTTP_422, str(exc))

    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(f"Validation error on {request.url.path}: {errors}")
    return _error_response(HTTP_422, "Validation error", details=errors)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=exc,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, validation_exception_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
