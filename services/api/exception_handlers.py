"""FastAPI exception handlers for relay exceptions."""

from __future__ import annotations

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger

from core.exceptions import (
    RelayError,
    ValidationError,
    NotFoundError,
)


INTERNAL_ERROR_MESSAGE = "internal error"


def _error_response(status_code: int, message: str, details: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": message, "details": details or {}},
    )


async def relay_exception_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Map relay exceptions to HTTP responses."""
    if isinstance(exc, ValidationError):
        logger.info(
            "Rejected {method} {path}: {message}",
            method=request.method,
            path=request.url.path,
            message=exc.message,
        )
        return _error_response(status.HTTP_400_BAD_REQUEST, exc.message, exc.details)

    if isinstance(exc, NotFoundError):
        logger.warning(
            "Not found on {path}: {message} {details}",
            path=request.url.path,
            message=exc.message,
            details=exc.details,
        )
        return _error_response(status.HTTP_404_NOT_FOUND, exc.message, exc.details)

    # InternalError and anything unclassified: log the cause, hide it from the caller
    logger.opt(exception=exc).error(
        "{type} on {method} {path}: {message}",
        type=type(exc).__name__,
        method=request.method,
        path=request.url.path,
        message=exc.message,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests the same way as missing fields."""
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
    return await relay_exception_handler(
        request,
        ValidationError("invalid request", {"fields": ", ".join(fields)}),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for exceptions nobody classified."""
    logger.opt(exception=exc).error(
        "Unhandled exception on {method} {path}",
        method=request.method,
        path=request.url.path,
    )
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)
