"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain, store and
framework exceptions to HTTP responses with a single JSON error shape:
{"error": CODE, "message": str, "details": ...}.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import TaskTrackException
from app.infrastructure.exceptions import StoreException

logger = logging.getLogger(__name__)

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "RESOURCE_NOT_FOUND": 404,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "VALIDATION_ERROR": 400,
    "DUPLICATE_RESOURCE": 409,
    "STATUS_NOT_SUPPORTED": 400,
    "STORE_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}

_WWW_AUTHENTICATE = {"WWW-Authenticate": "Bearer"}


def _tasktrack_exception_handler(
    request: Request, exc: TaskTrackException
) -> JSONResponse:
    """Return JSON from TaskTrackException.to_dict() with appropriate status code."""
    status = _ERROR_CODE_STATUS.get(exc.error_code, 400)
    if isinstance(exc, StoreException):
        logger.error(
            "Store error during %s %s: %s",
            request.method,
            request.url.path,
            exc.details.get("reason"),
        )
    headers = _WWW_AUTHENTICATE if status == 401 else None
    return JSONResponse(status_code=status, content=exc.to_dict(), headers=headers)


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 400 with validation error details (e.g. missing title)."""
    return JSONResponse(
        status_code=400,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": jsonable_encoder(exc.errors()),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _rate_limit_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Return 429 in the common error shape."""
    logger.warning(
        "Rate limit exceeded for %s on %s %s",
        request.client.host if request.client else "-",
        request.method,
        request.url.path,
    )
    return JSONResponse(
        status_code=429,
        content={"error": "RATE_LIMITED", "message": f"Rate limit exceeded: {exc.detail}"},
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; include detail only when debug is True."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    detail: Any = str(exc) if settings.debug else "Internal server error"
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": detail},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: TaskTrackException (and
    subclasses), RateLimitExceeded, RequestValidationError,
    StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(TaskTrackException, _tasktrack_exception_handler)
    app.add_exception_handler(RateLimitExceeded, _rate_limit_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
