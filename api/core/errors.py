"""API error types and the handlers that render them as JSON envelopes.

Every failure leaves the API as ``{"ok": false, "error": "<message>"}``.
Validation and not-found conditions are raised explicitly by services;
anything else is logged server-side and returned as a generic 500.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.logger import get_logger

logger = get_logger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """Domain error carrying the HTTP status it maps to."""

    status_code: int = 500
    default_message: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ApiError):
    status_code = 401
    default_message = "Unauthorized"


class ValidationFailed(ApiError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(ApiError):
    status_code = 404
    default_message = "Not found"


class Conflict(ApiError):
    status_code = 409
    default_message = "Conflict"


class ServiceUnavailable(ApiError):
    status_code = 503
    default_message = "Service unavailable"


def error_body(message: str) -> dict[str, Any]:
    return {"ok": False, "error": message}


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(location)
    message = first.get("msg", "Invalid value")
    return f"{field}: {message}" if field else message


async def api_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render an ApiError with its own status code."""
    if not isinstance(exc, ApiError):
        return await global_exception_handler(request, exc)

    if exc.status_code >= 500:
        logger.error(
            "api.error",
            path=request.url.path,
            method=request.method,
            error=exc.message,
        )
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))


async def validation_exception_handler(
    request: Request, exc: Exception
) -> JSONResponse:
    """Malformed bodies and query strings are client errors (400)."""
    if not isinstance(exc, RequestValidationError):
        return await global_exception_handler(request, exc)

    logger.warning(
        "request.validation_error",
        path=request.url.path,
        method=request.method,
        error_count=len(exc.errors()),
    )
    return JSONResponse(
        status_code=400,
        content=error_body(_describe_validation_error(exc)),
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Unknown routes, wrong methods and other framework-raised HTTP errors."""
    if not isinstance(exc, StarletteHTTPException):
        return await global_exception_handler(request, exc)

    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler. Details go to the log, never to the client."""
    logger.exception(
        "unhandled.exception",
        exc_type=type(exc).__name__,
        path=request.url.path,
        method=request.method,
    )
    return JSONResponse(
        status_code=500,
        content=error_body(INTERNAL_ERROR_MESSAGE),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
