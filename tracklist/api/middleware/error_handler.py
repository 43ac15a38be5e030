"""
Error Handling Middleware for Tracklist

Centralized error handling:
- Structured error responses
- Logging of errors
- Exception translation (client fault / not found / server fault)
"""

import traceback
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Iterator, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging import get_request_id


class TracklistException(Exception):
    """Base exception for Tracklist errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        status_code: int = 500,
        detail: Optional[str] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class ClientFault(TracklistException):
    """Malformed or missing input."""

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            detail=detail,
        )


class NotFoundError(TracklistException):
    """Well-formed identifier with no matching record."""

    def __init__(self, resource: str, identifier):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            status_code=404,
            detail=f"No {resource.lower()} with id {identifier} exists",
        )


class ServerFault(TracklistException):
    """Persistence-layer failure."""

    def __init__(self, message: str = "Database error", detail: Optional[str] = None):
        super().__init__(
            message=message,
            code="DATABASE_ERROR",
            status_code=500,
            detail=detail,
        )


def create_error_response(
    error: str,
    code: str,
    status_code: int,
    detail: Optional[str] = None,
) -> JSONResponse:
    """Create standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": error,
            "code": code,
            "detail": detail,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        location = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)


def setup_exception_handlers(app):
    """Register exception handlers with FastAPI app."""

    @app.exception_handler(TracklistException)
    async def tracklist_exception_handler(request: Request, exc: TracklistException):
        if exc.status_code >= 500:
            logger.error(
                f"[{get_request_id()}] Tracklist error: {exc.code} - {exc.message} "
                f"({request.method} {request.url.path})"
            )
        else:
            logger.warning(f"[{get_request_id()}] Tracklist error: {exc.code} - {exc.message}")
        return create_error_response(
            error=exc.message,
            code=exc.code,
            status_code=exc.status_code,
            detail=exc.detail,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        detail = _format_validation_errors(exc)
        logger.warning(f"[{get_request_id()}] Validation error: {detail}")
        return create_error_response(
            error="Validation Error",
            code="VALIDATION_ERROR",
            status_code=400,
            detail=detail,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return create_error_response(
            error=str(exc.detail),
            code="NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR",
            status_code=exc.status_code,
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error(
            f"[{get_request_id()}] Unhandled exception: {type(exc).__name__}: {str(exc)}\n{traceback.format_exc()}"
        )
        return create_error_response(
            error="Internal Server Error",
            code="INTERNAL_ERROR",
            status_code=500,
            detail="An unexpected error occurred",
        )


@contextmanager
def persistence_guard(action: str) -> Iterator[None]:
    """
    Translate persistence failures into a ServerFault.

    The raw database error is logged but never returned to the caller.

    Usage:
        with persistence_guard("create todo"):
            todo = repo.create(text)
    """
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(f"Failed to {action}: {type(e).__name__}: {e}")
        raise ServerFault(detail=f"Failed to {action}") from e
