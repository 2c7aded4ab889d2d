"""Application exceptions and the handlers that render them.

Every error leaves the API in the same envelope as successful responses::

    {"status": "error", "code": 404, "message": "Not found"}

Services raise the ``AppError`` subclasses below; routers never build error
bodies themselves.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

STORE_ERROR_MESSAGE = "Something went wrong at database layer."


class AppError(Exception):
    """Base application error carrying its HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class ValidationFailed(AppError):
    """Malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Bad request"


class AuthenticationFailed(AppError):
    """Missing, invalid, expired or revoked bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"

    def __init__(self, message: str | None = None):
        super().__init__(message, headers={"WWW-Authenticate": "Bearer"})


class Forbidden(AppError):
    """Valid identity, but the resource belongs to someone else."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(AppError):
    """Resource absent."""

    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(AppError):
    """Unique constraint violation."""

    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class StoreError(AppError):
    """Failure inside the database layer. Never exposes driver details."""

    default_message = STORE_ERROR_MESSAGE


class InternalError(AppError):
    """Programming error detected at runtime."""


@contextmanager
def store_errors(db: Session) -> Iterator[None]:
    """Roll back and re-raise any SQLAlchemy failure as ``StoreError``."""
    try:
        yield
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Database operation failed: {e.__class__.__name__}")
        raise StoreError() from e


def error_body(code: int, message: str) -> dict:
    """Build the error envelope."""
    return {"status": "error", "code": code, "message": message}


def _format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first["loc"] if part not in ("body", "query", "path"))
    return f"{location}: {first['msg']}" if location else first["msg"]


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers with the FastAPI application."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Render application errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, exc.message),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render framework HTTP errors (unknown routes, wrong methods)."""
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.status_code, str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Render request validation failures as 400."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(status.HTTP_400_BAD_REQUEST, _format_validation_error(exc)),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Render anything uncategorized as 500."""
        logger.exception(f"Unhandled exception on {request.method} {request.url.path}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"),
        )
