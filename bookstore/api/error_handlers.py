"""Error Handlers — global exception handlers, the only writers of error bodies.

Invariants:
    - Every error response is {"error": {"message": ..., "status": ...}}
    - BookstoreError → its own http_status (400 validation, 404 not found, 500 database)
    - RequestValidationError (malformed JSON) → 400 with a list of messages
    - Starlette HTTPException (unmatched route, wrong method) → its status and detail
    - Exception (catch-all) → 500 with the underlying message

Design Decisions:
    - Four-layer handler: domain (BookstoreError), validation (Pydantic),
      routing (HTTPException), catch-all (Exception)
    - Extracted from main.py to keep the entry point to wiring only
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookstore.core.errors import BookstoreError

logger = logging.getLogger(__name__)


def error_body(message, http_status: int) -> dict:
    return {"error": {"message": message, "status": http_status}}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_bookstore_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_bookstore_error_handler(app: FastAPI) -> None:
    """Register Bookstore domain/infrastructure error handler."""

    @app.exception_handler(BookstoreError)
    async def bookstore_error_handler(request: Request, exc: BookstoreError):
        """Handle all Bookstore domain/infrastructure errors."""
        level = logging.ERROR if exc.http_status >= 500 else logging.WARNING
        logger.log(
            level,
            f"BookstoreError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "status": exc.http_status,
                "isbn": exc.context.isbn,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic request validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle undecodable request bodies."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (404 unmatched route, 405 wrong method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        logger.warning(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"path": request.url.path, "status": exc.status_code},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.detail, exc.status_code),
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: anything not translated upstream is a 500."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                str(exc) or "Internal Server Error",
                status.HTTP_500_INTERNAL_SERVER_ERROR,
            ),
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build the 400 envelope from Pydantic's error list."""
    return error_body(
        [
            f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
            for e in exc.errors()
        ],
        status.HTTP_400_BAD_REQUEST,
    )
