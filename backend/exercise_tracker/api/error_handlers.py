"""Error Handlers - global exception handlers rendering every failure as plain text.

Invariants:
    - ExerciseTrackerError -> normalize_error(), dispatched on kind
    - Unmatched route (404, or 405 on a known path) -> 404 "not found"
    - Exception (catch-all) -> 500 "Internal Server Error", never internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from exercise_tracker.core.errors import (
    ExerciseTrackerError, ErrorKind, NOT_FOUND_TEXT, normalize_error,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(ExerciseTrackerError)
    async def domain_error_handler(request: Request, exc: ExerciseTrackerError):
        status_code, text = normalize_error(exc)
        log = logger.error if exc.kind is ErrorKind.STORE else logger.warning
        log(
            f"{exc.kind.value} error: {exc.message}",
            extra={"error_code": exc.kind.value, "path": request.url.path},
        )
        return PlainTextResponse(text, status_code=status_code)


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return PlainTextResponse(
                NOT_FOUND_TEXT, status_code=status.HTTP_404_NOT_FOUND,
            )
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers,
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all, never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        status_code, text = normalize_error(exc)
        return PlainTextResponse(text, status_code=status_code)
