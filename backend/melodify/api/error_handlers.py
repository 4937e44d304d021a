"""Error Handlers: global exception handlers for the Melodify API.

Invariants:
    - MelodifyError → {"error": message} with the error's http_status
    - RequestValidationError (malformed JSON, wrong types) → 400 {"error": ...}
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Three-layer handler: domain (MelodifyError), validation (Pydantic), catch-all (Exception)
    - Registered from main.py through register_error_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from melodify.core.errors import MelodifyError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_melodify_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_melodify_error_handler(app: FastAPI) -> None:

    @app.exception_handler(MelodifyError)
    async def melodify_error_handler(request: Request, exc: MelodifyError):
        """Handle all Melodify domain/backend errors."""
        log = logger.error if exc.http_status >= 500 else logger.warning
        log(
            f"MelodifyError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "An unexpected error occurred"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """One readable line per invalid field, e.g. 'body.song_id: Input should be ...'."""
    problems = [
        f"{'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}"
        for e in exc.errors()
    ]
    message = "Invalid request data"
    if problems:
        message = f"{message}: {'; '.join(problems)}"
    return {"error": message}
