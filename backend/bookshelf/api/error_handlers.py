"""Error Handlers — global exception handlers producing the {"message": ...} body.

Invariants:
    - BookshelfError → its http_status and to_response()
    - RequestValidationError (malformed JSON, non-object body) → 400
    - Starlette HTTPException (unknown route, wrong method) → its status, same body shape
    - Exception (catch-all) → 500, never leaks internal details

Design Decisions:
    - Four handlers, one shape: clients only ever parse {"message": str}
    - Extracted from main.py (ADR: import fan-out < 10)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookshelf.core.errors import BookshelfError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_bookshelf_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_bookshelf_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BookshelfError)
    async def bookshelf_error_handler(request: Request, exc: BookshelfError):
        """Handle domain/infrastructure errors that escaped a route."""
        logger.error(
            f"BookshelfError: {exc.message}",
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
        """Handle request bodies FastAPI could not parse."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An unexpected error occurred"},
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Reduce FastAPI's error list to the first message."""
    errors = exc.errors()
    if not errors:
        return {"message": "Invalid request data"}
    first = errors[0]
    if first["type"] == "json_invalid":
        return {"message": "Malformed JSON body"}
    if first["type"] == "missing":
        return {"message": "Request body is required"}
    return {"message": "Request body must be a JSON object"}
