"""Global exception handlers.

Every failure leaves the API as ``{"status": "error", "message": ..., "errors"?: [...]}``.
Unexpected exceptions are logged with their traceback and answered with a
generic 500 body.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.errors import AppError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_app_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_integrity_error_handler(app)
    _register_generic_error_handler(app)


def _register_app_error_handler(app: FastAPI) -> None:

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        logger.info(
            "%s: %s", type(exc).__name__, exc.message,
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.warning(
            "Validation error on %s: %s", request.url.path, exc.errors(),
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            message = "Route not found"
        else:
            message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "message": message},
            headers=getattr(exc, "headers", None),
        )


def _register_integrity_error_handler(app: FastAPI) -> None:

    @app.exception_handler(IntegrityError)
    async def integrity_error_handler(request: Request, exc: IntegrityError):
        logger.warning(
            "Integrity error on %s: %s", request.url.path, exc.orig,
            extra={"error_code": "CONFLICT", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"status": "error", "message": "Resource already exists"},
        )


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all; never leaks internal details."""
        logger.error(
            "Unhandled exception on %s: %s", request.url.path, exc,
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"status": "error", "message": "Internal server error"},
        )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    return {
        "status": "error",
        "message": "Validation failed",
        "errors": [
            {
                # Drop the leading "body"/"query"/"path" location marker.
                "path": ".".join(str(loc) for loc in e["loc"][1:]) or str(e["loc"][0]),
                "message": e["msg"],
            }
            for e in exc.errors()
        ],
    }
