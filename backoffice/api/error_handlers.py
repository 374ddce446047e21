"""Error Handlers — global exception handlers for the admin API.

Invariants:
    - AuthorizationError → byte-for-byte the response FastAPI gives for an
      unknown route (404, {"detail": "Not Found"})
    - BackofficeError → structured JSON with code, message, severity (+ fields)
    - RequestValidationError → field-level error details
    - Exception (catch-all) → never leaks internal details
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from backoffice.core.errors import (
    AuthorizationError, BackofficeError, ErrorCategory, ErrorSeverity,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_authorization_error_handler(app)
    _register_backoffice_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def not_found_response() -> JSONResponse:
    """Same status and body as FastAPI's own 404 for an unmatched route."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND, content={"detail": "Not Found"},
    )


def _register_authorization_error_handler(app: FastAPI) -> None:

    @app.exception_handler(AuthorizationError)
    async def authorization_error_handler(request: Request, exc: AuthorizationError):
        """Denied callers must not learn that the admin surface exists."""
        logger.warning(
            "Admin access denied",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return not_found_response()


def _register_backoffice_error_handler(app: FastAPI) -> None:

    @app.exception_handler(BackofficeError)
    async def backoffice_error_handler(request: Request, exc: BackofficeError):
        """Handle all back-office domain/infrastructure errors."""
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"BackofficeError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "resource_kind": exc.context.resource_kind,
                "resource_id": exc.context.resource_id,
            },
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
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": ErrorCategory.INTERNAL.value,
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "fields": {
                ".".join(str(loc) for loc in e["loc"]): e["msg"]
                for e in exc.errors()
            },
        },
    }
