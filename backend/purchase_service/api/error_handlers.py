"""Error Handlers: global exception handlers for the purchase API.

Invariants:
    - PurchaseServiceError → structured JSON with error code, message, severity
    - Schema validation errors → 400 with the same field -> messages map as domain validation
    - Exception (catch-all) → never leaks internal details

Design Decisions:
    - Three-layer handler: domain (PurchaseServiceError), validation (Pydantic), catch-all (Exception)
    - 4xx domain errors logged as warnings, everything else as errors
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError as SchemaValidationError

from purchase_service.core.errors import (
    ErrorSeverity, PurchaseServiceError, RequestValidationError,
)

logger = logging.getLogger(__name__)

_LOCATION_ROOTS = {"body", "query", "path", "header"}


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:
    """Register purchase service domain/infrastructure error handler."""

    @app.exception_handler(PurchaseServiceError)
    async def purchase_error_handler(request: Request, exc: PurchaseServiceError):
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"{type(exc).__name__}: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(SchemaValidationError)
    async def validation_error_handler(
        request: Request, exc: SchemaValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
        )
        error = RequestValidationError(field_errors(exc))
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error.to_response(),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path},
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": "An unexpected error occurred",
                    "category": "internal",
                    "severity": ErrorSeverity.CRITICAL.value,
                },
            },
        )


def field_errors(exc: SchemaValidationError) -> dict[str, list[str]]:
    """Group Pydantic errors by field name (location root dropped)."""
    errors: dict[str, list[str]] = {}
    for e in exc.errors():
        loc = [str(part) for part in e["loc"]]
        if len(loc) > 1 and loc[0] in _LOCATION_ROOTS:
            loc = loc[1:]
        field = ".".join(loc) or "request"
        errors.setdefault(field, []).append(e["msg"])
    return errors
