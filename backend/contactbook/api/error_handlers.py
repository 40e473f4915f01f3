"""Error Handlers - global exception handlers for the Contact Book API.

Invariants:
    - ContactBookError -> structured JSON with code, message, category, severity
    - DuplicateKeyError status comes from settings.duplicate_status_code, never from core
    - RequestValidationError -> 400 with field-level details (same envelope as
      ValidationFailedError)
    - Exception (catch-all) -> 500; message text only when settings.expose_internal_errors

Design Decisions:
    - Three-layer handler: domain (ContactBookError), validation (Pydantic), catch-all
    - Settings read from request.app.state so each app instance carries its own policy
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from contactbook.config import Settings, get_settings
from contactbook.core.errors import ContactBookError, DuplicateKeyError, ErrorSeverity

logger = logging.getLogger(__name__)


def _settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_contactbook_error_handler(app)
    _register_validation_error_handler(app)
    _register_generic_error_handler(app)


def status_for(exc: ContactBookError, settings: Settings) -> int:
    """HTTP status for a domain error under the current policy."""
    if isinstance(exc, DuplicateKeyError):
        return settings.duplicate_status_code
    return exc.http_status


def _register_contactbook_error_handler(app: FastAPI) -> None:
    """Register domain/store error handler."""

    @app.exception_handler(ContactBookError)
    async def contactbook_error_handler(request: Request, exc: ContactBookError):
        """Handle all Contact Book domain/store errors."""
        status_code = status_for(exc, _settings(request))
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "entity": exc.context.entity,
            "entity_id": exc.context.entity_id,
            "operation": exc.context.operation,
        }
        if isinstance(exc, DuplicateKeyError):
            extra.update(key_field=exc.key_field, key_value=exc.key_value)
        if status_code >= 500:
            logger.error(f"ContactBookError: {exc.message}", extra=extra)
        else:
            logger.warning(f"ContactBookError: {exc.message}", extra=extra)
        return JSONResponse(status_code=status_code, content=exc.to_response())


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

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
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all for anything that escaped the typed hierarchy."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        message = (
            str(exc) if _settings(request).expose_internal_errors
            else "An unexpected error occurred"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": {
                    "code": "INTERNAL_ERROR",
                    "message": message,
                    "category": "internal",
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
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
