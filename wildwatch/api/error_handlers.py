"""Error Handlers — global exception handlers producing the {error, details} envelope.

Invariants:
    - WildwatchError → its category label and message at its HTTP status
    - RequestValidationError → 400 with field-level details
    - SQLAlchemyError / Exception (catch-all) → 500 with the message, never a traceback
    - 4xx logged at WARNING, 5xx at ERROR

Design Decisions:
    - Layered handlers: domain (WildwatchError), validation (Pydantic),
      database (SQLAlchemy), catch-all (Exception)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError

from wildwatch.core.errors import ErrorCategory, WildwatchError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_wildwatch_error_handler(app)
    _register_validation_error_handler(app)
    _register_database_error_handler(app)
    _register_generic_error_handler(app)


def _register_wildwatch_error_handler(app: FastAPI) -> None:

    @app.exception_handler(WildwatchError)
    async def wildwatch_error_handler(request: Request, exc: WildwatchError):
        """Handle all Wildwatch domain/infrastructure errors."""
        extra = {
            "error_code": exc.code,
            "path": request.url.path,
            "status_code": exc.http_status,
            "user_id": exc.context.user_id,
            "resource_id": exc.context.resource_id,
        }
        if exc.http_status >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message}", extra=extra)
        else:
            logger.warning(f"{type(exc).__name__}: {exc.message}", extra=extra)
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_database_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Database error on {request.url.path}: {exc}",
            extra={"path": request.url.path, "error_code": "DATABASE_ERROR"},
            exc_info=True,
        )
        return _internal_error_response(exc)


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — message only, no stack trace."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            extra={"path": request.url.path, "error_code": "INTERNAL_ERROR"},
            exc_info=True,
        )
        return _internal_error_response(exc)


def _internal_error_response(exc: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": ErrorCategory.INTERNAL.value,
            "details": str(exc) or type(exc).__name__,
        },
    )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    fields = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    details = "; ".join(f"{f['field']}: {f['message']}" for f in fields)
    return {
        "error": ErrorCategory.VALIDATION.value,
        "details": details or "Invalid request data",
        "fields": fields,
    }
