"""Error Handlers - global exception handlers mapping every failure to the envelope.

Invariants:
    - FreezeFitError -> its own status and message
    - RequestValidationError -> 400; missing required fields named in the message
    - Unmatched route or method -> 405 "Method not allowed"
    - SQLAlchemyError and any other Exception -> 500 "Internal server error",
      detail only in the log
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from freezefit.api.envelope import fail, fail_with
from freezefit.core.errors import (
    FreezeFitError, InternalError, MethodNotAllowedError, MissingFieldError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_domain_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_database_error_handler(app)
    _register_generic_error_handler(app)


def _register_domain_error_handler(app: FastAPI) -> None:

    @app.exception_handler(FreezeFitError)
    async def freezefit_error_handler(request: Request, exc: FreezeFitError):
        log = logger.error if exc.http_status >= 500 else logger.info
        log(
            f"FreezeFitError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "method": request.method,
                "resource": exc.context.resource,
                "record_id": exc.context.record_id,
            },
        )
        return fail(exc)


def _register_validation_error_handler(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "method": request.method},
        )
        return build_validation_error_response(exc)


def _register_http_error_handler(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return fail(MethodNotAllowedError())
        return fail_with(exc.status_code, str(exc.detail), "HTTP_ERROR")


def _register_database_error_handler(app: FastAPI) -> None:

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.error(
            f"Database error on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return fail(InternalError(str(exc)))


def _register_generic_error_handler(app: FastAPI) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all: never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"path": request.url.path, "method": request.method},
        )
        return fail(InternalError(str(exc)))


def build_validation_error_response(exc: RequestValidationError):
    """400 envelope. Names the missing fields when that is the only problem."""
    errors = exc.errors()
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"] if loc != "body"),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]
    missing = [
        d["field"] for d, e in zip(details, errors) if _is_missing(e) and d["field"]
    ]
    if missing and len(missing) == len(details):
        error = MissingFieldError(missing)
        return fail_with(error.http_status, error.message, error.code, details)
    return fail_with(
        status.HTTP_400_BAD_REQUEST, "Invalid request data", "VALIDATION_ERROR", details,
    )


def _is_missing(error: dict) -> bool:
    """Required value absent, or submitted as an empty string."""
    if error["type"] == "missing":
        return True
    return error["type"] == "string_too_short" and error.get("input") == ""
