"""Error Handlers — global exception handlers for the category API.

Invariants:
    - Every error response is rendered by CategoryTreeError.to_response(),
      so domain, validation and unexpected failures share one envelope
    - RequestValidationError → ValidationError with per-field details
    - Exception (catch-all) → InternalError, never leaks internal details

Design Decisions:
    - Handlers only translate and log; the envelope shape lives in core/errors.py
    - ErrorContext.operation carries "METHOD path" for failures raised outside
      a service operation
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from category_tree.core.errors import (
    CategoryTreeError, ErrorContext, InternalError, ValidationError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(CategoryTreeError)
    async def category_tree_error_handler(request: Request, exc: CategoryTreeError):
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"CategoryTreeError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "category_id": exc.context.category_id,
                "operation": exc.context.operation,
            },
        )
        return _render(exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        error = request_validation_error(request, exc)
        logger.warning(
            f"Validation error on {request.url.path}: {error.details}",
            extra={"error_code": error.code, "path": request.url.path},
        )
        return _render(error)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — never leaks internal details."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
            extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
        )
        return _render(InternalError(ErrorContext(operation=_operation(request))))


def request_validation_error(
    request: Request, exc: RequestValidationError,
) -> ValidationError:
    """Translate a Pydantic request failure into the domain ValidationError."""
    details = [
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in exc.errors()
    ]
    first_field = details[0]["field"] if details else None
    return ValidationError(
        "Invalid request data", first_field,
        ErrorContext(operation=_operation(request)), details,
    )


def _operation(request: Request) -> str:
    return f"{request.method} {request.url.path}"


def _render(error: CategoryTreeError) -> JSONResponse:
    return JSONResponse(status_code=error.http_status, content=error.to_response())
