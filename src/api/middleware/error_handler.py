"""Global exception handlers for the FastAPI application.

Every exception that escapes an endpoint ends up in ``respond_error``, so
all error responses share the ``ErrorResponse`` body:

- **VerdictError** (including ``ValidationResult``): its own code and status
- **RequestValidationError**: re-shaped into a ``ValidationResult`` (422)
- **HTTPException**: status kept, code derived from the status
- **Exception**: ``generic`` 500, masked in production
"""

from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from src.api.constants import HTTP_ERROR_CODES
from src.api.utils.responses import respond_error
from src.core.config import get_settings
from src.core.error_context import sanitize_error_context
from src.core.exceptions import ErrorCode, Severity, VerdictError
from src.validation.assertions.base import ViolationRecord
from src.validation.result import ValidationResult

_SCALARS = (str, int, float, bool, type(None))


async def verdict_error_handler(request: Request, exc: Exception) -> Response:
    """Handle VerdictError exceptions.

    Args:
        request: The FastAPI request that caused the exception
        exc: The VerdictError exception to handle

    Returns:
        Response: JSON error response

    Raises:
        TypeError: If exc is not a VerdictError instance
    """
    if not isinstance(exc, VerdictError):
        raise TypeError(f"Expected VerdictError, got {type(exc).__name__}")

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "error_code": exc.error_code,
        },
    )

    if exc.is_expected:
        logger.warning(
            "Handling {exception_type}: {message}",
            exception_type=type(exc).__name__,
            message=exc.message,
            **error_context,
        )
    elif not exc.mask_error:
        logger.error(
            "Handling {exception_type}: {message}",
            exception_type=type(exc).__name__,
            message=exc.message,
            **error_context,
        )

    return respond_error(exc)


def _violation(error: dict[str, Any]) -> ViolationRecord:
    ctx = error.get("ctx") or {}
    return ViolationRecord(
        code=str(error.get("type", "invalid")),
        message=str(error.get("msg", "Invalid value")),
        template=str(error.get("msg", "Invalid value")),
        values={k: v if isinstance(v, _SCALARS) else str(v) for k, v in ctx.items()},
    )


def request_validation_result(exc: RequestValidationError) -> ValidationResult:
    """Re-shape FastAPI's request validation errors into a ValidationResult.

    The first location segment (``body``, ``query``, ...) is dropped so that
    paths match the ones struct validators report.

    Args:
        exc: The request validation error.

    Returns:
        ValidationResult: Violations keyed by dotted field path.
    """
    fields: dict[str, list[ViolationRecord]] = {}
    for error in exc.errors():
        location = error.get("loc", ())
        path = ".".join(str(loc) for loc in location[1:]) or "root"
        fields.setdefault(path, []).append(_violation(error))
    if not fields:
        fields["root"] = [_violation({})]
    return ValidationResult(fields)


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Args:
        request: The FastAPI request that caused the exception
        exc: The RequestValidationError exception to handle

    Returns:
        Response: 422 JSON error response with violations per field path

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    result = request_validation_result(exc)

    logger.warning(
        "Request validation failed",
        path=str(request.url.path),
        method=request.method,
        invalid_fields=list(result.fields),
    )

    return respond_error(result)


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException.

    Args:
        request: The FastAPI request that caused the exception
        exc: The HTTPException to handle

    Returns:
        Response: JSON error response with the exception's status

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    error_code = HTTP_ERROR_CODES.get(exc.status_code, ErrorCode.GENERIC)

    logger.warning(
        "HTTP exception",
        status=exc.status_code,
        method=request.method,
        path=str(request.url.path),
    )

    error = VerdictError(
        error_code,
        str(exc.detail),
        status_code=exc.status_code,
        severity=Severity.LOW,
    )
    response = respond_error(error)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle generic exceptions.

    Message and detail are hidden from clients in production; the masked
    error is logged with its traceback by ``respond_error``.

    Args:
        request: The FastAPI request that caused the exception
        exc: The unhandled exception

    Returns:
        Response: 500 JSON error response
    """
    mask = get_settings().environment == "production"

    if not mask:
        logger.opt(exception=exc).error(
            "Unhandled exception: {exception_type}",
            exception_type=type(exc).__name__,
            **sanitize_error_context(
                exc,
                {
                    "request_method": request.method,
                    "request_path": str(request.url.path),
                },
            ),
        )

    return respond_error(exc, mask=mask)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(VerdictError, verdict_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
