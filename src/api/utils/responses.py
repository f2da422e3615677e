"""JSON responses and error responses.

``ORJSONResponse`` is the default response class of the application.
``respond`` and ``respond_error`` are the two ways handlers and exception
handlers produce JSON: the first for regular payloads, the second for any
exception, turning it into the standard ``ErrorResponse`` body.
"""

from typing import Any

import orjson
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from src.api.schemas.errors import ErrorResponse
from src.core.context import RequestContext, generate_request_id
from src.core.exceptions import as_api_error
from src.core.types import JsonValue


class ORJSONResponse(JSONResponse):
    """FastAPI Response class using orjson for JSON serialization.

    Attributes:
        media_type: The media type for the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - accepts any JSON-serializable content
        """Render the content as JSON using orjson.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = content.model_dump(mode="json")

        # Use consistent sorting for predictable output
        return orjson.dumps(content, option=orjson.OPT_SORT_KEYS)


def respond(
    data: JsonValue | BaseModel, status_code: int = 200
) -> ORJSONResponse:
    """Build a JSON response for ``data``."""
    return ORJSONResponse(content=data, status_code=status_code)


def respond_error(exc: BaseException, *, mask: bool = False) -> ORJSONResponse:
    """Build the error response for ``exc``.

    Coded errors keep their code, status, message and detail. Any other
    exception is wrapped by ``GENERIC_ERROR`` and answered with a 500.
    Message and detail are hidden when ``mask`` is set or when the exception
    itself reports ``mask_error``; masked errors are logged in full instead.

    Args:
        exc: The exception to report.
        mask: Hide message and detail regardless of the exception.

    Returns:
        ORJSONResponse: The JSON error response.
    """
    api_error = as_api_error(exc)

    message = api_error.message
    detail = api_error.detail

    if mask or getattr(exc, "mask_error", False):
        message = ""
        detail = None
        logger.opt(exception=exc).error(
            "Masked error response: {}",
            api_error.error_code,
            error_message=api_error.message,
        )

    body = ErrorResponse(
        code=api_error.error_code,
        message=message,
        detail=detail,
        correlation_id=RequestContext.get_correlation_id(),
        request_id=generate_request_id(),
    )

    return ORJSONResponse(
        status_code=api_error.status_code,
        content=body.model_dump(mode="json"),
    )
