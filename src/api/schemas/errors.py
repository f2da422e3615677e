"""Error response schema shared by every error the API returns.

Clients can rely on ``code`` for programmatic handling and on ``detail`` for
error-specific data. For ``invalid_entity`` errors ``detail`` maps each
dotted field path to the list of violations found for it.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standardized error response model for API errors."""

    code: str = Field(
        ...,
        description="Unique error code identifying the error type",
        examples=["invalid_entity", "not_found", "generic"],
    )

    message: str = Field(
        ...,
        description="Human-readable error message, empty for masked errors",
        examples=["entity validation failed"],
    )

    detail: Any = Field(
        default=None,
        description="Optional error data, e.g. violations per field path",
    )

    correlation_id: str | None = Field(
        default=None,
        description="Request correlation ID for tracing and debugging",
        examples=["550e8400-e29b-41d4-a716-446655440000"],
    )

    request_id: str | None = Field(
        default=None,
        description="Unique identifier of this error response",
        examples=["req-550e8400-e29b-41d4-a716-446655440000"],
    )

    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="Timestamp when the error occurred (with timezone)",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "code": "invalid_entity",
                    "message": "entity validation failed",
                    "detail": {
                        "address.city": [
                            {
                                "code": "between",
                                "message": "length must be between 1 and 64 (is 0)",
                                "template": (
                                    "length must be between {min} and {max} "
                                    "(is {actual})"
                                ),
                                "values": {"min": 1, "max": 64, "actual": 0},
                            }
                        ]
                    },
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2024-06-14T12:00:00+00:00",
                },
                {
                    "code": "generic",
                    "message": "",
                    "detail": None,
                    "timestamp": "2024-06-14T12:00:01+00:00",
                },
            ]
        }
    }
