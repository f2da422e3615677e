"""API-related constants."""

from src.core.exceptions import ErrorCode

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"

# Error codes for Starlette HTTP exceptions, by status code
HTTP_ERROR_CODES = {
    400: ErrorCode.BAD_REQUEST,
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}
