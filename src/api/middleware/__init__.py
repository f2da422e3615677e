"""FastAPI middleware package for cross-cutting request/response concerns.

- **RequestContextMiddleware**: Correlation IDs and client addresses
- **RequestLoggingMiddleware**: Request logging with timing
- **error_handler**: Exception handlers producing the standard error body

Request context runs first so that every log record of a request, including
the ones written by the exception handlers, carries its correlation ID.
"""
