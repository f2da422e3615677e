"""Request context middleware for correlation IDs and client addresses.

Every request gets a correlation ID, taken from the ``X-Correlation-ID``
header or freshly generated, and its client address is resolved from the
configured proxy headers. Both are stored in context variables and bound to
Loguru for the duration of the request; the correlation ID is echoed back in
the response headers.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from src.api.constants import CORRELATION_ID_HEADER
from src.api.utils.client_ip import DEFAULT_CLIENT_IP_HEADERS, client_ip
from src.core.context import RequestContext, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware to manage request context.

    Args:
        app: The ASGI application.
        client_ip_headers: Proxy headers holding the client address.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        client_ip_headers: list[str] | tuple[str, ...] = DEFAULT_CLIENT_IP_HEADERS,
    ) -> None:
        super().__init__(app)
        self.client_ip_headers = tuple(client_ip_headers)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Process the request with context management.

        Args:
            request: The incoming request.
            call_next: The next middleware/endpoint.

        Returns:
            Response: Response with correlation ID header.
        """
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        )
        address = client_ip(request, self.client_ip_headers)

        RequestContext.set_correlation_id(correlation_id)
        RequestContext.set_client_ip(address)

        with logger.contextualize(correlation_id=correlation_id, client_ip=address):
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = correlation_id
            return response
