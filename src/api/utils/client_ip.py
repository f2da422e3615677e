"""Client address extraction behind reverse proxies."""

from collections.abc import Iterable

from starlette.requests import HTTPConnection

from src.core.constants import UNKNOWN_CLIENT

DEFAULT_CLIENT_IP_HEADERS = ("X-Forwarded-For", "X-Real-IP")


def client_ip(
    request: HTTPConnection, headers: Iterable[str] = DEFAULT_CLIENT_IP_HEADERS
) -> str:
    """Return the address of the client that originally sent ``request``.

    Headers are tried in order. In a chain of proxies each one appends the
    address of its own client, so the first entry of the comma-separated
    list is the original client. Without a usable header the peer address
    of the connection is returned.

    Args:
        request: The incoming request or websocket.
        headers: Proxy headers to consult, highest priority first.

    Returns:
        str: The client address, or ``"unknown"`` if there is none.
    """
    for header in headers:
        ip = request.headers.get(header, "").split(",")[0].strip()
        if ip:
            return ip

    if request.client:
        return request.client.host
    return UNKNOWN_CLIENT
