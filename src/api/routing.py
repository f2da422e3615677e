"""Declarative route trees with per-subtree middleware.

Routes are described as a tree: leaves carry a method, a path and an
endpoint, inner nodes add a path prefix and middleware for everything below
them. The tree is turned into Starlette routes once, at startup.

Example:
    >>> api = prefix(
    ...     "/api",
    ...     group("/users", [
    ...         handler("GET", "/", list_users),
    ...         handler("POST", "/", create_user).use(require_json),
    ...     ]),
    ... ).use(timing)
    >>> api.dump()
    ['GET /api/users/', 'POST /api/users/']

Middleware accumulate from the root down; the first middleware of the root
wraps everything else.
"""

from collections.abc import Awaitable, Callable, Sequence
from typing import Protocol, Self

from starlette.requests import Request
from starlette.responses import Response
from starlette.routing import Route as StarletteRoute
from starlette.routing import Router

type Endpoint = Callable[[Request], Awaitable[Response]]


class RouteConfigError(ValueError):
    """Raised when a route tree cannot be built."""


class Middleware(Protocol):
    """Wraps an endpoint into another endpoint."""

    def wrap(self, endpoint: Endpoint) -> Endpoint:
        """Return the wrapped endpoint."""
        ...


class MiddlewareFunc:
    """Adapts a plain ``endpoint -> endpoint`` function to ``Middleware``."""

    def __init__(self, func: Callable[[Endpoint], Endpoint]) -> None:
        self.func = func

    def wrap(self, endpoint: Endpoint) -> Endpoint:
        return self.func(endpoint)


def join_path(prefix: str, path: str) -> str:
    """Join two URL paths with exactly one slash between segments.

    A trailing slash on ``path`` is kept.
    """
    segments = [s for s in f"{prefix}/{path}".split("/") if s]
    joined = "/" + "/".join(segments)
    if path.endswith("/") and joined != "/":
        joined += "/"
    return joined


class Route:
    """A node of the route tree.

    Args:
        path: Path of this node relative to its parent
        method: HTTP method of the endpoint, if the node has one
        endpoint: Endpoint served at this path
        children: Nested routes
    """

    def __init__(
        self,
        path: str,
        method: str | None = None,
        endpoint: Endpoint | None = None,
        children: Sequence["Route"] = (),
    ) -> None:
        self.path = path
        self.method = method.upper() if method else None
        self.endpoint = endpoint
        self.children = list(children)
        self.middleware: list[Middleware] = []

    def use(self, *middleware: Middleware) -> Self:
        """Add middleware for this route and all its children."""
        self.middleware.extend(middleware)
        return self

    def routes(self) -> list[StarletteRoute]:
        """Flatten the tree into Starlette routes.

        Raises:
            RouteConfigError: If a method and path pair is registered twice.
        """
        routes: list[StarletteRoute] = []
        seen: set[tuple[str, str]] = set()
        for method, path, endpoint in self._walk("/", []):
            if (method, path) in seen:
                raise RouteConfigError(f"duplicate route: {method} {path}")
            seen.add((method, path))
            routes.append(StarletteRoute(path, endpoint, methods=[method]))
        return routes

    def build(self) -> Router:
        """Build the tree into a Starlette router."""
        return Router(routes=self.routes())

    def dump(self) -> list[str]:
        """Return ``"METHOD /path"`` for every endpoint of the tree."""
        return [f"{method} {path}" for method, path, _ in self._walk("/", [])]

    def _walk(
        self, prefix: str, middleware: list[Middleware]
    ) -> list[tuple[str, str, Endpoint]]:
        path = join_path(prefix, self.path)
        middleware = [*middleware, *self.middleware]

        entries = []
        if self.endpoint is not None and self.method is not None:
            endpoint = self.endpoint
            for mw in reversed(middleware):
                endpoint = mw.wrap(endpoint)
            entries.append((self.method, path, endpoint))

        for child in self.children:
            entries.extend(child._walk(path, middleware))
        return entries


def handler(method: str, path: str, endpoint: Endpoint) -> Route:
    """Create a route serving ``endpoint`` for ``method`` at ``path``."""
    return Route(path, method=method, endpoint=endpoint)


def group(path: str, children: Sequence[Route]) -> Route:
    """Create a route group without an endpoint of its own."""
    return Route(path, children=children)


def prefix(path: str, route: Route) -> Route:
    """Mount ``route`` below ``path``."""
    return Route(path, children=[route])
