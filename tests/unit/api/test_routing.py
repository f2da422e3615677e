"""Unit tests for declarative route trees."""

import pytest
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Router
from starlette.testclient import TestClient

from src.api.routing import (
    Endpoint,
    MiddlewareFunc,
    Route,
    RouteConfigError,
    group,
    handler,
    join_path,
    prefix,
)


async def ok(request: Request) -> Response:
    """Return a fixed body."""
    return PlainTextResponse("ok")


def tagging(tag: str, calls: list[str]) -> MiddlewareFunc:
    """Build a middleware recording the order in which it runs."""

    def wrap(endpoint: Endpoint) -> Endpoint:
        async def wrapped(request: Request) -> Response:
            calls.append(tag)
            response = await endpoint(request)
            response.headers.append("X-Trail", tag)
            return response

        return wrapped

    return MiddlewareFunc(wrap)


@pytest.mark.unit
class TestJoinPath:
    """Test URL path joining."""

    @pytest.mark.parametrize(
        ("prefix_path", "path", "expected"),
        [
            ("/", "/", "/"),
            ("/", "users", "/users"),
            ("/api", "/users", "/api/users"),
            ("/api/", "/users", "/api/users"),
            ("/api//", "//users", "/api/users"),
            ("/api", "/users/", "/api/users/"),
            ("/api", "", "/api"),
            ("", "", "/"),
        ],
    )
    def test_join_path(self, prefix_path: str, path: str, expected: str) -> None:
        """Test segments are joined with exactly one slash."""
        assert join_path(prefix_path, path) == expected


@pytest.mark.unit
class TestRouteTree:
    """Test flattening route trees."""

    def test_dump(self) -> None:
        """Test every endpoint is listed with its full path."""
        tree = prefix(
            "/api",
            group(
                "/users",
                [
                    handler("GET", "/", ok),
                    handler("post", "/", ok),
                    group("/{user_id}", [handler("DELETE", "", ok)]),
                ],
            ),
        )

        assert tree.dump() == [
            "GET /api/users/",
            "POST /api/users/",
            "DELETE /api/users/{user_id}",
        ]

    def test_methods_are_upper_cased(self) -> None:
        """Test methods are normalized."""
        assert handler("patch", "/", ok).method == "PATCH"

    def test_groups_have_no_endpoint(self) -> None:
        """Test inner nodes contribute no route of their own."""
        assert group("/empty", []).routes() == []

    def test_duplicate_routes(self) -> None:
        """Test registering a method and path twice fails."""
        tree = group("/", [handler("GET", "/a", ok), handler("GET", "a", ok)])

        with pytest.raises(RouteConfigError, match="duplicate route: GET /a"):
            tree.routes()

    def test_same_path_other_method(self) -> None:
        """Test one path may serve several methods."""
        tree = group("/", [handler("GET", "/a", ok), handler("PUT", "/a", ok)])

        assert len(tree.routes()) == 2

    def test_build_router(self) -> None:
        """Test the tree builds into a working router."""
        router = group("/", [handler("GET", "/ping", ok)]).build()

        assert isinstance(router, Router)
        with TestClient(router) as client:
            assert client.get("/ping").text == "ok"
            assert client.get("/pong").status_code == 404

    def test_use_returns_route(self) -> None:
        """Test middleware can be attached fluently."""
        route = handler("GET", "/", ok)

        assert route.use() is route
        assert isinstance(route, Route)


@pytest.mark.unit
class TestRouteMiddleware:
    """Test middleware order and scope."""

    def test_outer_middleware_wraps_inner(self) -> None:
        """Test root middleware run first and see the response last."""
        calls: list[str] = []
        tree = group(
            "/",
            [
                group("/v1", [handler("GET", "/item", ok).use(tagging("leaf", calls))])
                .use(tagging("group", calls)),
            ],
        ).use(tagging("root-1", calls), tagging("root-2", calls))

        with TestClient(tree.build()) as client:
            response = client.get("/v1/item")

        assert calls == ["root-1", "root-2", "group", "leaf"]
        assert response.headers.get_list("X-Trail") == [
            "leaf",
            "group",
            "root-2",
            "root-1",
        ]

    def test_middleware_only_apply_to_their_subtree(self) -> None:
        """Test sibling routes do not share middleware."""
        calls: list[str] = []
        tree = group(
            "/",
            [
                handler("GET", "/guarded", ok).use(tagging("guard", calls)),
                handler("GET", "/open", ok),
            ],
        )

        with TestClient(tree.build()) as client:
            client.get("/open")
            assert calls == []
            client.get("/guarded")
            assert calls == ["guard"]
