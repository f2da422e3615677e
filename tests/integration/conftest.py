"""Shared fixtures and test endpoints for integration tests."""

from collections.abc import AsyncGenerator, Awaitable, Callable

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel, Field

from src.api.main import create_app
from src.core.config import Settings
from src.validation import struct_validator


class AddressIn(BaseModel):
    city: str = Field(
        default="", json_schema_extra={"validate": "required,between:1:64"}
    )


class AccountIn(BaseModel):
    name: str = Field(default="", json_schema_extra={"validate": "required"})
    age: int = Field(default=0, json_schema_extra={"validate": "between:18:130"})
    address: AddressIn = Field(default_factory=AddressIn)


ACCOUNT_VALIDATOR = struct_validator(AccountIn)


def _add_test_endpoints(app: FastAPI) -> None:
    """Add endpoints exercising validation and error handling."""

    @app.post("/test/accounts", status_code=201)
    async def create_account(account: AccountIn) -> dict[str, str]:
        ACCOUNT_VALIDATOR.check(account)
        return {"name": account.name}

    @app.post("/test/mismatch")
    async def mismatch() -> None:
        ACCOUNT_VALIDATOR.check(AddressIn(city="Lisbon"))

    @app.get("/test/generic-exception")
    async def raise_generic_exception() -> None:
        raise RuntimeError("Something went wrong")


type ClientFactory = Callable[[Settings | None], Awaitable[AsyncClient]]


@pytest.fixture
async def client_factory() -> AsyncGenerator[ClientFactory]:
    """Create clients for fresh applications with the test endpoints.

    Unhandled exceptions are answered by the application instead of being
    raised into the test.
    """
    clients: list[AsyncClient] = []

    async def _create_client(settings: Settings | None = None) -> AsyncClient:
        app = create_app(settings)
        _add_test_endpoints(app)
        transport = ASGITransport(app=app, raise_app_exceptions=False)
        client = AsyncClient(transport=transport, base_url="http://test")
        clients.append(client)
        return client

    yield _create_client

    for client in clients:
        await client.aclose()


@pytest.fixture
async def client(client_factory: ClientFactory) -> AsyncClient:
    """Create a client for an application with default settings."""
    return await client_factory(None)
