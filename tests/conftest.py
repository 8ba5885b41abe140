"""Common test fixtures."""

import os
from typing import Any, AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from td_client.api import client as client_module
from td_client.config import get_config


class FakeAPI:
    """Canned responses keyed by (method, path), recording every request."""

    def __init__(self):
        self.routes: dict[tuple[str, str], dict[str, Any]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, status_code: int = 200, **response_kwargs: Any) -> None:
        self.routes[(method, path)] = {"status_code": status_code, **response_kwargs}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": f"no route for {request.url.path}"})
        return httpx.Response(**route)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep TD_CLIENT_* variables, .env files and cached state out of tests."""
    for name in list(os.environ):
        if name.startswith("TD_CLIENT_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    get_config.cache_clear()
    client_module._client_factory = None
    yield
    get_config.cache_clear()
    client_module._client_factory = None


@pytest.fixture
def fake_api() -> FakeAPI:
    return FakeAPI()


@pytest_asyncio.fixture
async def http_client(fake_api: FakeAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """AsyncClient wired to the fake API."""
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_api.handler), base_url="https://api.test"
    ) as client:
        yield client
