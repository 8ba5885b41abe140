from contextlib import asynccontextmanager

import httpx
import pytest
from typer.testing import CliRunner

from td_client.api import set_client_factory

# Importing registers every command on the shared app instance
import td_client.cli.main  # noqa: F401


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def cli_api(fake_api):
    """Route every CLI HTTP call to the fake API."""

    @asynccontextmanager
    async def factory():
        async with httpx.AsyncClient(
            transport=httpx.MockTransport(fake_api.handler), base_url="https://api.test"
        ) as client:
            yield client

    set_client_factory(factory)
    return fake_api
