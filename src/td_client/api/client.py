from contextlib import asynccontextmanager, AbstractAsyncContextManager
from typing import AsyncIterator, Callable, Optional

from httpx import AsyncClient, Timeout
from loguru import logger

from td_client.config import TDClientConfig, get_config


# Optional factory override for dependency injection
_client_factory: Optional[Callable[[], AbstractAsyncContextManager[AsyncClient]]] = None


def set_client_factory(
    factory: Optional[Callable[[], AbstractAsyncContextManager[AsyncClient]]],
) -> None:
    """Override the default client factory (for embedding applications, testing, etc).

    Pass None to restore the default.

    Args:
        factory: An async context manager that yields an AsyncClient

    Example:
        @asynccontextmanager
        async def custom_client_factory():
            async with AsyncClient(transport=MockTransport(handler)) as client:
                yield client

        set_client_factory(custom_client_factory)
    """
    global _client_factory
    _client_factory = factory


def create_client(config: Optional[TDClientConfig] = None) -> AsyncClient:
    """Create an HTTP client for the configured endpoint.

    The returned client should be closed by the caller (`await client.aclose()`
    or `async with`).

    Args:
        config: Client settings; loaded from the environment when omitted

    Returns:
        AsyncClient with base URL, headers and timeouts applied
    """
    config = config or get_config()

    timeout = Timeout(
        connect=config.connect_timeout,
        read=config.read_timeout,
        write=config.write_timeout,
        pool=config.pool_timeout,
    )

    headers = {
        "User-Agent": config.user_agent,
        "Accept-Encoding": "deflate, gzip",
    }
    if config.api_key:
        headers["Authorization"] = f"TD1 {config.api_key}"
    else:
        logger.warning("No API key configured; requests will be unauthenticated")

    logger.info(f"Creating HTTP client for {config.base_url}")
    return AsyncClient(base_url=config.base_url, headers=headers, timeout=timeout)


@asynccontextmanager
async def get_client(config: Optional[TDClientConfig] = None) -> AsyncIterator[AsyncClient]:
    """Get an AsyncClient as a context manager.

    Uses the factory installed with set_client_factory() when there is one,
    otherwise a client built by create_client().

    Usage:
        async with get_client() as client:
            databases = await DatabaseClient(client).list_databases()

    Yields:
        AsyncClient: Configured HTTP client
    """
    if _client_factory is not None:
        async with _client_factory() as client:
            yield client
        return

    async with create_client(config) as client:
        yield client
