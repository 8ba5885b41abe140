"""Typed client for account and system API operations."""

from httpx import AsyncClient

from td_client.api.http import call_get, checked_json
from td_client.schemas.account import (
    LIST_RESULTS,
    SERVER_STATUS,
    SHOW_ACCOUNT,
    AccountInfo,
    ResultInfo,
    ServerStatus,
)


class AccountClient:
    """Typed client for account-level operations.

    Usage:
        async with get_client() as http_client:
            client = AccountClient(http_client)
            status = await client.server_status()
    """

    def __init__(self, http_client: AsyncClient):
        self.http_client = http_client

    async def server_status(self) -> ServerStatus:
        """Get the API server status.

        Raises:
            APIError: If the request fails
            SchemaError: If the response does not match the expected shape
        """
        response = await call_get(
            self.http_client,
            "/v3/system/server_status",
            msg="Server status failed",
        )
        return ServerStatus.model_validate(checked_json(response, SERVER_STATUS))

    async def show_account(self) -> AccountInfo:
        """Get the account summary of the API key's owner."""
        response = await call_get(self.http_client, "/v3/account/show", msg="Show account failed")
        data = checked_json(response, SHOW_ACCOUNT)
        return AccountInfo.model_validate(data["account"])

    async def list_results(self) -> list[ResultInfo]:
        """List saved result destinations."""
        response = await call_get(self.http_client, "/v3/result/list", msg="List results failed")
        data = checked_json(response, LIST_RESULTS)
        return [ResultInfo.model_validate(item) for item in data["results"]]
