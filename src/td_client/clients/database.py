"""Typed client for database API operations."""

from typing import Optional

from httpx import AsyncClient
from loguru import logger

from td_client.api.http import api_path, call_get, call_post, checked_json
from td_client.schemas.database import LIST_DATABASES, DatabaseInfo


class DatabaseClient:
    """Typed client for database management operations.

    Centralizes:
    - API path construction for database endpoints
    - Response validation via schema descriptors and Pydantic models
    - Consistent error handling through call_* utilities

    Usage:
        async with get_client() as http_client:
            client = DatabaseClient(http_client)
            databases = await client.list_databases()
    """

    def __init__(self, http_client: AsyncClient):
        """Initialize the database client.

        Args:
            http_client: HTTPX AsyncClient for making requests
        """
        self.http_client = http_client

    async def list_databases(self) -> list[DatabaseInfo]:
        """List all databases visible to the API key.

        Returns:
            DatabaseInfo entries; a missing organization comes back as ""

        Raises:
            APIError: If the request fails
            SchemaError: If the response does not match the expected shape
        """
        response = await call_get(
            self.http_client,
            "/v3/database/list",
            msg="List databases failed",
        )
        data = checked_json(response, LIST_DATABASES)
        return [DatabaseInfo.model_validate(item) for item in data["databases"]]

    async def create_database(
        self, db: str, options: Optional[dict[str, str]] = None
    ) -> None:
        """Create a database.

        Args:
            db: Database name
            options: Extra form parameters sent with the request

        Raises:
            APIError: If the request fails; ALREADY_EXISTS if the database exists
        """
        await call_post(
            self.http_client,
            api_path("/v3/database/create/{}", db),
            data=options,
            msg="Create database failed",
        )
        logger.info(f"Created database {db}")

    async def delete_database(self, db: str) -> None:
        """Delete a database and all its tables.

        Raises:
            APIError: If the request fails
        """
        await call_post(
            self.http_client,
            api_path("/v3/database/delete/{}", db),
            msg="Delete database failed",
        )
        logger.info(f"Deleted database {db}")
