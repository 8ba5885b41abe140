"""Typed client for table API operations.

Encapsulates table management, bulk import and tail endpoints.
"""

import json
from collections.abc import AsyncIterator
from datetime import datetime
from typing import Any, Callable, Optional

from httpx import AsyncClient
from loguru import logger

from td_client.api.http import (
    api_path,
    call_get,
    call_post,
    call_put,
    checked_json,
    stream_records,
)
from td_client.schema import format_timestamp
from td_client.schemas.table import (
    DELETE_TABLE,
    IMPORT_RESULT,
    LIST_TABLES,
    ImportResult,
    TableInfo,
)
from td_client.stream import aeach_record


class TableClient:
    """Typed client for table operations.

    Usage:
        async with get_client() as http_client:
            client = TableClient(http_client)
            tables = await client.list_tables("sample_db")
            async for record in client.tail("sample_db", "www_access", count=10):
                print(record)
    """

    def __init__(self, http_client: AsyncClient):
        """Initialize the table client.

        Args:
            http_client: HTTPX AsyncClient for making requests
        """
        self.http_client = http_client

    async def list_tables(self, db: str) -> list[TableInfo]:
        """List the tables of a database.

        Args:
            db: Database name

        Returns:
            TableInfo entries with optional fields filled with their defaults

        Raises:
            APIError: If the request fails
            SchemaError: If the response does not match the expected shape
        """
        response = await call_get(
            self.http_client,
            api_path("/v3/table/list/{}", db),
            msg="List tables failed",
        )
        data = checked_json(response, LIST_TABLES)
        return [TableInfo.from_canonical(item) for item in data["tables"]]

    async def _create_table(
        self, db: str, table: str, table_type: str, params: Optional[dict[str, str]] = None
    ) -> None:
        await call_post(
            self.http_client,
            api_path("/v3/table/create/{}/{}/{}", db, table, table_type),
            data=params,
            msg=f"Create {table_type} table failed",
        )
        logger.info(f"Created {table_type} table {db}.{table}")

    async def create_log_table(self, db: str, table: str) -> None:
        """Create a log (append-only) table."""
        await self._create_table(db, table, "log")

    async def create_item_table(
        self, db: str, table: str, primary_key: str, primary_key_type: str
    ) -> None:
        """Create an item table keyed by `primary_key` (of type "string" or "int")."""
        await self._create_table(
            db,
            table,
            "item",
            {"primary_key": primary_key, "primary_key_type": primary_key_type},
        )

    async def swap_table(self, db: str, table1: str, table2: str) -> None:
        """Swap the contents of two tables."""
        await call_post(
            self.http_client,
            api_path("/v3/table/swap/{}/{}/{}", db, table1, table2),
            msg="Swap tables failed",
        )

    async def update_schema(self, db: str, table: str, schema: list[Any]) -> None:
        """Replace a table's column definitions.

        Args:
            db: Database name
            table: Table name
            schema: Column definitions, e.g. [["a", "string"], ["b", "long"]]
        """
        await call_post(
            self.http_client,
            api_path("/v3/table/update-schema/{}/{}", db, table),
            data={"schema": json.dumps(schema)},
            msg="Update schema failed",
        )

    async def update_expire(self, db: str, table: str, expire_days: int) -> None:
        """Set a table's retention period in days."""
        await call_post(
            self.http_client,
            api_path("/v3/table/update/{}/{}", db, table),
            data={"expire_days": str(expire_days)},
            msg="Update expire failed",
        )

    async def delete_table(self, db: str, table: str) -> str:
        """Delete a table.

        Returns:
            The type of the deleted table, "?" when the server does not say
        """
        response = await call_post(
            self.http_client,
            api_path("/v3/table/delete/{}/{}", db, table),
            msg="Delete table failed",
        )
        data = checked_json(response, DELETE_TABLE)
        logger.info(f"Deleted table {db}.{table}")
        return data["type"]

    def tail(
        self,
        db: str,
        table: str,
        count: int = 0,
        to: Optional[datetime] = None,
        from_: Optional[datetime] = None,
    ) -> AsyncIterator[Any]:
        """Stream the most recent records of a table.

        The returned iterator holds the HTTP response open until it is
        exhausted or closed.

        Args:
            db: Database name
            table: Table name
            count: Maximum number of records, server default when 0
            to: Only records before this time
            from_: Only records after this time

        Raises:
            APIError: If the request fails
            MalformedStreamError: If the record stream is corrupt or truncated
        """
        params: dict[str, str] = {}
        if count > 0:
            params["count"] = str(count)
        if to is not None:
            params["to"] = format_timestamp(to)
        if from_ is not None:
            params["from"] = format_timestamp(from_)
        return stream_records(
            self.http_client,
            "POST",
            api_path("/v3/table/tail/{}/{}", db, table),
            data=params,
            msg="Tail failed",
        )

    async def tail_each(
        self,
        db: str,
        table: str,
        callback: Callable[[Any], Any],
        count: int = 0,
        to: Optional[datetime] = None,
        from_: Optional[datetime] = None,
    ) -> int:
        """Call `callback` for every tailed record.

        Returns:
            Number of records processed

        Raises:
            RecordCallbackError: If the callback fails; no further records are read
        """
        return await aeach_record(self.tail(db, table, count, to, from_), callback)

    async def import_records(
        self,
        db: str,
        table: str,
        fmt: str,
        payload: bytes,
        unique_id: Optional[str] = None,
    ) -> ImportResult:
        """Bulk import an encoded payload into a table.

        Args:
            db: Database name
            table: Table name
            fmt: Payload format, usually "msgpack.gz" (see compress_records)
            payload: Encoded records
            unique_id: Import id making retried uploads idempotent

        Returns:
            ImportResult with the server-side elapsed time
        """
        if unique_id:
            url = api_path("/v3/table/import_with_id/{}/{}/{}/{}", db, table, unique_id, fmt)
        else:
            url = api_path("/v3/table/import/{}/{}/{}", db, table, fmt)

        logger.info(f"Importing {len(payload)} bytes into {db}.{table} as {fmt}")
        response = await call_put(
            self.http_client,
            url,
            content=payload,
            headers={"Content-Type": "application/octet-stream"},
            msg="Import failed",
        )
        return ImportResult.model_validate(checked_json(response, IMPORT_RESULT))
