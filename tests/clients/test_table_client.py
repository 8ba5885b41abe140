"""Tests for TableClient."""

import json
from datetime import datetime, timezone
from urllib.parse import parse_qs

import pytest

from td_client.clients import TableClient
from td_client.errors import MalformedStreamError, RecordCallbackError
from td_client.stream import compress_records, encode_records


def _form(request) -> dict[str, list[str]]:
    return parse_qs(request.content.decode())


TABLES = {
    "database": "sample_db",
    "tables": [
        {
            "id": 1,
            "name": "www_access",
            "type": "log",
            "count": 5000,
            "created_at": "2014-01-01 00:00:00 UTC",
            "updated_at": "2014-01-02 00:00:00 UTC",
            "estimated_storage_size": 1024,
            "schema": '[["a","string"],["b","string"]]',
        },
        {
            "id": "2",
            "name": "users",
            "type": "item",
            "created_at": "2014-01-01 00:00:00 UTC",
            "updated_at": "2014-01-02 00:00:00 UTC",
            "estimated_storage_size": 0,
            "primary_key": "user_id",
        },
    ],
}


class TestTableManagement:
    @pytest.mark.asyncio
    async def test_list_tables(self, fake_api, http_client):
        fake_api.add("GET", "/v3/table/list/sample_db", json=TABLES)
        tables = await TableClient(http_client).list_tables("sample_db")

        assert [t.name for t in tables] == ["www_access", "users"]
        assert tables[0].schema_ == [["a", "string"], ["b", "string"]]
        assert tables[1].id == 2
        assert tables[1].count == 0
        assert tables[1].primary_key == "user_id"
        assert tables[1].primary_key_type == ""
        assert tables[1].schema_ is None
        assert tables[1].last_import is None

    @pytest.mark.asyncio
    async def test_create_log_table(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/create/sample_db/logs/log", json={})
        await TableClient(http_client).create_log_table("sample_db", "logs")
        assert fake_api.last_request.url.path == "/v3/table/create/sample_db/logs/log"

    @pytest.mark.asyncio
    async def test_create_item_table(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/create/sample_db/users/item", json={})
        await TableClient(http_client).create_item_table("sample_db", "users", "user_id", "int")
        assert _form(fake_api.last_request) == {
            "primary_key": ["user_id"],
            "primary_key_type": ["int"],
        }

    @pytest.mark.asyncio
    async def test_swap_table(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/swap/sample_db/a/b", json={})
        await TableClient(http_client).swap_table("sample_db", "a", "b")
        assert fake_api.last_request.method == "POST"

    @pytest.mark.asyncio
    async def test_update_schema_sends_json(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/update-schema/sample_db/test", json={})
        schema = [["a", "string"], ["b", "string"]]
        await TableClient(http_client).update_schema("sample_db", "test", schema)
        assert json.loads(_form(fake_api.last_request)["schema"][0]) == schema

    @pytest.mark.asyncio
    async def test_update_expire(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/update/sample_db/test", json={})
        await TableClient(http_client).update_expire("sample_db", "test", 30)
        assert _form(fake_api.last_request) == {"expire_days": ["30"]}

    @pytest.mark.asyncio
    async def test_delete_table_returns_type(self, fake_api, http_client):
        fake_api.add(
            "POST",
            "/v3/table/delete/sample_db/test",
            json={"table": "test", "database": "sample_db", "type": "log"},
        )
        assert await TableClient(http_client).delete_table("sample_db", "test") == "log"

    @pytest.mark.asyncio
    async def test_delete_table_unknown_type(self, fake_api, http_client):
        fake_api.add(
            "POST",
            "/v3/table/delete/sample_db/test",
            json={"table": "test", "database": "sample_db"},
        )
        assert await TableClient(http_client).delete_table("sample_db", "test") == "?"


class TestImport:
    @pytest.mark.asyncio
    async def test_import_records(self, fake_api, http_client):
        payload = compress_records([{"time": 1, "a": "1"}])
        fake_api.add(
            "PUT",
            "/v3/table/import/sample_db/test/msgpack.gz",
            json={"elapsed_time": 0.25, "database": "sample_db", "table": "test"},
        )
        result = await TableClient(http_client).import_records(
            "sample_db", "test", "msgpack.gz", payload
        )

        assert result.elapsed_time == 0.25
        request = fake_api.last_request
        assert request.content == payload
        assert request.headers["content-type"] == "application/octet-stream"

    @pytest.mark.asyncio
    async def test_import_with_unique_id(self, fake_api, http_client):
        fake_api.add(
            "PUT",
            "/v3/table/import_with_id/sample_db/test/abc123/msgpack.gz",
            json={"elapsed_time": 1},
        )
        result = await TableClient(http_client).import_records(
            "sample_db", "test", "msgpack.gz", b"", unique_id="abc123"
        )
        assert result.elapsed_time == 1.0
        assert result.database is None


class TestTail:
    @pytest.mark.asyncio
    async def test_tail_streams_records(self, fake_api, http_client):
        records = [{"time": i, "v": str(i)} for i in range(3)]
        fake_api.add("POST", "/v3/table/tail/sample_db/test", content=encode_records(records))

        client = TableClient(http_client)
        result = [r async for r in client.tail("sample_db", "test", count=3)]

        assert result == records
        assert _form(fake_api.last_request) == {"count": ["3"]}

    @pytest.mark.asyncio
    async def test_tail_time_range_parameters(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/tail/sample_db/test", content=b"")
        start = datetime(2015, 1, 1, tzinfo=timezone.utc)
        end = datetime(2015, 1, 2, 12, 30, tzinfo=timezone.utc)

        client = TableClient(http_client)
        result = [r async for r in client.tail("sample_db", "test", to=end, from_=start)]

        assert result == []
        assert _form(fake_api.last_request) == {
            "to": ["2015-01-02 12:30:00 UTC"],
            "from": ["2015-01-01 00:00:00 UTC"],
        }

    @pytest.mark.asyncio
    async def test_tail_each_callback_failure(self, fake_api, http_client):
        records = [{"time": i} for i in range(5)]
        fake_api.add("POST", "/v3/table/tail/sample_db/test", content=encode_records(records))
        seen = []

        def reader(record):
            if record["time"] == 3:
                raise ValueError("stop")
            seen.append(record["time"])

        with pytest.raises(RecordCallbackError) as exc:
            await TableClient(http_client).tail_each("sample_db", "test", reader)

        assert exc.value.record_index == 3
        assert seen == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_tail_each_counts_records(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/tail/sample_db/test", content=encode_records([1, 2]))
        count = await TableClient(http_client).tail_each("sample_db", "test", lambda r: None)
        assert count == 2

    @pytest.mark.asyncio
    async def test_tail_invalid_stream(self, fake_api, http_client):
        fake_api.add("POST", "/v3/table/tail/sample_db/test", content=b"\xc1\xc1")
        with pytest.raises(MalformedStreamError):
            await TableClient(http_client).tail_each("sample_db", "test", lambda r: None)
