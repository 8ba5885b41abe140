"""Tests for AccountClient."""

from datetime import datetime, timezone

import pytest

from td_client.clients import AccountClient
from td_client.errors import SchemaMismatchError


@pytest.mark.asyncio
async def test_server_status(fake_api, http_client):
    fake_api.add("GET", "/v3/system/server_status", json={"status": "ok"})
    status = await AccountClient(http_client).server_status()
    assert status.status == "ok"


@pytest.mark.asyncio
async def test_show_account(fake_api, http_client):
    fake_api.add(
        "GET",
        "/v3/account/show",
        json={
            "account": {
                "id": 1,
                "plan": "3",
                "storage_size": 2048,
                "guaranteed_cores": 0,
                "maximum_cores": 4,
                "created_at": "2013-01-01 00:00:00 UTC",
            }
        },
    )
    account = await AccountClient(http_client).show_account()
    assert account.id == 1
    assert account.plan == 3
    assert account.created_at == datetime(2013, 1, 1, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_show_account_missing_field(fake_api, http_client):
    fake_api.add("GET", "/v3/account/show", json={"account": {"id": 1}})
    with pytest.raises(SchemaMismatchError) as exc:
        await AccountClient(http_client).show_account()
    assert exc.value.path == "account.plan"


@pytest.mark.asyncio
async def test_list_results(fake_api, http_client):
    fake_api.add(
        "GET",
        "/v3/result/list",
        json={"results": [{"name": "out", "url": "mysql://host/db"}]},
    )
    results = await AccountClient(http_client).list_results()
    assert [(r.name, r.url, r.organization) for r in results] == [("out", "mysql://host/db", "")]
