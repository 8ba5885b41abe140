"""Tests for JobClient."""

from urllib.parse import parse_qs

import httpx
import pytest

from td_client.clients import JobClient
from td_client.schemas import Query
from td_client.stream import encode_records


@pytest.mark.asyncio
async def test_submit_query(fake_api, http_client):
    fake_api.add("POST", "/v3/job/issue/hive/sample_db", json={"job_id": "12345"})
    query = Query(query="SELECT COUNT(*) AS c FROM test", priority=1)

    job_id = await JobClient(http_client).submit_query("sample_db", query)

    assert job_id == "12345"
    assert parse_qs(fake_api.last_request.content.decode()) == {
        "query": ["SELECT COUNT(*) AS c FROM test"],
        "priority": ["1"],
        "retry_limit": ["0"],
    }


@pytest.mark.asyncio
async def test_submit_query_with_result_url(fake_api, http_client):
    fake_api.add("POST", "/v3/job/issue/presto/sample_db", json={"job_id": "1"})
    query = Query(query="SELECT 1", type="presto", result_url="td://@/db/out")

    await JobClient(http_client).submit_query("sample_db", query)

    assert parse_qs(fake_api.last_request.content.decode())["result"] == ["td://@/db/out"]


@pytest.mark.asyncio
async def test_job_status(fake_api, http_client):
    fake_api.add(
        "GET",
        "/v3/job/status/12345",
        json={"job_id": "12345", "status": "running", "created_at": "2015-01-01 00:00:00 UTC"},
    )
    status = await JobClient(http_client).job_status("12345")
    assert status.status == "running"
    assert status.is_finished is False
    assert status.end_at is None


@pytest.mark.asyncio
async def test_wait_for_job_polls_until_finished():
    statuses = iter(["queued", "running", "success"])
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request.url.path)
        return httpx.Response(200, json={"job_id": "7", "status": next(statuses)})

    async with httpx.AsyncClient(
        transport=httpx.MockTransport(handler), base_url="https://api.test"
    ) as client:
        status = await JobClient(client).wait_for_job("7", poll_interval=0)

    assert status.status == "success"
    assert status.is_finished
    assert calls == ["/v3/job/status/7"] * 3


@pytest.mark.asyncio
async def test_wait_for_job_timeout(fake_api, http_client):
    fake_api.add("GET", "/v3/job/status/7", json={"job_id": "7", "status": "running"})
    with pytest.raises(TimeoutError):
        await JobClient(http_client).wait_for_job("7", poll_interval=0.01, timeout=0.05)


@pytest.mark.asyncio
async def test_job_result(fake_api, http_client):
    rows = [[i, str(i)] for i in range(4)]
    fake_api.add("GET", "/v3/job/result/12345", content=encode_records(rows))

    result = [row async for row in JobClient(http_client).job_result("12345")]

    assert result == rows
    assert fake_api.last_request.url.params["format"] == "msgpack"


@pytest.mark.asyncio
async def test_job_result_each(fake_api, http_client):
    fake_api.add("GET", "/v3/job/result/12345", content=encode_records([[1], [2]]))
    seen = []

    async def reader(row):
        seen.append(row)

    assert await JobClient(http_client).job_result_each("12345", reader) == 2
    assert seen == [[1], [2]]
