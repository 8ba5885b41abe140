"""Typed client for job API operations."""

import asyncio
from collections.abc import AsyncIterator
from typing import Any, Callable, Optional

from httpx import AsyncClient
from loguru import logger

from td_client.api.http import api_path, call_get, call_post, checked_json, stream_records
from td_client.schemas.job import JOB_STATUS, SUBMIT_JOB, JobStatus, Query
from td_client.stream import aeach_record


class JobClient:
    """Typed client for query jobs: submission, status polling and results.

    Usage:
        async with get_client() as http_client:
            client = JobClient(http_client)
            job_id = await client.submit_query("sample_db", Query(query="SELECT 1"))
            await client.wait_for_job(job_id)
            async for row in client.job_result(job_id):
                print(row)
    """

    def __init__(self, http_client: AsyncClient):
        self.http_client = http_client

    async def submit_query(self, db: str, query: Query) -> str:
        """Submit a query job.

        Args:
            db: Database the query runs against
            query: Query text and options

        Returns:
            The job id

        Raises:
            APIError: If the request fails
        """
        params = {
            "query": query.query,
            "priority": str(query.priority),
            "retry_limit": str(query.retry_limit),
        }
        if query.result_url:
            params["result"] = query.result_url

        response = await call_post(
            self.http_client,
            api_path("/v3/job/issue/{}/{}", query.type, db),
            data=params,
            msg="Submit query failed",
        )
        job_id = checked_json(response, SUBMIT_JOB)["job_id"]
        logger.info(f"Submitted {query.type} job {job_id} on {db}")
        return job_id

    async def job_status(self, job_id: str) -> JobStatus:
        """Get the current status of a job."""
        response = await call_get(
            self.http_client,
            api_path("/v3/job/status/{}", job_id),
            msg="Job status failed",
        )
        return JobStatus.model_validate(checked_json(response, JOB_STATUS))

    async def wait_for_job(
        self,
        job_id: str,
        poll_interval: float = 1.0,
        timeout: Optional[float] = None,
    ) -> JobStatus:
        """Poll a job until it leaves the queued/running states.

        Args:
            job_id: Job id
            poll_interval: Seconds between status requests
            timeout: Give up after this many seconds; wait forever when None

        Returns:
            The final JobStatus

        Raises:
            TimeoutError: If the job is still running after `timeout` seconds
        """
        async with asyncio.timeout(timeout):
            while True:
                status = await self.job_status(job_id)
                logger.debug(f"Job {job_id} status: {status.status}")
                if status.is_finished:
                    return status
                await asyncio.sleep(poll_interval)

    def job_result(self, job_id: str) -> AsyncIterator[Any]:
        """Stream the result rows of a finished job.

        Raises:
            APIError: If the request fails
            MalformedStreamError: If the record stream is corrupt or truncated
        """
        return stream_records(
            self.http_client,
            "GET",
            api_path("/v3/job/result/{}", job_id),
            params={"format": "msgpack"},
            msg="Job result failed",
        )

    async def job_result_each(self, job_id: str, callback: Callable[[Any], Any]) -> int:
        """Call `callback` for every result row.

        Returns:
            Number of rows processed

        Raises:
            RecordCallbackError: If the callback fails; no further rows are read
        """
        return await aeach_record(self.job_result(job_id), callback)
