"""Schemas for job endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from td_client.schema import OptionalValue, parse_descriptor

# Response of POST /v3/job/issue/{type}/{db}
SUBMIT_JOB = parse_descriptor({"job_id": "string"})

# Response of GET /v3/job/status/{job_id}
JOB_STATUS = parse_descriptor(
    {
        "job_id": "string",
        "status": "string",
        "created_at": OptionalValue("timestamp", None),
        "start_at": OptionalValue("timestamp", None),
        "end_at": OptionalValue("timestamp", None),
        "duration": OptionalValue("integer", None),
        "cpu_time": OptionalValue("integer", None),
        "result_size": OptionalValue("integer", None),
        "num_records": OptionalValue("integer", None),
    }
)

# Job states after which the status no longer changes
FINISHED_STATUSES = frozenset({"success", "error", "killed"})


class Query(BaseModel):
    """A query to submit as a job."""

    query: str = Field(..., description="Query text")
    type: str = Field(default="hive", description="Query engine (hive, presto, ...)")
    result_url: str = Field(default="", description="Where to write results, empty for none")
    priority: int = Field(default=0, description="Job priority, -2 (very low) to 2 (very high)")
    retry_limit: int = Field(default=0, ge=0, description="Automatic retry count")


class JobStatus(BaseModel):
    """Status of a submitted job."""

    job_id: str = Field(..., description="Job id")
    status: str = Field(..., description="queued, running, success, error or killed")
    created_at: datetime | None = Field(default=None, description="Submission time")
    start_at: datetime | None = Field(default=None, description="Start time")
    end_at: datetime | None = Field(default=None, description="Completion time")
    duration: int | None = Field(default=None, description="Run time in seconds")
    cpu_time: int | None = Field(default=None, description="CPU time in milliseconds")
    result_size: int | None = Field(default=None, description="Result size in bytes")
    num_records: int | None = Field(default=None, description="Number of result records")

    @property
    def is_finished(self) -> bool:
        return self.status in FINISHED_STATUSES
