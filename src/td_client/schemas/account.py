"""Schemas for account and system endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from td_client.schema import OptionalValue, parse_descriptor

# Response of GET /v3/system/server_status
SERVER_STATUS = parse_descriptor({"status": "string"})

# Response of GET /v3/account/show
SHOW_ACCOUNT = parse_descriptor(
    {
        "account": {
            "id": "integer",
            "plan": "integer",
            "storage_size": "integer",
            "guaranteed_cores": "integer",
            "maximum_cores": "integer",
            "created_at": "timestamp",
        }
    }
)

# Response of GET /v3/result/list
LIST_RESULTS = parse_descriptor(
    {
        "results": [
            {
                "name": "string",
                "url": "string",
                "organization": OptionalValue("string", ""),
            }
        ]
    }
)


class ServerStatus(BaseModel):
    """Response from the server status endpoint."""

    status: str = Field(..., description="Server status, 'ok' when healthy")


class AccountInfo(BaseModel):
    """Account summary."""

    id: int = Field(..., description="Account id")
    plan: int = Field(..., description="Plan identifier")
    storage_size: int = Field(..., description="Used storage in bytes")
    guaranteed_cores: int = Field(..., description="Guaranteed processing cores")
    maximum_cores: int = Field(..., description="Maximum processing cores")
    created_at: datetime = Field(..., description="Account creation time (UTC)")


class ResultInfo(BaseModel):
    """Saved result output destination."""

    name: str = Field(..., description="Result name")
    url: str = Field(..., description="Result destination URL")
    organization: str = Field(default="", description="Owning organization, empty if none")
