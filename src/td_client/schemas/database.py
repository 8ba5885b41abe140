"""Schemas for database endpoints."""

from datetime import datetime

from pydantic import BaseModel, Field

from td_client.schema import OptionalValue, parse_descriptor

# Response of GET /v3/database/list
LIST_DATABASES = parse_descriptor(
    {
        "databases": [
            {
                "name": "string",
                "organization": OptionalValue("string", ""),
                "count": "integer",
                "created_at": "timestamp",
                "updated_at": "timestamp",
                "permission": "string",
            }
        ]
    }
)


class DatabaseInfo(BaseModel):
    """Entry of the database list."""

    name: str = Field(..., description="Database name")
    organization: str = Field(default="", description="Owning organization, empty if none")
    count: int = Field(..., description="Total number of records in the database")
    created_at: datetime = Field(..., description="Creation time (UTC)")
    updated_at: datetime = Field(..., description="Last update time (UTC)")
    permission: str = Field(..., description="Caller's permission on the database")
