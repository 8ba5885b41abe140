"""Schemas for table endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from td_client.schema import EmbeddedDocument, OptionalValue, parse_descriptor

# Response of GET /v3/table/list/{db}
LIST_TABLES = parse_descriptor(
    {
        "database": "string",
        "tables": [
            {
                "id": "integer",
                "name": "string",
                "type": OptionalValue("string", "?"),
                "count": OptionalValue("integer", 0),
                "created_at": "timestamp",
                "updated_at": "timestamp",
                "counter_updated_at": OptionalValue("timestamp", None),
                "last_log_timestamp": OptionalValue("timestamp", None),
                "estimated_storage_size": "integer",
                # Column list arrives as a JSON string: [["name", "type"], ...]
                "schema": OptionalValue(EmbeddedDocument(["any"]), None),
                "expire_days": OptionalValue("integer", 0),
                "primary_key": OptionalValue("string", ""),
                "primary_key_type": OptionalValue("string", ""),
            }
        ],
    }
)

# Response of POST /v3/table/delete/{db}/{table}
DELETE_TABLE = parse_descriptor(
    {
        "table": "string",
        "database": "string",
        "type": OptionalValue("string", "?"),
    }
)

# Response of PUT /v3/table/import/...
IMPORT_RESULT = parse_descriptor(
    {
        "elapsed_time": "float",
        "database?": "string",
        "table?": "string",
    }
)


class TableInfo(BaseModel):
    """Entry of the table list of a database."""

    id: int = Field(..., description="Table id")
    name: str = Field(..., description="Table name")
    type: str = Field(default="?", description="Table type (log or item), '?' if unknown")
    count: int = Field(default=0, description="Number of records")
    created_at: datetime = Field(..., description="Creation time (UTC)")
    updated_at: datetime = Field(..., description="Last update time (UTC)")
    last_import: datetime | None = Field(
        default=None, description="Time the record counter was last updated"
    )
    last_log_timestamp: datetime | None = Field(
        default=None, description="Timestamp of the newest record"
    )
    estimated_storage_size: int = Field(..., description="Estimated size in bytes")
    schema_: list[Any] | None = Field(
        default=None, alias="schema", description="Column definitions as [name, type] pairs"
    )
    expire_days: int = Field(default=0, description="Retention in days, 0 for unlimited")
    primary_key: str = Field(default="", description="Primary key column of item tables")
    primary_key_type: str = Field(default="", description="Primary key type of item tables")

    @classmethod
    def from_canonical(cls, data: dict[str, Any]) -> "TableInfo":
        """Build from a validated list entry; counter_updated_at is exposed as last_import."""
        fields = dict(data)
        fields["last_import"] = fields.pop("counter_updated_at", None)
        return cls.model_validate(fields)


class ImportResult(BaseModel):
    """Result of a bulk import."""

    elapsed_time: float = Field(..., description="Server-side import time in seconds")
    database: str | None = Field(default=None, description="Target database")
    table: str | None = Field(default=None, description="Target table")
