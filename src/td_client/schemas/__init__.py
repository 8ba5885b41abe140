"""Response descriptors and typed results for API endpoints."""

from td_client.schemas.account import (
    LIST_RESULTS,
    SERVER_STATUS,
    SHOW_ACCOUNT,
    AccountInfo,
    ResultInfo,
    ServerStatus,
)
from td_client.schemas.database import LIST_DATABASES, DatabaseInfo
from td_client.schemas.job import (
    FINISHED_STATUSES,
    JOB_STATUS,
    SUBMIT_JOB,
    JobStatus,
    Query,
)
from td_client.schemas.table import (
    DELETE_TABLE,
    IMPORT_RESULT,
    LIST_TABLES,
    ImportResult,
    TableInfo,
)

__all__ = [
    # Account
    "LIST_RESULTS",
    "SERVER_STATUS",
    "SHOW_ACCOUNT",
    "AccountInfo",
    "ResultInfo",
    "ServerStatus",
    # Database
    "LIST_DATABASES",
    "DatabaseInfo",
    # Job
    "FINISHED_STATUSES",
    "JOB_STATUS",
    "SUBMIT_JOB",
    "JobStatus",
    "Query",
    # Table
    "DELETE_TABLE",
    "IMPORT_RESULT",
    "LIST_TABLES",
    "ImportResult",
    "TableInfo",
]
