"""Typed clients for API endpoints."""

from td_client.clients.account import AccountClient
from td_client.clients.database import DatabaseClient
from td_client.clients.job import JobClient
from td_client.clients.table import TableClient

__all__ = [
    "AccountClient",
    "DatabaseClient",
    "JobClient",
    "TableClient",
]
