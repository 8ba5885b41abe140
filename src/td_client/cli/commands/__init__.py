"""CLI commands for td-client."""

from . import account, database, job, table

__all__ = [
    "account",
    "database",
    "job",
    "table",
]
