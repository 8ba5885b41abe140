"""Main CLI entry point for td-client."""  # pragma: no cover

from td_client.cli.app import app  # pragma: no cover

# Register commands
from td_client.cli.commands import account, database, job, table  # noqa: F401  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
