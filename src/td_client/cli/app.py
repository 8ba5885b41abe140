from typing import Optional

import typer

from td_client.config import TDClientConfig
from td_client.utils import setup_logging


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        import td_client

        typer.echo(f"td-client version: {td_client.__version__}")
        raise typer.Exit()


app = typer.Typer(name="td", no_args_is_help=True)


@app.callback()
def app_callback(
    ctx: typer.Context,
    api_key: Optional[str] = typer.Option(
        None,
        "--api-key",
        "-k",
        help="API key (defaults to TD_CLIENT_API_KEY)",
    ),
    endpoint: Optional[str] = typer.Option(
        None,
        "--endpoint",
        "-e",
        help="API host (defaults to TD_CLIENT_ENDPOINT or api.treasuredata.com)",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Log to stderr at this level (DEBUG, INFO, WARNING, ...)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """td - Treasure Data command line client."""

    # Command line options override environment and .env settings
    overrides = {"api_key": api_key, "endpoint": endpoint, "log_level": log_level}
    config = TDClientConfig(**{k: v for k, v in overrides.items() if v is not None})

    if log_level:
        setup_logging(config.log_level)

    ctx.obj = config


# Register sub-command groups
db_app = typer.Typer(help="Manage databases", no_args_is_help=True)
app.add_typer(db_app, name="db")

table_app = typer.Typer(help="Manage tables", no_args_is_help=True)
app.add_typer(table_app, name="table")

job_app = typer.Typer(help="Submit queries and fetch results", no_args_is_help=True)
app.add_typer(job_app, name="job")
