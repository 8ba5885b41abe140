"""Database management commands."""

import typer
from rich.table import Table

from td_client.api import get_client
from td_client.cli.app import db_app
from td_client.cli.commands.command_utils import console, get_cli_config, run_command
from td_client.clients import DatabaseClient


@db_app.command("list")
def list_databases(ctx: typer.Context) -> None:
    """List databases."""

    async def _list():
        async with get_client(get_cli_config(ctx)) as client:
            return await DatabaseClient(client).list_databases()

    databases = run_command(_list(), "listing databases")

    table = Table(title="Databases")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Count", justify="right")
    table.add_column("Organization")
    table.add_column("Permission", style="magenta")
    for database in databases:
        table.add_row(
            database.name, str(database.count), database.organization, database.permission
        )
    console.print(table)


@db_app.command("create")
def create_database(ctx: typer.Context, name: str = typer.Argument(..., help="Database name")):
    """Create a database."""

    async def _create():
        async with get_client(get_cli_config(ctx)) as client:
            await DatabaseClient(client).create_database(name)

    run_command(_create(), "creating database")
    console.print(f"[green]Database '{name}' created[/green]")


@db_app.command("delete")
def delete_database(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Database name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a database and all of its tables."""
    if not yes and not typer.confirm(f"Delete database '{name}' and all of its tables?"):
        raise typer.Abort()

    async def _delete():
        async with get_client(get_cli_config(ctx)) as client:
            await DatabaseClient(client).delete_database(name)

    run_command(_delete(), "deleting database")
    console.print(f"[green]Database '{name}' deleted[/green]")
