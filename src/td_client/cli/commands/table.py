"""Table management commands."""

from typing import Optional

import typer
from rich.table import Table

from td_client.api import get_client
from td_client.cli.app import table_app
from td_client.cli.commands.command_utils import (
    console,
    echo_record,
    get_cli_config,
    run_command,
)
from td_client.clients import TableClient


@table_app.command("list")
def list_tables(ctx: typer.Context, db: str = typer.Argument(..., help="Database name")):
    """List the tables of a database."""

    async def _list():
        async with get_client(get_cli_config(ctx)) as client:
            return await TableClient(client).list_tables(db)

    tables = run_command(_list(), "listing tables")

    table = Table(title=f"Tables in {db}")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Type", style="magenta")
    table.add_column("Count", justify="right")
    table.add_column("Primary key")
    table.add_column("Columns")
    for info in tables:
        columns = ", ".join(str(column[0]) for column in info.schema_ or [] if column)
        table.add_row(info.name, info.type, str(info.count), info.primary_key, columns)
    console.print(table)


@table_app.command("create")
def create_table(
    ctx: typer.Context,
    db: str = typer.Argument(..., help="Database name"),
    name: str = typer.Argument(..., help="Table name"),
    primary_key: Optional[str] = typer.Option(
        None, "--primary-key", help="Create an item table keyed by this column"
    ),
    primary_key_type: str = typer.Option(
        "string", "--primary-key-type", help="Primary key type: string or int"
    ),
):
    """Create a log table, or an item table when --primary-key is given."""

    async def _create():
        async with get_client(get_cli_config(ctx)) as client:
            tables = TableClient(client)
            if primary_key:
                await tables.create_item_table(db, name, primary_key, primary_key_type)
            else:
                await tables.create_log_table(db, name)

    run_command(_create(), "creating table")
    console.print(f"[green]Table '{db}.{name}' created[/green]")


@table_app.command("delete")
def delete_table(
    ctx: typer.Context,
    db: str = typer.Argument(..., help="Database name"),
    name: str = typer.Argument(..., help="Table name"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt"),
):
    """Delete a table."""
    if not yes and not typer.confirm(f"Delete table '{db}.{name}'?"):
        raise typer.Abort()

    async def _delete():
        async with get_client(get_cli_config(ctx)) as client:
            return await TableClient(client).delete_table(db, name)

    table_type = run_command(_delete(), "deleting table")
    console.print(f"[green]Table '{db}.{name}' deleted (type: {table_type})[/green]")


@table_app.command("tail")
def tail_table(
    ctx: typer.Context,
    db: str = typer.Argument(..., help="Database name"),
    name: str = typer.Argument(..., help="Table name"),
    count: int = typer.Option(10, "--count", "-n", min=0, help="Number of records"),
):
    """Print the most recent records of a table as JSON lines."""

    async def _tail():
        async with get_client(get_cli_config(ctx)) as client:
            return await TableClient(client).tail_each(db, name, echo_record, count=count)

    run_command(_tail(), "tailing table")
