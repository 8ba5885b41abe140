"""Server status and account commands."""

import typer
from rich.table import Table

from td_client.api import get_client
from td_client.cli.app import app
from td_client.cli.commands.command_utils import console, get_cli_config, run_command
from td_client.clients import AccountClient


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the API server status."""

    async def _status():
        async with get_client(get_cli_config(ctx)) as client:
            return await AccountClient(client).server_status()

    result = run_command(_status(), "getting server status")
    color = "green" if result.status == "ok" else "yellow"
    console.print(f"Server status: [{color}]{result.status}[/{color}]")


@app.command()
def account(ctx: typer.Context) -> None:
    """Show the account summary."""

    async def _account():
        async with get_client(get_cli_config(ctx)) as client:
            account_client = AccountClient(client)
            return await account_client.show_account(), await account_client.list_results()

    info, results = run_command(_account(), "showing account")

    table = Table(title="Account", show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("id", str(info.id))
    table.add_row("plan", str(info.plan))
    table.add_row("storage size", str(info.storage_size))
    table.add_row("guaranteed cores", str(info.guaranteed_cores))
    table.add_row("maximum cores", str(info.maximum_cores))
    table.add_row("created at", info.created_at.isoformat())
    table.add_row("results", str(len(results)))
    console.print(table)
