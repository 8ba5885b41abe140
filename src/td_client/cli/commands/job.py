"""Query job commands."""

import typer

from td_client.api import get_client
from td_client.cli.app import job_app
from td_client.cli.commands.command_utils import (
    console,
    echo_record,
    get_cli_config,
    run_command,
)
from td_client.clients import JobClient
from td_client.schemas import JobStatus, Query


def _print_status(status: JobStatus) -> None:
    color = {"success": "green", "error": "red", "killed": "red"}.get(status.status, "yellow")
    console.print(f"Job {status.job_id}: [{color}]{status.status}[/{color}]")
    if status.num_records is not None:
        console.print(f"  records: {status.num_records}")


@job_app.command("submit")
def submit(
    ctx: typer.Context,
    db: str = typer.Argument(..., help="Database name"),
    query: str = typer.Argument(..., help="Query text"),
    query_type: str = typer.Option("hive", "--type", "-t", help="Query engine"),
    priority: int = typer.Option(0, "--priority", help="Job priority, -2 to 2"),
    wait: bool = typer.Option(False, "--wait", "-w", help="Wait for the job to finish"),
    poll_interval: float = typer.Option(1.0, "--poll-interval", help="Seconds between polls"),
):
    """Submit a query job."""

    async def _submit():
        async with get_client(get_cli_config(ctx)) as client:
            jobs = JobClient(client)
            job_id = await jobs.submit_query(
                db, Query(query=query, type=query_type, priority=priority)
            )
            status = await jobs.wait_for_job(job_id, poll_interval) if wait else None
            return job_id, status

    job_id, status = run_command(_submit(), "submitting query")
    console.print(f"Job submitted: [cyan]{job_id}[/cyan]")
    if status is not None:
        _print_status(status)
        if status.status != "success":
            raise typer.Exit(1)


@job_app.command("status")
def job_status(ctx: typer.Context, job_id: str = typer.Argument(..., help="Job id")):
    """Show the status of a job."""

    async def _status():
        async with get_client(get_cli_config(ctx)) as client:
            return await JobClient(client).job_status(job_id)

    _print_status(run_command(_status(), "getting job status"))


@job_app.command("result")
def job_result(ctx: typer.Context, job_id: str = typer.Argument(..., help="Job id")):
    """Print the result rows of a job as JSON lines."""

    async def _result():
        async with get_client(get_cli_config(ctx)) as client:
            return await JobClient(client).job_result_each(job_id, echo_record)

    run_command(_result(), "fetching job result")
