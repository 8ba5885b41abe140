"""utility functions for commands"""

import asyncio
import json
from typing import Any, Coroutine, TypeVar

import httpx
import typer
from rich.console import Console
from rich.markup import escape

from td_client.config import TDClientConfig, get_config
from td_client.errors import TDClientError

console = Console()

T = TypeVar("T")


def get_cli_config(ctx: typer.Context) -> TDClientConfig:
    """Config built by the app callback, or the environment config outside a CLI run."""
    if isinstance(ctx.obj, TDClientConfig):
        return ctx.obj
    return get_config()


def run_command(coro: Coroutine[Any, Any, T], action: str) -> T:
    """Run a command coroutine, turning client and httpx errors into a red message and exit 1."""
    try:
        return asyncio.run(coro)
    except TDClientError as e:
        console.print(f"[red]Error {action}: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]Error {action}: {escape(str(e))}[/red]")
        raise typer.Exit(1)
    except TimeoutError:
        console.print(f"[red]Error {action}: timed out[/red]")
        raise typer.Exit(1)


def echo_record(record: Any) -> None:
    """Print one streamed record as a JSON line."""
    typer.echo(json.dumps(record, default=str, ensure_ascii=False))
