"""Shared CLI output helpers."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.models import RecordedRequest

console = Console()
# stdout belongs to the MCP stream while serving; diagnostics go to stderr.
err_console = Console(stderr=True)


def configure_logging(level: str) -> None:
    """Route package logs to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True, show_path=False)],
        force=True,
    )


def fail(message: str) -> NoReturn:
    """Print *message* as an error and exit with status 1."""
    err_console.print(f"[red]Error:[/red] {escape(message)}", highlight=False, soft_wrap=True)
    raise click.exceptions.Exit(1)


def print_requests_table(requests: list[RecordedRequest]) -> None:
    """Pretty-print recorded requests as a table."""
    table = Table(title="Recorded Requests")
    table.add_column("#", justify="right")
    table.add_column("Method", style="cyan")
    table.add_column("Path")
    table.add_column("Timestamp")

    for index, request in enumerate(requests, start=1):
        table.add_row(
            str(index),
            request.method or "UNKNOWN",
            _truncate(request.path or "/"),
            request.timestamp or "-",
        )

    console.print(table)


def _truncate(text: str, max_len: int = 80) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


def print_text(text: str) -> None:
    """Print tool output verbatim (no markup, no wrapping)."""
    console.print(text, markup=False, highlight=False, soft_wrap=True)
