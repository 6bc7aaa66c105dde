"""One-shot MockServer commands: ``status``, ``reset``, ``clear``, ``requests``,
``expect`` and ``verify``.

Each command runs the same handler the MCP tool uses, so the shell output
matches what an MCP caller sees.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Any

import click
import yaml

from mockserver_mcp.cli_commands._output import console, fail, print_requests_table, print_text
from mockserver_mcp.config import MockServerSettings
from mockserver_mcp.errors import ToolError
from mockserver_mcp.mockserver.client import MockServerClient
from mockserver_mcp.tools.clear import handle_clear
from mockserver_mcp.tools.create_expectation import handle_create_expectation
from mockserver_mcp.tools.reset import handle_reset
from mockserver_mcp.tools.retrieve_requests import handle_retrieve_requests
from mockserver_mcp.tools.status import handle_status
from mockserver_mcp.tools.verify import handle_verify

Handler = Callable[[MockServerClient, dict[str, Any]], Awaitable[str]]


def _run(settings: MockServerSettings, handler: Handler, arguments: dict[str, Any]) -> str:
    client = settings.create_client()
    try:
        return asyncio.run(handler(client, arguments))
    except ToolError as exc:
        fail(exc.message)


def _matcher(method: str | None, path: str | None) -> dict[str, Any] | None:
    matcher = {key: value for key, value in (("method", method), ("path", path)) if value}
    return matcher or None


@click.command()
@click.pass_obj
def status(settings: MockServerSettings) -> None:
    """Show whether MockServer is reachable."""
    print_text(_run(settings, handle_status, {}))


@click.command()
@click.pass_obj
def reset(settings: MockServerSettings) -> None:
    """Clear all expectations and recorded requests."""
    print_text(_run(settings, handle_reset, {}))


@click.command()
@click.option("--method", "-m", default=None, help="Only clear this HTTP method.")
@click.option("--path", "-p", default=None, help="Only clear this path.")
@click.pass_obj
def clear(settings: MockServerSettings, method: str | None, path: str | None) -> None:
    """Clear expectations and recorded requests, optionally filtered."""
    matcher = _matcher(method, path)
    arguments = {"httpRequest": matcher} if matcher else {}
    print_text(_run(settings, handle_clear, arguments))


@click.command()
@click.option("--method", "-m", default=None, help="Filter by HTTP method.")
@click.option("--path", "-p", default=None, help="Filter by path.")
@click.option("--json", "as_json", is_flag=True, help="Print raw JSON.")
@click.option("--table", "as_table", is_flag=True, help="Print a table.")
@click.pass_obj
def requests(
    settings: MockServerSettings,
    method: str | None,
    path: str | None,
    as_json: bool,
    as_table: bool,
) -> None:
    """List requests MockServer has recorded."""
    matcher = _matcher(method, path)
    if not as_json and not as_table:
        arguments = {"httpRequest": matcher} if matcher else {}
        print_text(_run(settings, handle_retrieve_requests, arguments))
        return

    from mockserver_mcp.mockserver.models import RequestMatcher

    client = settings.create_client()
    request = RequestMatcher.model_validate(matcher) if matcher else None
    try:
        recorded = asyncio.run(client.retrieve_recorded_requests(request))
    except ToolError as exc:
        fail(exc.message)

    if as_json:
        payload = [r.model_dump(by_alias=True, exclude_none=True) for r in recorded]
        console.print_json(json.dumps(payload, default=str))
    elif not recorded:
        print_text("No recorded requests found.")
    else:
        print_requests_table(recorded)


@click.command()
@click.argument(
    "file", type=click.Path(exists=True, dir_okay=False, path_type=Path)
)
@click.pass_obj
def expect(settings: MockServerSettings, file: Path) -> None:
    """Create the expectation(s) defined in FILE (YAML or JSON).

    FILE holds a single expectation or a list of them.
    """
    try:
        data: Any = yaml.safe_load(file.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as exc:
        fail(f"Cannot load {file}: {exc}")

    expectations = data if isinstance(data, list) else [data]
    for expectation in expectations:
        if not isinstance(expectation, dict):
            fail(f"{file} must contain a mapping or a list of mappings")
        print_text(_run(settings, handle_create_expectation, expectation))


@click.command()
@click.option("--method", "-m", default=None, help="HTTP method to match.")
@click.option("--path", "-p", required=True, help="Path to match.")
@click.option("--exactly", type=click.IntRange(min=0), default=None)
@click.option("--at-least", type=click.IntRange(min=0), default=None)
@click.option("--at-most", type=click.IntRange(min=0), default=None)
@click.pass_obj
def verify(
    settings: MockServerSettings,
    method: str | None,
    path: str,
    exactly: int | None,
    at_least: int | None,
    at_most: int | None,
) -> None:
    """Verify matching requests were received. Exits 1 when verification fails."""
    arguments: dict[str, Any] = {"httpRequest": _matcher(method, path)}
    times = {
        key: value
        for key, value in (("exactly", exactly), ("atLeast", at_least), ("atMost", at_most))
        if value is not None
    }
    if times:
        arguments["times"] = times

    text = _run(settings, handle_verify, arguments)
    print_text(text)
    if text.startswith("Verification FAILED"):
        raise click.exceptions.Exit(1)
