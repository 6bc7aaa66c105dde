"""``mockserver_status`` — report connectivity to MockServer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mockserver_mcp.tools.base import EmptyInput, define_tool, validate_arguments

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.client import MockServerClient
    from mockserver_mcp.mockserver.models import ServerStatus

status_tool = define_tool(
    "mockserver_status",
    "Get MockServer connection status and configuration. "
    "Returns host, port, and reachability.",
    EmptyInput,
)


def format_status(status: ServerStatus) -> str:
    state = "✓ Connected" if status.reachable else "✗ Unreachable"
    text = (
        f"MockServer Status: {state}\n\n"
        f"Configuration:\n- Host: {status.host}\n- Port: {status.port}"
    )
    if status.version:
        text += f"\nVersion: {status.version}"
    return text


async def handle_status(client: MockServerClient, arguments: dict[str, Any]) -> str:
    validate_arguments(EmptyInput, arguments)
    return format_status(await client.get_status())
