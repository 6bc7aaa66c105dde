"""``mockserver_reset`` — full reset of MockServer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mockserver_mcp.tools.base import EmptyInput, define_tool, validate_arguments

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.client import MockServerClient

reset_tool = define_tool(
    "mockserver_reset",
    "Perform a full reset of MockServer, clearing all expectations and recorded requests.",
    EmptyInput,
)


async def handle_reset(client: MockServerClient, arguments: dict[str, Any]) -> str:
    validate_arguments(EmptyInput, arguments)
    await client.reset()
    return (
        "MockServer has been fully reset. "
        "All expectations and recorded requests have been cleared."
    )
