"""``mockserver_clear`` — remove expectations and recorded requests."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mockserver_mcp.tools.base import MatcherFilterInput, define_tool, validate_arguments

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.client import MockServerClient

clear_tool = define_tool(
    "mockserver_clear",
    "Clear expectations and recorded requests from MockServer. "
    "Optionally filter by request matcher; without one, clears all.",
    MatcherFilterInput,
)


async def handle_clear(client: MockServerClient, arguments: dict[str, Any]) -> str:
    params = validate_arguments(MatcherFilterInput, arguments)
    request = params.http_request
    await client.clear(request)

    if request is None:
        return "Cleared all expectations and recorded requests from MockServer."

    criteria: list[str] = []
    if request.method:
        criteria.append(f"- Method: {request.method}")
    if request.path:
        criteria.append(f"- Path: {request.path}")
    if not criteria:
        criteria.append("- All matching criteria provided")
    return "Cleared expectations and recorded requests matching:\n" + "\n".join(criteria)
