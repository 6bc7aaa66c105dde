"""``mockserver_retrieve_requests`` — list requests MockServer recorded."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mockserver_mcp.tools.base import MatcherFilterInput, define_tool, validate_arguments

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.client import MockServerClient
    from mockserver_mcp.mockserver.models import RecordedRequest

retrieve_requests_tool = define_tool(
    "mockserver_retrieve_requests",
    "Retrieve recorded requests from MockServer. Optionally filter by request matcher.",
    MatcherFilterInput,
)


def format_recorded_request(index: int, request: RecordedRequest) -> str:
    """One numbered entry of the listing; *index* is 1-based."""
    parts = [f"{index}. {request.method or 'UNKNOWN'} {request.path or '/'}"]
    if request.timestamp:
        parts.append(f"   Timestamp: {request.timestamp}")
    if request.query_string_parameters:
        query = "&".join(
            f"{key}={','.join(map(str, values)) if isinstance(values, list) else values}"
            for key, values in request.query_string_parameters.items()
        )
        if query:
            parts.append(f"   Query: {query}")
    return "\n".join(parts)


async def handle_retrieve_requests(client: MockServerClient, arguments: dict[str, Any]) -> str:
    params = validate_arguments(MatcherFilterInput, arguments)
    matcher = params.http_request
    requests = await client.retrieve_recorded_requests(matcher)

    if not requests:
        filter_info = ""
        if matcher is not None:
            filter_info = f" matching criteria ({matcher.method or 'ANY'} {matcher.path or '/*'})"
        return f"No recorded requests found{filter_info}."

    summaries = [format_recorded_request(i, req) for i, req in enumerate(requests, start=1)]
    return f"Retrieved {len(requests)} recorded request(s):\n\n" + "\n\n".join(summaries)
