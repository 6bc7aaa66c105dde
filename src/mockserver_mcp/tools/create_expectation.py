"""``mockserver_create_expectation`` — install a mock response."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mockserver_mcp.mockserver.models import Expectation
from mockserver_mcp.tools.base import define_tool, validate_arguments

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.client import MockServerClient

create_expectation_tool = define_tool(
    "mockserver_create_expectation",
    "Create a mock HTTP expectation on MockServer. "
    "Define request matching criteria and the response to return.",
    Expectation,
)


async def handle_create_expectation(client: MockServerClient, arguments: dict[str, Any]) -> str:
    expectation = validate_arguments(Expectation, arguments)
    await client.create_expectation(expectation)

    request = expectation.http_request
    status_code = 200
    if expectation.http_response is not None and expectation.http_response.status_code is not None:
        status_code = expectation.http_response.status_code

    lines = [
        "Expectation created successfully.",
        "",
        "Details:",
        f"- Method: {request.method or 'ANY'}",
        f"- Path: {request.path or '/*'}",
        f"- Response Status: {status_code}",
    ]
    if expectation.id:
        lines.append(f"- ID: {expectation.id}")
    return "\n".join(lines)
