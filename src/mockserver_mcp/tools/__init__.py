"""MCP tools — one module per MockServer operation."""

from __future__ import annotations

from mockserver_mcp.tools.base import RegisteredTool, ToolDefinition, ToolHandler
from mockserver_mcp.tools.clear import clear_tool, handle_clear
from mockserver_mcp.tools.create_expectation import (
    create_expectation_tool,
    handle_create_expectation,
)
from mockserver_mcp.tools.reset import handle_reset, reset_tool
from mockserver_mcp.tools.retrieve_requests import (
    handle_retrieve_requests,
    retrieve_requests_tool,
)
from mockserver_mcp.tools.status import handle_status, status_tool
from mockserver_mcp.tools.verify import handle_verify, verify_tool

TOOLS: list[RegisteredTool] = [
    RegisteredTool(create_expectation_tool, handle_create_expectation),
    RegisteredTool(verify_tool, handle_verify),
    RegisteredTool(clear_tool, handle_clear),
    RegisteredTool(reset_tool, handle_reset),
    RegisteredTool(retrieve_requests_tool, handle_retrieve_requests),
    RegisteredTool(status_tool, handle_status),
]

_BY_NAME = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> RegisteredTool | None:
    """Look up a registered tool by name."""
    return _BY_NAME.get(name)


__all__ = [
    "TOOLS",
    "RegisteredTool",
    "ToolDefinition",
    "ToolHandler",
    "get_tool",
]
