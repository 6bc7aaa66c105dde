"""MCP server — exposes the MockServer tools over JSON-RPC."""

from mockserver_mcp.server.models import (
    CallToolResult,
    JsonRpcError,
    JsonRpcRequest,
    JsonRpcResponse,
)
from mockserver_mcp.server.server import MCPServer
from mockserver_mcp.server.transport import ServerTransport, StdioServerTransport

__all__ = [
    "CallToolResult",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "MCPServer",
    "ServerTransport",
    "StdioServerTransport",
]
