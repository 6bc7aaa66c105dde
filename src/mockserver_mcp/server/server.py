"""MCPServer — serves the MockServer tools over JSON-RPC.

Handles the ``initialize`` handshake, ``tools/list`` and ``tools/call``.
Tool failures are reported as ``isError`` results, never as JSON-RPC errors,
so a single bad call cannot end the session.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from mockserver_mcp import __version__
from mockserver_mcp.errors import ToolError
from mockserver_mcp.server.models import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    CallToolParams,
    CallToolResult,
    JsonRpcRequest,
    JsonRpcResponse,
)
from mockserver_mcp.tools import TOOLS
from mockserver_mcp.utils.telemetry import ATTR_ERROR_CODE, ATTR_TOOL_NAME, get_tracer

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.client import MockServerClient
    from mockserver_mcp.server.transport import ServerTransport
    from mockserver_mcp.tools.base import RegisteredTool

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

SERVER_NAME = "mockserver-mcp"
SUPPORTED_PROTOCOL_VERSIONS = ("2024-11-05", "2025-03-26", "2025-06-18")
LATEST_PROTOCOL_VERSION = SUPPORTED_PROTOCOL_VERSIONS[-1]


class MCPServer:
    """Routes JSON-RPC requests to the registered tools.

    Usage::

        server = MCPServer(MockServerClient("localhost", 1080))
        await server.serve(StdioServerTransport())
    """

    def __init__(
        self,
        client: MockServerClient,
        tools: list[RegisteredTool] | None = None,
        *,
        name: str = SERVER_NAME,
        version: str = __version__,
    ) -> None:
        self._client = client
        self._tools: dict[str, RegisteredTool] = {t.name: t for t in (tools or TOOLS)}
        self._name = name
        self._version = version

    @property
    def client(self) -> MockServerClient:
        return self._client

    async def serve(self, transport: ServerTransport) -> None:
        """Process messages from *transport* until it reports end of input."""
        logger.info(
            "MCP server %s %s ready (MockServer at %s)",
            self._name,
            self._version,
            self._client.base_url,
        )
        while True:
            raw = await transport.receive()
            if raw is None:
                logger.info("Input closed, shutting down")
                return
            response = await self.handle_raw(raw)
            if response is not None:
                await transport.send(response)

    async def handle_raw(self, raw: str) -> dict[str, Any] | None:
        """Decode one line and handle it. Returns the wire response, if any."""
        try:
            data: Any = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Discarding malformed message: %s", exc)
            return JsonRpcResponse.failure(None, PARSE_ERROR, f"Parse error: {exc}").to_message()
        return await self.handle_message(data)

    async def handle_message(self, data: Any) -> dict[str, Any] | None:
        """Handle one decoded JSON-RPC message."""
        request_id = data.get("id") if isinstance(data, dict) else None
        try:
            request = JsonRpcRequest.model_validate(data)
        except ValidationError as exc:
            return JsonRpcResponse.failure(
                request_id, INVALID_REQUEST, f"Invalid request: {exc}"
            ).to_message()

        if request.is_notification:
            logger.debug("Notification %s", request.method)
            return None

        response = await self._dispatch(request)
        return response.to_message()

    async def _dispatch(self, request: JsonRpcRequest) -> JsonRpcResponse:
        method = request.method
        if method == "initialize":
            return JsonRpcResponse(id=request.id, result=self._initialize(request.params))
        if method == "ping":
            return JsonRpcResponse(id=request.id, result={})
        if method == "tools/list":
            return JsonRpcResponse(id=request.id, result={"tools": self.list_tools()})
        if method == "tools/call":
            try:
                params = CallToolParams.model_validate(request.params)
            except ValidationError as exc:
                return JsonRpcResponse.failure(
                    request.id, INVALID_PARAMS, f"Invalid params: {exc}"
                )
            result = await self.call_tool(params.name, params.arguments or {})
            return JsonRpcResponse(id=request.id, result=result.model_dump(by_alias=True))
        return JsonRpcResponse.failure(request.id, METHOD_NOT_FOUND, f"Method not found: {method}")

    def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        requested = params.get("protocolVersion")
        version = requested if requested in SUPPORTED_PROTOCOL_VERSIONS else LATEST_PROTOCOL_VERSION
        client_info = params.get("clientInfo") or {}
        logger.info("Initialize from %s (protocol %s)", client_info.get("name", "unknown"), version)
        return {
            "protocolVersion": version,
            "capabilities": {"tools": {}},
            "serverInfo": {"name": self._name, "version": self._version},
        }

    def list_tools(self) -> list[dict[str, Any]]:
        """Tool definitions in ``tools/list`` wire form."""
        return [t.definition.model_dump(by_alias=True) for t in self._tools.values()]

    async def call_tool(self, name: str, arguments: dict[str, Any]) -> CallToolResult:
        """Run the named tool. Every failure becomes an ``isError`` result."""
        tool = self._tools.get(name)
        if tool is None:
            return CallToolResult.from_text(f"Unknown tool: {name}", is_error=True)

        with _tracer.start_as_current_span("mockserver.tool") as span:
            span.set_attribute(ATTR_TOOL_NAME, name)
            try:
                text = await tool.handler(self._client, arguments)
            except ToolError as exc:
                span.set_attribute(ATTR_ERROR_CODE, exc.code.value)
                logger.warning("Tool %s failed [%s]: %s", name, exc.code.value, exc.message)
                return CallToolResult.from_text(
                    f"Error executing {name}: {exc.message}", is_error=True
                )
            except Exception as exc:
                logger.exception("Tool %s raised unexpectedly", name)
                return CallToolResult.from_text(f"Error executing {name}: {exc}", is_error=True)
        return CallToolResult.from_text(text)
