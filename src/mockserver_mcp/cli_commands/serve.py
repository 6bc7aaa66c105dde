"""``mockserver-mcp serve`` — run the MCP server on stdio."""

from __future__ import annotations

import asyncio
import logging

import click

from mockserver_mcp.cli_commands._output import fail
from mockserver_mcp.config import MockServerSettings

logger = logging.getLogger(__name__)


@click.command()
@click.option("--telemetry", is_flag=True, help="Enable OpenTelemetry tracing.")
@click.option("--otlp-endpoint", default=None, help="OTLP/gRPC endpoint for spans.")
@click.pass_obj
def serve(settings: MockServerSettings, telemetry: bool, otlp_endpoint: str | None) -> None:
    """Serve the MockServer tools over MCP (JSON-RPC on stdin/stdout)."""
    from mockserver_mcp.server.server import MCPServer
    from mockserver_mcp.server.transport import StdioServerTransport

    endpoint = otlp_endpoint or settings.telemetry.otlp_endpoint
    if telemetry or settings.telemetry.enabled:
        from mockserver_mcp.utils.telemetry import configure_telemetry

        try:
            configure_telemetry(export_to_console=False, otlp_endpoint=endpoint)
        except ImportError as exc:
            fail(str(exc))

    server = MCPServer(settings.create_client())
    try:
        asyncio.run(server.serve(StdioServerTransport()))
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
