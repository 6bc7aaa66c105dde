"""OpenTelemetry tracing helpers.

Modules call ``get_tracer(__name__)`` and open spans around remote calls and
tool invocations. Until :func:`configure_telemetry` installs an SDK provider,
the API hands out no-op tracers.

Usage::

    from mockserver_mcp.utils.telemetry import get_tracer

    _tracer = get_tracer(__name__)

    with _tracer.start_as_current_span("mockserver.request") as span:
        span.set_attribute(ATTR_HTTP_PATH, "/mockserver/reset")

Real tracing requires the ``otel`` extra: ``pip install mockserver-mcp[otel]``.
"""

from __future__ import annotations

from typing import Any

from opentelemetry import trace

# ---------------------------------------------------------------------------
# Semantic attribute keys
# ---------------------------------------------------------------------------

ATTR_HTTP_METHOD = "mockserver.http.method"
ATTR_HTTP_PATH = "mockserver.http.path"
ATTR_HTTP_STATUS = "mockserver.http.status_code"
ATTR_BASE_URL = "mockserver.base_url"
ATTR_ERROR_CODE = "mockserver.error.code"
ATTR_TOOL_NAME = "mockserver.tool.name"

_INSTRUMENTATION_NAME = "mockserver_mcp"


def get_tracer(name: str | None = None) -> trace.Tracer:
    """Return a :class:`~opentelemetry.trace.Tracer` for *name*."""
    return trace.get_tracer(name or _INSTRUMENTATION_NAME)


def configure_telemetry(
    *,
    service_name: str = "mockserver-mcp",
    export_to_console: bool = False,
    otlp_endpoint: str | None = None,
) -> None:
    """Install an SDK tracer provider (requires ``mockserver-mcp[otel]``).

    Parameters
    ----------
    service_name:
        The ``service.name`` resource attribute.
    export_to_console:
        If ``True``, export spans as JSON. The MCP server owns stdout, so
        ``serve`` leaves this off.
    otlp_endpoint:
        If set, export spans via OTLP/gRPC to this endpoint.

    Raises
    ------
    ImportError
        If the ``opentelemetry-sdk`` package is not installed.
    """
    try:
        from opentelemetry.sdk.resources import Resource  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace import TracerProvider  # pyright: ignore[reportMissingImports]
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, SimpleSpanProcessor  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = (
            "opentelemetry-sdk is required for configure_telemetry(). "
            "Install it with: pip install mockserver-mcp[otel]"
        )
        raise ImportError(msg) from exc

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)

    if export_to_console:
        _add_console_exporter(provider, SimpleSpanProcessor)

    if otlp_endpoint:
        _add_otlp_exporter(provider, BatchSpanProcessor, otlp_endpoint)

    trace.set_tracer_provider(provider)


def _add_console_exporter(provider: Any, processor_cls: Any) -> None:
    from opentelemetry.sdk.trace.export import ConsoleSpanExporter  # pyright: ignore[reportMissingImports]

    provider.add_span_processor(processor_cls(ConsoleSpanExporter()))


def _add_otlp_exporter(provider: Any, processor_cls: Any, endpoint: str) -> None:
    try:
        from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter  # pyright: ignore[reportMissingImports]
    except ImportError as exc:
        msg = (
            "opentelemetry-exporter-otlp is required for OTLP export. "
            "Install it with: pip install mockserver-mcp[otel]"
        )
        raise ImportError(msg) from exc

    provider.add_span_processor(processor_cls(OTLPSpanExporter(endpoint=endpoint)))
