"""Tests for OpenTelemetry tracing helpers."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from opentelemetry import trace

from mockserver_mcp.utils.telemetry import (
    ATTR_HTTP_PATH,
    ATTR_TOOL_NAME,
    configure_telemetry,
    get_tracer,
)


class TestGetTracer:
    def test_returns_tracer(self) -> None:
        assert isinstance(get_tracer("test.module"), trace.Tracer)

    def test_default_name(self) -> None:
        assert isinstance(get_tracer(), trace.Tracer)

    def test_noop_span(self) -> None:
        with get_tracer("test.noop").start_as_current_span("test") as span:
            span.set_attribute(ATTR_HTTP_PATH, "/mockserver/status")


class TestConfigureTelemetry:
    def test_raises_without_sdk(self) -> None:
        with patch.dict("sys.modules", {"opentelemetry.sdk.resources": None}):
            with pytest.raises(ImportError, match="opentelemetry-sdk"):
                configure_telemetry()

    def test_otlp_raises_without_exporter(self) -> None:
        try:
            import opentelemetry.sdk.trace  # noqa: F401
        except ImportError:
            pytest.skip("opentelemetry-sdk not installed")

        original = trace.get_tracer_provider()
        with patch.dict(
            "sys.modules",
            {"opentelemetry.exporter.otlp.proto.grpc.trace_exporter": None},
        ):
            with pytest.raises(ImportError, match="opentelemetry-exporter-otlp"):
                configure_telemetry(otlp_endpoint="http://localhost:4317")
        assert trace.get_tracer_provider() is original


class TestAttributeConstants:
    def test_namespaced(self) -> None:
        assert ATTR_HTTP_PATH.startswith("mockserver.")
        assert ATTR_TOOL_NAME.startswith("mockserver.")
