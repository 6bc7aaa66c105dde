"""MockServer MCP — expose a MockServer instance as MCP tools."""

from __future__ import annotations

__version__ = "1.0.0"
