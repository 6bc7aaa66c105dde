"""MCP server models — JSON-RPC 2.0 messages and tool payloads.

Covers the subset of the Model Context Protocol a tools-only server needs:
``initialize``, ``tools/list`` and ``tools/call``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# JSON-RPC 2.0 envelope
# ---------------------------------------------------------------------------

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602


class JsonRpcRequest(BaseModel):
    """A JSON-RPC 2.0 request. Without an ``id`` it is a notification."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    id: int | str | None = None
    params: dict[str, Any] = {}

    @property
    def is_notification(self) -> bool:
        return self.id is None


class JsonRpcError(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class JsonRpcResponse(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: str = "2.0"
    id: int | str | None = None
    result: dict[str, Any] | None = None
    error: JsonRpcError | None = None

    def to_message(self) -> dict[str, Any]:
        """Wire form: ``id`` always present, exactly one of result/error."""
        message: dict[str, Any] = {"jsonrpc": self.jsonrpc, "id": self.id}
        if self.error is not None:
            message["error"] = self.error.model_dump(exclude_none=True)
        else:
            message["result"] = self.result if self.result is not None else {}
        return message

    @classmethod
    def failure(
        cls, request_id: int | str | None, code: int, message: str, data: Any = None
    ) -> JsonRpcResponse:
        return cls(id=request_id, error=JsonRpcError(code=code, message=message, data=data))


# ---------------------------------------------------------------------------
# MCP-specific payloads
# ---------------------------------------------------------------------------


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class CallToolParams(BaseModel):
    """Parameters of a ``tools/call`` request."""

    name: str
    arguments: dict[str, Any] | None = None


class CallToolResult(BaseModel):
    """Result of a ``tools/call`` request."""

    model_config = {"populate_by_name": True}

    content: list[TextContent] = []
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def from_text(cls, text: str, *, is_error: bool = False) -> CallToolResult:
        return cls(content=[TextContent(text=text)], is_error=is_error)

    @property
    def text(self) -> str:
        return "\n".join(part.text for part in self.content)
