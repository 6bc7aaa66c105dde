"""Tests for server JSON-RPC models."""

from mockserver_mcp.server.models import (
    METHOD_NOT_FOUND,
    CallToolResult,
    JsonRpcRequest,
    JsonRpcResponse,
)


class TestJsonRpcRequest:
    def test_notification(self) -> None:
        assert JsonRpcRequest(method="notifications/initialized").is_notification

    def test_request(self) -> None:
        req = JsonRpcRequest(method="tools/list", id=0)
        assert not req.is_notification
        assert req.params == {}


class TestJsonRpcResponse:
    def test_result_message(self) -> None:
        assert JsonRpcResponse(id=1, result={"ok": True}).to_message() == {
            "jsonrpc": "2.0",
            "id": 1,
            "result": {"ok": True},
        }

    def test_failure_message(self) -> None:
        message = JsonRpcResponse.failure("a", METHOD_NOT_FOUND, "nope").to_message()
        assert message == {
            "jsonrpc": "2.0",
            "id": "a",
            "error": {"code": METHOD_NOT_FOUND, "message": "nope"},
        }


class TestCallToolResult:
    def test_wire_shape(self) -> None:
        result = CallToolResult.from_text("hello", is_error=True)
        assert result.model_dump(by_alias=True) == {
            "content": [{"type": "text", "text": "hello"}],
            "isError": True,
        }
