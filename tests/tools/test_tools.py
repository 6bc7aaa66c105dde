"""Tests for the MCP tool handlers with a mocked client."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from mockserver_mcp.errors import ConnectionFailedError, ErrorCode, InvalidParametersError
from mockserver_mcp.mockserver.models import (
    Expectation,
    RecordedRequest,
    RequestMatcher,
    ServerStatus,
    VerificationResult,
    VerificationTimes,
)
from mockserver_mcp.tools import TOOLS, get_tool
from mockserver_mcp.tools.clear import handle_clear
from mockserver_mcp.tools.create_expectation import handle_create_expectation
from mockserver_mcp.tools.reset import handle_reset
from mockserver_mcp.tools.retrieve_requests import handle_retrieve_requests
from mockserver_mcp.tools.status import handle_status
from mockserver_mcp.tools.verify import describe_times, handle_verify


def _make_client() -> MagicMock:
    client = MagicMock()
    client.create_expectation = AsyncMock(return_value=None)
    client.verify = AsyncMock(return_value=VerificationResult(success=True, matched_count=1))
    client.clear = AsyncMock(return_value=None)
    client.reset = AsyncMock(return_value=None)
    client.retrieve_recorded_requests = AsyncMock(return_value=[])
    client.get_status = AsyncMock(
        return_value=ServerStatus(host="localhost", port=1080, reachable=True, version="5.15.0")
    )
    return client


class TestRegistry:
    def test_six_tools(self) -> None:
        assert [t.name for t in TOOLS] == [
            "mockserver_create_expectation",
            "mockserver_verify",
            "mockserver_clear",
            "mockserver_reset",
            "mockserver_retrieve_requests",
            "mockserver_status",
        ]

    def test_get_tool(self) -> None:
        tool = get_tool("mockserver_reset")
        assert tool is not None
        assert tool.handler is handle_reset
        assert get_tool("nope") is None

    def test_schemas_are_objects(self) -> None:
        for tool in TOOLS:
            assert tool.definition.input_schema["type"] == "object"
            assert tool.definition.description

    def test_required_http_request(self) -> None:
        create = get_tool("mockserver_create_expectation")
        verify = get_tool("mockserver_verify")
        clear = get_tool("mockserver_clear")
        assert create is not None and verify is not None and clear is not None
        assert "httpRequest" in create.definition.input_schema["required"]
        assert "httpRequest" in verify.definition.input_schema["required"]
        assert "httpRequest" not in clear.definition.input_schema.get("required", [])

    def test_wire_shape_uses_input_schema_alias(self) -> None:
        dumped = TOOLS[0].definition.model_dump(by_alias=True)
        assert set(dumped) == {"name", "description", "inputSchema"}


class TestCreateExpectation:
    async def test_creates_and_summarizes(self) -> None:
        client = _make_client()
        text = await handle_create_expectation(
            client,
            {
                "id": "exp-1",
                "httpRequest": {"method": "GET", "path": "/test"},
                "httpResponse": {"statusCode": 201, "body": "OK"},
            },
        )
        expectation = client.create_expectation.await_args.args[0]
        assert isinstance(expectation, Expectation)
        assert expectation.http_request.path == "/test"
        assert "Expectation created successfully." in text
        assert "- Method: GET" in text
        assert "- Path: /test" in text
        assert "- Response Status: 201" in text
        assert "- ID: exp-1" in text

    async def test_defaults_in_summary(self) -> None:
        client = _make_client()
        text = await handle_create_expectation(client, {"httpRequest": {}})
        assert "- Method: ANY" in text
        assert "- Path: /*" in text
        assert "- Response Status: 200" in text
        assert "ID" not in text

    async def test_missing_http_request(self) -> None:
        client = _make_client()
        with pytest.raises(InvalidParametersError) as exc_info:
            await handle_create_expectation(client, {"httpResponse": {"statusCode": 200}})
        err = exc_info.value
        assert err.code is ErrorCode.INVALID_PARAMETERS
        assert err.message.startswith("Invalid parameters:")
        assert err.details["errors"]
        client.create_expectation.assert_not_awaited()

    async def test_client_errors_propagate(self) -> None:
        client = _make_client()
        client.create_expectation.side_effect = ConnectionFailedError("Cannot connect")
        with pytest.raises(ConnectionFailedError):
            await handle_create_expectation(client, {"httpRequest": {"path": "/x"}})


class TestVerify:
    async def test_passed(self) -> None:
        client = _make_client()
        client.verify.return_value = VerificationResult(success=True, matched_count=3)
        text = await handle_verify(
            client, {"httpRequest": {"method": "GET", "path": "/a"}, "times": {"exactly": 3}}
        )
        request, times = client.verify.await_args.args
        assert request == RequestMatcher(method="GET", path="/a")
        assert times == VerificationTimes(exactly=3)
        assert text.startswith("Verification PASSED.")
        assert "Expected: exactly 3 request(s)" in text
        assert "Matched: 3 request(s)" in text
        assert "- Method: GET" in text

    async def test_failed_includes_details(self) -> None:
        client = _make_client()
        client.verify.return_value = VerificationResult(
            success=False, matched_count=0, message="Verification failed: Request not matched"
        )
        text = await handle_verify(client, {"httpRequest": {"path": "/a"}})
        assert text.startswith("Verification FAILED.")
        assert "Expected: at least 1 request(s)" in text
        assert "Matched: 0 request(s)" in text
        assert "Details: Verification failed: Request not matched" in text

    async def test_requires_http_request(self) -> None:
        with pytest.raises(InvalidParametersError):
            await handle_verify(_make_client(), {})

    @pytest.mark.parametrize(
        ("times", "expected"),
        [
            (None, "at least 1"),
            (VerificationTimes(exactly=2), "exactly 2"),
            (VerificationTimes(atLeast=1, atMost=3), "between 1 and 3"),
            (VerificationTimes(atLeast=4), "at least 4"),
            (VerificationTimes(atMost=0), "at most 0"),
            (VerificationTimes(), "any number of"),
        ],
    )
    def test_describe_times(self, times: VerificationTimes | None, expected: str) -> None:
        assert describe_times(times) == expected


class TestClear:
    async def test_clear_all(self) -> None:
        client = _make_client()
        text = await handle_clear(client, {})
        client.clear.assert_awaited_once_with(None)
        assert text == "Cleared all expectations and recorded requests from MockServer."

    async def test_clear_matching(self) -> None:
        client = _make_client()
        text = await handle_clear(client, {"httpRequest": {"method": "DELETE", "path": "/x"}})
        client.clear.assert_awaited_once_with(RequestMatcher(method="DELETE", path="/x"))
        assert "- Method: DELETE" in text
        assert "- Path: /x" in text

    async def test_clear_other_criteria(self) -> None:
        client = _make_client()
        text = await handle_clear(client, {"httpRequest": {"headers": {"X-Id": ["1"]}}})
        assert "- All matching criteria provided" in text


class TestReset:
    async def test_reset(self) -> None:
        client = _make_client()
        text = await handle_reset(client, {})
        client.reset.assert_awaited_once()
        assert "fully reset" in text


class TestRetrieveRequests:
    async def test_none_recorded(self) -> None:
        text = await handle_retrieve_requests(_make_client(), {})
        assert text == "No recorded requests found."

    async def test_none_matching(self) -> None:
        text = await handle_retrieve_requests(_make_client(), {"httpRequest": {"path": "/a"}})
        assert text == "No recorded requests found matching criteria (ANY /a)."

    async def test_lists_requests(self) -> None:
        client = _make_client()
        client.retrieve_recorded_requests.return_value = [
            RecordedRequest.model_validate({
                "method": "GET",
                "path": "/users",
                "timestamp": "2024-01-01T00:00:00Z",
                "queryStringParameters": {"page": ["1"], "tag": ["a", "b"]},
            }),
            RecordedRequest.model_validate({}),
        ]
        text = await handle_retrieve_requests(client, {})
        assert text.startswith("Retrieved 2 recorded request(s):")
        assert "1. GET /users" in text
        assert "   Timestamp: 2024-01-01T00:00:00Z" in text
        assert "   Query: page=1&tag=a,b" in text
        assert "2. UNKNOWN /" in text


class TestStatus:
    async def test_connected(self) -> None:
        text = await handle_status(_make_client(), {})
        assert "MockServer Status: ✓ Connected" in text
        assert "- Host: localhost" in text
        assert "- Port: 1080" in text
        assert "Version: 5.15.0" in text

    async def test_unreachable(self) -> None:
        client = _make_client()
        client.get_status.return_value = ServerStatus(host="h", port=1, reachable=False)
        text = await handle_status(client, {})
        assert "✗ Unreachable" in text
        assert "Version" not in text
