"""``mockserver_verify`` — check that matching requests were received."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from mockserver_mcp.mockserver.models import RequestMatcher, VerificationTimes
from mockserver_mcp.tools.base import define_tool, describe_matcher, validate_arguments

if TYPE_CHECKING:
    from mockserver_mcp.mockserver.client import MockServerClient


class VerifyInput(BaseModel):
    model_config = {"populate_by_name": True}

    http_request: RequestMatcher = Field(alias="httpRequest")
    times: VerificationTimes | None = None


verify_tool = define_tool(
    "mockserver_verify",
    "Verify that requests matching criteria were received by MockServer. "
    "Returns verification result with match count.",
    VerifyInput,
)


def describe_times(times: VerificationTimes | None) -> str:
    """Human-readable form of a count constraint."""
    if times is None:
        return "at least 1"
    if times.exactly is not None:
        return f"exactly {times.exactly}"
    if times.at_least is not None and times.at_most is not None:
        return f"between {times.at_least} and {times.at_most}"
    if times.at_least is not None:
        return f"at least {times.at_least}"
    if times.at_most is not None:
        return f"at most {times.at_most}"
    return "any number of"


async def handle_verify(client: MockServerClient, arguments: dict[str, Any]) -> str:
    params = validate_arguments(VerifyInput, arguments)
    result = await client.verify(params.http_request, params.times)

    verdict = "PASSED" if result.success else "FAILED"
    text = (
        f"Verification {verdict}.\n\n"
        f"Expected: {describe_times(params.times)} request(s)\n"
        f"Matched: {result.matched_count} request(s)\n\n"
        f"Criteria:\n{describe_matcher(params.http_request)}"
    )
    if not result.success and result.message:
        text += f"\n\nDetails: {result.message}"
    return text
