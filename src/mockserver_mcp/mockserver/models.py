"""MockServer models — REST API data structures.

Field names are snake_case in Python and camelCase on the wire. Serialize
with :func:`to_wire` so unset optional fields are omitted entirely.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field, model_validator

MultiValueMap = dict[str, list[str]]


class _WireModel(BaseModel):
    model_config = {"populate_by_name": True}


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Dump *model* with camelCase aliases and without unset fields."""
    return model.model_dump(by_alias=True, exclude_none=True)


# ---------------------------------------------------------------------------
# Request matching
# ---------------------------------------------------------------------------


class BodyMatcher(_WireModel):
    """Tagged body matcher. ``match_type`` is only meaningful for JSON."""

    type: Literal["STRING", "JSON", "REGEX", "XPATH", "JSON_PATH"]
    value: str
    match_type: Literal["STRICT", "ONLY_MATCHING_FIELDS"] | None = Field(
        default=None, alias="matchType"
    )

    @model_validator(mode="after")
    def _check_match_type(self) -> BodyMatcher:
        if self.match_type is not None and self.type != "JSON":
            msg = f"matchType is only supported for JSON bodies, not {self.type}"
            raise ValueError(msg)
        return self


class RequestMatcher(_WireModel):
    """Predicate over an inbound request. Absent fields match anything."""

    method: str | None = None
    path: str | None = None
    path_parameters: MultiValueMap | None = Field(default=None, alias="pathParameters")
    query_string_parameters: MultiValueMap | None = Field(
        default=None, alias="queryStringParameters"
    )
    headers: MultiValueMap | None = None
    body: BodyMatcher | None = None


# ---------------------------------------------------------------------------
# Expectations
# ---------------------------------------------------------------------------


class ResponseDelay(_WireModel):
    time_unit: Literal["MILLISECONDS", "SECONDS"] = Field(alias="timeUnit")
    value: int


class HttpResponse(_WireModel):
    """The response MockServer returns when an expectation matches."""

    status_code: int | None = Field(default=None, alias="statusCode")
    headers: MultiValueMap | None = None
    body: str | dict[str, Any] | None = None
    delay: ResponseDelay | None = None


class ExpectationTimes(_WireModel):
    remaining_times: int = Field(alias="remainingTimes")
    unlimited: bool


class TimeToLive(_WireModel):
    time_unit: Literal["MILLISECONDS", "SECONDS", "MINUTES"] = Field(alias="timeUnit")
    time_to_live: int = Field(alias="timeToLive")


class Expectation(_WireModel):
    """A request matcher paired with the response to serve."""

    id: str | None = None
    http_request: RequestMatcher = Field(alias="httpRequest")
    http_response: HttpResponse | None = Field(default=None, alias="httpResponse")
    times: ExpectationTimes | None = None
    time_to_live: TimeToLive | None = Field(default=None, alias="timeToLive")


# ---------------------------------------------------------------------------
# Verification
# ---------------------------------------------------------------------------


class VerificationTimes(_WireModel):
    """Count constraint for a verification. No fields means "at least one"."""

    at_least: int | None = Field(default=None, alias="atLeast")
    at_most: int | None = Field(default=None, alias="atMost")
    exactly: int | None = None


class VerificationResult(BaseModel):
    """Outcome of :meth:`MockServerClient.verify`.

    ``matched_count`` is derived from the requested count on success and is
    always 0 on failure; MockServer does not report an exact count.
    """

    success: bool
    matched_count: int
    message: str | None = None


# ---------------------------------------------------------------------------
# Retrieval and status
# ---------------------------------------------------------------------------


class RecordedRequest(_WireModel):
    """A request observed by MockServer."""

    model_config = {"populate_by_name": True, "extra": "allow"}

    method: str | None = None
    path: str | None = None
    path_parameters: dict[str, Any] | None = Field(default=None, alias="pathParameters")
    query_string_parameters: dict[str, Any] | None = Field(
        default=None, alias="queryStringParameters"
    )
    headers: dict[str, Any] | None = None
    body: Any = None
    timestamp: str | None = None


class ServerStatus(BaseModel):
    """Reachability of the configured MockServer, probed on every call."""

    host: str
    port: int
    reachable: bool
    version: str | None = None
