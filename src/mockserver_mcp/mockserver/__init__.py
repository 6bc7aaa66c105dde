"""MockServer REST client and data model."""

from mockserver_mcp.mockserver.client import DEFAULT_TIMEOUT_MS, MockServerClient
from mockserver_mcp.mockserver.models import (
    BodyMatcher,
    Expectation,
    ExpectationTimes,
    HttpResponse,
    RecordedRequest,
    RequestMatcher,
    ResponseDelay,
    ServerStatus,
    TimeToLive,
    VerificationResult,
    VerificationTimes,
)

__all__ = [
    "DEFAULT_TIMEOUT_MS",
    "BodyMatcher",
    "Expectation",
    "ExpectationTimes",
    "HttpResponse",
    "MockServerClient",
    "RecordedRequest",
    "RequestMatcher",
    "ResponseDelay",
    "ServerStatus",
    "TimeToLive",
    "VerificationResult",
    "VerificationTimes",
]
