"""Failure taxonomy shared by the client, the tools and the server.

Every failure surfaced by this package is a :class:`ToolError`. The ``code``
class attribute is the discriminant callers branch on.
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Closed set of failure kinds."""

    CONNECTION_FAILED = "CONNECTION_FAILED"
    CONNECTION_TIMEOUT = "CONNECTION_TIMEOUT"
    MOCKSERVER_ERROR = "MOCKSERVER_ERROR"
    VERIFICATION_FAILED = "VERIFICATION_FAILED"
    INVALID_PARAMETERS = "INVALID_PARAMETERS"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class ToolError(Exception):
    """Base error for all tool and client failures."""

    code: ErrorCode = ErrorCode.UNKNOWN_ERROR

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


class ConnectionFailedError(ToolError):
    """MockServer could not be reached (refused, DNS failure, network error)."""

    code = ErrorCode.CONNECTION_FAILED


class ConnectionTimeoutError(ToolError):
    """The call was abandoned after exceeding the timeout budget."""

    code = ErrorCode.CONNECTION_TIMEOUT

    def __init__(self, base_url: str, timeout: int) -> None:
        self.timeout = timeout
        super().__init__(
            f"Connection to MockServer timed out after {timeout}ms",
            {"host": base_url},
        )


class MockServerError(ToolError):
    """MockServer answered with a non-success status."""

    code = ErrorCode.MOCKSERVER_ERROR

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(message, {"statusCode": status_code, "body": body})


class VerificationFailedError(MockServerError):
    """MockServer rejected a verification (HTTP 406)."""

    code = ErrorCode.VERIFICATION_FAILED


class InvalidParametersError(ToolError):
    """Tool arguments failed schema validation."""

    code = ErrorCode.INVALID_PARAMETERS


class UnknownError(ToolError):
    """Any failure without a network or timeout signature."""

    code = ErrorCode.UNKNOWN_ERROR


class ConfigurationError(Exception):
    """Raised when a settings file cannot be read or validated."""
