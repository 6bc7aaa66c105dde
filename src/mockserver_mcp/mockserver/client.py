"""MockServerClient — translates operations into MockServer REST calls.

Every public operation funnels through :meth:`MockServerClient._request`,
which owns the timeout and classifies each failure into exactly one
:class:`~mockserver_mcp.errors.ToolError` subclass.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

import httpx
from pydantic import ValidationError

from mockserver_mcp.errors import (
    ConnectionFailedError,
    ConnectionTimeoutError,
    MockServerError,
    ToolError,
    UnknownError,
    VerificationFailedError,
)
from mockserver_mcp.mockserver.models import (
    Expectation,
    RecordedRequest,
    RequestMatcher,
    ServerStatus,
    VerificationResult,
    VerificationTimes,
    to_wire,
)
from mockserver_mcp.utils.telemetry import (
    ATTR_BASE_URL,
    ATTR_ERROR_CODE,
    ATTR_HTTP_METHOD,
    ATTR_HTTP_PATH,
    ATTR_HTTP_STATUS,
    get_tracer,
)

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

DEFAULT_TIMEOUT_MS = 5000
VERIFICATION_FAILED_STATUS = 406


class MockServerClient:
    """Client for the MockServer REST API.

    Holds configuration only; no connection is opened until an operation is
    awaited, and each operation uses its own short-lived HTTP client.

    Usage::

        client = MockServerClient("localhost", 1080)
        await client.create_expectation(expectation)
        result = await client.verify(RequestMatcher(path="/test"))
    """

    def __init__(
        self,
        host: str,
        port: int,
        timeout: int | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._host = host
        self._port = port
        self._base_url = f"http://{host}:{port}"
        self._timeout = timeout if timeout is not None else DEFAULT_TIMEOUT_MS
        self._transport = transport

    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> int:
        """Timeout budget per call, in milliseconds."""
        return self._timeout

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def create_expectation(self, expectation: Expectation) -> None:
        """Install *expectation* on MockServer."""
        await self._request("/mockserver/expectation", "PUT", to_wire(expectation))

    async def verify(
        self,
        request: RequestMatcher,
        times: VerificationTimes | None = None,
    ) -> VerificationResult:
        """Check that requests matching *request* were received.

        A 406 from MockServer is a negative result, not an error. On success
        the matched count is taken from *times* (``exactly``, else
        ``at_least``, else 1) because MockServer does not return one.
        """
        body: dict[str, Any] = {"httpRequest": to_wire(request)}
        if times is not None:
            body["times"] = to_wire(times)

        try:
            await self._request("/mockserver/verify", "PUT", body)
        except VerificationFailedError as exc:
            return VerificationResult(success=False, matched_count=0, message=exc.message)

        matched = 1
        if times is not None:
            if times.exactly is not None:
                matched = times.exactly
            elif times.at_least is not None:
                matched = times.at_least
        return VerificationResult(success=True, matched_count=matched)

    async def clear(self, request: RequestMatcher | None = None) -> None:
        """Clear expectations and recorded requests, all of them if *request* is None."""
        body = {"httpRequest": to_wire(request)} if request is not None else {}
        await self._request("/mockserver/clear", "PUT", body)

    async def reset(self) -> None:
        """Clear every expectation and all recorded requests."""
        await self._request("/mockserver/reset", "PUT", {})

    async def retrieve_recorded_requests(
        self, request: RequestMatcher | None = None
    ) -> list[RecordedRequest]:
        """Return requests MockServer recorded, optionally filtered by *request*."""
        body = {"httpRequest": to_wire(request)} if request is not None else {}
        response = await self._request(
            "/mockserver/retrieve", "PUT", body, query_params={"type": "REQUESTS"}
        )
        if not isinstance(response, list):
            return []
        try:
            return [RecordedRequest.model_validate(item) for item in response]
        except ValidationError as exc:
            logger.warning("Unreadable recorded requests from %s: %s", self._base_url, exc)
            msg = f"Unexpected error: malformed recorded request ({exc.error_count()} error(s))"
            raise UnknownError(msg, {"host": self._base_url}) from exc

    async def get_status(self) -> ServerStatus:
        """Probe MockServer. Connection failures and timeouts mean unreachable."""
        try:
            response = await self._request("/mockserver/status", "PUT", {})
        except (ConnectionFailedError, ConnectionTimeoutError) as exc:
            logger.info("MockServer at %s is unreachable: %s", self._base_url, exc.message)
            return ServerStatus(host=self._host, port=self._port, reachable=False)

        version = response.get("version") if isinstance(response, dict) else None
        return ServerStatus(
            host=self._host,
            port=self._port,
            reachable=True,
            version=str(version) if version is not None else None,
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    async def _request(
        self,
        path: str,
        method: str,
        body: Any,
        query_params: dict[str, str] | None = None,
    ) -> Any:
        """Perform one exchange and translate its outcome.

        Returns parsed JSON, raw text when the body is not JSON, or ``{}``
        for an empty body. Raises a :class:`ToolError` subclass otherwise.
        """
        with _tracer.start_as_current_span("mockserver.request") as span:
            span.set_attribute(ATTR_HTTP_METHOD, method)
            span.set_attribute(ATTR_HTTP_PATH, path)
            span.set_attribute(ATTR_BASE_URL, self._base_url)
            try:
                response = await asyncio.wait_for(
                    self._send(path, method, body, query_params),
                    timeout=self._timeout / 1000,
                )
                span.set_attribute(ATTR_HTTP_STATUS, response.status_code)
                return self._interpret(response)
            except ToolError as exc:
                span.set_attribute(ATTR_ERROR_CODE, exc.code.value)
                raise
            except Exception as exc:
                error = self._classify(exc)
                span.set_attribute(ATTR_ERROR_CODE, error.code.value)
                raise error from exc

    async def _send(
        self,
        path: str,
        method: str,
        body: Any,
        query_params: dict[str, str] | None,
    ) -> httpx.Response:
        logger.debug("%s %s%s params=%s", method, self._base_url, path, query_params)
        async with httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout / 1000,
            transport=self._transport,
        ) as http:
            return await http.request(
                method,
                path,
                params=query_params,
                headers={"Content-Type": "application/json"},
                content=json.dumps(body if body is not None else {}),
            )

    @staticmethod
    def _interpret(response: httpx.Response) -> Any:
        if not response.is_success:
            # Undecodable bytes are replaced, so a read body always yields text.
            text = response.text
            if response.status_code == VERIFICATION_FAILED_STATUS:
                raise VerificationFailedError(
                    f"Verification failed: {text}", response.status_code, text
                )
            raise MockServerError(f"MockServer error: {text}", response.status_code, text)

        text = response.text
        if not text:
            return {}
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            return text

    def _classify(self, exc: Exception) -> ToolError:
        """Map a transport-level exception onto the failure taxonomy."""
        # TimeoutError subclasses OSError, so it must be checked first.
        if isinstance(exc, (TimeoutError, httpx.TimeoutException)):
            logger.warning("MockServer call to %s timed out", self._base_url)
            return ConnectionTimeoutError(self._base_url, self._timeout)
        if isinstance(exc, (httpx.NetworkError, httpx.ProxyError, OSError)):
            logger.warning("Cannot connect to MockServer at %s: %s", self._base_url, exc)
            return ConnectionFailedError(
                f"Cannot connect to MockServer at {self._base_url}",
                {"host": self._base_url, "originalError": str(exc)},
            )
        logger.exception("Unexpected error calling MockServer at %s", self._base_url)
        return UnknownError(f"Unexpected error: {exc}", {"host": self._base_url})
