"""Bootstrap configuration — where MockServer lives and how long to wait.

Values come from, in increasing precedence: defaults, an optional YAML file,
then ``MOCKSERVER_*`` environment variables. Invalid environment values are
logged and replaced with defaults rather than aborting startup.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError

from mockserver_mcp.errors import ConfigurationError
from mockserver_mcp.mockserver.client import DEFAULT_TIMEOUT_MS, MockServerClient

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 1080

ENV_HOST = "MOCKSERVER_HOST"
ENV_PORT = "MOCKSERVER_PORT"
ENV_TIMEOUT = "MOCKSERVER_TIMEOUT"


class TelemetrySettings(BaseModel):
    """Optional telemetry configuration."""

    enabled: bool = False
    otlp_endpoint: str | None = None


class MockServerSettings(BaseModel):
    """Connection settings for the MockServer instance."""

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0, description="Milliseconds")
    telemetry: TelemetrySettings = Field(default_factory=TelemetrySettings)

    @classmethod
    def from_env(
        cls,
        env: dict[str, str] | None = None,
        base: MockServerSettings | None = None,
    ) -> MockServerSettings:
        """Overlay ``MOCKSERVER_*`` variables from *env* onto *base*."""
        env = dict(os.environ) if env is None else env
        settings = base or cls()
        updates: dict[str, Any] = {}

        host = env.get(ENV_HOST)
        if host:
            updates["host"] = host

        port = _parse_int(env.get(ENV_PORT), ENV_PORT, low=1, high=65535)
        if port is not None:
            updates["port"] = port
        elif env.get(ENV_PORT):
            updates["port"] = DEFAULT_PORT

        timeout = _parse_int(env.get(ENV_TIMEOUT), ENV_TIMEOUT, low=1)
        if timeout is not None:
            updates["timeout"] = timeout
        elif env.get(ENV_TIMEOUT):
            updates["timeout"] = DEFAULT_TIMEOUT_MS

        return settings.model_copy(update=updates)

    @property
    def base_url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def create_client(self) -> MockServerClient:
        return MockServerClient(self.host, self.port, self.timeout)


def load_settings(path: Path) -> MockServerSettings:
    """Read a YAML settings file.

    Environment variables in the form ``${VAR}`` or ``$VAR`` are expanded
    before parsing.

    Raises:
        ConfigurationError: On read, YAML or validation errors.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read {path}: {exc}") from exc

    try:
        data: Any = yaml.safe_load(os.path.expandvars(raw))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"YAML parse error: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings YAML must be a mapping")

    try:
        return MockServerSettings.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(str(exc)) from exc


def _parse_int(value: str | None, name: str, *, low: int, high: int | None = None) -> int | None:
    """Parse an integer variable; warn and return ``None`` when invalid."""
    if not value:
        return None
    try:
        number = int(value)
    except ValueError:
        logger.warning("Invalid %s: %r. Using default.", name, value)
        return None
    if number < low or (high is not None and number > high):
        logger.warning("Invalid %s: %r (out of range). Using default.", name, value)
        return None
    return number
