"""Shared building blocks for tool modules.

A tool is a :class:`ToolDefinition` (what ``tools/list`` advertises) plus an
async handler that validates raw arguments, calls the client and returns the
text shown to the caller.
"""

from __future__ import annotations

import json
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError

from mockserver_mcp.errors import InvalidParametersError
from mockserver_mcp.mockserver.client import MockServerClient
from mockserver_mcp.mockserver.models import RequestMatcher

ModelT = TypeVar("ModelT", bound=BaseModel)

ToolHandler = Callable[[MockServerClient, dict[str, Any]], Awaitable[str]]


class ToolDefinition(BaseModel):
    """A tool as advertised by ``tools/list``."""

    model_config = {"populate_by_name": True}

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")


@dataclass(frozen=True)
class RegisteredTool:
    definition: ToolDefinition
    handler: ToolHandler

    @property
    def name(self) -> str:
        return self.definition.name


class EmptyInput(BaseModel):
    """Input for tools that take no arguments."""


class MatcherFilterInput(BaseModel):
    """Input for tools that accept an optional request matcher."""

    model_config = {"populate_by_name": True}

    http_request: RequestMatcher | None = Field(default=None, alias="httpRequest")


def define_tool(name: str, description: str, input_model: type[BaseModel]) -> ToolDefinition:
    """Build a definition whose input schema is generated from *input_model*."""
    return ToolDefinition(
        name=name,
        description=description,
        input_schema=input_model.model_json_schema(by_alias=True),
    )


def validate_arguments(model: type[ModelT], arguments: dict[str, Any] | None) -> ModelT:
    """Validate raw tool arguments, raising :class:`InvalidParametersError` on failure."""
    try:
        return model.model_validate(arguments or {})
    except ValidationError as exc:
        raise InvalidParametersError(
            f"Invalid parameters: {exc}",
            {"errors": json.loads(exc.json(include_url=False))},
        ) from exc


def describe_matcher(request: RequestMatcher) -> str:
    """Render the ``Criteria`` block shared by several tools."""
    return f"- Method: {request.method or 'ANY'}\n- Path: {request.path or '/*'}"
