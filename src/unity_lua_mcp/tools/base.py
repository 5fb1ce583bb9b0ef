"""Tool contract shared by every MCP tool.

A tool declares a unique name, a description and an input schema, and
implements an async ``execute`` taking the call's argument object and the
process-wide ToolContext. Tool classes register themselves with the
``@tool`` decorator; the registry instantiates each class once at start-up.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field

from unity_lua_mcp.config import ToolsConfig
from unity_lua_mcp.errors import ProjectRootNotFoundError, ToolArgumentError


class ToolDescriptor(BaseModel):
    """Public, immutable description of a tool (one tools/list entry)."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: dict[str, Any] = Field(alias="inputSchema")


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Successful tool invocation result."""
    content: list[TextContent]

    @classmethod
    def from_text(cls, message: str) -> ToolResult:
        return cls(content=[TextContent(text=message)])


@dataclass
class ToolContext:
    """Process-wide values threaded into every tool call.

    ``project_root`` is None when resolution failed at start-up; the failure
    message is kept in ``root_error`` and raised by ``require_project_root``.
    """
    project_root: Path | None
    tools: ToolsConfig = field(default_factory=ToolsConfig)
    root_error: str | None = None
    marker_dir: str = "Assets"

    def require_project_root(self) -> Path:
        if self.project_root is None:
            raise ProjectRootNotFoundError(self.root_error or "Unity project root is not configured")
        return self.project_root

    def assets_dir(self) -> Path:
        return self.require_project_root() / self.marker_dir


class Tool(ABC):
    """Base class for MCP tools."""

    name: ClassVar[str]
    description: ClassVar[str]
    input_schema: ClassVar[dict[str, Any]]

    def descriptor(self) -> ToolDescriptor:
        return ToolDescriptor(
            name=self.name,
            description=self.description,
            input_schema=self.input_schema,
        )

    @abstractmethod
    async def execute(self, arguments: dict[str, Any], context: ToolContext) -> ToolResult:
        """Run the tool. Raise ToolError (or any exception) on failure."""


TOOL_CLASSES: list[type[Tool]] = []


def tool(cls: type[Tool]) -> type[Tool]:
    """Class decorator adding a tool to the static registration table."""
    TOOL_CLASSES.append(cls)
    return cls


# Argument helpers (structural presence checks only)


def require_string(arguments: dict[str, Any] | None, key: str) -> str:
    value = (arguments or {}).get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ToolArgumentError(f"Missing required argument: {key}")
    if not isinstance(value, str):
        raise ToolArgumentError(f"Argument '{key}' must be a string")
    return value.strip()


def optional_string(arguments: dict[str, Any] | None, key: str, default: str | None = None) -> str | None:
    value = (arguments or {}).get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
        return default
    if not isinstance(value, str):
        raise ToolArgumentError(f"Argument '{key}' must be a string")
    return value.strip()


def require_identifier(arguments: dict[str, Any] | None, key: str) -> str:
    """Required string usable as a file stem (no path separators)."""
    value = require_string(arguments, key)
    if "/" in value or "\\" in value or value in (".", ".."):
        raise ToolArgumentError(f"Argument '{key}' must not contain path separators: {value}")
    return value


def require_file_stem(arguments: dict[str, Any] | None, key: str, suffix: str) -> str:
    """Required file name with an optional ``suffix`` removed; never empty."""
    value = require_identifier(arguments, key)
    if value.lower().endswith(suffix.lower()):
        value = value[:-len(suffix)]
    if not value.strip():
        raise ToolArgumentError(f"Argument '{key}' must name a file, not just '{suffix}'")
    return value
