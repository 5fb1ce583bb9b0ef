"""Tool registry.

Filled once at start-up from the static ``TOOL_CLASSES`` table and frozen
afterwards. Enumeration follows registration order.
"""
from __future__ import annotations
import logging
from typing import Iterable

from unity_lua_mcp.errors import RegistryFrozenError, ToolNotFoundError
from unity_lua_mcp.tools import TOOL_CLASSES, Tool, ToolDescriptor

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Name-keyed collection of tool instances."""

    def __init__(self) -> None:
        self._tools: dict[str, Tool] = {}
        self._frozen = False

    def register(self, tool: Tool) -> None:
        """Register a tool. A duplicate name replaces the earlier tool."""
        if self._frozen:
            raise RegistryFrozenError(f"Cannot register '{tool.name}': registry is frozen")
        if tool.name in self._tools:
            logger.warning(
                f"Tool name '{tool.name}' registered twice; "
                f"{type(tool).__name__} replaces {type(self._tools[tool.name]).__name__}"
            )
        self._tools[tool.name] = tool

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str | None) -> Tool:
        """Look up a tool by name.

        Raises:
            ToolNotFoundError: If no tool has that name
        """
        if not isinstance(name, str) or name not in self._tools:
            raise ToolNotFoundError(name)
        return self._tools[name]

    def names(self) -> list[str]:
        return list(self._tools)

    def list_descriptors(self) -> list[ToolDescriptor]:
        return [tool.descriptor() for tool in self._tools.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def build_registry(tool_classes: Iterable[type[Tool]] | None = None) -> ToolRegistry:
    """Instantiate every tool class once, register it and freeze the registry."""
    registry = ToolRegistry()
    for tool_class in (TOOL_CLASSES if tool_classes is None else tool_classes):
        registry.register(tool_class())
    registry.freeze()
    logger.debug(f"Registered tools: {', '.join(registry.names())}")
    return registry
