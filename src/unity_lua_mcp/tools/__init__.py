"""Bundled MCP tools.

Importing this package fills ``TOOL_CLASSES`` in registration order.
"""
from unity_lua_mcp.tools.base import TOOL_CLASSES, Tool, ToolContext, ToolDescriptor, ToolResult, tool
from unity_lua_mcp.tools import lua_script, retro_claim, csharp_script  # noqa: F401

__all__ = [
    "TOOL_CLASSES",
    "Tool",
    "ToolContext",
    "ToolDescriptor",
    "ToolResult",
    "tool",
]
