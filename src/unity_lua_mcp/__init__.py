"""Unity Lua MCP server - boilerplate tools for Unity projects over MCP stdio."""

__version__ = "2.2.0"
