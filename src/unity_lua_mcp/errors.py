"""Exception hierarchy for the Unity MCP server.

Protocol errors carry the JSON-RPC error code they are reported with.
Tool errors are always reported with the generic internal-error code;
callers distinguish causes by the message text.
"""
from __future__ import annotations

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INTERNAL_ERROR = -32603


class UnityMcpError(Exception):
    """Base class for all server errors."""


class ConfigError(UnityMcpError):
    """Configuration file is missing or invalid."""


# Protocol errors


class ProtocolError(UnityMcpError):
    code = INTERNAL_ERROR


class ParseError(ProtocolError):
    """Input line is not a JSON object."""
    code = PARSE_ERROR


class InvalidRequestError(ProtocolError):
    """JSON object cannot be read as a JSON-RPC request."""
    code = INVALID_REQUEST

    def __init__(self, message: str, request_id: int | str | None = None) -> None:
        super().__init__(message)
        self.request_id = request_id


class MethodNotFoundError(ProtocolError):
    code = METHOD_NOT_FOUND


# Tool errors


class ToolError(UnityMcpError):
    """Failure raised by a tool; reported as a JSON-RPC internal error."""


class ToolNotFoundError(ToolError):
    def __init__(self, name: str | None) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ToolArgumentError(ToolError):
    """Required argument missing, empty or of the wrong shape."""


class PreconditionError(ToolError):
    """Target state on disk does not allow the operation."""


class TargetFileNotFoundError(PreconditionError):
    def __init__(self, path) -> None:
        super().__init__(f"Target file does not exist: {path}")
        self.path = path


class AnchorNotFoundError(PreconditionError):
    def __init__(self, path, anchor: str) -> None:
        super().__init__(f"Anchor {anchor!r} not found in {path}")
        self.path = path
        self.anchor = anchor


class ProjectRootNotFoundError(ToolError):
    """Unity project root could not be resolved."""


class RegistryFrozenError(UnityMcpError):
    """Tool registration attempted after start-up."""
