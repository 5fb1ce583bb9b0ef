"""MCP stdio server with JSON-RPC framing.

Reads one JSON-RPC request per line from stdin and writes one response per
line to stdout. Requests are handled strictly in order. Logs go to stderr.
"""
from __future__ import annotations
import asyncio
import logging
import sys
from typing import Any, Awaitable, Callable, TextIO

from unity_lua_mcp.config import LoggingConfig, ServerConfig, ServerInfoConfig, load_server_config
from unity_lua_mcp.errors import (
    INTERNAL_ERROR,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProjectRootNotFoundError,
    ProtocolError,
    ToolArgumentError,
    ToolError,
)
from unity_lua_mcp.mcp.protocol import (
    JsonRpcRequest,
    JsonRpcResponse,
    decode_request,
    encode_response,
    error_response,
    success_response,
)
from unity_lua_mcp.mcp.registry import ToolRegistry, build_registry
from unity_lua_mcp.project import resolve_project_root
from unity_lua_mcp.tools import ToolContext

logger = logging.getLogger(__name__)

Handler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]


class Dispatcher:
    """Routes JSON-RPC methods to MCP handlers."""

    def __init__(
        self,
        registry: ToolRegistry,
        context: ToolContext,
        server_info: ServerInfoConfig | None = None,
    ) -> None:
        self.registry = registry
        self.context = context
        self.server_info = server_info or ServerInfoConfig()
        self.methods: dict[str, Handler] = {
            "initialize": self.handle_initialize,
            "ping": self.handle_ping,
            "tools/list": self.handle_tools_list,
            "tools/call": self.handle_tools_call,
        }

    async def handle_initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        """Handle MCP initialize request."""
        return {
            "protocolVersion": self.server_info.protocol_version,
            "capabilities": {
                "tools": {}
            },
            "serverInfo": {
                "name": self.server_info.name,
                "version": self.server_info.version
            }
        }

    async def handle_ping(self, params: dict[str, Any]) -> dict[str, Any]:
        return {}

    async def handle_tools_list(self, params: dict[str, Any]) -> dict[str, Any]:
        """List all registered tools in registration order."""
        return {
            "tools": [
                descriptor.model_dump(by_alias=True)
                for descriptor in self.registry.list_descriptors()
            ]
        }

    async def handle_tools_call(self, params: dict[str, Any]) -> dict[str, Any]:
        """Call a tool with the given arguments."""
        tool_name = params.get("name")
        arguments = params.get("arguments")
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ToolArgumentError("Tool arguments must be a JSON object")

        tool = self.registry.get(tool_name)
        logger.info(f"Calling tool {tool_name}")
        result = await tool.execute(arguments, self.context)
        return result.model_dump()

    async def handle_request(self, request: JsonRpcRequest) -> JsonRpcResponse | None:
        """Handle a single JSON-RPC request.

        Returns:
            Response to write, or None when nothing must be sent back
            (notifications, and unknown methods when configured to drop them)
        """
        handler = self.methods.get(request.method)

        if handler is None:
            if request.is_notification:
                logger.debug(f"Ignoring notification {request.method}")
                return None
            if not self.server_info.reply_to_unknown_methods:
                logger.warning(f"Dropping request for unknown method {request.method}")
                return None

        try:
            if handler is None:
                raise MethodNotFoundError(f"Method not found: {request.method}")
            result = await handler(request.params or {})
            response = success_response(request.id, result)

        except ProtocolError as e:
            response = error_response(request.id, e.code, str(e))

        except ToolError as e:
            logger.warning(f"{request.method} failed: {e}")
            response = error_response(request.id, INTERNAL_ERROR, f"Tool call failed: {e}")

        except Exception as e:
            logger.error(f"{request.method} raised {type(e).__name__}: {e}", exc_info=True)
            response = error_response(request.id, INTERNAL_ERROR, f"Tool call failed: {e}")

        if request.is_notification:
            return None
        return response

    async def handle_line(self, line: str) -> str | None:
        """Decode one wire line, dispatch it and encode the response."""
        try:
            request = decode_request(line)
        except ParseError as e:
            logger.warning(str(e))
            response = error_response(None, e.code, str(e))
        except InvalidRequestError as e:
            logger.warning(str(e))
            response = error_response(e.request_id, e.code, str(e))
        else:
            response = await self.handle_request(request)

        if response is None:
            return None
        return encode_response(response)


class StdioTransport:
    """Newline-delimited text over a reader/writer pair (stdin/stdout by default)."""

    def __init__(self, reader: TextIO | None = None, writer: TextIO | None = None) -> None:
        self.reader = reader if reader is not None else sys.stdin
        self.writer = writer if writer is not None else sys.stdout

    async def read_line(self) -> str | None:
        """Return the next line, or None at end of stream."""
        line = await asyncio.to_thread(self.reader.readline)
        return line if line else None

    def write_line(self, text: str) -> None:
        self.writer.write(text + "\n")
        self.writer.flush()


async def run_stdio_server(dispatcher: Dispatcher, transport: StdioTransport | None = None) -> None:
    """Serve requests until the input stream ends."""
    transport = transport or StdioTransport()

    logger.info(f"{dispatcher.server_info.name} {dispatcher.server_info.version} starting on stdio")
    logger.info(f"Available tools: {', '.join(dispatcher.registry.names())}")

    while True:
        line = await transport.read_line()
        if line is None:
            # EOF - client disconnected
            break

        line = line.strip()
        if not line:
            continue

        output = await dispatcher.handle_line(line)
        if output is not None:
            transport.write_line(output)

    logger.info("Input closed, server shutting down")


def create_dispatcher(config: ServerConfig) -> Dispatcher:
    """Resolve the project root, build the registry and wire the dispatcher."""
    try:
        project_root = resolve_project_root(config.project.root, config.project.marker_dir)
        root_error = None
        logger.info(f"Unity project root: {project_root}")
    except ProjectRootNotFoundError as e:
        project_root = None
        root_error = str(e)
        logger.error(f"{e}. File-based tools will fail until the server is restarted with a valid root.")

    context = ToolContext(
        project_root=project_root,
        tools=config.tools,
        root_error=root_error,
        marker_dir=config.project.marker_dir,
    )
    return Dispatcher(build_registry(), context, config.server)


def configure_logging(config: LoggingConfig) -> None:
    # stdout carries protocol frames only
    logging.basicConfig(
        level=getattr(logging, config.level),
        format=config.format,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def serve(config: ServerConfig) -> None:
    configure_logging(config.logging)
    dispatcher = create_dispatcher(config)
    try:
        asyncio.run(run_stdio_server(dispatcher))
    except KeyboardInterrupt:
        logger.info("Interrupted, server shutting down")


def main() -> None:
    """Entry point for MCP server."""
    try:
        config = load_server_config()
    except Exception as e:
        print(f"Failed to load configuration: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        serve(config)
    except Exception as e:
        logger.error(f"Fatal server error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
