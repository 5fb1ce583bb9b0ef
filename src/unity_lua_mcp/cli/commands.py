from __future__ import annotations
import argparse
import asyncio
import json
import sys

from unity_lua_mcp.config import ServerConfig, load_server_config
from unity_lua_mcp.mcp.protocol import JsonRpcRequest
from unity_lua_mcp.mcp.registry import build_registry
from unity_lua_mcp.mcp.server import configure_logging, create_dispatcher, serve
from unity_lua_mcp.project import resolve_project_root


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="unity-mcp",
        description="Unity MCP server - Lua and C# boilerplate tools over MCP stdio"
    )
    parser.add_argument("--config", default=None,
                        help="Path to configuration YAML file (default: $UNITY_MCP_CONFIG or config/unity-mcp.yaml)")
    parser.add_argument("--project-root", default=None,
                        help="Unity project root (default: $UNITY_PROJECT_PATH or search upward for Assets/)")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("serve", help="Run the MCP server on stdin/stdout")
    sub.add_parser("tools", help="Print registered tool descriptors as JSON")
    sub.add_parser("root", help="Print the resolved Unity project root")

    call = sub.add_parser("call", help="Invoke a tool once and print its result")
    call.add_argument("name", help="Tool name")
    call.add_argument("--args", dest="arguments", default="{}",
                      help="Tool arguments as a JSON object (default: {})")

    return parser


def run(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_server_config(args.config, args.project_root)

        if args.cmd == "serve":
            serve(config)
        elif args.cmd == "tools":
            list_tools()
        elif args.cmd == "root":
            show_root(config)
        elif args.cmd == "call":
            asyncio.run(call_tool(config, args.name, args.arguments))
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def list_tools() -> None:
    registry = build_registry()
    descriptors = [d.model_dump(by_alias=True) for d in registry.list_descriptors()]
    print(json.dumps(descriptors, indent=2, ensure_ascii=False))


def show_root(config: ServerConfig) -> None:
    print(resolve_project_root(config.project.root, config.project.marker_dir))


async def call_tool(config: ServerConfig, name: str, arguments: str) -> None:
    """Run a single tools/call through the dispatcher and print the outcome."""
    configure_logging(config.logging)
    try:
        parsed = json.loads(arguments)
    except json.JSONDecodeError as e:
        raise ValueError(f"--args is not valid JSON: {e}") from e

    dispatcher = create_dispatcher(config)
    response = await dispatcher.handle_request(
        JsonRpcRequest(id=1, method="tools/call", params={"name": name, "arguments": parsed})
    )

    if response.error is not None:
        raise RuntimeError(response.error.message)
    for item in response.result["content"]:
        print(item["text"])


if __name__ == "__main__":
    run()
