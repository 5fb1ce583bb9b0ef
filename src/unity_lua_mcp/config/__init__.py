"""Configuration management for the Unity MCP server."""
from .server import (
    ServerConfig,
    ServerInfoConfig,
    ProjectConfig,
    ToolsConfig,
    LoggingConfig,
)
from .settings import Settings, load_server_config

__all__ = [
    "ServerConfig",
    "ServerInfoConfig",
    "ProjectConfig",
    "ToolsConfig",
    "LoggingConfig",
    "Settings",
    "load_server_config",
]
