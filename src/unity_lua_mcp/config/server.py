"""Server configuration loading and validation.

Loads YAML configuration for the Unity MCP server. Every section has
defaults, so the server runs without any configuration file.
"""
from __future__ import annotations
import os
import yaml
from pathlib import Path, PurePosixPath
from typing import Literal
from pydantic import BaseModel, Field, field_validator

from unity_lua_mcp.errors import ConfigError

DEFAULT_CONFIG_PATH = Path("config/unity-mcp.yaml")


class ServerInfoConfig(BaseModel):
    """Identity announced in the initialize handshake."""
    name: str = Field("unity-mcp-server-lua", description="Server name")
    version: str = Field("2.2.0", description="Server version")
    protocol_version: str = Field("2024-11-05", description="MCP protocol version")
    reply_to_unknown_methods: bool = Field(
        True,
        description="Answer unknown methods with 'Method not found' instead of dropping them"
    )


class ProjectConfig(BaseModel):
    """Unity project location."""
    root: str | None = Field(None, description="Unity project root directory")
    marker_dir: str = Field("Assets", description="Directory that marks a Unity project root")

    @field_validator("marker_dir")
    @classmethod
    def validate_marker(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError("marker_dir must be a single directory name")
        return v


class ToolsConfig(BaseModel):
    """Locations, relative to the Assets directory, that tools write into."""
    lua_scripts_dir: str = Field("Resources/Lua", description="Directory for new Lua scripts")
    lua_config_dir: str = Field(
        "HotAssets/LuaScript/Config",
        description="Directory holding PopupSeqConfig.lua and PopupFunConfig.lua"
    )
    csharp_scripts_dir: str = Field("Scripts", description="Directory for new C# scripts")

    @field_validator("lua_scripts_dir", "lua_config_dir", "csharp_scripts_dir")
    @classmethod
    def validate_relative(cls, v: str) -> str:
        """Asset directories must stay inside Assets."""
        p = PurePosixPath(v.replace("\\", "/"))
        if p.is_absolute() or ".." in p.parts:
            raise ValueError(f"must be a relative path inside Assets: {v}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration. Logs always go to stderr."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", description="Log level")
    format: str = Field(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        description="logging format string"
    )

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v):
        return v.upper() if isinstance(v, str) else v


class ServerConfig(BaseModel):
    """Complete server configuration."""
    server: ServerInfoConfig = Field(default_factory=ServerInfoConfig)
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    tools: ToolsConfig = Field(default_factory=ToolsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ServerConfig:
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated ServerConfig instance

        Raises:
            ConfigError: If the file doesn't exist or the configuration is invalid
        """
        config_path = Path(path)

        if not config_path.exists():
            raise ConfigError(f"Config file not found: {config_path}")

        with open(config_path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Malformed YAML in {config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file must contain a mapping: {config_path}")

        try:
            return cls.model_validate(data)
        except Exception as e:
            raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    @classmethod
    def from_env(cls, env_var: str = "UNITY_MCP_CONFIG") -> ServerConfig:
        """Load configuration from the path in an environment variable.

        Falls back to config/unity-mcp.yaml, then to built-in defaults.
        """
        config_path = os.getenv(env_var)

        if not config_path:
            if DEFAULT_CONFIG_PATH.exists():
                return cls.from_yaml(DEFAULT_CONFIG_PATH)
            return cls()

        return cls.from_yaml(config_path)
