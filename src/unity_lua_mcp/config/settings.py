"""Environment settings for the Unity MCP server.

Loads overrides from environment variables using python-dotenv.
"""
from __future__ import annotations
import os
from pathlib import Path
from dotenv import load_dotenv

from unity_lua_mcp.config.server import LoggingConfig, ServerConfig


class Settings:
    """Settings read from environment variables (and a .env file, if present)."""

    def __init__(self) -> None:
        load_dotenv()

        self.project_path = os.getenv("UNITY_PROJECT_PATH", "")
        self.config_path = os.getenv("UNITY_MCP_CONFIG", "")
        self.log_level = os.getenv("UNITY_MCP_LOG_LEVEL", "")


def load_server_config(
    config_path: str | Path | None = None,
    project_root: str | Path | None = None,
) -> ServerConfig:
    """Load server configuration and apply environment overrides.

    Precedence for the project root: explicit argument, UNITY_PROJECT_PATH,
    then the config file value.

    Args:
        config_path: Optional explicit path to config file
        project_root: Optional explicit Unity project root

    Returns:
        Validated ServerConfig instance
    """
    settings = Settings()

    if config_path:
        config = ServerConfig.from_yaml(config_path)
    else:
        config = ServerConfig.from_env()

    overrides = {}
    if project_root:
        overrides["root"] = str(project_root)
    elif settings.project_path:
        overrides["root"] = settings.project_path
    if overrides:
        config = config.model_copy(
            update={"project": config.project.model_copy(update=overrides)}
        )

    if settings.log_level:
        logging_config = LoggingConfig.model_validate(
            {**config.logging.model_dump(), "level": settings.log_level}
        )
        config = config.model_copy(update={"logging": logging_config})

    return config
