"""Unity project root resolution.

The root is resolved once at start-up: an explicitly configured directory
wins if it looks like a Unity project, otherwise the working directory and
its parents are searched for the marker directory (Assets/).
"""
from __future__ import annotations
import logging
from pathlib import Path

from unity_lua_mcp.errors import ProjectRootNotFoundError

logger = logging.getLogger(__name__)


def is_project_root(path: Path, marker: str = "Assets") -> bool:
    return path.is_dir() and (path / marker).is_dir()


def resolve_project_root(
    explicit_root: str | Path | None = None,
    marker: str = "Assets",
    start: str | Path | None = None,
) -> Path:
    """Resolve the Unity project root directory.

    Args:
        explicit_root: Configured root (UNITY_PROJECT_PATH or config file)
        marker: Directory name that identifies a project root
        start: Directory to search upward from (default: cwd)

    Returns:
        Absolute path of the project root

    Raises:
        ProjectRootNotFoundError: If no candidate contains the marker directory
    """
    if explicit_root:
        candidate = Path(explicit_root).expanduser()
        if is_project_root(candidate, marker):
            return candidate.resolve()
        logger.warning(
            f"Configured project root {candidate} has no {marker}/ directory, "
            f"searching parent directories instead"
        )

    start_dir = Path(start) if start is not None else Path.cwd()
    start_dir = start_dir.resolve()

    for directory in (start_dir, *start_dir.parents):
        if is_project_root(directory, marker):
            return directory

    raise ProjectRootNotFoundError(
        f"Could not find the Unity project root. "
        f"UNITY_PROJECT_PATH: '{explicit_root or ''}', current directory: '{start_dir}'"
    )
