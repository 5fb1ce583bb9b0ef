"""Shared pytest fixtures for all tests."""
import pytest

from unity_lua_mcp.config import ServerInfoConfig, ToolsConfig
from unity_lua_mcp.mcp.registry import build_registry
from unity_lua_mcp.mcp.server import Dispatcher
from unity_lua_mcp.tools import ToolContext

SEQ_CONFIG = """PopupSeqConfig = {
    {
        --淘汰赛补领
        ["key"] = "KnockoutCompensationView",
    },
}
"""

FUN_CONFIG = """PopupFunConfig = {}

-- 淘汰赛补领弹窗
function PopupFunConfig.CheckPushNotReceivingKnockoutRewardView(queueName)
end
"""


@pytest.fixture
def unity_project(tmp_path):
    """Minimal Unity project tree with the Lua popup config files."""
    root = tmp_path / "MyGame"
    config_dir = root / "Assets" / "HotAssets" / "LuaScript" / "Config"
    config_dir.mkdir(parents=True)
    (config_dir / "PopupSeqConfig.lua").write_text(SEQ_CONFIG, encoding="utf-8")
    (config_dir / "PopupFunConfig.lua").write_text(FUN_CONFIG, encoding="utf-8")
    return root


@pytest.fixture
def tool_context(unity_project):
    return ToolContext(project_root=unity_project, tools=ToolsConfig())


@pytest.fixture
def missing_root_context():
    return ToolContext(project_root=None, root_error="Could not find the Unity project root")


@pytest.fixture
def registry():
    return build_registry()


@pytest.fixture
def dispatcher(registry, tool_context):
    return Dispatcher(registry, tool_context, ServerInfoConfig())
