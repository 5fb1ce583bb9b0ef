"""Lua script tools: create a script, add retro-claim functions to it."""
from __future__ import annotations
import logging
from pathlib import Path
from typing import Any

from unity_lua_mcp.errors import ToolArgumentError
from unity_lua_mcp.tools.anchor_patch import AnchorPosition, insert_at_anchor
from unity_lua_mcp.tools.base import (
    Tool,
    ToolContext,
    ToolResult,
    require_file_stem,
    require_identifier,
    require_string,
    tool,
)

logger = logging.getLogger(__name__)

RETRO_CLAIM_ANCHOR = "---@Activity Retro Claim Anchor"


def lua_script_template(script_name: str) -> str:
    return f"-- {script_name}.lua\n\n{RETRO_CLAIM_ANCHOR}\n"


def retro_claim_function_template(activity_key: str) -> str:
    """Lua function letting a player claim rewards of an ended activity."""
    return (
        f"-- Auto-generated by MCP for activity: {activity_key}\n"
        f"function ActivityRetroClaim_{activity_key}(player)\n"
        f"    -- Check that the activity has ended and the player may still claim\n"
        f"    local canClaim = CheckActivityStatus(\"{activity_key}\", player)\n"
        f"    if not canClaim then\n"
        f"        return false, \"Retro claim conditions not met\"\n"
        f"    end\n"
        f"\n"
        f"    -- Grant rewards\n"
        f"    local rewards = GetActivityRewards(\"{activity_key}\")\n"
        f"    GiveRewardsToPlayer(player, rewards)\n"
        f"\n"
        f"    -- Record the claim\n"
        f"    LogRetroClaim(player, \"{activity_key}\")\n"
        f"\n"
        f"    return true, \"Retro claim succeeded\"\n"
        f"end\n"
    )


@tool
class CreateLuaScriptTool(Tool):
    name = "create_lua_script"
    description = (
        "Create a Unity Lua script under Assets/Resources/Lua. The new script "
        f"contains the '{RETRO_CLAIM_ANCHOR}' anchor used by add_retro_claim_function."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "scriptName": {
                "type": "string",
                "description": "Script name without the .lua suffix"
            }
        },
        "required": ["scriptName"]
    }

    async def execute(self, arguments: dict[str, Any], context: ToolContext) -> ToolResult:
        script_name = require_file_stem(arguments, "scriptName", ".lua")

        scripts_dir = context.assets_dir() / context.tools.lua_scripts_dir
        scripts_dir.mkdir(parents=True, exist_ok=True)

        file_path = scripts_dir / f"{script_name}.lua"
        file_path.write_text(lua_script_template(script_name), encoding="utf-8")
        logger.info(f"Created Lua script {file_path}")

        return ToolResult.from_text(f"Created Lua script: {file_path}")


@tool
class AddRetroClaimFunctionTool(Tool):
    name = "add_retro_claim_function"
    description = (
        "Add an activity reward retro-claim function to a Lua script, directly "
        f"after its '{RETRO_CLAIM_ANCHOR}' anchor. Each call inserts a new copy."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "luaScriptPath": {
                "type": "string",
                "description": "Lua script path relative to the Unity Assets directory (e.g. Resources/Lua/activity.lua)"
            },
            "activityKey": {
                "type": "string",
                "description": "Unique key of the activity"
            }
        },
        "required": ["luaScriptPath", "activityKey"]
    }

    async def execute(self, arguments: dict[str, Any], context: ToolContext) -> ToolResult:
        lua_script_path = require_string(arguments, "luaScriptPath")
        activity_key = require_identifier(arguments, "activityKey")

        assets_dir = context.assets_dir().resolve()
        full_path = (assets_dir / lua_script_path).resolve()
        if not full_path.is_relative_to(assets_dir):
            raise ToolArgumentError(f"luaScriptPath must stay inside {assets_dir}: {lua_script_path}")

        insert_at_anchor(
            full_path,
            RETRO_CLAIM_ANCHOR,
            "\n" + retro_claim_function_template(activity_key),
            AnchorPosition.AFTER,
        )
        logger.info(f"Added retro claim function for {activity_key} to {full_path}")

        return ToolResult.from_text(
            f"Added retro claim function for activity '{activity_key}' to: {lua_script_path}"
        )
