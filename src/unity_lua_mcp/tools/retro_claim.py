"""Generic activity reward retro-claim popup.

Registers a compensation popup for an activity by patching the two Lua
popup configuration files. Both files are checked before either is written.
"""
from __future__ import annotations
import logging
from typing import Any

from unity_lua_mcp.tools.anchor_patch import AnchorPosition, plan_anchor_patch
from unity_lua_mcp.tools.base import Tool, ToolContext, ToolResult, require_identifier, tool

logger = logging.getLogger(__name__)

POPUP_SEQ_CONFIG = "PopupSeqConfig.lua"
POPUP_FUN_CONFIG = "PopupFunConfig.lua"

# Existing knockout-tournament entries; new entries go directly above them.
SEQ_ANCHOR = "        --淘汰赛补领"
FUN_ANCHOR = "-- 淘汰赛补领弹窗"


def popup_seq_entry(activity_key: str) -> str:
    return (
        "    {\n"
        f"        --{activity_key}补领\n"
        f"        [\"key\"] = \"{activity_key}CompensationView\",\n"
        "        [\"daily\"] = false,\n"
        "        [\"downloadKey\"] = DlcNames.Base.PopTipView,\n"
        f"        [\"func\"] = PopupFunConfig.CheckPushNotReceiving{activity_key}RewardView,\n"
        f"        [\"currentNeed\"] = PopupFunConfig.need{activity_key}Reward,\n"
        "    },\n"
    )


def popup_fun_entries(activity_key: str, reward_type: str, multiple_language_key: str) -> str:
    return (
        f"-- {activity_key}补领弹窗\n"
        f"function PopupFunConfig.CheckPushNotReceiving{activity_key}RewardView(queueName)\n"
        f"    PopupFunConfig.CheckPushCommonNotReceivingRewardView(\"{activity_key}CompensationView\", "
        f"\"{reward_type}\", \"{multiple_language_key}\", queueName)\n"
        "end\n"
        "\n"
        f"function PopupFunConfig.need{activity_key}Reward()\n"
        f"    return PopupFunConfig.NeedNotReceivingReward(\"{reward_type}\")\n"
        "end\n"
        "\n"
    )


@tool
class AddActivityRetroClaimTool(Tool):
    name = "add_activity_retro_claim"
    description = (
        "Add a generic activity reward retro-claim popup to the Lua popup "
        "configuration (PopupSeqConfig.lua and PopupFunConfig.lua)."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "activityKey": {
                "type": "string",
                "description": "Activity key (e.g. MyNewActivity)"
            },
            "rewardType": {
                "type": "string",
                "description": "Reward type (e.g. MyNewActivityRewardType)"
            },
            "multipleLanguageKey": {
                "type": "string",
                "description": "Localization key (e.g. MyNewActivity)"
            }
        },
        "required": ["activityKey", "rewardType", "multipleLanguageKey"]
    }

    async def execute(self, arguments: dict[str, Any], context: ToolContext) -> ToolResult:
        activity_key = require_identifier(arguments, "activityKey")
        reward_type = require_identifier(arguments, "rewardType")
        multiple_language_key = require_identifier(arguments, "multipleLanguageKey")

        config_dir = context.assets_dir() / context.tools.lua_config_dir

        patches = [
            plan_anchor_patch(
                config_dir / POPUP_SEQ_CONFIG,
                SEQ_ANCHOR,
                popup_seq_entry(activity_key) + "\n",
                AnchorPosition.BEFORE,
            ),
            plan_anchor_patch(
                config_dir / POPUP_FUN_CONFIG,
                FUN_ANCHOR,
                popup_fun_entries(activity_key, reward_type, multiple_language_key) + "\n",
                AnchorPosition.BEFORE,
            ),
        ]
        for patch in patches:
            patch.apply()

        logger.info(f"Added retro claim popup for {activity_key} in {config_dir}")
        return ToolResult.from_text(
            f"Added generic reward retro claim for activity '{activity_key}'."
        )
