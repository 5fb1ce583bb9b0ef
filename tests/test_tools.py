"""Tests for the bundled Unity tools."""
import pytest

from unity_lua_mcp.errors import (
    AnchorNotFoundError,
    PreconditionError,
    ProjectRootNotFoundError,
    TargetFileNotFoundError,
    ToolArgumentError,
)
from unity_lua_mcp.tools.csharp_script import CreateCSharpScriptTool, generate_csharp_script
from unity_lua_mcp.tools.lua_script import (
    RETRO_CLAIM_ANCHOR,
    AddRetroClaimFunctionTool,
    CreateLuaScriptTool,
)
from unity_lua_mcp.tools.retro_claim import AddActivityRetroClaimTool, FUN_ANCHOR, SEQ_ANCHOR


def config_dir(project):
    return project / "Assets" / "HotAssets" / "LuaScript" / "Config"


# create_lua_script


@pytest.mark.asyncio
async def test_create_lua_script_writes_file_with_anchor(unity_project, tool_context):
    """Test the script lands under Assets/Resources/Lua with the anchor."""
    result = await CreateLuaScriptTool().execute({"scriptName": "Foo"}, tool_context)

    path = unity_project / "Assets" / "Resources" / "Lua" / "Foo.lua"
    assert path.is_file()
    assert path.read_text(encoding="utf-8") == f"-- Foo.lua\n\n{RETRO_CLAIM_ANCHOR}\n"
    assert result.content[0].type == "text"
    assert result.content[0].text.endswith("Foo.lua")


@pytest.mark.asyncio
async def test_create_lua_script_strips_suffix(unity_project, tool_context):
    await CreateLuaScriptTool().execute({"scriptName": "Bar.lua"}, tool_context)
    assert (unity_project / "Assets" / "Resources" / "Lua" / "Bar.lua").is_file()


@pytest.mark.asyncio
@pytest.mark.parametrize("arguments", [
    {}, {"scriptName": ""}, {"scriptName": "   "}, {"scriptName": 5}, {"scriptName": ".lua"}, {"scriptName": ".LUA"},
])
async def test_create_lua_script_rejects_bad_name(tool_context, arguments):
    """Test missing, empty and non-string names are validation errors."""
    with pytest.raises(ToolArgumentError):
        await CreateLuaScriptTool().execute(arguments, tool_context)


@pytest.mark.asyncio
async def test_create_lua_script_rejects_path_separators(tool_context):
    with pytest.raises(ToolArgumentError):
        await CreateLuaScriptTool().execute({"scriptName": "../escape"}, tool_context)


@pytest.mark.asyncio
async def test_create_lua_script_without_project_root(missing_root_context):
    """Test an unresolved root fails every file-touching call."""
    with pytest.raises(ProjectRootNotFoundError) as exc_info:
        await CreateLuaScriptTool().execute({"scriptName": "Foo"}, missing_root_context)
    assert "Unity project root" in str(exc_info.value)


# add_retro_claim_function


@pytest.mark.asyncio
async def test_retro_claim_function_inserted_after_anchor(unity_project, tool_context):
    """Test two calls insert two functions and keep a single anchor."""
    await CreateLuaScriptTool().execute({"scriptName": "Activity"}, tool_context)
    path = unity_project / "Assets" / "Resources" / "Lua" / "Activity.lua"
    arguments = {"luaScriptPath": "Resources/Lua/Activity.lua", "activityKey": "Summer"}

    size_0 = len(path.read_text(encoding="utf-8"))
    result = await AddRetroClaimFunctionTool().execute(arguments, tool_context)
    first = path.read_text(encoding="utf-8")
    await AddRetroClaimFunctionTool().execute(arguments, tool_context)
    second = path.read_text(encoding="utf-8")

    assert first.count(RETRO_CLAIM_ANCHOR) == 1
    assert second.count(RETRO_CLAIM_ANCHOR) == 1
    assert first.count("function ActivityRetroClaim_Summer(player)") == 1
    assert second.count("function ActivityRetroClaim_Summer(player)") == 2
    assert len(second) - len(first) == len(first) - size_0
    assert first.index(RETRO_CLAIM_ANCHOR) < first.index("function ActivityRetroClaim_Summer")
    assert "Summer" in result.content[0].text


@pytest.mark.asyncio
async def test_retro_claim_function_missing_anchor(unity_project, tool_context):
    """Test a script without the anchor is left byte-for-byte unchanged."""
    path = unity_project / "Assets" / "plain.lua"
    path.write_text("-- nothing here\n", encoding="utf-8")
    before = path.read_bytes()

    with pytest.raises(AnchorNotFoundError):
        await AddRetroClaimFunctionTool().execute(
            {"luaScriptPath": "plain.lua", "activityKey": "Summer"}, tool_context
        )
    assert path.read_bytes() == before


@pytest.mark.asyncio
async def test_retro_claim_function_missing_script(tool_context):
    with pytest.raises(TargetFileNotFoundError):
        await AddRetroClaimFunctionTool().execute(
            {"luaScriptPath": "missing.lua", "activityKey": "Summer"}, tool_context
        )


@pytest.mark.asyncio
async def test_retro_claim_function_rejects_escaping_path(unity_project, tool_context):
    """Test paths leaving the Assets directory are refused."""
    outside = unity_project / "outside.lua"
    outside.write_text(f"{RETRO_CLAIM_ANCHOR}\n", encoding="utf-8")

    with pytest.raises(ToolArgumentError):
        await AddRetroClaimFunctionTool().execute(
            {"luaScriptPath": "../outside.lua", "activityKey": "Summer"}, tool_context
        )
    assert outside.read_text(encoding="utf-8") == f"{RETRO_CLAIM_ANCHOR}\n"


# add_activity_retro_claim


@pytest.mark.asyncio
async def test_activity_retro_claim_patches_both_configs(unity_project, tool_context):
    """Test popup sequence and popup function entries are added above the anchors."""
    arguments = {
        "activityKey": "Summer",
        "rewardType": "SummerRewardType",
        "multipleLanguageKey": "SummerLang",
    }

    result = await AddActivityRetroClaimTool().execute(arguments, tool_context)

    seq = (config_dir(unity_project) / "PopupSeqConfig.lua").read_text(encoding="utf-8")
    fun = (config_dir(unity_project) / "PopupFunConfig.lua").read_text(encoding="utf-8")

    assert seq.count(SEQ_ANCHOR) == 1
    assert fun.count(FUN_ANCHOR) == 1
    assert '["key"] = "SummerCompensationView",' in seq
    assert seq.index("SummerCompensationView") < seq.index(SEQ_ANCHOR)
    assert "function PopupFunConfig.CheckPushNotReceivingSummerRewardView(queueName)" in fun
    assert 'return PopupFunConfig.NeedNotReceivingReward("SummerRewardType")' in fun
    assert '"SummerLang"' in fun
    assert fun.index("needSummerReward") < fun.index(FUN_ANCHOR)
    assert "Summer" in result.content[0].text


@pytest.mark.asyncio
async def test_activity_retro_claim_checks_both_files_before_writing(unity_project, tool_context):
    """Test a missing anchor in the second file leaves the first file unchanged."""
    fun_path = config_dir(unity_project) / "PopupFunConfig.lua"
    fun_path.write_text("PopupFunConfig = {}\n", encoding="utf-8")
    seq_path = config_dir(unity_project) / "PopupSeqConfig.lua"
    seq_before = seq_path.read_bytes()
    fun_before = fun_path.read_bytes()

    with pytest.raises(AnchorNotFoundError):
        await AddActivityRetroClaimTool().execute(
            {"activityKey": "A", "rewardType": "B", "multipleLanguageKey": "C"}, tool_context
        )

    assert seq_path.read_bytes() == seq_before
    assert fun_path.read_bytes() == fun_before


@pytest.mark.asyncio
async def test_activity_retro_claim_requires_all_arguments(tool_context):
    with pytest.raises(ToolArgumentError) as exc_info:
        await AddActivityRetroClaimTool().execute({"activityKey": "A", "rewardType": "B"}, tool_context)
    assert "multipleLanguageKey" in str(exc_info.value)


@pytest.mark.asyncio
async def test_activity_retro_claim_missing_config_file(tmp_path):
    from unity_lua_mcp.tools import ToolContext

    (tmp_path / "Assets").mkdir()
    context = ToolContext(project_root=tmp_path)

    with pytest.raises(TargetFileNotFoundError):
        await AddActivityRetroClaimTool().execute(
            {"activityKey": "A", "rewardType": "B", "multipleLanguageKey": "C"}, context
        )


# create_csharp_script


def test_generate_monobehaviour():
    content = generate_csharp_script("Player", "MonoBehaviour")
    assert content.startswith("using UnityEngine;\n\n")
    assert "public class Player : MonoBehaviour" in content
    assert "void Start()" in content
    assert "void Update()" in content


def test_generate_with_namespace_indents_body():
    """Test the class is wrapped in the namespace and indented."""
    content = generate_csharp_script("Player", "MonoBehaviour", "Game.Core")
    assert "namespace Game.Core\n{\n    public class Player : MonoBehaviour\n" in content
    assert content.rstrip().endswith("}")


def test_generate_scriptable_object_and_editor():
    so = generate_csharp_script("Weapon", "ScriptableObject")
    assert '[CreateAssetMenu(fileName = "Weapon", menuName = "ScriptableObjects/Weapon")]' in so

    editor = generate_csharp_script("WeaponEditor", "Editor")
    assert "using UnityEditor;" in editor
    assert "public class WeaponEditor : Editor" in editor


def test_generate_unsupported_type():
    with pytest.raises(ToolArgumentError):
        generate_csharp_script("X", "Widget")


@pytest.mark.asyncio
async def test_create_csharp_script_writes_file(unity_project, tool_context):
    """Test the default MonoBehaviour script is written under Assets/Scripts."""
    result = await CreateCSharpScriptTool().execute({"scriptName": "Player"}, tool_context)

    path = unity_project / "Assets" / "Scripts" / "Player.cs"
    assert "public class Player : MonoBehaviour" in path.read_text(encoding="utf-8")
    assert result.content[0].text.endswith("Player.cs")


@pytest.mark.asyncio
async def test_create_csharp_editor_script_in_editor_folder(unity_project, tool_context):
    await CreateCSharpScriptTool().execute(
        {"scriptName": "PlayerEditor", "scriptType": "Editor"}, tool_context
    )
    assert (unity_project / "Assets" / "Scripts" / "Editor" / "PlayerEditor.cs").is_file()


@pytest.mark.asyncio
async def test_create_csharp_script_never_overwrites(unity_project, tool_context):
    """Test an existing script is kept and the call fails."""
    path = unity_project / "Assets" / "Scripts" / "Player.cs"
    path.parent.mkdir(parents=True)
    path.write_text("// mine\n", encoding="utf-8")

    with pytest.raises(PreconditionError):
        await CreateCSharpScriptTool().execute({"scriptName": "Player"}, tool_context)
    assert path.read_text(encoding="utf-8") == "// mine\n"


@pytest.mark.asyncio
async def test_suffix_only_names_write_nothing(unity_project, tool_context):
    """Test names consisting only of the file suffix are rejected before any write."""
    with pytest.raises(ToolArgumentError):
        await CreateLuaScriptTool().execute({"scriptName": ".lua"}, tool_context)
    with pytest.raises(ToolArgumentError):
        await CreateCSharpScriptTool().execute({"scriptName": ".cs"}, tool_context)

    assert not (unity_project / "Assets" / "Resources" / "Lua" / ".lua").exists()
    assert not (unity_project / "Assets" / "Scripts" / ".cs").exists()
