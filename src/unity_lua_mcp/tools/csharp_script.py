"""C# script tool: MonoBehaviour, ScriptableObject and Editor boilerplate."""
from __future__ import annotations
import logging
from typing import Any

from unity_lua_mcp.errors import PreconditionError, ToolArgumentError
from unity_lua_mcp.tools.base import (
    Tool,
    ToolContext,
    ToolResult,
    optional_string,
    require_file_stem,
    tool,
)

logger = logging.getLogger(__name__)

SCRIPT_TYPES = ("MonoBehaviour", "ScriptableObject", "Editor")


def monobehaviour_body(name: str) -> tuple[list[str], str]:
    return ["using UnityEngine;"], (
        f"public class {name} : MonoBehaviour\n"
        "{\n"
        "    void Start()\n"
        "    {\n"
        "    }\n"
        "\n"
        "    void Update()\n"
        "    {\n"
        "    }\n"
        "}\n"
    )


def scriptable_object_body(name: str) -> tuple[list[str], str]:
    return ["using UnityEngine;"], (
        f"[CreateAssetMenu(fileName = \"{name}\", menuName = \"ScriptableObjects/{name}\")]\n"
        f"public class {name} : ScriptableObject\n"
        "{\n"
        "}\n"
    )


def editor_body(name: str) -> tuple[list[str], str]:
    return ["using UnityEditor;", "using UnityEngine;"], (
        "[CustomEditor(typeof(MonoBehaviour))]\n"
        f"public class {name} : Editor\n"
        "{\n"
        "    public override void OnInspectorGUI()\n"
        "    {\n"
        "        base.OnInspectorGUI();\n"
        "    }\n"
        "}\n"
    )


TEMPLATES = {
    "MonoBehaviour": monobehaviour_body,
    "ScriptableObject": scriptable_object_body,
    "Editor": editor_body,
}


def generate_csharp_script(name: str, script_type: str, namespace: str | None = None) -> str:
    """Render a C# script of the given Unity script type.

    Raises:
        ToolArgumentError: If the script type is not supported
    """
    template = TEMPLATES.get(script_type)
    if template is None:
        raise ToolArgumentError(
            f"Unsupported script type: {script_type} (expected one of {', '.join(SCRIPT_TYPES)})"
        )

    usings, body = template(name)
    header = "\n".join(usings) + "\n\n"
    if not namespace:
        return header + body

    indented = "".join(
        f"    {line}" if line.strip() else line
        for line in body.splitlines(keepends=True)
    )
    return header + f"namespace {namespace}\n{{\n{indented}}}\n"


@tool
class CreateCSharpScriptTool(Tool):
    name = "create_csharp_script"
    description = (
        "Create a Unity C# script (MonoBehaviour, ScriptableObject or Editor) "
        "under Assets/Scripts. Existing files are never overwritten."
    )
    input_schema = {
        "type": "object",
        "properties": {
            "scriptName": {
                "type": "string",
                "description": "Class and file name without the .cs suffix"
            },
            "scriptType": {
                "type": "string",
                "enum": list(SCRIPT_TYPES),
                "description": "Kind of script to generate (default MonoBehaviour)",
                "default": "MonoBehaviour"
            },
            "namespace": {
                "type": "string",
                "description": "Optional namespace wrapping the class"
            }
        },
        "required": ["scriptName"]
    }

    async def execute(self, arguments: dict[str, Any], context: ToolContext) -> ToolResult:
        script_name = require_file_stem(arguments, "scriptName", ".cs")
        script_type = optional_string(arguments, "scriptType", "MonoBehaviour")
        namespace = optional_string(arguments, "namespace")

        content = generate_csharp_script(script_name, script_type, namespace)

        scripts_dir = context.assets_dir() / context.tools.csharp_scripts_dir
        if script_type == "Editor":
            # Unity compiles Editor/ folders into the editor-only assembly
            scripts_dir = scripts_dir / "Editor"

        file_path = scripts_dir / f"{script_name}.cs"
        if file_path.exists():
            raise PreconditionError(f"Script already exists: {file_path}")

        scripts_dir.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        logger.info(f"Created {script_type} script {file_path}")

        return ToolResult.from_text(f"Created {script_type} script: {file_path}")
