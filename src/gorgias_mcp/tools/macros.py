from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import MacroCreate, MacroUpdate
from gorgias_mcp.toolkit import (
    MACRO_ACTIONS,
    Cursor,
    Limit,
    ResponseFormat,
    ToolSpec,
    parse_json_argument,
    parse_optional_json,
    tool,
)

MacroId = Annotated[int, Field(gt=0, description="Macro ID")]
ACTIONS_HELP = (
    "Macro actions as a JSON array of {type, args} objects, "
    'e.g. [{"type": "setStatus", "args": {"status": "closed"}}]'
)


def macro_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_macros", "List macros (saved replies and action bundles). Cursor paginated.")
    async def list_macros(limit: Limit = None, cursor: Cursor = None, response_format: ResponseFormat = "json"):
        result = await client.list_macros(limit, cursor)
        return format_response(result, response_format, "macros", limit_chars)

    @tool("gorgias_get_macro", "Get a single macro by ID, including its actions.")
    async def get_macro(macro_id: MacroId, response_format: ResponseFormat = "json"):
        result = await client.get_macro(macro_id)
        return format_response(result, response_format, "macro", limit_chars)

    @tool("gorgias_create_macro", "Create a macro from a name and a JSON list of actions.")
    async def create_macro(
        name: Annotated[str, Field(description="Macro name")],
        actions_json: Annotated[str, Field(description=ACTIONS_HELP)],
        intent: Annotated[Optional[str], Field(description="Intent or category")] = None,
        language: Annotated[Optional[str], Field(description="Language code")] = None,
    ):
        actions = parse_json_argument(actions_json, "actions_json", MACRO_ACTIONS)
        data = MacroCreate(name=name, actions=actions, intent=intent, language=language)
        result = await client.create_macro(data)
        return success_response("Macro created", limit_chars, macro=result)

    @tool("gorgias_update_macro", "Update a macro. Passing actions_json replaces all of its actions.")
    async def update_macro(
        macro_id: MacroId,
        name: Annotated[Optional[str], Field(description="Macro name")] = None,
        actions_json: Annotated[Optional[str], Field(description=ACTIONS_HELP)] = None,
        intent: Annotated[Optional[str], Field(description="Intent or category")] = None,
        language: Annotated[Optional[str], Field(description="Language code")] = None,
    ):
        actions = parse_optional_json(actions_json, "actions_json", MACRO_ACTIONS)
        data = MacroUpdate(name=name, actions=actions, intent=intent, language=language)
        result = await client.update_macro(macro_id, data)
        return success_response("Macro updated", limit_chars, macro=result)

    @tool("gorgias_delete_macro", "Delete a macro. This cannot be undone.")
    async def delete_macro(macro_id: MacroId):
        await client.delete_macro(macro_id)
        return success_response(f"Macro {macro_id} deleted", limit_chars)

    return [list_macros, get_macro, create_macro, update_macro, delete_macro]
