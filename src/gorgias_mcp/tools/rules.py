from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import RuleCreate, RuleUpdate
from gorgias_mcp.toolkit import JSON_OBJECT, Cursor, Limit, ResponseFormat, ToolSpec, parse_optional_json, tool

RuleId = Annotated[int, Field(gt=0, description="Rule ID")]
CodeAst = Annotated[Optional[str], Field(description="Rule code AST as a JSON object")]


def rule_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_rules", "List automation rules. Cursor paginated.")
    async def list_rules(limit: Limit = None, cursor: Cursor = None, response_format: ResponseFormat = "json"):
        result = await client.list_rules(limit, cursor)
        return format_response(result, response_format, "rules", limit_chars)

    @tool("gorgias_get_rule", "Get a single automation rule by ID, including its code.")
    async def get_rule(rule_id: RuleId, response_format: ResponseFormat = "json"):
        result = await client.get_rule(rule_id)
        return format_response(result, response_format, "rule", limit_chars)

    @tool("gorgias_create_rule", "Create an automation rule triggered by the given event types.")
    async def create_rule(
        name: Annotated[str, Field(description="Rule name")],
        event_types: Annotated[str, Field(description="Comma separated event types, e.g. 'ticket-created'")],
        description: Annotated[Optional[str], Field(description="Rule description")] = None,
        code: Annotated[Optional[str], Field(description="Rule code")] = None,
        code_ast_json: CodeAst = None,
        priority: Annotated[Optional[int], Field(description="Rule priority")] = None,
    ):
        data = RuleCreate(
            name=name,
            event_types=event_types,
            description=description,
            code=code,
            code_ast=parse_optional_json(code_ast_json, "code_ast_json", JSON_OBJECT),
            priority=priority,
        )
        result = await client.create_rule(data)
        return success_response("Rule created", limit_chars, rule=result)

    @tool("gorgias_update_rule", "Update an automation rule. Only the fields you pass are changed.")
    async def update_rule(
        rule_id: RuleId,
        name: Annotated[Optional[str], Field(description="Rule name")] = None,
        event_types: Annotated[Optional[str], Field(description="Comma separated event types")] = None,
        description: Annotated[Optional[str], Field(description="Rule description")] = None,
        code: Annotated[Optional[str], Field(description="Rule code")] = None,
        code_ast_json: CodeAst = None,
        priority: Annotated[Optional[int], Field(description="Rule priority")] = None,
    ):
        data = RuleUpdate(
            name=name,
            event_types=event_types,
            description=description,
            code=code,
            code_ast=parse_optional_json(code_ast_json, "code_ast_json", JSON_OBJECT),
            priority=priority,
        )
        result = await client.update_rule(rule_id, data)
        return success_response("Rule updated", limit_chars, rule=result)

    @tool("gorgias_delete_rule", "Delete an automation rule. This cannot be undone.")
    async def delete_rule(rule_id: RuleId):
        await client.delete_rule(rule_id)
        return success_response(f"Rule {rule_id} deleted", limit_chars)

    return [list_rules, get_rule, create_rule, update_rule, delete_rule]
