from typing import Annotated, List

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response
from gorgias_mcp.toolkit import Cursor, Limit, ResponseFormat, ToolSpec, tool


def user_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_users", "List agents (users) of the helpdesk account. Cursor paginated.")
    async def list_users(limit: Limit = None, cursor: Cursor = None, response_format: ResponseFormat = "json"):
        result = await client.list_users(limit, cursor)
        return format_response(result, response_format, "users", limit_chars)

    @tool("gorgias_get_user", "Get a single agent (user) by ID.")
    async def get_user(
        user_id: Annotated[int, Field(gt=0, description="User ID")],
        response_format: ResponseFormat = "json",
    ):
        result = await client.get_user(user_id)
        return format_response(result, response_format, "user", limit_chars)

    return [list_users, get_user]
