from typing import Annotated, List, Literal, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import ViewCreate, ViewUpdate
from gorgias_mcp.toolkit import Cursor, Limit, ResponseFormat, ToolSpec, tool

ViewId = Annotated[int, Field(gt=0, description="View ID")]
Filters = Annotated[Optional[str], Field(description="Filter expression")]
OrderBy = Annotated[Optional[str], Field(description="Field to order by")]
OrderDir = Annotated[Optional[Literal["asc", "desc"]], Field(description="Order direction")]
Visibility = Annotated[Optional[Literal["public", "shared", "private"]], Field(description="Who can see the view")]
Fields = Annotated[Optional[List[str]], Field(description="Ticket fields to display")]


def view_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_views", "List all saved ticket views. Not paginated.")
    async def list_views(response_format: ResponseFormat = "json"):
        result = await client.list_views()
        return format_response(result, response_format, "views", limit_chars)

    @tool("gorgias_get_view", "Get a single view by ID, including its filters.")
    async def get_view(view_id: ViewId, response_format: ResponseFormat = "json"):
        result = await client.get_view(view_id)
        return format_response(result, response_format, "view", limit_chars)

    @tool("gorgias_create_view", "Create a saved ticket view.")
    async def create_view(
        name: Annotated[str, Field(description="View name")],
        filters: Filters = None,
        order_by: OrderBy = None,
        order_dir: OrderDir = None,
        visibility: Visibility = None,
        fields: Fields = None,
    ):
        data = ViewCreate(
            name=name, filters=filters, order_by=order_by, order_dir=order_dir, visibility=visibility, fields=fields
        )
        result = await client.create_view(data)
        return success_response("View created", limit_chars, view=result)

    @tool("gorgias_update_view", "Update a view. Only the fields you pass are changed.")
    async def update_view(
        view_id: ViewId,
        name: Annotated[Optional[str], Field(description="View name")] = None,
        filters: Filters = None,
        order_by: OrderBy = None,
        order_dir: OrderDir = None,
        visibility: Visibility = None,
        fields: Fields = None,
    ):
        data = ViewUpdate(
            name=name, filters=filters, order_by=order_by, order_dir=order_dir, visibility=visibility, fields=fields
        )
        result = await client.update_view(view_id, data)
        return success_response("View updated", limit_chars, view=result)

    @tool("gorgias_delete_view", "Delete a view. The tickets in it are not affected.")
    async def delete_view(view_id: ViewId):
        await client.delete_view(view_id)
        return success_response(f"View {view_id} deleted", limit_chars)

    @tool("gorgias_list_view_items", "List the tickets matching a view. Cursor paginated.")
    async def list_view_items(
        view_id: ViewId,
        limit: Limit = None,
        cursor: Cursor = None,
        response_format: ResponseFormat = "json",
    ):
        result = await client.list_view_items(view_id, limit, cursor)
        return format_response(result, response_format, "tickets", limit_chars)

    return [list_views, get_view, create_view, update_view, delete_view, list_view_items]
