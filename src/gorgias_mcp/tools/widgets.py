from typing import Annotated, List, Literal, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import WidgetCreate, WidgetUpdate
from gorgias_mcp.toolkit import ResponseFormat, ToolSpec, tool

WidgetId = Annotated[int, Field(gt=0, description="Widget ID")]
Order = Annotated[Optional[int], Field(description="Display order")]


def widget_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_widgets", "List sidebar widgets. Not paginated.")
    async def list_widgets(response_format: ResponseFormat = "json"):
        result = await client.list_widgets()
        return format_response(result, response_format, "widgets", limit_chars)

    @tool("gorgias_get_widget", "Get a single widget by ID, including its template.")
    async def get_widget(widget_id: WidgetId, response_format: ResponseFormat = "json"):
        result = await client.get_widget(widget_id)
        return format_response(result, response_format, "widget", limit_chars)

    @tool("gorgias_create_widget", "Create a sidebar widget shown next to tickets, customers or users.")
    async def create_widget(
        context: Annotated[Literal["ticket", "customer", "user"], Field(description="Where the widget is shown")],
        template: Annotated[str, Field(description="Widget template")],
        order: Order = None,
        integration_id: Annotated[Optional[int], Field(gt=0, description="Integration providing the data")] = None,
    ):
        data = WidgetCreate(context=context, template=template, order=order, integration_id=integration_id)
        result = await client.create_widget(data)
        return success_response("Widget created", limit_chars, widget=result)

    @tool("gorgias_update_widget", "Update a widget's context, template or order.")
    async def update_widget(
        widget_id: WidgetId,
        context: Annotated[
            Optional[Literal["ticket", "customer", "user"]], Field(description="Where the widget is shown")
        ] = None,
        template: Annotated[Optional[str], Field(description="Widget template")] = None,
        order: Order = None,
    ):
        data = WidgetUpdate(context=context, template=template, order=order)
        result = await client.update_widget(widget_id, data)
        return success_response("Widget updated", limit_chars, widget=result)

    @tool("gorgias_delete_widget", "Delete a widget.")
    async def delete_widget(widget_id: WidgetId):
        await client.delete_widget(widget_id)
        return success_response(f"Widget {widget_id} deleted", limit_chars)

    return [list_widgets, get_widget, create_widget, update_widget, delete_widget]
