from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response
from gorgias_mcp.toolkit import Cursor, Limit, ResponseFormat, ToolSpec, tool


def event_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool(
        "gorgias_list_events",
        "List account events (audit trail), optionally for one object or of one type. Cursor paginated.",
    )
    async def list_events(
        limit: Limit = None,
        cursor: Cursor = None,
        object_type: Annotated[Optional[str], Field(description="Filter by object type, e.g. 'Ticket'")] = None,
        object_id: Annotated[Optional[int], Field(gt=0, description="Filter by object ID")] = None,
        type: Annotated[Optional[str], Field(description="Filter by event type, e.g. 'ticket-updated'")] = None,
        response_format: ResponseFormat = "json",
    ):
        result = await client.list_events(limit, cursor, object_type, object_id, type)
        return format_response(result, response_format, "events", limit_chars)

    @tool("gorgias_get_event", "Get a single event by ID.")
    async def get_event(
        event_id: Annotated[int, Field(gt=0, description="Event ID")],
        response_format: ResponseFormat = "json",
    ):
        result = await client.get_event(event_id)
        return format_response(result, response_format, "event", limit_chars)

    return [list_events, get_event]
