from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import SatisfactionSurveyCreate
from gorgias_mcp.toolkit import Cursor, Limit, ResponseFormat, ToolSpec, tool


def satisfaction_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool(
        "gorgias_list_satisfaction_surveys",
        "List customer satisfaction surveys, optionally for one ticket or customer. Cursor paginated.",
    )
    async def list_satisfaction_surveys(
        limit: Limit = None,
        cursor: Cursor = None,
        ticket_id: Annotated[Optional[int], Field(gt=0, description="Filter by ticket ID")] = None,
        customer_id: Annotated[Optional[int], Field(gt=0, description="Filter by customer ID")] = None,
        response_format: ResponseFormat = "json",
    ):
        result = await client.list_satisfaction_surveys(limit, cursor, ticket_id, customer_id)
        return format_response(result, response_format, "satisfaction_surveys", limit_chars)

    @tool("gorgias_get_satisfaction_survey", "Get a single satisfaction survey by ID, including its score.")
    async def get_satisfaction_survey(
        survey_id: Annotated[int, Field(gt=0, description="Survey ID")],
        response_format: ResponseFormat = "json",
    ):
        result = await client.get_satisfaction_survey(survey_id)
        return format_response(result, response_format, "satisfaction_survey", limit_chars)

    @tool("gorgias_create_satisfaction_survey", "Schedule a satisfaction survey for a ticket's customer.")
    async def create_satisfaction_survey(
        ticket_id: Annotated[int, Field(gt=0, description="Ticket ID")],
        customer_id: Annotated[int, Field(gt=0, description="Customer ID")],
        should_send_datetime: Annotated[Optional[str], Field(description="When to send (ISO 8601)")] = None,
    ):
        data = SatisfactionSurveyCreate(
            ticket_id=ticket_id, customer_id=customer_id, should_send_datetime=should_send_datetime
        )
        result = await client.create_satisfaction_survey(data)
        return success_response("Satisfaction survey created", limit_chars, survey=result)

    return [list_satisfaction_surveys, get_satisfaction_survey, create_satisfaction_survey]
