import json
from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, text_result
from gorgias_mcp.models import StatisticQuery
from gorgias_mcp.toolkit import ResponseFormat, ToolSpec, tool


def account_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_test_connection", "Check that the supplied Gorgias credentials can reach the API.")
    async def test_connection():
        status = await client.test_connection()
        return text_result(json.dumps(status, indent=2), is_error=not status["connected"])

    @tool("gorgias_get_account", "Get the helpdesk account: domain, status and settings.")
    async def get_account(response_format: ResponseFormat = "json"):
        result = await client.get_account()
        return format_response(result, response_format, "account", limit_chars)

    @tool(
        "gorgias_get_statistics",
        "Get a named statistic (e.g. 'overview', 'support-volume') for a time range. "
        "The result includes the previous period's range for comparison.",
    )
    async def get_statistics(
        statistic_type: Annotated[str, Field(description="Name of the statistic to retrieve")],
        start_datetime: Annotated[str, Field(description="Start of the range (ISO 8601)")],
        end_datetime: Annotated[str, Field(description="End of the range (ISO 8601)")],
        timezone: Annotated[Optional[str], Field(description="IANA timezone for the range")] = None,
        response_format: ResponseFormat = "json",
    ):
        query = StatisticQuery(start_datetime=start_datetime, end_datetime=end_datetime, timezone=timezone)
        result = await client.get_statistic(statistic_type, query)
        return format_response(result, response_format, "statistics", limit_chars)

    return [test_connection, get_account, get_statistics]
