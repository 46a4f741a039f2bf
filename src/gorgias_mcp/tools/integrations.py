from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import HttpConfig, IntegrationCreate, IntegrationUpdate
from gorgias_mcp.toolkit import STRING_MAP, ResponseFormat, ToolSpec, parse_optional_json, tool

IntegrationId = Annotated[int, Field(gt=0, description="Integration ID")]


def integration_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_integrations", "List all integrations (HTTP, Shopify, email, ...). Not paginated.")
    async def list_integrations(response_format: ResponseFormat = "json"):
        result = await client.list_integrations()
        return format_response(result, response_format, "integrations", limit_chars)

    @tool("gorgias_get_integration", "Get a single integration by ID.")
    async def get_integration(integration_id: IntegrationId, response_format: ResponseFormat = "json"):
        result = await client.get_integration(integration_id)
        return format_response(result, response_format, "integration", limit_chars)

    @tool(
        "gorgias_create_integration",
        "Create an integration. For HTTP integrations give http_url, and optionally the method and headers.",
    )
    async def create_integration(
        name: Annotated[str, Field(description="Integration name")],
        type: Annotated[str, Field(description="Integration type, e.g. 'http'")],
        http_url: Annotated[Optional[str], Field(description="HTTP endpoint URL")] = None,
        http_method: Annotated[Optional[str], Field(description="HTTP method (default POST)")] = None,
        http_headers_json: Annotated[
            Optional[str], Field(description='HTTP headers as a JSON object of strings, e.g. {"X-Token": "abc"}')
        ] = None,
    ):
        headers = parse_optional_json(http_headers_json, "http_headers_json", STRING_MAP)
        http = None
        if http_url:
            http = HttpConfig(url=http_url, method=(http_method or "POST").upper(), headers=headers or {})
        elif headers or http_method:
            raise ValueError("http_url is required when http_method or http_headers_json is given")
        result = await client.create_integration(IntegrationCreate(name=name, type=type, http=http))
        return success_response("Integration created", limit_chars, integration=result)

    @tool("gorgias_update_integration", "Rename an integration.")
    async def update_integration(
        integration_id: IntegrationId,
        name: Annotated[Optional[str], Field(description="Integration name")] = None,
    ):
        result = await client.update_integration(integration_id, IntegrationUpdate(name=name))
        return success_response("Integration updated", limit_chars, integration=result)

    @tool("gorgias_delete_integration", "Delete an integration. Widgets bound to it stop working.")
    async def delete_integration(integration_id: IntegrationId):
        await client.delete_integration(integration_id)
        return success_response(f"Integration {integration_id} deleted", limit_chars)

    return [list_integrations, get_integration, create_integration, update_integration, delete_integration]
