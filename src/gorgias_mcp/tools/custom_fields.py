from typing import Annotated, List, Literal, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import CustomFieldChoice, CustomFieldCreate, CustomFieldDefinition, CustomFieldUpdate
from gorgias_mcp.toolkit import ResponseFormat, ToolSpec, tool

FieldId = Annotated[int, Field(gt=0, description="Custom field ID")]


def custom_field_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_custom_fields", "List custom field definitions for tickets or customers. Not paginated.")
    async def list_custom_fields(
        object_type: Annotated[Optional[Literal["ticket", "customer"]], Field(description="Filter by object type")] = None,
        response_format: ResponseFormat = "json",
    ):
        result = await client.list_custom_fields(object_type)
        return format_response(result, response_format, "custom_fields", limit_chars)

    @tool("gorgias_get_custom_field", "Get a single custom field definition by ID.")
    async def get_custom_field(field_id: FieldId, response_format: ResponseFormat = "json"):
        result = await client.get_custom_field(field_id)
        return format_response(result, response_format, "custom_field", limit_chars)

    @tool(
        "gorgias_create_custom_field",
        "Create a custom field on tickets or customers. Dropdown fields take a list of {value, label} choices.",
    )
    async def create_custom_field(
        object_type: Annotated[Literal["ticket", "customer"], Field(description="Object the field belongs to")],
        label: Annotated[str, Field(description="Field label")],
        definition_type: Annotated[str, Field(description="Field type: text, number, dropdown, ...")],
        description: Annotated[Optional[str], Field(description="Field description")] = None,
        priority: Annotated[Optional[int], Field(description="Display priority")] = None,
        required: Annotated[Optional[bool], Field(description="Whether the field is required")] = None,
        choices: Annotated[Optional[List[CustomFieldChoice]], Field(description="Choices for dropdown fields")] = None,
    ):
        data = CustomFieldCreate(
            object_type=object_type,
            label=label,
            description=description,
            priority=priority,
            required=required,
            definition=CustomFieldDefinition(type=definition_type, choices=choices),
        )
        result = await client.create_custom_field(data)
        return success_response("Custom field created", limit_chars, custom_field=result)

    @tool("gorgias_update_custom_field", "Update a custom field's label, description, priority or required flag.")
    async def update_custom_field(
        field_id: FieldId,
        label: Annotated[Optional[str], Field(description="Field label")] = None,
        description: Annotated[Optional[str], Field(description="Field description")] = None,
        priority: Annotated[Optional[int], Field(description="Display priority")] = None,
        required: Annotated[Optional[bool], Field(description="Whether the field is required")] = None,
    ):
        data = CustomFieldUpdate(label=label, description=description, priority=priority, required=required)
        result = await client.update_custom_field(field_id, data)
        return success_response("Custom field updated", limit_chars, custom_field=result)

    return [list_custom_fields, get_custom_field, create_custom_field, update_custom_field]
