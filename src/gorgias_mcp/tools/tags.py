from typing import Annotated, List, Optional

from pydantic import Field, PositiveInt

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import TagCreate, TagUpdate
from gorgias_mcp.toolkit import ResponseFormat, ToolSpec, tool

TagId = Annotated[int, Field(gt=0, description="Tag ID")]
Color = Annotated[Optional[str], Field(description="Tag color as a hex code, e.g. '#ff0000'")]


def tag_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_tags", "List all ticket tags with their usage counts. Not paginated.")
    async def list_tags(response_format: ResponseFormat = "json"):
        result = await client.list_tags()
        return format_response(result, response_format, "tags", limit_chars)

    @tool("gorgias_get_tag", "Get a single tag by ID.")
    async def get_tag(tag_id: TagId, response_format: ResponseFormat = "json"):
        result = await client.get_tag(tag_id)
        return format_response(result, response_format, "tag", limit_chars)

    @tool("gorgias_create_tag", "Create a ticket tag.")
    async def create_tag(
        name: Annotated[str, Field(description="Tag name")],
        description: Annotated[Optional[str], Field(description="Tag description")] = None,
        color: Color = None,
    ):
        result = await client.create_tag(TagCreate(name=name, description=description, color=color))
        return success_response("Tag created", limit_chars, tag=result)

    @tool("gorgias_update_tag", "Update a tag's name, description or color.")
    async def update_tag(
        tag_id: TagId,
        name: Annotated[Optional[str], Field(description="Tag name")] = None,
        description: Annotated[Optional[str], Field(description="Tag description")] = None,
        color: Color = None,
    ):
        result = await client.update_tag(tag_id, TagUpdate(name=name, description=description, color=color))
        return success_response("Tag updated", limit_chars, tag=result)

    @tool("gorgias_delete_tag", "Delete a tag. It is removed from every ticket carrying it.")
    async def delete_tag(tag_id: TagId):
        await client.delete_tag(tag_id)
        return success_response(f"Tag {tag_id} deleted", limit_chars)

    @tool(
        "gorgias_merge_tags",
        "Merge tags into a target tag. Tickets tagged with a source tag get the target tag "
        "and the source tags are deleted.",
    )
    async def merge_tags(
        target_tag_id: Annotated[int, Field(gt=0, description="Tag that survives the merge")],
        source_tag_ids: Annotated[List[PositiveInt], Field(description="Tags merged into the target")],
    ):
        if not source_tag_ids:
            raise ValueError("source_tag_ids must contain at least one tag ID")
        if target_tag_id in source_tag_ids:
            raise ValueError("Cannot merge a tag into itself")
        result = await client.merge_tags(target_tag_id, source_tag_ids)
        return success_response("Tags merged", limit_chars, tag=result)

    return [list_tags, get_tag, create_tag, update_tag, delete_tag, merge_tags]
