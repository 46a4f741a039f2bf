from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import MessageCreate
from gorgias_mcp.toolkit import Cursor, Limit, ResponseFormat, ToolSpec, tool

MessageId = Annotated[int, Field(gt=0, description="Message ID")]


def message_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_messages", "List messages, optionally only those of one ticket. Cursor paginated.")
    async def list_messages(
        limit: Limit = None,
        cursor: Cursor = None,
        ticket_id: Annotated[Optional[int], Field(gt=0, description="Only messages of this ticket")] = None,
        response_format: ResponseFormat = "json",
    ):
        result = await client.list_messages(limit, cursor, ticket_id)
        return format_response(result, response_format, "messages", limit_chars)

    @tool("gorgias_get_message", "Get a single message by ID.")
    async def get_message(message_id: MessageId, response_format: ResponseFormat = "json"):
        result = await client.get_message(message_id)
        return format_response(result, response_format, "message", limit_chars)

    @tool(
        "gorgias_create_message",
        "Add a message to an existing ticket. Use channel 'internal-note' for a note only agents see.",
    )
    async def create_message(
        ticket_id: Annotated[int, Field(gt=0, description="Ticket to add the message to")],
        channel: Annotated[str, Field(description="Message channel, e.g. 'email', 'chat', 'internal-note'")],
        body_text: Annotated[Optional[str], Field(description="Message body (plain text)")] = None,
        body_html: Annotated[Optional[str], Field(description="Message body (HTML)")] = None,
        via: Annotated[str, Field(description="How the message is sent")] = "helpdesk",
        from_agent: Annotated[bool, Field(description="Whether the message is from an agent")] = True,
        sender_id: Annotated[Optional[int], Field(gt=0, description="Sender user or customer ID")] = None,
        receiver_id: Annotated[Optional[int], Field(gt=0, description="Receiver user or customer ID")] = None,
        subject: Annotated[Optional[str], Field(description="Message subject")] = None,
    ):
        if not body_text and not body_html:
            raise ValueError("Either body_text or body_html must be provided")
        data = MessageCreate(
            ticket_id=ticket_id,
            channel=channel,
            via=via,
            body_text=body_text,
            body_html=body_html,
            from_agent=from_agent,
            sender_id=sender_id,
            receiver_id=receiver_id,
            subject=subject,
        )
        result = await client.create_message(data)
        return success_response("Message created", limit_chars, message=result)

    @tool("gorgias_delete_message", "Delete a message. This cannot be undone.")
    async def delete_message(message_id: MessageId):
        await client.delete_message(message_id)
        return success_response(f"Message {message_id} deleted", limit_chars)

    return [list_messages, get_message, create_message, delete_message]
