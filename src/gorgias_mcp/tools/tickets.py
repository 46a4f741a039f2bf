from typing import Annotated, List, Literal, Optional

from pydantic import Field, PositiveInt

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import MessageInput, TicketCreate, TicketListParams, TicketUpdate
from gorgias_mcp.toolkit import Cursor, Limit, ResponseFormat, ToolSpec, tool

TicketId = Annotated[int, Field(gt=0, description="Ticket ID")]
TagIds = Annotated[List[PositiveInt], Field(description="Tag IDs")]


def ticket_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool(
        "gorgias_list_tickets",
        "List tickets with cursor pagination and optional filters. "
        "Returns { items, nextCursor }; pass nextCursor back as cursor to get the next page.",
    )
    async def list_tickets(
        limit: Limit = None,
        cursor: Cursor = None,
        status: Annotated[Optional[Literal["open", "closed"]], Field(description="Filter by status")] = None,
        channel: Annotated[Optional[str], Field(description="Filter by channel, e.g. 'email'")] = None,
        assignee_user_id: Annotated[Optional[int], Field(gt=0, description="Filter by assigned user ID")] = None,
        assignee_team_id: Annotated[Optional[int], Field(gt=0, description="Filter by assigned team ID")] = None,
        customer_id: Annotated[Optional[int], Field(gt=0, description="Filter by customer ID")] = None,
        tag_ids: Annotated[Optional[List[PositiveInt]], Field(description="Only tickets carrying these tags")] = None,
        created_after: Annotated[Optional[str], Field(description="ISO 8601 lower bound on creation time")] = None,
        created_before: Annotated[Optional[str], Field(description="ISO 8601 upper bound on creation time")] = None,
        updated_after: Annotated[Optional[str], Field(description="ISO 8601 lower bound on last update")] = None,
        updated_before: Annotated[Optional[str], Field(description="ISO 8601 upper bound on last update")] = None,
        order_by: Annotated[
            Optional[Literal["created_datetime", "updated_datetime", "last_message_datetime", "last_received_message_datetime"]],
            Field(description="Sort field"),
        ] = None,
        response_format: ResponseFormat = "json",
    ):
        params = TicketListParams(
            limit=limit,
            cursor=cursor,
            status=status,
            channel=channel,
            assignee_user_id=assignee_user_id,
            assignee_team_id=assignee_team_id,
            customer_id=customer_id,
            tag_ids=tag_ids,
            created_datetime_after=created_after,
            created_datetime_before=created_before,
            updated_datetime_after=updated_after,
            updated_datetime_before=updated_before,
            order_by=order_by,
        )
        result = await client.list_tickets(params)
        return format_response(result, response_format, "tickets", limit_chars)

    @tool("gorgias_get_ticket", "Get a single ticket by ID, with all of its messages.")
    async def get_ticket(ticket_id: TicketId, response_format: ResponseFormat = "json"):
        result = await client.get_ticket(ticket_id)
        return format_response(result, response_format, "ticket", limit_chars)

    @tool(
        "gorgias_create_ticket",
        "Create a ticket with an initial message. Give customer_id, or customer_email for a customer "
        "Gorgias should look up or create.",
    )
    async def create_ticket(
        channel: Annotated[str, Field(description="Channel for the ticket, e.g. 'email', 'chat', 'phone'")],
        message_body_text: Annotated[str, Field(description="Initial message body (plain text)")],
        customer_id: Annotated[Optional[int], Field(gt=0, description="Customer ID")] = None,
        customer_email: Annotated[Optional[str], Field(description="Customer email, used when customer_id is not given")] = None,
        subject: Annotated[Optional[str], Field(description="Ticket subject")] = None,
        message_body_html: Annotated[Optional[str], Field(description="Initial message body (HTML)")] = None,
        message_via: Annotated[str, Field(description="How the message was received")] = "api",
        from_agent: Annotated[bool, Field(description="Whether the initial message is from an agent")] = False,
    ):
        if customer_id is None and not customer_email:
            raise ValueError("Either customer_id or customer_email must be provided")
        data = TicketCreate(
            channel=channel,
            customer_id=customer_id,
            customer_email=customer_email,
            subject=subject,
            messages=[
                MessageInput(
                    channel=channel,
                    via=message_via,
                    body_text=message_body_text,
                    body_html=message_body_html,
                    from_agent=from_agent,
                    subject=subject,
                )
            ],
        )
        result = await client.create_ticket(data)
        return success_response("Ticket created", limit_chars, ticket=result)

    @tool(
        "gorgias_update_ticket",
        "Update a ticket's status, priority, assignee or snooze time. Only the fields you pass are changed; "
        "pass 0 as an assignee ID to unassign.",
    )
    async def update_ticket(
        ticket_id: TicketId,
        status: Annotated[Optional[Literal["open", "closed"]], Field(description="New status")] = None,
        priority: Annotated[Optional[Literal["low", "normal", "high", "urgent"]], Field(description="New priority")] = None,
        assignee_user_id: Annotated[Optional[int], Field(ge=0, description="User to assign (0 to unassign)")] = None,
        assignee_team_id: Annotated[Optional[int], Field(ge=0, description="Team to assign (0 to unassign)")] = None,
        snooze_until: Annotated[Optional[str], Field(description="ISO 8601 time to snooze the ticket until")] = None,
    ):
        fields = {
            "status": status,
            "priority": priority,
            "assignee_user_id": assignee_user_id,
            "assignee_team_id": assignee_team_id,
            "snooze_datetime": snooze_until,
        }
        data = TicketUpdate(**{k: v for k, v in fields.items() if v is not None})
        result = await client.update_ticket(ticket_id, data)
        return success_response("Ticket updated", limit_chars, ticket=result)

    @tool("gorgias_delete_ticket", "Permanently delete a ticket. This cannot be undone.")
    async def delete_ticket(ticket_id: TicketId):
        await client.delete_ticket(ticket_id)
        return success_response(f"Ticket {ticket_id} deleted", limit_chars)

    @tool("gorgias_add_ticket_tags", "Add existing tags to a ticket.")
    async def add_ticket_tags(ticket_id: TicketId, tag_ids: TagIds):
        await client.add_ticket_tags(ticket_id, tag_ids)
        return success_response(f"Added {len(tag_ids)} tag(s) to ticket {ticket_id}", limit_chars)

    @tool("gorgias_remove_ticket_tags", "Remove tags from a ticket. The tags themselves are kept.")
    async def remove_ticket_tags(ticket_id: TicketId, tag_ids: TagIds):
        await client.remove_ticket_tags(ticket_id, tag_ids)
        return success_response(f"Removed {len(tag_ids)} tag(s) from ticket {ticket_id}", limit_chars)

    return [
        list_tickets,
        get_ticket,
        create_ticket,
        update_ticket,
        delete_ticket,
        add_ticket_tags,
        remove_ticket_tags,
    ]
