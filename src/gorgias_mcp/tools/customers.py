from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import CustomerCreate, CustomerUpdate
from gorgias_mcp.toolkit import JSON_OBJECT, Cursor, Limit, ResponseFormat, ToolSpec, parse_optional_json, tool

CustomerId = Annotated[int, Field(gt=0, description="Customer ID")]
DataJson = Annotated[Optional[str], Field(description="Custom customer data as a JSON object string")]


def customer_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_customers", "List customers, optionally filtered by exact email. Cursor paginated.")
    async def list_customers(
        limit: Limit = None,
        cursor: Cursor = None,
        email: Annotated[Optional[str], Field(description="Filter by email address")] = None,
        response_format: ResponseFormat = "json",
    ):
        result = await client.list_customers(limit, cursor, email)
        return format_response(result, response_format, "customers", limit_chars)

    @tool("gorgias_get_customer", "Get a single customer by ID, including channels and integration data.")
    async def get_customer(customer_id: CustomerId, response_format: ResponseFormat = "json"):
        result = await client.get_customer(customer_id)
        return format_response(result, response_format, "customer", limit_chars)

    @tool("gorgias_create_customer", "Create a customer.")
    async def create_customer(
        email: Annotated[Optional[str], Field(description="Email address")] = None,
        name: Annotated[Optional[str], Field(description="Full name")] = None,
        firstname: Annotated[Optional[str], Field(description="First name")] = None,
        lastname: Annotated[Optional[str], Field(description="Last name")] = None,
        external_id: Annotated[Optional[str], Field(description="ID in an external system")] = None,
        note: Annotated[Optional[str], Field(description="Internal note about the customer")] = None,
        language: Annotated[Optional[str], Field(description="Preferred language code, e.g. 'en'")] = None,
        timezone: Annotated[Optional[str], Field(description="IANA timezone, e.g. 'Europe/Paris'")] = None,
        data_json: DataJson = None,
    ):
        data = CustomerCreate(
            email=email,
            name=name,
            firstname=firstname,
            lastname=lastname,
            external_id=external_id,
            note=note,
            language=language,
            timezone=timezone,
            data=parse_optional_json(data_json, "data_json", JSON_OBJECT),
        )
        result = await client.create_customer(data)
        return success_response("Customer created", limit_chars, customer=result)

    @tool("gorgias_update_customer", "Update a customer. Only the fields you pass are changed.")
    async def update_customer(
        customer_id: CustomerId,
        email: Annotated[Optional[str], Field(description="Email address")] = None,
        name: Annotated[Optional[str], Field(description="Full name")] = None,
        firstname: Annotated[Optional[str], Field(description="First name")] = None,
        lastname: Annotated[Optional[str], Field(description="Last name")] = None,
        external_id: Annotated[Optional[str], Field(description="ID in an external system")] = None,
        note: Annotated[Optional[str], Field(description="Internal note about the customer")] = None,
        language: Annotated[Optional[str], Field(description="Preferred language code")] = None,
        timezone: Annotated[Optional[str], Field(description="IANA timezone")] = None,
        data_json: DataJson = None,
    ):
        data = CustomerUpdate(
            email=email,
            name=name,
            firstname=firstname,
            lastname=lastname,
            external_id=external_id,
            note=note,
            language=language,
            timezone=timezone,
            data=parse_optional_json(data_json, "data_json", JSON_OBJECT),
        )
        result = await client.update_customer(customer_id, data)
        return success_response("Customer updated", limit_chars, customer=result)

    @tool("gorgias_delete_customer", "Delete a customer. This cannot be undone.")
    async def delete_customer(customer_id: CustomerId):
        await client.delete_customer(customer_id)
        return success_response(f"Customer {customer_id} deleted", limit_chars)

    @tool(
        "gorgias_merge_customers",
        "Merge the source customer into the target customer. The target survives with the source's "
        "tickets and channels; the source is removed.",
    )
    async def merge_customers(
        target_customer_id: Annotated[int, Field(gt=0, description="Customer that survives the merge")],
        source_customer_id: Annotated[int, Field(gt=0, description="Customer merged into the target")],
    ):
        if target_customer_id == source_customer_id:
            raise ValueError("Cannot merge a customer into itself")
        result = await client.merge_customers(target_customer_id, source_customer_id)
        return success_response("Customers merged", limit_chars, customer=result)

    return [list_customers, get_customer, create_customer, update_customer, delete_customer, merge_customers]
