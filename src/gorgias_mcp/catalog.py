"""The full tool catalog, rebuilt against a fresh client for every request."""

from typing import List

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.toolkit import ToolSpec
from gorgias_mcp.tools.account import account_tools
from gorgias_mcp.tools.custom_fields import custom_field_tools
from gorgias_mcp.tools.customers import customer_tools
from gorgias_mcp.tools.events import event_tools
from gorgias_mcp.tools.integrations import integration_tools
from gorgias_mcp.tools.jobs import job_tools
from gorgias_mcp.tools.macros import macro_tools
from gorgias_mcp.tools.messages import message_tools
from gorgias_mcp.tools.rules import rule_tools
from gorgias_mcp.tools.satisfaction import satisfaction_tools
from gorgias_mcp.tools.tags import tag_tools
from gorgias_mcp.tools.teams import team_tools
from gorgias_mcp.tools.tickets import ticket_tools
from gorgias_mcp.tools.users import user_tools
from gorgias_mcp.tools.views import view_tools
from gorgias_mcp.tools.widgets import widget_tools

TOOL_GROUPS = [
    account_tools,
    ticket_tools,
    message_tools,
    customer_tools,
    user_tools,
    team_tools,
    tag_tools,
    macro_tools,
    rule_tools,
    integration_tools,
    view_tools,
    satisfaction_tools,
    custom_field_tools,
    event_tools,
    job_tools,
    widget_tools,
]

TOOL_NAMES = [
    # account
    "gorgias_test_connection",
    "gorgias_get_account",
    "gorgias_get_statistics",
    # tickets
    "gorgias_list_tickets",
    "gorgias_get_ticket",
    "gorgias_create_ticket",
    "gorgias_update_ticket",
    "gorgias_delete_ticket",
    "gorgias_add_ticket_tags",
    "gorgias_remove_ticket_tags",
    # messages
    "gorgias_list_messages",
    "gorgias_get_message",
    "gorgias_create_message",
    "gorgias_delete_message",
    # customers
    "gorgias_list_customers",
    "gorgias_get_customer",
    "gorgias_create_customer",
    "gorgias_update_customer",
    "gorgias_delete_customer",
    "gorgias_merge_customers",
    # users
    "gorgias_list_users",
    "gorgias_get_user",
    # teams
    "gorgias_list_teams",
    "gorgias_get_team",
    "gorgias_create_team",
    "gorgias_update_team",
    "gorgias_delete_team",
    # tags
    "gorgias_list_tags",
    "gorgias_get_tag",
    "gorgias_create_tag",
    "gorgias_update_tag",
    "gorgias_delete_tag",
    "gorgias_merge_tags",
    # macros
    "gorgias_list_macros",
    "gorgias_get_macro",
    "gorgias_create_macro",
    "gorgias_update_macro",
    "gorgias_delete_macro",
    # rules
    "gorgias_list_rules",
    "gorgias_get_rule",
    "gorgias_create_rule",
    "gorgias_update_rule",
    "gorgias_delete_rule",
    # integrations
    "gorgias_list_integrations",
    "gorgias_get_integration",
    "gorgias_create_integration",
    "gorgias_update_integration",
    "gorgias_delete_integration",
    # views
    "gorgias_list_views",
    "gorgias_get_view",
    "gorgias_create_view",
    "gorgias_update_view",
    "gorgias_delete_view",
    "gorgias_list_view_items",
    # satisfaction surveys
    "gorgias_list_satisfaction_surveys",
    "gorgias_get_satisfaction_survey",
    "gorgias_create_satisfaction_survey",
    # custom fields
    "gorgias_list_custom_fields",
    "gorgias_get_custom_field",
    "gorgias_create_custom_field",
    "gorgias_update_custom_field",
    # events
    "gorgias_list_events",
    "gorgias_get_event",
    # jobs
    "gorgias_list_jobs",
    "gorgias_get_job",
    "gorgias_create_job",
    "gorgias_cancel_job",
    # widgets
    "gorgias_list_widgets",
    "gorgias_get_widget",
    "gorgias_create_widget",
    "gorgias_update_widget",
    "gorgias_delete_widget",
]


def assemble_catalog(client: GorgiasClient) -> List[ToolSpec]:
    """Every tool, bound to `client`. Pure: nothing is registered or cached."""
    specs: List[ToolSpec] = []
    for group in TOOL_GROUPS:
        specs.extend(group(client))
    return specs
