from typing import Annotated, List, Optional

from pydantic import Field, PositiveInt

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import TeamCreate, TeamUpdate
from gorgias_mcp.toolkit import ResponseFormat, ToolSpec, tool

TeamId = Annotated[int, Field(gt=0, description="Team ID")]
MemberIds = Annotated[Optional[List[PositiveInt]], Field(description="User IDs of the team members")]


def team_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_teams", "List all teams. Not paginated.")
    async def list_teams(response_format: ResponseFormat = "json"):
        result = await client.list_teams()
        return format_response(result, response_format, "teams", limit_chars)

    @tool("gorgias_get_team", "Get a single team by ID, including its members.")
    async def get_team(team_id: TeamId, response_format: ResponseFormat = "json"):
        result = await client.get_team(team_id)
        return format_response(result, response_format, "team", limit_chars)

    @tool("gorgias_create_team", "Create a team of agents.")
    async def create_team(
        name: Annotated[str, Field(description="Team name")],
        description: Annotated[Optional[str], Field(description="Team description")] = None,
        member_ids: MemberIds = None,
    ):
        data = TeamCreate(name=name, description=description, member_ids=member_ids)
        result = await client.create_team(data)
        return success_response("Team created", limit_chars, team=result)

    @tool("gorgias_update_team", "Update a team. Passing member_ids replaces the whole member list.")
    async def update_team(
        team_id: TeamId,
        name: Annotated[Optional[str], Field(description="Team name")] = None,
        description: Annotated[Optional[str], Field(description="Team description")] = None,
        member_ids: MemberIds = None,
    ):
        data = TeamUpdate(name=name, description=description, member_ids=member_ids)
        result = await client.update_team(team_id, data)
        return success_response("Team updated", limit_chars, team=result)

    @tool("gorgias_delete_team", "Delete a team. Its members keep their accounts.")
    async def delete_team(team_id: TeamId):
        await client.delete_team(team_id)
        return success_response(f"Team {team_id} deleted", limit_chars)

    return [list_teams, get_team, create_team, update_team, delete_team]
