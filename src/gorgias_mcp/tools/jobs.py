from typing import Annotated, List, Optional

from pydantic import Field

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.formatters import format_response, success_response
from gorgias_mcp.models import JobCreate
from gorgias_mcp.toolkit import JSON_OBJECT, Cursor, Limit, ResponseFormat, ToolSpec, parse_json_argument, tool

JobId = Annotated[int, Field(gt=0, description="Job ID")]


def job_tools(client: GorgiasClient) -> List[ToolSpec]:
    limit_chars = client.settings.character_limit

    @tool("gorgias_list_jobs", "List background jobs (bulk updates, exports, ...). Cursor paginated.")
    async def list_jobs(limit: Limit = None, cursor: Cursor = None, response_format: ResponseFormat = "json"):
        result = await client.list_jobs(limit, cursor)
        return format_response(result, response_format, "jobs", limit_chars)

    @tool("gorgias_get_job", "Get a single job by ID, including its status and progress info.")
    async def get_job(job_id: JobId, response_format: ResponseFormat = "json"):
        result = await client.get_job(job_id)
        return format_response(result, response_format, "job", limit_chars)

    @tool("gorgias_create_job", "Schedule a background job of the given type with JSON parameters.")
    async def create_job(
        type: Annotated[str, Field(description="Job type")],
        params_json: Annotated[str, Field(description="Job parameters as a JSON object")],
        scheduled_datetime: Annotated[Optional[str], Field(description="When to run (ISO 8601)")] = None,
    ):
        params = parse_json_argument(params_json, "params_json", JSON_OBJECT)
        result = await client.create_job(JobCreate(type=type, params=params, scheduled_datetime=scheduled_datetime))
        return success_response("Job created", limit_chars, job=result)

    @tool("gorgias_cancel_job", "Cancel a pending or running job.")
    async def cancel_job(job_id: JobId):
        await client.cancel_job(job_id)
        return success_response(f"Job {job_id} cancelled", limit_chars)

    return [list_jobs, get_job, create_job, cancel_job]
