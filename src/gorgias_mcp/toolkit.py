"""Shared pieces for the tool modules: the ToolSpec record, the error guard and JSON arguments."""

import functools
import json
from typing import Annotated, Any, Awaitable, Callable, Dict, List, Literal, NamedTuple, Optional

from mcp.types import CallToolResult
from pydantic import Field, TypeAdapter, ValidationError

from gorgias_mcp.errors import JsonArgumentError
from gorgias_mcp.formatters import format_error
from gorgias_mcp.models import MacroAction

Handler = Callable[..., Awaitable[CallToolResult]]


class ToolSpec(NamedTuple):
    name: str
    description: str
    handler: Handler


def guarded(handler: Handler) -> Handler:
    """Turn any exception raised by a handler into an isError result."""

    @functools.wraps(handler)
    async def wrapper(*args: Any, **kwargs: Any) -> CallToolResult:
        try:
            return await handler(*args, **kwargs)
        except Exception as e:
            return format_error(e)

    return wrapper


def tool(name: str, description: str) -> Callable[[Handler], ToolSpec]:
    def decorator(handler: Handler) -> ToolSpec:
        return ToolSpec(name, description, guarded(handler))

    return decorator


# Shapes of the free-text JSON arguments
MACRO_ACTIONS = TypeAdapter(List[MacroAction])
JSON_OBJECT = TypeAdapter(Dict[str, Any])
STRING_MAP = TypeAdapter(Dict[str, str])


def parse_json_argument(raw: str, name: str, shape: TypeAdapter) -> Any:
    """Parse a JSON tool argument and check its shape. Raises JsonArgumentError, never calls out."""
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise JsonArgumentError(f"Invalid JSON in {name}: {e}") from e
    try:
        return shape.validate_python(value)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in e.errors()
        )
        raise JsonArgumentError(f"Invalid shape for {name}: {problems}") from e


def parse_optional_json(raw: Optional[str], name: str, shape: TypeAdapter) -> Any:
    if raw is None or raw == "":
        return None
    return parse_json_argument(raw, name, shape)


# Argument annotations shared by every group
ResponseFormat = Annotated[
    Literal["json", "markdown"],
    Field(description="Response format: 'json' for structured data, 'markdown' for a readable table"),
]
Limit = Annotated[
    Optional[int],
    Field(description="Number of items to return (1-100, default 20); larger values are clamped"),
]
Cursor = Annotated[Optional[str], Field(description="Pagination cursor from a previous response")]
