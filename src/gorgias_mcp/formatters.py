"""
Render tool results as MCP text content, in JSON or Markdown.

Nothing in here raises: a formatting problem degrades to a plainer rendering
and every exception handed to `format_error` becomes an isError result.
"""

import json
import logging
import re
from datetime import datetime
from typing import Any, Callable, Dict, List, Literal, Optional, Tuple, Union

from mcp.types import CallToolResult, TextContent

from gorgias_mcp.config import DEFAULT_CHARACTER_LIMIT
from gorgias_mcp.errors import GorgiasApiError, error_details
from gorgias_mcp.models import Listing, Paginated, Single

logger = logging.getLogger(__name__)

ResponseFormat = Literal["json", "markdown"]
Result = Union[Paginated, Listing, Single]

TRUNCATION_NOTICE = (
    "\n\n[Response truncated at {limit} characters. "
    "Use a smaller limit, a cursor, or filters to narrow the results.]"
)


def text_result(text: str, *, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


def truncate(text: str, length: int) -> str:
    if len(text) <= length:
        return text
    return text[: length - 3] + "..."


def limit_text(text: str, character_limit: int = DEFAULT_CHARACTER_LIMIT) -> str:
    if len(text) <= character_limit:
        return text
    return text[:character_limit] + TRUNCATION_NOTICE.format(limit=character_limit)


def format_date(value: Optional[str]) -> str:
    """YYYY-MM-DD for ISO timestamps; anything unparseable is echoed back."""
    if not value:
        return "-"
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).strftime("%Y-%m-%d")
    except (ValueError, AttributeError):
        return str(value)


def format_key(key: str) -> str:
    """camelCase -> Title Case."""
    spaced = re.sub(r"([A-Z])", r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def _title(entity_type: str) -> str:
    words = entity_type.replace("_", " ")
    return words[:1].upper() + words[1:]


def _cell(value: Any) -> str:
    if value is None or value == "":
        return "-"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, (dict, list)):
        return json.dumps(value).replace("|", "\\|")
    return str(value).replace("|", "\\|").replace("\n", " ")


def _display_name(item: Dict[str, Any]) -> str:
    full = f"{item.get('firstname') or ''} {item.get('lastname') or ''}".strip()
    return item.get("name") or full or "-"


def _contact(ref: Optional[Dict[str, Any]]) -> str:
    ref = ref or {}
    return ref.get("email") or ref.get("name") or "-"


# (header, cell extractor) per entity type
TABLES: Dict[str, List[Tuple[str, Callable[[Dict[str, Any]], Any]]]] = {
    "tickets": [
        ("ID", lambda t: t.get("id")),
        ("Subject", lambda t: truncate(t["subject"], 40) if t.get("subject") else "-"),
        ("Status", lambda t: t.get("status")),
        ("Priority", lambda t: t.get("priority")),
        ("Channel", lambda t: t.get("channel")),
        ("Customer", lambda t: _contact(t.get("customer"))),
        ("Created", lambda t: format_date(t.get("createdDatetime"))),
    ],
    "messages": [
        ("ID", lambda m: m.get("id")),
        ("Ticket", lambda m: m.get("ticketId")),
        ("Channel", lambda m: m.get("channel")),
        ("From Agent", lambda m: bool(m.get("fromAgent"))),
        ("Sender", lambda m: _contact(m.get("sender"))),
        ("Created", lambda m: format_date(m.get("createdDatetime"))),
    ],
    "customers": [
        ("ID", lambda c: c.get("id")),
        ("Name", _display_name),
        ("Email", lambda c: c.get("email")),
        ("Language", lambda c: c.get("language")),
        ("Tickets", lambda c: c.get("ticketsCount")),
        ("Created", lambda c: format_date(c.get("createdDatetime"))),
    ],
    "users": [
        ("ID", lambda u: u.get("id")),
        ("Name", _display_name),
        ("Email", lambda u: u.get("email")),
        ("Role", lambda u: (u.get("role") or {}).get("name")),
        ("Active", lambda u: bool(u.get("active"))),
        ("Created", lambda u: format_date(u.get("createdDatetime"))),
    ],
    "teams": [
        ("ID", lambda t: t.get("id")),
        ("Name", lambda t: t.get("name")),
        ("Description", lambda t: truncate(t["description"], 30) if t.get("description") else "-"),
        ("Members", lambda t: len(t.get("members") or [])),
        ("Created", lambda t: format_date(t.get("createdDatetime"))),
    ],
    "tags": [
        ("ID", lambda t: t.get("id")),
        ("Name", lambda t: t.get("name")),
        ("Description", lambda t: truncate(t["description"], 30) if t.get("description") else "-"),
        ("Usage", lambda t: t.get("usage")),
        ("Created", lambda t: format_date(t.get("createdDatetime"))),
    ],
    "macros": [
        ("ID", lambda m: m.get("id")),
        ("Name", lambda m: m.get("name")),
        ("Intent", lambda m: m.get("intent")),
        ("Language", lambda m: m.get("language")),
        ("Usage", lambda m: m.get("usage")),
        ("Created", lambda m: format_date(m.get("createdDatetime"))),
    ],
    "rules": [
        ("ID", lambda r: r.get("id")),
        ("Name", lambda r: r.get("name")),
        ("Event Types", lambda r: r.get("eventTypes")),
        ("Priority", lambda r: r.get("priority")),
        ("Active", lambda r: not r.get("deactivatedDatetime")),
        ("Created", lambda r: format_date(r.get("createdDatetime"))),
    ],
    "satisfaction_surveys": [
        ("ID", lambda s: s.get("id")),
        ("Score", lambda s: s.get("score")),
        ("Ticket", lambda s: s.get("ticketId")),
        ("Customer", lambda s: s.get("customerId")),
        ("Scored At", lambda s: format_date(s.get("scoredDatetime"))),
        ("Created", lambda s: format_date(s.get("createdDatetime"))),
    ],
    "integrations": [
        ("ID", lambda i: i.get("id")),
        ("Name", lambda i: i.get("name")),
        ("Type", lambda i: i.get("type")),
        ("Managed", lambda i: bool(i.get("managed"))),
        ("Created", lambda i: format_date(i.get("createdDatetime"))),
    ],
    "views": [
        ("ID", lambda v: v.get("id")),
        ("Name", lambda v: v.get("name")),
        ("Visibility", lambda v: v.get("visibility")),
        ("Order", lambda v: " ".join(x for x in (v.get("orderBy"), v.get("orderDir")) if x)),
        ("Created", lambda v: format_date(v.get("createdDatetime"))),
    ],
    "custom_fields": [
        ("ID", lambda f: f.get("id")),
        ("Label", lambda f: f.get("label")),
        ("Object", lambda f: f.get("objectType")),
        ("Type", lambda f: (f.get("definition") or {}).get("type")),
        ("Required", lambda f: bool(f.get("required"))),
        ("Created", lambda f: format_date(f.get("createdDatetime"))),
    ],
    "events": [
        ("ID", lambda e: e.get("id")),
        ("Type", lambda e: e.get("type")),
        ("Object", lambda e: e.get("objectType")),
        ("Object ID", lambda e: e.get("objectId")),
        ("User", lambda e: e.get("userId")),
        ("Created", lambda e: format_date(e.get("createdDatetime"))),
    ],
    "jobs": [
        ("ID", lambda j: j.get("id")),
        ("Type", lambda j: j.get("type")),
        ("Status", lambda j: j.get("status")),
        ("Scheduled", lambda j: format_date(j.get("scheduledDatetime"))),
        ("Completed", lambda j: format_date(j.get("completedDatetime"))),
        ("Created", lambda j: format_date(j.get("createdDatetime"))),
    ],
    "widgets": [
        ("ID", lambda w: w.get("id")),
        ("Context", lambda w: w.get("context")),
        ("Order", lambda w: w.get("order")),
        ("Integration", lambda w: w.get("integrationId")),
        ("Created", lambda w: format_date(w.get("createdDatetime"))),
    ],
}


def _table(headers: List[str], rows: List[List[Any]]) -> str:
    lines = [
        "| " + " | ".join(headers) + " |",
        "|" + "|".join("---" for _ in headers) + "|",
    ]
    for row in rows:
        lines.append("| " + " | ".join(_cell(v) for v in row) + " |")
    return "\n".join(lines)


def format_table(items: List[Dict[str, Any]], entity_type: str) -> str:
    columns = TABLES.get(entity_type)
    if columns is None:
        keys = list(items[0])[:5]
        return _table(keys, [[item.get(k) for k in keys] for item in items])
    headers = [header for header, _ in columns]
    rows = [[extract(item) for _, extract in columns] for item in items]
    return _table(headers, rows)


def _collection_markdown(result: Union[Paginated, Listing], entity_type: str) -> str:
    lines = [f"## {_title(entity_type)}", "", f"**Showing:** {len(result.items)} items"]
    next_cursor = getattr(result, "next_cursor", None)
    if next_cursor:
        lines.append(f"**More available:** Yes (cursor: `{next_cursor}`)")
    lines.append("")
    if not result.items:
        lines.append("_No items found._")
    else:
        lines.append(format_table(result.items, entity_type))
    return "\n".join(lines)


def _object_markdown(item: Any, entity_type: str) -> str:
    if not isinstance(item, dict):
        return json.dumps(item, indent=2)
    lines = [f"## {_title(re.sub(r's$', '', entity_type))}", ""]
    for key, value in item.items():
        if value is None:
            continue
        if isinstance(value, (dict, list)):
            lines.append(f"**{format_key(key)}:**")
            lines.append("```json")
            lines.append(json.dumps(value, indent=2))
            lines.append("```")
        else:
            lines.append(f"**{format_key(key)}:** {value}")
    return "\n".join(lines)


def render(result: Result, response_format: ResponseFormat, entity_type: str) -> str:
    if response_format == "markdown":
        if isinstance(result, (Paginated, Listing)):
            return _collection_markdown(result, entity_type)
        return _object_markdown(result.item, entity_type)
    return json.dumps(result.to_internal(), indent=2)


def format_response(
    result: Result,
    response_format: ResponseFormat,
    entity_type: str,
    character_limit: int = DEFAULT_CHARACTER_LIMIT,
) -> CallToolResult:
    try:
        text = render(result, response_format, entity_type)
    except Exception as e:
        logger.warning("Markdown rendering failed for %s, falling back to JSON: %s", entity_type, e)
        text = json.dumps(result.to_internal(), indent=2, default=str)
    return text_result(limit_text(text, character_limit))


def success_response(message: str, character_limit: int = DEFAULT_CHARACTER_LIMIT, **payload: Any) -> CallToolResult:
    """The {success, message, ...} envelope returned by write tools."""
    body: Dict[str, Any] = {"success": True, "message": message}
    for key, value in payload.items():
        body[key] = value.to_internal() if isinstance(value, (Paginated, Listing, Single)) else value
    return text_result(limit_text(json.dumps(body, indent=2, default=str), character_limit))


def error_message(error: BaseException) -> str:
    message = f"Error: {getattr(error, 'message', None) or str(error)}"
    if isinstance(error, GorgiasApiError) and error.retryable:
        message += " (retryable)"
    return message


def format_error(error: BaseException) -> CallToolResult:
    details = error_details(error)
    logger.warning("Tool call failed: %s", details)
    body = {"error": error_message(error), "details": details}
    return text_result(json.dumps(body, indent=2, default=str), is_error=True)

