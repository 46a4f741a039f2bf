"""Shared fixtures: a recording mock of the Gorgias API."""

import json
from typing import Any, Callable, List, Optional

import httpx

from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.config import Settings
from gorgias_mcp.credentials import Credentials

CREDENTIALS = Credentials("acme", "agent@acme.com", "secret")


class Upstream:
    """httpx.MockTransport that records every request and answers with `handler`."""

    def __init__(self, handler: Optional[Callable[[httpx.Request], httpx.Response]] = None):
        self.handler = handler or (lambda request: httpx.Response(200, json={"data": [], "meta": {}}))
        self.requests: List[httpx.Request] = []
        self.transport = httpx.MockTransport(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.handler(request)

    def client(self, settings: Optional[Settings] = None) -> GorgiasClient:
        return GorgiasClient(CREDENTIALS, settings or Settings(), transport=self.transport)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self) -> Any:
        return json.loads(self.last.content)


def reply(status: int = 200, body: Any = None, headers: Optional[dict] = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if body is None:
            return httpx.Response(status, headers=headers)
        return httpx.Response(status, json=body, headers=headers)

    return handler


def page(items: list, next_cursor: Optional[str] = None) -> dict:
    return {"data": items, "meta": {"next_cursor": next_cursor, "prev_cursor": None}}


TICKET = {
    "id": 101,
    "external_id": None,
    "subject": "Where is my order?",
    "status": "open",
    "priority": "normal",
    "channel": "email",
    "via": "email",
    "from_agent": False,
    "customer": {"id": 7, "email": "jane@example.com", "name": "Jane Doe", "firstname": "Jane"},
    "assignee_user": None,
    "assignee_team": {"id": 3, "name": "Support"},
    "messages_count": 2,
    "is_unread": True,
    "spam": None,
    "created_datetime": "2024-03-01T10:15:00.000000+00:00",
    "updated_datetime": "2024-03-02T08:00:00+00:00",
    "opened_datetime": None,
    "closed_datetime": None,
    "last_received_message_datetime": "2024-03-02T08:00:00+00:00",
    "last_message_datetime": "2024-03-02T08:00:00+00:00",
    "snooze_datetime": None,
    "tags": [{"id": 9, "name": "shipping", "decoration": {"color": "#f00"}}],
    "uri": "/api/tickets/101/",
    "reply_options": {"email": {"answerable": True}},
}
