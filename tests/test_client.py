import base64
import unittest

import httpx

from gorgias_mcp.client import normalize_page_params, parse_retry_after
from gorgias_mcp.config import Settings
from gorgias_mcp.errors import AuthenticationError, GorgiasApiError, RateLimitError
from gorgias_mcp.models import (
    CustomerUpdate,
    MacroAction,
    MacroCreate,
    MessageInput,
    StatisticQuery,
    TagCreate,
    TeamCreate,
    TicketCreate,
    TicketListParams,
    TicketUpdate,
)

from helpers import TICKET, Upstream, page, reply


class TestPageParams(unittest.TestCase):
    def setUp(self):
        self.settings = Settings()

    def test_defaults(self):
        self.assertEqual(normalize_page_params(None, None, self.settings), (20, None))
        self.assertEqual(normalize_page_params(0, None, self.settings), (20, None))

    def test_clamps(self):
        self.assertEqual(normalize_page_params(500, None, self.settings)[0], 100)
        self.assertEqual(normalize_page_params(-3, None, self.settings)[0], 1)
        self.assertEqual(normalize_page_params(42, None, self.settings)[0], 42)

    def test_cursor_is_forwarded_verbatim(self):
        self.assertEqual(normalize_page_params(10, "abc==", self.settings), (10, "abc=="))

    def test_custom_settings(self):
        settings = Settings(default_page_size=5, max_page_size=30)
        self.assertEqual(normalize_page_params(None, None, settings)[0], 5)
        self.assertEqual(normalize_page_params(99, None, settings)[0], 30)


class TestRetryAfter(unittest.TestCase):
    def test_parsing(self):
        self.assertEqual(parse_retry_after("30"), 30)
        self.assertEqual(parse_retry_after(None), 60)
        self.assertEqual(parse_retry_after("soon"), 60)
        self.assertEqual(parse_retry_after("99999"), 3600)


class TestRequestBasics(unittest.IsolatedAsyncioTestCase):
    async def test_base_url_and_auth(self):
        upstream = Upstream(reply(200, page([])))
        async with upstream.client() as client:
            await client.list_users()
        request = upstream.last
        self.assertEqual(request.url.host, "acme.gorgias.com")
        self.assertEqual(request.url.path, "/api/users")
        token = base64.b64encode(b"agent@acme.com:secret").decode()
        self.assertEqual(request.headers["Authorization"], f"Basic {token}")
        self.assertEqual(request.headers["Content-Type"], "application/json")
        self.assertTrue(request.headers["User-Agent"].startswith("gorgias-mcp/"))


class TestStatusClassification(unittest.IsolatedAsyncioTestCase):
    async def test_rate_limited(self):
        upstream = Upstream(reply(429, {"message": "slow down"}, headers={"Retry-After": "30"}))
        async with upstream.client() as client:
            with self.assertRaises(RateLimitError) as ctx:
                await client.get_ticket(1)
        self.assertEqual(ctx.exception.retry_after, 30)
        self.assertTrue(ctx.exception.retryable)
        self.assertEqual(ctx.exception.status_code, 429)
        self.assertEqual(len(upstream.requests), 1)

    async def test_rate_limited_without_header(self):
        upstream = Upstream(reply(429))
        async with upstream.client() as client:
            with self.assertRaises(RateLimitError) as ctx:
                await client.get_ticket(1)
        self.assertEqual(ctx.exception.retry_after, 60)

    async def test_forbidden(self):
        upstream = Upstream(reply(403, {"message": "nope"}))
        async with upstream.client() as client:
            with self.assertRaises(AuthenticationError) as ctx:
                await client.get_ticket(1)
        self.assertEqual(ctx.exception.message, "Authentication failed. Check your Gorgias credentials.")
        self.assertFalse(ctx.exception.retryable)
        self.assertEqual(ctx.exception.status_code, 403)

    async def test_unauthorized(self):
        upstream = Upstream(reply(401))
        async with upstream.client() as client:
            with self.assertRaises(AuthenticationError):
                await client.list_tags()

    async def test_server_error_uses_body_message(self):
        upstream = Upstream(reply(500, {"message": "boom"}))
        async with upstream.client() as client:
            with self.assertRaises(GorgiasApiError) as ctx:
                await client.get_customer(1)
        self.assertNotIsInstance(ctx.exception, RateLimitError)
        self.assertEqual(ctx.exception.message, "boom")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertFalse(ctx.exception.retryable)

    async def test_error_field_and_fallback(self):
        upstream = Upstream(reply(400, {"error": "bad request"}))
        async with upstream.client() as client:
            with self.assertRaises(GorgiasApiError) as ctx:
                await client.get_customer(1)
        self.assertEqual(ctx.exception.message, "bad request")

        upstream = Upstream(lambda request: httpx.Response(404, text="not json"))
        async with upstream.client() as client:
            with self.assertRaises(GorgiasApiError) as ctx:
                await client.get_customer(1)
        self.assertEqual(ctx.exception.message, "API error: 404")

    async def test_no_content(self):
        upstream = Upstream(reply(204))
        async with upstream.client() as client:
            self.assertIsNone(await client.delete_ticket(5))
        self.assertEqual(upstream.last.method, "DELETE")
        self.assertEqual(upstream.last.url.path, "/api/tickets/5")


class TestPagination(unittest.IsolatedAsyncioTestCase):
    async def test_limit_is_clamped_upstream(self):
        upstream = Upstream(reply(200, page([])))
        async with upstream.client() as client:
            await client.list_customers(limit=500)
        self.assertEqual(upstream.last.url.params["limit"], "100")

    async def test_default_limit_and_cursor(self):
        upstream = Upstream(reply(200, page([])))
        async with upstream.client() as client:
            await client.list_macros(cursor="next-123")
        params = upstream.last.url.params
        self.assertEqual(params["limit"], "20")
        self.assertEqual(params["cursor"], "next-123")

    async def test_page_is_mapped(self):
        upstream = Upstream(reply(200, page([TICKET], next_cursor="c2")))
        async with upstream.client() as client:
            result = await client.list_tickets(TicketListParams(status="open", customer_id=7))
        self.assertEqual(result.next_cursor, "c2")
        self.assertEqual(result.items[0]["id"], 101)
        self.assertEqual(result.items[0]["createdDatetime"], "2024-03-01T10:15:00.000000+00:00")
        self.assertNotIn("replyOptions", result.items[0])
        params = upstream.last.url.params
        self.assertEqual(params["status"], "open")
        self.assertEqual(params["customer_id"], "7")
        self.assertNotIn("channel", params)

    async def test_empty_page(self):
        upstream = Upstream(reply(200, {"data": [], "meta": {"next_cursor": None}}))
        async with upstream.client() as client:
            result = await client.list_events()
        self.assertEqual(result.items, [])
        self.assertIsNone(result.next_cursor)
        self.assertEqual(result.to_internal(), {"items": []})

    async def test_missing_data(self):
        upstream = Upstream(reply(200, {"meta": {}}))
        async with upstream.client() as client:
            result = await client.list_jobs()
        self.assertEqual(result.items, [])

    async def test_plain_list(self):
        upstream = Upstream(reply(200, [{"id": 1, "name": "vip", "usage": 3}]))
        async with upstream.client() as client:
            result = await client.list_tags()
        self.assertEqual(result.items[0]["name"], "vip")
        self.assertEqual(result.to_internal(), {"items": result.items})

    async def test_tag_ids_filter(self):
        upstream = Upstream(reply(200, page([])))
        async with upstream.client() as client:
            await client.list_tickets(TicketListParams(tag_ids=[1, 2]))
        self.assertEqual(upstream.last.url.params["tag_ids"], "1,2")


class TestWriteBodies(unittest.IsolatedAsyncioTestCase):
    async def test_create_ticket_by_email(self):
        upstream = Upstream(reply(201, TICKET))
        data = TicketCreate(
            channel="email",
            customer_email="jane@example.com",
            subject="Hi",
            messages=[MessageInput(channel="email", body_text="Hello")],
        )
        async with upstream.client() as client:
            result = await client.create_ticket(data)
        body = upstream.last_json()
        self.assertEqual(body["customer"], {"email": "jane@example.com"})
        self.assertEqual(body["messages"][0], {"channel": "email", "via": "api", "body_text": "Hello", "from_agent": False})
        self.assertEqual(result.item["id"], 101)

    async def test_create_ticket_prefers_id(self):
        upstream = Upstream(reply(201, TICKET))
        data = TicketCreate(
            channel="email", customer_id=7, customer_email="jane@example.com",
            messages=[MessageInput(channel="email", body_text="Hello", sender_id=4)],
        )
        async with upstream.client() as client:
            await client.create_ticket(data)
        body = upstream.last_json()
        self.assertEqual(body["customer"], {"id": 7})
        self.assertEqual(body["messages"][0]["sender"], {"id": 4})
        self.assertNotIn("subject", body)

    async def test_update_ticket_sends_only_set_fields(self):
        upstream = Upstream(reply(200, TICKET))
        async with upstream.client() as client:
            await client.update_ticket(101, TicketUpdate(status="closed"))
        self.assertEqual(upstream.last_json(), {"status": "closed"})
        self.assertEqual(upstream.last.method, "PUT")

    async def test_update_ticket_unassigns(self):
        upstream = Upstream(reply(200, TICKET))
        async with upstream.client() as client:
            await client.update_ticket(101, TicketUpdate(assignee_user_id=0, assignee_team_id=3))
        self.assertEqual(upstream.last_json(), {"assignee_user": None, "assignee_team": {"id": 3}})

    async def test_ticket_tags(self):
        upstream = Upstream(reply(204))
        async with upstream.client() as client:
            await client.add_ticket_tags(101, [1, 2])
            self.assertEqual(upstream.last.method, "POST")
            self.assertEqual(upstream.last_json(), {"tags": [{"id": 1}, {"id": 2}]})
            await client.remove_ticket_tags(101, [2])
        self.assertEqual(upstream.last.method, "DELETE")
        self.assertEqual(upstream.last.url.path, "/api/tickets/101/tags")
        self.assertEqual(upstream.last_json(), {"tags": [{"id": 2}]})

    async def test_partial_customer_update(self):
        upstream = Upstream(reply(200, {"id": 7, "email": "new@example.com"}))
        async with upstream.client() as client:
            await client.update_customer(7, CustomerUpdate(email="new@example.com"))
        self.assertEqual(upstream.last_json(), {"email": "new@example.com"})

    async def test_merge_customers(self):
        upstream = Upstream(reply(200, {"id": 7}))
        async with upstream.client() as client:
            result = await client.merge_customers(7, 8)
        self.assertEqual(upstream.last.url.path, "/api/customers/7/merge")
        self.assertEqual(upstream.last_json(), {"customer_id": 8})
        self.assertEqual(result.item["id"], 7)

    async def test_merge_tags(self):
        upstream = Upstream(reply(200, {"id": 1, "name": "vip"}))
        async with upstream.client() as client:
            await client.merge_tags(1, [2, 3])
        self.assertEqual(upstream.last.url.path, "/api/tags/merge")
        self.assertEqual(upstream.last_json(), {"target_id": 1, "source_ids": [2, 3]})

    async def test_team_members_and_tag_color(self):
        upstream = Upstream(reply(201, {"id": 1, "name": "x"}))
        async with upstream.client() as client:
            await client.create_team(TeamCreate(name="Tier 2", member_ids=[4, 5]))
            self.assertEqual(upstream.last_json(), {"name": "Tier 2", "members": [{"id": 4}, {"id": 5}]})
            await client.create_tag(TagCreate(name="vip", color="#ff0000"))
        self.assertEqual(upstream.last_json(), {"name": "vip", "decoration": {"color": "#ff0000"}})

    async def test_macro_actions(self):
        upstream = Upstream(reply(201, {"id": 2, "name": "Close"}))
        data = MacroCreate(name="Close", actions=[MacroAction(type="setStatus", args={"status": "closed"})])
        async with upstream.client() as client:
            await client.create_macro(data)
        self.assertEqual(
            upstream.last_json(),
            {"name": "Close", "actions": [{"type": "setStatus", "args": {"status": "closed"}}]},
        )

    async def test_statistics(self):
        upstream = Upstream(reply(200, {
            "data": {"total": 12},
            "meta": {"start_datetime": "2024-01-01", "end_datetime": "2024-01-31",
                     "previous_start_datetime": "2023-12-01", "previous_end_datetime": "2023-12-31"},
        }))
        query = StatisticQuery(start_datetime="2024-01-01", end_datetime="2024-01-31")
        async with upstream.client() as client:
            result = await client.get_statistic("overview", query)
        self.assertEqual(upstream.last.url.path, "/api/stats/overview")
        self.assertEqual(upstream.last_json(), {"start_datetime": "2024-01-01", "end_datetime": "2024-01-31"})
        self.assertEqual(result.item["meta"]["previousStartDatetime"], "2023-12-01")


class TestConnection(unittest.IsolatedAsyncioTestCase):
    async def test_connected(self):
        upstream = Upstream(reply(200, page([])))
        async with upstream.client() as client:
            status = await client.test_connection()
        self.assertEqual(status, {"connected": True, "message": "Successfully connected to Gorgias"})
        self.assertEqual(upstream.last.url.params["limit"], "1")

    async def test_never_raises(self):
        upstream = Upstream(reply(401))
        async with upstream.client() as client:
            status = await client.test_connection()
        self.assertFalse(status["connected"])
        self.assertIn("Authentication failed", status["message"])


if __name__ == "__main__":
    unittest.main()
