import json
import unittest

import httpx

from gorgias_mcp.catalog import TOOL_NAMES
from gorgias_mcp.config import Settings
from gorgias_mcp.server import create_app

from helpers import Upstream, page, reply

HEADERS = {
    "X-Gorgias-Domain": "acme",
    "X-Gorgias-Email": "agent@acme.com",
    "X-Gorgias-API-Key": "secret",
    "Accept": "application/json, text/event-stream",
    "Content-Type": "application/json",
}


def tool_call(name, arguments=None, request_id=1):
    return {
        "jsonrpc": "2.0",
        "id": request_id,
        "method": "tools/call",
        "params": {"name": name, "arguments": arguments or {}},
    }


class RouterTestCase(unittest.IsolatedAsyncioTestCase):
    def http(self, upstream=None):
        upstream = upstream or Upstream()
        app = create_app(Settings(), transport=upstream.transport)
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")

    async def call_tool(self, upstream, name, arguments=None):
        async with self.http(upstream) as http:
            response = await http.post("/mcp", json=tool_call(name, arguments), headers=HEADERS)
        self.assertEqual(response.status_code, 200)
        return response.json()["result"]


class TestRoutes(RouterTestCase):
    async def test_health(self):
        async with self.http() as http:
            response = await http.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"status": "ok", "server": "gorgias-mcp"})

    async def test_info_on_other_paths(self):
        async with self.http() as http:
            for path in ("/", "/anything/else"):
                response = await http.get(path)
                self.assertEqual(response.status_code, 200)
                body = response.json()
                self.assertEqual(body["name"], "gorgias-mcp")
                self.assertEqual(body["tools"], TOOL_NAMES)
                self.assertIn("X-Gorgias-API-Key", body["authentication"]["required_headers"])

    async def test_sse_is_not_implemented(self):
        async with self.http() as http:
            for method in ("GET", "POST"):
                response = await http.request(method, "/sse")
                self.assertEqual(response.status_code, 501)
                self.assertIn("/mcp", response.text)


class TestAuthentication(RouterTestCase):
    async def test_missing_api_key_is_rejected_before_any_tool(self):
        upstream = Upstream()
        headers = {k: v for k, v in HEADERS.items() if k != "X-Gorgias-API-Key"}
        async with self.http(upstream) as http:
            response = await http.post("/mcp", json=tool_call("gorgias_list_tickets"), headers=headers)
        self.assertEqual(response.status_code, 401)
        body = response.json()
        self.assertEqual(body["error"], "Unauthorized")
        self.assertEqual(body["message"], "Missing required headers: X-Gorgias-API-Key")
        self.assertEqual(body["required_headers"], ["X-Gorgias-Domain", "X-Gorgias-Email", "X-Gorgias-API-Key"])
        self.assertEqual(upstream.requests, [])

    async def test_no_headers_at_all(self):
        async with self.http() as http:
            response = await http.post("/mcp", json=tool_call("gorgias_list_tickets"))
        self.assertEqual(response.status_code, 401)
        self.assertEqual(
            response.json()["message"],
            "Missing required headers: X-Gorgias-Domain, X-Gorgias-Email, X-Gorgias-API-Key",
        )

    async def test_domain_that_is_not_a_subdomain_is_rejected(self):
        upstream = Upstream()
        headers = dict(HEADERS, **{"X-Gorgias-Domain": "169.254.169.254/latest/meta-data?x="})
        async with self.http(upstream) as http:
            response = await http.post("/mcp", json=tool_call("gorgias_list_users"), headers=headers)
        self.assertEqual(response.status_code, 401)
        body = response.json()
        self.assertEqual(body["error"], "Unauthorized")
        self.assertIn("X-Gorgias-Domain", body["message"])
        self.assertEqual(upstream.requests, [])


class TestEndToEnd(RouterTestCase):
    async def test_rejected_credentials(self):
        upstream = Upstream(reply(403))
        result = await self.call_tool(upstream, "gorgias_list_tickets")
        self.assertTrue(result["isError"])
        self.assertIn("Authentication failed", result["content"][0]["text"])
        self.assertEqual(len(upstream.requests), 1)
        self.assertEqual(upstream.last.url.host, "acme.gorgias.com")

    async def test_bad_macro_json(self):
        upstream = Upstream()
        result = await self.call_tool(
            upstream, "gorgias_create_macro", {"name": "Close", "actions_json": "not json"}
        )
        self.assertTrue(result["isError"])
        self.assertIn("Invalid JSON in actions_json", result["content"][0]["text"])
        self.assertEqual(upstream.requests, [])

    async def test_non_positive_ids_never_reach_gorgias(self):
        cases = [
            ("gorgias_get_ticket", {"ticket_id": -5}),
            ("gorgias_get_customer", {"customer_id": 0}),
            ("gorgias_add_ticket_tags", {"ticket_id": 101, "tag_ids": [3, -1]}),
            ("gorgias_merge_tags", {"target_tag_id": 1, "source_tag_ids": [0]}),
            ("gorgias_list_view_items", {"view_id": -2}),
        ]
        for name, arguments in cases:
            with self.subTest(tool=name):
                upstream = Upstream()
                result = await self.call_tool(upstream, name, arguments)
                self.assertTrue(result["isError"])
                self.assertEqual(upstream.requests, [])

    async def test_unassign_with_zero_is_still_accepted(self):
        upstream = Upstream(reply(200, {"id": 101, "assignee_user": None}))
        result = await self.call_tool(upstream, "gorgias_update_ticket", {"ticket_id": 101, "assignee_user_id": 0})
        self.assertFalse(result.get("isError"))
        self.assertEqual(json.loads(upstream.last.content)["assignee_user"], None)

    async def test_limit_is_clamped(self):
        upstream = Upstream(reply(200, page([{"id": 7, "email": "jane@example.com"}], next_cursor="n2")))
        result = await self.call_tool(upstream, "gorgias_list_customers", {"limit": 500})
        self.assertFalse(result.get("isError"))
        self.assertEqual(upstream.last.url.params["limit"], "100")
        payload = json.loads(result["content"][0]["text"])
        self.assertEqual(payload["nextCursor"], "n2")
        self.assertEqual(payload["items"][0]["email"], "jane@example.com")

    async def test_tools_list(self):
        async with self.http() as http:
            response = await http.post(
                "/mcp", json={"jsonrpc": "2.0", "id": 2, "method": "tools/list"}, headers=HEADERS
            )
        tools = response.json()["result"]["tools"]
        self.assertEqual([tool["name"] for tool in tools], TOOL_NAMES)
        schema = next(t for t in tools if t["name"] == "gorgias_get_ticket")["inputSchema"]
        self.assertIn("ticket_id", schema["required"])
        self.assertEqual(schema["properties"]["ticket_id"]["exclusiveMinimum"], 0)
        self.assertEqual(schema["properties"]["response_format"]["enum"], ["json", "markdown"])


if __name__ == "__main__":
    unittest.main()
