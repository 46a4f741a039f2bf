import logging
from typing import Any, Dict, Optional

import httpx
import uvicorn
from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from gorgias_mcp.catalog import TOOL_NAMES, assemble_catalog
from gorgias_mcp.client import GorgiasClient
from gorgias_mcp.config import (
    PACKAGE_VERSION,
    SERVER_NAME,
    Settings,
    get_host,
    get_log_level,
    get_port,
)
from gorgias_mcp.credentials import (
    API_KEY_HEADER,
    DOMAIN_HEADER,
    EMAIL_HEADER,
    REQUIRED_HEADERS,
    extract_credentials,
    validate_credentials,
)
from gorgias_mcp.errors import CredentialsError

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
SSE_NOT_SUPPORTED = (
    "SSE transport is not supported. Send MCP requests to POST /mcp "
    "(Streamable HTTP) with the X-Gorgias-* headers."
)


def build_server(client: GorgiasClient) -> FastMCP:
    """A fresh stateless FastMCP server whose tools all talk through `client`."""
    server = FastMCP(
        SERVER_NAME,
        stateless_http=True,
        json_response=True,
        # any Host header is accepted
        transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
    )
    for spec in assemble_catalog(client):
        server.add_tool(spec.handler, name=spec.name, description=spec.description, structured_output=False)
    return server


def service_info() -> Dict[str, Any]:
    return {
        "name": SERVER_NAME,
        "version": PACKAGE_VERSION,
        "description": "Gorgias Helpdesk MCP Server - Multi-tenant",
        "endpoints": {
            "mcp": "/mcp (POST) - Streamable HTTP MCP endpoint",
            "health": "/health - Health check",
        },
        "authentication": {
            "description": "Every /mcp request must carry the tenant's Gorgias credentials in these headers",
            "required_headers": {
                DOMAIN_HEADER: "Gorgias subdomain, e.g. 'acme' for acme.gorgias.com",
                EMAIL_HEADER: "Email of the Gorgias user owning the API key",
                API_KEY_HEADER: "Gorgias REST API key",
            },
        },
        "tools": TOOL_NAMES,
    }


class McpEndpoint:
    """ASGI endpoint for POST /mcp: authenticate from headers, then serve one stateless MCP exchange."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self.transport = transport

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        try:
            credentials = validate_credentials(extract_credentials(request.headers))
        except CredentialsError as e:
            logger.info("Rejected MCP request: %s", e)
            response = JSONResponse(
                {"error": "Unauthorized", "message": str(e), "required_headers": REQUIRED_HEADERS},
                status_code=401,
            )
            await response(scope, receive, send)
            return

        async with GorgiasClient(credentials, self.settings, transport=self.transport) as client:
            server = build_server(client)
            server.streamable_http_app()
            async with server.session_manager.run():
                await server.session_manager.handle_request(scope, receive, send)


async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok", "server": SERVER_NAME})


async def sse_not_supported(request: Request) -> PlainTextResponse:
    return PlainTextResponse(SSE_NOT_SUPPORTED, status_code=501)


async def info(request: Request) -> JSONResponse:
    return JSONResponse(service_info())


def create_app(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Starlette:
    """`transport` replaces the network for upstream Gorgias calls (tests use httpx.MockTransport)."""
    settings = settings or Settings.from_env()
    return Starlette(
        routes=[
            Route("/health", health, methods=["GET", "HEAD"]),
            Route("/mcp", McpEndpoint(settings, transport), methods=["POST"]),
            Route("/sse", sse_not_supported, methods=ALL_METHODS),
            Route("/{path:path}", info, methods=ALL_METHODS),
        ]
    )


app = create_app()


def main():
    logging.basicConfig(
        level=get_log_level(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    host, port = get_host(), get_port()
    logging.info("Starting Gorgias MCP server %s on %s:%d", PACKAGE_VERSION, host, port)
    uvicorn.run(app, host=host, port=port, log_level=get_log_level().lower())


if __name__ == "__main__":
    main()
