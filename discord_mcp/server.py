"""MCP Server for Discord.

This module provides a FastMCP-based MCP server exposing Discord administration
and messaging operations: servers, channels, categories, messages, users,
webhooks, forums and threads. The Discord client is started lazily on the
first tool call that needs it and closed once, when the process shuts down.
"""

import argparse
import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager

from mcp.server import FastMCP
from starlette.requests import Request
from starlette.responses import Response

from .client import LazyClientHandle
from .config import Settings
from .config import get_settings
from .context import DiscordContext
from .context import create_client_handle
from .context import create_context
from .metrics_config import ensure_metrics_initialized
from .metrics_config import get_metrics_export
from .metrics_config import get_metrics_summary
from .metrics_config import is_metrics_enabled
from .metrics_config import shutdown_metrics
from .tools import ALL_REGISTRARS

SERVER_NAME = "DiscordTools"

logger = logging.getLogger(__name__)


def register_all_tools(mcp_server: FastMCP, context: DiscordContext) -> None:
    for register in ALL_REGISTRARS:
        register(mcp_server, context)


def register_metrics_routes(mcp_server: FastMCP) -> None:
    """Expose Prometheus metrics over the SSE transport's HTTP server."""

    @mcp_server.custom_route("/metrics", methods=["GET"], name="metrics")
    async def metrics_endpoint(request: Request) -> Response:
        """Prometheus metrics endpoint for monitoring MCP tool usage."""
        metrics_data, content_type = get_metrics_export()
        return Response(content=metrics_data, status_code=200, media_type=content_type)

    @mcp_server.custom_route("/metrics/summary", methods=["GET"], name="metrics_summary")
    async def metrics_summary_endpoint(request: Request) -> Response:
        """JSON summary of the metrics configuration and status."""
        return Response(
            content=json.dumps(get_metrics_summary(), indent=2),
            status_code=200,
            media_type="application/json",
        )


def create_server(settings: Settings | None = None, client: LazyClientHandle | None = None) -> FastMCP:
    """Build a server with every tool family registered against one shared context.

    The lifespan runs once per MCP session (once per connection under SSE),
    so it only hands out the shared context; the client handle outlives every
    session and is closed by whoever owns it.
    """
    settings = settings or get_settings()
    context = create_context(settings, client)

    @asynccontextmanager
    async def lifespan(server: FastMCP):
        yield context

    mcp_server = FastMCP(name=SERVER_NAME, lifespan=lifespan)
    mcp_server.settings.host = settings.sse_host
    mcp_server.settings.port = settings.sse_port
    register_all_tools(mcp_server, context)
    register_metrics_routes(mcp_server)
    return mcp_server


async def serve(mcp_server: FastMCP, client: LazyClientHandle, transport: str) -> None:
    """Run the server on ``transport`` and close the Discord client when it stops."""
    try:
        if transport == "stdio":
            await mcp_server.run_stdio_async()
        else:
            await mcp_server.run_sse_async()
    finally:
        await client.close()


# --- Main Server Execution ---
def main():
    """Run the main entry point for the server with argument parsing."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Discord MCP Server")
    parser.add_argument(
        "transport",
        choices=["sse", "stdio"],
        default="stdio",
        nargs="?",
        help="Transport: 'sse' for HTTP SSE or 'stdio' for standard I/O (default: stdio)",
    )
    parser.add_argument(
        "--host",
        default=settings.sse_host,
        help=f"Host to bind to for SSE transport (default: {settings.sse_host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.sse_port,
        help=f"Port to bind to for SSE transport (default: {settings.sse_port})",
    )
    args = parser.parse_args()

    # stdout carries the MCP protocol in stdio mode
    logging.basicConfig(
        stream=sys.stderr,
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not settings.token_configured:
        print("DISCORD_TOKEN environment variable is not set", file=sys.stderr)
        sys.exit(1)

    ensure_metrics_initialized(settings.enable_metrics)
    logger.info("Metrics: %s", "enabled" if is_metrics_enabled() else "disabled")
    if settings.default_scope:
        logger.info("Default Discord server: %s", settings.default_scope)

    client = create_client_handle(settings)
    mcp_server = create_server(settings, client)
    if args.transport == "stdio":
        logger.info("MCP server running with stdio transport. Waiting for client connection...")
    else:
        logger.info("MCP server running with HTTP SSE transport on %s:%s", args.host, args.port)
        logger.info("SSE endpoint: http://%s:%s/sse", args.host, args.port)
        logger.info("Metrics endpoint: http://%s:%s/metrics", args.host, args.port)
        mcp_server.settings.host = args.host
        mcp_server.settings.port = args.port
    try:
        asyncio.run(serve(mcp_server, client, args.transport))
    finally:
        shutdown_metrics()


if __name__ == "__main__":
    main()
