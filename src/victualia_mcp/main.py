"""CLI entry point for the Victualia MCP server."""

from __future__ import annotations

import asyncio
import logging

import uvicorn

from .config import get_settings
from .logging import configure_logging
from .server import build_server, get_http_app

logger = logging.getLogger(__name__)


async def _run() -> None:
    settings = get_settings()
    configure_logging(settings.victualia_log_level)
    logger.info("%s %s starting", settings.service_name, settings.service_version)

    mcp = await build_server(settings)
    transport = settings.victualia_mcp_transport.lower()

    if transport == "stdio":
        await mcp.run_stdio_async()
        return

    app = get_http_app(mcp, settings)
    if not app:
        raise RuntimeError(f"Unsupported transport: {settings.victualia_mcp_transport}")
    config = uvicorn.Config(app, host=settings.victualia_mcp_host, port=settings.victualia_mcp_port)
    server = uvicorn.Server(config)
    await server.serve()


def main() -> None:
    asyncio.run(_run())


if __name__ == "__main__":
    main()
