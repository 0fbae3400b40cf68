from __future__ import annotations

import asyncio
import logging

from mcp.server.fastmcp import FastMCP

from .client import TrackerClient
from .config import load_log_level
from .logging import setup_logging
from .registry import register_tools

log = logging.getLogger("tracker_mcp.server")


def build_app(client: TrackerClient) -> FastMCP:
    app = FastMCP("tracker-mcp")
    register_tools(app, client)
    return app


async def main() -> None:
    setup_logging(load_log_level())
    client = TrackerClient.from_env()

    app = build_app(client)
    log.info("Serving tracker-mcp over stdio (%s)", client.base_url)
    try:
        await app.run_stdio_async()
    finally:
        await client.aclose()


def run() -> None:
    asyncio.run(main())


if __name__ == "__main__":
    run()
