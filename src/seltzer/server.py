"""FastMCP server exposing the command dispatcher over HTTP."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator

from fastmcp import FastMCP
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from . import __version__
from .config import Settings
from .core.dispatcher import Dispatcher
from .core.headless import HeadlessConfig
from .core.reaper import SessionReaper
from .core.session_manager import SessionManager
from .core.session_store import SessionStore
from .tools import create_tool_router, import_all_tools

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
    )


@dataclass
class AppContext:
    """Services shared by both boundaries and handed to tools via the lifespan."""

    settings: Settings
    headless_config: HeadlessConfig
    store: SessionStore
    session_manager: SessionManager
    dispatcher: Dispatcher
    reaper: SessionReaper


def create_server(app: AppContext) -> FastMCP:
    """
    Create the MCP server (without tools - they're added async by setup_server).

    The supervisor owns startup and shutdown of the shared services, so the
    lifespan only hands the existing context to tools.
    """

    @asynccontextmanager
    async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
        logger.debug("MCP lifespan entered")
        yield app

    mcp = FastMCP(
        name="seltzer",
        instructions=(
            "Browser automation server. Send a START command to open a browser "
            "session, then address commands to the returned session ID. "
            "Always finish with an EXIT command."
        ),
        lifespan=app_lifespan,
    )

    # Health check endpoint for Docker/Kubernetes
    @mcp.custom_route("/health", methods=["GET"])
    async def health_check(request: Request) -> Response:
        """Health check endpoint for container orchestration."""
        return JSONResponse(
            {
                "status": "ok",
                "version": __version__,
                "sessions": app.session_manager.session_count,
            }
        )

    return mcp


async def setup_server(mcp: FastMCP) -> None:
    """Import all tool routers into the server (async)."""
    tool_router = create_tool_router()
    await import_all_tools(tool_router)
    await mcp.import_server(tool_router)
