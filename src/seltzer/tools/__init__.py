"""MCP tools, grouped into sub-routers merged at startup."""

from fastmcp import FastMCP

from .commands import commands_router
from .meta import meta_router

ROUTERS = (commands_router, meta_router)


def create_tool_router() -> FastMCP:
    """Empty router that the sub-routers are imported into."""
    return FastMCP("SeltzerTools")


async def import_all_tools(router: FastMCP) -> None:
    """Merge every sub-router's tools into ``router``."""
    for sub_router in ROUTERS:
        await router.import_server(sub_router)


__all__ = ["create_tool_router", "import_all_tools"]
