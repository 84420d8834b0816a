"""Server status tools."""

from fastmcp import FastMCP, Context

from .. import __version__

meta_router = FastMCP(
    name="StatusTools",
    instructions="Server status and live session overview",
)


@meta_router.tool(
    description="Report server version, headless mode and the number of live sessions",
    tags={"meta", "health"},
)
async def ping(ctx: Context) -> dict:
    app_ctx = ctx.request_context.lifespan_context
    headless = app_ctx.headless_config

    return {
        "status": "ok",
        "version": __version__,
        "headless": headless.headless,
        "headless_locked": headless.locked,
        "sessions": app_ctx.session_manager.session_count,
    }


@meta_router.tool(
    description="List live browser sessions with their timestamps and current URL",
    tags={"meta", "sessions"},
)
async def list_sessions(ctx: Context) -> dict:
    """
    Snapshot of the session store.

    Timestamps are milliseconds since the epoch; ``last_used_at`` is null
    until the first command reaches the session.
    """
    sessions = ctx.request_context.lifespan_context.session_manager.list_sessions()
    return {"sessions": sessions, "count": len(sessions)}
