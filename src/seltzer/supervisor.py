"""Process supervisor: builds the shared services and runs both boundaries."""

from __future__ import annotations

import logging
import signal

import anyio

from .config import Settings
from .core.dispatcher import Dispatcher
from .core.driver_factory import DriverFactory
from .core.headless import HeadlessConfig
from .core.reaper import SessionReaper
from .core.session_manager import SessionManager
from .core.session_store import SessionStore
from .server import AppContext, configure_logging, create_server, setup_server
from .transport import CommandListener

logger = logging.getLogger(__name__)


def build_app(settings: Settings) -> AppContext:
    """
    Construct every shared service from settings.

    Headless mode is only applied when enabled; it is then locked unless
    ``headless_locked`` is turned off.
    """
    headless_config = HeadlessConfig()
    if settings.headless_enabled:
        headless_config.set_headless(True, lock=settings.headless_locked)

    driver_factory = DriverFactory(
        mode=settings.driver_mode,
        browser=settings.browser,
        grid_url=settings.selenium_grid_url,
        driver_path=settings.chromedriver_path,
        page_load_timeout=settings.page_load_timeout_seconds,
        implicit_wait=settings.implicit_wait_seconds,
    )

    store = SessionStore()
    session_manager = SessionManager(
        store=store,
        driver_factory=driver_factory,
        headless_config=headless_config,
        profile_root=settings.profile_root,
        max_sessions=settings.max_concurrent_sessions,
    )

    reaper = SessionReaper(
        session_manager=session_manager,
        never_used_timeout_seconds=settings.session_never_used_timeout_seconds,
        inactive_timeout_seconds=settings.session_inactive_timeout_seconds,
        interval_seconds=settings.reap_interval_seconds,
    )

    return AppContext(
        settings=settings,
        headless_config=headless_config,
        store=store,
        session_manager=session_manager,
        dispatcher=Dispatcher(session_manager, settings),
        reaper=reaper,
    )


async def _watch_signals(scope: anyio.CancelScope) -> None:
    with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
        async for signum in signals:
            logger.info(f"Received {signal.Signals(signum).name}, shutting down")
            scope.cancel()
            return


async def _serve_http(mcp, settings: Settings, scope: anyio.CancelScope) -> None:
    # uvicorn handles SIGINT/SIGTERM itself while it runs; once it returns, stop the rest
    await mcp.run_async(transport="http", host=settings.host, port=settings.port)
    scope.cancel()


async def run(settings: Settings) -> None:
    """
    Run the server until SIGINT or SIGTERM, then close every session.

    Raises:
        Exception: Startup failures (bad configuration, port in use) propagate
    """
    configure_logging(settings.log_level)
    app = build_app(settings)

    logger.info(
        f"Starting Seltzer (driver: {settings.driver_mode}/{settings.browser}, "
        f"headless: {app.headless_config.headless})"
    )

    try:
        async with anyio.create_task_group() as tg:
            tg.start_soon(_watch_signals, tg.cancel_scope)
            tg.start_soon(app.reaper.run)

            listener = CommandListener(
                app.dispatcher,
                host=settings.socket_host,
                port=settings.socket_port,
                max_message_bytes=settings.socket_max_message_bytes,
            )
            await tg.start(listener.serve)

            if settings.http_enabled:
                mcp = create_server(app)
                await setup_server(mcp)
                tg.start_soon(_serve_http, mcp, settings, tg.cancel_scope)
    finally:
        logger.info("Shutting down Seltzer...")
        with anyio.CancelScope(shield=True):
            closed = await app.session_manager.close_all()
        logger.info(f"Shutdown complete ({closed} sessions closed)")
