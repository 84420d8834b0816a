"""Tests for the MCP tools and server wiring."""

import anyio
import pytest
from unittest.mock import AsyncMock, MagicMock, patch
from starlette.testclient import TestClient

from seltzer.config import Settings
from seltzer.server import create_server, setup_server
from seltzer.core.session_manager import SessionManager
from seltzer.supervisor import build_app, run
from seltzer.tools import commands, meta

# Get the underlying functions from the decorated tools
execute_command_fn = commands.execute_command.fn
list_sessions_fn = meta.list_sessions.fn
ping_fn = meta.ping.fn


@pytest.fixture
def mock_ctx(dispatcher, session_manager, headless_config):
    """Create a mock FastMCP Context."""
    ctx = MagicMock()

    app_ctx = MagicMock()
    app_ctx.dispatcher = dispatcher
    app_ctx.session_manager = session_manager
    app_ctx.headless_config = headless_config

    ctx.request_context.lifespan_context = app_ctx
    return ctx


class TestCommandTool:
    """Tests for execute_command."""

    @pytest.mark.asyncio
    async def test_start_and_exit(self, mock_ctx, session_manager):
        started = await execute_command_fn(mock_ctx, command={"type": "START"})

        assert started["success"] is True
        session_id = started["result"]
        assert session_manager.store.find(session_id) is not None

        exited = await execute_command_fn(mock_ctx, command={"type": "EXIT", "id": session_id})

        assert exited["success"] is True
        assert exited["id"] == session_id
        assert session_manager.store.find(session_id) is None

    @pytest.mark.asyncio
    async def test_invalid_command(self, mock_ctx):
        result = await execute_command_fn(mock_ctx, command={"type": "TELEPORT", "id": "s1"})

        assert result["success"] is False
        assert result["id"] == "s1"
        assert result["error"]["code"] == "INVALID_COMMAND"


class TestMetaTools:
    """Tests for ping and list_sessions."""

    @pytest.mark.asyncio
    async def test_ping(self, mock_ctx, mock_session):
        result = await ping_fn(mock_ctx)

        assert result["status"] == "ok"
        assert result["headless"] is False
        assert result["sessions"] == 1

    @pytest.mark.asyncio
    async def test_list_sessions(self, mock_ctx, mock_session):
        result = await list_sessions_fn(mock_ctx)

        assert result["count"] == 1
        assert result["sessions"][0]["session_id"] == mock_session.session_id


class TestBuildApp:
    """Tests for assembling the shared services."""

    def test_headless_disabled_stays_unlocked(self, tmp_path):
        app = build_app(Settings(data_path=tmp_path))

        assert app.headless_config.headless is False
        assert app.headless_config.locked is False

    def test_headless_enabled_is_locked(self, tmp_path):
        app = build_app(Settings(data_path=tmp_path, headless_enabled=True))

        assert app.headless_config.headless is True
        assert app.headless_config.locked is True

    def test_headless_lock_can_be_disabled(self, tmp_path):
        app = build_app(
            Settings(data_path=tmp_path, headless_enabled=True, headless_locked=False)
        )

        assert app.headless_config.headless is True
        assert app.headless_config.locked is False

    def test_services_share_one_store(self, tmp_path):
        app = build_app(Settings(data_path=tmp_path))

        assert app.session_manager.store is app.store
        assert app.dispatcher.session_manager is app.session_manager


class TestServer:
    """Tests for the FastMCP server."""

    @pytest.mark.asyncio
    async def test_tools_registered(self, tmp_path):
        mcp = create_server(build_app(Settings(data_path=tmp_path)))

        await setup_server(mcp)
        tools = await mcp.get_tools()

        assert {"execute_command", "list_sessions", "ping"} <= set(tools)

    def test_health_route(self, tmp_path):
        mcp = create_server(build_app(Settings(data_path=tmp_path)))
        client = TestClient(mcp.http_app())

        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["sessions"] == 0


class TestSupervisor:
    """Tests for the process run loop."""

    @pytest.mark.asyncio
    async def test_run_closes_sessions_on_shutdown(self, tmp_path):
        settings = Settings(
            data_path=tmp_path,
            http_enabled=False,
            socket_host="127.0.0.1",
            socket_port=0,
        )

        with patch.object(SessionManager, "close_all", AsyncMock(return_value=0)) as close_all:
            with anyio.move_on_after(0.2):
                await run(settings)

        close_all.assert_awaited_once()
