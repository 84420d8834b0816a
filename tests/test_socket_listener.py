"""Tests for the newline-delimited JSON command listener."""

import json

import anyio
import pytest
from anyio.streams.buffered import BufferedByteReceiveStream

from seltzer.transport import CommandListener


@pytest.fixture
def listener(dispatcher):
    return CommandListener(dispatcher, host="127.0.0.1", port=0, max_message_bytes=4096)


async def read_reply(receiver: BufferedByteReceiveStream) -> dict:
    return json.loads(await receiver.receive_until(b"\n", 65536))


class TestHandleLine:
    """Tests for single command lines."""

    @pytest.mark.asyncio
    async def test_valid_command(self, listener, mock_session):
        line = json.dumps({"type": "GET_URL", "id": mock_session.session_id}).encode()

        response = await listener.handle_line(line)

        assert response.success is True
        assert response.result == "https://example.com"

    @pytest.mark.asyncio
    async def test_invalid_json(self, listener):
        response = await listener.handle_line(b"{not json")

        assert response.success is False
        assert response.id is None
        assert response.error.code == "INVALID_COMMAND"

    @pytest.mark.asyncio
    async def test_invalid_schema_echoes_id(self, listener):
        response = await listener.handle_line(b'{"type": "GO_TO", "id": "s1"}')

        assert response.success is False
        assert response.id == "s1"
        assert response.error.code == "INVALID_COMMAND"


class TestServe:
    """Round trips over a real TCP connection."""

    @pytest.mark.asyncio
    async def test_round_trip(self, listener, mock_session):
        async with anyio.create_task_group() as tg:
            port = await tg.start(listener.serve)

            async with await anyio.connect_tcp("127.0.0.1", port) as stream:
                receiver = BufferedByteReceiveStream(stream)

                await stream.send(b'{"type": "GET_URL", "id": "test-session-123"}\n')
                first = await read_reply(receiver)

                await stream.send(b"garbage\n")
                second = await read_reply(receiver)

                await stream.send(b'{"type": "BACK", "id": "test-session-123"}\n')
                third = await read_reply(receiver)

            tg.cancel_scope.cancel()

        assert first["success"] is True
        assert first["id"] == "test-session-123"
        assert first["result"] == "https://example.com"
        assert second["success"] is False
        assert second["error"]["code"] == "INVALID_COMMAND"
        assert third["success"] is True

    @pytest.mark.asyncio
    async def test_oversized_message(self, dispatcher):
        listener = CommandListener(dispatcher, host="127.0.0.1", port=0, max_message_bytes=64)

        async with anyio.create_task_group() as tg:
            port = await tg.start(listener.serve)

            async with await anyio.connect_tcp("127.0.0.1", port) as stream:
                receiver = BufferedByteReceiveStream(stream)
                await stream.send(b"x" * 100)
                reply = await read_reply(receiver)

            tg.cancel_scope.cancel()

        assert reply["success"] is False
        assert reply["error"]["code"] == "INVALID_COMMAND"

    @pytest.mark.asyncio
    async def test_client_disconnect_does_not_stop_listener(self, listener, mock_session):
        async with anyio.create_task_group() as tg:
            port = await tg.start(listener.serve)

            dropped = await anyio.connect_tcp("127.0.0.1", port)
            await dropped.send(b'{"type": "GET_URL"')
            await dropped.aclose()

            async with await anyio.connect_tcp("127.0.0.1", port) as stream:
                receiver = BufferedByteReceiveStream(stream)
                await stream.send(b'{"type": "GET_URL", "id": "test-session-123"}\n')
                reply = await read_reply(receiver)

            tg.cancel_scope.cancel()

        assert reply["success"] is True

    @pytest.mark.asyncio
    async def test_last_command_without_newline_is_answered(self, listener, mock_session):
        async with anyio.create_task_group() as tg:
            port = await tg.start(listener.serve)

            async with await anyio.connect_tcp("127.0.0.1", port) as stream:
                receiver = BufferedByteReceiveStream(stream)
                await stream.send(b'{"type": "GET_URL", "id": "test-session-123"}')
                await stream.send_eof()
                reply = await read_reply(receiver)

            tg.cancel_scope.cancel()

        assert reply["success"] is True
        assert reply["id"] == "test-session-123"
        assert reply["result"] == "https://example.com"
