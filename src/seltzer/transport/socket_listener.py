"""TCP listener speaking newline-delimited JSON commands."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Optional, Union

import anyio
from anyio.abc import SocketAttribute, SocketStream
from anyio.streams.buffered import BufferedByteReceiveStream
from pydantic import ValidationError

from ..models.commands import parse_command
from ..utils.error_mapper import ErrorCode, error_response

if TYPE_CHECKING:
    from ..core.dispatcher import Dispatcher
    from ..models.responses import Response

logger = logging.getLogger(__name__)

DELIMITER = b"\n"


def _peek_id(raw: Union[str, bytes]) -> Optional[str]:
    """Best-effort read of the ``id`` field from a payload that failed validation."""
    try:
        data = json.loads(raw)
    except (ValueError, TypeError):
        return None
    if isinstance(data, dict) and isinstance(data.get("id"), str):
        return data["id"]
    return None


class CommandListener:
    """
    Accepts TCP connections and answers each command line with one response line.

    A malformed line is answered with an INVALID_COMMAND failure and the
    connection stays open. Errors on one connection never reach the others.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        host: str = "0.0.0.0",
        port: int = 39948,
        max_message_bytes: int = 1_048_576,
    ):
        self._dispatcher = dispatcher
        self._host = host
        self._port = port
        self._max_message_bytes = max_message_bytes

    async def serve(self, *, task_status=anyio.TASK_STATUS_IGNORED) -> None:
        """
        Listen until cancelled.

        Reports the bound port through ``task_status`` so callers using
        ``TaskGroup.start`` can connect to an ephemeral port.
        """
        listener = await anyio.create_tcp_listener(
            local_host=self._host, local_port=self._port
        )
        port = listener.extra(SocketAttribute.local_port)
        logger.info(f"Command listener on {self._host}:{port}")
        task_status.started(port)

        async with listener:
            await listener.serve(self.handle_connection)

    async def handle_connection(self, stream: SocketStream) -> None:
        """Serve one client until it disconnects."""
        peer = stream.extra(SocketAttribute.remote_address, None)
        logger.debug(f"Connection from {peer}")
        receiver = BufferedByteReceiveStream(stream)

        async with stream:
            while True:
                try:
                    line = await receiver.receive_until(DELIMITER, self._max_message_bytes)
                except anyio.IncompleteRead:
                    # Client closed its side; answer a last command sent without a newline
                    tail = bytes(receiver.buffer)
                    if tail.strip():
                        logger.debug(f"Unterminated command from {peer} at end of stream")
                        await self._reply_last(stream, peer, tail)
                    break
                except anyio.EndOfStream:
                    break
                except anyio.DelimiterNotFound:
                    logger.warning(
                        f"Message from {peer} exceeded {self._max_message_bytes} bytes"
                    )
                    response = error_response(
                        ErrorCode.INVALID_COMMAND,
                        f"Message exceeds {self._max_message_bytes} bytes",
                    )
                    await self._send(stream, response)
                    break
                except (anyio.BrokenResourceError, anyio.ClosedResourceError) as e:
                    logger.debug(f"Connection from {peer} dropped: {e}")
                    break

                if not line.strip():
                    continue

                response = await self.handle_line(line)
                try:
                    await self._send(stream, response)
                except (anyio.BrokenResourceError, anyio.ClosedResourceError) as e:
                    logger.info(f"Client {peer} went away before reply: {e}")
                    break

        logger.debug(f"Connection from {peer} closed")

    async def handle_line(self, raw: Union[str, bytes]) -> Response:
        """Parse one command line and run it."""
        try:
            command = parse_command(raw)
        except ValidationError as e:
            logger.info(f"Rejected invalid command: {e.error_count()} error(s)")
            return error_response(
                ErrorCode.INVALID_COMMAND,
                f"Invalid command: {e}",
                command_id=_peek_id(raw),
            )

        return await self._dispatcher.execute(command)

    async def _reply_last(self, stream: SocketStream, peer, raw: bytes) -> None:
        response = await self.handle_line(raw)
        try:
            await self._send(stream, response)
        except (anyio.BrokenResourceError, anyio.ClosedResourceError) as e:
            logger.info(f"Client {peer} went away before reply: {e}")

    @staticmethod
    async def _send(stream: SocketStream, response: Response) -> None:
        await stream.send(response.model_dump_json().encode("utf-8") + DELIMITER)
