"""Routes commands to their handlers and runs them against sessions."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import anyio

from ..handlers import Handler, HandlerContext, default_handlers
from ..models.commands import CommandType
from ..utils.error_mapper import ErrorCode, error_response, exception_response
from .chain import execute_chain
from .exceptions import SeltzerError

if TYPE_CHECKING:
    from ..config import Settings
    from ..models.commands import Command
    from ..models.responses import Response
    from .session_manager import BrowserSession, SessionManager

logger = logging.getLogger(__name__)


class Dispatcher:
    """
    Executes command descriptors.

    ``execute`` is the entry point for the network boundaries: it resolves the
    target session and runs the command while holding that session's lock, so
    commands for one session never interleave. ``dispatch`` does the routing
    and is re-entered, without the lock, for every step of a chain.

    Neither method raises for a failed command; every failure comes back as a
    response with ``success=False``.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        settings: Settings,
        handlers: Optional[dict[CommandType, Handler]] = None,
    ):
        self._session_manager = session_manager
        self._handlers: dict[CommandType, Handler] = dict(
            handlers if handlers is not None else default_handlers()
        )
        self._handlers[CommandType.CHAIN] = self._chain
        self._context = HandlerContext(
            session_manager=session_manager,
            settings=settings,
            dispatch=self.dispatch,
        )

    @property
    def session_manager(self) -> SessionManager:
        return self._session_manager

    async def execute(self, command: Command) -> Response:
        """
        Run a command received from a client.

        START needs no session. Every other command must name a live session;
        an unknown ID yields a SESSION_NOT_FOUND failure.
        """
        if command.type == CommandType.START:
            return await self.dispatch(None, command)

        session = self._session_manager.store.find(command.id)
        if session is None:
            logger.info(f"Command {command.type.value} for unknown session {command.id}")
            return error_response(
                ErrorCode.SESSION_NOT_FOUND,
                f"Session not found: {command.id}",
                command_id=command.id,
            )

        async with session.lock:
            # EXIT or the reaper may have closed it while this command waited
            detached = self._session_manager.store.find(session.session_id) is not session
            if session.closed or detached:
                logger.info(f"Command {command.type.value} for closed session {command.id}")
                return error_response(
                    ErrorCode.SESSION_NOT_FOUND,
                    f"Session not found: {command.id}",
                    command_id=command.id,
                )
            return await self.dispatch(session, command)

    async def dispatch(self, session: Optional[BrowserSession], command: Command) -> Response:
        """
        Route one command to its handler.

        Stamps the session as used, runs the handler, and sets the response ID
        to the command's ID whatever the handler returned.
        """
        if session is not None:
            session.touch(self._session_manager.clock())

        if command.type != CommandType.CHAIN:
            logger.debug(f"Processing command: {command.model_dump_json()}")

        screenshot_before = None
        if command.screenshot_before:
            screenshot_before = await self._screenshot(session)

        handler = self._handlers.get(command.type)
        if handler is None:
            logger.warning(f"No handler for command type {command.type}")
            response = error_response(
                ErrorCode.UNSUPPORTED_COMMAND,
                f"Unsupported command type: {command.type.value}",
            )
        else:
            try:
                response = await handler(self._context, session, command)
            except SeltzerError as e:
                logger.info(f"{command.type.value} failed for {command.id}: {e}")
                response = exception_response(e)
            except Exception as e:
                logger.error(
                    f"{command.type.value} raised for {command.id}: {e!r}",
                    exc_info=logger.isEnabledFor(logging.DEBUG),
                )
                response = exception_response(e)

        if screenshot_before is not None:
            response.screenshot_before = screenshot_before
        if command.screenshot_after:
            response.screenshot_after = await self._screenshot(session)

        response.id = command.id
        return response

    async def _chain(self, ctx: HandlerContext, session, command) -> Response:
        return await execute_chain(self.dispatch, session, command)

    async def _screenshot(self, session: Optional[BrowserSession]) -> Optional[str]:
        """Base64 PNG of the session's viewport, or None if it cannot be taken."""
        if session is None or session.closed:
            return None
        try:
            return await anyio.to_thread.run_sync(session.driver.get_screenshot_as_base64)
        except Exception as e:
            logger.warning(f"Screenshot failed for {session.session_id}: {e}")
            return None
