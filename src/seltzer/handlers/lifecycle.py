"""Session lifecycle commands: START and EXIT."""

import logging

from ..models.commands import CommandType
from ..models.responses import BasicResponse, SingleResultResponse
from ..utils.error_mapper import ErrorCode, error_response

logger = logging.getLogger(__name__)


async def start(ctx, session, command):
    """
    Start a new browser session.

    The new session's ID is returned as the single result; the response ID
    still echoes the command's own ID.
    """
    new_session = await ctx.session_manager.start_session()
    return SingleResultResponse(success=True, result=new_session.session_id)


async def exit_session(ctx, session, command):
    """Close the session named by the command ID."""
    target = ctx.session_manager.store.find(command.id)
    if target is None:
        return error_response(
            ErrorCode.SESSION_NOT_FOUND, f"Session not found: {command.id}"
        )

    closed = await ctx.session_manager.close(target)
    return BasicResponse(success=closed)


HANDLERS = {
    CommandType.START: start,
    CommandType.EXIT: exit_session,
}
