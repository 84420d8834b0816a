"""Sequential, fail-fast execution of chained commands."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Awaitable, Callable, Optional

from ..models.responses import ChainResponse
from ..utils.error_mapper import ErrorCode, error_response

if TYPE_CHECKING:
    from ..models.commands import ChainCommand, Command
    from ..models.responses import Response
    from .session_manager import BrowserSession

logger = logging.getLogger(__name__)


async def execute_chain(
    dispatch: Callable[[Optional[BrowserSession], Command], Awaitable[Response]],
    session: Optional[BrowserSession],
    command: ChainCommand,
) -> ChainResponse:
    """
    Run a chain's sub-commands in order against one session.

    A sub-command addressed to any other session ID is not executed; a failed
    response carrying the chain's ID takes its place. Execution stops after the
    first failed sub-response, which is still included in the results.

    Args:
        dispatch: Dispatcher entry for a single command (chains may nest)
        session: Session the chain runs against
        command: The chain

    Returns:
        ChainResponse whose success is the AND of every sub-response seen
    """
    logger.debug(f"Processing chain of {len(command.commands)} command(s) for {command.id}")
    response = ChainResponse(id=command.id, success=True)

    for index, sub_command in enumerate(command.commands):
        if sub_command.id != command.id:
            logger.warning(
                f"Chain {command.id} step {index} targets {sub_command.id}; not executed"
            )
            sub_response = error_response(
                ErrorCode.CHAIN_ID_MISMATCH,
                f"Chained command targets session {sub_command.id}, not {command.id}",
                command_id=command.id,
            )
        else:
            sub_response = await dispatch(session, sub_command)

        response.success = response.success and sub_response.success
        response.responses.append(sub_response)

        if not response.success:
            logger.debug(f"Chain {command.id} stopped at step {index}")
            break

    return response
