"""Tool that runs protocol commands, the same ones the socket listener accepts."""

import logging
from typing import Annotated

from pydantic import Field, ValidationError
from fastmcp import FastMCP, Context

from ..models.commands import parse_command
from ..utils.error_mapper import ErrorCode, error_response

logger = logging.getLogger(__name__)

commands_router = FastMCP(
    name="CommandTools",
    instructions=(
        "Run Seltzer commands. START returns a session ID as its result; pass "
        "that ID as the 'id' of every later command, and EXIT when done."
    ),
)


def get_context(ctx: Context):
    """Helper to retrieve app context from lifespan."""
    return ctx.request_context.lifespan_context


@commands_router.tool(
    description=(
        "Execute a command descriptor such as "
        '{"type": "GO_TO", "id": "<session>", "url": "https://example.com"}. '
        "CHAIN runs a list of commands for one session, stopping at the first failure."
    ),
    tags={"commands"},
)
async def execute_command(
    ctx: Context,
    command: Annotated[dict, Field(description="Command descriptor with a 'type' field")],
) -> dict:
    """
    Validate and execute a single command.

    Args:
        command: Command descriptor

    Returns:
        The command's response; failures have success=false and an error
    """
    app_ctx = get_context(ctx)

    try:
        parsed = parse_command(command)
    except ValidationError as e:
        logger.info(f"Rejected invalid command from MCP client: {e.error_count()} error(s)")
        raw_id = command.get("id")
        response = error_response(
            ErrorCode.INVALID_COMMAND,
            f"Invalid command: {e}",
            command_id=raw_id if isinstance(raw_id, str) else None,
        )
        return response.model_dump(mode="json")

    response = await app_ctx.dispatcher.execute(parsed)
    return response.model_dump(mode="json")
