"""Page navigation commands."""

import anyio

from ..core.exceptions import DomainNotAllowedError
from ..models.commands import CommandType
from ..models.responses import BasicResponse, SingleResultResponse
from ..utils.guardrails import validate_domain, extract_domain
from .base import require_session


async def back(ctx, session, command):
    """Navigate back to the previous page in browser history."""
    session = require_session(session, command)
    await anyio.to_thread.run_sync(lambda: session.driver.back())
    return BasicResponse(success=True)


async def forward(ctx, session, command):
    """Navigate forward to the next page in browser history."""
    session = require_session(session, command)
    await anyio.to_thread.run_sync(lambda: session.driver.forward())
    return BasicResponse(success=True)


async def go_to(ctx, session, command):
    """
    Navigate browser to the command's URL.

    Subject to domain guardrails if ALLOWED_DOMAINS is configured.
    """
    session = require_session(session, command)

    allowed_domains = ctx.settings.allowed_domain_list
    if allowed_domains and not validate_domain(command.url, allowed_domains):
        domain = extract_domain(command.url)
        raise DomainNotAllowedError(domain or command.url, allowed_domains)

    await anyio.to_thread.run_sync(lambda: session.driver.get(command.url))
    return BasicResponse(success=True)


async def get_url(ctx, session, command):
    """Current page URL as a single result."""
    session = require_session(session, command)
    url = await anyio.to_thread.run_sync(lambda: session.driver.current_url)
    return SingleResultResponse(success=True, result=url)


HANDLERS = {
    CommandType.BACK: back,
    CommandType.FORWARD: forward,
    CommandType.GO_TO: go_to,
    CommandType.GET_URL: get_url,
}
