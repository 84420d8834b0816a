"""Cookie reading commands.

A single-cookie lookup fails when the cookie is missing or empty. A
multi-cookie lookup skips missing or empty cookies and only fails when none
of the requested cookies has a value.
"""

import base64
import logging
from typing import Optional

import anyio

from ..models.commands import CommandType
from ..models.responses import MultiResultResponse, SingleResultResponse
from ..utils.error_mapper import ErrorCode, create_error_detail
from .base import require_session

logger = logging.getLogger(__name__)

# Chrome moved the cookie database under Network/ in newer releases
COOKIE_FILE_CANDIDATES = (
    ("Default", "Network", "Cookies"),
    ("Default", "Cookies"),
)


def _cookie_value(driver, name: str) -> Optional[str]:
    cookie = driver.get_cookie(name)
    if not cookie:
        return None
    return cookie.get("value") or None


async def get_cookie(ctx, session, command):
    session = require_session(session, command)
    value = await anyio.to_thread.run_sync(
        lambda: _cookie_value(session.driver, command.cookie_name)
    )

    if value:
        return SingleResultResponse(success=True, result=value)

    return SingleResultResponse(
        success=False,
        error=create_error_detail(
            ErrorCode.COOKIE_NOT_FOUND, f"Cookie not set: {command.cookie_name}"
        ),
    )


async def get_cookies(ctx, session, command):
    session = require_session(session, command)

    def read_all() -> list[str]:
        values = []
        for name in command.cookie_names:
            value = _cookie_value(session.driver, name)
            if value:
                values.append(value)
            else:
                logger.debug(f"Skipping unset cookie {name} for {session.session_id}")
        return values

    values = await anyio.to_thread.run_sync(read_all)
    return MultiResultResponse(success=bool(values), results=values)


async def get_cookie_file(ctx, session, command):
    """Base64 of the browser profile's cookie database."""
    session = require_session(session, command)

    def read_file() -> Optional[bytes]:
        for parts in COOKIE_FILE_CANDIDATES:
            path = session.working_dir.joinpath(*parts)
            if path.is_file():
                return path.read_bytes()
        return None

    try:
        data = await anyio.to_thread.run_sync(read_file)
    except OSError as e:
        logger.warning(f"Could not read cookie file for {session.session_id}: {e}")
        data = None

    if data is None:
        return SingleResultResponse(
            success=False,
            error=create_error_detail(
                ErrorCode.COOKIE_NOT_FOUND,
                f"No readable cookie file in {session.working_dir}",
            ),
        )

    return SingleResultResponse(success=True, result=base64.b64encode(data).decode("ascii"))


HANDLERS = {
    CommandType.GET_COOKIE: get_cookie,
    CommandType.GET_COOKIES: get_cookies,
    CommandType.GET_COOKIE_FILE: get_cookie_file,
}
