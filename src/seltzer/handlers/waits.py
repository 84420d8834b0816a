"""Wait and synchronization commands."""

import anyio
from selenium.webdriver.support.ui import WebDriverWait
from selenium.webdriver.support import expected_conditions as EC
from selenium.common.exceptions import StaleElementReferenceException, TimeoutException

from ..models.commands import CommandType
from ..models.responses import BasicResponse
from ..utils.element_resolver import locator
from ..utils.error_mapper import ErrorCode, error_response
from .base import require_session

# Map wait commands to expected conditions
CONDITION_MAP = {
    CommandType.WAIT_EXISTS: EC.presence_of_element_located,
    CommandType.WAIT_VISIBLE: EC.visibility_of_element_located,
    CommandType.WAIT_CLICKABLE: EC.element_to_be_clickable,
    CommandType.WAIT_HIDDEN: EC.invisibility_of_element_located,
}


async def _wait_until(
    session, condition, seconds: float, description: str, ignored_exceptions=None
):
    wait = WebDriverWait(session.driver, seconds, ignored_exceptions=ignored_exceptions)
    try:
        await anyio.to_thread.run_sync(lambda: wait.until(condition))
    except TimeoutException:
        return error_response(
            ErrorCode.TIMEOUT, f"Timeout ({seconds}s) waiting for {description}"
        )
    return BasicResponse(success=True)


def _describe(command) -> str:
    state = command.type.value.replace("WAIT_", "").lower()
    return f"{command.selector} to be {state}"


async def wait(ctx, session, command):
    """Pause for a fixed number of seconds."""
    await anyio.sleep(command.seconds)
    return BasicResponse(success=True)


async def wait_for_selector(ctx, session, command):
    """Wait until an element meets the command's condition."""
    session = require_session(session, command)
    condition = CONDITION_MAP[command.type](locator(command.selector))
    return await _wait_until(session, condition, command.seconds, _describe(command))


async def refreshed_wait(ctx, session, command):
    """
    Wait on the wrapped condition, re-locating the element if it goes stale
    while the page redraws.
    """
    session = require_session(session, command)
    inner = command.wait
    condition = CONDITION_MAP[inner.type](locator(inner.selector))
    return await _wait_until(
        session,
        condition,
        command.seconds,
        _describe(inner),
        ignored_exceptions=(StaleElementReferenceException,),
    )


HANDLERS = {
    CommandType.WAIT: wait,
    CommandType.WAIT_EXISTS: wait_for_selector,
    CommandType.WAIT_VISIBLE: wait_for_selector,
    CommandType.WAIT_CLICKABLE: wait_for_selector,
    CommandType.WAIT_HIDDEN: wait_for_selector,
    CommandType.REFRESHED_WAIT: refreshed_wait,
}
