"""Element interaction commands addressed by selector."""

import logging

import anyio
from selenium.common.exceptions import StaleElementReferenceException
from selenium.webdriver.common.keys import Keys

from ..models.commands import CommandType
from ..models.responses import BasicResponse, SingleResultResponse
from ..utils.element_resolver import find_all, find_first
from ..core.exceptions import ElementNotFoundError
from .base import require_session

logger = logging.getLogger(__name__)


# Short names accepted on top of Selenium's own key names
KEY_ALIASES = {
    "ESC": "ESCAPE",
    "CTRL": "CONTROL",
    "DEL": "DELETE",
}


def resolve_key(name: str) -> str:
    """
    Convert a key name (ENTER, BACK_SPACE, ARROW_LEFT, ESC...) to its Selenium code.

    Raises:
        ValueError: If the name is not a known key
    """
    key = name.strip().upper()
    key = KEY_ALIASES.get(key, key)
    value = getattr(Keys, key, None) if not key.startswith("_") else None
    if not isinstance(value, str):
        raise ValueError(f"Unknown key: {name}")
    return value


async def with_retries(ctx, action):
    """
    Run an element action, retrying when the element goes stale mid-action.

    Other failures propagate immediately.
    """
    attempts = max(1, ctx.settings.selector_retries)
    for attempt in range(1, attempts + 1):
        try:
            return await action()
        except StaleElementReferenceException as e:
            if attempt == attempts:
                raise
            logger.warning(f"Stale element on try {attempt} of {attempts}: {e.msg}")
            await anyio.sleep(ctx.settings.selector_retry_wait_seconds)


async def click(ctx, session, command):
    session = require_session(session, command)

    async def action():
        element = await find_first(session.driver, command.selector)
        # Scroll into view and click
        await anyio.to_thread.run_sync(
            lambda: session.driver.execute_script(
                "arguments[0].scrollIntoView({block: 'center'});", element
            )
        )
        await anyio.to_thread.run_sync(lambda: element.click())
        return BasicResponse(success=True)

    return await with_retries(ctx, action)


async def count(ctx, session, command):
    """Number of matching elements as a single result. Zero matches is still a success."""
    session = require_session(session, command)
    elements = await find_all(session.driver, command.selector)
    return SingleResultResponse(success=True, result=str(len(elements)))


async def delete(ctx, session, command):
    """Remove every matching element from the DOM."""
    session = require_session(session, command)

    async def action():
        elements = await find_all(session.driver, command.selector)
        if not elements:
            raise ElementNotFoundError(str(command.selector))

        def remove_all() -> None:
            for element in elements:
                session.driver.execute_script("arguments[0].remove();", element)

        await anyio.to_thread.run_sync(remove_all)
        return BasicResponse(success=True)

    return await with_retries(ctx, action)


async def fill_field(ctx, session, command):
    """Replace the content of the first matching input."""
    session = require_session(session, command)

    async def action():
        element = await find_first(session.driver, command.selector)
        await anyio.to_thread.run_sync(lambda: element.clear())
        await anyio.to_thread.run_sync(lambda: element.send_keys(command.text))
        return BasicResponse(success=True)

    return await with_retries(ctx, action)


async def form_submit(ctx, session, command):
    session = require_session(session, command)

    async def action():
        element = await find_first(session.driver, command.selector)
        await anyio.to_thread.run_sync(lambda: element.submit())
        return BasicResponse(success=True)

    return await with_retries(ctx, action)


async def read_text(ctx, session, command):
    session = require_session(session, command)

    async def action():
        element = await find_first(session.driver, command.selector)
        text = await anyio.to_thread.run_sync(lambda: element.text)
        return SingleResultResponse(success=True, result=text)

    return await with_retries(ctx, action)


async def read_attribute(ctx, session, command):
    """Attribute value of the first match; fails if the attribute is absent."""
    session = require_session(session, command)

    async def action():
        element = await find_first(session.driver, command.selector)
        value = await anyio.to_thread.run_sync(
            lambda: element.get_attribute(command.attribute)
        )
        return SingleResultResponse(success=value is not None, result=value)

    return await with_retries(ctx, action)


async def send_key(ctx, session, command):
    """Send one named key to the first match."""
    session = require_session(session, command)
    key = resolve_key(command.key)

    async def action():
        element = await find_first(session.driver, command.selector)
        await anyio.to_thread.run_sync(lambda: element.send_keys(key))
        return BasicResponse(success=True)

    return await with_retries(ctx, action)


async def send_keys(ctx, session, command):
    """Type literal text into the first match without clearing it."""
    session = require_session(session, command)

    async def action():
        element = await find_first(session.driver, command.selector)
        await anyio.to_thread.run_sync(lambda: element.send_keys(command.keys))
        return BasicResponse(success=True)

    return await with_retries(ctx, action)


HANDLERS = {
    CommandType.CLICK: click,
    CommandType.COUNT: count,
    CommandType.DELETE: delete,
    CommandType.FILL_FIELD: fill_field,
    CommandType.FORM_SUBMIT: form_submit,
    CommandType.READ_TEXT: read_text,
    CommandType.READ_ATTRIBUTE: read_attribute,
    CommandType.SEND_KEY: send_key,
    CommandType.SEND_KEYS: send_keys,
}
