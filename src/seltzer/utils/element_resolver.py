"""Selector resolution utilities."""

from typing import Union

import anyio
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement

from ..core.exceptions import ElementNotFoundError
from ..models.commands import Selector, SelectorType


# Map selector types to Selenium By constants
STRATEGY_MAP = {
    SelectorType.CSS: By.CSS_SELECTOR,
    SelectorType.XPATH: By.XPATH,
    SelectorType.ID: By.ID,
    SelectorType.NAME: By.NAME,
    SelectorType.CLASS: By.CLASS_NAME,
    SelectorType.TAG: By.TAG_NAME,
    SelectorType.LINK_TEXT: By.LINK_TEXT,
    SelectorType.PARTIAL_LINK_TEXT: By.PARTIAL_LINK_TEXT,
}


def get_by_strategy(strategy: Union[SelectorType, str]) -> str:
    """
    Convert a selector type to a Selenium By constant.

    Args:
        strategy: Selector type or its name (css, xpath, id, name, class, tag, link_text)

    Returns:
        Selenium By constant

    Raises:
        ValueError: If strategy is not supported
    """
    try:
        return STRATEGY_MAP[SelectorType(strategy.lower())]
    except ValueError:
        raise ValueError(
            f"Unsupported locator strategy: {strategy}. "
            f"Supported: {[s.value for s in STRATEGY_MAP]}"
        ) from None


def locator(selector: Selector) -> tuple[str, str]:
    """(By, value) pair for expected conditions."""
    return get_by_strategy(selector.type), selector.value


async def find_all(driver: WebDriver, selector: Selector) -> list[WebElement]:
    """Every element matching the selector, possibly none."""
    by = get_by_strategy(selector.type)
    return await anyio.to_thread.run_sync(
        lambda: driver.find_elements(by, selector.value)
    )


async def find_first(driver: WebDriver, selector: Selector) -> WebElement:
    """
    First element matching the selector.

    Raises:
        ElementNotFoundError: If nothing matches
    """
    elements = await find_all(driver, selector)
    if not elements:
        raise ElementNotFoundError(str(selector))
    return elements[0]
