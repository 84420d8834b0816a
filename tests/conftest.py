"""Pytest fixtures for testing the Seltzer server."""

import pytest
from unittest.mock import MagicMock, AsyncMock

from seltzer.config import Settings
from seltzer.core.dispatcher import Dispatcher
from seltzer.core.driver_factory import DriverFactory
from seltzer.core.headless import HeadlessConfig
from seltzer.core.session_manager import SessionManager, BrowserSession
from seltzer.core.session_store import SessionStore


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def mock_webelement():
    """Create a mock WebElement."""
    element = MagicMock()
    element.tag_name = "button"
    element.text = "Click Me"
    element.is_displayed.return_value = True
    element.is_enabled.return_value = True
    element.get_attribute.return_value = None
    return element


@pytest.fixture
def mock_webdriver(mock_webelement):
    """Create a mock WebDriver with common methods."""
    driver = MagicMock()

    # Navigation
    driver.get = MagicMock()
    driver.back = MagicMock()
    driver.forward = MagicMock()
    driver.current_url = "https://example.com"

    # Execute script
    driver.execute_script = MagicMock(return_value=None)

    # Find elements
    driver.find_element = MagicMock(return_value=mock_webelement)
    driver.find_elements = MagicMock(return_value=[mock_webelement])

    # Cookies
    driver.get_cookie = MagicMock(return_value=None)

    # Screenshot
    driver.get_screenshot_as_base64 = MagicMock(return_value="BASE64_DATA")

    # Cleanup
    driver.quit = MagicMock()

    return driver


@pytest.fixture
def mock_driver_factory(mock_webdriver):
    """Create mock DriverFactory that returns mock WebDriver."""
    factory = MagicMock(spec=DriverFactory)
    factory.create = AsyncMock(return_value=mock_webdriver)
    return factory


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def settings(tmp_path):
    """Settings isolated to a temporary data directory, with no retry delay."""
    return Settings(
        data_path=tmp_path,
        selector_retries=3,
        selector_retry_wait_seconds=0,
    )


@pytest.fixture
def headless_config():
    return HeadlessConfig()


@pytest.fixture
def session_store():
    return SessionStore()


@pytest.fixture
def session_manager(session_store, mock_driver_factory, headless_config, settings, clock):
    """Create SessionManager with mocked driver factory."""
    return SessionManager(
        store=session_store,
        driver_factory=mock_driver_factory,
        headless_config=headless_config,
        profile_root=settings.profile_root,
        max_sessions=5,
        clock=clock,
    )


@pytest.fixture
def dispatcher(session_manager, settings):
    return Dispatcher(session_manager, settings)


@pytest.fixture
def mock_session(mock_webdriver, session_manager, clock):
    """A registered BrowserSession backed by the mock WebDriver."""
    session_id = "test-session-123"
    working_dir = session_manager.working_dir_for(session_id)
    working_dir.mkdir(parents=True)

    session = BrowserSession(
        session_id=session_id,
        driver=mock_webdriver,
        working_dir=working_dir,
        created_at=clock(),
    )
    session_manager.store.insert(session)
    return session
