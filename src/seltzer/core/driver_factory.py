"""Factory for creating the WebDriver instances that back sessions."""

import logging
from pathlib import Path
from typing import Optional

import anyio
from selenium import webdriver
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.common.exceptions import WebDriverException

from .exceptions import DriverStartError

logger = logging.getLogger(__name__)


class DriverFactory:
    """
    Creates WebDriver instances, either a local browser driven by a driver
    binary or a RemoteWebDriver connected to Selenium Grid.

    Every session gets its own profile directory, passed to the browser so
    sessions never share cookies or storage.

    All WebDriver creation is run in a thread pool to avoid blocking
    the async event loop, since Selenium's API is synchronous.
    """

    def __init__(
        self,
        mode: str = "local",
        browser: str = "chrome",
        grid_url: str = "http://localhost:4444",
        driver_path: Optional[str] = None,
        page_load_timeout: int = 30,
        implicit_wait: int = 0,
    ):
        self.mode = mode
        self.browser = browser
        self.grid_url = grid_url
        self.driver_path = driver_path
        self.page_load_timeout = page_load_timeout
        self.implicit_wait = implicit_wait

    async def create(self, headless: bool, user_data_dir: Path) -> WebDriver:
        """
        Start a new browser.

        Args:
            headless: Run browser in headless mode
            user_data_dir: Private profile directory for this browser

        Returns:
            Configured WebDriver instance

        Raises:
            DriverStartError: If the browser or its driver binary cannot be started
            ValueError: If browser type or mode is not supported
        """
        options = self._build_options(
            browser=self.browser,
            headless=headless,
            user_data_dir=user_data_dir,
        )

        try:
            # Run blocking WebDriver creation in thread pool
            driver = await anyio.to_thread.run_sync(lambda: self._launch(options))
        except (WebDriverException, OSError) as e:
            raise DriverStartError(str(e)) from e

        try:
            await anyio.to_thread.run_sync(
                lambda: driver.set_page_load_timeout(self.page_load_timeout)
            )
            await anyio.to_thread.run_sync(
                lambda: driver.implicitly_wait(self.implicit_wait)
            )
        except BaseException as e:
            # Runs on cancellation too, so the launched browser is always quit
            with anyio.CancelScope(shield=True):
                try:
                    await anyio.to_thread.run_sync(driver.quit)
                except WebDriverException as quit_error:
                    logger.warning(f"Could not quit half-configured driver: {quit_error}")
            if isinstance(e, WebDriverException):
                raise DriverStartError(str(e)) from e
            raise

        return driver

    def _launch(self, options) -> WebDriver:
        """Instantiate the driver (blocking)."""
        if self.mode == "remote":
            return webdriver.Remote(command_executor=self.grid_url, options=options)

        if self.mode != "local":
            raise ValueError(f"Unsupported driver mode: {self.mode}. Supported: ['local', 'remote']")

        services = {
            "chrome": (webdriver.Chrome, webdriver.ChromeService),
            "firefox": (webdriver.Firefox, webdriver.FirefoxService),
            "edge": (webdriver.Edge, webdriver.EdgeService),
        }
        driver_cls, service_cls = services[self.browser.lower()]
        service = service_cls(executable_path=self.driver_path) if self.driver_path else service_cls()
        return driver_cls(service=service, options=options)

    def _build_options(
        self,
        browser: str,
        headless: bool,
        user_data_dir: Path,
    ):
        """Build browser-specific options object."""
        options_map = {
            "chrome": webdriver.ChromeOptions,
            "firefox": webdriver.FirefoxOptions,
            "edge": webdriver.EdgeOptions,
        }

        if browser.lower() not in options_map:
            raise ValueError(
                f"Unsupported browser: {browser}. "
                f"Supported browsers: {list(options_map.keys())}"
            )

        options = options_map[browser.lower()]()

        if browser.lower() in ("chrome", "edge"):
            options.add_argument("--start-maximized")
            options.add_argument(f"--user-data-dir={user_data_dir}")
            if headless:
                options.add_argument("--headless=new")
                options.add_argument("--disable-gpu")

        elif browser.lower() == "firefox":
            options.add_argument("-profile")
            options.add_argument(str(user_data_dir))
            if headless:
                options.add_argument("-headless")

        return options
