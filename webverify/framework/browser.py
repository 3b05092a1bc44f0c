"""
================================================================================
Browser Session
================================================================================

One automation session: a driver plus everything that must not be shared
between sessions.

Each Browser owns:
    - find: LocatorResolver bound to the session's driver
    - context: VerifyContext holding the session's soft failures
    - verify / conditional_verify / soft_verify: the three policies, all
      constructed over the same context

Closing the session disposes the driver and then raises a single
SoftVerifyFailedError if any soft verification failed.

Usage:
    with Browser.launch(BrowserOptions(headless=True)) as browser:
        browser.navigate_to("https://example.com")
        browser.soft_verify.equal("Example Domain", browser.title)
        browser.verify.true(browser.find.element("h1").displayed)

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Optional
from urllib.parse import urljoin

import allure
from loguru import logger
from playwright.sync_api import sync_playwright

from webverify.common import get_config

from .calling_information import Point, Size
from .driver import Driver, PlaywrightDriver
from .element import Element
from .exceptions import BrowserNotStartedError, ConfigurationError
from .locator_resolver import LocatorResolver
from .verify import ConditionalVerify, SoftVerify, Verify, VerifyContext


SUPPORTED_BROWSERS = ("chromium", "firefox", "webkit")


@dataclass
class BrowserOptions:
    """
    Browser and driver configuration.

    Attributes:
        browser_type: 'chromium', 'firefox' or 'webkit'
        headless: Run without a visible window
        implicit_wait_seconds: Default Playwright timeout (0 keeps Playwright's default)
        viewport: Page viewport size
        screenshot_dir: Directory for screenshots
        base_url: Prefix for relative URLs passed to navigate_to()
    """
    browser_type: str = "chromium"
    headless: bool = True
    implicit_wait_seconds: float = 0
    viewport: Dict[str, int] = field(default_factory=lambda: {"width": 1920, "height": 1080})
    screenshot_dir: str = "screenshots"
    base_url: str = ""

    def __post_init__(self):
        if self.browser_type not in SUPPORTED_BROWSERS:
            raise ConfigurationError(
                f"Unsupported browser type '{self.browser_type}'. "
                f"Expected one of: {', '.join(SUPPORTED_BROWSERS)}"
            )

    @classmethod
    def from_config(cls) -> "BrowserOptions":
        """Build options from the `browser` configuration section."""
        return cls(
            browser_type=get_config("browser.type", "chromium"),
            headless=get_config("browser.headless", True),
            implicit_wait_seconds=get_config("browser.implicit_wait_seconds", 0),
            viewport=get_config("browser.viewport", {"width": 1920, "height": 1080}),
            screenshot_dir=get_config("browser.screenshot_dir", "screenshots"),
            base_url=get_config("browser.base_url", ""),
        )


class Browser:
    """
    Automation session over a single driver.

    Construct directly around any Driver, or use Browser.launch() to start
    Playwright and open a fresh page.
    """

    def __init__(
        self,
        driver: Driver,
        options: Optional[BrowserOptions] = None,
        on_close: Optional[Callable[[], None]] = None,
    ):
        """
        Args:
            driver: Driver used for lookups and session operations
            options: Browser options (defaults used if not provided)
            on_close: Extra cleanup run after the driver is closed
        """
        self.options = options or BrowserOptions()
        self._driver: Optional[Driver] = driver
        self._on_close = on_close

        self.context = VerifyContext()
        self.verify = Verify(self.context)
        self.conditional_verify = ConditionalVerify(self.context)
        self.soft_verify = SoftVerify(self.context)
        self.find = LocatorResolver(driver)

        self.screenshot_directory = Path(self.options.screenshot_dir)
        self.last_screenshot: Optional[Path] = None

    @classmethod
    def launch(cls, options: Optional[BrowserOptions] = None) -> "Browser":
        """
        Start Playwright, launch a browser and open a page.

        Args:
            options: Browser options; loaded from configuration if omitted

        Returns:
            Browser session that owns the Playwright process
        """
        options = options or BrowserOptions.from_config()

        playwright = sync_playwright().start()
        browser = None
        try:
            launcher = getattr(playwright, options.browser_type)
            browser = launcher.launch(headless=options.headless)
            context = browser.new_context(viewport=options.viewport, ignore_https_errors=True)
            page = context.new_page()
            if options.implicit_wait_seconds:
                page.set_default_timeout(options.implicit_wait_seconds * 1000)
        except Exception:
            try:
                if browser is not None:
                    browser.close()
            finally:
                playwright.stop()
            raise

        logger.debug(
            f"Browser started: {options.browser_type} (headless={options.headless})"
        )

        def shutdown() -> None:
            try:
                context.close()
                browser.close()
            finally:
                playwright.stop()
            logger.debug("Browser closed")

        return cls(PlaywrightDriver(page), options, on_close=shutdown)

    def __enter__(self) -> "Browser":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    @property
    def driver(self) -> Driver:
        if self._driver is None:
            raise BrowserNotStartedError("Browser session is closed")
        return self._driver

    # =========================================================================
    # Page State
    # =========================================================================

    @property
    def url(self) -> str:
        return self.driver.url

    @property
    def title(self) -> str:
        return self.driver.title

    @property
    def source(self) -> str:
        return self.driver.source

    def navigate_to(self, url: str) -> None:
        """
        Navigate to a URL; relative URLs are joined to options.base_url.
        """
        if self.options.base_url and "://" not in url:
            url = urljoin(self.options.base_url.rstrip("/") + "/", url.lstrip("/"))
        with allure.step(f"Navigate to {url}"):
            self.driver.goto(url)
            logger.debug(f"Navigated to: {url}")

    # =========================================================================
    # Screenshots
    # =========================================================================

    def take_visible_screenshot(self, name: str) -> Path:
        """
        Capture the visible viewport and attach it to the Allure report.

        Args:
            name: Screenshot name (without extension)

        Returns:
            Path to the saved PNG
        """
        return self._screenshot(name, clip=None)

    def take_region_screenshot(self, name: str, location: Point, size: Size) -> Path:
        """
        Capture a page region given its top-left corner and size.

        Args:
            name: Screenshot name (without extension)
            location: Top-left corner of the region
            size: Width and height of the region
        """
        clip = {"x": location.x, "y": location.y, "width": size.width, "height": size.height}
        return self._screenshot(name, clip=clip)

    def take_element_screenshot(self, name: str, element: Element) -> Path:
        """
        Capture the region covered by an element.

        A NotFoundElement yields a zero-sized region, so the capture falls
        back to the visible viewport.
        """
        location, size = element.location, element.size
        if size.width and size.height:
            return self.take_region_screenshot(name, location, size)
        return self._screenshot(name, clip=None)

    def _screenshot(self, name: str, clip: Optional[Dict[str, Any]]) -> Path:
        self.screenshot_directory.mkdir(parents=True, exist_ok=True)
        path = self.screenshot_directory / f"{name}.png"

        image = self.driver.screenshot(str(path), clip=clip)
        allure.attach(image, name=name, attachment_type=allure.attachment_type.PNG)

        self.last_screenshot = path
        logger.debug(f"Screenshot saved: {path}")
        return path

    # =========================================================================
    # Teardown
    # =========================================================================

    def close(self) -> None:
        """
        Dispose the driver, then fail once if any soft verification failed.

        Raises:
            SoftVerifyFailedError: if the session recorded soft failures
            (a driver fault during close is chained as its __context__)
        """
        try:
            if self._driver is not None:
                driver, self._driver = self._driver, None
                try:
                    driver.close()
                finally:
                    if self._on_close is not None:
                        self._on_close()
        finally:
            self.context.close()


__all__ = [
    "Browser",
    "BrowserOptions",
    "SUPPORTED_BROWSERS",
]
