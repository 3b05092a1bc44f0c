"""
================================================================================
WebVerify Pytest Plugin
================================================================================

Registered through the `pytest11` entry point. Provides:

    - browser_options: BrowserOptions loaded from configuration
    - browser_session: a launched Browser per test; its teardown closes the
      session, so recorded soft failures surface as a single test error

Command line:
    --wv-browser chromium|firefox|webkit
    --wv-headed

================================================================================
"""

from __future__ import annotations

from typing import Generator

import allure
import pytest
from loguru import logger

from webverify.common import init_logger
from webverify.framework.browser import SUPPORTED_BROWSERS, Browser, BrowserOptions


def pytest_addoption(parser):
    group = parser.getgroup("webverify")
    group.addoption(
        "--wv-browser",
        action="store",
        default=None,
        choices=SUPPORTED_BROWSERS,
        help="Browser used by the browser_session fixture",
    )
    group.addoption(
        "--wv-headed",
        action="store_true",
        default=False,
        help="Show the browser window",
    )


def pytest_configure(config):
    init_logger()
    config.addinivalue_line(
        "markers", "browser: test drives a real browser through browser_session"
    )


@pytest.fixture(scope="session")
def browser_options(pytestconfig) -> BrowserOptions:
    """Browser options from configuration, overridden by command line flags."""
    options = BrowserOptions.from_config()
    browser_type = pytestconfig.getoption("--wv-browser")
    if browser_type:
        options.browser_type = browser_type
    if pytestconfig.getoption("--wv-headed"):
        options.headless = False
    return options


@pytest.fixture(scope="function")
def browser_session(browser_options: BrowserOptions, request) -> Generator[Browser, None, None]:
    """
    Function-scoped browser session.

    Takes a screenshot when the test body failed, then closes the session.
    """
    browser = Browser.launch(browser_options)
    yield browser
    finish_session(browser, request.node)


def finish_session(browser: Browser, node) -> None:
    """
    Teardown for a test's browser session.

    Screenshot failures are logged and never prevent the session from being
    closed, so the browser is released and soft failures still surface.
    """
    try:
        report = getattr(node, "rep_call", None)
        if report is not None and report.failed:
            try:
                with allure.step("Capture failure details"):
                    browser.take_visible_screenshot(f"failure_{node.name}")
            except Exception as e:
                # Log but don't fail teardown if screenshot capture fails
                logger.warning(f"Failed to capture screenshot on failure: {e}")
    finally:
        browser.close()


@pytest.hookimpl(tryfirst=True, hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)
