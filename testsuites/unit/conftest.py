"""
================================================================================
Unit Test Fixtures
================================================================================

Builds a small fake page and captures loguru output so tests can assert on
what was logged.

Page layout:
    html
      body
        form#login.form.card
          input#username.field
          input#password.field.secret
          button#submit.btn.primary         "Submit Now"
        nav#menu
          ul.menu
            li.item > a.link                "Submarine"
            li.item > a.link                "Submerge"
            li.item > a.link.current        "Submission"
        div#button                          "Help"
        div.notice                          "Saved"

================================================================================
"""

from typing import Generator, List

import pytest
from loguru import logger

from testsuites.unit.fakes import FakeDriver, FakeNode
from webverify.framework.browser import Browser, BrowserOptions


def build_page() -> FakeDriver:
    return FakeDriver(
        FakeNode(
            "html",
            FakeNode(
                "body",
                FakeNode(
                    "form",
                    FakeNode("input", id="username", classes="field", properties={"value": "demo"}),
                    FakeNode("input", id="password", classes="field secret", attributes={"type": "password"}),
                    FakeNode(
                        "button",
                        id="submit",
                        classes="btn primary",
                        text="Submit Now",
                        box=(100, 200, 80, 30),
                        css={"color": "rgb(255, 255, 255)"},
                    ),
                    id="login",
                    classes="form card",
                ),
                FakeNode(
                    "nav",
                    FakeNode(
                        "ul",
                        FakeNode("li", FakeNode("a", classes="link", text="Submarine"), classes="item"),
                        FakeNode("li", FakeNode("a", classes="link", text="Submerge"), classes="item"),
                        FakeNode("li", FakeNode("a", classes="link current", text="Submission"), classes="item"),
                        classes="menu",
                    ),
                    id="menu",
                ),
                FakeNode("div", id="button", text="Help"),
                FakeNode("div", classes="notice", text="Saved"),
            ),
        ),
        title="Login",
    )


@pytest.fixture
def driver() -> FakeDriver:
    """Fresh fake page for each test."""
    return build_page()


@pytest.fixture
def browser(driver: FakeDriver, tmp_path) -> Browser:
    """Browser session over the fake page; screenshots go to tmp_path."""
    return Browser(driver, BrowserOptions(screenshot_dir=str(tmp_path / "shots")))


@pytest.fixture
def log_records() -> Generator[List[dict], None, None]:
    """Collect loguru records emitted during the test."""
    records: List[dict] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
