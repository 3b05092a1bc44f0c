"""
================================================================================
Driver Contract and Playwright Adapter
================================================================================

The framework talks to the browser through two small contracts:

    - Driver: page-level lookup by a single LocatorStrategy plus the session
      operations the Browser needs (navigate, screenshot, close)
    - NativeElement: per-handle accessors and mutators

PlaywrightDriver / PlaywrightElement implement both over the Playwright
sync API. Driver faults (closed page, detached handle) are never swallowed.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Protocol

from loguru import logger
from playwright.sync_api import ElementHandle, Error as PlaywrightError, Page
from .calling_information import LocatorStrategy, Point, Size


# Fragments of Playwright error messages raised for malformed selectors.
_INVALID_SELECTOR_MARKERS = (
    "while parsing selector",
    "is not a valid selector",
    "is not a valid xpath",
    "unexpected token",
)

# Strategies whose value is handed to a selector parser as-is.
_PARSED_STRATEGIES = (LocatorStrategy.CSS, LocatorStrategy.TAG, LocatorStrategy.XPATH)


class NativeElement(Protocol):
    """A located element handle owned by the driver."""

    def tag_name(self) -> str: ...

    def text(self) -> str: ...

    def is_enabled(self) -> bool: ...

    def is_selected(self) -> bool: ...

    def is_displayed(self) -> bool: ...

    def location(self) -> Point: ...

    def size(self) -> Size: ...

    def get_attribute(self, name: str) -> Optional[str]: ...

    def get_css_value(self, name: str) -> str: ...

    def get_property(self, name: str) -> Any: ...

    def clear(self) -> None: ...

    def click(self) -> None: ...

    def send_keys(self, text: str) -> None: ...

    def submit(self) -> None: ...

    def find(self, strategy: LocatorStrategy, value: str) -> List["NativeElement"]: ...


class Driver(Protocol):
    """Page-level driver used by the resolver and the Browser session."""

    def find(self, strategy: LocatorStrategy, value: str) -> List[NativeElement]: ...

    def goto(self, url: str) -> None: ...

    @property
    def url(self) -> str: ...

    @property
    def title(self) -> str: ...

    @property
    def source(self) -> str: ...

    def screenshot(self, path: str, clip: Optional[Dict[str, float]] = None) -> bytes: ...

    def close(self) -> None: ...


def _css_string(value: str) -> str:
    """Quote a value as a CSS string literal."""
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def build_selector(strategy: LocatorStrategy, value: str) -> str:
    """
    Translate a strategy/value pair into a Playwright selector.

    Args:
        strategy: Location strategy (UNDEFINED is rejected)
        value: Raw locator value

    Returns:
        Selector string understood by query_selector_all()
    """
    if strategy in (LocatorStrategy.CSS, LocatorStrategy.TAG):
        return f"css={value}"
    if strategy == LocatorStrategy.ID:
        return f"css=[id={_css_string(value)}]"
    if strategy == LocatorStrategy.CLASS:
        return f"css=[class~={_css_string(value)}]"
    if strategy == LocatorStrategy.TEXT:
        # Quoted text engine: exact, case-sensitive match
        return f"text={json.dumps(value, ensure_ascii=False)}"
    if strategy == LocatorStrategy.PARTIAL_TEXT:
        # Unquoted text engine: case-insensitive substring match
        return f"text={value}"
    if strategy == LocatorStrategy.XPATH:
        return f"xpath={value}"
    raise ValueError(f"Unsupported locator strategy: {strategy}")


def _query(root: Any, strategy: LocatorStrategy, value: str) -> List[ElementHandle]:
    """Run one strategy against a page or element handle."""
    selector = build_selector(strategy, value)
    try:
        return root.query_selector_all(selector)
    except PlaywrightError as e:
        message = str(e).lower()
        if strategy in _PARSED_STRATEGIES and any(m in message for m in _INVALID_SELECTOR_MARKERS):
            logger.debug(f"Selector rejected by {strategy.value} engine: {value!r}")
            return []
        raise


class PlaywrightElement:
    """NativeElement backed by a Playwright ElementHandle."""

    def __init__(self, handle: ElementHandle):
        self.handle = handle

    def tag_name(self) -> str:
        return self.handle.evaluate("e => e.tagName.toLowerCase()")

    def text(self) -> str:
        return self.handle.inner_text()

    def is_enabled(self) -> bool:
        return self.handle.is_enabled()

    def is_selected(self) -> bool:
        return bool(self.handle.evaluate("e => !!(e.selected || e.checked)"))

    def is_displayed(self) -> bool:
        return self.handle.is_visible()

    def location(self) -> Point:
        box = self.handle.bounding_box()
        return Point(box["x"], box["y"]) if box else Point()

    def size(self) -> Size:
        box = self.handle.bounding_box()
        return Size(box["width"], box["height"]) if box else Size()

    def get_attribute(self, name: str) -> Optional[str]:
        return self.handle.get_attribute(name)

    def get_css_value(self, name: str) -> str:
        return self.handle.evaluate(
            "(e, name) => getComputedStyle(e).getPropertyValue(name)", name
        )

    def get_property(self, name: str) -> Any:
        return self.handle.get_property(name).json_value()

    def clear(self) -> None:
        self.handle.fill("")

    def click(self) -> None:
        self.handle.click()

    def send_keys(self, text: str) -> None:
        self.handle.type(text)

    def submit(self) -> None:
        self.handle.evaluate(
            """e => {
                const form = e.form || e.closest('form');
                if (!form) { return; }
                if (form.requestSubmit) { form.requestSubmit(); } else { form.submit(); }
            }"""
        )

    def find(self, strategy: LocatorStrategy, value: str) -> List["PlaywrightElement"]:
        return [PlaywrightElement(h) for h in _query(self.handle, strategy, value)]


class PlaywrightDriver:
    """
    Driver backed by a Playwright sync Page.

    Usage:
        >>> driver = PlaywrightDriver(page)
        >>> driver.find(LocatorStrategy.CSS, "#submit")
    """

    def __init__(self, page: Page):
        self.page = page

    def find(self, strategy: LocatorStrategy, value: str) -> List[PlaywrightElement]:
        return [PlaywrightElement(h) for h in _query(self.page, strategy, value)]

    def goto(self, url: str) -> None:
        self.page.goto(url)

    @property
    def url(self) -> str:
        return self.page.url

    @property
    def title(self) -> str:
        return self.page.title()

    @property
    def source(self) -> str:
        return self.page.content()

    def screenshot(self, path: str, clip: Optional[Dict[str, float]] = None) -> bytes:
        return self.page.screenshot(path=path, clip=clip)

    def close(self) -> None:
        if not self.page.is_closed():
            self.page.close()


__all__ = [
    "Driver",
    "NativeElement",
    "PlaywrightDriver",
    "PlaywrightElement",
    "build_selector",
]
