"""
================================================================================
Locator Resolver with Strategy Cascade
================================================================================

Turns a loosely specified locator string into page elements by trying
location strategies in a fixed priority order:

    1. CSS selector
    2. Exact id
    3. Exact class name (skipped when the locator contains whitespace)
    4. Exact visible text
    5. Partial visible text

The first strategy with at least one match wins; results are never merged
across strategies. Each returned element records the winning strategy in
`element.info.strategy`.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Tuple, Union

from loguru import logger

from .calling_information import CallingInformation, LocatorStrategy
from .driver import Driver
from .element import Element, FoundElement, NotFoundElement


CASCADE_ORDER: Tuple[LocatorStrategy, ...] = (
    LocatorStrategy.CSS,
    LocatorStrategy.ID,
    LocatorStrategy.CLASS,
    LocatorStrategy.TEXT,
    LocatorStrategy.PARTIAL_TEXT,
)

# Strategies that only match on what the user sees rather than on markup
TEXT_STRATEGIES = (LocatorStrategy.TEXT, LocatorStrategy.PARTIAL_TEXT)

_WHITESPACE = re.compile(r"\s")

ParentLike = Union[str, Element]


def build_class_selector(classes: str) -> str:
    """
    Build a compound CSS selector requiring every class token.

    Example:
        >>> build_class_selector("btn primary")
        '.btn.primary'
    """
    return "".join(f".{token}" for token in classes.split())


class LocatorResolver:
    """
    Resolves locator strings through the strategy cascade.

    Resolution never raises for "not found": absence is an empty list or a
    NotFoundElement. Driver faults propagate unchanged.

    Usage:
        >>> find = LocatorResolver(driver)
        >>> find.element("#submit").info.strategy
        <LocatorStrategy.CSS: 'css'>
        >>> len(find.elements("Subm"))
        4
    """

    def __init__(self, driver: Driver):
        """
        Args:
            driver: Driver used for page-level lookups
        """
        self.driver = driver
        self._resolved: Dict[str, CallingInformation] = {}

    # =========================================================================
    # Cascade Entry Points
    # =========================================================================

    def elements(self, locator: str, calling_method: str = "elements") -> List[Element]:
        """
        Find all elements for a locator.

        Args:
            locator: CSS selector, id, class name, or visible text
            calling_method: Label recorded in each element's info

        Returns:
            Elements from the first strategy that matched (may be empty)
        """
        return self._cascade(self.driver, locator, calling_method)

    def element(self, locator: str, calling_method: str = "element") -> Element:
        """
        Find the first element for a locator.

        Returns:
            FoundElement, or NotFoundElement with strategy UNDEFINED
        """
        return self._first(self.elements(locator, calling_method), locator, calling_method)

    def element_by_classes(self, classes: str) -> Element:
        """Find the first element bearing every class in a space separated list."""
        return self.element(build_class_selector(classes), "element_by_classes")

    def elements_by_classes(self, classes: str) -> List[Element]:
        """Find all elements bearing every class in a space separated list."""
        return self.elements(build_class_selector(classes), "elements_by_classes")

    def element_by_descendant_css(self, selector: str) -> Element:
        """
        Find an element by descendant CSS selection.

        Each space separated part is a selector nested under the previous
        one, e.g. "#nav .menu a".
        """
        return self.element(selector, "element_by_descendant_css")

    def elements_by_descendant_css(self, selector: str) -> List[Element]:
        """Find all elements matching a descendant CSS selector."""
        return self.elements(selector, "elements_by_descendant_css")

    # =========================================================================
    # Parent / Child Composition
    # =========================================================================

    def child_elements(
        self, parent: ParentLike, child_locator: str, calling_method: str = "child_elements"
    ) -> List[Element]:
        """
        Find descendants of a parent element through the cascade.

        Args:
            parent: Parent locator string or an already resolved Element
            child_locator: Locator resolved within the parent only
            calling_method: Label recorded in each child's info

        Returns:
            Matching descendants, or an empty list if the parent is missing
        """
        if isinstance(parent, str):
            parent = self.element(parent, calling_method)

        if not isinstance(parent, FoundElement):
            logger.warning(
                f"Parent '{parent.info.locator_string}' was not found; "
                f"skipping child lookup '{child_locator}'"
            )
            return []

        return self._cascade(parent.handle, child_locator, calling_method)

    def child_element(self, parent: ParentLike, child_locator: str) -> Element:
        """Find the first descendant of a parent element through the cascade."""
        return self._first(
            self.child_elements(parent, child_locator, "child_element"),
            child_locator,
            "child_element",
        )

    # =========================================================================
    # Reporting
    # =========================================================================

    def last_resolution(self, locator: str) -> Union[CallingInformation, None]:
        """Return how a locator was last resolved, or None if its last lookup missed."""
        return self._resolved.get(locator)

    def get_strategy_report(self) -> str:
        """
        Summarize locators that only matched by visible text.

        Text matches break when copy changes, so these are candidates for a
        CSS selector or id.

        Returns:
            Formatted report string
        """
        text_matches = [
            info for info in self._resolved.values() if info.strategy in TEXT_STRATEGIES
        ]
        if not text_matches:
            return "✅ All locators resolved by markup (CSS, id or class)."

        report_lines = [
            "⚠️ Locator Strategy Report - Text Matches:",
            "",
            "The following locators only matched by visible text.",
            "Consider replacing them with a CSS selector or id:",
            "",
        ]
        for info in text_matches:
            report_lines.extend([
                f"  [{info.locator_string}]",
                f"    Strategy: {info.strategy.value} (via {info.calling_method})",
                "",
            ])
        return "\n".join(report_lines)

    # =========================================================================
    # Internals
    # =========================================================================

    def _cascade(self, root: Any, locator: str, calling_method: str) -> List[Element]:
        """Try each strategy against root (driver or handle) in CASCADE_ORDER."""
        if not locator or not locator.strip():
            logger.warning(f"Empty locator passed to {calling_method}")
            return []

        has_whitespace = bool(_WHITESPACE.search(locator))

        for strategy in CASCADE_ORDER:
            if strategy == LocatorStrategy.CLASS and has_whitespace:
                continue

            handles = root.find(strategy, locator)
            if handles:
                info = CallingInformation(locator, strategy, calling_method)
                self._resolved[locator] = info
                logger.debug(
                    f"✅ '{locator}' resolved by {strategy.value}: {len(handles)} match(es)"
                )
                return [FoundElement(handle, info) for handle in handles]

        self._resolved.pop(locator, None)
        logger.warning(f"❌ No elements found for locator '{locator}' ({calling_method})")
        return []

    @staticmethod
    def _first(elements: List[Element], locator: str, calling_method: str) -> Element:
        if elements:
            return elements[0]
        return NotFoundElement(CallingInformation(locator, calling_method=calling_method))


__all__ = [
    "LocatorResolver",
    "CASCADE_ORDER",
    "build_class_selector",
]
