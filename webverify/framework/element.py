"""
================================================================================
Element Wrapper
================================================================================

Every resolution result is one of two variants:

    - FoundElement: wraps a driver handle and delegates to it
    - NotFoundElement: stands in for "nothing matched"; every accessor logs an
      error and returns a neutral default instead of raising

Both carry a CallingInformation record (`element.info`) describing which
locator and strategy produced them.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional

from loguru import logger

from .calling_information import CallingInformation, LocatorStrategy, Point, Size
from .driver import NativeElement


PARENT_XPATH = ".."


class Element(ABC):
    """
    Common surface of FoundElement and NotFoundElement.

    Use `isinstance(element, FoundElement)` or `element.is_initialized`
    to branch on the variant.
    """

    info: CallingInformation
    is_initialized: bool = False

    @property
    @abstractmethod
    def tag_name(self) -> str:
        ...

    @property
    @abstractmethod
    def text(self) -> str:
        ...

    @property
    @abstractmethod
    def enabled(self) -> bool:
        ...

    @property
    @abstractmethod
    def selected(self) -> bool:
        ...

    @property
    @abstractmethod
    def displayed(self) -> bool:
        ...

    @property
    @abstractmethod
    def location(self) -> Point:
        ...

    @property
    @abstractmethod
    def size(self) -> Size:
        ...

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[str]:
        ...

    @abstractmethod
    def get_css_value(self, name: str) -> str:
        ...

    @abstractmethod
    def get_property(self, name: str) -> Any:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...

    @abstractmethod
    def click(self) -> None:
        ...

    @abstractmethod
    def send_keys(self, text: str) -> None:
        ...

    @abstractmethod
    def submit(self) -> None:
        ...

    @abstractmethod
    def parent_element(self) -> "Element":
        ...

    @abstractmethod
    def find_element(self, strategy: LocatorStrategy, value: str) -> "Element":
        ...

    @abstractmethod
    def find_elements(self, strategy: LocatorStrategy, value: str) -> List["Element"]:
        ...


@dataclass(frozen=True)
class FoundElement(Element):
    """An element the driver located."""

    handle: NativeElement
    info: CallingInformation = field(default_factory=CallingInformation)

    is_initialized = True

    @property
    def tag_name(self) -> str:
        return self.handle.tag_name()

    @property
    def text(self) -> str:
        return self.handle.text()

    @property
    def enabled(self) -> bool:
        return self.handle.is_enabled()

    @property
    def selected(self) -> bool:
        return self.handle.is_selected()

    @property
    def displayed(self) -> bool:
        return self.handle.is_displayed()

    @property
    def location(self) -> Point:
        return self.handle.location()

    @property
    def size(self) -> Size:
        return self.handle.size()

    def get_attribute(self, name: str) -> Optional[str]:
        return self.handle.get_attribute(name)

    def get_css_value(self, name: str) -> str:
        return self.handle.get_css_value(name)

    def get_property(self, name: str) -> Any:
        return self.handle.get_property(name)

    def clear(self) -> None:
        self.handle.clear()

    def click(self) -> None:
        self.handle.click()

    def send_keys(self, text: str) -> None:
        self.handle.send_keys(text)

    def submit(self) -> None:
        self.handle.submit()

    def parent_element(self) -> Element:
        """
        Locate the structural parent of this element.

        Returns:
            FoundElement for the parent, or NotFoundElement at the document root
        """
        info = CallingInformation(PARENT_XPATH, LocatorStrategy.XPATH, "parent_element")
        parents = self.handle.find(LocatorStrategy.XPATH, PARENT_XPATH)
        if not parents:
            logger.warning(f"No parent element for element located by '{self.info.locator_string}'")
            return NotFoundElement(CallingInformation(PARENT_XPATH, calling_method="parent_element"))
        return FoundElement(parents[0], info)

    def find_element(self, strategy: LocatorStrategy, value: str) -> Element:
        """Locate the first descendant matching one explicit strategy."""
        elements = self.find_elements(strategy, value)
        if elements:
            return elements[0]
        return NotFoundElement(CallingInformation(value, calling_method="find_element"))

    def find_elements(self, strategy: LocatorStrategy, value: str) -> List[Element]:
        """Locate all descendants matching one explicit strategy."""
        info = CallingInformation(value, strategy, "find_elements")
        found = [FoundElement(h, info) for h in self.handle.find(strategy, value)]
        if not found:
            logger.warning(f"No descendants found by {strategy.value}: '{value}'")
        return found


@dataclass(frozen=True)
class NotFoundElement(Element):
    """Placeholder returned when no strategy located an element."""

    info: CallingInformation = field(default_factory=CallingInformation)

    is_initialized = False

    def _missing(self, what: str) -> None:
        logger.error(
            f"Unable to {what} for the requested element "
            f"(locator: '{self.info.locator_string}')"
        )

    @property
    def tag_name(self) -> str:
        self._missing("find the tag")
        return ""

    @property
    def text(self) -> str:
        self._missing("find the text")
        return ""

    @property
    def enabled(self) -> bool:
        self._missing("find the enabled property")
        return False

    @property
    def selected(self) -> bool:
        self._missing("find the selected property")
        return False

    @property
    def displayed(self) -> bool:
        self._missing("find the displayed property")
        return False

    @property
    def location(self) -> Point:
        self._missing("find the location")
        return Point()

    @property
    def size(self) -> Size:
        self._missing("find the size")
        return Size()

    def get_attribute(self, name: str) -> Optional[str]:
        self._missing(f"find the attribute {name}")
        return ""

    def get_css_value(self, name: str) -> str:
        self._missing(f"find the CSS value {name}")
        return ""

    def get_property(self, name: str) -> Any:
        self._missing(f"find the property {name}")
        return ""

    def clear(self) -> None:
        self._missing("clear")

    def click(self) -> None:
        self._missing("click")

    def send_keys(self, text: str) -> None:
        self._missing(f"send keys {text}")

    def submit(self) -> None:
        self._missing("submit to")

    def parent_element(self) -> Element:
        self._missing("find the parent")
        return NotFoundElement(CallingInformation(calling_method="parent_element"))

    def find_element(self, strategy: LocatorStrategy, value: str) -> Element:
        self._missing(f"find descendant '{value}'")
        return NotFoundElement(CallingInformation(value, calling_method="find_element"))

    def find_elements(self, strategy: LocatorStrategy, value: str) -> List[Element]:
        self._missing(f"find descendants '{value}'")
        return []


__all__ = [
    "Element",
    "FoundElement",
    "NotFoundElement",
]
