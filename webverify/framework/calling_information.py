"""
Locator strategies and the record describing how an element was located.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import NamedTuple


class LocatorStrategy(str, Enum):
    """Supported element location strategies."""
    UNDEFINED = "undefined"
    ID = "id"
    CLASS = "class"
    CSS = "css"
    TAG = "tag"
    TEXT = "text"
    PARTIAL_TEXT = "partial_text"
    XPATH = "xpath"


class Point(NamedTuple):
    """Element location in the rendered page."""
    x: float = 0
    y: float = 0


class Size(NamedTuple):
    """Element size in the rendered page."""
    width: float = 0
    height: float = 0


@dataclass(frozen=True)
class CallingInformation:
    """
    How an element was located.

    Attributes:
        locator_string: The raw locator the caller supplied
        strategy: The strategy that produced the element (UNDEFINED if none did)
        calling_method: Label of the operation that created the element
        called_timestamp: When the element was created; ignored for equality
    """
    locator_string: str = ""
    strategy: LocatorStrategy = LocatorStrategy.UNDEFINED
    calling_method: str = ""
    called_timestamp: datetime = field(default_factory=datetime.now, compare=False)


__all__ = [
    "LocatorStrategy",
    "CallingInformation",
    "Point",
    "Size",
]
