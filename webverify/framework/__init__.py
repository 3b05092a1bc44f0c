"""
================================================================================
WebVerify Framework
================================================================================

Playwright-based test-support framework.

Components:
    - locator_resolver: Locator cascade (CSS -> id -> class -> text -> partial text)
    - element: FoundElement / NotFoundElement wrappers with safe defaults
    - verify: Verify, ConditionalVerify and SoftVerify policies
    - browser: Session lifecycle, navigation and screenshots
    - driver: Driver contract and Playwright adapter

Author: Automation Team
License: MIT
================================================================================
"""

from .browser import Browser, BrowserOptions
from .calling_information import CallingInformation, LocatorStrategy, Point, Size
from .driver import Driver, NativeElement, PlaywrightDriver, PlaywrightElement
from .element import Element, FoundElement, NotFoundElement
from .exceptions import (
    BrowserNotStartedError,
    ConfigurationError,
    SoftVerifyFailedError,
    VerifyFailedError,
    WebVerifyError,
)
from .locator_resolver import CASCADE_ORDER, LocatorResolver, build_class_selector
from .verify import (
    ConditionalVerify,
    SoftVerify,
    Verify,
    VerifyBase,
    VerifyContext,
    VerifyFailedEvent,
    VerifyOutcome,
)

__all__ = [
    "Browser",
    "BrowserOptions",
    "CallingInformation",
    "LocatorStrategy",
    "Point",
    "Size",
    "Driver",
    "NativeElement",
    "PlaywrightDriver",
    "PlaywrightElement",
    "Element",
    "FoundElement",
    "NotFoundElement",
    "WebVerifyError",
    "ConfigurationError",
    "BrowserNotStartedError",
    "VerifyFailedError",
    "SoftVerifyFailedError",
    "LocatorResolver",
    "CASCADE_ORDER",
    "build_class_selector",
    "VerifyContext",
    "VerifyFailedEvent",
    "VerifyOutcome",
    "VerifyBase",
    "Verify",
    "ConditionalVerify",
    "SoftVerify",
]
