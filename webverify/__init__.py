"""
================================================================================
WebVerify
================================================================================

Browser-automation test support: a locator cascade that turns loose locator
strings into page elements, and three verification policies (fail fast,
informational, soft) over one predicate vocabulary.

Example:
    from webverify import Browser

    with Browser.launch() as browser:
        browser.navigate_to("https://example.com")
        heading = browser.find.element("h1")
        browser.soft_verify.equal("Example Domain", heading.text)

================================================================================
"""

from webverify.framework import (
    Browser,
    BrowserOptions,
    ConditionalVerify,
    Element,
    FoundElement,
    LocatorResolver,
    LocatorStrategy,
    NotFoundElement,
    SoftVerify,
    SoftVerifyFailedError,
    Verify,
    VerifyContext,
    VerifyFailedError,
)

__version__ = "1.0.0"

__all__ = [
    "Browser",
    "BrowserOptions",
    "ConditionalVerify",
    "Element",
    "FoundElement",
    "LocatorResolver",
    "LocatorStrategy",
    "NotFoundElement",
    "SoftVerify",
    "SoftVerifyFailedError",
    "Verify",
    "VerifyContext",
    "VerifyFailedError",
]
