"""
Exception hierarchy for the webverify framework.

Absence of an element is never an exception; only assertion failures,
configuration problems and lifecycle misuse are raised from here. Driver
faults (stale handles, closed sessions) propagate as the driver's own errors.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List

if TYPE_CHECKING:
    from .verify import VerifyFailedEvent


class WebVerifyError(Exception):
    """Base class for all webverify errors."""
    pass


class ConfigurationError(WebVerifyError):
    """Raised when browser options cannot be built from configuration."""
    pass


class BrowserNotStartedError(WebVerifyError):
    """Raised when a session is used before it has a driver."""
    pass


class VerifyFailedError(WebVerifyError, AssertionError):
    """Raised by the fail-fast Verify policy when a predicate fails."""

    def __init__(self, policy_name: str, message: str):
        super().__init__(f"{policy_name} failed: {message}" if message else f"{policy_name} failed")
        self.policy_name = policy_name
        self.message = message


class SoftVerifyFailedError(WebVerifyError, AssertionError):
    """Raised once at session teardown when any soft verification failed."""

    def __init__(self, failures: List["VerifyFailedEvent"]):
        lines = ["One or more soft verify statements failed."]
        lines.extend(f"  {i}. {event.message}" for i, event in enumerate(failures, start=1))
        super().__init__("\n".join(lines))
        self.failures = list(failures)


__all__ = [
    "WebVerifyError",
    "ConfigurationError",
    "BrowserNotStartedError",
    "VerifyFailedError",
    "SoftVerifyFailedError",
]
