"""
================================================================================
Verification Policies
================================================================================

One predicate vocabulary, three failure policies:

    - Verify: fail fast; a failed predicate raises VerifyFailedError
    - ConditionalVerify: log the failure and carry on; nothing is recorded
    - SoftVerify: log the failure, record it in the VerifyContext, carry on;
      the context raises a single SoftVerifyFailedError when it is closed

Every predicate first builds a VerifyOutcome (pure), then hands it to the
policy's apply step. Failed outcomes always publish a VerifyFailedEvent to
the context's subscribers, whatever the policy does next.

Usage:
    >>> context = VerifyContext()
    >>> soft = SoftVerify(context)
    >>> soft.equal(1, 2, "item count")
    >>> soft.has_failure
    True
    >>> context.close()  # raises SoftVerifyFailedError once

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, List

import allure
from loguru import logger

from .exceptions import SoftVerifyFailedError, VerifyFailedError


@dataclass(frozen=True)
class VerifyFailedEvent:
    """Published whenever a predicate fails under any policy."""
    policy_name: str
    message: str


@dataclass(frozen=True)
class VerifyOutcome:
    """Result of evaluating one predicate."""
    passed: bool
    message: str = ""


FailureHandler = Callable[[VerifyFailedEvent], None]


# ================================================================================
# Verification Context
# ================================================================================

class VerifyContext:
    """
    Failure bookkeeping shared by the policies of one automation session.

    Owns the ordered failure sequence, the failed-event subscribers, and the
    raise-once aggregation performed at teardown. Never share a context
    between sessions.
    """

    def __init__(self):
        self._failures: List[VerifyFailedEvent] = []
        self._subscribers: List[FailureHandler] = []
        self._closed = False

    @property
    def failures(self) -> List[VerifyFailedEvent]:
        """Recorded soft failures in the order they occurred."""
        return list(self._failures)

    @property
    def has_failure(self) -> bool:
        return bool(self._failures)

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, handler: FailureHandler) -> None:
        """Register a callback invoked for every VerifyFailedEvent."""
        self._subscribers.append(handler)

    def publish(self, event: VerifyFailedEvent) -> None:
        for handler in self._subscribers:
            handler(event)

    def record(self, event: VerifyFailedEvent) -> None:
        self._failures.append(event)

    def close(self) -> None:
        """
        End the context's lifetime.

        Raises:
            SoftVerifyFailedError: once, if any soft failure was recorded
        """
        if self._closed:
            return
        self._closed = True

        if self._failures:
            logger.error(f"{len(self._failures)} soft verify statement(s) failed")
            raise SoftVerifyFailedError(self._failures)

    def __enter__(self) -> "VerifyContext":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


# ================================================================================
# Policies
# ================================================================================

def _describe(message: str, detail: str) -> str:
    if message and detail:
        return f"{message} ({detail})"
    return message or detail


class VerifyBase(ABC):
    """
    Shared predicate vocabulary.

    Subclasses only decide what happens to a failed outcome by overriding
    `handle_failure`.
    """

    policy_name: str = "VerifyBase"

    def __init__(self, context: VerifyContext):
        """
        Args:
            context: Verification context owned by the session
        """
        self.context = context

    def evaluate(self, passed: bool, message: str = "") -> VerifyOutcome:
        """Build an outcome for a computed condition and apply this policy to it."""
        return self.apply(VerifyOutcome(bool(passed), message))

    def apply(self, outcome: VerifyOutcome) -> VerifyOutcome:
        if outcome.passed:
            return outcome

        event = VerifyFailedEvent(self.policy_name, outcome.message)
        logger.error(f"❌ {self.policy_name} failed: {outcome.message}")
        allure.attach(
            json.dumps({"policy": event.policy_name, "message": event.message}, indent=2),
            name=f"{self.policy_name} failure",
            attachment_type=allure.attachment_type.JSON,
        )
        self.context.publish(event)
        self.handle_failure(event)
        return outcome

    @abstractmethod
    def handle_failure(self, event: VerifyFailedEvent) -> None:
        """Apply this policy to a failed statement."""

    # =========================================================================
    # Predicates
    # =========================================================================

    def true(self, condition: bool, message: str = "") -> VerifyOutcome:
        return self.evaluate(bool(condition), _describe(message, f"Expected True, got {condition!r}"))

    def false(self, condition: bool, message: str = "") -> VerifyOutcome:
        return self.evaluate(not condition, _describe(message, f"Expected False, got {condition!r}"))

    def equal(self, expected: Any, actual: Any, message: str = "") -> VerifyOutcome:
        return self.evaluate(
            expected == actual, _describe(message, f"Expected {expected!r}, got {actual!r}")
        )

    def not_equal(self, not_expected: Any, actual: Any, message: str = "") -> VerifyOutcome:
        return self.evaluate(
            not_expected != actual, _describe(message, f"Expected anything but {not_expected!r}")
        )

    def null(self, value: Any, message: str = "") -> VerifyOutcome:
        return self.evaluate(value is None, _describe(message, f"Expected None, got {value!r}"))

    def not_null(self, value: Any, message: str = "") -> VerifyOutcome:
        return self.evaluate(value is not None, _describe(message, "Expected a value, got None"))

    def contains(self, expected: Any, actual: Any, message: str = "") -> VerifyOutcome:
        """Verify `expected in actual` (substring or collection membership)."""
        detail = f"Expected {actual!r} to contain {expected!r}"
        try:
            passed = actual is not None and expected in actual
        except TypeError:
            passed = False
        return self.evaluate(passed, _describe(message, detail))

    def not_contains(self, expected: Any, actual: Any, message: str = "") -> VerifyOutcome:
        detail = f"Expected {actual!r} to not contain {expected!r}"
        try:
            passed = actual is None or expected not in actual
        except TypeError:
            passed = False
        return self.evaluate(passed, _describe(message, detail))

    def in_range(self, actual: Any, low: Any, high: Any, message: str = "") -> VerifyOutcome:
        """Verify `low <= actual <= high`."""
        detail = f"Expected {actual!r} to be within [{low!r}, {high!r}]"
        try:
            passed = low <= actual <= high
        except TypeError:
            passed = False
        return self.evaluate(passed, _describe(message, detail))

    def greater_than(self, actual: Any, threshold: Any, message: str = "") -> VerifyOutcome:
        detail = f"Expected {actual!r} to be greater than {threshold!r}"
        try:
            passed = actual > threshold
        except TypeError:
            passed = False
        return self.evaluate(passed, _describe(message, detail))

    def less_than(self, actual: Any, threshold: Any, message: str = "") -> VerifyOutcome:
        detail = f"Expected {actual!r} to be less than {threshold!r}"
        try:
            passed = actual < threshold
        except TypeError:
            passed = False
        return self.evaluate(passed, _describe(message, detail))

    def matches(self, pattern: str, actual: Any, message: str = "") -> VerifyOutcome:
        """Verify that `actual` matches a regular expression (re.search)."""
        detail = f"Expected {actual!r} to match pattern {pattern!r}"
        try:
            passed = actual is not None and re.search(pattern, str(actual)) is not None
        except re.error as e:
            passed, detail = False, f"Invalid regex pattern {pattern!r}: {e}"
        return self.evaluate(passed, _describe(message, detail))

    def empty(self, value: Any, message: str = "") -> VerifyOutcome:
        detail = f"Expected an empty value, got {value!r}"
        try:
            passed = value is None or len(value) == 0
        except TypeError:
            passed = False
        return self.evaluate(passed, _describe(message, detail))

    def not_empty(self, value: Any, message: str = "") -> VerifyOutcome:
        detail = f"Expected a non-empty value, got {value!r}"
        try:
            passed = value is not None and len(value) > 0
        except TypeError:
            passed = False
        return self.evaluate(passed, _describe(message, detail))


class Verify(VerifyBase):
    """
    Fail-fast verification: a failed statement stops the test immediately.
    """

    policy_name = "Verify"

    def handle_failure(self, event: VerifyFailedEvent) -> None:
        raise VerifyFailedError(event.policy_name, event.message)


class ConditionalVerify(VerifyBase):
    """
    Informational verification: failures are logged and execution continues.
    The test is not reported as failed.
    """

    policy_name = "ConditionalVerify"

    def handle_failure(self, event: VerifyFailedEvent) -> None:
        pass


class SoftVerify(VerifyBase):
    """
    Deferred verification. When a statement fails:
        - execution continues
        - the failure is recorded in the context
        - the session fails once at teardown
    """

    policy_name = "SoftVerify"

    def __init__(self, context: VerifyContext):
        super().__init__(context)
        self._has_failure = False

    @property
    def has_failure(self) -> bool:
        """True once any statement on this instance has failed."""
        return self._has_failure

    def handle_failure(self, event: VerifyFailedEvent) -> None:
        self._has_failure = True
        self.context.record(event)


__all__ = [
    "VerifyContext",
    "VerifyFailedEvent",
    "VerifyOutcome",
    "VerifyBase",
    "Verify",
    "ConditionalVerify",
    "SoftVerify",
]
