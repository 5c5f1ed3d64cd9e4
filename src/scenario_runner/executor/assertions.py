from typing import Any, Callable, Optional

from ..core.exceptions import StepAssertionError

Matcher = Callable[[Any], None]


def equal_to(expected: Any, message: Optional[str] = None) -> Matcher:
    """Actual must equal expected (deep equality for lists and dicts)"""

    def check(actual: Any) -> None:
        if actual != expected:
            raise StepAssertionError(
                message or f"Expected {expected!r}, got {actual!r}",
                actual=actual,
                expected=expected,
            )

    return check


def contains(expected: Any, message: Optional[str] = None) -> Matcher:
    """Actual (a string or a collection) must contain expected"""

    def check(actual: Any) -> None:
        if actual is None or expected not in actual:
            raise StepAssertionError(
                message or f"Expected {actual!r} to contain {expected!r}",
                actual=actual,
                expected=expected,
            )

    return check


def within(low: Any, high: Any, message: Optional[str] = None) -> Matcher:
    """Actual must lie in the closed range [low, high]"""

    def check(actual: Any) -> None:
        if actual is None or not low <= actual <= high:
            raise StepAssertionError(
                message or f"Expected {actual!r} to be within [{low!r}, {high!r}]",
                actual=actual,
                expected=(low, high),
            )

    return check


def is_true(message: Optional[str] = None) -> Matcher:
    return equal_to(True, message)
