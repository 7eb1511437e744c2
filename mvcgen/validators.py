"""
mvcgen Validators - single-answer checks

Every factory returns a check: a callable taking the candidate answer and
returning None when it is accepted, or a human-readable rejection reason.
Checks are pure and never raise.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Iterable, Optional

Check = Callable[[Any], Optional[str]]


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def accept(value: Any) -> str | None:
    """Check that accepts anything."""
    return None


def required(message: str = "A value is required") -> Check:
    """Reject empty or whitespace-only answers."""

    def check(value: Any) -> str | None:
        return None if _text(value).strip() else message

    return check


def starts_with(prefix: str, message: str | None = None) -> Check:
    """Require a literal prefix (e.g. ``mongodb`` for connection URIs)."""
    reason = message or f"Must start with {prefix!r}"

    def check(value: Any) -> str | None:
        return None if _text(value).startswith(prefix) else reason

    return check


def min_length(length: int, message: str | None = None) -> Check:
    """Require at least ``length`` characters."""
    reason = message or f"Must be at least {length} characters"

    def check(value: Any) -> str | None:
        return None if len(_text(value)) >= length else reason

    return check


def one_of(options: Iterable[str], message: str | None = None) -> Check:
    """Require the answer to be one of the declared options."""
    allowed = tuple(options)
    reason = message or f"Must be one of: {', '.join(allowed)}"

    def check(value: Any) -> str | None:
        return None if _text(value) in allowed else reason

    return check


def matches(pattern: str, message: str) -> Check:
    """Require the whole answer to match a regular expression."""
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        return None if compiled.fullmatch(_text(value)) else message

    return check


def all_of(*checks: Check) -> Check:
    """Combine checks; the first rejection wins."""

    def check(value: Any) -> str | None:
        for single in checks:
            reason = single(value)
            if reason is not None:
                return reason
        return None

    return check


def validate(value: Any, check: Check) -> tuple[bool, str | None]:
    """Run ``check`` and return ``(accepted, reason)``."""
    reason = check(value)
    return reason is None, reason
