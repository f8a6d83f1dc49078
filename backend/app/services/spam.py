"""Spam inspections for user-submitted text.

Inspections run in order; the first one that flags the text wins.
"""

import re
from collections.abc import Callable, Iterable

from backend.app.config import settings

_KEY_HELD_DOWN = re.compile(r"(.)\1{4,}")

Inspection = Callable[[str], str | None]


def invalid_keywords(keywords: Iterable[str]) -> Inspection:
    lowered = [k.lower() for k in keywords]

    def inspect(text: str) -> str | None:
        haystack = text.lower()
        for keyword in lowered:
            if keyword and keyword in haystack:
                return "contains a forbidden phrase"
        return None

    return inspect


def key_held_down(text: str) -> str | None:
    if _KEY_HELD_DOWN.search(text):
        return "contains a key held down"
    return None


class Spam:
    def __init__(self, inspections: list[Inspection]) -> None:
        self.inspections = inspections

    def detect(self, text: str) -> str | None:
        """Return the reason ``text`` looks like spam, or None if it is clean."""
        for inspection in self.inspections:
            reason = inspection(text)
            if reason:
                return reason
        return None


spam = Spam([invalid_keywords(settings.spam_keywords), key_held_down])


def spamfree(value: str, field: str) -> str:
    """Pydantic validator body: reject ``value`` if it looks like spam."""
    reason = spam.detect(value)
    if reason:
        raise ValueError(f"The {field} {reason}.")
    return value
