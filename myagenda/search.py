"""
Free-text search over an event's abbreviation, title and abstract.

Plain case-insensitive substring matching: no tokenizing, no fuzzy logic.
"""

from __future__ import annotations

from myagenda.model import SEARCH_FIELDS, Event


def matches(query: str, event: Event) -> bool:
    if not query:
        return True

    needle = query.lower()
    for name in SEARCH_FIELDS:
        if needle in getattr(event, name).lower():
            return True
    return False
