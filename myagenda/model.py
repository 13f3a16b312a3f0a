"""
Central data model definitions used across the project.

This module defines the canonical structure of Event and filter objects so that:
- all modules share the same field names
- the engine, the loader and the UI layers agree on one shape
- filter dimensions are data (DIMENSIONS), not special-cased code
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

# Event attributes that can be filtered on (and colored by).
DIMENSIONS: tuple[str, ...] = ("location", "type", "topic")

# Fields searched by free text, in this order.
SEARCH_FIELDS: tuple[str, ...] = ("abbreviation", "title", "abstract")

# Value used when an event has no value for a dimension.
UNKNOWN = ""


@dataclass(frozen=True)
class Event:
    """
    Represents one scheduled event of the catalog (one talk, session, ...).

    Events are created once at load time and never mutated.
    Only `id` is referenced by interest and selection state.
    """

    id: str
    start: datetime
    end: datetime
    title: str = ""
    abbreviation: str = ""
    abstract: str = ""
    location: str = UNKNOWN
    type: str = UNKNOWN
    topic: str = UNKNOWN

    def value_for(self, dimension: str) -> str:
        return getattr(self, dimension)


@dataclass
class FilterValue:
    """
    One checkbox of a filter: a distinct value of a dimension.

    Selected means "keep events with this value".
    """

    value: str
    is_selected: bool = True
    color: Optional[str] = None


@dataclass(frozen=True)
class VisibleRange:
    """
    The time window currently displayed by the calendar.
    """

    start: datetime
    end: datetime

    def contains(self, event: Event) -> bool:
        return event.start >= self.start and event.end <= self.end


@dataclass
class FilterState:
    """
    All filter settings of one engine instance.

    dimensions maps dimension name -> value -> FilterValue.
    """

    dimensions: Dict[str, Dict[str, FilterValue]] = field(default_factory=dict)
    search_text: str = ""
    color_by: str = "topic"
    always_show_interested: bool = False
    hide_not_interested: bool = False
