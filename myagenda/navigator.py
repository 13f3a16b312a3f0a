"""
Next/previous navigation through the visible events.

Only events fully inside the calendar's visible range take part.
They are ordered by start time (ties keep catalog order) and
navigation wraps around at both ends.
"""

from __future__ import annotations

from typing import Optional, Sequence

from myagenda.errors import InvalidArgumentError
from myagenda.model import Event, VisibleRange

NEXT = 1
PREVIOUS = -1


def window(visible_events: Sequence[Event], visible_range: Optional[VisibleRange]) -> list[Event]:
    """
    Visible events inside the range, in chronological order.
    """
    if visible_range is None:
        inside = list(visible_events)
    else:
        inside = [ev for ev in visible_events if visible_range.contains(ev)]
    # sorted() is stable, so equal starts keep catalog order
    return sorted(inside, key=lambda ev: ev.start)


def step(
    visible_events: Sequence[Event],
    visible_range: Optional[VisibleRange],
    selected_id: Optional[str],
    direction: int,
) -> Optional[Event]:
    """
    Return the event after (direction=+1) or before (direction=-1) the
    selected one, or the first event if nothing usable is selected.
    """
    # bool is an int subclass; True must not count as +1
    if isinstance(direction, bool) or direction not in (NEXT, PREVIOUS):
        raise InvalidArgumentError(f"Invalid direction: {direction!r} (expected +1 or -1)")

    candidates = window(visible_events, visible_range)
    if not candidates:
        return None

    ids = [ev.id for ev in candidates]
    if selected_id is None or selected_id not in ids:
        return candidates[0]

    new_index = ids.index(selected_id) + direction
    if new_index >= len(candidates):
        new_index = 0
    elif new_index < 0:
        new_index = len(candidates) - 1
    return candidates[new_index]
