"""
Visibility resolver.

An event is visible if:
- it is interested and "always show interested" is on, OR
- it is not hidden by "hide not interested", its value is selected in
  every dimension and it matches the search text.

The result keeps catalog order.
"""

from __future__ import annotations

from typing import Iterable

from myagenda.filters import all_dimensions_selected
from myagenda.interest import InterestTracker
from myagenda.model import Event, FilterState
from myagenda.search import matches


def is_visible(event: Event, state: FilterState, interests: InterestTracker) -> bool:
    interested = interests.is_interested(event.id)

    # "always show" wins when both interest options are on
    if state.always_show_interested and interested:
        return True
    if state.hide_not_interested and not interested:
        return False
    return all_dimensions_selected(state, event) and matches(state.search_text, event)


def compute_visible(events: Iterable[Event], state: FilterState, interests: InterestTracker) -> list[Event]:
    return [ev for ev in events if is_visible(ev, state, interests)]
