"""
Filter index.

For every dimension (location, type, topic) we keep the distinct values
present in the catalog, each with an "included" checkbox.

Rules:
- the values of a dimension are exactly the values used by >= 1 event
- every value starts selected
- values are listed in ordinal order, the unknown value ("") first
"""

from __future__ import annotations

from typing import Iterable

from myagenda.config import DEFAULT_COLOR_BY
from myagenda.errors import InvalidArgumentError
from myagenda.model import DIMENSIONS, Event, FilterState, FilterValue


def check_dimension(dimension: str, dimensions: Iterable[str] = DIMENSIONS) -> str:
    """
    Return `dimension` unchanged, or raise InvalidArgumentError if unknown.
    """
    if dimension not in dimensions:
        raise InvalidArgumentError(f"Unknown dimension: {dimension!r}")
    return dimension


def build_filter_state(events: Iterable[Event], color_by: str = DEFAULT_COLOR_BY) -> FilterState:
    """
    Scan the catalog once and create a FilterState with all values selected.
    """
    check_dimension(color_by)
    events = list(events)

    dimensions: dict[str, dict[str, FilterValue]] = {}
    for dim in DIMENSIONS:
        values = sorted({ev.value_for(dim) for ev in events})
        dimensions[dim] = {v: FilterValue(value=v) for v in values}

    return FilterState(dimensions=dimensions, color_by=color_by)


def sorted_values(state: FilterState, dimension: str) -> list[FilterValue]:
    """
    FilterValues of one dimension in display order.
    """
    check_dimension(dimension, state.dimensions)
    by_value = state.dimensions[dimension]
    return [by_value[v] for v in sorted(by_value)]


def set_selected(state: FilterState, dimension: str, value: str, selected: bool) -> bool:
    """
    Select/deselect one value. Returns True if something changed.

    Unknown values are ignored (UI values always come from the index itself).
    """
    check_dimension(dimension, state.dimensions)
    fv = state.dimensions[dimension].get(value)
    if fv is None or fv.is_selected == selected:
        return False
    fv.is_selected = selected
    return True


def set_all_selected(state: FilterState, dimension: str, selected: bool) -> bool:
    """
    Select/deselect every value of a dimension at once.

    The FilterValue objects are updated in place, so lists returned
    earlier by sorted_values() show the new state too.
    """
    check_dimension(dimension, state.dimensions)
    current = state.dimensions[dimension]
    if all(fv.is_selected == selected for fv in current.values()):
        return False

    for fv in current.values():
        fv.is_selected = selected
    return True


def all_dimensions_selected(state: FilterState, event: Event) -> bool:
    """
    True if the event's value is selected in every dimension.
    """
    for dim, by_value in state.dimensions.items():
        fv = by_value.get(event.value_for(dim))
        if fv is None or not fv.is_selected:
            return False
    return True
