"""
Engine: the single state container behind the UI.

Commands (set_*, select_event, navigate, ...) mutate state and return a
CommandResult. Invalid arguments never raise out of a command: they are
reported in CommandResult.error and leave the state unchanged.

Queries (get_*, is_interested, ...) are derived from the current state
on demand. The visible list is cached per state revision; every
successful mutation bumps the revision.

UI layers call subscribe() to get notified after each state change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from myagenda import filters, navigator
from myagenda.catalog import Catalog
from myagenda.colors import apply_colors
from myagenda.config import DEFAULT_COLOR_BY
from myagenda.errors import InvalidArgumentError
from myagenda.interest import InterestTracker
from myagenda.model import Event, FilterState, FilterValue, VisibleRange
from myagenda.visibility import compute_visible

logger = logging.getLogger(__name__)

Listener = Callable[["Engine"], None]


@dataclass(frozen=True)
class CommandResult:
    """
    Outcome of a command. `error` is set when the command was rejected.
    """

    changed: bool = False
    error: Optional[InvalidArgumentError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class Engine:
    def __init__(
        self,
        catalog: Catalog,
        visible_range: Optional[VisibleRange] = None,
        color_by: str = DEFAULT_COLOR_BY,
    ) -> None:
        self.catalog = catalog
        self.filter_state: FilterState = filters.build_filter_state(catalog, color_by=color_by)
        apply_colors(self.filter_state)
        self.interests = InterestTracker()
        self._visible_range = visible_range if visible_range is not None else catalog.time_bounds()
        self._selected_id: Optional[str] = None

        self._revision = 0
        self._visible_cache: Optional[tuple[int, list[Event]]] = None
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Subscriptions
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Call `listener(engine)` after every state change.
        Returns a function that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, command: str, changed: bool) -> CommandResult:
        if changed:
            self._revision += 1
            logger.debug("%s -> revision %d", command, self._revision)
            for listener in list(self._listeners):
                listener(self)
        return CommandResult(changed=changed)

    @staticmethod
    def _reject(command: str, error: InvalidArgumentError) -> CommandResult:
        logger.warning("%s rejected: %s", command, error)
        return CommandResult(changed=False, error=error)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def visible_range(self) -> Optional[VisibleRange]:
        return self._visible_range

    @property
    def selected_event(self) -> Optional[Event]:
        if self._selected_id is None:
            return None
        return self.catalog.get(self._selected_id)

    def get_filter(self, dimension: str) -> list[FilterValue]:
        """
        FilterValues of a dimension in display order.
        Raises InvalidArgumentError for unknown dimensions.
        """
        return filters.sorted_values(self.filter_state, dimension)

    def get_visible_events(self) -> list[Event]:
        cached = self._visible_cache
        if cached is not None and cached[0] == self._revision:
            return list(cached[1])

        visible = compute_visible(self.catalog, self.filter_state, self.interests)
        self._visible_cache = (self._revision, visible)
        return list(visible)

    def navigable_events(self) -> list[Event]:
        """
        Visible events inside the visible range, in chronological order.
        """
        return navigator.window(self.get_visible_events(), self._visible_range)

    def get_color_for(self, dimension: str, value: str) -> Optional[str]:
        filters.check_dimension(dimension, self.filter_state.dimensions)
        fv = self.filter_state.dimensions[dimension].get(value)
        return None if fv is None else fv.color

    def color_of(self, event: Event) -> Optional[str]:
        dim = self.filter_state.color_by
        return self.get_color_for(dim, event.value_for(dim))

    def is_interested(self, event_id: str) -> bool:
        return self.interests.is_interested(event_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def set_filter_value(self, dimension: str, value: str, selected: bool) -> CommandResult:
        try:
            changed = filters.set_selected(self.filter_state, dimension, value, selected)
        except InvalidArgumentError as e:
            return self._reject("set_filter_value", e)
        return self._commit("set_filter_value", changed)

    def set_all_filter_values(self, dimension: str, selected: bool) -> CommandResult:
        try:
            changed = filters.set_all_selected(self.filter_state, dimension, selected)
        except InvalidArgumentError as e:
            return self._reject("set_all_filter_values", e)
        return self._commit("set_all_filter_values", changed)

    def set_search_text(self, text: str) -> CommandResult:
        text = text or ""
        changed = text != self.filter_state.search_text
        self.filter_state.search_text = text
        return self._commit("set_search_text", changed)

    def set_color_by(self, dimension: str) -> CommandResult:
        try:
            filters.check_dimension(dimension, self.filter_state.dimensions)
        except InvalidArgumentError as e:
            return self._reject("set_color_by", e)

        if dimension == self.filter_state.color_by:
            return self._commit("set_color_by", False)
        self.filter_state.color_by = dimension
        apply_colors(self.filter_state)
        return self._commit("set_color_by", True)

    def set_always_show_interested(self, flag: bool) -> CommandResult:
        changed = bool(flag) != self.filter_state.always_show_interested
        self.filter_state.always_show_interested = bool(flag)
        return self._commit("set_always_show_interested", changed)

    def set_hide_not_interested(self, flag: bool) -> CommandResult:
        changed = bool(flag) != self.filter_state.hide_not_interested
        self.filter_state.hide_not_interested = bool(flag)
        return self._commit("set_hide_not_interested", changed)

    def set_interested(self, event_id: str, interested: bool) -> CommandResult:
        # Unknown ids are recorded too; a stale flag is harmless.
        changed = self.interests.set_interested(event_id, interested)
        return self._commit("set_interested", changed)

    def toggle_interested(self, event_id: Optional[str] = None) -> CommandResult:
        """
        Flip the interest flag of `event_id` (default: the selected event).
        """
        target = event_id if event_id is not None else self._selected_id
        if target is None:
            return self._commit("toggle_interested", False)
        self.interests.toggle(target)
        return self._commit("toggle_interested", True)

    def select_event(self, event_id: Optional[str]) -> CommandResult:
        if event_id is not None and event_id not in self.catalog:
            logger.debug("select_event: unknown id %r ignored", event_id)
            return self._commit("select_event", False)
        changed = event_id != self._selected_id
        self._selected_id = event_id
        return self._commit("select_event", changed)

    def set_visible_range(self, start: datetime, end: datetime) -> CommandResult:
        # Event times are aware; naive bounds could not be compared with them
        if start.tzinfo is None or end.tzinfo is None:
            return self._reject("set_visible_range", InvalidArgumentError("Range bounds must be timezone-aware"))
        if end <= start:
            return self._reject("set_visible_range", InvalidArgumentError("Range end must be after start"))
        new_range = VisibleRange(start=start, end=end)
        changed = new_range != self._visible_range
        self._visible_range = new_range
        return self._commit("set_visible_range", changed)

    def navigate(self, direction: int) -> CommandResult:
        """
        Select the next (+1) or previous (-1) navigable event.
        """
        try:
            target = navigator.step(self.get_visible_events(), self._visible_range, self._selected_id, direction)
        except InvalidArgumentError as e:
            return self._reject("navigate", e)

        # Nothing navigable: keep the current selection
        if target is None:
            return self._commit("navigate", False)
        changed = target.id != self._selected_id
        self._selected_id = target.id
        return self._commit("navigate", changed)
