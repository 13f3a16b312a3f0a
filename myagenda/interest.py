"""
Interest tracker: which events the user marked as "interested".

Unknown ids are simply "not interested". Flags are never removed,
only set back to False.
"""

from __future__ import annotations


class InterestTracker:
    def __init__(self) -> None:
        self._flags: dict[str, bool] = {}

    def set_interested(self, event_id: str, interested: bool) -> bool:
        """
        Set the flag for an event. Returns True if the value changed.
        """
        old = self._flags.get(event_id, False)
        self._flags[event_id] = bool(interested)
        return old != bool(interested)

    def is_interested(self, event_id: str) -> bool:
        return self._flags.get(event_id, False)

    def toggle(self, event_id: str) -> bool:
        """
        Flip the flag and return the new value.
        """
        new = not self.is_interested(event_id)
        self._flags[event_id] = new
        return new

    def interested_ids(self) -> set[str]:
        return {eid for eid, flag in self._flags.items() if flag}
