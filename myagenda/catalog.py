"""
Event catalog (records -> immutable Event collection).

- Reads the program from a JSON file, an http(s) URL or in-memory records
- Parses ISO-8601 start/end times into the event-local timezone
- Validates every record once, at load time
- Reads the optional range file (the program's first/last day)

Important rules:
- The catalog never changes after loading
- Catalog order is the file order (used as tie-breaker everywhere)
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta, tzinfo
from pathlib import Path
from typing import Any, Iterable, Iterator, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import requests

from myagenda.config import EVENT_TIMEZONE, FETCH_TIMEOUT_SECONDS
from myagenda.errors import CatalogError
from myagenda.model import DIMENSIONS, Event, VisibleRange

logger = logging.getLogger(__name__)

_TEXT_FIELDS = ("title", "abbreviation", "abstract")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def resolve_timezone(name: str | tzinfo | None = None) -> tzinfo:
    """
    Return a tzinfo for a zone name (default: config EVENT_TIMEZONE).
    """
    if isinstance(name, tzinfo):
        return name
    try:
        return ZoneInfo(name or EVENT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise CatalogError(f"Unknown timezone: {name!r}") from e


def is_url(source: Any) -> bool:
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def load_records(source: Any) -> Any:
    """
    Load raw JSON data from a path, an http(s) URL, or pass through parsed data.
    """
    if isinstance(source, (list, dict)):
        return source

    if is_url(source):
        logger.info("Fetching %s", source)
        try:
            resp = requests.get(source, timeout=FETCH_TIMEOUT_SECONDS)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as e:
            raise CatalogError(f"Could not fetch {source}: {e}") from e

    path = Path(source)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogError(f"File not found: {path}") from e
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CatalogError(f"Could not read {path}: {e}") from e


def parse_instant(value: Any, tz: tzinfo) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware datetime in `tz`.

    Timestamps without offset are taken as wall-clock time in `tz`.
    Raises ValueError for anything else.
    """
    if isinstance(value, datetime):
        dt = value
    else:
        text = str(value or "").strip()
        if not text:
            raise ValueError("empty timestamp")
        # fromisoformat() only accepts "Z" from Python 3.11 on
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        dt = datetime.fromisoformat(text)

    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz)
    return dt.astimezone(tz)


def _text(record: dict[str, Any], key: str) -> str:
    value = record.get(key)
    return "" if value is None else str(value)


def _event_from_record(record: Any, position: int, tz: tzinfo) -> Event:
    if not isinstance(record, dict):
        raise CatalogError(f"Record #{position} is not an object")

    raw_id = record.get("id")
    if raw_id is None or str(raw_id).strip() == "":
        raise CatalogError(f"Record #{position} has no id")
    event_id = str(raw_id).strip()

    try:
        start = parse_instant(record.get("start"), tz)
        end = parse_instant(record.get("end"), tz)
    except ValueError as e:
        raise CatalogError(f"Event {event_id!r}: invalid time ({e})") from e

    if end <= start:
        raise CatalogError(f"Event {event_id!r}: end must be after start")

    fields = {key: _text(record, key) for key in _TEXT_FIELDS + DIMENSIONS}
    return Event(id=event_id, start=start, end=end, **fields)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class Catalog:
    """
    Immutable, ordered collection of events with an id index.
    """

    def __init__(self, events: Iterable[Event]):
        self._events: tuple[Event, ...] = tuple(events)
        self._position: dict[str, int] = {}
        for i, ev in enumerate(self._events):
            if ev.id in self._position:
                raise CatalogError(f"Duplicate event id: {ev.id!r}")
            self._position[ev.id] = i

    @classmethod
    def from_records(cls, records: Any, tz: str | tzinfo | None = None) -> "Catalog":
        if not isinstance(records, list):
            raise CatalogError("Event data must be a JSON list")
        zone = resolve_timezone(tz)
        catalog = cls(_event_from_record(r, i, zone) for i, r in enumerate(records))
        logger.info("Loaded %d events", len(catalog))
        return catalog

    @classmethod
    def load(cls, source: Any, tz: str | tzinfo | None = None) -> "Catalog":
        return cls.from_records(load_records(source), tz=tz)

    @property
    def events(self) -> tuple[Event, ...]:
        return self._events

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __contains__(self, event_id: object) -> bool:
        return event_id in self._position

    def get(self, event_id: str) -> Optional[Event]:
        i = self._position.get(event_id)
        return None if i is None else self._events[i]

    def position(self, event_id: str) -> int:
        """Catalog order of an event id (KeyError if unknown)."""
        return self._position[event_id]

    def time_bounds(self) -> Optional[VisibleRange]:
        """
        Earliest start and latest end over all events, or None if empty.
        """
        if not self._events:
            return None
        start = min(ev.start for ev in self._events)
        end = max(ev.end for ev in self._events)
        return VisibleRange(start=start, end=end)


def load_range(source: Any, tz: str | tzinfo | None = None) -> VisibleRange:
    """
    Load the program's date range ({"start": ..., "end": ...}).

    The stored end is exclusive (midnight after the last day),
    so one second is subtracted to keep the last day inside the range.
    """
    data = load_records(source)
    if not isinstance(data, dict):
        raise CatalogError("Range data must be a JSON object")

    zone = resolve_timezone(tz)
    try:
        start = parse_instant(data.get("start"), zone)
        end = parse_instant(data.get("end"), zone) - timedelta(seconds=1)
    except ValueError as e:
        raise CatalogError(f"Invalid range: {e}") from e

    if end <= start:
        raise CatalogError("Range end must be after start")
    return VisibleRange(start=start, end=end)
