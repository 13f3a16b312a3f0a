"""
Unit tests for catalog loading.

Loader contract:
- ISO-8601 times; times without offset are wall-clock time in the event zone
- missing/null text fields become "" (the unknown value)
- bad records raise CatalogError (no partial catalogs)
- range end is shifted one second back
"""

import json
import tempfile
import unittest
from datetime import datetime, timedelta, timezone
from pathlib import Path
from unittest import mock

import requests

from myagenda.catalog import Catalog, load_range, parse_instant
from myagenda.errors import CatalogError

UTC = timezone.utc
PST = timezone(timedelta(hours=-8))


def _record(event_id: str, start: str, end: str, **extra):
    rec = {"id": event_id, "start": start, "end": end}
    rec.update(extra)
    return rec


class TestParseInstant(unittest.TestCase):
    def test_naive_time_is_local_wall_clock(self) -> None:
        dt = parse_instant("2026-05-12T09:00:00", PST)
        self.assertEqual(dt.tzinfo, PST)
        self.assertEqual(dt.hour, 9)

    def test_utc_z_suffix_is_converted(self) -> None:
        dt = parse_instant("2026-05-12T17:00:00Z", PST)
        self.assertEqual(dt.hour, 9)
        self.assertEqual(dt, datetime(2026, 5, 12, 17, 0, tzinfo=UTC))

    def test_empty_raises(self) -> None:
        with self.assertRaises(ValueError):
            parse_instant("", UTC)


class TestCatalog(unittest.TestCase):
    def test_from_records_keeps_order_and_fields(self) -> None:
        records = [
            _record("B", "2026-05-12T11:00:00Z", "2026-05-12T12:00:00Z", title="Second", topic="Y"),
            _record("A", "2026-05-12T10:00:00Z", "2026-05-12T11:00:00Z", title="First", location=None),
        ]
        catalog = Catalog.from_records(records, tz=UTC)

        self.assertEqual(len(catalog), 2)
        self.assertEqual([ev.id for ev in catalog], ["B", "A"])
        self.assertEqual(catalog.position("A"), 1)
        a = catalog.get("A")
        assert a is not None
        self.assertEqual(a.title, "First")
        self.assertEqual(a.location, "")
        self.assertEqual(a.topic, "")
        self.assertIsNone(catalog.get("missing"))
        self.assertIn("B", catalog)

    def test_numeric_id_becomes_string(self) -> None:
        catalog = Catalog.from_records([_record(7, "2026-05-12T10:00:00Z", "2026-05-12T11:00:00Z")], tz=UTC)
        self.assertIn("7", catalog)

    def test_missing_id_raises(self) -> None:
        with self.assertRaises(CatalogError):
            Catalog.from_records([{"start": "2026-05-12T10:00:00Z", "end": "2026-05-12T11:00:00Z"}], tz=UTC)

    def test_end_before_start_raises(self) -> None:
        with self.assertRaises(CatalogError):
            Catalog.from_records([_record("A", "2026-05-12T11:00:00Z", "2026-05-12T10:00:00Z")], tz=UTC)

    def test_invalid_time_raises(self) -> None:
        with self.assertRaises(CatalogError):
            Catalog.from_records([_record("A", "tomorrow", "2026-05-12T10:00:00Z")], tz=UTC)

    def test_duplicate_id_raises(self) -> None:
        records = [
            _record("A", "2026-05-12T10:00:00Z", "2026-05-12T11:00:00Z"),
            _record("A", "2026-05-12T12:00:00Z", "2026-05-12T13:00:00Z"),
        ]
        with self.assertRaises(CatalogError):
            Catalog.from_records(records, tz=UTC)

    def test_non_list_raises(self) -> None:
        with self.assertRaises(CatalogError):
            Catalog.from_records({"id": "A"}, tz=UTC)

    def test_time_bounds(self) -> None:
        records = [
            _record("A", "2026-05-12T10:00:00Z", "2026-05-12T11:00:00Z"),
            _record("B", "2026-05-12T08:00:00Z", "2026-05-12T09:00:00Z"),
            _record("C", "2026-05-12T12:00:00Z", "2026-05-12T15:00:00Z"),
        ]
        bounds = Catalog.from_records(records, tz=UTC).time_bounds()
        assert bounds is not None
        self.assertEqual(bounds.start, datetime(2026, 5, 12, 8, 0, tzinfo=UTC))
        self.assertEqual(bounds.end, datetime(2026, 5, 12, 15, 0, tzinfo=UTC))
        self.assertIsNone(Catalog([]).time_bounds())

    def test_load_from_file(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "events.json"
            p.write_text(
                json.dumps([_record("A", "2026-05-12T10:00:00Z", "2026-05-12T11:00:00Z")]), encoding="utf-8"
            )
            catalog = Catalog.load(p, tz=UTC)
            self.assertEqual([ev.id for ev in catalog], ["A"])

    def test_load_missing_file_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(CatalogError):
                Catalog.load(Path(d) / "missing.json", tz=UTC)

    def test_load_broken_json_raises(self) -> None:
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "events.json"
            p.write_text("[{", encoding="utf-8")
            with self.assertRaises(CatalogError):
                Catalog.load(p, tz=UTC)

    def test_load_from_url(self) -> None:
        resp = mock.Mock()
        resp.json.return_value = [_record("A", "2026-05-12T10:00:00Z", "2026-05-12T11:00:00Z")]
        with mock.patch("myagenda.catalog.requests.get", return_value=resp) as get:
            catalog = Catalog.load("https://example.org/events.json", tz=UTC)
        get.assert_called_once()
        resp.raise_for_status.assert_called_once()
        self.assertEqual(len(catalog), 1)

    def test_load_from_url_http_error(self) -> None:
        resp = mock.Mock()
        resp.raise_for_status.side_effect = requests.HTTPError("404")
        with mock.patch("myagenda.catalog.requests.get", return_value=resp):
            with self.assertRaises(CatalogError):
                Catalog.load("https://example.org/events.json", tz=UTC)


class TestLoadRange(unittest.TestCase):
    def test_end_is_one_second_earlier(self) -> None:
        r = load_range({"start": "2026-05-12T00:00:00", "end": "2026-05-14T00:00:00"}, tz=UTC)
        self.assertEqual(r.start, datetime(2026, 5, 12, 0, 0, tzinfo=UTC))
        self.assertEqual(r.end, datetime(2026, 5, 13, 23, 59, 59, tzinfo=UTC))

    def test_invalid_range_raises(self) -> None:
        with self.assertRaises(CatalogError):
            load_range({"start": "2026-05-12T00:00:00"}, tz=UTC)
        with self.assertRaises(CatalogError):
            load_range([], tz=UTC)


if __name__ == "__main__":
    unittest.main()
