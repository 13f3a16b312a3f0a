"""
Tests for CLI entry points.

These tests focus on:
- listing events with filter, search and interest options
- printing filter values
- error handling: bad data files and bad arguments exit with code 1

All data lives in temporary files so the packaged demo data is never used.
"""

import io
import json
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from myagenda import config
from myagenda.cli import main

EVENTS = [
    {
        "id": "A",
        "start": "2026-05-12T10:00:00Z",
        "end": "2026-05-12T11:00:00Z",
        "title": "Alpha talk",
        "abbreviation": "AL1",
        "location": "Hall",
        "type": "Talk",
        "topic": "X",
    },
    {
        "id": "B",
        "start": "2026-05-12T09:00:00Z",
        "end": "2026-05-12T10:00:00Z",
        "title": "Beta talk",
        "location": "Lab",
        "type": "Workshop",
        "topic": "Y",
    },
    {
        "id": "C",
        "start": "2026-05-12T12:00:00Z",
        "end": "2026-05-12T13:00:00Z",
        "title": "Gamma talk",
        "location": "Hall",
        "type": "Talk",
    },
]


class TestCLI(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.events_path = Path(self._tmp.name) / "events.json"
        self.events_path.write_text(json.dumps(EVENTS), encoding="utf-8")
        self.range_path = Path(self._tmp.name) / "range.json"
        self.range_path.write_text(
            json.dumps({"start": "2026-05-12T00:00:00Z", "end": "2026-05-13T00:00:00Z"}), encoding="utf-8"
        )

    def run_cli(self, *args: str) -> tuple[int, str]:
        argv = ["--events", str(self.events_path), "--range", str(self.range_path), "--timezone", "UTC", *args]
        out = io.StringIO()
        with redirect_stdout(out):
            with self.assertRaises(SystemExit) as ctx:
                main(argv)
        return ctx.exception.code, out.getvalue()

    def test_list_all_in_chronological_order(self) -> None:
        code, out = self.run_cli("list")
        self.assertEqual(code, 0)
        lines = out.strip().splitlines()
        self.assertIn("Beta talk", lines[0])
        self.assertIn("Alpha talk", lines[1])
        self.assertIn("Gamma talk", lines[2])
        self.assertIn("3 of 3 events visible", out)

    def test_list_with_hide_and_search(self) -> None:
        code, out = self.run_cli("list", "--hide", "location=Lab", "--search", "GAMMA")
        self.assertEqual(code, 0)
        self.assertIn("Gamma talk", out)
        self.assertNotIn("Alpha talk", out)
        self.assertIn("1 of 3 events visible", out)

    def test_list_only_unknown_topic(self) -> None:
        code, out = self.run_cli("list", "--only", "topic=")
        self.assertEqual(code, 0)
        self.assertIn("Gamma talk", out)
        self.assertIn("1 of 3 events visible", out)

    def test_list_interest_options(self) -> None:
        code, out = self.run_cli("list", "--interested", "B", "--hide-not-interested")
        self.assertEqual(code, 0)
        self.assertIn("* ", out)
        self.assertIn("Beta talk", out)
        self.assertIn("1 of 3 events visible", out)
        self.assertIn("1 interested", out)

        code, out = self.run_cli("list", "--interested", "B", "--hide", "topic=Y", "--always-show-interested")
        self.assertEqual(code, 0)
        self.assertIn("Beta talk", out)
        self.assertIn("3 of 3 events visible", out)

    def test_list_no_results(self) -> None:
        code, out = self.run_cli("list", "--search", "nothing like this")
        self.assertEqual(code, 0)
        self.assertIn("No events.", out)

    def test_list_unknown_dimension_fails(self) -> None:
        code, out = self.run_cli("list", "--hide", "speaker=Bob")
        self.assertEqual(code, 1)
        self.assertIn("Unknown dimension", out)

    def test_list_bad_assignment_fails(self) -> None:
        code, out = self.run_cli("list", "--hide", "topic")
        self.assertEqual(code, 1)

    def test_filters(self) -> None:
        code, out = self.run_cli("filters", "topic")
        self.assertEqual(code, 0)
        lines = out.strip().splitlines()
        self.assertTrue(lines[0].startswith("[x] (unknown) (1)"))
        self.assertTrue(lines[1].startswith("[x] X (1) #"))
        self.assertTrue(lines[2].startswith("[x] Y (1) #"))

    def test_filters_without_color(self) -> None:
        code, out = self.run_cli("--color-by", "location", "filters", "type")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip().splitlines(), ["[x] Talk (2)", "[x] Workshop (1)"])

    def test_filters_unknown_dimension(self) -> None:
        code, out = self.run_cli("filters", "speaker")
        self.assertEqual(code, 1)

    def test_missing_events_file(self) -> None:
        self.events_path.unlink()
        code, out = self.run_cli("list")
        self.assertEqual(code, 1)
        self.assertIn("Could not load events", out)

    def test_missing_default_range_file_uses_catalog_bounds(self) -> None:
        missing = Path(self._tmp.name) / "no-range.json"
        argv = ["--events", str(self.events_path), "--timezone", "UTC", "list"]
        out = io.StringIO()
        with mock.patch.object(config, "RANGE_SOURCE", str(missing)):
            with redirect_stdout(out):
                with self.assertRaises(SystemExit) as ctx:
                    main(argv)
        self.assertEqual(ctx.exception.code, 0)
        self.assertIn("3 of 3 events visible", out.getvalue())

    def test_missing_named_range_file_fails(self) -> None:
        self.range_path.unlink()
        code, out = self.run_cli("list")
        self.assertEqual(code, 1)
        self.assertIn("File not found", out)

    def test_broken_range_file_fails(self) -> None:
        self.range_path.write_text("{broken", encoding="utf-8")
        code, out = self.run_cli("list")
        self.assertEqual(code, 1)
        self.assertIn("Could not read", out)

    def test_invalid_default_color_by_fails_cleanly(self) -> None:
        # argparse does not check defaults against choices
        with mock.patch.object(config, "DEFAULT_COLOR_BY", "speaker"):
            code, out = self.run_cli("list")
        self.assertEqual(code, 1)
        self.assertIn("Unknown dimension", out)
        self.assertNotIn("Traceback", out)


if __name__ == "__main__":
    unittest.main()
