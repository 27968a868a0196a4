"""Tests for the JSON file record store."""

import json
import sys
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from StashQuery.core.models import SavedItem
from StashQuery.storage import JsonRecordStore, parse_records
from StashQuery.utils.log import log


class TestParseRecords(unittest.TestCase):
    def test_array(self) -> None:
        self.assertEqual(parse_records('[{"id": "1"}, {"id": "2"}]'), [{"id": "1"}, {"id": "2"}])

    def test_wrapper_object(self) -> None:
        self.assertEqual(parse_records('{"items": [{"id": "1"}]}'), [{"id": "1"}])
        self.assertEqual(parse_records('{"bookmarks": [{"id": "2"}]}'), [{"id": "2"}])

    def test_json_lines(self) -> None:
        text = '{"id": "1"}\n\n{"id": "2"}\n'
        self.assertEqual(parse_records(text), [{"id": "1"}, {"id": "2"}])

    def test_empty_text(self) -> None:
        self.assertEqual(parse_records("  \n"), [])

    def test_invalid_inputs(self) -> None:
        for text in ('{"other": []}', "42", '{"id": 1}\nnot json'):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_records(text, source="items.json")

    def test_invalid_line_reports_line_number(self) -> None:
        with self.assertRaisesRegex(ValueError, "items.jsonl:2"):
            parse_records('{"id": 1}\n{broken\n', source="items.jsonl")


class TestJsonRecordStore(unittest.TestCase):
    def _write(self, tmp: str, payload: str, name: str = "items.json") -> Path:
        path = Path(tmp) / name
        path.write_text(payload, encoding="utf-8")
        return path

    def test_loads_saved_items(self) -> None:
        rows = [
            {
                "id": "a",
                "title": "Pasta",
                "tags": ["recipe", 3],
                "createdAt": "2024-05-01T12:00:00Z",
                "folder": "kitchen",
            },
            {"id": "b", "url": "note://1", "created_at": 1714564800000},
        ]
        with tempfile.TemporaryDirectory() as tmp:
            items = JsonRecordStore(self._write(tmp, json.dumps(rows))).all()

        self.assertEqual(len(items), 2)
        self.assertIsInstance(items[0], SavedItem)
        self.assertEqual(items[0].tags, ("recipe",))
        self.assertEqual(items[0].created_at, datetime(2024, 5, 1, 12, tzinfo=timezone.utc))
        self.assertEqual(items[0].extra["folder"], "kitchen")
        self.assertEqual(items[1].created_at, datetime(2024, 5, 1, 12, tzinfo=timezone.utc))

    def test_skips_non_object_rows(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = self._write(tmp, '[{"id": "a"}, 3, "x", {"id": "b"}]')
            with self.assertLogs(log, level="WARNING") as captured:
                items = JsonRecordStore(path).all()

        self.assertEqual([item.id for item in items], ["a", "b"])
        self.assertEqual(len(captured.records), 2)
        self.assertIn("index=1", captured.output[0])

    def test_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                JsonRecordStore(Path(tmp) / "missing.json").all()


if __name__ == "__main__":
    unittest.main()
