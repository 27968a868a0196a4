"""Tests for the record search service."""

from __future__ import annotations

import sys
import unittest
from datetime import datetime, timezone
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from StashQuery.compiler import QueryCompiler
from StashQuery.config import parse_config_dict
from StashQuery.core.models import SavedItem
from StashQuery.matching import PredicateEvaluator, classify_record
from StashQuery.services import RecordSearchService, create_search_service, sort_records


def _item(idx: int, title: str, day: int | None = None) -> SavedItem:
    created_at = datetime(2024, 5, day, tzinfo=timezone.utc) if day is not None else None
    return SavedItem(id=str(idx), title=title, created_at=created_at)


def _service(workers: int = 1, shard_size: int = 2000) -> RecordSearchService:
    return RecordSearchService(
        compiler=QueryCompiler(),
        evaluator=PredicateEvaluator(classify_record),
        workers=workers,
        shard_size=shard_size,
    )


class TestRecordSearchService(unittest.TestCase):
    def setUp(self) -> None:
        self.items = [
            _item(0, "red shoe", 3),
            _item(1, "blue shoe", 1),
            _item(2, "hat", 2),
            _item(3, "green shoe"),
            _item(4, "red hat", 5),
            _item(5, "old shoe", 4),
        ]

    def test_search_returns_spec_and_counts(self) -> None:
        result = _service().search("shoe -blue", self.items)

        self.assertEqual(result.spec.terms, ("shoe",))
        self.assertEqual(result.spec.exclude_terms, ("blue",))
        self.assertEqual([item.id for item in result.items], ["0", "3", "5"])
        self.assertEqual(result.scanned, 6)
        self.assertEqual(result.matched, 3)

    def test_empty_query_returns_everything(self) -> None:
        result = _service().search("", self.items)

        self.assertEqual(len(result.items), 6)
        self.assertTrue(result.spec.is_empty)

    def test_sort_and_limit(self) -> None:
        newest = _service().search("shoe", self.items, sort="newest", limit=2)
        oldest = _service().search("shoe", self.items, sort="oldest")

        self.assertEqual([item.id for item in newest.items], ["5", "0"])
        self.assertEqual(newest.matched, 4)
        self.assertEqual([item.id for item in oldest.items], ["1", "0", "5", "3"])

    def test_sharded_scan_matches_inline_scan(self) -> None:
        records = [_item(i, "shoe" if i % 3 else "hat") for i in range(25)]

        inline = _service().search("shoe", records)
        sharded = _service(workers=4, shard_size=4).search("shoe", records)

        self.assertEqual(sharded.items, inline.items)
        self.assertEqual(sharded.matched, inline.matched)


class TestSortRecords(unittest.TestCase):
    def test_undated_records_go_last_and_ties_keep_order(self) -> None:
        a = {"id": "a", "createdAt": "2024-05-01T00:00:00Z"}
        b = {"id": "b"}
        c = {"id": "c", "createdAt": "2024-05-01T00:00:00Z"}
        d = {"id": "d", "createdAt": "2024-05-02T00:00:00Z"}

        self.assertEqual(sort_records([a, b, c, d], "newest"), [d, a, c, b])
        self.assertEqual(sort_records([a, b, c, d], "oldest"), [a, c, d, b])
        self.assertEqual(sort_records([a, b, c, d], "store"), [a, b, c, d])

    def test_unknown_order_raises(self) -> None:
        with self.assertRaises(ValueError):
            sort_records([], "random")


class TestCreateSearchService(unittest.TestCase):
    def test_factory_uses_config_vocabulary_and_workers(self) -> None:
        config = parse_config_dict(
            {
                "log": {"level": "INFO", "to_file": False},
                "store": {"path": "items.json"},
                "search": {"workers": 3},
                "vocabulary": {"type_mappings": {"clip": ["youtube"]}},
            }
        )

        service = create_search_service(config)
        result = service.search("type:clip", [{"url": "https://youtu.be/x"}, {"url": "https://example.com"}])

        self.assertEqual(service.workers, 3)
        self.assertEqual(result.matched, 1)


if __name__ == "__main__":
    unittest.main()
