"""End-to-end tests for the click CLI."""

import json
import sys
import tempfile
import unittest
from pathlib import Path

from click.testing import CliRunner

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from StashQuery.cli.ui import cli
from StashQuery.utils.log import log

_CONFIG_YAML = """
log:
  level: WARNING
  to_file: false
  dir: log
search:
  sort: store
  limit: -1
  workers: 1
store:
  path: {store}
output:
  formats: [json]
vocabulary:
  type_mappings:
    clip: [youtube]
"""

_RECORDS = [
    {"id": "1", "title": "Pasta recipe", "url": "https://cooking.example/pasta", "tags": ["recipe"],
     "createdAt": "2024-05-01T10:00:00Z"},
    {"id": "2", "title": "Cat video", "url": "https://youtu.be/cat", "createdAt": "2024-05-03T10:00:00Z"},
    {"id": "3", "title": "Shopping list", "url": "note://3", "notes": "pasta, eggs"},
]


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        tmp = Path(self._tmp.name)
        self.records_path = tmp / "items.json"
        self.records_path.write_text(json.dumps(_RECORDS), encoding="utf-8")
        self.config_path = tmp / "config.yml"
        self.config_path.write_text(_CONFIG_YAML.format(store=self.records_path.as_posix()), encoding="utf-8")
        self.runner = CliRunner()

    def tearDown(self) -> None:
        log.handlers.clear()
        self._tmp.cleanup()

    def _invoke(self, *args: str):
        return self.runner.invoke(cli, ["--config", str(self.config_path), *args])

    def test_search_prints_json_result(self) -> None:
        result = self._invoke("search", "pasta")

        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.stdout)
        self.assertEqual(payload["query"], "pasta")
        self.assertEqual(payload["filters"]["terms"], ["pasta"])
        self.assertEqual(payload["scanned"], 3)
        self.assertEqual([item["id"] for item in payload["items"]], ["1", "3"])

    def test_search_options_override_config(self) -> None:
        result = self._invoke("search", "", "--sort", "newest", "--limit", "2")

        self.assertEqual(result.exit_code, 0, result.output)
        payload = json.loads(result.stdout)
        self.assertEqual(payload["matched"], 3)
        self.assertEqual([item["id"] for item in payload["items"]], ["2", "1"])

    def test_search_uses_configured_vocabulary(self) -> None:
        result = self._invoke("search", "type:clip")

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual([item["id"] for item in json.loads(result.stdout)["items"]], ["2"])

    def test_search_missing_records_file_aborts(self) -> None:
        result = self._invoke("search", "pasta", "--records", str(Path(self._tmp.name) / "missing.json"))

        self.assertNotEqual(result.exit_code, 0)

    def test_parse_prints_filters(self) -> None:
        result = self._invoke("parse", '"red shoes" -blue #recipe date:yesterday')

        self.assertEqual(result.exit_code, 0, result.output)
        data = json.loads(result.stdout)
        self.assertEqual(data["exactPhrases"], ["red shoes"])
        self.assertEqual(data["excludeTerms"], ["blue"])
        self.assertEqual(data["tags"], ["recipe"])
        self.assertEqual(data["dateFilter"], "yesterday")

    def test_syntax_lists_every_operator(self) -> None:
        result = self._invoke("syntax")

        self.assertEqual(result.exit_code, 0, result.output)
        for fragment in ("||", '"red shoes"', "-red", "object:", "text:", "type:", "format:", "date:", "site:", "#recipe"):
            self.assertIn(fragment, result.stdout)

    def test_bad_config_is_reported(self) -> None:
        self.config_path.write_text("log: [1]\n", encoding="utf-8")

        result = self._invoke("syntax")

        self.assertNotEqual(result.exit_code, 0)
        self.assertIn("Cannot load config", result.output)


if __name__ == "__main__":
    unittest.main()
