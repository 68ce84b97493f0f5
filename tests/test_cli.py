"""Tests for the command-line interface."""
from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path
from typing import List, Tuple
from unittest.mock import patch

from macstore import cli


class CliTest(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.url = f"sqlite:///{Path(self._tmp.name, 'cli.sqlite3')}"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, *argv: str) -> Tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = cli.main(["--db", self.url, *argv])
        return code, out.getvalue(), err.getvalue()

    def _list(self, *extra: str) -> List[dict]:
        code, out, _ = self._run("list", "--json", *extra)
        self.assertEqual(code, 0)
        return json.loads(out)

    def test_add_and_list(self) -> None:
        code, out, _ = self._run("add", "aa:bb:cc:dd:ee:ff")
        self.assertEqual(code, 0)
        self.assertIn("created", out)
        records = self._list()
        self.assertEqual(len(records), 1)
        self.assertEqual(records[0]["address"], "AA:BB:CC:DD:EE:FF")
        self.assertTrue(records[0]["active"])

    def test_duplicate_add_fails(self) -> None:
        self._run("add", "00:11:22:33:44:55")
        code, _, err = self._run("add", "00:11:22:33:44:55", "--inactive")
        self.assertEqual(code, 1)
        self.assertIn("already stored", err)

    def test_counters_and_show(self) -> None:
        self._run("add", "00:11:22:33:44:55", "--inactive")
        self._run("attempt", "00:11:22:33:44:55", "--count", "3")
        code, out, _ = self._run("attempt", "00:11:22:33:44:55", "--count", "2")
        self.assertEqual(code, 0)
        self.assertIn("attempts=5", out)
        self._run("success", "00:11:22:33:44:55")

        code, out, _ = self._run("show", "00:11:22:33:44:55", "--json")
        self.assertEqual(code, 0)
        record = json.loads(out)
        self.assertEqual((record["attempts"], record["successful"], record["active"]), (5, 1, False))

    def test_activity_commands(self) -> None:
        self._run("add", "00:11:22:33:44:55", "--inactive")
        self._run("add", "AA:BB:CC:DD:EE:FF", "--inactive")
        self.assertEqual(self._run("activate", "00:11:22:33:44:55")[0], 0)
        self.assertEqual([r["address"] for r in self._list("--active")], ["00:11:22:33:44:55"])
        self.assertEqual(self._run("deactivate-all")[0], 0)
        self.assertEqual(self._list("--active"), [])

    def test_missing_record_reports_failure(self) -> None:
        self.assertEqual(self._run("show", "00:00:00:00:00:01")[0], 1)
        self.assertEqual(self._run("delete", "00:00:00:00:00:01")[0], 1)
        self.assertEqual(self._run("deactivate", "00:00:00:00:00:01")[0], 1)

    def test_negative_count_is_a_usage_error(self) -> None:
        self._run("add", "00:11:22:33:44:55")
        for command in ("attempt", "success"):
            with self.subTest(command=command):
                with self.assertRaises(SystemExit) as ctx:
                    self._run(command, "00:11:22:33:44:55", "--count", "-3")
                self.assertEqual(ctx.exception.code, 2)
        record = json.loads(self._run("show", "00:11:22:33:44:55", "--json")[1])
        self.assertEqual((record["attempts"], record["successful"]), (0, 0))

    def test_counter_commands_on_missing_record_report_not_found(self) -> None:
        for command in ("attempt", "success"):
            with self.subTest(command=command):
                code, out, err = self._run(command, "00:00:00:00:00:01")
                self.assertEqual(code, 1)
                self.assertIn("not found", err)
                self.assertNotIn("-1", err)

    def test_oversized_address_exits_with_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("add", "FF:FF:FF:FF:FF:FF:FF:FF:FF")
        self.assertEqual(ctx.exception.code, 2)

    def test_delete(self) -> None:
        self._run("add", "00:11:22:33:44:55")
        self.assertEqual(self._run("delete", "00:11:22:33:44:55")[0], 0)
        self.assertEqual(self._list(), [])

    def test_table_output_lists_addresses(self) -> None:
        self._run("add", "00:11:22:33:44:55")
        code, out, _ = self._run("list")
        self.assertEqual(code, 0)
        self.assertIn("00:11:22:33:44:55", out)

    def test_malformed_address_exits_with_usage_error(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("add", "zz:11:22:33:44:55")
        self.assertEqual(ctx.exception.code, 2)

    def test_serve_runs_uvicorn_against_api(self) -> None:
        with patch("uvicorn.run") as mock_run, patch("macstore.cli.set_default_database_url") as mock_default:
            code, _, _ = self._run("serve", "--port", "8123")
        self.assertEqual(code, 0)
        mock_default.assert_called_once_with(self.url)
        args, kwargs = mock_run.call_args
        self.assertEqual(args[0], "macstore.api:app")
        self.assertEqual(kwargs["port"], 8123)


if __name__ == "__main__":
    unittest.main()
