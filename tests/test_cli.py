"""
Tests for CLI entry points.

Every test points TERMWEEK_DATA_FILE at a temporary file (or uses the
in-memory store) so the real calendars file inside the package is never
touched.
"""

import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest import mock

from termweek.builtin import UBB_STANDARD_ID
from termweek.cli import main
from termweek.storage import JsonFileStore

MEETINGS = [
    {"title": "Algorithms", "days": [2], "frequency": "Weekly", "start": "10:00", "end": "12:00", "location": "HS 1"},
    {"title": "Databases", "days": [2], "frequency": "Bi-Weekly (Odd Weeks)", "start": "11:00", "end": "13:00"},
]


class CLITestCase(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.data_file = self.tmp / "calendars.json"
        self.meetings_file = self.tmp / "meetings.json"
        self.meetings_file.write_text(json.dumps(MEETINGS), encoding="utf-8")
        env = {"TERMWEEK_STORE": "json", "TERMWEEK_DATA_FILE": str(self.data_file), "TERMWEEK_CATALOG_URL": ""}
        self._env = mock.patch.dict(os.environ, env)
        self._env.start()

    def tearDown(self) -> None:
        self._env.stop()
        self._tmp.cleanup()

    def run_cli(self, *argv: str) -> tuple:
        buf = io.StringIO()
        with redirect_stdout(buf):
            with self.assertRaises(SystemExit) as ctx:
                main(list(argv))
        return ctx.exception.code, buf.getvalue()


class TestStatus(CLITestCase):
    def test_status_mid_semester(self) -> None:
        code, out = self.run_cli("status", "--date", "2025-10-20")
        self.assertEqual(code, 0)
        self.assertIn("Semester 1", out)
        self.assertIn("Teaching week 6", out)

    def test_status_during_break(self) -> None:
        code, out = self.run_cli("status", "--date", "2025-12-25")
        self.assertEqual(code, 0)
        self.assertIn("No teaching week", out)
        self.assertIn("Winter Break", out)

    def test_status_invalid_date(self) -> None:
        code, _ = self.run_cli("status", "--date", "2025-13-01")
        self.assertNotEqual(code, 0)


class TestCalendarCommands(CLITestCase):
    def test_use_and_delete(self) -> None:
        code, out = self.run_cli("use", UBB_STANDARD_ID)
        self.assertEqual(code, 0)
        self.assertIn("UBB 2025-2026 (Standard)", out)
        self.assertEqual(JsonFileStore(self.data_file).load_current_id(), UBB_STANDARD_ID)

        code, _ = self.run_cli("delete", UBB_STANDARD_ID)
        self.assertEqual(code, 0)
        ids = [c.id for c in JsonFileStore(self.data_file).load_calendars()]
        self.assertNotIn(UBB_STANDARD_ID, ids)

    def test_use_unknown(self) -> None:
        code, _ = self.run_cli("use", "no-such-calendar")
        self.assertNotEqual(code, 0)

    def test_listings(self) -> None:
        for argv in (("calendars",), ("events",), ("events", "--semester", "2"), ("templates",), ("check",)):
            code, _ = self.run_cli(*argv)
            self.assertEqual(code, 0, argv)


class TestGenerate(CLITestCase):
    def test_generate_from_dates(self) -> None:
        code, _ = self.run_cli(
            "generate", "--year", "2026-2027", "--university", "Test University",
            "--dates", "2026-09-14", "2026-12-19", "2027-01-10", "2027-04-17",
        )
        self.assertEqual(code, 0)

        store = JsonFileStore(self.data_file)
        current = [c for c in store.load_calendars() if c.id == store.load_current_id()]
        self.assertEqual(len(current), 1)
        self.assertEqual(current[0].custom_name, "Test University 2026-2027")

        code, out = self.run_cli("status", "--date", "2026-09-21")
        self.assertIn("Teaching week 2", out)

    def test_generate_from_template(self) -> None:
        code, out = self.run_cli("generate", "--template", "generic")
        self.assertEqual(code, 0)
        self.assertIn("Generic University", out)

    def test_generate_bad_dates(self) -> None:
        code, out = self.run_cli(
            "generate", "--year", "2026-2027", "--university", "X",
            "--dates", "2026-09-14", "2026-02-30", "2027-01-10", "2027-04-17",
        )
        self.assertNotEqual(code, 0)
        self.assertIn("Could not build calendar", out)

    def test_generate_requires_input(self) -> None:
        code, _ = self.run_cli("generate")
        self.assertNotEqual(code, 0)

    def test_generate_unknown_template(self) -> None:
        code, _ = self.run_cli("generate", "--template", "no such school")
        self.assertNotEqual(code, 0)


class TestClasses(CLITestCase):
    def test_classes_on_odd_week(self) -> None:
        # 2025-10-13 is the Monday of teaching week 5
        code, out = self.run_cli("classes", "--meetings", str(self.meetings_file), "--date", "2025-10-13")
        self.assertEqual(code, 0)
        self.assertIn("Algorithms", out)
        self.assertIn("Databases", out)

    def test_no_classes_during_break(self) -> None:
        code, out = self.run_cli("classes", "--meetings", str(self.meetings_file), "--date", "2025-12-22")
        self.assertEqual(code, 0)
        self.assertIn("No classes", out)

    def test_missing_meetings_file(self) -> None:
        code, _ = self.run_cli("classes", "--meetings", str(self.tmp / "missing.json"), "--date", "2025-10-13")
        self.assertNotEqual(code, 0)

    def test_check_reports_clash(self) -> None:
        code, out = self.run_cli("check", "--meetings", str(self.meetings_file))
        self.assertEqual(code, 0)
        self.assertIn("Clashing meetings: 1", out)

    def test_check_with_missing_meetings_file(self) -> None:
        code, out = self.run_cli("check", "--meetings", str(self.tmp / "typo.json"))
        self.assertNotEqual(code, 0)
        self.assertNotIn("No clashing meetings", out)

    def test_export(self) -> None:
        out_file = self.tmp / "classes.ics"
        code, _ = self.run_cli(
            "export", str(out_file), "--meetings", str(self.meetings_file), "--from", "2025-10-13", "--days", "14"
        )
        self.assertEqual(code, 0)
        text = out_file.read_text(encoding="utf-8")
        # Algorithms on both Mondays, Databases on the odd week only
        self.assertEqual(text.count("BEGIN:VEVENT"), 3)


if __name__ == "__main__":
    unittest.main()
