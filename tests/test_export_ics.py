import tempfile
import unittest
from datetime import date
from pathlib import Path

from termweek.engine import Occurrence
from termweek.export_ics import export_occurrences_to_ics
from termweek.model import ClassFrequency, RecurringMeeting


class TestExportICS(unittest.TestCase):
    def test_export_creates_file_and_contains_calendar(self) -> None:
        meeting = RecurringMeeting(
            title="Algorithms",
            days={2},
            frequency=ClassFrequency.WEEKLY,
            start_time="10:00",
            end_time="12:00",
            location="Room 2.1, Main Building",
        )
        broken = RecurringMeeting(title="Broken", days={2}, frequency=ClassFrequency.WEEKLY, start_time="10", end_time="12:00")
        occurrences = [Occurrence(date(2025, 10, 20), meeting, 6), Occurrence(date(2025, 10, 20), broken, 6)]

        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            n = export_occurrences_to_ics(occurrences, out)
            self.assertEqual(n, 1)
            text = out.read_text(encoding="utf-8")
            self.assertIn("BEGIN:VCALENDAR", text)
            self.assertIn("BEGIN:VEVENT", text)
            self.assertIn("SUMMARY:Algorithms (course)", text)
            self.assertIn("DTSTART:20251020T100000", text)
            self.assertIn("DTEND:20251020T120000", text)
            self.assertIn("LOCATION:Room 2.1\\, Main Building", text)
            self.assertIn("DESCRIPTION:Teaching week 6", text)
            self.assertNotIn("Broken", text)

    def test_course_and_seminar_in_same_slot_get_distinct_uids(self) -> None:
        course = RecurringMeeting("Algo", {2}, ClassFrequency.WEEKLY, "10:00", "12:00", kind="course")
        seminar = RecurringMeeting("Algo", {2}, ClassFrequency.WEEKLY, "10:00", "12:00", kind="seminar")
        occurrences = [Occurrence(date(2025, 10, 20), course, 6), Occurrence(date(2025, 10, 20), seminar, 6)]

        with tempfile.TemporaryDirectory() as d:
            out = Path(d) / "out.ics"
            self.assertEqual(export_occurrences_to_ics(occurrences, out), 2)
            again = Path(d) / "again.ics"
            export_occurrences_to_ics(occurrences, again)
            uids = [l for l in out.read_text(encoding="utf-8").splitlines() if l.startswith("UID:")]
            uids_again = [l for l in again.read_text(encoding="utf-8").splitlines() if l.startswith("UID:")]

        self.assertEqual(len(uids), 2)
        self.assertNotEqual(uids[0], uids[1])
        # same meetings, same UIDs on re-export
        self.assertEqual(uids, uids_again)


if __name__ == "__main__":
    unittest.main()
