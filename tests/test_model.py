"""
Tests for the persisted record shape of calendars, templates and meetings.
"""

import unittest

from termweek.builtin import ubb_final_year_calendar
from termweek.model import AcademicCalendar, AcademicEvent, CalendarTemplate, ClassFrequency, EventType, RecurringMeeting


class TestCalendarRecord(unittest.TestCase):
    def test_record_field_names(self) -> None:
        data = ubb_final_year_calendar().to_dict()
        self.assertEqual(
            set(data), {"id", "academic_year", "semester_1", "semester_2", "university_name", "custom_name"}
        )
        teaching = data["semester_1"]["events"][0]
        self.assertEqual(teaching["type"], "teaching")
        self.assertEqual(teaching["teachingWeekIndexStart"], 1)
        self.assertEqual(teaching["teachingWeekIndexEnd"], 12)
        self.assertEqual(teaching["customName"], "Didactic Activity 1")

        licensure = data["semester_2"]["events"][-1]
        self.assertEqual(licensure["type"], "licensure")
        self.assertNotIn("teachingWeekIndexStart", licensure)

    def test_decode_restores_calendar(self) -> None:
        cal = ubb_final_year_calendar()
        self.assertEqual(AcademicCalendar.from_dict(cal.to_dict()), cal)

    def test_missing_ids_are_generated(self) -> None:
        data = {
            "academic_year": "2025-2026",
            "semester_1": {"events": [{"start": "2025-09-15", "end": "2025-12-20", "type": "teaching", "weeks": 14}]},
        }
        cal = AcademicCalendar.from_dict(data)
        self.assertTrue(cal.id)
        self.assertTrue(cal.semester1.events[0].id)
        self.assertEqual(cal.semester2.events, [])
        self.assertIsNone(cal.university_name)

    def test_unknown_event_type_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            AcademicEvent.from_dict({"start": "2025-09-15", "end": "2025-12-20", "type": "party", "weeks": 1})

    def test_missing_year_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            AcademicCalendar.from_dict({"semester_1": {"events": []}})

    def test_display_name(self) -> None:
        self.assertEqual(AcademicCalendar(academic_year="2025-2026", university_name="UBB").display_name, "UBB 2025-2026")
        self.assertEqual(AcademicCalendar(academic_year="2025-2026").display_name, "2025-2026")


class TestTemplateRecord(unittest.TestCase):
    def test_camel_case_keys(self) -> None:
        t = CalendarTemplate.from_dict(
            {
                "universityName": "UBB",
                "academicYear": "2025-2026",
                "sem1StartStr": "2025-09-29",
                "sem1EndStr": "2026-02-22",
                "sem2StartStr": "2026-02-23",
                "sem2EndStr": "2026-07-12",
            }
        )
        self.assertEqual(t.sem2_end, "2026-07-12")
        self.assertEqual(CalendarTemplate.from_dict(t.to_dict()), t)

    def test_missing_field(self) -> None:
        with self.assertRaises(ValueError):
            CalendarTemplate.from_dict({"university_name": "UBB"})


class TestMeetingRecord(unittest.TestCase):
    def test_decode(self) -> None:
        m = RecurringMeeting.from_dict(
            {"title": " Algorithms ", "days": [2, 4], "frequency": "Bi-Weekly (Odd Weeks)", "start": "10:00", "end": "12:00"}
        )
        self.assertEqual(m.title, "Algorithms")
        self.assertEqual(m.days, {2, 4})
        self.assertEqual(m.frequency, ClassFrequency.BIWEEKLY_ODD)
        self.assertEqual(m.kind, "course")

    def test_frequency_defaults_to_weekly(self) -> None:
        m = RecurringMeeting.from_dict({"title": "A", "days": [2], "start": "10:00", "end": "12:00"})
        self.assertEqual(m.frequency, ClassFrequency.WEEKLY)

    def test_invalid_weekday(self) -> None:
        with self.assertRaises(ValueError):
            RecurringMeeting.from_dict({"title": "A", "days": [0], "start": "10:00", "end": "12:00"})

    def test_unknown_frequency(self) -> None:
        with self.assertRaises(ValueError):
            RecurringMeeting.from_dict({"title": "A", "days": [2], "frequency": "Monthly", "start": "10:00", "end": "12:00"})


if __name__ == "__main__":
    unittest.main()
