"""
Pre-built academic calendars and institution templates shipped with the package.

Built-in calendars have stable ids so that seeding a store twice never
creates duplicates. Each function returns a fresh object.
"""

from __future__ import annotations

from typing import List

from termweek.engine import generate_standard_calendar
from termweek.model import AcademicCalendar, AcademicEvent, CalendarTemplate, EventType, Semester


SAMPLE_ID = "00000000-0000-0000-0000-000000000001"
UBB_STANDARD_ID = "11111111-1111-1111-1111-111111111111"
UBB_FINAL_ID = "22222222-2222-2222-2222-222222222222"

BUILTIN_TEMPLATES = [
    CalendarTemplate(
        university_name="University of Example",
        academic_year="2025-2026",
        sem1_start="2025-09-15",
        sem1_end="2025-12-20",
        sem2_start="2026-01-11",
        sem2_end="2026-04-18",
    ),
    CalendarTemplate(
        university_name="Generic University",
        academic_year="2025-2026",
        sem1_start="2025-09-01",
        sem1_end="2026-01-31",
        sem2_start="2026-02-01",
        sem2_end="2026-06-30",
    ),
]


def _ev(start: str, end: str, type_: EventType, weeks: int, name: str, first: int | None = None, last: int | None = None) -> AcademicEvent:
    return AcademicEvent(
        start=start,
        end=end,
        type=type_,
        weeks=weeks,
        teaching_week_index_start=first,
        teaching_week_index_end=last,
        custom_name=name,
    )


def sample_calendar() -> AcademicCalendar:
    """
    Default calendar used when nothing has been configured yet.
    """
    cal = generate_standard_calendar("2025-2026", "University of Example", "2025-09-15", "2025-12-20", "2026-01-11", "2026-04-18")
    if cal is None:
        raise RuntimeError("Sample calendar dates are invalid")
    cal.id = SAMPLE_ID
    cal.custom_name = "Default Academic Calendar"
    cal.semester1.events[0].custom_name = "Fall Teaching Period"
    cal.semester2.events[0].custom_name = "Spring Teaching Period"
    cal.semester2.events.append(_ev("2026-04-19", "2026-04-25", EventType.EXAM, 1, "Examination Period"))
    return cal


def _ubb_semester1() -> Semester:
    return Semester(
        events=[
            _ev("2025-09-29", "2025-12-21", EventType.TEACHING, 12, "Didactic Activity 1", 1, 12),
            _ev("2025-12-22", "2026-01-04", EventType.BREAK, 2, "Christmas Holiday"),
            _ev("2026-01-05", "2026-01-18", EventType.TEACHING, 2, "Didactic Activity 2", 13, 14),
            _ev("2026-01-19", "2026-02-08", EventType.EXAM, 3, "Exam Session"),
            _ev("2026-02-09", "2026-02-15", EventType.HOLIDAY, 1, "Inter-semester Break"),
            _ev("2026-02-16", "2026-02-22", EventType.RETAKE, 1, "Retake Session"),
        ]
    )


def ubb_standard_calendar() -> AcademicCalendar:
    semester2 = Semester(
        events=[
            _ev("2026-02-23", "2026-04-12", EventType.TEACHING, 7, "Didactic Activity 1", 1, 7),
            _ev("2026-04-13", "2026-04-19", EventType.BREAK, 1, "Easter Holiday"),
            _ev("2026-04-20", "2026-06-07", EventType.TEACHING, 7, "Didactic Activity 2", 8, 14),
            _ev("2026-06-08", "2026-06-28", EventType.EXAM, 3, "Summer Exam Session"),
            _ev("2026-06-29", "2026-07-05", EventType.HOLIDAY, 1, "Summer Break 1"),
            _ev("2026-07-06", "2026-07-12", EventType.RETAKE, 1, "Summer Retake Session"),
            _ev("2026-07-13", "2026-08-02", EventType.PRACTICE, 3, "Practical Training"),
            _ev("2026-08-03", "2026-09-27", EventType.HOLIDAY, 8, "Summer Holiday"),
        ]
    )
    return AcademicCalendar(
        id=UBB_STANDARD_ID,
        academic_year="2025-2026",
        semester1=_ubb_semester1(),
        semester2=semester2,
        university_name="UBB Cluj-Napoca",
        custom_name="UBB 2025-2026 (Standard)",
    )


def ubb_final_year_calendar() -> AcademicCalendar:
    semester2 = Semester(
        events=[
            _ev("2026-02-23", "2026-04-12", EventType.TEACHING, 7, "Didactic Activity 1", 1, 7),
            _ev("2026-04-13", "2026-04-19", EventType.BREAK, 1, "Easter Holiday"),
            _ev("2026-04-20", "2026-05-24", EventType.TEACHING, 5, "Didactic Activity 2", 8, 12),
            _ev("2026-05-25", "2026-06-07", EventType.EXAM, 2, "Final Exam Session"),
            _ev("2026-06-08", "2026-06-14", EventType.RETAKE, 1, "Retake Session"),
            _ev("2026-06-15", "2026-06-28", EventType.OTHER, 2, "Licensure Prep"),
            _ev("2026-06-29", "2026-07-05", EventType.LICENSURE, 1, "Licensure Exam"),
        ]
    )
    return AcademicCalendar(
        id=UBB_FINAL_ID,
        academic_year="2025-2026",
        semester1=_ubb_semester1(),
        semester2=semester2,
        university_name="UBB Cluj-Napoca",
        custom_name="UBB 2025-2026 (Final Years)",
    )


def builtin_calendars() -> List[AcademicCalendar]:
    return [sample_calendar(), ubb_standard_calendar(), ubb_final_year_calendar()]
