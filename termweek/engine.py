"""
Calendar resolution engine.

Answers, for a given academic calendar and date:
- which teaching week and which semester are active
- which calendar event contains the date
- which recurring class meetings take place

and builds the minimal two-semester calendar from four boundary dates.

Every function here is pure: the calendar snapshot is passed in on each call
and nothing is read from or written to shared state.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Any, Iterable, List, NamedTuple, Optional

from termweek.dates import format_date, parse_date, parse_time, span_weeks, weekday_number, weeks_between
from termweek.model import (
    AcademicCalendar,
    AcademicEvent,
    CalendarTemplate,
    ClassFrequency,
    EventType,
    RecurringMeeting,
    Semester,
    SemesterSlot,
)

logger = logging.getLogger(__name__)


class Position(NamedTuple):
    teaching_week: Optional[int]
    semester: SemesterSlot


class Occurrence(NamedTuple):
    date: date
    meeting: RecurringMeeting
    teaching_week: int


def _event_range(event: AcademicEvent) -> Optional[tuple[date, date]]:
    start = parse_date(event.start)
    end = parse_date(event.end)
    if start is None or end is None:
        return None
    return start, end


def _contains(event: AcademicEvent, day: date) -> bool:
    rng = _event_range(event)
    return rng is not None and rng[0] <= day <= rng[1]


def _teaching_week_in(semester: Semester, day: date) -> Optional[int]:
    for event in semester.events:
        if event.type is not EventType.TEACHING or event.teaching_week_index_start is None:
            continue
        rng = _event_range(event)
        if rng is None or not rng[0] <= day <= rng[1]:
            continue
        return event.teaching_week_index_start + weeks_between(rng[0], day)
    return None


def resolve_current_position(calendar: Optional[AcademicCalendar], query_date: Any) -> Position:
    """
    Resolve the teaching week and semester for query_date.

    The first teaching event (semester 1 first, insertion order) containing
    the date wins. Outside teaching events the week is None and the semester
    is 1 if semester 1's first event has already started, else 2.
    """
    day = parse_date(query_date)
    if calendar is None or day is None:
        return Position(None, SemesterSlot.SEMESTER_1)

    week = _teaching_week_in(calendar.semester1, day)
    if week is not None:
        return Position(week, SemesterSlot.SEMESTER_1)

    week = _teaching_week_in(calendar.semester2, day)
    if week is not None:
        return Position(week, SemesterSlot.SEMESTER_2)

    first = calendar.semester1.events[0] if calendar.semester1.events else None
    first_start = parse_date(first.start) if first is not None else None
    if first_start is not None and first_start <= day:
        return Position(None, SemesterSlot.SEMESTER_1)
    return Position(None, SemesterSlot.SEMESTER_2)


def event_containing(calendar: Optional[AcademicCalendar], query_date: Any) -> Optional[AcademicEvent]:
    """
    Return the first event (semester 1 then semester 2, insertion order)
    whose inclusive range contains query_date.
    """
    day = parse_date(query_date)
    if calendar is None or day is None:
        return None
    for event in calendar.all_events():
        if _contains(event, day):
            return event
    return None


def meeting_occurs_on_week(meeting: RecurringMeeting, academic_week: Optional[int]) -> bool:
    # no teaching week (break, exams, no calendar): nothing recurs
    if academic_week is None:
        return False
    if meeting.frequency is ClassFrequency.BIWEEKLY_ODD:
        return academic_week % 2 == 1
    if meeting.frequency is ClassFrequency.BIWEEKLY_EVEN:
        return academic_week % 2 == 0
    return True


def meeting_occurs_on(meeting: RecurringMeeting, day: date, academic_week: Optional[int]) -> bool:
    return weekday_number(day) in meeting.days and meeting_occurs_on_week(meeting, academic_week)


def _start_minutes(meeting: RecurringMeeting) -> int:
    try:
        return parse_time(meeting.start_time)
    except ValueError:
        # unsortable times go last
        return 24 * 60


def meetings_on_date(
    calendar: Optional[AcademicCalendar], meetings: Iterable[RecurringMeeting], query_date: Any
) -> List[Occurrence]:
    """
    Meetings that actually take place on query_date, ordered by start time.
    """
    day = parse_date(query_date)
    if day is None:
        return []
    week = resolve_current_position(calendar, day).teaching_week
    if week is None:
        return []
    out = [Occurrence(day, m, week) for m in meetings if meeting_occurs_on(m, day, week)]
    out.sort(key=lambda occ: _start_minutes(occ.meeting))
    return out


def upcoming_occurrences(
    calendar: Optional[AcademicCalendar],
    meetings: Iterable[RecurringMeeting],
    start: Any,
    days: int = 7,
) -> List[Occurrence]:
    """
    All meeting occurrences in [start, start + days), by date then time.
    """
    first = parse_date(start)
    if first is None or days <= 0:
        return []
    meeting_list = list(meetings)
    out: List[Occurrence] = []
    for offset in range(days):
        out.extend(meetings_on_date(calendar, meeting_list, first + timedelta(days=offset)))
    return out


def generate_standard_calendar(
    academic_year: str,
    university_name: str,
    sem1_start: Any,
    sem1_end: Any,
    sem2_start: Any,
    sem2_end: Any,
) -> Optional[AcademicCalendar]:
    """
    Build a two-semester calendar: one teaching block per semester and the
    break between them.

    Returns None if a boundary date cannot be parsed or a semester ends
    before it starts.
    """
    bounds = [parse_date(x) for x in (sem1_start, sem1_end, sem2_start, sem2_end)]
    if any(b is None for b in bounds):
        logger.warning("Could not parse semester boundary dates for %s %s", university_name, academic_year)
        return None
    s1_start, s1_end, s2_start, s2_end = bounds
    if s1_end < s1_start or s2_end < s2_start:
        logger.warning("Semester ends before it starts for %s %s", university_name, academic_year)
        return None

    s1_weeks = span_weeks(s1_start, s1_end)
    s2_weeks = span_weeks(s2_start, s2_end)

    semester1 = Semester(
        events=[
            AcademicEvent(
                start=format_date(s1_start),
                end=format_date(s1_end),
                type=EventType.TEACHING,
                weeks=s1_weeks,
                teaching_week_index_start=1,
                teaching_week_index_end=s1_weeks,
                custom_name="Semester 1",
            )
        ]
    )

    break_start = s1_end + timedelta(days=1)
    break_end = s2_start - timedelta(days=1)
    if break_start <= break_end:
        semester1.events.append(
            AcademicEvent(
                start=format_date(break_start),
                end=format_date(break_end),
                type=EventType.BREAK,
                weeks=span_weeks(break_start, break_end),
                custom_name="Winter Break",
            )
        )

    semester2 = Semester(
        events=[
            AcademicEvent(
                start=format_date(s2_start),
                end=format_date(s2_end),
                type=EventType.TEACHING,
                weeks=s2_weeks,
                teaching_week_index_start=1,
                teaching_week_index_end=s2_weeks,
                custom_name="Semester 2",
            )
        ]
    )

    return AcademicCalendar(
        academic_year=academic_year,
        semester1=semester1,
        semester2=semester2,
        university_name=university_name,
        custom_name=f"{university_name} {academic_year}",
    )


def generate_from_template(template: CalendarTemplate) -> Optional[AcademicCalendar]:
    return generate_standard_calendar(
        template.academic_year,
        template.university_name,
        template.sem1_start,
        template.sem1_end,
        template.sem2_start,
        template.sem2_end,
    )
