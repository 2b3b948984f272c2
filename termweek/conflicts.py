"""
Conflict detection.

Two reports:
- calendar events whose inclusive date ranges overlap
- recurring meetings that can clash on the same weekday

Overlap rule for meeting time slots:
    start < other_end AND end > other_start
"""

from __future__ import annotations

from typing import List, Tuple

from termweek.dates import parse_date, parse_time
from termweek.model import AcademicCalendar, AcademicEvent, ClassFrequency, RecurringMeeting


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    return a_start < b_end and a_end > b_start


def _frequencies_coincide(a: ClassFrequency, b: ClassFrequency) -> bool:
    # odd-week and even-week meetings never share a week
    return {a, b} != {ClassFrequency.BIWEEKLY_ODD, ClassFrequency.BIWEEKLY_EVEN}


def find_overlapping_events(calendar: AcademicCalendar) -> List[Tuple[AcademicEvent, AcademicEvent]]:
    """
    Find event pairs (A,B) whose date ranges intersect, each pair once (i<j).

    Pairs keep the calendar's order (semester 1 then semester 2), so A is the
    event date lookups will pick when both contain a date.
    Events with unparsable dates are skipped.
    """
    parsed = []
    for ev in calendar.all_events():
        start = parse_date(ev.start)
        end = parse_date(ev.end)
        if start is None or end is None:
            continue
        parsed.append((start, end, ev))

    overlaps: List[Tuple[AcademicEvent, AcademicEvent]] = []
    for i in range(len(parsed)):
        s1, e1, ev1 = parsed[i]
        for j in range(i + 1, len(parsed)):
            s2, e2, ev2 = parsed[j]
            # inclusive ranges
            if s1 <= e2 and s2 <= e1:
                overlaps.append((ev1, ev2))
    return overlaps


def find_meeting_clashes(meetings: List[RecurringMeeting]) -> List[Tuple[RecurringMeeting, RecurringMeeting]]:
    """
    Find meeting pairs that share a weekday, overlap in time and can fall
    into the same teaching week.
    """
    parsed: List[Tuple[int, int, RecurringMeeting]] = []
    for m in meetings:
        try:
            start = parse_time(m.start_time)
            end = parse_time(m.end_time)
        except ValueError:
            continue
        # if end <= start, treat as invalid / skip
        if end <= start:
            continue
        parsed.append((start, end, m))

    clashes: List[Tuple[RecurringMeeting, RecurringMeeting]] = []
    for i in range(len(parsed)):
        s1, e1, m1 = parsed[i]
        for j in range(i + 1, len(parsed)):
            s2, e2, m2 = parsed[j]
            if not m1.days & m2.days:
                continue
            if not _frequencies_coincide(m1.frequency, m2.frequency):
                continue
            if _overlaps(s1, e1, s2, e2):
                clashes.append((m1, m2))
    return clashes
