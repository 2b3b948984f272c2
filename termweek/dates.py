"""
Date helpers (strings <-> dates, week arithmetic).

All calendar dates are plain dates in ISO format (YYYY-MM-DD).

Week rule used everywhere in this project:
- weeks start on Monday (ISO 8601)
- "weeks between" counts calendar-week boundaries crossed, not 7-day spans
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Any, Optional


DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: Any) -> Optional[date]:
    """
    Convert a date, datetime or 'YYYY-MM-DD' string to a date.

    Returns None for anything that cannot be parsed.
    """
    # datetime is a date subclass, check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value.strip(), DATE_FORMAT).date()
    except ValueError:
        return None


def format_date(d: date) -> str:
    return d.strftime(DATE_FORMAT)


def week_start(d: date) -> date:
    """
    Return the Monday of the week containing d.
    """
    return d - timedelta(days=d.weekday())


def weeks_between(start: date, end: date) -> int:
    """
    Number of Monday-start calendar weeks from start's week to end's week.

    Negative if end lies in an earlier week than start.
    """
    return (week_start(end) - week_start(start)).days // 7


def span_weeks(start: date, end: date) -> int:
    """
    Inclusive number of calendar weeks touched by [start, end].
    """
    return weeks_between(start, end) + 1


def weekday_number(d: date) -> int:
    """
    Weekday as 1=Sunday, 2=Monday .. 7=Saturday.
    """
    return d.isoweekday() % 7 + 1


def parse_time(hhmm: str) -> int:
    """
    Convert 'HH:MM' to minutes since midnight.
    Raises ValueError for invalid formats.
    """
    parts = hhmm.strip().split(":")
    if len(parts) != 2:
        raise ValueError(f"Invalid time format: {hhmm!r}")
    h = int(parts[0])
    m = int(parts[1])
    if not (0 <= h <= 23 and 0 <= m <= 59):
        raise ValueError(f"Invalid time value: {hhmm!r}")
    return h * 60 + m
