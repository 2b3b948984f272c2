"""
Central data model definitions used across the project.

This module defines the canonical structure of academic calendars, their
events and recurring class meetings so that:
- the engine, storage, catalog and CLI share the same field names
- the persisted JSON record shape stays stable
- decoding problems surface as ValueError in one place
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Set


class EventType(str, Enum):
    TEACHING = "teaching"
    BREAK = "break"
    EXAM = "exam"
    HOLIDAY = "holiday"
    RETAKE = "retake"
    PRACTICE = "practice"
    LICENSURE = "licensure"
    OTHER = "other"


class SemesterSlot(Enum):
    SEMESTER_1 = 1
    SEMESTER_2 = 2


class ClassFrequency(str, Enum):
    WEEKLY = "Weekly"
    BIWEEKLY_ODD = "Bi-Weekly (Odd Weeks)"
    BIWEEKLY_EVEN = "Bi-Weekly (Even Weeks)"


def new_id() -> str:
    return str(uuid.uuid4())


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise ValueError(f"Missing or invalid field {key!r}")
    return value


def _optional_str(data: dict[str, Any], key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _optional_int(data: dict[str, Any], key: str) -> Optional[int]:
    value = data.get(key)
    # bool is an int subclass, never a week index
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return None


@dataclass
class AcademicEvent:
    """
    One dated period of a semester (inclusive start/end, YYYY-MM-DD).

    Teaching events carry the index range of the teaching weeks they cover.
    """

    start: str
    end: str
    type: EventType
    weeks: int = 0
    teaching_week_index_start: Optional[int] = None
    teaching_week_index_end: Optional[int] = None
    custom_name: Optional[str] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "start": self.start,
            "end": self.end,
            "type": self.type.value,
            "weeks": self.weeks,
        }
        if self.teaching_week_index_start is not None:
            out["teachingWeekIndexStart"] = self.teaching_week_index_start
        if self.teaching_week_index_end is not None:
            out["teachingWeekIndexEnd"] = self.teaching_week_index_end
        if self.custom_name is not None:
            out["customName"] = self.custom_name
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AcademicEvent:
        if not isinstance(data, dict):
            raise ValueError("Event record must be an object")
        try:
            event_type = EventType(data.get("type"))
        except ValueError:
            raise ValueError(f"Unknown event type: {data.get('type')!r}") from None
        weeks = _optional_int(data, "weeks")
        return cls(
            id=_optional_str(data, "id") or new_id(),
            start=_require_str(data, "start"),
            end=_require_str(data, "end"),
            type=event_type,
            weeks=weeks if weeks is not None else 0,
            teaching_week_index_start=_optional_int(data, "teachingWeekIndexStart"),
            teaching_week_index_end=_optional_int(data, "teachingWeekIndexEnd"),
            custom_name=_optional_str(data, "customName"),
        )


@dataclass
class Semester:
    events: List[AcademicEvent] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"events": [e.to_dict() for e in self.events]}

    @classmethod
    def from_dict(cls, data: Any) -> Semester:
        if data is None:
            return cls()
        if not isinstance(data, dict) or not isinstance(data.get("events", []), list):
            raise ValueError("Semester record must be an object with an events list")
        return cls(events=[AcademicEvent.from_dict(e) for e in data.get("events", [])])


@dataclass
class AcademicCalendar:
    """
    A labeled academic year made of exactly two semesters.
    """

    academic_year: str
    semester1: Semester = field(default_factory=Semester)
    semester2: Semester = field(default_factory=Semester)
    university_name: Optional[str] = None
    custom_name: Optional[str] = None
    id: str = field(default_factory=new_id)

    @property
    def display_name(self) -> str:
        if self.custom_name:
            return self.custom_name
        if self.university_name:
            return f"{self.university_name} {self.academic_year}"
        return self.academic_year

    def semester(self, slot: SemesterSlot) -> Semester:
        return self.semester1 if slot is SemesterSlot.SEMESTER_1 else self.semester2

    def all_events(self) -> List[AcademicEvent]:
        return self.semester1.events + self.semester2.events

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "id": self.id,
            "academic_year": self.academic_year,
            "semester_1": self.semester1.to_dict(),
            "semester_2": self.semester2.to_dict(),
        }
        if self.university_name is not None:
            out["university_name"] = self.university_name
        if self.custom_name is not None:
            out["custom_name"] = self.custom_name
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AcademicCalendar:
        if not isinstance(data, dict):
            raise ValueError("Calendar record must be an object")
        return cls(
            id=_optional_str(data, "id") or new_id(),
            academic_year=_require_str(data, "academic_year"),
            semester1=Semester.from_dict(data.get("semester_1")),
            semester2=Semester.from_dict(data.get("semester_2")),
            university_name=_optional_str(data, "university_name"),
            custom_name=_optional_str(data, "custom_name"),
        )


@dataclass
class CalendarTemplate:
    """
    Boundary dates of a known institution's academic year.
    """

    university_name: str
    academic_year: str
    sem1_start: str
    sem1_end: str
    sem2_start: str
    sem2_end: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "university_name": self.university_name,
            "academic_year": self.academic_year,
            "sem1_start": self.sem1_start,
            "sem1_end": self.sem1_end,
            "sem2_start": self.sem2_start,
            "sem2_end": self.sem2_end,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CalendarTemplate:
        if not isinstance(data, dict):
            raise ValueError("Template record must be an object")

        def pick(snake: str, camel: str) -> str:
            # camelCase keys are accepted too
            value = data.get(snake, data.get(camel))
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Missing or invalid field {snake!r}")
            return value.strip()

        return cls(
            university_name=pick("university_name", "universityName"),
            academic_year=pick("academic_year", "academicYear"),
            sem1_start=pick("sem1_start", "sem1StartStr"),
            sem1_end=pick("sem1_end", "sem1EndStr"),
            sem2_start=pick("sem2_start", "sem2StartStr"),
            sem2_end=pick("sem2_end", "sem2EndStr"),
        )


@dataclass
class RecurringMeeting:
    """
    A weekly-repeating class slot (course or seminar of a subject).

    days uses 1=Sunday .. 7=Saturday.
    """

    title: str
    days: Set[int]
    frequency: ClassFrequency
    start_time: str
    end_time: str
    location: Optional[str] = None
    kind: str = "course"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "title": self.title,
            "days": sorted(self.days),
            "frequency": self.frequency.value,
            "start": self.start_time,
            "end": self.end_time,
            "kind": self.kind,
        }
        if self.location is not None:
            out["location"] = self.location
        return out

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RecurringMeeting:
        if not isinstance(data, dict):
            raise ValueError("Meeting record must be an object")
        raw_days = data.get("days")
        if not isinstance(raw_days, list):
            raise ValueError("Meeting days must be a list")
        days: set[int] = set()
        for d in raw_days:
            if isinstance(d, bool) or not isinstance(d, int) or not 1 <= d <= 7:
                raise ValueError(f"Invalid weekday number: {d!r}")
            days.add(d)
        try:
            frequency = ClassFrequency(data.get("frequency", ClassFrequency.WEEKLY.value))
        except ValueError:
            raise ValueError(f"Unknown frequency: {data.get('frequency')!r}") from None
        return cls(
            title=_require_str(data, "title").strip(),
            days=days,
            frequency=frequency,
            start_time=_require_str(data, "start").strip(),
            end_time=_require_str(data, "end").strip(),
            location=_optional_str(data, "location"),
            kind=_optional_str(data, "kind") or "course",
        )
