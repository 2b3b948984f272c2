"""
Persistent storage for the user's academic calendars.

Two interchangeable adapters implement the same small interface:

- JsonFileStore: one local JSON file (key-value layout)
- MemoryStore:   process-local, used for tests and throwaway sessions

get_store() picks one from Settings. The JSON layout is:

    {
      "savedAcademicCalendars": [ {calendar record}, ... ],
      "currentAcademicCalendar": "<calendar id>" | null
    }

Loading is deliberately defensive: a missing or corrupted file, or a
corrupted calendar record, never crashes the application. Broken records
are skipped (and logged) and the caller sees fewer calendars or none.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, List, Optional

from termweek.config import Settings
from termweek.model import AcademicCalendar, RecurringMeeting

logger = logging.getLogger(__name__)

CALENDARS_KEY = "savedAcademicCalendars"
CURRENT_KEY = "currentAcademicCalendar"


class CalendarStore:
    """
    Storage interface for calendars and the current selection.
    """

    def load_calendars(self) -> List[AcademicCalendar]:
        raise NotImplementedError

    def save_calendars(self, calendars: List[AcademicCalendar]) -> None:
        raise NotImplementedError

    def load_current_id(self) -> Optional[str]:
        raise NotImplementedError

    def save_current_id(self, calendar_id: Optional[str]) -> None:
        raise NotImplementedError


def _decode_calendars(raw: Any) -> List[AcademicCalendar]:
    if not isinstance(raw, list):
        return []
    out: List[AcademicCalendar] = []
    for record in raw:
        try:
            out.append(AcademicCalendar.from_dict(record))
        except ValueError as e:
            logger.warning("Skipping corrupted calendar record: %s", e)
    return out


class MemoryStore(CalendarStore):
    def __init__(self) -> None:
        self._data: dict[str, Any] = {CALENDARS_KEY: [], CURRENT_KEY: None}

    def load_calendars(self) -> List[AcademicCalendar]:
        return _decode_calendars(self._data[CALENDARS_KEY])

    def save_calendars(self, calendars: List[AcademicCalendar]) -> None:
        # store records, not objects, so callers never share state with the store
        self._data[CALENDARS_KEY] = [c.to_dict() for c in calendars]

    def load_current_id(self) -> Optional[str]:
        return self._data[CURRENT_KEY]

    def save_current_id(self, calendar_id: Optional[str]) -> None:
        self._data[CURRENT_KEY] = calendar_id


class JsonFileStore(CalendarStore):
    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        # First run: file does not exist yet
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Could not read %s, ignoring stored calendars: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Unexpected content in %s, ignoring stored calendars", self.path)
            return {}
        return data

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")

    def load_calendars(self) -> List[AcademicCalendar]:
        return _decode_calendars(self._read().get(CALENDARS_KEY, []))

    def save_calendars(self, calendars: List[AcademicCalendar]) -> None:
        data = self._read()
        data[CALENDARS_KEY] = [c.to_dict() for c in calendars]
        self._write(data)

    def load_current_id(self) -> Optional[str]:
        value = self._read().get(CURRENT_KEY)
        return value if isinstance(value, str) and value else None

    def save_current_id(self, calendar_id: Optional[str]) -> None:
        data = self._read()
        data[CURRENT_KEY] = calendar_id
        self._write(data)


def get_store(settings: Settings) -> CalendarStore:
    """
    Return the storage adapter selected by configuration.
    """
    if settings.store_backend == "memory":
        return MemoryStore()
    return JsonFileStore(settings.data_file)


def load_meetings(path: str | Path) -> List[RecurringMeeting]:
    """
    Load recurring meetings from a JSON file (a list of meeting records,
    or {"meetings": [...]}).

    Returns an empty list if the file is missing or invalid; invalid
    entries are skipped.
    """
    meetings_path = Path(path)
    try:
        data = json.loads(meetings_path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("Meetings file not found: %s", meetings_path)
        return []
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        logger.warning("Could not read meetings file %s: %s", meetings_path, e)
        return []

    if isinstance(data, dict):
        data = data.get("meetings", [])
    if not isinstance(data, list):
        return []

    out: List[RecurringMeeting] = []
    for record in data:
        try:
            out.append(RecurringMeeting.from_dict(record))
        except ValueError as e:
            logger.warning("Skipping invalid meeting: %s", e)
    return out
