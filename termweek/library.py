"""
Calendar library: the user's available calendars plus the current selection.

This is an explicit state container. Whoever presents calendars owns one
instance and passes library.current() into the engine on every query; the
engine itself never reads this state.

Every mutation is written through to the store immediately.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from termweek.builtin import SAMPLE_ID, builtin_calendars
from termweek.model import AcademicCalendar
from termweek.storage import CalendarStore

logger = logging.getLogger(__name__)


class CalendarLibrary:
    def __init__(self, store: CalendarStore, calendars: Optional[List[AcademicCalendar]] = None, current_id: Optional[str] = None) -> None:
        self.store = store
        self.calendars: List[AcademicCalendar] = list(calendars or [])
        self.current_id = current_id

    @classmethod
    def load(cls, store: CalendarStore) -> CalendarLibrary:
        """
        Load calendars from the store, seeding the built-in calendars on first
        use and repairing a selection that points nowhere.
        """
        library = cls(store, store.load_calendars(), store.load_current_id())

        if not library.calendars:
            library.calendars = builtin_calendars()
            store.save_calendars(library.calendars)
            logger.info("Seeded %d built-in calendars", len(library.calendars))

        library._ensure_selection_validity()
        return library

    def _ensure_selection_validity(self) -> None:
        if self.current_id is not None and self._index(self.current_id) is not None:
            return
        fallback: Optional[str] = None
        if self._index(SAMPLE_ID) is not None:
            fallback = SAMPLE_ID
        elif self.calendars:
            fallback = self.calendars[0].id
        self.current_id = fallback
        self.store.save_current_id(fallback)

    def _index(self, calendar_id: str) -> Optional[int]:
        for i, cal in enumerate(self.calendars):
            if cal.id == calendar_id:
                return i
        return None

    def _save(self) -> None:
        self.store.save_calendars(self.calendars)
        self.store.save_current_id(self.current_id)

    def current(self) -> Optional[AcademicCalendar]:
        if self.current_id is None:
            return None
        idx = self._index(self.current_id)
        return self.calendars[idx] if idx is not None else None

    def find(self, ref: str) -> Optional[AcademicCalendar]:
        """
        Look up a calendar by full id, id prefix, or name (case-insensitive).
        """
        needle = ref.strip()
        if not needle:
            return None
        idx = self._index(needle)
        if idx is not None:
            return self.calendars[idx]

        by_prefix = [c for c in self.calendars if c.id.startswith(needle)]
        if len(by_prefix) == 1:
            return by_prefix[0]

        lowered = needle.lower()
        for cal in self.calendars:
            if cal.display_name.lower() == lowered:
                return cal
        return None

    def add(self, calendar: AcademicCalendar, select: bool = True) -> bool:
        """
        Add a calendar unless one with the same id exists. Returns True if added.
        """
        if self._index(calendar.id) is not None:
            return False
        self.calendars.append(calendar)
        if select:
            self.current_id = calendar.id
        self._save()
        logger.info("Added calendar %s (%s)", calendar.display_name, calendar.id)
        return True

    def update(self, calendar: AcademicCalendar) -> bool:
        idx = self._index(calendar.id)
        if idx is None:
            return False
        self.calendars[idx] = calendar
        self._save()
        logger.info("Updated calendar %s", calendar.id)
        return True

    def delete(self, ref: str) -> Optional[AcademicCalendar]:
        """
        Remove a calendar. If it was the current one, the first remaining
        calendar (or none) becomes current. Returns the removed calendar.
        """
        cal = self.find(ref)
        if cal is None:
            return None
        self.calendars = [c for c in self.calendars if c.id != cal.id]
        if self.current_id == cal.id:
            self.current_id = self.calendars[0].id if self.calendars else None
        self._save()
        logger.info("Deleted calendar %s", cal.id)
        return cal

    def select(self, ref: str) -> Optional[AcademicCalendar]:
        cal = self.find(ref)
        if cal is None:
            return None
        self.current_id = cal.id
        self.store.save_current_id(cal.id)
        return cal

    def create_new(self, academic_year: str, university_name: str, custom_name: str = "") -> AcademicCalendar:
        """
        Create an empty calendar (not added to the library).
        """
        return AcademicCalendar(
            academic_year=academic_year,
            university_name=university_name,
            custom_name=custom_name or f"{university_name} {academic_year}",
        )
