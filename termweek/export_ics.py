"""
iCalendar (.ics) export.

We convert resolved class occurrences into a calendar file that can be
imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

import hashlib
import json
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Iterable

from termweek.dates import format_date
from termweek.engine import Occurrence


def _ics_escape(text: str) -> str:
    """
    Escape text for ICS fields (very small subset, sufficient for our use).
    """
    return (
        text.replace("\\", "\\\\").replace("\r\n", "\\n").replace("\n", "\\n").replace(";", "\\;").replace(",", "\\,")
    )


def _dt_local(day: date, time_hh_mm: str) -> str:
    """
    Convert date + time to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.strptime(f"{format_date(day)} {time_hh_mm}", "%Y-%m-%d %H:%M")
    return dt.strftime("%Y%m%dT%H%M00")


def _uid(occ: Occurrence, dtstart: str) -> str:
    """
    Stable per-occurrence UID: the whole meeting record plus the start time.
    """
    record = json.dumps(occ.meeting.to_dict(), sort_keys=True, ensure_ascii=False)
    digest = hashlib.sha1(record.encode("utf-8")).hexdigest()[:12]
    return f"{dtstart}-{digest}@termweek"


def export_occurrences_to_ics(occurrences: Iterable[Occurrence], out_path: str | Path) -> int:
    """
    Export occurrences to an .ics file. Returns number of exported events.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//termweek//EN")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    count = 0
    for occ in occurrences:
        meeting = occ.meeting
        try:
            dtstart = _dt_local(occ.date, meeting.start_time)
            dtend = _dt_local(occ.date, meeting.end_time)
        except ValueError:
            continue

        title = meeting.title or "Class"
        summary = f"{title} ({meeting.kind})" if meeting.kind else title

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_uid(occ, dtstart)}")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{dtstart}")
        lines.append(f"DTEND:{dtend}")
        lines.append(f"SUMMARY:{_ics_escape(summary)}")
        if meeting.location:
            lines.append(f"LOCATION:{_ics_escape(meeting.location)}")
        lines.append(f"DESCRIPTION:{_ics_escape(f'Teaching week {occ.teaching_week}')}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
