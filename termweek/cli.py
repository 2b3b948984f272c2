"""
CLI (Command Line Interface).

Quick terminal commands around the academic calendar library, e.g.:

    termweek status [--date 2025-10-20]
    termweek calendars
    termweek events [--semester 1]
    termweek use <calendar id or name>
    termweek delete <calendar id or name>
    termweek templates [--url <catalog url>]
    termweek generate --template "University of Example"
    termweek generate --year 2025-2026 --university "My Uni" --dates S1 E1 S2 E2
    termweek classes --meetings meetings.json [--date ...]
    termweek upcoming --meetings meetings.json [--from ...] [--days 7]
    termweek check [--meetings meetings.json]
    termweek export out.ics --meetings meetings.json [--from ...] [--days 7]

Labels for event types and semesters live here: they are presentation
details, not part of the data model.
"""

from __future__ import annotations

import argparse
import logging
from datetime import date
from typing import Callable, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from termweek.catalog import CatalogError, fetch_remote_templates, find_template, list_templates
from termweek.config import Settings, load_settings
from termweek.conflicts import find_meeting_clashes, find_overlapping_events
from termweek.dates import parse_date
from termweek.engine import (
    Occurrence,
    event_containing,
    generate_from_template,
    generate_standard_calendar,
    meetings_on_date,
    resolve_current_position,
    upcoming_occurrences,
)
from termweek.export_ics import export_occurrences_to_ics
from termweek.library import CalendarLibrary
from termweek.model import AcademicCalendar, AcademicEvent, EventType, SemesterSlot
from termweek.storage import get_store, load_meetings

console = Console()

EVENT_LABELS = {
    EventType.TEACHING: "Teaching",
    EventType.BREAK: "Break",
    EventType.EXAM: "Exam Session",
    EventType.HOLIDAY: "Holiday",
    EventType.RETAKE: "Retake Session",
    EventType.PRACTICE: "Practical Training",
    EventType.LICENSURE: "Licensure Exam",
    EventType.OTHER: "Other",
}

SEMESTER_LABELS = {
    SemesterSlot.SEMESTER_1: "Semester 1",
    SemesterSlot.SEMESTER_2: "Semester 2",
}

WEEKDAY_SHORT = {1: "Sun", 2: "Mon", 3: "Tue", 4: "Wed", 5: "Thu", 6: "Fri", 7: "Sat"}


def _println(msg: str = "") -> None:
    # plain text, no markup: names may contain brackets
    console.print(msg, markup=False, highlight=False)


def _setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _event_label(event: AcademicEvent) -> str:
    label = EVENT_LABELS.get(event.type, event.type.value)
    return f"{label} - {event.custom_name}" if event.custom_name else label


def _query_date(raw: Optional[str]) -> Optional[date]:
    """
    Parse a --date style argument. No value means today.
    """
    if raw is None:
        return date.today()
    return parse_date(raw)


def _require_calendar(library: CalendarLibrary) -> Optional[AcademicCalendar]:
    cal = library.current()
    if cal is None:
        _println("No calendar configured. Use 'termweek generate' or 'termweek use'.")
    return cal


def _print_occurrences(occs: list[Occurrence], title: str) -> None:
    table = Table(title=title, box=box.SIMPLE)
    table.add_column("Date")
    table.add_column("Day")
    table.add_column("Time")
    table.add_column("Class")
    table.add_column("Kind")
    table.add_column("Week", justify="right")
    table.add_column("Location")
    for occ in occs:
        m = occ.meeting
        table.add_row(
            occ.date.isoformat(),
            occ.date.strftime("%a"),
            f"{m.start_time}-{m.end_time}",
            m.title,
            m.kind,
            str(occ.teaching_week),
            m.location or "",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def _cmd_status(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    """
    Show the current semester, teaching week and calendar event for a date.
    """
    day = _query_date(args.date)
    if day is None:
        _println(f"Invalid date: {args.date!r} (expected YYYY-MM-DD)")
        return 1

    cal = library.current()
    position = resolve_current_position(cal, day)

    _println(f"Date: {day.isoformat()}")
    _println(f"Calendar: {cal.display_name if cal else '(none)'}")
    _println(SEMESTER_LABELS[position.semester])
    if position.teaching_week is not None:
        _println(f"Teaching week {position.teaching_week}")
    else:
        _println("No teaching week")

    event = event_containing(cal, day)
    if event is not None:
        _println(f"Event: {_event_label(event)} ({event.start} to {event.end})")
    return 0


def _cmd_calendars(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    if not library.calendars:
        _println("No calendars.")
        return 0

    table = Table(title="Academic calendars", box=box.SIMPLE)
    table.add_column("")
    table.add_column("ID")
    table.add_column("Name")
    table.add_column("Year")
    table.add_column("Events", justify="right")
    for cal in library.calendars:
        marker = "*" if cal.id == library.current_id else ""
        table.add_row(marker, cal.id[:8], cal.display_name, cal.academic_year, str(len(cal.all_events())))
    console.print(table)
    return 0


def _cmd_events(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    cal = _require_calendar(library)
    if cal is None:
        return 1

    slots = [SemesterSlot.SEMESTER_1, SemesterSlot.SEMESTER_2]
    if args.semester:
        slots = [SemesterSlot(args.semester)]

    table = Table(title=cal.display_name, box=box.SIMPLE)
    table.add_column("Semester")
    table.add_column("Start")
    table.add_column("End")
    table.add_column("Type")
    table.add_column("Weeks", justify="right")
    table.add_column("Teaching weeks")
    table.add_column("Name")
    for slot in slots:
        events = sorted(cal.semester(slot).events, key=lambda e: e.start)
        for ev in events:
            span = ""
            if ev.teaching_week_index_start is not None:
                span = f"{ev.teaching_week_index_start}-{ev.teaching_week_index_end or '?'}"
            table.add_row(
                SEMESTER_LABELS[slot],
                ev.start,
                ev.end,
                EVENT_LABELS.get(ev.type, ev.type.value),
                str(ev.weeks),
                span,
                ev.custom_name or "",
            )
    console.print(table)
    return 0


def _cmd_use(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    cal = library.select(args.ref)
    if cal is None:
        _println(f"Calendar not found: {args.ref}")
        return 1
    _println(f"Current calendar: {cal.display_name}")
    return 0


def _cmd_delete(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    cal = library.delete(args.ref)
    if cal is None:
        _println(f"Calendar not found: {args.ref}")
        return 1
    current = library.current()
    _println(f"Deleted: {cal.display_name}")
    _println(f"Current calendar: {current.display_name if current else '(none)'}")
    return 0


def _templates_for(args: argparse.Namespace, settings: Settings) -> Optional[list]:
    """
    Built-in templates plus the remote catalog when a URL is known.
    Returns None (after printing the error) if the catalog fetch fails.
    """
    url = getattr(args, "url", None) or settings.catalog_url
    if not url:
        return list_templates()
    try:
        return list_templates(fetch_remote_templates(url, timeout=settings.http_timeout))
    except CatalogError as e:
        _println(f"Error: {e}")
        return None


def _cmd_templates(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    templates = _templates_for(args, settings)
    if templates is None:
        return 1

    table = Table(title="Calendar templates", box=box.SIMPLE)
    table.add_column("University")
    table.add_column("Year")
    table.add_column("Semester 1")
    table.add_column("Semester 2")
    for t in templates:
        table.add_row(t.university_name, t.academic_year, f"{t.sem1_start} to {t.sem1_end}", f"{t.sem2_start} to {t.sem2_end}")
    console.print(table)
    return 0


def _cmd_generate(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    """
    Build a standard two-semester calendar and make it current.
    """
    if args.template:
        templates = _templates_for(args, settings)
        if templates is None:
            return 1
        template = find_template(args.template, templates)
        if template is None:
            _println(f"Template not found: {args.template}")
            return 1
        cal = generate_from_template(template)
    else:
        if not (args.year and args.university and args.dates):
            _println("Please provide --template, or --year, --university and --dates.")
            return 1
        cal = generate_standard_calendar(args.year.strip(), args.university.strip(), *args.dates)

    if cal is None:
        _println("Could not build calendar: check the semester dates (YYYY-MM-DD).")
        return 1

    library.add(cal)
    _println(f"Created calendar: {cal.display_name} ({cal.id[:8]})")
    return 0


def _load_meetings_or_fail(path: str) -> Optional[list]:
    meetings = load_meetings(path)
    if not meetings:
        _println(f"No meetings loaded from: {path}")
        return None
    return meetings


def _cmd_classes(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    day = _query_date(args.date)
    if day is None:
        _println(f"Invalid date: {args.date!r} (expected YYYY-MM-DD)")
        return 1
    meetings = _load_meetings_or_fail(args.meetings)
    if meetings is None:
        return 1

    occs = meetings_on_date(library.current(), meetings, day)
    if not occs:
        _println(f"No classes on {day.isoformat()}.")
        return 0
    _print_occurrences(occs, f"Classes on {day.isoformat()}")
    return 0


def _cmd_upcoming(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    start = _query_date(args.start)
    if start is None:
        _println(f"Invalid date: {args.start!r} (expected YYYY-MM-DD)")
        return 1
    meetings = _load_meetings_or_fail(args.meetings)
    if meetings is None:
        return 1

    occs = upcoming_occurrences(library.current(), meetings, start, days=args.days)
    if not occs:
        _println("No upcoming classes.")
        return 0
    _print_occurrences(occs, f"Next {args.days} days from {start.isoformat()}")
    return 0


def _cmd_check(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    """
    Report overlapping calendar events and clashing meetings.
    """
    cal = _require_calendar(library)
    if cal is None:
        return 1

    overlaps = find_overlapping_events(cal)
    if not overlaps:
        _println("No overlapping events.")
    else:
        _println(f"Overlapping events: {len(overlaps)}")
        for a, b in overlaps:
            _println(f"- {a.start}..{a.end} {_event_label(a)}  <->  {b.start}..{b.end} {_event_label(b)}")

    if args.meetings:
        meetings = _load_meetings_or_fail(args.meetings)
        if meetings is None:
            return 1
        clashes = find_meeting_clashes(meetings)
        if not clashes:
            _println("No clashing meetings.")
        else:
            _println(f"Clashing meetings: {len(clashes)}")
            for a, b in clashes:
                days = ",".join(WEEKDAY_SHORT[d] for d in sorted(a.days & b.days))
                _println(f"- {days} {a.start_time}-{a.end_time} {a.title}  <->  {b.start_time}-{b.end_time} {b.title}")
    return 0


def _cmd_export(args: argparse.Namespace, library: CalendarLibrary, settings: Settings) -> int:
    """
    Export resolved class occurrences into an iCalendar (.ics) file.
    """
    out_path = (args.out or "").strip()
    if not out_path:
        _println("Please provide output .ics path.")
        return 1
    start = _query_date(args.start)
    if start is None:
        _println(f"Invalid date: {args.start!r} (expected YYYY-MM-DD)")
        return 1
    meetings = _load_meetings_or_fail(args.meetings)
    if meetings is None:
        return 1

    occs = upcoming_occurrences(library.current(), meetings, start, days=args.days)
    if not occs:
        _println("No classes to export.")
        return 0

    n = export_occurrences_to_ics(occs, out_path)
    _println(f"Exported {n} classes to: {out_path}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="termweek", description="Academic calendar and teaching-week tool")
    sub = parser.add_subparsers(dest="command", required=True)

    p_status = sub.add_parser("status", help="Show semester and teaching week for a date")
    p_status.add_argument("--date", "-d", type=str, default=None, help="Date YYYY-MM-DD (default: today)")

    sub.add_parser("calendars", help="List available calendars")

    p_events = sub.add_parser("events", help="List events of the current calendar")
    p_events.add_argument("--semester", "-s", type=int, choices=(1, 2), default=None, help="Only one semester")

    p_use = sub.add_parser("use", help="Select the current calendar")
    p_use.add_argument("ref", type=str, help="Calendar id, id prefix or name")

    p_delete = sub.add_parser("delete", help="Delete a calendar")
    p_delete.add_argument("ref", type=str, help="Calendar id, id prefix or name")

    p_templates = sub.add_parser("templates", help="List calendar templates")
    p_templates.add_argument("--url", type=str, default=None, help="Remote template catalog URL")

    p_generate = sub.add_parser("generate", help="Generate a standard calendar and make it current")
    p_generate.add_argument("--template", "-t", type=str, default=None, help="Template university name")
    p_generate.add_argument("--url", type=str, default=None, help="Remote template catalog URL")
    p_generate.add_argument("--year", type=str, default=None, help="Academic year label (e.g. 2025-2026)")
    p_generate.add_argument("--university", type=str, default=None, help="University name")
    p_generate.add_argument(
        "--dates",
        nargs=4,
        metavar=("SEM1_START", "SEM1_END", "SEM2_START", "SEM2_END"),
        default=None,
        help="Semester boundary dates (YYYY-MM-DD)",
    )

    p_classes = sub.add_parser("classes", help="Classes taking place on a date")
    p_classes.add_argument("--meetings", "-m", type=str, required=True, help="Meetings JSON file")
    p_classes.add_argument("--date", "-d", type=str, default=None, help="Date YYYY-MM-DD (default: today)")

    p_upcoming = sub.add_parser("upcoming", help="Upcoming classes")
    p_upcoming.add_argument("--meetings", "-m", type=str, required=True, help="Meetings JSON file")
    p_upcoming.add_argument("--from", dest="start", type=str, default=None, help="First date (default: today)")
    p_upcoming.add_argument("--days", type=int, default=7, help="Number of days")

    p_check = sub.add_parser("check", help="Report overlapping events and clashing meetings")
    p_check.add_argument("--meetings", "-m", type=str, default=None, help="Meetings JSON file")

    p_export = sub.add_parser("export", help="Export upcoming classes to .ics")
    p_export.add_argument("out", type=str, help="Output file path (e.g. classes.ics)")
    p_export.add_argument("--meetings", "-m", type=str, required=True, help="Meetings JSON file")
    p_export.add_argument("--from", dest="start", type=str, default=None, help="First date (default: today)")
    p_export.add_argument("--days", type=int, default=7, help="Number of days")

    return parser


COMMANDS: dict[str, Callable[[argparse.Namespace, CalendarLibrary, Settings], int]] = {
    "status": _cmd_status,
    "calendars": _cmd_calendars,
    "events": _cmd_events,
    "use": _cmd_use,
    "delete": _cmd_delete,
    "templates": _cmd_templates,
    "generate": _cmd_generate,
    "classes": _cmd_classes,
    "upcoming": _cmd_upcoming,
    "check": _cmd_check,
    "export": _cmd_export,
}


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = load_settings()
    _setup_logging(settings)

    library = CalendarLibrary.load(get_store(settings))

    handler = COMMANDS.get(args.command)
    if handler is None:
        raise SystemExit(2)
    raise SystemExit(handler(args, library, settings))
