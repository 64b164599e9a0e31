"""
Export a computed weekly schedule to ICS, CSV, and JSON.
"""
from __future__ import annotations

import csv
import hashlib
import json
from datetime import date, datetime, time, timedelta, timezone
from pathlib import Path

import icalendar
import pytz

from .config import WEEKDAYS
from .session import ScheduleView

# Default timezone for calendar events (campus local time)
DEFAULT_TZ = "America/Indiana/Indianapolis"

CSV_FIELDS = [
    "section_id",
    "course",
    "type",
    "day",
    "start",
    "end",
    "start_slot",
    "num_slots",
    "location",
    "color",
    "conflict",
]


def _first_date_for_weekday(start: date, day_index: int) -> date:
    """First date on/after start that falls on day_index (Mon=0)."""
    offset = (day_index - start.weekday()) % 7
    return start + timedelta(days=offset)


def _parse_hhmm(text: str) -> time:
    return datetime.strptime(text, "%H:%M").time()


def export_ics(
    view: ScheduleView,
    out_path: str | Path,
    term_start: str,
    term_end: str | None = None,
    tz_name: str = DEFAULT_TZ,
) -> None:
    """
    Export placed blocks as weekly-recurring events for Apple/Google calendar.

    :param term_start: First day of classes (YYYY-MM-DD); each block starts on
        the first matching weekday on/after it.
    :param term_end: Last day of classes (YYYY-MM-DD). Without it events do not repeat.
    """
    first_day = date.fromisoformat(term_start)
    until = None
    if term_end:
        until = datetime.combine(date.fromisoformat(term_end), time(23, 59, 59)).replace(
            tzinfo=timezone.utc
        )
    try:
        tz = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        raise ValueError(f"Unknown timezone: {tz_name}") from None

    cal = icalendar.Calendar()
    cal.add("prodid", "-//Schedule Synth//EN")
    cal.add("version", "2.0")
    cal.add("calscale", "GREGORIAN")
    cal.add("x-wr-calname", "Weekly Schedule")
    cal.add("x-wr-timezone", tz_name)

    for block in view.blocks:
        content = block.content
        if not content.get("start") or not content.get("end"):
            continue
        event_date = _first_date_for_weekday(first_day, block.day_index)
        start = datetime.combine(event_date, _parse_hhmm(content["start"]))
        end = datetime.combine(event_date, _parse_hhmm(content["end"]))
        if end <= start:
            end += timedelta(days=1)

        summary = content.get("course") or str(block.section_id)
        if content.get("type"):
            summary = f"{summary} ({content['type']})"

        event = icalendar.Event()
        uid_string = f"{block.section_id}-{block.day_index}-{content['start']}"
        uid_hash = hashlib.md5(uid_string.encode("utf-8")).hexdigest()
        event.add("uid", f"{uid_hash}@schedule-synth")
        event.add("summary", summary)
        event.add("location", content.get("location", ""))
        event.add("description", content.get("tooltip", ""))
        event.add("dtstart", tz.localize(start))
        event.add("dtend", tz.localize(end))
        event.add("dtstamp", datetime.now(timezone.utc))
        if until is not None:
            event.add("rrule", {"freq": "weekly", "until": until})
        cal.add_component(event)

    Path(out_path).write_text(cal.to_ical().decode("utf-8"), encoding="utf-8")


def export_csv(view: ScheduleView, out_path: str | Path) -> None:
    """One row per placed block."""
    with open(out_path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        w.writeheader()
        for block in view.blocks:
            content = block.content
            w.writerow({
                "section_id": block.section_id,
                "course": content.get("course", ""),
                "type": content.get("type", ""),
                "day": WEEKDAYS[block.day_index],
                "start": content.get("start", ""),
                "end": content.get("end", ""),
                "start_slot": block.start_slot,
                "num_slots": block.num_slots,
                "location": content.get("location", ""),
                "color": block.color,
                "conflict": "yes" if block.conflict else "no",
            })


def export_json(view: ScheduleView, out_path: str | Path) -> None:
    Path(out_path).write_text(
        json.dumps(view.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8"
    )


def export(view: ScheduleView, out_path: str | Path, fmt: str, **ics_options) -> None:
    """Export to the given format: ics, csv, or json."""
    fmt = fmt.lower()
    if fmt == "ics":
        export_ics(view, out_path, **ics_options)
    elif fmt == "csv":
        export_csv(view, out_path)
    elif fmt == "json":
        export_json(view, out_path)
    else:
        raise ValueError(f"Unsupported format: {fmt}. Use ics, csv, or json.")
