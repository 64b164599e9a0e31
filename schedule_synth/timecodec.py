"""
Parse raw meeting descriptors (days, start time, duration) into canonical
30-minute grid intervals.

Upstream catalog data comes in two shapes:
- days as full names ("Monday, Wednesday, Friday") or letter codes ("MWF", "TR")
- start time as a bare clock string ("14:30:00.0000000") or an absolute
  timestamp ("2024-08-19T14:30:00Z")

Nothing here raises on malformed input: a meeting that cannot be read is
dropped and simply produces no interval.
"""
from __future__ import annotations

import logging
import math
import re
from datetime import datetime, timezone
from typing import FrozenSet, List, Optional, Tuple, Union

from .config import DEFAULT_DURATION_MINUTES, SLOT_MINUTES, GridConfig
from .models import CanonicalInterval, Meeting, TimeSlot, TimeSpec

log = logging.getLogger(__name__)


# ──────────────────────────────────────────────────────────────────
#  Days
# ──────────────────────────────────────────────────────────────────

_DAY_NAMES = {
    "monday": 0, "mon": 0,
    "tuesday": 1, "tue": 1, "tues": 1,
    "wednesday": 2, "wed": 2,
    "thursday": 3, "thu": 3, "thur": 3, "thurs": 3,
    "friday": 4, "fri": 4,
    "saturday": 5, "sat": 5,
    "sunday": 6, "sun": 6,
}

# Thursday is "R" so that it never clashes with Tuesday's "T"
_DAY_CODES = {
    "M": 0,
    "T": 1,
    "W": 2,
    "R": 3,
    "F": 4,
    "S": 5,
    "U": 6,
}

_CODES_RE = re.compile(r"^[MTWRFSU\s]+$")

_LAST_WEEKDAY = 4


def parse_days(days: Optional[str]) -> FrozenSet[int]:
    """
    Parse a days-of-week string into weekday indices (Mon=0 .. Fri=4).

    Weekend days are discarded. Unrecognized input gives an empty set.

    >>> sorted(parse_days("MWF"))
    [0, 2, 4]
    >>> sorted(parse_days("Tuesday, Thursday"))
    [1, 3]
    """
    if not isinstance(days, str) or not days.strip():
        return frozenset()
    text = days.strip()

    tokens = [t for t in re.split(r"[,\s]+", text) if t]
    named = [_DAY_NAMES.get(t.lower()) for t in tokens]
    if named and all(idx is not None for idx in named):
        found = set(named)
    elif _CODES_RE.match(text):
        found = {idx for code, idx in _DAY_CODES.items() if code in text}
    else:
        return frozenset()

    return frozenset(idx for idx in found if idx <= _LAST_WEEKDAY)


# ──────────────────────────────────────────────────────────────────
#  Start time / duration
# ──────────────────────────────────────────────────────────────────

_CLOCK_RE = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})")
_DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")
# fromisoformat before 3.11 takes at most 6 fractional digits
_LONG_FRACTION_RE = re.compile(r"(\.\d{6})\d+")


def _clock_from_iso(value: str) -> Tuple[int, int] | None:
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _LONG_FRACTION_RE.sub(r"\1", text)
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return None
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.hour, dt.minute


def _clock_from_clock(value: str) -> Tuple[int, int] | None:
    m = _CLOCK_RE.match(value.strip())
    if not m:
        return None
    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        return None
    return hour, minute


def resolve_clock(start: Union[TimeSpec, str, None]) -> Tuple[int, int] | None:
    """
    Return (hour, minute) for a start time, or None if it cannot be read.

    A raw string is tested against the clock form first and otherwise read as
    an ISO timestamp. Timestamps with an offset are converted to UTC; naive
    ones are taken as UTC already.
    """
    if start is None:
        return None
    if isinstance(start, str):
        if not start.strip():
            return None
        if _CLOCK_RE.match(start.strip()):
            return _clock_from_clock(start)
        return _clock_from_iso(start)
    if start.kind == "clock":
        return _clock_from_clock(start.value)
    return _clock_from_iso(start.value)


def parse_duration(duration: Optional[str]) -> int | None:
    """
    Duration in minutes from "PT1H20M" / "PT50M" / "PT2H".

    No duration, or a string that is not in PT form, falls back to 50 minutes.
    A PT string totalling zero minutes is malformed (None).
    """
    if duration is None or duration == "":
        return DEFAULT_DURATION_MINUTES
    if not isinstance(duration, str):
        return None
    m = _DURATION_RE.search(duration)
    if not m:
        return DEFAULT_DURATION_MINUTES
    hours = int(m.group(1) or 0)
    minutes = int(m.group(2) or 0)
    total = hours * 60 + minutes
    if total <= 0:
        return None
    return total


def parse_time(
    start: Union[TimeSpec, str, None],
    duration: Optional[str],
    config: GridConfig | None = None,
) -> TimeSlot | None:
    """
    Convert a start time and duration into (start_slot, num_slots) on the grid.

    start_slot counts half-hours from config.start_hour and may be negative
    when the meeting starts before the display window.
    """
    config = config or GridConfig()
    clock = resolve_clock(start)
    if clock is None:
        return None
    minutes = parse_duration(duration)
    if minutes is None:
        return None
    hour, minute = clock
    start_slot = (hour - config.start_hour) * 2 + (1 if minute >= 30 else 0)
    num_slots = math.ceil(minutes / SLOT_MINUTES)
    return TimeSlot(start_slot=start_slot, num_slots=num_slots)


def canonicalize(meeting: Meeting, config: GridConfig | None = None) -> List[CanonicalInterval]:
    """One CanonicalInterval per weekday the meeting occupies, Monday first."""
    days = parse_days(meeting.days_of_week)
    if not days:
        log.debug("Dropping meeting with unreadable days: %r", meeting.days_of_week)
        return []
    slot = parse_time(meeting.start_time, meeting.duration, config)
    if slot is None:
        log.debug(
            "Dropping meeting with unreadable time: start=%r duration=%r",
            meeting.start_time,
            meeting.duration,
        )
        return []
    return [
        CanonicalInterval(day_index=d, start_slot=slot.start_slot, num_slots=slot.num_slots)
        for d in sorted(days)
    ]


# ──────────────────────────────────────────────────────────────────
#  Display formatting
# ──────────────────────────────────────────────────────────────────

def format_clock(hour: int, minute: int) -> str:
    """14, 5 -> '2:05PM'"""
    period = "PM" if hour % 24 >= 12 else "AM"
    hour12 = hour % 12 or 12
    return f"{hour12}:{minute:02d}{period}"


def format_hour(hour: int) -> str:
    """Row label for a whole hour: 0 -> '12 AM', 13 -> '1 PM'."""
    if hour == 0:
        return "12 AM"
    if hour < 12:
        return f"{hour} AM"
    if hour == 12:
        return "12 PM"
    return f"{hour - 12} PM"


def end_clock(
    start: Union[TimeSpec, str, None], duration: Optional[str]
) -> Tuple[int, int] | None:
    """(hour, minute) at which the meeting ends, or None if unreadable."""
    clock = resolve_clock(start)
    minutes = parse_duration(duration)
    if clock is None or minutes is None:
        return None
    total = clock[0] * 60 + clock[1] + minutes
    return (total // 60) % 24, total % 60


def format_time_range(start: Union[TimeSpec, str, None], duration: Optional[str]) -> str:
    """'9:00AM-9:50AM', or 'TBA' when the start time is missing."""
    clock = resolve_clock(start)
    if clock is None:
        return "TBA"
    end = end_clock(start, duration)
    if end is None:
        return format_clock(*clock)
    return f"{format_clock(*clock)}-{format_clock(*end)}"
