"""
Expand selected sections into per-day blocks placed on the weekly grid.

Turning (day_index, start_slot, num_slots) into pixels, rows or columns is
left to the renderer.
"""
from __future__ import annotations

from typing import Any, Dict, List, Sequence, Tuple

from .colors import ColorAssignment, adjust_brightness
from .config import GridConfig
from .conflicts import conflicting_section_ids
from .models import ConflictPair, Meeting, PlacedBlock, Section
from .timecodec import (
    canonicalize,
    end_clock,
    format_hour,
    format_time_range,
    resolve_clock,
)


def format_location(room: Any) -> str:
    """
    Room descriptor -> 'LWSN B151'. Accepts the catalog's nested
    {"Building": {"ShortCode": ...}, "Number": ...} shape or a plain string.
    """
    if not room:
        return "TBA"
    if isinstance(room, str):
        return room.strip() or "TBA"
    if not isinstance(room, dict):
        return str(room)
    building = room.get("Building") or {}
    if isinstance(building, dict):
        building = building.get("ShortCode") or ""
    number = room.get("Number") or ""
    text = f"{building} {number}".strip()
    return text or "TBA"


def _hhmm(clock: Tuple[int, int] | None) -> str:
    if clock is None:
        return ""
    return f"{clock[0]:02d}:{clock[1]:02d}"


def block_content(section: Section, meeting: Meeting, color: str) -> Dict[str, str]:
    """Text shown inside a grid block, plus the tooltip and border accent."""
    time_text = format_time_range(meeting.start_time, meeting.duration)
    location = format_location(meeting.room)
    tooltip_lines = [section.title or section.label, section.section_type, time_text, location]
    return {
        "course": section.label,
        "type": section.section_type,
        "location": location,
        "time": time_text,
        "start": _hhmm(resolve_clock(meeting.start_time)),
        "end": _hhmm(end_clock(meeting.start_time, meeting.duration)),
        "tooltip": "\n".join(tooltip_lines),
        "border_color": adjust_brightness(color, -20),
    }


def layout(
    sections: Sequence[Section],
    conflicts: Sequence[ConflictPair],
    colors: ColorAssignment,
    config: GridConfig | None = None,
) -> List[PlacedBlock]:
    """
    One PlacedBlock per (meeting, weekday). Blocks starting before the window
    or at/after its last slot are left out entirely.
    """
    config = config or GridConfig()
    flagged = conflicting_section_ids(conflicts)
    total = config.total_slots

    blocks: List[PlacedBlock] = []
    for section in sections:
        color = colors.color_for(section.course_id)
        in_conflict = section.id in flagged
        for meeting in section.meetings:
            intervals = canonicalize(meeting, config)
            if not intervals:
                continue
            content = block_content(section, meeting, color)
            for interval in intervals:
                if interval.start_slot < 0 or interval.start_slot >= total:
                    continue
                blocks.append(
                    PlacedBlock(
                        day_index=interval.day_index,
                        start_slot=interval.start_slot,
                        num_slots=interval.num_slots,
                        color=color,
                        conflict=in_conflict,
                        section_id=section.id,
                        content=dict(content),
                    )
                )
    return blocks


def time_labels(config: GridConfig | None = None) -> List[Tuple[int, str]]:
    """(slot, label) for each whole-hour row, e.g. (0, '7 AM'), (2, '8 AM')."""
    config = config or GridConfig()
    return [
        (slot, format_hour(config.start_hour + slot // 2))
        for slot in range(0, config.total_slots, 2)
    ]
