"""
Read selected sections (as saved by the course-search page) into Section objects.

Accepted section shapes:
- legacy catalog: {"SectionId": 101, "_course": {"CourseId": ..., "Subject":
  {"Abbreviation": "CS"}, "Number": "18000"}, "Meetings": [{"DaysOfWeek": "MWF",
  "StartTime": "2024-08-19T09:00:00Z", "Duration": "PT50M", "Room": {...}}]}
- current catalog: same, but "Id" instead of "SectionId" and a bare clock
  "StartTime" like "09:00:00.0000000"
- plain: {"id": 1, "courseId": "CS180", "meetings": [{"days": "MWF",
  "start": "09:00:00", "duration": "PT50M"}]}

The file itself may be a list of sections or {"sections": [...]}.
"""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from .models import Meeting, Section, TimeSpec

_CLOCK_PREFIX_RE = re.compile(r"^\d{1,2}:\d{2}:\d{2}")


def time_spec_from_string(value: Optional[str]) -> Optional[TimeSpec]:
    """Tag a raw StartTime as "clock" or "iso". Empty -> None."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if _CLOCK_PREFIX_RE.match(text):
        return TimeSpec("clock", text)
    return TimeSpec("iso", text)


def _first(d: Dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if d.get(k) not in (None, ""):
            return d[k]
    return None


def meeting_from_dict(raw: Dict[str, Any]) -> Meeting:
    if not isinstance(raw, dict):
        raise ValueError(f"Meeting must be an object, got {type(raw).__name__}")
    start = _first(raw, "StartTime", "start", "startTime")
    return Meeting(
        days_of_week=_first(raw, "DaysOfWeek", "days", "daysOfWeek") or "",
        start_time=time_spec_from_string(start),
        duration=_first(raw, "Duration", "duration"),
        room=_first(raw, "Room", "room"),
    )


def _course_label(course: Dict[str, Any]) -> str:
    """'CS 18000' from Subject.Abbreviation + Number (leading zeros dropped)."""
    subject = (course.get("Subject") or {}).get("Abbreviation") or ""
    number = str(course.get("Number") or "").lstrip("0")
    return f"{subject} {number}".strip()


def section_from_dict(raw: Dict[str, Any]) -> Section:
    if not isinstance(raw, dict):
        raise ValueError(f"Section must be an object, got {type(raw).__name__}")

    section_id = _first(raw, "SectionId", "Id", "id")
    if section_id is None:
        raise ValueError(f"Section has no id (SectionId / Id / id): {raw!r:.80}")

    course = raw.get("_course") or {}
    if not isinstance(course, dict):
        raise ValueError(f"Section {section_id}: _course must be an object")
    course_id = _first(course, "CourseId", "Id") or _first(raw, "courseId", "CourseId")

    meetings_raw = _first(raw, "Meetings", "meetings") or []
    if not isinstance(meetings_raw, list):
        raise ValueError(f"Section {section_id}: meetings must be a list")

    label = _course_label(course) or _first(raw, "courseLabel") or ""
    return Section(
        id=section_id,
        course_id=str(course_id) if course_id is not None else None,
        meetings=[meeting_from_dict(m) for m in meetings_raw],
        course_label=label,
        title=course.get("Title") or _first(raw, "title") or "",
        section_type=_first(raw, "Type", "type") or "Lecture",
    )


def sections_from_data(data: Any) -> List[Section]:
    if isinstance(data, dict):
        data = data.get("sections")
    if not isinstance(data, list):
        raise ValueError('Expected a list of sections or {"sections": [...]}')
    return [section_from_dict(s) for s in data]


def load_sections(path: str | Path) -> List[Section]:
    """Load sections from a JSON file (saved schedule or plain list)."""
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ValueError(f"{p}: cannot read sections file ({e})") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"{p}: invalid JSON ({e})") from e
    return sections_from_data(data)
