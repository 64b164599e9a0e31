"""
Data types shared by the codec, conflict detector and grid layout.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

SectionId = Union[int, str]

TIME_KINDS = ("iso", "clock")


@dataclass(frozen=True)
class TimeSpec:
    """
    A meeting start time tagged with its encoding.

    - "clock": bare clock string, e.g. "14:30:00.0000000"
    - "iso":   absolute timestamp, e.g. "2024-08-19T09:00:00Z"
    """
    kind: str
    value: str

    def __post_init__(self) -> None:
        if self.kind not in TIME_KINDS:
            raise ValueError(f"Unknown time kind: {self.kind!r}. Use iso or clock.")


@dataclass
class Meeting:
    days_of_week: str = ""
    start_time: Optional[TimeSpec] = None
    duration: Optional[str] = None
    room: Any = None


@dataclass
class Section:
    id: SectionId
    course_id: Optional[str] = None
    meetings: List[Meeting] = field(default_factory=list)
    course_label: str = ""
    title: str = ""
    section_type: str = "Lecture"

    @property
    def label(self) -> str:
        return self.course_label or (self.course_id or str(self.id))


@dataclass(frozen=True)
class TimeSlot:
    start_slot: int
    num_slots: int


@dataclass(frozen=True)
class CanonicalInterval:
    day_index: int
    start_slot: int
    num_slots: int

    @property
    def end_slot(self) -> int:
        return self.start_slot + self.num_slots

    def overlaps(self, other: "CanonicalInterval") -> bool:
        """Same weekday and intersecting half-open slot ranges."""
        if self.day_index != other.day_index:
            return False
        return self.start_slot < other.end_slot and other.start_slot < self.end_slot


@dataclass(frozen=True)
class ConflictPair:
    section_ids: Tuple[SectionId, SectionId]
    course_labels: Tuple[str, str]

    def involves(self, section_id: SectionId) -> bool:
        return section_id in self.section_ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sectionIds": list(self.section_ids),
            "courseLabels": list(self.course_labels),
        }


@dataclass(frozen=True)
class PlacedBlock:
    day_index: int
    start_slot: int
    num_slots: int
    color: str
    conflict: bool
    section_id: SectionId
    content: Dict[str, str] = field(default_factory=dict, compare=False, hash=False)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dayIndex": self.day_index,
            "startSlot": self.start_slot,
            "numSlots": self.num_slots,
            "color": self.color,
            "conflict": self.conflict,
            "sectionId": self.section_id,
            "content": dict(self.content),
        }
