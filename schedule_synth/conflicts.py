"""
Find pairs of selected sections whose weekly meetings overlap.
"""
from __future__ import annotations

from typing import List, Optional, Sequence

from .config import GridConfig
from .models import CanonicalInterval, ConflictPair, Section
from .timecodec import canonicalize


def intervals_overlap(a: CanonicalInterval, b: CanonicalInterval) -> bool:
    """
    Returns True if two intervals share a weekday and their slot ranges intersect.
    Back-to-back intervals ([10, 14) and [14, 18)) do not overlap.
    """
    return a.overlaps(b)


def _section_intervals(section: Section, config: GridConfig) -> List[List[CanonicalInterval]]:
    return [canonicalize(m, config) for m in section.meetings]


def _meetings_conflict(
    meetings_a: List[List[CanonicalInterval]],
    meetings_b: List[List[CanonicalInterval]],
) -> bool:
    for intervals_a in meetings_a:
        for intervals_b in meetings_b:
            for a in intervals_a:
                for b in intervals_b:
                    if intervals_overlap(a, b):
                        return True
    return False


def sections_conflict(a: Section, b: Section, config: GridConfig | None = None) -> bool:
    """Returns True on the first overlapping meeting pair between a and b."""
    config = config or GridConfig()
    return _meetings_conflict(_section_intervals(a, config), _section_intervals(b, config))


def detect_conflicts(
    sections: Sequence[Section], config: GridConfig | None = None
) -> List[ConflictPair]:
    """
    Every unordered pair of conflicting sections, in (i, j) loop order.

    Meetings outside the display window still count; only layout drops them.
    """
    config = config or GridConfig()
    # Canonicalize each section once rather than per pair
    intervals = [_section_intervals(s, config) for s in sections]

    conflicts: List[ConflictPair] = []
    for i in range(len(sections)):
        for j in range(i + 1, len(sections)):
            if _meetings_conflict(intervals[i], intervals[j]):
                conflicts.append(
                    ConflictPair(
                        section_ids=(sections[i].id, sections[j].id),
                        course_labels=(sections[i].label, sections[j].label),
                    )
                )
    return conflicts


def conflicting_section_ids(conflicts: Sequence[ConflictPair]) -> set:
    return {sid for pair in conflicts for sid in pair.section_ids}


def conflict_message(conflicts: Sequence[ConflictPair]) -> Optional[str]:
    """Banner text listing the conflicting course pairs; None when there are none."""
    if not conflicts:
        return None
    pairs = ", ".join(f"{c.course_labels[0]} and {c.course_labels[1]}" for c in conflicts)
    return f"The following courses have overlapping times: {pairs}"
