"""
Stable per-course colors for the weekly grid.
"""
from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional

from .config import GridConfig
from .models import Section


class ColorAssignment:
    """
    Ordered course_id -> color map for one schedule-view session.

    Entries are only ever appended; clear() is the single way to reset it
    (the "clear schedule" action).
    """

    def __init__(self, config: GridConfig | None = None) -> None:
        self.config = config or GridConfig()
        self._colors: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._colors)

    def __contains__(self, course_id: object) -> bool:
        return course_id in self._colors

    def __iter__(self) -> Iterator[str]:
        return iter(self._colors)

    def add(self, course_id: str) -> str:
        """Give course_id the next palette color unless it already has one."""
        if course_id not in self._colors:
            palette = self.config.palette
            self._colors[course_id] = palette[len(self._colors) % len(palette)]
        return self._colors[course_id]

    def color_for(self, course_id: Optional[str]) -> str:
        if course_id is None:
            return self.config.default_color
        return self._colors.get(course_id, self.config.default_color)

    def as_dict(self) -> Dict[str, str]:
        return dict(self._colors)

    def clear(self) -> None:
        self._colors.clear()


def assign_colors(sections: Iterable[Section], state: ColorAssignment) -> Dict[str, str]:
    """
    Extend state with every course first seen in sections (in order) and
    return the full course_id -> color map.
    """
    for section in sections:
        if section.course_id:
            state.add(section.course_id)
    return state.as_dict()


def adjust_brightness(color: str, amount: int) -> str:
    """Shift each channel of a '#RRGGBB' color by amount, clamped to 0-255."""
    num = int(color.lstrip("#"), 16)
    r = max(0, min(255, (num >> 16) + amount))
    g = max(0, min(255, ((num >> 8) & 0xFF) + amount))
    b = max(0, min(255, (num & 0xFF) + amount))
    return f"#{(r << 16) | (g << 8) | b:06x}"
