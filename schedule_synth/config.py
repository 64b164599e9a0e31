"""
Display window and palette settings for the weekly grid.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List

DEFAULT_START_HOUR = 7
DEFAULT_END_HOUR = 22

# Weekday columns shown on the grid (Mon=0 .. Fri=4)
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

DEFAULT_PALETTE = [
    "#CFB991",  # gold
    "#6B9BD1",  # blue
    "#81C784",  # green
    "#FFB74D",  # orange
    "#BA68C8",  # purple
    "#F06292",  # pink
    "#4DB6AC",  # teal
    "#FF8A65",  # coral
    "#9575CD",  # deep purple
    "#FFD54F",  # yellow
]

DEFAULT_COLOR = "#999999"

# Used when a meeting carries no Duration
DEFAULT_DURATION_MINUTES = 50

SLOT_MINUTES = 30

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class GridConfig:
    start_hour: int = DEFAULT_START_HOUR
    end_hour: int = DEFAULT_END_HOUR
    palette: List[str] = field(default_factory=lambda: list(DEFAULT_PALETTE))
    default_color: str = DEFAULT_COLOR

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour <= 23:
            raise ValueError(f"start_hour must be within 0-23, got {self.start_hour}")
        if not 1 <= self.end_hour <= 24:
            raise ValueError(f"end_hour must be within 1-24, got {self.end_hour}")
        if self.end_hour <= self.start_hour:
            raise ValueError(
                f"end_hour ({self.end_hour}) must be after start_hour ({self.start_hour})"
            )
        if not self.palette:
            raise ValueError("palette must contain at least one color")
        for color in [*self.palette, self.default_color]:
            if not _HEX_COLOR_RE.match(color):
                raise ValueError(f"Colors must be #RRGGBB hex strings, got {color!r}")

    @property
    def total_slots(self) -> int:
        """Number of 30-minute rows in the displayed window."""
        return (self.end_hour - self.start_hour) * 60 // SLOT_MINUTES
