"""
Schedule-view session: owns the color state and recomputes the whole
timetable (colors, conflicts, placed blocks) for each selection change.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .colors import ColorAssignment, assign_colors
from .config import GridConfig
from .conflicts import conflict_message, detect_conflicts
from .layout import layout
from .models import ConflictPair, PlacedBlock, Section

log = logging.getLogger(__name__)


@dataclass
class ScheduleView:
    conflicts: List[ConflictPair] = field(default_factory=list)
    blocks: List[PlacedBlock] = field(default_factory=list)
    colors: Dict[str, str] = field(default_factory=dict)

    @property
    def banner(self) -> Optional[str]:
        return conflict_message(self.conflicts)

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "conflicts": [c.to_dict() for c in self.conflicts],
            "banner": self.banner,
            "colors": dict(self.colors),
            "blocks": [b.to_dict() for b in self.blocks],
        }


class ScheduleSession:
    """
    Create one per schedule view. render() may be called after every
    add/remove; course colors stay fixed for the life of the session
    until clear().
    """

    def __init__(self, config: GridConfig | None = None) -> None:
        self.config = config or GridConfig()
        self.colors = ColorAssignment(self.config)
        self._lock = threading.Lock()

    def render(self, sections: Iterable[Section]) -> ScheduleView:
        snapshot = tuple(sections)
        with self._lock:
            color_map = assign_colors(snapshot, self.colors)
            conflicts = detect_conflicts(snapshot, self.config)
            blocks = layout(snapshot, conflicts, self.colors, self.config)
        log.debug(
            "Rendered %d section(s): %d block(s), %d conflict(s)",
            len(snapshot),
            len(blocks),
            len(conflicts),
        )
        return ScheduleView(conflicts=conflicts, blocks=blocks, colors=color_map)

    def clear(self) -> ScheduleView:
        """Forget all course colors and return the empty view."""
        with self._lock:
            self.colors.clear()
        return ScheduleView()
