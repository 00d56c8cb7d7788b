"""Drag context dataclass for manipulation gestures.

Single immutable snapshot of a gesture taken at pointer-down. All move
deltas are computed against it, never against the current geometry.
"""

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from models.transform import Rect, Vec2


@dataclass(frozen=True)
class DragContext:
    """Gesture state captured when the pointer goes down.

    Attributes:
        operation: 'drag' or 'resize'
        element_id: Element being manipulated
        start_pointer: Pointer position at gesture start (screen pixels)
        start_geometry: Element geometry at gesture start (format-local)
        direction: Resize direction (n, s, e, w, ne, nw, se, sw) or None
        active_scale: zoom * nested scale in effect at gesture start
        excluded_ids: Element and its descendants (never hover targets)
    """
    operation: str
    element_id: str
    start_pointer: Vec2
    start_geometry: Rect
    direction: Optional[str] = None
    active_scale: float = 1.0
    excluded_ids: FrozenSet[str] = field(default_factory=frozenset)

    @property
    def is_resize(self) -> bool:
        return self.operation == 'resize'

    def delta(self, pointer: Vec2) -> Vec2:
        """Pointer movement since gesture start in format-local units"""
        return (pointer - self.start_pointer) / self.active_scale
