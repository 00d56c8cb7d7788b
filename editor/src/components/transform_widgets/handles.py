"""Transform widget handle system - ABC-based handle architecture.

Each handle type is a class that knows:
- How to draw itself around a selected element
- How to test if a pointer position hits it
- How a drag from it changes the element geometry (from the gesture start)
- Which cursor to show while hovering it

hit_test/draw work in widget pixels; drag works in format-local units
(pointer delta already divided by the active scale).
"""

from abc import ABC, abstractmethod
from PyQt5.QtCore import QPointF, Qt
from PyQt5.QtGui import QPen, QBrush, QColor
import math

from utils.geometry import resize_rect
from constants import MIN_ELEMENT_SIZE, TRANSFORM_HANDLE_SIZE, TRANSFORM_HIT_TOLERANCE


class Handle(ABC):
    """Abstract base class for transform handles."""

    # 'move' or a resize direction
    direction = None

    @abstractmethod
    def hit_test(self, pointer_x, pointer_y, rect) -> bool:
        """Test if pointer position hits this handle.

        Args:
            pointer_x, pointer_y: Pointer position in widget pixels
            rect: Element bounds in widget pixels

        Returns:
            bool: True if pointer hits this handle
        """
        pass

    @abstractmethod
    def draw(self, painter, rect):
        """Draw this handle.

        Args:
            painter: QPainter instance
            rect: Element bounds in widget pixels
        """
        pass

    @abstractmethod
    def drag(self, dx, dy, start_rect, min_size=MIN_ELEMENT_SIZE):
        """Geometry after dragging this handle by (dx, dy).

        Args:
            dx, dy: Pointer delta since gesture start, format-local units
            start_rect: Element geometry at gesture start
            min_size: Minimum width/height for resizing handles

        Returns:
            Rect: Updated geometry
        """
        pass

    @abstractmethod
    def get_cursor(self):
        """Get the Qt cursor shape for this handle.

        Returns:
            Qt.CursorShape: Cursor to display when hovering over this handle
        """
        pass


class _PointHandle(Handle):
    """Small square handle anchored on the element bounds."""

    # Abstract position (normalized to bounds, 0..1)
    ANCHORS = {
        'nw': (0.0, 0.0), 'n': (0.5, 0.0), 'ne': (1.0, 0.0),
        'w': (0.0, 0.5), 'e': (1.0, 0.5),
        'sw': (0.0, 1.0), 's': (0.5, 1.0), 'se': (1.0, 1.0),
    }

    def __init__(self, direction, handle_size=TRANSFORM_HANDLE_SIZE, hit_tolerance=TRANSFORM_HIT_TOLERANCE):
        """
        Args:
            direction: Resize direction this handle drives
            handle_size: Visual half-size of handle in pixels
            hit_tolerance: Extra pixels for hit detection
        """
        if direction not in self.ANCHORS:
            raise ValueError(f"Unknown handle direction: {direction}")
        self.direction = direction
        self.handle_size = handle_size
        self.hit_tolerance = hit_tolerance
        self.norm_x, self.norm_y = self.ANCHORS[direction]

    def _get_pixel_pos(self, rect):
        """Calculate actual pixel position from abstract position."""
        return rect.x + self.norm_x * rect.width, rect.y + self.norm_y * rect.height

    def hit_test(self, pointer_x, pointer_y, rect):
        px, py = self._get_pixel_pos(rect)
        reach = self.handle_size + self.hit_tolerance
        return abs(pointer_x - px) <= reach and abs(pointer_y - py) <= reach

    def draw(self, painter, rect):
        px, py = self._get_pixel_pos(rect)

        painter.setPen(QPen(QColor(255, 255, 255), 1))
        painter.setBrush(QBrush(QColor(90, 141, 191)))
        painter.drawRect(int(px - self.handle_size / 2), int(py - self.handle_size / 2),
                         self.handle_size, self.handle_size)

    def drag(self, dx, dy, start_rect, min_size=MIN_ELEMENT_SIZE):
        return resize_rect(start_rect, self.direction, dx, dy, min_size)


class CornerHandle(_PointHandle):
    """Corner handle for two-axis resizing (ne, nw, se, sw)."""

    def __init__(self, direction, handle_size=TRANSFORM_HANDLE_SIZE, hit_tolerance=TRANSFORM_HIT_TOLERANCE):
        if len(direction) != 2:
            raise ValueError(f"Not a corner direction: {direction}")
        super().__init__(direction, handle_size, hit_tolerance)

    def hit_test(self, pointer_x, pointer_y, rect):
        # Corners use a round hit area
        px, py = self._get_pixel_pos(rect)
        distance = math.hypot(pointer_x - px, pointer_y - py)
        return distance <= (self.handle_size + self.hit_tolerance)

    def draw(self, painter, rect):
        px, py = self._get_pixel_pos(rect)

        painter.setPen(QPen(QColor(255, 255, 255), 1))
        painter.setBrush(QBrush(QColor(90, 141, 191)))
        painter.drawEllipse(QPointF(px, py), float(self.handle_size) / 2, float(self.handle_size) / 2)

    def get_cursor(self):
        """Diagonal resize cursor matching the corner."""
        if self.direction in ('nw', 'se'):
            return Qt.SizeFDiagCursor
        return Qt.SizeBDiagCursor


class EdgeHandle(_PointHandle):
    """Edge handle for single-axis resizing (n, s, e, w)."""

    def __init__(self, direction, handle_size=TRANSFORM_HANDLE_SIZE, hit_tolerance=TRANSFORM_HIT_TOLERANCE):
        if len(direction) != 1:
            raise ValueError(f"Not an edge direction: {direction}")
        super().__init__(direction, handle_size, hit_tolerance)

    def get_cursor(self):
        """Horizontal or vertical resize cursor based on edge orientation."""
        if self.direction in ('e', 'w'):
            return Qt.SizeHorCursor
        return Qt.SizeVerCursor


class CenterHandle(Handle):
    """Center handle - full bounds hit area for translation."""

    direction = 'move'

    def hit_test(self, pointer_x, pointer_y, rect):
        return (rect.x <= pointer_x <= rect.x + rect.width and
                rect.y <= pointer_y <= rect.y + rect.height)

    def draw(self, painter, rect):
        """Draw the selection outline."""
        painter.setPen(QPen(QColor(90, 141, 191, 200), 2))
        painter.setBrush(QBrush())
        painter.drawRect(int(rect.x), int(rect.y), int(rect.width), int(rect.height))

    def drag(self, dx, dy, start_rect, min_size=MIN_ELEMENT_SIZE):
        """Translate the whole element by the pointer delta."""
        return start_rect.translated(dx, dy)

    def get_cursor(self):
        """Move cursor for center/translation."""
        return Qt.SizeAllCursor


def create_handles(handle_size=TRANSFORM_HANDLE_SIZE, hit_tolerance=TRANSFORM_HIT_TOLERANCE):
    """Build the handle set for a selected element.

    Resize handles come first so they win hit tests over the center handle.

    Returns:
        list of Handle
    """
    handles = [CornerHandle(d, handle_size, hit_tolerance) for d in ('nw', 'ne', 'sw', 'se')]
    handles += [EdgeHandle(d, handle_size, hit_tolerance) for d in ('n', 's', 'e', 'w')]
    handles.append(CenterHandle())
    return handles


def get_handle_at_pos(handles, pointer_x, pointer_y, rect):
    """First handle hit at pointer position, or None."""
    for handle in handles:
        if handle.hit_test(pointer_x, pointer_y, rect):
            return handle
    return None
