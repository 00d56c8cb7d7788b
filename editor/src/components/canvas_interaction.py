"""
Canvas Interaction - Qt mouse events -> manipulation state machine

Sits between a canvas widget and the ManipulationController:
- Maps widget pixels to elements (topmost first) and selection handles
- Starts/updates/finishes gestures from mouse press/move/release
- Emits signals the canvas uses to repaint and to update the cursor

Install it as an event filter on the canvas widget, or forward the mouse
events to mouse_press/mouse_move/mouse_release directly.
"""

import logging
from typing import List, Optional

from PyQt5.QtCore import QEvent, QObject, Qt, pyqtSignal

from components.transform_widgets.handles import create_handles, get_handle_at_pos
from models.transform import Rect, Vec2
from services.manipulation import ManipulationController
from constants import DEFAULT_ZOOM, ZOOM_MIN, ZOOM_MAX


class CanvasInteraction(QObject):
    """Pointer handling for one artboard of a scene"""

    # Signals
    geometry_changed = pyqtSignal(str, object)  # element_id, preview Rect
    hover_changed = pyqtSignal(object)  # hovered container id or None
    gesture_finished = pyqtSignal(str, object)  # element_id, committed Rect (None if vanished)
    cursor_changed = pyqtSignal(int)  # Qt.CursorShape
    selection_changed = pyqtSignal(object)  # selected element id or None

    def __init__(self, scene, artboard_id: Optional[str] = None, zoom: float = DEFAULT_ZOOM,
                 artboard_size=None, parent=None):
        super().__init__(parent)
        self._logger = logging.getLogger('CanvasInteraction')
        self.scene = scene
        self.artboard_id = artboard_id
        self.controller = ManipulationController(
            scene, zoom=zoom, container_origin=self.absolute_position, artboard_size=artboard_size
        )
        self.handles = create_handles()
        self.selected_id: Optional[str] = None
        self._cursor = Qt.ArrowCursor
        self._hovered = None

    # ========================================
    # View configuration
    # ========================================

    def set_zoom(self, zoom: float):
        """Set canvas zoom (clamped to the zoom range)"""
        self.controller.zoom = max(ZOOM_MIN, min(ZOOM_MAX, zoom))

    def set_artboard_origin(self, x: float, y: float):
        """Widget position of the artboard's top-left corner"""
        self.controller.artboard_origin = Vec2(x, y)

    def select(self, element_id: Optional[str]):
        if element_id is not None and not self.scene.contains(element_id):
            self._logger.warning(f"select: element {element_id} not found")
            element_id = None
        if element_id != self.selected_id:
            self.selected_id = element_id
            self.selection_changed.emit(element_id)

    # ========================================
    # Coordinates
    # ========================================

    def absolute_position(self, element) -> Vec2:
        """Format-local position of element, adding container offsets"""
        x, y = element.geometry.x, element.geometry.y
        parent = self.scene.get_parent(element.id)
        while parent is not None:
            x += parent.geometry.x
            y += parent.geometry.y
            parent = self.scene.get_parent(parent.id)
        return Vec2(x, y)

    def screen_rect(self, element, geometry: Optional[Rect] = None) -> Rect:
        """Element bounds in widget pixels"""
        rect = geometry or element.geometry
        pos = self.absolute_position(element) - element.geometry.pos + rect.pos
        scale = self.controller.active_scale
        origin = self.controller.artboard_origin
        return Rect(origin.x + pos.x * scale, origin.y + pos.y * scale,
                    rect.width * scale, rect.height * scale)

    def _artboard_elements(self) -> List:
        """Hit test candidates, topmost first (children above their container)"""
        if self.artboard_id is None:
            top_level = [e for e in self.scene.get_top_level() if e.size_id is None or e.is_global]
        else:
            top_level = list(self.scene.elements_for_artboard(self.artboard_id))

        ordered = []

        def visit(element):
            ordered.append(element)
            for child in element.child_elements:
                visit(child)

        for element in top_level:
            if not element.is_background:
                visit(element)
        ordered.reverse()
        return ordered

    def element_at(self, x: float, y: float):
        """Topmost element under widget position, or None"""
        point = Vec2(x, y)
        for element in self._artboard_elements():
            if self.screen_rect(element).contains(point):
                return element
        return None

    def handle_at(self, x: float, y: float):
        """Handle of the selected element under widget position, or None"""
        if self.selected_id is None:
            return None
        element = self.scene.get_element(self.selected_id)
        if element is None:
            return None
        return get_handle_at_pos(self.handles, x, y, self.screen_rect(element))

    # ========================================
    # Mouse handling
    # ========================================

    def mouse_press(self, event) -> bool:
        """Start a gesture on the handle or element under the pointer

        Returns:
            True if the event started a gesture
        """
        if event.button() != Qt.LeftButton:
            return False

        pos = event.pos()
        handle = self.handle_at(pos.x(), pos.y())
        if handle is not None and handle.direction != 'move':
            element_id = self.selected_id
            direction = handle.direction
        else:
            element = self.element_at(pos.x(), pos.y())
            self.select(element.id if element else None)
            if element is None:
                return False
            element_id = element.id
            direction = None

        return self.controller.pointer_down(element_id, Vec2(pos.x(), pos.y()), direction)

    def mouse_move(self, event) -> bool:
        """Update the active gesture, or the hover cursor when idle"""
        pos = event.pos()
        if not self.controller.is_active:
            handle = self.handle_at(pos.x(), pos.y())
            self._set_cursor(handle.get_cursor() if handle else Qt.ArrowCursor)
            return False

        element_id = self.controller.active_element_id
        rect = self.controller.pointer_move(Vec2(pos.x(), pos.y()))
        if rect is not None:
            self.geometry_changed.emit(element_id, rect)
        self._set_hovered(self.controller.hovered_container_id)
        return True

    def mouse_release(self, event) -> bool:
        """Commit the active gesture"""
        if event.button() != Qt.LeftButton or not self.controller.is_active:
            return False
        element_id = self.controller.active_element_id
        committed = self.controller.pointer_up()
        self._set_hovered(None)
        self.gesture_finished.emit(element_id, committed)
        return True

    def cancel(self) -> bool:
        """Abort the active gesture (Escape)"""
        element_id = self.controller.active_element_id
        if not self.controller.cancel():
            return False
        self._set_hovered(None)
        element = self.scene.get_element(element_id)
        if element is not None:
            self.geometry_changed.emit(element_id, element.geometry)
        return True

    def eventFilter(self, obj, event):
        """Route the watched widget's mouse/key events"""
        event_type = event.type()
        if event_type == QEvent.MouseButtonPress:
            return self.mouse_press(event)
        if event_type == QEvent.MouseMove:
            return self.mouse_move(event)
        if event_type == QEvent.MouseButtonRelease:
            return self.mouse_release(event)
        if event_type == QEvent.KeyPress and event.key() == Qt.Key_Escape:
            return self.cancel()
        return super().eventFilter(obj, event)

    # ========================================
    # Painting
    # ========================================

    def paint_selection(self, painter):
        """Draw the selected element's handles (call from paintEvent)"""
        if self.selected_id is None:
            return
        element = self.scene.get_element(self.selected_id)
        if element is None:
            return
        geometry = None
        if self.controller.active_element_id == self.selected_id:
            geometry = self.controller.preview_geometry
        rect = self.screen_rect(element, geometry)
        for handle in reversed(self.handles):
            handle.draw(painter, rect)

    # ========================================
    # Helpers
    # ========================================

    def _set_cursor(self, cursor):
        if cursor != self._cursor:
            self._cursor = cursor
            self.cursor_changed.emit(int(cursor))

    def _set_hovered(self, container_id):
        if container_id != self._hovered:
            self._hovered = container_id
            self.hover_changed.emit(container_id)
