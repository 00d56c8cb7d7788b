"""
Banner Layout Editor - Manipulation State Machine

Interprets pointer gestures against the scene:

    Idle --pointer_down(element)--------> Dragging
    Idle --pointer_down(element, handle)-> Resizing
    Dragging|Resizing --pointer_move----> (same state, geometry preview)
    Dragging|Resizing --pointer_up------> Idle (geometry committed)
    Dragging|Resizing --cancel----------> Idle (scene untouched)

Pointer positions are screen pixels. They are converted to format-local
units by dividing the delta by the active scale (zoom * nested scale).
Every move is computed from the DragContext snapshot taken at pointer_down.
Moves only update a preview; the scene changes once, at pointer_up.

While dragging, the container under the pointer is tracked as "hovered".
Hover is an affordance only; reparenting on drop is a separate explicit
operation on the Scene.
"""

import logging
from typing import Callable, Optional

from models.drag_context import DragContext
from models.transform import Rect, Vec2
from utils.geometry import (
    resize_rect, snap_resized_rect, snap_to_grid, is_out_of_bounds, constrain_to_bounds
)
from constants import (
    RESIZE_DIRECTIONS, MIN_ELEMENT_SIZE, GRID_CELL_SIZE, DEFAULT_ZOOM
)

STATE_IDLE = 'idle'
STATE_DRAGGING = 'dragging'
STATE_RESIZING = 'resizing'


class ManipulationController:
    """Drag/resize/hover state machine for one scene

    Only one gesture can be active at a time: pointer_down while a gesture
    is in progress is ignored until pointer_up or cancel.

    Args:
        scene: Scene to manipulate
        zoom: Canvas zoom factor (> 0)
        nested_scale: Extra scale of the artboard being edited (> 0)
        snap: Snap to the grid (position when dragging, the moved edges
            when resizing)
        grid_size: Grid cell size for snapping
        min_size: Minimum element width/height while resizing
        container_origin: Callable(container) -> Vec2 giving the container's
            absolute format-local position (defaults to its own x/y)
        artboard_size: Artboard being edited (anything with width/height).
            When set, a top-level element dropped mostly off the artboard
            is moved back so part of it stays visible.

    Attributes:
        artboard_origin: Screen position of the edited artboard's top-left
            corner, used to map the pointer for container hover
    """

    def __init__(self, scene, zoom: float = DEFAULT_ZOOM, nested_scale: float = 1.0,
                 snap: bool = False, grid_size: float = GRID_CELL_SIZE,
                 min_size: float = MIN_ELEMENT_SIZE,
                 container_origin: Optional[Callable] = None, artboard_size=None):
        self._logger = logging.getLogger('Manipulation')
        self.scene = scene
        self._zoom = 1.0
        self._nested_scale = 1.0
        self.zoom = zoom
        self.nested_scale = nested_scale
        self.snap = snap
        self.grid_size = grid_size
        self.min_size = min_size
        self._container_origin = container_origin
        self.artboard_size = artboard_size
        self.artboard_origin = Vec2(0, 0)

        self._context: Optional[DragContext] = None
        self._preview: Optional[Rect] = None
        self._hovered_container_id: Optional[str] = None

    # ========================================
    # Configuration
    # ========================================

    @property
    def zoom(self) -> float:
        return self._zoom

    @zoom.setter
    def zoom(self, value: float):
        if value <= 0:
            raise ValueError(f"zoom must be > 0, got {value}")
        self._zoom = value

    @property
    def nested_scale(self) -> float:
        return self._nested_scale

    @nested_scale.setter
    def nested_scale(self, value: float):
        if value <= 0:
            raise ValueError(f"nested_scale must be > 0, got {value}")
        self._nested_scale = value

    @property
    def active_scale(self) -> float:
        """Screen pixels per format-local unit"""
        return self._zoom * self._nested_scale

    # ========================================
    # State
    # ========================================

    @property
    def state(self) -> str:
        if self._context is None:
            return STATE_IDLE
        return STATE_RESIZING if self._context.is_resize else STATE_DRAGGING

    @property
    def is_active(self) -> bool:
        return self._context is not None

    @property
    def context(self) -> Optional[DragContext]:
        """Snapshot of the active gesture (None when idle)"""
        return self._context

    @property
    def active_element_id(self) -> Optional[str]:
        return self._context.element_id if self._context else None

    @property
    def preview_geometry(self) -> Optional[Rect]:
        """Geometry of the active gesture as of the last move"""
        return self._preview

    @property
    def hovered_container_id(self) -> Optional[str]:
        return self._hovered_container_id

    # ========================================
    # Transitions
    # ========================================

    def pointer_down(self, element_id: str, pointer: Vec2, handle: Optional[str] = None) -> bool:
        """Start dragging (no handle) or resizing (handle direction)

        Args:
            element_id: Element under the pointer
            pointer: Pointer position in screen pixels
            handle: Resize direction, or None/'move' for a drag

        Returns:
            True if a gesture started. False when a gesture is already
            active, the element is unknown, or the handle is invalid.
        """
        if self._context is not None:
            self._logger.debug(
                f"pointer_down on {element_id} ignored: gesture on {self._context.element_id} in progress"
            )
            return False

        element = self.scene.get_element(element_id)
        if element is None:
            self._logger.warning(f"pointer_down: element {element_id} not found")
            return False

        if handle in (None, 'move'):
            operation, direction = 'drag', None
        elif handle in RESIZE_DIRECTIONS:
            operation, direction = 'resize', handle
        else:
            self._logger.warning(f"pointer_down: unknown handle '{handle}'")
            return False

        excluded = frozenset([element.id] + [d.id for d in element.iter_descendants()])
        self._context = DragContext(
            operation=operation,
            element_id=element_id,
            start_pointer=pointer,
            start_geometry=element.geometry,
            direction=direction,
            active_scale=self.active_scale,
            excluded_ids=excluded,
        )
        self._preview = element.geometry
        self._hovered_container_id = None
        self._logger.debug(f"Started {operation} on {element_id} at {tuple(pointer)}")
        return True

    def pointer_move(self, pointer: Vec2) -> Optional[Rect]:
        """Update the active gesture

        Args:
            pointer: Pointer position in screen pixels

        Returns:
            Preview geometry, or None when idle or the element vanished
        """
        context = self._context
        if context is None:
            return None
        if not self.scene.contains(context.element_id):
            self._logger.debug(f"pointer_move: element {context.element_id} is gone, ignoring")
            self._hovered_container_id = None
            return None

        delta = context.delta(pointer)
        start = context.start_geometry
        if context.is_resize:
            rect = resize_rect(start, context.direction, delta.x, delta.y, self.min_size)
        else:
            rect = start.translated(delta.x, delta.y)
            self._update_hover(context, pointer)

        if self.snap:
            rect = self._snap(context, rect)

        self._preview = rect
        return rect

    def pointer_up(self) -> Optional[Rect]:
        """Finish the active gesture and commit its geometry

        Returns:
            Committed geometry, or None if idle or the element vanished
        """
        context = self._context
        if context is None:
            return None

        committed = None
        if self.scene.contains(context.element_id):
            committed = self._constrain(context.element_id, self._preview or context.start_geometry)
            self.scene.update_geometry(context.element_id, committed)
            self._logger.debug(f"Committed {context.operation} on {context.element_id}: {committed.to_tuple()}")
        else:
            self._logger.debug(f"pointer_up: element {context.element_id} is gone, nothing to commit")

        self._reset()
        return committed

    def cancel(self) -> bool:
        """Abort the active gesture without committing

        Returns:
            True if a gesture was cancelled
        """
        context = self._context
        if context is None:
            return False
        self._logger.debug(f"Cancelled {context.operation} on {context.element_id}")
        self._reset()
        return True

    def _reset(self):
        self._context = None
        self._preview = None
        self._hovered_container_id = None

    # ========================================
    # Helpers
    # ========================================

    def _snap(self, context: DragContext, rect: Rect) -> Rect:
        if context.is_resize:
            return snap_resized_rect(context.start_geometry, rect, context.direction,
                                     self.grid_size, self.min_size)
        return rect.moved_to(snap_to_grid(rect.x, self.grid_size), snap_to_grid(rect.y, self.grid_size))

    def _constrain(self, element_id: str, rect: Rect) -> Rect:
        """Pull a top-level element back onto the artboard if it left it"""
        size = self.artboard_size
        if size is None or self.scene.get_parent(element_id) is not None:
            return rect
        if not is_out_of_bounds(rect, size.width, size.height):
            return rect
        constrained = constrain_to_bounds(rect, size.width, size.height)
        self._logger.debug(f"Constrained {element_id} to the artboard: {constrained.to_tuple()}")
        return constrained

    def to_local(self, pointer: Vec2, origin: Vec2 = Vec2(0, 0)) -> Vec2:
        """Convert screen pixels to format-local units

        Args:
            pointer: Screen position
            origin: Screen position of the artboard's top-left corner
        """
        return (pointer - origin) / self.active_scale

    def _update_hover(self, context: DragContext, pointer: Vec2):
        """Track the topmost container under the pointer

        The pointer is mapped to format-local units relative to
        artboard_origin. Containers are tested topmost first; the dragged
        element and its descendants are never candidates.
        """
        local = self.to_local(pointer, self.artboard_origin)

        hovered = None
        for container in reversed(self.scene.get_containers()):
            if container.id in context.excluded_ids:
                continue
            if self._container_bounds(container).contains(local):
                hovered = container.id
                break

        if hovered != self._hovered_container_id:
            self._logger.debug(f"Hovered container: {hovered}")
        self._hovered_container_id = hovered

    def _container_bounds(self, container) -> Rect:
        if self._container_origin is None:
            return container.geometry
        origin = self._container_origin(container)
        return container.geometry.moved_to(origin.x, origin.y)
