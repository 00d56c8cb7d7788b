"""
Banner Layout Editor - Scene Data Model

THE MODEL of the editor. Owns the ordered element tree for all artboards.

This class handles:
- Top-level element order (z-order, index 0 = bottom)
- Container nesting (child_elements, in_container/parent_id back-references)
- Insert/remove/rename/duplicate
- Reparenting between containers and the top level
- Move up/down within a list
- Query API (for services and UI to retrieve data)
- Wire serialization (to_dict/from_dict)

The Scene model is INDEPENDENT of UI:
- No Qt imports
- No selection or hover state (that's the manipulation state machine)
- No display order (that's the layer projection)

Every mutation keeps the containment invariants: an element is either in
the top-level list or in exactly one container's children, and its
in_container/parent_id agree with where it is. Operations referencing
unknown ids are no-ops that return False and log a warning.

Usage:
    scene = Scene()
    container_id = scene.add_element('container', 0, 0, 300, 250, size_id='Display Ad - Medium Rectangle')
    text_id = scene.add_element('text', 40, 40, content=TextContent('Sale'))
    scene.reparent(text_id, container_id)
    scene.move_up(text_id, parent_id=container_id)
"""

import logging
from typing import List, Optional

from models.element import EditorElement
from .query_mixin import SceneQueryMixin
from .element_mixin import SceneElementMixin
from .container_mixin import SceneContainerMixin
from .order_mixin import SceneOrderMixin
from .serialization_mixin import SceneSerializationMixin


class Scene(SceneElementMixin, SceneContainerMixin, SceneOrderMixin, SceneSerializationMixin, SceneQueryMixin):
    """Element tree for a multi-format layout

    Active Instance Pattern:
        Scene.set_active(scene) - Set the active scene
        Scene.get_active() - Get the active scene
        Scene.has_active() - Check if active scene exists
    """

    _active_instance = None

    @classmethod
    def set_active(cls, instance: 'Scene'):
        """Set the active Scene instance"""
        cls._active_instance = instance

    @classmethod
    def get_active(cls) -> 'Scene':
        """Get the active Scene instance

        Raises:
            RuntimeError: If no active instance set
        """
        if cls._active_instance is None:
            raise RuntimeError("No active Scene instance set. Call Scene.set_active() first.")
        return cls._active_instance

    @classmethod
    def has_active(cls) -> bool:
        return cls._active_instance is not None

    def __init__(self, elements: Optional[List[EditorElement]] = None):
        """Create a scene, optionally inserting standalone elements

        Raises:
            StructuralViolation: If the given elements repeat ids or carry
                parent references
        """
        self._logger = logging.getLogger('Scene')
        self._elements: List[EditorElement] = []
        self._last_added_id: Optional[str] = None
        for element in elements or []:
            self.insert_standalone(element)

    @property
    def last_added_id(self) -> Optional[str]:
        """Id of the element most recently created with add_element()"""
        return self._last_added_id

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        return f"Scene(top_level={len(self._elements)}, total={self.element_count()})"
