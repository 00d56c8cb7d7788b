"""
Scene Serialization Mixin

Converts the scene to and from the JSON-compatible wire shape. Loading
repairs the containment back-references from the nesting, so a loaded scene
always satisfies the containment invariants.
"""

from typing import Any, Dict, List

from models.element import EditorElement
from models.errors import StructuralViolation


class SceneSerializationMixin:
    """Mixin providing serialization for Scene model"""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize scene to wire dict

        Returns:
            {'elements': [element dicts in z-order]}
        """
        return {'elements': [element.to_dict() for element in self._elements]}

    def to_element_list(self) -> List[Dict[str, Any]]:
        return [element.to_dict() for element in self._elements]

    def load_dict(self, data: Dict[str, Any]):
        """Replace scene contents from wire dict

        Args:
            data: {'elements': [...]} as produced by to_dict()

        Raises:
            StructuralViolation: If ids repeat anywhere in the tree (the
                scene is left unchanged)
            ValueError, KeyError: If an element dict is malformed
        """
        elements = [EditorElement.from_dict(item) for item in data.get('elements', [])]

        seen = set()
        for element in elements:
            for item in [element, *element.iter_descendants()]:
                if item.id in seen:
                    raise StructuralViolation(f"Duplicate element id in layout: {item.id}")
                seen.add(item.id)

        repaired = 0
        for element in elements:
            if element.in_container or element.parent_id is not None:
                repaired += 1
            element.in_container = False
            element.parent_id = None
            repaired += self._repair_links(element)

        self._elements = elements
        if repaired:
            self._logger.warning(f"Repaired {repaired} containment reference(s) while loading")
        self._logger.debug(f"Loaded scene with {self.element_count()} element(s)")

    def _repair_links(self, container: EditorElement) -> int:
        fixed = 0
        for child in container.child_elements:
            if not child.in_container or child.parent_id != container.id:
                fixed += 1
            child.in_container = True
            child.parent_id = container.id
            fixed += self._repair_links(child)
        return fixed

    @classmethod
    def from_dict(cls, data: Dict[str, Any]):
        """Create a new scene from wire dict (see load_dict)"""
        scene = cls()
        scene.load_dict(data)
        return scene
