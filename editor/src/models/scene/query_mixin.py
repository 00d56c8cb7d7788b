"""
Query Mixin for Scene Model

Provides read-only query methods for UI components and services to
retrieve scene state.

All query methods follow these conventions:
- Prefix with get_ for retrieving data
- Return None (never raise) when an id is not found
- Return tuples/copies, never the internal lists
"""

from typing import Dict, Iterator, List, Optional, Tuple

from models.element import EditorElement
from constants import GLOBAL_SIZE_ID


class SceneQueryMixin:
    """Mixin providing query API for Scene model

    This mixin assumes the class has:
    - self._elements: top-level element list (z-order, last = on top)
    """

    # ========================================
    # Location (internal)
    # ========================================

    def _locate(self, element_id: str) -> Optional[Tuple[List[EditorElement], int, Optional[EditorElement]]]:
        """Find the list holding an element

        Returns:
            (holding_list, index, parent) where parent is None for top-level
            elements, or None if the id isn't in the scene
        """
        for index, element in enumerate(self._elements):
            if element.id == element_id:
                return self._elements, index, None

        stack = [e for e in self._elements if e.is_container]
        while stack:
            container = stack.pop()
            for index, child in enumerate(container.child_elements):
                if child.id == element_id:
                    return container.child_elements, index, container
                if child.is_container:
                    stack.append(child)
        return None

    def _holding_list(self, parent_id: Optional[str]) -> Optional[List[EditorElement]]:
        """Ordered list for parent_id (top-level list for None)"""
        if parent_id is None:
            return self._elements
        parent = self.get_element(parent_id)
        if parent is None or not parent.is_container:
            return None
        return parent.child_elements

    # ========================================
    # Element Queries
    # ========================================

    def find_location(self, element_id: str) -> Optional[Tuple[Optional[str], int]]:
        """Where an element lives

        Returns:
            (parent_id, index) with parent_id None for top-level elements,
            or None if the id isn't in the scene
        """
        location = self._locate(element_id)
        if location is None:
            return None
        _, index, parent = location
        return (parent.id if parent is not None else None), index

    def get_element(self, element_id: str) -> Optional[EditorElement]:
        """Get element anywhere in the scene (top-level or nested)"""
        location = self._locate(element_id)
        if location is None:
            return None
        holding, index, _ = location
        return holding[index]

    def contains(self, element_id: str) -> bool:
        return self._locate(element_id) is not None

    def get_parent(self, element_id: str) -> Optional[EditorElement]:
        """Get the container holding element_id (None for top-level/unknown)"""
        location = self._locate(element_id)
        if location is None:
            return None
        return location[2]

    def get_index(self, element_id: str) -> Optional[int]:
        """Index of element in the list that holds it (z-order position)"""
        location = self._locate(element_id)
        if location is None:
            return None
        return location[1]

    def get_top_level(self) -> Tuple[EditorElement, ...]:
        """Standalone elements in z-order (index 0 = bottom)"""
        return tuple(self._elements)

    def get_children(self, container_id: str) -> Tuple[EditorElement, ...]:
        """Children of a container in z-order (empty for unknown/non-containers)"""
        container = self.get_element(container_id)
        if container is None or not container.is_container:
            return ()
        return tuple(container.child_elements)

    def get_containers(self) -> Tuple[EditorElement, ...]:
        """All container/layout elements, at any depth"""
        return tuple(e for e in self.iter_elements() if e.is_container)

    def iter_elements(self) -> Iterator[EditorElement]:
        """Yield every element depth-first in z-order"""
        for element in self._elements:
            yield element
            yield from element.iter_descendants()

    def get_all_element_ids(self) -> List[str]:
        return [e.id for e in self.iter_elements()]

    def element_count(self) -> int:
        """Number of elements at any depth"""
        return sum(1 for _ in self.iter_elements())

    def is_descendant(self, element_id: str, ancestor_id: str) -> bool:
        """Check if element_id is nested (at any depth) inside ancestor_id"""
        ancestor = self.get_element(ancestor_id)
        if ancestor is None:
            return False
        return any(d.id == element_id for d in ancestor.iter_descendants())

    # ========================================
    # Artboard Queries
    # ========================================

    def get_artboard_ids(self) -> List[str]:
        """Distinct size_ids of top-level elements, in first-seen order

        GLOBAL_SIZE_ID and missing size_ids are not artboards.
        """
        seen = []
        for element in self._elements:
            if element.size_id and element.size_id != GLOBAL_SIZE_ID and element.size_id not in seen:
                seen.append(element.size_id)
        return seen

    def elements_for_artboard(self, size_id: str) -> Tuple[EditorElement, ...]:
        """Top-level elements rendered on an artboard (own + global), z-order"""
        return tuple(
            e for e in self._elements
            if e.size_id == size_id or e.size_id == GLOBAL_SIZE_ID
        )

    # ========================================
    # Invariant Checks
    # ========================================

    def validate(self) -> List[str]:
        """Check containment invariants

        Returns:
            List of human readable violations (empty when consistent)
        """
        problems = []
        seen: Dict[str, int] = {}

        def visit(element: EditorElement, parent: Optional[EditorElement]):
            seen[element.id] = seen.get(element.id, 0) + 1
            if parent is None:
                if element.in_container or element.parent_id is not None:
                    problems.append(f"Top-level element {element.id} has a parent reference")
            else:
                if not element.in_container:
                    problems.append(f"Child {element.id} of {parent.id} has in_container=False")
                if element.parent_id != parent.id:
                    problems.append(
                        f"Child {element.id} of {parent.id} has parent_id={element.parent_id}"
                    )
            if element.child_elements and not element.is_container:
                problems.append(f"Non-container {element.id} has children")
            for child in element.child_elements:
                visit(child, element)

        for element in self._elements:
            visit(element, None)

        for element_id, count in seen.items():
            if count > 1:
                problems.append(f"Element {element_id} appears {count} times")
        return problems
