"""
Scene Element Management Mixin

Provides element CRUD operations for the Scene model.

Methods:
    - insert_standalone
    - add_element
    - remove
    - rename
    - update_geometry
    - duplicate
"""

from typing import Optional

from models.element import EditorElement, ElementType, create_element, new_element_id
from models.errors import StructuralViolation
from models.transform import Rect


class SceneElementMixin:
    """Mixin providing element CRUD operations for Scene

    This mixin assumes the parent class has:
        - self._elements: top-level element list
        - self._logger: logging.Logger instance
        - the SceneQueryMixin API
    """

    # ========================================
    # Insertion
    # ========================================

    def insert_standalone(self, element: EditorElement) -> bool:
        """Append element (and its subtree) to the top of the z-order

        Children of an inserted container get their back-references set
        from the nesting.

        Args:
            element: Element not yet in any scene

        Returns:
            True when inserted

        Raises:
            StructuralViolation: If any id in the subtree already exists in
                the scene or repeats within the subtree, or the element
                carries a parent reference. Nothing is inserted.
        """
        if element.in_container or element.parent_id is not None:
            raise StructuralViolation(
                f"Element {element.id} references parent {element.parent_id}; "
                f"only standalone elements can be inserted"
            )

        subtree_ids = [element.id] + [d.id for d in element.iter_descendants()]
        if len(set(subtree_ids)) != len(subtree_ids):
            raise StructuralViolation(f"Element {element.id} contains repeated ids")
        existing = set(self.get_all_element_ids())
        clashes = [i for i in subtree_ids if i in existing]
        if clashes:
            raise StructuralViolation(f"Element id(s) already in scene: {', '.join(clashes)}")

        self._link_children(element)
        self._elements.append(element)
        self._logger.debug(f"Inserted element {element.id} ({element.type.value})")
        return True

    def add_element(self, element_type, x: float = 0, y: float = 0,
                    width: Optional[float] = None, height: Optional[float] = None,
                    size_id: Optional[str] = None, **kwargs) -> str:
        """Create a new element and insert it at the top of the z-order

        Args:
            element_type: ElementType or its wire string
            x, y: Initial position
            width, height: Initial size (type defaults if omitted)
            size_id: Owning format name (or 'global')
            **kwargs: Passed to create_element (content, style fields)

        Returns:
            Id of the new element
        """
        size_kwargs = {}
        if width is not None:
            size_kwargs['width'] = width
        if height is not None:
            size_kwargs['height'] = height
        element = create_element(element_type, x=x, y=y, size_id=size_id, **size_kwargs, **kwargs)
        self.insert_standalone(element)
        self._last_added_id = element.id
        return element.id

    def _link_children(self, container: EditorElement):
        """Set in_container/parent_id on every descendant from the nesting"""
        for child in container.child_elements:
            child.in_container = True
            child.parent_id = container.id
            self._link_children(child)

    # ========================================
    # Removal
    # ========================================

    def remove(self, element_id: str) -> bool:
        """Remove element from wherever it lives

        Removing a container removes its whole subtree (no orphans).

        Returns:
            True if removed, False if the id wasn't found
        """
        location = self._locate(element_id)
        if location is None:
            self._logger.warning(f"remove: element {element_id} not found")
            return False

        holding, index, parent = location
        removed = holding.pop(index)
        removed.in_container = False
        removed.parent_id = None

        nested = sum(1 for _ in removed.iter_descendants())
        if parent is not None:
            self._logger.debug(f"Removed element {element_id} from container {parent.id} (+{nested} nested)")
        else:
            self._logger.debug(f"Removed element {element_id} (+{nested} nested)")
        return True

    def clear(self):
        """Remove all elements"""
        self._elements.clear()
        self._last_added_id = None
        self._logger.debug("Cleared scene")

    # ========================================
    # Edits
    # ========================================

    def rename(self, element_id: str, name: str) -> bool:
        """Set the layer panel name (editor-only metadata)

        Works for top-level elements and container children alike.

        Returns:
            True if renamed, False if the id wasn't found
        """
        element = self.get_element(element_id)
        if element is None:
            self._logger.warning(f"rename: element {element_id} not found")
            return False

        element.layer_name = name
        self._logger.debug(f"Renamed element {element_id}: {name}")
        return True

    def update_geometry(self, element_id: str, rect: Rect) -> bool:
        """Replace an element's base geometry

        Returns:
            True if updated, False if the id wasn't found
        """
        element = self.get_element(element_id)
        if element is None:
            self._logger.warning(f"update_geometry: element {element_id} not found")
            return False

        element.geometry = rect
        self._logger.debug(f"Set geometry of {element_id}: {rect.to_tuple()}")
        return True

    def duplicate(self, element_id: str) -> Optional[str]:
        """Duplicate an element (and its subtree) with fresh ids

        The copy is inserted directly above the original in the same list.

        Returns:
            Id of the copy, or None if the id wasn't found
        """
        location = self._locate(element_id)
        if location is None:
            self._logger.warning(f"duplicate: element {element_id} not found")
            return None

        holding, index, parent = location
        copy = holding[index].copy()
        self._assign_fresh_ids(copy)
        copy.in_container = parent is not None
        copy.parent_id = parent.id if parent is not None else None
        self._link_children(copy)
        holding.insert(index + 1, copy)

        self._logger.debug(f"Duplicated element {element_id} -> {copy.id}")
        return copy.id

    def _assign_fresh_ids(self, element: EditorElement):
        element.id = new_element_id()
        for child in element.child_elements:
            self._assign_fresh_ids(child)
