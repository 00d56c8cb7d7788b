"""
Scene Order Mixin - z-order changes within a single list

Z-order is list order: index 0 is the bottom, the last element renders on
top. "Up" moves toward the end of the list.
"""

from typing import Optional


class SceneOrderMixin:
    """Move up/down operations for Scene model"""

    def move_up(self, element_id: str, parent_id: Optional[str] = None) -> bool:
        """Swap element with its neighbor above (index + 1)

        Args:
            element_id: Element to move
            parent_id: Container whose children hold the element, or None
                for the top-level list

        Returns:
            True if moved, False if already on top or not found in that list
        """
        return self._swap_with_neighbor(element_id, parent_id, 1)

    def move_down(self, element_id: str, parent_id: Optional[str] = None) -> bool:
        """Swap element with its neighbor below (index - 1)

        Returns:
            True if moved, False if already at the bottom or not found in that list
        """
        return self._swap_with_neighbor(element_id, parent_id, -1)

    def _swap_with_neighbor(self, element_id: str, parent_id: Optional[str], step: int) -> bool:
        holding = self._holding_list(parent_id)
        if holding is None:
            self._logger.warning(f"move: container {parent_id} not found")
            return False

        index = next((i for i, e in enumerate(holding) if e.id == element_id), None)
        if index is None:
            where = f"container {parent_id}" if parent_id else "top level"
            self._logger.warning(f"move: element {element_id} not found in {where}")
            return False

        neighbor = index + step
        if neighbor < 0 or neighbor >= len(holding):
            return False

        holding[index], holding[neighbor] = holding[neighbor], holding[index]
        direction = 'up' if step > 0 else 'down'
        self._logger.debug(f"Moved {element_id} {direction}: index {index} -> {neighbor}")
        return True
