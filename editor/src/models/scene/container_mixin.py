"""
Scene Container Mixin - Reparenting between containers and the top level

Children entering a container have their position reset to the container
default: containers lay out their children, they don't position them
freely. Leaving a container puts the element at a visible standalone
default.
"""

from constants import (
    STANDALONE_TARGET,
    DEFAULT_CONTAINER_CHILD_X, DEFAULT_CONTAINER_CHILD_Y,
    DEFAULT_STANDALONE_X, DEFAULT_STANDALONE_Y
)


class SceneContainerMixin:
    """Container management methods for Scene model"""

    def reparent(self, element_id: str, target: str) -> bool:
        """Move element into a container, or out to the top level

        The element is detached from its current list and appended at the
        end (top of z-order) of the target list. Position and back
        references are updated together with the move.

        Args:
            element_id: Element to move
            target: Container id, or STANDALONE_TARGET for the top level

        Returns:
            True if moved. False (scene untouched) if the element or the
            container doesn't exist, the target isn't a container, the move
            would nest a container inside itself, or the element already
            lives in the target list.
        """
        location = self._locate(element_id)
        if location is None:
            self._logger.warning(f"reparent: element {element_id} not found")
            return False
        holding, index, current_parent = location
        element = holding[index]

        if target == STANDALONE_TARGET:
            if current_parent is None:
                self._logger.debug(f"reparent: {element_id} is already standalone")
                return False
            holding.pop(index)
            element.geometry = element.geometry.moved_to(DEFAULT_STANDALONE_X, DEFAULT_STANDALONE_Y)
            element.in_container = False
            element.parent_id = None
            self._elements.append(element)
            self._logger.debug(f"Moved {element_id} out of container {current_parent.id}")
            return True

        container = self.get_element(target)
        if container is None:
            self._logger.warning(f"reparent: container {target} not found")
            return False
        if not container.is_container:
            self._logger.warning(f"reparent: {target} is a {container.type.value}, not a container")
            return False
        if target == element_id or self.is_descendant(target, element_id):
            self._logger.warning(f"reparent: cannot move {element_id} into itself or its descendant {target}")
            return False
        if current_parent is not None and current_parent.id == target:
            self._logger.debug(f"reparent: {element_id} is already in {target}")
            return False

        holding.pop(index)
        element.geometry = element.geometry.moved_to(DEFAULT_CONTAINER_CHILD_X, DEFAULT_CONTAINER_CHILD_Y)
        element.in_container = True
        element.parent_id = container.id
        container.child_elements.append(element)
        self._logger.debug(f"Moved {element_id} into container {target}")
        return True

    def move_to_container(self, element_id: str, container_id: str) -> bool:
        """Shorthand for reparent(element_id, container_id)"""
        return self.reparent(element_id, container_id)

    def move_to_standalone(self, element_id: str) -> bool:
        """Shorthand for reparent(element_id, STANDALONE_TARGET)"""
        return self.reparent(element_id, STANDALONE_TARGET)
