"""
Banner Layout Editor - Layer Panel Projection

Derives the layer panel tree from the scene:

    artboard -> containers (each with its children) + standalone elements

Scene lists are z-order (index 0 = bottom). The panel shows the topmost
element first, so every list here is the reverse of the scene list. The
projection is recomputed from the scene each time and is read-only:
mutations go through the Scene (LayerPanel forwards them).
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from models.banner_size import find_banner_size, find_banner_size_by_key
from models.element import EditorElement
from constants import GLOBAL_SIZE_ID, DEFAULT_ARTBOARD

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayerEntry:
    """One row of the layer panel"""
    element_id: str
    name: str
    type: str
    depth: int = 0
    parent_id: Optional[str] = None


@dataclass(frozen=True)
class ContainerNode:
    """A container row and its children rows (display order)"""
    entry: LayerEntry
    children: Tuple[LayerEntry, ...]


@dataclass(frozen=True)
class ArtboardLayers:
    """Layer panel section for one artboard

    Attributes:
        size_id: Artboard key (format name, 'WxH', or the default artboard)
        name: Display name
        containers: Containers on this artboard, topmost first
        standalone: Non-container elements, topmost first
        global_elements: Elements present on every artboard, topmost first
        display_order: Ids of containers and standalone elements interleaved,
            topmost first
    """
    size_id: str
    name: str
    containers: Tuple[ContainerNode, ...]
    standalone: Tuple[LayerEntry, ...]
    global_elements: Tuple[LayerEntry, ...] = ()
    display_order: Tuple[str, ...] = ()


def artboard_name(size_id: str) -> str:
    """Display name for an artboard key

    Catalog format names are returned as-is, 'WxH' keys are mapped to the
    matching catalog format, anything else is returned unchanged.
    """
    size = find_banner_size(size_id) or find_banner_size_by_key(size_id)
    if size is not None:
        return size.name
    return size_id


def _entry(element: EditorElement, depth: int = 0) -> LayerEntry:
    return LayerEntry(
        element_id=element.id,
        name=element.display_name,
        type=element.type.value,
        depth=depth,
        parent_id=element.parent_id,
    )


def _container_node(container: EditorElement, depth: int = 0) -> ContainerNode:
    children = tuple(_entry(child, depth + 1) for child in reversed(container.child_elements))
    return ContainerNode(_entry(container, depth), children)


def project_artboard(elements, size_id: str, global_elements=()) -> ArtboardLayers:
    """Project the top-level elements of one artboard

    Args:
        elements: Top-level elements of the artboard in z-order
        size_id: Artboard key
        global_elements: Global top-level elements in z-order

    Returns:
        ArtboardLayers with every list in display (reverse z) order
    """
    containers = []
    standalone = []
    order = []
    for element in reversed(elements):
        if element.is_background or element.in_container:
            continue
        order.append(element.id)
        if element.is_container:
            containers.append(_container_node(element))
        else:
            standalone.append(_entry(element))

    globals_ = tuple(_entry(e) for e in reversed(global_elements) if not e.is_background)
    return ArtboardLayers(
        size_id=size_id,
        name=artboard_name(size_id),
        containers=tuple(containers),
        standalone=tuple(standalone),
        global_elements=globals_,
        display_order=tuple(order),
    )


def project_layers(scene, default_artboard: str = DEFAULT_ARTBOARD,
                   artboards: Optional[List[str]] = None) -> Tuple[ArtboardLayers, ...]:
    """Build the layer panel tree for every artboard

    Elements without a size_id belong to default_artboard. Global elements
    are listed in every artboard's global_elements and never partitioned.

    Args:
        scene: Scene to project
        default_artboard: Artboard key for elements without a size_id
        artboards: Extra artboard keys to include even when empty

    Returns:
        Tuple of ArtboardLayers, in order of first appearance
    """
    by_artboard: Dict[str, List[EditorElement]] = {}
    global_elements = []
    for key in artboards or []:
        by_artboard.setdefault(key, [])

    for element in scene.get_top_level():
        if element.size_id == GLOBAL_SIZE_ID:
            global_elements.append(element)
            continue
        key = element.size_id or default_artboard
        by_artboard.setdefault(key, []).append(element)

    if not by_artboard and global_elements:
        by_artboard[default_artboard] = []

    sections = tuple(
        project_artboard(elements, key, global_elements)
        for key, elements in by_artboard.items()
    )
    logger.debug(f"Projected {len(sections)} artboard(s), {len(global_elements)} global element(s)")
    return sections


class LayerPanel:
    """Layer panel operations over a scene

    Panel "up" is toward the top of the panel, which is toward the top of
    the z-order (end of the scene list).
    """

    def __init__(self, scene, default_artboard: str = DEFAULT_ARTBOARD):
        self.scene = scene
        self.default_artboard = default_artboard

    def layers(self) -> Tuple[ArtboardLayers, ...]:
        return project_layers(self.scene, self.default_artboard)

    def artboard(self, size_id: str) -> Optional[ArtboardLayers]:
        for section in self.layers():
            if section.size_id == size_id:
                return section
        return None

    def move_up(self, element_id: str) -> bool:
        """Move element one row up in the panel (one step up in z-order)"""
        return self.scene.move_up(element_id, self._parent_of(element_id))

    def move_down(self, element_id: str) -> bool:
        """Move element one row down in the panel (one step down in z-order)"""
        return self.scene.move_down(element_id, self._parent_of(element_id))

    def rename(self, element_id: str, name: str) -> bool:
        return self.scene.rename(element_id, name)

    def _parent_of(self, element_id: str) -> Optional[str]:
        parent = self.scene.get_parent(element_id)
        return parent.id if parent is not None else None

    artboard_name = staticmethod(artboard_name)
