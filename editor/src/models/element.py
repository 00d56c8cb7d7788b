"""
Banner Layout Editor - Element Data Model

Provides the element types placed on artboards:
- ElementType enum (text, image, logo, button, container, layout, background)
- ElementStyle (shared geometry + presentation fields)
- Typed per-type content payloads (tagged union keyed by ElementType)
- EditorElement (identity, style, format overrides, containment)

This is part of the MODEL layer - pure data, no UI logic. Containment
fields (in_container / parent_id / child_elements) are only changed by
Scene operations, which keep them consistent.

Wire format (JSON-compatible, shared with every collaborator):
    {
        "id": "...", "type": "image", "content": "...",
        "style": {"x": 0, "y": 0, "width": 100, "height": 50, ...},
        "sizeId": "Instagram Post",
        "formatSpecificStyles": {"Story": {"x": 10}},
        "childElements": [...], "inContainer": false, "parentId": null,
        "_layerName": "Hero"
    }
"""

import logging
import uuid as uuid_module
from copy import deepcopy
from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Dict, List, Optional, Any, Union

from models.transform import Rect
from constants import (
    CONTAINER_TYPES, ASPECT_LOCKED_TYPES, ARTBOARD_BACKGROUND_TYPE, GLOBAL_SIZE_ID,
    DEFAULT_ELEMENT_WIDTH, DEFAULT_ELEMENT_HEIGHT
)

_logger = logging.getLogger('Element')


class ElementType(Enum):
    """Types of elements that can be placed on an artboard."""
    TEXT = "text"
    IMAGE = "image"
    LOGO = "logo"
    BUTTON = "button"
    CONTAINER = "container"
    LAYOUT = "layout"
    ARTBOARD_BACKGROUND = ARTBOARD_BACKGROUND_TYPE

    @property
    def is_container(self) -> bool:
        """Container types own an ordered list of child elements"""
        return self.value in CONTAINER_TYPES

    @property
    def is_aspect_locked(self) -> bool:
        """Aspect-locked types must not distort when rescaled"""
        return self.value in ASPECT_LOCKED_TYPES


# ======================================================================
# Style
# ======================================================================

# Python field name -> wire key (only where they differ)
_STYLE_WIRE_KEYS = {
    'font_size': 'fontSize',
    'font_family': 'fontFamily',
    'font_weight': 'fontWeight',
    'background_color': 'backgroundColor',
    'border_radius': 'borderRadius',
    'border_width': 'borderWidth',
    'border_color': 'borderColor',
    'object_fit': 'objectFit',
    'object_position': 'objectPosition',
    'original_width': 'originalWidth',
    'original_height': 'originalHeight',
}
_STYLE_FIELD_NAMES = {wire: name for name, wire in _STYLE_WIRE_KEYS.items()}


@dataclass
class ElementStyle:
    """Element geometry plus presentation fields.

    Geometry is in format-local pixels (top-left origin). Presentation
    fields are carried for renderers; the core only reads font_size and
    the original_width/original_height aspect lock. Unrecognized style
    keys from the wire are kept in `extra` so they survive a round-trip.
    """
    x: float = 0
    y: float = 0
    width: float = DEFAULT_ELEMENT_WIDTH
    height: float = DEFAULT_ELEMENT_HEIGHT
    opacity: Optional[float] = None
    color: Optional[str] = None
    background_color: Optional[str] = None
    font_size: Optional[float] = None
    font_family: Optional[str] = None
    font_weight: Optional[str] = None
    border_radius: Optional[float] = None
    border_width: Optional[float] = None
    border_color: Optional[str] = None
    object_fit: Optional[str] = None
    object_position: Optional[str] = None
    rotation: Optional[float] = None
    original_width: Optional[float] = None
    original_height: Optional[float] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @property
    def geometry(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.height)

    def with_geometry(self, rect: Rect) -> 'ElementStyle':
        """Copy of this style with x/y/width/height taken from rect"""
        return replace(self, x=rect.x, y=rect.y, width=rect.width,
                       height=rect.height, extra=dict(self.extra))

    def merged(self, overrides: Dict[str, Any]) -> 'ElementStyle':
        """Copy of this style with wire-keyed overrides layered on top"""
        data = self.to_dict()
        data.update(overrides)
        return ElementStyle.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to wire dict (None fields omitted)"""
        data = {}
        for f in fields(self):
            if f.name == 'extra':
                continue
            value = getattr(self, f.name)
            if value is None:
                continue
            data[_STYLE_WIRE_KEYS.get(f.name, f.name)] = value
        data.update(self.extra)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ElementStyle':
        """Create from wire dict

        Raises:
            KeyError: If any of x/y/width/height is missing
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        extra = {}
        for key, value in data.items():
            name = _STYLE_FIELD_NAMES.get(key, key)
            if name in known and name != 'extra':
                kwargs[name] = value
            else:
                extra[key] = value
        for required in ('x', 'y', 'width', 'height'):
            if required not in kwargs:
                raise KeyError(f"Style is missing '{required}'")
        return cls(extra=extra, **kwargs)


# ======================================================================
# Content payloads (one per element type)
# ======================================================================

@dataclass
class TextContent:
    """Text element payload"""
    text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'content': self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TextContent':
        return cls(text=data.get('content', ''))


@dataclass
class ImageContent:
    """Image/logo element payload (src may be a URL or inline data)"""
    src: str = ""
    alt: str = ""

    def to_dict(self) -> Dict[str, Any]:
        data = {'content': self.src}
        if self.alt:
            data['alt'] = self.alt
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ImageContent':
        return cls(src=data.get('src') or data.get('content', ''), alt=data.get('alt', ''))


@dataclass
class ButtonContent:
    """Button element payload"""
    label: str = ""
    link: Optional[str] = None
    open_in_new_tab: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data = {'content': self.label}
        if self.link:
            data['link'] = self.link
            data['openInNewTab'] = self.open_in_new_tab
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ButtonContent':
        return cls(
            label=data.get('content', ''),
            link=data.get('link'),
            open_in_new_tab=bool(data.get('openInNewTab', False)),
        )


@dataclass
class ContainerContent:
    """Container/layout payload (children are held by the element itself)"""
    columns: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {'content': '', 'columns': self.columns}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ContainerContent':
        return cls(columns=int(data.get('columns', 1) or 1))


@dataclass
class BackgroundContent:
    """Artboard background payload"""
    fill: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {'content': self.fill}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'BackgroundContent':
        return cls(fill=data.get('content', ''))


ElementContent = Union[TextContent, ImageContent, ButtonContent, ContainerContent, BackgroundContent]

CONTENT_TYPES = {
    ElementType.TEXT: TextContent,
    ElementType.IMAGE: ImageContent,
    ElementType.LOGO: ImageContent,
    ElementType.BUTTON: ButtonContent,
    ElementType.CONTAINER: ContainerContent,
    ElementType.LAYOUT: ContainerContent,
    ElementType.ARTBOARD_BACKGROUND: BackgroundContent,
}

DEFAULT_LAYER_NAMES = {
    ElementType.TEXT: "Text",
    ElementType.IMAGE: "Image",
    ElementType.LOGO: "Logo",
    ElementType.BUTTON: "Button",
    ElementType.CONTAINER: "Container",
    ElementType.LAYOUT: "Layout",
    ElementType.ARTBOARD_BACKGROUND: "Background",
}


def new_element_id() -> str:
    """Generate a fresh, globally unique element id"""
    return str(uuid_module.uuid4())


# ======================================================================
# Element
# ======================================================================

@dataclass
class EditorElement:
    """An element placed on an artboard.

    Attributes:
        id: Stable unique identifier
        type: ElementType
        style: Base style (geometry + presentation)
        content: Typed payload matching type (see CONTENT_TYPES)
        size_id: Format name, GLOBAL_SIZE_ID, or None (default artboard)
        format_specific_styles: format name -> partial wire style overrides
        child_elements: Ordered children, index 0 = bottom (containers only)
        in_container: True iff parent_id is set
        parent_id: Id of the container holding this element
        layer_name: User override of the layer panel name
    """
    id: str
    type: ElementType
    style: ElementStyle = field(default_factory=ElementStyle)
    content: Optional[ElementContent] = None
    size_id: Optional[str] = None
    format_specific_styles: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    child_elements: List['EditorElement'] = field(default_factory=list)
    in_container: bool = False
    parent_id: Optional[str] = None
    layer_name: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.type, str):
            self.type = ElementType(self.type)

        expected = CONTENT_TYPES[self.type]
        if self.content is None:
            self.content = expected()
        elif not isinstance(self.content, expected):
            raise TypeError(
                f"{self.type.value} element needs {expected.__name__}, "
                f"got {type(self.content).__name__}"
            )

        if self.child_elements and not self.type.is_container:
            raise ValueError(f"{self.type.value} element cannot have child elements")

    # ========================================
    # Properties
    # ========================================

    @property
    def is_container(self) -> bool:
        return self.type.is_container

    @property
    def is_aspect_locked(self) -> bool:
        return self.type.is_aspect_locked

    @property
    def is_background(self) -> bool:
        return self.type is ElementType.ARTBOARD_BACKGROUND

    @property
    def is_global(self) -> bool:
        """Present on every artboard"""
        return self.size_id == GLOBAL_SIZE_ID

    @property
    def geometry(self) -> Rect:
        return self.style.geometry

    @geometry.setter
    def geometry(self, rect: Rect):
        self.style = self.style.with_geometry(rect)

    @property
    def display_name(self) -> str:
        """Layer panel name: user override, else text content, else type name"""
        if self.layer_name:
            return self.layer_name
        if isinstance(self.content, TextContent) and self.content.text:
            return self.content.text[:30]
        return DEFAULT_LAYER_NAMES[self.type]

    def resolved_style(self, format_name: Optional[str] = None) -> ElementStyle:
        """Base style with the overrides for format_name merged on top

        This is what renderers consume for a given artboard.
        """
        overrides = self.format_specific_styles.get(format_name) if format_name else None
        if not overrides:
            return replace(self.style, extra=dict(self.style.extra))
        return self.style.merged(overrides)

    def iter_descendants(self):
        """Yield all nested children depth-first (not including self)"""
        for child in self.child_elements:
            yield child
            yield from child.iter_descendants()

    def copy(self) -> 'EditorElement':
        """Deep copy (same ids)"""
        return deepcopy(self)

    # ========================================
    # Serialization
    # ========================================

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON-compatible wire shape"""
        data = {
            'id': self.id,
            'type': self.type.value,
        }
        data.update(self.content.to_dict())
        data['style'] = self.style.to_dict()
        if self.size_id is not None:
            data['sizeId'] = self.size_id
        if self.format_specific_styles:
            data['formatSpecificStyles'] = deepcopy(self.format_specific_styles)
        if self.is_container:
            data['childElements'] = [child.to_dict() for child in self.child_elements]
        data['inContainer'] = self.in_container
        if self.parent_id is not None:
            data['parentId'] = self.parent_id
        if self.layer_name:
            data['_layerName'] = self.layer_name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'EditorElement':
        """Create element (and its children) from wire dict

        Raises:
            ValueError: If type is unknown or children given to a non-container
            KeyError: If id/type/style geometry is missing
        """
        element_type = ElementType(data['type'])
        children = [cls.from_dict(child) for child in data.get('childElements') or []]
        element = cls(
            id=str(data['id']),
            type=element_type,
            style=ElementStyle.from_dict(data['style']),
            content=CONTENT_TYPES[element_type].from_dict(data),
            size_id=data.get('sizeId'),
            format_specific_styles=deepcopy(data.get('formatSpecificStyles') or {}),
            child_elements=children,
            in_container=bool(data.get('inContainer', False)),
            parent_id=data.get('parentId'),
            layer_name=data.get('_layerName'),
        )
        return element

    def __repr__(self) -> str:
        return (f"EditorElement(id='{self.id}', type={self.type.value}, "
                f"geometry={self.geometry.to_tuple()}, children={len(self.child_elements)})")


def create_element(element_type: Union[ElementType, str], x: float = 0, y: float = 0,
                   width: float = DEFAULT_ELEMENT_WIDTH, height: float = DEFAULT_ELEMENT_HEIGHT,
                   size_id: Optional[str] = None, element_id: Optional[str] = None,
                   content: Optional[ElementContent] = None, **style_fields) -> EditorElement:
    """Create a standalone element with a fresh id

    Args:
        element_type: ElementType or its wire string
        x, y, width, height: Initial geometry
        size_id: Owning format name (or GLOBAL_SIZE_ID)
        element_id: Explicit id (a fresh one is generated if omitted)
        content: Typed payload (default payload for the type if omitted)
        **style_fields: Extra ElementStyle fields (font_size, opacity, ...)

    Returns:
        New EditorElement, not yet in any scene
    """
    element = EditorElement(
        id=element_id or new_element_id(),
        type=ElementType(element_type) if isinstance(element_type, str) else element_type,
        style=ElementStyle(x=x, y=y, width=width, height=height, **style_fields),
        content=content,
        size_id=size_id,
    )
    _logger.debug(f"Created element {element.id} ({element.type.value})")
    return element
