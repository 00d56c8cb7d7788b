"""
Banner Layout Editor - Data Models

This module contains the data model classes for multi-format layouts.
This is the MODEL in MVC architecture.

Public API: Scene, EditorElement, ElementType, BannerSize and the error types.
"""

from .transform import Vec2, Rect
from .errors import LayoutError, StructuralViolation, DegenerateFormat, CacheCorruption
from .banner_size import BannerSize
from .element import (
    EditorElement, ElementType, ElementStyle,
    TextContent, ImageContent, ButtonContent, ContainerContent, BackgroundContent,
    create_element
)
from .scene import Scene

__all__ = [
    'Vec2', 'Rect',
    'LayoutError', 'StructuralViolation', 'DegenerateFormat', 'CacheCorruption',
    'BannerSize',
    'EditorElement', 'ElementType', 'ElementStyle',
    'TextContent', 'ImageContent', 'ButtonContent', 'ContainerContent', 'BackgroundContent',
    'create_element',
    'Scene',
]
