"""
Banner Layout Editor - Transform Widget Components

This package contains the transform widget architecture:
- handles.py: ABC-based handle classes (CornerHandle, EdgeHandle, CenterHandle)
- DragContext: immutable gesture snapshot (models/drag_context.py)
"""

from .handles import (
    Handle, CornerHandle, EdgeHandle, CenterHandle,
    create_handles, get_handle_at_pos, resize_rect
)
from models.drag_context import DragContext

__all__ = [
    'Handle', 'CornerHandle', 'EdgeHandle', 'CenterHandle',
    'create_handles', 'get_handle_at_pos', 'resize_rect',
    'DragContext',
]
