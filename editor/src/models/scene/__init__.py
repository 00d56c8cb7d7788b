"""
Scene model package

Public API: import Scene from models.scene (or models).
"""

from .core import Scene

__all__ = ['Scene']
