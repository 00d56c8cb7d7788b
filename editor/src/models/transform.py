"""Geometry data structures for coordinate and state representation."""
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Screen/widget pixels (pointer positions)
    - Format-local pixels (element positions)
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vec2') -> 'Vec2':
        return Vec2(self.x - other.x, self.y - other.y)

    def __truediv__(self, factor: float) -> 'Vec2':
        return Vec2(self.x / factor, self.y / factor)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned element geometry.

    Format-local pixel units with a top-left origin. Immutable so a
    gesture's start snapshot can never be modified by later moves.
    """
    x: float
    y: float
    width: float
    height: float

    @property
    def pos(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def aspect_ratio(self) -> float:
        """width / height (0.0 for a zero-height rect)"""
        if self.height == 0:
            return 0.0
        return self.width / self.height

    def contains(self, point: Vec2) -> bool:
        """Check if point lies inside the rect (edges inclusive)"""
        return self.x <= point.x <= self.right and self.y <= point.y <= self.bottom

    def moved_to(self, x: float, y: float) -> 'Rect':
        return Rect(x, y, self.width, self.height)

    def translated(self, dx: float, dy: float) -> 'Rect':
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def to_tuple(self):
        return (self.x, self.y, self.width, self.height)

    def __iter__(self):
        """Allow tuple unpacking: x, y, w, h = rect"""
        return iter(self.to_tuple())
