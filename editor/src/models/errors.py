"""Error taxonomy for the layout core.

Missing element/container references are NOT errors: operations on unknown
ids are no-ops that return False, since UI races (an element deleted
mid-drag) are expected.
"""


class LayoutError(Exception):
    """Base class for all layout core errors"""


class StructuralViolation(LayoutError):
    """An operation would break a scene invariant.

    Raised before anything is mutated, so the scene is left unchanged.
    """


class DegenerateFormat(LayoutError, ValueError):
    """A format with zero or negative width/height was used in scaling math"""

    def __init__(self, format_name: str, width: float, height: float):
        self.format_name = format_name
        self.width = width
        self.height = height
        super().__init__(
            f"Format '{format_name}' has degenerate size {width}x{height}"
        )


class CacheCorruption(LayoutError):
    """A cached entry could not be deserialized.

    Internal to the format cache: always converted to a cache miss.
    """
