"""
Banner Layout Editor - Format (BannerSize) Model

A format is a named fixed-size artboard. Formats are immutable and
identified by name; orientation is derived from the aspect ratio.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from constants import BANNER_SIZES


@dataclass(frozen=True)
class BannerSize:
    """Named output format

    Sizes are not validated here: degenerate formats are rejected by the
    scaling math that uses them (DegenerateFormat).
    """
    name: str
    width: int
    height: int

    @property
    def orientation(self) -> str:
        """'vertical', 'horizontal' or 'square'"""
        # Imported lazily: utils.geometry imports models.errors (circular)
        from utils.geometry import orientation_of
        return orientation_of(self.width, self.height)

    @property
    def aspect_ratio(self) -> float:
        if self.height == 0:
            return 0.0
        return self.width / self.height

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def size_key(self) -> str:
        """'WxH' key used by artboards (e.g. '300x250')"""
        return f"{self.width}x{self.height}"

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_dict(self) -> Dict:
        return {'name': self.name, 'width': self.width, 'height': self.height}

    @classmethod
    def from_dict(cls, data: Dict) -> 'BannerSize':
        """Create from wire dict

        Raises:
            KeyError: If name/width/height missing
            ValueError: If width/height aren't numbers
        """
        return cls(str(data['name']), int(data['width']), int(data['height']))

    def __str__(self) -> str:
        return f"{self.name} ({self.width}x{self.height})"


# ======================================================================
# Format catalog
# ======================================================================

def get_banner_sizes() -> List[BannerSize]:
    """All standard formats in catalog order"""
    return [BannerSize(name, width, height) for name, width, height in BANNER_SIZES]


def find_banner_size(name: str) -> Optional[BannerSize]:
    """Look up a standard format by name (case-insensitive)

    Returns:
        BannerSize or None if not in the catalog
    """
    wanted = name.strip().lower()
    for size in get_banner_sizes():
        if size.name.lower() == wanted:
            return size
    return None


def find_banner_size_by_key(size_key: str) -> Optional[BannerSize]:
    """Look up the first catalog format matching a 'WxH' key

    Returns:
        BannerSize or None if the key is malformed or unknown
    """
    dimensions = size_key.lower().split('x')
    if len(dimensions) != 2:
        return None
    try:
        width, height = int(dimensions[0]), int(dimensions[1])
    except ValueError:
        return None

    for size in get_banner_sizes():
        if size.width == width and size.height == height:
            return size
    return None


def parse_banner_size(spec: str) -> BannerSize:
    """Resolve a user-supplied format: catalog name or 'WxH'

    Unknown 'WxH' keys produce an ad-hoc format named after the key.

    Raises:
        ValueError: If spec is neither a catalog name nor 'WxH'
    """
    size = find_banner_size(spec)
    if size:
        return size

    size = find_banner_size_by_key(spec)
    if size:
        return size

    dimensions = spec.lower().split('x')
    if len(dimensions) == 2:
        try:
            width, height = int(dimensions[0]), int(dimensions[1])
            return BannerSize(spec, width, height)
        except ValueError:
            pass
    raise ValueError(f"Unknown format '{spec}' (expected a catalog name or WxH)")
