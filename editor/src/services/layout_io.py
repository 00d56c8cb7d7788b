"""
Banner Layout Editor - Layout File Operations Service

Reads and writes {format, elements} layout files (JSON), the same shape the
adaptation engine consumes and produces. Separates file I/O from the model.
"""

import json
import logging
from pathlib import Path

from models.banner_size import BannerSize
from models.element import EditorElement
from models.errors import StructuralViolation

logger = logging.getLogger(__name__)


def layout_to_dict(banner_size, elements):
    """Build the layout file structure

    Returns:
        {'format': {...}, 'elements': [...]}
    """
    return {
        'format': banner_size.to_dict(),
        'elements': [element.to_dict() for element in elements],
    }


def layout_from_dict(data):
    """Parse a layout file structure

    Returns:
        (BannerSize, list of EditorElement)

    Raises:
        ValueError: If the structure is not a valid layout
    """
    if not isinstance(data, dict) or 'format' not in data or 'elements' not in data:
        raise ValueError("Not a layout file: expected 'format' and 'elements'")

    try:
        banner_size = BannerSize.from_dict(data['format'])
        elements = [EditorElement.from_dict(item) for item in data['elements']]
    except (KeyError, TypeError) as e:
        raise ValueError(f"Invalid layout: {e}") from e

    seen = set()
    for element in elements:
        for item in [element, *element.iter_descendants()]:
            if item.id in seen:
                raise StructuralViolation(f"Duplicate element id in layout: {item.id}")
            seen.add(item.id)
    return banner_size, elements


def save_layout(filename, banner_size, elements):
    """Save a layout to a JSON file

    Args:
        filename: Path to save file
        banner_size: Format the elements are laid out for
        elements: Top-level elements

    Raises:
        OSError: If file write fails
    """
    path = Path(filename)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(layout_to_dict(banner_size, elements), f, indent=2, ensure_ascii=False)

    logger.info(f"Layout saved to {path}")


def load_layout(filename):
    """Load a layout from a JSON file

    Returns:
        (BannerSize, list of EditorElement)

    Raises:
        OSError: If file read fails
        ValueError: If the file is not valid JSON or not a layout
        StructuralViolation: If element ids repeat
    """
    with open(filename, 'r', encoding='utf-8') as f:
        data = json.load(f)

    banner_size, elements = layout_from_dict(data)
    logger.info(f"Layout loaded from {filename}: {banner_size} with {len(elements)} element(s)")
    return banner_size, elements
