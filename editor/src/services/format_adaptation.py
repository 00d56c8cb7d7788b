"""
Banner Layout Editor - Format Adaptation Service

Retargets a layout built for one format onto other formats.

adapt() rescales whole element sets (fresh copies with new ids) and is the
engine behind "convert format". copy_element_to_format() writes a per-format
style override onto an existing element, using orientation-aware placement
rules when the layout changes between portrait and landscape.

Geometry for a batch is computed with numpy: one row per element, columns
x, y, width, height.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from models.element import EditorElement, ElementType, new_element_id
from models.transform import Rect
from models.errors import DegenerateFormat
from utils.geometry import ensure_valid_format, format_similarity, similarity_label
from constants import (
    MIN_FONT_SIZE,
    ORIENTATION_VERTICAL, ORIENTATION_HORIZONTAL
)

logger = logging.getLogger(__name__)


@dataclass
class AdaptationResult:
    """Outcome of adapting a layout to one target format

    Attributes:
        format: Target BannerSize
        elements: Adapted elements (empty when error is set)
        error: Exception that stopped this target, or None
    """
    format: object
    elements: List[EditorElement] = field(default_factory=list)
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ======================================================================
# Whole-layout adaptation
# ======================================================================

def _flatten(elements):
    """Elements and all descendants, depth-first"""
    flat = []
    for element in elements:
        flat.append(element)
        flat.extend(element.iter_descendants())
    return flat


def scale_geometry(geometry, width_ratio, height_ratio, aspect_locked):
    """Scale an (n, 4) array of x, y, width, height rows

    Rows flagged in aspect_locked get their height from the new width and
    the row's own width/height ratio. Locked rows with a zero width or
    height keep their original height.

    Args:
        geometry: np.ndarray of shape (n, 4)
        width_ratio: Factor for x and width
        height_ratio: Factor for y and height
        aspect_locked: Boolean array of shape (n,)

    Returns:
        New np.ndarray of shape (n, 4)
    """
    geometry = np.asarray(geometry, dtype=float).reshape(-1, 4)
    scaled = geometry * np.array([width_ratio, height_ratio, width_ratio, height_ratio])

    widths = geometry[:, 2]
    heights = geometry[:, 3]
    has_ratio = (widths != 0) & (heights != 0)
    ratios = np.divide(widths, heights, out=np.ones_like(widths), where=has_ratio)
    locked_heights = np.where(has_ratio, scaled[:, 2] / ratios, heights)
    scaled[:, 3] = np.where(np.asarray(aspect_locked, dtype=bool), locked_heights, scaled[:, 3])
    return scaled


def scale_font_size(font_size, width_ratio, height_ratio):
    """Scale a font size by the mean ratio, never below MIN_FONT_SIZE"""
    return max(MIN_FONT_SIZE, round(font_size * (width_ratio + height_ratio) / 2))


def _adapt_to_target(source_format, elements, target_format) -> List[EditorElement]:
    ensure_valid_format(target_format)
    width_ratio = target_format.width / source_format.width
    height_ratio = target_format.height / source_format.height

    copies = [element.copy() for element in elements]
    flat = _flatten(copies)
    if not flat:
        return copies

    geometry = np.array([e.geometry.to_tuple() for e in flat], dtype=float)
    locked = np.array([e.is_aspect_locked for e in flat], dtype=bool)
    scaled = scale_geometry(geometry, width_ratio, height_ratio, locked)

    new_ids: Dict[str, str] = {}
    for element, (x, y, width, height) in zip(flat, scaled.tolist()):
        old_id = element.id
        element.id = new_element_id()
        new_ids[old_id] = element.id
        style = element.style.with_geometry(Rect(x, y, width, height))
        if style.font_size is not None:
            style.font_size = scale_font_size(style.font_size, width_ratio, height_ratio)
        element.style = style
        element.size_id = target_format.name
        element.format_specific_styles = {}

    for element in flat:
        if element.parent_id is not None:
            element.parent_id = new_ids.get(element.parent_id, element.parent_id)
    return copies


def adapt(source_format, elements, target_formats) -> List[AdaptationResult]:
    """Rescale a layout onto each target format

    Every adapted element is a copy with a fresh id (children included,
    with parent links pointing at the new container ids) and size_id set
    to the target name. Image/logo heights follow their aspect ratio.
    Geometry is not rounded.

    A failing target does not stop the others: its result carries the
    error and no elements.

    Args:
        source_format: BannerSize the elements were laid out for
        elements: Top-level elements to adapt (left untouched)
        target_formats: BannerSize list

    Returns:
        One AdaptationResult per target, in input order
    """
    results = []
    try:
        ensure_valid_format(source_format)
    except DegenerateFormat as e:
        logger.warning(f"Cannot adapt from {source_format.name}: {e}")
        return [AdaptationResult(target, [], e) for target in target_formats]

    for target in target_formats:
        try:
            adapted = _adapt_to_target(source_format, elements, target)
        except DegenerateFormat as e:
            logger.warning(f"Skipping target {target.name}: {e}")
            results.append(AdaptationResult(target, [], e))
            continue
        logger.debug(f"Adapted {len(elements)} element(s) {source_format.name} -> {target.name}")
        results.append(AdaptationResult(target, adapted))
    return results


# ======================================================================
# Per-element format overrides
# ======================================================================

def _proportional(style, width_ratio, height_ratio):
    return {
        'x': round(style.x * width_ratio),
        'y': round(style.y * height_ratio),
        'width': round(style.width * width_ratio),
        'height': round(style.height * height_ratio),
    }


def _box(target, x, y, width, height):
    """Override from fractions of the target size"""
    return {
        'x': round(target.width * x),
        'y': round(target.height * y),
        'width': round(target.width * width),
        'height': round(target.height * height),
    }


def _reorient(element, source, target, to_landscape):
    """Placement rules for portrait <-> landscape conversions"""
    style = element.style
    vertical_position = style.y / source.height
    horizontal_position = style.x / source.width
    tw, th = target.width, target.height

    if element.is_aspect_locked:
        aspect = style.width / style.height if style.height else 1.0
        if to_landscape:
            height = th * 0.7
            width = height * aspect
            return {
                'x': round(vertical_position * (tw - width)),
                'y': round((th - height) / 2),
                'width': round(width),
                'height': round(height),
            }
        width = tw * 0.8
        height = width / aspect if aspect else width
        return {
            'x': round((tw - width) / 2),
            'y': round(horizontal_position * (th - height)),
            'width': round(width),
            'height': round(height),
        }

    if element.type is ElementType.TEXT:
        if to_landscape:
            # Top half goes left, bottom half goes right
            if style.y < source.height / 2:
                return _box(target, 0.1, 0.3, 0.4, 0.4)
            return _box(target, 0.55, 0.3, 0.4, 0.4)
        # Left half goes to the top, right half to the bottom
        if style.x < source.width / 2:
            return _box(target, 0.1, 0.1, 0.8, 0.2)
        return _box(target, 0.1, 0.7, 0.8, 0.2)

    if element.type is ElementType.BUTTON:
        if to_landscape:
            return _box(target, 0.6, 0.6, 0.3, 0.15)
        return _box(target, 0.25, 0.8, 0.5, 0.08)

    if to_landscape:
        return {
            'x': round(vertical_position * tw),
            'y': round(th * 0.3),
            'width': round(tw * 0.3),
            'height': round(th * 0.4),
        }
    return {
        'x': round(tw * 0.3),
        'y': round(horizontal_position * th),
        'width': round(tw * 0.4),
        'height': round(th * 0.3),
    }


def compute_format_style(element: EditorElement, source_format, target_format) -> Dict:
    """Style override placing element on target_format

    Same orientation (and conversions to/from square formats) scale
    proportionally. Portrait <-> landscape uses type-specific placement.
    Artboard backgrounds always cover the target. Values are rounded.

    Returns:
        Partial wire style dict (x, y, width, height and maybe fontSize)

    Raises:
        DegenerateFormat: If either format has a non-positive size
    """
    ensure_valid_format(source_format)
    ensure_valid_format(target_format)
    width_ratio = target_format.width / source_format.width
    height_ratio = target_format.height / source_format.height
    source_orientation = source_format.orientation
    target_orientation = target_format.orientation

    if source_orientation == target_orientation:
        override = _proportional(element.style, width_ratio, height_ratio)
    elif element.is_background:
        override = {'x': 0, 'y': 0, 'width': target_format.width, 'height': target_format.height}
    elif {source_orientation, target_orientation} == {ORIENTATION_VERTICAL, ORIENTATION_HORIZONTAL}:
        to_landscape = target_orientation == ORIENTATION_HORIZONTAL
        override = _reorient(element, source_format, target_format, to_landscape)
    else:
        override = _proportional(element.style, width_ratio, height_ratio)

    if element.type is ElementType.TEXT and element.style.font_size:
        override['fontSize'] = scale_font_size(element.style.font_size, width_ratio, height_ratio)
    return override


def copy_element_to_format(element: EditorElement, source_format, target_format) -> Dict:
    """Store a computed override for target_format on the element

    The element keeps its id; only format_specific_styles[target.name]
    changes.

    Returns:
        The override written
    """
    override = compute_format_style(element, source_format, target_format)
    element.format_specific_styles[target_format.name] = override
    logger.debug(f"Copied {element.id} {source_format.name} -> {target_format.name}: {override}")
    return override


def copy_element_to_all_formats(element: EditorElement, source_format, target_formats) -> List[str]:
    """copy_element_to_format for every target except the source

    Targets that fail (degenerate sizes) are skipped and logged.

    Returns:
        Names of the formats that received an override
    """
    written = []
    for target in target_formats:
        if target.name == source_format.name:
            continue
        try:
            copy_element_to_format(element, source_format, target)
        except DegenerateFormat as e:
            logger.warning(f"Skipping {target.name} for {element.id}: {e}")
            continue
        written.append(target.name)
    return written


def clear_format_specific_styles(element: EditorElement, format_name: Optional[str] = None) -> bool:
    """Remove one format's override (or all of them)

    Returns:
        True if anything was removed
    """
    if format_name is None:
        had_any = bool(element.format_specific_styles)
        element.format_specific_styles = {}
        return had_any
    return element.format_specific_styles.pop(format_name, None) is not None


def has_format_specific_styles(element: EditorElement, format_name: str) -> bool:
    return bool(element.format_specific_styles.get(format_name))


# ======================================================================
# Format ranking
# ======================================================================

def rank_formats(current_format, options, limit: Optional[int] = None) -> List[Dict]:
    """Sort candidate formats by similarity to current_format

    Degenerate candidates are skipped.

    Returns:
        [{'format', 'similarity', 'label'}] best match first
    """
    ranked = []
    for option in options:
        try:
            score = format_similarity(current_format, option)
        except DegenerateFormat as e:
            logger.warning(f"Skipping format in ranking: {e}")
            continue
        ranked.append({'format': option, 'similarity': score, 'label': similarity_label(score)})
    ranked.sort(key=lambda item: item['similarity'], reverse=True)
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
