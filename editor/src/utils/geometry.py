"""Geometry utilities for element scaling and format comparison.

Pure functions. Rects are format-local pixels (top-left origin); formats
are anything with name/width/height attributes.
"""

from models.errors import DegenerateFormat
from models.transform import Rect
from constants import (
	SQUARE_RATIO_MIN, SQUARE_RATIO_MAX,
	ORIENTATION_VERTICAL, ORIENTATION_HORIZONTAL, ORIENTATION_SQUARE,
	SIMILARITY_RATIO_WEIGHT, SIMILARITY_AREA_WEIGHT,
	SIMILARITY_LABELS, SIMILARITY_LABEL_DEFAULT,
	GRID_CELL_SIZE, MIN_VISIBLE_SIZE, MIN_ELEMENT_SIZE
)


def scale_rect(rect, width_ratio, height_ratio):
	"""Scale position and size independently on each axis.

	Args:
		rect: Rect to scale
		width_ratio: Factor applied to x and width
		height_ratio: Factor applied to y and height

	Returns:
		New Rect
	"""
	return Rect(
		rect.x * width_ratio,
		rect.y * height_ratio,
		rect.width * width_ratio,
		rect.height * height_ratio,
	)


def preserve_aspect_ratio(rect, new_width):
	"""Resize to new_width, deriving height from the original aspect ratio.

	Used for image/logo elements so they never distort. A rect with no
	height keeps height 0.

	Args:
		rect: Original Rect (its width/height define the ratio)
		new_width: Target width

	Returns:
		New Rect at the same position
	"""
	if rect.width == 0 or rect.height == 0:
		return Rect(rect.x, rect.y, new_width, rect.height)
	ratio = rect.width / rect.height
	return Rect(rect.x, rect.y, new_width, new_width / ratio)


def ensure_valid_format(fmt):
	"""Raise DegenerateFormat if fmt has a non-positive width or height."""
	if fmt.width <= 0 or fmt.height <= 0:
		raise DegenerateFormat(fmt.name, fmt.width, fmt.height)


def format_similarity(format_a, format_b):
	"""Similarity of two formats in [0, 1] (1 = identical shape and size).

	ratio_similarity = 1 / (1 + |aspect_a - aspect_b|)
	area_similarity = min(area) / max(area)
	result = 0.7 * ratio_similarity + 0.3 * area_similarity

	Symmetric in its arguments.

	Raises:
		DegenerateFormat: If either format has a non-positive size
	"""
	ensure_valid_format(format_a)
	ensure_valid_format(format_b)

	ratio_a = format_a.width / format_a.height
	ratio_b = format_b.width / format_b.height
	ratio_similarity = 1.0 / (1.0 + abs(ratio_a - ratio_b))

	area_a = format_a.width * format_a.height
	area_b = format_b.width * format_b.height
	area_similarity = min(area_a, area_b) / max(area_a, area_b)

	similarity = ratio_similarity * SIMILARITY_RATIO_WEIGHT + area_similarity * SIMILARITY_AREA_WEIGHT
	return min(1.0, max(0.0, similarity))


def similarity_label(score):
	"""Human readable label for a similarity score."""
	for lower_bound, label in SIMILARITY_LABELS:
		if score > lower_bound:
			return label
	return SIMILARITY_LABEL_DEFAULT


def orientation_of(width, height):
	"""Classify a size as 'square', 'horizontal' or 'vertical'.

	width/height in [0.95, 1.05] is square, above is horizontal, below
	(including zero width) is vertical. Zero height counts as horizontal.
	"""
	if height == 0:
		return ORIENTATION_HORIZONTAL
	ratio = width / height
	if SQUARE_RATIO_MIN <= ratio <= SQUARE_RATIO_MAX:
		return ORIENTATION_SQUARE
	if ratio > SQUARE_RATIO_MAX:
		return ORIENTATION_HORIZONTAL
	return ORIENTATION_VERTICAL


def snap_to_grid(value, cell_size=GRID_CELL_SIZE):
	"""Round value to the nearest multiple of cell_size."""
	return round(value / cell_size) * cell_size


def resize_rect(start, direction, dx, dy, min_size=MIN_ELEMENT_SIZE):
	"""Apply a resize handle drag to the gesture start geometry.

	Handles touching the top or left edge move position and size together
	so the opposite edge stays fixed. Size never drops below min_size; when
	clamped, the position delta is clamped with it.

	Args:
		start: Rect at gesture start
		direction: One of n, s, e, w, ne, nw, se, sw
		dx, dy: Pointer delta in format-local units
		min_size: Minimum width/height

	Returns:
		New Rect
	"""
	x, y, width, height = start.x, start.y, start.width, start.height

	if 'e' in direction:
		width = max(min_size, start.width + dx)
	elif 'w' in direction:
		width = max(min_size, start.width - dx)
		x = start.x + (start.width - width)

	if 's' in direction:
		height = max(min_size, start.height + dy)
	elif 'n' in direction:
		height = max(min_size, start.height - dy)
		y = start.y + (start.height - height)

	return Rect(x, y, width, height)


def snap_resized_rect(start, rect, direction, cell_size=GRID_CELL_SIZE, min_size=MIN_ELEMENT_SIZE):
	"""Snap only the edges a resize handle moves.

	The edge opposite the handle keeps its start position; on an axis the
	handle doesn't touch, position and size are left as they are.

	Args:
		start: Rect at gesture start
		rect: Resized rect (from resize_rect)
		direction: One of n, s, e, w, ne, nw, se, sw
		cell_size: Grid cell size
		min_size: Minimum width/height

	Returns:
		New Rect
	"""
	x, y, width, height = rect.x, rect.y, rect.width, rect.height

	if 'e' in direction:
		width = max(min_size, snap_to_grid(rect.right, cell_size) - start.x)
	elif 'w' in direction:
		width = max(min_size, start.right - snap_to_grid(rect.x, cell_size))
		x = start.right - width

	if 's' in direction:
		height = max(min_size, snap_to_grid(rect.bottom, cell_size) - start.y)
	elif 'n' in direction:
		height = max(min_size, start.bottom - snap_to_grid(rect.y, cell_size))
		y = start.bottom - height

	return Rect(x, y, width, height)


def is_out_of_bounds(rect, width, height, min_visible=MIN_VISIBLE_SIZE):
	"""Check if less than min_visible of the rect remains on a width x height area."""
	return (
		rect.right < min_visible or
		rect.bottom < min_visible or
		rect.x > width - min_visible or
		rect.y > height - min_visible
	)


def constrain_to_bounds(rect, width, height, min_visible=MIN_VISIBLE_SIZE):
	"""Move rect so at least part of it stays on the artboard.

	Position is clamped to [0, size - min(rect size, min_visible)] on each
	axis. Size is never changed.

	Returns:
		Same rect if no change is needed, otherwise a moved copy
	"""
	max_x = width - min(rect.width, min_visible)
	max_y = height - min(rect.height, min_visible)
	x = max(0, min(rect.x, max_x))
	y = max(0, min(rect.y, max_y))
	if x == rect.x and y == rect.y:
		return rect
	return rect.moved_to(x, y)
