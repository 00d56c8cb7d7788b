"""
Banner Layout Editor - Constants and Configuration

This module contains all constant values used throughout the layout core:
- Element placement defaults (standalone / in-container)
- Min/max values and constraints for manipulation
- Format orientation and similarity weights
- Format cache settings
- Transform handle constants
- Standard banner format catalog
"""

# ======================================================================
# ELEMENT TYPES
# ======================================================================

CONTAINER_TYPES = ('container', 'layout')
ASPECT_LOCKED_TYPES = ('image', 'logo')
ARTBOARD_BACKGROUND_TYPE = 'artboard-background'

# Sentinel size_id: element is present on every artboard
GLOBAL_SIZE_ID = 'global'

# Sentinel reparent target: move element to the top level of the scene
STANDALONE_TARGET = 'standalone'

# ======================================================================
# PLACEMENT DEFAULTS
# ======================================================================
# Coordinates are format-local pixels, top-left origin

# Children are normalized on entry (containers don't support free positioning)
DEFAULT_CONTAINER_CHILD_X = 0
DEFAULT_CONTAINER_CHILD_Y = 0

# Position given to an element leaving a container
DEFAULT_STANDALONE_X = 100
DEFAULT_STANDALONE_Y = 100

# Size of newly added elements
DEFAULT_ELEMENT_WIDTH = 200
DEFAULT_ELEMENT_HEIGHT = 100

# Artboard used for elements that don't carry a size_id
DEFAULT_ARTBOARD = '300x250'

# ======================================================================
# MANIPULATION CONSTRAINTS
# ======================================================================

# Minimum width/height while resizing (format-local units)
MIN_ELEMENT_SIZE = 20

# Grid snapping
GRID_CELL_SIZE = 10

# Minimum visible part of an element kept on the artboard after a drop
MIN_VISIBLE_SIZE = 20

# Resize handle directions
RESIZE_DIRECTIONS = ('n', 's', 'e', 'w', 'ne', 'nw', 'se', 'sw')

# ======================================================================
# FORMAT ORIENTATION
# ======================================================================

# width/height inside [SQUARE_RATIO_MIN, SQUARE_RATIO_MAX] counts as square
SQUARE_RATIO_MIN = 0.95
SQUARE_RATIO_MAX = 1.05

ORIENTATION_VERTICAL = 'vertical'
ORIENTATION_HORIZONTAL = 'horizontal'
ORIENTATION_SQUARE = 'square'

# ======================================================================
# FORMAT SIMILARITY
# ======================================================================

# Shape matters more than absolute size for layout transfer
SIMILARITY_RATIO_WEIGHT = 0.7
SIMILARITY_AREA_WEIGHT = 0.3

# Cached example selection (target similarity vs source similarity)
EXAMPLE_TARGET_WEIGHT = 0.7
EXAMPLE_SOURCE_WEIGHT = 0.3
EXAMPLE_MIN_SIMILARITY = 0.65
EXAMPLE_LIMIT = 5

# Labels for similarity scores (lower bound, label), checked top to bottom
SIMILARITY_LABELS = (
    (0.9, 'Very similar'),
    (0.7, 'Similar'),
    (0.5, 'Medium'),
    (0.3, 'Slightly similar'),
)
SIMILARITY_LABEL_DEFAULT = 'Very different'

# ======================================================================
# ADAPTATION
# ======================================================================

# Scaled font sizes never go below this
MIN_FONT_SIZE = 12

# ======================================================================
# FORMAT CACHE
# ======================================================================

CACHE_TTL_SECONDS = 30 * 24 * 60 * 60  # 30 days
CACHE_VERSION = 'v1'
CACHE_INDEX_NAME = 'index'

# Inline image data longer than this is truncated before caching
CACHE_INLINE_IMAGE_LIMIT = 64

# Transient UI fields dropped from cached elements
CACHE_TRANSIENT_FIELDS = ('isNew', 'isSelected', '_isAnimating')

# ======================================================================
# TRANSFORM HANDLE CONSTANTS
# ======================================================================

TRANSFORM_HANDLE_SIZE = 8  # Handle square half-size (pixels)
TRANSFORM_HIT_TOLERANCE = 4  # Extra pixels for handle hit detection

# ======================================================================
# CANVAS ZOOM
# ======================================================================

ZOOM_MIN = 0.1
ZOOM_MAX = 5.0
DEFAULT_ZOOM = 1.0

# ======================================================================
# STANDARD BANNER FORMATS
# ======================================================================
# (name, width, height)

BANNER_SIZES = (
    # Email
    ('Email Template', 600, 800),
    ('Email Newsletter', 600, 1000),

    # Social Media
    ('Facebook Post', 1200, 630),
    ('Facebook Cover', 820, 312),
    ('Instagram Post', 1080, 1080),
    ('Instagram Story', 1080, 1920),
    ('Twitter Post', 1024, 512),
    ('Twitter Header', 1500, 500),
    ('LinkedIn Banner', 1584, 396),
    ('LinkedIn Post', 1200, 627),
    ('Pinterest Pin', 1000, 1500),

    # Ads
    ('YouTube Thumbnail', 1280, 720),
    ('Display Ad - Medium Rectangle', 300, 250),
    ('Display Ad - Leaderboard', 728, 90),
    ('Display Ad - Large Rectangle', 336, 280),
    ('Display Ad - Skyscraper', 160, 600),
    ('Display Ad - Half Page', 300, 600),

    # Web
    ('Desktop Banner', 1920, 500),
    ('Website Hero', 1440, 600),
    ('Mobile App Banner', 750, 1334),
    ('Mobile Banner', 320, 480),

    # Squares
    ('Medium Square Banner', 300, 300),
    ('Large Square Banner', 600, 600),
    ('App Icon', 512, 512),

    # Print
    ('Business Card', 1050, 600),
    ('Postcard', 1200, 900),
)
