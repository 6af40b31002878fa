from enum import Enum, IntEnum

# Application name (used for per-user config/log directories)
APP_NAME = 'Metaballs'

# --- Contouring engine

# Size of a grid cell in world units
DEFAULT_UNIT = 2.0

# Grid size in grid points (columns x rows)
DEFAULT_GRID_WIDTH = 200
DEFAULT_GRID_HEIGHT = 200

# Minimum grid size along each axis (one cell needs 2x2 points)
MIN_GRID_POINTS = 2

# Level-set threshold; the larger it is, the smaller the blobs
DEFAULT_THRESHOLD = 15.0

# Floor for squared distance when a grid point coincides with a source center
MIN_DISTANCE_SQ = 1e-12


class Corners(IntEnum):
    """
    Corner activation pattern of a grid cell.

    Code is (bl << 0) | (br << 1) | (tr << 2) | (tl << 3).
    """

    NONE = 0  # 0b0000
    BL = 1  # 0b0001
    BR = 2  # 0b0010
    BL_BR = 3  # 0b0011
    TR = 4  # 0b0100
    TR_BL = 5  # 0b0101, saddle
    TR_BR = 6  # 0b0110
    TR_BR_BL = 7  # 0b0111
    TL = 8  # 0b1000
    TL_BL = 9  # 0b1001
    TL_BR = 10  # 0b1010, saddle
    TL_BR_BL = 11  # 0b1011
    TL_TR = 12  # 0b1100
    TR_BL_TL = 13  # 0b1101
    TR_BR_TL = 14  # 0b1110
    ALL = 15  # 0b1111


class Edge(str, Enum):
    TOP = 'top'
    RIGHT = 'right'
    LEFT = 'left'
    BOTTOM = 'bottom'


# Order in which crossing points are computed inside a cell
EDGE_ORDER = (Edge.TOP, Edge.RIGHT, Edge.LEFT, Edge.BOTTOM)

# Cells fully inside or fully outside a blob carry no contour
NO_CONTOUR_CASES = frozenset({Corners.NONE, Corners.ALL})

# Ambiguous diagonal cases, resolved by fixed pairing (not by the center value)
SADDLE_CASES = frozenset({Corners.TR_BL, Corners.TL_BR})

# Corner pattern -> set of cell edges crossed by the contour
CROSSED_EDGES: dict[Corners, frozenset[Edge]] = {
    Corners.BL: frozenset({Edge.LEFT, Edge.BOTTOM}),
    Corners.BR: frozenset({Edge.RIGHT, Edge.BOTTOM}),
    Corners.BL_BR: frozenset({Edge.LEFT, Edge.RIGHT}),
    Corners.TR: frozenset({Edge.TOP, Edge.RIGHT}),
    Corners.TR_BL: frozenset({Edge.TOP, Edge.LEFT, Edge.BOTTOM, Edge.RIGHT}),
    Corners.TR_BR: frozenset({Edge.TOP, Edge.BOTTOM}),
    Corners.TR_BR_BL: frozenset({Edge.TOP, Edge.LEFT}),
    Corners.TL: frozenset({Edge.TOP, Edge.LEFT}),
    Corners.TL_BL: frozenset({Edge.TOP, Edge.BOTTOM}),
    Corners.TL_BR: frozenset({Edge.BOTTOM, Edge.RIGHT, Edge.TOP, Edge.LEFT}),
    Corners.TL_BR_BL: frozenset({Edge.TOP, Edge.RIGHT}),
    Corners.TL_TR: frozenset({Edge.RIGHT, Edge.LEFT}),
    Corners.TR_BL_TL: frozenset({Edge.RIGHT, Edge.BOTTOM}),
    Corners.TR_BR_TL: frozenset({Edge.BOTTOM, Edge.LEFT}),
}

# --- Scene (animated metaballs)

DEFAULT_SOURCE_COUNT = 30
DEFAULT_RADIUS_MIN = 100.0
DEFAULT_RADIUS_MAX = 300.0

# Sources are placed in [offset, offset + domain] on each axis (world units)
DEFAULT_PLACEMENT_OFFSET = -90.0

# Per-step drift of a source along each axis (world units)
DEFAULT_DRIFT_MAX = 8.0

# Drift is divided by a random factor from this range each step
DRIFT_DAMPING_RANGE = (1.0, 2.0)

# Radius shrink per animation step (world units)
DEFAULT_SHRINK_MIN = 6.0
DEFAULT_SHRINK_MAX = 6.0

# Safety cap on the number of animation steps
DEFAULT_MAX_STEPS = 1000

# --- Rendering


class SmoothingMode(str, Enum):
    NONE = 'none'
    AVERAGE = 'average'
    SPLINE = 'spline'


DEFAULT_PIXELS_PER_UNIT = 1.0

# Empty border around the simulation domain (world units)
DEFAULT_MARGIN_UNITS = 100.0

# Spacing of the background grid lines (world units, 0 disables)
DEFAULT_GRID_LINE_SPACING = 40.0

BACKGROUND_COLOR = (128, 128, 128)
GRID_LINE_COLOR = (211, 211, 211, 128)
CONTOUR_STROKE_COLOR = (255, 255, 255)
# Fill of the first, third, ... layer and of the second, fourth, ... layer
LAYER_FILL_FIRST = (0, 0, 0)
LAYER_FILL_SECOND = (255, 255, 255)
CONTOUR_LINE_WIDTH_PX = 1

# Minimum number of points for a drawable polygon
MIN_POLYGON_POINTS = 3

# Minimum number of points for a drawable line (draw.line needs >= 2)
MIN_POINTS_FOR_LINE = 2

# Smoothing
MIN_POINTS_FOR_SMOOTHING = 4
CONTOUR_SMOOTHING_FACTOR = 3  # point multiplier (2-7, more = smoother)
CONTOUR_SMOOTHING_STRENGTH = 0.5  # spline s-parameter per point
CONTOUR_SMOOTHING_ITERATIONS = 2  # moving-average passes

# Frame delay for animated GIF output (ms)
GIF_FRAME_DURATION_MS = 40

DEFAULT_OUTPUT_PATH = 'metaballs.png'

PROFILES_DIR = 'configs/profiles'
DEFAULT_PROFILE = 'default'
