from pydantic import BaseModel, field_validator, model_validator

from shared.constants import (
    DEFAULT_DRIFT_MAX,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_LINE_SPACING,
    DEFAULT_GRID_WIDTH,
    DEFAULT_MARGIN_UNITS,
    DEFAULT_MAX_STEPS,
    DEFAULT_OUTPUT_PATH,
    DEFAULT_PIXELS_PER_UNIT,
    DEFAULT_PLACEMENT_OFFSET,
    DEFAULT_RADIUS_MAX,
    DEFAULT_RADIUS_MIN,
    DEFAULT_SHRINK_MAX,
    DEFAULT_SHRINK_MIN,
    DEFAULT_SOURCE_COUNT,
    DEFAULT_THRESHOLD,
    DEFAULT_UNIT,
    MIN_GRID_POINTS,
    SmoothingMode,
)


class SceneSettings(BaseModel):
    """Settings of a metaball scene: grid, sources, and rendering."""

    model_config = {
        'extra': 'ignore',  # ignore unknown keys from older profiles
    }

    # Grid size in grid points
    grid_width: int = DEFAULT_GRID_WIDTH
    grid_height: int = DEFAULT_GRID_HEIGHT
    # Cell size (world units)
    unit: float = DEFAULT_UNIT
    # Level traced by the contours
    threshold: float = DEFAULT_THRESHOLD

    # Number of sources and their initial radius range (world units)
    source_count: int = DEFAULT_SOURCE_COUNT
    radius_min: float = DEFAULT_RADIUS_MIN
    radius_max: float = DEFAULT_RADIUS_MAX
    # Origin of the placement area relative to the grid (world units)
    placement_offset: float = DEFAULT_PLACEMENT_OFFSET
    # Maximum per-step drift along each axis (world units)
    drift_max: float = DEFAULT_DRIFT_MAX
    # Radius shrink per step (world units)
    shrink_min: float = DEFAULT_SHRINK_MIN
    shrink_max: float = DEFAULT_SHRINK_MAX
    # Cap on animation length
    max_steps: int = DEFAULT_MAX_STEPS
    # RNG seed (None = fresh scene every run)
    seed: int | None = None

    # Output scale (pixels per world unit)
    pixels_per_unit: float = DEFAULT_PIXELS_PER_UNIT
    # Border around the domain (world units)
    margin_units: float = DEFAULT_MARGIN_UNITS
    # Background grid spacing (world units, 0 = no grid)
    grid_line_spacing: float = DEFAULT_GRID_LINE_SPACING
    smoothing: SmoothingMode = SmoothingMode.NONE
    output_path: str = DEFAULT_OUTPUT_PATH

    @field_validator('grid_width', 'grid_height')
    @classmethod
    def validate_grid_size(cls, v: int | str) -> int:
        iv = int(v)
        if iv < MIN_GRID_POINTS:
            msg = f'grid size must be at least {MIN_GRID_POINTS}'
            raise ValueError(msg)
        return iv

    @field_validator('unit', 'threshold', 'pixels_per_unit')
    @classmethod
    def validate_positive(cls, v: float | str) -> float:
        fv = float(v)
        if fv <= 0:
            msg = 'value must be positive'
            raise ValueError(msg)
        return fv

    @field_validator(
        'radius_min', 'radius_max', 'drift_max', 'margin_units', 'grid_line_spacing'
    )
    @classmethod
    def validate_non_negative(cls, v: float | str) -> float:
        fv = float(v)
        if fv < 0:
            msg = 'value must not be negative'
            raise ValueError(msg)
        return fv

    @field_validator('shrink_min', 'shrink_max')
    @classmethod
    def validate_shrink(cls, v: float | str) -> float:
        fv = float(v)
        if fv <= 0:
            msg = 'shrink step must be positive, otherwise the animation never ends'
            raise ValueError(msg)
        return fv

    @field_validator('source_count', 'max_steps')
    @classmethod
    def validate_count(cls, v: int | str) -> int:
        iv = int(v)
        return max(iv, 0)

    @model_validator(mode='after')
    def validate_ranges(self) -> 'SceneSettings':
        if self.radius_min > self.radius_max:
            msg = 'radius_min must not exceed radius_max'
            raise ValueError(msg)
        if self.shrink_min > self.shrink_max:
            msg = 'shrink_min must not exceed shrink_max'
            raise ValueError(msg)
        return self

    @property
    def domain_width(self) -> float:
        """Width of the simulation domain (world units)."""
        return self.grid_width * self.unit

    @property
    def domain_height(self) -> float:
        """Height of the simulation domain (world units)."""
        return self.grid_height * self.unit

    @property
    def image_size(self) -> tuple[int, int]:
        """Output image size in pixels, domain plus margins."""
        w = (self.domain_width + 2 * self.margin_units) * self.pixels_per_unit
        h = (self.domain_height + 2 * self.margin_units) * self.pixels_per_unit
        return max(1, round(w)), max(1, round(h))
