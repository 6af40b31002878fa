from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from contours.cells import (
    classify_grid,
    contour_cells,
    crossing_points,
    pair_points,
)
from contours.grid import SampleGrid
from contours.stitching import Contour, stitch, trace_contours
from shared.constants import DEFAULT_THRESHOLD, Corners

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.cells import Segment
    from contours.sources import Point, Source

logger = logging.getLogger(__name__)


class ContourEngine:
    """
    Marching-squares contouring of a metaball field on a fixed grid.

    The grid is allocated once and overwritten on every update, so one
    engine must not be updated from several threads at once.

    Args:
        unit: Size of one grid cell in world units.
        width: Number of grid points along x.
        height: Number of grid points along y.
        threshold: Field level traced by the contours.
        quant_factor: Optional key quantization for stitching
            (``None`` = exact point equality).

    """

    def __init__(
        self,
        unit: float,
        width: int,
        height: int,
        threshold: float = DEFAULT_THRESHOLD,
        *,
        quant_factor: float | None = None,
    ) -> None:
        self.grid = SampleGrid(width, height, unit)
        self.threshold = float(threshold)
        self.quant_factor = quant_factor

    @property
    def unit(self) -> float:
        return self.grid.unit

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    def segments(self, sources: Sequence[Source]) -> list[Segment]:
        """Run activation and classification; return per-cell segments in row-major order."""
        sources = list(sources)
        self.grid.activate(sources, self.threshold)
        classify_grid(self.grid)

        segs: list[Segment] = []
        cells = contour_cells(self.grid)
        for row, col in cells:
            kind = Corners(int(self.grid.kinds[row, col]))
            points = crossing_points(self.grid, row, col, kind, self.threshold)
            segs.extend(pair_points(points))
        logger.debug('Processed %d contour cells -> %d segments', len(cells), len(segs))
        return segs

    def trace(self, sources: Sequence[Source]) -> list[Contour]:
        """Like :meth:`update`, but keeps the closed/open flag of every polyline."""
        return trace_contours(self.segments(sources), quant_factor=self.quant_factor)

    def update(self, sources: Sequence[Source]) -> list[list[Point]]:
        """
        Recompute the field for ``sources`` and return the contour polylines.

        Points are in world units relative to grid point ``(0, 0)``.
        """
        return stitch(self.segments(sources), quant_factor=self.quant_factor)
