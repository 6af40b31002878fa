"""
Sample grid: fixed-size per-point buffers reused across updates.

Grid point ``(row, col)`` sits at world ``(col * unit, row * unit)``.
Buffers are allocated once and overwritten in place by :meth:`SampleGrid.activate`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from contours.sources import field_grid
from shared.constants import MIN_GRID_POINTS, Corners

if TYPE_CHECKING:
    from collections.abc import Sequence

    from contours.sources import Point, Source

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cell:
    """Snapshot of one grid point's state."""

    value: float
    active: bool
    kind: Corners


class SampleGrid:
    def __init__(self, width: int, height: int, unit: float) -> None:
        if width < MIN_GRID_POINTS or height < MIN_GRID_POINTS:
            msg = (
                f'Grid must be at least {MIN_GRID_POINTS}x{MIN_GRID_POINTS} points, '
                f'got {width}x{height}'
            )
            raise ValueError(msg)
        if unit <= 0:
            msg = f'Grid unit must be positive, got {unit}'
            raise ValueError(msg)
        self.width = int(width)
        self.height = int(height)
        self.unit = float(unit)

        shape = (self.height, self.width)
        self.values = np.zeros(shape, dtype=np.float64)
        self.active = np.zeros(shape, dtype=bool)
        self.kinds = np.zeros(shape, dtype=np.uint8)

        rows, cols = np.indices(shape, dtype=np.float64)
        # Interior sample coordinates; row 0 and col 0 are never evaluated
        self._xs = cols[1:, 1:] * self.unit
        self._ys = rows[1:, 1:] * self.unit

    @property
    def size(self) -> int:
        return self.width * self.height

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def _check(self, row: int, col: int) -> None:
        if not self.contains(row, col):
            msg = f'Grid index ({row}, {col}) out of range {self.height}x{self.width}'
            raise IndexError(msg)

    def index_of(self, row: int, col: int) -> int:
        self._check(row, col)
        return row * self.width + col

    def row_col(self, index: int) -> tuple[int, int]:
        if not 0 <= index < self.size:
            msg = f'Flat index {index} out of range [0, {self.size})'
            raise IndexError(msg)
        return divmod(index, self.width)

    def to_world(self, row: int, col: int) -> Point:
        return (col * self.unit, row * self.unit)

    def cell(self, row: int, col: int) -> Cell:
        self._check(row, col)
        return Cell(
            value=float(self.values[row, col]),
            active=bool(self.active[row, col]),
            kind=Corners(int(self.kinds[row, col])),
        )

    def value_at(self, row: int, col: int) -> float:
        """Field value at a grid point; points past the far edges read as 0."""
        if row >= self.height or col >= self.width:
            return 0.0
        self._check(row, col)
        return float(self.values[row, col])

    def is_active(self, row: int, col: int) -> bool:
        """Activation of a grid point; points past the far edges are inactive."""
        if row >= self.height or col >= self.width:
            return False
        self._check(row, col)
        return bool(self.active[row, col])

    def activate(self, sources: Sequence[Source], threshold: float) -> int:
        """
        Evaluate the field at every interior grid point and flag activation.

        Points on row 0 and col 0 keep value 0 and are never active, so
        blobs are not cut open by the near edges of the domain.

        Returns:
            Number of active grid points.

        """
        self.values[1:, 1:] = field_grid(self._xs, self._ys, sources)
        self.values[0, :] = 0.0
        self.values[:, 0] = 0.0
        np.greater(self.values, threshold, out=self.active)
        self.active[0, :] = False
        self.active[:, 0] = False
        active_count = int(np.count_nonzero(self.active))
        logger.debug(
            'Activated %d/%d grid points (%d sources, threshold=%s)',
            active_count,
            self.size,
            len(sources),
            threshold,
        )
        return active_count
