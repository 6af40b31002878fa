"""
Cell classification and crossing-point interpolation (marching squares).

Cell ``(row, col)`` spans grid points::

    tl (row, col) ---- tr (row, col + 1)
         |                  |
    bl (row + 1, col) - br (row + 1, col + 1)

Corners past the far edges of the grid read as inactive with value 0.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from contours.sources import Point
from shared.constants import (
    CROSSED_EDGES,
    EDGE_ORDER,
    NO_CONTOUR_CASES,
    Corners,
    Edge,
)

if TYPE_CHECKING:
    from contours.grid import SampleGrid

Segment = tuple[Point, Point]

_SADDLE_POINTS = 4
_SIMPLE_POINTS = 2


def corner_code(*, tl: bool, tr: bool, br: bool, bl: bool) -> int:
    return int(bl) | (int(br) << 1) | (int(tr) << 2) | (int(tl) << 3)


def classify(grid: SampleGrid, row: int, col: int) -> Corners:
    """Corner pattern of the cell whose top-left corner is ``(row, col)``."""
    if not grid.contains(row, col):
        msg = f'Cell ({row}, {col}) out of range {grid.height}x{grid.width}'
        raise IndexError(msg)
    return Corners(
        corner_code(
            tl=grid.is_active(row, col),
            tr=grid.is_active(row, col + 1),
            br=grid.is_active(row + 1, col + 1),
            bl=grid.is_active(row + 1, col),
        )
    )


def classify_grid(grid: SampleGrid) -> np.ndarray:
    """Classify every cell at once, writing patterns into ``grid.kinds``."""
    h, w = grid.height, grid.width
    padded = np.zeros((h + 1, w + 1), dtype=np.uint8)
    padded[:h, :w] = grid.active
    tl = padded[:h, :w]
    tr = padded[:h, 1:]
    bl = padded[1:, :w]
    br = padded[1:, 1:]
    grid.kinds[...] = bl | (br << 1) | (tr << 2) | (tl << 3)
    return grid.kinds


def contour_cells(grid: SampleGrid) -> list[tuple[int, int]]:
    """Row-major ``(row, col)`` list of cells the contour passes through."""
    mask = (grid.kinds != Corners.NONE) & (grid.kinds != Corners.ALL)
    rows, cols = np.nonzero(mask)
    return list(zip(rows.tolist(), cols.tolist(), strict=True))


def interpolate(a: float, b: float, threshold: float) -> float:
    """
    Position of ``threshold`` between ``a`` and ``b`` as a fraction in [0, 1].

    Equal endpoint values give 0 (crossing pinned to ``a``).
    """
    if a == b:
        return 0.0
    t = (threshold - a) / (b - a)
    if t < 0.0:
        return 0.0
    if t > 1.0:
        return 1.0
    return t


def crossing_points(
    grid: SampleGrid,
    row: int,
    col: int,
    kind: Corners,
    threshold: float,
) -> list[Point]:
    """
    Crossing points of the contour with the edges of one cell.

    Points are returned in top, right, left, bottom order, in world units.
    """
    if kind in NO_CONTOUR_CASES:
        return []
    edges = CROSSED_EDGES[kind]
    unit = grid.unit
    tl = grid.value_at(row, col)
    tr = grid.value_at(row, col + 1)
    bl = grid.value_at(row + 1, col)
    br = grid.value_at(row + 1, col + 1)

    points: list[Point] = []
    for edge in EDGE_ORDER:
        if edge not in edges:
            continue
        if edge is Edge.TOP:
            alpha = interpolate(tl, tr, threshold)
            points.append(((col + alpha) * unit, row * unit))
        elif edge is Edge.RIGHT:
            alpha = interpolate(tr, br, threshold)
            points.append(((col + 1) * unit, (row + alpha) * unit))
        elif edge is Edge.LEFT:
            alpha = interpolate(tl, bl, threshold)
            points.append((col * unit, (row + alpha) * unit))
        else:
            alpha = interpolate(bl, br, threshold)
            points.append(((col + alpha) * unit, (row + 1) * unit))
    return points


def pair_points(points: list[Point]) -> list[Segment]:
    """
    Join a cell's crossing points into segments.

    Saddle cells (four points) are split as point[0]-point[2] and
    point[1]-point[3], i.e. top-left and right-bottom, regardless of the
    field value at the cell center.
    """
    if len(points) == _SIMPLE_POINTS:
        return [(points[0], points[1])]
    if len(points) == _SADDLE_POINTS:
        return [(points[0], points[2]), (points[1], points[3])]
    if not points:
        return []
    msg = f'Cell produced {len(points)} crossing points, expected 2 or 4'
    raise ValueError(msg)


def cell_segments(
    grid: SampleGrid,
    row: int,
    col: int,
    threshold: float,
    kind: Corners | None = None,
) -> list[Segment]:
    """Contour segments passing through one cell."""
    if kind is None:
        kind = classify(grid, row, col)
    return pair_points(crossing_points(grid, row, col, kind, threshold))
