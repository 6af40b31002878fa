"""
Field model: weighted circular sources ("metaballs").

Each source contributes ``r^2 / d^2`` at a sample point; contributions are
summed over all sources.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from shared.constants import MIN_DISTANCE_SQ

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

Point = tuple[float, float]


@dataclass(frozen=True)
class Source:
    center: Point
    radius: float

    def __post_init__(self) -> None:
        if self.radius < 0:
            msg = f'Source radius must be non-negative, got {self.radius}'
            raise ValueError(msg)

    @property
    def x(self) -> float:
        return self.center[0]

    @property
    def y(self) -> float:
        return self.center[1]


def contribution(point: Point, source: Source) -> float:
    """Influence of one source at ``point``; coincident centers use a floored distance."""
    if source.radius == 0:
        return 0.0
    dx = point[0] - source.x
    dy = point[1] - source.y
    dist_sq = max(dx * dx + dy * dy, MIN_DISTANCE_SQ)
    return (source.radius * source.radius) / dist_sq


def field_value(point: Point, sources: Iterable[Source]) -> float:
    """Additive field value at ``point``."""
    return sum((contribution(point, s) for s in sources), 0.0)


def field_grid(
    xs: np.ndarray,
    ys: np.ndarray,
    sources: Sequence[Source],
) -> np.ndarray:
    """
    Evaluate the field on a whole grid at once.

    Args:
        xs: World x coordinate of every sample (any shape).
        ys: World y coordinate of every sample (same shape as ``xs``).
        sources: Field sources.

    Returns:
        Array of field values with the shape of ``xs``.

    """
    values = np.zeros(np.broadcast(xs, ys).shape, dtype=np.float64)
    for s in sources:
        if s.radius == 0:
            continue
        dx = xs - s.x
        dy = ys - s.y
        dist_sq = np.maximum(dx * dx + dy * dy, MIN_DISTANCE_SQ)
        values += (s.radius * s.radius) / dist_sq
    return values
