from __future__ import annotations

import numpy as np
from scipy.interpolate import splev, splprep

from shared.constants import (
    CONTOUR_SMOOTHING_FACTOR,
    CONTOUR_SMOOTHING_ITERATIONS,
    CONTOUR_SMOOTHING_STRENGTH,
    MIN_POINTS_FOR_SMOOTHING,
    SmoothingMode,
)

Point = tuple[float, float]


def smooth_polyline(
    points: list[Point],
    smoothing_factor: int | None = None,
    smoothing_strength: float | None = None,
    *,
    closed: bool = False,
) -> list[Point]:
    """
    Smooth a polyline with B-spline interpolation.

    Args:
        points: Source polyline points.
        smoothing_factor: Output point multiplier (None = from constants).
        smoothing_strength: Spline ``s`` per point (None = from constants).
        closed: Fit a periodic spline through a closed loop.

    Returns:
        Smoothed polyline with more points. Short polylines are returned as is.

    """
    if len(points) < MIN_POINTS_FOR_SMOOTHING:
        return points

    if smoothing_factor is None:
        smoothing_factor = CONTOUR_SMOOTHING_FACTOR
    if smoothing_strength is None:
        smoothing_strength = CONTOUR_SMOOTHING_STRENGTH

    x = [p[0] for p in points]
    y = [p[1] for p in points]
    if closed:
        # splprep(per=1) expects the first point repeated at the end
        x.append(x[0])
        y.append(y[0])

    # s=0 interpolates exactly, s>0 allows deviation from the points
    s_param = len(points) * smoothing_strength
    tck, _ = splprep([x, y], s=s_param, k=min(3, len(points) - 1), per=int(closed))

    u_new = np.linspace(0, 1, len(points) * smoothing_factor, endpoint=not closed)
    x_new, y_new = splev(u_new, tck)
    return [(float(px), float(py)) for px, py in zip(x_new, y_new, strict=True)]


def simple_smooth_polyline(
    points: list[Point],
    iterations: int | None = None,
    *,
    closed: bool = False,
) -> list[Point]:
    """Moving-average smoothing; open polylines keep their end points."""
    if len(points) < MIN_POINTS_FOR_SMOOTHING:
        return points

    if iterations is None:
        iterations = CONTOUR_SMOOTHING_ITERATIONS

    smoothed = points[:]
    n = len(smoothed)
    for _ in range(iterations):
        if closed:
            smoothed = [
                (
                    (smoothed[i - 1][0] + smoothed[i][0] + smoothed[(i + 1) % n][0]) / 3.0,
                    (smoothed[i - 1][1] + smoothed[i][1] + smoothed[(i + 1) % n][1]) / 3.0,
                )
                for i in range(n)
            ]
            continue
        new_points = [smoothed[0]]
        for i in range(1, n - 1):
            x = (smoothed[i - 1][0] + smoothed[i][0] + smoothed[i + 1][0]) / 3.0
            y = (smoothed[i - 1][1] + smoothed[i][1] + smoothed[i + 1][1]) / 3.0
            new_points.append((x, y))
        new_points.append(smoothed[-1])
        smoothed = new_points

    return smoothed


def smooth(points: list[Point], mode: SmoothingMode, *, closed: bool) -> list[Point]:
    if mode is SmoothingMode.SPLINE:
        return smooth_polyline(points, closed=closed)
    if mode is SmoothingMode.AVERAGE:
        return simple_smooth_polyline(points, closed=closed)
    return points
