"""
Animated metaball scene.

Sources are scattered over the domain with random radii and a fixed
random drift each. Every step moves each source by its drift (damped by a
random factor) and shrinks its radius, until all radii reach zero.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

from contours.sources import Point, Source
from shared.constants import DRIFT_DAMPING_RANGE
from shared.progress import ConsoleProgress

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence

    from contours.engine import ContourEngine
    from contours.stitching import Contour
    from domain.models import SceneSettings

logger = logging.getLogger(__name__)


def make_rng(settings: SceneSettings) -> np.random.Generator:
    return np.random.default_rng(settings.seed)


def generate_sources(settings: SceneSettings, rng: np.random.Generator) -> list[Source]:
    """Random sources in the domain-sized area shifted by ``placement_offset``."""
    lo = settings.placement_offset
    sources = []
    for _ in range(settings.source_count):
        x = float(rng.uniform(lo, lo + settings.domain_width))
        y = float(rng.uniform(lo, lo + settings.domain_height))
        r = float(rng.uniform(settings.radius_min, settings.radius_max))
        sources.append(Source(center=(x, y), radius=r))
    return sources


def generate_drifts(settings: SceneSettings, rng: np.random.Generator) -> list[Point]:
    """One constant drift vector per source."""
    d = settings.drift_max
    return [
        (float(rng.uniform(-d, d)), float(rng.uniform(-d, d)))
        for _ in range(settings.source_count)
    ]


def advance(
    sources: Sequence[Source],
    drifts: Sequence[Point],
    rng: np.random.Generator,
    settings: SceneSettings,
) -> list[Source]:
    """Sources after one animation step."""
    lo, hi = DRIFT_DAMPING_RANGE
    moved = []
    for s, (vx, vy) in zip(sources, drifts, strict=True):
        x = s.x + vx / float(rng.uniform(lo, hi))
        y = s.y + vy / float(rng.uniform(lo, hi))
        shrink = float(rng.uniform(settings.shrink_min, settings.shrink_max))
        moved.append(Source(center=(x, y), radius=max(s.radius - shrink, 0.0)))
    return moved


def iter_frames(
    settings: SceneSettings,
    rng: np.random.Generator | None = None,
) -> Iterator[list[Source]]:
    """
    Yield the sources of every animation step.

    The initial placement is not yielded; the sequence ends once every
    radius is zero (that last, empty frame included) or after
    ``settings.max_steps`` steps.
    """
    if rng is None:
        rng = make_rng(settings)
    sources = generate_sources(settings, rng)
    drifts = generate_drifts(settings, rng)
    steps = 0
    while any(s.radius > 0 for s in sources) and steps < settings.max_steps:
        sources = advance(sources, drifts, rng, settings)
        steps += 1
        yield sources
    if steps >= settings.max_steps and any(s.radius > 0 for s in sources):
        logger.warning('Scene stopped after max_steps=%d with live sources', steps)


def frame_count(settings: SceneSettings) -> int:
    """Upper bound of the number of frames :func:`iter_frames` yields."""
    if settings.source_count == 0:
        return 0
    steps = int(np.ceil(settings.radius_max / settings.shrink_min))
    return min(steps, settings.max_steps)


def trace_layers(
    engine: ContourEngine,
    settings: SceneSettings,
    rng: np.random.Generator | None = None,
    *,
    show_progress: bool = False,
) -> list[list[Contour]]:
    """Contours of every animation frame, traced with one reused engine."""
    progress = (
        ConsoleProgress(total=frame_count(settings), label='Tracing frames')
        if show_progress
        else None
    )
    layers: list[list[Contour]] = []
    for sources in iter_frames(settings, rng):
        layers.append(engine.trace(sources))
        if progress is not None:
            progress.step_sync()
    if progress is not None:
        progress.close()
    logger.info(
        'Traced %d frames, %d polylines total',
        len(layers),
        sum(len(layer) for layer in layers),
    )
    return layers
