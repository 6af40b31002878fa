"""
Assembly of unordered crossing segments into ordered polylines.

Cells sharing an edge compute the shared crossing point from the same
operands, so the default stitching keys points by exact coordinate
equality. ``quant_factor`` switches to keys rounded to
``1 / quant_factor`` world units for inputs that are only approximately
consistent.

Points are normally joined to two segments. A grid point whose value
equals the threshold exactly pins the crossings of all its edges onto
itself, so at a pinch between two blobs a point can carry four segments.
The walk consumes segments rather than points, so such a point is passed
through twice (one polyline) or closes two loops.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Hashable, Sequence

    from contours.cells import Segment
    from contours.sources import Point

logger = logging.getLogger(__name__)

_MIN_LOOP_POINTS = 3


class ContourTopologyError(RuntimeError):
    """Segment list does not describe a set of chains and loops."""


@dataclass
class Contour:
    points: list[Point]
    closed: bool

    def __len__(self) -> int:
        return len(self.points)


@dataclass
class SegmentGraph:
    """Contour points joined by segments; repeated segments are kept as parallel edges."""

    nodes: dict[Hashable, Point] = field(default_factory=dict)
    edges: list[tuple[Hashable, Hashable]] = field(default_factory=list)
    incidence: dict[Hashable, list[int]] = field(default_factory=dict)

    def degree(self, key: Hashable) -> int:
        return len(self.incidence.get(key, ()))

    def other_end(self, edge: int, key: Hashable) -> Hashable:
        a, b = self.edges[edge]
        return b if a == key else a

    def neighbours(self, key: Hashable) -> list[Hashable]:
        return [self.other_end(e, key) for e in self.incidence.get(key, ())]


def _point_key(quant_factor: float | None) -> Callable[[Point], Hashable]:
    if quant_factor is None:
        return lambda p: p
    if quant_factor <= 0:
        msg = f'quant_factor must be positive, got {quant_factor}'
        raise ValueError(msg)

    def key(p: Point) -> tuple[int, int]:
        return round(p[0] * quant_factor), round(p[1] * quant_factor)

    return key


def build_adjacency(
    segments: Sequence[Segment],
    *,
    quant_factor: float | None = None,
) -> SegmentGraph:
    """
    Collapse equal points into nodes and record every segment as an edge.

    Nodes and their incident edges keep first-seen order.

    Raises:
        ContourTopologyError: A point joins an odd number of segments other
            than one. Chain ends (one segment) and even junctions are valid.

    """
    key = _point_key(quant_factor)
    graph = SegmentGraph()
    for a, b in segments:
        ka = key(a)
        kb = key(b)
        if ka == kb:
            logger.debug('Dropping zero-length segment at %s', a)
            continue
        graph.nodes.setdefault(ka, a)
        graph.nodes.setdefault(kb, b)
        edge = len(graph.edges)
        graph.edges.append((ka, kb))
        graph.incidence.setdefault(ka, []).append(edge)
        graph.incidence.setdefault(kb, []).append(edge)

    for k, incident in graph.incidence.items():
        degree = len(incident)
        if degree > 1 and degree % 2:
            msg = (
                f'Contour point {graph.nodes[k]} joins {degree} segments; '
                f'segment list is malformed'
            )
            raise ContourTopologyError(msg)
    return graph


def trace_contours(
    segments: Sequence[Segment],
    *,
    quant_factor: float | None = None,
) -> list[Contour]:
    """
    Walk the segment graph into polylines, marking closed loops.

    Chain ends are used as start points first, so an open chain is
    emitted whole; loops start at their first-seen point. A walk stops
    when it gets back to its start or runs out of unused segments.
    """
    if not segments:
        return []
    graph = build_adjacency(segments, quant_factor=quant_factor)

    used = [False] * len(graph.edges)
    cursor = dict.fromkeys(graph.incidence, 0)

    def next_edge(k: Hashable) -> int | None:
        incident = graph.incidence[k]
        i = cursor[k]
        while i < len(incident) and used[incident[i]]:
            i += 1
        cursor[k] = i
        return incident[i] if i < len(incident) else None

    chain_ends = [k for k in graph.incidence if graph.degree(k) == 1]
    contours: list[Contour] = []
    for start in chain_ends + list(graph.incidence):
        edge = next_edge(start)
        while edge is not None:
            path = [start]
            current = start
            while edge is not None:
                used[edge] = True
                current = graph.other_end(edge, current)
                if current == start:
                    break
                path.append(current)
                edge = next_edge(current)
            closed = current == start and len(path) >= _MIN_LOOP_POINTS
            contours.append(Contour(points=[graph.nodes[k] for k in path], closed=closed))
            edge = next_edge(start)

    logger.debug(
        'Stitched %d segments into %d polylines (%d closed)',
        len(segments),
        len(contours),
        sum(1 for c in contours if c.closed),
    )
    return contours


def stitch(
    segments: Sequence[Segment],
    *,
    quant_factor: float | None = None,
) -> list[list[Point]]:
    """Ordered polylines from unordered segments."""
    return [c.points for c in trace_contours(segments, quant_factor=quant_factor)]
