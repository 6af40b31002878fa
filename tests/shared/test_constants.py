"""Tests for constants module."""

from shared.constants import (
    CROSSED_EDGES,
    EDGE_ORDER,
    NO_CONTOUR_CASES,
    SADDLE_CASES,
    Corners,
    Edge,
    SmoothingMode,
)


class TestCorners:
    """Corner pattern codes."""

    def test_sixteen_patterns(self):
        assert [c.value for c in Corners] == list(range(16))

    def test_bit_layout(self):
        assert Corners.BL == 0b0001
        assert Corners.BR == 0b0010
        assert Corners.TR == 0b0100
        assert Corners.TL == 0b1000
        assert Corners.TL_BR == Corners.TL | Corners.BR
        assert Corners.TR_BL == Corners.TR | Corners.BL


class TestCrossedEdges:
    """Edge table."""

    def test_covers_contour_cases(self):
        contour_cases = set(Corners) - NO_CONTOUR_CASES
        assert set(CROSSED_EDGES) == contour_cases

    def test_edge_counts(self):
        for kind, edges in CROSSED_EDGES.items():
            expected = 4 if kind in SADDLE_CASES else 2
            assert len(edges) == expected

    def test_edge_order(self):
        assert EDGE_ORDER == (Edge.TOP, Edge.RIGHT, Edge.LEFT, Edge.BOTTOM)

    def test_saddles(self):
        assert SADDLE_CASES == {Corners.TR_BL, Corners.TL_BR}


def test_smoothing_modes():
    assert SmoothingMode('spline') is SmoothingMode.SPLINE
    assert {m.value for m in SmoothingMode} == {'none', 'average', 'spline'}
