"""Tests for contours.grid module."""

import numpy as np
import pytest

from contours.grid import Cell, SampleGrid
from contours.sources import Source
from shared.constants import Corners


class TestSampleGridInit:
    """Tests for SampleGrid construction."""

    def test_buffers_allocated(self):
        """Buffers should have (height, width) shape."""
        grid = SampleGrid(width=5, height=3, unit=2.0)
        assert grid.values.shape == (3, 5)
        assert grid.active.shape == (3, 5)
        assert grid.kinds.shape == (3, 5)
        assert grid.size == 15

    def test_too_small(self):
        """Grid smaller than 2x2 points should raise ValueError."""
        with pytest.raises(ValueError):
            SampleGrid(width=1, height=5, unit=1.0)
        with pytest.raises(ValueError):
            SampleGrid(width=5, height=1, unit=1.0)

    def test_non_positive_unit(self):
        """Unit must be positive."""
        with pytest.raises(ValueError):
            SampleGrid(width=3, height=3, unit=0.0)


class TestIndexing:
    """Tests for flat index helpers and bounds checks."""

    def test_index_round_trip(self):
        """index_of and row_col should be inverse."""
        grid = SampleGrid(width=4, height=3, unit=1.0)
        assert grid.index_of(2, 3) == 11
        assert grid.row_col(11) == (2, 3)
        assert grid.row_col(0) == (0, 0)

    def test_out_of_range(self):
        """Out-of-range access is an IndexError."""
        grid = SampleGrid(width=4, height=3, unit=1.0)
        with pytest.raises(IndexError):
            grid.index_of(3, 0)
        with pytest.raises(IndexError):
            grid.cell(0, -1)
        with pytest.raises(IndexError):
            grid.row_col(12)

    def test_far_edge_reads_as_inactive(self):
        """Points past the last row/col read as inactive with value 0."""
        grid = SampleGrid(width=3, height=3, unit=1.0)
        grid.values[:] = 5.0
        grid.active[:] = True
        assert grid.value_at(3, 1) == 0.0
        assert grid.value_at(1, 3) == 0.0
        assert grid.is_active(3, 3) is False

    def test_negative_index_still_rejected(self):
        """Only the far edges are padded; negative indices are errors."""
        grid = SampleGrid(width=3, height=3, unit=1.0)
        with pytest.raises(IndexError):
            grid.value_at(-1, 0)

    def test_to_world(self):
        """Grid point (row, col) sits at (col * unit, row * unit)."""
        grid = SampleGrid(width=3, height=3, unit=2.5)
        assert grid.to_world(1, 2) == (5.0, 2.5)


class TestActivate:
    """Tests for the activation pass."""

    def test_single_source(self):
        """Values follow r^2/d^2 and activation is value > threshold."""
        grid = SampleGrid(width=6, height=6, unit=1.0)
        count = grid.activate([Source(center=(3.0, 3.0), radius=1.5)], threshold=1.0)
        # (row 3, col 4) is at distance 1 -> 2.25
        assert grid.values[3, 4] == pytest.approx(2.25)
        assert grid.active[3, 4]
        # (row 3, col 5) is at distance 2 -> 0.5625
        assert not grid.active[3, 5]
        assert count == int(np.count_nonzero(grid.active))

    def test_boundary_never_active(self):
        """Row 0 and col 0 stay inactive with value 0."""
        grid = SampleGrid(width=8, height=8, unit=1.0)
        grid.activate([Source(center=(0.0, 0.0), radius=50.0)], threshold=1.0)
        assert not grid.active[0, :].any()
        assert not grid.active[:, 0].any()
        assert not grid.values[0, :].any()
        assert not grid.values[:, 0].any()
        assert grid.active[1:, 1:].all()

    def test_buffers_overwritten(self):
        """A second activation fully replaces the previous state."""
        grid = SampleGrid(width=6, height=6, unit=1.0)
        grid.activate([Source(center=(3.0, 3.0), radius=2.0)], threshold=1.0)
        assert grid.active.any()
        count = grid.activate([], threshold=1.0)
        assert count == 0
        assert not grid.active.any()
        assert not grid.values.any()

    def test_cell_snapshot(self):
        """cell() returns value, activation and stored pattern."""
        grid = SampleGrid(width=4, height=4, unit=1.0)
        grid.activate([Source(center=(2.0, 2.0), radius=2.0)], threshold=1.0)
        cell = grid.cell(2, 3)
        assert isinstance(cell, Cell)
        assert cell.value == pytest.approx(4.0)
        assert cell.active is True
        assert cell.kind is Corners.NONE
