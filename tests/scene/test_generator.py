"""Tests for scene.generator module."""

import logging

import numpy as np
import pytest

from contours.engine import ContourEngine
from contours.sources import Source
from domain.models import SceneSettings
from scene.generator import (
    advance,
    frame_count,
    generate_drifts,
    generate_sources,
    iter_frames,
    make_rng,
    trace_layers,
)


def create_settings(**overrides):
    defaults = {
        'grid_width': 30,
        'grid_height': 20,
        'unit': 1.0,
        'threshold': 1.0,
        'source_count': 4,
        'radius_min': 2.0,
        'radius_max': 5.0,
        'drift_max': 1.0,
        'shrink_min': 1.0,
        'shrink_max': 1.0,
        'seed': 1234,
        'placement_offset': 0.0,
        'margin_units': 0.0,
    }
    defaults.update(overrides)
    return SceneSettings(**defaults)


class TestGenerateSources:
    """Tests for initial placement."""

    def test_count_and_ranges(self):
        settings = create_settings(source_count=50)
        sources = generate_sources(settings, make_rng(settings))
        assert len(sources) == 50
        for s in sources:
            assert 0.0 <= s.x <= settings.domain_width
            assert 0.0 <= s.y <= settings.domain_height
            assert settings.radius_min <= s.radius <= settings.radius_max

    def test_placement_offset(self):
        """Sources are placed in the domain-sized area shifted by the offset."""
        settings = create_settings(source_count=50, placement_offset=-90.0)
        sources = generate_sources(settings, make_rng(settings))
        for s in sources:
            assert -90.0 <= s.x <= -90.0 + settings.domain_width
            assert -90.0 <= s.y <= -90.0 + settings.domain_height
        assert min(s.x for s in sources) < 0.0

    def test_seed_reproducible(self):
        settings = create_settings()
        a = generate_sources(settings, make_rng(settings))
        b = generate_sources(settings, make_rng(settings))
        assert a == b

    def test_drifts_bounded(self):
        settings = create_settings(source_count=20, drift_max=3.0)
        drifts = generate_drifts(settings, make_rng(settings))
        assert len(drifts) == 20
        for vx, vy in drifts:
            assert abs(vx) <= 3.0
            assert abs(vy) <= 3.0


class TestAdvance:
    """Tests for one animation step."""

    def test_shrinks_and_moves(self):
        settings = create_settings(shrink_min=2.0, shrink_max=2.0)
        rng = np.random.default_rng(0)
        sources = [Source(center=(10.0, 10.0), radius=5.0)]
        moved = advance(sources, [(4.0, -4.0)], rng, settings)
        assert moved[0].radius == 3.0
        # drift is damped by a factor in [1, 2)
        assert 12.0 <= moved[0].x <= 14.0
        assert 6.0 <= moved[0].y <= 8.0

    def test_radius_floor_zero(self):
        settings = create_settings(shrink_min=2.0, shrink_max=2.0)
        moved = advance(
            [Source(center=(0.0, 0.0), radius=1.0)],
            [(0.0, 0.0)],
            np.random.default_rng(0),
            settings,
        )
        assert moved[0].radius == 0.0

    def test_mismatched_lengths(self):
        settings = create_settings()
        with pytest.raises(ValueError):
            advance([Source(center=(0.0, 0.0), radius=1.0)], [], make_rng(settings), settings)


class TestIterFrames:
    """Tests for the frame sequence."""

    def test_ends_when_radii_reach_zero(self):
        """Radius 12 shrinking by 6 gives exactly two frames."""
        settings = create_settings(
            radius_min=12.0, radius_max=12.0, shrink_min=6.0, shrink_max=6.0
        )
        frames = list(iter_frames(settings))
        assert len(frames) == 2
        assert all(s.radius == 6.0 for s in frames[0])
        assert all(s.radius == 0.0 for s in frames[-1])
        assert frame_count(settings) == 2

    def test_no_sources(self):
        settings = create_settings(source_count=0)
        assert list(iter_frames(settings)) == []
        assert frame_count(settings) == 0

    def test_max_steps_cap(self, caplog):
        settings = create_settings(radius_min=100.0, radius_max=100.0, max_steps=3)
        with caplog.at_level(logging.WARNING, logger='scene.generator'):
            frames = list(iter_frames(settings))
        assert len(frames) == 3
        assert frame_count(settings) == 3
        assert 'max_steps' in caplog.text

    def test_seeded_sequence_reproducible(self):
        settings = create_settings()
        assert list(iter_frames(settings)) == list(iter_frames(settings))

    def test_frame_count_upper_bound(self):
        settings = create_settings(radius_min=1.0, radius_max=5.0)
        assert len(list(iter_frames(settings))) <= frame_count(settings)


class TestTraceLayers:
    """Tests for tracing all frames with one engine."""

    def _engine(self, settings):
        return ContourEngine(
            unit=settings.unit,
            width=settings.grid_width,
            height=settings.grid_height,
            threshold=settings.threshold,
        )

    def test_one_layer_per_frame(self):
        settings = create_settings()
        layers = trace_layers(self._engine(settings), settings)
        assert len(layers) == len(list(iter_frames(settings)))
        # last frame has only zero radii
        assert layers[-1] == []

    def test_progress_output(self, capsys):
        settings = create_settings(source_count=1)
        trace_layers(self._engine(settings), settings, show_progress=True)
        assert 'Tracing frames' in capsys.readouterr().out

    def test_explicit_rng(self):
        settings = create_settings(seed=None)
        engine = self._engine(settings)
        a = trace_layers(engine, settings, np.random.default_rng(5))
        b = trace_layers(engine, settings, np.random.default_rng(5))
        assert [[c.points for c in layer] for layer in a] == [
            [c.points for c in layer] for layer in b
        ]
