"""
Unit Tests for the Rendering Helpers
====================================
Screen mapping and figure construction (Agg backend, nothing shown).
Run: python -m pytest tests/ -v
"""

import sys
import os
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from artillery.integrator import simulate_shot
from artillery.projectile import FlightState
from artillery.range_table import build_range_table
from artillery.terrain import FlatGround
from artillery.vectors import Position
from artillery.visualization import (
    ViewMapping, plot_trajectory, plot_cd_vs_mach, plot_atmosphere,
    plot_range_table, plot_engagement, ensure_output_dir,
    create_trajectory_animation, _tick_indices,
)

import matplotlib.pyplot as plt


class TestViewMapping:

    def test_to_pixels(self):
        assert ViewMapping(40.0).to_pixels(Position(4000.0, 800.0)) == (100.0, 20.0)

    def test_from_pixels(self):
        assert ViewMapping(40.0).from_pixels(100.0, 20.0) == Position(4000.0, 800.0)

    def test_path_to_pixels(self):
        path = [FlightState(Position(0.0, 0.0)), FlightState(Position(80.0, 40.0))]
        np.testing.assert_allclose(ViewMapping(40.0).path_to_pixels(path),
                                   [[0.0, 0.0], [2.0, 1.0]])

    def test_empty_path(self):
        assert ViewMapping().path_to_pixels([]).shape == (0, 2)

    def test_rejects_bad_scale(self):
        with pytest.raises(ValueError):
            ViewMapping(0.0)


class TestPlots:

    @pytest.fixture(scope='class')
    def shot(self):
        return simulate_shot(45.0, 300.0, dt=0.5)

    def test_trajectory(self, shot, tmp_path):
        out = tmp_path / 'trajectory.png'
        fig = plot_trajectory(shot, save_path=str(out))
        assert out.exists()
        plt.close(fig)

    def test_cd_and_atmosphere(self):
        for fig in (plot_cd_vs_mach(), plot_atmosphere(top=20000.0)):
            assert len(fig.axes) >= 1
            plt.close(fig)

    def test_range_table(self):
        entries = build_range_table([30.0, 45.0], 300.0, dt=0.5, verbose=False)
        fig = plot_range_table(entries)
        assert len(fig.axes) == 3
        plt.close(fig)

    def test_engagement(self, shot):
        fig = plot_engagement(FlatGround(6000.0), shot.projectile.flight_path,
                              Position(), 10000.0)
        assert len(fig.axes) == 1
        plt.close(fig)

    def test_ensure_output_dir(self, tmp_path):
        path = str(tmp_path / 'outputs')
        assert ensure_output_dir(path) == path
        assert os.path.isdir(path)


class TestAnimation:

    def test_every_tick_when_few(self):
        assert _tick_indices(5, 100) == [0, 1, 2, 3, 4]

    def test_thinned_ticks_keep_launch_and_impact(self):
        ticks = _tick_indices(1000, 50)
        assert len(ticks) == 50
        assert ticks[0] == 0 and ticks[-1] == 999
        assert ticks == sorted(ticks)

    def test_single_frame_is_impact(self):
        assert _tick_indices(10, 1)[-1] == 9

    def test_writes_gif(self, tmp_path):
        shot = simulate_shot(45.0, 150.0, dt=2.0)
        out = tmp_path / 'replay.gif'
        assert create_trajectory_animation(shot, save_path=str(out),
                                           frames=8) == str(out)
        assert out.exists() and out.stat().st_size > 0

    def test_rejects_no_frames(self, tmp_path):
        shot = simulate_shot(45.0, 150.0, dt=2.0)
        with pytest.raises(ValueError):
            create_trajectory_animation(shot, save_path=str(tmp_path / 'x.gif'),
                                        frames=0)
