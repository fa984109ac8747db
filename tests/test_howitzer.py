"""
Unit Tests for the Howitzer
===========================
Elevation limits, aiming commands and gun placement.
Run: python -m pytest tests/ -v
"""

import sys
import os
import math
import numpy as np
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from artillery.angle import Angle
from artillery.howitzer import Howitzer
from artillery.vectors import Position, Velocity


class TestHowitzerSetup:

    def test_defaults(self):
        gun = Howitzer()
        assert gun.muzzle_velocity == pytest.approx(827.0)
        assert gun.elevation.degrees == pytest.approx(45.0)
        assert gun.position == Position()
        assert gun.rounds_fired == 0
        assert gun.last_fire_time == -1.0

    def test_initial_elevation_clamped(self):
        assert Howitzer(elevation_deg=90.0).elevation.degrees == pytest.approx(85.0)

    def test_rejects_bad_arguments(self):
        with pytest.raises(ValueError):
            Howitzer(muzzle_velocity=0.0)
        with pytest.raises(ValueError):
            Howitzer(min_elevation=50.0, max_elevation=10.0)

    def test_elevation_is_a_copy(self):
        gun = Howitzer()
        gun.elevation.add(1.0)
        assert gun.elevation.degrees == pytest.approx(45.0)

    def test_muzzle_velocity_ignores_non_positive(self):
        gun = Howitzer()
        gun.muzzle_velocity = 500.0
        gun.muzzle_velocity = 0.0
        gun.muzzle_velocity = -10.0
        assert gun.muzzle_velocity == pytest.approx(500.0)


class TestAiming:

    def test_elevation_setter_clamps(self):
        gun = Howitzer()
        gun.elevation = Angle(88)
        assert gun.elevation.degrees == pytest.approx(85.0)

    def test_set_elevation_degrees(self):
        gun = Howitzer()
        gun.set_elevation_degrees(60.0)
        assert gun.elevation.degrees == pytest.approx(60.0)

    def test_rotate_clockwise(self):
        gun = Howitzer()
        gun.rotate(0.1)
        assert gun.elevation.degrees == pytest.approx(45.0 + math.degrees(0.1))

    def test_rotate_stops_at_max(self):
        gun = Howitzer()
        gun.rotate(1.0)
        assert gun.elevation.degrees == pytest.approx(85.0)

    def test_rotate_stops_at_min(self):
        gun = Howitzer()
        gun.rotate(-1.0)
        assert gun.elevation.degrees == pytest.approx(0.0)

    def test_raise_on_right_turns_toward_vertical(self):
        gun = Howitzer()
        gun.raise_barrel(0.1)
        assert gun.elevation.degrees == pytest.approx(45.0 - math.degrees(0.1))

    def test_lower_on_right_turns_toward_horizontal(self):
        gun = Howitzer()
        gun.raise_barrel(-0.1)
        assert gun.elevation.degrees == pytest.approx(45.0 + math.degrees(0.1))

    def test_raise_on_left_turns_clockwise(self):
        gun = Howitzer(min_elevation=0.0, max_elevation=360.0, elevation_deg=315.0)
        gun.raise_barrel(0.1)
        assert gun.elevation.degrees == pytest.approx(315.0 + math.degrees(0.1))

    @pytest.fixture
    def left_gun(self):
        return Howitzer(min_elevation=275.0, max_elevation=360.0, elevation_deg=315.0)

    def test_left_limits_accept_straight_up(self, left_gun):
        left_gun.set_elevation_degrees(360.0)
        assert left_gun.elevation == Angle(0)

    def test_left_set_max_is_straight_up(self, left_gun):
        left_gun.set_max_elevation()
        assert left_gun.elevation == Angle(0)
        left_gun.set_min_elevation()
        assert left_gun.elevation.degrees == pytest.approx(275.0)

    def test_left_rotate_past_top_clamps_to_top(self, left_gun):
        left_gun.set_elevation_degrees(355.0)
        left_gun.rotate(math.radians(10.0))
        assert left_gun.elevation == Angle(0)

    def test_left_lower_from_top(self, left_gun):
        left_gun.set_max_elevation()
        left_gun.rotate(math.radians(-5.0))
        assert left_gun.elevation.degrees == pytest.approx(355.0)

    def test_left_below_range_clamps_to_min(self, left_gun):
        left_gun.set_elevation_degrees(10.0)
        assert left_gun.elevation.degrees == pytest.approx(275.0)

    def test_limit_shortcuts(self):
        gun = Howitzer()
        gun.set_max_elevation()
        assert gun.elevation.degrees == pytest.approx(85.0)
        gun.set_min_elevation()
        assert gun.elevation.degrees == pytest.approx(0.0)

    def test_set_horizontal_within_limits(self):
        gun = Howitzer()
        gun.set_horizontal()
        assert gun.elevation.degrees == pytest.approx(85.0)

    def test_set_horizontal_unrestricted(self):
        gun = Howitzer(max_elevation=360.0)
        gun.set_horizontal()
        assert gun.elevation.degrees == pytest.approx(90.0)


class TestFiringGeometry:

    def test_muzzle_velocity_vector(self):
        gun = Howitzer(muzzle_velocity=100.0)
        expected = 100.0 * math.sqrt(0.5)
        assert gun.muzzle_velocity_vector() == Velocity(expected, expected)

    def test_muzzle_position(self):
        gun = Howitzer(max_elevation=90.0, elevation_deg=90.0,
                       position=Position(1000.0, 50.0))
        muzzle = gun.muzzle_position()
        assert muzzle.x == pytest.approx(1006.0)
        assert muzzle.y == pytest.approx(50.0)

    def test_record_firing(self):
        gun = Howitzer()
        gun.record_firing(3.5)
        gun.record_firing(7.0)
        assert gun.rounds_fired == 2
        assert gun.last_fire_time == 7.0
        assert gun.can_fire()


class TestPlacement:

    def test_generate_position_in_middle_of_field(self):
        rng = np.random.default_rng(11)
        gun = Howitzer()
        for _ in range(50):
            pos = gun.generate_position(10000.0, rng)
            assert 1000.0 <= pos.x <= 9000.0
            assert pos.y == 0.0
        assert gun.position == pos

    def test_reset_keeps_position(self):
        gun = Howitzer(position=Position(500.0, 20.0))
        gun.set_elevation_degrees(70.0)
        gun.muzzle_velocity = 400.0
        gun.record_firing(1.0)
        gun.reset()
        assert gun.position == Position(500.0, 20.0)
        assert gun.elevation.degrees == pytest.approx(45.0)
        assert gun.muzzle_velocity == pytest.approx(827.0)
        assert gun.rounds_fired == 0
