"""
Unit Tests for Vector Quantities
================================
Run: python -m pytest tests/ -v
"""

import sys
import os
import dataclasses
import math
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from artillery.angle import Angle
from artillery.vectors import Position, Velocity, Acceleration


class TestPosition:

    def test_default_is_origin(self):
        assert Position().is_origin()
        assert not Position(1.0, 0.0).is_origin()

    def test_distance(self):
        assert Position(3.0, 4.0).distance_to(Position()) == pytest.approx(5.0)

    def test_displaced(self):
        """s = s₀ + v·t + ½·a·t²"""
        start = Position(100.0, 200.0)
        end = start.displaced(Velocity(50.0, 0.0), Acceleration(0.0, -10.0), 2.0)
        assert end == Position(200.0, 180.0)

    def test_displaced_rejects_negative_time(self):
        with pytest.raises(ValueError):
            Position().displaced(Velocity(), Acceleration(), -1.0)

    def test_arithmetic(self):
        assert Position(1, 2) + Position(3, 4) == Position(4, 6)
        assert Position(1, 2) - Position(3, 4) == Position(-2, -2)
        assert 2 * Position(1, 2) == Position(2, 4)
        assert -Position(1, 2) == Position(-1, -2)

    def test_equality_tolerance(self):
        assert Position(1.0, 1.0) == Position(1.0 + 1e-12, 1.0)
        assert Position(1.0, 1.0) != Position(1.0 + 1e-6, 1.0)

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Position().x = 5.0


class TestVelocity:

    def test_from_angle_right(self):
        assert Velocity.from_angle(Angle(90), 100.0) == Velocity(100.0, 0.0)

    def test_from_angle_up(self):
        assert Velocity.from_angle(Angle(0), 100.0) == Velocity(0.0, 100.0)

    def test_from_angle_rejects_negative_speed(self):
        with pytest.raises(ValueError):
            Velocity.from_angle(Angle(45), -1.0)

    def test_speed(self):
        assert Velocity(3.0, 4.0).speed == pytest.approx(5.0)

    def test_angle(self):
        assert Velocity(1.0, 0.0).angle == Angle(90)
        assert Velocity(0.0, -1.0).angle == Angle(180)

    def test_round_trip_through_angle(self):
        v = Velocity(-30.0, 40.0)
        assert Velocity.from_angle(v.angle, v.speed) == v

    def test_accelerated(self):
        v = Velocity(10.0, 0.0).accelerated(Acceleration(0.0, -9.8), 2.0)
        assert v == Velocity(10.0, -19.6)

    def test_is_zero(self):
        assert Velocity().is_zero()
        assert not Velocity(0.0, 1e-3).is_zero()

    def test_kinetic_energy(self):
        assert Velocity(10.0, 0.0).kinetic_energy(2.0) == pytest.approx(100.0)
        with pytest.raises(ValueError):
            Velocity(1.0, 0.0).kinetic_energy(0.0)


class TestAcceleration:

    def test_magnitude(self):
        assert Acceleration(6.0, 8.0).magnitude == pytest.approx(10.0)

    def test_from_angle_down(self):
        a = Acceleration.from_angle(Angle(180), 9.8)
        assert a.ddx == pytest.approx(0.0, abs=1e-12)
        assert a.ddy == pytest.approx(-9.8)

    def test_angle(self):
        assert Acceleration(-1.0, 0.0).angle == Angle(270)

    def test_arithmetic(self):
        assert Acceleration(1, 2) + Acceleration(1, 1) == Acceleration(2, 3)
        assert Acceleration(1, 2) * 3 == Acceleration(3, 6)
        assert -Acceleration(1, -2) == Acceleration(-1, 2)

    def test_zero(self):
        assert Acceleration().is_zero()
        assert math.isclose(Acceleration().magnitude, 0.0)
