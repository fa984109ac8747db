"""
Unit Tests for the Projectile
=============================
Firing, single-step forward-Euler advance under gravity and drag, and the
flight history.
Run: python -m pytest tests/ -v
"""

import sys
import os
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from artillery.angle import Angle
from artillery.projectile import Projectile, FlightState
from artillery.vectors import Position, Velocity


def in_flight(x, y, dx, dy, t=100.0):
    """A projectile part-way through a flight."""
    return Projectile(history=[FlightState(Position(x, y), Velocity(dx, dy), t)])


class TestProjectileSetup:

    def test_defaults(self):
        p = Projectile()
        assert p.mass == pytest.approx(46.7)
        assert p.radius == pytest.approx(0.077545)
        assert not p.is_flying
        assert len(p) == 0

    def test_rejects_bad_mass_and_radius(self):
        with pytest.raises(ValueError):
            Projectile(mass=0.0)
        with pytest.raises(ValueError):
            Projectile(radius=-1.0)

    def test_setters_ignore_non_positive(self):
        p = in_flight(0, 1000, 100, 0)
        p.mass = 0.0
        p.radius = -1.0
        assert p.mass == pytest.approx(46.7)
        assert p.radius == pytest.approx(0.077545)
        p.advance(101.0)
        assert len(p) == 2

    def test_setters_accept_positive(self):
        p = Projectile()
        p.mass = 43.0
        p.radius = 0.0775
        assert p.mass == 43.0
        assert p.radius == 0.0775

    def test_history_makes_active(self):
        assert in_flight(0, 100, 0, 0).is_flying

    def test_reset(self):
        p = in_flight(0, 100, 0, 0)
        p.mass = 10.0
        p.radius = 1.0
        p.reset()
        assert p.mass == pytest.approx(46.7)
        assert p.radius == pytest.approx(0.077545)
        assert not p.is_flying
        assert p.flight_path == ()
        assert p.position == Position()


class TestFire:
    """Launch velocity follows the barrel angle, 0 = up."""

    def test_fire_right(self):
        p = Projectile()
        p.fire(Position(111, 222), Angle(90), 100.0, 1.0)
        assert len(p) == 1
        state = p.flight_path[0]
        assert state.pos == Position(111, 222)
        assert state.v == Velocity(100.0, 0.0)
        assert state.t == 1.0
        assert p.is_flying

    def test_fire_left(self):
        p = Projectile()
        p.fire(Position(111, 222), Angle(-90), 100.0, 1.0)
        assert p.velocity == Velocity(-100.0, 0.0)

    def test_fire_up(self):
        p = Projectile()
        p.fire(Position(111, 222), Angle(0), 100.0, 1.0)
        assert p.velocity == Velocity(0.0, 100.0)

    def test_refire_clears_history(self):
        p = in_flight(0, 100, 10, 10)
        p.advance(101.0)
        p.fire(Position(), Angle(45), 100.0, 0.0)
        assert len(p) == 1

    def test_rejects_negative_inputs(self):
        with pytest.raises(ValueError):
            Projectile().fire(Position(), Angle(45), -1.0, 0.0)
        with pytest.raises(ValueError):
            Projectile().fire(Position(), Angle(45), 100.0, -1.0)


class TestAdvance:
    """One-second steps from 200 m altitude; drag uses the M795 table."""

    @pytest.mark.parametrize("velocity,pos,vel", [
        ((0.0, 0.0),   (100.0, 195.0968),   (0.0, -9.8064)),
        ((50.0, 0.0),  (149.9756, 195.0968), (49.9513, -9.8064)),
        ((0.0, 100.0), (100.0, 294.9021),   (0.0, 89.8042)),
        ((50.0, 40.0), (149.9600, 235.0648), (49.9201, 30.1297)),
        ((50.0, -40.0), (149.9601, 155.1287), (49.9201, -49.7425)),
    ], ids=['drop', 'horizontal', 'straight_up', 'diagonal_up', 'diagonal_down'])
    def test_single_step(self, velocity, pos, vel):
        p = in_flight(100.0, 200.0, *velocity)
        p.advance(101.0)

        assert len(p) == 2
        state = p.flight_path[-1]
        assert state.t == pytest.approx(101.0)
        assert state.pos.x == pytest.approx(pos[0], abs=1e-3)
        assert state.pos.y == pytest.approx(pos[1], abs=1e-3)
        assert state.v.dx == pytest.approx(vel[0], abs=1e-3)
        assert state.v.dy == pytest.approx(vel[1], abs=1e-3)

    def test_no_drag_at_rest(self):
        p = in_flight(0, 1000, 0, 0)
        assert p.drag_acceleration(p.flight_path[-1]).is_zero()

    def test_drag_opposes_velocity(self):
        p = in_flight(0, 1000, 300, -400)
        drag = p.drag_acceleration(p.flight_path[-1])
        assert drag.ddx < 0.0 and drag.ddy > 0.0
        assert drag.ddx / drag.ddy == pytest.approx(-300 / 400)

    def test_gravity_uses_sea_level_below_ground(self):
        p = in_flight(0, -50, 0, 0)
        total = p.total_acceleration(p.flight_path[-1])
        assert total.ddy == pytest.approx(-9.807)

    def test_crossing_ground_plane_stops_flight(self):
        p = in_flight(0, 1, 0, -10, t=0.0)
        p.advance(1.0)
        assert not p.is_flying
        assert p.position.y < 0.0

    def test_ground_check_off_keeps_flying_below_datum(self):
        p = Projectile(history=[FlightState(Position(0, 1), Velocity(0, -10), 0.0)],
                       ground_check=False)
        p.advance(1.0)
        p.advance(2.0)
        assert p.is_flying
        assert len(p) == 3
        p.land()
        assert not p.is_flying

    def test_zero_or_negative_step_ignored(self):
        p = in_flight(0, 100, 10, 0)
        p.advance(100.0)
        p.advance(99.0)
        assert len(p) == 1

    def test_inactive_projectile_does_not_move(self):
        p = Projectile()
        p.advance(5.0)
        assert len(p) == 0

    def test_landed_projectile_does_not_move(self):
        p = in_flight(0, 100, 10, 0)
        p.land()
        p.advance(101.0)
        assert len(p) == 1


class TestFlightQueries:

    def test_history_is_time_ascending(self):
        p = Projectile()
        p.fire(Position(), Angle(45), 300.0, 0.0)
        for step in range(1, 20):
            p.advance(step * 0.5)
        times = [s.t for s in p.flight_path]
        assert times == sorted(times)

    def test_flight_summary(self):
        p = Projectile()
        p.fire(Position(0, 0), Angle(45), 300.0, 0.0)
        for step in range(1, 11):
            p.advance(float(step))
        assert p.flight_time == pytest.approx(10.0)
        assert p.total_distance == pytest.approx(p.position.x)
        assert p.max_altitude >= p.altitude > 0.0
        assert p.speed == pytest.approx(p.velocity.speed)

    def test_flight_path_is_a_copy(self):
        p = in_flight(0, 100, 0, 0)
        path = p.flight_path
        p.advance(101.0)
        assert len(path) == 1
