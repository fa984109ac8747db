"""
Projectile & Flight History
===========================
An artillery shell in flight. The projectile owns an append-only,
time-ascending flight history; each call to ``advance`` integrates one
forward-Euler step under

  - gravity, always straight down, magnitude from the altitude table
  - aerodynamic drag, opposing the velocity, Cd from the Mach number

Lifecycle:
    idle --fire()--> flying --advance()...--> landed (y < 0, or land()) --reset()--> idle

Coordinate system:
  x = downrange (horizontal)
  y = altitude  (vertical, up positive)
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from .angle import Angle
from .atmosphere import (
    gravity_from_altitude, density_from_altitude, mach_from_speed,
)
from .config import DEFAULT_PROJECTILE_MASS, DEFAULT_PROJECTILE_RADIUS
from .drag_model import DragModel, M795
from .physics import force_from_drag, acceleration_from_force
from .vectors import Acceleration, Position, Velocity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FlightState:
    """One recorded moment on the flight path."""
    pos: Position = field(default_factory=Position)
    v: Velocity = field(default_factory=Velocity)
    t: float = 0.0


class Projectile:
    """
    Shell with mass, radius and a recorded trajectory.

    Defaults to the M795 (46.7 kg, 155 mm). ``history`` seeds the flight
    path directly, which makes the projectile active; this is how tests and
    replays set up a flight in progress.

    ``ground_check`` ends the flight when the shell drops below y = 0.
    Callers that test impact against terrain switch it off and call
    ``land`` themselves.
    """

    def __init__(self, mass: float = DEFAULT_PROJECTILE_MASS,
                 radius: float = DEFAULT_PROJECTILE_RADIUS,
                 history: Optional[Iterable[FlightState]] = None,
                 drag_model: DragModel = M795,
                 ground_check: bool = True):
        if mass <= 0.0:
            raise ValueError(f"Projectile mass must be positive, got {mass}")
        if radius <= 0.0:
            raise ValueError(f"Projectile radius must be positive, got {radius}")

        self._mass = mass
        self._radius = radius
        self.drag_model = drag_model
        self.ground_check = ground_check
        self._flight_path = list(history) if history is not None else []
        self._active = bool(self._flight_path)

    # ── Shell properties ──────────────────────────────────────────────────
    @property
    def mass(self) -> float:
        return self._mass

    @mass.setter
    def mass(self, value: float):
        # Non-positive values are ignored
        if value > 0.0:
            self._mass = value

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, value: float):
        if value > 0.0:
            self._radius = value

    # ── Lifecycle ─────────────────────────────────────────────────────────
    def reset(self):
        """Restore the default M795 mass and radius and clear the flight."""
        self._mass = DEFAULT_PROJECTILE_MASS
        self._radius = DEFAULT_PROJECTILE_RADIUS
        self._active = False
        self._flight_path.clear()

    def fire(self, position: Position, angle: Angle, muzzle_velocity: float,
             time: float):
        """Launch from ``position`` along ``angle`` at ``muzzle_velocity``."""
        if muzzle_velocity < 0.0:
            raise ValueError(
                f"Muzzle velocity cannot be negative, got {muzzle_velocity}")
        if time < 0.0:
            raise ValueError(f"Fire time cannot be negative, got {time}")

        self._flight_path.clear()
        self._flight_path.append(FlightState(
            pos=position,
            v=Velocity.from_angle(angle, muzzle_velocity),
            t=time,
        ))
        self._active = True
        logger.debug("Fired from %s at %s, %.1f m/s", position, angle,
                     muzzle_velocity)

    def land(self):
        """Stop the flight; the last recorded sample is the impact point."""
        self._active = False

    def advance(self, simulation_time: float):
        """
        Integrate one step from the last sample up to ``simulation_time``.

        x_{n+1} = x_n + v_n·Δt + ½·a_n·Δt²
        v_{n+1} = v_n + a_n·Δt

        Does nothing when not flying or when Δt ≤ 0.
        """
        if not self._active or not self._flight_path:
            return

        current = self._flight_path[-1]
        dt = simulation_time - current.t
        if dt <= 0.0:
            return

        acceleration = self.total_acceleration(current)
        new_state = FlightState(
            pos=current.pos.displaced(current.v, acceleration, dt),
            v=current.v.accelerated(acceleration, dt),
            t=simulation_time,
        )
        self._flight_path.append(new_state)

        # Ground-plane crossing, unless a terrain-aware caller owns impact
        if self.ground_check and new_state.pos.y < 0.0:
            self._active = False
            logger.debug("Crossed ground plane at %s, t=%.2f s",
                         new_state.pos, new_state.t)

    # ── Forces ────────────────────────────────────────────────────────────
    def drag_acceleration(self, state: FlightState) -> Acceleration:
        """Drag deceleration opposing the velocity in ``state``."""
        speed = state.v.speed
        if speed == 0.0:
            return Acceleration()

        altitude = max(0.0, state.pos.y)
        density = density_from_altitude(altitude)
        mach = mach_from_speed(speed, altitude)
        drag_coefficient = self.drag_model.cd(mach)

        force = force_from_drag(density, drag_coefficient, self.radius, speed)
        magnitude = acceleration_from_force(force, self.mass)

        return Acceleration(-magnitude * (state.v.dx / speed),
                            -magnitude * (state.v.dy / speed))

    def total_acceleration(self, state: FlightState) -> Acceleration:
        """Gravity plus drag at ``state``."""
        altitude = max(0.0, state.pos.y)
        gravity = Acceleration(0.0, -gravity_from_altitude(altitude))
        return gravity + self.drag_acceleration(state)

    # ── Queries ───────────────────────────────────────────────────────────
    @property
    def flight_path(self) -> Tuple[FlightState, ...]:
        return tuple(self._flight_path)

    @property
    def is_flying(self) -> bool:
        return self._active and bool(self._flight_path)

    @property
    def position(self) -> Position:
        if self._flight_path:
            return self._flight_path[-1].pos
        return Position()

    @property
    def velocity(self) -> Velocity:
        if self._flight_path:
            return self._flight_path[-1].v
        return Velocity()

    @property
    def speed(self) -> float:
        return self.velocity.speed

    @property
    def altitude(self) -> float:
        if self._flight_path:
            return max(0.0, self._flight_path[-1].pos.y)
        return 0.0

    @property
    def flight_time(self) -> float:
        if len(self._flight_path) < 2:
            return 0.0
        return self._flight_path[-1].t - self._flight_path[0].t

    @property
    def total_distance(self) -> float:
        """Horizontal distance between the first and last samples (m)."""
        if len(self._flight_path) < 2:
            return 0.0
        return abs(self._flight_path[-1].pos.x - self._flight_path[0].pos.x)

    @property
    def max_altitude(self) -> float:
        return max([0.0] + [state.pos.y for state in self._flight_path])

    def __len__(self) -> int:
        return len(self._flight_path)

    def __repr__(self) -> str:
        return (f"Projectile(mass={self.mass}, radius={self.radius}, "
                f"samples={len(self._flight_path)}, flying={self.is_flying})")
