"""
Vector Quantities
=================
Immutable 2D value types for the firing plane:

  - Position      (x, y)      m      x = downrange, y = altitude
  - Velocity      (dx, dy)    m/s
  - Acceleration  (ddx, ddy)  m/s²

Velocity and Acceleration decompose into an Angle and a magnitude with the
angle measured clockwise from vertical "up":

    dx = magnitude · sin(θ)
    dy = magnitude · cos(θ)
"""

from dataclasses import dataclass

import numpy as np

from .angle import Angle


VECTOR_EPSILON = 1e-10


def _close(a: float, b: float) -> bool:
    return abs(a - b) < VECTOR_EPSILON


@dataclass(frozen=True, eq=False)
class Position:
    """A point on the field in meters. y may be transiently negative."""
    x: float = 0.0
    y: float = 0.0

    def distance_to(self, other: 'Position') -> float:
        return float(np.hypot(other.x - self.x, other.y - self.y))

    def is_origin(self) -> bool:
        return abs(self.x) < VECTOR_EPSILON and abs(self.y) < VECTOR_EPSILON

    def displaced(self, velocity: 'Velocity', acceleration: 'Acceleration',
                  dt: float) -> 'Position':
        """
        Kinematic update  s = s₀ + v·t + ½·a·t²
        """
        if dt < 0.0:
            raise ValueError(f"Time step cannot be negative, got {dt}")
        return Position(
            self.x + velocity.dx * dt + 0.5 * acceleration.ddx * dt * dt,
            self.y + velocity.dy * dt + 0.5 * acceleration.ddy * dt * dt,
        )

    def __add__(self, other: 'Position') -> 'Position':
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Position') -> 'Position':
        return Position(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Position':
        return Position(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> 'Position':
        return Position(-self.x, -self.y)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return _close(self.x, other.x) and _close(self.y, other.y)

    __hash__ = None

    def __str__(self) -> str:
        return f"({self.x:.1f}m, {self.y:.1f}m)"


@dataclass(frozen=True, eq=False)
class Velocity:
    """Rate of change of position, m/s."""
    dx: float = 0.0
    dy: float = 0.0

    @classmethod
    def from_angle(cls, angle: Angle, magnitude: float) -> 'Velocity':
        if magnitude < 0.0:
            raise ValueError(f"Speed cannot be negative, got {magnitude}")
        return cls(magnitude * angle.dx, magnitude * angle.dy)

    @property
    def speed(self) -> float:
        """Magnitude √(dx² + dy²)."""
        return float(np.hypot(self.dx, self.dy))

    @property
    def angle(self) -> Angle:
        """Direction of travel, 0 = straight up."""
        return Angle.from_dx_dy(self.dx, self.dy)

    def accelerated(self, acceleration: 'Acceleration', dt: float) -> 'Velocity':
        """v = v₀ + a·t"""
        if dt < 0.0:
            raise ValueError(f"Time step cannot be negative, got {dt}")
        return Velocity(self.dx + acceleration.ddx * dt,
                        self.dy + acceleration.ddy * dt)

    def is_zero(self) -> bool:
        return abs(self.dx) < VECTOR_EPSILON and abs(self.dy) < VECTOR_EPSILON

    def kinetic_energy(self, mass: float) -> float:
        """KE = ½·m·v²  (J)"""
        if mass <= 0.0:
            raise ValueError(f"Mass must be positive, got {mass}")
        return 0.5 * mass * self.speed ** 2

    def __add__(self, other: 'Velocity') -> 'Velocity':
        return Velocity(self.dx + other.dx, self.dy + other.dy)

    def __sub__(self, other: 'Velocity') -> 'Velocity':
        return Velocity(self.dx - other.dx, self.dy - other.dy)

    def __mul__(self, scalar: float) -> 'Velocity':
        return Velocity(self.dx * scalar, self.dy * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> 'Velocity':
        return Velocity(-self.dx, -self.dy)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Velocity):
            return NotImplemented
        return _close(self.dx, other.dx) and _close(self.dy, other.dy)

    __hash__ = None

    def __str__(self) -> str:
        return f"({self.dx:.2f}, {self.dy:.2f}) m/s"


@dataclass(frozen=True, eq=False)
class Acceleration:
    """Instantaneous sum of gravity and drag, m/s²."""
    ddx: float = 0.0
    ddy: float = 0.0

    @classmethod
    def from_angle(cls, angle: Angle, magnitude: float) -> 'Acceleration':
        if magnitude < 0.0:
            raise ValueError(
                f"Acceleration magnitude cannot be negative, got {magnitude}")
        return cls(magnitude * angle.dx, magnitude * angle.dy)

    @property
    def magnitude(self) -> float:
        return float(np.hypot(self.ddx, self.ddy))

    @property
    def angle(self) -> Angle:
        return Angle.from_dx_dy(self.ddx, self.ddy)

    def is_zero(self) -> bool:
        return abs(self.ddx) < VECTOR_EPSILON and abs(self.ddy) < VECTOR_EPSILON

    def __add__(self, other: 'Acceleration') -> 'Acceleration':
        return Acceleration(self.ddx + other.ddx, self.ddy + other.ddy)

    def __sub__(self, other: 'Acceleration') -> 'Acceleration':
        return Acceleration(self.ddx - other.ddx, self.ddy - other.ddy)

    def __mul__(self, scalar: float) -> 'Acceleration':
        return Acceleration(self.ddx * scalar, self.ddy * scalar)

    __rmul__ = __mul__

    def __neg__(self) -> 'Acceleration':
        return Acceleration(-self.ddx, -self.ddy)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Acceleration):
            return NotImplemented
        return _close(self.ddx, other.ddx) and _close(self.ddy, other.ddy)

    __hash__ = None
