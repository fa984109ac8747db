"""
Angle
=====
A direction in the firing plane, stored in radians and always kept in
[0, 2π).

Convention: 0 is straight up and angles grow clockwise, so 90° points
downrange (right) and 270° points uprange (left).

          0 (up)
           |
  270 -----+----- 90
           |
          180 (down)
"""

import math

import numpy as np


TWO_PI = 2.0 * math.pi
ANGLE_EPSILON = 1e-6   # rad


def normalize(radians: float) -> float:
    """Map any radian value into [0, 2π)."""
    radians = math.fmod(radians, TWO_PI)
    if radians < 0.0:
        radians += TWO_PI
    # fmod of a tiny negative number can round up to exactly 2π
    if radians >= TWO_PI:
        radians -= TWO_PI
    return radians


class Angle:
    """
    Normalized direction with degree/radian views.

    The constructor takes degrees, matching how gunners think about
    elevation. Use ``Angle.from_radians`` when working in radians.
    """

    __slots__ = ('_radians',)

    def __init__(self, degrees: float = 0.0):
        self._radians = normalize(math.radians(degrees))

    @classmethod
    def from_radians(cls, radians: float) -> 'Angle':
        angle = cls()
        angle._radians = normalize(radians)
        return angle

    @classmethod
    def from_dx_dy(cls, dx: float, dy: float) -> 'Angle':
        """Direction of the (dx, dy) component pair, 0 = up."""
        return cls.from_radians(math.atan2(dx, dy))

    # ── Views ─────────────────────────────────────────────────────────────
    @property
    def radians(self) -> float:
        return self._radians

    @radians.setter
    def radians(self, value: float):
        self._radians = normalize(value)

    @property
    def degrees(self) -> float:
        return math.degrees(self._radians)

    @degrees.setter
    def degrees(self, value: float):
        self._radians = normalize(math.radians(value))

    @property
    def dx(self) -> float:
        """Horizontal component of a unit vector in this direction."""
        return float(np.sin(self._radians))

    @property
    def dy(self) -> float:
        """Vertical component of a unit vector in this direction."""
        return float(np.cos(self._radians))

    @property
    def is_right(self) -> bool:
        return 0.0 < self._radians < math.pi

    @property
    def is_left(self) -> bool:
        return math.pi < self._radians < TWO_PI

    # ── Mutators ──────────────────────────────────────────────────────────
    def add(self, delta_radians: float) -> 'Angle':
        self._radians = normalize(self._radians + delta_radians)
        return self

    def set_up(self):
        self._radians = 0.0

    def set_down(self):
        self._radians = math.pi

    def set_right(self):
        self._radians = math.pi / 2.0

    def set_left(self):
        self._radians = 1.5 * math.pi

    def set_dx_dy(self, dx: float, dy: float):
        self._radians = normalize(math.atan2(dx, dy))

    def reverse(self):
        self._radians = normalize(self._radians + math.pi)

    # ── Rotation queries ──────────────────────────────────────────────────
    def shortest_rotation_to(self, target: 'Angle') -> float:
        """
        Signed rotation (radians) that takes this angle onto ``target``.

        The result lies in (-π, π]; positive means clockwise.
        """
        diff = normalize(target._radians - self._radians)
        if diff > math.pi:
            diff -= TWO_PI
        return diff

    def is_clockwise_to(self, target: 'Angle') -> bool:
        return self.shortest_rotation_to(target) > 0.0

    def opposite(self) -> 'Angle':
        return self + 180.0

    def copy(self) -> 'Angle':
        return Angle.from_radians(self._radians)

    # ── Operators ─────────────────────────────────────────────────────────
    @staticmethod
    def _delta_radians(other) -> float:
        # Plain numbers are degrees, as in the constructor
        if isinstance(other, Angle):
            return other._radians
        return math.radians(other)

    def __add__(self, other) -> 'Angle':
        return Angle.from_radians(self._radians + self._delta_radians(other))

    def __sub__(self, other) -> 'Angle':
        return Angle.from_radians(self._radians - self._delta_radians(other))

    def __iadd__(self, other) -> 'Angle':
        self._radians = normalize(self._radians + self._delta_radians(other))
        return self

    def __isub__(self, other) -> 'Angle':
        self._radians = normalize(self._radians - self._delta_radians(other))
        return self

    def __eq__(self, other) -> bool:
        if not isinstance(other, Angle):
            return NotImplemented
        return abs(self._radians - other._radians) < ANGLE_EPSILON

    __hash__ = None

    def __repr__(self) -> str:
        return f"Angle({self.degrees:.6g})"

    def __str__(self) -> str:
        return f"{self.degrees:.1f}°"
