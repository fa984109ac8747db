"""
Howitzer
========
The aiming collaborator: an M777 155 mm towed howitzer with an elevation
restricted to a configurable range (0°–85° from vertical by default).

Elevation follows the Angle convention, 0 = straight up, so 45° aims
downrange at the classic maximum-range angle and 85° is nearly flat fire.
"""

import logging
import math
from typing import Optional

import numpy as np

from .angle import Angle
from .config import (
    DEFAULT_MUZZLE_VELOCITY, DEFAULT_ELEVATION_DEG,
    MIN_ELEVATION_DEG, MAX_ELEVATION_DEG, BARREL_LENGTH,
)
from .vectors import Position, Velocity

logger = logging.getLogger(__name__)


class Howitzer:
    """
    Gun position, muzzle velocity and barrel elevation.
    """

    def __init__(self, muzzle_velocity: float = DEFAULT_MUZZLE_VELOCITY,
                 elevation_deg: float = DEFAULT_ELEVATION_DEG,
                 min_elevation: float = MIN_ELEVATION_DEG,
                 max_elevation: float = MAX_ELEVATION_DEG,
                 position: Optional[Position] = None):
        if muzzle_velocity <= 0.0:
            raise ValueError(
                f"Muzzle velocity must be positive, got {muzzle_velocity}")
        if not 0.0 <= min_elevation <= max_elevation <= 360.0:
            raise ValueError(
                f"Invalid elevation limits [{min_elevation}, {max_elevation}]")

        self.min_elevation = min_elevation
        self.max_elevation = max_elevation
        self.position = position if position is not None else Position()
        self._muzzle_velocity = muzzle_velocity
        self._elevation = Angle(elevation_deg)
        self._constrain_elevation()
        self.last_fire_time = -1.0
        self.rounds_fired = 0

    # ── Muzzle velocity ───────────────────────────────────────────────────
    @property
    def muzzle_velocity(self) -> float:
        return self._muzzle_velocity

    @muzzle_velocity.setter
    def muzzle_velocity(self, value: float):
        # Non-positive charges are ignored
        if value > 0.0:
            self._muzzle_velocity = value

    # ── Elevation ─────────────────────────────────────────────────────────
    @property
    def elevation(self) -> Angle:
        return self._elevation.copy()

    @elevation.setter
    def elevation(self, angle: Angle):
        self._elevation = angle.copy()
        self._constrain_elevation()

    def set_elevation_degrees(self, degrees: float):
        self._elevation.degrees = degrees
        self._constrain_elevation()

    def _unwrapped_degrees(self) -> float:
        """
        Elevation in degrees on the same turn as the limits.

        An Angle stores 360° as 0°, so with limits reaching 360° straight
        up counts as the top of the range.
        """
        degrees = self._elevation.degrees
        if degrees < self.min_elevation and degrees + 360.0 <= self.max_elevation:
            degrees += 360.0
        return degrees

    def _constrain_elevation(self):
        degrees = self._unwrapped_degrees()
        if degrees < self.min_elevation:
            self._elevation.degrees = self.min_elevation
        elif degrees > self.max_elevation:
            self._elevation.degrees = self.max_elevation

    def _apply_within_limits(self, delta_radians: float):
        new_degrees = self._unwrapped_degrees() + math.degrees(delta_radians)
        if new_degrees < self.min_elevation:
            self._elevation.degrees = self.min_elevation
        elif new_degrees > self.max_elevation:
            self._elevation.degrees = self.max_elevation
        else:
            self._elevation.add(delta_radians)

    def rotate(self, radians: float):
        """Turn the barrel clockwise (positive) or counter-clockwise."""
        self._apply_within_limits(radians)

    def raise_barrel(self, radians: float):
        """
        Raise the barrel toward vertical (positive) or lower it.

        On the right half-plane raising means turning counter-clockwise,
        on the left half-plane clockwise.
        """
        if self._elevation.is_right:
            self._apply_within_limits(-radians)
        else:
            self._apply_within_limits(radians)

    def set_max_elevation(self):
        self._elevation.degrees = self.max_elevation

    def set_min_elevation(self):
        self._elevation.degrees = self.min_elevation

    def set_horizontal(self):
        """Aim level downrange, or as flat as the limits allow."""
        self._elevation.degrees = 90.0
        self._constrain_elevation()

    # ── Placement ─────────────────────────────────────────────────────────
    def generate_position(self, field_width: float,
                          rng: Optional[np.random.Generator] = None) -> Position:
        """Place the gun at a random spot in the middle 80 % of the field."""
        rng = rng if rng is not None else np.random.default_rng()
        x = float(rng.uniform(field_width * 0.1, field_width * 0.9))
        self.position = Position(x, 0.0)
        logger.debug("Howitzer emplaced at x=%.0f m", x)
        return self.position

    def muzzle_position(self) -> Position:
        """Tip of the barrel."""
        return Position(self.position.x + BARREL_LENGTH * self._elevation.dx,
                        self.position.y + BARREL_LENGTH * self._elevation.dy)

    def muzzle_velocity_vector(self) -> Velocity:
        return Velocity.from_angle(self._elevation, self._muzzle_velocity)

    # ── Firing ────────────────────────────────────────────────────────────
    def can_fire(self) -> bool:
        return self._muzzle_velocity > 0.0

    def record_firing(self, time: float):
        self.last_fire_time = time
        self.rounds_fired += 1

    def reset(self):
        """Back to the default M777 charge and elevation; position is kept."""
        self._elevation = Angle(DEFAULT_ELEVATION_DEG)
        self._constrain_elevation()
        self._muzzle_velocity = DEFAULT_MUZZLE_VELOCITY
        self.last_fire_time = -1.0
        self.rounds_fired = 0

    def __repr__(self) -> str:
        return (f"Howitzer(position={self.position}, elevation={self._elevation}, "
                f"muzzle_velocity={self._muzzle_velocity})")
