"""
Terrain
=======
The terrain collaborator answers two questions for the orchestrator:

  - how high is the ground under a given downrange coordinate?
  - where is the target?

``FlatGround`` is a deterministic datum-level field used for headless runs
and tests. ``Ground`` generates rolling hills with a target placed somewhere
away from the gun.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .config import FIELD_WIDTH, METERS_PER_PIXEL
from .vectors import Position

logger = logging.getLogger(__name__)


class Terrain(ABC):
    """Ground elevation and target location."""

    @abstractmethod
    def elevation_meters(self, position: Position) -> float:
        """Ground height (m) under ``position``."""

    @abstractmethod
    def target_position(self) -> Position:
        """Target on the ground surface."""

    def reset(self, howitzer_position: Position) -> Position:
        """
        Regenerate the field around the gun.

        Returns the gun's position settled onto the ground surface.
        """
        return Position(howitzer_position.x,
                        self.elevation_meters(howitzer_position))


class FlatGround(Terrain):
    """Level ground at a fixed elevation with a fixed target."""

    def __init__(self, target_x: float, elevation: float = 0.0):
        self.elevation = elevation
        self.target_x = target_x

    def elevation_meters(self, position: Position) -> float:
        return self.elevation

    def target_position(self) -> Position:
        return Position(self.target_x, self.elevation)


class Ground(Terrain):
    """
    Randomly generated rolling terrain.

    Heights are sampled every ``resolution`` meters from 0 to ``width``;
    elevation between samples is linearly interpolated and held constant
    past either edge.
    """

    def __init__(self, width: float = FIELD_WIDTH,
                 resolution: float = METERS_PER_PIXEL,
                 max_height: float = 2500.0,
                 rng: Optional[np.random.Generator] = None,
                 howitzer_x: Optional[float] = None):
        if width <= 0.0:
            raise ValueError(f"Terrain width must be positive, got {width}")
        if resolution <= 0.0:
            raise ValueError(f"Terrain resolution must be positive, got {resolution}")
        if max_height < 0.0:
            raise ValueError(f"Maximum height cannot be negative, got {max_height}")

        self.width = width
        self.resolution = resolution
        self.max_height = max_height
        self.rng = rng if rng is not None else np.random.default_rng()

        self.x = np.arange(0.0, width + resolution, resolution)
        self.heights = np.zeros_like(self.x)
        self._target_index = 0

        start = howitzer_x if howitzer_x is not None else width / 2.0
        self.reset(Position(start, 0.0))

    def _generate_heights(self, gun_index: int) -> np.ndarray:
        n = len(self.x)
        # Smoothed random walk of slopes gives gently rolling hills
        slopes = self.rng.normal(0.0, 1.0, n)
        width = min(15, n)
        kernel = np.ones(width) / width
        slopes = np.convolve(slopes, kernel, mode='same')
        profile = np.cumsum(slopes)
        profile -= profile.min()
        peak = profile.max()
        if peak > 0.0:
            profile *= self.max_height / peak

        # Level pad for the gun
        lo, hi = max(0, gun_index - 2), min(n, gun_index + 3)
        profile[lo:hi] = profile[gun_index]
        return profile

    def _pick_target_index(self, gun_index: int) -> int:
        n = len(self.x)
        min_gap = max(1, n // 4)
        candidates = np.array([i for i in range(n) if abs(i - gun_index) >= min_gap])
        if candidates.size == 0:
            return n - 1 if gun_index < n // 2 else 0
        return int(self.rng.choice(candidates))

    def reset(self, howitzer_position: Position) -> Position:
        gun_x = float(np.clip(howitzer_position.x, 0.0, self.width))
        gun_index = int(round(gun_x / self.resolution))
        gun_index = min(gun_index, len(self.x) - 1)

        self.heights = self._generate_heights(gun_index)
        self._target_index = self._pick_target_index(gun_index)
        logger.info("Terrain generated: gun at x=%.0f m, target at x=%.0f m",
                    gun_x, self.x[self._target_index])
        return Position(gun_x, self.elevation_meters(Position(gun_x, 0.0)))

    def elevation_meters(self, position: Position) -> float:
        return float(np.interp(position.x, self.x, self.heights))

    def target_position(self) -> Position:
        index = self._target_index
        return Position(float(self.x[index]), float(self.heights[index]))
