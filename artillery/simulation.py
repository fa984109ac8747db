"""
Simulation Orchestrator
=======================
Runs one artillery engagement: takes fire commands, advances simulation
time in fixed ticks, checks the shell against the terrain and scores hits.

State machine:

    IDLE ──fire()──> FIRING ──update()...──> HIT | MISS ──fire()──> FIRING

The terrain check here is the authoritative impact test; the projectile's
own ground-plane check is switched off, so terrain below y = 0 still lands.
"""

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from .config import SimulationConfig
from .howitzer import Howitzer
from .projectile import Projectile
from .terrain import Terrain
from .vectors import Position

logger = logging.getLogger(__name__)


class SimulationState(Enum):
    IDLE = 'idle'
    FIRING = 'firing'
    HIT = 'hit'
    MISS = 'miss'


@dataclass(frozen=True)
class ShotRecord:
    """Outcome of one round."""
    impact: Position
    target: Position
    distance: float        # m, impact to target
    hit: bool
    flight_time: float     # s
    elevation_deg: float
    muzzle_velocity: float


@dataclass
class Controls:
    """Snapshot of the player's input for one frame."""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    fire: bool = False


class Simulator:
    """
    Coordinates the howitzer, the projectile and the terrain.
    """

    def __init__(self, terrain: Terrain, howitzer: Optional[Howitzer] = None,
                 projectile: Optional[Projectile] = None,
                 config: Optional[SimulationConfig] = None):
        self.config = config if config is not None else SimulationConfig()
        self.terrain = terrain
        self.projectile = projectile if projectile is not None else Projectile()
        # Impact is decided against the terrain below
        self.projectile.ground_check = False

        if howitzer is None:
            howitzer = Howitzer(position=Position(self.config.field_width / 2.0, 0.0))
        self.howitzer = howitzer
        self.howitzer.position = self.terrain.reset(self.howitzer.position)

        self.time = 0.0
        self.state = SimulationState.IDLE
        self.score = 0
        self.shots_attempted = 0
        self.shots: List[ShotRecord] = []
        self.trail = deque(maxlen=self.config.trail_length)

    # ── Queries ───────────────────────────────────────────────────────────
    @property
    def is_projectile_flying(self) -> bool:
        return self.state is SimulationState.FIRING

    @property
    def has_hit_target(self) -> bool:
        return self.state is SimulationState.HIT

    @property
    def hit_rate(self) -> float:
        if self.shots_attempted == 0:
            return 0.0
        return self.score / self.shots_attempted

    @property
    def last_shot(self) -> Optional[ShotRecord]:
        return self.shots[-1] if self.shots else None

    # ── Commands ──────────────────────────────────────────────────────────
    def fire(self) -> bool:
        """Fire a round unless one is already in the air."""
        if self.is_projectile_flying or not self.howitzer.can_fire():
            return False

        self.time = 0.0
        self.shots_attempted += 1
        elevation = self.howitzer.elevation
        self.projectile.fire(self.howitzer.position, elevation,
                             self.howitzer.muzzle_velocity, self.time)
        self.howitzer.record_firing(self.time)
        self.trail.clear()
        self.state = SimulationState.FIRING
        logger.info("Round %d fired at %s, %.0f m/s", self.shots_attempted,
                    elevation, self.howitzer.muzzle_velocity)
        return True

    def handle_input(self, controls: Controls):
        """Apply one frame of player input: aim first, then fire."""
        if controls.right:
            self.howitzer.rotate(self.config.rotate_step)
        if controls.left:
            self.howitzer.rotate(-self.config.rotate_step)
        if controls.up:
            self.howitzer.raise_barrel(self.config.raise_step)
        if controls.down:
            self.howitzer.raise_barrel(-self.config.raise_step)
        if controls.fire:
            self.fire()

    def update(self, time_step: Optional[float] = None):
        """Advance the round in flight by one tick."""
        if time_step is None:
            time_step = self.config.time_step
        if time_step <= 0.0:
            raise ValueError(f"Time step must be positive, got {time_step}")

        if not self.is_projectile_flying:
            return

        self.time += time_step
        self.projectile.advance(self.time)
        self.trail.appendleft(self.projectile.position)

        if self._check_ground_collision():
            self._resolve_impact()

    def run_shot(self, max_time: float = 600.0) -> Optional[ShotRecord]:
        """Fire (if idle) and tick until the round lands or ``max_time``."""
        if not self.is_projectile_flying and not self.fire():
            return None
        while self.is_projectile_flying and self.time < max_time:
            self.update()
        if self.is_projectile_flying:
            logger.warning("Round still in flight after %.1f s", self.time)
            return None
        return self.last_shot

    def reset(self):
        """Clear the current round and regenerate the terrain."""
        self.time = 0.0
        self.state = SimulationState.IDLE
        self.projectile.reset()
        self.trail.clear()
        self.howitzer.position = self.terrain.reset(self.howitzer.position)

    def new_game(self, rng: Optional[np.random.Generator] = None):
        """Reset the score, move the gun and start over."""
        self.score = 0
        self.shots_attempted = 0
        self.shots.clear()
        self.howitzer.generate_position(self.config.field_width, rng)
        self.howitzer.reset()
        self.reset()

    # ── Impact handling ───────────────────────────────────────────────────
    def _check_ground_collision(self) -> bool:
        position = self.projectile.position
        return position.y <= self.terrain.elevation_meters(position)

    def _resolve_impact(self):
        impact = self.projectile.position
        target = self.terrain.target_position()
        distance = impact.distance_to(target)
        hit = distance < self.config.hit_tolerance

        self.projectile.land()
        record = ShotRecord(
            impact=impact,
            target=target,
            distance=distance,
            hit=hit,
            flight_time=self.projectile.flight_time,
            elevation_deg=self.howitzer.elevation.degrees,
            muzzle_velocity=self.howitzer.muzzle_velocity,
        )
        self.shots.append(record)

        if hit:
            self.state = SimulationState.HIT
            self.score += 1
            logger.info("HIT: impact %s, %.0f m from target", impact, distance)
            # Fresh terrain for the next engagement
            self.howitzer.position = self.terrain.reset(self.howitzer.position)
        else:
            self.state = SimulationState.MISS
            logger.info("Miss: impact %s, %.0f m from target", impact, distance)

        self.projectile.reset()
        self.trail.clear()
