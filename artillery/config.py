"""
Simulation Configuration
========================
Default hardware specifications and simulation settings.

  - M795 155 mm high-explosive projectile
  - M777 155 mm towed howitzer
  - Game / orchestration constants (tick length, hit tolerance, field size)
"""

from dataclasses import dataclass


# ── M795 projectile ───────────────────────────────────────────────────────
DEFAULT_PROJECTILE_MASS   = 46.7       # kg
DEFAULT_PROJECTILE_RADIUS = 0.077545   # m  (155 mm caliber)

# ── M777 howitzer ─────────────────────────────────────────────────────────
DEFAULT_MUZZLE_VELOCITY = 827.0        # m/s
DEFAULT_ELEVATION_DEG   = 45.0         # degrees from vertical
MIN_ELEVATION_DEG       = 0.0          # degrees
MAX_ELEVATION_DEG       = 85.0         # degrees
BARREL_LENGTH           = 6.0          # m

# ── Simulation ────────────────────────────────────────────────────────────
TIME_STEP        = 0.5                 # s per tick
HIT_TOLERANCE    = 175.0               # m  impact-to-target distance
TRAIL_LENGTH     = 20                  # positions kept for the smoke trail
ROTATE_STEP      = 0.05                # rad per rotate command
RAISE_STEP       = 0.003               # rad per raise command

# ── Display ───────────────────────────────────────────────────────────────
METERS_PER_PIXEL = 40.0                # m
FIELD_WIDTH_PX   = 700.0
FIELD_HEIGHT_PX  = 500.0
FIELD_WIDTH      = FIELD_WIDTH_PX * METERS_PER_PIXEL    # m
FIELD_HEIGHT     = FIELD_HEIGHT_PX * METERS_PER_PIXEL   # m


@dataclass
class SimulationConfig:
    """
    Settings owned by the simulation orchestrator.
    """
    time_step: float = TIME_STEP           # s
    hit_tolerance: float = HIT_TOLERANCE   # m
    trail_length: int = TRAIL_LENGTH
    field_width: float = FIELD_WIDTH       # m
    rotate_step: float = ROTATE_STEP       # rad
    raise_step: float = RAISE_STEP         # rad

    def __post_init__(self):
        if self.time_step <= 0.0:
            raise ValueError(f"time_step must be positive, got {self.time_step}")
        if self.hit_tolerance < 0.0:
            raise ValueError(
                f"hit_tolerance cannot be negative, got {self.hit_tolerance}")
        if self.trail_length < 1:
            raise ValueError(
                f"trail_length must be at least 1, got {self.trail_length}")
        if self.field_width <= 0.0:
            raise ValueError(f"field_width must be positive, got {self.field_width}")
