"""
Trajectory Runs
===============
Flies a complete shot headlessly by repeatedly calling the projectile's
forward-Euler ``advance`` at a fixed time step until impact, then packs
the flight history into numpy arrays for analysis and plotting.

Impact is detected against the terrain when one is supplied, otherwise
against the ground datum (y = 0). The impact point is interpolated
linearly between the last sample above ground and the first one at or
below it.

Output: TrajectoryResult dataclass with full state history.
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from .angle import Angle
from .atmosphere import density_from_altitude, mach_from_speed
from .config import DEFAULT_MUZZLE_VELOCITY
from .projectile import FlightState, Projectile
from .terrain import Terrain
from .vectors import Position


@dataclass
class TrajectoryResult:
    """Complete trajectory output."""
    projectile: Projectile
    elevation_deg: float      # degrees from vertical
    muzzle_velocity: float    # m/s
    dt: float                 # timestep used

    # Arrays, each of shape (N,)
    time: np.ndarray
    x: np.ndarray             # downrange
    y: np.ndarray             # altitude
    vx: np.ndarray
    vy: np.ndarray
    speed: np.ndarray
    mach_history: np.ndarray
    cd_history: np.ndarray
    density_history: np.ndarray

    impact_point: Position    # interpolated ground contact
    landed: bool              # False if the run hit max_time first

    @property
    def range_total(self) -> float:
        """Horizontal distance from the gun to the impact point (m)."""
        return float(abs(self.impact_point.x - self.x[0]))

    @property
    def max_altitude(self) -> float:
        """Maximum altitude reached (m)."""
        return float(max(np.max(self.y), 0.0))

    @property
    def flight_time(self) -> float:
        """Total flight time (s)."""
        return float(self.time[-1] - self.time[0])

    @property
    def impact_velocity(self) -> float:
        """Speed at impact (m/s)."""
        return float(self.speed[-1])

    @property
    def impact_angle_deg(self) -> float:
        """Angle of descent at impact (degrees below horizontal)."""
        return float(np.degrees(np.arctan2(-self.vy[-1], abs(self.vx[-1]))))

    def summary(self) -> str:
        """Human-readable summary string."""
        lines = [
            f"╔══════════════════════════════════════════════════════╗",
            f"║  TRAJECTORY SUMMARY — M795 155mm{'':<21s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Mass         : {self.projectile.mass:>10.2f} kg{'':<23s} ║",
            f"║  Timestep     : {self.dt:<36.4f} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Launch vel   : {self.muzzle_velocity:>10.1f} m/s{'':<22s} ║",
            f"║  Elevation    : {self.elevation_deg:>10.1f} °{'':<24s} ║",
            f"╠══════════════════════════════════════════════════════╣",
            f"║  Range        : {self.range_total:>10.1f} m  ({self.range_total/1000:>7.2f} km){'':<6s} ║",
            f"║  Max altitude : {self.max_altitude:>10.1f} m  ({self.max_altitude/1000:>7.2f} km){'':<6s} ║",
            f"║  Flight time  : {self.flight_time:>10.2f} s{'':<24s} ║",
            f"║  Impact vel   : {self.impact_velocity:>10.1f} m/s{'':<22s} ║",
            f"║  Impact angle : {self.impact_angle_deg:>10.1f} °{'':<24s} ║",
            f"╚══════════════════════════════════════════════════════╝",
        ]
        return '\n'.join(lines)


def _record_state(state: FlightState, projectile: Projectile):
    """Derived aerodynamic quantities for one sample."""
    alt = max(state.pos.y, 0.0)
    spd = state.v.speed
    m = mach_from_speed(spd, alt)
    cd = projectile.drag_model.cd(m)
    rho = density_from_altitude(alt)
    return (state.t, state.pos.x, state.pos.y, state.v.dx, state.v.dy,
            spd, m, cd, rho)


def _ground_level(terrain: Optional[Terrain], position: Position) -> float:
    if terrain is None:
        return 0.0
    return terrain.elevation_meters(position)


def _impact_point(path, terrain: Optional[Terrain]) -> Position:
    last = path[-1].pos
    if len(path) < 2:
        return last
    prev = path[-2].pos

    above_prev = prev.y - _ground_level(terrain, prev)
    above_last = last.y - _ground_level(terrain, last)
    if above_last > 0.0 or above_prev <= 0.0:
        return last

    fraction = above_prev / (above_prev - above_last)
    return Position(prev.x + fraction * (last.x - prev.x),
                    prev.y + fraction * (last.y - prev.y))


def simulate_shot(elevation, muzzle_velocity: float = DEFAULT_MUZZLE_VELOCITY,
                  position: Optional[Position] = None, dt: float = 0.1,
                  max_time: float = 600.0,
                  projectile: Optional[Projectile] = None,
                  terrain: Optional[Terrain] = None) -> TrajectoryResult:
    """
    Fire one round and integrate until it lands.

    Parameters
    ----------
    elevation : Angle or float
        Barrel elevation; plain numbers are degrees from vertical.
    muzzle_velocity : float
        m/s
    position : Position
        Gun position, defaults to the origin.
    dt : float
        Fixed integration step (s).
    max_time : float
        Give up after this much flight time (s).
    projectile : Projectile
        Shell to fly; a fresh M795 by default. Its history is replaced.
    terrain : Terrain
        Ground to land on; the y = 0 datum when omitted.
    """
    if dt <= 0.0:
        raise ValueError(f"Time step must be positive, got {dt}")
    if max_time <= 0.0:
        raise ValueError(f"max_time must be positive, got {max_time}")

    angle = elevation.copy() if isinstance(elevation, Angle) else Angle(elevation)
    position = position if position is not None else Position()
    projectile = projectile if projectile is not None else Projectile()
    # Landing is tested here, against the terrain or the datum
    projectile.ground_check = False

    projectile.fire(position, angle, muzzle_velocity, 0.0)

    landed = False
    step = 0
    while projectile.is_flying:
        step += 1
        t = step * dt
        if t > max_time:
            break
        projectile.advance(t)
        current = projectile.position
        if current.y <= _ground_level(terrain, current):
            projectile.land()
            landed = True

    path = projectile.flight_path
    rows = [_record_state(state, projectile) for state in path]
    times, xs, ys, vxs, vys, speeds, machs, cds, rhos = (np.array(c) for c in zip(*rows))

    return TrajectoryResult(
        projectile=projectile,
        elevation_deg=angle.degrees,
        muzzle_velocity=muzzle_velocity,
        dt=dt,
        time=times,
        x=xs,
        y=ys,
        vx=vxs,
        vy=vys,
        speed=speeds,
        mach_history=machs,
        cd_history=cds,
        density_history=rhos,
        impact_point=_impact_point(path, terrain) if landed else path[-1].pos,
        landed=landed,
    )
