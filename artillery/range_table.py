"""
Firing Tables
=============
Range, apex and time of flight of the M795 across barrel elevations, and
the inverse problem: which elevation puts a round at a given range.

For a fixed charge the range curve rises from zero (straight up) to a
maximum and falls again toward flat fire, so every reachable range has two
solutions:

  - flat fire      elevation past the maximum-range angle (nearer 90°)
  - plunging fire  elevation short of it (nearer vertical)

Elevations here follow the Angle convention: degrees from vertical.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np
from scipy.optimize import brentq, minimize_scalar

from .config import DEFAULT_MUZZLE_VELOCITY, MIN_ELEVATION_DEG, MAX_ELEVATION_DEG
from .integrator import simulate_shot

logger = logging.getLogger(__name__)


@dataclass
class RangeTableEntry:
    """One row of a firing table."""
    elevation_deg: float
    range_m: float
    max_altitude_m: float
    time_of_flight_s: float
    impact_velocity: float   # m/s


def estimate_range(elevation_deg: float,
                   muzzle_velocity: float = DEFAULT_MUZZLE_VELOCITY,
                   dt: float = 0.1) -> float:
    """Range (m) over level ground at the given elevation."""
    return simulate_shot(elevation_deg, muzzle_velocity, dt=dt).range_total


def build_range_table(elevations: Iterable[float],
                      muzzle_velocity: float = DEFAULT_MUZZLE_VELOCITY,
                      dt: float = 0.1,
                      verbose: bool = True) -> List[RangeTableEntry]:
    """
    Fly one round per elevation over level ground and tabulate the results.
    """
    entries = []

    if verbose:
        print(f"\n{'='*64}")
        print(f"  FIRING TABLE: M795 155mm HE @ {muzzle_velocity:.0f} m/s")
        print(f"{'='*64}")
        print(f"{'Elev°':>7} {'Range (m)':>11} {'Apex (m)':>10} "
              f"{'ToF (s)':>9} {'Impact (m/s)':>13}")
        print("-" * 64)

    for elevation in elevations:
        traj = simulate_shot(elevation, muzzle_velocity, dt=dt)
        entry = RangeTableEntry(
            elevation_deg=float(elevation),
            range_m=traj.range_total,
            max_altitude_m=traj.max_altitude,
            time_of_flight_s=traj.flight_time,
            impact_velocity=traj.impact_velocity,
        )
        entries.append(entry)

        if verbose:
            print(f"{entry.elevation_deg:>7.1f} {entry.range_m:>11.0f} "
                  f"{entry.max_altitude_m:>10.0f} {entry.time_of_flight_s:>9.1f} "
                  f"{entry.impact_velocity:>13.1f}")

    if verbose and entries:
        best = max(entries, key=lambda e: e.range_m)
        print("-" * 64)
        print(f"  Longest range: {best.range_m/1000:.2f} km at {best.elevation_deg:.1f}°")
        print(f"{'='*64}\n")

    return entries


def max_range_elevation(muzzle_velocity: float = DEFAULT_MUZZLE_VELOCITY,
                        dt: float = 0.1,
                        min_elevation: float = MIN_ELEVATION_DEG,
                        max_elevation: float = MAX_ELEVATION_DEG) -> float:
    """Elevation (degrees from vertical) giving the longest range."""
    result = minimize_scalar(
        lambda e: -estimate_range(e, muzzle_velocity, dt),
        bounds=(min_elevation, max_elevation),
        method='bounded',
        options={'xatol': 1e-3},
    )
    return float(result.x)


def estimate_angle_for_range(target_range: float,
                             muzzle_velocity: float = DEFAULT_MUZZLE_VELOCITY,
                             dt: float = 0.1,
                             high_angle: bool = False,
                             min_elevation: float = MIN_ELEVATION_DEG,
                             max_elevation: float = MAX_ELEVATION_DEG) -> float:
    """
    Elevation (degrees from vertical) that lands a round ``target_range``
    meters downrange over level ground.

    ``high_angle`` selects plunging fire instead of flat fire. Raises
    ValueError when the range cannot be reached within the elevation limits.
    """
    if target_range < 0.0:
        raise ValueError(f"Target range cannot be negative, got {target_range}")

    def miss_distance(elevation):
        return estimate_range(elevation, muzzle_velocity, dt) - target_range

    best = max_range_elevation(muzzle_velocity, dt, min_elevation, max_elevation)
    best_miss = miss_distance(best)
    if best_miss < 0.0:
        raise ValueError(
            f"Range {target_range:.0f} m is beyond the maximum of "
            f"{target_range + best_miss:.0f} m at {muzzle_velocity:.0f} m/s")

    limit = min_elevation if high_angle else max_elevation
    limit_miss = miss_distance(limit)
    if np.isclose(best_miss, 0.0):
        return best
    if limit_miss > 0.0:
        raise ValueError(
            f"Range {target_range:.0f} m is too short for "
            f"{'plunging' if high_angle else 'flat'} fire within "
            f"[{min_elevation}°, {max_elevation}°]")

    lo, hi = sorted((best, limit))
    elevation = brentq(miss_distance, lo, hi, xtol=1e-4)
    logger.debug("Range %.0f m -> elevation %.3f°", target_range, elevation)
    return float(elevation)
