"""
Force & Kinematics Primitives
=============================
Atomic building blocks composed by the projectile integrator:

  - Reference area from radius        A = π·r²
  - Aerodynamic drag force            F = ½·ρ·Cd·A·v²
  - Newton's second law               a = F / m
  - Velocity imparted over time       v = a·t
  - Linear interpolation, between two points or over a lookup table

All quantities are SI. Negative radius, density, drag coefficient, speed or
time and non-positive mass are rejected with ValueError.
"""

import math
from typing import NamedTuple, Sequence, Union

import numpy as np
from scipy.interpolate import interp1d


def area_from_radius(radius: float) -> float:
    """Cross-sectional area of a circle (m²)."""
    if radius < 0.0:
        raise ValueError(f"Radius cannot be negative, got {radius}")
    return math.pi * radius * radius


def force_from_drag(density: float, drag: float, radius: float,
                    speed: float) -> float:
    """
    Magnitude of the drag force on a shell (N).

    Parameters
    ----------
    density : float
        Air density (kg/m³)
    drag : float
        Drag coefficient (dimensionless)
    radius : float
        Shell radius (m)
    speed : float
        Speed through the air (m/s), a magnitude
    """
    if density < 0.0:
        raise ValueError(f"Air density cannot be negative, got {density}")
    if drag < 0.0:
        raise ValueError(f"Drag coefficient cannot be negative, got {drag}")
    if speed < 0.0:
        raise ValueError(f"Speed cannot be negative, got {speed}")
    return 0.5 * density * drag * area_from_radius(radius) * speed * speed


def acceleration_from_force(force: float, mass: float) -> float:
    """a = F / m  (m/s²)"""
    if mass <= 0.0:
        raise ValueError(f"Mass must be positive, got {mass}")
    return force / mass


def velocity_from_acceleration(acceleration: float, time: float) -> float:
    """v = a·t  (m/s)"""
    if time < 0.0:
        raise ValueError(f"Time cannot be negative, got {time}")
    return acceleration * time


def linear_interpolation(d0: float, r0: float, d1: float, r1: float,
                         d: float) -> float:
    """
    Value at ``d`` on the line through (d0, r0) and (d1, r1).

        r = r0 + (r1 - r0) · (d - d0) / (d1 - d0)
    """
    if d1 == d0:
        raise ValueError(f"Interpolation interval is empty: d0 == d1 == {d0}")
    return r0 + (r1 - r0) * (d - d0) / (d1 - d0)


class Mapping(NamedTuple):
    """One (domain, range) row of a lookup table."""
    domain: float
    range: float


class InterpolationTable:
    """
    Piecewise-linear lookup over (domain, range) rows.

    Rows must be sorted ascending by domain; this is a precondition of the
    binary search and is not checked. Lookups outside the table return the
    first or last range value (no extrapolation).
    """

    def __init__(self, mapping: Sequence, name: str = ''):
        rows = tuple(Mapping(float(d), float(r)) for d, r in mapping)
        if not rows:
            raise ValueError("Interpolation table needs at least one row")

        self.name = name
        self.mapping = rows
        self.domain = np.array([row.domain for row in rows])
        self.range = np.array([row.range for row in rows])
        self.domain.setflags(write=False)
        self.range.setflags(write=False)

        self._interp = None
        if len(rows) > 1:
            self._interp = interp1d(
                self.domain, self.range,
                kind='linear',
                bounds_error=False,
                fill_value=(self.range[0], self.range[-1]),
                assume_sorted=True,
            )

    def __len__(self) -> int:
        return len(self.mapping)

    def __call__(self, value: float) -> float:
        domain, rng = self.domain, self.range

        if value <= domain[0]:
            return float(rng[0])
        if value >= domain[-1]:
            return float(rng[-1])

        # domain[left] <= value < domain[right]
        right = int(np.searchsorted(domain, value, side='right'))
        left = right - 1
        return linear_interpolation(domain[left], rng[left],
                                    domain[right], rng[right], value)

    def profile(self, values: np.ndarray) -> np.ndarray:
        """Vectorized lookup with the same clamping rules."""
        values = np.asarray(values, dtype=float)
        if self._interp is None:
            return np.full_like(values, self.range[0])
        return np.asarray(self._interp(values), dtype=float)

    def __repr__(self) -> str:
        return f"InterpolationTable({self.name!r}, rows={len(self)})"


def interpolate(table: Union[InterpolationTable, Sequence], domain: float) -> float:
    """Linear interpolation over a lookup table, clamped at both ends."""
    if not isinstance(table, InterpolationTable):
        table = InterpolationTable(table)
    return table(domain)
