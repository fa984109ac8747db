"""
Standard Atmosphere Tables
==========================
Gravity, air density and speed of sound as functions of altitude, looked up
by piecewise-linear interpolation over tabulated standard-atmosphere values
from sea level to 80 km.

Below sea level the sea-level row applies; above 80 km the 80 km row does.
"""

import numpy as np

from .physics import InterpolationTable


# ══════════════════════════════════════════════════════════════════════════
#  Reference tables: (altitude m, value)
# ══════════════════════════════════════════════════════════════════════════

# Gravitational acceleration (m/s²)
GRAVITY_TABLE = InterpolationTable([
    (0.0,     9.807),
    (1000.0,  9.804),
    (2000.0,  9.801),
    (3000.0,  9.797),
    (4000.0,  9.794),
    (5000.0,  9.791),
    (6000.0,  9.788),
    (7000.0,  9.785),
    (8000.0,  9.782),
    (9000.0,  9.779),
    (10000.0, 9.776),
    (15000.0, 9.761),
    (20000.0, 9.745),
    (25000.0, 9.730),
    (30000.0, 9.715),
    (40000.0, 9.684),
    (50000.0, 9.654),
    (60000.0, 9.624),
    (70000.0, 9.594),
    (80000.0, 9.564),
], name='gravity')

# Air density (kg/m³)
DENSITY_TABLE = InterpolationTable([
    (0.0,     1.225),
    (1000.0,  1.112),
    (2000.0,  1.007),
    (3000.0,  0.9093),
    (4000.0,  0.8194),
    (5000.0,  0.7364),
    (6000.0,  0.6601),
    (7000.0,  0.5900),
    (8000.0,  0.5258),
    (9000.0,  0.4671),
    (10000.0, 0.4135),
    (15000.0, 0.1948),
    (20000.0, 0.08891),
    (25000.0, 0.04008),
    (30000.0, 0.01841),
    (40000.0, 0.003996),
    (50000.0, 0.001027),
    (60000.0, 0.0003097),
    (70000.0, 0.0000828),
    (80000.0, 0.0000185),
], name='density')

# Speed of sound (m/s), follows the temperature profile
SPEED_OF_SOUND_TABLE = InterpolationTable([
    (0.0,     340.0),
    (1000.0,  336.0),
    (2000.0,  332.0),
    (3000.0,  328.0),
    (4000.0,  324.0),
    (5000.0,  320.0),
    (6000.0,  316.0),
    (7000.0,  312.0),
    (8000.0,  308.0),
    (9000.0,  303.0),
    (10000.0, 299.0),
    (15000.0, 295.0),
    (20000.0, 295.0),
    (25000.0, 295.0),
    (30000.0, 305.0),
    (40000.0, 324.0),
    (50000.0, 337.0),
    (60000.0, 319.0),
    (70000.0, 289.0),
    (80000.0, 269.0),
], name='speed_of_sound')


def gravity_from_altitude(altitude: float) -> float:
    """Gravitational acceleration (m/s²) at a given altitude (m)."""
    return GRAVITY_TABLE(altitude)


def density_from_altitude(altitude: float) -> float:
    """Air density (kg/m³) at a given altitude (m)."""
    return DENSITY_TABLE(altitude)


def speed_of_sound_from_altitude(altitude: float) -> float:
    """Local speed of sound (m/s) at a given altitude (m)."""
    return SPEED_OF_SOUND_TABLE(altitude)


def mach_from_speed(speed: float, altitude: float) -> float:
    """
    Mach number = |v| / a(h).
    """
    speed_of_sound = speed_of_sound_from_altitude(altitude)
    if speed_of_sound <= 0.0:
        raise ValueError(
            f"Speed of sound must be positive, got {speed_of_sound} "
            f"at altitude {altitude} m")
    return speed / speed_of_sound


# ── Vectorized versions for plotting ──────────────────────────────────────
def atmosphere_profile(alt_array: np.ndarray) -> dict:
    """
    Atmospheric properties for an array of altitudes.
    Returns dict with keys: 'altitude', 'gravity', 'density', 'speed_of_sound'.
    """
    alt_array = np.asarray(alt_array, dtype=float)
    return {
        'altitude': alt_array,
        'gravity': GRAVITY_TABLE.profile(alt_array),
        'density': DENSITY_TABLE.profile(alt_array),
        'speed_of_sound': SPEED_OF_SOUND_TABLE.profile(alt_array),
    }


if __name__ == "__main__":
    print("Standard Atmosphere Tables")
    print("=" * 48)
    print(f"{'Alt (m)':>10} {'g (m/s²)':>10} {'ρ (kg/m³)':>12} {'a (m/s)':>10}")
    print("-" * 48)
    for h in [0, 1000, 5000, 10000, 15000, 20000, 40000, 80000]:
        print(f"{h:>10.0f} {gravity_from_altitude(h):>10.3f} "
              f"{density_from_altitude(h):>12.5f} "
              f"{speed_of_sound_from_altitude(h):>10.1f}")
