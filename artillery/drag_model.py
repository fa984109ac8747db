"""
Aerodynamic Drag Model
======================
Mach-dependent drag coefficient (Cd) of the M795 155 mm projectile.

The curve shows the characteristic transonic drag rise: Cd climbs steeply
from Mach 0.89, peaks at 0.4483 near Mach 1.06 and tapers off through the
supersonic regime.
"""

import numpy as np

from .physics import InterpolationTable


# ══════════════════════════════════════════════════════════════════════════
#  Cd vs Mach: (Mach, Cd) pairs for the M795
# ══════════════════════════════════════════════════════════════════════════

M795_DRAG_TABLE = InterpolationTable([
    (0.0,  0.0),
    (0.1,  0.0543),
    (0.3,  0.1629),
    (0.5,  0.1659),
    (0.7,  0.2031),
    (0.89, 0.2597),
    (0.92, 0.3010),
    (0.96, 0.3287),
    (0.98, 0.4002),
    (1.00, 0.4258),
    (1.02, 0.4335),
    (1.06, 0.4483),
    (1.24, 0.4064),
    (1.53, 0.3663),
    (1.99, 0.2897),
    (2.87, 0.2297),
    (2.89, 0.2306),
    (5.00, 0.2656),
], name='M795')


class DragModel:
    """
    Drag coefficient model for a projectile type.

    Linear interpolation over the Cd vs Mach table, held constant beyond
    the table limits.
    """

    def __init__(self, table: InterpolationTable = M795_DRAG_TABLE,
                 name: str = 'M795 155mm HE'):
        self.table = table
        self.name = name

    def cd(self, mach: float) -> float:
        """Return drag coefficient at the given Mach number."""
        return self.table(mach)

    def cd_array(self, mach_array: np.ndarray) -> np.ndarray:
        """Vectorized Cd lookup."""
        return self.table.profile(mach_array)


M795 = DragModel()


def drag_from_mach(mach: float) -> float:
    """Drag coefficient of the M795 at the given Mach number."""
    return M795.cd(mach)


if __name__ == "__main__":
    print("Drag Model — M795 Cd vs Mach")
    print("=" * 30)
    for mach in [0.0, 0.5, 0.9, 1.0, 1.06, 1.5, 2.0, 3.0, 5.0]:
        print(f"  Mach {mach:>4.2f}  Cd = {drag_from_mach(mach):.4f}")
