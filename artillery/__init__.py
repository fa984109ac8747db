"""
M777 Howitzer Ballistics Simulator
==================================
Planar artillery ballistics for the M795 155 mm shell fired from an M777
howitzer:
  - Altitude-dependent gravity
  - Mach-dependent aerodynamic drag (M795 curve, transonic drag rise)
  - Standard-atmosphere density and speed of sound tables to 80 km
  - Fixed-step forward-Euler integration with a recorded flight history
  - Terrain collision, hit scoring and firing tables

Angles are measured clockwise from vertical "up": 0° fires straight up,
90° fires level downrange.
"""

from .angle import Angle, normalize
from .vectors import Position, Velocity, Acceleration
from .physics import (
    area_from_radius, force_from_drag, acceleration_from_force,
    velocity_from_acceleration, linear_interpolation,
    Mapping, InterpolationTable, interpolate,
)
from .atmosphere import (
    gravity_from_altitude, density_from_altitude,
    speed_of_sound_from_altitude, mach_from_speed, atmosphere_profile,
)
from .drag_model import DragModel, M795, drag_from_mach
from .projectile import Projectile, FlightState
from .howitzer import Howitzer
from .terrain import Terrain, FlatGround, Ground
from .simulation import Simulator, SimulationState, ShotRecord, Controls
from .integrator import simulate_shot, TrajectoryResult
from .range_table import (
    RangeTableEntry, estimate_range, build_range_table,
    max_range_elevation, estimate_angle_for_range,
)
from .config import SimulationConfig
from .visualization import (
    ViewMapping, plot_trajectory, plot_cd_vs_mach, plot_atmosphere,
    plot_range_table, plot_engagement, create_trajectory_animation,
)

__version__ = "1.0.0"
__all__ = [
    'Angle', 'normalize',
    'Position', 'Velocity', 'Acceleration',
    'area_from_radius', 'force_from_drag', 'acceleration_from_force',
    'velocity_from_acceleration', 'linear_interpolation',
    'Mapping', 'InterpolationTable', 'interpolate',
    'gravity_from_altitude', 'density_from_altitude',
    'speed_of_sound_from_altitude', 'mach_from_speed', 'atmosphere_profile',
    'DragModel', 'M795', 'drag_from_mach',
    'Projectile', 'FlightState',
    'Howitzer',
    'Terrain', 'FlatGround', 'Ground',
    'Simulator', 'SimulationState', 'ShotRecord', 'Controls',
    'simulate_shot', 'TrajectoryResult',
    'RangeTableEntry', 'estimate_range', 'build_range_table',
    'max_range_elevation', 'estimate_angle_for_range',
    'SimulationConfig',
    'ViewMapping', 'plot_trajectory', 'plot_cd_vs_mach', 'plot_atmosphere',
    'plot_range_table', 'plot_engagement', 'create_trajectory_animation',
]
