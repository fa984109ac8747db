"""
Visualization Engine
====================
The rendering collaborator. Reads trajectories and flight histories; the
physics never draws.

  1. Trajectory (altitude vs range)
  2. Cd vs Mach curve (M795)
  3. Atmospheric tables
  4. Firing table (range / apex / time of flight vs elevation)
  5. Engagement view (terrain, gun, target, shot)
  6. Animated trajectory (saved as GIF)

Screen coordinates go through ``ViewMapping``, which owns the
meters-per-pixel scale.
"""

import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from .atmosphere import atmosphere_profile
from .config import METERS_PER_PIXEL, TRAIL_LENGTH
from .drag_model import M795, DragModel
from .integrator import TrajectoryResult
from .projectile import FlightState
from .range_table import RangeTableEntry
from .terrain import Terrain
from .vectors import Position

logger = logging.getLogger(__name__)


# ── Style Configuration ───────────────────────────────────────────────────
STYLE = {
    'bg_color': '#0a0a0a',
    'text_color': '#e0e0e0',
    'grid_color': '#333333',
    'accent_colors': ['#00d4ff', '#ff6b35', '#00e676', '#ffeb3b',
                      '#e040fb', '#ff5252'],
    'font_family': 'monospace',
}

LEGEND_STYLE = dict(facecolor='#1a1a1a', edgecolor='#444',
                    labelcolor=STYLE['text_color'])


@dataclass
class ViewMapping:
    """Converts between field meters and screen pixels."""
    meters_per_pixel: float = METERS_PER_PIXEL

    def __post_init__(self):
        if self.meters_per_pixel <= 0.0:
            raise ValueError(
                f"meters_per_pixel must be positive, got {self.meters_per_pixel}")

    def to_pixels(self, position: Position) -> Tuple[float, float]:
        return (position.x / self.meters_per_pixel,
                position.y / self.meters_per_pixel)

    def from_pixels(self, x_pixels: float, y_pixels: float) -> Position:
        return Position(x_pixels * self.meters_per_pixel,
                        y_pixels * self.meters_per_pixel)

    def path_to_pixels(self, path: Sequence[FlightState]) -> np.ndarray:
        """Flight history as an (N, 2) array of pixel coordinates."""
        if not path:
            return np.empty((0, 2))
        meters = np.array([(s.pos.x, s.pos.y) for s in path])
        return meters / self.meters_per_pixel


def _apply_dark_style(fig, axes):
    """Apply consistent dark theme to figure and axes."""
    fig.patch.set_facecolor(STYLE['bg_color'])
    if not isinstance(axes, np.ndarray):
        axes = [axes]
    else:
        axes = axes.flatten()

    for ax in axes:
        ax.set_facecolor(STYLE['bg_color'])
        ax.tick_params(colors=STYLE['text_color'])
        ax.xaxis.label.set_color(STYLE['text_color'])
        ax.yaxis.label.set_color(STYLE['text_color'])
        ax.title.set_color(STYLE['text_color'])
        ax.grid(True, color=STYLE['grid_color'], alpha=0.4, linewidth=0.5)
        for spine in ax.spines.values():
            spine.set_color(STYLE['grid_color'])


def _save(fig, save_path: Optional[str]):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight',
                    facecolor=STYLE['bg_color'])
        logger.debug("Saved figure %s", save_path)


def ensure_output_dir(path: str = 'outputs'):
    os.makedirs(path, exist_ok=True)
    return path


# ══════════════════════════════════════════════════════════════════════════
#  1. Single Trajectory Plot
# ══════════════════════════════════════════════════════════════════════════

def plot_trajectory(result: TrajectoryResult, save_path: str = None,
                    show: bool = False) -> plt.Figure:
    """Altitude vs downrange for a single trajectory."""
    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    ax.plot(result.x / 1000, result.y / 1000,
            color=STYLE['accent_colors'][0], linewidth=2.5, label='M795')

    ax.plot(result.x[0] / 1000, result.y[0] / 1000, 'o', color='#00e676',
            markersize=10, label='Launch', zorder=5)
    ax.plot(result.impact_point.x / 1000, result.impact_point.y / 1000, 'x',
            color='#ff5252', markersize=12, markeredgewidth=3,
            label='Impact', zorder=5)

    idx_max = np.argmax(result.y)
    ax.plot(result.x[idx_max] / 1000, result.y[idx_max] / 1000, '^',
            color='#ffeb3b', markersize=10, label='Apex', zorder=5)

    ax.set_xlabel('Downrange (km)', fontsize=12)
    ax.set_ylabel('Altitude (km)', fontsize=12)
    ax.set_title(f'M795 Trajectory (v₀={result.muzzle_velocity:.0f} m/s, '
                 f'θ={result.elevation_deg:.1f}°, dt={result.dt}s)',
                 fontsize=13, fontweight='bold')
    ax.legend(loc='upper right', fontsize=10, **LEGEND_STYLE)
    ax.set_ylim(bottom=0)

    _save(fig, save_path)
    if show:
        plt.show()
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  2. Cd vs Mach Curve
# ══════════════════════════════════════════════════════════════════════════

def plot_cd_vs_mach(save_path: str = None,
                    drag_model: DragModel = M795) -> plt.Figure:
    """Plot Cd vs Mach with the tabulated points marked."""
    fig, ax = plt.subplots(figsize=(11, 6))
    _apply_dark_style(fig, ax)

    mach_range = np.linspace(0, 5.0, 500)
    ax.plot(mach_range, drag_model.cd_array(mach_range), color='#f39c12',
            linewidth=2.5, label=drag_model.name)
    ax.plot(drag_model.table.domain, drag_model.table.range, 'o',
            color='#ffeb3b', markersize=5, label='Table points')

    # Annotate transonic region
    ax.axvspan(0.8, 1.2, alpha=0.08, color='#ff5252')
    ax.text(1.0, 0.03, 'Transonic\nRegion', ha='center',
            color='#ff5252', fontsize=10, alpha=0.7)

    ax.set_xlabel('Mach Number', fontsize=12)
    ax.set_ylabel('Drag Coefficient (Cd)', fontsize=12)
    ax.set_title(f'Drag Coefficient vs Mach Number — {drag_model.name}',
                 fontsize=14, fontweight='bold')
    ax.legend(fontsize=11, **LEGEND_STYLE)
    ax.set_xlim(0, 5.0)
    ax.set_ylim(0, 0.5)

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  3. Atmospheric Tables
# ══════════════════════════════════════════════════════════════════════════

def plot_atmosphere(save_path: str = None, top: float = 80000.0) -> plt.Figure:
    """Gravity, density and speed of sound from sea level to ``top``."""
    altitudes = np.linspace(0, top, 500)
    profile = atmosphere_profile(altitudes)

    fig, axes = plt.subplots(1, 3, figsize=(15, 7), sharey=True)
    _apply_dark_style(fig, axes)

    alt_km = altitudes / 1000

    params = [
        ('Gravity (m/s²)', profile['gravity'], '#ff6b35'),
        ('Density (kg/m³)', profile['density'], '#00e676'),
        ('Speed of Sound (m/s)', profile['speed_of_sound'], '#ffeb3b'),
    ]

    for ax, (title, data, color) in zip(axes, params):
        ax.plot(data, alt_km, color=color, linewidth=2)
        ax.set_xlabel(title, fontsize=10)

    axes[0].set_ylabel('Altitude (km)', fontsize=12)
    fig.suptitle('Standard Atmosphere Tables',
                 fontsize=14, fontweight='bold', color=STYLE['text_color'])
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  4. Firing Table
# ══════════════════════════════════════════════════════════════════════════

def plot_range_table(entries: List[RangeTableEntry],
                     save_path: str = None) -> plt.Figure:
    """Range, apex and time of flight against elevation."""
    fig, axes = plt.subplots(1, 3, figsize=(18, 5))
    _apply_dark_style(fig, axes)

    elevations = [e.elevation_deg for e in entries]
    series = [
        ('Range (km)', [e.range_m / 1000 for e in entries], '#00d4ff'),
        ('Apex (km)', [e.max_altitude_m / 1000 for e in entries], '#ffeb3b'),
        ('Time of Flight (s)', [e.time_of_flight_s for e in entries], '#e040fb'),
    ]

    for ax, (label, values, color) in zip(axes, series):
        ax.plot(elevations, values, 'o-', color=color, linewidth=2, markersize=6)
        ax.set_xlabel('Elevation from vertical (°)')
        ax.set_ylabel(label)
        ax.set_title(label.split(' (')[0], fontweight='bold')

    fig.suptitle('M795 Firing Table', fontsize=14, fontweight='bold',
                 color=STYLE['text_color'], y=1.02)
    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  5. Engagement View
# ══════════════════════════════════════════════════════════════════════════

def plot_engagement(terrain: Terrain, path: Sequence[FlightState],
                    howitzer_position: Position, width: float,
                    save_path: str = None,
                    view: Optional[ViewMapping] = None) -> plt.Figure:
    """Terrain profile with the gun, the target and one shot, in pixels."""
    view = view if view is not None else ViewMapping()

    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    xs = np.linspace(0.0, width, 400)
    ground = np.array([terrain.elevation_meters(Position(x, 0.0)) for x in xs])
    ax.fill_between(xs / view.meters_per_pixel, 0, ground / view.meters_per_pixel,
                    color='#2e7d32', alpha=0.6)

    pixels = view.path_to_pixels(path)
    if len(pixels):
        ax.plot(pixels[:, 0], pixels[:, 1], color='#00d4ff', linewidth=1.5,
                label='Shot')

    gun_px = view.to_pixels(howitzer_position)
    target_px = view.to_pixels(terrain.target_position())
    ax.plot(*gun_px, 's', color='#ffeb3b', markersize=10, label='Howitzer')
    ax.plot(*target_px, 'X', color='#ff5252', markersize=12, label='Target')

    ax.set_xlim(0, width / view.meters_per_pixel)
    ax.set_ylim(bottom=0)
    ax.set_xlabel(f'x (px, {view.meters_per_pixel:.0f} m/px)')
    ax.set_ylabel('y (px)')
    ax.set_title('Engagement', fontweight='bold')
    ax.legend(fontsize=10, **LEGEND_STYLE)

    _save(fig, save_path)
    return fig


# ══════════════════════════════════════════════════════════════════════════
#  6. Animated Trajectory (GIF)
# ══════════════════════════════════════════════════════════════════════════

def _tick_indices(n_ticks: int, frames: int) -> List[int]:
    """
    History indices to draw, one per frame.

    Every recorded tick gets its own frame until there are more ticks than
    ``frames``; then ticks are skipped evenly. The impact sample always
    closes the sequence.
    """
    if n_ticks <= frames:
        return list(range(n_ticks))
    picked = np.linspace(0, n_ticks - 1, frames).round().astype(int)
    return sorted(set(picked.tolist()) | {n_ticks - 1})


def create_trajectory_animation(result: TrajectoryResult,
                                save_path: str = 'outputs/trajectory_anim.gif',
                                frames: int = 100,
                                trail_length: int = TRAIL_LENGTH) -> str:
    """
    Replay the recorded flight history as a GIF.

    Each frame is a tick of the integrator. The shell leaves a smoke trail
    of its last ``trail_length`` recorded positions over the faint full
    path, and the readout shows the M795 drag state at that tick.
    """
    from matplotlib.animation import FuncAnimation, PillowWriter

    if frames < 1:
        raise ValueError(f"frames must be at least 1, got {frames}")

    fig, ax = plt.subplots(figsize=(12, 6))
    _apply_dark_style(fig, ax)

    x_km = result.x / 1000
    y_km = result.y / 1000
    ticks = _tick_indices(len(result.time), frames)

    ax.plot(x_km, y_km, color=STYLE['grid_color'], linewidth=1.0, linestyle=':')
    ax.plot(result.impact_point.x / 1000, result.impact_point.y / 1000, 'x',
            color='#ff5252', markersize=10, markeredgewidth=2, alpha=0.5)
    ax.set_xlim(min(0.0, x_km.min()) - 0.05, max(x_km.max(), 0.1) * 1.05)
    ax.set_ylim(min(0.0, y_km.min()), max(y_km.max(), 0.1) * 1.15)
    ax.set_xlabel('Downrange (km)', fontsize=12)
    ax.set_ylabel('Altitude (km)', fontsize=12)
    ax.set_title(f'M795 flight replay ({len(result.time)} ticks at dt={result.dt}s)',
                 fontsize=13, fontweight='bold')

    smoke, = ax.plot([], [], 'o', color='#9e9e9e', markersize=3, alpha=0.5)
    shell, = ax.plot([], [], 'o', color='#00d4ff', markersize=8)
    readout = ax.text(0.02, 0.95, '', transform=ax.transAxes,
                      color=STYLE['text_color'], fontsize=10,
                      fontfamily=STYLE['font_family'], va='top')

    def draw_tick(frame):
        k = ticks[frame]
        tail = slice(max(0, k - trail_length), k)
        smoke.set_data(x_km[tail], y_km[tail])
        shell.set_data([x_km[k]], [y_km[k]])
        readout.set_text(
            f"tick {k:>4d}/{len(result.time) - 1}  t={result.time[k]:6.1f}s\n"
            f"Mach {result.mach_history[k]:4.2f}  Cd {result.cd_history[k]:.3f}  "
            f"rho {result.density_history[k]:.3f} kg/m³\n"
            f"alt {result.y[k]:7.0f} m  v {result.speed[k]:5.0f} m/s")
        return smoke, shell, readout

    anim = FuncAnimation(fig, draw_tick, frames=len(ticks), interval=50, blit=True)
    anim.save(save_path, writer=PillowWriter(fps=20),
              savefig_kwargs={'facecolor': STYLE['bg_color']})
    plt.close(fig)
    logger.info("Animation saved: %s (%d of %d ticks)",
                save_path, len(ticks), len(result.time))
    return save_path
