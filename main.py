#!/usr/bin/env python3
"""
═══════════════════════════════════════════════════════════════════════════════
  M777 HOWITZER SIMULATOR — Main Runner
═══════════════════════════════════════════════════════════════════════════════

  Executes the complete simulation pipeline:
    1. Atmospheric table check
    2. M795 Cd vs Mach curve
    3. Reference trajectory (45°, 827 m/s)
    4. Firing table across elevations
    5. Elevation solution for a chosen range
    6. Headless engagement on generated terrain
    7. Animated trajectory GIF

  All outputs saved to outputs/ directory.

  Usage:
    python main.py              # Run everything
    python main.py --quick      # Skip animation (faster)
    python main.py --verbose    # Log simulation events
═══════════════════════════════════════════════════════════════════════════════
"""

import sys
import copy
import os
import time
import logging
import numpy as np

from artillery.atmosphere import (
    gravity_from_altitude, density_from_altitude, speed_of_sound_from_altitude,
)
from artillery.drag_model import drag_from_mach
from artillery.integrator import simulate_shot
from artillery.range_table import build_range_table, estimate_angle_for_range
from artillery.simulation import Simulator
from artillery.terrain import Ground
from artillery.config import SimulationConfig, FIELD_WIDTH
from artillery.visualization import (
    plot_trajectory, plot_cd_vs_mach, plot_atmosphere, plot_range_table,
    plot_engagement, create_trajectory_animation, ensure_output_dir,
)

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt


def banner():
    print("""
╔═══════════════════════════════════════════════════════════════════════╗
║                                                                       ║
║     M777 HOWITZER SIMULATOR                                           ║
║     ─────────────────────────────────────────────────────             ║
║     M795 155mm · Gravity(h) · Drag(Mach) · Standard Atmosphere        ║
║     Forward Euler │ Terrain impact │ Firing tables                    ║
║                                                                       ║
╚═══════════════════════════════════════════════════════════════════════╝
""")


def section(title):
    print(f"\n{'─'*60}")
    print(f"  {title}")
    print(f"{'─'*60}")


def main():
    start_time = time.time()
    quick = '--quick' in sys.argv

    if '--verbose' in sys.argv:
        logging.basicConfig(level=logging.INFO,
                            format='  %(levelname)s %(name)s: %(message)s')

    banner()
    out = ensure_output_dir('outputs')

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 1: Atmospheric Tables
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 1: Standard Atmosphere Tables")
    print(f"  {'Alt (m)':>8} {'g (m/s²)':>9} {'ρ (kg/m³)':>11} {'a (m/s)':>8}")
    for h in [0, 1000, 5000, 10000, 20000, 40000, 80000]:
        print(f"  {h:>8} {gravity_from_altitude(h):>9.3f} "
              f"{density_from_altitude(h):>11.5f} "
              f"{speed_of_sound_from_altitude(h):>8.1f}")

    fig_atm = plot_atmosphere(save_path=f'{out}/01_atmosphere_tables.png')
    plt.close(fig_atm)
    print(f"\n  ✓ Saved: {out}/01_atmosphere_tables.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 2: Drag Coefficient Curve
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 2: M795 Cd vs Mach")
    fig_cd = plot_cd_vs_mach(save_path=f'{out}/02_cd_vs_mach.png')
    plt.close(fig_cd)
    print(f"  Cd @ M0.5={drag_from_mach(0.5):.3f}  Cd @ M1.06={drag_from_mach(1.06):.3f}  "
          f"Cd @ M2.0={drag_from_mach(2.0):.3f}")
    print(f"  ✓ Saved: {out}/02_cd_vs_mach.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 3: Reference Trajectory
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 3: Reference Trajectory (45°, 827 m/s)")
    reference = simulate_shot(45.0, 827.0, dt=0.1)
    print(reference.summary())

    fig_traj = plot_trajectory(reference, save_path=f'{out}/03_reference_trajectory.png')
    plt.close(fig_traj)
    print(f"  ✓ Saved: {out}/03_reference_trajectory.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 4: Firing Table
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 4: Firing Table")
    entries = build_range_table(np.arange(10.0, 86.0, 5.0), 827.0, dt=0.1)
    fig_table = plot_range_table(entries, save_path=f'{out}/04_firing_table.png')
    plt.close(fig_table)
    print(f"  ✓ Saved: {out}/04_firing_table.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 5: Elevation Solution
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 5: Elevation for a 15 km Range")
    for high_angle in (False, True):
        elevation = estimate_angle_for_range(15000.0, 827.0, dt=0.1,
                                             high_angle=high_angle)
        check = simulate_shot(elevation, 827.0, dt=0.1)
        kind = 'Plunging' if high_angle else 'Flat'
        print(f"  {kind:<9s} fire: {elevation:6.2f}°  →  "
              f"{check.range_total:8.0f} m in {check.flight_time:5.1f} s")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 6: Engagement
    # ══════════════════════════════════════════════════════════════════════
    section("PHASE 6: Engagement on Generated Terrain")
    rng = np.random.default_rng(777)
    terrain = Ground(width=FIELD_WIDTH, rng=rng)
    sim = Simulator(terrain, config=SimulationConfig())
    gun = sim.howitzer.position
    target = terrain.target_position()
    fire_left = target.x < gun.x
    if fire_left:
        # Left-pointing elevations live just under 360° in the Angle convention
        sim.howitzer.min_elevation = 275.0
        sim.howitzer.max_elevation = 360.0
    downrange = abs(target.x - gun.x)
    print(f"  Gun at x={gun.x:,.0f} m, target at x={target.x:,.0f} m "
          f"({downrange/1000:.1f} km, {target.y - gun.y:+.0f} m)")

    # Lay the gun from the level-ground table, then walk rounds onto the target
    try:
        tilt = estimate_angle_for_range(downrange, 827.0, dt=0.5)
        branch = 1.0
    except ValueError:
        # Closer than the flattest barrel reaches: lob it instead
        tilt = estimate_angle_for_range(downrange, 827.0, dt=0.5, high_angle=True)
        branch = -1.0
    last_path = ()
    for shot in range(8):
        sim.howitzer.set_elevation_degrees(360.0 - tilt if fire_left else tilt)
        field = copy.deepcopy(terrain)
        sim.fire()
        while sim.is_projectile_flying:
            # The projectile is reset on impact, so keep the path as it grows
            last_path = sim.projectile.flight_path
            sim.update()
        record = sim.last_shot
        print(f"  Round {shot + 1}: {record.elevation_deg:6.2f}°  impact x="
              f"{record.impact.x:9.0f} m  miss {record.distance:7.0f} m  "
              f"{'HIT' if record.hit else 'miss'}")
        if record.hit:
            break
        # A short round needs the barrel moved toward the maximum-range angle
        shortfall = downrange - abs(record.impact.x - gun.x)
        step = float(np.clip(shortfall / 400.0, -3.0, 3.0))
        tilt = float(np.clip(tilt - branch * step, 1.0, 85.0))

    print(f"\n  Score: {sim.score}/{sim.shots_attempted} ({sim.hit_rate*100:.0f}%)")
    fig_eng = plot_engagement(field, last_path, gun, FIELD_WIDTH,
                              save_path=f'{out}/05_engagement.png')
    plt.close(fig_eng)
    print(f"  ✓ Saved: {out}/05_engagement.png")

    # ══════════════════════════════════════════════════════════════════════
    #  PHASE 7: Trajectory Animation
    # ══════════════════════════════════════════════════════════════════════
    if not quick:
        section("PHASE 7: Trajectory Animation (GIF)")
        create_trajectory_animation(reference,
                                    save_path=f'{out}/06_trajectory_animation.gif',
                                    frames=120)
        print(f"  ✓ Saved: {out}/06_trajectory_animation.gif")
    else:
        section("PHASE 7: Animation SKIPPED (--quick mode)")

    # ══════════════════════════════════════════════════════════════════════
    #  SUMMARY
    # ══════════════════════════════════════════════════════════════════════
    elapsed = time.time() - start_time
    section("COMPLETE")
    print(f"""
  All outputs saved to: {os.path.abspath(out)}/

  Generated files:
    01_atmosphere_tables.png     — gravity, ρ, a vs altitude
    02_cd_vs_mach.png            — M795 drag curve
    03_reference_trajectory.png  — Single trajectory plot
    04_firing_table.png          — Range / apex / ToF vs elevation
    05_engagement.png            — Terrain, gun, target and last round
    {'06_trajectory_animation.gif — Animated trajectory' if not quick else '(animation skipped)'}

  Total runtime: {elapsed:.1f} seconds
""")


if __name__ == "__main__":
    main()
