"""
Main black hole runner script.

Usage:
    python scripts/run_black_hole.py configs/solar_mass.yaml

This script:
1. Loads configuration from YAML file
2. Builds the black hole and prints its observables
3. Applies each aging step and reports radiated energy
4. Tabulates observables over a mass sweep
5. Saves results to HDF5 files and generates a plot
"""

import sys
import argparse
import logging
from pathlib import Path

# Add src to path so we can import hawking package
sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from hawking.config import BlackHoleParameters
from hawking.analysis import mass_grid, observable_table, summarize, TABLE_UNITS
from hawking.output import save_black_hole, save_observable_table
from hawking.visualization import plot_observables_vs_mass


def print_observables(black_hole):
    """Print every observable in its display unit."""
    snapshot = black_hole.snapshot()
    for name in ("mass", "radius", "area", "gravity", "energy", "luminosity", "lifetime"):
        print(f"  {name:<11s} {snapshot[name]:.4e} {snapshot[name + '_unit']}")
    print(f"  {'entropy':<11s} {snapshot['entropy']:.4e} k_B")


def main():
    parser = argparse.ArgumentParser(
        description='Compute Schwarzschild black hole observables'
    )
    parser.add_argument(
        'config',
        type=str,
        help='Path to YAML configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory (default: from config)'
    )
    parser.add_argument(
        '--skip-plots',
        action='store_true',
        help='Skip plot generation'
    )

    args = parser.parse_args()

    # Load configuration
    print(f"Loading configuration from {args.config}...")
    params = BlackHoleParameters.from_yaml(args.config)

    logging.basicConfig(level=params.log_level.upper(),
                        format='%(levelname)s %(name)s: %(message)s')

    # Validate before building anything
    messages = params.validate()
    for message in messages:
        print(message)
    if any(m.startswith("ERROR") for m in messages):
        print("Configuration has ERRORS; aborting.")
        sys.exit(1)

    output_dir = Path(args.output) if args.output else Path(params.output_directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    print(f"Output will be saved to: {output_dir}")
    print()

    # Build black hole
    black_hole = params.build_black_hole()

    print("=" * 70)
    print(f"BLACK HOLE: {params.name}")
    print("=" * 70)
    print_observables(black_hole)

    summary = summarize(black_hole)
    print(f"  {'temperature':<11s} {summary['temperature_K']:.4e} K")
    print(f"  lifetime / age of universe: {summary['lifetime_universe_ages']:.4e}")
    print("=" * 70)
    print()

    save_black_hole(black_hole, output_dir / f"{params.name}_initial.h5")

    # Aging
    for step in params.aging_steps():
        radiated = black_hole.age_by(step)
        print(f"Aged by {step.magnitude:g} {step.units:~}: "
              f"radiated {radiated.magnitude:.4e} {radiated.units:~}")
        if black_hole.mass.magnitude == 0:
            print("Black hole has evaporated completely.")
            break

    if params.age_by:
        print()
        print("After aging:")
        print_observables(black_hole)
        print()
        save_black_hole(black_hole, output_dir / f"{params.name}_final.h5")

    # Sweep
    masses = mass_grid(params.sweep_min_kg, params.sweep_max_kg, params.sweep_points)
    table = observable_table(masses)
    table_path = output_dir / f"{params.name}_sweep.h5"
    save_observable_table(table, table_path, TABLE_UNITS)
    print(f"Saved {params.sweep_points}-point observable sweep to {table_path}")

    # Plots
    if not args.skip_plots:
        plot_path = output_dir / f"{params.name}_observables.png"
        plot_observables_vs_mass(table, plot_path, mark_mass_kg=summary['mass_kg'])
        print(f"Saved plot to {plot_path}")
    else:
        print("Skipping plot generation (--skip-plots)")

    print()
    print("Done!")


if __name__ == '__main__':
    main()
