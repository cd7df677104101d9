"""
Plots of black hole observables.

All plots are saved as PNG files with publication-quality settings (300 DPI).
"""

from pathlib import Path
from typing import Dict, Optional

import numpy as np
import matplotlib
matplotlib.use('Agg')  # Use non-interactive backend for saving files
import matplotlib.pyplot as plt

from hawking import constants as const
from hawking.analysis import OBSERVABLE_ROWS, TABLE_UNITS


# Set publication-quality plot defaults
plt.rcParams['figure.dpi'] = 300
plt.rcParams['savefig.dpi'] = 300
plt.rcParams['font.size'] = 10
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 14
plt.rcParams['xtick.labelsize'] = 10
plt.rcParams['ytick.labelsize'] = 10
plt.rcParams['legend.fontsize'] = 10

LABELS = {
    "radius": "Radius",
    "area": "Horizon area",
    "gravity": "Surface gravity",
    "energy": "Energy",
    "luminosity": "Hawking luminosity",
    "lifetime": "Lifetime",
    "entropy": "Entropy",
}


def plot_observables_vs_mass(table: Dict[str, np.ndarray], output_path: str,
                             mark_mass_kg: Optional[float] = None):
    """
    Create log-log panels of every observable against mass.

    Args:
        table: Observable table from hawking.analysis.observable_table
        output_path: Path to save PNG plot
        mark_mass_kg: Optional mass [kg] to mark on every panel

    Creates a 2×4 grid; the last panel shows lifetime against the age of
    the universe.
    """
    masses = table["mass"]
    positive = masses > 0

    fig, axes = plt.subplots(2, 4, figsize=(16, 8))
    axes = axes.flatten()

    for ax, name in zip(axes, OBSERVABLE_ROWS):
        ax.loglog(masses[positive], table[name][positive], color='black', linewidth=1.5)
        if mark_mass_kg is not None and mark_mass_kg > 0:
            ax.axvline(mark_mass_kg, color='red', linestyle='--', alpha=0.7)
        unit = TABLE_UNITS[name]
        ax.set_xlabel('Mass (kg)')
        ax.set_ylabel(LABELS[name] if unit == "dimensionless" else f"{LABELS[name]} ({unit})")
        ax.set_title(LABELS[name])
        ax.grid(True, which='both', alpha=0.3)

    # Lifetime in units of the age of the universe
    ax = axes[len(OBSERVABLE_ROWS)]
    ax.loglog(masses[positive], table["lifetime"][positive] / const.age_of_universe,
              color='blue', linewidth=1.5)
    ax.axhline(1.0, color='gray', linestyle=':', label='Age of universe')
    if mark_mass_kg is not None and mark_mass_kg > 0:
        ax.axvline(mark_mass_kg, color='red', linestyle='--', alpha=0.7)
    ax.set_xlabel('Mass (kg)')
    ax.set_ylabel('Lifetime / age of universe')
    ax.set_title('Evaporation vs cosmic age')
    ax.legend()
    ax.grid(True, which='both', alpha=0.3)

    fig.tight_layout()

    # Save
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, bbox_inches='tight')
    plt.close(fig)
