"""
Analysis helpers for black hole observables.

This module provides functions to:
- Tabulate every observable over a grid of masses (Numba kernels)
- Audit forward/inverse round trips through the BlackHole API
- Summarize a black hole against astrophysical reference scales

Tables are dictionaries of NumPy arrays in SI units, keyed by field name,
with the units listed in TABLE_UNITS.
"""

import warnings
from typing import Dict, Optional

import numpy as np
from tqdm import tqdm

from hawking import constants as const
from hawking import physics
from hawking.blackhole import BlackHole, Field
from hawking.units import Q_, as_quantity

# Row order of physics.calculate_observables
OBSERVABLE_ROWS = ["radius", "area", "gravity", "energy", "luminosity", "lifetime", "entropy"]

TABLE_UNITS = {
    "mass": "kg",
    "radius": "m",
    "area": "m**2",
    "gravity": "m / s**2",
    "energy": "J",
    "luminosity": "W",
    "lifetime": "s",
    "entropy": "dimensionless",
}

ROUND_TRIP_TOLERANCE = 1e-9


def mass_grid(mass_min_kg: float, mass_max_kg: float, n_points: int) -> np.ndarray:
    """
    Logarithmically spaced masses.

    Args:
        mass_min_kg: Smallest mass [kg], must be positive
        mass_max_kg: Largest mass [kg]
        n_points: Number of grid points

    Returns:
        Array of masses [kg] (shape: (n_points,))
    """
    if mass_min_kg <= 0 or mass_max_kg <= mass_min_kg:
        raise ValueError(f"Need 0 < mass_min_kg < mass_max_kg, got {mass_min_kg}, {mass_max_kg}")
    if n_points < 2:
        raise ValueError(f"Need at least 2 grid points, got {n_points}")

    return np.logspace(np.log10(mass_min_kg), np.log10(mass_max_kg), n_points)


def observable_table(masses_kg) -> Dict[str, np.ndarray]:
    """
    Evaluate every observable over an array of masses.

    Args:
        masses_kg: Masses [kg], array-like or pint quantity array

    Returns:
        Dictionary with 'mass' plus one array per observable (SI units)
    """
    masses = np.asarray(as_quantity(masses_kg, "kg").m_as("kg"), dtype=np.float64)
    masses = np.atleast_1d(masses)

    if np.any(masses < 0) or not np.all(np.isfinite(masses)):
        raise ValueError("Masses must be finite and non-negative")

    values = physics.calculate_observables(masses)

    table = {"mass": masses}
    for row, name in enumerate(OBSERVABLE_ROWS):
        table[name] = values[row]

    return table


def round_trip_errors(masses_kg, progress: bool = False) -> Dict[str, float]:
    """
    Maximum relative round-trip error per observable.

    For each mass M a black hole is built, each observable o is read and
    written back into a fresh black hole, and |M' - M| / M is recorded.

    Args:
        masses_kg: Positive masses [kg]
        progress: Show a progress bar

    Returns:
        Dictionary mapping field name → maximum relative error
    """
    masses = np.atleast_1d(np.asarray(masses_kg, dtype=np.float64))
    fields = [f for f in Field if f is not Field.MASS]
    errors = {f.value: 0.0 for f in fields}

    for mass in tqdm(masses, desc="Round trips", disable=not progress):
        if mass <= 0:
            continue
        original = BlackHole(Q_(float(mass), "kg"))

        for f in fields:
            value = original.get(f)
            recovered = BlackHole(value, f).mass.m_as("kg")
            error = abs(recovered - mass) / mass
            errors[f.value] = max(errors[f.value], error)

    for name, error in errors.items():
        if error > ROUND_TRIP_TOLERANCE:
            warnings.warn(f"Round trip through {name} has relative error {error:.2e}")

    return errors


def summarize(black_hole: BlackHole) -> Dict[str, Optional[float]]:
    """
    Compare a black hole against reference scales.

    Returns:
        Dictionary containing:
        - 'mass_kg': Mass [kg]
        - 'mass_solar': Mass in solar masses
        - 'planck_masses': Mass in Planck masses
        - 'radius_km': Schwarzschild radius [km]
        - 'temperature_K': Hawking temperature [K] (inf for zero mass)
        - 'lifetime_yr': Evaporation lifetime [yr]
        - 'lifetime_universe_ages': Lifetime / age of the universe
        - 'luminosity_W': Hawking luminosity [W]
        - 'entropy': Entropy [k_B]
    """
    mass = black_hole.mass.to("kg")
    mass_kg = float(mass.magnitude)
    lifetime_s = physics.lifetime_from_mass(mass).m_as("s")

    return {
        'mass_kg': mass_kg,
        'mass_solar': mass_kg / const.M_sun,
        'planck_masses': mass_kg / const.planck_mass,
        'radius_km': physics.radius_from_mass(mass).m_as("km"),
        'temperature_K': physics.hawking_temperature(mass).m_as("K"),
        'lifetime_yr': lifetime_s / const.yr,
        'lifetime_universe_ages': lifetime_s / const.age_of_universe,
        'luminosity_W': physics.luminosity_from_mass(mass).m_as("W"),
        'entropy': physics.entropy_from_mass(mass),
    }
