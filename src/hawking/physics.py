"""
Physics functions for a Schwarzschild black hole.

Every observable has a forward formula (mass → observable) and an inverse
formula (observable → mass). Two implementations are provided:

- Quantity functions operate on pint quantities so every formula is
  dimension-checked. These back the BlackHole accessors.
- Kernel functions operate on SI floats and are JIT-compiled with Numba for
  sweeps over large mass grids. They must be Numba-compatible (no Python
  objects).

Formulas (leading-order, Hawking 1974; Page 1976 emission prefactors):
    r = 2GM/c²
    A = 4πr²
    γ = c⁴/(4GM)
    E = Mc²
    L = ħc⁶/(15360πG²M²)
    τ = 5120πG²M³/(ħc⁴)
    S = 4πGM²/(ħc)          (in units of k_B)
"""

import math

import numpy as np
from numba import jit

from hawking import constants as const
from hawking.units import Q_


def reduced_planck_constant():
    """
    Reduced Planck constant ħ = h / 2π as a quantity [J·s].

    Derived here rather than taken from the constants source so that only
    G, c and h are required from it.
    """
    return const.planck_constant() / (2.0 * math.pi)


# =============================================================================
# Quantity formulas (dimension-checked)
# =============================================================================

def radius_from_mass(mass):
    """Schwarzschild radius r = 2GM/c² [m]."""
    G = const.gravitational_constant()
    c = const.speed_of_light()
    return (2.0 * G * mass / c**2).to("m")


def mass_from_radius(radius):
    """Inverse of radius_from_mass: M = rc²/(2G) [kg]."""
    G = const.gravitational_constant()
    c = const.speed_of_light()
    return (radius * c**2 / (2.0 * G)).to("kg")


def area_from_mass(mass):
    """Horizon area A = 4πr² [m²]."""
    r = radius_from_mass(mass)
    return (4.0 * math.pi * r**2).to("m**2")


def mass_from_area(area):
    """
    Inverse of area_from_mass: M = √(A / (16πG²)) · c² [kg].

    Negative areas yield NaN; callers reject them before getting here.
    """
    G = const.gravitational_constant()
    c = const.speed_of_light()
    # Reduce to kg² before the root so the units come out exactly as kg
    mass_squared = (area * c**4 / (16.0 * math.pi * G**2)).m_as("kg**2")
    return Q_(np.sqrt(mass_squared), "kg")


def gravity_from_mass(mass):
    """
    Surface gravity γ = c⁴/(4GM) [m/s²].

    Zero mass gives zero surface gravity rather than a division by zero.
    """
    if mass.magnitude == 0:
        return Q_(0.0, "m / s**2")
    G = const.gravitational_constant()
    c = const.speed_of_light()
    return (c**4 / (4.0 * G * mass)).to("m / s**2")


def mass_from_gravity(gravity):
    """Inverse of gravity_from_mass: M = c⁴/(4Gγ) [kg]."""
    G = const.gravitational_constant()
    c = const.speed_of_light()
    return (c**4 / (4.0 * G * gravity)).to("kg")


def energy_from_mass(mass):
    """Rest energy E = Mc² [J]."""
    c = const.speed_of_light()
    return (mass * c**2).to("J")


def mass_from_energy(energy):
    """Inverse of energy_from_mass: M = E/c² [kg]."""
    c = const.speed_of_light()
    return (energy / c**2).to("kg")


def luminosity_from_mass(mass):
    """
    Hawking luminosity L = ħc⁶/(15360πG²M²) [W].

    Zero mass gives zero power rather than a division by zero.
    """
    if mass.magnitude == 0:
        return Q_(0.0, "W")
    G = const.gravitational_constant()
    c = const.speed_of_light()
    hbar = reduced_planck_constant()
    return (hbar * c**6 / (const.LUMINOSITY_DENOMINATOR * math.pi * G**2 * mass**2)).to("W")


def mass_from_luminosity(luminosity):
    """Inverse of luminosity_from_mass: M = √(ħc⁶/(15360πG²L)) [kg]."""
    G = const.gravitational_constant()
    c = const.speed_of_light()
    hbar = reduced_planck_constant()
    mass_squared = (
        hbar * c**6 / (const.LUMINOSITY_DENOMINATOR * math.pi * G**2 * luminosity)
    ).m_as("kg**2")
    return Q_(np.sqrt(mass_squared), "kg")


def lifetime_from_mass(mass):
    """Evaporation lifetime τ = 5120πG²M³/(ħc⁴) [s]."""
    G = const.gravitational_constant()
    c = const.speed_of_light()
    hbar = reduced_planck_constant()
    return (const.LIFETIME_NUMERATOR * math.pi * G**2 * mass**3 / (hbar * c**4)).to("s")


def mass_from_lifetime(lifetime):
    """Inverse of lifetime_from_mass: M = (τħc⁴/(5120πG²))^(1/3) [kg]."""
    G = const.gravitational_constant()
    c = const.speed_of_light()
    hbar = reduced_planck_constant()
    mass_cubed = (
        lifetime * hbar * c**4 / (const.LIFETIME_NUMERATOR * math.pi * G**2)
    ).m_as("kg**3")
    return Q_(np.cbrt(mass_cubed), "kg")


def entropy_from_mass(mass) -> float:
    """
    Bekenstein–Hawking entropy S/k_B = 4πGM²/(ħc).

    Equivalent to A / (4 l_P²). The units cancel exactly, so the result is
    returned as a bare float.
    """
    G = const.gravitational_constant()
    c = const.speed_of_light()
    hbar = reduced_planck_constant()
    return float((4.0 * math.pi * G * mass**2 / (hbar * c)).m_as("dimensionless"))


def mass_from_entropy(entropy: float):
    """Inverse of entropy_from_mass: M = √(Sħc/(4πG)) [kg]."""
    G = const.gravitational_constant()
    c = const.speed_of_light()
    hbar = reduced_planck_constant()
    mass_squared = (entropy * hbar * c / (4.0 * math.pi * G)).m_as("kg**2")
    return Q_(np.sqrt(mass_squared), "kg")


def hawking_temperature(mass):
    """
    Hawking temperature T = ħc³/(8πGMk_B) [K].

    Zero mass is reported as infinite temperature (the final instant of
    evaporation).
    """
    if mass.magnitude == 0:
        return Q_(math.inf, "K")
    G = const.gravitational_constant()
    c = const.speed_of_light()
    hbar = reduced_planck_constant()
    k_B = const.boltzmann_constant()
    return (hbar * c**3 / (8.0 * math.pi * G * mass * k_B)).to("K")


# =============================================================================
# SI float kernels (Numba)
# =============================================================================

@jit(nopython=True)
def schwarzschild_radius(mass):
    """
    Schwarzschild radius from mass.

    Args:
        mass: Mass [kg]

    Returns:
        float: Radius [m]
    """
    return 2.0 * const.G * mass / const.c_squared


@jit(nopython=True)
def horizon_area(mass):
    """Horizon area [m²] from mass [kg]."""
    r = 2.0 * const.G * mass / const.c_squared
    return 4.0 * np.pi * r * r


@jit(nopython=True)
def surface_gravity(mass):
    """
    Surface gravity [m/s²] from mass [kg].

    Returns 0.0 for zero mass.
    """
    if mass == 0.0:
        return 0.0
    return const.c**4 / (4.0 * const.G * mass)


@jit(nopython=True)
def rest_energy(mass):
    """Rest energy [J] from mass [kg]."""
    return mass * const.c_squared


@jit(nopython=True)
def hawking_luminosity(mass):
    """
    Hawking luminosity [W] from mass [kg].

    Returns 0.0 for zero mass.
    """
    if mass == 0.0:
        return 0.0
    return const.hbar * const.c**6 / (
        const.LUMINOSITY_DENOMINATOR * np.pi * const.G**2 * mass * mass
    )


@jit(nopython=True)
def evaporation_lifetime(mass):
    """Evaporation lifetime [s] from mass [kg]."""
    return const.LIFETIME_NUMERATOR * np.pi * const.G**2 * mass**3 / (const.hbar * const.c**4)


@jit(nopython=True)
def bekenstein_hawking_entropy(mass):
    """Entropy [k_B] from mass [kg]."""
    return 4.0 * np.pi * const.G * mass * mass / (const.hbar * const.c)


@jit(nopython=True)
def calculate_observables(masses):
    """
    Evaluate every observable over an array of masses.

    Args:
        masses: Masses [kg] (shape: (N,))

    Returns:
        out: Observables (shape: (7, N)) in row order radius [m], area [m²],
            gravity [m/s²], energy [J], luminosity [W], lifetime [s],
            entropy [k_B]
    """
    n = masses.shape[0]
    out = np.zeros((7, n), dtype=np.float64)

    for i in range(n):
        m = masses[i]
        out[0, i] = schwarzschild_radius(m)
        out[1, i] = horizon_area(m)
        out[2, i] = surface_gravity(m)
        out[3, i] = rest_energy(m)
        out[4, i] = hawking_luminosity(m)
        out[5, i] = evaporation_lifetime(m)
        out[6, i] = bekenstein_hawking_entropy(m)

    return out
