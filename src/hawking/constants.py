"""
Physical and astronomical constants used by the black hole model.

SI UNITS SYSTEM:
- Distance: meters (m)
- Mass: kilograms (kg)
- Time: seconds (s)
- Energy: joules (J)

Float values are exported for the JIT-compiled kernels in hawking.physics,
which cannot work with pint objects. The accessor functions wrap the same
values as pint quantities for the dimension-checked formulas.

Values are CODATA 2018 (G, c, h and k_B; c, h and k_B are exact since the
2019 SI redefinition).
"""

import math

from hawking.units import Q_

# Fundamental constants
G = 6.67430e-11  # Gravitational constant [m³/(kg·s²)]
c = 299792458.0  # Speed of light [m/s] - exact
c_squared = c * c  # c² [m²/s²]
h = 6.62607015e-34  # Planck constant [J·s] - exact
hbar = h / (2.0 * math.pi)  # Reduced Planck constant [J·s]
k_B = 1.380649e-23  # Boltzmann constant [J/K] - exact

# Astronomical reference values
M_sun = 1.98847e30  # Solar mass [kg] (IAU nominal GM_sun / G)
yr = 3.15576e7  # Julian year [s]
age_of_universe = 13.787e9 * yr  # Planck 2018 [s]

# Planck scale
planck_mass = math.sqrt(hbar * c / G)  # [kg] ≈ 2.176e-8
planck_length = math.sqrt(hbar * G / c**3)  # [m] ≈ 1.616e-35

# Hawking formula prefactors
LUMINOSITY_DENOMINATOR = 15360.0  # L = ħc⁶ / (15360 π G² M²)
LIFETIME_NUMERATOR = 5120.0  # τ = 5120 π G² M³ / (ħ c⁴)


def gravitational_constant():
    """Newtonian constant of gravitation as a quantity [m³/(kg·s²)]."""
    return Q_(G, "m**3 / (kg * s**2)")


def speed_of_light():
    """Speed of light in vacuum as a quantity [m/s]."""
    return Q_(c, "m / s")


def planck_constant():
    """Planck constant as a quantity [J·s]."""
    return Q_(h, "J * s")


def boltzmann_constant():
    """Boltzmann constant as a quantity [J/K]."""
    return Q_(k_B, "J / K")
