"""
Unit tests for physics functions.

Tests cover:
- Dimension-checked forward and inverse formulas
- Numba kernels agree with the quantity formulas
- Physical constants
"""

import math

import numpy as np
import pytest

from hawking import constants as const
from hawking import physics
from hawking.units import Q_, DimensionalityError


class TestConstants:
    """Tests for physical constants."""

    def test_quantity_values_match_floats(self):
        assert const.gravitational_constant().m_as("m**3 / (kg * s**2)") == const.G
        assert const.speed_of_light().m_as("m/s") == const.c
        assert const.planck_constant().m_as("J*s") == const.h

    def test_reduced_planck_constant(self):
        """ħ = h / 2π"""
        hbar = physics.reduced_planck_constant()
        assert hbar.m_as("J*s") == pytest.approx(1.054571817e-34, rel=1e-9)
        assert hbar.m_as("J*s") == pytest.approx(const.hbar, rel=1e-15)

    def test_planck_mass(self):
        assert const.planck_mass == pytest.approx(2.176434e-8, rel=1e-5)

    def test_planck_length(self):
        assert const.planck_length == pytest.approx(1.616255e-35, rel=1e-5)


class TestQuantityFormulas:
    """Tests for the pint formulas."""

    def test_radius_units(self):
        radius = physics.radius_from_mass(Q_(1.0, "kg"))
        assert radius.units == Q_(1.0, "m").units

    def test_radius_accepts_any_mass_unit(self):
        """Results do not depend on the unit the mass is given in."""
        r_kg = physics.radius_from_mass(Q_(1000.0, "kg"))
        r_tonne = physics.radius_from_mass(Q_(1.0, "tonne"))
        assert r_kg.m_as("m") == pytest.approx(r_tonne.m_as("m"), rel=1e-14)

    def test_radius_rejects_wrong_dimension(self):
        with pytest.raises(DimensionalityError):
            physics.radius_from_mass(Q_(1.0, "s"))

    def test_earth_radius(self):
        """The Earth would collapse to about 9 mm."""
        radius = physics.radius_from_mass(Q_(5.972e24, "kg"))
        assert radius.m_as("mm") == pytest.approx(8.87, rel=1e-2)

    def test_zero_mass_gravity(self):
        assert physics.gravity_from_mass(Q_(0.0, "kg")).magnitude == 0.0

    def test_zero_mass_luminosity(self):
        assert physics.luminosity_from_mass(Q_(0.0, "kg")).magnitude == 0.0

    def test_zero_mass_temperature(self):
        assert math.isinf(physics.hawking_temperature(Q_(0.0, "kg")).magnitude)

    def test_solar_temperature(self):
        """A solar mass black hole is about 60 nK."""
        temperature = physics.hawking_temperature(Q_(const.M_sun, "kg"))
        assert temperature.m_as("nK") == pytest.approx(61.7, rel=1e-2)

    def test_entropy_is_dimensionless_float(self):
        entropy = physics.entropy_from_mass(Q_(1.0, "kg"))
        assert isinstance(entropy, float)
        assert entropy == pytest.approx(4.0 * math.pi * const.G / (const.hbar * const.c), rel=1e-12)

    def test_solar_entropy(self):
        """S ≈ 1e77 k_B for a solar mass."""
        entropy = physics.entropy_from_mass(Q_(const.M_sun, "kg"))
        assert 1.0e76 < entropy < 1.0e78

    @pytest.mark.parametrize("forward,inverse", [
        (physics.radius_from_mass, physics.mass_from_radius),
        (physics.area_from_mass, physics.mass_from_area),
        (physics.gravity_from_mass, physics.mass_from_gravity),
        (physics.energy_from_mass, physics.mass_from_energy),
        (physics.luminosity_from_mass, physics.mass_from_luminosity),
        (physics.lifetime_from_mass, physics.mass_from_lifetime),
        (physics.entropy_from_mass, physics.mass_from_entropy),
    ])
    @pytest.mark.parametrize("mass_kg", [1.0e-5, 1.0e11, 1.0e35])
    def test_inverse(self, forward, inverse, mass_kg):
        mass = Q_(mass_kg, "kg")
        recovered = inverse(forward(mass))
        assert recovered.m_as("kg") == pytest.approx(mass_kg, rel=1e-12)

    def test_inverse_returns_kilograms(self):
        mass = physics.mass_from_lifetime(Q_(1.0, "year"))
        assert mass.units == Q_(1.0, "kg").units


class TestKernels:
    """Numba kernels agree with the quantity formulas."""

    @pytest.mark.parametrize("mass_kg", [1.0, 1.0e12, 2.0e30])
    def test_scalar_kernels(self, mass_kg):
        mass = Q_(mass_kg, "kg")
        assert physics.schwarzschild_radius(mass_kg) == pytest.approx(
            physics.radius_from_mass(mass).m_as("m"), rel=1e-12)
        assert physics.horizon_area(mass_kg) == pytest.approx(
            physics.area_from_mass(mass).m_as("m**2"), rel=1e-12)
        assert physics.surface_gravity(mass_kg) == pytest.approx(
            physics.gravity_from_mass(mass).m_as("m/s**2"), rel=1e-12)
        assert physics.rest_energy(mass_kg) == pytest.approx(
            physics.energy_from_mass(mass).m_as("J"), rel=1e-12)
        assert physics.hawking_luminosity(mass_kg) == pytest.approx(
            physics.luminosity_from_mass(mass).m_as("W"), rel=1e-12)
        assert physics.evaporation_lifetime(mass_kg) == pytest.approx(
            physics.lifetime_from_mass(mass).m_as("s"), rel=1e-12)
        assert physics.bekenstein_hawking_entropy(mass_kg) == pytest.approx(
            physics.entropy_from_mass(mass), rel=1e-12)

    def test_zero_mass_kernels(self):
        assert physics.surface_gravity(0.0) == 0.0
        assert physics.hawking_luminosity(0.0) == 0.0

    def test_calculate_observables_shape(self):
        masses = np.array([0.0, 1.0, 1.0e12])
        out = physics.calculate_observables(masses)
        assert out.shape == (7, 3)
        assert np.all(np.isfinite(out))
        assert out[2, 0] == 0.0  # gravity at zero mass
        assert out[4, 0] == 0.0  # luminosity at zero mass
        assert out[0, 2] == pytest.approx(physics.schwarzschild_radius(1.0e12))
