"""
Unit tests for the unit registry helpers.
"""

import math

import numpy as np
import pytest

from hawking.units import (
    Q_,
    Kind,
    as_quantity,
    is_finite,
    kind_of,
    kind_of_unit,
    magnitude_in,
    parse_quantity,
)


class TestKindOf:
    """Tests for classifying quantities by dimension."""

    @pytest.mark.parametrize("unit,kind", [
        ("kg", Kind.MASS),
        ("g", Kind.MASS),
        ("m", Kind.LENGTH),
        ("mile", Kind.LENGTH),
        ("m**2", Kind.AREA),
        ("hectare", Kind.AREA),
        ("m / s**2", Kind.ACCELERATION),
        ("J", Kind.ENERGY),
        ("erg", Kind.ENERGY),
        ("eV", Kind.ENERGY),
        ("W", Kind.POWER),
        ("erg / s", Kind.POWER),
        ("s", Kind.TIME),
        ("year", Kind.TIME),
        ("m / s", Kind.OTHER),
        ("K", Kind.OTHER),
    ])
    def test_units(self, unit, kind):
        assert kind_of(Q_(1.0, unit)) is kind
        assert kind_of_unit(unit) is kind

    def test_bare_numbers_are_unitless(self):
        assert kind_of(3) is Kind.UNITLESS
        assert kind_of(2.5) is Kind.UNITLESS
        assert kind_of(np.float64(1.0)) is Kind.UNITLESS

    def test_unitless_quantity(self):
        assert kind_of(Q_(4.0)) is Kind.UNITLESS

    @pytest.mark.parametrize("unit", ["m / km", "g / kg", "s / year"])
    def test_cancelling_units_are_dimensionless(self, unit):
        """Units that cancel still carry a scale factor, so they are not unitless."""
        assert kind_of(Q_(1.0, unit)) is Kind.DIMENSIONLESS

    def test_dimensionless_unit_string_is_unitless(self):
        assert kind_of_unit("dimensionless") is Kind.UNITLESS

    @pytest.mark.parametrize("value", ["5 kg", None, True])
    def test_rejects_non_numbers(self, value):
        with pytest.raises(TypeError):
            kind_of(value)


class TestParseQuantity:
    """Tests for parsing quantity strings at the boundary."""

    def test_value_with_unit(self):
        quantity = parse_quantity("5 kg")
        assert quantity.m_as("kg") == 5.0

    def test_scientific_notation(self):
        quantity = parse_quantity("2e30 kilogram")
        assert quantity.m_as("kg") == pytest.approx(2.0e30)

    def test_compound_unit(self):
        quantity = parse_quantity("9.8 m/s**2")
        assert kind_of(quantity) is Kind.ACCELERATION

    def test_bare_number(self):
        quantity = parse_quantity("42")
        assert kind_of(quantity) is Kind.UNITLESS
        assert quantity.magnitude == 42.0

    @pytest.mark.parametrize("text", ["", "   ", "5 flurbs", None])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_quantity(text)


class TestHelpers:
    """Tests for small conversion helpers."""

    def test_as_quantity_number(self):
        quantity = as_quantity(3, "km")
        assert quantity.m_as("m") == 3000.0

    def test_as_quantity_passthrough(self):
        original = Q_(1.0, "s")
        assert as_quantity(original, "kg") is original

    def test_as_quantity_array(self):
        quantity = as_quantity([1.0, 2.0], "kg")
        np.testing.assert_array_equal(quantity.m_as("g"), [1000.0, 2000.0])

    def test_magnitude_in(self):
        assert magnitude_in(Q_(1.0, "km"), "m") == 1000.0
        assert isinstance(magnitude_in(Q_(1, "km"), "m"), float)

    def test_is_finite(self):
        assert is_finite(Q_(1.0, "kg"))
        assert is_finite(0.0)
        assert not is_finite(Q_(math.inf, "kg"))
        assert not is_finite(math.nan)
