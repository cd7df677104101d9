"""
Unit registry and helpers for dimensional calculations.

Uses the pint library so every black hole formula is dimension-checked.
A single registry is shared by the whole package; quantities from different
registries cannot be combined.

Kinds
-----
Each quantity is classified into a Kind by its dimensionality:

- UNITLESS: a bare number, or a quantity carrying no units at all
- DIMENSIONLESS: units that cancel to a pure number (e.g. m/km)
- MASS, LENGTH, AREA, ACCELERATION, ENERGY, POWER, TIME
- OTHER: anything else (temperature, velocity, ...)
"""

import enum
import math
import numbers

import numpy as np
import pint

# Shared unit registry for the entire package
ureg = pint.UnitRegistry()

# Shorthand for creating quantities
Q_ = ureg.Quantity

DimensionalityError = pint.DimensionalityError
UndefinedUnitError = pint.UndefinedUnitError


class Kind(enum.Enum):
    """Physical dimension of a quantity."""

    MASS = "mass"
    LENGTH = "length"
    AREA = "area"
    ACCELERATION = "acceleration"
    ENERGY = "energy"
    POWER = "power"
    TIME = "time"
    UNITLESS = "unitless"
    DIMENSIONLESS = "dimensionless"
    OTHER = "other"


_DIMENSIONALITIES = {
    Kind.MASS: ureg.get_dimensionality("[mass]"),
    Kind.LENGTH: ureg.get_dimensionality("[length]"),
    Kind.AREA: ureg.get_dimensionality("[length] ** 2"),
    Kind.ACCELERATION: ureg.get_dimensionality("[length] / [time] ** 2"),
    Kind.ENERGY: ureg.get_dimensionality("[mass] * [length] ** 2 / [time] ** 2"),
    Kind.POWER: ureg.get_dimensionality("[mass] * [length] ** 2 / [time] ** 3"),
    Kind.TIME: ureg.get_dimensionality("[time]"),
}


def is_quantity(value) -> bool:
    """True if value is a pint quantity from any registry."""
    return isinstance(value, pint.Quantity)


def kind_of(value) -> Kind:
    """
    Classify a value by physical dimension.

    Args:
        value: Bare real number or pint quantity

    Returns:
        Kind of the value

    Raises:
        TypeError: If value is neither a real number nor a quantity
    """
    if isinstance(value, numbers.Real) and not isinstance(value, bool):
        return Kind.UNITLESS

    if not is_quantity(value):
        raise TypeError(f"Expected a number or quantity, got {type(value).__name__}")

    # pint's .unitless reduces m/km to nothing; only literal absence counts
    if not dict(value.unit_items()):
        return Kind.UNITLESS
    if value.dimensionless:
        return Kind.DIMENSIONLESS

    for kind, dimensionality in _DIMENSIONALITIES.items():
        if value.dimensionality == dimensionality:
            return kind

    return Kind.OTHER


def kind_of_unit(unit: str) -> Kind:
    """
    Classify a unit string.

    Raises:
        pint.UndefinedUnitError: If the unit is not known to the registry
    """
    return kind_of(Q_(1.0, unit))


def as_quantity(value, unit: str) -> pint.Quantity:
    """
    Interpret a value as a quantity.

    Bare numbers and arrays are taken to be in `unit`; quantities are
    returned unchanged.
    """
    if is_quantity(value):
        return value
    if isinstance(value, numbers.Real):
        return Q_(float(value), unit)
    return Q_(np.asarray(value, dtype=np.float64), unit)


def parse_quantity(text: str) -> pint.Quantity:
    """
    Parse a string like "5 kg" or "1e30 kilogram" into a quantity.

    A bare number string ("42") yields a unitless quantity.

    Raises:
        ValueError: If the string cannot be parsed
    """
    if not isinstance(text, str) or not text.strip():
        raise ValueError(f"Cannot parse quantity from {text!r}")

    try:
        quantity = ureg.parse_expression(text.strip())
    except (pint.PintError, SyntaxError, TypeError, ValueError) as exc:
        raise ValueError(f"Cannot parse quantity from {text!r}: {exc}") from exc

    # parse_expression returns a plain number for unitless input
    if not is_quantity(quantity):
        quantity = Q_(float(quantity))

    return quantity


def magnitude_in(quantity: pint.Quantity, unit: str) -> float:
    """Get the magnitude of a quantity in specified units as a float."""
    return float(quantity.m_as(unit))


def unit_string(quantity: pint.Quantity) -> str:
    """Unit of a quantity as a string the registry parses back."""
    return str(quantity.units)


def is_finite(quantity) -> bool:
    """True if the magnitude is neither infinite nor NaN."""
    magnitude = quantity.magnitude if is_quantity(quantity) else quantity
    return math.isfinite(float(magnitude))
