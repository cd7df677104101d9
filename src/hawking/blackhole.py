"""
Schwarzschild black hole with a bidirectional property network.

Mass is the only stored physical state. The seven observables (radius, area,
surface gravity, energy, luminosity, lifetime and entropy) are computed from
it on every read and back-solved into it on every write.

Each observable except entropy remembers a display unit: the unit of the last
dimensioned value written to it, or one set explicitly. Reads are converted
into that unit. Bare numbers written to an observable are interpreted in its
current display unit.
"""

import enum
import logging
import threading
from typing import Dict, Optional

from hawking import physics
from hawking.errors import InvalidDimension, InvalidDuration, InvalidMass, UnknownField
from hawking.units import (
    Q_,
    Kind,
    is_finite,
    is_quantity,
    kind_of,
    kind_of_unit,
    unit_string,
    UndefinedUnitError,
)

logger = logging.getLogger(__name__)


class Field(enum.Enum):
    """Settable properties of a black hole."""

    MASS = "mass"
    RADIUS = "radius"
    AREA = "area"
    GRAVITY = "gravity"
    ENERGY = "energy"
    LUMINOSITY = "luminosity"
    LIFETIME = "lifetime"
    ENTROPY = "entropy"

    @property
    def kind(self) -> Kind:
        """Physical dimension a value written to this field must have."""
        return _FIELD_KINDS[self]

    @classmethod
    def parse(cls, name) -> "Field":
        """
        Look up a field by name.

        Accepts Field members unchanged, names in any case, and the aliases
        "total_energy" and "surface_gravity".

        Raises:
            UnknownField: If the name does not match a field
        """
        if isinstance(name, cls):
            return name
        if isinstance(name, str):
            key = name.strip().lower()
            key = _FIELD_ALIASES.get(key, key)
            for field in cls:
                if field.value == key:
                    return field
        raise UnknownField(f"Unknown black hole field: {name!r}")


_FIELD_KINDS = {
    Field.MASS: Kind.MASS,
    Field.RADIUS: Kind.LENGTH,
    Field.AREA: Kind.AREA,
    Field.GRAVITY: Kind.ACCELERATION,
    Field.ENERGY: Kind.ENERGY,
    Field.LUMINOSITY: Kind.POWER,
    Field.LIFETIME: Kind.TIME,
    Field.ENTROPY: Kind.UNITLESS,
}

_FIELD_ALIASES = {
    "total_energy": "energy",
    "surface_gravity": "gravity",
}

DEFAULT_MASS_UNIT = "kg"

DEFAULT_DISPLAY_UNITS = {
    Field.RADIUS: "m",
    Field.AREA: "m**2",
    Field.GRAVITY: "m / s**2",
    Field.ENERGY: "J",
    Field.LUMINOSITY: "W",
    Field.LIFETIME: "s",
}

# Aging by within this relative margin of the lifetime evaporates the hole
AGING_TOLERANCE = 1e-12


def _unit_kind(target: str, expected: Kind, unit: str) -> Kind:
    """Kind of a unit string; unknown units raise InvalidDimension."""
    try:
        return kind_of_unit(unit)
    except (UndefinedUnitError, ValueError, AttributeError, TypeError, SyntaxError) as exc:
        raise InvalidDimension(target, expected, f"unknown unit {unit!r}") from exc


class BlackHole:
    """
    A non-rotating, uncharged black hole.

    Construction sets the mass directly or through any one observable:

        BlackHole(2e30)                           # 2e30 kg
        BlackHole(Q_(5, "metric_ton"))           # mass_unit becomes metric_ton
        BlackHole(Q_(3, "km"), Field.RADIUS)      # back-solved from radius
        BlackHole(1e47, "energy")                 # 1e47 J

    All mutating operations hold a per-instance lock, so one instance may be
    shared between threads.
    """

    def __init__(self, value=0.0, field=Field.MASS, mass_unit: str = DEFAULT_MASS_UNIT,
                 display_units: Optional[Dict] = None):
        """
        Create a black hole.

        Args:
            value: Bare number or pint quantity for the initial field
            field: Field (or field name) that `value` sets
            mass_unit: Unit mass is reported in
            display_units: Optional mapping of field → unit for reads

        Raises:
            UnknownField: If `field` is not a supported field
            InvalidDimension: If a unit or value has the wrong kind
            InvalidMass: If the resulting mass is negative or infinite
        """
        field = Field.parse(field)

        self._lock = threading.RLock()
        self._mass = Q_(0.0, DEFAULT_MASS_UNIT)
        self._mass_unit = DEFAULT_MASS_UNIT
        self._display_units = dict(DEFAULT_DISPLAY_UNITS)

        self.mass_unit = mass_unit
        for name, unit in (display_units or {}).items():
            self.set_display_unit(name, unit)

        self.set(field, value)

    # -------------------------------------------------------------------------
    # Canonical mass
    # -------------------------------------------------------------------------

    @property
    def mass(self):
        """Mass converted to `mass_unit`."""
        with self._lock:
            return self._mass.to(self._mass_unit)

    @mass.setter
    def mass(self, value):
        self.set_mass(value)

    def set_mass(self, value, unit: Optional[str] = None):
        """
        Replace the mass.

        Args:
            value: Mass quantity, or a bare number in `unit` (default: the
                current mass unit)
            unit: Unit for a bare number; becomes the new mass unit

        Raises:
            InvalidDimension: If value is neither a mass nor unitless
            InvalidMass: If the magnitude is negative, infinite or NaN
        """
        with self._lock:
            explicit_unit = None
            kind = kind_of(value)

            if kind is Kind.MASS:
                quantity = value
                explicit_unit = unit_string(value)
            elif kind is Kind.UNITLESS:
                magnitude = value.magnitude if is_quantity(value) else value
                quantity = Q_(float(magnitude), unit or self._mass_unit)
                if unit is not None:
                    explicit_unit = self._checked_mass_unit(unit)
            else:
                raise InvalidDimension("mass", Kind.MASS, kind)

            self._mass = self._checked_mass(quantity)
            if explicit_unit is not None:
                self._mass_unit = explicit_unit

    @property
    def mass_unit(self) -> str:
        """Unit mass is reported in. Assigning converts, never rescales."""
        return self._mass_unit

    @mass_unit.setter
    def mass_unit(self, unit: str):
        with self._lock:
            self._mass_unit = self._checked_mass_unit(unit)

    @staticmethod
    def _checked_mass_unit(unit: str) -> str:
        kind = _unit_kind("mass unit", Kind.MASS, unit)
        if kind is not Kind.MASS:
            raise InvalidDimension("mass unit", Kind.MASS, kind)
        return unit

    @staticmethod
    def _checked_mass(quantity):
        """Mass invariant: finite and non-negative."""
        if not is_finite(quantity):
            raise InvalidMass(f"Mass must be finite, got {quantity}")
        if quantity.magnitude < 0:
            raise InvalidMass(f"Mass must be non-negative, got {quantity}")
        return quantity

    # -------------------------------------------------------------------------
    # Display units
    # -------------------------------------------------------------------------

    @property
    def display_units(self) -> Dict[Field, str]:
        """Copy of the per-observable display units (mass included)."""
        with self._lock:
            units = {Field.MASS: self._mass_unit}
            units.update(self._display_units)
            return units

    def display_unit(self, field) -> str:
        """Unit reads of `field` are converted into."""
        field = Field.parse(field)
        if field is Field.MASS:
            return self._mass_unit
        if field is Field.ENTROPY:
            raise UnknownField("entropy is unitless and has no display unit")
        return self._display_units[field]

    def set_display_unit(self, field, unit: str):
        """
        Set the unit reads of `field` are converted into.

        Raises:
            UnknownField: If field is unknown or is entropy
            InvalidDimension: If the unit's kind does not match the field
        """
        field = Field.parse(field)
        if field is Field.MASS:
            self.mass_unit = unit
            return
        if field is Field.ENTROPY:
            raise UnknownField("entropy is unitless and has no display unit")

        kind = _unit_kind(f"{field.value} unit", field.kind, unit)
        if kind is not field.kind:
            raise InvalidDimension(f"{field.value} unit", field.kind, kind)

        with self._lock:
            self._display_units[field] = unit

    # -------------------------------------------------------------------------
    # Observable plumbing
    # -------------------------------------------------------------------------

    def _read(self, field: Field, from_mass):
        with self._lock:
            mass = self._mass
            unit = self._display_units[field]
        return from_mass(mass).to(unit)

    def _write(self, field: Field, value, to_mass, collapse_non_positive: bool = False,
               remember_unit: bool = True):
        """
        Back-solve mass from an observable value.

        Validation happens before anything is stored, so a failed write
        leaves both the mass and the display unit untouched.
        """
        with self._lock:
            unit = self._display_units[field]
            kind = kind_of(value)

            if kind is Kind.UNITLESS:
                magnitude = value.magnitude if is_quantity(value) else value
                quantity = Q_(float(magnitude), unit)
            elif kind is field.kind:
                quantity = value
                unit = unit_string(value)
            else:
                raise InvalidDimension(field.value, field.kind, kind)

            if collapse_non_positive and quantity.magnitude <= 0:
                logger.debug("%s %s <= 0, mass collapses to zero", field.value, quantity)
                new_mass = Q_(0.0, DEFAULT_MASS_UNIT)
            else:
                if quantity.magnitude < 0:
                    raise InvalidMass(f"{field.value} {quantity} implies a negative mass")
                new_mass = to_mass(quantity)

            self._mass = self._checked_mass(new_mass)
            if remember_unit:
                self._display_units[field] = unit

    # -------------------------------------------------------------------------
    # Observables
    # -------------------------------------------------------------------------

    @property
    def radius(self):
        """Schwarzschild radius r = 2GM/c²."""
        return self._read(Field.RADIUS, physics.radius_from_mass)

    @radius.setter
    def radius(self, value):
        self._write(Field.RADIUS, value, physics.mass_from_radius)

    @property
    def area(self):
        """Event horizon area A = 4πr²."""
        return self._read(Field.AREA, physics.area_from_mass)

    @area.setter
    def area(self, value):
        self._write(Field.AREA, value, physics.mass_from_area)

    @property
    def gravity(self):
        """Surface gravity γ = c⁴/(4GM); zero for zero mass."""
        return self._read(Field.GRAVITY, physics.gravity_from_mass)

    @gravity.setter
    def gravity(self, value):
        self._write(Field.GRAVITY, value, physics.mass_from_gravity, collapse_non_positive=True)

    @property
    def energy(self):
        """Rest energy E = Mc²."""
        return self._read(Field.ENERGY, physics.energy_from_mass)

    @energy.setter
    def energy(self, value):
        self._write(Field.ENERGY, value, physics.mass_from_energy)

    @property
    def luminosity(self):
        """Hawking luminosity L = ħc⁶/(15360πG²M²); zero for zero mass."""
        return self._read(Field.LUMINOSITY, physics.luminosity_from_mass)

    @luminosity.setter
    def luminosity(self, value):
        self._write(Field.LUMINOSITY, value, physics.mass_from_luminosity,
                    collapse_non_positive=True)

    @property
    def lifetime(self):
        """Evaporation lifetime τ = 5120πG²M³/(ħc⁴)."""
        return self._read(Field.LIFETIME, physics.lifetime_from_mass)

    @lifetime.setter
    def lifetime(self, value):
        self._write(Field.LIFETIME, value, physics.mass_from_lifetime, collapse_non_positive=True)

    @property
    def entropy(self) -> float:
        """Bekenstein–Hawking entropy in units of k_B (a bare float)."""
        with self._lock:
            mass = self._mass
        return physics.entropy_from_mass(mass)

    @entropy.setter
    def entropy(self, value):
        with self._lock:
            kind = kind_of(value)
            if kind is not Kind.UNITLESS:
                raise InvalidDimension(Field.ENTROPY.value, Kind.UNITLESS, kind)

            entropy = float(value.magnitude) if is_quantity(value) else float(value)
            if entropy < 0:
                raise InvalidMass(f"entropy {entropy} implies a negative mass")

            self._mass = self._checked_mass(physics.mass_from_entropy(entropy))

    # -------------------------------------------------------------------------
    # Field dispatch
    # -------------------------------------------------------------------------

    def get(self, field):
        """Read a field selected by Field member or name."""
        field = Field.parse(field)
        if field is Field.MASS:
            return self.mass
        elif field is Field.RADIUS:
            return self.radius
        elif field is Field.AREA:
            return self.area
        elif field is Field.GRAVITY:
            return self.gravity
        elif field is Field.ENERGY:
            return self.energy
        elif field is Field.LUMINOSITY:
            return self.luminosity
        elif field is Field.LIFETIME:
            return self.lifetime
        elif field is Field.ENTROPY:
            return self.entropy
        raise UnknownField(f"Unknown black hole field: {field!r}")

    def set(self, field, value):
        """Write a field selected by Field member or name."""
        field = Field.parse(field)
        if field is Field.MASS:
            self.set_mass(value)
        elif field is Field.RADIUS:
            self.radius = value
        elif field is Field.AREA:
            self.area = value
        elif field is Field.GRAVITY:
            self.gravity = value
        elif field is Field.ENERGY:
            self.energy = value
        elif field is Field.LUMINOSITY:
            self.luminosity = value
        elif field is Field.LIFETIME:
            self.lifetime = value
        elif field is Field.ENTROPY:
            self.entropy = value
        else:
            raise UnknownField(f"Unknown black hole field: {field!r}")

    # -------------------------------------------------------------------------
    # Evolution
    # -------------------------------------------------------------------------

    def age_by(self, elapsed):
        """
        Let the black hole evaporate for a span of time.

        The remaining lifetime is shortened by `elapsed`; if that leaves no
        lifetime the mass drops to zero (complete evaporation).

        Args:
            elapsed: Duration as a pint quantity of kind time. Bare numbers
                are rejected because there is no implied time unit.

        Returns:
            Energy radiated during the interval, in the energy display unit

        Raises:
            InvalidDimension: If elapsed is not a time quantity
            InvalidDuration: If elapsed is not positive and finite
        """
        if not is_quantity(elapsed) or kind_of(elapsed) is not Kind.TIME:
            raise InvalidDimension("elapsed time", Kind.TIME, kind_of(elapsed))
        if not is_finite(elapsed) or elapsed.magnitude <= 0:
            raise InvalidDuration(f"Elapsed time must be positive and finite, got {elapsed}")

        with self._lock:
            energy_before = physics.energy_from_mass(self._mass)
            # Unit conversion rounding must not leave a sliver of lifetime
            lifetime_s = physics.lifetime_from_mass(self._mass).m_as("s")
            elapsed_s = elapsed.m_as("s")
            if elapsed_s >= lifetime_s * (1.0 - AGING_TOLERANCE):
                remaining = Q_(0.0, "s")
            else:
                remaining = Q_(lifetime_s - elapsed_s, "s")
            self._write(Field.LIFETIME, remaining, physics.mass_from_lifetime,
                        collapse_non_positive=True, remember_unit=False)
            energy_after = physics.energy_from_mass(self._mass)
            unit = self._display_units[Field.ENERGY]

        radiated = (energy_before - energy_after).to(unit)
        logger.debug("aged by %s, radiated %s", elapsed, radiated)
        return radiated

    # -------------------------------------------------------------------------
    # Presentation
    # -------------------------------------------------------------------------

    def snapshot(self) -> Dict[str, object]:
        """
        All observables as plain numbers in their current units.

        Returns:
            Dictionary with keys mass, radius, area, gravity, energy,
            luminosity, lifetime (floats), <field>_unit (str) for each of
            those, and entropy (float)
        """
        with self._lock:
            values = {}
            for field in Field:
                if field is Field.ENTROPY:
                    values[field.value] = self.entropy
                    continue
                quantity = self.get(field)
                values[field.value] = float(quantity.magnitude)
                values[f"{field.value}_unit"] = self.display_unit(field)
            return values

    def copy(self) -> "BlackHole":
        """Independent black hole with the same mass and units."""
        with self._lock:
            display_units = {field: unit for field, unit in self._display_units.items()}
            copy = BlackHole(self._mass, display_units=display_units)
            copy.mass_unit = self._mass_unit
            return copy

    def __repr__(self) -> str:
        """One-line summary of every observable."""
        def fmt(quantity):
            return f"{quantity.magnitude:.2E} {quantity.units:~}"

        with self._lock:
            return (
                f"<BlackHole mass: {fmt(self.mass)} radius: {fmt(self.radius)} "
                f"area: {fmt(self.area)} gravity: {fmt(self.gravity)} "
                f"entropy: {self.entropy:.2E} luminosity: {fmt(self.luminosity)} "
                f"lifetime: {fmt(self.lifetime)}>"
            )
