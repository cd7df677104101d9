"""
Configuration management for black hole runs.

This module handles loading and parsing YAML configuration files describing
an initial black hole, its display units, a list of aging steps and a mass
sweep for tabulating observables.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import yaml
from pathlib import Path

from hawking import constants as const
from hawking import physics
from hawking.blackhole import AGING_TOLERANCE, BlackHole, Field
from hawking.errors import BlackHoleError, UnknownField
from hawking.units import Q_, Kind, kind_of, kind_of_unit, parse_quantity, UndefinedUnitError


@dataclass
class BlackHoleParameters:
    """
    Container for all run parameters.

    The initial value is stored as magnitude + unit; a missing unit means
    the magnitude is a bare number interpreted in the field's default unit.
    """

    # Metadata
    name: str
    output_directory: str

    # Initial black hole
    initial_value: float
    initial_unit: Optional[str] = None
    initial_field: str = "mass"
    mass_unit: str = "kg"

    # Units reads are reported in, keyed by field name
    display_units: Dict[str, str] = field(default_factory=dict)

    # Aging steps applied in order, e.g. ["1 year", "3.5 s"]
    age_by: List[str] = field(default_factory=list)

    # Observable sweep
    sweep_min_kg: float = 1.0e3
    sweep_max_kg: float = 1.0e40
    sweep_points: int = 200

    # Diagnostics
    log_level: str = "INFO"

    @property
    def initial_quantity(self):
        """Initial value as a quantity (unitless if no unit was given)."""
        if self.initial_unit:
            return Q_(self.initial_value, self.initial_unit)
        return self.initial_value

    def aging_steps(self) -> list:
        """Parse the aging steps into quantities."""
        return [parse_quantity(step) for step in self.age_by]

    def build_black_hole(self) -> BlackHole:
        """
        Create the configured black hole.

        Raises:
            BlackHoleError: If the parameters describe an invalid black hole
        """
        # Entropy is unitless; validate() reports a display unit for it
        display_units = {
            name: unit for name, unit in self.display_units.items()
            if Field.parse(name) is not Field.ENTROPY
        }
        return BlackHole(
            self.initial_quantity,
            field=self.initial_field,
            mass_unit=self.mass_unit,
            display_units=display_units,
        )

    def validate(self) -> list:
        """
        Perform sanity checks on configuration parameters.

        Returns:
            List of warning/error messages. Empty list if all checks pass.
        """
        warnings = []

        # Check initial field
        try:
            initial_field = Field.parse(self.initial_field)
        except UnknownField:
            warnings.append(f"ERROR: Unknown initial field '{self.initial_field}'")
            initial_field = None

        # Check initial value
        if self.initial_value < 0:
            warnings.append(f"ERROR: Initial {self.initial_field} must be non-negative, got {self.initial_value}")
        elif self.initial_value == 0 and initial_field in (Field.GRAVITY, Field.LUMINOSITY, Field.LIFETIME):
            warnings.append(f"INFO: Initial {self.initial_field} of 0 means a fully evaporated black hole")

        # Check initial unit
        if self.initial_unit and initial_field is not None:
            kind = _unit_kind(self.initial_unit)
            if kind is None:
                warnings.append(f"ERROR: Unknown unit '{self.initial_unit}' for initial value")
            elif initial_field is Field.ENTROPY and kind is not Kind.UNITLESS:
                warnings.append(f"ERROR: Entropy must be unitless, got unit '{self.initial_unit}'")
            elif initial_field is not Field.ENTROPY and kind is not initial_field.kind:
                warnings.append(
                    f"ERROR: Unit '{self.initial_unit}' is {kind.value}, "
                    f"but {initial_field.value} needs {initial_field.kind.value}"
                )

        # Check mass unit
        kind = _unit_kind(self.mass_unit)
        if kind is not Kind.MASS:
            warnings.append(f"ERROR: mass_unit '{self.mass_unit}' is not a mass unit")

        # Check display units
        for name, unit in self.display_units.items():
            try:
                display_field = Field.parse(name)
            except UnknownField:
                warnings.append(f"ERROR: Display unit given for unknown field '{name}'")
                continue

            if display_field is Field.ENTROPY:
                warnings.append("WARNING: Entropy is unitless; its display unit is ignored")
                continue

            kind = _unit_kind(unit)
            if kind is not display_field.kind:
                warnings.append(
                    f"ERROR: Display unit '{unit}' for {display_field.value} "
                    f"is not a {display_field.kind.value} unit"
                )

        # Check aging steps
        total_aging = Q_(0.0, "s")
        for step in self.age_by:
            try:
                duration = parse_quantity(step)
            except ValueError:
                warnings.append(f"ERROR: Cannot parse aging step '{step}'")
                continue

            if kind_of(duration) is not Kind.TIME:
                warnings.append(f"ERROR: Aging step '{step}' is not a duration")
            elif duration.magnitude <= 0:
                warnings.append(f"ERROR: Aging step '{step}' must be positive")
            else:
                total_aging = total_aging + duration

        # Check sweep
        if self.sweep_min_kg <= 0:
            warnings.append(f"ERROR: sweep mass_min_kg must be positive, got {self.sweep_min_kg}")

        if self.sweep_min_kg >= self.sweep_max_kg:
            warnings.append(
                f"ERROR: sweep mass_min_kg ({self.sweep_min_kg:.2e}) must be < "
                f"mass_max_kg ({self.sweep_max_kg:.2e})"
            )

        if self.sweep_points < 2:
            warnings.append(f"ERROR: sweep points must be at least 2, got {self.sweep_points}")

        if self.sweep_max_kg > 1.0e45:
            warnings.append(
                f"WARNING: sweep mass_max_kg ({self.sweep_max_kg:.2e}) exceeds the largest known "
                f"black holes (~1e41 kg); lifetimes may overflow double precision"
            )

        # Physical checks need a buildable black hole
        if any(w.startswith("ERROR") for w in warnings):
            return warnings

        try:
            black_hole = self.build_black_hole()
        except BlackHoleError as exc:
            warnings.append(f"ERROR: Cannot build black hole: {exc}")
            return warnings

        mass_kg = black_hole.mass.m_as("kg")
        if 0 < mass_kg < const.planck_mass:
            warnings.append(
                f"WARNING: Mass ({mass_kg:.2e} kg) is below the Planck mass "
                f"({const.planck_mass:.2e} kg); semiclassical formulas do not apply"
            )

        if mass_kg > 0 and total_aging.magnitude > 0:
            lifetime = physics.lifetime_from_mass(black_hole.mass)
            if total_aging.m_as("s") >= lifetime.m_as("s") * (1.0 - AGING_TOLERANCE):
                warnings.append(
                    f"INFO: Total aging ({total_aging.to('year'):.3e}) exceeds the lifetime "
                    f"({lifetime.to('year'):.3e}); the black hole will evaporate completely"
                )

        return warnings

    @classmethod
    def from_yaml(cls, filepath: str) -> 'BlackHoleParameters':
        """
        Load configuration from YAML file.

        Args:
            filepath: Path to YAML configuration file

        Returns:
            BlackHoleParameters object

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        config_path = Path(filepath)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {filepath}")

        with open(config_path, 'r') as f:
            config = yaml.safe_load(f)

        return cls.from_dict(config)

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'BlackHoleParameters':
        """
        Build parameters from an already-parsed configuration mapping.

        Raises:
            ValueError: If required sections are missing or malformed
        """
        def to_float(value: Any) -> float:
            """Convert value to float, handling YAML quirks with scientific notation."""
            if isinstance(value, str):
                return float(value)
            return float(value)

        def to_int(value: Any) -> int:
            """Convert value to int."""
            if isinstance(value, str):
                return int(value)
            return int(value)

        if not isinstance(config, dict):
            raise ValueError("Configuration must be a mapping")

        for key in ('name', 'black_hole'):
            if key not in config:
                raise ValueError(f"Configuration is missing required key '{key}'")

        # Initial black hole: either value + unit, or a quantity string
        bh_data = config['black_hole']
        if 'value' not in bh_data:
            raise ValueError("black_hole section requires 'value'")

        raw_value = bh_data['value']
        initial_unit = bh_data.get('unit')
        if isinstance(raw_value, str) and initial_unit is None:
            try:
                initial_value = to_float(raw_value)
            except ValueError:
                # Quantity string such as "2e30 kg"
                quantity = parse_quantity(raw_value)
                initial_value = float(quantity.magnitude)
                if not quantity.unitless:
                    initial_unit = str(quantity.units)
        else:
            initial_value = to_float(raw_value)

        # Aging steps: a single string or a list of strings
        aging = config.get('aging', {}) or {}
        age_by = aging.get('age_by', [])
        if isinstance(age_by, str):
            age_by = [age_by]

        # Sweep
        sweep = config.get('sweep', {}) or {}

        # Diagnostics
        diagnostics = config.get('diagnostics', {}) or {}

        name = str(config['name'])
        return cls(
            name=name,
            output_directory=str(config.get('output_directory', f"./results/{name}")),
            initial_value=initial_value,
            initial_unit=initial_unit,
            initial_field=str(bh_data.get('field', 'mass')),
            mass_unit=str(bh_data.get('mass_unit', 'kg')),
            display_units={str(k): str(v) for k, v in (config.get('display_units') or {}).items()},
            age_by=[str(step) for step in age_by],
            sweep_min_kg=to_float(sweep.get('mass_min_kg', 1.0e3)),
            sweep_max_kg=to_float(sweep.get('mass_max_kg', 1.0e40)),
            sweep_points=to_int(sweep.get('points', 200)),
            log_level=str(diagnostics.get('log_level', 'INFO')),
        )

    def __repr__(self):
        """Human-readable representation."""
        unit = f" {self.initial_unit}" if self.initial_unit else ""
        lines = [
            f"Run: {self.name}",
            f"Initial {self.initial_field}: {self.initial_value:.3e}{unit}",
            f"Mass unit: {self.mass_unit}",
        ]
        for name, display_unit in self.display_units.items():
            lines.append(f"  {name} shown in {display_unit}")
        lines.extend([
            f"Aging steps: {len(self.age_by)}",
            f"Sweep: {self.sweep_points} masses, {self.sweep_min_kg:.1e} - {self.sweep_max_kg:.1e} kg",
        ])
        return "\n".join(lines)


def _unit_kind(unit: str) -> Optional[Kind]:
    """Kind of a unit string, or None if the registry does not know it."""
    try:
        return kind_of_unit(unit)
    except (UndefinedUnitError, ValueError, AttributeError, TypeError, SyntaxError):
        return None
