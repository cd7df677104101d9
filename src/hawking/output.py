"""
HDF5 storage for black holes and observable tables.

File structure for a saved black hole:
/ (attributes)
    mass_kg - Mass [kg]
    mass_unit - Unit mass is reported in
    format - "hawking.black_hole"
/display_units (group) - One attribute per observable, value = unit string
/observables (group) - Snapshot of every observable at save time (attributes,
    informational only; the mass is the state that gets restored)

File structure for an observable table:
/ (attributes)
    format - "hawking.observable_table"
/table (group)
    /<name> (dataset) - One array per observable, attribute 'units'
"""

from pathlib import Path
from typing import Dict

import h5py
import numpy as np

from hawking.blackhole import BlackHole, Field
from hawking.units import Q_

BLACK_HOLE_FORMAT = "hawking.black_hole"
TABLE_FORMAT = "hawking.observable_table"


def save_black_hole(black_hole: BlackHole, filepath: str):
    """
    Save a black hole to an HDF5 file.

    Args:
        black_hole: Black hole to save
        filepath: Path to HDF5 file
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    snapshot = black_hole.snapshot()

    with h5py.File(filepath, 'w') as f:
        f.attrs['format'] = BLACK_HOLE_FORMAT
        f.attrs['mass_kg'] = black_hole.mass.m_as("kg")
        f.attrs['mass_unit'] = black_hole.mass_unit

        units = f.create_group('display_units')
        for field, unit in black_hole.display_units.items():
            if field is not Field.MASS:
                units.attrs[field.value] = unit

        observables = f.create_group('observables')
        for key, value in snapshot.items():
            observables.attrs[key] = value


def load_black_hole(filepath: str) -> BlackHole:
    """
    Load a black hole from an HDF5 file written by save_black_hole.

    Raises:
        ValueError: If the file does not hold a saved black hole
    """
    with h5py.File(filepath, 'r') as f:
        if f.attrs.get('format') != BLACK_HOLE_FORMAT:
            raise ValueError(f"{filepath} does not contain a saved black hole")

        mass_kg = float(f.attrs['mass_kg'])
        mass_unit = str(f.attrs['mass_unit'])
        display_units = {name: str(unit) for name, unit in f['display_units'].attrs.items()}

    black_hole = BlackHole(Q_(mass_kg, "kg"), display_units=display_units)
    black_hole.mass_unit = mass_unit
    return black_hole


def save_observable_table(table: Dict[str, np.ndarray], filepath: str, units: Dict[str, str],
                          compression: str = "gzip"):
    """
    Save an observable table to an HDF5 file.

    Args:
        table: Dictionary of equal-length arrays keyed by observable name
        filepath: Path to HDF5 file
        units: Unit string for each array
        compression: HDF5 compression method ("gzip", "lzf", or None)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with h5py.File(filepath, 'w') as f:
        f.attrs['format'] = TABLE_FORMAT
        group = f.create_group('table')
        for name, values in table.items():
            dataset = group.create_dataset(name, data=np.asarray(values, dtype=np.float64),
                                           compression=compression)
            dataset.attrs['units'] = units.get(name, "")


def load_observable_table(filepath: str):
    """
    Load an observable table.

    Returns:
        Tuple (table, units) of dictionaries keyed by observable name

    Raises:
        ValueError: If the file does not hold an observable table
    """
    with h5py.File(filepath, 'r') as f:
        if f.attrs.get('format') != TABLE_FORMAT:
            raise ValueError(f"{filepath} does not contain an observable table")

        table = {}
        units = {}
        for name, dataset in f['table'].items():
            table[name] = dataset[:]
            units[name] = str(dataset.attrs['units'])

    return table, units
