"""
Tests for HDF5 output.
"""

import h5py
import numpy as np
import pytest

from hawking.analysis import TABLE_UNITS, mass_grid, observable_table
from hawking.blackhole import BlackHole, Field
from hawking.output import (
    load_black_hole,
    load_observable_table,
    save_black_hole,
    save_observable_table,
)
from hawking.units import Q_


class TestBlackHoleFiles:
    """Tests for saving and loading black holes."""

    def test_round_trip(self, tmp_path):
        bh = BlackHole(Q_(3.0, "km"), Field.RADIUS, mass_unit="tonne",
                       display_units={"radius": "km", "lifetime": "year"})
        path = tmp_path / "bh.h5"

        save_black_hole(bh, path)
        loaded = load_black_hole(path)

        assert loaded.mass.m_as("kg") == pytest.approx(bh.mass.m_as("kg"), rel=1e-15)
        assert loaded.mass_unit == "tonne"
        assert loaded.display_unit(Field.RADIUS) == bh.display_unit(Field.RADIUS)
        assert loaded.display_unit(Field.LIFETIME) == "year"
        assert loaded.radius.m_as("km") == pytest.approx(3.0, rel=1e-12)

    def test_file_structure(self, tmp_path):
        bh = BlackHole(2.0e30)
        path = tmp_path / "bh.h5"

        save_black_hole(bh, path)

        with h5py.File(path, 'r') as f:
            assert f.attrs['format'] == "hawking.black_hole"
            assert f.attrs['mass_kg'] == 2.0e30
            assert 'display_units' in f
            assert f['observables'].attrs['radius'] == pytest.approx(bh.radius.m_as("m"))
            assert f['observables'].attrs['entropy'] == pytest.approx(bh.entropy)

    def test_zero_mass(self, tmp_path):
        path = tmp_path / "evaporated.h5"

        save_black_hole(BlackHole(0.0), path)

        assert load_black_hole(path).mass.magnitude == 0.0

    def test_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "bh.h5"
        save_black_hole(BlackHole(1.0), path)
        assert path.exists()

    def test_wrong_format(self, tmp_path):
        path = tmp_path / "table.h5"
        save_observable_table({"mass": np.array([1.0])}, path, {"mass": "kg"})

        with pytest.raises(ValueError):
            load_black_hole(path)


class TestObservableTableFiles:
    """Tests for saving and loading observable tables."""

    def test_round_trip(self, tmp_path):
        table = observable_table(mass_grid(1.0e3, 1.0e30, 20))
        path = tmp_path / "sweep.h5"

        save_observable_table(table, path, TABLE_UNITS)
        loaded, units = load_observable_table(path)

        assert set(loaded) == set(table)
        for name in table:
            np.testing.assert_array_equal(loaded[name], table[name])
        assert units == TABLE_UNITS

    def test_uncompressed(self, tmp_path):
        path = tmp_path / "plain.h5"
        save_observable_table({"mass": np.arange(3.0)}, path, {"mass": "kg"}, compression=None)

        loaded, units = load_observable_table(path)

        np.testing.assert_array_equal(loaded["mass"], [0.0, 1.0, 2.0])
        assert units == {"mass": "kg"}

    def test_wrong_format(self, tmp_path):
        path = tmp_path / "bh.h5"
        save_black_hole(BlackHole(1.0), path)

        with pytest.raises(ValueError):
            load_observable_table(path)
