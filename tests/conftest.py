"""
Pytest configuration for the black hole model tests.

This file ensures the hawking package is importable from tests and provides
shared fixtures.
"""

import sys
from pathlib import Path

import pytest

# Add src to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / 'src'))

from hawking.blackhole import BlackHole  # noqa: E402

SOLAR_MASS_KG = 2.0e30  # Reference solar mass used throughout the tests [kg]


@pytest.fixture
def configs_dir():
    """Directory holding the example YAML configurations."""
    return project_root / 'configs'


@pytest.fixture
def solar_black_hole():
    """Black hole of one (rounded) solar mass."""
    return BlackHole(SOLAR_MASS_KG)


@pytest.fixture
def small_black_hole():
    """Black hole of 1e6 kg, which evaporates in a fraction of a second."""
    return BlackHole(1.0e6)
