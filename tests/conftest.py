"""Pytest configuration and shared fixtures."""

import pytest

from metaballs.engine import Boundary, MetaballEngine, SimulationParams
from metaballs.geometry import Point2D
from metaballs.palettes import Color


@pytest.fixture
def black():
    return Color(0.0, 0.0, 0.0)


@pytest.fixture
def boundary():
    """The reference simulation rectangle."""
    return Boundary()


@pytest.fixture
def engine():
    """Six bodies from a fixed seed."""
    return MetaballEngine(SimulationParams(), seed=1234)


@pytest.fixture
def origin():
    return Point2D(0.0, 0.0)
