"""Pytest fixtures and test utilities for stagger."""

import numpy as np
import pytest

from stagger.config import init_taichi
from stagger.core.architecture import Architecture
from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Axis, Location
from stagger.fields.field import Field
from stagger.fields.temporary import create_temporary_fields

ARCHITECTURES = [Architecture.SERIAL, Architecture.CPU]


@pytest.fixture(scope="session", autouse=True)
def taichi_init():
    """Initialize Taichi once per test session with CPU backend."""
    init_taichi(backend="cpu", debug=True)
    yield


@pytest.fixture(params=ARCHITECTURES, ids=lambda arch: arch.value)
def architecture(request):
    """Run a test once per architecture."""
    return request.param


@pytest.fixture
def grid_factory(architecture):
    """Factory for grids on the test's architecture."""

    def make_grid(size=(4, 4, 4), length=(4.0, 4.0, 4.0), topology=None):
        if topology is None:
            return RegularCartesianGrid(size=size, length=length, architecture=architecture)
        return RegularCartesianGrid(
            size=size, length=length, topology=topology, architecture=architecture
        )

    return make_grid


@pytest.fixture
def unit_grid(grid_factory):
    """4x4x4 grid of unit cells, periodic in x and y."""
    return grid_factory()


@pytest.fixture
def field_factory():
    """Factory for fields initialized from a scalar, array or function."""
    return make_field


def make_field(grid, location: Location, value=None, name: str = "") -> Field:
    """Allocate a field and optionally set its values."""
    field = Field(grid, location, name=name)
    if value is not None:
        field.set(value)
    return field


@pytest.fixture
def tmp_fields():
    """Factory for scratch pools."""
    return create_temporary_fields


def index_array(grid, axis: Axis) -> np.ndarray:
    """Array of the grid's shape holding the 1-based index along ``axis``."""
    i, j, k = np.meshgrid(
        np.arange(1, grid.nx + 1),
        np.arange(1, grid.ny + 1),
        np.arange(1, grid.nz + 1),
        indexing="ij",
    )
    return np.array((i, j, k)[axis], dtype=np.float64)


def random_array(grid, seed: int) -> np.ndarray:
    """Reproducible random values of the grid's shape."""
    return np.random.default_rng(seed).uniform(-1.0, 1.0, size=grid.shape)
