"""Field: a 3-D array anchored to a grid at a staggered location.

A Field owns storage of shape grid.shape on the grid's architecture (a
numpy array for SERIAL, a Taichi field indexed from 1 for CPU/GPU) and a
Location tag that operators check against their contracts.

Usage:
    grid = RegularCartesianGrid(size=(4, 4, 4), length=(4.0, 4.0, 4.0))
    u = Field(grid, Location.FACE_X, name="u")
    u.set(lambda x, y, z: np.sin(2 * np.pi * x / grid.lx))
    u_host = u.to_numpy()
"""

from typing import Any, Callable, Union

import numpy as np

from stagger.core.dtypes import NP_DTYPE
from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Location
from stagger.errors import ArchitectureMismatch, LocationMismatch, ShapeMismatch
from stagger.kernels import get_executor

FieldValue = Union[float, np.ndarray, Callable[[np.ndarray, np.ndarray, np.ndarray], Any]]


class Field:
    """Typed 3-D array on a grid, tagged with a staggered location.

    Attributes:
        grid: Grid the field is defined on
        location: CELL, FACE_X, FACE_Y or FACE_Z
        name: Optional identifier used in error messages
        data: Raw storage on the grid's architecture

    Explicit numpy storage on SERIAL grids is used as-is. Explicit Taichi
    storage is copied into a 1-based field, since Taichi fields cannot be
    re-indexed in place.

    Raises:
        LocationMismatch: If ``location`` is not a Location
        ArchitectureMismatch: If ``data`` is storage for another architecture
        ShapeMismatch: If ``data`` does not have the grid's shape
    """

    def __init__(
        self,
        grid: RegularCartesianGrid,
        location: Location,
        name: str = "",
        data: Any = None,
    ):
        if not isinstance(location, Location):
            raise LocationMismatch(f"location must be a Location, got {location!r}")

        self._grid = grid
        self._location = location
        self._name = name
        self._executor = get_executor(grid.architecture)

        if data is None:
            data = self._executor.allocate(grid.shape)
        else:
            is_host_array = isinstance(data, np.ndarray)
            if is_host_array == grid.architecture.uses_taichi:
                raise ArchitectureMismatch(
                    f"Field {self._label()} storage {type(data).__name__} does not "
                    f"match architecture {grid.architecture.value}"
                )
            if tuple(data.shape) != grid.shape:
                raise ShapeMismatch(
                    f"Field {self._label()} has shape {tuple(data.shape)}, "
                    f"grid has {grid.shape}"
                )
            if grid.architecture.uses_taichi:
                # Kernels index from 1; re-home storage into offset (1, 1, 1) fields
                values = data.to_numpy()
                data = self._executor.allocate(grid.shape)
                self._executor.from_numpy(data, values)
        self._data = data

    def _label(self) -> str:
        return f"'{self._name}'" if self._name else f"at {self._location.value}"

    @property
    def grid(self) -> RegularCartesianGrid:
        return self._grid

    @property
    def location(self) -> Location:
        return self._location

    @property
    def name(self) -> str:
        return self._name

    @property
    def data(self) -> Any:
        """Raw storage (numpy array or Taichi field)."""
        return self._data

    @property
    def shape(self) -> tuple[int, int, int]:
        return self._grid.shape

    @property
    def architecture(self):
        return self._grid.architecture

    def nodes(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """1-D coordinates (x, y, z) of the points this field samples."""
        return self._grid.nodes(self._location)

    def to_numpy(self) -> np.ndarray:
        """Copy of the field values as a host array of shape grid.shape."""
        return self._executor.to_numpy(self._data)

    def fill(self, value: float) -> None:
        """Set every value to ``value``."""
        self._executor.fill(self._data, float(value))

    def set(self, value: FieldValue) -> None:
        """Set field values from a scalar, an array, or a function f(x, y, z).

        Functions are evaluated on the field's nodes (see ``nodes``) with
        3-D coordinate arrays and may return anything that broadcasts to
        the grid's shape.

        Raises:
            ShapeMismatch: If an array, or a function's result, does not fit the grid's shape
        """
        if np.isscalar(value):
            self.fill(value)
            return

        if callable(value):
            x, y, z = np.meshgrid(*self.nodes(), indexing="ij")
            result = np.asarray(value(x, y, z), dtype=NP_DTYPE)
            try:
                array = np.broadcast_to(result, self.shape)
            except ValueError as e:
                raise ShapeMismatch(
                    f"Cannot set field {self._label()} of shape {self.shape} "
                    f"from function returning shape {result.shape}"
                ) from e
        else:
            array = np.asarray(value, dtype=NP_DTYPE)
            if array.shape != self.shape:
                raise ShapeMismatch(
                    f"Cannot set field {self._label()} of shape {self.shape} "
                    f"from array of shape {array.shape}"
                )

        self._executor.from_numpy(self._data, array)

    def check_grid(self, grid: RegularCartesianGrid) -> None:
        """Verify the field can be used with ``grid``.

        Raises:
            ArchitectureMismatch: If the grids live on different architectures
            ShapeMismatch: If the grids differ in any other way
        """
        if self._grid is grid:
            return
        if self._grid.architecture is not grid.architecture:
            raise ArchitectureMismatch(
                f"Field {self._label()} lives on {self._grid.architecture.value}, "
                f"grid is {grid.architecture.value}"
            )
        if self._grid != grid:
            raise ShapeMismatch(
                f"Field {self._label()} belongs to a {self._grid.shape} grid, "
                f"used with a {grid.shape} grid"
            )

    def __repr__(self) -> str:
        name = f"{self._name!r}, " if self._name else ""
        return (
            f"Field({name}{self._location.name}, shape={self.shape}, "
            f"architecture={self.architecture.value})"
        )
