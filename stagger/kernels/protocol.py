"""
Executor protocol and stencil descriptions.

An executor is the one place that knows how to run an index-space kernel
on an architecture. Operators describe *what* to compute (a PairStencil or
a point-wise combination) and hand raw field storage to the executor,
which runs the body once per destination cell.

Every body reads only source storage and writes only its own destination
index, so no executor needs locks or atomics and all executors produce the
same values for the same inputs.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Protocol, runtime_checkable

import numpy as np

from stagger.core.location import Axis, Location


class Direction(Enum):
    """Which way a pair stencil maps between staggered locations."""

    TO_FACE = auto()  # Cell -> Face
    TO_CELL = auto()  # Face -> Cell


class Reduction(Enum):
    """How a pair stencil combines its two neighbours."""

    DIFFERENCE = auto()
    AVERAGE = auto()


@dataclass(frozen=True)
class PairStencil:
    """A two-point stencil along one axis.

    Attributes:
        axis: Axis the stencil acts along
        direction: TO_FACE (Cell -> Face) or TO_CELL (Face -> Cell)
        reduction: DIFFERENCE or AVERAGE

    Each destination value combines an ``upper`` and a ``lower`` neighbour
    (higher and lower index along the axis). Differences are taken in the
    axis' positive direction: upper - lower along x and y, lower - upper
    along z, where k = 1 is the top and the index grows downward.
    """

    axis: Axis
    direction: Direction
    reduction: Reduction

    @property
    def source(self) -> Location:
        if self.direction is Direction.TO_FACE:
            return Location.CELL
        return Location.face(self.axis)

    @property
    def destination(self) -> Location:
        if self.direction is Direction.TO_FACE:
            return Location.face(self.axis)
        return Location.CELL

    @property
    def descending(self) -> bool:
        """True if the axis' positive direction runs toward lower indices."""
        return self.axis is Axis.Z

    @property
    def is_average(self) -> bool:
        return self.reduction is Reduction.AVERAGE


@runtime_checkable
class KernelExecutor(Protocol):
    """Runs index-space kernels over field storage on one architecture.

    Storage is whatever ``allocate`` returns: a numpy array for the serial
    executor, a Taichi field for the Taichi executor. Indices passed to
    kernel bodies are 1-based along every axis.
    """

    def allocate(self, shape: tuple[int, int, int]) -> Any:
        """Allocate zero-initialized storage for a field of ``shape``."""
        ...

    def to_numpy(self, data: Any) -> np.ndarray:
        """Copy storage to a host numpy array of the field's shape."""
        ...

    def from_numpy(self, data: Any, array: np.ndarray) -> None:
        """Overwrite storage with the contents of ``array``."""
        ...

    def fill(self, data: Any, value: float) -> None:
        """Set every element of storage to ``value``."""
        ...

    def fill_layer(self, data: Any, axis: Axis, index: int, value: float) -> None:
        """Set the layer at 1-based ``index`` along ``axis`` to ``value``."""
        ...

    def pair_stencil(self, stencil: PairStencil, grid: Any, src: Any, dst: Any) -> None:
        """Apply a difference/average stencil from ``src`` into ``dst``."""
        ...

    def combine3(
        self,
        dst: Any,
        a: Any,
        b: Any,
        c: Any,
        coefficients: tuple[float, float, float],
        scale: float,
    ) -> None:
        """dst = scale · (ca·a + cb·b + cc·c), point-wise."""
        ...

    def scaled_product(self, dst: Any, a: Any, b: Any, scale: float) -> None:
        """dst = scale · a · b, point-wise. ``dst`` may alias ``b``."""
        ...
