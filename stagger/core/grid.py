"""Regular Cartesian grid.

RegularCartesianGrid is an immutable description of a box discretized
into Nx x Ny x Nz identical cells. Every field and operator shares one
grid by reference; nothing mutates it after construction.

Coordinates:
    x, y run from 0 to Lx, Ly (face i sits at (i - 1)·Δ)
    z runs downward from 0 at the surface to -Lz (k = 1 is the top layer)

Topology:
    x, y may be PERIODIC or BOUNDED; z is always BOUNDED.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from numbers import Integral, Real

import numpy as np

from stagger.core.architecture import Architecture
from stagger.core.location import Axis, Location
from stagger.errors import InvalidGridSpec

logger = logging.getLogger(__name__)


class Topology(Enum):
    """Boundary topology of one grid axis."""

    PERIODIC = "periodic"
    BOUNDED = "bounded"


def _as_triple(value, name: str) -> tuple:
    try:
        triple = tuple(value)
    except TypeError:
        raise InvalidGridSpec(f"{name} must be a sequence of 3 values, got {value!r}")
    if len(triple) != 3:
        raise InvalidGridSpec(f"{name} must have 3 entries, got {len(triple)}")
    return triple


def _as_topology(value, axis: Axis) -> Topology:
    if isinstance(value, Topology):
        return value
    try:
        return Topology(str(value).lower())
    except ValueError:
        raise InvalidGridSpec(
            f"Unknown topology for {axis.name.lower()}: {value!r}. "
            f"Available: {[t.value for t in Topology]}"
        )


@dataclass(frozen=True)
class RegularCartesianGrid:
    """Immutable regular Cartesian grid.

    Attributes:
        size: Cell counts (Nx, Ny, Nz)
        length: Domain extents (Lx, Ly, Lz) [m]
        topology: Per-axis topology (x, y, z); z must be BOUNDED
        architecture: Where fields on this grid live and kernels run

    Raises:
        InvalidGridSpec: On a non-positive or non-integer cell count, a
            non-positive or non-finite extent, or a periodic z axis
    """

    size: tuple[int, int, int]
    length: tuple[float, float, float]
    topology: tuple[Topology, Topology, Topology] = (
        Topology.PERIODIC,
        Topology.PERIODIC,
        Topology.BOUNDED,
    )
    architecture: Architecture = Architecture.SERIAL

    def __post_init__(self):
        """Validate and normalize grid parameters."""
        size = _as_triple(self.size, "size")
        length = _as_triple(self.length, "length")
        topology = _as_triple(self.topology, "topology")

        for axis, n in zip(Axis, size):
            if isinstance(n, bool) or not isinstance(n, Integral) or n < 1:
                raise InvalidGridSpec(
                    f"N{axis.name.lower()} must be a positive integer, got {n!r}"
                )
        for axis, L in zip(Axis, length):
            if isinstance(L, bool) or not isinstance(L, Real) or not math.isfinite(L) or L <= 0:
                raise InvalidGridSpec(
                    f"L{axis.name.lower()} must be positive, got {L!r}"
                )

        topology = tuple(_as_topology(t, axis) for axis, t in zip(Axis, topology))
        if topology[Axis.Z] is not Topology.BOUNDED:
            raise InvalidGridSpec("z topology must be bounded")

        if not isinstance(self.architecture, Architecture):
            raise InvalidGridSpec(
                f"architecture must be an Architecture, got {self.architecture!r}"
            )

        object.__setattr__(self, "size", tuple(int(n) for n in size))
        object.__setattr__(self, "length", tuple(float(L) for L in length))
        object.__setattr__(self, "topology", topology)

        logger.debug(
            "Constructed %dx%dx%d grid on %s (topology %s)",
            *self.size,
            self.architecture.value,
            "/".join(t.value for t in self.topology),
        )

    # Counts

    @property
    def nx(self) -> int:
        return self.size[0]

    @property
    def ny(self) -> int:
        return self.size[1]

    @property
    def nz(self) -> int:
        return self.size[2]

    @property
    def shape(self) -> tuple[int, int, int]:
        """Array shape of every field on this grid."""
        return self.size

    @property
    def n_cells(self) -> int:
        """Total number of cells."""
        return self.nx * self.ny * self.nz

    # Extents and spacings

    @property
    def lx(self) -> float:
        return self.length[0]

    @property
    def ly(self) -> float:
        return self.length[1]

    @property
    def lz(self) -> float:
        return self.length[2]

    @property
    def dx(self) -> float:
        return self.lx / self.nx

    @property
    def dy(self) -> float:
        return self.ly / self.ny

    @property
    def dz(self) -> float:
        return self.lz / self.nz

    def spacing(self, axis: Axis) -> float:
        """Cell spacing along ``axis`` [m]."""
        return (self.dx, self.dy, self.dz)[Axis(axis)]

    # Areas and volume

    @property
    def ax(self) -> float:
        """Area of an x-face (Δy·Δz) [m²]."""
        return self.dy * self.dz

    @property
    def ay(self) -> float:
        """Area of a y-face (Δx·Δz) [m²]."""
        return self.dx * self.dz

    @property
    def az(self) -> float:
        """Area of a z-face (Δx·Δy) [m²]."""
        return self.dx * self.dy

    @property
    def volume(self) -> float:
        """Cell volume (Δx·Δy·Δz) [m³]."""
        return self.dx * self.dy * self.dz

    def face_area(self, axis: Axis) -> float:
        """Area of a face normal to ``axis`` [m²]."""
        return (self.ax, self.ay, self.az)[Axis(axis)]

    def is_periodic(self, axis: Axis) -> bool:
        return self.topology[Axis(axis)] is Topology.PERIODIC

    # Coordinates

    @property
    def x_centers(self) -> np.ndarray:
        return (np.arange(1, self.nx + 1) - 0.5) * self.dx

    @property
    def y_centers(self) -> np.ndarray:
        return (np.arange(1, self.ny + 1) - 0.5) * self.dy

    @property
    def z_centers(self) -> np.ndarray:
        return -(np.arange(1, self.nz + 1) - 0.5) * self.dz

    @property
    def x_faces(self) -> np.ndarray:
        return np.arange(self.nx) * self.dx

    @property
    def y_faces(self) -> np.ndarray:
        return np.arange(self.ny) * self.dy

    @property
    def z_faces(self) -> np.ndarray:
        return -np.arange(self.nz) * self.dz

    def nodes(self, location: Location) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """1-D coordinate arrays (x, y, z) of the points a field samples.

        A face location uses face coordinates along its normal axis and
        cell-centre coordinates along the other two.
        """
        centers = (self.x_centers, self.y_centers, self.z_centers)
        faces = (self.x_faces, self.y_faces, self.z_faces)
        axis = location.axis
        return tuple(
            faces[a] if axis is not None and a == axis else centers[a]
            for a in Axis
        )
