"""
Average operators avgx, avgy, avgz.

Same neighbour pairing as the difference operators, combined with the
arithmetic mean 0.5·(a + b) instead of a difference.

On bounded axes both closure slots are 0: the top face of Cell -> Face
and the bottom cell of Face -> Cell along z (likewise the first face and
last cell of a bounded x or y axis). This keeps advective transport
through the top and bottom at zero.
"""

from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Axis
from stagger.fields.field import Field
from stagger.kernels.protocol import Reduction
from stagger.operators.contract import apply_pair


def avg_x(grid: RegularCartesianGrid, f: Field, f_avg: Field) -> None:
    """Average of ``f`` along x (CELL <-> FACE_X), written into ``f_avg``.

    Raises:
        LocationMismatch: If the locations are not CELL/FACE_X in either order
        ShapeMismatch: If either field belongs to another grid
    """
    apply_pair(grid, Axis.X, Reduction.AVERAGE, f, f_avg, "avg_x")


def avg_y(grid: RegularCartesianGrid, f: Field, f_avg: Field) -> None:
    """Average of ``f`` along y (CELL <-> FACE_Y), written into ``f_avg``."""
    apply_pair(grid, Axis.Y, Reduction.AVERAGE, f, f_avg, "avg_y")


def avg_z(grid: RegularCartesianGrid, f: Field, f_avg: Field) -> None:
    """Average of ``f`` along z (CELL <-> FACE_Z), written into ``f_avg``."""
    apply_pair(grid, Axis.Z, Reduction.AVERAGE, f, f_avg, "avg_z")
