"""
Difference operators δx, δy, δz.

Each takes a grid, a source field and a destination field at the
complementary location; the argument locations pick the direction.

Cell -> Face (periodic x/y):  δf[i] = f[i] - f[prev(i)]
Face -> Cell (periodic x/y):  δf[i] = f[next(i)] - f[i]

z is bounded with k = 1 at the top, and differences are top minus bottom:
Cell -> Face:  δf[k] = f[k-1] - f[k] for k = 2..Nz,   δf[1] = 0
Face -> Cell:  δf[k] = f[k] - f[k+1] for k = 1..Nz-1, δf[Nz] = f[Nz]

A bounded x or y axis closes the same way with its own orientation:
δf[1] = 0 on the wall face, and the last cell sees a zero wall face.
"""

from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Axis
from stagger.fields.field import Field
from stagger.kernels.protocol import Reduction
from stagger.operators.contract import apply_pair


def delta_x(grid: RegularCartesianGrid, f: Field, delta_f: Field) -> None:
    """Difference of ``f`` along x, written into ``delta_f``.

    Args:
        grid: Grid both fields live on
        f: Source field (CELL or FACE_X)
        delta_f: Destination field (FACE_X or CELL respectively)

    Raises:
        LocationMismatch: If the locations are not CELL/FACE_X in either order
        ShapeMismatch: If either field belongs to another grid
    """
    apply_pair(grid, Axis.X, Reduction.DIFFERENCE, f, delta_f, "delta_x")


def delta_y(grid: RegularCartesianGrid, f: Field, delta_f: Field) -> None:
    """Difference of ``f`` along y (CELL <-> FACE_Y), written into ``delta_f``."""
    apply_pair(grid, Axis.Y, Reduction.DIFFERENCE, f, delta_f, "delta_y")


def delta_z(grid: RegularCartesianGrid, f: Field, delta_f: Field) -> None:
    """Difference of ``f`` along z (CELL <-> FACE_Z), written into ``delta_f``.

    The top face (k = 1) of a Cell -> Face difference is always 0. The
    bottom cell of a Face -> Cell difference is f[Nz]: no flux leaves
    through the solid bottom.
    """
    apply_pair(grid, Axis.Z, Reduction.DIFFERENCE, f, delta_f, "delta_z")
