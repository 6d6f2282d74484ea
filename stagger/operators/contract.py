"""Location contracts for the pair operators.

Every difference/average operator acts along one axis and maps between
cell centres and the faces normal to that axis, in either direction. The
table below is the complete list of legal (source, destination) pairs;
anything else is a LocationMismatch, never a coercion.
"""

from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Axis, Location
from stagger.errors import LocationMismatch
from stagger.fields.field import Field
from stagger.kernels import get_executor
from stagger.kernels.protocol import Direction, PairStencil, Reduction

# (source location, destination location) -> (axis, direction)
PAIR_CONTRACT: dict[tuple[Location, Location], tuple[Axis, Direction]] = {
    (Location.CELL, Location.FACE_X): (Axis.X, Direction.TO_FACE),
    (Location.FACE_X, Location.CELL): (Axis.X, Direction.TO_CELL),
    (Location.CELL, Location.FACE_Y): (Axis.Y, Direction.TO_FACE),
    (Location.FACE_Y, Location.CELL): (Axis.Y, Direction.TO_CELL),
    (Location.CELL, Location.FACE_Z): (Axis.Z, Direction.TO_FACE),
    (Location.FACE_Z, Location.CELL): (Axis.Z, Direction.TO_CELL),
}


def resolve_stencil(
    axis: Axis, reduction: Reduction, src: Field, dst: Field, operator: str
) -> PairStencil:
    """Select the stencil for ``operator`` from the argument locations.

    Raises:
        LocationMismatch: If (src, dst) is not a legal pair along ``axis``
    """
    entry = PAIR_CONTRACT.get((src.location, dst.location))
    if entry is None or entry[0] is not axis:
        face = Location.face(axis)
        raise LocationMismatch(
            f"{operator} maps {Location.CELL.name} <-> {face.name}, "
            f"got {src.location.name} -> {dst.location.name}"
        )
    return PairStencil(axis=axis, direction=entry[1], reduction=reduction)


def apply_pair(
    grid: RegularCartesianGrid,
    axis: Axis,
    reduction: Reduction,
    src: Field,
    dst: Field,
    operator: str,
) -> None:
    """Validate arguments and run a pair stencil on the grid's executor."""
    src.check_grid(grid)
    dst.check_grid(grid)
    stencil = resolve_stencil(axis, reduction, src, dst, operator)
    get_executor(grid.architecture).pair_stencil(stencil, grid, src.data, dst.data)


def expect_location(field: Field, location: Location, role: str, operator: str) -> None:
    """Raise LocationMismatch unless ``field`` sits at ``location``."""
    if field.location is not location:
        raise LocationMismatch(
            f"{operator} expects {role} at {location.name}, got {field.location.name}"
        )
