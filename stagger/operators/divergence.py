"""
Divergence and advective flux divergence.

Both compose the pair operators through a TemporaryFields pool:

divergence(grid, fx, fy, fz, div, tmp)
    div = (1/V) * (Ax*δx fx + Ay*δy fy + Az*δz fz)

flux_divergence(grid, u, v, w, q, div_flux, tmp)
    F = A * velocity * avg(q)  on each face, with F_z = 0 at the top face
    div_flux = (1/V) * (δx Fx + δy Fy + δz Fz)

The pool is overwritten by every call. Arguments must not be members of
the pool they are composed through.
"""

from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Axis, Location
from stagger.errors import LocationMismatch
from stagger.fields.field import Field
from stagger.fields.temporary import TemporaryFields
from stagger.kernels import get_executor
from stagger.operators.average import avg_x, avg_y, avg_z
from stagger.operators.contract import expect_location
from stagger.operators.difference import delta_x, delta_y, delta_z

FACE_LOCATIONS = (Location.FACE_X, Location.FACE_Y, Location.FACE_Z)
CELL_LOCATIONS = (Location.CELL, Location.CELL, Location.CELL)


def _check_pool(
    grid: RegularCartesianGrid, tmp: TemporaryFields, fields: dict[str, Field], operator: str
) -> None:
    """Verify grids and that no argument is a temporary of ``tmp``."""
    for field in tmp.cells + tmp.faces:
        field.check_grid(grid)
    for role, field in fields.items():
        field.check_grid(grid)
        if field in tmp:
            raise ValueError(
                f"{operator}: argument '{role}' is a member of the temporary pool"
            )


def divergence(
    grid: RegularCartesianGrid,
    fx: Field,
    fy: Field,
    fz: Field,
    div: Field,
    tmp: TemporaryFields,
) -> None:
    """Discrete divergence of (fx, fy, fz), written into ``div``.

    Face inputs (FACE_X, FACE_Y, FACE_Z) produce a cell-centred divergence
    through tmp.cell_1..3. Cell inputs produce a face-centred result
    through tmp.face_x/y/z; ``div`` may sit on any face location and the
    combination is taken point-wise.

    Args:
        grid: Grid every field lives on
        fx, fy, fz: Flux components
        div: Destination field
        tmp: Scratch pool on the same grid

    Raises:
        LocationMismatch: If the inputs are mixed or ``div`` has the wrong kind
            of location
        ShapeMismatch: If any field belongs to another grid
        ValueError: If an argument is a member of ``tmp``
    """
    locations = (fx.location, fy.location, fz.location)
    if locations == FACE_LOCATIONS:
        expect_location(div, Location.CELL, "div", "divergence")
        scratch = tmp.cells
    elif locations == CELL_LOCATIONS:
        if not div.location.is_face:
            raise LocationMismatch(
                f"divergence of cell fields expects a face destination, "
                f"got {div.location.name}"
            )
        scratch = tmp.faces
    else:
        raise LocationMismatch(
            "divergence expects (FACE_X, FACE_Y, FACE_Z) or (CELL, CELL, CELL) "
            f"inputs, got ({', '.join(loc.name for loc in locations)})"
        )

    _check_pool(grid, tmp, {"fx": fx, "fy": fy, "fz": fz, "div": div}, "divergence")

    delta_x(grid, fx, scratch[0])
    delta_y(grid, fy, scratch[1])
    delta_z(grid, fz, scratch[2])

    get_executor(grid.architecture).combine3(
        div.data,
        scratch[0].data,
        scratch[1].data,
        scratch[2].data,
        (grid.ax, grid.ay, grid.az),
        1.0 / grid.volume,
    )


def flux_divergence(
    grid: RegularCartesianGrid,
    u: Field,
    v: Field,
    w: Field,
    q: Field,
    div_flux: Field,
    tmp: TemporaryFields,
) -> None:
    """Divergence of the advective flux of tracer ``q`` by (u, v, w).

    The vertical flux through the top face (k = 1) is set to zero whatever
    w holds there. Together with the solid bottom this makes the volume
    integral of ``div_flux`` vanish up to round-off.

    Raises:
        LocationMismatch: Unless u, v, w are FACE_X, FACE_Y, FACE_Z and
            q, div_flux are CELL
        ShapeMismatch: If any field belongs to another grid
        ValueError: If an argument is a member of ``tmp``
    """
    expect_location(u, Location.FACE_X, "u", "flux_divergence")
    expect_location(v, Location.FACE_Y, "v", "flux_divergence")
    expect_location(w, Location.FACE_Z, "w", "flux_divergence")
    expect_location(q, Location.CELL, "q", "flux_divergence")
    expect_location(div_flux, Location.CELL, "div_flux", "flux_divergence")

    _check_pool(
        grid,
        tmp,
        {"u": u, "v": v, "w": w, "q": q, "div_flux": div_flux},
        "flux_divergence",
    )
    executor = get_executor(grid.architecture)

    # Face values of q
    avg_x(grid, q, tmp.face_x)
    avg_y(grid, q, tmp.face_y)
    avg_z(grid, q, tmp.face_z)

    # Face fluxes A * velocity * q_face
    executor.scaled_product(tmp.face_x.data, u.data, tmp.face_x.data, grid.ax)
    executor.scaled_product(tmp.face_y.data, v.data, tmp.face_y.data, grid.ay)
    executor.scaled_product(tmp.face_z.data, w.data, tmp.face_z.data, grid.az)

    # No flux through the top surface
    executor.fill_layer(tmp.face_z.data, Axis.Z, 1, 0.0)

    delta_x(grid, tmp.face_x, tmp.cell_1)
    delta_y(grid, tmp.face_y, tmp.cell_2)
    delta_z(grid, tmp.face_z, tmp.cell_3)

    executor.combine3(
        div_flux.data,
        tmp.cell_1.data,
        tmp.cell_2.data,
        tmp.cell_3.data,
        (1.0, 1.0, 1.0),
        1.0 / grid.volume,
    )
