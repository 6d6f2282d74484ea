"""Temporary field specifications and factory.

Temporary fields are caller-owned scratch space that operator compositions
(divergence, flux divergence) write intermediates into instead of
allocating per call:
- cell_1, cell_2, cell_3: Cell-centred intermediates (one per axis)
- face_x, face_y, face_z: One face-centred intermediate per face location

Contents are overwritten by every composition and must never be read as
if they survived an unrelated call. A pool is not safe to share between
two compositions running at the same time; give each its own pool.
"""

from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Axis, Location
from stagger.fields.base import FieldContainer, FieldRole, FieldSpec
from stagger.fields.field import Field


def create_temporary_specs() -> list[FieldSpec]:
    """Create specifications for the scratch pool.

    Returns:
        List of FieldSpec for temporary fields
    """
    cells = [
        FieldSpec(
            name=f"cell_{n}",
            location=Location.CELL,
            role=FieldRole.TEMPORARY,
            description=f"Cell-centred scratch {n}",
        )
        for n in (1, 2, 3)
    ]
    faces = [
        FieldSpec(
            name=f"face_{axis.name.lower()}",
            location=Location.face(axis),
            role=FieldRole.TEMPORARY,
            description=f"{axis.name.lower()}-face scratch",
        )
        for axis in Axis
    ]
    return cells + faces


class TemporaryFields:
    """Convenience wrapper for the scratch pool.

    Example:
        tmp = create_temporary_fields(grid)
        flux_divergence(grid, u, v, w, q, div_flux, tmp)
    """

    def __init__(self, container: FieldContainer):
        """Initialize with field container.

        Args:
            container: Allocated FieldContainer with temporary fields
        """
        self._container = container

    @property
    def grid(self) -> RegularCartesianGrid:
        return self._container.grid

    @property
    def cell_1(self) -> Field:
        return self._container["cell_1"]

    @property
    def cell_2(self) -> Field:
        return self._container["cell_2"]

    @property
    def cell_3(self) -> Field:
        return self._container["cell_3"]

    @property
    def face_x(self) -> Field:
        return self._container["face_x"]

    @property
    def face_y(self) -> Field:
        return self._container["face_y"]

    @property
    def face_z(self) -> Field:
        return self._container["face_z"]

    @property
    def cells(self) -> tuple[Field, Field, Field]:
        """Cell scratch fields, one per axis."""
        return (self.cell_1, self.cell_2, self.cell_3)

    @property
    def faces(self) -> tuple[Field, Field, Field]:
        """Face scratch fields in axis order (x, y, z)."""
        return (self.face_x, self.face_y, self.face_z)

    def __contains__(self, field: Field) -> bool:
        return any(field is scratch for scratch in self.cells + self.faces)


def create_temporary_container(grid: RegularCartesianGrid) -> FieldContainer:
    """Create a container with the temporary fields allocated.

    Args:
        grid: Grid to allocate on

    Returns:
        Allocated FieldContainer with temporary fields
    """
    container = FieldContainer(grid)
    container.register_many(create_temporary_specs())
    container.allocate()
    return container


def create_temporary_fields(grid: RegularCartesianGrid) -> TemporaryFields:
    """Allocate a scratch pool for ``grid``."""
    return TemporaryFields(create_temporary_container(grid))
