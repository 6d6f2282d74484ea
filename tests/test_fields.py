"""Tests for Field and the declarative field containers."""

import numpy as np
import pytest
import taichi as ti

from stagger.core.architecture import Architecture
from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Location
from stagger.errors import ArchitectureMismatch, LocationMismatch, ShapeMismatch
from stagger.fields import (
    Field,
    FieldContainer,
    FieldRole,
    FieldSpec,
    TemporaryFields,
    TracerFields,
    VelocityFields,
    create_state_container,
    create_temporary_fields,
    create_temporary_specs,
    create_tracer_specs,
    create_velocity_specs,
)
from stagger.operators import delta_x


class TestField:
    """Tests for Field storage and initialization."""

    def test_zero_initialized(self, unit_grid):
        """New fields hold zeros of the grid's shape."""
        f = Field(unit_grid, Location.CELL)
        values = f.to_numpy()
        assert values.shape == unit_grid.shape
        assert np.all(values == 0.0)
        assert f.architecture is unit_grid.architecture

    def test_set_scalar(self, unit_grid):
        """A scalar fills every value."""
        f = Field(unit_grid, Location.FACE_X)
        f.set(2.5)
        assert np.all(f.to_numpy() == 2.5)

    def test_set_array(self, unit_grid):
        """An array of the grid's shape is copied in."""
        data = np.arange(64, dtype=np.float64).reshape(unit_grid.shape)
        f = Field(unit_grid, Location.CELL)
        f.set(data)
        assert np.array_equal(f.to_numpy(), data)

    def test_set_array_wrong_shape(self, unit_grid):
        """An array of another shape raises ShapeMismatch."""
        f = Field(unit_grid, Location.CELL)
        with pytest.raises(ShapeMismatch):
            f.set(np.zeros((4, 4, 3)))

    def test_set_function_uses_nodes(self, grid_factory):
        """Functions are evaluated on the field's own nodes."""
        grid = grid_factory(size=(4, 3, 2), length=(4.0, 3.0, 2.0))
        u = Field(grid, Location.FACE_X)
        u.set(lambda x, y, z: x)
        # x-faces of unit cells sit at 0, 1, 2, 3
        assert np.allclose(u.to_numpy()[:, 0, 0], [0.0, 1.0, 2.0, 3.0])

        c = Field(grid, Location.CELL)
        c.set(lambda x, y, z: z)
        assert np.allclose(c.to_numpy()[0, 0, :], [-0.5, -1.5])

    def test_set_function_broadcasts(self, unit_grid):
        """A function may return a scalar."""
        f = Field(unit_grid, Location.CELL)
        f.set(lambda x, y, z: 3.0)
        assert np.all(f.to_numpy() == 3.0)

    def test_invalid_location(self, unit_grid):
        """Location must be a Location member."""
        with pytest.raises(LocationMismatch):
            Field(unit_grid, "cell")

    def test_explicit_data_wrong_shape(self):
        """Explicit storage must match the grid's shape."""
        grid = RegularCartesianGrid(size=(2, 2, 2), length=(1, 1, 1))
        with pytest.raises(ShapeMismatch):
            Field(grid, Location.CELL, data=np.zeros((2, 2, 3)))

    def test_explicit_data_shared(self):
        """Explicit numpy storage is used without copying on SERIAL."""
        grid = RegularCartesianGrid(size=(2, 2, 2), length=(1, 1, 1))
        data = np.zeros((2, 2, 2))
        f = Field(grid, Location.CELL, data=data)
        f.fill(1.0)
        assert np.all(data == 1.0)

    def test_explicit_taichi_storage_copied_to_one_based(self):
        """Zero-based Taichi storage is copied into kernel-ready storage."""
        grid = RegularCartesianGrid(
            size=(4, 4, 4), length=(4.0, 4.0, 4.0), architecture=Architecture.CPU
        )
        values = np.arange(64, dtype=np.float64).reshape(grid.shape)
        raw = ti.field(dtype=ti.f64, shape=grid.shape)
        raw.from_numpy(values)

        f = Field(grid, Location.CELL, data=raw)
        assert f.data is not raw
        assert np.array_equal(f.to_numpy(), values)
        assert f.data[1, 1, 1] == values[0, 0, 0]

        d = Field(grid, Location.FACE_X)
        delta_x(grid, f, d)
        assert np.array_equal(d.to_numpy(), values - np.roll(values, 1, axis=0))

    def test_set_function_wrong_shape(self, unit_grid):
        """A function result that does not broadcast raises ShapeMismatch."""
        f = Field(unit_grid, Location.CELL)
        with pytest.raises(ShapeMismatch, match="function"):
            f.set(lambda x, y, z: np.ones(3))

    def test_numpy_storage_on_taichi_grid(self):
        """Numpy storage for a CPU grid raises ArchitectureMismatch."""
        grid = RegularCartesianGrid(
            size=(2, 2, 2), length=(1, 1, 1), architecture=Architecture.CPU
        )
        with pytest.raises(ArchitectureMismatch):
            Field(grid, Location.CELL, data=np.zeros((2, 2, 2)))

    def test_taichi_storage_on_serial_grid(self):
        """Taichi storage for a SERIAL grid raises ArchitectureMismatch."""
        grid = RegularCartesianGrid(size=(2, 2, 2), length=(1, 1, 1))
        with pytest.raises(ArchitectureMismatch):
            Field(grid, Location.CELL, data=ti.field(dtype=ti.f64, shape=(2, 2, 2)))

    def test_check_grid(self):
        """Fields reject grids of another shape or architecture."""
        grid = RegularCartesianGrid(size=(2, 2, 2), length=(1, 1, 1))
        f = Field(grid, Location.CELL)

        f.check_grid(RegularCartesianGrid(size=(2, 2, 2), length=(1, 1, 1)))
        with pytest.raises(ShapeMismatch):
            f.check_grid(RegularCartesianGrid(size=(2, 2, 3), length=(1, 1, 1)))
        with pytest.raises(ArchitectureMismatch):
            f.check_grid(
                RegularCartesianGrid(
                    size=(2, 2, 2), length=(1, 1, 1), architecture=Architecture.CPU
                )
            )

    def test_repr(self, unit_grid):
        """repr names the field and its location."""
        f = Field(unit_grid, Location.FACE_Z, name="w")
        assert "'w'" in repr(f)
        assert "FACE_Z" in repr(f)


class TestFieldSpec:
    """Tests for FieldSpec validation."""

    def test_valid_spec(self):
        spec = FieldSpec("u", Location.FACE_X, FieldRole.PROGNOSTIC, "Velocity")
        assert spec.name == "u"
        assert spec.location is Location.FACE_X

    def test_empty_name(self):
        with pytest.raises(ValueError, match="empty"):
            FieldSpec("", Location.CELL, FieldRole.DIAGNOSTIC)

    def test_name_not_snake_case(self):
        with pytest.raises(ValueError, match="snake_case"):
            FieldSpec("Temp", Location.CELL, FieldRole.DIAGNOSTIC)

    def test_location_type(self):
        with pytest.raises(ValueError, match="Location"):
            FieldSpec("t", "cell", FieldRole.PROGNOSTIC)


class TestFieldContainer:
    """Tests for FieldContainer lifecycle."""

    @pytest.fixture
    def container(self, unit_grid):
        return FieldContainer(unit_grid)

    def test_register_and_allocate(self, container, unit_grid):
        """Allocated fields sit on the container's grid at their spec location."""
        container.register_many(create_velocity_specs())
        container.allocate()

        assert container.allocated
        assert container.field_names == ["u", "v", "w"]
        w = container["w"]
        assert w.location is Location.FACE_Z
        assert w.grid is unit_grid
        assert w.name == "w"

    def test_duplicate_registration(self, container):
        container.register(FieldSpec("t", Location.CELL, FieldRole.PROGNOSTIC))
        with pytest.raises(ValueError, match="already registered"):
            container.register(FieldSpec("t", Location.CELL, FieldRole.PROGNOSTIC))

    def test_register_after_allocation(self, container):
        container.register(FieldSpec("t", Location.CELL, FieldRole.PROGNOSTIC))
        container.allocate()
        with pytest.raises(RuntimeError):
            container.register(FieldSpec("s", Location.CELL, FieldRole.PROGNOSTIC))

    def test_allocate_twice_or_empty(self, container):
        with pytest.raises(RuntimeError, match="No fields"):
            container.allocate()
        container.register(FieldSpec("t", Location.CELL, FieldRole.PROGNOSTIC))
        container.allocate()
        with pytest.raises(RuntimeError, match="already allocated"):
            container.allocate()

    def test_get_before_allocation(self, container):
        container.register(FieldSpec("t", Location.CELL, FieldRole.PROGNOSTIC))
        with pytest.raises(RuntimeError):
            container.get("t")

    def test_unknown_field(self, container):
        container.register(FieldSpec("t", Location.CELL, FieldRole.PROGNOSTIC))
        container.allocate()
        with pytest.raises(KeyError):
            container["missing"]

    def test_roles_and_specs(self, container):
        container.register_many(create_velocity_specs())
        container.register_many(create_temporary_specs())
        assert container.fields_by_role(FieldRole.PROGNOSTIC) == ["u", "v", "w"]
        assert len(container.fields_by_role(FieldRole.TEMPORARY)) == 6
        assert container.get_spec("face_y").location is Location.FACE_Y
        assert "cell_2" in container
        assert len(container) == 9

    def test_memory(self, container, unit_grid):
        """Memory counts one float64 per cell per field."""
        container.register_many(create_velocity_specs())
        assert container.memory_bytes == 0
        container.allocate()
        assert container.memory_bytes == 3 * unit_grid.n_cells * 8
        assert container.memory_mb == pytest.approx(3 * 64 * 8 / 1024**2)


class TestStateFields:
    """Tests for the velocity and tracer wrappers."""

    def test_state_container(self, unit_grid):
        container = create_state_container(unit_grid)
        velocities = VelocityFields(container)
        tracers = TracerFields(container)

        assert velocities.u.location is Location.FACE_X
        assert velocities.v.location is Location.FACE_Y
        assert velocities.w.location is Location.FACE_Z
        assert [f.name for f in velocities] == ["u", "v", "w"]

        assert tracers.names == ("t", "s")
        assert len(tracers) == 2
        assert tracers["t"].location is Location.CELL
        assert tracers.s is tracers["s"]

    def test_custom_tracers(self, unit_grid):
        container = create_state_container(unit_grid, tracers=("c",))
        tracers = TracerFields(container, names=("c",))
        assert [f.name for f in tracers] == ["c"]
        with pytest.raises(KeyError):
            tracers["t"]

    def test_tracer_specs(self):
        specs = create_tracer_specs(["t", "dye"])
        assert [s.name for s in specs] == ["t", "dye"]
        assert all(s.location is Location.CELL for s in specs)


class TestTemporaryFields:
    """Tests for the scratch pool."""

    def test_pool_locations(self, unit_grid):
        tmp = create_temporary_fields(unit_grid)
        assert isinstance(tmp, TemporaryFields)
        assert tmp.grid is unit_grid
        assert all(f.location is Location.CELL for f in tmp.cells)
        assert [f.location for f in tmp.faces] == [
            Location.FACE_X,
            Location.FACE_Y,
            Location.FACE_Z,
        ]

    def test_membership_by_identity(self, unit_grid):
        tmp = create_temporary_fields(unit_grid)
        assert tmp.cell_1 in tmp
        assert tmp.face_z in tmp
        assert Field(unit_grid, Location.CELL) not in tmp
