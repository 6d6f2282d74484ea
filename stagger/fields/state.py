"""Model state field specifications and factory.

State fields are the prognostic variables an outer time stepper advances:
- u, v, w: Velocity components, one per face location (C-grid)
- Tracers: Cell-centred scalars such as temperature and salinity
"""

from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Location
from stagger.fields.base import FieldContainer, FieldRole, FieldSpec
from stagger.fields.field import Field

DEFAULT_TRACERS = ("t", "s")


def create_velocity_specs() -> list[FieldSpec]:
    """Create specifications for the velocity components.

    Returns:
        FieldSpecs for u (FACE_X), v (FACE_Y) and w (FACE_Z)
    """
    return [
        FieldSpec(
            name="u",
            location=Location.FACE_X,
            role=FieldRole.PROGNOSTIC,
            description="Velocity in x [m/s]",
        ),
        FieldSpec(
            name="v",
            location=Location.FACE_Y,
            role=FieldRole.PROGNOSTIC,
            description="Velocity in y [m/s]",
        ),
        FieldSpec(
            name="w",
            location=Location.FACE_Z,
            role=FieldRole.PROGNOSTIC,
            description="Velocity in z [m/s]",
        ),
    ]


def create_tracer_specs(names: tuple[str, ...] = DEFAULT_TRACERS) -> list[FieldSpec]:
    """Create specifications for cell-centred tracers.

    Args:
        names: Tracer names (default: temperature "t" and salinity "s")
    """
    return [
        FieldSpec(
            name=name,
            location=Location.CELL,
            role=FieldRole.PROGNOSTIC,
            description=f"Tracer {name}",
        )
        for name in names
    ]


class VelocityFields:
    """Convenience wrapper for the velocity components.

    Example:
        velocities = VelocityFields(container)
        divergence(grid, velocities.u, velocities.v, velocities.w, div, tmp)
    """

    def __init__(self, container: FieldContainer):
        self._container = container

    @property
    def u(self) -> Field:
        """Velocity in x, on x-faces."""
        return self._container["u"]

    @property
    def v(self) -> Field:
        """Velocity in y, on y-faces."""
        return self._container["v"]

    @property
    def w(self) -> Field:
        """Velocity in z, on z-faces."""
        return self._container["w"]

    def __iter__(self):
        return iter((self.u, self.v, self.w))


class TracerFields:
    """Convenience wrapper for cell-centred tracers, accessed by name."""

    def __init__(self, container: FieldContainer, names: tuple[str, ...] = DEFAULT_TRACERS):
        self._container = container
        self._names = tuple(names)

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __getitem__(self, name: str) -> Field:
        if name not in self._names:
            raise KeyError(f"Unknown tracer '{name}'. Available: {list(self._names)}")
        return self._container[name]

    def __getattr__(self, name: str) -> Field:
        # Only reached for names that are not regular attributes
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self[name]
        except KeyError as e:
            raise AttributeError(str(e)) from None

    def __iter__(self):
        return (self._container[name] for name in self._names)

    def __len__(self) -> int:
        return len(self._names)


def create_state_container(
    grid: RegularCartesianGrid, tracers: tuple[str, ...] = DEFAULT_TRACERS
) -> FieldContainer:
    """Create a container with velocity and tracer fields.

    Args:
        grid: Grid to allocate on
        tracers: Tracer names

    Returns:
        Allocated FieldContainer
    """
    container = FieldContainer(grid)
    container.register_many(create_velocity_specs())
    container.register_many(create_tracer_specs(tracers))
    container.allocate()
    return container
