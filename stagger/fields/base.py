"""Base field container and specification classes.

This module provides the foundation for declarative field management:
- FieldSpec: Describes a field's name, location, and role
- FieldRole: Enum categorizing field usage patterns
- FieldContainer: Allocates a set of Fields on one grid

Usage:
    container = FieldContainer(grid)
    container.register(FieldSpec("u", Location.FACE_X, FieldRole.PROGNOSTIC))
    container.allocate()
    u = container["u"]
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto

from stagger.core.dtypes import NP_DTYPE
from stagger.core.grid import RegularCartesianGrid
from stagger.core.location import Location
from stagger.fields.field import Field

logger = logging.getLogger(__name__)


class FieldRole(Enum):
    """Categorizes field usage patterns for documentation and validation.

    PROGNOSTIC: Time-stepped model state (velocities, tracers)
    DIAGNOSTIC: Recomputed from state when needed (pressure, divergence)
    TEMPORARY: Scratch workspace, overwritten by every composition
    """

    PROGNOSTIC = auto()
    DIAGNOSTIC = auto()
    TEMPORARY = auto()


@dataclass(frozen=True)
class FieldSpec:
    """Immutable specification for a Field.

    Attributes:
        name: Field identifier (snake_case)
        location: Staggered location of the field's values
        role: Field usage category
        description: Human-readable description with units
    """

    name: str
    location: Location
    role: FieldRole
    description: str = ""

    def __post_init__(self):
        """Validate field specification."""
        if not self.name:
            raise ValueError("Field name cannot be empty")
        if not self.name.islower() or not self.name.replace("_", "").isalnum():
            raise ValueError(f"Field name must be snake_case, got: {self.name}")
        if not isinstance(self.location, Location):
            raise ValueError(
                f"Field '{self.name}' location must be a Location, got {self.location!r}"
            )


class FieldContainer:
    """Manages the lifecycle of a named set of Fields on one grid.

    Fields are registered via FieldSpec, then allocated together on the
    grid's architecture.

    Attributes:
        grid: Grid every field is allocated on
        specs: Registered field specifications (name -> FieldSpec)
        allocated: Whether fields have been allocated

    Example:
        container = FieldContainer(grid)
        container.register_many(create_velocity_specs())
        container.allocate()
        w = container["w"]
    """

    def __init__(self, grid: RegularCartesianGrid):
        """Initialize container with a grid.

        Args:
            grid: Grid (and architecture) the fields live on
        """
        self._grid = grid
        self._specs: dict[str, FieldSpec] = {}
        self._fields: dict[str, Field] = {}
        self._allocated = False

    @property
    def grid(self) -> RegularCartesianGrid:
        """Get the grid."""
        return self._grid

    @property
    def allocated(self) -> bool:
        """Check if fields have been allocated."""
        return self._allocated

    @property
    def field_names(self) -> list[str]:
        """Get list of registered field names."""
        return list(self._specs.keys())

    def register(self, spec: FieldSpec) -> None:
        """Register a field specification.

        Args:
            spec: Field specification to register

        Raises:
            ValueError: If name already registered
            RuntimeError: If fields already allocated
        """
        if self._allocated:
            raise RuntimeError("Cannot register fields after allocation")
        if spec.name in self._specs:
            raise ValueError(f"Field '{spec.name}' already registered")
        self._specs[spec.name] = spec

    def register_many(self, specs: list[FieldSpec]) -> None:
        """Register multiple field specifications."""
        for spec in specs:
            self.register(spec)

    def allocate(self) -> None:
        """Allocate all registered fields, zero-initialized.

        Raises:
            RuntimeError: If already allocated or no fields registered
        """
        if self._allocated:
            raise RuntimeError("Fields already allocated")
        if not self._specs:
            raise RuntimeError("No fields registered")

        for name, spec in self._specs.items():
            self._fields[name] = Field(self._grid, spec.location, name=name)

        self._allocated = True
        logger.debug(
            "Allocated %d fields (%.3f MB) on %s",
            len(self._fields),
            self.memory_mb,
            self._grid.architecture.value,
        )

    def get(self, name: str) -> Field:
        """Get a field by name.

        Raises:
            KeyError: If field not found
            RuntimeError: If fields not allocated
        """
        if not self._allocated:
            raise RuntimeError("Fields not yet allocated")
        if name not in self._fields:
            raise KeyError(f"Field '{name}' not found")
        return self._fields[name]

    def __getitem__(self, name: str) -> Field:
        """Get a field by name using bracket notation."""
        return self.get(name)

    def get_spec(self, name: str) -> FieldSpec:
        """Get the specification for a field."""
        if name not in self._specs:
            raise KeyError(f"Field '{name}' not registered")
        return self._specs[name]

    def fields_by_role(self, role: FieldRole) -> list[str]:
        """Get field names filtered by role."""
        return [name for name, spec in self._specs.items() if spec.role == role]

    @property
    def memory_bytes(self) -> int:
        """Total storage of all allocated fields in bytes."""
        if not self._allocated:
            return 0
        itemsize = NP_DTYPE().itemsize
        return len(self._specs) * self._grid.n_cells * itemsize

    @property
    def memory_mb(self) -> float:
        """Total storage in megabytes."""
        return self.memory_bytes / (1024 * 1024)

    def __contains__(self, name: str) -> bool:
        """Check if a field is registered."""
        return name in self._specs

    def __len__(self) -> int:
        """Number of registered fields."""
        return len(self._specs)
