"""Parameter schema with validation. Units: meters."""

import math
from dataclasses import asdict, dataclass, field
from numbers import Real
from typing import Any

from stagger.config import init_taichi
from stagger.core.architecture import Architecture
from stagger.core.grid import RegularCartesianGrid, Topology
from stagger.errors import ValidationError

BACKENDS = ("serial", "cpu", "cuda", "vulkan", "metal", "auto")


def _positive(value: float, name: str) -> None:
    if (
        isinstance(value, bool)
        or not isinstance(value, Real)
        or not math.isfinite(value)
        or value <= 0
    ):
        raise ValidationError(f"{name} must be positive and finite, got {value!r}")


def _count(value: int, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"{name} must be a positive integer, got {value!r}")


def _topology(value: str, name: str) -> None:
    if value not in {t.value for t in Topology}:
        raise ValidationError(
            f"{name} must be 'periodic' or 'bounded', got {value!r}"
        )


@dataclass(frozen=True)
class GridParams:
    """Grid: nx, ny, nz (cells), lx, ly, lz (extents [m]), horizontal topology."""
    nx: int = 16
    ny: int = 16
    nz: int = 16
    lx: float = 1.0
    ly: float = 1.0
    lz: float = 1.0
    topology_x: str = "periodic"
    topology_y: str = "periodic"

    def __post_init__(self) -> None:
        _count(self.nx, "nx")
        _count(self.ny, "ny")
        _count(self.nz, "nz")
        _positive(self.lx, "lx")
        _positive(self.ly, "ly")
        _positive(self.lz, "lz")
        _topology(self.topology_x, "topology_x")
        _topology(self.topology_y, "topology_y")

    @property
    def size(self) -> tuple[int, int, int]:
        return (self.nx, self.ny, self.nz)

    @property
    def length(self) -> tuple[float, float, float]:
        return (self.lx, self.ly, self.lz)

    def to_grid(self, architecture: Architecture = Architecture.SERIAL) -> RegularCartesianGrid:
        """Build the grid these parameters describe (z is always bounded)."""
        return RegularCartesianGrid(
            size=self.size,
            length=self.length,
            topology=(self.topology_x, self.topology_y, Topology.BOUNDED),
            architecture=architecture,
        )


@dataclass(frozen=True)
class ArchitectureParams:
    """Execution: backend name, Taichi debug mode, fast-math flag."""
    backend: str = "auto"
    debug: bool = False
    fast_math: bool = False

    def __post_init__(self) -> None:
        if self.backend not in BACKENDS:
            raise ValidationError(
                f"backend must be one of {', '.join(BACKENDS)}, got {self.backend!r}"
            )

    def initialize(self) -> Architecture:
        """Select the backend (initializing Taichi unless serial)."""
        return init_taichi(self.backend, debug=self.debug, fast_math=self.fast_math)


@dataclass(frozen=True)
class ModelConfig:
    """Complete configuration: grid geometry and execution backend."""

    grid: GridParams = field(default_factory=GridParams)
    architecture: ArchitectureParams = field(default_factory=ArchitectureParams)

    def to_dict(self) -> dict[str, Any]:
        """Convert to nested dictionary."""
        return {
            "grid": asdict(self.grid),
            "architecture": asdict(self.architecture),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ModelConfig":
        """Create from nested dictionary. Unknown groups are rejected."""
        param_classes = {
            "grid": GridParams,
            "architecture": ArchitectureParams,
        }
        unknown = set(data) - set(param_classes)
        if unknown:
            raise ValidationError(f"Unknown parameter group(s): {sorted(unknown)}")
        try:
            kwargs = {k: param_classes[k](**(data[k] or {})) for k in data}
        except TypeError as e:
            raise ValidationError(str(e)) from e
        return cls(**kwargs)

    def with_updates(self, **kwargs: Any) -> "ModelConfig":
        """Create new config with updates."""
        current = self.to_dict()
        for key, value in kwargs.items():
            if key not in current:
                raise ValidationError(f"Unknown parameter group: {key}")
            if isinstance(value, dict):
                current[key].update(value)
            else:
                current[key] = asdict(value)
        return self.from_dict(current)

    def build(self) -> tuple[Architecture, RegularCartesianGrid]:
        """Initialize the configured backend and construct the grid on it.

        Returns:
            The selected Architecture and a grid living on it
        """
        architecture = self.architecture.initialize()
        return architecture, self.grid.to_grid(architecture)

    # Convenience accessors
    @property
    def shape(self) -> tuple[int, int, int]:
        return self.grid.size

    @property
    def backend(self) -> str:
        return self.architecture.backend
