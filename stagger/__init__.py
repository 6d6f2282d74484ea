"""
stagger: finite-volume operators on a staggered (Arakawa C) grid.

Difference, average, divergence and flux-divergence kernels for
cell- and face-centred fields, run sequentially or in parallel with Taichi.
"""

__version__ = "0.1.0"

from stagger.core import Architecture, Location, RegularCartesianGrid, Topology
from stagger.fields import Field, create_temporary_fields
from stagger.operators import (
    avg_x,
    avg_y,
    avg_z,
    delta_x,
    delta_y,
    delta_z,
    divergence,
    flux_divergence,
)

__all__ = [
    "__version__",
    "Architecture",
    "Location",
    "RegularCartesianGrid",
    "Topology",
    "Field",
    "create_temporary_fields",
    "delta_x",
    "delta_y",
    "delta_z",
    "avg_x",
    "avg_y",
    "avg_z",
    "divergence",
    "flux_divergence",
]
