"""Core infrastructure: types, architectures, locations, and the grid."""

from stagger.core.architecture import Architecture
from stagger.core.dtypes import DTYPE, NP_DTYPE
from stagger.core.grid import RegularCartesianGrid, Topology
from stagger.core.location import Axis, Location, next_index, prev_index

__all__ = [
    "DTYPE",
    "NP_DTYPE",
    "Architecture",
    "Axis",
    "Location",
    "RegularCartesianGrid",
    "Topology",
    "next_index",
    "prev_index",
]
