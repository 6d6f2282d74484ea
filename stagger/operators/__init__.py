"""
Finite-volume operators on the staggered grid.

- difference: delta_x, delta_y, delta_z
- average: avg_x, avg_y, avg_z
- divergence: divergence, flux_divergence
- contract: the (source, destination) location table
"""

from stagger.operators.average import avg_x, avg_y, avg_z
from stagger.operators.contract import PAIR_CONTRACT, resolve_stencil
from stagger.operators.difference import delta_x, delta_y, delta_z
from stagger.operators.divergence import divergence, flux_divergence

__all__ = [
    "delta_x",
    "delta_y",
    "delta_z",
    "avg_x",
    "avg_y",
    "avg_z",
    "divergence",
    "flux_divergence",
    "PAIR_CONTRACT",
    "resolve_stencil",
]
