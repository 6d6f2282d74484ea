"""Conservation checks.

Simple functions for verifying that operator compositions conserve volume
integrals.
"""

import numpy as np
import taichi as ti

from stagger.core.dtypes import DTYPE
from stagger.fields.field import Field


@ti.kernel
def compute_total(field: ti.template()) -> DTYPE:
    """Sum all field values."""
    total = ti.cast(0.0, DTYPE)
    for I in ti.grouped(field):
        total += field[I]
    return total


def volume_integral(field: Field) -> float:
    """Σ V·f over all cells of the field's grid."""
    if field.architecture.uses_taichi:
        total = compute_total(field.data)
    else:
        total = np.sum(field.data)
    return float(total) * field.grid.volume


def max_abs(field: Field) -> float:
    """Largest absolute value of the field."""
    return float(np.max(np.abs(field.to_numpy())))


def check_conservation(
    initial: float,
    final: float,
    fluxes: dict[str, float] | None = None,
    rtol: float = 1e-12,
    atol: float = 1e-12,
) -> None:
    """Check conservation: final == initial - sum(fluxes).

    Args:
        initial: Initial volume integral
        final: Final volume integral
        fluxes: Dict of flux name -> value (positive = loss)
        rtol: Relative tolerance
        atol: Absolute tolerance

    Raises:
        AssertionError: If conservation violated
    """
    fluxes = fluxes or {}
    expected = initial - sum(fluxes.values())
    diff = abs(final - expected)
    tol = atol + rtol * abs(expected)

    if diff > tol:
        flux_str = ", ".join(f"{k}={v:.6e}" for k, v in fluxes.items())
        raise AssertionError(
            f"Integral not conserved!\n"
            f"  Initial: {initial:.10e}\n"
            f"  Final:   {final:.10e}\n"
            f"  Expected: {expected:.10e}\n"
            f"  Fluxes: {flux_str}\n"
            f"  Difference: {diff:.10e} (tolerance: {tol:.10e})"
        )
