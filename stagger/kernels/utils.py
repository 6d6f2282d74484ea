"""Utility kernels and periodic index helpers for Taichi fields.

Taichi fields in stagger carry an index offset of (1, 1, 1), so kernels
index them with the same 1-based (i, j, k) used throughout the package.
"""

import taichi as ti

from stagger.core.dtypes import DTYPE


@ti.func
def incmod1(i, n):
    """Periodic successor on [1, n] (Taichi-scope next_index)."""
    result = i + 1
    if i == n:
        result = 1
    return result


@ti.func
def decmod1(i, n):
    """Periodic predecessor on [1, n] (Taichi-scope prev_index)."""
    result = i - 1
    if i == 1:
        result = n
    return result


@ti.kernel
def fill_field(field: ti.template(), value: DTYPE):
    """Set all field values to a constant."""
    for I in ti.grouped(field):
        field[I] = value


@ti.kernel
def fill_field_layer(field: ti.template(), axis: ti.template(), index: ti.i32, value: DTYPE):
    """Set the layer at 1-based ``index`` along ``axis`` to a constant."""
    for I in ti.grouped(field):
        if I[axis] == index:
            field[I] = value
