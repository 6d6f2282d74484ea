"""
Taichi executor: one work-item per destination cell.

The same kernels run multi-threaded on ti.cpu or data-parallel on
ti.cuda / ti.vulkan / ti.metal; which one is decided by ``init_taichi``.
Stencil variants are compile-time template arguments, so each of the
twelve (axis, direction, reduction) combinations compiles to its own
branch-free kernel apart from the bounded-axis edge test.
"""

import numpy as np
import taichi as ti

from stagger.core.architecture import Architecture
from stagger.core.dtypes import DTYPE, NP_DTYPE
from stagger.core.location import Axis
from stagger.kernels.protocol import Direction, PairStencil
from stagger.kernels.utils import decmod1, fill_field, fill_field_layer, incmod1

# Storage offset so fields are indexed 1..N along every axis
INDEX_OFFSET = (1, 1, 1)


@ti.func
def _shifted(I, axis: ti.template(), m):
    """Copy of index vector I with component ``axis`` replaced by m."""
    J = I
    J[axis] = m
    return J


@ti.func
def _pair(upper, lower, average: ti.template(), descending: ti.template()):
    """Combine two neighbours: mean, or difference in the axis' positive direction."""
    value = upper - lower
    if ti.static(average):
        value = 0.5 * (upper + lower)
    elif ti.static(descending):
        value = lower - upper
    return value


@ti.kernel
def pair_stencil_kernel(
    src: ti.template(),
    dst: ti.template(),
    axis: ti.template(),
    to_face: ti.template(),
    average: ti.template(),
    descending: ti.template(),
    periodic: ti.template(),
    nx: ti.i32,
    ny: ti.i32,
    nz: ti.i32,
    n: ti.i32,
):
    """
    Two-point difference/average along ``axis``.

    Cell -> Face:  dst[m] = pair(src[m], src[m-1])
    Face -> Cell:  dst[m] = pair(src[m+1], src[m])

    Periodic axes wrap with decmod1/incmod1. Bounded axes write 0 on the
    first face, and on the last cell see a zero wall face (difference) or
    write 0 (average).
    """
    for i, j, k in ti.ndrange((1, nx + 1), (1, ny + 1), (1, nz + 1)):
        I = ti.Vector([i, j, k])
        m = I[axis]
        value = ti.cast(0.0, DTYPE)
        if ti.static(to_face):
            if ti.static(periodic):
                value = _pair(src[I], src[_shifted(I, axis, decmod1(m, n))], average, descending)
            elif m > 1:
                value = _pair(src[I], src[_shifted(I, axis, m - 1)], average, descending)
        else:
            if ti.static(periodic):
                value = _pair(src[_shifted(I, axis, incmod1(m, n))], src[I], average, descending)
            elif m < n:
                value = _pair(src[_shifted(I, axis, m + 1)], src[I], average, descending)
            elif ti.static(average):
                value = ti.cast(0.0, DTYPE)
            else:
                value = _pair(ti.cast(0.0, DTYPE), src[I], average, descending)
        dst[I] = value


@ti.kernel
def combine3_kernel(
    dst: ti.template(),
    a: ti.template(),
    b: ti.template(),
    c: ti.template(),
    ca: DTYPE,
    cb: DTYPE,
    cc: DTYPE,
    scale: DTYPE,
):
    """dst = scale · (ca·a + cb·b + cc·c)."""
    for I in ti.grouped(dst):
        dst[I] = scale * (ca * a[I] + cb * b[I] + cc * c[I])


@ti.kernel
def scaled_product_kernel(dst: ti.template(), a: ti.template(), b: ti.template(), scale: DTYPE):
    """dst = scale · a · b (dst may alias b: each work-item reads before it writes)."""
    for I in ti.grouped(dst):
        dst[I] = scale * a[I] * b[I]


class TaichiExecutor:
    """Executor for Architecture.CPU and Architecture.GPU.

    Implements the KernelExecutor protocol on Taichi fields. The Taichi
    runtime must already be initialized for the matching arch.
    """

    architectures = (Architecture.CPU, Architecture.GPU)

    def allocate(self, shape: tuple[int, int, int]):
        return ti.field(dtype=DTYPE, shape=shape, offset=INDEX_OFFSET)

    def to_numpy(self, data) -> np.ndarray:
        return data.to_numpy().astype(NP_DTYPE, copy=False)

    def from_numpy(self, data, array: np.ndarray) -> None:
        data.from_numpy(np.ascontiguousarray(array, dtype=NP_DTYPE))

    def fill(self, data, value: float) -> None:
        fill_field(data, value)

    def fill_layer(self, data, axis: Axis, index: int, value: float) -> None:
        fill_field_layer(data, int(axis), index, value)

    def pair_stencil(self, stencil: PairStencil, grid, src, dst) -> None:
        axis = int(stencil.axis)
        pair_stencil_kernel(
            src,
            dst,
            axis,
            stencil.direction is Direction.TO_FACE,
            stencil.is_average,
            stencil.descending,
            grid.is_periodic(stencil.axis),
            grid.nx,
            grid.ny,
            grid.nz,
            grid.shape[axis],
        )

    def combine3(self, dst, a, b, c, coefficients, scale: float) -> None:
        ca, cb, cc = coefficients
        combine3_kernel(dst, a, b, c, ca, cb, cc, scale)

    def scaled_product(self, dst, a, b, scale: float) -> None:
        scaled_product_kernel(dst, a, b, scale)
