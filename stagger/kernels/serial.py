"""
Serial (reference) executor.

Runs every kernel body as a plain Python function of the 1-based index
(i, j, k), in a sequential triple loop with k outermost. Storage is a
numpy array indexed from 0, so bodies translate indices with ``_ix``.

This executor prioritizes correctness and readability over performance.
It is the baseline for equivalence testing of the Taichi executor.
"""

from typing import Callable

import numpy as np

from stagger.core.architecture import Architecture
from stagger.core.dtypes import NP_DTYPE
from stagger.core.location import Axis, next_index, prev_index
from stagger.kernels.protocol import Direction, PairStencil


def _ix(index: tuple[int, int, int]) -> tuple[int, int, int]:
    """1-based grid index -> 0-based array index."""
    i, j, k = index
    return (i - 1, j - 1, k - 1)


def _shifted(index: tuple[int, int, int], axis: int, m: int) -> tuple[int, int, int]:
    """0-based array index of ``index`` with its ``axis`` component set to m."""
    shifted = list(index)
    shifted[axis] = m
    return _ix(shifted)


def _pair_function(stencil: PairStencil) -> Callable[[float, float], float]:
    if stencil.is_average:
        return lambda upper, lower: 0.5 * (upper + lower)
    if stencil.descending:
        return lambda upper, lower: lower - upper
    return lambda upper, lower: upper - lower


class SerialExecutor:
    """Sequential executor over numpy storage.

    Implements the KernelExecutor protocol. Deterministic by construction:
    one thread, fixed iteration order.
    """

    architecture = Architecture.SERIAL

    def allocate(self, shape: tuple[int, int, int]) -> np.ndarray:
        return np.zeros(shape, dtype=NP_DTYPE)

    def to_numpy(self, data: np.ndarray) -> np.ndarray:
        return np.array(data, dtype=NP_DTYPE, copy=True)

    def from_numpy(self, data: np.ndarray, array: np.ndarray) -> None:
        data[...] = array

    def fill(self, data: np.ndarray, value: float) -> None:
        data.fill(value)

    def fill_layer(self, data: np.ndarray, axis: Axis, index: int, value: float) -> None:
        layer = [slice(None)] * 3
        layer[axis] = index - 1
        data[tuple(layer)] = value

    def launch(self, body: Callable[[int, int, int], None], shape: tuple[int, int, int]) -> None:
        """Execute ``body(i, j, k)`` over the 1-based index space of ``shape``."""
        nx, ny, nz = shape
        for k in range(1, nz + 1):
            for j in range(1, ny + 1):
                for i in range(1, nx + 1):
                    body(i, j, k)

    def pair_stencil(self, stencil: PairStencil, grid, src: np.ndarray, dst: np.ndarray) -> None:
        """Apply a pair stencil.

        Periodic axes wrap with prev_index/next_index. Bounded axes close
        with a wall: the first face gets 0 (Cell -> Face), and the last cell
        sees a zero wall face (difference) or is forced to 0 (average).
        """
        axis = stencil.axis
        n = grid.shape[axis]
        periodic = grid.is_periodic(axis)
        to_face = stencil.direction is Direction.TO_FACE
        pair = _pair_function(stencil)

        def body(i: int, j: int, k: int) -> None:
            index = (i, j, k)
            m = index[axis]
            value = 0.0
            if to_face:
                if periodic:
                    value = pair(src[_ix(index)], src[_shifted(index, axis, prev_index(m, n))])
                elif m > 1:
                    value = pair(src[_ix(index)], src[_shifted(index, axis, m - 1)])
            else:
                if periodic:
                    value = pair(src[_shifted(index, axis, next_index(m, n))], src[_ix(index)])
                elif m < n:
                    value = pair(src[_shifted(index, axis, m + 1)], src[_ix(index)])
                elif not stencil.is_average:
                    # Wall face below/east of the last cell carries zero
                    value = pair(0.0, src[_ix(index)])
            dst[_ix(index)] = value

        self.launch(body, grid.shape)

    def combine3(self, dst, a, b, c, coefficients, scale: float) -> None:
        ca, cb, cc = coefficients

        def body(i: int, j: int, k: int) -> None:
            I = (i - 1, j - 1, k - 1)
            dst[I] = scale * (ca * a[I] + cb * b[I] + cc * c[I])

        self.launch(body, dst.shape)

    def scaled_product(self, dst, a, b, scale: float) -> None:
        def body(i: int, j: int, k: int) -> None:
            I = (i - 1, j - 1, k - 1)
            dst[I] = scale * a[I] * b[I]

        self.launch(body, dst.shape)
