"""Structured Q4 mesh kernels.

Explicit double loops in the node/element order of :mod:`platemesh.fem.mesh`
(X index outer, Y index inner), compiled in ``nopython`` mode.
"""

from __future__ import annotations

import numpy as np
from numba import njit


@njit(cache=True)
def plate_coordinates_numba(L: float, B: float, nx: int, ny: int):
    """Return the ``((nx+1)*(ny+1), 3)`` node coordinate array."""
    coords = np.zeros(((nx + 1) * (ny + 1), 3), dtype=np.float64)
    k = 0
    for i in range(nx + 1):
        x = i * L / nx
        for j in range(ny + 1):
            coords[k, 0] = x
            coords[k, 1] = j * B / ny
            k += 1
    return coords


@njit(cache=True)
def quad_connectivity_numba(nx: int, ny: int):
    """Return the ``(nx*ny, 4)`` element connectivity array."""
    elems = np.empty((nx * ny, 4), dtype=np.int64)
    stride = ny + 1
    k = 0
    for i in range(nx):
        for j in range(ny):
            n1 = i * stride + j
            elems[k, 0] = n1
            elems[k, 1] = n1 + stride
            elems[k, 2] = n1 + stride + 1
            elems[k, 3] = n1 + 1
            k += 1
    return elems
