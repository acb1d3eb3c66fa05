"""Reference (baseline) plate mesher.

Independent, deliberately plain construction used as an oracle for
:mod:`platemesh.fem.mesh`: build a dense meshgrid, flatten it column-wise,
number the grid points, then read the four corners of every cell from the
node-number grid. Not cached and not optimized.
"""

from __future__ import annotations

import numpy as np

from platemesh.errors import IndexOutOfRange
from platemesh.model import MeshResult, PlateParams


def generate_mesh_reference(L: float, B: float, Nx: int, Ny: int) -> MeshResult:
    p = PlateParams.create(L, B, Nx, Ny)
    nel = p.Nx * p.Ny
    nnode = (p.Nx + 1) * (p.Ny + 1)
    npx = p.Nx + 1
    npy = p.Ny + 1

    # Axis samples
    xs = np.array([i * p.L / p.Nx for i in range(npx)], dtype=np.float64)
    ys = np.array([j * p.B / p.Ny for j in range(npy)], dtype=np.float64)

    # xx[j, i] = xs[i], yy[j, i] = ys[j]
    xx, yy = np.meshgrid(xs, ys, indexing="xy")

    # Column-wise flattening walks j fastest inside each column i.
    coordinates = np.column_stack((
        xx.ravel(order="F"),
        yy.ravel(order="F"),
        np.zeros(nnode, dtype=np.float64),
    ))

    node_no = np.empty((npy, npx), dtype=np.int64)
    counter = 0
    for i in range(npx):
        for j in range(npy):
            node_no[j, i] = counter
            counter += 1

    elements = []
    for i in range(npx - 1):
        for j in range(npy - 1):
            n1 = node_no[j, i]
            n2 = node_no[j, i + 1]
            n3 = node_no[j + 1, i + 1]
            n4 = node_no[j + 1, i]
            elements.append([n1, n2, n3, n4])
    elements = np.array(elements, dtype=np.int64).reshape(-1, 4)

    for e, quad in enumerate(elements):
        if quad.min() < 0 or quad.max() >= nnode:
            raise IndexOutOfRange(f"reference element {e} = {quad.tolist()} outside [0, {nnode})")

    return MeshResult(coordinates=coordinates, elements=elements, nel=nel, nnode=nnode)
