"""Structured quad mesh generator.

Node numbering: X index ``i`` outer, Y index ``j`` inner, so node
``i*(Ny+1) + j`` sits at ``(i*L/Nx, j*B/Ny, 0)`` and each X column is
contiguous. Elements follow the same column-major order.
"""

from __future__ import annotations

import numpy as np

from platemesh.errors import IndexOutOfRange, InvalidDimension
from platemesh.model import MeshResult, PlateParams, NODES_PER_ELEMENT
from platemesh.numba.utils import resolve_use_numba


def build_coordinates(params: PlateParams, use_numba: bool = False) -> np.ndarray:
    """Node coordinates for already validated parameters."""
    nx, ny = params.Nx, params.Ny
    if resolve_use_numba(use_numba):
        from platemesh.numba.kernels_mesh import plate_coordinates_numba
        return plate_coordinates_numba(params.L, params.B, nx, ny)

    xs = np.arange(nx + 1, dtype=np.float64) * params.L / nx
    ys = np.arange(ny + 1, dtype=np.float64) * params.B / ny
    coords = np.zeros((params.nnode, 3), dtype=np.float64)
    coords[:, 0] = np.repeat(xs, ny + 1)
    coords[:, 1] = np.tile(ys, nx + 1)
    return coords


def build_connectivity(nx: int, ny: int, use_numba: bool = False) -> np.ndarray:
    """Q4 connectivity for already validated subdivision counts."""
    if resolve_use_numba(use_numba):
        from platemesh.numba.kernels_mesh import quad_connectivity_numba
        return quad_connectivity_numba(nx, ny)

    stride = ny + 1
    # bottom-left corner of every cell, j fastest
    n1 = (np.arange(nx, dtype=np.int64)[:, None] * stride
          + np.arange(ny, dtype=np.int64)[None, :]).ravel()
    return np.column_stack((n1, n1 + stride, n1 + stride + 1, n1 + 1))


def check_connectivity(elements: np.ndarray, nnode: int) -> None:
    """Raise :class:`IndexOutOfRange` if any corner index is outside [0, nnode)."""
    if elements.ndim != 2 or elements.shape[1] != NODES_PER_ELEMENT:
        raise IndexOutOfRange(
            f"connectivity must have shape (nel, {NODES_PER_ELEMENT}), got {elements.shape}"
        )
    if elements.size == 0:
        return
    bad = np.nonzero(((elements < 0) | (elements >= nnode)).any(axis=1))[0]
    if bad.size:
        e = int(bad[0])
        raise IndexOutOfRange(
            f"element {e} = {elements[e].tolist()} references a node outside [0, {nnode})"
        )


def check_coordinates(coordinates: np.ndarray, params: PlateParams) -> None:
    """Raise if the coordinate table does not have one finite row per node."""
    if coordinates.shape != (params.nnode, 3):
        raise IndexOutOfRange(
            f"expected {params.nnode} nodes, coordinate array has shape {coordinates.shape}"
        )
    if not np.isfinite(coordinates).all():
        raise InvalidDimension(
            f"non-finite node coordinates for L={params.L!r}, B={params.B!r}"
        )


def assemble_mesh(params: PlateParams, coordinates: np.ndarray, elements: np.ndarray) -> MeshResult:
    """Check the parts against ``params`` and wrap them into a :class:`MeshResult`."""
    check_coordinates(coordinates, params)
    if len(elements) != params.nel:
        raise IndexOutOfRange(f"expected {params.nel} elements, got {len(elements)}")
    check_connectivity(elements, params.nnode)
    return MeshResult(
        coordinates=coordinates,
        elements=elements,
        nel=params.nel,
        nnode=params.nnode,
    )


def plate_coordinates(L: float, B: float, Nx: int, Ny: int, use_numba: bool = False) -> np.ndarray:
    """Return the ``((Nx+1)*(Ny+1), 3)`` node coordinates of an L x B plate.

    Raises
    ------
    InvalidSubdivision
        If Nx or Ny is not a positive integer.
    InvalidDimension
        If L or B is not finite.
    """
    return build_coordinates(PlateParams.create(L, B, Nx, Ny), use_numba=use_numba)


def quad_connectivity(Nx: int, Ny: int, use_numba: bool = False) -> np.ndarray:
    """Return the ``(Nx*Ny, 4)`` element table, counter-clockwise from bottom-left.

    For cell ``(i, j)`` with ``n1 = i*(Ny+1) + j`` the corners are
    ``[n1, n1 + Ny + 1, n1 + Ny + 2, n1 + 1]``.
    """
    # L and B do not enter the connectivity; validate the counts only.
    params = PlateParams.create(1.0, 1.0, Nx, Ny)
    return build_connectivity(params.Nx, params.Ny, use_numba=use_numba)


def structured_quad_mesh(
    L: float,
    B: float,
    Nx: int,
    Ny: int,
    use_numba: bool = False,
    verbose: bool = False,
) -> MeshResult:
    """Generate the structured Q4 mesh of an L x B plate without caching."""
    params = PlateParams.create(L, B, Nx, Ny)
    coords = build_coordinates(params, use_numba=use_numba)
    elems = build_connectivity(params.Nx, params.Ny, use_numba=use_numba)
    mesh = assemble_mesh(params, coords, elems)
    if verbose:
        print(f"[mesh] {params.Nx} x {params.Ny} = {mesh.nel} elements, {mesh.nnode} nodes")
    return mesh
