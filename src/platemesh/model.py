"""Parameter and result containers for the plate mesh generators."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from platemesh.errors import InvalidDimension, InvalidSubdivision


NODES_PER_ELEMENT = 4


def _as_subdivision(name: str, value) -> int:
    if isinstance(value, (bool, np.bool_)):
        raise InvalidSubdivision(f"{name} must be a positive integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        n = int(value)
    elif isinstance(value, numbers.Real) and math.isfinite(value) and float(value).is_integer():
        n = int(value)
    else:
        raise InvalidSubdivision(f"{name} must be a positive integer, got {value!r}")
    if n <= 0:
        raise InvalidSubdivision(f"{name} must be a positive integer, got {value!r}")
    return n


def _as_dimension(name: str, value) -> float:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidDimension(f"{name} must be a finite real number, got {value!r}")
    x = float(value)
    if not math.isfinite(x):
        raise InvalidDimension(f"{name} must be a finite real number, got {value!r}")
    return x


@dataclass(frozen=True)
class PlateParams:
    """Rectangular plate of length L (x) and breadth B (y), split into Nx x Ny cells.

    Build instances through :meth:`create`, which validates and normalizes the
    raw values; the direct constructor trusts its arguments.
    """

    L: float
    B: float
    Nx: int
    Ny: int

    @classmethod
    def create(cls, L, B, Nx, Ny) -> "PlateParams":
        # Subdivisions first: a zero count is the more common mistake.
        nx = _as_subdivision("Nx", Nx)
        ny = _as_subdivision("Ny", Ny)
        length = _as_dimension("L", L)
        breadth = _as_dimension("B", B)
        # Node positions are computed as i*L/Nx; the product must stay finite.
        for name, dim, n in (("L", length, nx), ("B", breadth, ny)):
            if not math.isfinite(abs(dim) * n):
                raise InvalidDimension(
                    f"{name}={dim!r} overflows when multiplied by its subdivision count {n}"
                )
        return cls(L=length, B=breadth, Nx=nx, Ny=ny)

    @property
    def key(self) -> Tuple[float, float, int, int]:
        return (self.L, self.B, self.Nx, self.Ny)

    @property
    def cache_key(self) -> Tuple[str, str, int, int]:
        """Bit-exact key: unlike :attr:`key`, 0.0 and -0.0 stay distinct."""
        return (self.L.hex(), self.B.hex(), self.Nx, self.Ny)

    @property
    def connectivity_key(self) -> Tuple[int, int]:
        return (self.Nx, self.Ny)

    @property
    def nel(self) -> int:
        return self.Nx * self.Ny

    @property
    def nnode(self) -> int:
        return (self.Nx + 1) * (self.Ny + 1)

    @property
    def dx(self) -> float:
        return self.L / self.Nx

    @property
    def dy(self) -> float:
        return self.B / self.Ny


# Defaults of the interactive benchmark form.
DEFAULT_PARAMS = PlateParams(L=1.0, B=1.0, Nx=20, Ny=30)


@dataclass(frozen=True, eq=False)
class MeshResult:
    """Node coordinates and Q4 connectivity of a structured plate mesh.

    Attributes
    ----------
    coordinates : (nnode, 3) float64
        Node positions ``(x, y, z)``; z is always 0.
    elements : (nel, 4) int64
        Corner node indices, counter-clockwise from the bottom-left corner.
    nel, nnode : int
        Element and node counts.

    Both arrays are made read-only on construction. A cached result is shared
    between callers, so it must never be modified in place.
    """

    coordinates: np.ndarray
    elements: np.ndarray
    nel: int
    nnode: int

    def __post_init__(self):
        for arr in (self.coordinates, self.elements):
            if isinstance(arr, np.ndarray):
                arr.flags.writeable = False

    @property
    def n_nodes_per_element(self) -> int:
        return NODES_PER_ELEMENT

    def bounds(self) -> Tuple[float, float, float, float]:
        """Return ``(xmin, xmax, ymin, ymax)`` of the node cloud."""
        xy = self.coordinates[:, :2]
        xmin, ymin = xy.min(axis=0)
        xmax, ymax = xy.max(axis=0)
        return float(xmin), float(xmax), float(ymin), float(ymax)

    def to_lists(self) -> Tuple[List[List[float]], List[List[int]]]:
        """Plain-list copies of ``(coordinates, elements)``."""
        return self.coordinates.tolist(), self.elements.tolist()
