"""Memoizing front end for the structured plate mesh generator.

Meshes and coordinate arrays are keyed by the bit-exact ``(L, B, Nx, Ny)`` tuple,
connectivity by ``(Nx, Ny)``. No rounding is applied to the float dimensions:
only bit-identical repeats share an entry (0.0 and -0.0 are distinct).
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import numpy as np

from platemesh.errors import IndexOutOfRange
from platemesh.fem.mesh import (
    assemble_mesh,
    build_connectivity,
    build_coordinates,
    check_connectivity,
    check_coordinates,
)
from platemesh.model import MeshResult, PlateParams


@dataclass(frozen=True)
class CacheStats:
    hits: int
    misses: int
    meshes: int
    coordinates: int
    elements: int


class MeshCache:
    """Process-local mesh cache with explicit lifetime.

    Lookups and insertions for all three tables happen under one re-entrant
    lock, so a key is computed at most once and every caller gets the same
    object back. Entries are never modified after insertion; drop them with
    :meth:`clear`.
    """

    def __init__(self, use_numba: bool = False, verbose: bool = False):
        self.use_numba = bool(use_numba)
        self.verbose = bool(verbose)
        self._lock = threading.RLock()
        self._meshes: Dict[Tuple[str, str, int, int], MeshResult] = {}
        self._coordinates: Dict[Tuple[str, str, int, int], np.ndarray] = {}
        self._elements: Dict[Tuple[int, int], np.ndarray] = {}
        self._hits = 0
        self._misses = 0

    def get_mesh(self, L: float, B: float, Nx: int, Ny: int) -> MeshResult:
        params = PlateParams.create(L, B, Nx, Ny)
        key = params.cache_key
        with self._lock:
            mesh = self._meshes.get(key)
            if mesh is not None:
                self._hits += 1
                return mesh
            self._misses += 1
            coords = self._coordinates_for(params)
            elems = self._elements_for(params.Nx, params.Ny)
            mesh = assemble_mesh(params, coords, elems)
            self._meshes[key] = mesh
            if self.verbose:
                print(f"[cache] stored mesh L={params.L:g} B={params.B:g} Nx={params.Nx} Ny={params.Ny}")
            return mesh

    def get_coordinates(self, L: float, B: float, Nx: int, Ny: int) -> np.ndarray:
        params = PlateParams.create(L, B, Nx, Ny)
        with self._lock:
            return self._coordinates_for(params)

    def get_elements(self, Nx: int, Ny: int) -> np.ndarray:
        params = PlateParams.create(1.0, 1.0, Nx, Ny)
        with self._lock:
            return self._elements_for(params.Nx, params.Ny)

    def _coordinates_for(self, params: PlateParams) -> np.ndarray:
        coords = self._coordinates.get(params.cache_key)
        if coords is None:
            coords = build_coordinates(params, use_numba=self.use_numba)
            check_coordinates(coords, params)
            coords.flags.writeable = False
            self._coordinates[params.cache_key] = coords
        return coords

    def _elements_for(self, nx: int, ny: int) -> np.ndarray:
        elems = self._elements.get((nx, ny))
        if elems is None:
            elems = build_connectivity(nx, ny, use_numba=self.use_numba)
            check_connectivity(elems, (nx + 1) * (ny + 1))
            if len(elems) != nx * ny:
                raise IndexOutOfRange(f"expected {nx * ny} elements, got {len(elems)}")
            elems.flags.writeable = False
            self._elements[(nx, ny)] = elems
        return elems

    def clear(self) -> None:
        """Drop every cached mesh, coordinate and connectivity array."""
        with self._lock:
            self._meshes.clear()
            self._coordinates.clear()
            self._elements.clear()
            self._hits = 0
            self._misses = 0
        if self.verbose:
            print("[cache] cleared")

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                meshes=len(self._meshes),
                coordinates=len(self._coordinates),
                elements=len(self._elements),
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._meshes)

    def __contains__(self, key) -> bool:
        try:
            params = PlateParams.create(*key)
        except (TypeError, ValueError):
            return False
        with self._lock:
            return params.cache_key in self._meshes


_default_cache: Optional[MeshCache] = None
_default_lock = threading.Lock()


def default_cache() -> MeshCache:
    """Return the process-wide cache behind :func:`generate_mesh`."""
    global _default_cache
    with _default_lock:
        if _default_cache is None:
            _default_cache = MeshCache()
        return _default_cache


def generate_mesh(L: float, B: float, Nx: int, Ny: int, cache: Optional[MeshCache] = None) -> MeshResult:
    """Memoized structured Q4 mesh of an L x B plate with Nx x Ny elements.

    Repeated calls with identical parameters return the same
    :class:`MeshResult` object. Pass ``cache`` to use an isolated cache
    instead of the process-wide one.
    """
    if cache is None:
        cache = default_cache()
    return cache.get_mesh(L, B, Nx, Ny)


def clear_cache(cache: Optional[MeshCache] = None) -> None:
    """Clear ``cache``, or the process-wide cache when omitted."""
    if cache is None:
        cache = default_cache()
    cache.clear()
