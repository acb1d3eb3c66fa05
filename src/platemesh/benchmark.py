"""Timing of the cached generator against the reference generator."""

from __future__ import annotations

import time
from typing import Dict, Optional

from platemesh.cache import MeshCache
from platemesh.reference import generate_mesh_reference
from platemesh.verify import verify_mesh_equivalence


def _time_ms(fn, *args):
    t0 = time.perf_counter()
    out = fn(*args)
    return (time.perf_counter() - t0) * 1000.0, out


def run_single_benchmark(
    L: float,
    B: float,
    Nx: int,
    Ny: int,
    cache: Optional[MeshCache] = None,
    repeats: int = 1,
    verbose: bool = False,
) -> Dict:
    """
    Time one parameter set with both generators and check they agree.

    Parameters
    ----------
    L, B : float
        Plate length and breadth
    Nx, Ny : int
        Subdivisions along x and y
    cache : MeshCache, optional
        Cache for the optimized generator. When omitted every repeat uses a
        fresh cache, so the optimized time is a cold (uncached) time.
    repeats : int
        Number of timed runs; the best time of each generator is reported.
    verbose : bool
        Print the first mismatch, if any.

    Returns
    -------
    benchmark : dict
        Keys: L, B, Nx, Ny, optimized_ms, reference_ms, optimized_nodes,
        reference_nodes, optimized_elements, reference_elements, speedup,
        results_match. ``speedup`` is reference time over optimized time.
    """
    if repeats < 1:
        raise ValueError(f"repeats must be >= 1, got {repeats}")

    opt_times = []
    ref_times = []
    mesh_opt = mesh_ref = None
    for _ in range(repeats):
        run_cache = cache if cache is not None else MeshCache()
        t_opt, mesh_opt = _time_ms(run_cache.get_mesh, L, B, Nx, Ny)
        t_ref, mesh_ref = _time_ms(generate_mesh_reference, L, B, Nx, Ny)
        opt_times.append(t_opt)
        ref_times.append(t_ref)

    optimized_ms = min(opt_times)
    reference_ms = min(ref_times)
    speedup = reference_ms / optimized_ms if optimized_ms > 0.0 else float("inf")

    return {
        "L": L,
        "B": B,
        "Nx": Nx,
        "Ny": Ny,
        "optimized_ms": optimized_ms,
        "reference_ms": reference_ms,
        "optimized_nodes": mesh_opt.nnode,
        "reference_nodes": mesh_ref.nnode,
        "optimized_elements": mesh_opt.nel,
        "reference_elements": mesh_ref.nel,
        "speedup": speedup,
        "results_match": verify_mesh_equivalence(mesh_opt, mesh_ref, verbose=verbose),
    }
