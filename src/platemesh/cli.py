"""
Command Line Interface Module

Interactive benchmark of the cached plate mesher against the reference mesher.
"""

from .benchmark import run_single_benchmark
from .cache import default_cache
from .errors import MeshError
from .model import DEFAULT_PARAMS, PlateParams


def _ask(prompt, default, cast):
    while True:
        raw = input(f"{prompt} [Default: {default:g}]: ").strip()
        if not raw:
            return default
        try:
            return cast(raw)
        except ValueError:
            print("Invalid input. Please enter a number.")


def _as_int(text):
    value = float(text)
    if not value.is_integer():
        raise ValueError(text)
    return int(value)


def print_results(b):
    """Print one benchmark result as returned by ``run_single_benchmark``."""
    print("\nBenchmark Results")
    print("-" * 40)
    print("Cached generator:")
    print(f"  Time: {b['optimized_ms']:.4f} ms")
    print(f"  Nodes: {b['optimized_nodes']}")
    print(f"  Elements: {b['optimized_elements']}")
    print("Reference generator:")
    print(f"  Time: {b['reference_ms']:.4f} ms")
    print(f"  Nodes: {b['reference_nodes']}")
    print(f"  Elements: {b['reference_elements']}")
    print("Reference over cached:")
    print(f"  {b['speedup']:.2f}x")
    print(f"  {'Results match' if b['results_match'] else 'Results do not match'}")


def main():
    """
    Main CLI function for the interactive mesh generation benchmark.
    """
    print("Mesh Generation Benchmark")
    print("=" * 80)

    d = DEFAULT_PARAMS
    while True:
        L = _ask("Length (L)", d.L, float)
        B = _ask("Breadth (B)", d.B, float)
        Nx = _ask("X Divisions (Nx)", d.Nx, _as_int)
        Ny = _ask("Y Divisions (Ny)", d.Ny, _as_int)
        try:
            params = PlateParams.create(L, B, Nx, Ny)
            break
        except MeshError as e:
            print(f"Invalid parameters: {e}")

    results = run_single_benchmark(
        params.L, params.B, params.Nx, params.Ny, cache=default_cache(), verbose=True
    )
    print_results(results)
    return 0 if results["results_match"] else 1


if __name__ == "__main__":
    raise SystemExit(main())
