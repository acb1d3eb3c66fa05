"""
Runtime benchmark: cached mesh generator vs reference generator.

Times both generators for the same plate, checks that they agree, and
reports node/element counts and the reference-over-optimized time ratio.

Usage:
    python -m benchmarks.benchmark_mesh --L 1 --B 1 --sizes 20x30
    python -m benchmarks.benchmark_mesh --sizes 10x10,50x50,200x200 --repeats 3
    python -m benchmarks.benchmark_mesh --sizes 10x10,100x100,400x400 --plot
"""

import argparse
import csv
import sys
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

# Add project root and src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from platemesh.benchmark import run_single_benchmark


# ============================================================================
# Benchmark runner
# ============================================================================

def parse_sizes(text: str) -> List[Tuple[int, int]]:
    """Parse ``"20x30,50x50"`` into ``[(20, 30), (50, 50)]``."""
    sizes = []
    for item in text.split(','):
        item = item.strip().lower()
        if not item:
            continue
        try:
            nx, ny = item.split('x')
            sizes.append((int(nx), int(ny)))
        except ValueError:
            raise ValueError(f"Invalid size '{item}', expected NXxNY (e.g. 20x30)")
    return sizes


def run_scaling_benchmark(
    sizes: Sequence[Tuple[int, int]],
    L: float = 1.0,
    B: float = 1.0,
    repeats: int = 1,
) -> List[Dict]:
    """
    Run :func:`run_single_benchmark` for each ``(Nx, Ny)`` in ``sizes``.

    Returns
    -------
    benchmarks : list of dict
    """
    benchmarks = []
    for nx, ny in sizes:
        benchmarks.append(run_single_benchmark(L, B, nx, ny, repeats=repeats, verbose=True))
    return benchmarks


def save_benchmark_summary(benchmarks: List[Dict], output_file: str = "benchmarks/mesh_benchmark.csv") -> Path:
    """
    Save benchmark results to CSV file.

    Returns
    -------
    output_path : Path
    """
    output_path = Path(output_file)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fields = [
        'L', 'B', 'Nx', 'Ny',
        'optimized_ms', 'reference_ms',
        'optimized_nodes', 'reference_nodes',
        'optimized_elements', 'reference_elements',
        'speedup', 'results_match',
    ]
    with open(output_path, 'w', newline='') as f:
        writer = csv.DictWriter(f, fieldnames=fields)
        writer.writeheader()
        for b in benchmarks:
            writer.writerow({k: b[k] for k in fields})

    print(f"\n✓ Benchmark summary saved to: {output_path}")
    return output_path


def generate_benchmark_report(benchmarks: List[Dict]) -> str:
    """
    Generate human-readable benchmark summary report.

    Returns
    -------
    report : str
    """
    lines = []
    lines.append(f"\n{'='*78}")
    lines.append("MESH GENERATION BENCHMARK")
    lines.append(f"{'='*78}")
    lines.append(
        f"{'Mesh':<12} {'Nodes':<10} {'Elements':<10} {'Opt (ms)':<12} "
        f"{'Ref (ms)':<12} {'Ref/Opt':<10} {'Match':<6}"
    )
    lines.append("-" * 78)

    for b in benchmarks:
        ok_flag = "✓" if b['results_match'] else "✗"
        lines.append(
            f"{str(b['Nx']) + 'x' + str(b['Ny']):<12} {b['optimized_nodes']:<10} "
            f"{b['optimized_elements']:<10} {b['optimized_ms']:<12.4f} "
            f"{b['reference_ms']:<12.4f} {b['speedup']:<10.2f} {ok_flag:<6}"
        )

    lines.append(f"{'='*78}\n")
    return "\n".join(lines)


def plot_benchmarks(benchmarks: List[Dict], plot_file: str = "benchmarks/mesh_benchmark.png") -> Path:
    """Log-log plot of runtime vs element count for both generators."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    n_elem = [b['optimized_elements'] for b in benchmarks]
    fig, ax = plt.subplots(figsize=(7, 5))
    ax.loglog(n_elem, [b['optimized_ms'] for b in benchmarks], 'o-', label='optimized (cold cache)', linewidth=2)
    ax.loglog(n_elem, [b['reference_ms'] for b in benchmarks], 's-', label='reference', linewidth=2)
    ax.set_xlabel('Number of Elements', fontsize=12)
    ax.set_ylabel('Runtime (ms)', fontsize=12)
    ax.set_title('Mesh generation runtime', fontsize=14)
    ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)
    fig.tight_layout()

    out = Path(plot_file)
    out.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out, dpi=150)
    plt.close(fig)
    print(f"✓ Benchmark plot saved to: {out}")
    return out


# ============================================================================
# CLI
# ============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Mesh generation benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m benchmarks.benchmark_mesh --sizes 20x30
  python -m benchmarks.benchmark_mesh --sizes 10x10,100x100,400x400 --repeats 3 --plot
        """
    )
    parser.add_argument('--L', type=float, default=1.0, help='Plate length (default: 1.0)')
    parser.add_argument('--B', type=float, default=1.0, help='Plate breadth (default: 1.0)')
    parser.add_argument(
        '--sizes',
        type=str,
        default='20x30',
        help='Comma-separated NXxNY subdivisions (default: 20x30)'
    )
    parser.add_argument('--repeats', type=int, default=1, help='Timed runs per size (default: 1)')
    parser.add_argument('--csv', type=str, default=None, help='Write a CSV summary to this path')
    parser.add_argument(
        '--plot',
        action='store_true',
        help='Save a runtime plot to benchmarks/mesh_benchmark.png (requires matplotlib)'
    )

    args = parser.parse_args(argv)

    benchmarks = run_scaling_benchmark(parse_sizes(args.sizes), L=args.L, B=args.B, repeats=args.repeats)
    print(generate_benchmark_report(benchmarks))

    if args.csv:
        save_benchmark_summary(benchmarks, args.csv)

    if args.plot:
        try:
            plot_benchmarks(benchmarks)
        except ImportError:
            print("Warning: matplotlib not available, skipping plot")

    return 0 if all(b['results_match'] for b in benchmarks) else 1


if __name__ == '__main__':
    sys.exit(main())
