"""
Benchmarking module for the plate mesh generators.

Provides tools for:
- Timing the cached generator against the reference generator
- Scaling runs across subdivision counts
- CSV summaries and log-log runtime plots
"""

from .benchmark_mesh import run_single_benchmark, run_scaling_benchmark, generate_benchmark_report

__all__ = ['run_single_benchmark', 'run_scaling_benchmark', 'generate_benchmark_report']
