"""
Pytest configuration for platemesh tests.

Adds src/ and the repo root to sys.path so tests can import platemesh and
the benchmarks namespace without PYTHONPATH or an install.
"""

import sys
import os

import pytest

repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
src_path = os.path.join(repo_root, 'src')

# Repo root first so 'benchmarks' is importable
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

if src_path not in sys.path:
    sys.path.insert(0, src_path)


@pytest.fixture
def cache():
    """Isolated mesh cache per test."""
    from platemesh import MeshCache
    return MeshCache()


@pytest.fixture(autouse=True)
def _clean_default_cache():
    from platemesh import clear_cache
    clear_cache()
    yield
    clear_cache()
