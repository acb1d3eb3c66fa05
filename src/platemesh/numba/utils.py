"""Utilities for optional Numba acceleration."""

from __future__ import annotations

import importlib.util
import warnings


def numba_available() -> bool:
    return importlib.util.find_spec("numba") is not None


def resolve_use_numba(requested: bool) -> bool:
    """Return whether the Numba kernels should actually run.

    Warns (once per call site) when Numba was requested but cannot be imported.
    """
    if not requested:
        return False
    if numba_available():
        return True
    warnings.warn(
        "use_numba=True but numba is not importable; using the NumPy path",
        RuntimeWarning,
        stacklevel=3,
    )
    return False
