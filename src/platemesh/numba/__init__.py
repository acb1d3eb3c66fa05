"""Numba-accelerated mesh kernels.

The kernels are opt-in: pass ``use_numba=True`` to the generators or to
:class:`platemesh.cache.MeshCache`. The NumPy path is the default and the
kernels are imported only when requested.
"""

from .utils import numba_available

__all__ = ["numba_available"]
