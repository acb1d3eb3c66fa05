"""Exceptions raised by the mesh generators."""

from __future__ import annotations


class MeshError(Exception):
    """Base class for all platemesh errors."""


class InvalidSubdivision(MeshError, ValueError):
    """Nx or Ny is not a positive integer."""


class InvalidDimension(MeshError, ValueError):
    """L or B is not a finite real number."""


class IndexOutOfRange(MeshError, RuntimeError):
    """A generated element references a node outside [0, nnode).

    This is an internal invariant violation; it is raised before the result
    is returned or cached.
    """
