"""Field-by-field equivalence check between two mesh results."""

from __future__ import annotations

import numbers
import sys
from dataclasses import dataclass
from typing import Any, Optional

import numpy as np

from platemesh.model import NODES_PER_ELEMENT


DEFAULT_ATOL = 1e-10


@dataclass(frozen=True)
class MeshComparison:
    """Outcome of :func:`compare_meshes`.

    ``check`` names the first failed check (``"counts"``,
    ``"coordinates_length"``, ``"coordinates"``, ``"elements_length"``,
    ``"elements"``) and ``index`` the offending node/element, if any.
    """

    match: bool
    check: Optional[str] = None
    index: Optional[int] = None
    reason: str = ""
    expected: Any = None
    actual: Any = None

    def __bool__(self) -> bool:
        return self.match


_MATCH = MeshComparison(match=True)


def _is_count(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, (bool, np.bool_))


def _mismatch(check: str, reason: str, index=None, expected=None, actual=None) -> MeshComparison:
    return MeshComparison(
        match=False, check=check, index=index, reason=reason, expected=expected, actual=actual
    )


def compare_meshes(a, b, atol: float = DEFAULT_ATOL) -> MeshComparison:
    """Compare mesh ``a`` against ``b``, stopping at the first divergence.

    Checks, in order: element/node counts, coordinate count, coordinates
    within ``atol`` per component, element count, exact corner indices.
    Anything that cannot be compared (missing fields, wrong array shapes)
    is reported as a mismatch rather than raised.
    """
    try:
        counts = (a.nel, a.nnode, b.nel, b.nnode)
    except AttributeError as e:
        return _mismatch("counts", f"Cannot read nel/nnode: {e}")
    if not all(_is_count(c) for c in counts):
        return _mismatch("counts", "nel/nnode must be integers", expected=counts[:2], actual=counts[2:])
    nel_a, nnode_a, nel_b, nnode_b = (int(c) for c in counts)
    if nel_a != nel_b or nnode_a != nnode_b:
        return _mismatch(
            "counts",
            "Mismatch in total elements or nodes",
            expected=(nel_a, nnode_a),
            actual=(nel_b, nnode_b),
        )

    try:
        ca = np.asarray(a.coordinates, dtype=np.float64)
        cb = np.asarray(b.coordinates, dtype=np.float64)
    except (AttributeError, TypeError, ValueError) as e:
        return _mismatch("coordinates_length", f"Cannot read coordinates: {e}")
    if ca.ndim != 2 or cb.ndim != 2 or ca.shape[1] != 3 or cb.shape[1] != 3:
        return _mismatch(
            "coordinates_length",
            "Coordinates are not (n, 3) arrays",
            expected=ca.shape,
            actual=cb.shape,
        )
    if len(ca) != len(cb):
        return _mismatch(
            "coordinates_length", "Mismatch in coordinates length", expected=len(ca), actual=len(cb)
        )

    # NaN compares false, so it is flagged as a mismatch here.
    close = (np.abs(ca - cb) <= atol).all(axis=1)
    if not close.all():
        i = int(np.argmin(close))
        return _mismatch(
            "coordinates",
            f"Coordinate mismatch at index {i}",
            index=i,
            expected=ca[i].tolist(),
            actual=cb[i].tolist(),
        )

    try:
        ea = np.asarray(a.elements)
        eb = np.asarray(b.elements)
    except (AttributeError, TypeError, ValueError) as e:
        return _mismatch("elements_length", f"Cannot read elements: {e}")
    if ea.ndim == 0 or eb.ndim == 0:
        return _mismatch("elements_length", "Elements are not sequences")
    if len(ea) != len(eb):
        return _mismatch(
            "elements_length", "Mismatch in elements length", expected=len(ea), actual=len(eb)
        )
    if len(ea) == 0:
        return _MATCH
    if ea.ndim != 2 or eb.ndim != 2 or ea.shape[1] != NODES_PER_ELEMENT or eb.shape[1] != NODES_PER_ELEMENT:
        return _mismatch(
            "elements_length",
            f"Elements are not (n, {NODES_PER_ELEMENT}) arrays",
            expected=ea.shape,
            actual=eb.shape,
        )

    same = (ea == eb).all(axis=1)
    if not same.all():
        i = int(np.argmin(same))
        return _mismatch(
            "elements",
            f"Element mismatch at index {i}",
            index=i,
            expected=ea[i].tolist(),
            actual=eb[i].tolist(),
        )

    return _MATCH


def verify_mesh_equivalence(a, b, atol: float = DEFAULT_ATOL, verbose: bool = False) -> bool:
    """Return True if meshes ``a`` and ``b`` are equivalent.

    With ``verbose=True`` the first mismatch is printed to stderr. Use
    :func:`compare_meshes` to get the mismatch details as data.
    """
    result = compare_meshes(a, b, atol=atol)
    if not result.match and verbose:
        print(f"[verify] {result.reason}", file=sys.stderr)
        if result.expected is not None or result.actual is not None:
            print(f"[verify]   {result.expected} != {result.actual}", file=sys.stderr)
    return result.match
