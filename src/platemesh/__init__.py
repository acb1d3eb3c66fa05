"""platemesh: structured Q4 meshes of rectangular plates.

Example usage:
    from platemesh import generate_mesh, generate_mesh_reference, verify_mesh_equivalence

    mesh = generate_mesh(1.0, 1.0, 20, 30)       # memoized
    ref = generate_mesh_reference(1.0, 1.0, 20, 30)
    assert verify_mesh_equivalence(mesh, ref)
"""

__version__ = "1.0.0"

from .errors import MeshError, InvalidSubdivision, InvalidDimension, IndexOutOfRange
from .model import PlateParams, MeshResult, DEFAULT_PARAMS
from .fem.mesh import plate_coordinates, quad_connectivity, structured_quad_mesh
from .cache import MeshCache, CacheStats, default_cache, generate_mesh, clear_cache
from .reference import generate_mesh_reference
from .verify import MeshComparison, compare_meshes, verify_mesh_equivalence

__all__ = [
    "MeshError", "InvalidSubdivision", "InvalidDimension", "IndexOutOfRange",
    "PlateParams", "MeshResult", "DEFAULT_PARAMS",
    "plate_coordinates", "quad_connectivity", "structured_quad_mesh",
    "MeshCache", "CacheStats", "default_cache", "generate_mesh", "clear_cache",
    "generate_mesh_reference",
    "MeshComparison", "compare_meshes", "verify_mesh_equivalence",
]
