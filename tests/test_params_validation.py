import math

import numpy as np
import pytest

from platemesh import (
    DEFAULT_PARAMS,
    IndexOutOfRange,
    InvalidDimension,
    InvalidSubdivision,
    MeshError,
    PlateParams,
    generate_mesh,
    generate_mesh_reference,
    plate_coordinates,
    quad_connectivity,
)
from platemesh.fem.mesh import assemble_mesh, check_connectivity


def test_create_normalizes_types():
    p = PlateParams.create(1, np.float32(2.5), np.int64(3), 4.0)
    assert p == PlateParams(L=1.0, B=2.5, Nx=3, Ny=4)
    assert type(p.L) is float and type(p.Nx) is int and type(p.Ny) is int
    assert p.key == (1.0, 2.5, 3, 4)
    assert p.connectivity_key == (3, 4)
    assert p.nel == 12
    assert p.nnode == 20
    assert p.dx == pytest.approx(1.0 / 3)
    assert p.dy == pytest.approx(2.5 / 4)


def test_default_params():
    assert DEFAULT_PARAMS.key == (1.0, 1.0, 20, 30)


@pytest.mark.parametrize("nx", [0, -1, 2.5, True, "3", None, float("nan"), float("inf")])
def test_invalid_subdivision(nx):
    with pytest.raises(InvalidSubdivision):
        PlateParams.create(1.0, 1.0, nx, 2)
    with pytest.raises(InvalidSubdivision):
        PlateParams.create(1.0, 1.0, 2, nx)


@pytest.mark.parametrize("dim", [math.nan, math.inf, -math.inf, "1.0", None, False])
def test_invalid_dimension(dim):
    with pytest.raises(InvalidDimension):
        PlateParams.create(dim, 1.0, 2, 2)
    with pytest.raises(InvalidDimension):
        PlateParams.create(1.0, dim, 2, 2)


def test_errors_share_base_class():
    assert issubclass(InvalidSubdivision, MeshError)
    assert issubclass(InvalidSubdivision, ValueError)
    assert issubclass(InvalidDimension, ValueError)
    assert issubclass(IndexOutOfRange, RuntimeError)


def test_error_message_names_parameter():
    with pytest.raises(InvalidSubdivision, match="Ny must be a positive integer, got 0"):
        generate_mesh(1.0, 1.0, 3, 0)
    with pytest.raises(InvalidDimension, match="L must be a finite real number"):
        generate_mesh(float("inf"), 1.0, 3, 3)


@pytest.mark.parametrize(
    "fn,args",
    [
        (generate_mesh, (1.0, 1.0, 0, 2)),
        (generate_mesh_reference, (1.0, 1.0, 0, 2)),
        (plate_coordinates, (1.0, 1.0, 2, 0)),
        (quad_connectivity, (0, 2)),
    ],
)
def test_all_entry_points_reject_zero_subdivisions(fn, args):
    with pytest.raises(InvalidSubdivision):
        fn(*args)


def test_zero_length_plate_is_allowed():
    mesh = generate_mesh(0.0, 1.0, 2, 2)
    assert np.all(mesh.coordinates[:, 0] == 0.0)
    assert np.isfinite(mesh.coordinates).all()


def test_check_connectivity_rejects_out_of_range():
    elems = np.array([[0, 3, 4, 1], [1, 4, 9, 2]])
    with pytest.raises(IndexOutOfRange, match="element 1"):
        check_connectivity(elems, 9)
    with pytest.raises(IndexOutOfRange):
        check_connectivity(np.array([[-1, 3, 4, 1]]), 9)
    with pytest.raises(IndexOutOfRange, match="shape"):
        check_connectivity(np.array([[0, 3, 4]]), 9)
    check_connectivity(np.array([[0, 3, 4, 1]]), 9)


def test_assemble_mesh_rejects_bad_parts():
    p = PlateParams.create(1.0, 1.0, 2, 2)
    coords = plate_coordinates(1.0, 1.0, 2, 2)
    elems = quad_connectivity(2, 2)
    with pytest.raises(IndexOutOfRange):
        assemble_mesh(p, coords[:-1], elems)
    with pytest.raises(IndexOutOfRange):
        assemble_mesh(p, coords, elems[:-1])
    shifted = elems + 1
    with pytest.raises(IndexOutOfRange):
        assemble_mesh(p, coords, shifted)


@pytest.mark.parametrize("L,B,nx,ny", [(1e308, 1.0, 2, 1), (1.0, -1e308, 3, 4), (2e307, 1.0, 10, 10)])
def test_dimension_overflowing_with_subdivisions(L, B, nx, ny):
    with pytest.raises(InvalidDimension, match="overflows"):
        PlateParams.create(L, B, nx, ny)
    with pytest.raises(InvalidDimension):
        generate_mesh(L, B, nx, ny)
    with pytest.raises(InvalidDimension):
        generate_mesh_reference(L, B, nx, ny)


def test_largest_finite_dimensions_still_match_reference():
    from platemesh import verify_mesh_equivalence

    L = 1e307
    mesh = generate_mesh(L, 1.0, 10, 1)
    assert np.isfinite(mesh.coordinates).all()
    assert mesh.coordinates[-1, 0] == pytest.approx(L, rel=1e-15)
    assert verify_mesh_equivalence(mesh, generate_mesh_reference(L, 1.0, 10, 1))


def test_check_coordinates_rejects_non_finite():
    from platemesh.fem.mesh import check_coordinates

    p = PlateParams.create(1.0, 1.0, 1, 1)
    coords = plate_coordinates(1.0, 1.0, 1, 1)
    check_coordinates(coords, p)
    bad = coords.copy()
    bad[2, 0] = np.inf
    with pytest.raises(InvalidDimension, match="non-finite"):
        check_coordinates(bad, p)
