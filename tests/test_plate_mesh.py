import numpy as np
import pytest

from platemesh import (
    MeshResult,
    generate_mesh,
    plate_coordinates,
    quad_connectivity,
    structured_quad_mesh,
)


def test_unit_cell_corners():
    L, B = 2.0, 3.0
    mesh = generate_mesh(L, B, 1, 1)
    assert mesh.nel == 1
    assert mesh.nnode == 4
    expected = [[0.0, 0.0, 0.0], [0.0, B, 0.0], [L, 0.0, 0.0], [L, B, 0.0]]
    assert np.allclose(mesh.coordinates, expected)
    assert mesh.elements.tolist() == [[0, 2, 3, 1]]


def test_two_by_two_unit_square():
    mesh = generate_mesh(1.0, 1.0, 2, 2)
    assert mesh.nnode == 9
    assert mesh.nel == 4
    assert mesh.coordinates[0].tolist() == [0.0, 0.0, 0.0]
    assert mesh.coordinates[8].tolist() == [1.0, 1.0, 0.0]
    assert mesh.coordinates[3].tolist() == [0.5, 0.0, 0.0]
    assert mesh.elements.tolist() == [
        [0, 3, 4, 1],
        [1, 4, 5, 2],
        [3, 6, 7, 4],
        [4, 7, 8, 5],
    ]


@pytest.mark.parametrize("nx,ny", [(1, 1), (1, 7), (5, 1), (3, 4), (20, 30)])
def test_counts_and_index_range(nx, ny):
    mesh = structured_quad_mesh(1.5, 0.75, nx, ny)
    assert mesh.nel == nx * ny
    assert mesh.nnode == (nx + 1) * (ny + 1)
    assert mesh.coordinates.shape == (mesh.nnode, 3)
    assert mesh.elements.shape == (mesh.nel, 4)
    assert mesh.elements.min() >= 0
    assert mesh.elements.max() < mesh.nnode


def test_node_ordering_y_fastest():
    L, B, nx, ny = 3.0, 2.0, 3, 4
    coords = plate_coordinates(L, B, nx, ny)
    for i in range(nx + 1):
        for j in range(ny + 1):
            x, y, z = coords[i * (ny + 1) + j]
            assert x == pytest.approx(i * L / nx, abs=1e-14)
            assert y == pytest.approx(j * B / ny, abs=1e-14)
            assert z == 0.0


def test_last_node_is_far_corner():
    coords = plate_coordinates(4.0, 2.5, 8, 5)
    assert np.allclose(coords[-1], [4.0, 2.5, 0.0])


def test_connectivity_corner_formula():
    nx, ny = 4, 3
    elems = quad_connectivity(nx, ny)
    k = 0
    for i in range(nx):
        for j in range(ny):
            n1 = i * (ny + 1) + j
            assert elems[k].tolist() == [n1, n1 + ny + 1, n1 + ny + 2, n1 + 1]
            k += 1


def test_elements_are_counter_clockwise():
    mesh = structured_quad_mesh(2.0, 1.0, 3, 2)
    xy = mesh.coordinates[:, :2]
    for quad in mesh.elements:
        p = xy[quad]
        # shoelace formula: positive area for counter-clockwise order
        area = 0.5 * sum(
            p[k, 0] * p[(k + 1) % 4, 1] - p[(k + 1) % 4, 0] * p[k, 1] for k in range(4)
        )
        assert area == pytest.approx((2.0 / 3) * (1.0 / 2), rel=1e-12)


def test_z_is_zero():
    mesh = generate_mesh(1.0, 2.0, 6, 9)
    assert np.all(mesh.coordinates[:, 2] == 0.0)


def test_bounds_and_lists():
    mesh = generate_mesh(3.0, 2.0, 3, 2)
    assert mesh.bounds() == (0.0, 3.0, 0.0, 2.0)
    coords, elems = mesh.to_lists()
    assert isinstance(coords, list) and isinstance(elems, list)
    assert coords[1] == [0.0, 1.0, 0.0]
    assert elems[0] == [0, 3, 4, 1]
    assert mesh.n_nodes_per_element == 4


def test_negative_dimensions_allowed():
    mesh = structured_quad_mesh(-2.0, 1.0, 2, 1)
    assert mesh.bounds() == (-2.0, 0.0, 0.0, 1.0)


def test_result_arrays_are_read_only():
    mesh = generate_mesh(1.0, 1.0, 2, 2)
    assert isinstance(mesh, MeshResult)
    with pytest.raises(ValueError):
        mesh.coordinates[0, 0] = 5.0
    with pytest.raises(ValueError):
        mesh.elements[0, 0] = 7


def test_verbose_prints_summary(capsys):
    structured_quad_mesh(1.0, 1.0, 3, 2, verbose=True)
    out = capsys.readouterr().out
    assert "[mesh] 3 x 2 = 6 elements, 12 nodes" in out


@pytest.mark.parametrize("use_numba", [False, True])
def test_numba_kernels_match_numpy(use_numba):
    if use_numba:
        pytest.importorskip("numba")
    L, B, nx, ny = 1.7, 0.3, 13, 7
    ref = structured_quad_mesh(L, B, nx, ny, use_numba=False)
    mesh = structured_quad_mesh(L, B, nx, ny, use_numba=use_numba)
    assert np.allclose(mesh.coordinates, ref.coordinates, rtol=0.0, atol=1e-12)
    assert np.array_equal(mesh.elements, ref.elements)


def test_numba_request_without_numba_warns(monkeypatch):
    import platemesh.numba.utils as nb_utils

    monkeypatch.setattr(nb_utils, "numba_available", lambda: False)
    with pytest.warns(RuntimeWarning, match="numba is not importable"):
        mesh = structured_quad_mesh(1.0, 1.0, 2, 2, use_numba=True)
    assert mesh.elements[0].tolist() == [0, 3, 4, 1]
