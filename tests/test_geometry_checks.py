from yieldviz.geometry_checks import (
    CheckResult,
    degenerate_faces,
    is_closed_polyline,
    mesh_indices_valid,
    mesh_watertight,
)
from yieldviz.mesh import Mesh


def test_is_closed_polyline_true():
    pts = [(0, 0), (1, 0), (1, 1), (0, 1), (0, 0)]
    assert is_closed_polyline(pts)


def test_is_closed_polyline_false():
    assert not is_closed_polyline([(0, 0), (1, 0), (1, 1)])
    assert not is_closed_polyline([(0, 0)])


def _make_square():
    verts = [(0, 0, 0), (1, 0, 0), (1, 1, 0), (0, 1, 0)]
    return Mesh(verts, [(0, 1, 2), (0, 2, 3)])


def _make_tetra():
    verts = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, 0, 1)]
    return Mesh(verts, [(0, 1, 2), (0, 1, 3), (1, 2, 3), (0, 2, 3)])


def test_mesh_indices_valid():
    assert mesh_indices_valid(3, [(0, 1, 2)]).ok
    result = mesh_indices_valid(3, [(0, 1, 2), (0, 1, 3), (0, 1)])
    assert isinstance(result, CheckResult)
    assert not result
    assert result.warnings == ['triangles with invalid indices: [1, 2]']


def test_surface_watertight_false_for_open_square():
    result = mesh_watertight(_make_square())
    assert not result.ok
    assert '4 boundary edges detected' in result.warnings


def test_surface_watertight_true_for_tetra():
    result = mesh_watertight(_make_tetra())
    assert result.ok
    assert result.warnings == []


def test_watertight_reports_empty_mesh():
    result = mesh_watertight(Mesh.empty())
    assert not result.ok
    assert result.warnings == ['mesh has no faces']


def test_watertight_reports_non_manifold_edges():
    verts = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (0, -1, 0), (0, 0, 1)]
    mesh = Mesh(verts, [(0, 1, 2), (0, 1, 3), (0, 1, 4)])
    result = mesh_watertight(mesh)
    assert not result.ok
    assert any('multiplicity >2' in w for w in result.warnings)


def test_degenerate_faces():
    verts = [(0, 0, 0), (1, 0, 0), (0, 1, 0), (2, 0, 0)]
    mesh = Mesh(verts, [(0, 1, 2), (0, 1, 3), (3, 3, 2)])
    assert degenerate_faces(mesh) == [1, 2]
