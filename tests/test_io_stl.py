import io
import struct

from yieldviz.drucker_prager import surface_mesh as dp_surface_mesh
from yieldviz.io.stl import write_stl
from yieldviz.mesh import Mesh
from yieldviz.mohr_coulomb import surface_mesh as mc_surface_mesh
from yieldviz.params import DruckerPragerParams, MohrCoulombParams


def _pyramid():
    return mc_surface_mesh(MohrCoulombParams(cohesion=10.0, friction_angle_deg=30.0))


def test_write_stl_binary(tmp_path):
    path = tmp_path / 'pyramid.stl'
    count = write_stl(_pyramid(), path, binary=True, name='test')

    data = path.read_bytes()
    assert count == 6
    assert len(data) == 80 + 4 + 6 * 50  # header + count + six triangles
    assert data[0:4] == b'test'
    assert struct.unpack('<I', data[80:84])[0] == 6


def test_write_stl_binary_stream():
    buf = io.BytesIO()
    write_stl(_pyramid(), buf)
    assert not buf.closed
    assert buf.getvalue()[:8] == b'yieldviz'


def test_write_stl_ascii():
    buf = io.StringIO()
    write_stl(_pyramid(), buf, binary=False, name='ascii_test')

    text = buf.getvalue()
    assert text.startswith('solid ascii_test')
    assert text.count('facet normal') == 6
    assert text.count('vertex') == 18
    assert text.strip().endswith('endsolid ascii_test')


def test_write_stl_ascii_file(tmp_path):
    path = tmp_path / 'pyramid.stl'
    assert write_stl(_pyramid(), path, binary=False) == 6
    lines = path.read_text(encoding='ascii').splitlines()
    assert lines[0] == 'solid yieldviz'
    assert lines[1].startswith('  facet normal ')
    assert lines[-1] == 'endsolid yieldviz'
    assert len(lines) == 2 + 6 * 7


def test_degenerate_faces_skipped(tmp_path):
    # ring 0 of the cone collapses to its tip
    mesh = dp_surface_mesh(DruckerPragerParams(slope=0.5, cohesion_intercept=-10.0))
    path = tmp_path / 'cone.stl'
    count = write_stl(mesh, path)
    assert count == len(mesh.triangles) - 24
    assert struct.unpack('<I', path.read_bytes()[80:84])[0] == count


def test_empty_mesh(tmp_path):
    path = tmp_path / 'empty.stl'
    assert write_stl(Mesh.empty(), path) == 0
    assert len(path.read_bytes()) == 84
