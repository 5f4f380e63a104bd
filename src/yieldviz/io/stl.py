"""STL export of yield-surface meshes."""

from __future__ import annotations

import logging
import struct
from contextlib import contextmanager
from typing import List, Tuple

from yieldviz.geometry_utils import Vec3
from yieldviz.mesh import Mesh, mesh_view

logger = logging.getLogger(__name__)

_HEADER_SIZE = 80
_STRUCT_TRIANGLE = struct.Struct('<12fH')

Facet = Tuple[Vec3, Vec3, Vec3, Vec3]


def write_stl(mesh: Mesh, path_or_file, *, binary: bool = True, name: str = 'yieldviz') -> int:
    """Write ``mesh`` to STL and return the number of facets written.

    ``path_or_file`` can be a filesystem path or an open binary/text stream.
    Degenerate faces (a cone tip, a collapsed ring) have no normal and are
    left out.
    """

    facets: List[Facet] = list(mesh_view(mesh))
    skipped = len(mesh.triangles) - len(facets)
    if skipped:
        logger.debug("skipping %d degenerate faces in STL export", skipped)

    if binary:
        _write_binary(facets, path_or_file, name)
    else:
        _write_ascii(facets, path_or_file, name)
    return len(facets)


@contextmanager
def _output(path_or_file, mode: str, **kwargs):
    """Yield ``path_or_file`` if it is already a stream, otherwise open it."""

    if hasattr(path_or_file, 'write'):
        yield path_or_file
    else:
        with open(path_or_file, mode, **kwargs) as stream:
            yield stream


def _binary_header(name: str) -> bytes:
    return name[:_HEADER_SIZE].encode('ascii', errors='replace').ljust(_HEADER_SIZE, b' ')


def _ascii_facet(normal: Vec3, v0: Vec3, v1: Vec3, v2: Vec3) -> str:
    lines = [f"  facet normal {normal[0]:.6e} {normal[1]:.6e} {normal[2]:.6e}",
             "    outer loop"]
    lines.extend(f"      vertex {v[0]:.6e} {v[1]:.6e} {v[2]:.6e}" for v in (v0, v1, v2))
    lines.extend(["    endloop", "  endfacet"])
    return "\n".join(lines) + "\n"


def _write_binary(facets: List[Facet], path_or_file, name: str) -> None:
    with _output(path_or_file, 'wb') as stream:
        stream.write(_binary_header(name))
        stream.write(struct.pack('<I', len(facets)))
        for normal, v0, v1, v2 in facets:
            stream.write(_STRUCT_TRIANGLE.pack(*normal, *v0, *v1, *v2, 0))


def _write_ascii(facets: List[Facet], path_or_file, name: str) -> None:
    with _output(path_or_file, 'w', encoding='ascii') as stream:
        stream.write(f"solid {name}\n")
        for facet in facets:
            stream.write(_ascii_facet(*facet))
        stream.write(f"endsolid {name}\n")


__all__ = ['write_stl']
