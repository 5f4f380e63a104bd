"""Triangle meshes produced by the yield-surface generators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from yieldviz.geometry_checks import mesh_indices_valid
from yieldviz.geometry_utils import Vec3, Vertex3D, to_vec3, triangle_area, triangle_normal

TriangleIndices = Tuple[int, int, int]
TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


@dataclass(frozen=True)
class Mesh:
    """Indexed triangle mesh in principal-stress space.

    ``vertices`` is a tuple of :class:`~yieldviz.geometry_utils.Vertex3D` and
    ``triangles`` a tuple of ``(i, j, k)`` index triples into it.  Winding is
    kept exactly as generated; renderers using flat shading do not need a
    consistent orientation.
    """

    vertices: Tuple[Vertex3D, ...] = field(default_factory=tuple)
    triangles: Tuple[TriangleIndices, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        verts = tuple(Vertex3D(*to_vec3(v)) for v in self.vertices)
        tris = tuple((int(t[0]), int(t[1]), int(t[2])) for t in self.triangles)
        check = mesh_indices_valid(len(verts), tris)
        if not check:
            raise ValueError(f"mesh has {len(verts)} vertices; {check.warnings[0]}")
        object.__setattr__(self, 'vertices', verts)
        object.__setattr__(self, 'triangles', tris)

    @classmethod
    def empty(cls) -> "Mesh":
        return cls((), ())

    @property
    def is_empty(self) -> bool:
        return not self.vertices

    def flat_arrays(self) -> Dict[str, List]:
        """Return ``x/y/z`` coordinate lists and ``i/j/k`` index lists.

        This is the layout mesh renderers such as Plotly's ``mesh3d`` trace
        expect.
        """

        return {
            'x': [v.x for v in self.vertices],
            'y': [v.y for v in self.vertices],
            'z': [v.z for v in self.vertices],
            'i': [t[0] for t in self.triangles],
            'j': [t[1] for t in self.triangles],
            'k': [t[2] for t in self.triangles],
        }

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(points, faces)`` as ``(n, 3)`` float and ``(m, 3)`` int arrays."""

        points = np.asarray(self.vertices, dtype=float).reshape(-1, 3)
        faces = np.asarray(self.triangles, dtype=np.int64).reshape(-1, 3)
        return points, faces

    def surface_area(self) -> float:
        total = 0.0
        for i, j, k in self.triangles:
            total += triangle_area(self.vertices[i], self.vertices[j], self.vertices[k])
        return total


def mesh_view(mesh: Mesh) -> Iterator[TriTuple]:
    """Yield triangles of ``mesh`` as ``(normal, v0, v1, v2)``.

    Normals are unit vectors. Faces with degenerate geometry (zero area) are
    skipped silently.
    """

    if not isinstance(mesh, Mesh):
        raise ValueError("mesh_view expects a Mesh")

    verts = mesh.vertices
    for idx0, idx1, idx2 in mesh.triangles:
        v0 = to_vec3(verts[idx0])
        v1 = to_vec3(verts[idx1])
        v2 = to_vec3(verts[idx2])

        calc_normal = triangle_normal(v0, v1, v2)
        if calc_normal is None:
            continue

        yield calc_normal, v0, v1, v2


def fan_triangles(start: int, count: int, *, reverse: bool = False) -> List[TriangleIndices]:
    """Fan-triangulate a ring of ``count`` vertices starting at index ``start``.

    The fan is rooted at the ring's first vertex, giving ``count - 2``
    triangles ``(s, s+j+1, s+j+2)``; ``reverse`` swaps the last two indices.
    """

    tris: List[TriangleIndices] = []
    for j in range(count - 2):
        if reverse:
            tris.append((start, start + j + 2, start + j + 1))
        else:
            tris.append((start, start + j + 1, start + j + 2))
    return tris


def concat_vertices(*rings: Sequence[Vertex3D]) -> Tuple[Vertex3D, ...]:
    out: List[Vertex3D] = []
    for ring in rings:
        out.extend(ring)
    return tuple(out)


__all__ = [
    'Mesh',
    'TriangleIndices',
    'mesh_view',
    'fan_triangles',
    'concat_vertices',
]
