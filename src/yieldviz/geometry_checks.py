"""Validation helpers for generated meshes and polylines."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Sequence

from yieldviz.geometry_utils import epsilon, triangle_is_degenerate

if TYPE_CHECKING:  # pragma: no cover
    from yieldviz.mesh import Mesh


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok


def is_closed_polyline(points: Sequence[Sequence[float]], tol: float = epsilon) -> bool:
    """Return ``True`` if a 2D polyline ends where it starts, within ``tol``."""

    if len(points) < 2:
        return False
    first = points[0]
    last = points[-1]
    return abs(first[0] - last[0]) <= tol and abs(first[1] - last[1]) <= tol


def mesh_indices_valid(vertex_count: int, triangles: Sequence[Sequence[int]]) -> CheckResult:
    """Check that every triangle is a triple of indices below ``vertex_count``."""

    bad = []
    for idx, tri in enumerate(triangles):
        if len(tri) != 3 or any(i < 0 or i >= vertex_count for i in tri):
            bad.append(idx)
    if bad:
        return CheckResult(False, [f'triangles with invalid indices: {bad}'])
    return CheckResult(True, [])


def degenerate_faces(mesh: "Mesh", tol: float = epsilon) -> List[int]:
    """Return indices of triangles whose area is at most ``tol``."""

    verts = mesh.vertices
    return [
        idx for idx, (a, b, c) in enumerate(mesh.triangles)
        if triangle_is_degenerate(verts[a], verts[b], verts[c], tol)
    ]


def mesh_watertight(mesh: "Mesh") -> CheckResult:
    """Report boundary edges (used once) and non-manifold edges (used > 2 times)."""

    edges: Counter = Counter()
    for a, b, c in mesh.triangles:
        edges[_edge_key(a, b)] += 1
        edges[_edge_key(b, c)] += 1
        edges[_edge_key(c, a)] += 1

    boundary = [edge for edge, count in edges.items() if count == 1]
    invalid = [edge for edge, count in edges.items() if count > 2]

    warnings: List[str] = []
    ok = True
    if not edges:
        ok = False
        warnings.append('mesh has no faces')
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'edges with multiplicity >2: {invalid}')

    return CheckResult(ok, warnings)


def _edge_key(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


__all__ = [
    'CheckResult',
    'is_closed_polyline',
    'mesh_indices_valid',
    'degenerate_faces',
    'mesh_watertight',
]
