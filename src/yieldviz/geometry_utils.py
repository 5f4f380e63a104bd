"""Common geometric helpers shared by the generators, projectors and exporters.

Stresses follow the soil-mechanics convention: compression is positive and
principal-stress space is mapped onto ``(x, y, z) = (σ1, σ2, σ3)``.  The
hydrostatic axis is the line ``x = y = z``; the π-plane coordinates used
throughout are

    x' = (σ2 - σ3) / √2
    y' = (2σ1 - σ2 - σ3) / √6

so that the σ1 axis projects onto +y'.
"""

from __future__ import annotations

import math
from typing import Iterable, List, NamedTuple, Sequence, Tuple

Vec3 = Tuple[float, float, float]

epsilon = 0.000005

SQRT2 = math.sqrt(2.0)
SQRT6 = math.sqrt(6.0)
SQRT_2_3 = math.sqrt(2.0 / 3.0)
TWO_PI_3 = 2.0 * math.pi / 3.0


class Vertex3D(NamedTuple):
    """A point in principal-stress space."""

    x: float
    y: float
    z: float


class Point2D(NamedTuple):
    """A point in a 2D chart: π-plane ``(x', y')`` or meridian ``(p, q)``."""

    x: float
    y: float


# scalar helpers
# --------------

def deg_to_rad(degrees: float) -> float:
    return degrees * (math.pi / 180.0)


def rad_to_deg(radians: float) -> float:
    return radians * (180.0 / math.pi)


def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def all_finite(vertices: Iterable[Sequence[float]]) -> bool:
    """True when every coordinate of every vertex is a finite number."""
    return all(math.isfinite(c) for v in vertices for c in v)


def linspace(start: float, end: float, num: int) -> List[float]:
    """Return ``num`` evenly spaced values from ``start`` to ``end`` inclusive.

    Values are computed as ``start + i * step`` so the first entry is exactly
    ``start``; the last entry is pinned to ``end``.
    """

    if num < 1:
        return []
    if num == 1:
        return [float(start)]
    step = (end - start) / (num - 1)
    values = [start + i * step for i in range(num - 1)]
    values.append(float(end))
    return values


# stress invariants from principal values
# ---------------------------------------

def mean_stress(s1: float, s2: float, s3: float) -> float:
    """Mean stress ``p = (σ1 + σ2 + σ3) / 3``."""

    return (s1 + s2 + s3) / 3.0


def deviatoric_stress(s1: float, s2: float, s3: float) -> float:
    """Deviatoric stress ``q = √(3 J2)`` from principal stresses."""

    return math.sqrt(0.5 * ((s1 - s2) ** 2 + (s2 - s3) ** 2 + (s3 - s1) ** 2))


def deviatoric_radius(q: float) -> float:
    """Distance from the hydrostatic axis of a stress state with deviatoric stress ``q``."""

    return SQRT_2_3 * q


def hydrostatic_point(p: float) -> Vertex3D:
    return Vertex3D(p, p, p)


def principal_stresses_from_pq(p: float, q: float, theta: float = 0.0) -> Vertex3D:
    """Convert ``(p, q, θ)`` to principal stresses.

    ``theta`` is measured in the π-plane from the σ1 direction; ``θ = 0``
    is the triaxial-compression meridian.  The result has mean stress ``p``
    and deviatoric stress ``q``.
    """

    amplitude = (2.0 / 3.0) * q
    return Vertex3D(
        p + amplitude * math.cos(theta),
        p + amplitude * math.cos(theta - TWO_PI_3),
        p + amplitude * math.cos(theta + TWO_PI_3),
    )


# π-plane projection
# ------------------

def project_to_pi_plane(s1: float, s2: float, s3: float) -> Point2D:
    """Project a principal-stress state onto π-plane coordinates."""

    return Point2D((s2 - s3) / SQRT2, (2.0 * s1 - s2 - s3) / SQRT6)


def pi_plane_to_stresses(point: Sequence[float], p: float) -> Vertex3D:
    """Inverse of :func:`project_to_pi_plane` for a known mean stress ``p``."""

    x, y = float(point[0]), float(point[1])
    return Vertex3D(
        p + (y * SQRT6) / 3.0,
        p - (y * SQRT6) / 6.0 + (x * SQRT2) / 2.0,
        p - (y * SQRT6) / 6.0 - (x * SQRT2) / 2.0,
    )


# triangle helpers
# ----------------

def to_vec3(point_like: Sequence[float]) -> Vec3:
    """Return the XYZ components of a point-like sequence as a float tuple."""

    if len(point_like) < 3:
        raise ValueError("value must have at least three components")
    return float(point_like[0]), float(point_like[1]), float(point_like[2])


def _cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def _edge_cross(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3:
    a = (v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2])
    b = (v2[0] - v0[0], v2[1] - v0[1], v2[2] - v0[2])
    return _cross(a, b)


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3 | None:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    n = _edge_cross(v0, v1, v2)
    length = math.sqrt(n[0] * n[0] + n[1] * n[1] + n[2] * n[2])
    if length <= epsilon:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


def triangle_area(v0: Vec3, v1: Vec3, v2: Vec3) -> float:
    n = _edge_cross(v0, v1, v2)
    return 0.5 * math.sqrt(n[0] * n[0] + n[1] * n[1] + n[2] * n[2])


def triangle_is_degenerate(v0: Vec3, v1: Vec3, v2: Vec3, tol: float = epsilon) -> bool:
    """Return ``True`` if a triangle collapses under the given tolerance."""

    return triangle_area(v0, v1, v2) <= tol


__all__ = [
    'Vec3',
    'Vertex3D',
    'Point2D',
    'epsilon',
    'SQRT_2_3',
    'TWO_PI_3',
    'deg_to_rad',
    'rad_to_deg',
    'clamp',
    'all_finite',
    'linspace',
    'mean_stress',
    'deviatoric_stress',
    'deviatoric_radius',
    'hydrostatic_point',
    'principal_stresses_from_pq',
    'project_to_pi_plane',
    'pi_plane_to_stresses',
    'to_vec3',
    'triangle_normal',
    'triangle_area',
    'triangle_is_degenerate',
]
