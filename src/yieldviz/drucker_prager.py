"""Drucker-Prager yield surface: a cone (or cylinder) about the hydrostatic axis.

``q = m p + k_d`` describes a circular cone whose radius grows with mean
stress; ``m = 0`` is the pressure-independent Von Mises cylinder.  A
negative intercept moves the cone tip to ``p_start = -k_d / m``.
"""

from __future__ import annotations

import bisect
import logging
import math
from typing import List, Optional, Tuple

from yieldviz.errors import InvalidParameterError
from yieldviz.geometry_utils import (
    SQRT_2_3,
    TWO_PI_3,
    Vertex3D,
    all_finite,
    deviatoric_radius,
    linspace,
)
from yieldviz.invariants import dp_q, dp_start_pressure
from yieldviz.mesh import Mesh, TriangleIndices, fan_triangles
from yieldviz.params import DruckerPragerParams
from yieldviz.projection import (
    MeridianEnvelope,
    Polyline2D,
    pressure_grid,
    project_ring,
    sample_envelope,
)
from yieldviz.settings import DEFAULT_SETTINGS, GeometrySettings

logger = logging.getLogger(__name__)


def circular_ring(p: float, radius: float, num_sectors: int) -> Tuple[Vertex3D, ...]:
    """Ring of ``num_sectors`` points about the hydrostatic axis at mean stress ``p``.

    Vertex ``j`` sits at ``θ = 2πj / num_sectors``::

        x = p + r cos θ,  y = p + r cos(θ - 2π/3),  z = p + r cos(θ + 2π/3)

    The three cosines sum to zero, so every vertex keeps mean stress ``p``.
    Its distance from the axis is ``r·√(3/2)``.
    """

    if num_sectors < 3:
        raise InvalidParameterError("a ring needs at least 3 sectors")
    step = 2.0 * math.pi / num_sectors
    ring = []
    for j in range(num_sectors):
        theta = j * step
        ring.append(Vertex3D(
            p + radius * math.cos(theta),
            p + radius * math.cos(theta - TWO_PI_3),
            p + radius * math.cos(theta + TWO_PI_3),
        ))
    return tuple(ring)


def ring_radius(p: float, m: float, kd: float) -> float:
    """Ring parameter ``r = √(2/3)·max(0, m p + k_d)`` used by the 3D cone."""

    return SQRT_2_3 * dp_q(p, m, kd)


def side_triangles(num_rings: int, num_sectors: int) -> List[TriangleIndices]:
    """Two triangles per quad between consecutive rings.

    Rings are stored one after another, ``num_sectors`` vertices each; the
    last sector of a ring wraps around to its first vertex.
    """

    tris: List[TriangleIndices] = []
    for i in range(num_rings):
        current_ring = i * num_sectors
        next_ring = (i + 1) * num_sectors
        for j in range(num_sectors):
            v0 = current_ring + j
            v1 = current_ring + (j + 1) % num_sectors
            v2 = next_ring + (j + 1) % num_sectors
            v3 = next_ring + j
            tris.append((v0, v1, v3))
            tris.append((v1, v2, v3))
    return tris


def _linear_q(p: float, m: float, kd: float) -> float:
    q = m * p + kd
    # the tension-cut start point is a root of the line; absorb rounding there
    if -1e-12 < q < 0.0:
        return 0.0
    return q


def surface_mesh(params: DruckerPragerParams,
                 settings: Optional[GeometrySettings] = None,
                 *,
                 num_rings: Optional[int] = None,
                 num_sectors: Optional[int] = None) -> Mesh:
    """Build the tessellated cone for ``params``.

    ``num_rings`` pressure steps from ``p_start`` to ``p_max`` give
    ``num_rings + 1`` rings of ``num_sectors`` vertices.  End caps are added
    where the ring has a radius above ``settings.cap_tolerance``; a cone tip
    is left as a ring of coincident points.
    """

    settings = settings or DEFAULT_SETTINGS
    num_rings = settings.dp_rings if num_rings is None else num_rings
    num_sectors = settings.dp_sectors if num_sectors is None else num_sectors
    if num_rings < 1:
        raise InvalidParameterError("num_rings must be at least 1")
    if num_sectors < 3:
        raise InvalidParameterError("num_sectors must be at least 3")

    m = params.slope
    kd = params.cohesion_intercept
    p_max = settings.p_max
    p_start = dp_start_pressure(m, kd)
    if p_start > p_max:
        logger.debug("Drucker-Prager cone starts at p=%g beyond p_max=%g; empty mesh",
                     p_start, p_max)
        return Mesh.empty()

    vertices: List[Vertex3D] = []
    for p in linspace(p_start, p_max, num_rings + 1):
        vertices.extend(circular_ring(p, ring_radius(p, m, kd), num_sectors))
    if not all_finite(vertices):
        logger.debug("Drucker-Prager cone overflows (m=%g, kd=%g); empty mesh", m, kd)
        return Mesh.empty()

    triangles = side_triangles(num_rings, num_sectors)

    if m * p_max + kd > settings.cap_tolerance:
        triangles.extend(fan_triangles(num_rings * num_sectors, num_sectors))
    else:
        logger.debug("skipping Drucker-Prager base cap (q=%g)", m * p_max + kd)

    if m * p_start + kd > settings.cap_tolerance:
        triangles.extend(fan_triangles(0, num_sectors, reverse=True))
    else:
        logger.debug("skipping Drucker-Prager start cap (q=%g)", m * p_start + kd)

    return Mesh(tuple(vertices), tuple(triangles))


def pi_plane_section(params: DruckerPragerParams,
                     p0: Optional[float] = None,
                     settings: Optional[GeometrySettings] = None,
                     *,
                     num_points: Optional[int] = None) -> Polyline2D:
    """Closed circle of radius ``(m p0 + k_d)·√(2/3)`` in the π-plane.

    Empty when ``m p0 + k_d < 0``.
    """

    settings = settings or DEFAULT_SETTINGS
    if p0 is None:
        p0 = settings.pi_plane_p
    num_points = settings.pi_circle_points if num_points is None else num_points

    if not math.isfinite(p0):
        logger.debug("no Drucker-Prager section at non-finite p0=%r", p0)
        return ()
    q = params.slope * p0 + params.cohesion_intercept
    if q < 0:
        return ()
    # circular_ring places points at r·√(3/2) from the axis
    radius = deviatoric_radius(q)
    ring = circular_ring(p0, SQRT_2_3 * radius, num_points)
    if not all_finite(ring):
        logger.debug("Drucker-Prager section at p0=%g overflows", p0)
        return ()
    return project_ring(ring)


def meridian_envelope(params: DruckerPragerParams,
                      p_max: Optional[float] = None,
                      settings: Optional[GeometrySettings] = None,
                      *,
                      keep_gaps: bool = False) -> MeridianEnvelope:
    """The line ``q = m p + k_d`` from ``p_start`` to ``p_max``, clipped to ``q >= 0``.

    A falling line (``m < 0``) that reaches zero inside the range ends on its
    root ``p = -k_d / m``.
    """

    settings = settings or DEFAULT_SETTINGS
    if p_max is None:
        p_max = settings.p_max
    m = params.slope
    kd = params.cohesion_intercept

    p_start = dp_start_pressure(m, kd)
    pressures = pressure_grid(p_start, p_max, settings.meridian_step)
    if m < 0.0 and kd > 0.0 and pressures:
        p_root = -kd / m
        if p_start < p_root < pressures[-1] and p_root not in pressures:
            bisect.insort(pressures, p_root)
    curve = sample_envelope('envelope', lambda p: _linear_q(p, m, kd), pressures,
                            keep_gaps=keep_gaps)
    return {'envelope': curve}


__all__ = [
    'circular_ring',
    'ring_radius',
    'side_triangles',
    'surface_mesh',
    'pi_plane_section',
    'meridian_envelope',
]
