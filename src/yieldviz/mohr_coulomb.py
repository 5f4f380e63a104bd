"""Mohr-Coulomb yield surface: hexagonal pyramid (φ > 0) or prism (φ = 0).

In principal-stress space the Mohr-Coulomb criterion is an irregular
hexagonal pyramid around the hydrostatic axis.  Its cross-section at mean
stress ``p`` has three corners on the triaxial-compression meridian (radius
from ``qTC``) alternating with three on the triaxial-extension meridian
(radius from ``qTE``).  With zero friction the hexagon is regular and no
longer depends on ``p`` (the Tresca prism).

Mesh layout
-----------

Pyramid (``φ > 1e-3`` rad)::

    vertex 0        apex at (p_apex, p_apex, p_apex)
    vertices 1..6   base hexagon at p_base
    faces           (0, 1+i, 1+(i+1) % 6)            6 triangles

Prism (``φ <= 1e-3`` rad)::

    vertices 0..5   hexagon at p_low
    vertices 6..11  hexagon at p_high
    faces           2 per side face + 4 per end cap  20 triangles
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Tuple

from yieldviz.geometry_utils import Vertex3D, all_finite, clamp, hydrostatic_point
from yieldviz.invariants import (
    PHI_ZERO_TOL,
    is_valid_q,
    mc_apex_pressure,
    mc_has_apex,
    mc_q_compression,
    mc_q_extension,
)
from yieldviz.mesh import Mesh, TriangleIndices, concat_vertices, fan_triangles
from yieldviz.params import MohrCoulombParams
from yieldviz.projection import (
    MeridianEnvelope,
    Polyline2D,
    pressure_grid,
    project_ring,
    sample_envelope,
)
from yieldviz.settings import DEFAULT_SETTINGS, GeometrySettings

logger = logging.getLogger(__name__)

HEXAGON_SIZE = 6


def hexagon_ring(p: float, c: float, phi: float) -> Tuple[Vertex3D, ...]:
    """Return the six corners of the Mohr-Coulomb section at mean stress ``p``.

    The order is fixed and alternates compression and extension corners so
    that consecutive vertices are joined by a hexagon edge::

        TC on σ1, TE between σ1/σ2, TC on σ2, TE between σ2/σ3,
        TC on σ3, TE between σ3/σ1

    Returns an empty tuple when either meridian has no valid ``q`` at ``p``.
    """

    q_tc = mc_q_compression(p, c, phi)
    q_te = mc_q_extension(p, c, phi)
    if not (is_valid_q(q_tc) and is_valid_q(q_te)):
        return ()

    s_l1 = p + (2.0 / 3.0) * q_tc
    s_s1 = p - (1.0 / 3.0) * q_tc
    s_l2 = p + (1.0 / 3.0) * q_te
    s_s2 = p - (2.0 / 3.0) * q_te

    return (
        Vertex3D(s_l1, s_s1, s_s1),
        Vertex3D(s_l2, s_l2, s_s2),
        Vertex3D(s_s1, s_l1, s_s1),
        Vertex3D(s_s2, s_l2, s_l2),
        Vertex3D(s_s1, s_s1, s_l1),
        Vertex3D(s_l2, s_s2, s_l2),
    )


def base_pressure(p_apex: float, settings: GeometrySettings = DEFAULT_SETTINGS) -> float:
    """Mean stress of the pyramid's base ring, capped at ``p_max``."""

    p_base = max(p_apex + settings.base_offset, settings.p_max * settings.base_fraction)
    return clamp(p_base, p_apex, settings.p_max)


def _pyramid(c: float, phi: float, settings: GeometrySettings) -> Mesh:
    p_apex = mc_apex_pressure(c, phi)
    if not math.isfinite(p_apex):
        logger.debug("Mohr-Coulomb apex overflows (c=%g, phi=%g); empty mesh", c, phi)
        return Mesh.empty()
    p_base = base_pressure(p_apex, settings)
    base = hexagon_ring(p_base, c, phi)
    if not base:
        logger.debug("no Mohr-Coulomb section at p_base=%g (c=%g, phi=%g); empty mesh",
                     p_base, c, phi)
        return Mesh.empty()

    vertices = (hydrostatic_point(p_apex),) + base
    if not all_finite(vertices):
        logger.debug("Mohr-Coulomb pyramid overflows (c=%g, phi=%g); empty mesh", c, phi)
        return Mesh.empty()
    apex_index = 0
    base_start = 1
    triangles = [
        (apex_index, base_start + i, base_start + (i + 1) % HEXAGON_SIZE)
        for i in range(HEXAGON_SIZE)
    ]
    return Mesh(vertices, tuple(triangles))


def _prism(c: float, phi: float, settings: GeometrySettings) -> Mesh:
    p_low = settings.p_max * settings.prism_low_fraction
    p_high = settings.p_max
    low = hexagon_ring(p_low, c, phi)
    high = hexagon_ring(p_high, c, phi)
    if not (low and high):
        logger.debug("no Mohr-Coulomb prism for c=%g, phi=%g; empty mesh", c, phi)
        return Mesh.empty()
    if not all_finite(low + high):
        logger.debug("Mohr-Coulomb prism overflows (c=%g); empty mesh", c)
        return Mesh.empty()

    low_start = 0
    high_start = HEXAGON_SIZE
    triangles: List[TriangleIndices] = []
    for i in range(HEXAGON_SIZE):
        curr = low_start + i
        nxt = low_start + (i + 1) % HEXAGON_SIZE
        curr_high = high_start + i
        next_high = high_start + (i + 1) % HEXAGON_SIZE
        triangles.append((curr, nxt, next_high))
        triangles.append((curr, next_high, curr_high))

    triangles.extend(fan_triangles(low_start, HEXAGON_SIZE))
    triangles.extend(fan_triangles(high_start, HEXAGON_SIZE))
    return Mesh(concat_vertices(low, high), tuple(triangles))


def surface_mesh(params: MohrCoulombParams,
                 settings: Optional[GeometrySettings] = None) -> Mesh:
    """Build the 3D Mohr-Coulomb surface for ``params``.

    Friction angles above ``1e-3`` rad give the pyramid, anything else the
    Tresca prism.  Parameter sets with no valid section give an empty mesh.
    """

    settings = settings or DEFAULT_SETTINGS
    c = params.cohesion
    phi = params.friction_angle_rad
    if phi > PHI_ZERO_TOL:
        logger.debug("Mohr-Coulomb pyramid branch (c=%g, phi=%g rad)", c, phi)
        return _pyramid(c, phi, settings)
    logger.debug("Mohr-Coulomb prism branch (c=%g, phi=%g rad)", c, phi)
    return _prism(c, phi, settings)


def pi_plane_section(params: MohrCoulombParams,
                     p0: Optional[float] = None,
                     settings: Optional[GeometrySettings] = None) -> Polyline2D:
    """Closed hexagon of the surface's section at mean stress ``p0``."""

    settings = settings or DEFAULT_SETTINGS
    if p0 is None:
        p0 = settings.pi_plane_p
    if not math.isfinite(p0):
        logger.debug("no Mohr-Coulomb section at non-finite p0=%r", p0)
        return ()
    ring = hexagon_ring(p0, params.cohesion, params.friction_angle_rad)
    if not all_finite(ring):
        logger.debug("Mohr-Coulomb section at p0=%g overflows", p0)
        return ()
    return project_ring(ring)


def meridian_envelope(params: MohrCoulombParams,
                      p_max: Optional[float] = None,
                      settings: Optional[GeometrySettings] = None,
                      *,
                      keep_gaps: bool = False) -> MeridianEnvelope:
    """Compression and extension meridians from the apex (or ``p = 0``) to ``p_max``.

    When the pyramid has an apex both curves begin at ``(p_apex, 0)``, the
    tip of the 3D surface, and continue on the sampling grid above it.
    """

    settings = settings or DEFAULT_SETTINGS
    if p_max is None:
        p_max = settings.p_max
    c = params.cohesion
    phi = params.friction_angle_rad

    p_start = mc_apex_pressure(c, phi)
    pressures = pressure_grid(p_start, p_max, settings.meridian_step)
    leading: Tuple = ()
    if mc_has_apex(c, phi) and pressures:
        leading = ((p_start, 0.0),)
        pressures = pressures[1:]

    return {
        'compression': sample_envelope(
            'compression', lambda p: mc_q_compression(p, c, phi), pressures,
            keep_gaps=keep_gaps, leading=leading),
        'extension': sample_envelope(
            'extension', lambda p: mc_q_extension(p, c, phi), pressures,
            keep_gaps=keep_gaps, leading=leading),
    }


__all__ = [
    'HEXAGON_SIZE',
    'hexagon_ring',
    'base_pressure',
    'surface_mesh',
    'pi_plane_section',
    'meridian_envelope',
]
