"""Planar views of a yield surface: π-plane sections and meridian envelopes.

The model modules build their 3D rings and q functions; the helpers here turn
them into chart-ready 2D data.

* A π-plane section is a closed :data:`Polyline2D`: the projected ring with
  its first point repeated at the end.  An empty ring gives an empty
  polyline.
* A meridian envelope is a mapping of curve name to :class:`MeridianCurve`,
  each an ordered list of ``(p, q)`` points over increasing ``p``.  Samples
  where ``q`` is not a valid deviatoric stress are dropped, or kept with
  ``q = nan`` when the caller asks for explicit gaps.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

import numpy as np

from yieldviz.geometry_utils import Point2D, Vertex3D, project_to_pi_plane
from yieldviz.invariants import is_valid_q

Polyline2D = Tuple[Point2D, ...]

# grid points closer than this fraction of a step to a boundary are merged into it
_GRID_SNAP = 1e-9


def close_polyline(points: Sequence[Point2D]) -> Polyline2D:
    """Return ``points`` with the first point repeated at the end."""

    if not points:
        return ()
    out = tuple(Point2D(float(pt[0]), float(pt[1])) for pt in points)
    return out + (out[0],)


def project_ring(ring: Sequence[Vertex3D]) -> Polyline2D:
    """Project a 3D ring onto the π-plane and close it.

    Points that do not project to finite coordinates are dropped.
    """

    projected = [project_to_pi_plane(v[0], v[1], v[2]) for v in ring]
    projected = [pt for pt in projected if math.isfinite(pt.x) and math.isfinite(pt.y)]
    return close_polyline(projected)


def pressure_grid(p_start: float, p_max: float, step: float) -> List[float]:
    """Sample pressures for a meridian plot.

    The grid holds ``p_start``, every multiple of ``step`` strictly between
    ``p_start`` and ``p_max``, and ``p_max``.  Anchoring the interior points
    to multiples of ``step`` keeps plots of different parameter sets aligned;
    the boundaries are always present even when they fall between grid
    points.  An inverted range (``p_start > p_max``) or a non-finite bound
    gives no samples.
    """

    if step <= 0:
        raise ValueError("step must be positive")
    if not (math.isfinite(p_start) and math.isfinite(p_max)):
        return []
    if p_start > p_max:
        return []
    if p_start == p_max:
        return [float(p_start)]

    snap = step * _GRID_SNAP
    values = [float(p_start)]
    k = math.floor(p_start / step) + 1
    while True:
        p = k * step
        if p >= p_max - snap:
            break
        if p > p_start + snap:
            values.append(p)
        k += 1
    values.append(float(p_max))
    return values


@dataclass(frozen=True)
class MeridianCurve:
    """One meridian of a yield envelope as ``(p, q)`` points."""

    name: str
    points: Tuple[Point2D, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not self.points

    @property
    def p_values(self) -> List[float]:
        return [pt.x for pt in self.points]

    @property
    def q_values(self) -> List[float]:
        return [pt.y for pt in self.points]

    @property
    def start(self) -> Optional[Point2D]:
        return self.points[0] if self.points else None

    def as_arrays(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(p, q)`` float arrays; gaps stay ``nan``."""

        return (np.asarray(self.p_values, dtype=float),
                np.asarray(self.q_values, dtype=float))


MeridianEnvelope = Dict[str, MeridianCurve]


def sample_envelope(name: str,
                    q_of_p: Callable[[float], float],
                    pressures: Iterable[float],
                    *,
                    keep_gaps: bool = False,
                    leading: Sequence[Point2D] = ()) -> MeridianCurve:
    """Evaluate ``q_of_p`` over ``pressures`` into a :class:`MeridianCurve`.

    ``leading`` points (already valid, e.g. an apex) are emitted first.
    Invalid samples are dropped, or emitted as ``(p, nan)`` with
    ``keep_gaps=True``.
    """

    points: List[Point2D] = [Point2D(float(pt[0]), float(pt[1])) for pt in leading]
    for p in pressures:
        q = q_of_p(p)
        if is_valid_q(q):
            points.append(Point2D(p, q))
        elif keep_gaps:
            points.append(Point2D(p, math.nan))
    return MeridianCurve(name, tuple(points))


__all__ = [
    'Polyline2D',
    'MeridianCurve',
    'MeridianEnvelope',
    'close_polyline',
    'project_ring',
    'pressure_grid',
    'sample_envelope',
]
