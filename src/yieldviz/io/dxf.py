"""DXF export of the planar views using ezdxf.

The π-plane section and each meridian curve become LWPOLYLINE entities on
their own layers, in one drawing:

    PI_PLANE            closed section polygon (π-plane x', y')
    MERIDIAN_<NAME>     one open polyline per meridian curve (p, q)

Meridian gaps split a curve into several polylines.  ezdxf is imported
when a drawing is written, so the geometry core does not need it.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from yieldviz.geometry_utils import Point2D
from yieldviz.projection import MeridianEnvelope, Polyline2D

logger = logging.getLogger(__name__)

PI_PLANE_LAYER = 'PI_PLANE'
MERIDIAN_LAYER_PREFIX = 'MERIDIAN_'

# AutoCAD colour indices, cycled over the meridian layers
_PI_PLANE_COLOR = 7
_MERIDIAN_COLORS = (1, 5, 3, 2, 4, 6)


def _split_on_gaps(points: Sequence[Point2D]) -> List[List[Tuple[float, float]]]:
    runs: List[List[Tuple[float, float]]] = []
    current: List[Tuple[float, float]] = []
    for pt in points:
        if math.isfinite(pt.x) and math.isfinite(pt.y):
            current.append((pt.x, pt.y))
        elif current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs


def meridian_layer(name: str) -> str:
    return MERIDIAN_LAYER_PREFIX + name.upper()


def write_sections_dxf(section: Optional[Polyline2D],
                       envelope: Optional[MeridianEnvelope],
                       output_path: Union[str, Path]) -> Path:
    """Write the π-plane section and meridian curves to ``output_path``.

    A ``.dxf`` suffix is added when missing.  Empty sections or curves
    produce an empty layer rather than an error.

    Returns:
        The path written.
    """

    import ezdxf

    path = Path(output_path)
    if path.suffix.lower() != '.dxf':
        path = path.with_suffix('.dxf')

    doc = ezdxf.new(dxfversion='R2010', setup=False)
    msp = doc.modelspace()

    doc.layers.new(PI_PLANE_LAYER, dxfattribs={'color': _PI_PLANE_COLOR})
    if section:
        # the section repeats its first point; let the closed flag do that
        points = [(pt.x, pt.y) for pt in section[:-1]]
        msp.add_lwpolyline(points, close=True, dxfattribs={'layer': PI_PLANE_LAYER})

    polylines = 0
    for index, (name, curve) in enumerate((envelope or {}).items()):
        layer = meridian_layer(name)
        color = _MERIDIAN_COLORS[index % len(_MERIDIAN_COLORS)]
        doc.layers.new(layer, dxfattribs={'color': color})
        for run in _split_on_gaps(curve.points):
            if len(run) < 2:
                continue
            msp.add_lwpolyline(run, dxfattribs={'layer': layer})
            polylines += 1

    doc.saveas(path)
    logger.debug("wrote %s (%d meridian polylines)", path, polylines)
    return path


__all__ = [
    'PI_PLANE_LAYER',
    'MERIDIAN_LAYER_PREFIX',
    'meridian_layer',
    'write_sections_dxf',
]
