"""JSON snapshots and CSV tables of the computed geometry.

A snapshot records a parameter set together with everything derived from
it, so a plot can be reproduced without rerunning the generators::

    {
      "schema": "yieldviz-snapshot-v1",
      "generator": {"name": "yieldviz", "version": "..."},
      "parameters": {"model": "MohrCoulomb", "cohesion": 10, "frictionAngle": 30},
      "settings": {...},
      "mesh": {"x": [...], "y": [...], "z": [...], "i": [...], "j": [...], "k": [...]},
      "piPlane": {"p": 50.0, "points": [[x, y], ...]},
      "meridian": {"compression": [[p, q], ...], "extension": [[p, q], ...]}
    }

JSON has no NaN, so meridian gaps are written as ``null``.
"""

from __future__ import annotations

import csv
import json
import math
from typing import Any, Dict, List, Optional

from yieldviz.models import generate_surface_mesh, get_meridian_envelope, get_pi_plane_section
from yieldviz.params import MaterialParameters
from yieldviz.projection import MeridianEnvelope
from yieldviz.settings import DEFAULT_SETTINGS, GeometrySettings

SCHEMA_ID = "yieldviz-snapshot-v1"


def _json_number(value: float) -> Optional[float]:
    return float(value) if math.isfinite(value) else None


def _generator_info() -> Dict[str, str]:
    from yieldviz import __version__
    return {"name": "yieldviz", "version": __version__}


def snapshot(params: MaterialParameters,
             settings: Optional[GeometrySettings] = None,
             *,
             keep_gaps: bool = False) -> Dict[str, Any]:
    """Compute all geometry for ``params`` into a JSON-ready dict."""

    settings = settings or DEFAULT_SETTINGS
    mesh = generate_surface_mesh(params, settings)
    section = get_pi_plane_section(params, settings.pi_plane_p, settings)
    envelope = get_meridian_envelope(params, settings.p_max, settings, keep_gaps=keep_gaps)

    return {
        "schema": SCHEMA_ID,
        "generator": _generator_info(),
        "parameters": params.to_dict(),
        "settings": settings.to_dict(),
        "mesh": mesh.flat_arrays(),
        "piPlane": {
            "p": settings.pi_plane_p,
            "points": [[pt.x, pt.y] for pt in section],
        },
        "meridian": {
            name: [[pt.x, _json_number(pt.y)] for pt in curve.points]
            for name, curve in envelope.items()
        },
    }


def write_snapshot_json(doc: Dict[str, Any], path_or_file, *, indent: int = 2) -> None:
    """Write a :func:`snapshot` document to a path or text stream."""

    if hasattr(path_or_file, 'write'):
        json.dump(doc, path_or_file, indent=indent, allow_nan=False)
        return
    with open(path_or_file, 'w', encoding='utf-8') as f:
        json.dump(doc, f, indent=indent, allow_nan=False)


def envelope_rows(envelope: MeridianEnvelope) -> List[List[Any]]:
    """Tabulate an envelope as a header row plus one row per pressure.

    Curves are joined on ``p``; a curve with no sample at a pressure gets
    an empty cell.
    """

    names = list(envelope)
    table: Dict[float, Dict[str, float]] = {}
    for name in names:
        for pt in envelope[name].points:
            table.setdefault(pt.x, {})[name] = pt.y

    rows: List[List[Any]] = [['p'] + [f'q_{name}' for name in names]]
    for p in sorted(table):
        values = table[p]
        row: List[Any] = [p]
        for name in names:
            q = values.get(name)
            row.append('' if q is None or not math.isfinite(q) else q)
        rows.append(row)
    return rows


def write_envelope_csv(envelope: MeridianEnvelope, path_or_file) -> int:
    """Write the meridian envelope as CSV; returns the number of data rows."""

    rows = envelope_rows(envelope)
    if hasattr(path_or_file, 'write'):
        csv.writer(path_or_file).writerows(rows)
    else:
        with open(path_or_file, 'w', encoding='utf-8', newline='') as f:
            csv.writer(f).writerows(rows)
    return len(rows) - 1


__all__ = [
    'SCHEMA_ID',
    'snapshot',
    'write_snapshot_json',
    'envelope_rows',
    'write_envelope_csv',
]
