"""Export writers for yieldviz geometry."""

from .dxf import write_sections_dxf
from .snapshot import snapshot, write_envelope_csv, write_snapshot_json
from .stl import write_stl

__all__ = [
    'write_stl',
    'snapshot',
    'write_snapshot_json',
    'write_envelope_csv',
    'write_sections_dxf',
]
