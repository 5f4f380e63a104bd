"""Named material presets for both yield models.

Quick Start:
    >>> from yieldviz.presets import get_preset
    >>> preset = get_preset("MohrCoulomb", "Dense Sand")
    >>> preset.params
    MohrCoulombParams(cohesion=0.0, friction_angle_deg=38.0)

Catalog Customization:
    Set YIELDVIZ_PRESET_DATA to directories holding a ``presets.yaml`` in
    the bundled format. These are searched before bundled data.
"""

from __future__ import annotations

from .catalog import (
    PRESET_FILENAME,
    YIELDVIZ_PRESET_DATA,
    Preset,
    clear_cache,
    get_preset,
    list_presets,
    load_catalog,
)

__all__ = [
    "YIELDVIZ_PRESET_DATA",
    "PRESET_FILENAME",
    "Preset",
    "load_catalog",
    "list_presets",
    "get_preset",
    "clear_cache",
]
