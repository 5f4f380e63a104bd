"""Tunable constants of the geometry engine and their YAML override file.

Every magic number of the generators lives in :class:`GeometrySettings`.
Settings are looked up in this order:

1. an explicit path passed to :func:`load_settings`,
2. the file named by the ``YIELDVIZ_CONFIG`` environment variable,
3. the built-in defaults.

A settings file is a flat YAML mapping using the field names below, e.g.::

    p_max: 200
    dp_sectors: 36
    cap_tolerance: 1.0e-4
"""

from __future__ import annotations

import dataclasses
import logging
import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from yieldviz.errors import InvalidParameterError

logger = logging.getLogger(__name__)

YIELDVIZ_CONFIG = "YIELDVIZ_CONFIG"

_INT_FIELDS = ('dp_rings', 'dp_sectors', 'pi_circle_points')


@dataclass(frozen=True)
class GeometrySettings:
    """Resolution and placement constants, pressures in kPa."""

    p_max: float = 150.0
    pi_plane_p: float = 50.0
    meridian_step: float = 1.0
    dp_rings: int = 15
    dp_sectors: int = 24
    pi_circle_points: int = 50
    cap_tolerance: float = 1e-3
    base_offset: float = 30.0
    base_fraction: float = 0.7
    prism_low_fraction: float = 0.1

    def __post_init__(self) -> None:
        for f in dataclasses.fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidParameterError(f"setting '{f.name}' must be a number, got {value!r}")
            if not math.isfinite(value):
                raise InvalidParameterError(f"setting '{f.name}' must be finite, got {value!r}")
            if f.name in _INT_FIELDS:
                if int(value) != value:
                    raise InvalidParameterError(f"setting '{f.name}' must be an integer, got {value!r}")
                object.__setattr__(self, f.name, int(value))
            else:
                object.__setattr__(self, f.name, float(value))
        if self.meridian_step <= 0:
            raise InvalidParameterError("meridian_step must be positive")
        if self.dp_rings < 1:
            raise InvalidParameterError("dp_rings must be at least 1")
        if self.dp_sectors < 3:
            raise InvalidParameterError("dp_sectors must be at least 3")
        if self.pi_circle_points < 3:
            raise InvalidParameterError("pi_circle_points must be at least 3")

    def replace(self, **changes: Any) -> "GeometrySettings":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


DEFAULT_SETTINGS = GeometrySettings()


def settings_from_mapping(data: Dict[str, Any]) -> GeometrySettings:
    """Build settings from a mapping, rejecting unknown keys."""

    if not isinstance(data, dict):
        raise ValueError("settings must be a mapping of field names to values")
    known = {f.name for f in dataclasses.fields(GeometrySettings)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"unknown settings: {unknown}; known settings: {sorted(known)}")
    return GeometrySettings(**data)


def load_settings(path: Optional[Union[str, Path]] = None) -> GeometrySettings:
    """Load settings from ``path``, ``$YIELDVIZ_CONFIG`` or the defaults.

    Raises:
        FileNotFoundError: If an explicit ``path`` does not exist.
        ValueError: If the file is not a mapping or names unknown settings.
    """

    if path is None:
        env_path = os.environ.get(YIELDVIZ_CONFIG)
        if not env_path:
            return DEFAULT_SETTINGS
        path = Path(env_path).expanduser()
        if not path.is_file():
            logger.warning("%s points to missing file %s; using defaults", YIELDVIZ_CONFIG, path)
            return DEFAULT_SETTINGS

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Invalid settings format in {path}: expected a mapping at root")

    settings = settings_from_mapping(data)
    logger.debug("loaded settings from %s", path)
    return settings


__all__ = [
    'YIELDVIZ_CONFIG',
    'GeometrySettings',
    'DEFAULT_SETTINGS',
    'settings_from_mapping',
    'load_settings',
]
