"""Material preset catalog with bundled data and external override support.

Presets are named parameter sets with a description and a display colour,
grouped by yield model.  The bundled catalog holds the classic soil and
rock examples; users can add their own catalogs:

- an explicit path passed to the API,
- directories listed in ``YIELDVIZ_PRESET_DATA``,
- the bundled ``data/presets.yaml``.

The first ``presets.yaml`` found wins.

Environment Variables:
    YIELDVIZ_PRESET_DATA: Colon-separated (or semicolon on Windows) paths
                          to directories containing a ``presets.yaml``.

Example:
    export YIELDVIZ_PRESET_DATA="/path/to/my/presets"
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from yieldviz.errors import PresetNotFoundError
from yieldviz.params import MaterialParameters, ModelKind, params_from_dict

logger = logging.getLogger(__name__)

__all__ = [
    "YIELDVIZ_PRESET_DATA",
    "PRESET_FILENAME",
    "Preset",
    "load_catalog",
    "list_presets",
    "get_preset",
    "clear_cache",
]

YIELDVIZ_PRESET_DATA = "YIELDVIZ_PRESET_DATA"
PRESET_FILENAME = "presets.yaml"

_BUNDLED_DATA_DIR = Path(__file__).parent / "data"

_META_KEYS = ("description", "color")


@dataclass(frozen=True)
class Preset:
    name: str
    description: str
    color: str
    params: MaterialParameters

    @property
    def kind(self) -> ModelKind:
        return self.params.kind

    def to_dict(self) -> Dict[str, Any]:
        data = {"name": self.name, "description": self.description, "color": self.color}
        data.update(self.params.to_dict())
        return data


def clear_cache() -> None:
    """Clear cached catalog data.

    Call this after editing a catalog file or changing the environment.
    """
    _get_data_dirs.cache_clear()
    _load_catalog_cached.cache_clear()


@lru_cache(maxsize=None)
def _get_data_dirs() -> tuple[Path, ...]:
    """Return the directories to search, in priority order."""
    dirs: List[Path] = []

    env_path = os.environ.get(YIELDVIZ_PRESET_DATA)
    if env_path:
        sep = ";" if sys.platform == "win32" else ":"
        for p in env_path.split(sep):
            p = p.strip()
            if p:
                path = Path(p).expanduser().resolve()
                if path.is_dir():
                    dirs.append(path)
                else:
                    logger.warning("%s entry %s is not a directory", YIELDVIZ_PRESET_DATA, path)

    if _BUNDLED_DATA_DIR.is_dir():
        dirs.append(_BUNDLED_DATA_DIR)

    return tuple(dirs)


@lru_cache(maxsize=8)
def _load_catalog_cached(custom_path_str: Optional[str]) -> Dict[ModelKind, Dict[str, Preset]]:
    custom_path = Path(custom_path_str) if custom_path_str else None

    if custom_path:
        if not custom_path.exists():
            raise FileNotFoundError(f"Custom preset catalog not found: {custom_path}")
        return _load_yaml(custom_path)

    for data_dir in _get_data_dirs():
        path = data_dir / PRESET_FILENAME
        if path.exists():
            return _load_yaml(path)

    searched = [str(d) for d in _get_data_dirs()]
    raise FileNotFoundError(
        f"No {PRESET_FILENAME} found.\n"
        f"Searched directories: {searched}"
    )


def _load_yaml(path: Path) -> Dict[ModelKind, Dict[str, Preset]]:
    """Load and validate a preset catalog file."""
    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Invalid preset catalog format in {path}: expected dict at root")

    schema_version = data.get("schema_version", "1.0")
    if not isinstance(schema_version, str) or not schema_version.startswith("1."):
        raise ValueError(
            f"Unsupported schema version '{schema_version}' in {path}. "
            f"Expected version 1.x"
        )

    sections = data.get("presets")
    if not isinstance(sections, dict):
        raise ValueError(f"Preset catalog {path} missing required 'presets' section")

    catalog: Dict[ModelKind, Dict[str, Preset]] = {kind: {} for kind in ModelKind}
    for model_name, entries in sections.items():
        kind = ModelKind.parse(model_name)
        if not isinstance(entries, dict):
            raise ValueError(f"Presets for {model_name} in {path} must be a mapping")
        for name, entry in entries.items():
            if not isinstance(entry, dict):
                raise ValueError(f"Preset '{name}' in {path} must be a mapping")
            values = {k: v for k, v in entry.items() if k not in _META_KEYS}
            values["model"] = kind.value
            catalog[kind][str(name)] = Preset(
                name=str(name),
                description=str(entry.get("description", "")),
                color=str(entry.get("color", "")),
                params=params_from_dict(values),
            )

    logger.debug("loaded %d presets from %s",
                 sum(len(v) for v in catalog.values()), path)
    return catalog


def load_catalog(custom_path: Optional[Path] = None) -> Dict[ModelKind, Dict[str, Preset]]:
    """Load the preset catalog.

    Args:
        custom_path: Optional explicit path to a YAML file (overrides search)

    Returns:
        Mapping of model kind to ``{name: Preset}`` in file order.

    Raises:
        FileNotFoundError: If no catalog is found
        ValueError: If the catalog has an invalid format
    """
    custom_str = str(custom_path) if custom_path else None
    return _load_catalog_cached(custom_str)


def list_presets(
    kind: Union[ModelKind, str, None] = None,
    custom_path: Optional[Path] = None
) -> List[Preset]:
    """List presets of one model, or of all models when ``kind`` is ``None``."""
    catalog = load_catalog(custom_path)
    if kind is None:
        return [preset for kind_presets in catalog.values() for preset in kind_presets.values()]
    return list(catalog[ModelKind.parse(kind)].values())


def get_preset(
    kind: Union[ModelKind, str],
    name: str,
    custom_path: Optional[Path] = None
) -> Preset:
    """Look up a preset by name; matching ignores case.

    Raises:
        PresetNotFoundError: If no preset of that name exists for ``kind``
    """
    model = ModelKind.parse(kind)
    presets = load_catalog(custom_path)[model]
    if name in presets:
        return presets[name]
    folded = name.casefold()
    for key, preset in presets.items():
        if key.casefold() == folded:
            return preset
    raise PresetNotFoundError(
        f"Preset '{name}' not found for {model.value}.\n"
        f"Available presets: {list(presets)}"
    )
