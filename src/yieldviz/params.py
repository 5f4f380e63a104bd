"""Material parameters for the two yield models.

:class:`MohrCoulombParams` and :class:`DruckerPragerParams` form a tagged
union: each carries a ``kind`` used by :mod:`yieldviz.models` to pick the
right generator.  The constructors only insist on finite numbers.  Range
checks for a user interface live in :func:`validate_parameters`, which the
geometry core never calls.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Tuple, Union

from yieldviz.errors import InvalidParameterError
from yieldviz.geometry_checks import CheckResult
from yieldviz.geometry_utils import deg_to_rad


class ModelKind(Enum):
    MOHR_COULOMB = "MohrCoulomb"
    DRUCKER_PRAGER = "DruckerPrager"

    @classmethod
    def parse(cls, value: Union[str, "ModelKind"]) -> "ModelKind":
        """Accept a kind, its value (``"MohrCoulomb"``), its name or a short alias."""

        if isinstance(value, cls):
            return value
        key = str(value).strip()
        for kind in cls:
            if key in (kind.value, kind.name):
                return kind
        alias = key.lower().replace('-', '').replace('_', '')
        if alias in ('mc', 'mohrcoulomb'):
            return cls.MOHR_COULOMB
        if alias in ('dp', 'druckerprager'):
            return cls.DRUCKER_PRAGER
        raise ValueError(f"unknown yield model '{value}'; expected one of {[k.value for k in cls]}")


def _finite(name: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(number):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class MohrCoulombParams:
    """Cohesion ``c`` (kPa) and friction angle ``φ`` (degrees)."""

    cohesion: float
    friction_angle_deg: float

    kind: ClassVar[ModelKind] = ModelKind.MOHR_COULOMB

    def __post_init__(self) -> None:
        object.__setattr__(self, 'cohesion', _finite('cohesion', self.cohesion))
        object.__setattr__(self, 'friction_angle_deg',
                           _finite('friction_angle_deg', self.friction_angle_deg))

    @property
    def friction_angle_rad(self) -> float:
        return deg_to_rad(self.friction_angle_deg)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'model': self.kind.value,
            'cohesion': self.cohesion,
            'frictionAngle': self.friction_angle_deg,
        }


@dataclass(frozen=True)
class DruckerPragerParams:
    """Slope ``m`` and cohesion intercept ``k_d`` (kPa) of ``q = m p + k_d``."""

    slope: float
    cohesion_intercept: float

    kind: ClassVar[ModelKind] = ModelKind.DRUCKER_PRAGER

    def __post_init__(self) -> None:
        object.__setattr__(self, 'slope', _finite('slope', self.slope))
        object.__setattr__(self, 'cohesion_intercept',
                           _finite('cohesion_intercept', self.cohesion_intercept))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'model': self.kind.value,
            'slope': self.slope,
            'cohesionIntercept': self.cohesion_intercept,
        }


MaterialParameters = Union[MohrCoulombParams, DruckerPragerParams]


def params_from_dict(data: Dict[str, Any]) -> MaterialParameters:
    """Build parameters from a preset/snapshot style mapping.

    Both the camelCase keys used in presets and snapshots
    (``frictionAngle``, ``cohesionIntercept``) and the attribute names are
    accepted.  ``model`` selects the kind.
    """

    kind = ModelKind.parse(data.get('model', ''))
    if kind is ModelKind.MOHR_COULOMB:
        return MohrCoulombParams(
            cohesion=data.get('cohesion'),
            friction_angle_deg=data.get('frictionAngle', data.get('friction_angle_deg')),
        )
    return DruckerPragerParams(
        slope=data.get('slope'),
        cohesion_intercept=data.get('cohesionIntercept', data.get('cohesion_intercept')),
    )


# UI slider ranges
PARAMETER_RANGES: Dict[str, Tuple[float, float]] = {
    'cohesion': (0.0, 100.0),
    'friction_angle_deg': (0.0, 45.0),
    'slope': (0.0, 2.0),
    'cohesion_intercept': (0.0, 50.0),
}


def validate_parameters(params: MaterialParameters) -> CheckResult:
    """Check ``params`` against the slider ranges of the visualizer.

    Out-of-range values are reported as warnings; the geometry functions
    accept them anyway and degrade to empty or degenerate shapes.
    """

    if isinstance(params, MohrCoulombParams):
        names = ('cohesion', 'friction_angle_deg')
    elif isinstance(params, DruckerPragerParams):
        names = ('slope', 'cohesion_intercept')
    else:
        return CheckResult(False, [f'unsupported parameter type {type(params).__name__}'])

    warnings = []
    for name in names:
        value = getattr(params, name)
        lower, upper = PARAMETER_RANGES[name]
        if value < lower:
            warnings.append(f'{name} must be >= {lower:g}')
        elif value > upper:
            warnings.append(f'{name} must be <= {upper:g}')
    return CheckResult(not warnings, warnings)


__all__ = [
    'ModelKind',
    'MohrCoulombParams',
    'DruckerPragerParams',
    'MaterialParameters',
    'params_from_dict',
    'PARAMETER_RANGES',
    'validate_parameters',
]
