"""Uniform entry points over both yield models.

Each :class:`ModelKind` maps to a :class:`YieldModel` holding its three
generator functions, so callers never branch on the model themselves::

    from yieldviz import MohrCoulombParams, generate_surface_mesh

    mesh = generate_surface_mesh(MohrCoulombParams(cohesion=10, friction_angle_deg=30))

All functions are pure: they keep no state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Union

from yieldviz import drucker_prager, mohr_coulomb
from yieldviz.mesh import Mesh
from yieldviz.params import DruckerPragerParams, MaterialParameters, ModelKind, MohrCoulombParams
from yieldviz.projection import MeridianEnvelope, Polyline2D
from yieldviz.settings import GeometrySettings


@dataclass(frozen=True)
class YieldModel:
    kind: ModelKind
    params_type: type
    surface_mesh: Callable[..., Mesh]
    pi_plane_section: Callable[..., Polyline2D]
    meridian_envelope: Callable[..., MeridianEnvelope]


MODELS: Dict[ModelKind, YieldModel] = {
    ModelKind.MOHR_COULOMB: YieldModel(
        kind=ModelKind.MOHR_COULOMB,
        params_type=MohrCoulombParams,
        surface_mesh=mohr_coulomb.surface_mesh,
        pi_plane_section=mohr_coulomb.pi_plane_section,
        meridian_envelope=mohr_coulomb.meridian_envelope,
    ),
    ModelKind.DRUCKER_PRAGER: YieldModel(
        kind=ModelKind.DRUCKER_PRAGER,
        params_type=DruckerPragerParams,
        surface_mesh=drucker_prager.surface_mesh,
        pi_plane_section=drucker_prager.pi_plane_section,
        meridian_envelope=drucker_prager.meridian_envelope,
    ),
}


def model_for(kind: Union[ModelKind, str, MaterialParameters]) -> YieldModel:
    """Look up the model for a kind, a kind name or a parameter object."""

    if isinstance(kind, (MohrCoulombParams, DruckerPragerParams)):
        return MODELS[kind.kind]
    return MODELS[ModelKind.parse(kind)]


def _model_of(params: MaterialParameters) -> YieldModel:
    if not isinstance(params, (MohrCoulombParams, DruckerPragerParams)):
        raise TypeError(f"expected MohrCoulombParams or DruckerPragerParams, "
                        f"got {type(params).__name__}")
    return MODELS[params.kind]


def generate_surface_mesh(params: MaterialParameters,
                          settings: Optional[GeometrySettings] = None) -> Mesh:
    return _model_of(params).surface_mesh(params, settings)


def get_pi_plane_section(params: MaterialParameters,
                         p0: Optional[float] = None,
                         settings: Optional[GeometrySettings] = None) -> Polyline2D:
    """π-plane section at mean stress ``p0`` (default ``settings.pi_plane_p``)."""

    return _model_of(params).pi_plane_section(params, p0, settings)


def get_meridian_envelope(params: MaterialParameters,
                          p_max: Optional[float] = None,
                          settings: Optional[GeometrySettings] = None,
                          *,
                          keep_gaps: bool = False) -> MeridianEnvelope:
    """Meridian curves up to ``p_max``.

    Mohr-Coulomb returns ``compression`` and ``extension`` curves,
    Drucker-Prager a single ``envelope`` curve.
    """

    return _model_of(params).meridian_envelope(params, p_max, settings, keep_gaps=keep_gaps)


__all__ = [
    'YieldModel',
    'MODELS',
    'model_for',
    'generate_surface_mesh',
    'get_pi_plane_section',
    'get_meridian_envelope',
]
