# -*- coding: utf-8 -*-
"""Geometry engine for Mohr-Coulomb and Drucker-Prager yield surfaces.

Given material parameters, yieldviz builds the tessellated surface in
principal-stress space, its π-plane section and its meridian envelope::

    from yieldviz import MohrCoulombParams, generate_surface_mesh

    mesh = generate_surface_mesh(MohrCoulombParams(cohesion=10, friction_angle_deg=30))
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("yieldviz")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

from yieldviz.errors import InvalidParameterError, PresetNotFoundError, YieldVizError
from yieldviz.geometry_utils import Point2D, Vertex3D
from yieldviz.mesh import Mesh
from yieldviz.models import (
    generate_surface_mesh,
    get_meridian_envelope,
    get_pi_plane_section,
    model_for,
)
from yieldviz.params import (
    DruckerPragerParams,
    MaterialParameters,
    ModelKind,
    MohrCoulombParams,
    validate_parameters,
)
from yieldviz.projection import MeridianCurve
from yieldviz.settings import DEFAULT_SETTINGS, GeometrySettings, load_settings

__all__ = [
    '__version__',
    'YieldVizError',
    'InvalidParameterError',
    'PresetNotFoundError',
    'Point2D',
    'Vertex3D',
    'Mesh',
    'MeridianCurve',
    'ModelKind',
    'MohrCoulombParams',
    'DruckerPragerParams',
    'MaterialParameters',
    'validate_parameters',
    'GeometrySettings',
    'DEFAULT_SETTINGS',
    'load_settings',
    'generate_surface_mesh',
    'get_pi_plane_section',
    'get_meridian_envelope',
    'model_for',
]
