import math

import pytest

from yieldviz.errors import InvalidParameterError, YieldVizError
from yieldviz.params import (
    DruckerPragerParams,
    ModelKind,
    MohrCoulombParams,
    params_from_dict,
    validate_parameters,
)


@pytest.mark.parametrize('value, kind', [
    ('MohrCoulomb', ModelKind.MOHR_COULOMB),
    ('MOHR_COULOMB', ModelKind.MOHR_COULOMB),
    ('mc', ModelKind.MOHR_COULOMB),
    ('Mohr-Coulomb', ModelKind.MOHR_COULOMB),
    ('DP', ModelKind.DRUCKER_PRAGER),
    ('drucker_prager', ModelKind.DRUCKER_PRAGER),
    (ModelKind.DRUCKER_PRAGER, ModelKind.DRUCKER_PRAGER),
])
def test_model_kind_parse(value, kind):
    assert ModelKind.parse(value) is kind


def test_model_kind_parse_unknown():
    with pytest.raises(ValueError, match='unknown yield model'):
        ModelKind.parse('hoek-brown')


def test_mohr_coulomb_params():
    params = MohrCoulombParams(cohesion=10, friction_angle_deg='30')
    assert params.friction_angle_deg == 30.0
    assert params.friction_angle_rad == pytest.approx(math.pi / 6)
    assert params.kind is ModelKind.MOHR_COULOMB
    assert params.to_dict() == {'model': 'MohrCoulomb', 'cohesion': 10.0, 'frictionAngle': 30.0}


def test_drucker_prager_params():
    params = DruckerPragerParams(slope=0.6, cohesion_intercept=-10)
    assert params.kind is ModelKind.DRUCKER_PRAGER
    assert params.to_dict() == {'model': 'DruckerPrager', 'slope': 0.6, 'cohesionIntercept': -10.0}


@pytest.mark.parametrize('bad', [math.nan, math.inf, -math.inf, None, 'abc'])
def test_non_finite_parameters_rejected(bad):
    with pytest.raises(InvalidParameterError):
        MohrCoulombParams(cohesion=bad, friction_angle_deg=30.0)
    with pytest.raises(YieldVizError):
        DruckerPragerParams(slope=0.5, cohesion_intercept=bad)


def test_invalid_parameter_error_is_value_error():
    with pytest.raises(ValueError):
        DruckerPragerParams(slope=math.nan, cohesion_intercept=0.0)


def test_out_of_range_values_accepted():
    params = MohrCoulombParams(cohesion=-50.0, friction_angle_deg=89.0)
    assert params.cohesion == -50.0


def test_params_are_immutable():
    params = MohrCoulombParams(cohesion=10.0, friction_angle_deg=30.0)
    with pytest.raises(AttributeError):
        params.cohesion = 5.0


class TestParamsFromDict:

    def test_camel_case_keys(self):
        params = params_from_dict({'model': 'MohrCoulomb', 'cohesion': 20, 'frictionAngle': 25})
        assert params == MohrCoulombParams(cohesion=20.0, friction_angle_deg=25.0)

    def test_attribute_keys(self):
        params = params_from_dict({'model': 'dp', 'slope': 0.4, 'cohesion_intercept': 25})
        assert params == DruckerPragerParams(slope=0.4, cohesion_intercept=25.0)

    def test_round_trip_through_dict(self):
        params = DruckerPragerParams(slope=1.2, cohesion_intercept=5.0)
        assert params_from_dict(params.to_dict()) == params

    def test_missing_value(self):
        with pytest.raises(InvalidParameterError):
            params_from_dict({'model': 'MohrCoulomb', 'cohesion': 20})

    def test_missing_model(self):
        with pytest.raises(ValueError):
            params_from_dict({'cohesion': 20, 'frictionAngle': 25})


class TestValidateParameters:

    def test_in_range(self):
        result = validate_parameters(MohrCoulombParams(cohesion=50.0, friction_angle_deg=45.0))
        assert result.ok
        assert result.warnings == []

    def test_out_of_range_mohr_coulomb(self):
        result = validate_parameters(MohrCoulombParams(cohesion=-1.0, friction_angle_deg=60.0))
        assert not result.ok
        assert result.warnings == ['cohesion must be >= 0', 'friction_angle_deg must be <= 45']

    def test_out_of_range_drucker_prager(self):
        result = validate_parameters(DruckerPragerParams(slope=2.5, cohesion_intercept=-5.0))
        assert result.warnings == ['slope must be <= 2', 'cohesion_intercept must be >= 0']

    def test_unsupported_type(self):
        result = validate_parameters({'cohesion': 1})
        assert not result.ok
        assert 'unsupported parameter type dict' in result.warnings[0]
