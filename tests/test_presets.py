import pytest

from yieldviz.errors import PresetNotFoundError
from yieldviz.params import DruckerPragerParams, ModelKind, MohrCoulombParams
from yieldviz.presets import (
    YIELDVIZ_PRESET_DATA,
    Preset,
    clear_cache,
    get_preset,
    list_presets,
    load_catalog,
)

CUSTOM_CATALOG = """\
schema_version: "1.2"
presets:
  MohrCoulomb:
    Lab Sample:
      description: Triaxial test specimen
      color: "#123456"
      cohesion: 12
      frictionAngle: 28
"""


@pytest.fixture(autouse=True)
def _fresh_catalog(monkeypatch):
    monkeypatch.delenv(YIELDVIZ_PRESET_DATA, raising=False)
    clear_cache()
    yield
    clear_cache()


def test_bundled_mohr_coulomb_presets():
    names = [p.name for p in list_presets(ModelKind.MOHR_COULOMB)]
    assert names == ['Soft Clay', 'Medium Clay', 'Dense Sand', 'Cohesive Soil', 'Rock Material']


def test_bundled_drucker_prager_presets():
    names = [p.name for p in list_presets('dp')]
    assert names == ['Low Friction', 'Moderate Friction', 'High Friction',
                     'Cohesive Material', 'Von Mises (m=0)']


def test_list_all_presets():
    assert len(list_presets()) == 10


def test_get_preset():
    preset = get_preset('MohrCoulomb', 'Dense Sand')
    assert isinstance(preset, Preset)
    assert preset.params == MohrCoulombParams(cohesion=0.0, friction_angle_deg=38.0)
    assert preset.color == '#f59e0b'
    assert preset.description == 'Dense granular material with high friction'
    assert preset.kind is ModelKind.MOHR_COULOMB


def test_get_preset_ignores_case():
    preset = get_preset('dp', 'von mises (m=0)')
    assert preset.params == DruckerPragerParams(slope=0.0, cohesion_intercept=20.0)


def test_preset_to_dict():
    data = get_preset('dp', 'High Friction').to_dict()
    assert data == {
        'name': 'High Friction',
        'description': 'Dense granular material',
        'color': '#f59e0b',
        'model': 'DruckerPrager',
        'slope': 1.2,
        'cohesionIntercept': 5.0,
    }


def test_unknown_preset():
    with pytest.raises(PresetNotFoundError, match='Granite'):
        get_preset('mc', 'Granite')
    # also a KeyError for dict-style callers
    with pytest.raises(KeyError):
        get_preset('mc', 'Granite')


def test_custom_path(tmp_path):
    path = tmp_path / 'mine.yaml'
    path.write_text(CUSTOM_CATALOG)
    catalog = load_catalog(path)
    assert list(catalog[ModelKind.MOHR_COULOMB]) == ['Lab Sample']
    assert catalog[ModelKind.DRUCKER_PRAGER] == {}
    preset = get_preset('mc', 'Lab Sample', custom_path=path)
    assert preset.params.cohesion == 12.0


def test_missing_custom_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_catalog(tmp_path / 'missing.yaml')


def test_env_directory_overrides_bundled(tmp_path, monkeypatch):
    (tmp_path / 'presets.yaml').write_text(CUSTOM_CATALOG)
    monkeypatch.setenv(YIELDVIZ_PRESET_DATA, str(tmp_path))
    clear_cache()
    assert [p.name for p in list_presets('mc')] == ['Lab Sample']


def test_env_directory_without_catalog_falls_back(tmp_path, monkeypatch):
    monkeypatch.setenv(YIELDVIZ_PRESET_DATA, str(tmp_path))
    clear_cache()
    assert len(list_presets('mc')) == 5


def test_unsupported_schema(tmp_path):
    path = tmp_path / 'v2.yaml'
    path.write_text('schema_version: "2.0"\npresets: {}\n')
    with pytest.raises(ValueError, match='Unsupported schema version'):
        load_catalog(path)


def test_missing_presets_section(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('schema_version: "1.0"\n')
    with pytest.raises(ValueError, match="missing required 'presets'"):
        load_catalog(path)
