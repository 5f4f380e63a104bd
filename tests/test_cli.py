import json
import logging

import pytest

from yieldviz.cli import build_parser, main
from yieldviz.logging_config import PACKAGE_LOGGER, setup_logging
from yieldviz.presets import YIELDVIZ_PRESET_DATA, clear_cache
from yieldviz.settings import YIELDVIZ_CONFIG


@pytest.fixture(autouse=True)
def _reset_environment(monkeypatch):
    monkeypatch.delenv(YIELDVIZ_CONFIG, raising=False)
    monkeypatch.delenv(YIELDVIZ_PRESET_DATA, raising=False)
    clear_cache()
    yield
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    clear_cache()


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_mohr_coulomb_summary(capsys):
    assert main(['mc', '10', '30']) == 0
    out = capsys.readouterr().out
    assert 'model: MohrCoulomb' in out
    assert 'mesh: 7 vertices, 6 triangles' in out
    assert 'pi-plane section at p=50: 6 points' in out
    assert 'meridian compression: 134 points, (17.32, 0.00) -> (150.00, 200.78)' in out


def test_drucker_prager_preset_summary(capsys):
    assert main(['dp', '--preset', 'Von Mises (m=0)']) == 0
    out = capsys.readouterr().out
    assert 'mesh: 384 vertices, 764 triangles' in out
    assert 'meridian envelope: 151 points' in out


def test_empty_geometry_reported(capsys):
    assert main(['dp', '0', '-5']) == 0
    out = capsys.readouterr().out
    assert 'meridian envelope: empty' in out
    assert 'pi-plane section at p=50: 0 points' in out


def test_overrides(capsys):
    assert main(['mc', '15', '0', '--p0', '80', '--p-max', '200']) == 0
    out = capsys.readouterr().out
    assert 'pi-plane section at p=80' in out
    assert '-> (200.00, 30.00)' in out


def test_config_file(tmp_path, capsys):
    config = tmp_path / 'geometry.yaml'
    config.write_text('dp_rings: 3\ndp_sectors: 6\n')
    assert main(['dp', '0.6', '10', '--config', str(config)]) == 0
    assert 'mesh: 24 vertices' in capsys.readouterr().out


def test_export_all(tmp_path, capsys):
    out_dir = tmp_path / 'exports'
    assert main(['mc', '10', '30', '--format', 'all', '--out', str(out_dir)]) == 0
    for name in ('mohrcoulomb.json', 'mohrcoulomb_meridian.csv',
                 'mohrcoulomb.stl', 'mohrcoulomb_sections.dxf'):
        assert (out_dir / name).exists()
    doc = json.loads((out_dir / 'mohrcoulomb.json').read_text(encoding='utf-8'))
    assert doc['parameters']['cohesion'] == 10.0
    assert 'wrote' in capsys.readouterr().out


def test_export_refuses_overwrite(tmp_path, capsys):
    args = ['dp', '0.6', '10', '--format', 'csv', '--out', str(tmp_path)]
    assert main(args) == 0
    assert main(args) == 1
    assert 'already exists' in capsys.readouterr().err
    assert main(args + ['--overwrite']) == 0


def test_empty_mesh_skips_stl(tmp_path):
    assert main(['mc', '-1000', '10', '--format', 'stl', '--out', str(tmp_path)]) == 0
    assert not (tmp_path / 'mohrcoulomb.stl').exists()


@pytest.mark.parametrize('argv', [
    ['mc', '10'],
    ['mc', '10', '30', '--preset', 'Dense Sand'],
    ['dp', '--preset', 'Granite'],
    ['mc', 'nan', '30'],
])
def test_usage_errors(argv, capsys):
    assert main(argv) == 2
    assert capsys.readouterr().err.startswith('error:')


def test_list_presets(capsys):
    assert main(['presets']) == 0
    out = capsys.readouterr().out
    assert 'Dense Sand' in out
    assert 'Von Mises (m=0)' in out


def test_list_presets_for_one_model(capsys):
    assert main(['presets', 'dp']) == 0
    out = capsys.readouterr().out
    assert 'Cohesive Material' in out
    assert 'Soft Clay' not in out


def test_setup_logging_handlers(tmp_path):
    log_file = tmp_path / 'run.log'
    logger = setup_logging(logging.DEBUG, str(log_file))
    assert logger.name == PACKAGE_LOGGER
    assert len(logger.handlers) == 2
    logging.getLogger('yieldviz.test').info('hello log')
    for handler in logger.handlers:
        handler.flush()
    assert 'yieldviz.test - INFO - hello log' in log_file.read_text(encoding='utf-8')

    # calling again replaces the handlers instead of stacking them
    assert len(setup_logging().handlers) == 1
