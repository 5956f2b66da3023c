import json

import pytest

from dungeon_levelgen import cli
from dungeon_levelgen.pipeline import GenerationSettings, save_settings

SMALL_ARGS = ['--seed', '5', '--width', '40', '--height', '40', '--rooms', '6']


def test_parser_defaults():
    ns = cli.build_parser().parse_args([])
    assert ns.format == 'ascii'
    assert ns.seed is None
    assert ns.output is None
    assert not ns.path


def test_settings_overrides():
    ns = cli.build_parser().parse_args(SMALL_ARGS)
    settings = cli.settings_from_args(ns)
    assert (settings.seed, settings.grid_width, settings.grid_height, settings.room_count) == (5, 40, 40, 6)
    # Untouched values keep their defaults
    assert settings.max_room_attempts == GenerationSettings().max_room_attempts


def test_settings_file_with_override(tmp_path):
    path = save_settings(GenerationSettings(seed=9, room_count=3), tmp_path / "s.json")
    ns = cli.build_parser().parse_args(['--settings', str(path), '--rooms', '4'])
    settings = cli.settings_from_args(ns)
    assert settings.seed == 9
    assert settings.room_count == 4


def test_ascii_output(capsys):
    code = cli.main(SMALL_ARGS + ['--path'])
    assert code == 0
    out = capsys.readouterr().out
    lines = out.rstrip('\n').splitlines()
    assert len(lines) == 40
    assert '@' in out


def test_json_output_to_file(tmp_path):
    target = tmp_path / "out" / "dungeon.json"
    code = cli.main(SMALL_ARGS + ['--format', 'json', '--output', str(target)])
    assert code == 0
    data = json.loads(target.read_text(encoding='utf-8'))
    assert data['metadata']['seed'] == 5


def test_dot_output(capsys):
    assert cli.main(SMALL_ARGS + ['--format', 'dot']) == 0
    assert 'graph DungeonLayout' in capsys.readouterr().out


def test_invalid_settings_exit_code(capsys):
    code = cli.main(['--width', '10', '--height', '10'])
    assert code == 1
    assert 'error:' in capsys.readouterr().err


def test_bad_settings_file(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("[]", encoding='utf-8')
    assert cli.main(['--settings', str(path)]) == 2
    assert 'error:' in capsys.readouterr().err


def test_unknown_format_rejected():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(['--format', 'png'])
