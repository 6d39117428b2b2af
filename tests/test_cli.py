"""Unit tests for CLI argument parsing and commands."""

import json

import pytest

from golfmatch.cli import create_parser, main, resolve_command_name
from golfmatch.config.logging_filters import correlation_id

def test_global_options():
    """Test global CLI options."""
    parser = create_parser()

    args = parser.parse_args(['--dev', 'list', 'courses'])
    assert args.dev is True

    args = parser.parse_args(['-v', 'list', 'courses'])
    assert args.verbose is True

    args = parser.parse_args(['--log-file', 'test.log', '--config-dir', 'conf', 'list', 'courses'])
    assert args.log_file == 'test.log'
    assert args.config_dir == 'conf'

def test_command_is_required():
    with pytest.raises(SystemExit):
        create_parser().parse_args([])

def test_list_command():
    args = create_parser().parse_args(['list', 'courses', '--search', 'madrid'])

    assert args.command == 'list'
    assert args.list_subcommand == 'courses'
    assert args.search == 'madrid'
    assert args.format == 'text'
    assert resolve_command_name(args) == 'courses'

def test_get_command():
    args = create_parser().parse_args(['get', 'course', '10', '--format', 'json'])
    assert args.course_id == '10'
    assert args.format == 'json'
    assert resolve_command_name(args) == 'course'

def test_search_command_requires_bounds():
    with pytest.raises(SystemExit):
        create_parser().parse_args(['search', 'area', '--south', '40'])

    args = create_parser().parse_args([
        'search', 'area', '--south', '40', '--west', '-4', '--north', '41', '--east', '-3', '--only-new'
    ])
    assert (args.south, args.west, args.north, args.east) == (40.0, -4.0, 41.0, -3.0)
    assert args.only_new is True

def test_top_level_commands():
    args = create_parser().parse_args(['stats', '--scores', '85', '90'])
    assert args.scores == [85, 90]
    assert resolve_command_name(args) == 'stats'

    args = create_parser().parse_args(['serve', '--port', '8080'])
    assert args.port == 8080

def test_invalid_format():
    with pytest.raises(SystemExit):
        create_parser().parse_args(['list', 'courses', '--format', 'xml'])

def test_list_courses_json(capsys):
    assert main(['list', 'courses', '--format', 'json']) == 0

    courses = json.loads(capsys.readouterr().out)
    assert len(courses) == 10

def test_list_courses_search_text(capsys):
    assert main(['list', 'courses', '--search', 'Encín']) == 0

    out = capsys.readouterr().out
    assert 'El Encín Golf' in out
    assert 'Real Club Valderrama' not in out
    assert '1 courses' in out

def test_get_course(capsys):
    assert main(['get', 'course', '10']) == 0
    out = capsys.readouterr().out
    assert 'El Encín Golf' in out
    assert 'Alcalá de Henares, Madrid' in out

def test_get_unknown_course(capsys):
    assert main(['get', 'course', '999']) == 1
    assert 'Course 999 not found' in capsys.readouterr().err

def test_stats_json(capsys):
    assert main(['stats', '--scores', '85', '90', '80', '--format', 'json']) == 0

    stats = json.loads(capsys.readouterr().out)
    assert stats == {'handicap': 13.0, 'average_score': 85, 'best_score': 80, 'rounds_played': 3}

def test_stats_with_par(capsys):
    assert main(['stats', '--scores', '30', '29', '--par', '27', '--format', 'json']) == 0
    assert json.loads(capsys.readouterr().out)['handicap'] == 2.5

def test_stats_par_count_mismatch():
    assert main(['stats', '--scores', '85', '90', '80', '--par', '72', '71']) == 1

def test_stats_rejects_non_positive_scores(capsys):
    assert main(['stats', '--scores', '85', '0']) == 2
    assert 'Invalid value for --scores' in capsys.readouterr().err

def test_search_area_validates_bounds(capsys):
    assert main(['search', 'area', '--south', '95', '--west', '-4', '--north', '41', '--east', '-3']) == 2

def test_check_health(capsys):
    assert main(['check', 'health']) == 0
    assert 'Overall: healthy' in capsys.readouterr().out

def test_invalid_configuration(tmp_path, capsys):
    (tmp_path / 'config.yaml').write_text("overpass:\n  url: not-a-url\n", encoding='utf-8')

    assert main(['--config-dir', str(tmp_path), 'list', 'courses']) == 1
    assert 'Invalid configuration' in capsys.readouterr().err

def test_main_runs_with_correlation_id(monkeypatch):
    seen = []
    monkeypatch.setattr('golfmatch.cli.validate_config', lambda config: seen.append(correlation_id.get()))
    token = correlation_id.set('')
    try:
        assert main(['stats', '--scores', '85', '90']) == 0
        assert seen and seen[0]
        assert correlation_id.get() == ''
    finally:
        correlation_id.reset(token)
