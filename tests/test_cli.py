"""Tests for the command line entry point."""

import json
from unittest.mock import patch

import pytest

from manpager.__main__ import build_parser, main, man_command
from manpager.errors import TerminalSizeError


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Point the settings file at a temp dir with colour off and no user pages."""
    settings_file = tmp_path / "settings.json"
    settings_file.write_text(json.dumps({
        "color": "never",
        "pages_dir": str(tmp_path / "pages"),
    }), encoding='utf-8')
    monkeypatch.setenv("MANPAGER_CONFIG", str(settings_file))
    return settings_file


def test_parser_defaults():
    args = build_parser().parse_args([])
    assert args.topic is None
    assert not args.list
    assert args.pages_dir == []


def test_version(capsys):
    assert main(["--version"]) == 0
    out = capsys.readouterr().out
    assert "Genesis Manual System v" in out


def test_help(capsys):
    assert main(["-h"]) == 0
    out = capsys.readouterr().out
    assert "Usage:" in out
    assert "manpager --list" in out


@pytest.mark.parametrize("argv", [["--list"], ["-l"], []])
def test_list_topics(capsys, argv):
    assert main(argv) == 0
    out = capsys.readouterr().out
    assert "Available manual pages:" in out
    for topic in ("genesis", "init", "dev"):
        assert topic in out
    assert "Initialize a new Genesis project" in out


def test_unknown_topic(capsys):
    with patch('manpager.pager.ManualPager') as pager_class:
        assert main(["nosuch"]) == 1
    pager_class.assert_not_called()
    out = capsys.readouterr().out
    assert "No manual entry for 'nosuch'" in out
    assert "genesis" in out


def test_known_topic_opens_pager():
    with patch('manpager.pager.ManualPager') as pager_class:
        assert main(["INIT"]) == 0
    page = pager_class.return_value.display.call_args[0][0]
    assert page.command == "genesis init"
    assert pager_class.call_args[1]['settings'].color == "never"


def test_pager_error_exits_nonzero(capsys):
    with patch('manpager.pager.ManualPager') as pager_class:
        pager_class.return_value.display.side_effect = TerminalSizeError("not a terminal")
        assert main(["genesis"]) == 1
    assert "not a terminal" in capsys.readouterr().err


def test_extra_pages_dir(tmp_path, capsys):
    extra = tmp_path / "extra"
    extra.mkdir()
    (extra / "deploy.json").write_text(json.dumps({
        "command": "genesis deploy",
        "synopsis": "genesis deploy",
        "description": ["Generate nginx and systemd configs."],
    }), encoding='utf-8')
    assert main(["--pages-dir", str(extra), "--list"]) == 0
    assert "Generate nginx and systemd configs." in capsys.readouterr().out


def test_configured_pages_dir(isolated_settings, capsys):
    pages = isolated_settings.parent / "pages"
    pages.mkdir()
    (pages / "db.json").write_text(json.dumps({
        "command": "genesis db",
        "synopsis": "genesis db",
        "description": ["Setup MariaDB."],
    }), encoding='utf-8')
    with patch('manpager.pager.ManualPager') as pager_class:
        assert main(["db"]) == 0
    assert pager_class.return_value.display.call_args[0][0].command == "genesis db"


def test_man_command_defaults_to_genesis():
    with patch('manpager.pager.ManualPager') as pager_class:
        assert man_command([]) == 0
    assert pager_class.return_value.display.call_args[0][0].command == "genesis"


def test_man_command_unknown_topic():
    assert man_command(["zzz"]) == 1
