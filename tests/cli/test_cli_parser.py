"""Tests for argument parsing and the entry point."""

import sys

import pytest

from aacboard.__main__ import main
from aacboard.cli import build_parser
from aacboard.cli.board import validate_board
from aacboard.cli.button import button_set
from aacboard.cli.export import export_file


def test_parse_validate():
    args = build_parser().parse_args(["validate", "board.json", "--json"])
    assert args.func is validate_board
    assert args.json is True
    assert args.file == "board.json"


def test_parse_button_set_flags():
    args = build_parser().parse_args(["button", "set", "board.json", "eat", "--no-self-closing", "--home"])
    assert args.func is button_set
    assert args.self_closing is False
    assert args.home is True
    assert args.row is None


def test_button_actions_are_exclusive(capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["button", "set", "board.json", "eat", "--back", "--home"])


def test_parse_export_upload():
    args = build_parser().parse_args(["export", "board.json", "--format", "obz", "--upload"])
    assert args.func is export_file
    assert args.upload is True


def test_export_format_choices(capsys):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["export", "board.json", "--format", "boardmaker"])


def test_main_without_command(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["aacboard"])
    with pytest.raises(SystemExit, match="1"):
        main()
    assert "usage: aacboard" in capsys.readouterr().out


def test_main_runs_handler(board_file, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["aacboard", "validate", str(board_file)])
    with pytest.raises(SystemExit) as exc_info:
        main()
    assert exc_info.value.code == 0
    assert "is valid" in capsys.readouterr().out
