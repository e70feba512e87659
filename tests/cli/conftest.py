"""Shared fixtures for CLI tests."""

import json
import os

import pytest

BOARD = {
    "name": "Test Board",
    "grid": {"rows": 2, "cols": 2},
    "pages": [
        {
            "id": "P1",
            "name": "Home",
            "buttons": [
                {"id": "go", "row": 0, "col": 0, "label": "Drinks", "action": {"type": "navigate", "toPageId": "P2"}},
                {"id": "eat", "row": 0, "col": 1, "label": "Eat", "symbolPath": "/symbols/mulberry/eat.svg"},
            ],
        },
        {
            "id": "P2",
            "name": "Drinks",
            "buttons": [{"id": "back", "row": 0, "col": 0, "label": "Back", "action": {"type": "back"}}],
        },
    ],
}


def _load(path):
    return json.loads(path.read_text())


@pytest.fixture
def board_file(tmp_path):
    """A valid two-page board document."""
    path = tmp_path / "board.json"
    path.write_text(json.dumps(BOARD))
    return path


@pytest.fixture
def invalid_board_file(tmp_path):
    """A board whose navigate button points at a missing page."""
    data = json.loads(json.dumps(BOARD))
    data["pages"][0]["buttons"][0]["action"]["toPageId"] = "missing-page"
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps(data))
    return path


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user config and environment out of CLI runs."""
    monkeypatch.chdir(tmp_path)
    for name in list(os.environ):
        if name.startswith("AACBOARD_"):
            monkeypatch.delenv(name)
