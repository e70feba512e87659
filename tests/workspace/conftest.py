"""Shared test helpers for workspace tests."""

import pytest

from aacboard.model.ir import Back, Board, Button, Grid, Navigate, Page
from aacboard.workspace import Workspace, WorkspaceState, add_board


def _make_button(id, row=0, col=0, label=None, **fields):
    return Button(id=id, row=row, col=col, label=label or id, **fields)


def _make_page(id, buttons=(), name=None, **fields):
    return Page(id=id, name=name or id, buttons=tuple(buttons), **fields)


def _make_board(pages=None, name="Test Board", rows=2, cols=2):
    if pages is None:
        pages = [_make_page("P1", [_make_button("b1")])]
    return Board(name=name, grid=Grid(rows, cols), pages=tuple(pages))


def _make_state(*boards) -> WorkspaceState:
    """A workspace state with each board added in order; the last is active."""
    state = WorkspaceState()
    for board in boards:
        state = add_board(state, board)
    return state


def _two_page_board(name="Two Pages"):
    """P1 has a navigate button to P2; P2 has a back button."""
    p1 = _make_page("P1", [_make_button("go", action=Navigate("P2")), _make_button("stay", 0, 1)])
    p2 = _make_page("P2", [_make_button("back", action=Back())])
    p3 = _make_page("P3", [_make_button("p3btn")])
    return _make_board([p1, p2, p3], name=name)


@pytest.fixture
def state():
    return _make_state(_two_page_board())


@pytest.fixture
def workspace():
    ws = Workspace()
    ws.apply(add_board, _two_page_board())
    return ws
