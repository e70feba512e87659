"""Shared test helpers for model tests."""

import pytest

from aacboard.model.ir import Board, Button, Grid, Page


def _make_button(id, row=0, col=0, label=None, **fields):
    """Helper to build a Button; label defaults to the id."""
    return Button(id=id, row=row, col=col, label=label or id, **fields)


def _make_page(id, buttons=(), name=None, **fields):
    """Helper to build a Page; name defaults to the id."""
    return Page(id=id, name=name if name is not None else id, buttons=tuple(buttons), **fields)


def _make_board(pages=None, name="Test Board", rows=2, cols=2, **fields):
    """Helper to build a Board with one empty page unless pages are given."""
    if pages is None:
        pages = [_make_page("P1", [_make_button("b1")])]
    return Board(name=name, grid=Grid(rows, cols), pages=tuple(pages), **fields)


@pytest.fixture
def board_document():
    """A two-page board document in the camelCase interchange shape."""
    return {
        "name": "Snack Time",
        "grid": {"rows": 2, "cols": 3},
        "pages": [
            {
                "id": "home",
                "name": "Home",
                "buttons": [
                    {"id": "eat", "row": 0, "col": 0, "label": "Eat", "color": "#FF0000",
                     "symbolPath": "/symbols/mulberry/eat.svg", "action": {"type": "speak", "text": "I want to eat"}},
                    {"id": "go-drinks", "row": 0, "col": 1, "label": "Drinks",
                     "action": {"type": "navigate", "toPageId": "drinks"}},
                    {"id": "song", "row": 1, "col": 0, "label": "Song",
                     "action": {"type": "youtube", "videoId": "abc123", "title": "Wheels"}},
                ],
            },
            {
                "id": "drinks",
                "name": "Drinks",
                "layout": {"rows": 2, "cols": 2},
                "buttons": [
                    {"id": "water", "row": 0, "col": 0, "label": "Water", "selfClosing": True},
                    {"id": "back", "row": 1, "col": 1, "label": "Back", "action": {"type": "back"}},
                ],
            },
        ],
    }
