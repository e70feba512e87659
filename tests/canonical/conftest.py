"""Shared fixtures for canonical record tests."""

import pytest

from aacboard.model.ir import DEFAULT_COVER, Board, Button, Grid, Navigate, Page, PlayVideo, VideoPlayer


def _make_button(id, row=0, col=0, label=None, **fields):
    return Button(id=id, row=row, col=col, label=label or id, **fields)


@pytest.fixture
def board():
    """Two pages with shared symbols, a video button and a video player."""
    home = Page(
        id="home",
        name="Home",
        buttons=(
            _make_button("eat", 0, 0, label="Eat", symbol_path="/symbols/mulberry/eat.svg", color="red"),
            _make_button("more", 0, 1, label="More", symbol_path="/symbols/mulberry/eat.svg", spoken_text="more please"),
            _make_button("go", 1, 0, label="Drinks", icon_ref="fas fa-glass", action=Navigate("drinks")),
            _make_button("song", 1, 1, label="Song", action=PlayVideo("abc123", "Wheels")),
        ),
    )
    drinks = Page(
        id="drinks",
        name="Drinks",
        layout=Grid(3, 3),
        buttons=(_make_button("water", 2, 2, label="Water", symbol_path="/symbols/mulberry/water.svg"),),
        video_players=(VideoPlayer("player", 0, 0, video_id="abc123", title="Wheels", row_span=2, col_span=2),),
    )
    return Board(name="Snacks", grid=Grid(2, 2), pages=(home, drinks), cover_image=DEFAULT_COVER)
