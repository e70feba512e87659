"""Shared fixtures for packager tests."""

import io
import json
import zipfile

import pytest

from aacboard.canonical import to_canonical
from aacboard.errors import AssetError
from aacboard.model.ir import (
    DEFAULT_COVER,
    Back,
    Board,
    Bookmark,
    Button,
    Grid,
    Home,
    Link,
    Navigate,
    OpenUrl,
    Page,
    PlayVideo,
    VideoPlayer,
)


def _make_button(id, row, col, label, **fields):
    return Button(id=id, row=row, col=col, label=label, **fields)


def _make_board(name="Snack Time"):
    """Two pages covering every action kind, shared and unmapped symbols and a video player."""
    home = Page(
        id="home",
        name="Home",
        buttons=(
            _make_button("eat", 0, 0, "Eat", symbol_path="/symbols/mulberry/eat.svg", color="red"),
            _make_button("go", 0, 1, "Drinks", icon_ref="fas fa-glass", action=Navigate("drinks")),
            _make_button("song", 0, 2, "Song", action=PlayVideo("abc123", "Wheels")),
            _make_button("web", 1, 0, "Website", action=OpenUrl("https://example.com")),
            _make_button("other", 1, 1, "Other", action=Link("other-board")),
            _make_button("mark", 1, 2, "Mark", action=Bookmark()),
        ),
    )
    drinks = Page(
        id="drinks",
        name="Drinks",
        layout=Grid(3, 3),
        buttons=(
            _make_button("water", 0, 0, "Water", symbol_path="/symbols/mulberry/water.svg", self_closing=True),
            _make_button("zebra", 0, 1, "Zebra", symbol_path="/symbols/mulberry/zebra.svg"),
            _make_button("back", 0, 2, "Back", action=Back()),
            _make_button("home-btn", 1, 0, "Home", action=Home()),
        ),
        video_players=(VideoPlayer("player", 1, 1, video_id="abc123", title="Wheels", row_span=2, col_span=2),),
    )
    return Board(name=name, grid=Grid(2, 3), pages=(home, drinks), cover_image=DEFAULT_COVER)


def _read_zip(data: bytes) -> dict[str, bytes]:
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


def _read_json(files: dict[str, bytes], name: str):
    return json.loads(files[name])


class FakeFetcher:
    """Records requested URLs; returns fixed bytes or fails with AssetError."""

    def __init__(self, fail=False):
        self.fail = fail
        self.urls = []

    async def __call__(self, url):
        self.urls.append(url)
        if self.fail:
            raise AssetError(url, "HTTP 404")
        return b"\x89PNG fake image"


@pytest.fixture
def board():
    return _make_board()


@pytest.fixture
def record(board):
    return to_canonical(board, authors=["Tester"])


@pytest.fixture
def fetcher():
    return FakeFetcher()


@pytest.fixture
def failing_fetcher():
    return FakeFetcher(fail=True)
