"""Board intermediate representation.

Every type here is a frozen dataclass; edits produce new values with
``dataclasses.replace`` so workspace snapshots can share structure safely.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

MIN_GRID = 1
MAX_GRID = 25


@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int


# --- Actions ---


@dataclass(frozen=True)
class Speak:
    text: str


@dataclass(frozen=True)
class Navigate:
    """Jump to another page of the same board."""

    to_page_id: str


@dataclass(frozen=True)
class Link:
    """Open another board (or, at runtime, a page of this one)."""

    to_board_id: str


@dataclass(frozen=True)
class Back:
    pass


@dataclass(frozen=True)
class Bookmark:
    pass


@dataclass(frozen=True)
class Home:
    pass


@dataclass(frozen=True)
class PlayVideo:
    video_id: str
    title: str = ""


@dataclass(frozen=True)
class OpenUrl:
    url: str


Action = Speak | Navigate | Link | Back | Bookmark | Home | PlayVideo | OpenUrl

ACTION_TYPES: dict[str, type] = {
    "speak": Speak,
    "navigate": Navigate,
    "link": Link,
    "back": Back,
    "bookmark": Bookmark,
    "home": Home,
    "play_video": PlayVideo,
    "open_url": OpenUrl,
}


@dataclass(frozen=True)
class UnknownAction:
    """An action read from a document whose type is not recognized.

    Not part of ``Action``: the validator reports it and nothing dispatches it.
    """

    type: str
    data: tuple[tuple[str, Any], ...] = ()


def action_type(action: Action | UnknownAction) -> str:
    """The wire name of an action ("speak", "navigate", ...)."""
    if isinstance(action, UnknownAction):
        return action.type
    for name, cls in ACTION_TYPES.items():
        if type(action) is cls:
            return name
    raise TypeError(f"not an action: {action!r}")


# --- Board structure ---


@dataclass(frozen=True)
class Button:
    id: str
    row: int
    col: int
    label: str
    spoken_text: str | None = None
    color: str | None = None
    icon_ref: str | None = None
    symbol_path: str | None = None
    self_closing: bool = False
    action: Action | UnknownAction | None = None


@dataclass(frozen=True)
class VideoPlayer:
    """A video cell spanning several grid positions."""

    id: str
    row: int
    col: int
    video_id: str
    title: str = ""
    row_span: int = 1
    col_span: int = 1


@dataclass(frozen=True)
class Page:
    id: str
    name: str
    buttons: tuple[Button, ...] = ()
    layout: Grid | None = None
    description: str | None = None
    video_players: tuple[VideoPlayer, ...] = ()

    def grid_for(self, board_grid: Grid) -> Grid:
        """This page's grid, inherited from the board when unset."""
        return self.layout or board_grid

    def button(self, button_id: str) -> Button | None:
        for button in self.buttons:
            if button.id == button_id:
                return button
        return None

    def occupied(self) -> set[tuple[int, int]]:
        return {(b.row, b.col) for b in self.buttons}


@dataclass(frozen=True)
class CoverImage:
    symbol_path: str
    background_color: str | None = None


DEFAULT_COVER = CoverImage(symbol_path="aacboard_logo", background_color="#FFFFFFFF")


@dataclass(frozen=True)
class Board:
    name: str
    grid: Grid
    pages: tuple[Page, ...] = ()
    assets: dict[str, str] = field(default_factory=dict, hash=False)
    cover_image: CoverImage | None = None

    def page(self, page_id: str | None) -> Page | None:
        if page_id is None:
            return None
        for page in self.pages:
            if page.id == page_id:
                return page
        return None

    def page_index(self, page_id: str) -> int:
        for i, page in enumerate(self.pages):
            if page.id == page_id:
                return i
        return -1

    @property
    def page_ids(self) -> set[str]:
        return {p.id for p in self.pages}

    def find_button(self, button_id: str, prefer_page_id: str | None = None) -> tuple[Page, Button] | None:
        """Locate a button, searching prefer_page_id first, then every page."""
        preferred = self.page(prefer_page_id)
        if preferred is not None:
            button = preferred.button(button_id)
            if button is not None:
                return preferred, button
        for page in self.pages:
            button = page.button(button_id)
            if button is not None:
                return page, button
        return None
