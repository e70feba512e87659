"""Load board documents (JSON or YAML) into a Board IR."""

import json
from pathlib import Path
from typing import Any

import yaml

from aacboard.errors import DocumentError
from aacboard.ids import unique_id
from aacboard.model.ir import (
    DEFAULT_COVER,
    Back,
    Board,
    Bookmark,
    Button,
    CoverImage,
    Grid,
    Home,
    Link,
    Navigate,
    OpenUrl,
    Page,
    PlayVideo,
    Speak,
    UnknownAction,
    VideoPlayer,
)


def _int(value: Any, what: str) -> int:
    """Coerce a document number, raising DocumentError on garbage."""
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DocumentError(f"{what} must be an integer, got {value!r}") from None


def _str(value: Any) -> str | None:
    return None if value is None else str(value)


def _parse_grid(data: Any, what: str) -> Grid:
    if not isinstance(data, dict):
        raise DocumentError(f"{what} must be a mapping with rows and cols")
    return Grid(rows=_int(data.get("rows"), f"{what}.rows"), cols=_int(data.get("cols"), f"{what}.cols"))


def parse_action(data: Any) -> Any:
    """Parse an action mapping into an Action (or UnknownAction).

    Missing required fields become empty strings so the validator can
    report them. Legacy shapes are accepted: ``youtube`` is a video
    action and a ``link`` carrying only ``toPageId`` is page navigation.
    """
    if data is None:
        return None
    if not isinstance(data, dict):
        raise DocumentError(f"action must be a mapping, got {data!r}")
    kind = str(data.get("type", ""))
    if kind == "speak":
        return Speak(text=str(data.get("text") or ""))
    if kind == "navigate":
        return Navigate(to_page_id=str(data.get("toPageId") or ""))
    if kind == "link":
        if "toBoardId" not in data and "toPageId" in data:
            return Navigate(to_page_id=str(data.get("toPageId") or ""))
        return Link(to_board_id=str(data.get("toBoardId") or ""))
    if kind == "back":
        return Back()
    if kind == "bookmark":
        return Bookmark()
    if kind == "home":
        return Home()
    if kind in ("play_video", "youtube"):
        return PlayVideo(video_id=str(data.get("videoId") or ""), title=str(data.get("title") or ""))
    if kind == "open_url":
        return OpenUrl(url=str(data.get("url") or ""))
    rest = tuple(sorted((k, v) for k, v in data.items() if k != "type" and isinstance(v, (str, int, float, bool))))
    return UnknownAction(type=kind, data=rest)


def parse_button(data: Any, fallback_id: str) -> Button:
    if not isinstance(data, dict):
        raise DocumentError(f"button must be a mapping, got {data!r}")
    return Button(
        id=str(data.get("id") or fallback_id),
        row=_int(data.get("row", 0), "button.row"),
        col=_int(data.get("col", 0), "button.col"),
        label=str(data.get("label") or ""),
        spoken_text=_str(data.get("spokenText")),
        color=_str(data.get("color")),
        icon_ref=_str(data.get("iconRef")),
        symbol_path=_str(data.get("symbolPath")),
        self_closing=bool(data.get("selfClosing", False)),
        action=parse_action(data.get("action")),
    )


def _parse_video_player(data: dict, fallback_id: str) -> VideoPlayer:
    return VideoPlayer(
        id=str(data.get("id") or fallback_id),
        row=_int(data.get("row", 0), "videoPlayer.row"),
        col=_int(data.get("col", 0), "videoPlayer.col"),
        video_id=str(data.get("videoId") or ""),
        title=str(data.get("title") or ""),
        row_span=_int(data.get("rowSpan", 1), "videoPlayer.rowSpan"),
        col_span=_int(data.get("colSpan", 1), "videoPlayer.colSpan"),
    )


def parse_page(data: Any, index: int, taken: set[str]) -> Page:
    """Parse a page mapping. Pages without an id get "page-<n>"."""
    if not isinstance(data, dict):
        raise DocumentError(f"page must be a mapping, got {data!r}")
    page_id = str(data.get("id") or unique_id(f"page-{index + 1}", taken))
    taken.add(page_id)
    buttons = tuple(
        parse_button(b, fallback_id=f"{page_id}-btn-{i + 1}") for i, b in enumerate(data.get("buttons") or [])
    )
    players = tuple(
        _parse_video_player(v, fallback_id=f"{page_id}-video-{i + 1}")
        for i, v in enumerate(data.get("videoPlayers") or [])
    )
    layout = data.get("layout")
    return Page(
        id=page_id,
        name=str(data.get("name") or ""),
        buttons=buttons,
        layout=_parse_grid(layout, "page.layout") if layout else None,
        description=_str(data.get("description")),
        video_players=players,
    )


def board_from_dict(data: Any, default_cover: bool = False) -> Board:
    """Build a Board from a decoded document."""
    if not isinstance(data, dict):
        raise DocumentError("board document must be a mapping")
    if "grid" not in data:
        raise DocumentError("board document has no grid")
    taken: set[str] = set()
    pages = tuple(parse_page(p, i, taken) for i, p in enumerate(data.get("pages") or []))

    cover = data.get("coverImage")
    cover_image = None
    if isinstance(cover, dict) and cover.get("symbolPath"):
        cover_image = CoverImage(
            symbol_path=str(cover["symbolPath"]),
            background_color=_str(cover.get("backgroundColor")),
        )
    elif default_cover:
        cover_image = DEFAULT_COVER

    assets = data.get("assets") or {}
    return Board(
        name=str(data.get("name") or ""),
        grid=_parse_grid(data["grid"], "grid"),
        pages=pages,
        assets={str(k): str(v) for k, v in assets.items() if isinstance(v, str)},
        cover_image=cover_image,
    )


def parse_board_text(text: str, suffix: str = ".json") -> Board:
    """Decode JSON or YAML text (chosen by file suffix) into a Board."""
    try:
        if suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DocumentError(f"cannot parse board document: {e}") from e
    return board_from_dict(data)


def load_board(path: str | Path) -> Board:
    """Read a board document from disk."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentError(f"cannot read {path}: {e.strerror or e}") from e
    return parse_board_text(text, path.suffix)
