"""Board IR to the canonical interchange record.

The canonical record is the only input every packager reads. Pages
become canonical boards, coordinates become 1-indexed, actions are
flattened into tagged dicts and every symbol, video, audio or image
reference is pooled under a deterministic id.
"""

from __future__ import annotations

import logging
from pathlib import PurePosixPath
from typing import Any, assert_never

from aacboard.ids import sequential_id
from aacboard.model.ir import (
    Back,
    Board,
    Bookmark,
    Button,
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
from aacboard.palette import DEFAULT_CELL_COLOR, VIDEO_CELL_COLOR, normalize_hex

logger = logging.getLogger(__name__)

CANONICAL_VERSION = "1.0"
DEFAULT_THEME = {"name": "Kids", "default_cell_color": "#D3D3D3"}
TEXT_COLOR = "#FFFFFF"
YOUTUBE_URL = "https://youtube.com/watch?v={}"

_AUDIO_SUFFIXES = {".mp3", ".wav", ".ogg", ".m4a"}
_VIDEO_SUFFIXES = {".mp4", ".webm", ".mov"}
_IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".gif", ".webp"}


def symbol_name(path: str) -> str:
    """Bare symbol name from a path: "/symbols/mulberry/eat.svg" -> "eat"."""
    return PurePosixPath(path).stem or path


class AssetPool:
    """Assigns sym-N, vid-N, aud-N and img-N ids in first-appearance order."""

    PREFIXES = {"symbols": "sym", "videos": "vid", "audio": "aud", "images": "img"}

    def __init__(self):
        self.entries: dict[str, dict[str, dict[str, Any]]] = {kind: {} for kind in self.PREFIXES}
        self._keys: dict[tuple[str, Any], str] = {}

    def add(self, kind: str, key: Any, entry: dict[str, Any]) -> str:
        found = self._keys.get((kind, key))
        if found is not None:
            return found
        pooled = self.entries[kind]
        asset_id = sequential_id(self.PREFIXES[kind], len(pooled) + 1)
        pooled[asset_id] = entry
        self._keys[(kind, key)] = asset_id
        return asset_id

    def symbol(self, button: Button) -> str | None:
        if button.symbol_path:
            entry = {"ref": symbol_name(button.symbol_path), "path": button.symbol_path}
            if button.icon_ref:
                entry["icon"] = button.icon_ref
            return self.add("symbols", (button.symbol_path, button.icon_ref), entry)
        if button.icon_ref:
            return self.add("symbols", (None, button.icon_ref), {"ref": button.icon_ref, "icon": button.icon_ref})
        return None

    def video(self, video_id: str, title: str = "") -> str:
        entry = {"ref": video_id, "url": YOUTUBE_URL.format(video_id)}
        if title:
            entry["title"] = title
        return self.add("videos", video_id, entry)


def _classify(url: str) -> str:
    suffix = PurePosixPath(url.split("?", 1)[0]).suffix.lower()
    if suffix in _AUDIO_SUFFIXES:
        return "audio"
    if suffix in _VIDEO_SUFFIXES:
        return "videos"
    if suffix in _IMAGE_SUFFIXES:
        return "images"
    return "symbols"


def convert_action(action, button: Button, pool: AssetPool) -> dict[str, Any]:
    """Flatten one IR action into a canonical tagged record."""
    match action:
        case None | UnknownAction():
            return {"type": "speak", "text": button.spoken_text or button.label}
        case Speak(text=text):
            return {"type": "speak", "text": text}
        case Navigate(to_page_id=to_page_id):
            return {"type": "navigate", "target_board_id": to_page_id}
        case Link(to_board_id=to_board_id):
            return {"type": "link", "target_set_id": to_board_id}
        case Back():
            return {"type": "back"}
        case Bookmark():
            return {"type": "bookmark"}
        case Home():
            return {"type": "home"}
        case PlayVideo(video_id=video_id, title=title):
            return {"type": "play_video", "video_id": pool.video(video_id, title)}
        case OpenUrl(url=url):
            return {"type": "open_url", "url": url}
        case _:
            assert_never(action)


def _button_cell(button: Button, pool: AssetPool) -> dict[str, Any]:
    action = convert_action(button.action, button, pool)
    cell: dict[str, Any] = {
        "id": button.id,
        "row": button.row + 1,
        "col": button.col + 1,
        "label": button.label,
        "speak": button.spoken_text or button.label,
        "style": {"bg": normalize_hex(button.color) or DEFAULT_CELL_COLOR, "fg": TEXT_COLOR},
        "self_closing": button.self_closing,
        "actions": [action],
    }
    symbol_id = pool.symbol(button)
    if symbol_id:
        cell["symbol_id"] = symbol_id
    if action["type"] == "play_video":
        cell["video_id"] = action["video_id"]
    return cell


def _video_cell(player: VideoPlayer, pool: AssetPool) -> dict[str, Any]:
    video_id = pool.video(player.video_id, player.title)
    label = player.title or "Video Player"
    return {
        "id": player.id,
        "row": player.row + 1,
        "col": player.col + 1,
        "row_span": player.row_span,
        "col_span": player.col_span,
        "label": label,
        "speak": f"Play video: {label}",
        "video_id": video_id,
        "style": {"bg": VIDEO_CELL_COLOR, "fg": TEXT_COLOR},
        "self_closing": False,
        "actions": [{"type": "play_video", "video_id": video_id}],
    }


def _page_board(page: Page, board: Board, pool: AssetPool) -> dict[str, Any]:
    grid = page.grid_for(board.grid)
    record: dict[str, Any] = {
        "id": page.id,
        "name": page.name,
        "layout": {"rows": grid.rows, "cols": grid.cols, "theme": dict(DEFAULT_THEME)},
        "cells": [_button_cell(b, pool) for b in page.buttons] + [_video_cell(v, pool) for v in page.video_players],
    }
    if page.description:
        record["description"] = page.description
    return record


def to_canonical(
    board: Board,
    locale: str = "en-US",
    version: str = CANONICAL_VERSION,
    authors: tuple[str, ...] | list[str] = (),
) -> dict[str, Any]:
    """Convert a (valid) board IR into the canonical record.

    Does not validate; callers gate on the validator first and may run
    check_canonical() on the result.
    """
    pool = AssetPool()
    boards = [_page_board(page, board, pool) for page in board.pages]

    for name, url in board.assets.items():
        pool.add(_classify(url), url, {"ref": name, "url": url})

    record: dict[str, Any] = {
        "meta": {"title": board.name, "locale": locale, "version": version, "authors": list(authors)},
        "boards": boards,
        "assets": {},
    }
    if board.cover_image is not None:
        image_id = pool.add("images", board.cover_image.symbol_path, {"ref": board.cover_image.symbol_path})
        record["cover"] = {"image_id": image_id, "bg": normalize_hex(board.cover_image.background_color) or "#FFFFFF"}
    record["assets"] = pool.entries

    logger.debug(
        "converted %s: %d boards, %d symbols, %d videos",
        board.name,
        len(boards),
        len(pool.entries["symbols"]),
        len(pool.entries["videos"]),
    )
    return record
