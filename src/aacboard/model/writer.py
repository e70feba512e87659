"""Serialize a Board IR back to its document form (JSON or YAML)."""

import json
from pathlib import Path
from typing import Any, assert_never

import yaml

from aacboard.model.ir import (
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
    Speak,
    UnknownAction,
    VideoPlayer,
)


def _compact(d: dict[str, Any]) -> dict[str, Any]:
    """Drop None values and False flags so documents stay small."""
    return {k: v for k, v in d.items() if v is not None and v is not False}


def action_to_dict(action) -> dict[str, Any] | None:
    match action:
        case None:
            return None
        case Speak(text=text):
            return {"type": "speak", "text": text}
        case Navigate(to_page_id=to_page_id):
            return {"type": "navigate", "toPageId": to_page_id}
        case Link(to_board_id=to_board_id):
            return {"type": "link", "toBoardId": to_board_id}
        case Back():
            return {"type": "back"}
        case Bookmark():
            return {"type": "bookmark"}
        case Home():
            return {"type": "home"}
        case PlayVideo(video_id=video_id, title=title):
            return _compact({"type": "play_video", "videoId": video_id, "title": title or None})
        case OpenUrl(url=url):
            return {"type": "open_url", "url": url}
        case UnknownAction(type=kind, data=data):
            return {"type": kind, **dict(data)}
        case _:
            assert_never(action)


def _grid_to_dict(grid: Grid) -> dict[str, int]:
    return {"rows": grid.rows, "cols": grid.cols}


def button_to_dict(button: Button) -> dict[str, Any]:
    return _compact(
        {
            "id": button.id,
            "row": button.row,
            "col": button.col,
            "label": button.label,
            "spokenText": button.spoken_text,
            "color": button.color,
            "iconRef": button.icon_ref,
            "symbolPath": button.symbol_path,
            "selfClosing": button.self_closing,
            "action": action_to_dict(button.action),
        }
    )


def _video_player_to_dict(player: VideoPlayer) -> dict[str, Any]:
    return {
        "id": player.id,
        "row": player.row,
        "col": player.col,
        "rowSpan": player.row_span,
        "colSpan": player.col_span,
        "videoId": player.video_id,
        "title": player.title,
    }


def page_to_dict(page: Page) -> dict[str, Any]:
    data = _compact(
        {
            "id": page.id,
            "name": page.name,
            "description": page.description,
            "layout": _grid_to_dict(page.layout) if page.layout else None,
        }
    )
    data["buttons"] = [button_to_dict(b) for b in page.buttons]
    if page.video_players:
        data["videoPlayers"] = [_video_player_to_dict(v) for v in page.video_players]
    return data


def board_to_dict(board: Board) -> dict[str, Any]:
    data: dict[str, Any] = {
        "name": board.name,
        "grid": _grid_to_dict(board.grid),
        "pages": [page_to_dict(p) for p in board.pages],
    }
    if board.assets:
        data["assets"] = dict(board.assets)
    if board.cover_image is not None:
        data["coverImage"] = _compact(
            {
                "symbolPath": board.cover_image.symbol_path,
                "backgroundColor": board.cover_image.background_color,
            }
        )
    return data


def serialize_board(board: Board, suffix: str = ".json") -> str:
    """Render a board as JSON or YAML text (chosen by file suffix)."""
    data = board_to_dict(board)
    if suffix.lower() in (".yaml", ".yml"):
        return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def save_board(board: Board, path: str | Path) -> Path:
    """Write a board document to disk, replacing the file atomically."""
    path = Path(path)
    tmp = path.with_name(path.name + ".tmp")
    tmp.write_text(serialize_board(board, path.suffix), encoding="utf-8")
    tmp.replace(path)
    return path
