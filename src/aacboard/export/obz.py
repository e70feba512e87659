"""Open Board Format packager (.obz).

Every canonical board becomes ``boards/<id>.obf``, de-duplicated after
sanitizing; ``manifest.json`` names the first as root. The beta variant
also embeds symbol images under ``images/`` and the canonical record.
"""

from __future__ import annotations

from pathlib import PurePosixPath
from typing import Any

from aacboard.export._common import (
    MASTER_FILENAME,
    Archive,
    ExportOptions,
    Fetcher,
    optional_asset,
    packager,
    safe_filename,
    symbol_url,
    video_url,
)
from aacboard.ids import unique_id
from aacboard.palette import to_rgb

FORMAT = "open-board-0.1"
BORDER_COLOR = "rgb(204, 204, 204)"
PLACEHOLDER_IMAGE = "https://aacboard.app/symbols/placeholder.svg"

_CONTENT_TYPES = {
    ".svg": "image/svg+xml",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
}


def board_paths(record: dict[str, Any]) -> dict[str, str]:
    """Map each canonical board id to a unique ``boards/<name>.obf`` path."""
    names: dict[str, str] = {}
    for board in record["boards"]:
        names[board["id"]] = unique_id(safe_filename(board["id"]), set(names.values()))
    return {board_id: f"boards/{name}.obf" for board_id, name in names.items()}


def _content_type(url: str) -> str:
    return _CONTENT_TYPES.get(PurePosixPath(url.split("?", 1)[0]).suffix.lower(), "image/svg+xml")


def image_records(record: dict[str, Any], options: ExportOptions) -> dict[str, dict[str, Any]]:
    """One OBF image per pooled symbol, keyed by symbol id.

    Symbols without a resolvable path point at the placeholder image.
    """
    images = {}
    for symbol_id, symbol in record["assets"]["symbols"].items():
        url = symbol_url(symbol.get("path"), options) or PLACEHOLDER_IMAGE
        images[symbol_id] = {
            "id": symbol_id,
            "url": url,
            "content_type": _content_type(url),
            "width": 100,
            "height": 100,
        }
    return images


def _apply_action(button: dict[str, Any], action: dict[str, Any], record: dict[str, Any], paths: dict[str, str]) -> None:
    kind = action["type"]
    if kind == "speak":
        if action["text"] != button["label"]:
            button["vocalization"] = action["text"]
    elif kind == "navigate":
        target = action["target_board_id"]
        button["load_board"] = {"id": target, "path": paths[target]}
    elif kind == "link":
        target = action["target_set_id"]
        button["load_board"] = {"id": target, "path": paths[target]} if target in paths else {"id": target}
    elif kind == "back":
        button["action"] = ":back"
    elif kind == "home":
        button["action"] = ":home"
    elif kind == "play_video":
        button["action"] = "+" + video_url(record, action["video_id"])
    elif kind == "open_url":
        button["action"] = "+" + action["url"]


def obf_board(
    board: dict[str, Any],
    record: dict[str, Any],
    images: dict[str, dict[str, Any]],
    paths: dict[str, str],
) -> dict[str, Any]:
    rows, cols = board["layout"]["rows"], board["layout"]["cols"]
    order: list[list[str | None]] = [[None] * cols for _ in range(rows)]
    buttons = []
    used_images = []

    for cell in board["cells"]:
        button: dict[str, Any] = {
            "id": cell["id"],
            "label": cell["label"],
            "background_color": to_rgb(cell["style"]["bg"]),
            "border_color": BORDER_COLOR,
        }
        if cell.get("speak") and cell["speak"] != cell["label"]:
            button["vocalization"] = cell["speak"]
        symbol_id = cell.get("symbol_id")
        if symbol_id in images:
            button["image_id"] = symbol_id
            if images[symbol_id] not in used_images:
                used_images.append(images[symbol_id])
        if cell.get("col_span", 1) > 1:
            button["width"] = cell["col_span"]
        if cell.get("row_span", 1) > 1:
            button["height"] = cell["row_span"]
        for action in cell["actions"]:
            _apply_action(button, action, record, paths)
        if cell.get("self_closing") and "action" not in button:
            button["action"] = ":back"
        buttons.append(button)
        order[cell["row"] - 1][cell["col"] - 1] = cell["id"]

    obf = {
        "format": FORMAT,
        "id": board["id"],
        "locale": record["meta"]["locale"].split("-")[0],
        "name": board["name"],
        "description_html": board.get("description") or f"{record['meta']['title']}: {board['name']}",
        "buttons": buttons,
        "grid": {"rows": rows, "columns": cols, "order": order},
        "images": used_images,
        "sounds": [],
    }
    return obf


async def _build(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions, beta: bool) -> Archive:
    archive = Archive("obz-beta" if beta else "obz")
    images = image_records(record, options)
    image_paths: dict[str, str] = {}

    if beta:
        for symbol_id, image in images.items():
            data = await optional_asset(fetcher, image["url"])
            if data is None:
                continue
            suffix = PurePosixPath(image["url"].split("?", 1)[0]).suffix or ".svg"
            path = f"images/{symbol_id}{suffix}"
            archive.add_bytes(path, data)
            image["path"] = path
            image_paths[symbol_id] = path
        archive.add_json(MASTER_FILENAME, record)

    boards = board_paths(record)
    for board in record["boards"]:
        archive.add_json(boards[board["id"]], obf_board(board, record, images, boards))

    archive.add_json(
        "manifest.json",
        {
            "format": FORMAT,
            "root": boards[record["boards"][0]["id"]],
            "paths": {"boards": boards, "images": image_paths, "sounds": {}},
        },
    )
    return archive


@packager("obz")
async def package_obz(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, fetcher, options, beta=False)


@packager("obz-beta")
async def package_obz_beta(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, fetcher, options, beta=True)
