"""TD Snap page-set packager (.snappkg)."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from aacboard.export._common import (
    GENERATOR,
    MASTER_FILENAME,
    Archive,
    ExportOptions,
    Fetcher,
    packager,
    symbol_entry,
    symbol_lookup,
    video_url,
)

FORMAT = "tdsnap-v2"
BETA_FORMAT = "tdsnap-v2-aac-master"
DEFAULT_ICON = "fas fa-comment"
VIDEO_ICON = "fa-play-circle"

CONFIG = {
    "appearance": {"theme": "default", "buttonBorder": True, "spacing": "normal"},
    "behavior": {"speakOnSelect": True, "confirmActions": False},
    "accessibility": {"highContrast": False, "largeText": False},
}

README = """# {title}

Generated by aacboard for TD Snap

## Structure
- package.json: Package metadata
- layouts/: Page layout definitions
- config.json: Application settings
{master_line}
## Import Instructions
1. Save this file with .snappkg extension
2. Import into TD Snap
3. Configure settings as needed
"""

snap_icon = symbol_lookup({}, lambda name: f"mulberry-{name}" if name else DEFAULT_ICON)


def page_numbers(record: dict[str, Any]) -> dict[str, int]:
    return {board["id"]: i + 1 for i, board in enumerate(record["boards"])}


def convert_action(action: dict[str, Any], record: dict[str, Any]) -> dict[str, Any]:
    kind = action["type"]
    if kind == "speak":
        return {"type": "speak", "text": action["text"]}
    if kind == "navigate":
        return {"type": "jump", "targetPage": action["target_board_id"]}
    if kind == "link":
        return {"type": "link", "targetBoard": action["target_set_id"]}
    if kind in ("back", "home"):
        return {"type": kind}
    if kind == "bookmark":
        return {"type": "bookmark"}
    if kind == "play_video":
        return {"type": "web", "url": video_url(record, action["video_id"])}
    if kind == "open_url":
        return {"type": "web", "url": action["url"]}
    return {"type": "speak", "text": action.get("text", "")}


def _icon(record: dict[str, Any], cell: dict[str, Any]) -> str:
    if cell.get("video_id") and not cell.get("symbol_id"):
        return VIDEO_ICON
    symbol = symbol_entry(record, cell)
    if symbol is None:
        return DEFAULT_ICON
    if symbol.get("path"):
        return snap_icon(symbol["ref"])
    return symbol.get("icon") or DEFAULT_ICON


def _button(cell: dict[str, Any], record: dict[str, Any], beta: bool) -> dict[str, Any]:
    row, col = cell["row"] - 1, cell["col"] - 1
    button: dict[str, Any] = {
        "cellId": f"{row}-{col}",
        "row": row,
        "column": col,
        "text": cell["label"],
        "speech": cell.get("speak") or cell["label"],
        "backgroundColor": cell["style"]["bg"],
        "iconClass": _icon(record, cell),
        "actions": [convert_action(a, record) for a in cell["actions"]],
    }
    symbol = symbol_entry(record, cell)
    if symbol and symbol.get("path"):
        button["symbolPath"] = symbol["path"]
    if cell.get("self_closing"):
        button["returnAfterSelect"] = True
    if beta:
        button["width"] = cell.get("col_span", 1)
        button["height"] = cell.get("row_span", 1)
        button["textColor"] = cell["style"].get("fg", "#FFFFFF")
        button["aac_cell_id"] = cell["id"]
        for key in ("symbol_id", "video_id", "audio_id"):
            if cell.get(key):
                button[f"aac_{key}"] = cell[key]
    else:
        if cell.get("row_span", 1) > 1:
            button["rowSpan"] = cell["row_span"]
        if cell.get("col_span", 1) > 1:
            button["colSpan"] = cell["col_span"]
    return button


def page_layout(board: dict[str, Any], record: dict[str, Any], beta: bool) -> dict[str, Any]:
    layout = {
        "pageId": board["id"],
        "name": board["name"],
        "gridSize": {"rows": board["layout"]["rows"], "cols": board["layout"]["cols"]},
        "buttons": [_button(cell, record, beta) for cell in board["cells"]],
    }
    if beta:
        layout["master_aac_board_id"] = board["id"]
    return layout


def manifest(record: dict[str, Any], beta: bool) -> dict[str, Any]:
    first = record["boards"][0]["layout"]
    data: dict[str, Any] = {
        "name": record["meta"]["title"],
        "version": record["meta"]["version"],
        "generator": GENERATOR,
        "created": datetime.now(timezone.utc).isoformat(),
        "format": BETA_FORMAT if beta else FORMAT,
        "grid": {"rows": first["rows"], "cols": first["cols"]},
        "pageCount": len(record["boards"]),
    }
    if beta:
        data["locale"] = record["meta"]["locale"]
        data["authors"] = record["meta"]["authors"]
        data["master_aac_version"] = "1.0"
    return data


async def _build(record: dict[str, Any], beta: bool) -> Archive:
    archive = Archive("snap-beta" if beta else "snap")
    archive.add_json("package.json", manifest(record, beta))
    if beta:
        archive.add_json(MASTER_FILENAME, record)
    numbers = page_numbers(record)
    for board in record["boards"]:
        archive.add_json(f"layouts/page{numbers[board['id']]}.json", page_layout(board, record, beta))
    config = dict(CONFIG)
    if beta:
        config["master_aac_compliance"] = True
    archive.add_json("config.json", config)
    master_line = f"- {MASTER_FILENAME}: Canonical board record\n" if beta else ""
    archive.add_text("README.txt", README.format(title=record["meta"]["title"], master_line=master_line))
    return archive


@packager("snap")
async def package_snap(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, beta=False)


@packager("snap-beta")
async def package_snap_beta(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, beta=True)
