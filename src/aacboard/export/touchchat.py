"""TouchChat vocabulary packager (.touchchat)."""

from __future__ import annotations

import hashlib
import re
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

FORMAT = "touchchat-v1"
DEFAULT_ICON = "fas fa-comment"
VIDEO_ICON = "fas fa-play-circle"
COMMON_CATEGORIES = ("Greetings", "Basic Needs", "Feelings", "Actions", "People", "Places")

# Mulberry symbol names to the FontAwesome glyphs TouchChat can draw.
TOUCHCHAT_ICONS = {
    "eat": "fas fa-utensils",
    "food": "fas fa-utensils",
    "drink": "fas fa-glass-water",
    "water": "fas fa-glass-water",
    "toilet": "fas fa-restroom",
    "more": "fas fa-plus",
    "finished": "fas fa-check",
    "yes": "fas fa-thumbs-up",
    "no": "fas fa-thumbs-down",
    "help": "fas fa-question",
    "happy": "fas fa-smile",
    "sad": "fas fa-frown",
    "love": "fas fa-heart",
    "want": "fas fa-hand",
    "play": "fas fa-gamepad",
    "tv": "fas fa-tv",
    "outside": "fas fa-tree",
    "sleep": "fas fa-bed",
    "hot": "fas fa-fire",
    "cold": "fas fa-snowflake",
}

SETTINGS = {
    "voiceSettings": {"rate": 0.5, "volume": 1.0, "pitch": 0.5},
    "appearance": {
        "backgroundColor": "#FFFFFF",
        "borderColor": "#CCCCCC",
        "borderWidth": 2,
        "fontFamily": "Arial",
        "fontSize": 18,
    },
    "behavior": {"speakOnSelect": True, "autoAdvance": False, "confirmBeforeAction": False},
}

README = """TouchChat Vocabulary: {title}

Generated by aacboard

This vocabulary package contains:
- vocabulary.json: Main vocabulary configuration
- config.json: TouchChat-specific settings
- manifest.json: Package metadata
{master_line}
Import Instructions:
1. Save this file with .touchchat extension
2. Import into TouchChat using the app's import feature
3. Configure voice and appearance settings as needed
"""

touchchat_icon = symbol_lookup(TOUCHCHAT_ICONS, lambda name: DEFAULT_ICON)


def convert_action(action: dict[str, Any], record: dict[str, Any]) -> dict[str, Any]:
    kind = action["type"]
    if kind == "speak":
        converted = {"type": "speak", "text": action["text"]}
    elif kind == "navigate":
        converted = {"type": "navigate", "targetPage": action["target_board_id"]}
    elif kind == "link":
        converted = {"type": "loadVocabulary", "targetVocabulary": action["target_set_id"]}
    elif kind in ("back", "home", "bookmark"):
        converted = {"type": kind}
    elif kind == "play_video":
        converted = {"type": "openWebPage", "url": video_url(record, action["video_id"])}
    elif kind == "open_url":
        converted = {"type": "openWebPage", "url": action["url"]}
    else:
        converted = {"type": "speak"}
    converted["enabled"] = True
    return converted


def _icon(record: dict[str, Any], cell: dict[str, Any]) -> str:
    if cell.get("video_id") and not cell.get("symbol_id"):
        return VIDEO_ICON
    symbol = symbol_entry(record, cell)
    if symbol is None:
        return DEFAULT_ICON
    return symbol.get("icon") or touchchat_icon(symbol["ref"])


def _button(cell: dict[str, Any], record: dict[str, Any], beta: bool) -> dict[str, Any]:
    row, col = cell["row"] - 1, cell["col"] - 1
    is_video = bool(cell.get("video_id")) and cell.get("row_span", 1) * cell.get("col_span", 1) > 1
    button: dict[str, Any] = {
        "id": f"{'video' if is_video else 'btn'}_{row}_{col}",
        "row": row,
        "column": col,
        "width": cell.get("col_span", 1),
        "height": cell.get("row_span", 1),
        "label": cell["label"],
        "speech": cell.get("speak") or cell["label"],
        "backgroundColor": cell["style"]["bg"],
        "textColor": cell["style"].get("fg", "#FFFFFF"),
        "borderColor": "#CCCCCC",
        "icon": {"type": "fontawesome", "reference": _icon(record, cell), "color": "#FFFFFF"},
        "actions": [convert_action(a, record) for a in cell["actions"]],
        "visibility": "visible",
        "enabled": True,
    }
    if beta:
        button["aac_cell_id"] = cell["id"]
        if cell.get("self_closing"):
            button["returnToPreviousPage"] = True
    return button


def word_list(record: dict[str, Any]) -> list[str]:
    """Distinct lowercase words (two letters or more) from every label."""
    words = set()
    for board in record["boards"]:
        for cell in board["cells"]:
            for word in cell["label"].split():
                clean = re.sub(r"[^\w]", "", word).lower()
                if len(clean) > 1:
                    words.add(clean)
    return sorted(words)


def categories(record: dict[str, Any]) -> list[str]:
    names = {b["name"] for b in record["boards"] if b["name"] and b["name"] != "Main"}
    return sorted(names.union(COMMON_CATEGORIES))


def vocabulary_id(record: dict[str, Any]) -> str:
    """Stable 16-hex-digit id derived from the title and board ids."""
    key = "\n".join([record["meta"]["title"], *(board["id"] for board in record["boards"])])
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:16]


def vocabulary(record: dict[str, Any], beta: bool) -> dict[str, Any]:
    first = record["boards"][0]["layout"]
    return {
        "name": record["meta"]["title"],
        "version": record["meta"]["version"],
        "generator": GENERATOR,
        "created": datetime.now(timezone.utc).isoformat(),
        "format": FORMAT,
        "settings": {"gridSize": {"rows": first["rows"], "cols": first["cols"]}, **SETTINGS},
        "pages": [
            {
                "id": board["id"],
                "name": board["name"],
                "layout": {"rows": board["layout"]["rows"], "cols": board["layout"]["cols"]},
                "isHomePage": index == 0,
                "buttons": [_button(cell, record, beta) for cell in board["cells"]],
            }
            for index, board in enumerate(record["boards"])
        ],
        "wordList": word_list(record),
        "categories": categories(record),
    }


async def _build(record: dict[str, Any], beta: bool) -> Archive:
    archive = Archive("touchchat-beta" if beta else "touchchat")
    archive.add_json("vocabulary.json", vocabulary(record, beta))
    archive.add_json(
        "config.json",
        {
            "appVersion": "3.0",
            "vocabularyId": vocabulary_id(record),
            "lastModified": datetime.now(timezone.utc).isoformat(),
            "userLevel": "intermediate",
            "features": {"wordPrediction": True, "autoCapitalization": True, "speakMode": "text"},
        },
    )
    files = ["vocabulary.json", "config.json", "README.txt"]
    if beta:
        archive.add_json(MASTER_FILENAME, record)
        files.append(MASTER_FILENAME)
    archive.add_json(
        "manifest.json",
        {
            "name": record["meta"]["title"],
            "type": "vocabulary",
            "version": record["meta"]["version"],
            "compatibleWith": ["TouchChat HD", "TouchChat Express"],
            "files": files,
        },
    )
    master_line = f"- {MASTER_FILENAME}: Canonical board record\n" if beta else ""
    archive.add_text("README.txt", README.format(title=record["meta"]["title"], master_line=master_line))
    return archive


@packager("touchchat")
async def package_touchchat(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, beta=False)


@packager("touchchat-beta")
async def package_touchchat_beta(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, beta=True)
