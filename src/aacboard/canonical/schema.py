"""Structural and referential checks for canonical records."""

from __future__ import annotations

import json
import logging
from functools import cache
from importlib import resources
from typing import Any

import jsonschema

from aacboard.errors import SchemaError

logger = logging.getLogger(__name__)

SCHEMA_DIR = "data/schemas"
CANONICAL_SCHEMA = "canonical.schema.json"


@cache
def load_schema(name: str = CANONICAL_SCHEMA) -> dict[str, Any]:
    """Load a bundled JSON schema by filename."""
    text = (resources.files("aacboard") / SCHEMA_DIR / name).read_text(encoding="utf-8")
    return json.loads(text)


def _reference_errors(record: dict[str, Any]) -> list[str]:
    assets = record["assets"]
    board_ids = {b["id"] for b in record["boards"]}
    errors = []
    for board in record["boards"]:
        for cell in board["cells"]:
            where = f"board {board['id']}, cell {cell['id']}"
            if "symbol_id" in cell and cell["symbol_id"] not in assets["symbols"]:
                errors.append(f"{where}: unknown symbol {cell['symbol_id']}")
            if "video_id" in cell and cell["video_id"] not in assets["videos"]:
                errors.append(f"{where}: unknown video {cell['video_id']}")
            if "audio_id" in cell and cell["audio_id"] not in assets["audio"]:
                errors.append(f"{where}: unknown audio {cell['audio_id']}")
            for action in cell["actions"]:
                if action["type"] == "navigate" and action["target_board_id"] not in board_ids:
                    errors.append(f"{where}: navigate target {action['target_board_id']} is not a board")
                if action["type"] == "play_video" and action["video_id"] not in assets["videos"]:
                    errors.append(f"{where}: unknown video {action['video_id']}")
    cover = record.get("cover")
    if cover and cover["image_id"] not in assets["images"]:
        errors.append(f"cover: unknown image {cover['image_id']}")
    return errors


def check_canonical(record: dict[str, Any]) -> None:
    """Validate a canonical record against its schema and its own references.

    Raises SchemaError on the first structural failure, or listing
    every dangling reference. Failures are logged before raising.
    """
    try:
        jsonschema.validate(instance=record, schema=load_schema())
    except jsonschema.ValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        logger.error("canonical record failed schema at %s: %s", path, e.message)
        raise SchemaError(f"{path}: {e.message}") from e

    errors = _reference_errors(record)
    if errors:
        logger.error("canonical record has %d dangling references", len(errors))
        raise SchemaError("; ".join(errors))
