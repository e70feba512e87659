"""Configuration: built-in defaults, an optional YAML file, then environment."""

import os
from pathlib import Path
from typing import Any

import yaml

from aacboard.errors import DocumentError

CONFIG_FILENAME = "aacboard.yaml"
CONFIG_ENV = "AACBOARD_CONFIG"
ENV_PREFIX = "AACBOARD_"

AACBOARD_DEFAULTS = {
    "locale": "en-US",
    "author": "",
    "thumbnail-url": "https://aacboard.app/assets/thumbnail.png",
    "fetch-timeout": 30.0,
    "upload-url": "",
    "symbol-base-url": "https://aacboard.app/symbols",
}


def _python_key(file_key: str) -> str:
    """Convert file-style key (hyphenated) to Python-style (underscored)."""
    return file_key.replace("-", "_")


def _file_key(python_key: str) -> str:
    """Convert Python-style key (underscored) to file-style (hyphenated)."""
    return python_key.replace("_", "-")


def _coerce_value(file_key: str, raw: Any):
    """Type-coerce aacboard section values using defaults."""
    default = AACBOARD_DEFAULTS.get(file_key)
    if default is None or not isinstance(raw, str):
        return raw
    if isinstance(default, bool):
        return raw.lower() in ("true", "yes", "1")
    if isinstance(default, int):
        return int(raw)
    if isinstance(default, float):
        return float(raw)
    return raw


def _config_path(path: str | Path | None) -> Path | None:
    if path is not None:
        return Path(path)
    if os.environ.get(CONFIG_ENV):
        return Path(os.environ[CONFIG_ENV])
    candidate = Path.cwd() / CONFIG_FILENAME
    return candidate if candidate.exists() else None


def _read_file(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise DocumentError(f"cannot read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise DocumentError(f"config {path} must be a mapping of sections")
    return data


def read_config(path: str | Path | None = None) -> dict[str, dict[str, Any]]:
    """Read configuration into {section: {key: value}} dict.

    Layers, lowest first: AACBOARD_DEFAULTS, the YAML file (``path``,
    else $AACBOARD_CONFIG, else ./aacboard.yaml if present), then
    AACBOARD_<KEY> environment variables for the aacboard section.
    Keys are returned with hyphens converted to underscores.
    """
    result: dict[str, dict[str, Any]] = {}
    config_path = _config_path(path)
    if config_path is not None:
        for section, items in _read_file(config_path).items():
            if not isinstance(items, dict):
                continue
            converted: dict[str, Any] = {}
            for file_k, raw in items.items():
                file_k = _file_key(str(file_k))
                if section == "aacboard":
                    converted[_python_key(file_k)] = _coerce_value(file_k, raw)
                else:
                    converted[_python_key(file_k)] = raw
            result[str(section)] = converted

    aacboard = result.setdefault("aacboard", {})
    for file_k in AACBOARD_DEFAULTS:
        env_value = os.environ.get(ENV_PREFIX + _python_key(file_k).upper())
        if env_value is not None:
            aacboard[_python_key(file_k)] = _coerce_value(file_k, env_value)
    # Merge defaults
    for file_k, default in AACBOARD_DEFAULTS.items():
        aacboard.setdefault(_python_key(file_k), default)
    return result
