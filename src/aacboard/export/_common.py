"""Helpers shared by the format packagers."""

from __future__ import annotations

import functools
import io
import json
import logging
import re
import zipfile
from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from xml.etree import ElementTree as ET

import httpx

from aacboard.errors import AssetError, PackagingError

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[bytes]]

DEFAULT_TIMEOUT = 30.0
GENERATOR = "aacboard"
MASTER_FILENAME = "master_aac.json"


@dataclass(frozen=True)
class ExportOptions:
    """Where packagers find the binary assets they embed."""

    thumbnail_url: str | None = "https://aacboard.app/assets/thumbnail.png"
    symbol_base_url: str = "https://aacboard.app/symbols"

    @classmethod
    def from_config(cls, config: dict[str, dict[str, Any]]) -> "ExportOptions":
        section = config.get("aacboard", {})
        return cls(
            thumbnail_url=section.get("thumbnail_url") or None,
            symbol_base_url=section.get("symbol_base_url") or cls.symbol_base_url,
        )


DEFAULT_OPTIONS = ExportOptions()

# Fixed entry timestamp so identical content zips identically.
_ZIP_DATE = (1980, 1, 1, 0, 0, 0)
_ILLEGAL = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


def safe_filename(name: str) -> str:
    """Replace characters that are illegal in file names with "_"."""
    cleaned = _ILLEGAL.sub("_", name).strip().rstrip(".")
    return cleaned or "board"


class Archive:
    """A zip archive built fully in memory before it is serialized.

    Packagers add every file first; to_bytes() is only called once the
    whole layout exists, so a failure mid-build never yields a partial
    archive.
    """

    def __init__(self, target: str):
        self.target = target
        self.files: dict[str, bytes] = {}

    def add_bytes(self, path: str, data: bytes) -> None:
        self.files[path] = data

    def add_text(self, path: str, text: str) -> None:
        self.files[path] = text.encode("utf-8")

    def add_json(self, path: str, data: Any) -> None:
        self.add_text(path, json.dumps(data, indent=2, ensure_ascii=False))

    def add_xml(self, path: str, root: ET.Element) -> None:
        ET.indent(root)
        self.files[path] = ET.tostring(root, encoding="utf-8", xml_declaration=True)

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as zf:
            for path, data in self.files.items():
                zf.writestr(zipfile.ZipInfo(path, date_time=_ZIP_DATE), data, compress_type=zipfile.ZIP_DEFLATED)
        return buffer.getvalue()


async def fetch_asset(url: str, timeout: float = DEFAULT_TIMEOUT) -> bytes:
    """GET a binary asset. Raises AssetError on any transport or HTTP error."""
    async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as client:
        try:
            response = await client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise AssetError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise AssetError(url, str(e) or type(e).__name__) from e
    return response.content


def http_fetcher(timeout: float = DEFAULT_TIMEOUT) -> Fetcher:
    """A fetcher bound to a timeout, for passing to packagers."""

    async def fetch(url: str) -> bytes:
        return await fetch_asset(url, timeout=timeout)

    return fetch


Build = Callable[[dict[str, Any], Fetcher, ExportOptions], Awaitable[Archive]]
Packager = Callable[..., Awaitable[bytes]]


def packager(target: str) -> Callable[[Build], Packager]:
    """Turn an Archive-building coroutine into a packager returning zip bytes.

    Any failure while building or serializing becomes a PackagingError
    chained to the original exception.
    """

    def decorate(build: Build) -> Packager:
        @functools.wraps(build)
        async def package(
            record: dict[str, Any],
            fetcher: Fetcher | None = None,
            options: ExportOptions = DEFAULT_OPTIONS,
        ) -> bytes:
            try:
                archive = await build(record, fetcher or http_fetcher(), options)
                data = archive.to_bytes()
            except PackagingError:
                raise
            except Exception as e:
                logger.exception("packaging %s failed", target)
                raise PackagingError(target, str(e) or type(e).__name__) from e
            logger.info("packaged %s: %d files, %d bytes", target, len(archive.files), len(data))
            return data

        return package

    return decorate


def symbol_url(path: str | None, options: ExportOptions) -> str | None:
    """Absolute URL for a symbol path, resolved against the symbol base."""
    if not path:
        return None
    if path.startswith(("http://", "https://")):
        return path
    return options.symbol_base_url.rstrip("/") + "/" + path.split("/")[-1]


async def optional_asset(fetcher: Fetcher, url: str | None) -> bytes | None:
    """Fetch an asset the archive can live without; log and skip on failure."""
    if not url:
        return None
    try:
        return await fetcher(url)
    except AssetError as e:
        logger.warning("skipping optional asset: %s", e)
        return None


def xml_element(parent: ET.Element, tag: str, text: str | None = None, **attrs: str) -> ET.Element:
    element = ET.SubElement(parent, tag, attrs)
    if text is not None:
        element.text = text
    return element


def symbol_lookup(mapping: dict[str, str], fallback: Callable[[str], str]) -> Callable[[str | None], str]:
    """Build a name -> target resource resolver.

    Names are matched case-insensitively; unmapped names go through
    fallback, which must always produce a usable placeholder.
    """

    def resolve(name: str | None) -> str:
        key = (name or "").strip().lower()
        return mapping.get(key) or fallback(key)

    return resolve


def first_action(cell: dict[str, Any]) -> dict[str, Any]:
    actions = cell.get("actions") or []
    return actions[0] if actions else {"type": "speak", "text": cell.get("speak") or cell.get("label", "")}


def video_url(record: dict[str, Any], video_id: str) -> str:
    """Public URL for a pooled video id."""
    video = record["assets"]["videos"].get(video_id, {})
    return video.get("url") or f"https://youtube.com/watch?v={video.get('ref', video_id)}"


def video_ref(record: dict[str, Any], video_id: str) -> str:
    """The provider's own id (the YouTube id) for a pooled video id."""
    return record["assets"]["videos"].get(video_id, {}).get("ref", video_id)


def symbol_entry(record: dict[str, Any], cell: dict[str, Any]) -> dict[str, Any] | None:
    symbol_id = cell.get("symbol_id")
    if not symbol_id:
        return None
    return record["assets"]["symbols"].get(symbol_id)
