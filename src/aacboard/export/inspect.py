"""Read back page, button and grid counts from a packaged archive."""

from __future__ import annotations

import io
import json
import re
import zipfile
from dataclasses import dataclass, field
from xml.etree import ElementTree as ET

from aacboard.errors import DocumentError


@dataclass
class ArchiveSummary:
    family: str
    pages: int = 0
    buttons: int = 0
    grids: list[tuple[int, int]] = field(default_factory=list)
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "family": self.family,
            "pages": self.pages,
            "buttons": self.buttons,
            "grids": [{"rows": r, "cols": c} for r, c in self.grids],
            "files": self.files,
        }


def _add_page(summary: ArchiveSummary, rows: int, cols: int, buttons: int) -> None:
    summary.pages += 1
    summary.buttons += buttons
    summary.grids.append((rows, cols))


def _grid3(zf: zipfile.ZipFile, summary: ArchiveSummary) -> None:
    file_map = ET.fromstring(zf.read("FileMap.xml"))
    for entry in file_map.iter("Entry"):
        static = entry.get("StaticFile", "")
        if not static.startswith("Grids\\"):
            continue
        grid = ET.fromstring(zf.read(static.replace("\\", "/")))
        _add_page(summary, len(grid.findall("RowDefinitions/RowDefinition")),
                  len(grid.findall("ColumnDefinitions/ColumnDefinition")), len(grid.findall("Cells/Cell")))


def _snap(zf: zipfile.ZipFile, summary: ArchiveSummary) -> None:
    layouts = [n for n in zf.namelist() if re.fullmatch(r"layouts/page\d+\.json", n)]
    for name in sorted(layouts, key=lambda n: int(re.findall(r"\d+", n)[0])):
        page = json.loads(zf.read(name))
        _add_page(summary, page["gridSize"]["rows"], page["gridSize"]["cols"], len(page["buttons"]))


def _touchchat(zf: zipfile.ZipFile, summary: ArchiveSummary) -> None:
    vocabulary = json.loads(zf.read("vocabulary.json"))
    for page in vocabulary["pages"]:
        _add_page(summary, page["layout"]["rows"], page["layout"]["cols"], len(page["buttons"]))


def _obz(zf: zipfile.ZipFile, summary: ArchiveSummary) -> None:
    manifest = json.loads(zf.read("manifest.json"))
    for path in manifest["paths"]["boards"].values():
        board = json.loads(zf.read(path))
        _add_page(summary, board["grid"]["rows"], board["grid"]["columns"], len(board["buttons"]))


_READERS = {"grid3": _grid3, "snap": _snap, "touchchat": _touchchat, "obz": _obz}


def inspect_archive(data: bytes, family: str) -> ArchiveSummary:
    """Summarize an archive produced by the given packager family.

    Raises DocumentError for unknown families, corrupt zips or missing
    or malformed entries.
    """
    reader = _READERS.get(family)
    if reader is None:
        raise DocumentError(f"unknown export format {family!r}")
    summary = ArchiveSummary(family)
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as zf:
            summary.files = zf.namelist()
            reader(zf, summary)
    except zipfile.BadZipFile as e:
        raise DocumentError(f"not a zip archive: {e}") from e
    except (KeyError, ValueError, TypeError, ET.ParseError) as e:
        raise DocumentError(f"malformed {family} archive: {e}") from e
    return summary
