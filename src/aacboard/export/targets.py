"""Export targets and the validity-gated export entry points."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any

from aacboard.canonical import check_canonical, to_canonical
from aacboard.errors import ValidationError
from aacboard.export._common import DEFAULT_OPTIONS, ExportOptions, Fetcher, Packager, http_fetcher, safe_filename
from aacboard.export.grid3 import package_grid3, package_grid3_beta
from aacboard.export.obz import package_obz, package_obz_beta
from aacboard.export.snap import package_snap, package_snap_beta
from aacboard.export.touchchat import package_touchchat, package_touchchat_beta
from aacboard.workspace import LocalBoard, to_board_ir

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Target:
    family: str
    beta: bool
    extension: str
    label: str
    package: Packager

    @property
    def key(self) -> str:
        return f"{self.family}-beta" if self.beta else self.family

    def filename(self, board_name: str) -> str:
        suffix = "_beta" if self.beta else ""
        return f"{safe_filename(board_name)}{suffix}{self.extension}"


TARGETS: tuple[Target, ...] = (
    Target("grid3", False, ".gridset", "Grid 3", package_grid3),
    Target("grid3", True, ".gridset", "Grid 3 (beta)", package_grid3_beta),
    Target("snap", False, ".snappkg", "TD Snap", package_snap),
    Target("snap", True, ".snappkg", "TD Snap (beta)", package_snap_beta),
    Target("touchchat", False, ".touchchat", "TouchChat", package_touchchat),
    Target("touchchat", True, ".touchchat", "TouchChat (beta)", package_touchchat_beta),
    Target("obz", False, ".obz", "Open Board (OBZ)", package_obz),
    Target("obz", True, ".obz", "Open Board (OBZ, beta)", package_obz_beta),
)

FAMILIES = tuple(dict.fromkeys(t.family for t in TARGETS))


def get_target(family: str, beta: bool = False) -> Target:
    for target in TARGETS:
        if target.family == family and target.beta == beta:
            return target
    raise KeyError(f"unknown export format {family!r}")


@dataclass(frozen=True)
class ExportResult:
    target: Target
    filename: str
    data: bytes


def canonical_for_export(local: LocalBoard, locale: str = "en-US", authors: tuple[str, ...] = ()) -> dict[str, Any]:
    """Gate on the cached validation result, then build and check the record."""
    if not local.validation.is_valid:
        raise ValidationError(list(local.validation.errors))
    record = to_canonical(to_board_ir(local), locale=locale, authors=authors)
    check_canonical(record)
    return record


async def _package(target: Target, record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> ExportResult:
    data = await target.package(record, fetcher, options)
    return ExportResult(target, target.filename(record["meta"]["title"]), data)


async def export_board(
    local: LocalBoard,
    target: Target,
    fetcher: Fetcher | None = None,
    options: ExportOptions = DEFAULT_OPTIONS,
    locale: str = "en-US",
    authors: tuple[str, ...] = (),
) -> ExportResult:
    """Package one workspace board for one target.

    Raises ValidationError when the board's cached validity is false.
    """
    record = canonical_for_export(local, locale, authors)
    return await _package(target, record, fetcher or http_fetcher(), options)


async def export_all(
    local: LocalBoard,
    targets: tuple[Target, ...] | list[Target] = TARGETS,
    fetcher: Fetcher | None = None,
    options: ExportOptions = DEFAULT_OPTIONS,
    locale: str = "en-US",
    authors: tuple[str, ...] = (),
) -> list[ExportResult]:
    """Package one board for several targets concurrently, in target order."""
    record = canonical_for_export(local, locale, authors)
    fetcher = fetcher or http_fetcher()
    logger.info("exporting %s to %d targets", record["meta"]["title"], len(targets))
    return list(await asyncio.gather(*(_package(t, record, fetcher, options) for t in targets)))
