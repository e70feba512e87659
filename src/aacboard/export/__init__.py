"""Format packagers: canonical record to downloadable archives."""

from aacboard.export._common import (
    DEFAULT_OPTIONS,
    Archive,
    ExportOptions,
    Fetcher,
    fetch_asset,
    http_fetcher,
    safe_filename,
)
from aacboard.export.grid3 import package_grid3, package_grid3_beta
from aacboard.export.inspect import ArchiveSummary, inspect_archive
from aacboard.export.obz import package_obz, package_obz_beta
from aacboard.export.snap import package_snap, package_snap_beta
from aacboard.export.targets import (
    FAMILIES,
    TARGETS,
    ExportResult,
    Target,
    canonical_for_export,
    export_all,
    export_board,
    get_target,
)
from aacboard.export.touchchat import package_touchchat, package_touchchat_beta
from aacboard.export.upload import UploadError, build_upload_payload, upload_archive

__all__ = [
    "DEFAULT_OPTIONS",
    "FAMILIES",
    "TARGETS",
    "Archive",
    "ArchiveSummary",
    "ExportOptions",
    "ExportResult",
    "Fetcher",
    "Target",
    "UploadError",
    "build_upload_payload",
    "canonical_for_export",
    "export_all",
    "export_board",
    "fetch_asset",
    "get_target",
    "http_fetcher",
    "inspect_archive",
    "package_grid3",
    "package_grid3_beta",
    "package_obz",
    "package_obz_beta",
    "package_snap",
    "package_snap_beta",
    "package_touchchat",
    "package_touchchat_beta",
    "safe_filename",
    "upload_archive",
]
