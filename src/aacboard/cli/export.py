"""Handlers for 'aacboard export', 'aacboard inspect' and 'aacboard formats'."""

import asyncio
from pathlib import Path

from aacboard.cli._common import error, load_board_or_die, load_config_or_die, output_json, output_result
from aacboard.errors import AacBoardError
from aacboard.export import (
    TARGETS,
    ExportOptions,
    export_all,
    export_board,
    get_target,
    http_fetcher,
    inspect_archive,
    upload_archive,
)
from aacboard.workspace import make_local


def export_file(args) -> int:
    """Package a board for one format (or every format with --all).

    With --upload each archive is also posted to the configured upload-url
    after it is written.
    """
    board = load_board_or_die(args.file, args.json)
    config = load_config_or_die(args)
    settings = config["aacboard"]
    options = ExportOptions.from_config(config)
    fetcher = http_fetcher(settings["fetch_timeout"])
    authors = (settings["author"],) if settings["author"] else ()
    local = make_local(board)

    if args.all:
        targets = [t for t in TARGETS if t.beta == args.beta]
    elif args.format:
        targets = [get_target(args.format, args.beta)]
    else:
        error("choose a --format or --all", args.json)

    try:
        if len(targets) == 1:
            results = [asyncio.run(export_board(local, targets[0], fetcher, options, settings["locale"], authors))]
        else:
            results = asyncio.run(export_all(local, targets, fetcher, options, settings["locale"], authors))
    except AacBoardError as e:
        error(str(e), args.json)

    out_dir = Path(args.output)
    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for result in results:
        path = out_dir / result.filename
        path.write_bytes(result.data)
        written.append({"format": result.target.key, "path": str(path), "bytes": len(result.data)})

    if args.upload:
        try:
            asyncio.run(_upload_all(results, settings["upload_url"], settings["fetch_timeout"]))
        except AacBoardError as e:
            error(str(e), args.json)
        for item in written:
            item["uploaded"] = True

    if args.json:
        output_json(written)
    else:
        for item in written:
            uploaded = " uploaded" if item.get("uploaded") else ""
            print(f"{item['format']:<16} {item['path']} ({item['bytes']} bytes){uploaded}")
    return 0


async def _upload_all(results, url: str, timeout: float) -> list:
    return await asyncio.gather(*(upload_archive(result, url, timeout) for result in results))


def inspect_file(args) -> int:
    """Summarize a packaged archive."""
    try:
        summary = inspect_archive(Path(args.file).read_bytes(), args.format)
    except (OSError, AacBoardError) as e:
        error(str(e), args.json)

    grids = ", ".join(f"{r}x{c}" for r, c in summary.grids)
    output_result(
        summary.to_dict(),
        f"{summary.family}: {summary.pages} pages, {summary.buttons} buttons, grids {grids}",
        args.json,
    )
    return 0


def list_formats(args) -> int:
    """List the export targets."""
    items = [
        {"format": t.family, "beta": t.beta, "extension": t.extension, "label": t.label} for t in TARGETS
    ]
    if args.json:
        output_json(items)
    else:
        for item in items:
            beta = "  --beta" if item["beta"] else ""
            print(f"{item['format']:<10} {item['extension']:<11} {item['label']}{beta}")
    return 0
