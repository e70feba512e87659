"""Tests for the Open Board (OBZ) packager."""

import pytest

from aacboard.canonical import to_canonical
from aacboard.export._common import ExportOptions
from aacboard.export.inspect import inspect_archive
from aacboard.export.obz import PLACEHOLDER_IMAGE, board_paths, image_records, package_obz, package_obz_beta
from aacboard.model.ir import Board, Grid, Navigate, Page

from tests.export.conftest import _make_button, _read_json, _read_zip


def _buttons(obf):
    return {b["id"]: b for b in obf["buttons"]}


@pytest.mark.asyncio
async def test_layout(record, fetcher):
    files = _read_zip(await package_obz(record, fetcher))
    assert set(files) == {"manifest.json", "boards/home.obf", "boards/drinks.obf"}
    manifest = _read_json(files, "manifest.json")
    assert manifest["root"] == "boards/home.obf"
    assert manifest["paths"]["boards"] == {"home": "boards/home.obf", "drinks": "boards/drinks.obf"}
    assert fetcher.urls == []


@pytest.mark.asyncio
async def test_board(record, fetcher):
    obf = _read_json(_read_zip(await package_obz(record, fetcher)), "boards/home.obf")
    assert obf["format"] == "open-board-0.1"
    assert obf["locale"] == "en"
    assert obf["grid"] == {"rows": 2, "columns": 3, "order": [["eat", "go", "song"], ["web", "other", "mark"]]}
    assert [image["id"] for image in obf["images"]] == ["sym-1", "sym-2"]


@pytest.mark.asyncio
async def test_buttons(record, fetcher):
    files = _read_zip(await package_obz(record, fetcher))
    home = _buttons(_read_json(files, "boards/home.obf"))
    assert home["eat"]["background_color"] == "rgb(255, 0, 0)"
    assert home["eat"]["image_id"] == "sym-1"
    assert "vocalization" not in home["eat"]
    assert home["go"]["load_board"] == {"id": "drinks", "path": "boards/drinks.obf"}
    assert home["other"]["load_board"] == {"id": "other-board"}
    assert home["song"]["action"] == "+https://youtube.com/watch?v=abc123"
    assert home["web"]["action"] == "+https://example.com"
    assert "action" not in home["mark"]

    drinks = _buttons(_read_json(files, "boards/drinks.obf"))
    assert drinks["water"]["action"] == ":back"
    assert drinks["back"]["action"] == ":back"
    assert drinks["home-btn"]["action"] == ":home"
    assert (drinks["player"]["width"], drinks["player"]["height"]) == (2, 2)


def test_image_records(record):
    images = image_records(record, ExportOptions(symbol_base_url="https://cdn.test/s/"))
    assert images["sym-1"]["url"] == "https://cdn.test/s/eat.svg"
    assert images["sym-1"]["content_type"] == "image/svg+xml"
    assert images["sym-2"]["url"] == PLACEHOLDER_IMAGE


@pytest.mark.asyncio
async def test_beta_embeds_images(record, fetcher):
    files = _read_zip(await package_obz_beta(record, fetcher))
    assert _read_json(files, "master_aac.json") == record
    assert files["images/sym-1.svg"] == b"\x89PNG fake image"
    manifest = _read_json(files, "manifest.json")
    assert manifest["paths"]["images"]["sym-1"] == "images/sym-1.svg"
    assert len(fetcher.urls) == 4


@pytest.mark.asyncio
async def test_beta_skips_failed_images(record, failing_fetcher):
    files = _read_zip(await package_obz_beta(record, failing_fetcher))
    assert not [name for name in files if name.startswith("images/")]
    assert _read_json(files, "manifest.json")["paths"]["images"] == {}


def test_board_paths(record):
    assert board_paths(record) == {"home": "boards/home.obf", "drinks": "boards/drinks.obf"}


@pytest.mark.asyncio
async def test_clashing_page_ids_keep_separate_files(fetcher):
    first = Page(id="a:b", name="First", buttons=(_make_button("go", 0, 0, "Go", action=Navigate("a_b")),))
    second = Page(
        id="a_b",
        name="Second",
        buttons=(_make_button("one", 0, 0, "One"), _make_button("two", 0, 1, "Two")),
    )
    record = to_canonical(Board(name="Clash", grid=Grid(2, 2), pages=(first, second)))

    data = await package_obz(record, fetcher)
    files = _read_zip(data)
    manifest = _read_json(files, "manifest.json")
    assert manifest["paths"]["boards"] == {"a:b": "boards/a_b.obf", "a_b": "boards/a_b-1.obf"}
    assert _read_json(files, "boards/a_b.obf")["id"] == "a:b"
    assert _read_json(files, "boards/a_b-1.obf")["id"] == "a_b"
    go = _read_json(files, "boards/a_b.obf")["buttons"][0]
    assert go["load_board"] == {"id": "a_b", "path": "boards/a_b-1.obf"}

    summary = inspect_archive(data, "obz")
    assert (summary.pages, summary.buttons) == (2, 3)
