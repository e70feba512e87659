"""Tests for the Grid 3 packager."""

import json
import re
from xml.etree import ElementTree as ET

import pytest

from aacboard.export.grid3 import DEFAULT_SYMBOL, grid3_symbol, grid_names, package_grid3, package_grid3_beta

from tests.export.conftest import _read_zip


def _cells(files, grid):
    root = ET.fromstring(files[f"Grids/{grid}/grid.xml"])
    return root.findall("Cells/Cell")


def _commands(cell):
    return [c.get("ID") for c in cell.findall("Content/Commands/Command")]


def _param(cell, key):
    return cell.find(f"Content/Commands/Command/Parameter[@Key='{key}']").text


@pytest.mark.asyncio
async def test_layout(record, fetcher):
    files = _read_zip(await package_grid3(record, fetcher))
    assert set(files) == {
        "Grids/Home/grid.xml",
        "Grids/Drinks/grid.xml",
        "Settings0/settings.xml",
        "Settings0/Styles/styles.xml",
        "Settings0/thumbnail.png",
        "FileMap.xml",
    }
    assert files["Settings0/thumbnail.png"] == b"\x89PNG fake image"
    assert fetcher.urls == ["https://aacboard.app/assets/thumbnail.png"]


@pytest.mark.asyncio
async def test_grid_dimensions(record, fetcher):
    files = _read_zip(await package_grid3(record, fetcher))
    root = ET.fromstring(files["Grids/Drinks/grid.xml"])
    assert len(root.findall("ColumnDefinitions/ColumnDefinition")) == 3
    assert len(root.findall("RowDefinitions/RowDefinition")) == 3
    assert root.find("GridGuid").text


@pytest.mark.asyncio
async def test_cells(record, fetcher):
    files = _read_zip(await package_grid3(record, fetcher))
    cells = {c.find("Content/CaptionAndImage/Caption").text: c for c in _cells(files, "Home")}

    eat = cells["Eat"]
    assert (eat.get("X"), eat.get("Y")) == ("0", "0")
    assert _commands(eat) == ["Action.InsertText"]
    assert eat.find("Content/CaptionAndImage/Image").text == "[widgit]widgit rebus\\e\\eat.emf"
    assert eat.find("Content/Style/BackColour").text == "#FF0000FF"
    assert eat.find("Content/Commands/Command/Parameter[@Key='text']/p/s/r").text == "Eat"

    assert _commands(cells["Drinks"]) == ["Jump.To"]
    assert _param(cells["Drinks"], "grid") == "Drinks"
    assert _param(cells["Song"], "url") == "http://youtube.sensorysoftware.com/play.html?abc123"
    assert _param(cells["Website"], "url") == "https://example.com"
    assert _commands(cells["Other"]) == ["Settings.ChangeGridSet"]
    assert _param(cells["Other"], "gridsetname") == "other-board"
    assert _commands(cells["Mark"]) == ["Jump.SetBookmark"]


@pytest.mark.asyncio
async def test_self_closing_and_spans(record, fetcher):
    files = _read_zip(await package_grid3(record, fetcher))
    cells = {c.find("Content/CaptionAndImage/Caption").text: c for c in _cells(files, "Drinks")}
    assert _commands(cells["Water"]) == ["Action.InsertText", "Jump.Back"]
    assert _commands(cells["Back"]) == ["Jump.Back"]
    assert _commands(cells["Home"]) == ["Jump.Home"]
    player = cells["Wheels"]
    assert (player.get("X"), player.get("Y")) == ("1", "1")
    assert (player.get("ColumnSpan"), player.get("RowSpan")) == ("2", "2")


@pytest.mark.asyncio
async def test_settings_and_file_map(record, fetcher):
    files = _read_zip(await package_grid3(record, fetcher))
    settings = ET.fromstring(files["Settings0/settings.xml"])
    assert settings.find("StartGrid").text == "Home"
    assert settings.find("Language").text == "en-US"
    assert settings.find("Thumbnail").text == ".png"
    assert settings.find("Comment") is None

    file_map = ET.fromstring(files["FileMap.xml"])
    static = [e.get("StaticFile") for e in file_map.iter("Entry")]
    assert static == ["Settings0\\settings.xml", "Grids\\Home\\grid.xml", "Grids\\Drinks\\grid.xml"]
    assert [f.text for f in file_map.iter("File")] == ["Settings0\\thumbnail.png"]


@pytest.mark.asyncio
async def test_thumbnail_failure_is_skipped(record, failing_fetcher):
    files = _read_zip(await package_grid3(record, failing_fetcher))
    assert "Settings0/thumbnail.png" not in files
    settings = ET.fromstring(files["Settings0/settings.xml"])
    assert settings.find("Thumbnail").text == DEFAULT_SYMBOL
    assert list(ET.fromstring(files["FileMap.xml"]).iter("File")) == []


@pytest.mark.asyncio
async def test_beta_embeds_record(record, fetcher):
    files = _read_zip(await package_grid3_beta(record, fetcher))
    assert json.loads(files["master_aac.json"]) == record
    settings = ET.fromstring(files["Settings0/settings.xml"])
    assert settings.find("Comment") is not None


@pytest.mark.asyncio
async def test_repeatable_apart_from_grid_guid(record, fetcher):
    first = _read_zip(await package_grid3(record, fetcher))
    second = _read_zip(await package_grid3(record, fetcher))
    strip = re.compile(rb"<GridGuid>[^<]*</GridGuid>")
    assert first.keys() == second.keys()
    for name in first:
        assert strip.sub(b"", first[name]) == strip.sub(b"", second[name])


def test_grid_names_are_unique():
    record = {"boards": [{"id": "a", "name": "Home"}, {"id": "b", "name": "Home"}, {"id": "c", "name": "Eat/Drink"}]}
    assert grid_names(record) == {"a": "Home", "b": "Home-1", "c": "Eat_Drink"}


def test_symbol_lookup():
    assert grid3_symbol("Thank You") == "[widgit]widgit rebus\\t\\thank you.emf"
    assert grid3_symbol("zebra") == "[widgit]widgit rebus\\z\\zebra.emf"
    assert grid3_symbol("") == DEFAULT_SYMBOL
