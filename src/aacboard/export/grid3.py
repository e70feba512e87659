"""Grid 3 gridset packager (.gridset).

Each canonical board becomes ``Grids/<name>/grid.xml``. Settings,
styles and the FileMap sit alongside, with the cover thumbnail embedded
when it can be fetched.
"""

from __future__ import annotations

import uuid
from typing import Any
from xml.etree import ElementTree as ET

from aacboard.export._common import (
    MASTER_FILENAME,
    Archive,
    ExportOptions,
    Fetcher,
    first_action,
    optional_asset,
    packager,
    safe_filename,
    symbol_entry,
    symbol_lookup,
    video_ref,
    xml_element,
)
from aacboard.ids import unique_id
from aacboard.palette import FALLBACK_GRID3_COLOR, to_argb

XSI = "http://www.w3.org/2001/XMLSchema-instance"
DEFAULT_SYMBOL = "[widgit]widgit rebus\\c\\communicate.emf"
VIDEO_SYMBOL = "[widgit]widgit rebus\\v\\video.emf"
YOUTUBE_PLAYER = "http://youtube.sensorysoftware.com/play.html?{}"
BORDER_COLOUR = "#646464FF"
FONT_COLOUR = "#000000FF"
VOCAB_STYLE = "Vocab cell"

GRID3_SYMBOLS = {
    "hungry": "[sstix#]2724.emf",
    "eat": "[widgit]widgit rebus\\e\\eat.emf",
    "food": "[widgit]widgit rebus\\f\\food.emf",
    "drink": "[widgit]widgit rebus\\d\\drink.emf",
    "thirsty": "[widgit]widgit rebus\\t\\thirsty.emf",
    "water": "[widgit]widgit rebus\\w\\water.emf",
    "more": "[widgit]widgit rebus\\m\\more 1.emf",
    "finished": "[widgit]widgit rebus\\f\\finish.emf",
    "done": "[widgit]widgit rebus\\f\\finish.emf",
    "yes": "[widgit]widgit rebus\\y\\yes.emf",
    "no": "[widgit]widgit rebus\\n\\no.emf",
    "help": "[widgit]widgit rebus\\h\\help.emf",
    "happy": "[widgit]widgit rebus\\h\\happy.emf",
    "sad": "[widgit]widgit rebus\\s\\sad.emf",
    "love": "[widgit]widgit rebus\\l\\love.emf",
    "want": "[widgit]widgit rebus\\w\\want.emf",
    "need": "[widgit]widgit rebus\\n\\need.emf",
    "play": "[widgit]widgit rebus\\p\\play.emf",
    "tv": "[widgit]widgit rebus\\t\\tv.emf",
    "television": "[widgit]widgit rebus\\t\\tv.emf",
    "video": "[widgit]widgit rebus\\v\\video.emf",
    "music": "[widgit]widgit rebus\\m\\music.emf",
    "outside": "[widgit]widgit rebus\\o\\outside.emf",
    "sleep": "[widgit]widgit rebus\\s\\sleep.emf",
    "tired": "[widgit]widgit rebus\\t\\tired.emf",
    "mom": "[widgit]widgit rebus\\m\\mum.emf",
    "mum": "[widgit]widgit rebus\\m\\mum.emf",
    "mother": "[widgit]widgit rebus\\m\\mum.emf",
    "dad": "[widgit]widgit rebus\\d\\dad.emf",
    "father": "[widgit]widgit rebus\\d\\dad.emf",
    "family": "[widgit]widgit rebus\\f\\family.emf",
    "home": "[widgit]widgit rebus\\h\\home.emf",
    "house": "[widgit]widgit rebus\\h\\home.emf",
    "good": "[widgit]widgit rebus\\g\\good.emf",
    "bad": "[widgit]widgit rebus\\b\\bad.emf",
    "hot": "[widgit]widgit rebus\\h\\hot.emf",
    "cold": "[widgit]widgit rebus\\s\\shiver.emf",
    "toilet": "[widgit]widgit rebus\\t\\toilet.emf",
    "bathroom": "[widgit]widgit rebus\\t\\toilet.emf",
    "please": "[widgit]widgit rebus\\p\\please.emf",
    "thank you": "[widgit]widgit rebus\\t\\thank you.emf",
    "thanks": "[widgit]widgit rebus\\t\\thank you.emf",
    "hello": "[widgit]widgit rebus\\h\\hello.emf",
    "hi": "[widgit]widgit rebus\\h\\hello.emf",
    "goodbye": "[widgit]widgit rebus\\g\\goodbye.emf",
    "bye": "[widgit]widgit rebus\\g\\goodbye.emf",
    "wash": "[widgit]widgit rebus\\w\\wash.emf",
    "go": "[widgit]widgit rebus\\g\\go.emf",
    "wait": "[widgit]widgit rebus\\w\\wait.emf",
    "scared": "[widgit]widgit rebus\\s\\scared.emf",
    "stop": "[widgit]widgit rebus\\s\\stop.emf",
    "angry": "[widgit]widgit rebus\\a\\angry.emf",
    "confused": "[widgit]widgit rebus\\c\\confused.emf",
    "surprised": "[widgit]widgit rebus\\s\\surprised.emf",
    "excited": "[widgit]widgit rebus\\e\\excited.emf",
    "calm": "[widgit]widgit rebus\\c\\calm.emf",
}


def _widgit_path(name: str) -> str:
    if not name:
        return DEFAULT_SYMBOL
    return f"[widgit]widgit rebus\\{name[0]}\\{name}.emf"


grid3_symbol = symbol_lookup(GRID3_SYMBOLS, _widgit_path)


def grid_names(record: dict[str, Any]) -> dict[str, str]:
    """Map each canonical board id to a unique, filesystem-safe grid name."""
    names: dict[str, str] = {}
    for board in record["boards"]:
        names[board["id"]] = unique_id(safe_filename(board["name"]), set(names.values()))
    return names


def _command(commands: ET.Element, command_id: str, **params: str) -> ET.Element:
    command = xml_element(commands, "Command", ID=command_id)
    for key, value in params.items():
        xml_element(command, "Parameter", value, Key=key)
    return command


def _insert_text(commands: ET.Element, text: str, image: str) -> None:
    command = _command(commands, "Action.InsertText", indicatorenabled="1")
    param = xml_element(command, "Parameter", Key="text")
    p = xml_element(param, "p")
    xml_element(xml_element(p, "s", Image=image), "r", text)
    xml_element(xml_element(p, "s"), "r", " ")
    xml_element(command, "Parameter", "Yes", Key="showincelllabel")


def _add_commands(
    commands: ET.Element,
    action: dict[str, Any],
    cell: dict[str, Any],
    record: dict[str, Any],
    names: dict[str, str],
    image: str,
) -> None:
    kind = action["type"]
    if kind == "speak":
        _insert_text(commands, action.get("text") or cell["label"], image)
    elif kind == "navigate":
        _command(commands, "Jump.To", grid=names.get(action["target_board_id"], action["target_board_id"]))
    elif kind == "link":
        target = action["target_set_id"]
        if target in names:
            _command(commands, "Jump.To", grid=names[target])
        else:
            _command(commands, "Settings.ChangeGridSet", gridsetname=target)
    elif kind == "back":
        _command(commands, "Jump.Back")
    elif kind == "home":
        _command(commands, "Jump.Home")
    elif kind == "bookmark":
        _command(commands, "Jump.SetBookmark")
    elif kind == "play_video":
        _command(commands, "WebBrowser.NavigateUrl", url=YOUTUBE_PLAYER.format(video_ref(record, action["video_id"])))
    elif kind == "open_url":
        _command(commands, "WebBrowser.NavigateUrl", url=action["url"])
    else:
        _insert_text(commands, cell.get("speak") or cell["label"], image)


def _cell_image(record: dict[str, Any], cell: dict[str, Any]) -> str:
    if cell.get("video_id") and not cell.get("symbol_id"):
        return VIDEO_SYMBOL
    symbol = symbol_entry(record, cell)
    return grid3_symbol(symbol["ref"] if symbol else cell["label"])


def _cell_xml(cells: ET.Element, cell: dict[str, Any], record: dict[str, Any], names: dict[str, str]) -> None:
    attrs = {"X": str(cell["col"] - 1), "Y": str(cell["row"] - 1)}
    if cell.get("col_span", 1) > 1:
        attrs["ColumnSpan"] = str(cell["col_span"])
    if cell.get("row_span", 1) > 1:
        attrs["RowSpan"] = str(cell["row_span"])
    element = xml_element(cells, "Cell", **attrs)
    content = xml_element(element, "Content")
    commands = xml_element(content, "Commands")
    image = _cell_image(record, cell)
    action = first_action(cell)
    _add_commands(commands, action, cell, record, names, image)
    if cell.get("self_closing") and action["type"] != "back":
        _command(commands, "Jump.Back")

    caption = xml_element(content, "CaptionAndImage")
    xml_element(caption, "Caption", cell["label"] or "Button")
    xml_element(caption, "Image", image)
    style = xml_element(content, "Style")
    xml_element(style, "BasedOnStyle", VOCAB_STYLE)
    xml_element(style, "BackColour", to_argb(cell.get("style", {}).get("bg")))


def grid_xml(board: dict[str, Any], record: dict[str, Any], names: dict[str, str]) -> ET.Element:
    root = ET.Element("Grid", {"xmlns:xsi": XSI})
    xml_element(root, "GridGuid", str(uuid.uuid4()))
    columns = xml_element(root, "ColumnDefinitions")
    for _ in range(board["layout"]["cols"]):
        xml_element(columns, "ColumnDefinition")
    rows = xml_element(root, "RowDefinitions")
    for _ in range(board["layout"]["rows"]):
        xml_element(rows, "RowDefinition")
    xml_element(root, "AutoContentCommands")
    cells = xml_element(root, "Cells")
    for cell in board["cells"]:
        _cell_xml(cells, cell, record, names)
    xml_element(root, "ScanBlockAudioDescriptions")
    xml_element(xml_element(root, "WordList"), "Items")
    return root


def settings_xml(record: dict[str, Any], start_grid: str, thumbnail: bool, comment: str | None = None) -> ET.Element:
    root = ET.Element("GridSetSettings", {"xmlns:xsi": XSI})
    keys = xml_element(xml_element(root, "PictureSearch"), "PictureSearchKeys")
    for key in ("widgit", "sstix#", "mjpcs#", "ssnaps"):
        xml_element(keys, "PictureSearchKey", key)
    xml_element(xml_element(root, "Appearance"), "Theme", "Kids")
    xml_element(root, "StartGrid", start_grid)
    xml_element(root, "Language", record["meta"]["locale"])
    cover = record.get("cover") or {}
    xml_element(root, "ThumbnailBackground", to_argb(cover.get("bg"), "#FFFFFFFF"))
    xml_element(root, "Thumbnail", ".png" if thumbnail else DEFAULT_SYMBOL)
    xml_element(root, "GridSetFileFormatVersion", "1")
    if comment:
        xml_element(root, "Comment", comment)
    return root


def styles_xml(cell_colour: str = FALLBACK_GRID3_COLOR) -> ET.Element:
    root = ET.Element("StyleData", {"xmlns:xsi": XSI})
    styles = xml_element(root, "Styles")
    xml_element(styles, "Style", Key="Default")
    vocab = xml_element(styles, "Style", Key=VOCAB_STYLE)
    xml_element(vocab, "BackColour", cell_colour)
    xml_element(vocab, "BorderColour", BORDER_COLOUR)
    xml_element(vocab, "FontColour", FONT_COLOUR)
    return root


def file_map_xml(names: dict[str, str], thumbnail: bool) -> ET.Element:
    root = ET.Element("FileMap", {"xmlns:xsi": XSI})
    entries = xml_element(root, "Entries")
    settings = xml_element(entries, "Entry", StaticFile="Settings0\\settings.xml")
    dynamic = xml_element(settings, "DynamicFiles")
    if thumbnail:
        xml_element(dynamic, "File", "Settings0\\thumbnail.png")
    for name in names.values():
        entry = xml_element(entries, "Entry", StaticFile=f"Grids\\{name}\\grid.xml")
        xml_element(entry, "DynamicFiles")
    return root


async def _build(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions, beta: bool) -> Archive:
    archive = Archive("grid3-beta" if beta else "grid3")
    names = grid_names(record)
    thumbnail = await optional_asset(fetcher, options.thumbnail_url)

    if beta:
        archive.add_json(MASTER_FILENAME, record)
    for board in record["boards"]:
        archive.add_xml(f"Grids/{names[board['id']]}/grid.xml", grid_xml(board, record, names))

    start_grid = names[record["boards"][0]["id"]]
    comment = "Generated from the canonical board record by aacboard" if beta else None
    archive.add_xml("Settings0/settings.xml", settings_xml(record, start_grid, thumbnail is not None, comment))

    colour = FALLBACK_GRID3_COLOR
    if beta:
        theme = record["boards"][0]["layout"].get("theme") or {}
        colour = to_argb(theme.get("default_cell_color"))
    archive.add_xml("Settings0/Styles/styles.xml", styles_xml(colour))
    archive.add_xml("FileMap.xml", file_map_xml(names, thumbnail is not None))
    if thumbnail is not None:
        archive.add_bytes("Settings0/thumbnail.png", thumbnail)
    return archive


@packager("grid3")
async def package_grid3(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, fetcher, options, beta=False)


@packager("grid3-beta")
async def package_grid3_beta(record: dict[str, Any], fetcher: Fetcher, options: ExportOptions) -> Archive:
    return await _build(record, fetcher, options, beta=True)
