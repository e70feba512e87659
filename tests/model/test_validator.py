"""Tests for the board validator."""

from dataclasses import replace

from aacboard.model.ir import Grid, Link, Navigate, OpenUrl, PlayVideo, Speak, UnknownAction, VideoPlayer
from aacboard.model.validator import validate

from tests.model.conftest import _make_board, _make_button, _make_page


def test_valid_board():
    result = validate(_make_board())
    assert result.is_valid
    assert result.errors == ()


def test_unresolved_navigate_target():
    button = _make_button("b1", action=Navigate("missing-page"))
    result = validate(_make_board([_make_page("P1", [button])]))
    assert not result.is_valid
    assert any("missing-page" in e for e in result.errors)


def test_empty_board_name():
    result = validate(_make_board(name=""))
    assert not result.is_valid
    assert "Board must have a name" in result.errors


def test_navigate_checked_across_all_pages():
    p1 = _make_page("P1", [_make_button("b1", action=Navigate("P2"))])
    p2 = _make_page("P2", [_make_button("b2", action=Navigate("P1"))])
    assert validate(_make_board([p1, p2])).is_valid


def test_grid_bounds():
    assert "Board must have valid grid dimensions" in validate(_make_board(rows=0)).errors
    assert "Grid dimensions cannot exceed 25x25" in validate(_make_board(cols=26)).errors
    assert validate(_make_board(rows=25, cols=25)).is_valid


def test_no_pages():
    result = validate(_make_board(pages=[]))
    assert "Board must have at least one page" in result.errors


def test_page_needs_name():
    result = validate(_make_board([_make_page("P1", [_make_button("b1")], name="")]))
    assert "Page 1 must have a name" in result.errors


def test_button_out_of_bounds():
    button = _make_button("b1", row=2, col=0, label="Eat")
    result = validate(_make_board([_make_page("P1", [button])]))
    assert 'Page 1, Button "Eat": Row 2 is outside grid bounds (0-1)' in result.errors


def test_bounds_use_page_layout():
    button = _make_button("b1", row=3, col=3)
    page = _make_page("P1", [button], layout=Grid(4, 4))
    assert validate(_make_board([page], rows=2, cols=2)).is_valid


def test_duplicate_position():
    page = _make_page("P1", [_make_button("a", 1, 1), _make_button("b", 1, 1)])
    result = validate(_make_board([page]))
    assert "Page 1: Multiple buttons at position (1, 1)" in result.errors


def test_button_missing_id_and_label():
    page = _make_page("P1", [replace(_make_button("x"), id="", label="")])
    errors = validate(_make_board([page])).errors
    assert "Page 1, Button 1: Button must have an ID" in errors
    assert "Page 1, Button 1: Button must have a label" in errors


def test_action_missing_fields():
    buttons = [
        _make_button("a", 0, 0, action=Speak("")),
        _make_button("b", 0, 1, action=Navigate("")),
        _make_button("c", 1, 0, action=Link("")),
        _make_button("d", 1, 1, action=PlayVideo("")),
    ]
    errors = validate(_make_board([_make_page("P1", buttons)])).errors
    assert any("Speak action must have text" in e for e in errors)
    assert any("Navigate action must have target page ID" in e for e in errors)
    assert any("Link action must have target board ID" in e for e in errors)
    assert any("Video action must have a video ID" in e for e in errors)


def test_open_url_needs_url():
    page = _make_page("P1", [_make_button("a", action=OpenUrl(""))])
    assert any("Open URL action must have a URL" in e for e in validate(_make_board([page])).errors)


def test_unknown_action_is_an_error():
    page = _make_page("P1", [_make_button("a", action=UnknownAction("teleport"))])
    result = validate(_make_board([page]))
    assert not result.is_valid
    assert any("Unknown action type 'teleport'" in e for e in result.errors)


def test_warnings_do_not_block():
    button = _make_button("a", label="x" * 51, color="not-a-color", spoken_text="y" * 201)
    result = validate(_make_board([_make_page("P1", [button]), _make_page("P2")]))
    assert result.is_valid
    assert len(result.warnings) == 4
    assert any("may not be valid" in w for w in result.warnings)
    assert "Page 2 has no buttons" in result.warnings


def test_named_and_alpha_colors_are_valid():
    buttons = [_make_button("a", 0, 0, color="red"), _make_button("b", 0, 1, color="#3B82F6FF")]
    assert validate(_make_board([_make_page("P1", buttons)])).warnings == ()


def test_video_player_must_fit_and_not_overlap():
    player = VideoPlayer("v1", row=0, col=0, video_id="abc", row_span=2, col_span=2)
    page = _make_page("P1", [_make_button("a", 1, 1)], video_players=(player,))
    errors = validate(_make_board([page])).errors
    assert "Page 1: Multiple buttons at position (1, 1)" in errors

    too_big = VideoPlayer("v2", row=1, col=1, video_id="abc", row_span=2, col_span=1)
    errors = validate(_make_board([_make_page("P1", video_players=(too_big,))])).errors
    assert any("does not fit" in e for e in errors)


def test_validate_does_not_mutate():
    board = _make_board([_make_page("P1", [_make_button("a", 5, 5)])])
    snapshot = replace(board)
    validate(board)
    validate(board)
    assert board == snapshot
