"""Structural validation of a Board IR.

Errors block export; warnings are advisory. ``validate`` is pure: it
never touches its input and may be called as often as needed.
"""

from dataclasses import dataclass
from typing import assert_never

from aacboard.model.ir import (
    MAX_GRID,
    MIN_GRID,
    Back,
    Board,
    Bookmark,
    Button,
    Grid,
    Home,
    Link,
    Navigate,
    OpenUrl,
    Page,
    PlayVideo,
    Speak,
    UnknownAction,
)
from aacboard.palette import is_valid_color

MAX_LABEL_LENGTH = 50
MAX_SPOKEN_TEXT_LENGTH = 200


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()


NO_BOARD = ValidationResult(is_valid=False, errors=("No board loaded",))


def _blank(value: str | None) -> bool:
    return not value or not value.strip()


def _action_errors(action, where: str) -> list[str]:
    match action:
        case None | Back() | Bookmark() | Home():
            return []
        case Speak(text=text):
            return [f"{where}: Speak action must have text"] if _blank(text) else []
        case Navigate(to_page_id=to_page_id):
            return [f"{where}: Navigate action must have target page ID"] if _blank(to_page_id) else []
        case Link(to_board_id=to_board_id):
            return [f"{where}: Link action must have target board ID"] if _blank(to_board_id) else []
        case PlayVideo(video_id=video_id):
            return [f"{where}: Video action must have a video ID"] if _blank(video_id) else []
        case OpenUrl(url=url):
            return [f"{where}: Open URL action must have a URL"] if _blank(url) else []
        case UnknownAction(type=kind):
            return [f"{where}: Unknown action type {kind!r}"]
        case _:
            assert_never(action)


def _check_button(button: Button, grid: Grid, page_no: int, button_no: int, errors: list, warnings: list) -> None:
    if _blank(button.id):
        errors.append(f"Page {page_no}, Button {button_no}: Button must have an ID")
    if _blank(button.label):
        errors.append(f"Page {page_no}, Button {button_no}: Button must have a label")

    where = f'Page {page_no}, Button "{button.label}"'
    if button.label and len(button.label) > MAX_LABEL_LENGTH:
        warnings.append(f"{where}: Label is very long and may not display properly")

    if not 0 <= button.row < grid.rows:
        errors.append(f"{where}: Row {button.row} is outside grid bounds (0-{grid.rows - 1})")
    if not 0 <= button.col < grid.cols:
        errors.append(f"{where}: Column {button.col} is outside grid bounds (0-{grid.cols - 1})")

    if button.color and not is_valid_color(button.color):
        warnings.append(f'{where}: Color "{button.color}" may not be valid')
    if button.spoken_text and len(button.spoken_text) > MAX_SPOKEN_TEXT_LENGTH:
        warnings.append(f"{where}: Spoken text is very long")

    errors.extend(_action_errors(button.action, where))


def _check_page(page: Page, board_grid: Grid, page_no: int, errors: list, warnings: list) -> None:
    if _blank(page.name):
        errors.append(f"Page {page_no} must have a name")

    grid = page.grid_for(board_grid)
    if page.layout and not (MIN_GRID <= grid.rows <= MAX_GRID and MIN_GRID <= grid.cols <= MAX_GRID):
        errors.append(f"Page {page_no} layout must be between {MIN_GRID}x{MIN_GRID} and {MAX_GRID}x{MAX_GRID}")
    occupied: set[tuple[int, int]] = set()
    for button_no, button in enumerate(page.buttons, start=1):
        _check_button(button, grid, page_no, button_no, errors, warnings)
        pos = (button.row, button.col)
        if pos in occupied:
            errors.append(f"Page {page_no}: Multiple buttons at position ({button.row}, {button.col})")
        occupied.add(pos)

    for player in page.video_players:
        where = f'Page {page_no}, Video "{player.title or player.id}"'
        if _blank(player.video_id):
            errors.append(f"{where}: Video player must have a video ID")
        if player.row < 0 or player.col < 0 or player.row + player.row_span > grid.rows or player.col + player.col_span > grid.cols:
            errors.append(f"{where}: Video player does not fit inside the grid")
            continue
        for r in range(player.row, player.row + player.row_span):
            for c in range(player.col, player.col + player.col_span):
                if (r, c) in occupied:
                    errors.append(f"Page {page_no}: Multiple buttons at position ({r}, {c})")
                occupied.add((r, c))

    if not page.buttons and not page.video_players:
        warnings.append(f"Page {page_no} has no buttons")


def _navigation_errors(board: Board) -> list[str]:
    """Navigate targets must exist somewhere on the board, not just this page."""
    page_ids = board.page_ids
    errors = []
    for page_no, page in enumerate(board.pages, start=1):
        for button in page.buttons:
            action = button.action
            if isinstance(action, Navigate) and not _blank(action.to_page_id) and action.to_page_id not in page_ids:
                errors.append(
                    f'Page {page_no}, Button "{button.label}": References non-existent page "{action.to_page_id}"'
                )
    return errors


def validate(board: Board) -> ValidationResult:
    """Check a board against its structural invariants."""
    errors: list[str] = []
    warnings: list[str] = []

    if _blank(board.name):
        errors.append("Board must have a name")

    if board.grid.rows < MIN_GRID or board.grid.cols < MIN_GRID:
        errors.append("Board must have valid grid dimensions")
    if board.grid.rows > MAX_GRID or board.grid.cols > MAX_GRID:
        errors.append(f"Grid dimensions cannot exceed {MAX_GRID}x{MAX_GRID}")

    if not board.pages:
        errors.append("Board must have at least one page")

    for page_no, page in enumerate(board.pages, start=1):
        _check_page(page, board.grid, page_no, errors, warnings)

    errors.extend(_navigation_errors(board))

    return ValidationResult(is_valid=not errors, errors=tuple(errors), warnings=tuple(warnings))
