"""Button-level operations on the active board."""

from __future__ import annotations

from dataclasses import replace

from aacboard.ids import button_id as new_button_id
from aacboard.model.ir import Button, Grid, Page
from aacboard.workspace.state import WorkspaceState, commit_board, edit_page


def find_free_cell(page: Page, grid: Grid, row: int, col: int) -> tuple[int, int] | None:
    """First unoccupied cell at or after (row, col) in row-major order.

    Columns advance first; when a row is exhausted the scan wraps to
    column 0 of the next row. Returns None once the grid runs out.
    """
    occupied = page.occupied()
    for player in page.video_players:
        for r in range(player.row, player.row + player.row_span):
            for c in range(player.col, player.col + player.col_span):
                occupied.add((r, c))
    while row < grid.rows:
        while col < grid.cols:
            if (row, col) not in occupied:
                return row, col
            col += 1
        row += 1
        col = 0
    return None


def add_button(state: WorkspaceState, button: Button) -> WorkspaceState:
    """Append a button to the current page and select it.

    A button without an id is given a fresh one.
    """
    active = state.active
    page = state.current_page
    if active is None or page is None:
        return state
    if not button.id:
        button = replace(button, id=new_button_id())
    board = edit_page(active.board, page.id, buttons=page.buttons + (button,))
    return commit_board(state, active, board, selected_button_id=button.id)


def update_button(state: WorkspaceState, button_id: str, **changes) -> WorkspaceState:
    """Replace fields on a button wherever it lives on the active board."""
    active = state.active
    if active is None or active.board.find_button(button_id) is None:
        return state
    pages = tuple(
        replace(p, buttons=tuple(replace(b, **changes) if b.id == button_id else b for b in p.buttons))
        for p in active.board.pages
    )
    return commit_board(state, active, replace(active.board, pages=pages))


def delete_button(state: WorkspaceState, button_id: str) -> WorkspaceState:
    active = state.active
    if active is None or active.board.find_button(button_id) is None:
        return state
    pages = tuple(replace(p, buttons=tuple(b for b in p.buttons if b.id != button_id)) for p in active.board.pages)
    selected = None if state.selected_button_id == button_id else state.selected_button_id
    return commit_board(state, active, replace(active.board, pages=pages), selected_button_id=selected)


def duplicate_button(state: WorkspaceState, button_id: str) -> WorkspaceState:
    """Copy a button into the next free cell of the current page.

    The scan starts just right of the source button (see find_free_cell).
    On a full grid nothing happens.
    """
    board = state.board
    page = state.current_page
    if board is None or page is None:
        return state
    found = board.find_button(button_id, prefer_page_id=page.id)
    if found is None:
        return state
    source = found[1]
    cell = find_free_cell(page, page.grid_for(board.grid), source.row, source.col + 1)
    if cell is None:
        return state
    row, col = cell
    copy = replace(source, id=new_button_id(), row=row, col=col, label=f"{source.label} Copy")
    return add_button(state, copy)


def select_button(state: WorkspaceState, button_id: str | None) -> WorkspaceState:
    if state.selected_button_id == button_id:
        return state
    return replace(state, selected_button_id=button_id)


def set_edit_mode(state: WorkspaceState, edit_mode: bool) -> WorkspaceState:
    if state.edit_mode == edit_mode:
        return state
    return replace(state, edit_mode=edit_mode)
