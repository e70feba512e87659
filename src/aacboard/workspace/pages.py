"""Page-level operations on the active board."""

from __future__ import annotations

from dataclasses import replace

from aacboard.ids import page_id as new_page_id
from aacboard.model.ir import Page
from aacboard.workspace.state import WorkspaceState, commit_board, edit_page


def add_page(state: WorkspaceState, name: str | None = None, page_id: str | None = None) -> WorkspaceState:
    """Append a page with the board's grid and make it current."""
    active = state.active
    if active is None:
        return state
    board = active.board
    page = Page(
        id=page_id or new_page_id(),
        name=name or f"Page {len(board.pages) + 1}",
        layout=board.grid,
    )
    board = replace(board, pages=board.pages + (page,))
    return commit_board(state, active, board, current_page_id=page.id, selected_button_id=None)


def rename_page(state: WorkspaceState, page_id: str, name: str) -> WorkspaceState:
    active = state.active
    if active is None or active.board.page(page_id) is None:
        return state
    return commit_board(state, active, edit_page(active.board, page_id, name=name))


def delete_page(state: WorkspaceState, page_id: str) -> WorkspaceState:
    """Delete a page; the last remaining page can never be deleted.

    Deleting the current page moves to the page now at the same index
    (or the last page). Otherwise the current page is kept if it still
    exists, else the first page becomes current.
    """
    active = state.active
    if active is None:
        return state
    board = active.board
    if len(board.pages) <= 1:
        return state
    index = board.page_index(page_id)
    if index == -1:
        return state

    pages = tuple(p for p in board.pages if p.id != page_id)
    current = state.current_page_id
    if current is None or current == page_id:
        current = pages[min(index, len(pages) - 1)].id
    elif not any(p.id == current for p in pages):
        current = pages[0].id

    return commit_board(
        state,
        active,
        replace(board, pages=pages),
        current_page_id=current,
        selected_button_id=None,
    )


def reorder_pages(state: WorkspaceState, from_index: int, to_index: int) -> WorkspaceState:
    """Move the page at from_index to to_index; the current page stays current.

    This is a move, not a swap: for non-adjacent indexes the pages in
    between shift one place toward from_index.
    """
    active = state.active
    if active is None:
        return state
    pages = list(active.board.pages)
    count = len(pages)
    if from_index == to_index or not (0 <= from_index < count and 0 <= to_index < count):
        return state
    moved = pages.pop(from_index)
    pages.insert(to_index, moved)
    current = state.current_page_id
    if not any(p.id == current for p in pages):
        current = pages[0].id
    return commit_board(state, active, replace(active.board, pages=tuple(pages)), current_page_id=current)


def set_current_page(state: WorkspaceState, page_id: str) -> WorkspaceState:
    """Show a page directly (editor tab click); does not touch history."""
    board = state.board
    if board is None or board.page(page_id) is None:
        return state
    return replace(state, current_page_id=page_id, selected_button_id=None)
