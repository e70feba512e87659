"""Board-level workspace operations."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Mapping

from aacboard.ids import page_id as new_page_id
from aacboard.ids import unique_id
from aacboard.model.ir import DEFAULT_COVER, Board, Grid, Page
from aacboard.model.validator import validate
from aacboard.workspace.state import (
    LoadState,
    LocalBoard,
    WorkspaceState,
    commit_board,
    ensure_editable,
    first_page_id,
    make_local,
    replace_local,
    with_home,
)

logger = logging.getLogger(__name__)


def _activate(state: WorkspaceState, local: LocalBoard | None, **changes) -> WorkspaceState:
    """Make local the active board with a fresh page pointer and history."""
    return replace(
        state,
        active_board_id=local.local_id if local else None,
        current_page_id=first_page_id(local.board) if local else None,
        selected_button_id=None,
        nav_history=(),
        bookmark_page_id=None,
        **changes,
    )


def add_board(state: WorkspaceState, board: Board) -> WorkspaceState:
    """Append an imported or generated board and make it active.

    The first board in an empty workspace also becomes home.
    """
    if board.cover_image is None:
        board = replace(board, cover_image=DEFAULT_COVER)
    local = make_local(board, dirty=True, loaded=False)
    boards = state.boards + (local,)
    home_id = state.home_board_id
    if home_id is None and len(boards) == 1:
        home_id = local.local_id
    logger.debug("board added: %s", board.name)
    return _activate(state, local, boards=with_home(boards, home_id), home_board_id=home_id)


def add_empty_board(state: WorkspaceState, name: str | None = None, rows: int = 4, cols: int = 4) -> WorkspaceState:
    """Add a blank board with a single empty page."""
    grid = Grid(rows=rows, cols=cols)
    name = (name or "").strip() or f"Board {len(state.boards) + 1}"
    page = Page(id=new_page_id(), name="Page 1", layout=grid)
    return add_board(state, Board(name=name, grid=grid, pages=(page,), cover_image=DEFAULT_COVER))


def replace_active_board(state: WorkspaceState, board: Board) -> WorkspaceState:
    """Swap in new content for the active board, keeping its identity and flags."""
    active = state.active
    if active is None:
        return state
    if board.cover_image is None:
        board = replace(board, cover_image=active.board.cover_image or DEFAULT_COVER)
    current = state.current_page_id if board.page(state.current_page_id) else first_page_id(board)
    return commit_board(state, active, board, current_page_id=current, selected_button_id=None)


def append_generated_pages(state: WorkspaceState, generated: Board) -> WorkspaceState:
    """Merge generated pages into the active board and show the first of them.

    Page ids that clash with existing pages are re-issued; pages without
    a layout snap to the active board's grid.
    """
    active = state.active
    if active is None or not generated.pages:
        return state
    taken = set(active.board.page_ids)
    new_pages = []
    for page in generated.pages:
        page_id = unique_id(page.id, taken) if page.id else new_page_id()
        taken.add(page_id)
        new_pages.append(replace(page, id=page_id, layout=page.layout or active.board.grid))
    board = replace(active.board, pages=active.board.pages + tuple(new_pages))
    return commit_board(state, active, board, current_page_id=new_pages[0].id, selected_button_id=None)


def select_board(state: WorkspaceState, board_id: str) -> WorkspaceState:
    target = state.find(board_id)
    if target is None:
        return state
    return _activate(state, target)


def reorder_boards(state: WorkspaceState, from_index: int, to_index: int) -> WorkspaceState:
    """Move the board at from_index to to_index.

    Boards between the two indexes shift one place toward from_index.
    """
    count = len(state.boards)
    if from_index == to_index or not (0 <= from_index < count and 0 <= to_index < count):
        return state
    boards = list(state.boards)
    moved = boards.pop(from_index)
    boards.insert(to_index, moved)
    return replace(state, boards=with_home(tuple(boards), state.home_board_id))


def delete_board(state: WorkspaceState, board_id: str) -> WorkspaceState:
    """Remove a board; active and home fall back to the first remaining board."""
    target = state.find(board_id)
    if target is None:
        return state
    ensure_editable(target)
    remaining = tuple(b for b in state.boards if b.local_id != board_id)
    fallback = remaining[0].local_id if remaining else None
    home_id = fallback if state.home_board_id == board_id else state.home_board_id
    boards = with_home(remaining, home_id)
    if state.active_board_id != board_id:
        return replace(state, boards=boards, home_board_id=home_id)
    next_active = next((b for b in boards if b.local_id == fallback), None)
    return _activate(state, next_active, boards=boards, home_board_id=home_id)


def set_home_board(state: WorkspaceState, board_id: str) -> WorkspaceState:
    if state.find(board_id) is None:
        return state
    return replace(state, boards=with_home(state.boards, board_id), home_board_id=board_id)


def _stub(db_id: str, name: str) -> LocalBoard:
    """Metadata-only board; its pages are fetched when it is opened."""
    board = Board(name=name, grid=Grid(rows=0, cols=0), pages=(), cover_image=DEFAULT_COVER)
    return make_local(board, db_id=db_id, loaded=False, dirty=False, load_state=LoadState.IDLE)


def hydrate_boards(state: WorkspaceState, rows: Iterable[Mapping[str, str]]) -> WorkspaceState:
    """Rebuild the board list from a metadata listing of {"id", "name"} rows.

    Boards already known by persisted id keep their content and flags and
    only take the listed name. Unsaved local boards are kept untouched
    after the listed ones.
    """
    by_db_id = {b.db_id: b for b in state.boards if b.db_id}
    hydrated = []
    for row in rows:
        existing = by_db_id.get(row["id"])
        if existing is None:
            hydrated.append(_stub(row["id"], row["name"]))
            continue
        board = replace(existing.board, name=row["name"])
        hydrated.append(replace(existing, board=board, validation=validate(board)))
    local_only = tuple(b for b in state.boards if not b.db_id)
    boards = tuple(hydrated) + local_only

    ids = {b.local_id for b in boards}
    home_id = state.home_board_id if state.home_board_id in ids else None
    changes = {}
    if state.active_board_id not in ids:
        changes = dict(active_board_id=None, current_page_id=None, selected_button_id=None, nav_history=(), bookmark_page_id=None)
    return replace(state, boards=with_home(boards, home_id), home_board_id=home_id, **changes)


def open_board_from_server(state: WorkspaceState, db_id: str, name: str, board: Board) -> WorkspaceState:
    """Install fully loaded content for a persisted board and make it active.

    A freshly loaded copy supersedes any local content for that id.
    """
    if not board.name:
        board = replace(board, name=name)
    if board.cover_image is None:
        board = replace(board, cover_image=DEFAULT_COVER)
    existing = state.find_by_db_id(db_id)
    if existing is not None:
        local = replace(
            existing,
            board=board,
            loaded=True,
            dirty=False,
            load_state=LoadState.READY,
            validation=validate(board),
        )
        boards = replace_local(state.boards, local)
    else:
        local = make_local(board, db_id=db_id, loaded=True, dirty=False)
        boards = state.boards + (local,)
    return replace(
        state,
        boards=boards,
        active_board_id=local.local_id,
        current_page_id=first_page_id(board),
        selected_button_id=None,
        nav_history=(),
        bookmark_page_id=None,
    )


def mark_board_saved(state: WorkspaceState, db_id: str, name: str | None = None, local_id: str | None = None) -> WorkspaceState:
    """Record a successful save: set the persisted id and clear the dirty flag.

    The board is matched by local_id when given, otherwise by db_id (or a
    local id passed as db_id).
    """
    boards = []
    for b in state.boards:
        matched = b.local_id == local_id if local_id else b.db_id == db_id or b.local_id == db_id
        if matched:
            board = replace(b.board, name=name) if name is not None and name != b.board.name else b.board
            b = replace(b, db_id=db_id, board=board, dirty=False, validation=validate(board))
        boards.append(b)
    return replace(state, boards=tuple(boards))


def set_load_state(state: WorkspaceState, board_id: str, load_state: LoadState) -> WorkspaceState:
    target = state.find(board_id)
    if target is None or target.load_state is load_state:
        return state
    return replace(state, boards=replace_local(state.boards, replace(target, load_state=load_state)))


def to_board_ir(local: LocalBoard) -> Board:
    """The plain board IR with no editor bookkeeping, for persistence or export."""
    return local.board
