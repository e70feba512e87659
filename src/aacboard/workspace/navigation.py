"""Page traversal within the active board: jumps, history and bookmark."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import assert_never

from aacboard.model.ir import Back, Bookmark, Home, Link, Navigate, OpenUrl, PlayVideo, Speak, UnknownAction
from aacboard.workspace.boards import select_board
from aacboard.workspace.state import WorkspaceState

logger = logging.getLogger(__name__)


def jump_to_page(state: WorkspaceState, page_id: str) -> WorkspaceState:
    """Switch to page_id, pushing the current page onto the history stack."""
    board = state.board
    if board is None or board.page(page_id) is None or state.current_page_id == page_id:
        return state
    history = state.nav_history
    if state.current_page_id is not None:
        history = history + (state.current_page_id,)
    return replace(state, current_page_id=page_id, selected_button_id=None, nav_history=history)


def jump_home(state: WorkspaceState) -> WorkspaceState:
    """Switch to the board's first page."""
    board = state.board
    if board is None or not board.pages:
        return state
    home_id = board.pages[0].id
    if state.current_page_id == home_id:
        return state
    return replace(state, current_page_id=home_id, selected_button_id=None)


def bookmark_current_page(state: WorkspaceState) -> WorkspaceState:
    """Remember the current page as the single bookmark."""
    if state.current_page_id is None:
        return state
    return replace(state, bookmark_page_id=state.current_page_id)


def jump_back(state: WorkspaceState) -> WorkspaceState:
    """Return to the bookmark if it is usable, otherwise to the last history entry.

    The bookmark is not consumed. History entries that no longer exist
    or equal the current page are discarded while searching.
    """
    board = state.board
    if board is None:
        return state

    bookmark = state.bookmark_page_id
    if bookmark and bookmark != state.current_page_id and board.page(bookmark) is not None:
        return replace(state, current_page_id=bookmark, selected_button_id=None)

    history = list(state.nav_history)
    while history:
        candidate = history.pop()
        if candidate != state.current_page_id and board.page(candidate) is not None:
            return replace(state, current_page_id=candidate, selected_button_id=None, nav_history=tuple(history))

    if not state.nav_history:
        return state
    return replace(state, nav_history=())


def _follow_link(state: WorkspaceState, target: str) -> WorkspaceState:
    """A link names a page of this board or another workspace board."""
    board = state.board
    if board is not None and board.page(target) is not None:
        return jump_to_page(state, target)
    local = state.find(target) or state.find_by_db_id(target)
    if local is not None:
        return select_board(state, local.local_id)
    logger.debug("link target %r not found in workspace", target)
    return state


def apply_button_action(state: WorkspaceState, button_id: str) -> WorkspaceState:
    """Run a button's navigation behaviour as the device would.

    Speech and media are left to the runtime. Self-closing buttons jump
    back after their action unless that action was already "back", so a
    self-closing navigate or link returns to the page it was pressed on.
    """
    board = state.board
    if board is None:
        return state
    found = board.find_button(button_id, prefer_page_id=state.current_page_id)
    if found is None or found[1].action is None:
        return state
    button = found[1]
    action = button.action

    match action:
        case Navigate(to_page_id=to_page_id):
            state = jump_to_page(state, to_page_id)
        case Link(to_board_id=to_board_id):
            state = _follow_link(state, to_board_id)
        case Back():
            state = jump_back(state)
        case Bookmark():
            state = bookmark_current_page(state)
        case Home():
            state = jump_home(state)
        case Speak() | PlayVideo() | OpenUrl() | UnknownAction():
            pass
        case _:
            assert_never(action)

    if button.self_closing and not isinstance(action, Back):
        state = jump_back(state)
    return state
