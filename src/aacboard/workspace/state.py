"""Immutable workspace snapshots and the helpers every operation shares."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

from aacboard.errors import BoardLoadingError
from aacboard.ids import local_id
from aacboard.model.ir import Board, Button, Page
from aacboard.model.validator import NO_BOARD, ValidationResult, validate

logger = logging.getLogger(__name__)


class LoadState(Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class LocalBoard:
    """A board as the editor holds it: IR plus editor-only bookkeeping."""

    local_id: str
    board: Board
    db_id: str | None = None
    is_home: bool = False
    loaded: bool = False
    dirty: bool = False
    load_state: LoadState = LoadState.READY
    validation: ValidationResult = field(default=NO_BOARD, compare=False)

    @property
    def name(self) -> str:
        return self.board.name


def make_local(board: Board, **bookkeeping) -> LocalBoard:
    """Wrap a board for the workspace, validating it on the way in."""
    bookkeeping.setdefault("local_id", local_id())
    return LocalBoard(board=board, validation=validate(board), **bookkeeping)


@dataclass(frozen=True)
class WorkspaceState:
    boards: tuple[LocalBoard, ...] = ()
    active_board_id: str | None = None
    home_board_id: str | None = None
    current_page_id: str | None = None
    selected_button_id: str | None = None
    edit_mode: bool = False
    nav_history: tuple[str, ...] = ()
    bookmark_page_id: str | None = None

    def find(self, board_id: str | None) -> LocalBoard | None:
        """Look up a board by local id."""
        if board_id is None:
            return None
        for local in self.boards:
            if local.local_id == board_id:
                return local
        return None

    def find_by_db_id(self, db_id: str) -> LocalBoard | None:
        for local in self.boards:
            if local.db_id == db_id:
                return local
        return None

    @property
    def active(self) -> LocalBoard | None:
        return self.find(self.active_board_id)

    @property
    def board(self) -> Board | None:
        active = self.active
        return active.board if active else None

    @property
    def validation(self) -> ValidationResult:
        """Cached validity of the active board; export gating reads this."""
        active = self.active
        return active.validation if active else NO_BOARD

    @property
    def current_page(self) -> Page | None:
        board = self.board
        return board.page(self.current_page_id) if board else None

    @property
    def selected_button(self) -> Button | None:
        board = self.board
        if board is None or self.selected_button_id is None:
            return None
        found = board.find_button(self.selected_button_id)
        return found[1] if found else None


def first_page_id(board: Board) -> str | None:
    return board.pages[0].id if board.pages else None


def with_home(boards: tuple[LocalBoard, ...], home_id: str | None) -> tuple[LocalBoard, ...]:
    """Set is_home on exactly the board whose id is home_id."""
    return tuple(b if b.is_home == (b.local_id == home_id) else replace(b, is_home=b.local_id == home_id) for b in boards)


def replace_local(boards: tuple[LocalBoard, ...], local: LocalBoard) -> tuple[LocalBoard, ...]:
    return tuple(local if b.local_id == local.local_id else b for b in boards)


def ensure_editable(local: LocalBoard) -> None:
    """Reject edits to a board whose content is still being fetched."""
    if local.load_state is LoadState.LOADING:
        raise BoardLoadingError(f"board {local.name!r} is still loading")


def commit_board(state: WorkspaceState, local: LocalBoard, board: Board, **changes) -> WorkspaceState:
    """Store an edited board: mark it dirty, re-validate, and apply state changes."""
    ensure_editable(local)
    updated = replace(local, board=board, dirty=True, validation=validate(board))
    logger.debug("board modified: %s (db_id=%s, valid=%s)", board.name, updated.db_id, updated.validation.is_valid)
    return replace(state, boards=replace_local(state.boards, updated), **changes)


def edit_page(board: Board, page_id: str, **changes) -> Board:
    """Return board with one page's fields replaced."""
    pages = tuple(replace(p, **changes) if p.id == page_id else p for p in board.pages)
    return replace(board, pages=pages)
