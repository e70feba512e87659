"""Lazy loading and saving through the board persistence collaborator."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from aacboard.model.loader import board_from_dict
from aacboard.model.writer import board_to_dict
from aacboard.workspace.boards import (
    hydrate_boards,
    mark_board_saved,
    open_board_from_server,
    select_board,
    set_load_state,
)
from aacboard.workspace.state import LoadState, LocalBoard
from aacboard.workspace.store import Workspace

logger = logging.getLogger(__name__)


class BoardStore(Protocol):
    """Board CRUD as offered by the persistence service."""

    async def create(self, name: str, data: dict[str, Any]) -> str:
        """Persist a new board and return its id."""

    async def read(self, board_id: str) -> dict[str, Any]:
        """Return {"id", "name", "irData"} for one board."""

    async def update(self, board_id: str, name: str, data: dict[str, Any]) -> None:
        """Overwrite a persisted board."""

    async def list_metadata(self) -> list[dict[str, str]]:
        """Return [{"id", "name"}] for every board, without content."""


def _require(workspace: Workspace, local_id: str) -> LocalBoard:
    local = workspace.state.find(local_id)
    if local is None:
        raise KeyError(f"no board with local id {local_id!r}")
    return local


async def refresh_board_list(workspace: Workspace, store: BoardStore) -> None:
    """Hydrate the workspace from the store's metadata listing."""
    rows = await store.list_metadata()
    workspace.apply(hydrate_boards, rows)


async def open_board(workspace: Workspace, store: BoardStore, local_id: str) -> LocalBoard:
    """Make a board active, fetching its content first if it is only a stub.

    The board is LOADING while the fetch is in flight, so edits against
    it are rejected. A failed fetch leaves it in ERROR and re-raises.
    """
    local = _require(workspace, local_id)
    if local.loaded or local.db_id is None:
        workspace.apply(select_board, local_id)
        return _require(workspace, local_id)

    workspace.apply(set_load_state, local_id, LoadState.LOADING)
    try:
        row = await store.read(local.db_id)
        board = board_from_dict(row["irData"], default_cover=True)
    except Exception:
        logger.exception("failed to load board %s", local.db_id)
        workspace.apply(set_load_state, local_id, LoadState.ERROR)
        raise
    workspace.apply(open_board_from_server, local.db_id, row.get("name") or local.name, board)
    return _require(workspace, local_id)


async def save_board(workspace: Workspace, store: BoardStore, local_id: str | None = None) -> str:
    """Create or update the board in the store and clear its dirty flag.

    Returns the persisted id.
    """
    local = _require(workspace, local_id or workspace.state.active_board_id or "")
    data = board_to_dict(local.board)
    if local.db_id:
        await store.update(local.db_id, local.name, data)
        db_id = local.db_id
    else:
        db_id = await store.create(local.name, data)
    logger.info("saved board %s as %s", local.name, db_id)
    workspace.apply(mark_board_saved, db_id, local.name, local_id=local.local_id)
    return db_id
