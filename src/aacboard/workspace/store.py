"""The Workspace: holder of the current snapshot, with watchers and undo."""

from __future__ import annotations

from typing import Callable

from aacboard.workspace.boards import hydrate_boards, open_board_from_server, set_load_state
from aacboard.workspace.state import WorkspaceState

Watcher = Callable[[WorkspaceState, WorkspaceState], None]
Operation = Callable[..., WorkspaceState]

MAX_UNDO = 100

# Server-driven transitions; undoing across them would resurrect stale content.
_RESETS_HISTORY = {hydrate_boards, open_board_from_server, set_load_state}


def _content_changed(old: WorkspaceState, new: WorkspaceState) -> bool:
    """True when any board's IR differs (by identity) between snapshots."""
    if len(old.boards) != len(new.boards):
        return True
    return any(a.local_id != b.local_id or a.board is not b.board for a, b in zip(old.boards, new.boards))


class Workspace:
    """Applies operations to an immutable WorkspaceState.

    Operations are plain functions ``op(state, *args) -> state`` from
    the boards, pages, buttons and navigation modules. Watchers are
    called with (old, new) after every change. Content edits are
    recorded for undo; navigation and selection are not.
    """

    def __init__(self, state: WorkspaceState | None = None) -> None:
        self._state = state or WorkspaceState()
        self._watchers: list[Watcher] = []
        self._undo: list[WorkspaceState] = []
        self._redo: list[WorkspaceState] = []

    @property
    def state(self) -> WorkspaceState:
        return self._state

    def watch(self, callback: Watcher) -> Callable[[], None]:
        """Call callback(old, new) on every change. Returns an unwatch callable."""
        self._watchers.append(callback)
        return lambda: callback in self._watchers and self._watchers.remove(callback)

    def apply(self, op: Operation, *args, **kwargs) -> WorkspaceState:
        """Run op against the current snapshot and adopt the result."""
        old = self._state
        new = op(old, *args, **kwargs)
        if new is old:
            return old
        if op in _RESETS_HISTORY:
            self._undo.clear()
            self._redo.clear()
        elif _content_changed(old, new):
            self._undo.append(old)
            del self._undo[:-MAX_UNDO]
            self._redo.clear()
        self._set(new)
        return new

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self._state)
        self._set(self._undo.pop())
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self._state)
        self._set(self._redo.pop())
        return True

    def _set(self, new: WorkspaceState) -> None:
        old = self._state
        self._state = new
        for callback in list(self._watchers):
            callback(old, new)
