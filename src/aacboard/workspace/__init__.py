"""Multi-board editing workspace over immutable snapshots."""

from aacboard.workspace.boards import (
    add_board,
    add_empty_board,
    append_generated_pages,
    delete_board,
    hydrate_boards,
    mark_board_saved,
    open_board_from_server,
    reorder_boards,
    replace_active_board,
    select_board,
    set_home_board,
    set_load_state,
    to_board_ir,
)
from aacboard.workspace.buttons import (
    add_button,
    delete_button,
    duplicate_button,
    find_free_cell,
    select_button,
    set_edit_mode,
    update_button,
)
from aacboard.workspace.navigation import (
    apply_button_action,
    bookmark_current_page,
    jump_back,
    jump_home,
    jump_to_page,
)
from aacboard.workspace.pages import add_page, delete_page, rename_page, reorder_pages, set_current_page
from aacboard.workspace.state import LoadState, LocalBoard, WorkspaceState, make_local
from aacboard.workspace.store import Workspace

__all__ = [
    "LoadState",
    "LocalBoard",
    "Workspace",
    "WorkspaceState",
    "add_board",
    "add_button",
    "add_empty_board",
    "add_page",
    "append_generated_pages",
    "apply_button_action",
    "bookmark_current_page",
    "delete_board",
    "delete_button",
    "delete_page",
    "duplicate_button",
    "find_free_cell",
    "hydrate_boards",
    "jump_back",
    "jump_home",
    "jump_to_page",
    "make_local",
    "mark_board_saved",
    "open_board_from_server",
    "rename_page",
    "reorder_boards",
    "reorder_pages",
    "replace_active_board",
    "select_board",
    "select_button",
    "set_current_page",
    "set_edit_mode",
    "set_home_board",
    "set_load_state",
    "to_board_ir",
    "update_button",
]
