"""Handlers for 'aacboard page' commands."""

from aacboard.cli._common import error, load_workspace_or_die, output_json, output_result, save
from aacboard.workspace import add_page, delete_page, rename_page, reorder_pages


def page_list(args) -> int:
    """List pages with their button counts."""
    workspace = load_workspace_or_die(args.file, args.json)
    board = workspace.state.board

    items = []
    for page in board.pages:
        grid = page.grid_for(board.grid)
        items.append(
            {
                "id": page.id,
                "name": page.name,
                "buttons": len(page.buttons),
                "grid": {"rows": grid.rows, "cols": grid.cols},
            }
        )

    if args.json:
        output_json(items)
    else:
        for p in items:
            buttons = "button" if p["buttons"] == 1 else "buttons"
            print(f"{p['id']}  {p['name']:<16} {p['buttons']} {buttons}  {p['grid']['rows']}x{p['grid']['cols']}")

    return 0


def page_add(args) -> int:
    """Append a page."""
    workspace = load_workspace_or_die(args.file, args.json)
    if args.id and workspace.state.board.page(args.id) is not None:
        error(f"Page '{args.id}' already exists.", args.json)

    workspace.apply(add_page, args.name, args.id)
    page = workspace.state.current_page
    save(workspace, args.file)

    output_result({"id": page.id, "name": page.name}, f'Created page "{page.name}" (id {page.id})', args.json)
    return 0


def page_rename(args) -> int:
    workspace = load_workspace_or_die(args.file, args.json)
    if workspace.state.board.page(args.id) is None:
        error(f"Page '{args.id}' not found.", args.json)

    workspace.apply(rename_page, args.id, args.new_name)
    save(workspace, args.file)

    output_result({"id": args.id, "name": args.new_name}, f'Renamed page {args.id} to "{args.new_name}"', args.json)
    return 0


def page_delete(args) -> int:
    """Delete a page. The only remaining page cannot be deleted."""
    workspace = load_workspace_or_die(args.file, args.json)
    board = workspace.state.board
    if board.page(args.id) is None:
        error(f"Page '{args.id}' not found.", args.json)
    if len(board.pages) == 1:
        error("Cannot delete the only page of a board.", args.json)

    workspace.apply(delete_page, args.id)
    save(workspace, args.file)

    output_result({"id": args.id, "deleted": True}, f"Deleted page {args.id}", args.json)
    return 0


def page_move(args) -> int:
    """Move a page to a new position (1-indexed)."""
    workspace = load_workspace_or_die(args.file, args.json)
    board = workspace.state.board
    index = board.page_index(args.id)
    if index == -1:
        error(f"Page '{args.id}' not found.", args.json)
    if not 1 <= args.position <= len(board.pages):
        error(f"Position must be between 1 and {len(board.pages)}.", args.json)

    workspace.apply(reorder_pages, index, args.position - 1)
    save(workspace, args.file)

    output_result(
        {"id": args.id, "position": args.position},
        f"Moved page {args.id} to position {args.position}",
        args.json,
    )
    return 0
