"""Handlers for 'aacboard button' commands."""

from aacboard.cli._common import (
    action_from_args,
    error,
    find_button,
    find_page,
    load_workspace_or_die,
    output_json,
    output_result,
    save,
)
from aacboard.model.ir import Button, action_type
from aacboard.model.writer import button_to_dict
from aacboard.workspace import add_button, delete_button, duplicate_button, update_button

# CLI option name -> Button field
FIELDS = {
    "label": "label",
    "spoken_text": "spoken_text",
    "color": "color",
    "icon": "icon_ref",
    "symbol": "symbol_path",
    "row": "row",
    "col": "col",
}


def _describe(button: Button) -> str:
    action = action_type(button.action) if button.action else "speak"
    return f"{button.id}  ({button.row},{button.col})  {button.label:<16} {action}"


def button_list(args) -> int:
    """List the buttons on one page (the first page by default)."""
    workspace = load_workspace_or_die(args.file, args.json)
    page = find_page(workspace, args.page, args.json)

    if args.json:
        output_json([button_to_dict(b) for b in page.buttons])
    else:
        print(f"{page.id}  {page.name}")
        for button in sorted(page.buttons, key=lambda b: (b.row, b.col)):
            print(f"  {_describe(button)}")

    return 0


def button_add(args) -> int:
    """Add a button to a page."""
    workspace = load_workspace_or_die(args.file, args.json)
    page = find_page(workspace, args.page, args.json)

    button = Button(
        id=args.id or "",
        row=args.row,
        col=args.col,
        label=args.label,
        spoken_text=args.spoken_text,
        color=args.color,
        icon_ref=args.icon,
        symbol_path=args.symbol,
        self_closing=bool(args.self_closing),
        action=action_from_args(args),
    )
    if (button.row, button.col) in page.occupied():
        error(f"Cell ({button.row}, {button.col}) on page {page.id} is taken.", args.json)

    workspace.apply(add_button, button)
    created = workspace.state.selected_button
    save(workspace, args.file)

    output_result(
        {"id": created.id, "page": page.id, "row": created.row, "col": created.col},
        f'Created button "{created.label}" (id {created.id}) on page {page.id}',
        args.json,
    )
    return 0


def button_set(args) -> int:
    """Change fields of an existing button."""
    workspace = load_workspace_or_die(args.file, args.json)
    find_button(workspace, args.id, args.json)

    changes = {field: getattr(args, option) for option, field in FIELDS.items() if getattr(args, option) is not None}
    action = action_from_args(args)
    if action is not None:
        changes["action"] = action
    if args.self_closing is not None:
        changes["self_closing"] = args.self_closing
    if not changes:
        error("Nothing to change.", args.json)

    workspace.apply(update_button, args.id, **changes)
    save(workspace, args.file)

    output_result({"id": args.id, "changed": sorted(changes)}, f"Updated button {args.id}", args.json)
    return 0


def button_delete(args) -> int:
    workspace = load_workspace_or_die(args.file, args.json)
    find_button(workspace, args.id, args.json)

    workspace.apply(delete_button, args.id)
    save(workspace, args.file)

    output_result({"id": args.id, "deleted": True}, f"Deleted button {args.id}", args.json)
    return 0


def button_duplicate(args) -> int:
    """Copy a button into the next free cell of its page.

    A full page leaves the board untouched.
    """
    workspace = load_workspace_or_die(args.file, args.json)
    source = find_button(workspace, args.id, args.json)
    page_id = args.page or workspace.state.board.find_button(args.id)[0].id
    page = find_page(workspace, page_id, args.json)

    before = workspace.state
    workspace.apply(duplicate_button, source.id)
    if workspace.state is before:
        output_result({"id": None, "source": source.id}, f"No free cell on page {page.id}; nothing duplicated", args.json)
        return 0

    copy = workspace.state.selected_button
    save(workspace, args.file)
    output_result(
        {"id": copy.id, "source": source.id, "row": copy.row, "col": copy.col},
        f'Created "{copy.label}" (id {copy.id}) at ({copy.row},{copy.col})',
        args.json,
    )
    return 0
