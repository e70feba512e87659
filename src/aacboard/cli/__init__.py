"""CLI argument parser and dispatch for aacboard."""

import argparse

from aacboard.cli.board import canonical, validate_board
from aacboard.cli.button import button_add, button_delete, button_duplicate, button_list, button_set
from aacboard.cli.export import export_file, inspect_file, list_formats
from aacboard.cli.page import page_add, page_delete, page_list, page_move, page_rename
from aacboard.export import FAMILIES


def _button_fields(required: bool) -> argparse.ArgumentParser:
    """Options shared by 'button add' and 'button set'."""
    fields = argparse.ArgumentParser(add_help=False)
    fields.add_argument("--row", type=int, required=required, help="Row (0-indexed)")
    fields.add_argument("--col", type=int, required=required, help="Column (0-indexed)")
    fields.add_argument("--spoken-text", dest="spoken_text", help="Text spoken instead of the label")
    fields.add_argument("--color", help="Background color (#RRGGBB or name)")
    fields.add_argument("--icon", help="Icon reference, e.g. 'fas fa-utensils'")
    fields.add_argument("--symbol", help="Symbol path, e.g. /symbols/mulberry/eat.svg")
    fields.add_argument(
        "--self-closing",
        dest="self_closing",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Return to the previous page after pressing",
    )
    actions = fields.add_mutually_exclusive_group()
    actions.add_argument("--speak", metavar="TEXT", help="Speak TEXT")
    actions.add_argument("--navigate", metavar="PAGE_ID", help="Jump to a page of this board")
    actions.add_argument("--link", metavar="BOARD_ID", help="Open another board")
    actions.add_argument("--video", metavar="VIDEO_ID", help="Play a YouTube video")
    actions.add_argument("--url", help="Open a web page")
    actions.add_argument("--back", action="store_true", help="Go back")
    actions.add_argument("--home", action="store_true", help="Go to the first page")
    actions.add_argument("--bookmark", action="store_true", help="Bookmark the current page")
    return fields


def build_parser() -> argparse.ArgumentParser:
    """Build the full CLI argument parser."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--json", action="store_true", help="Machine-readable JSON output")
    common.add_argument("--config", help="Config file (default: $AACBOARD_CONFIG or ./aacboard.yaml)")
    common.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr")

    parser = argparse.ArgumentParser(
        prog="aacboard",
        description="Validate, edit and export AAC communication boards",
        parents=[common],
    )

    nouns = parser.add_subparsers(dest="noun")

    # --- validate ---
    validate_p = nouns.add_parser("validate", help="Check a board document", parents=[common])
    validate_p.add_argument("file", help="Board document (.json or .yaml)")
    validate_p.set_defaults(func=validate_board)

    # --- canonical ---
    canonical_p = nouns.add_parser("canonical", help="Dump the canonical record", parents=[common])
    canonical_p.add_argument("file", help="Board document (.json or .yaml)")
    canonical_p.add_argument("--locale", help="Locale tag (default: from config)")
    canonical_p.set_defaults(func=canonical)

    # --- export ---
    export_p = nouns.add_parser("export", help="Package a board for an AAC app", parents=[common])
    export_p.add_argument("file", help="Board document (.json or .yaml)")
    export_p.add_argument("--format", choices=FAMILIES, help="Target format")
    export_p.add_argument("--beta", action="store_true", help="Use the beta packager")
    export_p.add_argument("--all", action="store_true", help="Export every format")
    export_p.add_argument("-o", "--output", default=".", help="Output directory (default: .)")
    export_p.add_argument("--upload", action="store_true", help="Also send each archive to the configured upload-url")
    export_p.set_defaults(func=export_file)

    # --- inspect ---
    inspect_p = nouns.add_parser("inspect", help="Summarize an exported archive", parents=[common])
    inspect_p.add_argument("file", help="Archive file")
    inspect_p.add_argument("--format", choices=FAMILIES, required=True, help="Archive format")
    inspect_p.set_defaults(func=inspect_file)

    # --- formats ---
    formats_p = nouns.add_parser("formats", help="List export formats", parents=[common])
    formats_p.set_defaults(func=list_formats)

    # --- page ---
    page_p = nouns.add_parser("page", help="Page operations", parents=[common])
    page_verbs = page_p.add_subparsers(dest="verb")

    page_list_p = page_verbs.add_parser("list", help="List pages", parents=[common])
    page_list_p.add_argument("file", help="Board document")
    page_list_p.set_defaults(func=page_list)

    page_add_p = page_verbs.add_parser("add", help="Add a page", parents=[common])
    page_add_p.add_argument("file", help="Board document")
    page_add_p.add_argument("name", help="Page name")
    page_add_p.add_argument("--id", help="Page ID (default: generated)")
    page_add_p.set_defaults(func=page_add)

    page_rename_p = page_verbs.add_parser("rename", help="Rename a page", parents=[common])
    page_rename_p.add_argument("file", help="Board document")
    page_rename_p.add_argument("id", help="Page ID")
    page_rename_p.add_argument("new_name", help="New page name")
    page_rename_p.set_defaults(func=page_rename)

    page_delete_p = page_verbs.add_parser("delete", help="Delete a page", parents=[common])
    page_delete_p.add_argument("file", help="Board document")
    page_delete_p.add_argument("id", help="Page ID")
    page_delete_p.set_defaults(func=page_delete)

    page_move_p = page_verbs.add_parser("move", help="Move a page", parents=[common])
    page_move_p.add_argument("file", help="Board document")
    page_move_p.add_argument("id", help="Page ID")
    page_move_p.add_argument("--position", type=int, required=True, help="New position (1-indexed)")
    page_move_p.set_defaults(func=page_move)

    # --- button ---
    button_p = nouns.add_parser("button", help="Button operations", parents=[common])
    button_verbs = button_p.add_subparsers(dest="verb")

    button_list_p = button_verbs.add_parser("list", help="List buttons on a page", parents=[common])
    button_list_p.add_argument("file", help="Board document")
    button_list_p.add_argument("--page", help="Page ID (default: first page)")
    button_list_p.set_defaults(func=button_list)

    button_add_p = button_verbs.add_parser(
        "add", help="Add a button", parents=[common, _button_fields(required=True)]
    )
    button_add_p.add_argument("file", help="Board document")
    button_add_p.add_argument("label", help="Button label")
    button_add_p.add_argument("--page", help="Page ID (default: first page)")
    button_add_p.add_argument("--id", help="Button ID (default: generated)")
    button_add_p.set_defaults(func=button_add)

    button_set_p = button_verbs.add_parser(
        "set", help="Change a button", parents=[common, _button_fields(required=False)]
    )
    button_set_p.add_argument("file", help="Board document")
    button_set_p.add_argument("id", help="Button ID")
    button_set_p.add_argument("--label", help="New label")
    button_set_p.set_defaults(func=button_set)

    button_delete_p = button_verbs.add_parser("delete", help="Delete a button", parents=[common])
    button_delete_p.add_argument("file", help="Board document")
    button_delete_p.add_argument("id", help="Button ID")
    button_delete_p.set_defaults(func=button_delete)

    button_dup_p = button_verbs.add_parser("duplicate", help="Copy a button to the next free cell", parents=[common])
    button_dup_p.add_argument("file", help="Board document")
    button_dup_p.add_argument("id", help="Button ID")
    button_dup_p.add_argument("--page", help="Page to place the copy on (default: the button's page)")
    button_dup_p.set_defaults(func=button_duplicate)

    return parser
