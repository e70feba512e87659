"""Shared helpers for CLI command handlers."""

import json
import logging
import sys
from pathlib import Path

from aacboard.config import read_config
from aacboard.errors import AacBoardError
from aacboard.model.ir import Board, Button, Page
from aacboard.model.loader import load_board, parse_action
from aacboard.model.writer import save_board
from aacboard.workspace import Workspace, add_board, set_current_page, to_board_ir


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(message)s",
        stream=sys.stderr,
        level=logging.INFO if verbose else logging.WARNING,
    )


def load_config_or_die(args) -> dict:
    try:
        return read_config(getattr(args, "config", None))
    except AacBoardError as e:
        error(str(e), args.json)


def load_board_or_die(path: str, json_mode: bool) -> Board:
    """Load a board document. Exit 1 with message if it cannot be read."""
    try:
        return load_board(Path(path))
    except AacBoardError as e:
        error(str(e), json_mode)


def load_workspace_or_die(path: str, json_mode: bool) -> Workspace:
    """Open a board document in a fresh workspace, active on its first page."""
    workspace = Workspace()
    workspace.apply(add_board, load_board_or_die(path, json_mode))
    return workspace


def find_page(workspace: Workspace, page_id: str | None, json_mode: bool) -> Page:
    """Make page_id current (first page when None). Exit 1 listing pages if not found."""
    board = workspace.state.board
    if page_id is None:
        return workspace.state.current_page
    page = board.page(page_id)
    if page is not None:
        workspace.apply(set_current_page, page_id)
        return page
    available = [f"  {p.id}  {p.name}" for p in board.pages]
    error(f"Page '{page_id}' not found. Available:\n" + "\n".join(available), json_mode)


def find_button(workspace: Workspace, button_id: str, json_mode: bool) -> Button:
    """Lookup button by ID, preferring the current page. Exit 1 if not found."""
    found = workspace.state.board.find_button(button_id, prefer_page_id=workspace.state.current_page_id)
    if found is not None:
        return found[1]
    error(f"Button '{button_id}' not found.", json_mode)


def action_from_args(args):
    """Build an action from the mutually exclusive --speak/--navigate/... flags.

    Returns None when no action flag was given.
    """
    if getattr(args, "speak", None) is not None:
        return parse_action({"type": "speak", "text": args.speak})
    if getattr(args, "navigate", None):
        return parse_action({"type": "navigate", "toPageId": args.navigate})
    if getattr(args, "link", None):
        return parse_action({"type": "link", "toBoardId": args.link})
    if getattr(args, "video", None):
        return parse_action({"type": "play_video", "videoId": args.video})
    if getattr(args, "url", None):
        return parse_action({"type": "open_url", "url": args.url})
    for kind in ("back", "home", "bookmark"):
        if getattr(args, kind, False):
            return parse_action({"type": kind})
    return None


def save(workspace: Workspace, path: str) -> Path:
    """Write the active board back to its document."""
    return save_board(to_board_ir(workspace.state.active), path)


def output_json(data: dict | list) -> None:
    """Write JSON to stdout."""
    print(json.dumps(data, indent=2, ensure_ascii=False))


def output_result(data: dict, text: str, json_mode: bool) -> None:
    """Output mutation result as JSON or plain text."""
    if json_mode:
        output_json(data)
    else:
        print(text)


def error(message: str, json_mode: bool) -> None:
    """Print error to stderr and exit 1."""
    if json_mode:
        print(json.dumps({"error": message}), file=sys.stderr)
    else:
        print(f"error: {message}", file=sys.stderr)
    sys.exit(1)
