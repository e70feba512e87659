"""Board IR, document codec and validator."""

from aacboard.model.ir import (
    ACTION_TYPES,
    DEFAULT_COVER,
    Action,
    Back,
    Board,
    Bookmark,
    Button,
    CoverImage,
    Grid,
    Home,
    Link,
    Navigate,
    OpenUrl,
    Page,
    PlayVideo,
    Speak,
    UnknownAction,
    VideoPlayer,
    action_type,
)
from aacboard.model.loader import board_from_dict, load_board, parse_board_text
from aacboard.model.validator import ValidationResult, validate
from aacboard.model.writer import board_to_dict, save_board, serialize_board

__all__ = [
    "ACTION_TYPES",
    "DEFAULT_COVER",
    "Action",
    "Back",
    "Board",
    "Bookmark",
    "Button",
    "CoverImage",
    "Grid",
    "Home",
    "Link",
    "Navigate",
    "OpenUrl",
    "Page",
    "PlayVideo",
    "Speak",
    "UnknownAction",
    "ValidationResult",
    "VideoPlayer",
    "action_type",
    "board_from_dict",
    "board_to_dict",
    "load_board",
    "parse_board_text",
    "save_board",
    "serialize_board",
    "validate",
]
