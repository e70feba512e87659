"""Handlers for 'aacboard validate' and 'aacboard canonical'."""

from aacboard.canonical import check_canonical, to_canonical
from aacboard.cli._common import error, load_board_or_die, load_config_or_die, output_json
from aacboard.errors import SchemaError
from aacboard.model.validator import validate


def validate_board(args) -> int:
    """Print validation errors and warnings; exit 1 when invalid."""
    board = load_board_or_die(args.file, args.json)
    result = validate(board)

    if args.json:
        output_json({"valid": result.is_valid, "errors": list(result.errors), "warnings": list(result.warnings)})
    else:
        for message in result.errors:
            print(f"error: {message}")
        for message in result.warnings:
            print(f"warning: {message}")
        if result.is_valid:
            print(f'"{board.name}" is valid ({len(board.pages)} pages)')

    return 0 if result.is_valid else 1


def canonical(args) -> int:
    """Dump the canonical record for a valid board."""
    board = load_board_or_die(args.file, args.json)
    result = validate(board)
    if not result.is_valid:
        error(f"board is not valid: {result.errors[0]}", args.json)

    config = load_config_or_die(args)["aacboard"]
    authors = (config["author"],) if config["author"] else ()
    record = to_canonical(board, locale=args.locale or config["locale"], authors=authors)
    try:
        check_canonical(record)
    except SchemaError as e:
        error(str(e), args.json)

    output_json(record)
    return 0
