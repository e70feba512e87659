"""The canonical interchange record shared by every packager."""

from aacboard.canonical.converter import AssetPool, convert_action, symbol_name, to_canonical
from aacboard.canonical.schema import check_canonical, load_schema

__all__ = ["AssetPool", "check_canonical", "convert_action", "load_schema", "symbol_name", "to_canonical"]
