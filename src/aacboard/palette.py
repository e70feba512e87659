"""Color names, hex parsing and per-target color formats."""

import re

DEFAULT_CELL_COLOR = "#3B82F6"
VIDEO_CELL_COLOR = "#1F2937"
FALLBACK_GRID3_COLOR = "#D3D3D3FF"

# Named CSS colors that boards may use in place of hex values.
COLORS: dict[str, str] = {
    "red": "#FF0000",
    "green": "#008000",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "orange": "#FFA500",
    "purple": "#800080",
    "pink": "#FFC0CB",
    "cyan": "#00FFFF",
    "black": "#000000",
    "white": "#FFFFFF",
    "gray": "#808080",
    "grey": "#808080",
}

_HEX = re.compile(r"^#(?:[0-9a-f]{3}|[0-9a-f]{6}|[0-9a-f]{8})$", re.IGNORECASE)


def is_valid_color(color: str) -> bool:
    """True for #RGB, #RRGGBB, #RRGGBBAA or a known color name."""
    return bool(_HEX.match(color)) or color.lower() in COLORS


def normalize_hex(color: str | None) -> str | None:
    """Return color as uppercase #RRGGBB, or None if unrecognized.

    Alpha is dropped from #RRGGBBAA; #RGB is expanded.
    """
    if not color:
        return None
    named = COLORS.get(color.lower())
    if named:
        return named
    if not color.startswith("#"):
        color = "#" + color
    if not _HEX.match(color):
        return None
    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return "#" + digits[:6].upper()


def to_argb(color: str | None, default: str = FALLBACK_GRID3_COLOR) -> str:
    """Grid 3 color format: #RRGGBBAA with full alpha."""
    hex_color = normalize_hex(color)
    if hex_color is None:
        return default
    return hex_color + "FF"


def to_rgb(color: str | None, default: str = DEFAULT_CELL_COLOR) -> str:
    """Open Board color format: "rgb(r, g, b)"."""
    hex_color = normalize_hex(color) or normalize_hex(default)
    r, g, b = (int(hex_color[i : i + 2], 16) for i in (1, 3, 5))
    return f"rgb({r}, {g}, {b})"
