"""Local, page and button ID generation."""

import secrets
import time


def _stamp() -> str:
    """Millisecond timestamp in base 36."""
    return _base36(int(time.time() * 1000))


def _base36(n: int) -> str:
    digits = "0123456789abcdefghijklmnopqrstuvwxyz"
    if n == 0:
        return "0"
    out = []
    while n:
        n, r = divmod(n, 36)
        out.append(digits[r])
    return "".join(reversed(out))


def local_id() -> str:
    """Stable client-side id for a workspace board."""
    return secrets.token_hex(4) + _stamp()[-4:]


def page_id() -> str:
    """Fresh page id, e.g. "page-lx3k9a-1f2e"."""
    return f"page-{_stamp()}-{secrets.token_hex(2)}"


def button_id() -> str:
    """Fresh button id, e.g. "btn-lx3k9a-1f2e"."""
    return f"btn-{_stamp()}-{secrets.token_hex(2)}"


def unique_id(desired: str, existing: set[str]) -> str:
    """Return desired if unused, otherwise append -1, -2, etc."""
    if desired not in existing:
        return desired
    n = 1
    while f"{desired}-{n}" in existing:
        n += 1
    return f"{desired}-{n}"


def sequential_id(prefix: str, index: int) -> str:
    """Deterministic pooled id: sequential_id("sym", 1) -> "sym-1"."""
    return f"{prefix}-{index}"
