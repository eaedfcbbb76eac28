from __future__ import annotations

_UNITS: tuple[str, ...] = ("B", "KB", "MB", "GB", "TB", "PB", "EB")
_BASE: int = 1024


def format_size(size: int) -> str:
    """
    Format a byte count with binary units.

    Examples:
        512 -> "512 B"
        1536 -> "1.5 KB"
    """
    if size < _BASE:
        return f"{size} B"

    value = float(size)
    exp = 0
    while value >= _BASE and exp < len(_UNITS) - 1:
        value /= _BASE
        exp += 1
    return f"{value:.1f} {_UNITS[exp]}"
