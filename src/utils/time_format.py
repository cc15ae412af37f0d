"""
Sakura - Formatting Utils
=========================

Human-readable durations, counts and colors for embeds.
"""

import re
from typing import Optional


_DURATION_UNITS = (
    ("d", 86_400_000),
    ("h", 3_600_000),
    ("m", 60_000),
    ("s", 1_000),
)

_HEX_COLOR_PATTERN = re.compile(r"^(?:[0-9A-F]{3}){1,2}$")


def humanize(milliseconds: int, show_ms: bool = False) -> str:
    """
    Format a millisecond duration as "1d 2h 3m 4s 5ms".

    Zero components are omitted. Milliseconds only appear when show_ms
    is set.

    Examples:
        - humanize(61_000): "1m 1s"
        - humanize(1_250, show_ms=True): "1s 250ms"
        - humanize(0): "0s"
    """
    remaining = max(int(milliseconds), 0)
    parts = []

    for unit, size in _DURATION_UNITS:
        value, remaining = divmod(remaining, size)
        if value > 0:
            parts.append(f"{value}{unit}")

    if show_ms and remaining > 0:
        parts.append(f"{remaining}ms")

    if not parts:
        return "0ms" if show_ms else "0s"
    return " ".join(parts)


def add_commas(value: int) -> str:
    """Group thousands with commas (1234567 -> "1,234,567")."""
    return f"{value:,}"


def parse_hex_color(value: str) -> Optional[int]:
    """
    Parse a user supplied hex color.

    Accepts "#RGB", "RGB", "#RRGGBB" and "RRGGBB" in any case. Three
    digit colors are expanded ("F0A" -> "FF00AA").

    Returns:
        Color as an int, or None if the text is not a hex color.
    """
    color = value.strip()
    if color.startswith("#"):
        color = color[1:]
    color = color.upper()

    if len(color) == 3:
        color = "".join(c * 2 for c in color)

    if not _HEX_COLOR_PATTERN.match(color):
        return None
    return int(color, 16)


__all__ = ["humanize", "add_commas", "parse_hex_color"]
