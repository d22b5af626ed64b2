"""
Fixed-width text helpers for the console report.

Truncation is a hard cut to the column width, no ellipsis, so every row of
a block has the same length.
"""

from datetime import datetime
from typing import Optional

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"
FILE_TIMESTAMP_FORMAT = "%Y-%m-%d-%H-%M-%S"


def pad_right(text: Optional[str], width: int) -> str:
    """Left-align text in a column of exactly ``width`` characters."""
    text = "" if text is None else str(text)
    if len(text) >= width:
        return text[:width]
    return text + " " * (width - len(text))


def center(text: str, width: int) -> str:
    """Center text in a column of exactly ``width`` characters."""
    if len(text) >= width:
        return text[:width]
    total_padding = width - len(text)
    left = total_padding // 2
    return " " * left + text + " " * (total_padding - left)


def format_duration(ms: int) -> str:
    """
    Format a millisecond duration.

    Examples:
        >>> format_duration(250)
        '250ms'
        >>> format_duration(1500)
        '1.50s'
    """
    if ms < 1000:
        return f"{ms}ms"
    return f"{ms / 1000.0:.2f}s"


def format_timestamp(value: Optional[datetime], pattern: str = TIMESTAMP_FORMAT) -> str:
    if value is None:
        return "N/A"
    return value.strftime(pattern)


def or_placeholder(value: Optional[str], placeholder: str) -> str:
    """Return value, or placeholder when value is None or blank."""
    if value is None or not str(value).strip():
        return placeholder
    return str(value)


__all__ = [
    "TIMESTAMP_FORMAT",
    "FILE_TIMESTAMP_FORMAT",
    "pad_right",
    "center",
    "format_duration",
    "format_timestamp",
    "or_placeholder",
]
