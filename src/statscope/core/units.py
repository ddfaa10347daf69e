"""Parsing and formatting helpers for docker stats text fields.

Functions:
    parse_percent: Convert "12.50%" to 12.5, 0.0 on malformed input
    format_percent: Convert 12.5 back to "12.50%"
    binary_size: Render a byte count the way docker stats renders memory (KiB, MiB, ...)
    decimal_size: Render a byte count the way docker stats renders network and block I/O
"""

from __future__ import annotations

import math
import re

_BINARY_UNITS = ("B", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB", "ZiB", "YiB")
_DECIMAL_UNITS = ("B", "kB", "MB", "GB", "TB", "PB", "EB", "ZB", "YB")

# Plain decimal as docker prints it: no whitespace, no digit-group underscores
_DECIMAL_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_percent(text: str) -> float:
    """Parse a percentage string emitted by docker stats.

    A single trailing '%' is stripped and the rest must be a plain decimal number.
    Surrounding whitespace, digit-group underscores and other malformed or
    non-finite values parse to 0.0 instead of raising; the raw text stays
    available on the record.

    Args:
        text: Percentage text such as "12.50%"

    Returns:
        Numeric percentage
    """
    value = text[:-1] if text.endswith("%") else text
    if not _DECIMAL_RE.fullmatch(value):
        return 0.0
    number = float(value)
    if not math.isfinite(number):
        return 0.0
    return number


def format_percent(value: float) -> str:
    """Format a percentage with two decimals and a trailing '%'."""
    return f"{value:.2f}%"


def _custom_size(size: float, base: float, units: tuple[str, ...], precision: int) -> str:
    i = 0
    while size >= base and i < len(units) - 1:
        size /= base
        i += 1
    return f"{size:.{precision}g}{units[i]}"


def binary_size(byte_count: int | float) -> str:
    """Render bytes with binary units and four significant digits (e.g. '1.5MiB')."""
    return _custom_size(float(byte_count), 1024.0, _BINARY_UNITS, 4)


def decimal_size(byte_count: int | float) -> str:
    """Render bytes with decimal units and three significant digits (e.g. '1.2kB')."""
    return _custom_size(float(byte_count), 1000.0, _DECIMAL_UNITS, 3)
