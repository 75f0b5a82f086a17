"""
Base-2 size parsing for disk sizes.

Sizes are written as a number followed by a unit, where ``KB`` means 1024
bytes (``KiB`` is accepted as a synonym). Components can be chained, so
``1GB512MB`` is one and a half gibibytes.
"""

import re

from .constants import SIZE_UNITS

_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d+)?)([A-Za-z]+)")


def parse_size(value: str) -> int:
    """
    Parse a base-2 size string into bytes.

    Args:
        value: Size string such as "512MB", "2GB" or "1.5TB"

    Returns:
        Size in bytes

    Raises:
        ValueError: If the string is empty, has no unit or uses an unknown unit

    Example:
        >>> parse_size("1KB")
        1024
        >>> parse_size("1GB512MB")
        1610612736
    """
    text = value.strip()
    if text == "0":
        return 0
    if not text:
        raise ValueError("empty size")

    total = 0.0
    position = 0
    for match in _COMPONENT_PATTERN.finditer(text):
        if match.start() != position:
            break
        number, unit = match.groups()
        multiplier = SIZE_UNITS.get(unit.upper())
        if multiplier is None:
            raise ValueError(f"unknown unit '{unit}' in size '{value}'")
        total += float(number) * multiplier
        position = match.end()

    if position != len(text) or position == 0:
        raise ValueError(f"expected value: {value} to be a valid disk size (i.e 1KB, 2MB, 3GB and etc)")

    return int(total)


def format_size(size: int) -> str:
    """Render a byte count with the largest unit that divides it exactly."""
    for unit in ("EB", "PB", "TB", "GB", "MB", "KB"):
        multiplier = SIZE_UNITS[unit]
        if size and size % multiplier == 0:
            return f"{size // multiplier}{unit}"
    return f"{size}B"


__all__ = ["parse_size", "format_size"]
