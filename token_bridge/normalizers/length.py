"""Unit normalization for dimensions and durations.

All dimensions become pixels (1rem = 1em = 16px); all durations become
milliseconds. Parsers return None for values they don't recognize so
callers can omit the field instead of failing.
"""

import math
import re

REM_BASE_PX = 16.0

_DIMENSION_PATTERN = re.compile(r"^(-?(?:\d+(?:\.\d+)?|\.\d+))\s*(px|rem|em)?$", re.IGNORECASE)
_DURATION_PATTERN = re.compile(r"^(\d+(?:\.\d+)?|\.\d+)\s*(ms|s)$", re.IGNORECASE)


def parse_to_pixels(value: object) -> float | None:
    """Convert a px/rem/em dimension (or bare number) to pixels.

    Args:
        value: "16px", "1.5rem", "2em", "12", or a number.

    Returns:
        Pixel value, or None when the unit isn't recognized.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None

    match = _DIMENSION_PATTERN.match(value.strip())
    if not match:
        return None

    number = float(match.group(1))
    unit = (match.group(2) or "px").lower()
    if unit == "px":
        return number
    return number * REM_BASE_PX


def parse_duration(value: object) -> float | None:
    """Convert "150ms", "0.3s" or a bare number of ms to milliseconds."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if not isinstance(value, str):
        return None

    match = _DURATION_PATTERN.match(value.strip())
    if not match:
        return None

    number = float(match.group(1))
    if match.group(2).lower() == "s":
        return number * 1000
    return number


def looks_like_dimension(value: str) -> bool:
    """True for strings with an explicit px/rem/em unit."""
    match = _DIMENSION_PATTERN.match(value.strip())
    return bool(match and match.group(2))


def round_half_up(value: float, digits: int = 0) -> float:
    """Round like JavaScript's Math.round (halves go up, not to even)."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def format_number(value: float | int, max_decimals: int = 4) -> str:
    """Render a number without a trailing ".0" or float noise.

    >>> format_number(16.0)
    '16'
    >>> format_number(0.875)
    '0.875'
    """
    rounded = round(float(value), max_decimals)
    if rounded.is_integer():
        return str(int(rounded))
    return f"{rounded:.{max_decimals}f}".rstrip("0").rstrip(".")


def px_to_rem(px: float) -> str:
    """Render a pixel value as a rem string (px / 16)."""
    return f"{format_number(px / REM_BASE_PX)}rem"
