"""Color parsing and conversion helpers.

Everything converges on uppercase hex. CSS functional notations
(rgb/rgba/hsl/hsla) are converted to #RRGGBB; their alpha channel is
dropped, which is a known lossy conversion. Callers that need opacity
(shadows) read it separately with split_alpha or css_alpha.
"""

import re

from .length import round_half_up

HEX_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
_HEX_LIKE = re.compile(r"^#[0-9a-fA-F]{3,8}$")
_SHORT_HEX = re.compile(r"^#[0-9a-fA-F]{3}$")

_NUM = r"(\d+(?:\.\d+)?|\.\d+)"
_RGB_PATTERN = re.compile(
    rf"rgba?\(\s*{_NUM}\s*[,\s]\s*{_NUM}\s*[,\s]\s*{_NUM}\s*(?:[,/]\s*{_NUM}(%?)\s*)?\)",
    re.IGNORECASE,
)
_HSL_PATTERN = re.compile(
    rf"hsla?\(\s*{_NUM}(?:deg)?\s*[,\s]\s*{_NUM}%\s*[,\s]\s*{_NUM}%",
    re.IGNORECASE,
)


def is_hex_like(value: str) -> bool:
    """True for '#' followed by 3 to 8 hex digits."""
    return bool(_HEX_LIKE.match(value))


def is_valid_hex(value: str) -> bool:
    """True for the 3, 6, or 8 digit hex forms the schema accepts."""
    return bool(HEX_PATTERN.match(value))


def normalize_hex(value: str) -> str:
    """Uppercase a hex color, expanding #RGB to #RRGGBB.

    >>> normalize_hex("#F0A")
    '#FF00AA'
    >>> normalize_hex("#aabbcc80")
    '#AABBCC80'
    """
    if _SHORT_HEX.match(value):
        r, g, b = value[1], value[2], value[3]
        return f"#{r}{r}{g}{g}{b}{b}".upper()
    return value.upper()


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Convert 0-255 channels to #RRGGBB."""
    channels = [max(0, min(255, int(round_half_up(c)))) for c in (r, g, b)]
    return "#" + "".join(f"{c:02X}" for c in channels)


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Split a hex color into 0-255 channels, ignoring any alpha byte."""
    digits = normalize_hex(value).lstrip("#")
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def hex_alpha(value: str) -> float:
    """Alpha of an 8-digit hex as 0-1 (1.0 for shorter forms)."""
    digits = normalize_hex(value).lstrip("#")
    if len(digits) == 8:
        return int(digits[6:8], 16) / 255
    return 1.0


def split_alpha(value: str) -> tuple[str, float | None]:
    """Split #RRGGBBAA into (#RRGGBB, alpha rounded to 2 decimals).

    Shorter forms return (normalized hex, None).
    """
    hex_value = normalize_hex(value)
    if len(hex_value) == 9:
        alpha = int(hex_value[7:9], 16) / 255
        return hex_value[:7], round_half_up(alpha, 2)
    return hex_value, None


def hsl_to_hex(h: float, s: float, lightness: float) -> str:
    """Convert HSL (degrees, percent, percent) to #RRGGBB.

    Uses the chroma/hue-function form of the conversion.
    """
    s /= 100
    lightness /= 100
    a = s * min(lightness, 1 - lightness)

    def channel(n: int) -> float:
        k = (n + h / 30) % 12
        return 255 * (lightness - a * max(min(k - 3, 9 - k, 1), -1))

    return rgb_to_hex(channel(0), channel(8), channel(4))


def css_color_to_hex(value: str) -> str | None:
    """Convert a CSS hex, rgb(), rgba(), hsl() or hsla() color to hex.

    Returns:
        Uppercase hex, or None when the value is not a recognized color.
    """
    value = value.strip()

    if is_hex_like(value):
        return normalize_hex(value)

    rgb_match = _RGB_PATTERN.search(value)
    if rgb_match:
        r, g, b = (float(rgb_match.group(i)) for i in (1, 2, 3))
        return rgb_to_hex(r, g, b)

    hsl_match = _HSL_PATTERN.search(value)
    if hsl_match:
        h, s, lightness = (float(hsl_match.group(i)) for i in (1, 2, 3))
        return hsl_to_hex(h, s, lightness)

    return None


def css_alpha(value: str) -> float | None:
    """Alpha channel of an rgba()/hsla()-style color, if one is given."""
    rgb_match = _RGB_PATTERN.search(value)
    if rgb_match and rgb_match.group(4) is not None:
        alpha = float(rgb_match.group(4))
        return alpha / 100 if rgb_match.group(5) == "%" else alpha
    return None


def looks_like_color(value: str) -> bool:
    """True for hex, rgb(a) and hsl(a) values."""
    lowered = value.strip().lower()
    return is_hex_like(lowered) or lowered.startswith(("rgb(", "rgba(", "hsl(", "hsla("))


def unit_color_to_hex(color: dict) -> str:
    """Convert a 0-1 float RGB(A) mapping (design tool export) to #RRGGBB."""
    return rgb_to_hex(
        float(color.get("r", 0)) * 255,
        float(color.get("g", 0)) * 255,
        float(color.get("b", 0)) * 255,
    )
