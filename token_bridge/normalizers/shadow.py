"""Shared box-shadow string parsing and rendering.

Shadow strings look like "<x> <y> <blur> [<spread>] <color>" where
lengths may carry a px suffix and color is hex or rgb()/rgba(). Spread
has no place in the canonical elevation token and is dropped.
"""

import re

from ..tokens import ElevationToken, ShadowOffset
from .color import css_alpha, css_color_to_hex, hex_to_rgb, split_alpha
from .length import format_number

_LEN = r"(-?\d+(?:\.\d+)?)\s*(?:px)?"
SHADOW_PATTERN = re.compile(
    rf"{_LEN}\s+{_LEN}\s+{_LEN}(?:\s+{_LEN})?\s+(rgba?\([^)]+\)|#[0-9a-fA-F]+)",
    re.IGNORECASE,
)


def parse_shadow(value: str) -> ElevationToken | None:
    """Parse a CSS shadow string into an elevation token.

    Only the first layer of a comma-separated shadow list is used.

    Returns:
        ElevationToken, or None when the string doesn't match.
    """
    match = SHADOW_PATTERN.search(value)
    if not match:
        return None

    x, y, blur = (float(match.group(i)) for i in (1, 2, 3))
    color_str = match.group(5)

    shadow_color = "#000000"
    shadow_opacity = 1.0

    if color_str.startswith("#"):
        hex_value, alpha = split_alpha(color_str)
        if len(hex_value) == 7:
            shadow_color = hex_value
        if alpha is not None:
            shadow_opacity = alpha
    else:
        converted = css_color_to_hex(color_str)
        if converted:
            shadow_color = converted
        alpha = css_alpha(color_str)
        if alpha is not None:
            shadow_opacity = alpha

    return ElevationToken(
        shadow_color=shadow_color,
        shadow_offset=ShadowOffset(x=x, y=y),
        shadow_radius=blur,
        shadow_opacity=shadow_opacity,
    )


def format_shadow(token: ElevationToken) -> str:
    """Render an elevation token back to a CSS box-shadow string."""
    r, g, b = hex_to_rgb(token.shadow_color)
    return (
        f"{format_number(token.shadow_offset.x)}px "
        f"{format_number(token.shadow_offset.y)}px "
        f"{format_number(token.shadow_radius)}px "
        f"rgba({r}, {g}, {b}, {format_number(token.shadow_opacity)})"
    )
