"""Value normalizers shared by extractors and generators.

- length: px/rem/em and duration parsing, number formatting
- color: hex normalization and CSS color conversion
- shadow: box-shadow string parsing and rendering
"""

from .color import (
    css_color_to_hex,
    hex_to_rgb,
    hsl_to_hex,
    is_hex_like,
    is_valid_hex,
    normalize_hex,
    split_alpha,
)
from .length import REM_BASE_PX, format_number, parse_duration, parse_to_pixels
from .shadow import format_shadow, parse_shadow

__all__ = [
    "REM_BASE_PX",
    "css_color_to_hex",
    "format_number",
    "format_shadow",
    "hex_to_rgb",
    "hsl_to_hex",
    "is_hex_like",
    "is_valid_hex",
    "normalize_hex",
    "parse_duration",
    "parse_shadow",
    "parse_to_pixels",
    "split_alpha",
]
