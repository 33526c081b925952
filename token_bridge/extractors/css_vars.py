"""CSS custom properties token extractor.

Extracts design tokens from CSS custom property declarations
(--color-primary: #6750A4;) found anywhere in a stylesheet: :root,
[data-theme] selectors, media queries. The first declaration of a name
wins, so light-mode :root values take precedence over later overrides.
"""

import re
from pathlib import Path
from typing import Any

from ..errors import ExtractionError
from ..normalizers.color import css_color_to_hex, looks_like_color
from ..normalizers.length import looks_like_dimension, parse_to_pixels
from ..normalizers.shadow import parse_shadow
from ..tokens import ColorToken, ElevationToken, TokenSet, TypographyToken
from .base import TokenExtractor

DEFAULT_FONT_SIZE_PX = 16.0

COMMENT_PATTERN = re.compile(r"/\*.*?\*/", re.DOTALL)
PROPERTY_PATTERN = re.compile(r"(--[\w-]+)\s*:\s*([^;]+);")

# Prefix routing, checked in order
COLOR_PREFIX = re.compile(r"^--(color|clr|bg|fg|text-color|border-color)")
TYPOGRAPHY_PREFIX = re.compile(r"^--(font|type|text|line-height|leading)")
SPACING_PREFIX = re.compile(r"^--(space|spacing|gap|padding|margin)")
RADIUS_PREFIX = re.compile(r"^--(radius|radii|rounded|border-radius)")
SHADOW_PREFIX = re.compile(r"^--(shadow|elevation)")

# Stripped from the property name, in order, to form the token name
NAME_PREFIXES = [
    re.compile(r"^(color|clr)-"),
    re.compile(r"^(font|type|text)-"),
    re.compile(r"^(space|spacing)-"),
    re.compile(r"^(radius|radii|rounded)-"),
    re.compile(r"^(shadow|elevation)-"),
]
PARTIAL_PREFIX = re.compile(r"^(size|weight|family|line-height|leading|height)-?")

NO_PROPERTIES_MESSAGE = "No CSS custom properties found in the provided CSS."
EMPTY_MESSAGE = "CSS custom properties found but none could be mapped to design tokens."


def parse_custom_properties(css: str) -> dict[str, str]:
    """Collect --name: value declarations, first occurrence wins.

    Returns:
        Mapping of property name (with leading --) to trimmed value.
    """
    cleaned = COMMENT_PATTERN.sub("", css)
    properties: dict[str, str] = {}
    for match in PROPERTY_PATTERN.finditer(cleaned):
        name = match.group(1).strip()
        if name not in properties:
            properties[name] = match.group(2).strip()
    return properties


def token_name(property_name: str) -> str:
    """Strip the leading -- and the category prefix from a property name.

    >>> token_name("--color-primary")
    'primary'
    >>> token_name("--space-md")
    'md'
    """
    name = property_name[2:] if property_name.startswith("--") else property_name
    for pattern in NAME_PREFIXES:
        name = pattern.sub("", name)
    return name


def parse_typography_partial(name: str, value: str) -> dict[str, Any] | None:
    """Map one typography property to the field it sets.

    The property name decides the field: size, weight, family,
    line-height/leading. Names without one of those words (e.g.
    --text-sm) are sniffed by value: a dimension is a font size, other
    text is a font stack.
    """
    if "size" in name:
        px = parse_to_pixels(value)
        return {"font_size": px} if px is not None else None

    if "weight" in name:
        match = re.match(r"^\s*(\d+)", value)
        return {"font_weight": int(match.group(1))} if match else None

    if "family" in name:
        return _font_family(value)

    if "line-height" in name or "leading" in name:
        if looks_like_dimension(value):
            px = parse_to_pixels(value)
            return {"line_height": px} if px is not None else None
        factor = parse_to_pixels(value)
        return {"line_height_factor": factor} if factor is not None else None

    if looks_like_dimension(value):
        return {"font_size": parse_to_pixels(value)}
    if not looks_like_color(value) and re.search(r"[A-Za-z]", value) and "(" not in value:
        return _font_family(value)
    return None


def _font_family(value: str) -> dict[str, Any] | None:
    family = value.split(",")[0].replace('"', "").replace("'", "").strip()
    return {"font_family": family} if family else None


def _build_typography(partial: dict[str, Any]) -> TypographyToken:
    font_size = partial.get("font_size", DEFAULT_FONT_SIZE_PX)
    line_height = partial.get("line_height")
    if line_height is None and "line_height_factor" in partial:
        line_height = partial["line_height_factor"] * font_size
    return TypographyToken(
        font_size=font_size,
        font_family=partial.get("font_family"),
        line_height=line_height,
        font_weight=partial.get("font_weight"),
    )


class CSSVariablesExtractor(TokenExtractor):
    """Extractor for CSS custom properties.

    Properties are routed to a collection by name prefix (--color-,
    --font-, --space-, --radius-, --shadow- and their synonyms); names
    with no known prefix are sniffed by value, so colors land in colors
    and dimensions in spacing.
    """

    @property
    def format_name(self) -> str:
        return "css"

    @property
    def supported_extensions(self) -> list[str]:
        return [".css", ".scss", ".less"]

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.supported_extensions

    def extract(self, content: str) -> TokenSet:
        properties = parse_custom_properties(content)
        if not properties:
            raise ExtractionError.malformed(
                self.format_name,
                NO_PROPERTIES_MESSAGE,
                suggestion="Declare tokens as custom properties, e.g. --color-primary: #6750A4;",
            )

        colors: dict[str, ColorToken] = {}
        typography: dict[str, dict[str, Any]] = {}
        spacing: dict[str, float] = {}
        radii: dict[str, float] = {}
        elevation: dict[str, ElevationToken] = {}

        for name, value in properties.items():
            key = token_name(name)

            if COLOR_PREFIX.match(name):
                hex_value = css_color_to_hex(value)
                if hex_value:
                    colors[re.sub(r"^color-", "", key)] = ColorToken(value=hex_value)
            elif TYPOGRAPHY_PREFIX.match(name):
                partial = parse_typography_partial(name, value)
                style = PARTIAL_PREFIX.sub("", key)
                if partial and style:
                    typography.setdefault(style, {}).update(partial)
            elif SPACING_PREFIX.match(name):
                px = parse_to_pixels(value)
                if px is not None:
                    spacing[key] = px
            elif RADIUS_PREFIX.match(name):
                px = parse_to_pixels(value)
                if px is not None:
                    radii[key] = px
            elif SHADOW_PREFIX.match(name):
                shadow = parse_shadow(value)
                if shadow is not None:
                    elevation[key] = shadow
            else:
                hex_value = css_color_to_hex(value) if looks_like_color(value) else None
                if hex_value:
                    colors[key] = ColorToken(value=hex_value)
                else:
                    px = parse_to_pixels(value)
                    if px is not None:
                        spacing[key] = px

        tokens = TokenSet.from_collections(
            colors=colors,
            typography={name: _build_typography(p) for name, p in typography.items()},
            spacing=spacing,
            radii=radii,
            elevation=elevation,
        )
        return self._finish(tokens, EMPTY_MESSAGE)
