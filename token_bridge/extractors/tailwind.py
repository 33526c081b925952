"""Tailwind CSS config token extractor.

Extracts design tokens from tailwind.config.js/ts source text. The
source is tokenized and parsed with the restricted object-literal
grammar in js_object; it is never executed.
"""

import re
from pathlib import Path
from typing import Any

from ..bridge_logging import LogCategory, get_category_logger
from ..errors import ExtractionError
from ..normalizers.color import is_hex_like, normalize_hex
from ..normalizers.length import looks_like_dimension, parse_to_pixels
from ..normalizers.shadow import parse_shadow
from ..tokens import ColorToken, ElevationToken, TokenSet, TypographyToken
from .base import TokenExtractor
from .js_object import (
    IDENT,
    PUNCT,
    STRING,
    JSParseError,
    ObjectLiteralParser,
    Token,
    tokenize,
)

logger = get_category_logger(LogCategory.EXTRACT)

DEFAULT_FONT_SIZE_PX = 16.0

# Module and type-only syntax with no bearing on theme values
_STRIP_PATTERNS = [
    (re.compile(r"import\s+type\s+.*?\n"), ""),
    (re.compile(r"import\s+.*?from\s+['\"].*?['\"]\s*;?\n?"), ""),
    (re.compile(r":\s*Config\b"), ""),
    (re.compile(r"satisfies\s+Config\b"), ""),
    (re.compile(r"as\s+const\b"), ""),
    (re.compile(r"require\s*\(\s*['\"].*?['\"]\s*\)"), "{}"),
]

NO_THEME_MESSAGE = (
    "Could not extract theme from Tailwind config. "
    "Ensure the config exports a theme or theme.extend object."
)
EMPTY_MESSAGE = "Tailwind config theme contained no extractable token values."


def strip_module_syntax(content: str) -> str:
    """Remove imports, require() calls and TypeScript-only annotations."""
    for pattern, replacement in _STRIP_PATTERNS:
        content = pattern.sub(replacement, content)
    return content


def _matches(tokens: list[Token], index: int, kind: str, value: Any = None) -> bool:
    if index >= len(tokens):
        return False
    token = tokens[index]
    return token.kind == kind and (value is None or token.value == value)


def _find_theme_block(tokens: list[Token]) -> int | None:
    """Index of the '{' opening the first `theme: {` property."""
    for i, token in enumerate(tokens):
        if (
            token.kind in (IDENT, STRING)
            and token.value == "theme"
            and _matches(tokens, i + 1, PUNCT, ":")
            and _matches(tokens, i + 2, PUNCT, "{")
        ):
            return i + 2
    return None


def _skip_define_config(tokens: list[Token], index: int) -> int:
    if _matches(tokens, index, IDENT, "defineConfig") and _matches(
        tokens, index + 1, PUNCT, "("
    ):
        return index + 2
    return index


def _find_config_block(tokens: list[Token]) -> int | None:
    """Index of the '{' opening the exported config object.

    Recognizes `export default {`, `module.exports = {` (either with an
    optional defineConfig( wrapper) and `export default name` where
    name is bound to an object literal earlier in the file.
    """
    for i, token in enumerate(tokens):
        start = None
        if token.kind == IDENT and token.value == "export" and _matches(
            tokens, i + 1, IDENT, "default"
        ):
            start = i + 2
        elif (
            token.kind == IDENT
            and token.value == "module"
            and _matches(tokens, i + 1, PUNCT, ".")
            and _matches(tokens, i + 2, IDENT, "exports")
            and _matches(tokens, i + 3, PUNCT, "=")
        ):
            start = i + 4
        if start is None:
            continue

        start = _skip_define_config(tokens, start)
        if _matches(tokens, start, PUNCT, "{"):
            return start
        if _matches(tokens, start, IDENT):
            bound = _find_binding(tokens, tokens[start].value)
            if bound is not None:
                return bound
    return None


def _find_binding(tokens: list[Token], name: str) -> int | None:
    for i, token in enumerate(tokens):
        if (
            token.kind == IDENT
            and token.value in ("const", "let", "var")
            and _matches(tokens, i + 1, IDENT, name)
            and _matches(tokens, i + 2, PUNCT, "=")
        ):
            start = _skip_define_config(tokens, i + 3)
            if _matches(tokens, start, PUNCT, "{"):
                return start
    return None


def extract_theme_object(content: str) -> dict[str, Any] | None:
    """Locate and parse the theme object of a Tailwind config.

    Tries the first `theme: {...}` block, then falls back to the whole
    exported config and its `theme` field (or the config itself when it
    has none).

    Returns:
        The theme as plain data, or None when nothing could be located
        or parsed.
    """
    cleaned = strip_module_syntax(content)
    try:
        tokens = tokenize(cleaned)
    except JSParseError as e:
        logger.debug(f"Tailwind config could not be tokenized: {e}")
        return None

    parser = ObjectLiteralParser(tokens)

    theme_start = _find_theme_block(tokens)
    if theme_start is not None:
        try:
            theme, _ = parser.parse_value(theme_start)
            return theme
        except JSParseError as e:
            logger.debug(f"theme block did not parse, trying whole config: {e}")

    config_start = _find_config_block(tokens)
    if config_start is not None:
        try:
            config, _ = parser.parse_value(config_start)
        except JSParseError as e:
            logger.debug(f"Exported config did not parse: {e}")
            return None
        theme = config.get("theme")
        return theme if isinstance(theme, dict) else config

    return None


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge two dicts recursively; values in override win at the leaves."""
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def theme_section(theme: dict[str, Any], key: str) -> dict[str, Any] | None:
    """Top-level theme[key] merged with theme.extend[key]."""
    base = theme.get(key)
    extend = theme.get("extend")
    extended = extend.get(key) if isinstance(extend, dict) else None

    base = base if isinstance(base, dict) else None
    extended = extended if isinstance(extended, dict) else None
    if base is None:
        return extended
    if extended is None:
        return base
    return _deep_merge(base, extended)


def _to_pixels(value: Any) -> float | None:
    if isinstance(value, str) or (
        isinstance(value, (int, float)) and not isinstance(value, bool)
    ):
        return parse_to_pixels(value)
    return None


def _line_height(value: Any, font_size: float) -> float | None:
    """Line height in px; unitless values multiply the font size."""
    if isinstance(value, str) and not looks_like_dimension(value):
        factor = parse_to_pixels(value)
        return factor * font_size if factor is not None else None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value) * font_size
    return _to_pixels(value)


def _font_weight(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    if isinstance(value, str):
        match = re.match(r"^\s*(\d+)", value)
        if match:
            return int(match.group(1))
    return None


class TailwindConfigExtractor(TokenExtractor):
    """Extractor for tailwind.config.{js,ts,mjs,cjs} source text.

    Reads colors, fontSize, fontFamily, spacing, borderRadius and
    boxShadow from the theme, with theme.extend merged on top. Values
    that aren't literals (function calls, variable references, spreads)
    are skipped.
    """

    @property
    def format_name(self) -> str:
        return "tailwind"

    @property
    def supported_extensions(self) -> list[str]:
        return [".js", ".ts", ".mjs", ".cjs"]

    def can_handle(self, file_path: Path) -> bool:
        """Only handles files named tailwind.config.*"""
        if file_path.suffix.lower() not in self.supported_extensions:
            return False
        return file_path.stem.lower() == "tailwind.config"

    def extract(self, content: str) -> TokenSet:
        theme = extract_theme_object(content)
        if not isinstance(theme, dict):
            raise ExtractionError.malformed(
                self.format_name,
                NO_THEME_MESSAGE,
                suggestion="Export the config with `export default` or "
                "`module.exports =` and keep the theme values literal",
            )

        typography = self._extract_typography(theme_section(theme, "fontSize") or {})
        typography.update(self._extract_font_families(theme_section(theme, "fontFamily") or {}))

        tokens = TokenSet.from_collections(
            colors=self._extract_colors(theme_section(theme, "colors") or {}),
            typography=typography,
            spacing=self._extract_numeric_map(theme_section(theme, "spacing") or {}),
            radii=self._extract_numeric_map(theme_section(theme, "borderRadius") or {}),
            elevation=self._extract_elevation(theme_section(theme, "boxShadow") or {}),
        )
        return self._finish(tokens, EMPTY_MESSAGE)

    def _extract_colors(
        self, palette: dict[str, Any], prefix: str = ""
    ) -> dict[str, ColorToken]:
        """Flatten a (nested) palette into hyphen-joined color names."""
        colors: dict[str, ColorToken] = {}
        for key, value in palette.items():
            if prefix:
                name = prefix if key == "DEFAULT" else f"{prefix}-{key}"
            else:
                name = key
            if isinstance(value, str) and is_hex_like(value):
                colors[name] = ColorToken(value=normalize_hex(value))
            elif isinstance(value, dict):
                colors.update(self._extract_colors(value, name))
            # CSS variable references, functions, etc. are skipped
        return colors

    def _extract_typography(self, font_sizes: dict[str, Any]) -> dict[str, TypographyToken]:
        typography: dict[str, TypographyToken] = {}
        for name, value in font_sizes.items():
            if isinstance(value, list):
                if not value:
                    continue
                size = _to_pixels(value[0])
                if size is None:
                    continue
                options = value[1] if len(value) > 1 else None
                if isinstance(options, dict):
                    typography[name] = TypographyToken(
                        font_size=size,
                        line_height=_line_height(options.get("lineHeight"), size),
                        letter_spacing=_to_pixels(options.get("letterSpacing")),
                        font_weight=_font_weight(options.get("fontWeight")),
                    )
                else:
                    typography[name] = TypographyToken(
                        font_size=size, line_height=_line_height(options, size)
                    )
            else:
                size = _to_pixels(value)
                if size is not None:
                    typography[name] = TypographyToken(font_size=size)
        return typography

    def _extract_font_families(self, families: dict[str, Any]) -> dict[str, TypographyToken]:
        typography: dict[str, TypographyToken] = {}
        for name, value in families.items():
            if isinstance(value, list):
                family = value[0] if value and isinstance(value[0], str) else None
            elif isinstance(value, str):
                family = value
            else:
                family = None
            if family:
                typography[f"font-{name}"] = TypographyToken(
                    font_size=DEFAULT_FONT_SIZE_PX, font_family=family
                )
        return typography

    def _extract_numeric_map(self, values: dict[str, Any]) -> dict[str, float]:
        result: dict[str, float] = {}
        for key, value in values.items():
            px = _to_pixels(value)
            if px is not None:
                result[key] = px
        return result

    def _extract_elevation(self, shadows: dict[str, Any]) -> dict[str, ElevationToken]:
        elevation: dict[str, ElevationToken] = {}
        for name, value in shadows.items():
            if not isinstance(value, str):
                continue
            parsed = parse_shadow(value)
            if parsed is not None:
                elevation[name] = parsed
        return elevation
