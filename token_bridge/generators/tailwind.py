"""Tailwind CSS config generator.

Emits a tailwind.config.js whose body is plain JSON under
theme.extend, so the output parses both as JavaScript and (once the
module wrapper is removed) as JSON.
"""

import json
from dataclasses import dataclass
from typing import Any, Literal

from ..normalizers.length import format_number, px_to_rem
from ..normalizers.shadow import format_shadow
from ..tokens import TokenSet, TypographyToken
from .base import ThemeGenerator

TYPE_COMMENT = "/** @type {import('tailwindcss').Config} */"

# Dialect -> export statement
EXPORT_STATEMENTS = {
    "esm": "export default ",
    "cjs": "module.exports = ",
}


@dataclass
class TailwindConfigOptions:
    """Configuration for Tailwind output."""

    format: Literal["esm", "cjs"] = "esm"


def _px(value: float) -> str:
    return f"{format_number(value)}px"


def font_size_entry(token: TypographyToken) -> list[str]:
    """Tailwind fontSize pair [rem, lineHeightRem] for a typography token.

    A token without a line height gets "normal".
    """
    line_height = px_to_rem(token.line_height) if token.line_height is not None else "normal"
    return [px_to_rem(token.font_size), line_height]


class TailwindConfigGenerator(ThemeGenerator):
    """Generates a tailwind.config.js from canonical tokens."""

    def __init__(self, options: TailwindConfigOptions | None = None):
        self.options = options or TailwindConfigOptions()
        if self.options.format not in EXPORT_STATEMENTS:
            raise ValueError(
                f"Unknown Tailwind config format '{self.options.format}' "
                f"(expected one of {', '.join(EXPORT_STATEMENTS)})"
            )

    @property
    def target_name(self) -> str:
        return "tailwind"

    @property
    def file_extension(self) -> str:
        return ".js"

    def build_theme(self, tokens: TokenSet) -> dict[str, Any]:
        """Build the theme.extend mapping as plain data."""
        extend: dict[str, Any] = {}

        if tokens.colors:
            extend["colors"] = {name: token.value.lower() for name, token in tokens.colors.items()}

        if tokens.typography:
            extend["fontSize"] = {
                name: font_size_entry(token) for name, token in tokens.typography.items()
            }
            families = {
                name.removeprefix("font-"): [token.font_family]
                for name, token in tokens.typography.items()
                if token.font_family
            }
            if families:
                extend["fontFamily"] = families
            weights = {
                name: str(token.font_weight)
                for name, token in tokens.typography.items()
                if token.font_weight is not None
            }
            if weights:
                extend["fontWeight"] = weights
            tracking = {
                name: _px(token.letter_spacing)
                for name, token in tokens.typography.items()
                if token.letter_spacing is not None
            }
            if tracking:
                extend["letterSpacing"] = tracking

        if tokens.spacing:
            extend["spacing"] = {name: _px(value) for name, value in tokens.spacing.items()}

        if tokens.radii:
            extend["borderRadius"] = {name: _px(value) for name, value in tokens.radii.items()}

        if tokens.elevation:
            extend["boxShadow"] = {
                name: format_shadow(token) for name, token in tokens.elevation.items()
            }

        if tokens.motion:
            extend["transitionDuration"] = {
                name: f"{format_number(token.duration)}ms" for name, token in tokens.motion.items()
            }
            extend["transitionTimingFunction"] = {
                name: token.easing for name, token in tokens.motion.items()
            }

        return {"theme": {"extend": extend}}

    def render(self, tokens: TokenSet) -> str:
        body = json.dumps(self.build_theme(tokens), indent=2)
        return f"{TYPE_COMMENT}\n{EXPORT_STATEMENTS[self.options.format]}{body};\n"
