"""CSS custom properties generator.

Emits one :root block for the base token set. When a dark set is
supplied it is emitted twice: inside a prefers-color-scheme media query
and under a [data-theme="dark"] selector for manual switching. Dark
blocks re-state only the entries present in the dark set.
"""

from ..normalizers.length import format_number
from ..normalizers.shadow import format_shadow
from ..tokens import TokenSet
from .base import GENERIC_FONT_FAMILIES, ThemeGenerator

HEADER = "/* Design tokens */"


def _font_family(family: str) -> str:
    if family.lower() in GENERIC_FONT_FAMILIES:
        return family
    return f'"{family}"'


def css_escape(name: str) -> str:
    """Escape a token name for use inside a custom property name.

    Letters, digits, "-", "_" and non-ASCII pass through; other
    characters are backslash-escaped, control characters as hex.

    >>> css_escape("1.5")
    '1\\\\.5'
    """
    out = []
    for ch in name:
        if not ch.isascii() or ch.isalnum() or ch in "-_":
            out.append(ch)
        elif ord(ch) < 0x20 or ch == "\x7f":
            out.append(f"\\{ord(ch):x} ")
        else:
            out.append(f"\\{ch}")
    return "".join(out)


def custom_properties(tokens: TokenSet) -> list[tuple[str, str]]:
    """Flatten a token set into (property name, value) pairs."""
    props: list[tuple[str, str]] = []

    for key, color in (tokens.colors or {}).items():
        name = css_escape(key)
        props.append((f"--color-{name}", color.value.lower()))

    for key, style in (tokens.typography or {}).items():
        name = css_escape(key)
        if style.font_family:
            props.append((f"--font-family-{name}", _font_family(style.font_family)))
        props.append((f"--font-size-{name}", f"{format_number(style.font_size)}px"))
        if style.line_height is not None:
            props.append((f"--line-height-{name}", f"{format_number(style.line_height)}px"))
        if style.font_weight is not None:
            props.append((f"--font-weight-{name}", str(style.font_weight)))
        if style.letter_spacing is not None:
            props.append((f"--letter-spacing-{name}", f"{format_number(style.letter_spacing)}px"))

    for key, value in (tokens.spacing or {}).items():
        name = css_escape(key)
        props.append((f"--space-{name}", f"{format_number(value)}px"))

    for key, value in (tokens.radii or {}).items():
        name = css_escape(key)
        props.append((f"--radius-{name}", f"{format_number(value)}px"))

    for key, shadow in (tokens.elevation or {}).items():
        name = css_escape(key)
        props.append((f"--shadow-{name}", format_shadow(shadow)))

    for key, motion in (tokens.motion or {}).items():
        name = css_escape(key)
        props.append((f"--duration-{name}", f"{format_number(motion.duration)}ms"))
        props.append((f"--easing-{name}", motion.easing))

    return props


def _block(selector: str, props: list[tuple[str, str]], indent: str = "") -> list[str]:
    lines = [f"{indent}{selector} {{"]
    lines.extend(f"{indent}  {name}: {value};" for name, value in props)
    lines.append(f"{indent}}}")
    return lines


class CSSVariablesGenerator(ThemeGenerator):
    """Generates CSS custom properties with optional dark mode.

    Args:
        dark_tokens: Optional dark-mode token set.
    """

    def __init__(self, dark_tokens: TokenSet | None = None):
        self.dark_tokens = dark_tokens

    @property
    def target_name(self) -> str:
        return "css"

    @property
    def file_extension(self) -> str:
        return ".css"

    def render(self, tokens: TokenSet) -> str:
        lines = [HEADER, ""]
        lines.extend(_block(":root", custom_properties(tokens)))

        if self.dark_tokens is not None:
            dark_props = custom_properties(self.dark_tokens)
            lines.append("")
            lines.append("@media (prefers-color-scheme: dark) {")
            lines.extend(_block(":root", dark_props, indent="  "))
            lines.append("}")
            lines.append("")
            lines.extend(_block('[data-theme="dark"]', dark_props))

        return "\n".join(lines) + "\n"
