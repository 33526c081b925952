"""Jetpack Compose Material 3 theme generator.

Produces a single Kotlin file: raw color constants, a light color
scheme, a Typography table, a Shapes table, spacing/elevation/motion
objects and an AppTheme composable wiring them into MaterialTheme.
"""

from dataclasses import dataclass

from ..normalizers.color import normalize_hex
from ..normalizers.length import format_number, round_half_up
from ..tokens import ColorToken, ElevationToken, MotionToken, TokenSet, TypographyToken
from .base import (
    GENERIC_FONT_FAMILIES,
    ThemeGenerator,
    comment_text,
    easing_control_points,
    to_camel,
    to_pascal,
    unique_identifiers,
)

# Parameters of lightColorScheme()
COLOR_SCHEME_SLOTS = (
    "primary",
    "onPrimary",
    "primaryContainer",
    "onPrimaryContainer",
    "inversePrimary",
    "secondary",
    "onSecondary",
    "secondaryContainer",
    "onSecondaryContainer",
    "tertiary",
    "onTertiary",
    "tertiaryContainer",
    "onTertiaryContainer",
    "background",
    "onBackground",
    "surface",
    "onSurface",
    "surfaceVariant",
    "onSurfaceVariant",
    "surfaceTint",
    "inverseSurface",
    "inverseOnSurface",
    "error",
    "onError",
    "errorContainer",
    "onErrorContainer",
    "outline",
    "outlineVariant",
    "scrim",
    "surfaceBright",
    "surfaceContainer",
    "surfaceContainerHigh",
    "surfaceContainerHighest",
    "surfaceContainerLow",
    "surfaceContainerLowest",
    "surfaceDim",
)

# Color categories that name a scheme slot
CATEGORY_SLOTS = {
    "primary": "primary",
    "secondary": "secondary",
    "tertiary": "tertiary",
    "error": "error",
    "surface": "surface",
    "background": "background",
}

# Parameters of Typography()
TYPOGRAPHY_SLOTS = tuple(
    f"{role}{size}"
    for role in ("display", "headline", "title", "body", "label")
    for size in ("Large", "Medium", "Small")
)

# Parameters of Shapes(), by accepted radius names
SHAPE_SLOTS = {
    "extraSmall": ("xs", "extra-small", "extrasmall"),
    "small": ("sm", "small"),
    "medium": ("md", "medium", "default"),
    "large": ("lg", "large"),
    "extraLarge": ("xl", "extra-large", "extralarge"),
}

KOTLIN_FONT_FAMILIES = {
    "serif": "FontFamily.Serif",
    "sans-serif": "FontFamily.SansSerif",
    "monospace": "FontFamily.Monospace",
    "cursive": "FontFamily.Cursive",
}

IMPORTS = [
    "androidx.compose.animation.core.CubicBezierEasing",
    "androidx.compose.animation.core.Easing",
    "androidx.compose.foundation.shape.RoundedCornerShape",
    "androidx.compose.material3.*",
    "androidx.compose.runtime.Composable",
    "androidx.compose.ui.graphics.Color",
    "androidx.compose.ui.text.TextStyle",
    "androidx.compose.ui.text.font.FontFamily",
    "androidx.compose.ui.text.font.FontWeight",
    "androidx.compose.ui.unit.dp",
    "androidx.compose.ui.unit.sp",
]

# Names the file already declares or imports at top level
TOP_LEVEL_NAMES = (
    "LightColorScheme",
    "AppTypography",
    "AppTextStyles",
    "AppShapes",
    "AppRadii",
    "AppSpacing",
    "AppElevation",
    "AppMotion",
    *(module.rsplit(".", 1)[1] for module in IMPORTS if not module.endswith("*")),
)


def kotlin_color(value: str) -> str:
    """Hex color as a Compose Color literal (0xAARRGGBB).

    >>> kotlin_color("#6750A4")
    'Color(0xFF6750A4)'
    >>> kotlin_color("#6750A480")
    'Color(0x806750A4)'
    """
    digits = normalize_hex(value).lstrip("#")
    if len(digits) == 8:
        return f"Color(0x{digits[6:8]}{digits[0:6]})"
    return f"Color(0xFF{digits})"


@dataclass
class Material3Config:
    """Configuration for Material 3 output."""

    package: str = "com.example.ui.theme"
    theme_name: str = "AppTheme"


class Material3Generator(ThemeGenerator):
    """Generates a Kotlin Compose Material 3 theme file."""

    def __init__(self, config: Material3Config | None = None):
        self.config = config or Material3Config()

    @property
    def target_name(self) -> str:
        return "material3"

    @property
    def file_extension(self) -> str:
        return ".kt"

    def render(self, tokens: TokenSet) -> str:
        sections = [f"package {self.config.package}", self._render_imports()]

        if tokens.colors:
            color_names = unique_identifiers(
                tokens.colors, lambda name: to_pascal(name, "Color"), self._top_level_names()
            )
            sections.append(self._render_color_constants(tokens.colors, color_names))
            sections.append(self._render_color_scheme(tokens.colors, color_names))
        if tokens.typography:
            sections.append(self._render_typography(tokens.typography))
        if tokens.radii:
            sections.append(self._render_shapes(tokens.radii))
        if tokens.spacing:
            sections.append(self._render_dp_object("AppSpacing", tokens.spacing, "Space"))
        if tokens.elevation:
            sections.append(self._render_elevation(tokens.elevation))
        if tokens.motion:
            sections.append(self._render_motion(tokens.motion))
        sections.append(self._render_theme(tokens))

        return "\n\n".join(sections) + "\n"

    def _render_imports(self) -> str:
        return "\n".join(f"import {module}" for module in IMPORTS)

    def _top_level_names(self) -> list[str]:
        return [*TOP_LEVEL_NAMES, self.config.theme_name]

    def _render_color_constants(self, colors: dict[str, ColorToken], names: dict[str, str]) -> str:
        lines = ["// Colors"]
        for name, token in colors.items():
            if token.description:
                lines.append(f"// {comment_text(token.description)}")
            lines.append(f"val {names[name]} = {kotlin_color(token.value)}")
        return "\n".join(lines)

    def assign_color_slots(self, colors: dict[str, ColorToken]) -> dict[str, str]:
        """Map color scheme slots to token names.

        Exact names win ("on-primary" fills onPrimary), then categories
        fill their slot, then "on-X" companions follow X into "on" + slot.
        """
        slots: dict[str, str] = {}

        for name in colors:
            slot = to_camel(name)
            if slot in COLOR_SCHEME_SLOTS and slot not in slots:
                slots[slot] = name

        assigned_by_category: dict[str, str] = {}
        for name, token in colors.items():
            if name in slots.values() or token.category is None:
                continue
            slot = CATEGORY_SLOTS.get(token.category.value)
            if slot and slot not in slots:
                slots[slot] = name
                assigned_by_category[name] = slot

        for name in colors:
            if name in slots.values():
                continue
            for prefix in ("on-", "on"):
                base = name[len(prefix):]
                if name.startswith(prefix) and base in assigned_by_category:
                    slot = "on" + assigned_by_category[base][0].upper() + assigned_by_category[base][1:]
                    if slot in COLOR_SCHEME_SLOTS and slot not in slots:
                        slots[slot] = name
                    break

        return {slot: slots[slot] for slot in COLOR_SCHEME_SLOTS if slot in slots}

    def _render_color_scheme(self, colors: dict[str, ColorToken], names: dict[str, str]) -> str:
        slots = self.assign_color_slots(colors)
        lines = ["val LightColorScheme = lightColorScheme("]
        for slot, name in slots.items():
            lines.append(f"    {slot} = {names[name]},")
        lines.append(")")
        return "\n".join(lines)

    def _text_style(self, token: TypographyToken, indent: str) -> list[str]:
        fields = [f"fontSize = {format_number(token.font_size)}.sp"]
        if token.line_height is not None:
            fields.append(f"lineHeight = {format_number(token.line_height)}.sp")
        if token.font_weight is not None:
            fields.append(f"fontWeight = FontWeight({token.font_weight})")
        if token.letter_spacing is not None:
            fields.append(f"letterSpacing = {format_number(token.letter_spacing)}.sp")

        family_comment = None
        if token.font_family:
            generic = KOTLIN_FONT_FAMILIES.get(token.font_family.lower())
            if generic:
                fields.append(f"fontFamily = {generic}")
            elif token.font_family.lower() not in GENERIC_FONT_FAMILIES:
                family = comment_text(token.font_family)
                family_comment = f'{indent}    // Font family "{family}": bundle it under res/font'

        lines = ["TextStyle("]
        if family_comment:
            lines.append(family_comment)
        lines.extend(f"{indent}    {field}," for field in fields)
        lines.append(f"{indent})")
        return lines

    def _render_typography(self, typography: dict[str, TypographyToken]) -> str:
        slotted: dict[str, TypographyToken] = {}
        extra: dict[str, TypographyToken] = {}
        for name, token in typography.items():
            slot = to_camel(name)
            if slot in TYPOGRAPHY_SLOTS and slot not in slotted:
                slotted[slot] = token
            else:
                extra[name] = token

        lines = ["val AppTypography = Typography("]
        for slot in TYPOGRAPHY_SLOTS:
            if slot in slotted:
                style = self._text_style(slotted[slot], "    ")
                lines.append(f"    {slot} = {style[0]}")
                lines.extend(style[1:-1])
                lines.append(f"{style[-1]},")
        lines.append(")")

        if extra:
            lines.append("")
            lines.append("object AppTextStyles {")
            names = unique_identifiers(extra, lambda name: to_pascal(name, "Text"))
            for name, token in extra.items():
                style = self._text_style(token, "    ")
                lines.append(f"    val {names[name]} = {style[0]}")
                lines.extend(style[1:])
            lines.append("}")

        return "\n".join(lines)

    def assign_shape_slots(self, radii: dict[str, float]) -> dict[str, float]:
        """Map Shapes() slots to radius values.

        Radii named xs/sm/md/lg/xl (or spelled out) fill their slot. When
        no name matches, the smallest radii fill the slots in order.
        """
        slots: dict[str, float] = {}
        for slot, names in SHAPE_SLOTS.items():
            for name, value in radii.items():
                if name.lower() in names:
                    slots[slot] = value
                    break

        if not slots:
            ordered = sorted(v for v in radii.values() if v < 9999)
            slots = dict(zip(SHAPE_SLOTS, ordered))

        return {slot: slots[slot] for slot in SHAPE_SLOTS if slot in slots}

    def _render_shapes(self, radii: dict[str, float]) -> str:
        lines = ["val AppShapes = Shapes("]
        for slot, value in self.assign_shape_slots(radii).items():
            lines.append(f"    {slot} = RoundedCornerShape({format_number(value)}.dp),")
        lines.append(")")
        lines.append("")
        lines.append(self._render_dp_object("AppRadii", radii, "Radius"))
        return "\n".join(lines)

    def _render_dp_object(self, object_name: str, values: dict[str, float], prefix: str) -> str:
        lines = [f"object {object_name} {{"]
        names = unique_identifiers(values, lambda name: to_pascal(name, prefix))
        for name, value in values.items():
            lines.append(f"    val {names[name]} = {format_number(value)}.dp")
        lines.append("}")
        return "\n".join(lines)

    def _render_elevation(self, elevation: dict[str, ElevationToken]) -> str:
        lines = ["object AppElevation {"]
        names = unique_identifiers(elevation, lambda name: to_pascal(name, "Elevation"))
        for name, token in elevation.items():
            ident = names[name]
            lines.append(f"    val {ident} = {format_number(token.shadow_radius)}.dp")
            lines.append(
                f"    val {ident}ShadowColor = "
                f"{kotlin_color(token.shadow_color)}.copy(alpha = {format_number(token.shadow_opacity)}f)"
            )
        lines.append("}")
        return "\n".join(lines)

    def _render_motion(self, motion: dict[str, MotionToken]) -> str:
        lines = ["object AppMotion {"]
        names = unique_identifiers(motion, lambda name: to_pascal(name, "Motion"))
        for name, token in motion.items():
            ident = names[name]
            lines.append(f"    const val {ident}DurationMillis = {int(round_half_up(token.duration))}")
            points = easing_control_points(token.easing)
            if points is not None:
                args = ", ".join(f"{format_number(p)}f" for p in points)
                lines.append(f"    val {ident}Easing: Easing = CubicBezierEasing({args})")
            else:
                easing = comment_text(token.easing)
                lines.append(f"    // {ident}Easing: no cubic-bezier form for \"{easing}\"")
        lines.append("}")
        return "\n".join(lines)

    def _render_theme(self, tokens: TokenSet) -> str:
        args = []
        if tokens.colors:
            args.append("colorScheme = LightColorScheme")
        if tokens.typography:
            args.append("typography = AppTypography")
        if tokens.radii:
            args.append("shapes = AppShapes")
        args.append("content = content")

        lines = [
            "@Composable",
            f"fun {self.config.theme_name}(content: @Composable () -> Unit) {{",
            "    MaterialTheme(",
        ]
        lines.extend(f"        {arg}," for arg in args)
        lines.append("    )")
        lines.append("}")
        return "\n".join(lines)
