"""SwiftUI theme generator.

Produces a single Swift file: Color constants, font/spacing/radius/
motion namespaces, and one shadow view modifier per elevation token.
With liquid_glass enabled it also emits iOS 26 Liquid Glass helpers
guarded by @available; without the flag none of them appear.
"""

from dataclasses import dataclass

from ..normalizers.color import hex_alpha, hex_to_rgb
from ..normalizers.length import format_number
from ..tokens import ColorToken, ElevationToken, MotionToken, TokenSet, TypographyToken
from .base import (
    GENERIC_FONT_FAMILIES,
    ThemeGenerator,
    comment_text,
    easing_control_points,
    to_camel,
    unique_identifiers,
)

SWIFT_WEIGHTS = {
    100: "ultraLight",
    200: "thin",
    300: "light",
    400: "regular",
    500: "medium",
    600: "semibold",
    700: "bold",
    800: "heavy",
    900: "black",
}

SWIFT_DESIGNS = {
    "serif": ".serif",
    "monospace": ".monospaced",
}

DEFAULT_GLASS_RADIUS = 16.0
DEFAULT_GLASS_PADDING = 16.0

# Reserved words that need backticks when used as a member name
SWIFT_KEYWORDS = frozenset(
    """
    associatedtype class deinit enum extension fileprivate func import init
    inout internal let open operator private precedencegroup protocol public
    rethrows static struct subscript typealias var break case catch continue
    default defer do else fallthrough for guard if in repeat return throw
    switch where while as await false is nil self super throws true try
    """.split()
)


def swift_weight(weight: int | None) -> str:
    """Nearest Font.Weight case for a numeric weight.

    >>> swift_weight(650)
    'bold'
    >>> swift_weight(None)
    'regular'
    """
    if weight is None:
        return "regular"
    nearest = min(max(int(weight / 100 + 0.5) * 100, 100), 900)
    return SWIFT_WEIGHTS[nearest]


def swift_color(value: str) -> str:
    """Hex color as a SwiftUI Color initializer with 0-1 channels."""
    r, g, b = hex_to_rgb(value)
    args = [
        f"red: {format_number(r / 255, 3)}",
        f"green: {format_number(g / 255, 3)}",
        f"blue: {format_number(b / 255, 3)}",
    ]
    alpha = hex_alpha(value)
    if alpha < 1:
        args.append(f"opacity: {format_number(alpha, 3)}")
    return f"Color({', '.join(args)})"


def swift_identifier(ident: str) -> str:
    """Backtick-quote identifiers that are Swift keywords.

    >>> swift_identifier("default")
    '`default`'
    """
    return f"`{ident}`" if ident in SWIFT_KEYWORDS else ident


def swift_names(names, prefix: str) -> dict[str, str]:
    """Distinct camelCase member names, unquoted."""
    return unique_identifiers(names, lambda name: to_camel(name, prefix))


@dataclass
class SwiftUIConfig:
    """Configuration for SwiftUI output."""

    liquid_glass: bool = False


class SwiftUIGenerator(ThemeGenerator):
    """Generates a SwiftUI theme file."""

    def __init__(self, config: SwiftUIConfig | None = None):
        self.config = config or SwiftUIConfig()

    @property
    def target_name(self) -> str:
        return "swiftui"

    @property
    def file_extension(self) -> str:
        return ".swift"

    def render(self, tokens: TokenSet) -> str:
        sections = ["import SwiftUI"]
        color_names = swift_names(tokens.colors or {}, "color")

        if tokens.colors:
            sections.append(self._render_colors(tokens.colors, color_names))
        if tokens.typography:
            sections.append(self._render_typography(tokens.typography))
        if tokens.spacing:
            sections.append(self._render_cgfloat_struct("AppSpacing", "Spacing", tokens.spacing))
        if tokens.radii:
            sections.append(self._render_cgfloat_struct("AppRadii", "Radii", tokens.radii))
        if tokens.motion:
            sections.append(self._render_motion(tokens.motion))
        if tokens.elevation:
            sections.append(self._render_shadows(tokens.elevation))
        if self.config.liquid_glass:
            sections.append(self._render_liquid_glass(tokens, color_names))

        return "\n\n".join(sections) + "\n"

    def _render_colors(self, colors: dict[str, ColorToken], names: dict[str, str]) -> str:
        lines = ["// MARK: - Colors", "", "extension Color {"]
        for name, token in colors.items():
            if token.description:
                lines.append(f"    /// {comment_text(token.description)}")
            ident = swift_identifier(names[name])
            lines.append(f"    static let {ident} = {swift_color(token.value)}")
        lines.append("}")
        return "\n".join(lines)

    def _font(self, token: TypographyToken) -> str:
        size = format_number(token.font_size)
        weight = swift_weight(token.font_weight)
        family = token.font_family
        if family and family.lower() not in GENERIC_FONT_FAMILIES:
            return f'Font.custom("{family}", size: {size}).weight(.{weight})'
        design = SWIFT_DESIGNS.get(family.lower()) if family else None
        if design:
            return f"Font.system(size: {size}, weight: .{weight}, design: {design})"
        return f"Font.system(size: {size}, weight: .{weight})"

    def _render_typography(self, typography: dict[str, TypographyToken]) -> str:
        lines = ["// MARK: - Typography", "", "struct AppTypography {"]
        for name, ident in swift_names(typography, "text").items():
            token = typography[name]
            lines.append(f"    static let {swift_identifier(ident)} = {self._font(token)}")
            if token.line_height is not None and token.line_height > token.font_size:
                spacing = format_number(token.line_height - token.font_size)
                lines.append(f"    static let {ident}LineSpacing: CGFloat = {spacing}")
            if token.letter_spacing is not None:
                tracking = format_number(token.letter_spacing)
                lines.append(f"    static let {ident}Tracking: CGFloat = {tracking}")
        lines.append("}")
        return "\n".join(lines)

    def _render_cgfloat_struct(self, struct_name: str, mark: str, values: dict[str, float]) -> str:
        lines = [f"// MARK: - {mark}", "", f"struct {struct_name} {{"]
        for name, ident in swift_names(values, "size").items():
            lines.append(
                f"    static let {swift_identifier(ident)}: CGFloat = {format_number(values[name])}"
            )
        lines.append("}")
        return "\n".join(lines)

    def _animation(self, token: MotionToken) -> str:
        seconds = format_number(token.duration / 1000, 3)
        if token.easing.strip().lower() == "linear":
            return f".linear(duration: {seconds})"
        points = easing_control_points(token.easing)
        if points is None:
            return f".easeInOut(duration: {seconds})"
        args = ", ".join(format_number(p) for p in points)
        return f".timingCurve({args}, duration: {seconds})"

    def _render_motion(self, motion: dict[str, MotionToken]) -> str:
        lines = ["// MARK: - Motion", "", "struct AppMotion {"]
        for name, ident in swift_names(motion, "motion").items():
            animation = self._animation(motion[name])
            lines.append(f"    static let {swift_identifier(ident)}: Animation = {animation}")
        lines.append("}")
        return "\n".join(lines)

    def _render_shadows(self, elevation: dict[str, ElevationToken]) -> str:
        lines = ["// MARK: - Elevation", "", "extension View {"]
        names = swift_names(elevation, "level")
        for index, (name, token) in enumerate(elevation.items()):
            if index:
                lines.append("")
            color = swift_color(token.shadow_color)
            lines.extend(
                [
                    f"    func {names[name]}Shadow() -> some View {{",
                    "        self.shadow(",
                    f"            color: {color}.opacity({format_number(token.shadow_opacity)}),",
                    f"            radius: {format_number(token.shadow_radius)},",
                    f"            x: {format_number(token.shadow_offset.x)},",
                    f"            y: {format_number(token.shadow_offset.y)}",
                    "        )",
                    "    }",
                ]
            )
        lines.append("}")
        return "\n".join(lines)

    def _glass_radius(self, tokens: TokenSet) -> str:
        radii = tokens.radii or {}
        for name in ("md", "medium", "lg", "large"):
            if name in radii:
                return format_number(radii[name])
        return format_number(DEFAULT_GLASS_RADIUS)

    def _glass_padding(self, tokens: TokenSet) -> str:
        spacing = tokens.spacing or {}
        for name in ("md", "medium"):
            if name in spacing:
                return format_number(spacing[name])
        return format_number(DEFAULT_GLASS_PADDING)

    def _render_liquid_glass(self, tokens: TokenSet, color_names: dict[str, str]) -> str:
        radius = self._glass_radius(tokens)
        padding = self._glass_padding(tokens)
        tint = None
        if tokens.colors:
            primary = next(
                (
                    name
                    for name, token in tokens.colors.items()
                    if name == "primary" or (token.category and token.category.value == "primary")
                ),
                None,
            )
            if primary is not None:
                tint = f"Color.{swift_identifier(color_names[primary])}"

        lines = [
            "// MARK: - Liquid Glass (iOS 26+)",
            "",
            "@available(iOS 26.0, *)",
            "struct GlassCard<Content: View>: View {",
            f"    var cornerRadius: CGFloat = {radius}",
            "    @ViewBuilder var content: Content",
            "",
            "    var body: some View {",
            "        content",
            f"            .padding({padding})",
            "            .glassEffect(.regular, in: .rect(cornerRadius: cornerRadius))",
            "    }",
            "}",
            "",
            "@available(iOS 26.0, *)",
            "extension View {",
            f"    func appGlass(cornerRadius: CGFloat = {radius}) -> some View {{",
            "        self.glassEffect(.regular, in: .rect(cornerRadius: cornerRadius))",
            "    }",
        ]
        if tint:
            lines.extend(
                [
                    "",
                    f"    func appGlassTinted(cornerRadius: CGFloat = {radius}) -> some View {{",
                    f"        self.glassEffect(.regular.tint({tint}), in: .rect(cornerRadius: cornerRadius))",
                    "    }",
                ]
            )
        lines.extend(
            [
                "}",
                "",
                "extension View {",
                "    /// Liquid Glass on iOS 26+, ultra-thin material before that.",
                "    @ViewBuilder",
                f"    func appGlassOrMaterial(cornerRadius: CGFloat = {radius}) -> some View {{",
                "        if #available(iOS 26.0, *) {",
                "            self.glassEffect(.regular, in: .rect(cornerRadius: cornerRadius))",
                "        } else {",
                "            self.background(.ultraThinMaterial, in: RoundedRectangle(cornerRadius: cornerRadius))",
                "        }",
                "    }",
                "}",
            ]
        )
        return "\n".join(lines)
