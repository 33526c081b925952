"""Unit tests for the SwiftUI generator."""

import pytest

from token_bridge.generators.swiftui import (
    SwiftUIConfig,
    SwiftUIGenerator,
    swift_color,
    swift_identifier,
    swift_weight,
)
from token_bridge.tokens import MotionToken, TokenSet


@pytest.fixture
def generator() -> SwiftUIGenerator:
    """Create a generator without Liquid Glass."""
    return SwiftUIGenerator()


class TestHelpers:
    """Tests for Swift value helpers."""

    @pytest.mark.parametrize(
        "weight,expected",
        [(None, "regular"), (100, "ultraLight"), (400, "regular"), (650, "bold"), (1000, "black")],
    )
    def test_swift_weight(self, weight, expected):
        """Weights round to the nearest hundred."""
        assert swift_weight(weight) == expected

    def test_swift_color(self):
        assert swift_color("#6750A4") == "Color(red: 0.404, green: 0.314, blue: 0.643)"

    def test_swift_color_with_alpha(self):
        assert swift_color("#00000080") == "Color(red: 0, green: 0, blue: 0, opacity: 0.502)"

    @pytest.mark.parametrize("ident,expected", [("default", "`default`"), ("in", "`in`"), ("body", "body")])
    def test_swift_identifier(self, ident, expected):
        assert swift_identifier(ident) == expected


class TestSwiftUIOutput:
    """Tests for the generated Swift file."""

    def test_colors(self, generator, sample_tokens):
        output = generator.generate(sample_tokens)
        assert output.startswith("import SwiftUI\n")
        assert "extension Color {" in output
        assert "    static let primary = Color(red: 0.404, green: 0.314, blue: 0.643)" in output
        assert "    static let onPrimary = Color(red: 1, green: 1, blue: 1)" in output

    def test_typography(self, generator, sample_tokens):
        output = generator.generate(sample_tokens)
        assert "struct AppTypography {" in output
        assert "    static let displayLarge = Font.system(size: 57, weight: .regular)" in output
        assert "    static let displayLargeLineSpacing: CGFloat = 7" in output
        assert 'Font.custom("Roboto", size: 14).weight(.regular)' in output

    def test_system_design_for_generic_family(self, generator):
        tokens = TokenSet.from_dict({"typography": {"code": {"fontSize": 13, "fontFamily": "monospace"}}})
        assert "design: .monospaced" in generator.generate(tokens)

    def test_spacing_and_radii(self, generator, sample_tokens):
        output = generator.generate(sample_tokens)
        assert "struct AppSpacing {" in output
        assert "    static let xs: CGFloat = 4" in output
        assert "struct AppRadii {" in output
        assert "    static let xl: CGFloat = 28" in output

    def test_numeric_names_get_prefix(self, generator):
        output = generator.generate(TokenSet.from_dict({"spacing": {"2xl": 48}}))
        assert "    static let size2xl: CGFloat = 48" in output

    def test_keyword_names_are_escaped(self, generator):
        """Tailwind's DEFAULT radius and other keywords get backticks."""
        output = generator.generate(TokenSet.from_dict({"radii": {"DEFAULT": 4, "in": 2, "lg": 8}}))
        assert "    static let `default`: CGFloat = 4" in output
        assert "    static let `in`: CGFloat = 2" in output
        assert "    static let lg: CGFloat = 8" in output

    def test_keyword_typography_keeps_derived_names_plain(self, generator):
        tokens = TokenSet.from_dict(
            {"typography": {"default": {"fontSize": 16, "lineHeight": 24, "letterSpacing": 0.5}}}
        )
        output = generator.generate(tokens)
        assert "    static let `default` = Font.system(size: 16, weight: .regular)" in output
        assert "    static let defaultLineSpacing: CGFloat = 8" in output
        assert "    static let defaultTracking: CGFloat = 0.5" in output

    def test_colliding_names_get_suffix(self, generator, caplog):
        tokens = TokenSet.from_dict(
            {"colors": {"primary-50": {"value": "#000000"}, "primary50": {"value": "#FFFFFF"}}}
        )
        output = generator.generate(tokens)
        assert "    static let primary50 = Color(red: 0, green: 0, blue: 0)" in output
        assert "    static let primary50_2 = Color(red: 1, green: 1, blue: 1)" in output
        assert any("primary50_2" in record.getMessage() for record in caplog.records)

    def test_multiline_description_stays_in_comment(self, generator):
        tokens = TokenSet.from_dict(
            {"colors": {"brand": {"value": "#000000", "description": "Brand\nstatic let x = 1"}}}
        )
        output = generator.generate(tokens)
        assert "    /// Brand static let x = 1" in output
        assert "\nstatic let x = 1" not in output

    def test_shadow_modifier(self, generator, sample_tokens):
        output = generator.generate(sample_tokens)
        assert "extension View {" in output
        assert "    func lowShadow() -> some View {" in output
        assert "            color: Color(red: 0, green: 0, blue: 0).opacity(0.1)," in output
        assert "            radius: 4," in output
        assert "            y: 2" in output

    def test_motion(self, generator, sample_tokens):
        output = generator.generate(sample_tokens)
        assert "struct AppMotion {" in output
        assert "static let fast: Animation = .timingCurve(0, 0, 0.58, 1, duration: 0.15)" in output

    def test_linear_and_unknown_easing(self, generator):
        tokens = TokenSet(
            motion={
                "a": MotionToken(duration=200, easing="linear"),
                "b": MotionToken(duration=300, easing="steps(3)"),
            }
        )
        output = generator.generate(tokens)
        assert "static let a: Animation = .linear(duration: 0.2)" in output
        assert "static let b: Animation = .easeInOut(duration: 0.3)" in output

    def test_no_liquid_glass_by_default(self, generator, sample_tokens):
        output = generator.generate(sample_tokens)
        assert "glassEffect" not in output
        assert "@available(iOS 26.0, *)" not in output


class TestLiquidGlass:
    """Tests for the iOS 26 Liquid Glass helpers."""

    @pytest.fixture
    def glass_generator(self) -> SwiftUIGenerator:
        return SwiftUIGenerator(SwiftUIConfig(liquid_glass=True))

    def test_glass_helpers(self, glass_generator, sample_tokens):
        output = glass_generator.generate(sample_tokens)
        assert "@available(iOS 26.0, *)" in output
        assert "struct GlassCard<Content: View>: View {" in output
        assert ".glassEffect(.regular, in: .rect(cornerRadius: cornerRadius))" in output
        assert "func appGlassOrMaterial(cornerRadius: CGFloat = 12) -> some View {" in output
        assert "            .padding(16)" in output

    def test_tinted_variant_uses_primary(self, glass_generator, sample_tokens):
        output = glass_generator.generate(sample_tokens)
        assert "func appGlassTinted(cornerRadius: CGFloat = 12) -> some View {" in output
        assert ".regular.tint(Color.primary)" in output

    def test_defaults_without_colors_or_radii(self, glass_generator):
        """Without radii, spacing or a primary color the defaults apply."""
        output = glass_generator.generate(TokenSet.from_dict({"motion": {"fast": {"duration": 100, "easing": "ease"}}}))
        assert "var cornerRadius: CGFloat = 16" in output
        assert "appGlassTinted" not in output

    def test_tint_uses_escaped_primary(self, glass_generator):
        tokens = TokenSet.from_dict(
            {"colors": {"default": {"value": "#6750A4", "category": "primary"}}}
        )
        assert ".regular.tint(Color.`default`)" in glass_generator.generate(tokens)
