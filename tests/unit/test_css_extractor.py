"""Unit tests for the CSS custom properties extractor."""

import re
from pathlib import Path

import pytest

from token_bridge.errors import ExtractionError
from token_bridge.extractors.css_vars import (
    EMPTY_MESSAGE,
    NO_PROPERTIES_MESSAGE,
    CSSVariablesExtractor,
    parse_custom_properties,
    parse_typography_partial,
    token_name,
)


@pytest.fixture
def extractor() -> CSSVariablesExtractor:
    """Create a CSS extractor."""
    return CSSVariablesExtractor()


class TestParsing:
    """Tests for the property scanner and name helpers."""

    def test_first_declaration_wins(self):
        """Later overrides (e.g. dark mode) don't replace the first value."""
        css = """
        :root { --color-bg: #ffffff; }
        @media (prefers-color-scheme: dark) { :root { --color-bg: #000000; } }
        """
        assert parse_custom_properties(css) == {"--color-bg": "#ffffff"}

    def test_comments_ignored(self):
        """Commented-out declarations are not collected."""
        css = ":root { /* --color-disabled: #ccc; */ --color-primary: #f00; }"
        assert list(parse_custom_properties(css)) == ["--color-primary"]

    @pytest.mark.parametrize(
        "prop,expected",
        [
            ("--color-primary", "primary"),
            ("--spacing-xs", "xs"),
            ("--space-lg", "lg"),
            ("--rounded-lg", "lg"),
            ("--shadow-sm", "sm"),
            ("--font-size-base", "size-base"),
            ("--brand", "brand"),
        ],
    )
    def test_token_name(self, prop, expected):
        """Category prefixes are stripped from the name."""
        assert token_name(prop) == expected

    def test_typography_partials(self):
        """The property name picks the field."""
        assert parse_typography_partial("--font-size-lg", "1.25rem") == {"font_size": 20}
        assert parse_typography_partial("--font-weight-bold", "700") == {"font_weight": 700}
        assert parse_typography_partial("--font-family-sans", "'Inter', sans-serif") == {
            "font_family": "Inter"
        }
        assert parse_typography_partial("--line-height-body", "24px") == {"line_height": 24}
        assert parse_typography_partial("--leading-body", "1.5") == {"line_height_factor": 1.5}

    def test_typography_value_sniffing(self):
        """Names without a field word are sniffed by value."""
        assert parse_typography_partial("--text-sm", "14px") == {"font_size": 14}
        assert parse_typography_partial("--font-body", '"Roboto", Arial') == {
            "font_family": "Roboto"
        }
        assert parse_typography_partial("--text-muted", "#999") is None


class TestCSSExtraction:
    """Tests for CSSVariablesExtractor.extract."""

    def test_colors(self, extractor):
        """Color variables from :root are extracted."""
        tokens = extractor.extract(
            ":root { --color-primary: #6750A4; --color-secondary: #625B71; }"
        )
        assert tokens.colors["primary"].value == "#6750A4"
        assert tokens.colors["secondary"].value == "#625B71"

    def test_color_synonym_prefixes(self, extractor):
        """text-color and bg prefixes route to colors."""
        tokens = extractor.extract(":root { --text-color-primary: #111; --bg-surface: #fff; }")
        assert tokens.colors["primary"].value == "#111111"
        assert tokens.colors["bg-surface"].value == "#FFFFFF"

    def test_spacing(self, extractor):
        """Spacing variables convert to px."""
        tokens = extractor.extract(
            ":root { --spacing-xs: 4px; --spacing-md: 16px; --space-lg: 1.5rem; }"
        )
        assert tokens.spacing == {"xs": 4, "md": 16, "lg": 24}

    def test_radii(self, extractor):
        """Radius synonyms map to radii."""
        tokens = extractor.extract(":root { --radius-sm: 4px; --rounded-lg: 16px; }")
        assert tokens.radii == {"sm": 4, "lg": 16}

    def test_rgb_and_hsl(self, extractor):
        """Functional colors convert to hex."""
        tokens = extractor.extract(
            ":root { --color-accent: rgb(255, 107, 53); --color-overlay: rgba(0, 0, 0, 0.5);"
            " --color-brand: hsl(210, 100%, 50%); }"
        )
        assert tokens.colors["accent"].value == "#FF6B35"
        assert tokens.colors["overlay"].value == "#000000"
        assert re.match(r"^#[0-9A-F]{6}$", tokens.colors["brand"].value)

    def test_shadow(self, extractor):
        """Shadows become elevation tokens."""
        tokens = extractor.extract(":root { --shadow-sm: 0 1px 3px rgba(0, 0, 0, 0.12); }")
        shadow = tokens.elevation["sm"]
        assert shadow.shadow_offset.y == 1
        assert shadow.shadow_radius == 3
        assert shadow.shadow_opacity == 0.12

    def test_typography_merges_fields(self, extractor):
        """Fields of one style combine, and unitless line heights multiply."""
        tokens = extractor.extract(
            """
            :root {
              --font-size-body: 18px;
              --font-weight-body: 500;
              --font-family-body: "Inter", sans-serif;
              --line-height-body: 1.5;
            }
            """
        )
        style = tokens.typography["body"]
        assert style.font_size == 18
        assert style.font_weight == 500
        assert style.font_family == "Inter"
        assert style.line_height == 27

    def test_typography_default_size(self, extractor):
        """A style with no size gets 16px."""
        tokens = extractor.extract(":root { --font-weight-bold: 700; }")
        assert tokens.typography["bold"].font_size == 16

    def test_unprefixed_values_are_sniffed(self, extractor):
        """Unknown prefixes become colors or spacing by value."""
        tokens = extractor.extract(":root { --brand: #ff0000; --gutter: 24px; }")
        assert tokens.colors["brand"].value == "#FF0000"
        assert tokens.spacing["gutter"] == 24

    def test_no_custom_properties(self, extractor):
        """Plain CSS is malformed input."""
        with pytest.raises(ExtractionError, match=NO_PROPERTIES_MESSAGE):
            extractor.extract("body { color: red; }")

    def test_nothing_mappable(self, extractor):
        """Properties that map to nothing are an empty result."""
        with pytest.raises(ExtractionError) as exc_info:
            extractor.extract(":root { --easing: ease-in-out; --display: flex; }")
        assert exc_info.value.message == EMPTY_MESSAGE
        assert exc_info.value.is_empty

    def test_fixture_file(self, extractor, css_file):
        """The shared fixture file extracts every collection it declares."""
        tokens = extractor.extract_file(css_file)
        assert tokens.colors["primary"].value == "#3B82F6"
        assert tokens.colors["accent"].value == "#FF6B35"
        assert tokens.spacing["md"] == 16
        assert tokens.radii["lg"] == 12
        assert tokens.typography["body"].font_size == 16
        assert tokens.elevation["sm"].shadow_opacity == 0.12

    def test_can_handle(self, extractor):
        """Stylesheets are claimed by extension."""
        assert extractor.can_handle(Path("theme.scss"))
        assert not extractor.can_handle(Path("theme.json"))
