"""Unit tests for value normalizers."""

import pytest

from token_bridge.normalizers.color import (
    css_alpha,
    css_color_to_hex,
    hex_alpha,
    hex_to_rgb,
    hsl_to_hex,
    is_hex_like,
    is_valid_hex,
    looks_like_color,
    normalize_hex,
    rgb_to_hex,
    split_alpha,
    unit_color_to_hex,
)
from token_bridge.normalizers.length import (
    format_number,
    looks_like_dimension,
    parse_duration,
    parse_to_pixels,
    px_to_rem,
    round_half_up,
)
from token_bridge.normalizers.shadow import format_shadow, parse_shadow
from token_bridge.tokens import ElevationToken, ShadowOffset


class TestLengths:
    """Tests for dimension parsing and number formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("16px", 16.0),
            ("1rem", 16.0),
            ("1.5rem", 24.0),
            ("2em", 32.0),
            ("12", 12.0),
            (".5rem", 8.0),
            (8, 8.0),
            ("-2px", -2.0),
        ],
    )
    def test_parse_to_pixels(self, value, expected):
        """Supported units convert to pixels at 16px per rem."""
        assert parse_to_pixels(value) == expected

    @pytest.mark.parametrize("value", ["10vh", "calc(1px + 2px)", "auto", None, True])
    def test_parse_to_pixels_unsupported(self, value):
        """Unknown units and non-strings return None."""
        assert parse_to_pixels(value) is None

    def test_parse_duration(self):
        """Seconds are converted to milliseconds."""
        assert parse_duration("150ms") == 150.0
        assert parse_duration("0.3s") == 300.0
        assert parse_duration(200) == 200.0
        assert parse_duration("fast") is None

    def test_looks_like_dimension_needs_unit(self):
        """Bare numbers are not dimensions."""
        assert looks_like_dimension("1rem")
        assert not looks_like_dimension("1.5")

    def test_round_half_up(self):
        """Halves round up like JavaScript."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.125, 2) == 0.13
        assert round_half_up(4.494, 2) == 4.49

    def test_format_number(self):
        """Integral values have no decimal point and noise is trimmed."""
        assert format_number(16.0) == "16"
        assert format_number(0.875) == "0.875"
        assert format_number(0.1 + 0.2) == "0.3"

    def test_px_to_rem(self):
        """Pixels become rem strings."""
        assert px_to_rem(24) == "1.5rem"
        assert px_to_rem(16) == "1rem"


class TestColors:
    """Tests for color conversion."""

    def test_hex_checks(self):
        """3, 6 and 8 digit forms are valid; other lengths are only hex-like."""
        assert is_valid_hex("#FFF")
        assert is_valid_hex("#aabbcc")
        assert is_valid_hex("#AABBCC80")
        assert not is_valid_hex("#ABCD")
        assert is_hex_like("#ABCD")
        assert not is_hex_like("red")

    def test_normalize_hex(self):
        """Short hex widens and everything is uppercased."""
        assert normalize_hex("#f0a") == "#FF00AA"
        assert normalize_hex("#aabbcc80") == "#AABBCC80"

    def test_rgb_hex_round_trip(self):
        """Channels convert both ways."""
        assert rgb_to_hex(255, 107, 53) == "#FF6B35"
        assert hex_to_rgb("#FF6B35") == (255, 107, 53)
        assert hex_to_rgb("#FF6B3580") == (255, 107, 53)

    def test_alpha_helpers(self):
        """Alpha is read from the fourth byte."""
        assert hex_alpha("#000000") == 1.0
        assert hex_alpha("#000000FF") == 1.0
        assert split_alpha("#00000080") == ("#000000", 0.5)
        assert split_alpha("#abc") == ("#AABBCC", None)

    def test_hsl_to_hex(self):
        """Primary hues convert exactly."""
        assert hsl_to_hex(0, 100, 50) == "#FF0000"
        assert hsl_to_hex(120, 100, 50) == "#00FF00"
        assert hsl_to_hex(0, 0, 100) == "#FFFFFF"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("#3b82f6", "#3B82F6"),
            ("rgb(255, 107, 53)", "#FF6B35"),
            ("rgba(0, 0, 0, 0.5)", "#000000"),
            ("rgb(255 0 0 / 50%)", "#FF0000"),
            ("hsl(240, 100%, 50%)", "#0000FF"),
            ("red", None),
        ],
    )
    def test_css_color_to_hex(self, value, expected):
        """CSS color notations convert to hex; alpha is dropped."""
        assert css_color_to_hex(value) == expected

    def test_css_alpha(self):
        """Alpha comes from the fourth rgba() argument."""
        assert css_alpha("rgba(0, 0, 0, 0.25)") == 0.25
        assert css_alpha("rgb(0 0 0 / 50%)") == 0.5
        assert css_alpha("rgb(0, 0, 0)") is None

    def test_looks_like_color(self):
        """Hex and functional notations are recognized."""
        assert looks_like_color("#fff")
        assert looks_like_color("HSL(0, 0%, 0%)")
        assert not looks_like_color("0 1px 2px rgba(0,0,0,0.1)")

    def test_unit_color_to_hex(self):
        """Design tool 0-1 floats scale to 0-255."""
        assert unit_color_to_hex({"r": 1, "g": 0.5, "b": 0, "a": 1}) == "#FF8000"


class TestShadows:
    """Tests for box-shadow parsing and rendering."""

    def test_parse_rgba_shadow(self):
        """Offsets, blur and rgba alpha are read."""
        token = parse_shadow("0 1px 3px rgba(0, 0, 0, 0.12)")
        assert token.shadow_offset == ShadowOffset(0, 1)
        assert token.shadow_radius == 3
        assert token.shadow_color == "#000000"
        assert token.shadow_opacity == 0.12

    def test_parse_hex_shadow_with_spread(self):
        """Spread is dropped and 8-digit hex alpha becomes opacity."""
        token = parse_shadow("2px 4px 8px 1px #11223380")
        assert token.shadow_offset == ShadowOffset(2, 4)
        assert token.shadow_radius == 8
        assert token.shadow_color == "#112233"
        assert token.shadow_opacity == 0.5

    def test_parse_first_layer_only(self):
        """Only the first layer of a list is used."""
        token = parse_shadow("0 1px 2px rgba(0,0,0,0.05), 0 4px 8px rgba(0,0,0,0.2)")
        assert token.shadow_radius == 2
        assert token.shadow_opacity == 0.05

    def test_unparseable(self):
        """Keywords don't parse."""
        assert parse_shadow("none") is None

    def test_format_shadow(self):
        """Rendering uses px and rgba."""
        token = ElevationToken(
            shadow_color="#000000",
            shadow_offset=ShadowOffset(0, 2),
            shadow_radius=4,
            shadow_opacity=0.1,
        )
        assert format_shadow(token) == "0px 2px 4px rgba(0, 0, 0, 0.1)"
