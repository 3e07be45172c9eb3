"""Tests for the Color value type."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from themekit.theme_engine import Color, Theme


class TestColorParsing:
    """Test hex parsing and normalization."""

    def test_shorthand_expands(self):
        """Test that 3-digit hex expands to 6 digits."""
        assert Color("#f55").hex == "#ff5555"
        assert Color.from_hex("F55").hex == "#ff5555"

    def test_normalizes_case_and_prefix(self):
        """Test that hex is stored lowercase without the prefix."""
        color = Color("#ABCDEF")
        assert color.hex == "#abcdef"
        assert color.hex_no_prefix == "abcdef"
        assert Color("abcdef") == color

    def test_eight_digit_hex_keeps_alpha(self):
        """Test that #RRGGBBAA keeps its alpha channel."""
        color = Color("#11223344")
        assert color.rgba() == (0x11, 0x22, 0x33, 0x44)
        assert color.rgb() == (0x11, 0x22, 0x33)

    def test_invalid_input_is_empty(self):
        """Test that unparsable values become the empty color."""
        for value in ("xyz", "#12345", "#ggg", "", None, 123):
            color = Color(value)
            assert color.is_empty
            assert color.hex == ""
            assert not color

    def test_empty_color_reads_as_black(self):
        """Test that the empty color has black channels and zero luminance."""
        empty = Color.empty()
        assert empty.rgb() == (0, 0, 0)
        assert empty.relative_luminance() == 0.0

    def test_hex_round_trip(self):
        """Test that channels survive a trip through hex."""
        for value in range(0, 256, 15):
            color = Color.from_rgb(value, 255 - value, value // 2)
            assert color.rgb() == (value, 255 - value, value // 2)
            assert color.hex == f"#{value:02x}{255 - value:02x}{value // 2:02x}"

    def test_from_rgb_clamps_channels(self):
        """Test that out-of-range channels are clamped."""
        assert Color.from_rgb(300, -5, 0).hex == "#ff0000"


class TestColorConversions:
    """Test HSL, OKLCH and CSS conversions."""

    def test_hsl_of_red(self):
        """Test HSL components of pure red."""
        h, s, l = Color("#ff0000").hsl()
        assert h == pytest.approx(0.0)
        assert s == pytest.approx(1.0)
        assert l == pytest.approx(0.5)

    def test_from_hsl(self):
        """Test building colors from HSL, including hue wrap-around."""
        assert Color.from_hsl(0, 1.0, 0.5).hex == "#ff0000"
        assert Color.from_hsl(480, 1.0, 0.5).hex == "#00ff00"
        assert Color.from_hsl(0, 0.0, 1.0).hex == "#ffffff"

    def test_oklch_round_trip(self):
        """Test that OKLCH values convert back to the same color."""
        for hex_color in ("#3366cc", "#808080", "#e0a030"):
            original = Color(hex_color)
            restored = Color.from_oklch(*original.oklch())
            for a, b in zip(original.rgb(), restored.rgb()):
                assert abs(a - b) <= 1

    def test_css_strings(self):
        """Test CSS notations."""
        assert Color("#ff0000").css_rgb() == "rgb(255, 0, 0)"
        assert Color("#ff000080").css_rgba() == "rgba(255, 0, 0, 0.502)"
        assert Color("#ff0000").css_hsl() == "hsl(0.0, 100.0%, 50.0%)"
        assert Color("#ff0000").css_oklch().startswith("oklch(")
        assert Color("#ff0000").css_var("accent") == "var(--theme-accent)"
        assert Color("#ff0000").css_var("accent", "ui") == "var(--ui-accent)"


class TestColorManipulation:
    """Test color manipulation methods."""

    def test_with_alpha_clamps(self):
        """Test that alpha below 0 and above 1 is clamped."""
        color = Color("#336699")
        assert color.with_alpha(-1).rgba()[3] == 0
        assert color.with_alpha(2).rgba()[3] == 255
        assert color.with_alpha(0.5).hex == "#3366997f"

    def test_with_alpha_keeps_rgb(self):
        """Test that with_alpha only changes the alpha channel."""
        assert Color("#336699").with_alpha(0.1).rgb() == (0x33, 0x66, 0x99)

    def test_lighten_and_darken_extremes(self):
        """Test that full lightening and darkening reach white and black."""
        assert Color("#000000").lighten(1.0).hex == "#ffffff"
        assert Color("#ffffff").darken(1.0).hex == "#000000"

    def test_lighten_increases_luminance(self):
        """Test that lightening raises relative luminance."""
        color = Color("#445566")
        assert color.lighten(0.1).relative_luminance() > color.relative_luminance()
        assert color.darken(0.1).relative_luminance() < color.relative_luminance()

    def test_saturation(self):
        """Test saturate and desaturate."""
        color = Color("#806060")
        assert color.saturate(0.2).hsl()[1] > color.hsl()[1]
        assert color.desaturate(1.0).hsl()[1] == pytest.approx(0.0)

    def test_complement(self):
        """Test complement of red is cyan."""
        assert Color("#ff0000").complement().hex == "#00ffff"

    def test_invert(self):
        """Test RGB inversion."""
        assert Color("#000000").invert().hex == "#ffffff"
        assert Color("#123456").invert().hex == "#edcba9"

    def test_mix_endpoints(self):
        """Test that mix at 0 and 1 returns the endpoints."""
        black = Color("#000000")
        white = Color("#ffffff")
        assert black.mix(white, 0.0).hex == "#000000"
        assert black.mix(white, 1.0).hex == "#ffffff"

    def test_mix_midpoint_is_gray(self):
        """Test that an equal Lab mix of black and white is a neutral gray."""
        r, g, b = Color("#000000").mix(Color("#ffffff"), 0.5).rgb()
        assert 110 <= r <= 130
        assert abs(r - g) <= 1 and abs(g - b) <= 1

    def test_manipulation_returns_new_values(self):
        """Test that manipulation never changes the receiver."""
        color = Color("#336699")
        color.lighten(0.2)
        color.with_alpha(0.5)
        assert color.hex == "#336699"


class TestLuminance:
    """Test luminance and contrast on Color."""

    def test_luminance_bounds(self):
        """Test luminance of black, white and a sample of colors."""
        assert Color("#000000").relative_luminance() == pytest.approx(0.0, abs=0.001)
        assert Color("#ffffff").relative_luminance() == pytest.approx(1.0, abs=0.001)
        for value in range(0, 256, 51):
            lum = Color.from_rgb(value, value // 3, 255 - value).relative_luminance()
            assert 0.0 <= lum <= 1.0

    def test_is_dark(self):
        """Test dark/light classification at luminance 0.5."""
        assert Color("#282a36").is_dark()
        assert Color("#ffffff").is_light()

    def test_contrast_ratio(self):
        """Test contrast ratio between colors."""
        assert Color("#000000").contrast_ratio(Color("#ffffff")) == pytest.approx(21.0, abs=0.1)
        assert Color("#777777").contrast_ratio(Color("#777777")) == pytest.approx(1.0)


class TestPydanticIntegration:
    """Test Color as a field type on Theme."""

    def test_hex_strings_validate(self):
        """Test that hex strings become Color values."""
        theme = Theme(background="#282A36")
        assert theme.background == Color("#282a36")

    def test_dumps_as_hex(self):
        """Test that colors serialize as hex strings."""
        theme = Theme(background="#282a36")
        assert theme.model_dump(mode="json")["background"] == "#282a36"
        assert theme.model_dump()["background"] == "#282a36"

    def test_non_string_rejected(self):
        """Test that non-string color values fail validation."""
        with pytest.raises(PydanticValidationError):
            Theme(background=123)

    def test_unknown_field_rejected(self):
        """Test that unknown theme fields fail validation."""
        with pytest.raises(PydanticValidationError):
            Theme(not_a_color="#ffffff")
