"""
Tests for ColorValue and coerce_color.
"""

import pytest

from docxtree.exceptions import InvalidColorError
from docxtree.utils.color_utils import ColorValue, coerce_color


class TestColorValue:
    """Test cases for ColorValue."""

    @pytest.mark.parametrize("text, expected", [
        ("#ff0000", "FF0000"),
        ("00ff80", "00FF80"),
        ("#abc", "AABBCC"),
        ("Red", "FF0000"),
        ("grey", "808080"),
    ])
    def test_from_hex(self, text, expected):
        assert ColorValue.from_hex(text).rgb == expected

    def test_auto(self):
        color = ColorValue.from_hex("AUTO")

        assert color.is_auto
        assert color == ColorValue.AUTO
        assert color.to_rgb() is None
        assert str(color) == "auto"

    @pytest.mark.parametrize("text", ["zzz", "#12345", "", "   ", "12345G"])
    def test_from_hex_invalid(self, text):
        with pytest.raises(InvalidColorError):
            ColorValue.from_hex(text)

    def test_from_rgb(self):
        color = ColorValue.from_rgb(255, 0, 128)

        assert color.rgb == "FF0080"
        assert color.to_rgb() == (255, 0, 128)

    @pytest.mark.parametrize("components", [(256, 0, 0), (-1, 0, 0), (1.0, 2, 3), (True, 0, 0)])
    def test_from_rgb_invalid(self, components):
        with pytest.raises(InvalidColorError):
            ColorValue.from_rgb(*components)

    def test_theme_color(self):
        color = ColorValue(theme_color="accent1", theme_tint="99")

        assert color.theme_tint == "99"
        assert color.rgb is None
        assert not color.is_empty
        assert str(color) == "accent1"

    def test_theme_shade_upper_cased(self):
        assert ColorValue(rgb="1f3864", theme_color="accent1", theme_shade="bf").theme_shade == "BF"

    def test_unknown_theme_color(self):
        with pytest.raises(InvalidColorError):
            ColorValue(theme_color="accent9")

    def test_structural_equality(self):
        assert ColorValue.from_hex("#00ff00") == ColorValue(rgb="00FF00")
        assert hash(ColorValue.from_hex("#00ff00")) == hash(ColorValue(rgb="00FF00"))

    def test_invalid_color_is_value_error(self):
        with pytest.raises(ValueError):
            ColorValue(rgb="nothex")


class TestCoerceColor:
    """Test cases for coerce_color."""

    def test_passes_color_values_through(self):
        color = ColorValue(rgb="123456")
        assert coerce_color(color) is color

    def test_strings_and_tuples(self):
        assert coerce_color("#EEEEEE").rgb == "EEEEEE"
        assert coerce_color((1, 2, 3)).rgb == "010203"

    def test_rejects_other_values(self):
        with pytest.raises(InvalidColorError):
            coerce_color(0xFF0000)
