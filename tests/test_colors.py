"""Tests for colour parsing and conversions."""

import pytest

from hymn_export.colors import BLACK, WHITE, Color, parse_color
from hymn_export.errors import ColorError, OptionsError
from hymn_export.layout import format_number, shadow_offset


class TestColor:
    """Tests for the Color value."""

    def test_channels_become_floats(self):
        color = Color(1, 0, 0)
        assert color.red == 1.0
        assert isinstance(color.red, float)
        assert color.alpha == 1.0

    @pytest.mark.parametrize("channels", [(1.2, 0, 0), (0, -0.1, 0), (0, 0, 0, 2), (0, 0, float("nan"))])
    def test_out_of_range(self, channels):
        with pytest.raises(ColorError):
            Color(*channels)

    def test_bool_channel_rejected(self):
        with pytest.raises(ColorError):
            Color(True, 0, 0)

    def test_conversions(self):
        color = Color(1.0, 0.5, 0.0, 0.25)
        assert color.to_255() == (255, 128, 0)
        assert color.hex == "FF8000"
        assert color.to_cssrgb() == (100000, 50000, 0)
        assert color.xml_string == "1 0.5 0 0.25"

    def test_color_error_is_value_error(self):
        assert issubclass(ColorError, OptionsError)
        assert issubclass(ColorError, ValueError)


class TestParseColor:
    """Tests for the accepted payload colour shapes."""

    def test_hex(self):
        assert parse_color("#FFFFFF") == WHITE
        assert parse_color("000000") == BLACK
        assert parse_color("#00000080").alpha == pytest.approx(128 / 255)

    def test_float_sequence(self):
        assert parse_color([0.2, 0.4, 0.6]) == Color(0.2, 0.4, 0.6, 1.0)
        assert parse_color((0.2, 0.4, 0.6, 0.5)).alpha == 0.5

    def test_int_sequence_is_0_255(self):
        assert parse_color([255, 0, 51]) == Color(1.0, 0.0, 0.2)

    def test_unit_int_sequence_is_unit_range(self):
        assert parse_color([1, 1, 1, 1]) == WHITE

    def test_long_key_mapping(self):
        assert parse_color({"red": 0.1, "green": 0.2, "blue": 0.3, "alpha": 1}) == Color(0.1, 0.2, 0.3)

    def test_short_key_mapping(self):
        assert parse_color({"r": 0, "g": 0, "b": 1}) == Color(0, 0, 1)

    def test_passes_color_through(self):
        assert parse_color(WHITE) is WHITE

    @pytest.mark.parametrize("value", [
        "white",
        "#12345",
        [0.1, 0.2],
        [0.1, 0.2, 0.3, 0.4, 0.5],
        [300, 0, 0],
        ["1", "0", "0"],
        {"red": 1, "green": 1},
        {"r": 1, "g": 1, "b": 1, "x": 0},
        None,
        42,
    ])
    def test_rejects(self, value):
        with pytest.raises(ColorError):
            parse_color(value)


class TestLayoutNumbers:
    """Tests for the shared geometry helpers."""

    def test_shadow_offset_points_down_right(self):
        x, y = shadow_offset(315, 5)
        assert x == pytest.approx(3.5355)
        assert y == pytest.approx(-3.5355)

    def test_format_number(self):
        assert format_number(1.0) == "1"
        assert format_number(0) == "0"
        assert format_number(0.75) == "0.75"
