"""Tests for hex <-> rgba text color conversion."""

import pytest

from services.styling.colors import (
    InvalidColorFormat,
    color_text_to_hex,
    hex_to_color_text,
    is_simple_color,
)


def test_hex_to_color_text_is_opaque_rgba():
    assert hex_to_color_text("#3355ff") == "rgba(51, 85, 255, 1)"
    assert hex_to_color_text("#000000") == "rgba(0, 0, 0, 1)"
    assert hex_to_color_text("#FFFFFF") == "rgba(255, 255, 255, 1)"


@pytest.mark.parametrize("bad", ["3355ff", "#35f", "#3355ff00", "#zz55ff", "", None])
def test_hex_to_color_text_rejects_malformed_input(bad):
    with pytest.raises(InvalidColorFormat):
        hex_to_color_text(bad)


def test_invalid_color_format_is_a_value_error():
    with pytest.raises(ValueError):
        hex_to_color_text("blue")


def test_color_text_to_hex_passes_hex_through():
    assert color_text_to_hex("#ABCDEF") == "#ABCDEF"
    assert color_text_to_hex("#fff") == "#fff"


def test_color_text_to_hex_reads_rgb_and_rgba():
    assert color_text_to_hex("rgba(51, 85, 255, 1)") == "#3355ff"
    assert color_text_to_hex("rgba(0,0,0,0.5)") == "#000000"
    assert color_text_to_hex("rgb(1, 2, 3)") == "#010203"


@pytest.mark.parametrize("text", ["hsl(120, 50%, 50%)", "red", "", None, "rgba(a, b, c)"])
def test_color_text_to_hex_falls_back_to_black(text):
    assert color_text_to_hex(text) == "#000000"


@pytest.mark.parametrize(
    "hex_color", ["#000000", "#ffffff", "#3355ff", "#a9c4c4", "#0a0b0c", "#dcdcdc", "#f0e0d0"]
)
def test_round_trip_recovers_hex(hex_color):
    assert color_text_to_hex(hex_to_color_text(hex_color)) == hex_color


def test_is_simple_color():
    assert is_simple_color("#fff")
    assert is_simple_color("rgba(0, 0, 0, 1)")
    assert not is_simple_color("rgb(0, 0, 0)")
    assert not is_simple_color(["get", "color"])
    assert not is_simple_color(None)
