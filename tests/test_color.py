"""
Unit tests for the color helpers.
"""

import logging

import pytest

from ocr_overlay.color import change_alpha, contrast, luminance, parse_hex, parse_rgb, to_hex_rgb


def test_change_alpha_hex6():
    assert change_alpha("#ffffff", 0.5) == "rgba(255, 255, 255, 0.5)"


def test_change_alpha_hex3():
    assert change_alpha("#abc", 0.5) == "rgba(170, 187, 204, 0.5)"


def test_change_alpha_rgb_and_rgba():
    assert change_alpha("rgb(123, 221, 100)", 0.5) == "rgba(123, 221, 100, 0.5)"
    assert change_alpha("rgba(123, 221, 100, 0.1)", 0) == "rgba(123, 221, 100, 0)"


def test_change_alpha_unsupported(caplog):
    with caplog.at_level(logging.ERROR):
        assert change_alpha("hsv(210, 17, 80)", 0.5) == "hsv(210, 17, 80)"
    assert "Unsupported color: hsv(210, 17, 80)" in caplog.text


def test_to_hex_rgb():
    assert to_hex_rgb("rgb(170, 187, 204)") == "#aabbcc"
    assert to_hex_rgb("rgba(170, 187, 204, 0.75)") == "#aabbcc"
    assert to_hex_rgb("rgb(1,2,3)") == "#010203"
    assert to_hex_rgb("#abcdef") == "#abcdef"


@pytest.mark.parametrize("hex_color,expected", [("#0a7fff", "#0a7fff"), ("#abc", "#aabbcc")])
def test_alpha_roundtrip_keeps_channels(hex_color, expected):
    assert to_hex_rgb(change_alpha(hex_color, 0.3)) == expected


def test_parsers():
    assert parse_hex("#FfF") == (255, 255, 255)
    assert parse_rgb("rgba(1, 2, 3, 0.5)") == [1, 2, 3, 0.5]
    with pytest.raises(ValueError):
        parse_hex("#abcd")


def test_wcag_contrast():
    assert luminance((255, 255, 255)) == pytest.approx(1.0)
    assert luminance((0, 0, 0)) == 0
    assert contrast("rgb(0,0,0)", (255, 255, 255)) == pytest.approx(21.0)
    assert contrast((119, 119, 119), (255, 255, 255)) == pytest.approx(4.48, abs=0.01)
    assert contrast((10, 20, 30), (10, 20, 30)) == pytest.approx(1.0)


@pytest.mark.parametrize("color", ["rgb(1, 2)", "rgbx", "rgb(a, b, c)", "rgba(1, 2, 3, 4, 5)", "#ab"])
def test_change_alpha_malformed_colors_are_returned_unchanged(color, caplog):
    with caplog.at_level(logging.ERROR):
        assert change_alpha(color, 0.5) == color
    assert f"Unsupported color: {color}" in caplog.text
