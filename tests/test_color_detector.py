"""
Unit tests for automatic text/background color detection.
"""

import numpy as np

from ocr_overlay.color_detector import get_page_colors


def _pixels(*colors):
    return [c for rgb in colors for c in (*rgb, 255)]


def test_four_pixel_image():
    colors = get_page_colors([255, 255, 255, 255, 0, 0, 0, 255, 0, 0, 0, 255, 0, 0, 0, 255])
    assert colors.text_color == "rgb(0,0,0)"
    assert colors.bg_color == "rgb(255,255,255)"


def test_skips_low_contrast_candidates():
    dark, darker_gray, light = (30, 30, 30), (40, 40, 40), (240, 240, 240)
    colors = get_page_colors(_pixels(*[dark] * 5, *[darker_gray] * 3, *[light] * 2))
    assert colors.text_color == "rgb(30,30,30)"
    assert colors.bg_color == "rgb(240,240,240)"


def test_falls_back_to_black_or_white():
    colors = get_page_colors(_pixels((20, 20, 20), (20, 20, 20), (60, 60, 60)))
    assert colors.bg_color == "rgb(255,255,255)"


def test_mid_gray_gets_best_fallback():
    colors = get_page_colors(_pixels((119, 119, 119)))
    assert colors.bg_color == "rgb(0,0,0)"


def test_ties_keep_first_seen_order():
    colors = get_page_colors(_pixels((255, 255, 255), (0, 0, 0)))
    assert colors.text_color == "rgb(255,255,255)"
    assert colors.bg_color == "rgb(0,0,0)"


def test_accepts_numpy_and_bytes_and_ignores_alpha():
    data = np.array([0, 0, 0, 10, 0, 0, 0, 255, 255, 255, 255, 0], dtype=np.uint8)
    assert get_page_colors(data) == get_page_colors(bytes(data))
    assert get_page_colors(data).text_color == "rgb(0,0,0)"
