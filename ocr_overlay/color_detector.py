"""
Color Detector — Picks a text/background color pair from a page thumbnail.

The most frequent color of the thumbnail is taken as the text color, the next
most frequent color with a contrast of at least 7:1 against it becomes the
background. Black and white are always appended as last-resort candidates, so
a pair is found for any non-empty buffer.

This relies on how browsers downscale scanned pages (anti-aliased glyph color
ends up as the plurality at thumbnail sizes); it is a heuristic and not
guaranteed for other rasterizers.
"""

import logging

import numpy as np

from .color import contrast, format_rgb
from .models import PageColors

logger = logging.getLogger(__name__)

MIN_CONTRAST = 7.0
FALLBACK_COLORS = [(0, 0, 0), (255, 255, 255)]


def _color_histogram(pixels) -> list[tuple[tuple[int, int, int], int]]:
    """Count pixels per exact RGB triple, most frequent first.

    Ties keep the order in which the colors first appear in the buffer.
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        data = np.frombuffer(pixels, dtype=np.uint8)
    else:
        data = np.asarray(pixels, dtype=np.uint8).ravel()
    data = data[:len(data) - len(data) % 4].reshape(-1, 4)[:, :3]
    colors, first_idx, counts = np.unique(data, axis=0, return_index=True, return_counts=True)
    order = np.lexsort((first_idx, -counts))
    return [(tuple(int(c) for c in colors[i]), int(counts[i])) for i in order]


def get_page_colors(pixels) -> PageColors:
    """
    Determine foreground and background color from rendered page pixels.

    Args:
        pixels: Flat RGBA buffer (4 uint8 values per pixel). Any sequence,
                bytes object or numpy array is accepted; alpha is ignored.

    Returns:
        PageColors with both colors formatted as ``rgb(r,g,b)``.
    """
    histogram = _color_histogram(pixels)
    text_rgb = histogram[0][0]
    candidates = [color for color, _ in histogram[1:]] + FALLBACK_COLORS
    bg_rgb = next((c for c in candidates if contrast(text_rgb, c) >= MIN_CONTRAST), None)
    if bg_rgb is None:
        # mid-gray text reaches 7:1 against neither fallback
        bg_rgb = max(FALLBACK_COLORS, key=lambda c: contrast(text_rgb, c))
    logger.debug(f"Detected {len(histogram)} distinct colors, "
                 f"text={format_rgb(text_rgb)}, background={format_rgb(bg_rgb)}")
    return PageColors(text_color=format_rgb(text_rgb), bg_color=format_rgb(bg_rgb))
