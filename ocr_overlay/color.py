"""
Color helpers — hex/rgb conversion, alpha changes and WCAG contrast.

Luminance and contrast follow the WCAG 2.0 procedure:
https://www.w3.org/TR/WCAG20-TECHS/G17.html#G17-procedure
"""

import logging
import re

logger = logging.getLogger(__name__)

_HEX_PATTERN = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")
_RGB_PATTERN = re.compile(r"^rgba?\((.+)\)$")


def parse_hex(hex_color: str) -> tuple[int, int, int]:
    """Parse a 3- or 6-digit ``#`` hex color into an (r, g, b) tuple."""
    match = _HEX_PATTERN.match(hex_color.strip())
    if not match:
        raise ValueError(f"Not a hex color: {hex_color}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def parse_rgb(rgb_color: str) -> list[float]:
    """Parse the channels (and alpha, if present) of an rgb(...)/rgba(...) string."""
    match = _RGB_PATTERN.match(rgb_color.strip())
    if not match:
        raise ValueError(f"Not an rgb color: {rgb_color}")
    channels = [float(x.strip()) for x in match.group(1).split(",")]
    if len(channels) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 channels: {rgb_color}")
    return [int(c) for c in channels[:3]] + channels[3:]


def format_rgb(rgb) -> str:
    r, g, b = rgb[:3]
    return f"rgb({r},{g},{b})"


def to_hex_rgb(rgb_color: str) -> str:
    """Convert an rgb(...)/rgba(...) string to ``#rrggbb``, dropping alpha.

    Anything that isn't an rgb string is returned unmodified.
    """
    if not rgb_color or not rgb_color.startswith("rgb"):
        return rgb_color
    return "#" + "".join(f"{c:02x}" for c in parse_rgb(rgb_color)[:3])


def change_alpha(color: str, alpha: float) -> str:
    """Return ``color`` as an rgba(...) string with the given alpha."""
    try:
        if color.startswith("#"):
            r, g, b = parse_hex(color)
        elif color.startswith("rgb"):
            r, g, b = parse_rgb(color)[:3]
        else:
            raise ValueError(color)
    except ValueError:
        logger.error(f"Unsupported color: {color}")
        return color
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def luminance(rgb) -> float:
    """Relative luminance of an (r, g, b) color with channels in [0, 255]."""
    linear = []
    for v in rgb[:3]:
        srgb = v / 255
        if srgb <= 0.03928:
            linear.append(srgb / 12.92)
        else:
            linear.append(((srgb + 0.055) / 1.055) ** 2.4)
    return linear[0] * 0.2126 + linear[1] * 0.7152 + linear[2] * 0.0722


def contrast(color_a, color_b) -> float:
    """WCAG contrast ratio between two colors, given as tuples or rgb strings."""
    if isinstance(color_a, str):
        color_a = parse_rgb(color_a)
    if isinstance(color_b, str):
        color_b = parse_rgb(color_b)
    lum_a = luminance(color_a)
    lum_b = luminance(color_b)
    brightest = max(lum_a, lum_b)
    darkest = min(lum_a, lum_b)
    return (brightest + 0.05) / (darkest + 0.05)
