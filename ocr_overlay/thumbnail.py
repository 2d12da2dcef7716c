"""
Thumbnail — Renders a page image into the flat RGBA buffer used for color detection.
"""

import logging

import cv2
import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_THUMBNAIL_SIZE = 256


def downscale(rgba: np.ndarray, max_size: int = DEFAULT_THUMBNAIL_SIZE) -> np.ndarray:
    """Shrink an RGBA array so its longer side is at most ``max_size`` pixels.

    Area interpolation blends glyph edges the way browser canvases do when
    drawing a scaled-down image.
    """
    h, w = rgba.shape[:2]
    scale = max_size / max(h, w)
    if scale >= 1:
        return rgba
    size = (max(1, round(w * scale)), max(1, round(h * scale)))
    return cv2.resize(rgba, size, interpolation=cv2.INTER_AREA)


def load_thumbnail_pixels(image_path: str, max_size: int = DEFAULT_THUMBNAIL_SIZE) -> np.ndarray:
    """
    Decode an image file into a downscaled, flat RGBA uint8 buffer.

    Raises:
        FileNotFoundError: If the image does not exist.
    """
    with Image.open(image_path) as img:
        rgba = np.asarray(img.convert("RGBA"))
    thumb = downscale(rgba, max_size)
    logger.debug(f"Thumbnail for {image_path}: {rgba.shape[1]}x{rgba.shape[0]} -> "
                 f"{thumb.shape[1]}x{thumb.shape[0]}")
    return thumb.reshape(-1)
