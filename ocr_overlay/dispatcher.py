"""
Dispatcher — Sniffs the OCR markup format and hands it to the matching parser.
"""

import logging
from typing import Optional

from .alto_parser import parse_alto
from .hocr_parser import parse_hocr
from .models import Page, Size, with_fallback_size

logger = logging.getLogger(__name__)

FORMAT_ALTO = "alto"
FORMAT_HOCR = "hocr"


def detect_format(ocr_text) -> str:
    """Return ``"alto"`` if the markup contains an ``<alto`` tag, else ``"hocr"``."""
    marker = b"<alto" if isinstance(ocr_text, bytes) else "<alto"
    return FORMAT_ALTO if marker in ocr_text else FORMAT_HOCR


def parse_ocr(ocr_text, reference_size: Optional[Size] = None,
              log: Optional[logging.Logger] = None) -> Optional[Page]:
    """
    Parse an OCR document (ALTO or hOCR).

    Args:
        ocr_text: ALTO or hOCR markup.
        reference_size: Size of the image to scale coordinates to.
        log: Diagnostics channel handed to the parser.

    Returns:
        The parsed Page, or None when the parser rejected the document.
        Pages without a usable size get the extent of their lines.
    """
    fmt = detect_format(ocr_text)
    logger.debug(f"Detected {fmt} markup")
    if fmt == FORMAT_ALTO:
        page = parse_alto(ocr_text, reference_size, log=log)
    else:
        page = parse_hocr(ocr_text, reference_size, log=log)
    if page is None:
        return None
    return with_fallback_size(page)
