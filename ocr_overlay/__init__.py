"""
OCR Overlay

Normalizes ALTO, hOCR and IIIF annotation markup into one geometric text
model (pages, lines, spans) and detects a readable text/background color
pair from page thumbnails.
"""

from .alto_parser import parse_alto
from .color import change_alpha, contrast, to_hex_rgb
from .color_detector import get_page_colors
from .dispatcher import detect_format, parse_ocr
from .hocr_parser import parse_hocr
from .iiif_parser import parse_iiif_annotations
from .models import Line, Page, PageColors, Size, Span

__version__ = "1.0.0"

__all__ = [
    "Line", "Page", "PageColors", "Size", "Span",
    "change_alpha", "contrast", "detect_format", "get_page_colors",
    "parse_alto", "parse_hocr", "parse_iiif_annotations", "parse_ocr", "to_hex_rgb",
]
