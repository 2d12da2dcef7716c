"""
hOCR Parser — Reads hOCR (HTML with ``title="bbox ..."`` attributes) into a Page.

Word spacing is not encoded as geometry in hOCR, only as text nodes between
the word elements. Those text nodes become "extra" spans whose width is the
gap up to the next word.
"""

import logging
import re
from typing import Optional

from bs4 import BeautifulSoup, Comment, NavigableString

from .models import Line, Page, Size, Span, make_page
from .spans import resolve_extra_widths

logger = logging.getLogger(__name__)

SOFT_HYPHEN = "\u00ad"
_FONT_SIZE_DECL = re.compile(r"font-size\s*:[^;]*;?")
_WHITESPACE = re.compile(r"\s+")


def parse_hocr_attribs(title: str) -> dict:
    """
    Parse the properties of an hOCR ``title`` attribute.

    ``bbox`` is returned as a list of four ints, every other property as the
    (at most four) space-joined values following its key.
    """
    attribs = {}
    for prop in title.split(";"):
        parts = prop.split()
        if not parts:
            continue
        key, values = parts[0], parts[1:5]
        if key == "bbox":
            attribs[key] = [int(float(v)) for v in values]
        else:
            attribs[key] = " ".join(values)
    return attribs


def _bbox(node) -> list[int]:
    bbox = parse_hocr_attribs(node.get("title", "")).get("bbox")
    if not bbox or len(bbox) != 4:
        raise ValueError(f"hOCR element without a valid bbox: <{node.name} class={node.get('class')}>")
    return bbox


def _clean_style(style: Optional[str]) -> Optional[str]:
    # Font size is derived from the box geometry when rendering
    if not style:
        return None
    style = _FONT_SIZE_DECL.sub("", style).strip().rstrip(";").strip()
    return style or None


def _visible_hyphen(text: str) -> str:
    if text.endswith(SOFT_HYPHEN):
        return text[:-1] + "-"
    return text


def _trailing_text(node) -> Optional[str]:
    sibling = node.next_sibling
    if isinstance(sibling, NavigableString) and not isinstance(sibling, Comment):
        return _WHITESPACE.sub(" ", str(sibling))
    return None


def _word_spans(word_node, scale: float, end_of_line: bool) -> list[Span]:
    ulx, uly, lrx, lry = (v * scale for v in _bbox(word_node))
    text = word_node.get_text()
    if end_of_line:
        text = _visible_hyphen(text)
    spans = [Span(x=ulx, y=uly, width=lrx - ulx, height=lry - uly, text=text,
                  style=_clean_style(word_node.get("style")))]
    extra_text = _trailing_text(word_node)
    if extra_text is not None and end_of_line:
        extra_text = extra_text.rstrip()
    if extra_text:
        spans.append(Span(x=lrx, y=uly, width=None, height=lry - uly, text=extra_text, is_extra=True))
    return spans


def _parse_line(line_node, scale: float) -> Line:
    ulx, uly, lrx, lry = (v * scale for v in _bbox(line_node))
    word_nodes = line_node.select("span.ocrx_word")
    if not word_nodes:
        text = _WHITESPACE.sub(" ", line_node.get_text()).strip()
        return Line(x=ulx, y=uly, width=lrx - ulx, height=lry - uly, text=_visible_hyphen(text))

    spans = []
    for idx, word_node in enumerate(word_nodes):
        spans.extend(_word_spans(word_node, scale, end_of_line=idx == len(word_nodes) - 1))
    spans = resolve_extra_widths(spans, line_end=lrx)
    return Line(x=ulx, y=uly, width=lrx - ulx, height=lry - uly,
                text="".join(s.text for s in spans).strip(), spans=tuple(spans))


def _scale_factor(page_width: int, page_height: int, reference_size: Optional[Size],
                  log: logging.Logger) -> float:
    if reference_size is None:
        return 1.0
    if page_width == reference_size.width and page_height == reference_size.height:
        return 1.0
    scale = reference_size.width / page_width
    expected_height = round(page_height * scale)
    if expected_height != round(reference_size.height):
        # TODO: the X-axis factor is kept for both axes; check whether a
        #       per-axis factor lines up better with real mismatched scans.
        log.warning(f"Aspect ratio of hOCR page ({page_width}x{page_height}) does not match "
                    f"reference size ({reference_size.width}x{reference_size.height}), "
                    f"scaling both axes by {scale:.4f}")
    return scale


def parse_hocr(hocr_text, reference_size: Optional[Size] = None,
               log: Optional[logging.Logger] = None) -> Page:
    """
    Parse an hOCR document.

    Args:
        hocr_text: hOCR markup, as ``str`` or ``bytes``. Bytes are decoded
                   from the document's BOM or ``<meta charset>``.
        reference_size: Size of the image the text is overlaid on. Coordinates
                        are rescaled when the page box differs from it.
        log: Receives the aspect-ratio mismatch warning, defaults to the
             module logger.

    Returns:
        The parsed Page.

    Raises:
        ValueError: If the document has no ``div.ocr_page`` or an element lacks a bbox.
    """
    log = log or logger
    soup = BeautifulSoup(hocr_text, "html.parser")
    page_node = soup.select_one("div.ocr_page")
    if page_node is None:
        raise ValueError("hOCR document has no div.ocr_page element")
    _, _, page_width, page_height = _bbox(page_node)
    scale = _scale_factor(page_width, page_height, reference_size, log)

    lines = [_parse_line(n, scale) for n in page_node.select("span.ocr_line, span.ocrx_line")]
    log.debug(f"Parsed {len(lines)} hOCR lines (scale={scale:.4f})")
    return make_page(page_width * scale, page_height * scale, lines)
