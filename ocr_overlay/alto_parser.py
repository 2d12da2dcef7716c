"""
ALTO Parser — Reads ALTO XML (v2, v3 and v4) into a Page.

ALTO commonly measures in tenths of millimetres (``mm10``) or 1/1200 inch
instead of pixels, so every coordinate is rescaled to the reference image
size unless the document declares ``pixel`` as its measurement unit.
"""

import logging
from dataclasses import replace
from typing import Optional

from lxml import etree

from .models import Line, Page, Size, Span, make_page
from .spans import MIN_SPACE_WIDTH, resolve_extra_widths

logger = logging.getLogger(__name__)

ALTO_NAMESPACES = {
    "alto2": "http://www.loc.gov/standards/alto/ns-v2#",
    "alto3": "http://www.loc.gov/standards/alto/ns-v3#",
    "alto4": "http://www.loc.gov/standards/alto/ns-v4#",
}

# FONTSTYLE keywords with a CSS equivalent. subscript/superscript are left
# out since they would change the rendered font size.
FONT_STYLE_CSS = {
    "bold": "font-weight: bold",
    "italics": "font-style: italic",
    "smallcaps": "font-variant: small-caps",
    "underline": "text-decoration: underline",
}

_WORD_TAGS = ("String", "SP", "HYP")


def alto_style_to_css(style_node) -> str:
    """Translate an ALTO ``TextStyle`` element into ``;``-joined CSS declarations."""
    styles = []
    families = [f for f in (style_node.get("FONTFAMILY"), style_node.get("FONTTYPE")) if f]
    if families:
        styles.append(f"font-family: {', '.join(families)}")
    if style_node.get("FONTCOLOR"):
        styles.append(f"color: #{style_node.get('FONTCOLOR')}")
    for keyword in (style_node.get("FONTSTYLE") or "").split():
        if keyword in FONT_STYLE_CSS:
            styles.append(FONT_STYLE_CSS[keyword])
    return ";".join(styles)


def _dimension(node, attr: str, factor: float, default: Optional[float] = None) -> float:
    value = node.get(attr)
    if value is None:
        if default is None:
            raise ValueError(f"ALTO {etree.QName(node).localname} element is missing {attr}")
        return default
    return float(value) * factor


def _resolve_style(style_refs: str, styles: dict) -> Optional[str]:
    css = [styles[ref] for ref in style_refs.split() if styles.get(ref)]
    return ";".join(css) or None


def _parse_line(line_node, styles: dict, has_spaces: bool, sx: float, sy: float) -> Optional[Line]:
    x = _dimension(line_node, "HPOS", sx)
    y = _dimension(line_node, "VPOS", sy)
    width = _dimension(line_node, "WIDTH", sx)
    height = _dimension(line_node, "HEIGHT", sy)
    line_refs = line_node.get("STYLEREFS", "")

    children = [c for c in line_node
                if isinstance(c.tag, str) and etree.QName(c).localname in _WORD_TAGS]
    word_indexes = [i for i, c in enumerate(children)
                    if etree.QName(c).localname == "String" and c.get("CONTENT")]
    last_word = word_indexes[-1] if word_indexes else -1

    spans = []
    hyphenated = False
    for idx, node in enumerate(children):
        tag = etree.QName(node).localname
        if tag == "HYP":
            hyphenated = True
            continue
        style = _resolve_style(f"{line_refs} {node.get('STYLEREFS', '')}", styles)
        if tag == "SP":
            sp_x = _dimension(node, "HPOS", sx, default=spans[-1].x2 if spans else x)
            sp_width = _dimension(node, "WIDTH", sx, default=0)
            if sp_width == 0:
                # keep zero-width spaces selectable, anchored to the preceding word
                sp_width = MIN_SPACE_WIDTH
                sp_x -= MIN_SPACE_WIDTH
            spans.append(Span(x=sp_x, y=_dimension(node, "VPOS", sy, default=y), width=sp_width,
                              height=_dimension(node, "HEIGHT", sy, default=height),
                              text=" ", style=style))
            continue
        text = node.get("CONTENT")
        if not text:
            continue
        word = Span(x=_dimension(node, "HPOS", sx), y=_dimension(node, "VPOS", sy),
                    width=_dimension(node, "WIDTH", sx),
                    height=_dimension(node, "HEIGHT", sy, default=height),
                    text=text, style=style)
        spans.append(word)
        if not has_spaces and idx < last_word:
            spans.append(Span(x=word.x2, y=word.y, width=None, height=word.height,
                              text=" ", is_extra=True))

    if not spans:
        return None
    spans = resolve_extra_widths(spans)
    text = "".join(s.text for s in spans)
    if not hyphenated:
        spans[-1] = replace(spans[-1], text=spans[-1].text + "\n")
    return Line(x=x, y=y, width=width, height=height, text=text, spans=tuple(spans))


def parse_alto(alto_text, reference_size: Optional[Size] = None,
               log: Optional[logging.Logger] = None) -> Optional[Page]:
    """
    Parse an ALTO document.

    Needs the (unscaled) size of the target image unless the document is
    already measured in pixels.

    Args:
        alto_text: ALTO markup, as ``str`` or ``bytes``.
        reference_size: Size of the image the text is overlaid on.
        log: Receives the unsupported-namespace error, defaults to the module logger.

    Returns:
        The parsed Page, or None if the document uses an unsupported ALTO namespace.

    Raises:
        ValueError: If the document has no ``Layout/Page``, an element lacks
                    geometry, or a non-pixel document comes without a reference size.
    """
    log = log or logger
    encoding = None
    if isinstance(alto_text, str):
        # the declared encoding no longer applies once the text is decoded
        alto_text, encoding = alto_text.encode("utf-8"), "utf-8"
    parser = etree.XMLParser(encoding=encoding, remove_blank_text=True, resolve_entities=False)
    root = etree.fromstring(alto_text, parser=parser)

    namespace = etree.QName(root).namespace
    if namespace not in ALTO_NAMESPACES.values():
        log.error(f"Unsupported ALTO namespace: {namespace}")
        return None
    ns = {"alto": namespace}

    unit = (root.findtext("alto:Description/alto:MeasurementUnit", namespaces=ns) or "").strip()
    page_node = root.find("alto:Layout/alto:Page", namespaces=ns)
    if page_node is None:
        raise ValueError("ALTO document has no Layout/Page element")
    page_width = _dimension(page_node, "WIDTH", 1.0, default=0)
    page_height = _dimension(page_node, "HEIGHT", 1.0, default=0)

    sx = sy = 1.0
    if unit != "pixel":
        if reference_size is None or not page_width or not page_height:
            raise ValueError(f"ALTO measured in '{unit or 'mm10'}' needs a reference size and page dimensions")
        sx = reference_size.width / page_width
        sy = reference_size.height / page_height
        page_width *= sx
        page_height *= sy

    styles = {node.get("ID"): alto_style_to_css(node)
              for node in root.iterfind("alto:Styles/alto:TextStyle", namespaces=ns)}
    has_spaces = root.find(".//alto:SP", namespaces=ns) is not None

    lines = []
    for line_node in root.iterfind(".//alto:TextLine", namespaces=ns):
        line = _parse_line(line_node, styles, has_spaces, sx, sy)
        if line is not None:
            lines.append(line)

    log.debug(f"Parsed {len(lines)} ALTO lines (unit={unit or 'unset'}, scale={sx:.4f}x{sy:.4f}, "
              f"explicit spaces={has_spaces})")
    return make_page(page_width, page_height, lines)
