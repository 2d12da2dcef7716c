"""
IIIF Annotation Parser — Builds a Page from IIIF/W3C text annotations.

Annotations should be pre-filtered so that they all refer to a single
canvas. Only line granularity is produced; when an annotation list mixes
granularities, the line-level annotations win.
"""

import logging
import re
from typing import Optional

from .models import Line, Page, Size, make_page

logger = logging.getLogger(__name__)

_FRAGMENT_PATTERN = re.compile(r"xywh=(?:pixel:)?([\d.]+),([\d.]+),([\d.]+),([\d.]+)")


def _is_line(anno: dict) -> bool:
    # textGranularity is the IIIF Text Granularity extension, dcType is used by Europeana
    return anno.get("textGranularity") == "line" or anno.get("dcType") == "Line"


def _fragment(target) -> str:
    if isinstance(target, list):
        target = target[0] if target else ""
    if isinstance(target, dict):
        selector = target.get("selector")
        if isinstance(selector, list):
            selector = selector[0] if selector else None
        if isinstance(selector, dict) and selector.get("value"):
            return selector["value"]
        return target.get("id") or target.get("@id") or target.get("source") or target.get("full") or ""
    return target or ""


def _text(anno: dict) -> str:
    resource = anno.get("resource")
    if resource:
        if isinstance(resource, list):
            resource = resource[0]
        text = resource.get("chars")
        return text if text is not None else resource.get("value", "")
    body = anno.get("body") or {}
    if isinstance(body, list):
        body = next((b for b in body if "value" in b), {})
    return body.get("value", "")


def _parse_annotation(anno: dict) -> Line:
    fragment = _fragment(anno.get("target") or anno.get("on"))
    match = _FRAGMENT_PATTERN.search(fragment)
    if not match:
        raise ValueError(f"Annotation {anno.get('id') or anno.get('@id')} has no xywh fragment in its target")
    x, y, width, height = (float(v) for v in match.groups())
    return Line(x=x, y=y, width=width, height=height, text=_text(anno))


def parse_iiif_annotations(annotations: list[dict], reference_size: Optional[Size] = None,
                           log: Optional[logging.Logger] = None) -> Page:
    """
    Parse text lines from a list of IIIF annotations.

    Args:
        annotations: Annotations with a plain-text body, already decoded from JSON.
        reference_size: Size of the target image. Without it, the page size is
                        derived from the extent of the parsed lines.
        log: Receives per-call diagnostics, defaults to the module logger.
    """
    log = log or logger
    line_annos = [a for a in annotations if _is_line(a)]
    lines = [_parse_annotation(a) for a in (line_annos or annotations)]
    log.debug(f"Parsed {len(lines)} lines from {len(annotations)} annotations")
    if reference_size is None:
        return make_page(None, None, lines)
    return make_page(reference_size.width, reference_size.height, lines)
