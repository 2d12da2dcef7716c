"""
Resolution of synthesized whitespace ("extra") spans.

Parsers emit extra spans with ``width=None`` while walking a line, since the
gap they cover is only known once the next real span has been seen. A single
pass over the finished span list then fills in every missing width.
"""

from dataclasses import replace
from typing import Optional

from .models import Span

MIN_SPACE_WIDTH = 0.0001


def resolve_extra_widths(spans: list[Span], line_end: Optional[float] = None) -> list[Span]:
    """
    Fill in the width of every provisional span from its successor's ``x``.

    A provisional span without a successor is measured against ``line_end``
    when given, otherwise it gets the minimum width. Widths never drop below
    ``MIN_SPACE_WIDTH`` so zero-gap whitespace stays selectable.
    """
    resolved = []
    for idx, span in enumerate(spans):
        if span.width is None:
            if idx + 1 < len(spans):
                gap = spans[idx + 1].x - span.x
            elif line_end is not None:
                gap = line_end - span.x
            else:
                gap = 0
            span = replace(span, width=max(gap, MIN_SPACE_WIDTH))
        resolved.append(span)
    return resolved
