"""
Unit tests for the page model, fallback sizing and extra span resolution.
"""

from ocr_overlay.models import Line, Page, Span, make_page, page_extent, with_fallback_size
from ocr_overlay.spans import MIN_SPACE_WIDTH, resolve_extra_widths


def _line(x, y, w, h):
    return Line(x=x, y=y, width=w, height=h, text="t")


def test_page_extent():
    extent = page_extent([_line(10, 10, 100, 20), _line(50, 300, 20, 25)])
    assert (extent.width, extent.height) == (110, 325)


def test_make_page_keeps_known_size():
    page = make_page(800, 600, [_line(10, 10, 100, 20)])
    assert (page.width, page.height) == (800, 600)


def test_make_page_falls_back_for_missing_or_zero_size():
    lines = [_line(10, 10, 100, 20)]
    assert make_page(None, None, lines).width == 110
    assert make_page(0, 600, lines).height == 30
    assert make_page(None, None, []).width == 0


def test_with_fallback_size():
    page = Page(width=0, height=0, lines=(_line(0, 0, 5, 5),))
    assert with_fallback_size(page) == Page(width=5, height=5, lines=page.lines)


def test_resolve_extra_widths():
    spans = [
        Span(x=0, y=0, width=10, height=5, text="a"),
        Span(x=10, y=0, width=None, height=5, text=" ", is_extra=True),
        Span(x=14, y=0, width=10, height=5, text="b"),
        Span(x=24, y=0, width=None, height=5, text=" ", is_extra=True),
        Span(x=24, y=0, width=6, height=5, text="c"),
        Span(x=30, y=0, width=None, height=5, text=".", is_extra=True),
    ]
    resolved = resolve_extra_widths(spans, line_end=33)
    assert [s.width for s in resolved] == [10, 4, 10, MIN_SPACE_WIDTH, 6, 3]
    # input spans are left untouched
    assert spans[1].width is None


def test_to_dict_omits_empty_fields():
    line = Line(x=1, y=2, width=3, height=4, text="ab",
                spans=(Span(x=1, y=2, width=3, height=4, text="ab", style="color: #000"),))
    assert line.to_dict() == {
        "x": 1, "y": 2, "width": 3, "height": 4, "text": "ab",
        "spans": [{"x": 1, "y": 2, "width": 3, "height": 4, "text": "ab", "style": "color: #000"}],
    }
    assert "spans" not in _line(0, 0, 1, 1).to_dict()
