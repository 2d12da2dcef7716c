"""
Data models shared by the OCR markup parsers and the color detector.
"""

from dataclasses import dataclass, field, replace
from typing import Optional


@dataclass(frozen=True)
class Size:
    """Pixel dimensions of the image the parsed text is overlaid on."""
    width: float
    height: float


@dataclass(frozen=True)
class Span:
    """A positioned piece of text within a line (word, token or whitespace).

    ``width`` is ``None`` only while an extra span is still provisional,
    i.e. before its successor's position is known.
    """
    x: float
    y: float
    width: Optional[float]
    height: float
    text: str
    style: Optional[str] = None
    is_extra: bool = False

    @property
    def x2(self) -> float:
        return self.x + (self.width or 0)

    def to_dict(self) -> dict:
        out = {"x": self.x, "y": self.y, "width": self.width, "height": self.height, "text": self.text}
        if self.style:
            out["style"] = self.style
        if self.is_extra:
            out["is_extra"] = True
        return out


@dataclass(frozen=True)
class Line:
    """A line of text; ``spans`` is ``None`` for line-granularity lines."""
    x: float
    y: float
    width: float
    height: float
    text: str
    spans: Optional[tuple[Span, ...]] = None

    @property
    def x2(self) -> float:
        return self.x + self.width

    @property
    def y2(self) -> float:
        return self.y + self.height

    def to_dict(self) -> dict:
        out = {"x": self.x, "y": self.y, "width": self.width, "height": self.height, "text": self.text}
        if self.spans is not None:
            out["spans"] = [s.to_dict() for s in self.spans]
        return out


@dataclass(frozen=True)
class Page:
    """A parsed page, in the coordinate space of the reference image."""
    width: float
    height: float
    lines: tuple[Line, ...] = field(default_factory=tuple)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height, "lines": [l.to_dict() for l in self.lines]}


@dataclass(frozen=True)
class PageColors:
    """Foreground/background pair detected from a page thumbnail."""
    text_color: str
    bg_color: str

    def to_dict(self) -> dict:
        return {"text_color": self.text_color, "bg_color": self.bg_color}


def page_extent(lines) -> Size:
    """Smallest size that contains every line, used when no page box is known."""
    if not lines:
        return Size(width=0, height=0)
    return Size(width=max(l.x2 for l in lines), height=max(l.y2 for l in lines))


def make_page(width: Optional[float], height: Optional[float], lines) -> Page:
    """Build a page, falling back to the line extent for a missing or empty size."""
    lines = tuple(lines)
    if not width or not height or width <= 0 or height <= 0:
        extent = page_extent(lines)
        width, height = extent.width, extent.height
    return Page(width=width, height=height, lines=lines)


def with_fallback_size(page: Page) -> Page:
    if page.width > 0 and page.height > 0:
        return page
    return replace(page, **vars(page_extent(page.lines)))
