"""Page canvas: the drawing surface the layout engine paints on.

Coordinates are millimetres from the top-left corner of the page. Text is
positioned by its baseline. Pages are append-only and addressed by a 0-based
index so earlier pages can be reopened (the footer pass relies on this).
"""

from __future__ import annotations

from typing import Protocol

from fpdf import FPDF

from interview_report.render._helpers import latin1
from interview_report.render.measure import FONT_FAMILY

RGB = tuple[int, int, int]


class Canvas(Protocol):
    width: float
    height: float

    @property
    def page_count(self) -> int: ...

    def add_page(self) -> int: ...

    def set_page(self, index: int) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: RGB, line_width: float) -> None: ...

    def line(self, x1: float, y1: float, x2: float, y2: float, color: RGB, line_width: float) -> None: ...

    def text(self, x: float, y: float, text: str, size: float, style: str, color: RGB) -> None: ...

    def output(self) -> bytes: ...


class FPDFCanvas:
    """Canvas backed by an fpdf2 document using the built-in Helvetica font."""

    def __init__(self, width: float = 210.0, height: float = 297.0):
        self.width = width
        self.height = height
        self.pdf = FPDF(unit="mm", format=(width, height))
        # Page breaks are decided by the layout engine, never by fpdf2.
        self.pdf.set_auto_page_break(auto=False)
        self.pdf.set_margins(0, 0, 0)
        self.pdf.set_font(FONT_FAMILY, "", 10)

    @property
    def page_count(self) -> int:
        return len(self.pdf.pages)

    def add_page(self) -> int:
        self.pdf.add_page()
        return self.pdf.page - 1

    def set_page(self, index: int) -> None:
        if not 0 <= index < self.page_count:
            raise IndexError(f"page index {index} out of range (0..{self.page_count - 1})")
        self.pdf.page = index + 1
        # fpdf2 skips set_font() when the font looks unchanged, but the
        # reopened page's content stream may end in a different one.
        self.pdf.font_family = ""

    def fill_rect(self, x: float, y: float, w: float, h: float, color: RGB) -> None:
        self.pdf.set_fill_color(*color)
        self.pdf.rect(x, y, w, h, style="F")

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: RGB, line_width: float) -> None:
        self.pdf.set_draw_color(*color)
        self.pdf.set_line_width(line_width)
        self.pdf.rect(x, y, w, h, style="D")

    def line(self, x1: float, y1: float, x2: float, y2: float, color: RGB, line_width: float) -> None:
        self.pdf.set_draw_color(*color)
        self.pdf.set_line_width(line_width)
        self.pdf.line(x1, y1, x2, y2)

    def text(self, x: float, y: float, text: str, size: float, style: str, color: RGB) -> None:
        self.pdf.set_font(FONT_FAMILY, style, size)
        self.pdf.set_text_color(*color)
        self.pdf.text(x, y, latin1(text))

    def output(self) -> bytes:
        return bytes(self.pdf.output())
