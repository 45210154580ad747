"""Shared fakes: a canvas that records draw calls and a fixed-advance measurer."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from interview_report.render.layout import Layout, LayoutState, PageGeometry
from interview_report.render.measure import greedy_wrap

# Every character advances this many mm per point of font size.
CHAR_ADVANCE = 0.18


@dataclass
class Op:
    kind: str           # "fill_rect", "stroke_rect", "line", "text"
    page: int
    x: float
    y: float
    w: float = 0.0
    h: float = 0.0
    text: str = ""
    size: float = 0.0
    style: str = ""
    color: tuple = ()

    @property
    def bottom(self) -> float:
        return self.y + self.h


class RecordingCanvas:
    def __init__(self, width: float = 210.0, height: float = 297.0):
        self.width = width
        self.height = height
        self.pages: list[list[Op]] = []
        self.active = -1

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def add_page(self) -> int:
        self.pages.append([])
        self.active = len(self.pages) - 1
        return self.active

    def set_page(self, index: int) -> None:
        if not 0 <= index < len(self.pages):
            raise IndexError(index)
        self.active = index

    def _record(self, op: Op) -> None:
        self.pages[self.active].append(op)

    def fill_rect(self, x, y, w, h, color):
        self._record(Op("fill_rect", self.active, x, y, w, h, color=tuple(color)))

    def stroke_rect(self, x, y, w, h, color, line_width):
        self._record(Op("stroke_rect", self.active, x, y, w, h, color=tuple(color)))

    def line(self, x1, y1, x2, y2, color, line_width):
        top = min(y1, y2)
        self._record(Op("line", self.active, x1, top, x2 - x1, abs(y2 - y1), color=tuple(color)))

    def text(self, x, y, text, size, style, color):
        self._record(Op("text", self.active, x, y, text=text, size=size, style=style, color=tuple(color)))

    def output(self) -> bytes:
        return b""

    # ── Query helpers ──────────────────────────────────────────────────

    def ops(self, kind: str | None = None) -> list[Op]:
        return [op for page in self.pages for op in page if kind is None or op.kind == kind]

    def texts(self, page: int | None = None) -> list[str]:
        ops = self.pages[page] if page is not None else self.ops()
        return [op.text for op in ops if op.kind == "text"]


class FixedMeasurer:
    def string_width(self, text: str, size: float, style: str = "") -> float:
        return len(text) * size * CHAR_ADVANCE

    def split_lines(self, text: str, max_width: float, size: float, style: str = "") -> list[str]:
        return greedy_wrap(text, max_width, lambda s: self.string_width(s, size, style))


@pytest.fixture
def measurer() -> FixedMeasurer:
    return FixedMeasurer()


@pytest.fixture
def make_layout(measurer):
    """Build a Layout on a fresh recording canvas with one page open."""
    def _make(geometry: PageGeometry | None = None) -> Layout:
        geometry = geometry or PageGeometry()
        canvas = RecordingCanvas(geometry.width, geometry.height)
        layout = Layout(canvas, measurer, geometry, LayoutState())
        layout.state.page_index = canvas.add_page()
        layout.state.cursor_y = geometry.top
        return layout
    return _make


@pytest.fixture
def recording_canvas():
    return RecordingCanvas
