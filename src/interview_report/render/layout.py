"""Page geometry, layout state, and the page-break policy.

A :class:`Layout` bundles the three things every drawing primitive needs
(canvas, measurer, geometry) with the one piece of mutable state they share,
the :class:`LayoutState`. One Layout belongs to exactly one render.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from interview_report.render.canvas import Canvas
from interview_report.render.measure import TextMeasurer

log = logging.getLogger(__name__)

# Space reserved for a single line when a primitive asks for no more.
DEFAULT_REQUIRED_SPACE = 15.0


@dataclass(frozen=True)
class PageGeometry:
    """Page size and margins in millimetres (A4 portrait by default)."""
    width: float = 210.0
    height: float = 297.0
    left: float = 20.0
    right: float = 20.0
    top: float = 25.0
    bottom: float = 27.0

    @property
    def content_width(self) -> float:
        return self.width - self.left - self.right

    @property
    def safe_bottom(self) -> float:
        """Lowest y any content may reach; the footer lives below it."""
        return self.height - self.bottom


@dataclass
class LayoutState:
    page_index: int = 0
    cursor_y: float = 0.0
    grid_column: int = 0    # 0 = left card slot, 1 = right card slot


@dataclass
class Layout:
    canvas: Canvas
    measurer: TextMeasurer
    geometry: PageGeometry = field(default_factory=PageGeometry)
    state: LayoutState = field(default_factory=LayoutState)

    @property
    def y(self) -> float:
        return self.state.cursor_y

    def advance(self, dy: float) -> None:
        self.state.cursor_y += dy

    def ensure_space(self, required: float = DEFAULT_REQUIRED_SPACE) -> bool:
        """Start a new page if ``required`` mm would cross the safe bottom.

        Returns True when a page break was taken.
        """
        if self.state.cursor_y + required <= self.geometry.safe_bottom:
            return False
        self.state.page_index = self.canvas.add_page()
        log.debug(
            "Page break at y=%.1f (needed %.1f): now on page %d",
            self.state.cursor_y, required, self.state.page_index + 1,
        )
        self.state.cursor_y = self.geometry.top
        return True
