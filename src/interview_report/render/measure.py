"""Text measurement and greedy line splitting.

A measurer answers two questions for the layout engine: how wide is this
string at a given font size/style, and how does a string break into lines no
wider than a limit. Any backend with these two methods can drive the layout.
"""

from __future__ import annotations

from typing import Callable, Protocol

from fpdf import FPDF

from interview_report.render._helpers import latin1

FONT_FAMILY = "Helvetica"


class TextMeasurer(Protocol):
    def string_width(self, text: str, size: float, style: str = "") -> float: ...

    def split_lines(self, text: str, max_width: float, size: float, style: str = "") -> list[str]: ...


def greedy_wrap(text: str, max_width: float, width_of: Callable[[str], float]) -> list[str]:
    """Break ``text`` into lines whose measured width never exceeds ``max_width``.

    Words are appended to the current line while it still fits. Explicit
    newlines always start a new line. A word that is wider than the limit on
    its own is split into character chunks.
    """
    lines: list[str] = []
    for paragraph in text.split("\n"):
        current = ""
        for word in paragraph.split():
            candidate = f"{current} {word}" if current else word
            if width_of(candidate) <= max_width:
                current = candidate
                continue
            if current:
                lines.append(current)
            if width_of(word) <= max_width:
                current = word
                continue
            chunks = _split_long_word(word, max_width, width_of)
            lines.extend(chunks[:-1])
            current = chunks[-1]
        if current:
            lines.append(current)
    return lines


def _split_long_word(word: str, max_width: float, width_of: Callable[[str], float]) -> list[str]:
    chunks: list[str] = []
    chunk = ""
    for ch in word:
        # A lone character always goes on a line, even if it overflows.
        if chunk and width_of(chunk + ch) > max_width:
            chunks.append(chunk)
            chunk = ch
        else:
            chunk += ch
    chunks.append(chunk)
    return chunks


class FPDFMeasurer:
    """Core-font metrics from an fpdf2 document.

    Shares the FPDF instance with the canvas so widths match what is drawn.
    """

    def __init__(self, pdf: FPDF):
        self._pdf = pdf

    def string_width(self, text: str, size: float, style: str = "") -> float:
        self._pdf.set_font(FONT_FAMILY, style, size)
        return self._pdf.get_string_width(latin1(text))

    def split_lines(self, text: str, max_width: float, size: float, style: str = "") -> list[str]:
        return greedy_wrap(text, max_width, lambda s: self.string_width(s, size, style))
