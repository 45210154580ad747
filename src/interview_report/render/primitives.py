"""Drawing primitives: sections, paragraphs, bullets, score bars and the metric-card grid.

Each primitive reserves space with ``layout.ensure_space`` before it draws,
paints one logical unit at the cursor, and advances the cursor past it.
"""

from __future__ import annotations

import re
from typing import Iterable, Literal

from interview_report.render.canvas import RGB
from interview_report.render.layout import Layout
from interview_report.render.measure import TextMeasurer


# ── Color palette ──────────────────────────────────────────────────────────

PRIMARY: RGB = (41, 128, 185)
SECONDARY: RGB = (52, 73, 94)
SUCCESS: RGB = (39, 174, 96)
WARNING: RGB = (230, 126, 34)
DANGER: RGB = (231, 76, 60)
LIGHT: RGB = (236, 240, 241)
TEXT: RGB = (44, 62, 80)
WHITE: RGB = (255, 255, 255)

Tone = Literal["success", "warning", "danger"]

TONE_COLORS: dict[str, RGB] = {
    "success": SUCCESS,
    "warning": WARNING,
    "danger": DANGER,
}

# metric -> (success at or above, warning at or above); anything lower is danger
CARD_THRESHOLDS: dict[str, tuple[float, float]] = {
    "jd_match": (70, 40),
    "candidate_engagement": (70, 40),
    "recruiter_effectiveness": (7, 4),   # 0-10 scale
    "flow_continuity": (70, 40),
}

# Body text at or below this size is eligible for justification.
MAX_JUSTIFIED_SIZE = 11

# Section header box
SECTION_RESERVE = 35
SECTION_BOX_HEIGHT = 25
SECTION_ADVANCE = 30

# Bullets
BULLET_RESERVE = 12
BULLET_BASE_INDENT = 12
BULLET_LEVEL_INDENT = 12
BULLET_TEXT_OFFSET = 10
BULLET_FONT_SIZE = 10
BULLET_LINE_STEP = 7
BULLET_CONTINUATION_GAP = 2
BULLET_TRAILING_GAP = 3
BULLET_MARKER_SIZE = 1.6

# Sentence summaries
MIN_SENTENCE_LENGTH = 11
_SENTENCE_BREAK_RE = re.compile(r"(?<=[.!?])\s+")
_TERMINALS = (".", "!", "?")

# Score bars (0-10 scale)
SCORE_THRESHOLDS = (7, 4)
SCORE_BAR_WIDTH = 120
SCORE_BAR_HEIGHT = 8
SCORE_BAR_ADVANCE = 18
SCORE_BAR_VALUE_OFFSET = 125
SCORE_BAR_TRACK: RGB = (200, 200, 200)

# Metric cards
CARD_GUTTER = 15
CARD_HEIGHT = 25
CARD_ROW_HEIGHT = 35
CARD_RESERVE = 35


# ── Text ───────────────────────────────────────────────────────────────────

def line_step(size: float) -> float:
    """Vertical advance after one line of text at ``size`` pt."""
    if size >= 14:
        return 8
    if size >= 12:
        return 7
    return 6


def justify_line(
    measurer: TextMeasurer,
    line: str,
    x: float,
    max_width: float,
    size: float,
    style: str = "",
) -> list[tuple[str, float]]:
    """Place each word of ``line`` so the line spans exactly ``max_width``.

    Returns ``(word, x)`` pairs. A single-word line is left at ``x``.
    """
    words = line.split()
    if len(words) < 2:
        return [(line.strip(), x)]
    natural = measurer.string_width(" ".join(words), size, style)
    gap = (max_width - natural) / (len(words) - 1)
    space = measurer.string_width(" ", size, style)

    placed: list[tuple[str, float]] = []
    cur = x
    for word in words:
        placed.append((word, cur))
        cur += measurer.string_width(word, size, style) + space + gap
    return placed


def paragraph(
    layout: Layout,
    text: str,
    *,
    size: float = 10,
    style: str = "",
    indent: float = 0,
    justify: bool = True,
    color: RGB = TEXT,
) -> int:
    """Wrap and draw a block of text; returns the number of lines drawn.

    Interior lines of a multi-line body paragraph are justified; the last
    line is always left-aligned. The paragraph may continue on a new page.
    """
    g = layout.geometry
    x = g.left + indent
    max_width = g.content_width - indent - 10
    lines = layout.measurer.split_lines(text, max_width, size, style)

    layout.ensure_space()
    for i, line in enumerate(lines):
        if i > 0:
            layout.ensure_space()
        interior = i < len(lines) - 1
        if justify and size <= MAX_JUSTIFIED_SIZE and len(lines) > 1 and interior:
            for word, wx in justify_line(layout.measurer, line, x, max_width, size, style):
                layout.canvas.text(wx, layout.y, word, size, style, color)
        else:
            layout.canvas.text(x, layout.y, line, size, style, color)
        layout.advance(line_step(size))
    return len(lines)


def section_header(layout: Layout, title: str, background: RGB = LIGHT) -> None:
    """Bordered, shaded title box spanning the content width."""
    layout.ensure_space(SECTION_RESERVE)
    g = layout.geometry
    box_x = g.left - 5
    box_y = layout.y - 8
    box_w = g.content_width + 10
    layout.canvas.fill_rect(box_x, box_y, box_w, SECTION_BOX_HEIGHT, background)
    layout.canvas.stroke_rect(box_x, box_y, box_w, SECTION_BOX_HEIGHT, PRIMARY, 0.8)
    layout.canvas.text(g.left, layout.y + 5, title, 14, "B", PRIMARY)
    layout.advance(SECTION_ADVANCE)


# ── Bullets ────────────────────────────────────────────────────────────────

def bullet(layout: Layout, text: str, level: int = 0, style: str = "") -> None:
    layout.ensure_space(BULLET_RESERVE)
    g = layout.geometry
    marker_x = g.left + BULLET_BASE_INDENT + level * BULLET_LEVEL_INDENT
    text_x = marker_x + BULLET_TEXT_OFFSET
    max_width = g.content_width - (text_x - g.left) - 10

    layout.canvas.fill_rect(
        marker_x, layout.y - 2.4, BULLET_MARKER_SIZE, BULLET_MARKER_SIZE, TEXT,
    )
    lines = layout.measurer.split_lines(text, max_width, BULLET_FONT_SIZE, style)
    for i, line in enumerate(lines):
        if i > 0:
            layout.ensure_space()
            layout.advance(BULLET_CONTINUATION_GAP)
        layout.canvas.text(text_x, layout.y, line, BULLET_FONT_SIZE, style, TEXT)
        layout.advance(BULLET_LINE_STEP)
    layout.advance(BULLET_TRAILING_GAP)


def split_sentences(text: str, max_points: int = 3) -> list[str]:
    """First ``max_points`` sentences of ``text`` that are long enough to keep.

    Sentences are taken in document order, not ranked. Fragments shorter
    than MIN_SENTENCE_LENGTH are dropped as noise, and each kept sentence
    ends with terminal punctuation.
    """
    kept: list[str] = []
    fragments = _SENTENCE_BREAK_RE.split(text.strip())
    for i, raw in enumerate(fragments):
        sentence = raw.strip()
        # Inner fragments are measured without their terminal mark, the last
        # one as written.
        length = len(sentence) if i == len(fragments) - 1 else len(sentence) - 1
        if length < MIN_SENTENCE_LENGTH:
            continue
        if not sentence.endswith(_TERMINALS):
            sentence += "."
        kept.append(sentence)
        if len(kept) == max_points:
            break
    return kept


def bullet_list(layout: Layout, items: Iterable[str], level: int = 0) -> int:
    count = 0
    for item in items:
        bullet(layout, item, level)
        count += 1
    return count


def summarize_as_bullets(layout: Layout, text: str, level: int = 0, max_points: int = 3) -> int:
    """Render the leading sentences of ``text`` as bullets; returns the count."""
    return bullet_list(layout, split_sentences(text, max_points), level)


# ── Score tones and bars ───────────────────────────────────────────────────

def _tone(value: float, success_at: float, warning_at: float) -> Tone:
    if value >= success_at:
        return "success"
    if value >= warning_at:
        return "warning"
    return "danger"


def score_tone(score: float) -> Tone:
    """Tone of a 0-10 score."""
    return _tone(score, *SCORE_THRESHOLDS)


def score_bar(layout: Layout, label: str, score: float) -> None:
    """Label over an outlined bar filled in proportion to a 0-10 score."""
    layout.ensure_space(SCORE_BAR_ADVANCE)
    x = layout.geometry.left
    y = layout.y
    layout.canvas.text(x, y, label, 10, "", TEXT)

    fill_width = SCORE_BAR_WIDTH * min(max(score, 0), 10) / 10
    if fill_width > 0:
        layout.canvas.fill_rect(x, y + 3, fill_width, SCORE_BAR_HEIGHT, TONE_COLORS[score_tone(score)])
    layout.canvas.stroke_rect(x, y + 3, SCORE_BAR_WIDTH, SCORE_BAR_HEIGHT, SCORE_BAR_TRACK, 0.5)
    layout.canvas.text(x + SCORE_BAR_VALUE_OFFSET, y + 9, f"{score:.1f}/10", 10, "B", TEXT)
    layout.advance(SCORE_BAR_ADVANCE)


# ── Metric cards ───────────────────────────────────────────────────────────

def card_tone(metric: str, value: float) -> Tone:
    return _tone(value, *CARD_THRESHOLDS[metric])


def card_width(layout: Layout) -> float:
    return (layout.geometry.content_width - CARD_GUTTER) / 2


def metric_card(layout: Layout, label: str, value: str, color: RGB = PRIMARY) -> None:
    """Draw one card in the next free grid slot.

    Page breaks are only considered before a left-hand card so a row is
    never split across pages.
    """
    state = layout.state
    if state.grid_column == 0:
        layout.ensure_space(CARD_RESERVE)

    w = card_width(layout)
    x = layout.geometry.left + (0 if state.grid_column == 0 else w + CARD_GUTTER)
    top = layout.y - 5
    border = tuple(max(0, c - 20) for c in color)

    layout.canvas.fill_rect(x, top, w, CARD_HEIGHT, color)
    layout.canvas.stroke_rect(x, top, w, CARD_HEIGHT, border, 0.3)
    layout.canvas.text(x + 5, layout.y + 3, label, 9, "", WHITE)
    layout.canvas.text(x + 5, layout.y + 15, value, 16, "B", WHITE)

    if state.grid_column == 0:
        state.grid_column = 1
    else:
        state.grid_column = 0
        layout.advance(CARD_ROW_HEIGHT)


def flush_grid(layout: Layout) -> bool:
    """Close a row left half-filled by an odd number of cards."""
    if layout.state.grid_column == 0:
        return False
    layout.state.grid_column = 0
    layout.advance(CARD_ROW_HEIGHT)
    return True
