"""Render an interview analysis as a paginated PDF report.

Uses fpdf2 drawing primitives through the canvas/measurer seam; all layout
decisions (wrapping, page breaks, card placement) are made here, not by fpdf2.

Rendering is two passes. The first lays out every section top to bottom,
adding pages as needed. The second revisits each page by index to stamp
"Page i of N", which can only be written once N is known.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path, PurePath

from interview_report.models import ReportInput
from interview_report.recommendations import select_recommendations
from interview_report.render._helpers import fmt_number, round_half_up, truncate
from interview_report.render.canvas import Canvas, FPDFCanvas
from interview_report.render.layout import Layout, LayoutState, PageGeometry
from interview_report.render.measure import FPDFMeasurer, TextMeasurer
from interview_report.render.primitives import (
    PRIMARY,
    SECONDARY,
    TONE_COLORS,
    WHITE,
    bullet,
    card_tone,
    flush_grid,
    metric_card,
    paragraph,
    section_header,
    summarize_as_bullets,
)

log = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"

REPORT_TITLE = "AI INTERVIEW ANALYSIS REPORT"
REPORT_SUBTITLE = "Professional Assessment & Recommendations"
PROVENANCE = "Generated by AI Interview Analysis System"

BANNER_HEIGHT = 50
CONTENT_START_Y = 65

# Footer sits below PageGeometry.safe_bottom, measured up from the page edge.
FOOTER_RULE_OFFSET = 12
FOOTER_TEXT_OFFSET = 7

MAX_EXCHANGES = 3
MAX_INSIGHTS = 3
INSIGHT_CHARS = 120
MAX_FLOW_ISSUES = 3
MAX_RECOMMENDATIONS = 5
RECOMMENDATION_CHARS = 150


def render_report(
    data: ReportInput,
    generated_at: datetime,
    *,
    geometry: PageGeometry | None = None,
) -> bytes:
    """Render the report and return the finished PDF bytes."""
    geometry = geometry or PageGeometry()
    canvas = FPDFCanvas(geometry.width, geometry.height)
    measurer = FPDFMeasurer(canvas.pdf)
    ReportAssembler(data, generated_at, canvas, measurer, geometry).render()
    return canvas.output()


def write_report(data: ReportInput, generated_at: datetime, output_path: Path) -> None:
    output_path.write_bytes(render_report(data, generated_at))


def report_filename(file_name: str, generated_at: datetime) -> str:
    """Download name for a report, e.g. interview-analysis-call-2024-05-01.pdf."""
    stem = PurePath(file_name).stem or "interview"
    return f"interview-analysis-{stem}-{generated_at.date().isoformat()}.pdf"


def format_timestamp(value: datetime) -> str:
    return value.strftime("%d %b %Y, %H:%M")


def stamp_footers(layout: Layout, provenance: str = PROVENANCE) -> None:
    """Revisit every page and draw the rule, "Page i of N" and provenance."""
    canvas = layout.canvas
    g = layout.geometry
    rule_y = g.height - FOOTER_RULE_OFFSET
    text_y = g.height - FOOTER_TEXT_OFFSET
    total = canvas.page_count

    for index in range(total):
        canvas.set_page(index)
        canvas.line(g.left, rule_y, g.width - g.right, rule_y, PRIMARY, 0.5)
        canvas.text(g.left, text_y, f"Page {index + 1} of {total}", 8, "", SECONDARY)
        canvas.text(g.width - g.right - 80, text_y, provenance, 8, "", SECONDARY)


class ReportAssembler:
    """Lays out one report onto a canvas. Not reusable across renders."""

    def __init__(
        self,
        data: ReportInput,
        generated_at: datetime,
        canvas: Canvas,
        measurer: TextMeasurer,
        geometry: PageGeometry | None = None,
    ):
        self._data = data
        self._generated_at = generated_at
        self.layout = Layout(canvas, measurer, geometry or PageGeometry(), LayoutState())

    @property
    def state(self) -> LayoutState:
        return self.layout.state

    # ── Main render ────────────────────────────────────────────────────

    def render(self) -> Canvas:
        layout = self.layout
        layout.state.page_index = layout.canvas.add_page()
        layout.state.cursor_y = layout.geometry.top
        layout.state.grid_column = 0

        self._render_banner()
        self._render_executive_summary()
        self._render_jd_analysis()
        self._render_sentiment()
        self._render_flow()
        self._render_recommendations()
        self._render_footers()

        log.info(
            "Rendered report for %s: %d page(s)",
            self._data.interview.file_name, layout.canvas.page_count,
        )
        return layout.canvas

    # ── 1. Header banner ───────────────────────────────────────────────

    def _render_banner(self) -> None:
        canvas = self.layout.canvas
        g = self.layout.geometry
        canvas.fill_rect(0, 0, g.width, BANNER_HEIGHT, PRIMARY)
        canvas.text(g.left, 25, REPORT_TITLE, 22, "B", WHITE)
        canvas.text(g.left, 35, REPORT_SUBTITLE, 12, "", WHITE)
        canvas.text(g.left, 43, f"File: {self._data.interview.file_name}", 10, "", WHITE)
        canvas.text(
            g.width - g.right - 80, 43,
            f"Generated: {format_timestamp(self._generated_at)}", 10, "", WHITE,
        )
        self.layout.state.cursor_y = CONTENT_START_Y

    # ── 2. Executive summary ───────────────────────────────────────────

    def _render_executive_summary(self) -> None:
        layout = self.layout
        s = self._data.scores
        jd = s.jd_match_score or 0
        engagement = s.candidate_engagement or 0
        effectiveness = s.recruiter_sentiment or 0
        flow = s.flow_continuity_score or 0

        section_header(layout, "EXECUTIVE SUMMARY")
        layout.state.grid_column = 0

        cards = [
            ("Job Match Score", f"{round_half_up(jd)}%", "jd_match", jd),
            ("Candidate Engagement", f"{round_half_up(engagement)}%", "candidate_engagement", engagement),
            ("Recruiter Effectiveness", f"{round_half_up(effectiveness)}/10", "recruiter_effectiveness", effectiveness),
            ("Flow Continuity", f"{round_half_up(flow)}%", "flow_continuity", flow),
        ]
        for label, value, metric, raw in cards:
            metric_card(layout, label, value, TONE_COLORS[card_tone(metric, raw)])

        flush_grid(layout)
        layout.advance(15)

    # ── 3. Job description relevance ───────────────────────────────────

    def _render_jd_analysis(self) -> None:
        jd = self._data.jd_analysis
        if jd is None:
            log.debug("No JD analysis; skipping relevance section")
            return

        layout = self.layout
        section_header(layout, "JOB DESCRIPTION RELEVANCE ANALYSIS")

        if jd.candidate_reasoning:
            self._subheading("Candidate Performance Analysis:", 12)
            summarize_as_bullets(layout, jd.candidate_reasoning)
            layout.advance(5)

        if jd.recruiter_reasoning:
            self._subheading("Recruiter Effectiveness Analysis:", 12)
            summarize_as_bullets(layout, jd.recruiter_reasoning)
            layout.advance(5)

        if jd.exchanges:
            self._subheading("Key Interview Exchanges:", 12, gap=5)
            for i, ex in enumerate(jd.exchanges[:MAX_EXCHANGES], start=1):
                bullet(layout, f"Q{i}: {ex.question} (Score: {fmt_number(ex.relevance_score)}/100)")
                if ex.answer:
                    bullet(
                        layout,
                        f"Response: {ex.answer} (Alignment: {fmt_number(ex.alignment_score)}/100)",
                        level=1,
                    )
                layout.advance(2)
            layout.advance(5)

    # ── 4. Sentiment ───────────────────────────────────────────────────

    def _render_sentiment(self) -> None:
        sentiment = self._data.sentiment_analysis
        if sentiment is None:
            log.debug("No sentiment analysis; skipping behavioral section")
            return

        layout = self.layout
        section_header(layout, "SENTIMENT & BEHAVIORAL ANALYSIS")

        recruiter, candidate = sentiment.recruiter, sentiment.candidate
        if recruiter is None or candidate is None:
            return

        bullet(
            layout,
            f"Recruiter Effectiveness: {fmt_number(recruiter.overall_score)}/10 "
            f"({round_half_up(recruiter.positive * 100)}% positive tone)",
        )
        bullet(
            layout,
            f"Candidate Engagement: {fmt_number(candidate.overall_score)}/10 "
            f"({round_half_up(candidate.positive * 100)}% positive response)",
        )

        if recruiter.reasoning:
            self._subheading("Recruiter Performance Insights:", 11)
            summarize_as_bullets(layout, recruiter.reasoning, max_points=2)

        if candidate.reasoning:
            self._subheading("Candidate Response Patterns:", 11)
            summarize_as_bullets(layout, candidate.reasoning, max_points=2)
        layout.advance(5)

    # ── 5. Flow & structure ────────────────────────────────────────────

    def _render_flow(self) -> None:
        flow = self._data.flow_analysis
        if flow is None:
            log.debug("No flow analysis; skipping flow section")
            return

        layout = self.layout
        section_header(layout, "INTERVIEW FLOW & STRUCTURE")
        bullet(layout, f"Flow Continuity Score: {fmt_number(flow.continuity_score)}/100", style="B")

        insights = [i for i in flow.insights[:MAX_INSIGHTS] if i]
        if insights:
            self._subheading("Key Flow Observations:", 11)
            for insight in insights:
                bullet(layout, truncate(insight, INSIGHT_CHARS))
            layout.advance(5)

        critical = [f for f in flow.flow_breaks if f.severity in ("high", "medium")]
        if critical:
            self._subheading("Critical Flow Issues:", 11)
            for issue in critical[:MAX_FLOW_ISSUES]:
                text = issue.issue.strip() or "Flow interruption detected"
                bullet(layout, f"{issue.severity.upper()}: {text}")
            layout.advance(5)

    # ── 6. Recommendations ─────────────────────────────────────────────

    def _render_recommendations(self) -> None:
        section_header(self.layout, "KEY RECOMMENDATIONS")
        for rec in select_recommendations(self._data)[:MAX_RECOMMENDATIONS]:
            bullet(self.layout, truncate(rec, RECOMMENDATION_CHARS))

    # ── 7. Footer pass ─────────────────────────────────────────────────

    def _render_footers(self) -> None:
        stamp_footers(self.layout)

    # ── Helpers ────────────────────────────────────────────────────────

    def _subheading(self, text: str, size: float, gap: float = 3) -> None:
        paragraph(self.layout, text, size=size, style="B", justify=False)
        self.layout.advance(gap)

