"""Tests for the interview report assembler and the fpdf2 backend."""

import io
from datetime import datetime

import pytest
from pypdf import PdfReader

from interview_report.models import (
    FlowAnalysis,
    FlowIssue,
    InterviewMeta,
    JDAnalysis,
    QAExchange,
    ReportInput,
    ReportScores,
    SentimentAnalysis,
    SentimentSide,
    Transcript,
    TranscriptSegment,
)
from interview_report.recommendations import DOCUMENTATION_REMINDER
from interview_report.render._helpers import fmt_number, truncate
from interview_report.render.canvas import FPDFCanvas
from interview_report.render.layout import PageGeometry
from interview_report.render.pdf import (
    PROVENANCE,
    RECOMMENDATION_CHARS,
    ReportAssembler,
    render_report,
    report_filename,
)
from interview_report.render.primitives import CARD_HEIGHT, SUCCESS, WARNING

GENERATED_AT = datetime(2024, 5, 1, 14, 30)

REASONING = (
    "The candidate related most answers back to the distributed systems work in the role. "
    "Examples were concrete and included the size of the teams involved. "
    "Some questions on testing strategy received shorter answers than expected. "
    "Overall the technical vocabulary matched the job description closely."
)


def _full_input(**overrides) -> ReportInput:
    fields = dict(
        interview=InterviewMeta(file_name="call-recording.mp3"),
        scores=ReportScores(
            jd_match_score=82,
            candidate_engagement=74,
            recruiter_sentiment=8,
            flow_continuity_score=65,
        ),
        job_description="Senior Python Developer",
        jd_analysis=JDAnalysis(
            candidate_reasoning=REASONING,
            recruiter_reasoning=REASONING,
            exchanges=[
                QAExchange(
                    question="How would you scale the ingestion service?",
                    relevance_score=90,
                    answer="Partition by tenant and add a queue in front of the writers.",
                    alignment_score=85,
                    key_skills=["Kafka", "PostgreSQL", "asyncio"],
                ),
                QAExchange(question="Describe a production incident.", relevance_score=70),
            ],
        ),
        sentiment_analysis=SentimentAnalysis(
            recruiter=SentimentSide(overall_score=8, positive=0.72, reasoning=REASONING),
            candidate=SentimentSide(overall_score=7.5, positive=0.65, reasoning=REASONING),
        ),
        flow_analysis=FlowAnalysis(
            continuity_score=65,
            insights=["Transitions between topics were mostly smooth."],
            flow_breaks=[FlowIssue(issue="Abrupt switch from salary to architecture", severity="high")],
        ),
        transcript=Transcript(segments=[
            TranscriptSegment(speaker="recruiter", text="What are your salary expectations?"),
        ]),
    )
    fields.update(overrides)
    return ReportInput(**fields)


def _assemble(data, geometry=None, *, recording_canvas, measurer):
    geometry = geometry or PageGeometry()
    canvas = recording_canvas(geometry.width, geometry.height)
    ReportAssembler(data, GENERATED_AT, canvas, measurer, geometry).render()
    return canvas


@pytest.fixture
def assemble(recording_canvas, measurer):
    def _run(data, geometry=None):
        return _assemble(data, geometry, recording_canvas=recording_canvas, measurer=measurer)
    return _run


def _content_texts(canvas) -> list[str]:
    """Every drawn text except the footer stamps, in page order."""
    return [
        t for t in canvas.texts()
        if not t.startswith("Page ") and t != PROVENANCE
    ]


def _after(texts: list[str], marker: str) -> list[str]:
    return texts[texts.index(marker) + 1:]


# -- Executive Summary Tests ---------------------------------------------------


def test_executive_summary_card_colors(assemble):
    """Cards are colored by per-metric thresholds."""
    canvas = assemble(_full_input())
    cards = [
        op for op in canvas.pages[0]
        if op.kind == "fill_rect" and op.h == CARD_HEIGHT and op.w == pytest.approx(77.5)
    ]
    assert [op.color for op in cards] == [SUCCESS, SUCCESS, SUCCESS, WARNING]


def test_executive_summary_card_values(assemble):
    canvas = assemble(_full_input(scores=ReportScores(
        jd_match_score=82.5, candidate_engagement=74.4, recruiter_sentiment=7.5,
    )))
    texts = canvas.texts(0)
    for label, value in (
        ("Job Match Score", "83%"),
        ("Candidate Engagement", "74%"),
        ("Recruiter Effectiveness", "8/10"),
        ("Flow Continuity", "0%"),
    ):
        assert texts[texts.index(label) + 1] == value


def test_banner_shows_file_and_timestamp(assemble):
    texts = assemble(_full_input()).texts(0)
    assert texts[0] == "AI INTERVIEW ANALYSIS REPORT"
    assert "File: call-recording.mp3" in texts
    assert "Generated: 01 May 2024, 14:30" in texts


# -- Section Tests -------------------------------------------------------------


def test_section_order(assemble):
    texts = _content_texts(assemble(_full_input()))
    headings = [
        "EXECUTIVE SUMMARY",
        "JOB DESCRIPTION RELEVANCE ANALYSIS",
        "SENTIMENT & BEHAVIORAL ANALYSIS",
        "INTERVIEW FLOW & STRUCTURE",
        "KEY RECOMMENDATIONS",
    ]
    positions = [texts.index(h) for h in headings]
    assert positions == sorted(positions)


def test_optional_sections_omitted_when_absent(assemble):
    data = ReportInput(interview=InterviewMeta(file_name="bare.wav"))
    texts = _content_texts(assemble(data))
    assert "EXECUTIVE SUMMARY" in texts
    assert "KEY RECOMMENDATIONS" in texts
    assert "JOB DESCRIPTION RELEVANCE ANALYSIS" not in texts
    assert "SENTIMENT & BEHAVIORAL ANALYSIS" not in texts
    assert "INTERVIEW FLOW & STRUCTURE" not in texts


def test_exchanges_are_numbered_with_scores(assemble):
    exchanges = [QAExchange(question=f"Question {i}", relevance_score=50 + i) for i in range(1, 5)]
    data = _full_input(jd_analysis=JDAnalysis(exchanges=exchanges))
    texts = _content_texts(assemble(data))
    assert "Q1: Question 1 (Score: 51/100)" in texts
    assert "Q3: Question 3 (Score: 53/100)" in texts
    assert not any(t.startswith("Q4:") for t in texts)
    assert not any(t.startswith("Response:") for t in texts)


def test_exchange_scores_print_full_precision(assemble):
    exchanges = [QAExchange(question="Walk me through a rollout", relevance_score=72.3456789)]
    texts = _content_texts(assemble(_full_input(jd_analysis=JDAnalysis(exchanges=exchanges))))
    assert "Q1: Walk me through a rollout (Score: 72.3456789/100)" in texts


@pytest.mark.parametrize("value,text", [
    (8.0, "8"),
    (7.5, "7.5"),
    (72.3456789, "72.3456789"),
    (0, "0"),
    (1234567.0, "1234567"),
])
def test_fmt_number(value, text):
    assert fmt_number(value) == text


def test_exchange_response_rendered_as_nested_bullet(assemble):
    canvas = assemble(_full_input())
    texts = canvas.ops("text")
    question = next(op for op in texts if op.text.startswith("Q1:"))
    response = next(op for op in texts if op.text.startswith("Response:"))
    assert response.x == question.x + 12
    assert response.y > question.y


def test_sentiment_body_requires_both_sides(assemble):
    data = _full_input(sentiment_analysis=SentimentAnalysis(
        recruiter=SentimentSide(overall_score=6, positive=0.5),
    ))
    texts = _content_texts(assemble(data))
    assert "SENTIMENT & BEHAVIORAL ANALYSIS" in texts
    assert not any(t.startswith("Recruiter Effectiveness:") for t in texts)
    assert "Recruiter Performance Insights:" not in texts


def test_sentiment_percentages(assemble):
    texts = _content_texts(assemble(_full_input()))
    assert "Recruiter Effectiveness: 8/10 (72% positive tone)" in texts
    assert "Candidate Engagement: 7.5/10 (65% positive response)" in texts


def test_sentiment_summaries_capped_at_two(assemble):
    texts = _content_texts(assemble(_full_input()))
    section = _after(texts, "Recruiter Performance Insights:")
    section = section[:section.index("Candidate Response Patterns:")]
    joined = " ".join(section)
    assert "distributed systems" in joined
    assert "size of the teams" in joined
    assert "testing strategy" not in joined


def test_flow_issues_filtered_and_capped(assemble):
    flow = FlowAnalysis(
        continuity_score=40,
        flow_breaks=[
            FlowIssue(issue="Small pause", severity="low"),
            FlowIssue(issue="Abrupt change", severity="high"),
            FlowIssue(issue="   ", severity="medium"),
            FlowIssue(issue="Cut off mid answer", severity="high"),
            FlowIssue(issue="Repeated question", severity="high"),
        ],
    )
    texts = _content_texts(assemble(_full_input(flow_analysis=flow)))
    issues = [t for t in texts if t.startswith(("HIGH:", "MEDIUM:", "LOW:"))]
    assert issues == [
        "HIGH: Abrupt change",
        "MEDIUM: Flow interruption detected",
        "HIGH: Cut off mid answer",
    ]


def test_flow_without_critical_issues_has_no_issue_heading(assemble):
    flow = FlowAnalysis(continuity_score=90, flow_breaks=[FlowIssue(issue="Pause", severity="low")])
    texts = _content_texts(assemble(_full_input(flow_analysis=flow)))
    assert "Flow Continuity Score: 90/100" in texts
    assert "Critical Flow Issues:" not in texts


def test_flow_insight_truncated(assemble):
    flow = FlowAnalysis(insights=["x" * 200])
    texts = _content_texts(assemble(_full_input(flow_analysis=flow)))
    lines = [t for t in texts if set(t) <= {"x", "."}]
    assert "".join(lines) == "x" * 120 + "..."


# -- Recommendation Tests ------------------------------------------------------


def test_strong_candidate_recommendation_first(assemble):
    texts = _content_texts(assemble(_full_input()))
    assert _after(texts, "KEY RECOMMENDATIONS")[0].startswith("Strong recommendation")


def test_recommendations_capped_at_five(assemble):
    canvas = assemble(_full_input())
    heading = next(op for op in canvas.ops("text") if op.text == "KEY RECOMMENDATIONS")
    markers = [
        op for op in canvas.ops("fill_rect")
        if (op.page, op.y) > (heading.page, heading.y) and op.w < 2
    ]
    assert len(markers) == 5


def test_long_recommendation_truncated(assemble):
    data = ReportInput(interview=InterviewMeta(file_name="bare.wav"))
    rest = " ".join(_after(_content_texts(assemble(data)), "KEY RECOMMENDATIONS"))
    expected = truncate(DOCUMENTATION_REMINDER, RECOMMENDATION_CHARS)
    assert rest.endswith(expected)
    assert DOCUMENTATION_REMINDER not in rest


# -- Pagination Tests ----------------------------------------------------------


def test_footer_on_every_page(assemble):
    geometry = PageGeometry(height=160)
    canvas = assemble(_full_input(), geometry)
    total = canvas.page_count
    assert total > 1

    stamps = [t for t in canvas.texts() if t.startswith("Page ")]
    assert stamps == [f"Page {i} of {total}" for i in range(1, total + 1)]
    for index, page in enumerate(canvas.pages):
        rule, number, provenance = page[-3:]
        assert rule.kind == "line"
        assert rule.y == geometry.height - 12
        assert number.text == f"Page {index + 1} of {total}"
        assert provenance.text == PROVENANCE
        assert number.y > rule.y


def test_content_stays_above_footer(assemble):
    for height in (160, 220, 297):
        geometry = PageGeometry(height=height)
        canvas = assemble(_full_input(), geometry)
        for page in canvas.pages:
            for op in page[:-3]:
                assert op.bottom <= geometry.safe_bottom, (height, op)


# -- fpdf2 Backend Tests -------------------------------------------------------


def test_pdf_smoke():
    """render_report produces bytes starting with %PDF."""
    out = render_report(_full_input(), GENERATED_AT)
    assert out.startswith(b"%PDF-")


def test_pdf_page_count_and_footer_text():
    out = render_report(_full_input(), GENERATED_AT, geometry=PageGeometry(height=160))
    reader = PdfReader(io.BytesIO(out))
    total = len(reader.pages)
    assert total > 1
    assert f"Page 1 of {total}" in reader.pages[0].extract_text()
    assert f"Page {total} of {total}" in reader.pages[-1].extract_text()


def test_pdf_unicode_safety():
    """Characters outside latin-1 never break the core font."""
    data = _full_input(jd_analysis=JDAnalysis(
        candidate_reasoning="Answers were clear — “concise” and focused → strong fit. ✓ Verified claims.",
    ))
    assert render_report(data, GENERATED_AT).startswith(b"%PDF-")


def test_canvas_set_page_out_of_range():
    canvas = FPDFCanvas()
    canvas.add_page()
    canvas.set_page(0)
    with pytest.raises(IndexError):
        canvas.set_page(1)
    with pytest.raises(IndexError):
        canvas.set_page(-1)


def test_report_filename():
    assert report_filename("call-recording.mp3", GENERATED_AT) == (
        "interview-analysis-call-recording-2024-05-01.pdf"
    )
    assert report_filename("", GENERATED_AT) == "interview-analysis-interview-2024-05-01.pdf"
