"""Candidate and recruiter reports built from resume-versus-interview scores.

Both reports share the interview report's layout engine: section boxes,
justified paragraphs and bullets from :mod:`primitives`, plus 0-10 score
bars. Thresholds for the narrative text are fixed bands on the 0-10 scale.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime

from interview_report.models import CandidateReportData, RecruiterReportData
from interview_report.render.canvas import RGB, Canvas, FPDFCanvas
from interview_report.render.layout import Layout, LayoutState, PageGeometry
from interview_report.render.measure import FPDFMeasurer, TextMeasurer
from interview_report.render.pdf import stamp_footers
from interview_report.render.primitives import (
    PRIMARY,
    TEXT,
    TONE_COLORS,
    WHITE,
    bullet_list,
    paragraph,
    score_bar,
    section_header,
)

log = logging.getLogger(__name__)

BANNER_HEIGHT = 40
CONTENT_START_Y = 50
CLOSING_COLOR: RGB = (120, 120, 120)

CANDIDATE_TITLE = "Candidate Interview Performance Report"
CANDIDATE_PROVENANCE = "Candidate Performance Report"
RECRUITER_PROVENANCE = "Recruiter Interview Summary"
CONFIDENTIAL = "Confidential - For Internal Use Only"

MAX_DEMONSTRATED_SKILLS = 8
MAX_UNVERIFIED_SKILLS = 5
MAX_COVERAGE_ITEMS = 8

DEFAULT_CANDIDATE_STRENGTHS = [
    "Demonstrates foundational knowledge in the field",
    "Shows willingness to learn and adapt",
]
DEFAULT_CANDIDATE_IMPROVEMENTS = [
    "Continue building practical experience",
    "Strengthen communication of technical concepts",
]
DEFAULT_RECRUITER_STRENGTHS = [
    "Structured approach to interviews",
    "Good rapport with candidates",
]
DEFAULT_RECRUITER_IMPROVEMENTS = [
    "Continue using structured interview frameworks",
    "Consider adding more behavioral questions",
]
TOP_QUESTIONS = [
    "Experience-based questions about past projects and achievements",
    "Behavioral questions assessing problem-solving approach",
    "Technical questions aligned with job requirements",
]

_UNSAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9_-]")


def band(score: float, high: str, mid: str, low: str) -> str:
    """Pick the phrase for a 0-10 score: 7 and up, 5 and up, or below."""
    if score >= 7:
        return high
    if score >= 5:
        return mid
    return low


def format_date(value: datetime) -> str:
    return value.strftime("%d %b %Y")


def _safe_name(name: str) -> str:
    return _UNSAFE_FILENAME_RE.sub("_", name.strip()) or "unnamed"


def candidate_report_filename(candidate_name: str, generated_at: datetime) -> str:
    """e.g. Candidate_Report_Jane_Doe_2024-05-01.pdf"""
    return f"Candidate_Report_{_safe_name(candidate_name)}_{generated_at.date().isoformat()}.pdf"


def recruiter_report_filename(recruiter_name: str, generated_at: datetime) -> str:
    return f"Recruiter_Report_{_safe_name(recruiter_name)}_{generated_at.date().isoformat()}.pdf"


def render_candidate_report(
    data: CandidateReportData,
    generated_at: datetime,
    *,
    candidate_name: str = "Candidate",
    interview_date: datetime | None = None,
    geometry: PageGeometry | None = None,
) -> bytes:
    geometry = geometry or PageGeometry()
    canvas = FPDFCanvas(geometry.width, geometry.height)
    CandidateReportAssembler(
        data, generated_at, canvas, FPDFMeasurer(canvas.pdf), geometry,
        candidate_name=candidate_name, interview_date=interview_date,
    ).render()
    return canvas.output()


def render_recruiter_report(
    data: RecruiterReportData,
    generated_at: datetime,
    *,
    recruiter_name: str = "Recruiter",
    interview_date: datetime | None = None,
    geometry: PageGeometry | None = None,
) -> bytes:
    geometry = geometry or PageGeometry()
    canvas = FPDFCanvas(geometry.width, geometry.height)
    RecruiterReportAssembler(
        data, generated_at, canvas, FPDFMeasurer(canvas.pdf), geometry,
        recruiter_name=recruiter_name, interview_date=interview_date,
    ).render()
    return canvas.output()


class _ScoreReportAssembler:
    """Shared page furniture for the 0-10 score reports."""

    provenance = ""

    def __init__(
        self,
        generated_at: datetime,
        canvas: Canvas,
        measurer: TextMeasurer,
        geometry: PageGeometry | None = None,
        interview_date: datetime | None = None,
    ):
        self._generated_at = generated_at
        self._interview_date = interview_date or generated_at
        self.layout = Layout(canvas, measurer, geometry or PageGeometry(), LayoutState())

    def _start(self, title: str) -> None:
        layout = self.layout
        layout.state.page_index = layout.canvas.add_page()
        g = layout.geometry
        layout.canvas.fill_rect(0, 0, g.width, BANNER_HEIGHT, PRIMARY)
        title_width = layout.measurer.string_width(title, 22, "B")
        layout.canvas.text((g.width - title_width) / 2, 25, title, 22, "B", WHITE)
        layout.state.cursor_y = CONTENT_START_Y

    def _plain_line(self, text: str, size: float = 10, gap: float = 7) -> None:
        self.layout.ensure_space()
        self.layout.canvas.text(self.layout.geometry.left, self.layout.y, text, size, "", TEXT)
        self.layout.advance(gap)

    def _lead(self, text: str, style: str = "") -> None:
        paragraph(self.layout, text, style=style, justify=False)
        self.layout.advance(2)

    def _labelled_list(self, label: str, items: list[str]) -> None:
        if not items:
            return
        self._lead(label, style="B")
        bullet_list(self.layout, items)

    def _closing(self, note: str) -> None:
        layout = self.layout
        layout.advance(20)
        layout.ensure_space()
        x = layout.geometry.left
        layout.canvas.text(x, layout.y, note, 9, "", CLOSING_COLOR)
        layout.advance(5)
        layout.canvas.text(
            x, layout.y,
            f"Report generated on {format_date(self._generated_at)} | {CONFIDENTIAL}",
            9, "", CLOSING_COLOR,
        )
        stamp_footers(layout, self.provenance)


# ── Candidate report ───────────────────────────────────────────────────────

class CandidateReportAssembler(_ScoreReportAssembler):
    """Interview performance report addressed to the candidate."""

    provenance = CANDIDATE_PROVENANCE

    def __init__(
        self,
        data: CandidateReportData,
        generated_at: datetime,
        canvas: Canvas,
        measurer: TextMeasurer,
        geometry: PageGeometry | None = None,
        *,
        candidate_name: str = "Candidate",
        interview_date: datetime | None = None,
    ):
        super().__init__(generated_at, canvas, measurer, geometry, interview_date)
        self._data = data
        self._name = candidate_name

    def render(self) -> Canvas:
        self._start(CANDIDATE_TITLE)
        self._render_header()
        self._render_summary()
        self._render_overview()
        self._render_jd_relevance()
        self._render_skills()
        self._render_communication()
        self._render_question_evaluation()
        self._render_strengths()
        self._render_improvements()
        self._render_verdict()
        self._closing("This report is AI-generated and intended for developmental and assessment purposes.")

        log.info("Rendered candidate report for %s: %d page(s)", self._name, self.layout.canvas.page_count)
        return self.layout.canvas

    def _render_header(self) -> None:
        section_header(self.layout, "I. REPORT HEADER")
        self._plain_line(f"Report Date: {format_date(self._interview_date)}")
        self._plain_line(f"Candidate Name: {self._name}")
        self._plain_line("Report Type: Candidate Interview Performance Report", gap=20)

    def _render_summary(self) -> None:
        score = self._data.overall_score
        section_header(self.layout, "II. EXECUTIVE SUMMARY")
        verdict = band(
            score,
            "strong competency",
            "moderate competency with room for development",
            "significant development opportunities",
        )
        text = (
            "This report provides a comprehensive analysis of the candidate's interview "
            f"performance. The overall performance score is {score:.1f}/10, indicating {verdict}."
        )
        if self._data.summary:
            text += f" {self._data.summary}"
        paragraph(self.layout, text)
        self.layout.advance(10)

    def _render_overview(self) -> None:
        score = self._data.overall_score
        section_header(self.layout, "III. OVERALL PERFORMANCE OVERVIEW")
        score_bar(self.layout, "Overall Performance Score", score)
        paragraph(self.layout, (
            f"The candidate achieved an overall performance score of {score:.1f}/10. "
            + band(
                score,
                "This indicates strong interview performance with well-articulated responses "
                "and clear demonstration of relevant competencies.",
                "This reflects fair performance with some strong areas balanced by "
                "opportunities for improvement.",
                "This suggests the need for further skill development to meet the role "
                "requirements effectively.",
            )
        ))
        self.layout.advance(10)

    def _render_jd_relevance(self) -> None:
        score = self._data.skills_demonstration.score
        section_header(self.layout, "IV. JOB DESCRIPTION RELEVANCE ANALYSIS")
        score_bar(self.layout, "Job Match Score", score)
        paragraph(self.layout, (
            f"Job description alignment score: {score:.1f}/10. "
            + band(
                score,
                "The candidate demonstrates excellent alignment with job requirements and "
                "possesses the key competencies needed for success in this role.",
                "The candidate shows moderate alignment with job requirements. Some key areas "
                "match well, though certain skills may require further development.",
                "The candidate's current skill set shows limited alignment with the position "
                "requirements. Significant upskilling would be necessary for role readiness.",
            )
        ))
        self.layout.advance(10)

    def _render_skills(self) -> None:
        skills = self._data.skills_demonstration
        section_header(self.layout, "V. SKILLS ASSESSMENT")
        self._lead("The following skills were evaluated during the interview:")
        self._labelled_list(
            "Skills Successfully Demonstrated:", skills.demonstrated_skills[:MAX_DEMONSTRATED_SKILLS],
        )
        self._labelled_list(
            "Skills Requiring Further Validation:", skills.claimed_skills[:MAX_UNVERIFIED_SKILLS],
        )
        self.layout.advance(5)
        paragraph(self.layout, band(
            self._data.consistency_check.score,
            "The candidate maintained strong consistency between resume claims and interview responses.",
            "Response consistency was generally acceptable, with minor areas requiring clarification.",
            "Some inconsistencies were noted between resume information and interview responses.",
        ))
        self.layout.advance(10)

    def _render_communication(self) -> None:
        rating = self._data.communication_rating
        section_header(self.layout, "VI. COMMUNICATION ASSESSMENT")
        score_bar(self.layout, "Clarity of Expression", rating.clarity)
        score_bar(self.layout, "Confidence Level", rating.confidence)
        score_bar(self.layout, "Depth of Responses", rating.depth)
        self.layout.advance(5)

    def _render_question_evaluation(self) -> None:
        d = self._data
        section_header(self.layout, "VII. QUESTION-WISE EVALUATION")
        self._lead(
            "The candidate demonstrated varying levels of competency across different "
            "question categories:"
        )
        bullet_list(self.layout, [
            "Technical questions: Responses showed "
            + band(d.skills_demonstration.score, "strong", "moderate", "limited")
            + " understanding of core concepts",
            "Behavioral questions: Communication was "
            + band(d.communication_rating.clarity, "clear and articulate", "generally effective", "could be improved"),
            "Experience-based questions: Alignment with resume was "
            + band(d.consistency_check.score, "excellent", "satisfactory", "inconsistent in some areas"),
        ])

    def _render_strengths(self) -> None:
        section_header(self.layout, "VIII. KEY STRENGTHS")
        self._lead("The following strengths were identified during the interview assessment:")
        bullet_list(self.layout, self._data.strengths or DEFAULT_CANDIDATE_STRENGTHS)

    def _render_improvements(self) -> None:
        section_header(self.layout, "IX. AREAS FOR IMPROVEMENT")
        self._lead("To enhance future performance, consider focusing on the following areas:")
        bullet_list(self.layout, self._data.areas_for_improvement or DEFAULT_CANDIDATE_IMPROVEMENTS)

    def _render_verdict(self) -> None:
        score = self._data.overall_score
        layout = self.layout
        section_header(layout, "X. FINAL RECOMMENDATION")
        verdict = band(
            score, "RECOMMENDED FOR HIRE", "RECOMMENDED WITH RESERVATIONS", "NOT RECOMMENDED AT THIS TIME",
        )
        # Verdict color uses the 7 / 5 bands, not the score bar's 7 / 4.
        tone = band(score, "success", "warning", "danger")
        layout.canvas.text(layout.geometry.left, layout.y, verdict, 12, "B", TONE_COLORS[tone])
        layout.advance(10)
        paragraph(layout, band(
            score,
            "The candidate demonstrates strong alignment with job requirements and exhibits the "
            "necessary competencies. They are recommended for progression to the next stage of "
            "the hiring process.",
            "The candidate shows promise but has some gaps that should be addressed. Consider "
            "additional interviews or skills assessment before making a final decision.",
            "The candidate does not currently meet the minimum requirements for this position. "
            "Significant development would be needed before they could be considered for this role.",
        ))


# ── Recruiter report ───────────────────────────────────────────────────────

class RecruiterReportAssembler(_ScoreReportAssembler):
    """Interview quality report addressed to the recruiter."""

    provenance = RECRUITER_PROVENANCE

    def __init__(
        self,
        data: RecruiterReportData,
        generated_at: datetime,
        canvas: Canvas,
        measurer: TextMeasurer,
        geometry: PageGeometry | None = None,
        *,
        recruiter_name: str = "Recruiter",
        interview_date: datetime | None = None,
    ):
        super().__init__(generated_at, canvas, measurer, geometry, interview_date)
        self._data = data
        self._name = recruiter_name

    def render(self) -> Canvas:
        self._start(f"Recruiter Interview Summary - {self._name}")
        self._plain_line(f"Recruiter Name: {self._name}", size=11)
        self._plain_line(f"Report Period: {format_date(self._interview_date)}", size=11)
        self._plain_line("Report Type: Interview Quality & Efficiency Analysis", size=11, gap=20)

        self._render_summary()
        self._render_jd_match()
        self._render_question_quality()
        self._render_top_questions()
        self._render_coverage()
        self._render_efficiency()
        self._render_missed_opportunities()
        self._render_strengths()
        self._render_recommendations()
        self._render_conclusion()
        self._closing("This report is AI-generated to help improve interview quality and candidate assessment.")

        log.info("Rendered recruiter report for %s: %d page(s)", self._name, self.layout.canvas.page_count)
        return self.layout.canvas

    def _render_summary(self) -> None:
        section_header(self.layout, "I. EXECUTIVE SUMMARY")
        if self._data.summary:
            paragraph(self.layout, self._data.summary)
            self.layout.advance(10)
        score_bar(self.layout, "Overall Interview Effectiveness", self._data.overall_score)
        self.layout.advance(10)

    def _render_jd_match(self) -> None:
        relevance = self._data.question_quality.resume_relevance
        section_header(self.layout, "II. JOB DESCRIPTION MATCH ANALYSIS")
        score_bar(self.layout, "Average JD Match Score", relevance)
        self._lead("Interpretation:", style="B")
        paragraph(self.layout, band(
            relevance,
            "The interview questions demonstrated excellent alignment with the job description, "
            "thoroughly assessing key requirements and competencies.",
            "Questions showed moderate alignment with job requirements, though some key areas "
            "could be explored more thoroughly.",
            "Interview questions could be better aligned with the specific job requirements to "
            "ensure comprehensive candidate evaluation.",
        ))
        self.layout.advance(10)

    def _render_question_quality(self) -> None:
        quality = self._data.question_quality
        section_header(self.layout, "III. QUESTION QUALITY METRICS")
        score_bar(self.layout, "Resume Relevance", quality.resume_relevance)
        score_bar(self.layout, "Question Depth & Insight", quality.depth)
        score_bar(self.layout, "Candidate Engagement Level", quality.engagement)
        self.layout.advance(5)

    def _render_top_questions(self) -> None:
        section_header(self.layout, "IV. TOP QUESTIONS ASKED")
        self._lead("Most effective questions that elicited valuable candidate responses:")
        bullet_list(self.layout, TOP_QUESTIONS)

    def _render_coverage(self) -> None:
        coverage = self._data.interview_coverage
        section_header(self.layout, "V. INTERVIEW COVERAGE ANALYSIS")
        self._labelled_list(
            "Experience Areas Thoroughly Covered:", coverage.experience_covered[:MAX_COVERAGE_ITEMS],
        )
        self._labelled_list("Skills Successfully Assessed:", coverage.skills_covered[:MAX_COVERAGE_ITEMS])

    def _render_efficiency(self) -> None:
        quality = self._data.question_quality
        section_header(self.layout, "VI. RECRUITER EFFICIENCY METRICS")
        follow_up = (
            "Strong probing questions used" if quality.depth >= 7 else "Consider more detailed follow-ups"
        )
        bullet_list(self.layout, [
            "Question clarity and structure: " + band(quality.depth, "Excellent", "Good", "Needs improvement"),
            "Time management: Questions distributed effectively throughout interview",
            "Candidate engagement: " + band(quality.engagement, "High", "Moderate", "Could be improved"),
            f"Follow-up effectiveness: {follow_up}",
        ])

    def _render_missed_opportunities(self) -> None:
        missed = self._data.interview_coverage.missed_opportunities
        if not missed:
            log.debug("No missed opportunities; skipping section")
            return
        section_header(self.layout, "VII. MISSED OPPORTUNITIES")
        self._lead(
            "Consider exploring these areas in future interviews for more comprehensive assessment:"
        )
        bullet_list(self.layout, missed)

    def _render_strengths(self) -> None:
        section_header(self.layout, "VIII. KEY STRENGTHS")
        self._lead("Notable strengths observed in the interviewing approach:")
        bullet_list(self.layout, self._data.effectiveness.strengths or DEFAULT_RECRUITER_STRENGTHS)

    def _render_recommendations(self) -> None:
        section_header(self.layout, "IX. ACTIONABLE RECOMMENDATIONS")
        self._lead("To enhance future interview effectiveness and candidate evaluation quality:")
        bullet_list(self.layout, self._data.effectiveness.improvements or DEFAULT_RECRUITER_IMPROVEMENTS)

    def _render_conclusion(self) -> None:
        section_header(self.layout, "X. CONCLUSION & INSIGHTS")
        paragraph(self.layout, band(
            self._data.overall_score,
            "The interview demonstrated high quality with effective questioning, strong coverage "
            "of key areas, and excellent candidate engagement. This approach is well-suited for "
            "identifying qualified candidates.",
            "The interview showed good fundamentals but has room for improvement in certain areas. "
            "Implementing the recommendations above will enhance candidate assessment quality.",
            "Consider refining the interview approach to better align with job requirements and "
            "improve candidate evaluation effectiveness. Focus on the recommended improvements for "
            "better hiring outcomes.",
        ))
