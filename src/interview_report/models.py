"""Pydantic models for the analysis payload a report is rendered from."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    # Report input is read-only for the lifetime of a render.
    model_config = ConfigDict(frozen=True)


# ── Interview ──────────────────────────────────────────────────────────────

class InterviewMeta(_Frozen):
    file_name: str


class ReportScores(_Frozen):
    """Headline scores. Missing values render as 0."""
    jd_match_score: float | None = None         # percentage
    candidate_engagement: float | None = None   # percentage
    recruiter_sentiment: float | None = None    # 0-10 scale
    flow_continuity_score: float | None = None  # percentage


# ── Job description relevance ──────────────────────────────────────────────

class QAExchange(_Frozen):
    question: str
    relevance_score: float = 0      # 0-100
    answer: str | None = None
    alignment_score: float = 0      # 0-100
    key_skills: list[str] = Field(default_factory=list)


class JDAnalysis(_Frozen):
    candidate_reasoning: str = ""
    recruiter_reasoning: str = ""
    exchanges: list[QAExchange] = Field(default_factory=list)


# ── Sentiment ──────────────────────────────────────────────────────────────

class SentimentSide(_Frozen):
    overall_score: float = 0    # 0-10
    positive: float = 0         # fraction of positive tone, 0-1
    reasoning: str = ""


class SentimentAnalysis(_Frozen):
    recruiter: SentimentSide | None = None
    candidate: SentimentSide | None = None


# ── Flow ───────────────────────────────────────────────────────────────────

Severity = Literal["low", "medium", "high"]


class FlowIssue(_Frozen):
    issue: str = ""
    severity: Severity = "low"


class FlowAnalysis(_Frozen):
    continuity_score: float = 0
    insights: list[str] = Field(default_factory=list)
    flow_breaks: list[FlowIssue] = Field(default_factory=list)


# ── Transcript ─────────────────────────────────────────────────────────────

class TranscriptSegment(_Frozen):
    speaker: str = ""
    text: str


class Transcript(_Frozen):
    segments: list[TranscriptSegment] = Field(default_factory=list)

    @property
    def text(self) -> str:
        return " ".join(s.text for s in self.segments)


# ── Top level ──────────────────────────────────────────────────────────────

class ReportInput(_Frozen):
    """Everything the renderer needs for one interview report.

    Each sub-analysis is optional; an absent one omits its report section.
    """
    interview: InterviewMeta
    scores: ReportScores = Field(default_factory=ReportScores)
    job_description: str = ""
    jd_analysis: JDAnalysis | None = None
    sentiment_analysis: SentimentAnalysis | None = None
    flow_analysis: FlowAnalysis | None = None
    transcript: Transcript | None = None


# ── Candidate and recruiter reports ────────────────────────────────────────
# Scores in these reports are on a 0-10 scale.

class SkillsDemonstration(_Frozen):
    claimed_skills: list[str] = Field(default_factory=list)
    demonstrated_skills: list[str] = Field(default_factory=list)
    score: float = 0


class ConsistencyCheck(_Frozen):
    score: float = 0
    inconsistencies: list[str] = Field(default_factory=list)


class CommunicationRating(_Frozen):
    clarity: float = 0
    confidence: float = 0
    depth: float = 0


class CandidateReportData(_Frozen):
    """How the candidate performed, written for the candidate."""
    skills_demonstration: SkillsDemonstration = Field(default_factory=SkillsDemonstration)
    consistency_check: ConsistencyCheck = Field(default_factory=ConsistencyCheck)
    communication_rating: CommunicationRating = Field(default_factory=CommunicationRating)
    strengths: list[str] = Field(default_factory=list)
    areas_for_improvement: list[str] = Field(default_factory=list)
    overall_score: float = 0
    summary: str = ""


class QuestionQuality(_Frozen):
    resume_relevance: float = 0
    depth: float = 0
    engagement: float = 0


class InterviewCoverage(_Frozen):
    experience_covered: list[str] = Field(default_factory=list)
    skills_covered: list[str] = Field(default_factory=list)
    missed_opportunities: list[str] = Field(default_factory=list)


class InterviewerEffectiveness(_Frozen):
    score: float = 0
    strengths: list[str] = Field(default_factory=list)
    improvements: list[str] = Field(default_factory=list)


class RecruiterReportData(_Frozen):
    """How well the interview was run, written for the recruiter."""
    question_quality: QuestionQuality = Field(default_factory=QuestionQuality)
    interview_coverage: InterviewCoverage = Field(default_factory=InterviewCoverage)
    effectiveness: InterviewerEffectiveness = Field(default_factory=InterviewerEffectiveness)
    overall_score: float = 0
    summary: str = ""
