"""Rule-based recruiter recommendations derived from headline scores.

The list order is the priority order: the hire/no-hire verdict always comes
first and the documentation reminder always comes last. Rules never retract
an earlier entry.
"""

from __future__ import annotations

from interview_report.models import ReportInput

TECHNICAL_KEYWORDS = ("developer", "engineer", "java", "python", "react", "technical")

# Transcript words that indicate compensation came up.
_COMPENSATION_TERMS = ("salary", "expectation")

STRONG_RECOMMENDATION = (
    "Strong recommendation: Candidate demonstrates excellent alignment with role "
    "requirements and shows high engagement. Advance to next interview stage."
)
QUALIFIED_CANDIDATE = (
    "Qualified candidate: Good fit for the role with solid technical foundation. "
    "Consider conducting focused technical assessment to validate specific skills."
)
CONDITIONAL_CONSIDERATION = (
    "Conditional consideration: Candidate shows potential but requires skill "
    "development. Evaluate if mentoring/training investment aligns with team needs."
)
NOT_RECOMMENDED = (
    "Not recommended: Significant gaps in required qualifications and low "
    "engagement levels. Consider alternative candidates."
)
TECHNICAL_VALIDATION = (
    "Technical validation required: Limited technical detail provided during "
    "discussion. Design comprehensive technical interview to assess core competencies."
)
COMMUNICATION_STRENGTHS = (
    "Communication strengths: Candidate demonstrates clear articulation and "
    "professional demeanor. Well-suited for collaborative team environment."
)
COMMUNICATION_CONCERNS = (
    "Communication concerns: Low engagement may indicate communication challenges "
    "or lack of genuine interest. Explore motivation and cultural fit more thoroughly."
)
PROCESS_ENHANCEMENT = (
    "Interview process enhancement: Multiple flow disruptions detected. Consider "
    "structured interview format with predetermined question sequence for better "
    "candidate evaluation."
)
PROCESS_OPTIMIZATION = (
    "Interview optimization: Minor flow inconsistencies noted. Review question "
    "transitions to maintain conversation momentum and candidate comfort."
)
NEXT_STEPS = (
    "Immediate next steps: Schedule follow-up interview with technical team lead. "
    "Prepare specific scenario-based questions relevant to day-to-day responsibilities."
)
REFERENCE_CHECKS = (
    "Reference verification: Conduct thorough reference checks focusing on work "
    "quality, team collaboration, and technical problem-solving abilities."
)
ADDITIONAL_EVALUATION = (
    "Additional evaluation needed: Consider panel interview or extended technical "
    "discussion to make informed hiring decision."
)
COMPENSATION_DISCUSSION = (
    "Compensation discussion: Salary expectations were discussed during interview. "
    "Ensure alignment with budget parameters before proceeding to offer stage."
)
DOCUMENTATION_REMINDER = (
    "Documentation requirement: Compile detailed interview notes with specific "
    "examples of candidate responses to support final hiring decision and provide "
    "feedback to unsuccessful candidates."
)


def is_technical_role(job_description: str) -> bool:
    """True if the job description mentions any technical keyword."""
    text = job_description.lower()
    return any(kw in text for kw in TECHNICAL_KEYWORDS)


def technical_evaluation(skills: list[str]) -> str:
    return (
        f"Technical evaluation: Candidate claims experience in {', '.join(skills[:3])}. "
        "Conduct hands-on coding assessment to verify practical skills."
    )


def select_recommendations(data: ReportInput) -> list[str]:
    """Return recommendations for a report, most important first."""
    s = data.scores
    jd = s.jd_match_score or 0
    engagement = s.candidate_engagement or 0
    flow = s.flow_continuity_score or 0
    recruiter = s.recruiter_sentiment or 0

    recs: list[str] = []

    # Hiring verdict
    if jd >= 75 and engagement >= 70:
        recs.append(STRONG_RECOMMENDATION)
    elif jd >= 60 and engagement >= 60:
        recs.append(QUALIFIED_CANDIDATE)
    elif jd >= 45 or engagement >= 50:
        recs.append(CONDITIONAL_CONSIDERATION)
    else:
        recs.append(NOT_RECOMMENDED)

    # Technical assessment
    if is_technical_role(data.job_description) and jd >= 50:
        skills = _claimed_skills(data)
        recs.append(technical_evaluation(skills) if skills else TECHNICAL_VALIDATION)

    # Communication
    if recruiter >= 7 and engagement >= 65:
        recs.append(COMMUNICATION_STRENGTHS)
    elif engagement < 50:
        recs.append(COMMUNICATION_CONCERNS)

    # Interview process
    if flow < 70:
        breaks = len(data.flow_analysis.flow_breaks) if data.flow_analysis is not None else 0
        recs.append(PROCESS_ENHANCEMENT if breaks > 2 else PROCESS_OPTIMIZATION)

    # Next steps
    if jd >= 60 and engagement >= 60:
        recs.append(NEXT_STEPS)
        recs.append(REFERENCE_CHECKS)
    elif jd >= 40:
        recs.append(ADDITIONAL_EVALUATION)

    if _mentions_compensation(data):
        recs.append(COMPENSATION_DISCUSSION)

    recs.append(DOCUMENTATION_REMINDER)
    return recs


def _claimed_skills(data: ReportInput) -> list[str]:
    # Skills are read from the first exchange only.
    if data.jd_analysis is None or not data.jd_analysis.exchanges:
        return []
    return list(data.jd_analysis.exchanges[0].key_skills)


def _mentions_compensation(data: ReportInput) -> bool:
    if data.transcript is None:
        return False
    text = data.transcript.text.lower()
    return any(term in text for term in _COMPENSATION_TERMS)
