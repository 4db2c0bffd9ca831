from __future__ import annotations

from typing import Optional, Tuple

from ats_analyzer.core import ExtractedData, JobDescription, JobRequirementsMatch, Seniority
from ats_analyzer.models import LayoutSignals
from ats_analyzer.services.normalize import normalize
from ats_analyzer.services.parse import detect_layout_signals
from ats_analyzer.services.skills import skills_considered_equivalent

# job seniority labels compared ordinally; anything else is not compared
SENIORITY_LEVELS = {
    "junior": 1,
    "júnior": 1,
    "pleno": 2,
    "senior": 3,
    "sênior": 3,
}


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _to_score(x: float) -> int:
    return int(_clamp(x, 0, 100))


def compute_ats_score(raw_text: str, normalized_text: str, signals: Optional[LayoutSignals] = None) -> int:
    """
    Returns 0..100
    Starts at 100; every matching penalty below is subtracted (they stack).
    """
    signals = signals or detect_layout_signals(raw_text)
    normalized_text = normalized_text or ""

    score = 100

    # tables
    if signals.has_table_chars:
        score -= 20
    if signals.pipe_table_lines > 3:
        score -= 15

    # multi-column layouts
    if signals.has_wide_spacing:
        score -= 12

    # borders and block decorations
    if signals.has_decorations:
        score -= 15

    if not normalized_text.strip():
        score -= 30

    if len(normalized_text) < 200:
        score -= 20
    elif len(normalized_text) < 500:
        score -= 10

    if signals.mostly_empty:
        score -= 8

    alnum = sum(1 for c in normalized_text if c.isalnum())
    special = len(normalized_text) - alnum
    if alnum > 0 and special / alnum > 0.3:
        score -= 10

    return _to_score(score)


def _basic_data_score(data: ExtractedData) -> int:
    score = 0
    if data.name:
        score += 33
    if data.email:
        score += 33
    if data.phone:
        score += 34
    return score


def compute_overall_score(data: ExtractedData, ats_score: int) -> int:
    """
    Generic mode: 30% ATS, 40% skills, 15% contact data, 15% seniority.
    Rounded (half to even).
    """
    skills_score = min(100, len(data.skills) * 6)
    seniority_score = 100 if data.estimated_seniority != Seniority.UNIDENTIFIED else 50

    score = (
        ats_score * 0.3
        + skills_score * 0.4
        + _basic_data_score(data) * 0.15
        + seniority_score * 0.15
    )
    return _to_score(round(score))


def check_experience_match(data: ExtractedData, job: JobDescription) -> bool:
    if job.minimum_experience is None and not job.seniority:
        return True

    if job.seniority:
        required = SENIORITY_LEVELS.get(job.seniority.strip().lower())
        extracted = SENIORITY_LEVELS.get(data.estimated_seniority.value.lower())
        if required is not None and extracted is not None:
            return extracted >= required

    # unknown labels (and a bare minimum_experience) are not held against the candidate
    return True


def _count_met(job_skills, candidate_skills) -> int:
    return sum(
        1 for js in job_skills
        if any(skills_considered_equivalent(cs, js) for cs in candidate_skills)
    )


def compute_job_match(data: ExtractedData, job: JobDescription) -> Tuple[int, JobRequirementsMatch]:
    """
    Returns (0..100, requirement counts)
    60 points for required skills, 30 for desired, 10 for seniority.
    Truncated, not rounded.
    """
    candidate = {normalize(s) for s in data.skills}
    required = [normalize(s) for s in job.required_skills or []]
    desired = [normalize(s) for s in job.desired_skills or []]

    required_met = _count_met(required, candidate)
    desired_met = _count_met(desired, candidate)
    experience_match = check_experience_match(data, job)

    requirements = JobRequirementsMatch(
        required_skills_met=required_met,
        required_skills_total=len(required),
        desired_skills_met=desired_met,
        desired_skills_total=len(desired),
        experience_match=experience_match,
    )

    required_score = (required_met / len(required)) * 60 if required else 60
    desired_score = (desired_met / len(desired)) * 30 if desired else 30
    experience_score = 10 if experience_match else 0

    return _to_score(required_score + desired_score + experience_score), requirements


def compute_job_overall_score(ats_score: int, job_match_score: int) -> int:
    """Job mode: 30% ATS + 70% job match, truncated."""
    return _to_score(ats_score * 0.3 + job_match_score * 0.7)
