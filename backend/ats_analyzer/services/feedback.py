from __future__ import annotations

from typing import List, Sequence, Tuple

from ats_analyzer.core import (
    ExtractedData,
    JobDescription,
    JobRequirementsMatch,
    KeywordAnalysis,
    Seniority,
    Suggestion,
)
from ats_analyzer.models import LayoutSignals
from ats_analyzer.services.normalize import normalize
from ats_analyzer.services.skills import SkillsCatalog, skills_considered_equivalent

MAX_JOB_RECOMMENDED = 3
MAX_MISSING_IN_SUGGESTION = 3


def generic_keyword_analysis(skills: Sequence[str], catalog: SkillsCatalog) -> KeywordAnalysis:
    return KeywordAnalysis(
        present=list(skills),
        missing=[],
        recommended=catalog.recommend(skills),
    )


def analyze_job_keywords(skills: Sequence[str], job: JobDescription, catalog: SkillsCatalog) -> KeywordAnalysis:
    job_skills = list(job.required_skills or []) + list(job.desired_skills or [])
    job_normalized = [normalize(s) for s in job_skills]
    candidate_normalized = [normalize(s) for s in skills]

    present = [
        skill for skill, ns in zip(skills, candidate_normalized)
        if any(skills_considered_equivalent(ns, js) for js in job_normalized)
    ]

    missing: List[str] = []
    for skill, js in zip(job_skills, job_normalized):
        if skill in missing:
            continue
        if not any(skills_considered_equivalent(cs, js) for cs in candidate_normalized):
            missing.append(skill)

    missing_normalized = {normalize(m) for m in missing}
    recommended = [
        r for r in catalog.recommend(skills) if normalize(r) not in missing_normalized
    ][:MAX_JOB_RECOMMENDED]

    return KeywordAnalysis(present=present, missing=missing, recommended=recommended)


def build_strengths(data: ExtractedData, ats_score: int) -> List[str]:
    strengths = []
    if len(data.skills) >= 10:
        strengths.append("Wide range of technical skills identified")
    if data.estimated_seniority != Seniority.UNIDENTIFIED:
        strengths.append(f"Seniority clearly identified as {data.estimated_seniority.value}")
    if data.email and data.phone:
        strengths.append("Complete contact information")
    if ats_score >= 80:
        strengths.append("Well-structured, ATS-friendly résumé")
    return strengths


def build_weaknesses(data: ExtractedData, ats_score: int) -> List[str]:
    weaknesses = []
    if len(data.skills) < 5:
        weaknesses.append("Few technical skills identified")
    if not data.email:
        weaknesses.append("E-mail address not found")
    if data.estimated_seniority == Seniority.UNIDENTIFIED:
        weaknesses.append("Seniority level is unclear")
    if ats_score < 70:
        weaknesses.append("Formatting may hinder parsing by ATS software")
    return weaknesses


def build_suggestions(data: ExtractedData, ats_score: int) -> List[Suggestion]:
    suggestions = []

    if len(data.skills) < 8:
        suggestions.append(Suggestion(
            type="skills",
            title="Add more technical skills",
            detail="List every technology, framework and tool you work with to match more job postings.",
        ))

    if not data.email:
        suggestions.append(Suggestion(
            type="contact",
            title="Add a contact e-mail",
            detail="Put a professional e-mail address at the top of the résumé.",
        ))

    if ats_score < 80:
        suggestions.append(Suggestion(
            type="formatting",
            title="Improve ATS formatting",
            detail="Avoid tables, multiple columns and complex layouts. Use a simple, linear structure.",
        ))

    suggestions.append(Suggestion(
        type="content",
        title="Add metrics and results",
        detail="Quantify project impact (e.g. 'Cut processing time by 40%', 'Led a team of 5 developers').",
    ))

    return suggestions


def build_job_feedback(
    match: JobRequirementsMatch,
    keywords: KeywordAnalysis,
    job: JobDescription,
) -> Tuple[List[str], List[str], List[Suggestion]]:
    strengths: List[str] = []
    weaknesses: List[str] = []
    suggestions: List[Suggestion] = []

    if match.required_skills_met == match.required_skills_total:
        strengths.append("Has every required skill for the role")
    elif match.required_skills_met >= match.required_skills_total * 0.7:
        strengths.append("Has most of the required skills for the role")

    if match.experience_match:
        strengths.append("Seniority is compatible with the role")

    if match.desired_skills_met > 0:
        strengths.append(f"Has {match.desired_skills_met} of the {match.desired_skills_total} desired skills")

    if match.required_skills_met < match.required_skills_total:
        missing_count = match.required_skills_total - match.required_skills_met
        weaknesses.append(f"Missing {missing_count} required skill(s) for the role")

    if not match.experience_match:
        weaknesses.append("Seniority may not meet the role's requirement")

    if keywords.missing:
        top_missing = ", ".join(keywords.missing[:MAX_MISSING_IN_SUGGESTION])
        suggestions.append(Suggestion(
            type="keywords",
            title="Highlight experience with the role's technologies",
            detail=f"If you have used them, add specific projects mentioning: {top_missing}",
        ))

    suggestions.append(Suggestion(
        type="job",
        title="Tailor your résumé to the role",
        detail=f"Emphasize experience related to '{job.title}' and list the requested technologies at the top of your skills.",
    ))

    return strengths, weaknesses, suggestions


def formatting_issues(signals: LayoutSignals) -> List[str]:
    issues = []
    if signals.has_tables:
        issues.append("tables detected")
    if signals.has_column_gaps:
        issues.append("multiple columns with wide spacing")
    if signals.has_decorations:
        issues.append("special/decorative characters")
    return issues


def build_formatting_feedback(signals: LayoutSignals, ats_score: int) -> str:
    issues = formatting_issues(signals)
    listed = ", ".join(issues)

    if ats_score >= 90:
        return (
            "Excellent! The résumé is formatted ideally for ATS. "
            "Clear structure with nothing that gets in the way of automated parsing."
        )

    if ats_score >= 75:
        if issues:
            return (
                f"Good ATS formatting, but the following were detected: {listed}. "
                "Consider simplifying them for better compatibility."
            )
        return "Good ATS formatting. Adequate structure with a little room for improvement."

    if ats_score >= 60:
        feedback = "Moderate formatting problems for ATS. "
        if issues:
            feedback += f"Detected: {listed}. "
        feedback += "Use a simple linear structure, avoid tables and multiple columns, remove graphic elements."
        return feedback

    feedback = "WARNING: formatting is unsuitable for ATS software. "
    if issues:
        feedback += f"Critical problems: {listed}. "
    feedback += (
        "Reformat using linear text, simple sections with clear headings, "
        "no tables, no columns and no graphic elements. "
        "An ATS may not be able to read this résumé correctly."
    )
    return feedback
