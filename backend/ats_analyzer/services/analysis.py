from __future__ import annotations

import logging
from typing import Sequence

from ats_analyzer.core import AnalysisResult, JobDescription, JobMatchAnalysisResult
from ats_analyzer.errors import ProcessingError, UnsupportedFormatError
from ats_analyzer.services.extract import DataExtractor
from ats_analyzer.services.feedback import (
    analyze_job_keywords,
    build_formatting_feedback,
    build_job_feedback,
    build_strengths,
    build_suggestions,
    build_weaknesses,
    generic_keyword_analysis,
)
from ats_analyzer.services.normalize import normalize
from ats_analyzer.services.parse import PARSERS, DocumentParser, detect_layout_signals, extract_text
from ats_analyzer.services.scoring import (
    compute_ats_score,
    compute_job_match,
    compute_job_overall_score,
    compute_overall_score,
)
from ats_analyzer.services.skills import DEFAULT_CATALOG, SkillsCatalog

logger = logging.getLogger(__name__)


class ResumeAnalyzer:
    """Runs parse -> normalize -> extract -> score -> feedback for one résumé."""

    def __init__(self, catalog: SkillsCatalog = DEFAULT_CATALOG, parsers: Sequence[DocumentParser] = PARSERS):
        self.catalog = catalog
        self.parsers = parsers
        self.extractor = DataExtractor(catalog)

    def analyze_text(self, raw_text: str) -> AnalysisResult:
        raw_text = raw_text or ""
        normalized = normalize(raw_text)
        data = self.extractor.extract(raw_text, normalized)

        signals = detect_layout_signals(raw_text)
        ats_score = compute_ats_score(raw_text, normalized, signals)

        return AnalysisResult(
            overall_score=compute_overall_score(data, ats_score),
            ats_compatibility_score=ats_score,
            extracted_data=data,
            strengths=build_strengths(data, ats_score),
            weaknesses=build_weaknesses(data, ats_score),
            suggestions=build_suggestions(data, ats_score),
            keyword_analysis=generic_keyword_analysis(data.skills, self.catalog),
            formatting_feedback=build_formatting_feedback(signals, ats_score),
        )

    def analyze_text_with_job(self, raw_text: str, job: JobDescription) -> JobMatchAnalysisResult:
        generic = self.analyze_text(raw_text)
        data = generic.extracted_data

        job_score, requirements = compute_job_match(data, job)
        keywords = analyze_job_keywords(data.skills, job, self.catalog)

        result = JobMatchAnalysisResult(
            **generic.model_dump(exclude={"extracted_data", "keyword_analysis"}),
            extracted_data=data,
            keyword_analysis=keywords,
            job_match_score=job_score,
            job_requirements_match=requirements,
        )
        result.overall_score = compute_job_overall_score(result.ats_compatibility_score, job_score)

        # generic feedback is replaced, never merged
        strengths, weaknesses, suggestions = build_job_feedback(requirements, keywords, job)
        result.strengths = strengths
        result.weaknesses = weaknesses
        result.suggestions = suggestions
        return result

    def _parse(self, data: bytes, file_name: str) -> str:
        text = extract_text(data, file_name, self.parsers)
        logger.debug("Parsed %s: %d bytes -> %d chars", file_name, len(data), len(text))
        return text

    def analyze_generic(self, data: bytes, file_name: str) -> AnalysisResult:
        try:
            return self.analyze_text(self._parse(data, file_name))
        except UnsupportedFormatError:
            raise
        except Exception as exc:
            raise ProcessingError(f"Failed to analyze {file_name}: {exc}", cause=exc) from exc

    def analyze_with_job(self, data: bytes, file_name: str, job: JobDescription) -> JobMatchAnalysisResult:
        try:
            return self.analyze_text_with_job(self._parse(data, file_name), job)
        except UnsupportedFormatError:
            raise
        except Exception as exc:
            raise ProcessingError(f"Failed to analyze {file_name} for '{job.title}': {exc}", cause=exc) from exc


_default_analyzer = ResumeAnalyzer()


def analyze_generic(data: bytes, file_name: str) -> AnalysisResult:
    return _default_analyzer.analyze_generic(data, file_name)


def analyze_with_job(data: bytes, file_name: str, job: JobDescription) -> JobMatchAnalysisResult:
    return _default_analyzer.analyze_with_job(data, file_name, job)
