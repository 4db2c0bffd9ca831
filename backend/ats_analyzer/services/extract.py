from __future__ import annotations

import re
from typing import List, Optional

from ats_analyzer.core import ExtractedData, Seniority
from ats_analyzer.services.skills import DEFAULT_CATALOG, SkillsCatalog

EMAIL_RE = re.compile(r"[a-z0-9._%+-]+@[a-z0-9.-]+\.[a-z]{2,}", re.IGNORECASE)
PHONE_RE = re.compile(r"\(?\d{2}\)?\s?\d{4,5}-?\d{4}")

NAME_SCAN_LINES = 10
NAME_MIN_LEN, NAME_MAX_LEN = 5, 80
NAME_MAX_DIGITS = 4
NAME_MIN_WORDS, NAME_MAX_WORDS = 2, 5

# matched as substrings of the normalized (accent-free) text
JUNIOR_KEYWORDS = ("junior", "estagiario", "trainee")
PLENO_KEYWORDS = ("pleno", "mid", "intermediario")
SENIOR_KEYWORDS = ("senior", "especialista", "expert", "arquiteto", "lead")

SENIOR_MIN_SKILLS = 15
PLENO_MIN_SKILLS = 8
JUNIOR_MIN_SKILLS = 3


def extract_email(raw_text: str) -> Optional[str]:
    m = EMAIL_RE.search(raw_text or "")
    return m.group(0) if m else None


def extract_phone(raw_text: str) -> Optional[str]:
    m = PHONE_RE.search(raw_text or "")
    return m.group(0) if m else None


def _looks_like_name_word(word: str) -> bool:
    return word[0].isupper() and all(c.isalpha() or c in ".'-" for c in word)


def extract_name(raw_text: str) -> Optional[str]:
    """Best-effort guess: first short, capitalized, digit-free line near the top."""
    lines = [ln for ln in (raw_text or "").split("\n") if ln]

    for line in lines[:NAME_SCAN_LINES]:
        candidate = line.strip()
        if not NAME_MIN_LEN <= len(candidate) <= NAME_MAX_LEN:
            continue
        if "@" in candidate or "http" in candidate or "www." in candidate:
            continue
        if sum(c.isdigit() for c in candidate) > NAME_MAX_DIGITS:
            continue

        words = candidate.split()
        if NAME_MIN_WORDS <= len(words) <= NAME_MAX_WORDS and all(_looks_like_name_word(w) for w in words):
            return candidate

    return None


def is_skill_present(normalized_text: str, skill: str) -> bool:
    s = skill.lower().strip()

    # compound or dotted tokens ("sql server", ".net core") match as substrings
    if " " in s or "." in s:
        return s in normalized_text

    # single words need a boundary so "java" does not hit "javascript"
    t = f" {normalized_text} "
    return (
        f" {s} " in t
        or f" {s}," in t
        or f" {s}." in t
        or f" {s};" in t
        or f"({s}" in t
        or f"({s})" in t
        or f",{s}" in t
        or f"-{s} " in t
        or f" {s}-" in t
    )


def estimate_seniority(normalized_text: str, skills_count: int) -> Seniority:
    t = normalized_text or ""
    junior_hits = sum(1 for k in JUNIOR_KEYWORDS if k in t)
    pleno_hits = sum(1 for k in PLENO_KEYWORDS if k in t)
    senior_hits = sum(1 for k in SENIOR_KEYWORDS if k in t)

    if senior_hits > 0 or skills_count >= SENIOR_MIN_SKILLS:
        return Seniority.SENIOR
    if pleno_hits > 0 or skills_count >= PLENO_MIN_SKILLS:
        return Seniority.PLENO
    if junior_hits > 0 or skills_count >= JUNIOR_MIN_SKILLS:
        return Seniority.JUNIOR
    return Seniority.UNIDENTIFIED


class DataExtractor:
    def __init__(self, catalog: SkillsCatalog = DEFAULT_CATALOG):
        self.catalog = catalog

    def extract_skills(self, normalized_text: str) -> List[str]:
        return [s for s in self.catalog.all_skills() if is_skill_present(normalized_text or "", s)]

    def extract(self, raw_text: str, normalized_text: str) -> ExtractedData:
        skills = self.extract_skills(normalized_text)
        return ExtractedData(
            name=extract_name(raw_text),
            email=extract_email(raw_text),
            phone=extract_phone(raw_text),
            estimated_seniority=estimate_seniority(normalized_text, len(skills)),
            skills=skills,
        )
