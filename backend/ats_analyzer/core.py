import os
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ats_analyzer.services.normalize import normalize

ENV = os.getenv("ENV", "dev").lower()
IS_PROD = ENV in {"prod", "production"}

MAX_FILE_MB = int(os.getenv("MAX_FILE_MB", "5"))
MAX_FILE_BYTES = MAX_FILE_MB * 1024 * 1024

ALLOWED_EXT = {".pdf", ".docx"}

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
RATE_LIMIT = os.getenv("RATE_LIMIT", "5/day")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class Seniority(str, Enum):
    JUNIOR = "Junior"
    PLENO = "Pleno"
    SENIOR = "Senior"
    UNIDENTIFIED = "Unidentified"


class ExtractedData(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    estimated_seniority: Seniority = Seniority.UNIDENTIFIED
    skills: List[str] = Field(default_factory=list)


class JobDescription(BaseModel):
    title: str
    required_skills: List[str]
    desired_skills: List[str] = Field(default_factory=list)
    minimum_experience: Optional[int] = None
    seniority: Optional[str] = None
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def _title_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Job title is required")
        return v

    @field_validator("required_skills")
    @classmethod
    def _required_not_empty(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("At least one required skill is needed")
        return v

    @field_validator("required_skills", "desired_skills")
    @classmethod
    def _skills_not_blank(cls, v: List[str]) -> List[str]:
        # an empty normalized skill would match every candidate skill
        if any(not normalize(s) for s in v):
            raise ValueError("Skill names cannot be blank")
        return v


class JobRequirementsMatch(BaseModel):
    model_config = ConfigDict(frozen=True)

    required_skills_met: int = Field(default=0, ge=0)
    required_skills_total: int = Field(default=0, ge=0)
    desired_skills_met: int = Field(default=0, ge=0)
    desired_skills_total: int = Field(default=0, ge=0)
    experience_match: bool = False


class KeywordAnalysis(BaseModel):
    present: List[str] = Field(default_factory=list)
    missing: List[str] = Field(default_factory=list)
    recommended: List[str] = Field(default_factory=list)


class Suggestion(BaseModel):
    type: str
    title: str
    detail: str


class AnalysisResult(BaseModel):
    overall_score: int = Field(ge=0, le=100)
    ats_compatibility_score: int = Field(ge=0, le=100)
    extracted_data: ExtractedData
    strengths: List[str] = Field(default_factory=list)
    weaknesses: List[str] = Field(default_factory=list)
    suggestions: List[Suggestion] = Field(default_factory=list)
    keyword_analysis: KeywordAnalysis = Field(default_factory=KeywordAnalysis)
    formatting_feedback: str = ""


class JobMatchAnalysisResult(AnalysisResult):
    job_match_score: int = Field(ge=0, le=100)
    job_requirements_match: JobRequirementsMatch


class ErrorDetail(BaseModel):
    code: str
    message: str
    details: Optional[str] = None


class ErrorResponse(BaseModel):
    success: bool = False
    error: ErrorDetail
