import json
import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, File, Form, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from ats_analyzer.core import (
    ALLOWED_EXT,
    CORS_ORIGINS,
    ENV,
    IS_PROD,
    LOG_LEVEL,
    MAX_FILE_BYTES,
    MAX_FILE_MB,
    RATE_LIMIT,
    AnalysisResult,
    ErrorDetail,
    ErrorResponse,
    JobDescription,
    JobMatchAnalysisResult,
)
from ats_analyzer.errors import ProcessingError, UnsupportedFormatError
from ats_analyzer.services.analysis import analyze_generic, analyze_with_job

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[RATE_LIMIT] if IS_PROD else [],
)

rate_limit = limiter.limit(RATE_LIMIT) if IS_PROD else (lambda fn: fn)

app = FastAPI(title="ATS Resume Analyzer", version="0.1.0")
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def error_response(status_code: int, code: str, message: str, details: Optional[str] = None) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(RateLimitExceeded)
def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return error_response(429, "RATE_LIMITED", f"Rate limit exceeded: {RATE_LIMIT} per IP.")


@app.exception_handler(UnsupportedFormatError)
def unsupported_format_handler(request: Request, exc: UnsupportedFormatError):
    logger.warning("Unsupported file format: %s", exc.file_name)
    return error_response(400, "UNSUPPORTED_FORMAT", str(exc))


@app.exception_handler(ProcessingError)
def processing_error_handler(request: Request, exc: ProcessingError):
    logger.error("Failed to process résumé", exc_info=exc.cause or exc)
    return error_response(
        500,
        "PROCESSING_ERROR",
        "Failed to process the résumé. Please try again.",
        details=str(exc.cause or exc),
    )


def validate_upload(file: Optional[UploadFile], contents: bytes) -> Optional[str]:
    if file is None or not file.filename or not contents:
        return "No file was uploaded."
    if len(contents) > MAX_FILE_BYTES:
        return f"File too large (max {MAX_FILE_MB}MB)."
    if Path(file.filename).suffix.lower() not in ALLOWED_EXT:
        return "Only PDF or DOCX supported."
    return None


def parse_job_description(raw: str) -> JobDescription:
    return JobDescription.model_validate(json.loads(raw))


async def _read_upload(file: Optional[UploadFile]) -> bytes:
    if file is None:
        return b""
    contents = await file.read()
    await file.close()
    return contents


@app.get("/", tags=["default"])
def root():
    return {"status": "ok", "service": "ATS Resume Analyzer", "docs": "/docs"}


@app.get("/health", tags=["default"])
def health():
    return {"ok": True, "env": ENV, "rate_limit_enabled": IS_PROD}


@app.post("/api/ats/analyze", response_model=AnalysisResult, tags=["ats"])
@rate_limit
async def analyze(request: Request, file: Optional[UploadFile] = File(None)):
    contents = await _read_upload(file)
    problem = validate_upload(file, contents)
    if problem:
        return error_response(400, "INVALID_FILE", problem)

    logger.info("Analyzing résumé: %s", file.filename)
    result = await run_in_threadpool(analyze_generic, contents, file.filename)
    logger.info("Analysis done: overall=%d ats=%d", result.overall_score, result.ats_compatibility_score)
    return result


@app.post("/api/ats/analyze-job", response_model=JobMatchAnalysisResult, tags=["ats"])
@rate_limit
async def analyze_job(
    request: Request,
    file: Optional[UploadFile] = File(None),
    job_description: Optional[str] = Form(None),
):
    contents = await _read_upload(file)
    problem = validate_upload(file, contents)
    if problem:
        return error_response(400, "INVALID_FILE", problem)

    if not job_description:
        return error_response(400, "INVALID_JOB_DESCRIPTION", "Job description was not provided.")
    try:
        job = parse_job_description(job_description)
    except (json.JSONDecodeError, ValidationError) as e:
        return error_response(400, "INVALID_JOB_DESCRIPTION", "Invalid job description.", details=str(e))

    logger.info("Analyzing résumé %s for job: %s", file.filename, job.title)
    result = await run_in_threadpool(analyze_with_job, contents, file.filename, job)
    logger.info(
        "Analysis done: overall=%d job_match=%d",
        result.overall_score,
        result.job_match_score,
    )
    return result
