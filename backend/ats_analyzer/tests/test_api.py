import json

import pytest

from conftest import make_docx, make_pdf

from ats_analyzer.services.analysis import ResumeAnalyzer
from ats_analyzer.services.parse import DocxParser

JOB = {
    "title": "Backend Developer",
    "required_skills": ["Python", "SQL"],
    "desired_skills": ["Docker"],
    "seniority": "Senior",
}


@pytest.mark.anyio
async def test_analyze_docx(client, sample_resume):
    files = {"file": ("resume.docx", make_docx(sample_resume), "application/octet-stream")}

    r = await client.post("/api/ats/analyze", files=files)
    assert r.status_code == 200, r.text
    payload = r.json()

    assert 0 <= payload["overall_score"] <= 100
    assert 0 <= payload["ats_compatibility_score"] <= 100
    assert payload["extracted_data"]["email"] == "maria.santos@example.com"
    assert payload["extracted_data"]["estimated_seniority"] == "Senior"
    assert "python" in payload["keyword_analysis"]["present"]
    assert payload["suggestions"][-1]["title"] == "Add metrics and results"
    assert "job_match_score" not in payload


@pytest.mark.anyio
async def test_analyze_job_pdf(client, sample_resume):
    files = {"file": ("resume.pdf", make_pdf(sample_resume), "application/pdf")}
    data = {"job_description": json.dumps(JOB)}

    r = await client.post("/api/ats/analyze-job", files=files, data=data)
    assert r.status_code == 200, r.text
    payload = r.json()

    assert payload["job_match_score"] == 100
    assert payload["job_requirements_match"] == {
        "required_skills_met": 2,
        "required_skills_total": 2,
        "desired_skills_met": 1,
        "desired_skills_total": 1,
        "experience_match": True,
    }
    assert payload["keyword_analysis"]["missing"] == []
    assert "Has every required skill for the role" in payload["strengths"]


@pytest.mark.anyio
async def test_rejects_unsupported_extension(client):
    files = {"file": ("resume.txt", b"plain text resume", "text/plain")}
    r = await client.post("/api/ats/analyze", files=files)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "INVALID_FILE"


@pytest.mark.anyio
async def test_rejects_missing_file(client):
    r = await client.post("/api/ats/analyze", data={"x": "1"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_FILE"


@pytest.mark.anyio
async def test_rejects_oversized_file(client, monkeypatch):
    monkeypatch.setattr("ats_analyzer.main.MAX_FILE_BYTES", 10)
    files = {"file": ("resume.pdf", b"%PDF-1.4 more than ten bytes", "application/pdf")}
    r = await client.post("/api/ats/analyze", files=files)
    assert r.status_code == 400
    assert "too large" in r.json()["error"]["message"]


@pytest.mark.anyio
@pytest.mark.parametrize(
    "job_description",
    [
        None,
        "not json",
        json.dumps({"title": "  ", "required_skills": ["Python"]}),
        json.dumps({"title": "Dev", "required_skills": []}),
        json.dumps(["Python"]),
        json.dumps({"title": "Dev", "required_skills": ["Python", "   "]}),
        json.dumps({"title": "Dev", "required_skills": ["Python", "!!!"]}),
        json.dumps({"title": "Dev", "required_skills": ["Python"], "desired_skills": ["?"]}),
    ],
)
async def test_rejects_invalid_job_description(client, sample_resume, job_description):
    files = {"file": ("resume.docx", make_docx(sample_resume), "application/octet-stream")}
    data = {"job_description": job_description} if job_description is not None else {}

    r = await client.post("/api/ats/analyze-job", files=files, data=data)
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_JOB_DESCRIPTION"


@pytest.mark.anyio
async def test_corrupt_document_is_processing_error(client):
    files = {"file": ("resume.pdf", b"this is not a pdf at all", "application/pdf")}
    r = await client.post("/api/ats/analyze", files=files)
    assert r.status_code == 500
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "PROCESSING_ERROR"
    assert body["error"]["details"]


@pytest.mark.anyio
async def test_format_without_parser_is_unsupported(client, monkeypatch, sample_resume):
    docx_only = ResumeAnalyzer(parsers=[DocxParser()])
    monkeypatch.setattr("ats_analyzer.main.analyze_generic", docx_only.analyze_generic)

    files = {"file": ("resume.pdf", make_pdf(sample_resume), "application/pdf")}
    r = await client.post("/api/ats/analyze", files=files)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "UNSUPPORTED_FORMAT"
