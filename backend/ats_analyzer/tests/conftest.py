from io import BytesIO

import fitz  # pymupdf
import httpx
import pytest
from docx import Document

from ats_analyzer.main import app

SAMPLE_RESUME = """Maria Silva Santos
maria.santos@example.com | (11) 98765-4321
Senior Software Engineer

Summary
Backend engineer with eight years of experience building distributed systems
for payments and logistics companies. Comfortable owning services end to end,
from design reviews to production support and on-call rotations.

Skills
python, django, fastapi, postgresql, redis, docker, kubernetes, aws, terraform,
react, typescript, graphql, kafka, pytest, git

Experience
Acme Payments - Tech Lead (2019 - 2024)
Designed event-driven services processing two million transactions per day.
Reduced infrastructure cost by thirty percent moving workloads to kubernetes.
Mentored five engineers and introduced automated testing with pytest.
"""


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


def make_pdf(text: str) -> bytes:
    doc = fitz.open()
    page = doc.new_page()
    page.insert_textbox(fitz.Rect(36, 36, 560, 800), text, fontsize=9)
    data = doc.tobytes()
    doc.close()
    return data


def make_docx(text: str, table_rows=None) -> bytes:
    doc = Document()
    for line in text.split("\n"):
        doc.add_paragraph(line)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buf = BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME
