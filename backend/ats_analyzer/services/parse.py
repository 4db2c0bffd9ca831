from __future__ import annotations

import re
from io import BytesIO
from pathlib import Path
from typing import Sequence, Tuple

import fitz  # pymupdf
from docx import Document

from ats_analyzer.errors import UnsupportedFormatError
from ats_analyzer.models import LayoutSignals

TABLE_CHARS = "│┌└├┤─┬┴┼"
DECORATIVE_CHARS = set("═║╔╗╚╝╠╣╦╩╬▀▄█▌▐░▒▓■□▪▫")

_WIDE_GAP_RE = re.compile(r"\s{5,}")


class DocumentParser:
    extensions: Tuple[str, ...] = ()

    def can_parse(self, file_name: str) -> bool:
        return Path(file_name or "").suffix.lower() in self.extensions

    def extract_text(self, data: bytes) -> str:
        raise NotImplementedError


class PdfParser(DocumentParser):
    extensions = (".pdf",)

    def extract_text(self, data: bytes) -> str:
        chunks = []
        with fitz.open(stream=data, filetype="pdf") as doc:
            for page in doc:
                chunks.append(page.get_text("text"))
        return "\n".join(chunks)


class DocxParser(DocumentParser):
    extensions = (".docx",)

    def extract_text(self, data: bytes) -> str:
        doc = Document(BytesIO(data))
        parts = [p.text for p in doc.paragraphs]
        # tables come out as pipe-separated rows
        for table in doc.tables:
            for row in table.rows:
                parts.append(" | ".join(cell.text.strip() for cell in row.cells))
        return "\n".join(parts)


PARSERS: Tuple[DocumentParser, ...] = (PdfParser(), DocxParser())


def get_parser(file_name: str, parsers: Sequence[DocumentParser] = PARSERS) -> DocumentParser:
    for parser in parsers:
        if parser.can_parse(file_name):
            return parser
    raise UnsupportedFormatError(file_name)


def extract_text(data: bytes, file_name: str, parsers: Sequence[DocumentParser] = PARSERS) -> str:
    text = get_parser(file_name, parsers).extract_text(data)
    # spacing is kept as-is; layout detection depends on it
    return text.replace("\x00", " ")


def detect_layout_signals(raw_text: str) -> LayoutSignals:
    raw_text = raw_text or ""
    lines = raw_text.split("\n")

    wide_gaps = [len(_WIDE_GAP_RE.findall(ln)) >= 2 for ln in lines]
    wide_spacing = sum(1 for ln, gap in zip(lines, wide_gaps) if gap or "\t\t" in ln)

    return LayoutSignals(
        total_lines=len(lines),
        empty_lines=sum(1 for ln in lines if not ln.strip()),
        has_table_chars=any(c in raw_text for c in TABLE_CHARS),
        pipe_table_lines=sum(1 for ln in lines if ln.count("|") >= 2),
        wide_spacing_lines=wide_spacing,
        wide_gap_lines=sum(wide_gaps),
        decorative_chars=sum(1 for c in raw_text if c in DECORATIVE_CHARS),
    )
