from __future__ import annotations

from typing import Optional


class AnalysisError(Exception):
    """Base class for failures surfaced by the analysis pipeline."""


class UnsupportedFormatError(AnalysisError, ValueError):
    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"Unsupported file format: {file_name}")


class ProcessingError(AnalysisError):
    """Unexpected failure while parsing, extracting or scoring a résumé.

    The original exception is kept as ``cause`` (and chained as ``__cause__``).
    """

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message)
