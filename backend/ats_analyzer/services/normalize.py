from __future__ import annotations

import re
import unicodedata
from typing import Optional

_NOISE_RE = re.compile(r"[^a-z0-9\s@.\-+#()]")
_SPACE_RE = re.compile(r"\s+")


def remove_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def normalize(text: Optional[str]) -> str:
    """
    Matching form of a text: lowercase, accent-free, only [a-z0-9 @.-+#()]
    with single spaces. normalize(normalize(x)) == normalize(x).
    """
    if not text or not text.strip():
        return ""

    t = text.lower()
    t = remove_accents(t)
    t = _NOISE_RE.sub(" ", t)
    t = _SPACE_RE.sub(" ", t)
    return t.strip()
