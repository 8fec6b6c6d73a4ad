from __future__ import annotations

import re
import unicodedata
from typing import Iterable

WORD_RE = re.compile(r"[^\W_]+", re.UNICODE)


def normalize_text(value: object) -> str:
    """Normalize arbitrary text so every story is segmented the same way."""
    if not isinstance(value, str):
        value = str(value)
    normalized = unicodedata.normalize("NFKC", value)
    normalized = normalized.lower()
    normalized = re.sub(r"\s+", " ", normalized)
    return normalized.strip()


def iter_words(value: str) -> Iterable[str]:
    """Yield lowercase alphanumeric runs; punctuation and whitespace are dropped."""
    normalized = normalize_text(value)
    for match in WORD_RE.finditer(normalized):
        yield match.group(0)
