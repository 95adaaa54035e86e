"""Shared text utilities used across the sales assistant engine."""

import re
import unicodedata
from functools import lru_cache
from typing import Iterable

_NON_ALNUM = re.compile(r"[^a-z0-9 ]")
_WHITESPACE = re.compile(r"\s+")
_TOKEN_SPLIT = re.compile(r"[^0-9a-záéíóúñü]+")

STEM_MARKER = "*"


def normalize_text(text: str | None) -> str:
    """Fold text to lowercase ASCII words separated by single spaces.

    Examples:
        >>> normalize_text("¿Añadís el Filtro?")
        'anadis el filtro'
        >>> normalize_text("  Calle   Orense-18 ")
        'calle orense 18'
    """
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    lowered = stripped.lower()
    spaced = _NON_ALNUM.sub(" ", _WHITESPACE.sub(" ", lowered))
    return _WHITESPACE.sub(" ", spaced).strip()


@lru_cache(maxsize=2048)
def _term_pattern(term: str) -> re.Pattern[str] | None:
    stem = term.endswith(STEM_MARKER)
    normalized = normalize_text(term.rstrip(STEM_MARKER))
    if not normalized:
        return None
    tail = "" if stem else r"(?![a-z0-9])"
    return re.compile(r"(?<![a-z0-9])" + re.escape(normalized) + tail)


def contains_any(normalized_text: str, terms: Iterable[str]) -> bool:
    """Check whether any term occurs in already-normalized text.

    Terms are normalized the same way as the text and must match whole
    words. A trailing ``*`` turns a term into a word prefix, so
    ``"recomiend*"`` matches "recomiendas" and "recomiendo".
    """
    if not normalized_text:
        return False
    for term in terms:
        pattern = _term_pattern(term)
        if pattern is not None and pattern.search(normalized_text):
            return True
    return False


def tokenize(text: str | None, min_length: int = 3) -> set[str]:
    """Split text into a set of lowercase alphanumeric tokens.

    Tokens shorter than ``min_length`` are dropped; Spanish accented
    letters are kept as part of a token.
    """
    if not text:
        return set()
    return {t for t in _TOKEN_SPLIT.split(text.lower()) if len(t) >= min_length}


def extract_field(text: str | None, *labels: str) -> str:
    """Extract a labelled segment such as ``Telefono: +34 ...`` from a notes blob.

    The first label found wins; the value runs until the next ". " or the
    end of the text.
    """
    if not text or not text.strip():
        return ""
    for label in labels:
        start = text.find(label)
        if start < 0:
            continue
        rest = text[start + len(label):].strip()
        end = rest.find(". ")
        return rest if end < 0 else rest[:end].strip()
    return ""
