"""Helpers for normalizing words and hints read from requirements files."""

from __future__ import annotations

import re
import unicodedata

NON_LETTER_RE = re.compile(r"[^A-Z]")


def clean_word(text: str) -> str:
    """Return an uppercase ASCII-letters-only form of ``text``.

    Accents are folded (``é`` -> ``E``); digits, spaces and punctuation are
    dropped.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text.strip())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return NON_LETTER_RE.sub("", stripped.upper())


def clean_hint(text: object) -> str:
    return " ".join(str(text).split()) if text is not None else ""


__all__ = ["clean_word", "clean_hint"]
