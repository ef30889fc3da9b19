from __future__ import annotations

import unicodedata
from typing import Iterable, Sequence

OPENING_PUNCTUATION = {"(", "[", "{", "``", "“", "‘", "¿", "¡"}


def normalize_word(value: object, case_sensitive: bool = False) -> str:
    """Normalize a word so corpus tables and documents share identical keys."""
    if not isinstance(value, str):
        value = str(value)
    normalized = unicodedata.normalize("NFKC", value).strip()
    return normalized if case_sensitive else normalized.lower()


def count_letters(token: str) -> int:
    """Count alphabetic characters, not bytes."""
    return sum(1 for ch in token if ch.isalpha())


def display_width(token: str) -> int:
    """Number of terminal columns a token occupies; wide CJK characters count twice."""
    width = 0
    for ch in token:
        if unicodedata.combining(ch):
            continue
        width += 2 if unicodedata.east_asian_width(ch) in {"W", "F"} else 1
    return width


def clozify(token: str, blank_char: str = "_") -> str:
    """Replace a word by a blank as wide as the word itself."""
    return blank_char * display_width(token)


def paste_text(tokens: Sequence[str], punctuation: Iterable[bool]) -> str:
    """
    Join tokens back into running text.

    ``punctuation`` flags the rows that attach to the previous token. Opening
    brackets and quotes attach to the following token instead.
    """
    parts: list[str] = []
    glue_next = True
    for token, is_punct in zip(tokens, punctuation):
        opening = token in OPENING_PUNCTUATION
        if parts and not glue_next and not (is_punct and not opening):
            parts.append(" ")
        parts.append(token)
        glue_next = opening
    return "".join(parts)
