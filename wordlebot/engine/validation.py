"""
Lightweight guess-shape validation.

This module answers the question: "Is this string a well-formed guess?"
A guess is well-formed iff:
  - it is a string
  - it is alphabetic a–z only
  - it has exact length N

Whether a well-formed guess is also worth submitting (not tried, consistent
with known present/absent letters) is ConstraintState.is_candidate_valid().
"""

import re
from typing import Optional

_ALPHA_RUN = re.compile(r"[A-Za-z]+")


def validate_guess(word: str, N: int) -> bool:
    """
    Return True if `word` is an N-letter a–z token (case-insensitive).
    """
    if not isinstance(word, str):
        return False

    w = word.strip().lower()
    return len(w) == N and w.isascii() and w.isalpha()


def extract_word(text: Optional[str], N: int) -> Optional[str]:
    """
    Pull the first maximal alphabetic run of exactly N characters out of
    free text (e.g. a language-model reply). Returns it lowercased, or None.

      extract_word("Planet.", 6)        -> "planet"
      extract_word("Try: PLANET!", 6)   -> "planet"
      extract_word("planets", 6)        -> None
    """
    if not text:
        return None
    for m in _ALPHA_RUN.finditer(text):
        run = m.group(0)
        if len(run) == N:
            return run.lower()
    return None
