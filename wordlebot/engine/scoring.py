"""
Wordle-style feedback for a single (guess, answer) pair.

Feedback is a list of SlotVerdict, one per slot, in slot order. Each verdict is:
  - correct : right letter in the right slot
  - present : letter is in the word but not at this slot
  - absent  : letter is not in the word (or present fewer times than guessed)

The remote oracle speaks the same three-valued vocabulary; this module is the
local reference used by the offline harness and the tests.

Algorithm (two-pass, canonical for Wordle):
  1) First pass marks all corrects and counts the remaining (unmatched) letters
     from the answer.
  2) Second pass marks presents only if the letter still has remaining count.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence


class LetterVerdict(Enum):
    correct = "correct"
    present = "present"
    absent = "absent"


@dataclass(frozen=True)
class SlotVerdict:
    """Verdict for one letter at one slot of a submitted guess."""
    slot: int
    letter: str
    verdict: LetterVerdict


# Compact pattern characters used in reports: 'G' correct, 'Y' present, '-' absent
_PATTERN_CHARS = {
    LetterVerdict.correct: "G",
    LetterVerdict.present: "Y",
    LetterVerdict.absent: "-",
}


def score(guess: str, answer: str) -> List[SlotVerdict]:
    """
    Compute feedback for `guess` against `answer`.

    Preconditions:
      - len(guess) == len(answer)

    Examples:
      pattern_string(score("belle", "level")) -> "-GYYY"
      pattern_string(score("lemon", "level")) -> "GG---"
    """
    guess = guess.strip().lower()
    answer = answer.strip().lower()
    assert len(guess) == len(answer), "Guess and answer must be the same length"

    n = len(guess)
    verdicts = [LetterVerdict.absent] * n

    # Pass 1: corrects, and leftover counts from the answer for pass 2.
    remaining = Counter()
    for i, (g, a) in enumerate(zip(guess, answer)):
        if g == a:
            verdicts[i] = LetterVerdict.correct
        else:
            remaining[a] += 1

    # Pass 2: presents capped by the true multiplicity in the answer.
    for i, g in enumerate(guess):
        if verdicts[i] is LetterVerdict.correct:
            continue
        if remaining[g] > 0:
            verdicts[i] = LetterVerdict.present
            remaining[g] -= 1

    return [SlotVerdict(i, ch, v) for i, (ch, v) in enumerate(zip(guess, verdicts))]


def pattern_string(verdicts: Sequence[SlotVerdict]) -> str:
    """Render verdicts as a 'G'/'Y'/'-' string (slot order)."""
    ordered = sorted(verdicts, key=lambda v: v.slot)
    return "".join(_PATTERN_CHARS[v.verdict] for v in ordered)
