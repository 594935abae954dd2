"""
Constraint knowledge accumulated during one solving session.

Given:
  - a fixed word length N
  - oracle feedback (a list of SlotVerdict) for every submitted guess

Track:
  - known_slots     : letter pinned at each slot (None while unknown)
  - present_letters : letters confirmed somewhere in the word
  - absent_letters  : letters confirmed not in the word
  - excluded_slots  : per-slot letters known NOT to sit at that slot
  - history         : ordered (guess, verdicts) records
  - tried_guesses   : every guess already submitted

Everything grows monotonically for the lifetime of the session. The one
exception is a letter wrongly recorded absent by an inconsistent response:
present/correct always wins, so it is dropped from absent_letters.

Each session owns its own ConstraintState; strategies read it and only the
orchestrator (or a probe acting on its behalf) calls apply_verdicts().
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from .scoring import LetterVerdict, SlotVerdict
from .validation import validate_guess


@dataclass
class AttemptRecord:
    """One oracle round-trip: the guess and its per-slot verdicts."""
    guess: str
    verdicts: List[SlotVerdict] = field(default_factory=list)

    def all_present(self) -> bool:
        return bool(self.verdicts) and all(
            v.verdict is LetterVerdict.present for v in self.verdicts)

    def any_correct(self) -> bool:
        return any(v.verdict is LetterVerdict.correct for v in self.verdicts)


class ConstraintState:
    def __init__(self, N: int):
        if N <= 0:
            raise ValueError(f"word size must be positive; got {N}")
        self.N = int(N)
        self.known_slots: List[Optional[str]] = [None] * self.N
        self.present_letters: Set[str] = set()
        self.absent_letters: Set[str] = set()
        self.excluded_slots: List[Set[str]] = [set() for _ in range(self.N)]
        self.history: List[AttemptRecord] = []
        self.tried_guesses: Set[str] = set()

    # ---- mutation ----

    def apply_verdicts(self, guess: str, verdicts: Sequence[SlotVerdict]) -> AttemptRecord:
        """
        Fold one oracle response into the state and record the attempt.

        correct/present verdicts are applied before absent ones so that a
        repeated letter reported both ways in the same guess is never
        classified absent.
        """
        guess = guess.strip().lower()
        verdicts = sorted(verdicts, key=lambda v: v.slot)

        for v in verdicts:
            letter = v.letter.lower()
            if v.verdict is LetterVerdict.correct:
                if self.known_slots[v.slot] is None:
                    self.known_slots[v.slot] = letter
                self.absent_letters.discard(letter)
            elif v.verdict is LetterVerdict.present:
                self.present_letters.add(letter)
                self.absent_letters.discard(letter)
                self.excluded_slots[v.slot].add(letter)

        for v in verdicts:
            if v.verdict is not LetterVerdict.absent:
                continue
            letter = v.letter.lower()
            self.excluded_slots[v.slot].add(letter)
            if letter not in self.known_slots and letter not in self.present_letters:
                self.absent_letters.add(letter)

        record = AttemptRecord(guess=guess, verdicts=list(verdicts))
        self.history.append(record)
        self.tried_guesses.add(guess)
        return record

    # ---- queries ----

    def is_solved(self) -> bool:
        return all(ch is not None for ch in self.known_slots)

    def is_candidate_valid(self, word: str) -> bool:
        """
        A candidate may be submitted only if it:
          - has length N and is alphabetic
          - has not been tried yet
          - contains every present letter
          - contains no absent letter
        """
        if not validate_guess(word, self.N):
            return False
        w = word.strip().lower()
        if w in self.tried_guesses:
            return False
        if any(ch not in w for ch in self.present_letters):
            return False
        if any(ch in self.absent_letters for ch in w):
            return False
        return True

    def unknown_slots(self) -> List[int]:
        return [i for i, ch in enumerate(self.known_slots) if ch is None]

    def movable_letters(self) -> List[str]:
        """Present letters not yet pinned to any slot (sorted)."""
        return sorted(ch for ch in self.present_letters if ch not in self.known_slots)

    def last_attempt(self) -> Optional[AttemptRecord]:
        return self.history[-1] if self.history else None

    def recent_guesses(self, n: int) -> List[str]:
        return [rec.guess for rec in self.history[-n:]]

    def partial(self, placeholder: str = "_") -> str:
        """Best-known reconstruction: pinned letters verbatim, placeholder elsewhere."""
        return "".join(ch if ch is not None else placeholder for ch in self.known_slots)
