"""
Batch Presence Probe (solver id: batch_probe).

Idea:
  Skip the adaptive loop entirely and learn the word with two waves of
  independent guesses, each wave fired concurrently.

  Wave 1 (membership):
    Split the vowels, then the consonants, into chunks of N letters. Each
    chunk becomes one guess, left-padded with a filler letter from the other
    class. Filler slots are ignored; every chunk letter whose verdict is not
    absent joins `matched`.

  Wave 2 (placement):
    For each matched letter, guess that letter N times. Every slot that comes
    back correct is pinned to that letter.

  The answer is the pinned slots joined in order; a slot nobody claimed stays
  empty (so the result can be shorter than N).

Costs about ceil(5/N) + ceil(21/N) + |matched| guesses regardless of luck,
but each wave only takes as long as its slowest call.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence, Set

from wordlebot.clients import OracleError
from wordlebot.engine import AttemptRecord, LetterVerdict, SlotVerdict
from .base import BaseSolver, SolveOutcome, SolveStatus, register
from .probes import ALPHABET

logger = logging.getLogger(__name__)

VOWELS = "aeiou"
CONSONANTS = "".join(ch for ch in ALPHABET if ch not in VOWELS)

# Filler per class is taken from the opposite class so it never collides
# with a chunk letter.
VOWEL_FILLER = "b"
CONSONANT_FILLER = "a"


def chunk_letters(letters: str, size: int) -> List[str]:
    """'abcdefg', 3 -> ['abc', 'def', 'g']"""
    return [letters[i:i + size] for i in range(0, len(letters), size)]


def padded_guess(chunk: str, filler: str, N: int) -> str:
    """Left-pad `chunk` with `filler` up to N letters."""
    return filler * (N - len(chunk)) + chunk


@register
class BatchPresenceProbe(BaseSolver):
    id = "batch_probe"
    name = "Batch Presence Probe"
    version = "1.0.0"

    def __init__(self, workers: int = 8):
        super().__init__()
        self.workers = max(1, int(workers))
        self.history: List[AttemptRecord] = []

    def reset(self, *, oracle, N, suggester=None, seed=None) -> None:
        super().reset(oracle=oracle, N=N, suggester=suggester, seed=seed)
        self.history = []

    def _submit_wave(self, executor: ThreadPoolExecutor,
                     guesses: Sequence[str]) -> Dict[str, List[SlotVerdict]]:
        """
        Fire all guesses at once; return only after every call has finished.
        Failed calls are logged and left out of the result.
        """
        futures = {executor.submit(self.oracle.submit, g): g for g in guesses}
        results: Dict[str, List[SlotVerdict]] = {}
        for fut in as_completed(futures):
            g = futures[fut]
            try:
                results[g] = list(fut.result())
            except OracleError as e:
                logger.warning("oracle failed for %s, skipping: %s", g, e)

        # record in submission order, not completion order
        for g in guesses:
            if g in results:
                self.history.append(AttemptRecord(guess=g, verdicts=results[g]))
        return results

    def _membership_wave(self, executor: ThreadPoolExecutor, letters: str,
                         filler: str) -> Set[str]:
        chunks = chunk_letters(letters, self.N)
        guesses = [padded_guess(c, filler, self.N) for c in chunks]
        results = self._submit_wave(executor, guesses)

        matched: Set[str] = set()
        for chunk, guess in zip(chunks, guesses):
            verdicts = results.get(guess)
            if verdicts is None:
                continue
            offset = self.N - len(chunk)
            for v in verdicts:
                if v.slot >= offset and v.verdict is not LetterVerdict.absent:
                    matched.add(v.letter)
        return matched

    def _placement_wave(self, executor: ThreadPoolExecutor,
                        matched: Set[str]) -> List[Optional[str]]:
        letters = sorted(matched)
        guesses = [ch * self.N for ch in letters]
        results = self._submit_wave(executor, guesses)

        resolved: List[Optional[str]] = [None] * self.N
        for ch, guess in zip(letters, guesses):
            for v in results.get(guess, []):
                if v.verdict is LetterVerdict.correct:
                    resolved[v.slot] = ch
        return resolved

    def solve(self) -> SolveOutcome:
        if self.oracle is None:
            raise RuntimeError("call reset() before solve()")

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            matched = self._membership_wave(executor, VOWELS, VOWEL_FILLER)
            matched |= self._membership_wave(executor, CONSONANTS, CONSONANT_FILLER)
            logger.info("matched letters: %s", "".join(sorted(matched)))

            resolved = self._placement_wave(executor, matched)

        word = "".join(ch for ch in resolved if ch)
        status = SolveStatus.solved if all(resolved) else SolveStatus.exhausted
        logger.info("batch probe result: %r after %d guesses", word, len(self.history))
        return SolveOutcome(status=status, word=word, attempts=len(self.history),
                            message=word, history=list(self.history))
