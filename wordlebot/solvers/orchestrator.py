"""
Round-based solver (solver id: round_loop).

State machine:
  running(attempt = 1..max_attempts) -> solved | exhausted

Each round picks ONE strategy in strict priority order, judged on the
previous round's feedback and the current ConstraintState:

  1) exactly one slot unknown   -> exhaustive substitution (probes.py)
                                   solved? done. otherwise fall through.
  2) last guess all-present and
     2..MAX_PERMUTATION_LETTERS
     present letters            -> permutation probe (probes.py)
  3) otherwise                  -> one guess from the chain
                                   stagnation check -> suggestion service
                                   -> emergency generator (emergency.py)

Probe submissions do not count as rounds; only the round's main guess does.
An oracle failure on the main guess burns the round and the loop goes on.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from wordlebot.clients import SuggestionError
from wordlebot.config import DEFAULT_MAX_ATTEMPTS
from wordlebot.engine import AttemptRecord, ConstraintState
from .base import BaseSolver, SolveOutcome, SolveStatus, register
from .emergency import emergency_guess
from .probes import ALPHABET, exhaustive_substitution, permutation_probe, submit_candidate

logger = logging.getLogger(__name__)

STAGNATION_WINDOW = 5        # look at this many recent guesses
STAGNATION_MIN_ENTRIES = 3   # need at least this many to judge
STAGNATION_MAX_DISTINCT = 2  # this few distinct guesses means we're looping

# Factorial blow-up guard for the permutation probe.
MAX_PERMUTATION_LETTERS = 8

PLACEHOLDER = "_"


def detect_stagnation(history: Sequence[AttemptRecord]) -> bool:
    """True if the recent guesses show very low diversity."""
    recent = [rec.guess for rec in history[-STAGNATION_WINDOW:]]
    return len(recent) >= STAGNATION_MIN_ENTRIES and len(set(recent)) <= STAGNATION_MAX_DISTINCT


@register
class SolverOrchestrator(BaseSolver):
    id = "round_loop"
    name = "Adaptive Round Loop"
    version = "1.0.0"

    def __init__(self, max_attempts: int = DEFAULT_MAX_ATTEMPTS):
        super().__init__()
        self.max_attempts = int(max_attempts)
        self.state = ConstraintState(self.N)
        self.status = SolveStatus.running
        self.attempt = 0

    def reset(self, *, oracle, N, suggester=None, seed=None) -> None:
        super().reset(oracle=oracle, N=N, suggester=suggester, seed=seed)
        self.state = ConstraintState(self.N)
        self.status = SolveStatus.running
        self.attempt = 0

    # ---- strategy preconditions ----

    def _should_exhaust(self) -> bool:
        return len(self.state.unknown_slots()) == 1

    def _should_permute(self) -> bool:
        last = self.state.last_attempt()
        if last is None or not last.all_present():
            return False
        return 2 <= len(self.state.present_letters) <= MAX_PERMUTATION_LETTERS

    # ---- guess chain ----

    def opening_guess(self) -> str:
        return ALPHABET[0] * self.N

    def next_guess(self) -> str:
        """
        Produce the round's main guess:
          opening (empty history) -> suggestion -> emergency generator.
        The suggestion service is skipped entirely while stagnating.
        """
        if not self.state.history:
            return self.opening_guess()

        if detect_stagnation(self.state.history):
            logger.info("stagnation detected in %s, using emergency generator",
                        self.state.recent_guesses(STAGNATION_WINDOW))
            return emergency_guess(self.state, self.rng)

        suggestion = self._ask_suggester()
        if suggestion is not None:
            return suggestion
        return emergency_guess(self.state, self.rng)

    def _ask_suggester(self) -> Optional[str]:
        if self.suggester is None:
            return None
        try:
            word = self.suggester.suggest(self.state)
        except SuggestionError as e:
            logger.warning("suggestion failed, falling back: %s", e)
            return None
        if not self.state.is_candidate_valid(word):
            logger.info("suggestion %r is tried or inconsistent, falling back", word)
            return None
        return word

    # ---- main loop ----

    def _finish(self, status: SolveStatus, word: str, message: str) -> SolveOutcome:
        self.status = status
        logger.info(message)
        return SolveOutcome(status=status, word=word, attempts=self.attempt,
                            message=message, history=list(self.state.history))

    def solve(self) -> SolveOutcome:
        if self.oracle is None:
            raise RuntimeError("call reset() before solve()")

        for attempt in range(1, self.max_attempts + 1):
            self.attempt = attempt

            if self._should_exhaust():
                word = exhaustive_substitution(self.state, self.oracle)
                if word is not None:
                    return self._finish(SolveStatus.solved, word,
                                        f"Solved with exhaustive test: {word}")
                logger.info("exhaustive test failed, falling back to guessing")

            if self._should_permute():
                word = permutation_probe(self.state, self.oracle)
                if word is not None:
                    return self._finish(SolveStatus.solved, word,
                                        f"Solved with permutation: {word}")

            guess = self.next_guess()
            rec = submit_candidate(self.state, self.oracle, guess)
            if rec is None:
                continue
            logger.info("attempt %d: %s -> %s", attempt, guess,
                        " ".join(v.verdict.value for v in rec.verdicts))

            if self.state.is_solved():
                word = self.state.partial()
                return self._finish(SolveStatus.solved, word,
                                    f"Solved in {attempt} attempts: {word}")

        partial = self.state.partial(PLACEHOLDER)
        return self._finish(SolveStatus.exhausted, partial,
                            f"Failed after {self.max_attempts} attempts. Best guess: {partial}")
