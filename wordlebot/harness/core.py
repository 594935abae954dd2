"""
Experiment harness core primitives.

- LocalOracle: answers guesses for a known hidden word with the canonical
  scorer, standing in for the remote feedback service.
- run_case:    run a single puzzle (one hidden answer) with a given solver.
- run_batch:   run many puzzles in sequence (optionally a sample prefix).

These functions are UI-agnostic so they can be reused by a CLI app, a
notebook, or the tests without changes.
"""

from __future__ import annotations

import threading
import time
from typing import Dict, Iterable, List, Optional

from wordlebot.engine import SlotVerdict, pattern_string, score, validate_guess
from wordlebot.solvers.base import BaseSolver, Suggester


class LocalOracle:
    """Offline feedback oracle; safe to share across the batch probe's threads."""

    def __init__(self, answer: str):
        self.answer = answer.strip().lower()
        self.N = len(self.answer)
        self.calls = 0
        self._lock = threading.Lock()

    def submit(self, guess: str) -> List[SlotVerdict]:
        if not validate_guess(guess, self.N):
            raise ValueError(f"guess must be {self.N} letters a-z; got {guess!r}")
        with self._lock:
            self.calls += 1
        return score(guess, self.answer)


def run_case(
        solver: BaseSolver,
        answer: str,
        *,
        N: int,
        suggester: Optional[Suggester] = None,
        seed: int | None = None,
) -> Dict:
    """
    Execute one game with `solver` against a LocalOracle for `answer`.

    Returns:
        dict with keys:
            success (bool), attempts (int), guesses (int, oracle calls),
            time_ms (float), history (list[(guess, pattern)]), answer (str),
            message (str), solver_id (str)
    """
    answer = answer.strip().lower()
    if len(answer) != N:
        raise ValueError(f"answer {answer!r} is not {N} letters")

    oracle = LocalOracle(answer)
    solver.reset(oracle=oracle, N=N, suggester=suggester, seed=seed)

    t0 = time.time()
    outcome = solver.solve()
    dt = (time.time() - t0) * 1000.0

    return {
        "success": outcome.solved and outcome.word == answer,
        "attempts": outcome.attempts,
        "guesses": oracle.calls,
        "time_ms": dt,
        "history": [(rec.guess, pattern_string(rec.verdicts)) for rec in outcome.history],
        "answer": answer,
        "message": outcome.message,
        "solver_id": solver.id,
    }


def run_batch(
        solver: BaseSolver,
        answers: Iterable[str],
        *,
        N: int,
        suggester: Optional[Suggester] = None,
        seed: int | None = None,
        sample: int | None = None,
) -> List[Dict]:
    """
    Run many cases back-to-back. If 'sample' is provided, only the first K answers
    (after filtering to length N) are used to speed up quick experiments.

    Each case's seed is derived from the base seed to make runs reproducible
    but not identical across cases (seed + index).
    """
    pool = [w.strip().lower() for w in answers if len(w.strip()) == N]
    if sample is not None:
        pool = pool[:sample]

    out: List[Dict] = []
    for idx, ans in enumerate(pool, start=1):
        case_seed = None if seed is None else (seed + idx)
        out.append(run_case(solver, ans, N=N, suggester=suggester, seed=case_seed))
    return out
