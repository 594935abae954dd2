"""
The two externally reachable operations.

  play_daily        -> round-based loop        ("Solved in N attempts: ...")
  play_daily_batch  -> batch presence probe    (reconstructed word)

Each call builds its own clients, solver and ConstraintState, so concurrent
requests never share solving state.
"""

from __future__ import annotations

from typing import Optional

from wordlebot.clients import FeedbackOracleClient, SuggestionClient
from wordlebot.config import Settings
from wordlebot.solvers import SolveOutcome, create_solver


def _oracle(settings: Settings) -> FeedbackOracleClient:
    return FeedbackOracleClient(settings.word_size, url=settings.oracle_url,
                                timeout=settings.request_timeout)


def play_daily(settings: Optional[Settings] = None, *, seed: int | None = None) -> SolveOutcome:
    settings = settings or Settings.from_env()
    oracle = _oracle(settings)
    suggester = SuggestionClient(api_key=settings.api_key, url=settings.suggestion_url,
                                 model=settings.suggestion_model,
                                 timeout=settings.request_timeout)
    solver = create_solver("round_loop", max_attempts=settings.max_attempts)
    try:
        solver.reset(oracle=oracle, N=settings.word_size, suggester=suggester, seed=seed)
        return solver.solve()
    finally:
        oracle.close()
        suggester.close()


def play_daily_batch(settings: Optional[Settings] = None) -> SolveOutcome:
    settings = settings or Settings.from_env()
    oracle = _oracle(settings)
    solver = create_solver("batch_probe", workers=settings.batch_workers)
    try:
        solver.reset(oracle=oracle, N=settings.word_size)
        return solver.solve()
    finally:
        oracle.close()
