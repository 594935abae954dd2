# apps/cli/solve.py
"""
Solve one puzzle from the command line.

Live mode (default) plays against the configured remote oracle:
    python -m apps.cli.solve --solver round_loop
    python -m apps.cli.solve --solver batch_probe --N 5

Offline mode plays against a LocalOracle for a known answer:
    python -m apps.cli.solve --answer planet --seed 7

Settings come from the environment (see wordlebot/config.py); flags override.
"""

from __future__ import annotations

import argparse

from wordlebot.clients import SuggestionClient
from wordlebot.config import Settings, configure_logging
from wordlebot.harness import run_case
from wordlebot.service import play_daily, play_daily_batch
from wordlebot.solvers import create_solver, get_solver_ids


def main():
    ap = argparse.ArgumentParser(description="wordlebot — solve one puzzle")
    ap.add_argument("--solver", default="round_loop", choices=get_solver_ids())
    ap.add_argument("--N", type=int, help="word length (default: WORD_SIZE or 6)")
    ap.add_argument("--max-attempts", type=int, help="round budget for round_loop")
    ap.add_argument("--answer", help="play offline against this hidden word")
    ap.add_argument("--seed", type=int, help="RNG seed for emergency guesses")
    ap.add_argument("--log-level", default="INFO")
    args = ap.parse_args()

    configure_logging(args.log_level)
    settings = Settings.from_env().override(word_size=args.N, max_attempts=args.max_attempts)

    if args.answer:
        N = len(args.answer.strip())
        kwargs = ({"max_attempts": settings.max_attempts} if args.solver == "round_loop"
                  else {"workers": settings.batch_workers})
        solver = create_solver(args.solver, **kwargs)
        suggester = None
        if settings.api_key:
            suggester = SuggestionClient(api_key=settings.api_key, url=settings.suggestion_url,
                                         model=settings.suggestion_model,
                                         timeout=settings.request_timeout)
        try:
            r = run_case(solver, args.answer, N=N, suggester=suggester, seed=args.seed)
        finally:
            if suggester is not None:
                suggester.close()
        print(r["message"])
        print(f"success={r['success']} rounds={r['attempts']} oracle_calls={r['guesses']}")
        return

    if args.solver == "batch_probe":
        outcome = play_daily_batch(settings)
    else:
        outcome = play_daily(settings, seed=args.seed)
    print(outcome.message)


if __name__ == "__main__":
    main()
