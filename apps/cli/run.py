# apps/cli/run.py
"""
CLI entry point for offline solver benchmarks.

This script:
  1) Loads an answers list (one word per line) and keeps words of length N.
  2) Instantiates the requested solver (round_loop or batch_probe).
  3) Plays every answer (or a seeded sample) against a LocalOracle with a live
     progress indicator and writes:
       - CSV:  per-case results + a guess:pattern trace column
       - JSON: manifest with config, git commit, solve counts
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from pathlib import Path

from tqdm import tqdm

from wordlebot.config import Settings, configure_logging
from wordlebot.harness import run_case
from wordlebot.harness.io import (read_words, write_csv, write_manifest, timestamp_id,
                                  git_commit_or_unknown)
from wordlebot.solvers import create_solver, get_solver_ids


def main():
    """
    Parse CLI args, run the batch with progress, and write outputs.
    """
    settings = Settings.from_env()
    solver_choices = ", ".join(get_solver_ids())

    ap = argparse.ArgumentParser(description="wordlebot — run offline solver benchmarks")
    ap.add_argument("--solver", default="round_loop",
                    help=f"solver id (one of: {solver_choices})")
    ap.add_argument("--N", type=int, default=settings.word_size, help="word length (e.g., 5 or 6)")
    ap.add_argument("--answers", required=True, help="path to answers list (one word per line)")
    ap.add_argument("--sample", type=int,
                    help="run only a subset of answers (deterministic by seed)")
    ap.add_argument("--seed", type=int, default=123, help="base RNG seed (for reproducibility)")
    ap.add_argument("--max-attempts", type=int, default=settings.max_attempts)
    ap.add_argument("--outdir", default="reports", help="directory for output files")
    ap.add_argument("--progress", choices=["bar", "off"], default="bar")
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    configure_logging(args.log_level)

    answers = read_words(args.answers, N=args.N)
    if not answers:
        sys.exit(f"no {args.N}-letter words in {args.answers}")

    kwargs = ({"max_attempts": args.max_attempts} if args.solver == "round_loop"
              else {"workers": settings.batch_workers})
    solver = create_solver(args.solver, **kwargs)

    # Deterministic sample without replacement
    rng = random.Random(args.seed)
    if args.sample and args.sample < len(answers):
        pool = list(answers)
        rng.shuffle(pool)
        cases = pool[: args.sample]
    else:
        cases = list(answers)

    iterator = tqdm(cases, ncols=80, desc="Running", unit="game", disable=args.progress == "off")

    results = []
    start = time.time()
    for idx, ans in enumerate(iterator, 1):
        # Per-game seed so runs are reproducible and independent
        per_seed = args.seed + idx * 1013904223
        results.append(run_case(solver, ans, N=args.N, seed=per_seed))
    elapsed = time.time() - start

    run_id = timestamp_id()
    outdir = Path(args.outdir)
    outdir.mkdir(parents=True, exist_ok=True)

    csv_path = outdir / f"run_{run_id}.csv"
    manifest_path = outdir / f"run_{run_id}_manifest.json"

    write_csv(results, str(csv_path), N=args.N)
    solved = sum(1 for r in results if r["success"])
    manifest = {
        "run_id": run_id,
        "git_commit": git_commit_or_unknown(),
        "config": vars(args),
        "num_cases": len(results),
        "num_solved": solved,
        "elapsed_s": round(elapsed, 3),
        "solver_id": solver.id,
    }
    write_manifest(manifest, str(manifest_path))

    print(f"Solved {solved}/{len(results)}")
    print(f"Wrote: {csv_path}")
    print(f"Wrote: {manifest_path}")


if __name__ == "__main__":
    main()
