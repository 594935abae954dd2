"""
I/O utilities for experiment runs.

Responsibilities:
- write_csv:     flatten per-game results into a tidy CSV (one row per game).
- write_manifest:dump a JSON manifest with config and metadata.
- read_words:    load a newline-separated word list.
- timestamp_id:  stable UTC run ID string.
- git_commit_or_unknown: best-effort short commit hash for reproducibility.

Notes:
- Games can run to a hundred rounds plus probe submissions, so the history is
  packed into one `trace` column ("guess:pattern guess:pattern ...") instead
  of fixed per-turn columns.
- The trace is prefixed with an apostrophe to keep Excel from interpreting
  strings like "-GYY-" as formulas (which would display as #NAME?).
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List
import csv
import json
import subprocess
import datetime as dt

FIELDS = ["solver", "N", "answer", "success", "attempts", "guesses", "time_ms",
          "message", "trace"]


def _excel_safe(text: str) -> str:
    """
    Prefix with an apostrophe so spreadsheet apps treat it as text.
    Example: "-GYY-" -> "'-GYY-"
    """
    return "'" + text if text else text


def read_words(path: str, N: int | None = None) -> List[str]:
    """
    Read a newline-separated word list, normalize to lowercase, drop blanks
    (and words of the wrong length when N is given).
    """
    p = Path(path)
    words = [w.strip().lower() for w in p.read_text(encoding="utf-8").splitlines() if w.strip()]
    if N is not None:
        words = [w for w in words if len(w) == N]
    return words


def write_csv(results: List[Dict], path: str, N: int) -> str:
    """
    Serialize a batch of game results (as returned by run_case) to CSV.

    Returns:
      The path written (string).
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=FIELDS)
        w.writeheader()

        for r in results:
            trace = " ".join(f"{g}:{patt}" for g, patt in r.get("history", []))
            w.writerow({
                "solver": r.get("solver_id", "?"),
                "N": N,
                "answer": r["answer"],
                "success": r["success"],
                "attempts": r["attempts"],
                "guesses": r["guesses"],
                "time_ms": round(float(r["time_ms"]), 3),
                "message": r.get("message", ""),
                "trace": _excel_safe(trace),
            })

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest with run configuration.

    Typical keys:
      - run_id, git_commit
      - config: CLI args (solver, N, paths, seed, sample, outdir)
      - num_cases, num_solved
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Return a compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Best-effort short git hash of the current repo state.
    Returns 'unknown' if git is not available or the call fails.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
