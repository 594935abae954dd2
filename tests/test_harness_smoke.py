import csv
import json
from pathlib import Path

from wordlebot.harness import run_batch, run_case, read_words, write_csv, write_manifest
from wordlebot.solvers import create_solver


def test_run_case_smoke_round_loop():
    solver = create_solver("round_loop")
    r = run_case(solver, "crane", N=5, seed=42)
    assert "success" in r and "history" in r
    assert r["success"] is True
    assert r["history"][0][0] == "aaaaa"
    assert r["guesses"] >= r["attempts"]


def test_run_case_smoke_batch_probe():
    solver = create_solver("batch_probe")
    r = run_case(solver, "crane", N=5)
    assert r["success"] is True
    assert r["message"] == "crane"


def test_run_batch_and_write_outputs(tmp_path: Path):
    words = tmp_path / "answers_6.txt"
    words.write_text("planet\nGarden\n\nshort\nstream\n", encoding="utf-8")
    answers = read_words(str(words), N=6)
    assert answers == ["planet", "garden", "stream"]

    results = run_batch(create_solver("round_loop"), answers, N=6, seed=5, sample=2)
    assert [r["answer"] for r in results] == ["planet", "garden"]

    out = write_csv(results, str(tmp_path / "out" / "run.csv"), N=6)
    with open(out, newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    assert len(rows) == 2
    assert rows[0]["solver"] == "round_loop"
    assert rows[0]["trace"].startswith("'aaaaaa:")

    m = write_manifest({"num_cases": 2}, str(tmp_path / "out" / "m.json"))
    assert json.loads(Path(m).read_text(encoding="utf-8")) == {"num_cases": 2}
