from wordlebot.solvers import SolveStatus, create_solver
from wordlebot.solvers.batch_probe import (CONSONANTS, VOWELS, BatchPresenceProbe,
                                           chunk_letters, padded_guess)


def test_chunk_and_pad():
    assert chunk_letters("abcdefg", 3) == ["abc", "def", "g"]
    assert padded_guess("z", "a", 5) == "aaaaz"
    assert padded_guess("aeiou", "b", 6) == "baeiou"
    assert len(VOWELS) + len(CONSONANTS) == 26


def test_batch_probe_reconstructs_apart(recording_oracle):
    oracle = recording_oracle("apart")
    solver = BatchPresenceProbe(workers=4)
    solver.reset(oracle=oracle, N=5)
    outcome = solver.solve()

    assert outcome.word == "apart"
    assert outcome.message == "apart"
    assert outcome.status is SolveStatus.solved
    # 1 vowel chunk + 5 consonant chunks + one repeated-letter probe per matched letter
    assert sorted(oracle.submitted[6:]) == ["aaaaa", "ppppp", "rrrrr", "ttttt"]
    assert len(outcome.history) == 10


def test_batch_probe_history_keeps_submission_order(recording_oracle):
    oracle = recording_oracle("apart")
    solver = create_solver("batch_probe", workers=8)
    solver.reset(oracle=oracle, N=5)
    outcome = solver.solve()
    guesses = [rec.guess for rec in outcome.history]
    assert guesses[:6] == ["aeiou", "bcdfg", "hjklm", "npqrs", "tvwxy", "aaaaz"]


def test_batch_probe_skips_failed_calls(recording_oracle):
    oracle = recording_oracle("apart", fail_on={"rrrrr"})
    solver = BatchPresenceProbe(workers=2)
    solver.reset(oracle=oracle, N=5)
    outcome = solver.solve()

    # slot 3 never resolved, so it contributes nothing
    assert outcome.word == "apat"
    assert outcome.status is SolveStatus.exhausted
