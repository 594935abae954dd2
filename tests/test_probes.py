from string import ascii_lowercase

from wordlebot.engine import ConstraintState, score
from wordlebot.solvers.probes import (exhaustive_substitution, generate_permutations,
                                      permutation_probe)


def _cat_state():
    st = ConstraintState(4)
    st.known_slots = ["c", "a", "t", None]
    st.absent_letters = {"x", "y"}
    return st


def test_exhaustive_walks_alphabet_skipping_absent(recording_oracle):
    oracle = recording_oracle("catz")
    st = _cat_state()
    assert exhaustive_substitution(st, oracle) == "catz"
    expected = ["cat" + ch for ch in ascii_lowercase if ch not in "xy"]
    assert oracle.submitted == expected
    assert st.is_solved()


def test_exhaustive_stops_on_first_solve(recording_oracle):
    oracle = recording_oracle("catc")
    st = _cat_state()
    assert exhaustive_substitution(st, oracle) == "catc"
    assert oracle.submitted == ["cata", "catb", "catc"]


def test_exhaustive_skips_failed_candidate_without_retry(recording_oracle):
    oracle = recording_oracle("catd", fail_on={"catb"})
    st = _cat_state()
    assert exhaustive_substitution(st, oracle) == "catd"
    assert oracle.submitted == ["cata", "catb", "catc", "catd"]
    assert "catb" not in st.tried_guesses


def test_exhaustive_skips_tried_and_requires_single_hole(recording_oracle):
    oracle = recording_oracle("catb")
    st = _cat_state()
    st.tried_guesses.add("cata")
    assert exhaustive_substitution(st, oracle) == "catb"
    assert oracle.submitted == ["catb"]

    st2 = ConstraintState(4)
    st2.known_slots = ["c", "a", None, None]
    assert exhaustive_substitution(st2, recording_oracle("catb")) is None


def test_generate_permutations_two_letters():
    assert generate_permutations(["a", "t"]) == ["at", "ta"]
    assert len(generate_permutations("abcd")) == 24


def test_permutation_probe_never_resubmits(recording_oracle):
    oracle = recording_oracle("ta")
    st = ConstraintState(2)
    st.apply_verdicts("at", score("at", "ta"))
    assert st.present_letters == {"a", "t"}
    assert permutation_probe(st, oracle) == "ta"
    assert oracle.submitted == ["ta"]


def test_permutation_probe_stops_on_new_correct(recording_oracle):
    oracle = recording_oracle("atp")
    st = ConstraintState(3)
    st.apply_verdicts("tpa", score("tpa", "atp"))
    assert st.last_attempt().all_present()
    # 'apt' pins 'a' at slot 0 without solving -> sweep ends
    assert permutation_probe(st, oracle) is None
    assert oracle.submitted == ["apt"]
    assert st.known_slots[0] == "a"


def test_permutation_probe_skips_wrong_length(recording_oracle):
    oracle = recording_oracle("tabs")
    st = ConstraintState(4)
    st.present_letters = {"a", "t"}
    assert permutation_probe(st, oracle) is None
    assert oracle.submitted == []


def test_permutation_probe_skips_failed_candidate_without_retry(recording_oracle):
    oracle = recording_oracle("pat", fail_on={"apt"})
    st = ConstraintState(3)
    st.apply_verdicts("tpa", score("tpa", "pat"))
    assert st.last_attempt().all_present()

    assert permutation_probe(st, oracle) == "pat"
    # apt fails and is dropped; atp is all-present so the sweep continues
    assert oracle.submitted == ["apt", "atp", "pat"]
    assert "apt" not in st.tried_guesses
