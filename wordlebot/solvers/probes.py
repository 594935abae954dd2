"""
Combinatorial probes.

Two enumeration strategies that spend oracle calls to nail down the last bits
of the word. Both act on the session's ConstraintState and submit candidates
one at a time, applying every response before choosing the next candidate.

  exhaustive_substitution:
    Exactly one slot is still unknown. Walk the alphabet (skipping absent
    letters), drop each letter into the hole, and submit the untried, valid
    ones until the word is solved.

  permutation_probe:
    The last guess came back all-present. Try the permutations of the known
    present letters, stopping on a solve or as soon as any slot turns correct
    (the regular loop is better placed to use that new information).

Oracle failures skip the candidate; it is not retried.
The policy deciding WHEN to run a probe lives in the orchestrator.
"""

from __future__ import annotations

import logging
import string
from itertools import permutations
from typing import Iterable, List, Optional

from wordlebot.clients import OracleError
from wordlebot.engine import AttemptRecord, ConstraintState
from .base import Oracle

logger = logging.getLogger(__name__)

ALPHABET = string.ascii_lowercase


def generate_permutations(letters: Iterable[str]) -> List[str]:
    """
    All orderings of `letters` as strings, in generation order.

    Factorial in len(letters); callers keep the input small.

      generate_permutations(["a", "t"]) -> ["at", "ta"]
    """
    return ["".join(p) for p in permutations(list(letters))]


def submit_candidate(state: ConstraintState, oracle: Oracle, candidate: str) -> Optional[AttemptRecord]:
    """Submit one guess and fold the verdicts in; None if the oracle failed."""
    try:
        verdicts = oracle.submit(candidate)
    except OracleError as e:
        logger.warning("oracle failed for %s, skipping: %s", candidate, e)
        return None
    return state.apply_verdicts(candidate, verdicts)


def exhaustive_substitution(state: ConstraintState, oracle: Oracle) -> Optional[str]:
    """
    Fill the single unknown slot with each remaining letter in turn.

    Returns the solved word, or None if no candidate solved the puzzle
    (or if the precondition of exactly one unknown slot does not hold).
    """
    unknown = state.unknown_slots()
    if len(unknown) != 1:
        return None
    hole = unknown[0]

    for ch in ALPHABET:
        if ch in state.absent_letters:
            continue

        candidate = "".join(ch if i == hole else state.known_slots[i] for i in range(state.N))
        if not state.is_candidate_valid(candidate):
            continue

        logger.info("testing exhaustive option: %s", candidate)
        if submit_candidate(state, oracle, candidate) is None:
            continue
        if state.is_solved():
            return candidate

    return None


def permutation_probe(state: ConstraintState, oracle: Oracle) -> Optional[str]:
    """
    Submit permutations of the known present letters.

    Returns the solved word, or None when the sweep ends without a solve,
    either exhausted or cut short by a newly correct slot.
    """
    candidates = generate_permutations(sorted(state.present_letters))
    logger.info("testing %d permutations", len(candidates))

    for candidate in candidates:
        if len(candidate) != state.N or not state.is_candidate_valid(candidate):
            continue

        logger.info("testing permutation: %s", candidate)
        rec = submit_candidate(state, oracle, candidate)
        if rec is None:
            continue
        if state.is_solved():
            return candidate
        if rec.any_correct():
            logger.info("found correct position with %s, leaving permutation sweep", candidate)
            break

    return None
