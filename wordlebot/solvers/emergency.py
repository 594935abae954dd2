"""
Emergency candidate generation.

Used whenever the suggestion service is skipped (stagnation), fails, or
proposes something unusable. Builds guesses slot-by-slot from what the
ConstraintState already knows.

Random stage:
  - pinned slots are copied verbatim
  - an open slot takes an unplaced present ("movable") letter PRESENT_BIAS of
    the time, otherwise any letter not known absent
  - letters already ruled out at a slot (excluded_slots) are never put there
  - each candidate is scored; the best valid, untried one out of
    EMERGENCY_TRIES wins

Deterministic stage (nothing valid came out of the random stage):
  - movable letters first, then the first letter that is neither absent nor
    already pinned, degrading to any letter at all when nothing fits.
"""

from __future__ import annotations

import random
from typing import List, Optional, Set, Tuple

from wordlebot.engine import ConstraintState
from .probes import ALPHABET

EMERGENCY_TRIES = 50
PRESENT_BIAS = 0.7

# Per-slot score weights
PINNED_SCORE = 2.0
MOVABLE_SCORE = 1.5
FRESH_SCORE = 1.0


def _guessed_letters(state: ConstraintState) -> Set[str]:
    seen: Set[str] = set()
    for g in state.tried_guesses:
        seen.update(g)
    return seen


def random_candidate(state: ConstraintState, rng: random.Random) -> Tuple[str, float]:
    """One slot-by-slot random build and its score."""
    movable = state.movable_letters()
    seen = _guessed_letters(state)
    letters: List[str] = []
    used_movable: Set[str] = set()
    score = 0.0

    for i, pinned in enumerate(state.known_slots):
        if pinned is not None:
            letters.append(pinned)
            score += PINNED_SCORE
            continue

        excluded = state.excluded_slots[i]
        options = [m for m in movable if m not in used_movable and m not in excluded]
        if options and rng.random() < PRESENT_BIAS:
            ch = rng.choice(options)
            used_movable.add(ch)
            score += MOVABLE_SCORE
        else:
            pool = [c for c in ALPHABET if c not in state.absent_letters and c not in excluded]
            ch = rng.choice(pool) if pool else rng.choice(ALPHABET)
            if ch in movable:
                used_movable.add(ch)
        letters.append(ch)

    # Untested letters carry the most information
    fresh = {ch for ch in letters if ch not in seen and ch not in state.present_letters}
    score += FRESH_SCORE * len(fresh)
    return "".join(letters), score


def deterministic_fallback(state: ConstraintState) -> str:
    """Fill open slots greedily; may return an invalid or tried word when nothing fits."""
    movable = state.movable_letters()
    placed = {ch for ch in state.known_slots if ch is not None}
    letters: List[str] = []

    for i, pinned in enumerate(state.known_slots):
        if pinned is not None:
            letters.append(pinned)
            continue

        excluded = state.excluded_slots[i]
        ch: Optional[str] = next(
            (m for m in movable if m not in letters and m not in excluded), None)
        if ch is None:
            ch = next((c for c in ALPHABET
                       if c not in state.absent_letters and c not in placed
                       and c not in excluded and c not in letters), None)
        if ch is None:
            ch = next((c for c in ALPHABET if c not in state.absent_letters), "a")
        letters.append(ch)

    return "".join(letters)


def emergency_guess(state: ConstraintState, rng: random.Random, tries: int = EMERGENCY_TRIES) -> str:
    """Best of `tries` random builds, or the deterministic fallback."""
    best: Optional[str] = None
    best_score = float("-inf")
    for _ in range(tries):
        cand, s = random_candidate(state, rng)
        if not state.is_candidate_valid(cand):
            continue
        if s > best_score:
            best, best_score = cand, s

    if best is not None:
        return best
    return deterministic_fallback(state)
