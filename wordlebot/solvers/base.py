from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Protocol, Sequence, Type

from wordlebot.engine import AttemptRecord, ConstraintState, SlotVerdict

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


# ---- Collaborator shapes (anything with these methods will do) ----
class Oracle(Protocol):
    def submit(self, guess: str) -> Sequence[SlotVerdict]: ...


class Suggester(Protocol):
    def suggest(self, state: ConstraintState) -> str: ...


# ---- Outcome of one solve ----
class SolveStatus(Enum):
    running = "running"
    solved = "solved"
    exhausted = "exhausted"


@dataclass
class SolveOutcome:
    status: SolveStatus
    word: str                 # solved word, or best partial reconstruction
    attempts: int             # rounds used (probe submissions not counted)
    message: str              # human-readable result returned to callers
    history: List[AttemptRecord] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.status is SolveStatus.solved

    def __str__(self) -> str:
        return self.message


# ---- Base class that solvers inherit ----
class BaseSolver:
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.N: int = 6
        self.oracle: Optional[Oracle] = None
        self.suggester: Optional[Suggester] = None
        self.rng = random.Random()

    def reset(self, *, oracle: Oracle, N: int, suggester: Optional[Suggester] = None,
              seed: int | None = None) -> None:
        self.oracle = oracle
        self.suggester = suggester
        self.N = int(N)
        if seed is not None:
            self.rng.seed(seed)

    def solve(self) -> SolveOutcome:
        raise NotImplementedError("Override in subclass")
