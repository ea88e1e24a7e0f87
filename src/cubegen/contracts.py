"""Contracts for the cube structure search: policies, config, results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Protocol, runtime_checkable

from cubegen.geometry import Cube, Structure


@runtime_checkable
class PlacementValidator(Protocol):
    """Decides whether a cube may be added to a structure.

    Implementations must be pure, must accept any cube on an empty
    structure, and are called before the cube is committed.
    """

    name: str

    def is_valid(self, structure: Structure, cube: Cube) -> bool:
        ...


@runtime_checkable
class StructureEvaluator(Protocol):
    """Assigns a score to a completed structure. Higher is better."""

    name: str

    def evaluate(self, structure: Structure) -> float:
        ...


@dataclass(frozen=True)
class SolverConfig:
    """Configuration for the randomized construction search."""

    n: int                                  # cubes per structure
    k: int                                  # structures to retain
    max_attempts: Optional[int] = 2000
    time_budget_s: Optional[float] = None
    workers: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        if self.n <= 0:
            raise ValueError(f"n must be positive, got {self.n}")
        if self.k <= 0:
            raise ValueError(f"k must be positive, got {self.k}")
        if self.max_attempts is None and self.time_budget_s is None:
            raise ValueError("Either max_attempts or time_budget_s must be set")
        if self.max_attempts is not None and self.max_attempts <= 0:
            raise ValueError(f"max_attempts must be positive, got {self.max_attempts}")
        if self.time_budget_s is not None and self.time_budget_s <= 0:
            raise ValueError(f"time_budget_s must be positive, got {self.time_budget_s}")
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")


@dataclass
class SolveResult:
    """Outcome of one search run."""

    structures: List[Structure]   # best to worst
    evaluated: int                # completed (scored) attempts
    attempts: int
    abandoned: int
    elapsed_s: float
    stop_reason: str = ""         # "attempt_budget" | "time_budget" | "stopped"

    @property
    def best(self) -> Optional[Structure]:
        return self.structures[0] if self.structures else None

    @property
    def worst(self) -> Optional[Structure]:
        return self.structures[-1] if self.structures else None
