"""
Randomized construction search for cube structures.

Each attempt starts from a single cube at the origin and grows it one cube
at a time. At every step the occupied cubes are visited in a shuffled order
and, for each, the six directions in a freshly shuffled order; the first
unoccupied neighbor the placement validator accepts is committed. When no
neighbor is accepted the attempt is abandoned and the next one restarts from
scratch (Monte-Carlo restart rather than exhaustive backtracking). Completed
structures are scored once and offered to a bounded top-k archive.

Attempts share no structure state, so they can run on several worker
threads; only the evaluation counter, the attempt budget and the archive
are shared, each behind its own short-lived lock.
"""
from __future__ import annotations

import logging
import math
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Set

import numpy as np

from cubegen.archive import TopKArchive
from cubegen.contracts import (
    PlacementValidator,
    SolveResult,
    SolverConfig,
    StructureEvaluator,
)
from cubegen.geometry import ORIGIN, Cube, Direction, Structure

logger = logging.getLogger(__name__)


class EvaluationCounter:
    """Thread-safe, monotonically increasing count of scored structures."""

    def __init__(self):
        self._value = 0
        self._lock = threading.Lock()

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    @property
    def value(self) -> int:
        return self._value


class ConstructionSolver:
    """
    Builds ``config.n``-cube structures under a placement validator and keeps
    the ``config.k`` best according to an evaluator.

    Args:
        config: Search parameters and budget.
        validator: Placement legality policy.
        evaluator: Scoring policy for completed structures.
        counter: Optional shared counter, e.g. polled by a progress reporter.
    """

    def __init__(
        self,
        config: SolverConfig,
        validator: PlacementValidator,
        evaluator: StructureEvaluator,
        counter: Optional[EvaluationCounter] = None,
    ):
        self.config = config
        self.validator = validator
        self.evaluator = evaluator
        self.counter = counter if counter is not None else EvaluationCounter()
        self.archive = TopKArchive(config.k)

        self._stop = threading.Event()
        self._budget_lock = threading.Lock()
        self._attempts = 0
        self._abandoned = 0
        self._deadline: Optional[float] = None
        self._stop_reason = ""

    def stop(self) -> None:
        """Ask the search to halt after the attempts currently in flight."""
        self._stop.set()

    def solve(self) -> SolveResult:
        """Run attempts until the budget is exhausted; return the archive.

        Every call is a fresh run: the archive and the attempt counts start
        empty, and ``evaluated`` counts only this run's completions. A solver
        that was stopped stays stopped.
        """
        config = self.config
        self.archive = TopKArchive(config.k)
        self._attempts = 0
        self._abandoned = 0
        self._deadline = None
        self._stop_reason = ""
        baseline = self.counter.value
        logger.info(
            "Search: n=%d k=%d validator=%s evaluator=%s max_attempts=%s "
            "time_budget_s=%s workers=%d",
            config.n, config.k, self.validator.name, self.evaluator.name,
            config.max_attempts, config.time_budget_s, config.workers,
        )

        start = time.perf_counter()
        if config.time_budget_s is not None:
            self._deadline = time.monotonic() + config.time_budget_s

        children = np.random.SeedSequence(config.seed).spawn(config.workers)
        rngs = [np.random.default_rng(s) for s in children]

        if config.workers == 1:
            self._worker(rngs[0])
        else:
            with ThreadPoolExecutor(
                max_workers=config.workers, thread_name_prefix="cubegen"
            ) as pool:
                futures = [pool.submit(self._worker, rng) for rng in rngs]
                for future in futures:
                    future.result()

        elapsed = time.perf_counter() - start
        evaluated = self.counter.value - baseline
        structures = self.archive.snapshot()
        logger.info(
            "Search complete: attempts=%d evaluated=%d abandoned=%d retained=%d "
            "elapsed=%.3fs stop_reason=%s",
            self._attempts, evaluated, self._abandoned,
            len(structures), elapsed, self._stop_reason,
        )
        return SolveResult(
            structures=structures,
            evaluated=evaluated,
            attempts=self._attempts,
            abandoned=self._abandoned,
            elapsed_s=elapsed,
            stop_reason=self._stop_reason,
        )

    def build_structure(self, rng: np.random.Generator) -> Optional[Structure]:
        """Run one attempt; return the unscored structure or None if abandoned."""
        structure = Structure().add_cube(ORIGIN)
        while len(structure) < self.config.n:
            grown = self._extend(structure, rng)
            if grown is None:
                return None
            structure = grown
        return structure

    # ─── Internals ───────────────────────────────────────────────────────

    def _worker(self, rng: np.random.Generator) -> None:
        try:
            while self._claim_attempt():
                structure = self.build_structure(rng)
                if structure is None:
                    self._record_abandoned()
                    continue
                self._complete(structure)
        except Exception:
            self._stop.set()
            raise

    def _claim_attempt(self) -> bool:
        """Reserve one attempt from the budget; False once it is exhausted."""
        with self._budget_lock:
            if self._stop_reason:
                return False
            if self._stop.is_set():
                self._stop_reason = "stopped"
                return False
            if self._deadline is not None and time.monotonic() >= self._deadline:
                self._stop_reason = "time_budget"
                return False
            max_attempts = self.config.max_attempts
            if max_attempts is not None and self._attempts >= max_attempts:
                self._stop_reason = "attempt_budget"
                return False
            self._attempts += 1
            return True

    def _record_abandoned(self) -> None:
        with self._budget_lock:
            self._abandoned += 1
        logger.debug("Attempt abandoned: no legal extension")

    def _complete(self, structure: Structure) -> None:
        score = float(self.evaluator.evaluate(structure))
        if not math.isfinite(score):
            raise ValueError(
                f"Evaluator '{self.evaluator.name}' returned a non-finite score: {score}"
            )
        scored = structure.with_score(score)
        self.counter.increment()
        self.archive.offer(scored)

    def _extend(self, structure: Structure, rng: np.random.Generator) -> Optional[Structure]:
        """Commit the first legal neighbor in randomized order, or None."""
        cubes: List[Cube] = list(structure.cubes)
        tried: Set[Cube] = set()
        for i in rng.permutation(len(cubes)):
            cube = cubes[i]
            for direction in Direction.shuffled(rng):
                candidate = cube.offset(direction)
                if candidate in structure or candidate in tried:
                    continue
                tried.add(candidate)
                if self.validator.is_valid(structure, candidate):
                    return structure.add_cube(candidate)
        return None


def generate_structures(
    n: int,
    k: int,
    validator: PlacementValidator,
    evaluator: StructureEvaluator,
    max_attempts: Optional[int] = 2000,
    time_budget_s: Optional[float] = None,
    workers: int = 1,
    seed: Optional[int] = None,
    counter: Optional[EvaluationCounter] = None,
) -> SolveResult:
    """Search for the ``k`` best ``n``-cube structures.

    Raises:
        ValueError: if the configuration is invalid; raised before any
            attempt starts.
    """
    config = SolverConfig(
        n=n,
        k=k,
        max_attempts=max_attempts,
        time_budget_s=time_budget_s,
        workers=workers,
        seed=seed,
    )
    solver = ConstructionSolver(config, validator, evaluator, counter=counter)
    return solver.solve()
