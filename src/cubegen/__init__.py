"""Public API for randomized cube structure generation."""

from cubegen.archive import TopKArchive
from cubegen.contracts import (
    PlacementValidator,
    SolveResult,
    SolverConfig,
    StructureEvaluator,
)
from cubegen.evaluation import DefaultEvaluation, RiverEvaluation
from cubegen.geometry import ORIGIN, Cube, Direction, Structure
from cubegen.solver import ConstructionSolver, EvaluationCounter, generate_structures
from cubegen.validation import DefaultValidation, RiverValidation

__all__ = [
    "ORIGIN",
    "ConstructionSolver",
    "Cube",
    "DefaultEvaluation",
    "DefaultValidation",
    "Direction",
    "EvaluationCounter",
    "PlacementValidator",
    "RiverEvaluation",
    "RiverValidation",
    "SolveResult",
    "SolverConfig",
    "Structure",
    "StructureEvaluator",
    "TopKArchive",
    "generate_structures",
]
