"""
Generate cube structures from the command line.

Usage:
    # Default building rules: 30 cubes, max height 5, keep 20
    cubegen -n 30 -m 5 -k 20

    # Meandering river on a 100x100 map
    cubegen --mode river -n 200 -m 100 -k 10

    # Export the best structure as a mesh
    cubegen -n 60 -m 6 -k 5 --export output/best.stl
"""
import argparse
import logging
import sys
from typing import List, Optional, Tuple

from cubegen.contracts import PlacementValidator, SolverConfig, StructureEvaluator
from cubegen.evaluation import DefaultEvaluation, RiverEvaluation
from cubegen.export import export_structure
from cubegen.presentation import render_report
from cubegen.progress import track_progress
from cubegen.solver import ConstructionSolver, EvaluationCounter
from cubegen.validation import DefaultValidation, RiverValidation

MODES = ("default", "river")


def build_policies(mode: str, m: int) -> Tuple[PlacementValidator, StructureEvaluator]:
    """Validator/evaluator pair for a mode; ``m`` is max height or map side."""
    if mode == "default":
        return DefaultValidation(max_height=m), DefaultEvaluation()
    elif mode == "river":
        return RiverValidation(side_length=m), RiverEvaluation(side_length=m)
    raise ValueError(f"Unknown mode '{mode}'. Expected one of {', '.join(MODES)}.")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate cube structures by randomized placement and keep the best"
    )
    parser.add_argument(
        "--mode", type=str, default="default", choices=MODES,
        help="Placement and scoring rules (default: default)",
    )
    parser.add_argument("-n", type=int, default=30, help="Cubes per structure (default: 30)")
    parser.add_argument(
        "-m", type=int, default=5,
        help="Max height in default mode, map side length in river mode (default: 5)",
    )
    parser.add_argument("-k", type=int, default=20, help="Structures to keep (default: 20)")
    parser.add_argument(
        "--max-attempts", type=int, default=2000,
        help="Construction attempts before stopping (default: 2000)",
    )
    parser.add_argument(
        "--time-budget", type=float, default=None,
        help="Wall-clock budget in seconds (default: none)",
    )
    parser.add_argument(
        "--workers", type=int, default=1, help="Worker threads (default: 1)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--export", type=str, default=None,
        help="Write the best structure as a mesh (format from extension, e.g. .stl, .glb)",
    )
    parser.add_argument("--no-progress", action="store_true", help="Hide the progress line")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SolverConfig(
            n=args.n,
            k=args.k,
            max_attempts=args.max_attempts,
            time_budget_s=args.time_budget,
            workers=args.workers,
            seed=args.seed,
        )
        validator, evaluator = build_policies(args.mode, args.m)
    except ValueError as e:
        print(f"Error: {e}")
        return 2

    counter = EvaluationCounter()
    solver = ConstructionSolver(config, validator, evaluator, counter=counter)

    if args.no_progress:
        result = solver.solve()
    else:
        result = track_progress(solver.solve, counter).result

    print(render_report(result, f"{evaluator.name} Solutions", args.n, args.m, args.k))

    if result.best is None:
        return 1

    if args.export:
        path = export_structure(result.best, args.export)
        print(f"Best structure written to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
