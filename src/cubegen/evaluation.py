"""
Structure evaluators: scoring functions for completed structures.

DefaultEvaluation rewards sunlit, well-insulated cubes with open views:
each cube scores a thermal surface quality plus a view quality, both
rounded to two decimals per cube. RiverEvaluation rewards paths that
reach far towards the edges of their square map.
"""
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

import numpy as np

from cubegen.geometry import Cube, Direction, Structure, round_score


# Thermal credit for an exposed, sunlit face
SUNNY_FACE_CREDIT: Dict[Direction, float] = {
    Direction.EAST: 0.2,
    Direction.WEST: 0.1,
    Direction.SOUTH: 0.5,
}

VIEW_MAX_DISTANCE = 25

# Lateral (dx, dy) of the left and right edge neighbors of each side face
EDGE_OFFSETS: Dict[Direction, Tuple[Tuple[int, int], Tuple[int, int]]] = {
    Direction.NORTH: ((-1, 1), (1, 1)),
    Direction.SOUTH: ((1, -1), (-1, -1)),
    Direction.EAST: ((1, 1), (1, -1)),
    Direction.WEST: ((-1, -1), (-1, 1)),
}

EDGE_FACTORS = {0: 1.0, 1: 0.5, 2: 0.25, 3: 0.125}


@dataclass(frozen=True)
class DefaultEvaluation:
    """Sum of thermal surface quality and view quality over all cubes."""
    name: str = field(default="Default", compare=False)

    def evaluate(self, structure: Structure) -> float:
        if structure.is_empty():
            return 0.0
        pts = structure.positions()
        return sum(
            thermal_surface_quality(structure, cube, pts) + view_quality(structure, cube)
            for cube in structure
        )


@dataclass(frozen=True)
class RiverEvaluation:
    """
    Product of how close the path comes to the x and y map edges.

    For a ``side_length`` m map the score is
    ``max(m//2 - |x|) * max(m//2 - |y|)`` over the structure's cubes.
    """
    side_length: int
    name: str = field(default="River", compare=False)

    def evaluate(self, structure: Structure) -> float:
        if structure.is_empty():
            return 0.0
        pts = structure.positions()
        half = self.side_length // 2
        max_x = int(np.max(half - np.abs(pts[:, 0])))
        max_y = int(np.max(half - np.abs(pts[:, 1])))
        return float(max_x * max_y)


# ─── Thermal surface quality ─────────────────────────────────────────────────


def thermal_surface_quality(
    structure: Structure,
    cube: Cube,
    pts: Optional[np.ndarray] = None,
) -> float:
    """Thermal score of one cube.

    A face touching another cube scores 1. An exposed east, west or south
    face scores its sunny-face credit if nothing shades it; every other
    exposed face scores 0.

    Args:
        structure: Structure containing the cube.
        cube: Cube to score.
        pts: Optional precomputed ``structure.positions()``.

    Returns:
        Score rounded to two decimals.
    """
    if pts is None:
        pts = structure.positions()

    total = 0.0
    for direction in Direction:
        if structure.adjacent(cube, direction) is not None:
            total += 1.0
        elif direction in SUNNY_FACE_CREDIT and _is_sunny(pts, cube, direction):
            total += SUNNY_FACE_CREDIT[direction]
    return round_score(total)


def _is_sunny(pts: np.ndarray, cube: Cube, direction: Direction) -> bool:
    xs, ys, zs = pts[:, 0], pts[:, 1], pts[:, 2]
    if direction is Direction.SOUTH:
        # shaded by a cube further south at the same or a higher level,
        # within a north-south range that widens with the height difference
        shading = (
            (ys < cube.y)
            & (zs >= cube.z)
            & (np.abs(ys - cube.y) < 5 * (zs - cube.z + 1))
        )
    else:
        # east/west faces are shaded by any cube on that side, level with
        # the cube and not north of it
        beside = xs > cube.x if direction is Direction.EAST else xs < cube.x
        shading = beside & (ys <= cube.y) & (zs == cube.z)
    return not bool(np.any(shading))


# ─── View quality ────────────────────────────────────────────────────────────


def view_quality(structure: Structure, cube: Cube) -> float:
    """View score of one cube: directional x edge factor per exposed side face."""
    total = 0.0
    for direction in Direction.lateral():
        if structure.adjacent(cube, direction) is not None:
            continue
        total += directional_factor(structure, cube, direction) * edge_factor(
            structure, cube, direction
        )
    return round_score(total)


def directional_factor(structure: Structure, cube: Cube, direction: Direction) -> float:
    """Distance to the nearest cube along ``direction``, normalized to [0, 1].

    An unobstructed view within VIEW_MAX_DISTANCE scores 1.0.
    """
    for step in range(1, VIEW_MAX_DISTANCE + 1):
        if cube.offset(direction, step) in structure:
            return round_score(min(1.0, step / VIEW_MAX_DISTANCE))
    return 1.0


def edge_factor(structure: Structure, cube: Cube, face: Direction) -> float:
    """Penalty factor for a side face from its restricted edges.

    The bottom edge is restricted on the ground or by a cube diagonally
    below the face; the left and right edges by cubes diagonally beside it.
    """
    if face not in EDGE_OFFSETS:
        raise ValueError(f"Invalid face direction: {face}")

    restricted = 0
    if cube.z == 0 or Cube(cube.x + face.dx, cube.y + face.dy, cube.z - 1) in structure:
        restricted += 1
    for dx, dy in EDGE_OFFSETS[face]:
        if Cube(cube.x + dx, cube.y + dy, cube.z) in structure:
            restricted += 1
    return EDGE_FACTORS[restricted]
