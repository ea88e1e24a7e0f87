"""
Placement validators: legality rules for adding a cube to a structure.

Every validator accepts any cube on an empty structure and is evaluated
against the structure as it is before the cube is committed.
"""
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, Set

from cubegen.geometry import Cube, Direction, Structure


@dataclass(frozen=True)
class DefaultValidation:
    """
    Building rules with a height limit.

    A cube is valid if:
    - it lies below ``max_height``
    - it rests on the ground or on another cube
    - it touches at least one other cube
    - it keeps at least one free side face, and so does every cube it
      touches once placed
    """
    max_height: int
    name: str = field(default="Default", compare=False)

    def __post_init__(self):
        if self.max_height < 1:
            raise ValueError(f"max_height must be >= 1, got {self.max_height}")

    def is_valid(self, structure: Structure, cube: Cube) -> bool:
        if structure.is_empty():
            return True
        # cheap checks first
        if (
            cube.z >= self.max_height
            or not structure.is_supported(cube)
            or not structure.is_connected(cube)
            or not structure.has_free_side_face(cube)
        ):
            return False

        extended = structure.add_cube(cube)
        for direction in Direction:
            neighbor = extended.adjacent(cube, direction)
            if neighbor is not None and not extended.has_free_side_face(neighbor):
                return False
        return True


@dataclass(frozen=True)
class RiverValidation:
    """
    Meandering single-cube-wide path on the ground.

    A cube is valid if:
    - it lies on the ground inside a ``side_length`` square centred on the
      origin
    - once placed it touches exactly one other cube
    - no row or column then holds more than ``max_straight_run``
      consecutive cubes
    - no cube then touches more than two others (no branches)
    """
    side_length: int
    max_straight_run: int = 10
    name: str = field(default="River", compare=False)

    def __post_init__(self):
        if self.side_length < 1:
            raise ValueError(f"side_length must be >= 1, got {self.side_length}")

    def is_valid(self, structure: Structure, cube: Cube) -> bool:
        if structure.is_empty():
            return True

        half = self.side_length // 2
        if cube.z > 0 or abs(cube.x) > half or abs(cube.y) > half:
            return False

        extended = structure.add_cube(cube)
        if extended.neighbor_count(cube) != 1:
            return False
        if self._exceeds_straight_run(extended):
            return False
        return all(extended.neighbor_count(c) <= 2 for c in extended)

    def _exceeds_straight_run(self, structure: Structure) -> bool:
        ys_by_x: Dict[int, Set[int]] = defaultdict(set)
        xs_by_y: Dict[int, Set[int]] = defaultdict(set)
        for c in structure:
            ys_by_x[c.x].add(c.y)
            xs_by_y[c.y].add(c.x)

        return any(
            self._longest_run(coords) > self.max_straight_run
            for coords in list(ys_by_x.values()) + list(xs_by_y.values())
        )

    @staticmethod
    def _longest_run(coords: Iterable[int]) -> int:
        ordered = sorted(coords)
        longest = run = 1 if ordered else 0
        for prev, cur in zip(ordered, ordered[1:]):
            run = run + 1 if cur == prev + 1 else 1
            longest = max(longest, run)
        return longest
