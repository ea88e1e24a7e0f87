"""
Core spatial types for cube structure generation.

A Structure is an immutable set of unit cubes on an integer grid plus a
score. Growth is copy-on-extend: every ``add_cube`` returns a new Structure.
All higher-level geometric predicates (support, connectivity, free faces)
are expressed through the single ``adjacent`` primitive.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Iterable, Iterator, List, Optional, Tuple

import numpy as np
from scipy import ndimage


class Direction(Enum):
    """Face-adjacency offsets, in canonical order."""
    NORTH = (0, 1, 0)
    SOUTH = (0, -1, 0)
    EAST = (1, 0, 0)
    WEST = (-1, 0, 0)
    UP = (0, 0, 1)
    DOWN = (0, 0, -1)

    def __init__(self, dx: int, dy: int, dz: int):
        self.dx = dx
        self.dy = dy
        self.dz = dz

    @property
    def is_lateral(self) -> bool:
        return self.dz == 0

    @classmethod
    def ordered(cls) -> List["Direction"]:
        """All six directions in declaration order."""
        return list(cls)

    @classmethod
    def shuffled(cls, rng: Optional[np.random.Generator] = None) -> List["Direction"]:
        """A freshly shuffled permutation of all six directions."""
        if rng is None:
            rng = np.random.default_rng()
        members = cls.ordered()
        return [members[i] for i in rng.permutation(len(members))]

    @classmethod
    def lateral(cls) -> List["Direction"]:
        """The four horizontal directions (N/S/E/W)."""
        return [d for d in cls if d.is_lateral]


@dataclass(frozen=True)
class Cube:
    """A unit cube at integer grid coordinates (x, y, z).

    y grows to the north, x grows to the east, z grows upwards.
    """
    x: int
    y: int
    z: int

    def offset(self, direction: Direction, steps: int = 1) -> "Cube":
        """Cube position ``steps`` units away in ``direction``."""
        return Cube(
            self.x + direction.dx * steps,
            self.y + direction.dy * steps,
            self.z + direction.dz * steps,
        )

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.x, self.y, self.z)

    def __repr__(self) -> str:
        return f"[{self.x}, {self.y}, {self.z}]"


ORIGIN = Cube(0, 0, 0)


def round_score(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100.0 + 0.5) / 100.0


@dataclass(frozen=True, eq=False)
class Structure:
    """
    Immutable snapshot of a set of cubes paired with a score.

    Equality compares the cube set and the rounded score, so two structures
    built in a different order but holding the same cubes and score are the
    same structure.

    Attributes:
        cubes: Occupied positions (unique membership, no ordering)
        raw_score: Score as assigned; read through ``score`` for comparisons
    """
    cubes: FrozenSet[Cube] = frozenset()
    raw_score: float = 0.0

    def __post_init__(self):
        if not isinstance(self.cubes, frozenset):
            object.__setattr__(self, "cubes", frozenset(self.cubes))

    @classmethod
    def of(cls, cubes: Iterable[Cube], score: float = 0.0) -> "Structure":
        return cls(frozenset(cubes), score)

    @property
    def score(self) -> float:
        """Score rounded to two decimals to keep equality stable."""
        return round_score(self.raw_score)

    def is_empty(self) -> bool:
        return not self.cubes

    def contains(self, cube: Cube) -> bool:
        return cube in self.cubes

    def add_cube(self, cube: Cube) -> "Structure":
        """Return a new structure with ``cube`` inserted; score is kept."""
        return Structure(self.cubes | {cube}, self.raw_score)

    def with_score(self, score: float) -> "Structure":
        return Structure(self.cubes, score)

    def adjacent(self, cube: Cube, direction: Direction) -> Optional[Cube]:
        """The occupied neighbor of ``cube`` in ``direction``, or None."""
        neighbor = cube.offset(direction)
        return neighbor if neighbor in self.cubes else None

    def is_supported(self, cube: Cube) -> bool:
        """True if the cube sits on the ground or on another cube."""
        return cube.z == 0 or self.adjacent(cube, Direction.DOWN) is not None

    def is_connected(self, cube: Cube) -> bool:
        """True if at least one face of the cube touches another cube."""
        return any(self.adjacent(cube, d) is not None for d in Direction.ordered())

    def has_free_side_face(self, cube: Cube) -> bool:
        """True if at least one N/E/S/W face of the cube is exposed."""
        return any(self.adjacent(cube, d) is None for d in Direction.lateral())

    def neighbor_count(self, cube: Cube) -> int:
        return sum(1 for d in Direction.ordered() if self.adjacent(cube, d) is not None)

    def positions(self) -> np.ndarray:
        """Cube coordinates as an (N, 3) int array, sorted by (x, y, z)."""
        coords = sorted(c.as_tuple() for c in self.cubes)
        return np.array(coords, dtype=np.int64).reshape(-1, 3)

    def bounds(self) -> Tuple[np.ndarray, np.ndarray]:
        """(min_corner, max_corner) of occupied positions.

        Raises ValueError on an empty structure.
        """
        if self.is_empty():
            raise ValueError("Empty structure has no bounds")
        pts = self.positions()
        return pts.min(axis=0), pts.max(axis=0)

    def occupancy_grid(self) -> np.ndarray:
        """Dense boolean grid spanning the bounding box."""
        if self.is_empty():
            return np.zeros((0, 0, 0), dtype=bool)
        mins, maxs = self.bounds()
        shifted = self.positions() - mins
        grid = np.zeros(tuple(maxs - mins + 1), dtype=bool)
        grid[shifted[:, 0], shifted[:, 1], shifted[:, 2]] = True
        return grid

    def component_count(self) -> int:
        """Number of face-connected groups of cubes."""
        if self.is_empty():
            return 0
        # default structuring element for rank 3 is face connectivity
        _, count = ndimage.label(self.occupancy_grid())
        return int(count)

    def __len__(self) -> int:
        return len(self.cubes)

    def __iter__(self) -> Iterator[Cube]:
        return iter(self.cubes)

    def __contains__(self, cube: object) -> bool:
        return cube in self.cubes

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Structure):
            return NotImplemented
        return self.cubes == other.cubes and self.score == other.score

    def __hash__(self) -> int:
        return hash((self.cubes, self.score))

    def __repr__(self) -> str:
        cubes = ", ".join(repr(Cube(*t)) for t in sorted(c.as_tuple() for c in self.cubes))
        return f"Structure(cubes={{{cubes}}}, score={self.score:.2f})"
