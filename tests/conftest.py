"""
Shared test fixtures for cube structure generation tests.
"""
import sys
from dataclasses import dataclass, field
from pathlib import Path

import pytest

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from cubegen.geometry import Cube, Structure


@dataclass(frozen=True)
class AcceptAll:
    """Validator accepting every placement."""
    name: str = field(default="AcceptAll", compare=False)

    def is_valid(self, structure, cube):
        return True


@dataclass(frozen=True)
class FirstCubeOnly:
    """Validator rejecting every placement after the first cube."""
    name: str = field(default="FirstCubeOnly", compare=False)

    def is_valid(self, structure, cube):
        return structure.is_empty()


@dataclass(frozen=True)
class GroundCount:
    """Evaluator scoring the number of cubes at z == 0."""
    name: str = field(default="GroundCount", compare=False)

    def evaluate(self, structure):
        return float(sum(1 for c in structure if c.z == 0))


@dataclass(frozen=True)
class ConstantScore:
    value: float = 1.0
    name: str = field(default="Constant", compare=False)

    def evaluate(self, structure):
        return self.value


@pytest.fixture
def accept_all():
    return AcceptAll()


@pytest.fixture
def first_cube_only():
    return FirstCubeOnly()


@pytest.fixture
def ground_count():
    return GroundCount()


@pytest.fixture
def constant_score():
    return ConstantScore()


@pytest.fixture
def single_cube():
    """Only the origin cube."""
    return Structure.of([Cube(0, 0, 0)])


@pytest.fixture
def l_shape():
    """Three ground cubes forming an L: origin, east, and north of east."""
    return Structure.of([Cube(0, 0, 0), Cube(1, 0, 0), Cube(1, 1, 0)])


@pytest.fixture
def tower():
    """A 2x1 footprint, two levels high, with one extra cube on top of the origin."""
    return Structure.of([
        Cube(0, 0, 0), Cube(1, 0, 0),
        Cube(0, 0, 1), Cube(1, 0, 1),
        Cube(0, 0, 2),
    ])


@pytest.fixture
def plus_shape():
    """Origin surrounded by its four lateral neighbors."""
    return Structure.of([
        Cube(0, 0, 0),
        Cube(1, 0, 0), Cube(-1, 0, 0),
        Cube(0, 1, 0), Cube(0, -1, 0),
    ])
