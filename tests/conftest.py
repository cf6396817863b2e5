"""Shared fixtures for the measureonce test suite."""

import pytest

from measureonce.core.base import Vec2
from measureonce.game.coordset import CoordSet, Holes
from measureonce.game.level import Level


def cells(*xy):
    return CoordSet(set(xy))


@pytest.fixture
def domino_level() -> Level:
    """One two-cell hole and a matching loose plank below the board."""
    return Level(
        extents=Vec2(4, 3),
        holes=Holes([cells((1, 1), (2, 1))]),
        planks=[(cells((0, 0), (1, 0)), Vec2(1, -2))],
    )


@pytest.fixture
def bar_level() -> Level:
    """Two two-cell holes and a 1x4 bar plank that has to be sawn in half."""
    return Level(
        extents=Vec2(7, 3),
        holes=Holes([cells((1, 1), (2, 1)), cells((4, 1), (5, 1))]),
        planks=[(cells((0, 0), (1, 0), (2, 0), (3, 0)), Vec2(0, -2))],
    )
