"""Difficulty estimate."""

import pytest

from measureonce.core.base import Vec2
from measureonce.game.coordset import CoordSet, Holes
from measureonce.game.difficulty import hole_difficulty, level_difficulty, plank_density
from measureonce.game.level import Level, LevelDef


def test_hole_difficulty_floors_small_holes():
    assert hole_difficulty([4]) == pytest.approx(1.5)
    assert hole_difficulty([1]) == pytest.approx(1.5)
    assert hole_difficulty([16]) == pytest.approx(1.25)
    assert hole_difficulty([]) == pytest.approx(1.0)


def test_more_holes_are_harder():
    assert hole_difficulty([5, 5, 5]) > hole_difficulty([15])


def test_plank_density():
    assert plank_density(CoordSet({(0, 0), (1, 0), (0, 1), (1, 1)})) == pytest.approx(1.0)
    assert plank_density(CoordSet({(0, 0), (1, 0), (0, 1)})) == pytest.approx(0.75)


def test_level_difficulty():
    level = Level(
        extents=Vec2(4, 4),
        holes=Holes([CoordSet({(1, 1), (2, 1), (1, 2), (2, 2)})]),
        planks=[(CoordSet({(0, 0), (1, 0), (0, 1), (1, 1)}), Vec2(0, -3))],
    )
    assert level_difficulty(level) == pytest.approx(3.0)
    assert level.difficulty() == pytest.approx(3.0)


def test_generated_level_difficulty_in_range():
    level = LevelDef(num_holes=3, total_blocks=15, seed=61).build()
    # each hole adds at most 0.5, density adds at most 1
    assert 1.0 < level.difficulty() <= (1 + 3 * 0.5) * 2
