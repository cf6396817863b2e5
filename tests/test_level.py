"""Level definitions, level sets and the level set registry."""

import random
from datetime import date

import pytest

from measureonce.core.config import Config, GeneratorConfig, LevelSetConfig
from measureonce.core.registry import LEVEL_SET_REGISTRY, get_level_set_builder
from measureonce.game.level import (
    CLASSIC_LEVELS,
    LevelDef,
    LevelSet,
    daily_seed,
    random_level_def,
    spawn_random,
)


@pytest.fixture
def small_config() -> Config:
    return Config(
        generator=GeneratorConfig(random_holes=(2, 4), random_blocks_per_hole=(3, 5)),
        level_sets=LevelSetConfig(levels_per_set=3, pool_size=8),
    )


class TestLevelDef:

    def test_classic_levels(self):
        assert len(CLASSIC_LEVELS) == 14
        assert CLASSIC_LEVELS[0] == LevelDef(num_holes=1, total_blocks=3, seed=0)

    def test_to_dict(self):
        assert LevelDef(2, 10, 20).to_dict() == {"num_holes": 2, "total_blocks": 10, "seed": 20}

    def test_level_copy_is_deep(self):
        level = CLASSIC_LEVELS[2].build()
        clone = level.copy()
        clone.holes.holes.pop()
        clone.planks[0][0].cells.clear()
        assert len(level.holes) == 2
        assert level.planks[0][0].count() == 10

    def test_complete_when_no_holes_left(self):
        level = CLASSIC_LEVELS[0].build()
        assert not level.is_complete()
        level.holes.holes.clear()
        assert level.is_complete()


class TestLevelSet:

    def test_walk_through(self):
        level_set = LevelSet(levels=list(CLASSIC_LEVELS[:2]), title="Two")
        assert len(level_set) == 2
        assert level_set.current() == CLASSIC_LEVELS[0]
        assert level_set.has_next()
        assert level_set.advance() == CLASSIC_LEVELS[1]
        assert not level_set.has_next()
        assert level_set.advance() is None

    def test_select(self):
        level_set = LevelSet(levels=list(CLASSIC_LEVELS))
        assert level_set.select(5) == CLASSIC_LEVELS[5]
        assert level_set.current_level == 5
        assert level_set.select(99) is None
        assert level_set.current_level == 5


class TestRandomLevels:

    def test_random_level_def_ranges(self):
        rng = random.Random(4)
        config = GeneratorConfig()
        for _ in range(50):
            level_def = random_level_def(rng, config)
            assert 2 <= level_def.num_holes < 10
            assert level_def.total_blocks >= 3 * level_def.num_holes
            assert 0 <= level_def.seed < 2 ** 64

    def test_spawn_random_sorted_by_difficulty(self, small_config):
        level_set = spawn_random(8, 0, "Test Set", 1, "Test", small_config)
        assert len(level_set) == 3
        assert level_set.title == "Test Set"
        assert level_set.settings_key == "Test"
        scores = [d.build().difficulty() for d in level_set.levels]
        assert scores == sorted(scores)

    def test_spawn_random_offset_takes_harder_levels(self, small_config):
        easy = spawn_random(8, 0, "Easy", 1, "Easy", small_config)
        harder = spawn_random(8, 3, "Harder", 1, "Harder", small_config)
        assert easy.levels[-1].build().difficulty() <= harder.levels[0].build().difficulty()

    def test_spawn_random_is_deterministic(self, small_config):
        a = spawn_random(8, 0, "A", 9, "A", small_config)
        b = spawn_random(8, 0, "B", 9, "B", small_config)
        assert a.levels == b.levels


class TestRegistry:

    def test_builders_registered(self):
        for kind in ("classic", "easy", "medium", "hard", "daily"):
            assert kind in LEVEL_SET_REGISTRY

    def test_unknown_level_set(self):
        with pytest.raises(KeyError, match="Unknown level set"):
            get_level_set_builder("impossible")

    def test_classic_builder(self):
        level_set = get_level_set_builder("classic")()
        assert level_set.levels == CLASSIC_LEVELS
        assert level_set.settings_key == "Classic"

    def test_medium_builder_skips_easy_levels(self, small_config):
        small_config.level_sets.pool_size = 9
        medium = get_level_set_builder("medium")(small_config)
        assert len(medium) == 3
        assert medium.title == "Medium Set"

    def test_daily_builder(self, small_config):
        level_set = get_level_set_builder("daily")(small_config, date(2022, 6, 3))
        assert level_set.title == "Daily Set for 2022-06-03"
        assert len(level_set) == 3


class TestDailySeed:

    def test_days_since_start(self):
        assert daily_seed(date(2022, 6, 1)) == 0
        assert daily_seed(date(2022, 6, 2)) == 1068
        assert daily_seed(date(2023, 6, 1)) == 365 * 1068
