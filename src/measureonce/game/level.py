"""
Levels, level definitions and level sets.
"""

import random
from typing import List, Optional, Tuple
from dataclasses import dataclass, field
from datetime import date

from measureonce.core.base import Vec2
from measureonce.core.config import Config, GeneratorConfig
from measureonce.core.registry import register_level_set
from measureonce.game.coordset import Holes, Plank


@dataclass
class Level:
    """Full puzzle state: hole board plus the movable planks."""
    extents: Vec2 = field(default_factory=Vec2)
    holes: Holes = field(default_factory=Holes)
    planks: List[Tuple[Plank, Vec2]] = field(default_factory=list)
    setup: bool = False

    def copy(self) -> "Level":
        """Independent deep copy, safe to keep in the undo history."""
        return Level(
            extents=self.extents,
            holes=self.holes.copy(),
            planks=[(plank.copy(), pos) for plank, pos in self.planks],
            setup=self.setup,
        )

    def difficulty(self) -> float:
        from measureonce.game.difficulty import level_difficulty
        return level_difficulty(self)

    def is_complete(self) -> bool:
        return len(self.holes.holes) == 0


@dataclass(frozen=True)
class LevelDef:
    """The three integers that reproduce a Level."""
    num_holes: int
    total_blocks: int
    seed: int

    def build(self, logger=None, sample_limit: Optional[int] = None) -> Level:
        from measureonce.game.generator import HOLE_SAMPLE_LIMIT, build_level
        return build_level(self, logger, sample_limit or HOLE_SAMPLE_LIMIT)

    def to_dict(self):
        return {"num_holes": self.num_holes, "total_blocks": self.total_blocks, "seed": self.seed}


CLASSIC_LEVELS = [
    LevelDef(num_holes=1, total_blocks=3, seed=0),
    LevelDef(num_holes=1, total_blocks=6, seed=10),
    LevelDef(num_holes=2, total_blocks=10, seed=20),
    LevelDef(num_holes=2, total_blocks=8, seed=30),
    LevelDef(num_holes=2, total_blocks=10, seed=40),
    LevelDef(num_holes=3, total_blocks=15, seed=61),
    LevelDef(num_holes=3, total_blocks=20, seed=83),
    LevelDef(num_holes=3, total_blocks=20, seed=94),
    LevelDef(num_holes=3, total_blocks=20, seed=106),
    LevelDef(num_holes=3, total_blocks=25, seed=117),
    LevelDef(num_holes=3, total_blocks=25, seed=128),
    LevelDef(num_holes=3, total_blocks=25, seed=139),
    LevelDef(num_holes=3, total_blocks=25, seed=1411),
    LevelDef(num_holes=3, total_blocks=15, seed=50),  # hard
]


@dataclass
class LevelSet:
    """An ordered run of level definitions the player works through."""
    levels: List[LevelDef] = field(default_factory=list)
    current_level: int = 0
    title: str = ""
    settings_key: str = ""

    def __len__(self) -> int:
        return len(self.levels)

    def current(self) -> Optional[LevelDef]:
        if 0 <= self.current_level < len(self.levels):
            return self.levels[self.current_level]
        return None

    def has_next(self) -> bool:
        return self.current_level + 1 < len(self.levels)

    def advance(self) -> Optional[LevelDef]:
        """Step to the next level; None once the set is exhausted."""
        self.current_level += 1
        return self.current()

    def select(self, index: int) -> Optional[LevelDef]:
        if not 0 <= index < len(self.levels):
            return None
        self.current_level = index
        return self.current()


def random_level_def(rng: random.Random, config: Optional[GeneratorConfig] = None) -> LevelDef:
    """Draw a random level definition from the configured ranges."""
    config = config or GeneratorConfig()
    seed = rng.getrandbits(64)
    num_holes = rng.randrange(*config.random_holes)
    total_blocks = rng.randrange(*config.random_extra_blocks) + num_holes * rng.randrange(*config.random_blocks_per_hole)
    return LevelDef(num_holes=num_holes, total_blocks=total_blocks, seed=seed)


def spawn_random(pool_size: int, offset: int, title: str, seed: int, key: str,
                 config: Optional[Config] = None) -> LevelSet:
    """
    Build a level set by ranking a pool of random levels by difficulty.

    Args:
        pool_size: number of random level definitions to draw
        offset: index of the first ranked level to keep
        title: display title
        seed: seed for the pool
        key: settings key the caller stores progress under

    Returns:
        LevelSet of up to levels_per_set definitions, easiest first
    """
    config = config or Config()
    rng = random.Random(seed)
    pool = [random_level_def(rng, config.generator) for _ in range(pool_size)]

    limit = config.generator.hole_sample_limit
    scored = sorted(pool, key=lambda d: d.build(sample_limit=limit).difficulty())
    levels = scored[offset:offset + config.level_sets.levels_per_set]

    return LevelSet(levels=levels, current_level=0, title=title, settings_key=key)


def daily_seed(today: date, config: Optional[Config] = None) -> int:
    config = config or Config()
    days = (today - config.level_sets.daily_start_date).days
    return days * config.level_sets.daily_seed_multiplier


@register_level_set("classic")
def classic_set(config: Optional[Config] = None, today: Optional[date] = None) -> LevelSet:
    return LevelSet(levels=list(CLASSIC_LEVELS), title="Classic Set", settings_key="Classic")


@register_level_set("easy")
def easy_set(config: Optional[Config] = None, today: Optional[date] = None) -> LevelSet:
    config = config or Config()
    sets = config.level_sets
    return spawn_random(sets.pool_size, 0, "Easy Set", sets.easy_seed, "Easy", config)


@register_level_set("medium")
def medium_set(config: Optional[Config] = None, today: Optional[date] = None) -> LevelSet:
    config = config or Config()
    sets = config.level_sets
    return spawn_random(sets.pool_size, sets.levels_per_set, "Medium Set", sets.medium_seed, "Medium", config)


@register_level_set("hard")
def hard_set(config: Optional[Config] = None, today: Optional[date] = None) -> LevelSet:
    config = config or Config()
    sets = config.level_sets
    return spawn_random(sets.pool_size, 2 * sets.levels_per_set, "Hard Set", sets.hard_seed, "Hard", config)


@register_level_set("daily")
def daily_set(config: Optional[Config] = None, today: Optional[date] = None) -> LevelSet:
    config = config or Config()
    today = today or date.today()
    return spawn_random(config.level_sets.levels_per_set, 0, f"Daily Set for {today.isoformat()}",
                        daily_seed(today, config), "Daily", config)
