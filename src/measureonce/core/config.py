"""
Configuration management for measureonce.

This module handles loading and validation of configuration files and
provides typed configuration objects for the level generator, the level
sets and the controls.
"""

import yaml
from typing import Any, Dict, List, Optional, Tuple
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path


@dataclass
class GeneratorConfig:
    """Configuration for procedural level generation."""
    # consecutive rejected samples before gen_hole falls back to the frontier
    hole_sample_limit: int = 10000

    # ranges used by random level definitions (half-open, like randrange)
    random_holes: Tuple[int, int] = (2, 10)
    random_extra_blocks: Tuple[int, int] = (0, 10)
    random_blocks_per_hole: Tuple[int, int] = (3, 8)

    def __post_init__(self):
        if not isinstance(self.hole_sample_limit, int) or self.hole_sample_limit <= 0:
            raise ValueError("hole_sample_limit must be a positive integer")
        for name in ("random_holes", "random_extra_blocks", "random_blocks_per_hole"):
            value = getattr(self, name)
            if not isinstance(value, (tuple, list)) or len(value) != 2:
                raise ValueError(f"{name} must be a pair of integers")
            lo, hi = int(value[0]), int(value[1])
            if lo >= hi:
                raise ValueError(f"{name} must be a non-empty range, got [{lo}, {hi})")
            setattr(self, name, (lo, hi))
        if self.random_holes[0] < 1:
            raise ValueError("random_holes must start at 1 or more")
        if self.random_blocks_per_hole[0] < 1:
            raise ValueError("random_blocks_per_hole must start at 1 or more")


@dataclass
class LevelSetConfig:
    """Configuration for the built-in level sets."""
    levels_per_set: int = 30
    pool_size: int = 90
    easy_seed: int = 25
    medium_seed: int = 15
    hard_seed: int = 15
    daily_start: str = "2022-06-01"
    daily_seed_multiplier: int = 1068

    def __post_init__(self):
        if not isinstance(self.levels_per_set, int) or self.levels_per_set <= 0:
            raise ValueError("levels_per_set must be a positive integer")
        if not isinstance(self.pool_size, int) or self.pool_size < self.levels_per_set:
            raise ValueError("pool_size must be an integer no smaller than levels_per_set")
        if not isinstance(self.daily_seed_multiplier, int) or self.daily_seed_multiplier <= 0:
            raise ValueError("daily_seed_multiplier must be a positive integer")
        if isinstance(self.daily_start, date):
            self.daily_start = self.daily_start.isoformat()
        try:
            date.fromisoformat(self.daily_start)
        except (TypeError, ValueError):
            raise ValueError(f"daily_start must be an ISO date, got {self.daily_start!r}")

    @property
    def daily_start_date(self) -> date:
        return date.fromisoformat(self.daily_start)


@dataclass
class ControlsConfig:
    """Cursor, cutter and camera settings."""
    cursor_speed: float = 10.0
    cutter_speed: float = 5.0
    min_zoom: int = 5
    max_zoom: int = 60
    default_zoom: int = 20

    def __post_init__(self):
        if not isinstance(self.cursor_speed, (float, int)) or self.cursor_speed <= 0:
            raise ValueError("cursor_speed must be a positive number")
        if not isinstance(self.cutter_speed, (float, int)) or self.cutter_speed <= 0:
            raise ValueError("cutter_speed must be a positive number")
        if not isinstance(self.min_zoom, int) or self.min_zoom <= 0:
            raise ValueError("min_zoom must be a positive integer")
        if not isinstance(self.max_zoom, int) or self.max_zoom < self.min_zoom:
            raise ValueError("max_zoom must be an integer no smaller than min_zoom")
        if not self.min_zoom <= self.default_zoom <= self.max_zoom:
            raise ValueError("default_zoom must lie between min_zoom and max_zoom")


@dataclass
class Config:
    """Main configuration object."""
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    level_sets: LevelSetConfig = field(default_factory=LevelSetConfig)
    controls: ControlsConfig = field(default_factory=ControlsConfig)
    verbose: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        generator = GeneratorConfig(**(data.get("generator") or {}))
        level_sets = LevelSetConfig(**(data.get("level_sets") or {}))
        controls = ControlsConfig(**(data.get("controls") or {}))

        return cls(
            generator=generator,
            level_sets=level_sets,
            controls=controls,
            verbose=bool(data.get("verbose", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to dictionary."""
        generator = dict(self.generator.__dict__)
        for key, value in generator.items():
            if isinstance(value, tuple):
                generator[key] = list(value)

        return {
            "generator": generator,
            "level_sets": {
                **{k: v for k, v in self.level_sets.__dict__.items()}
            },
            "controls": {
                **{k: v for k, v in self.controls.__dict__.items()}
            },
            "verbose": self.verbose,
        }


def load_config(config_path: str) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is malformed
        ValueError: If a section holds unknown or invalid fields
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise yaml.YAMLError(f"Error parsing YAML config: {e}")

    if not data:
        raise ValueError("Configuration file is empty")

    try:
        return Config.from_dict(data)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Error creating config from data: {e}")


def create_default_config(output_path: Optional[str] = "config.yaml") -> Config:
    """
    Create a default configuration file.

    Args:
        output_path: Path where to save the default config, or None to skip writing

    Returns:
        Default Config object
    """
    config = Config()

    if output_path is not None:
        with open(output_path, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, indent=2)

    return config


def validate_config(config: Config) -> List[str]:
    """
    Validate configuration and return list of warnings/errors.

    Args:
        config: Configuration to validate

    Returns:
        List of validation messages
    """
    issues = []

    holes_lo, holes_hi = config.generator.random_holes
    if holes_hi - 1 > 20:
        issues.append("WARNING: random levels with more than 20 holes take long to assemble")

    blocks_lo, blocks_hi = config.generator.random_blocks_per_hole
    if blocks_hi - 1 > 12:
        issues.append("WARNING: random_blocks_per_hole above 12 produces very large holes")

    if config.level_sets.pool_size > 10 * config.level_sets.levels_per_set:
        issues.append("WARNING: level set pool_size is large, set generation will be slow")

    if config.level_sets.daily_start_date > date.today():
        issues.append("ERROR: daily_start lies in the future")

    if config.controls.cutter_speed > config.controls.cursor_speed * 4:
        issues.append("WARNING: cutter_speed is much faster than cursor_speed")

    return issues
