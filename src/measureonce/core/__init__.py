"""
Core modules for measureonce.

This package contains the fundamental components:
- Base value types (lattice vectors, camera, interaction states)
- Configuration management
- Registry for level set discovery
"""

from measureonce.core.base import (
    Cell,
    Vec2,
    Camera,
    PlankState,
    CutStep,
    NEIGHBOURS,
)

from measureonce.core.config import Config, load_config, create_default_config, validate_config, GeneratorConfig, LevelSetConfig, ControlsConfig

from measureonce.core.registry import register_level_set, get_level_set_builder, LEVEL_SET_REGISTRY

__all__ = [
    "Cell",
    "Vec2",
    "Camera",
    "PlankState",
    "CutStep",
    "NEIGHBOURS",
    "Config",
    "load_config",
    "create_default_config",
    "validate_config",
    "GeneratorConfig",
    "LevelSetConfig",
    "ControlsConfig",
    "register_level_set",
    "get_level_set_builder",
    "LEVEL_SET_REGISTRY",
]
