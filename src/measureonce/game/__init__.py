"""
Puzzle core: polyomino model, level generation, cutting and history.
"""

from measureonce.game.coordset import CoordSet, Hole, Plank, Holes
from measureonce.game.rotation import ROTATION_MATRICES, get_rotation_matrix, rotate_vector
from measureonce.game.generator import (
    gen_hole,
    gen_holes,
    hole_size_bounds,
    plank_from_holes,
    arrange_holes,
    build_level,
)
from measureonce.game.level import (
    Level,
    LevelDef,
    LevelSet,
    CLASSIC_LEVELS,
    random_level_def,
    spawn_random,
    daily_seed,
)
from measureonce.game.difficulty import level_difficulty
from measureonce.game.cutter import Cut, CutSession, find_cut_start, affected_cells, edge_key
from measureonce.game.history import UndoState, UndoBuffer, UndoStep
from measureonce.game.session import GameSession

__all__ = [
    # Polyomino model
    'CoordSet', 'Hole', 'Plank', 'Holes',
    # Rotation
    'ROTATION_MATRICES', 'get_rotation_matrix', 'rotate_vector',
    # Generation
    'gen_hole', 'gen_holes', 'hole_size_bounds', 'plank_from_holes',
    'arrange_holes', 'build_level',
    # Levels
    'Level', 'LevelDef', 'LevelSet', 'CLASSIC_LEVELS',
    'random_level_def', 'spawn_random', 'daily_seed', 'level_difficulty',
    # Cutting
    'Cut', 'CutSession', 'find_cut_start', 'affected_cells', 'edge_key',
    # History and session
    'UndoState', 'UndoBuffer', 'UndoStep', 'GameSession',
]
