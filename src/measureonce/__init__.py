"""
measureonce: a plank-cutting puzzle core.

A rectangular plank has to be sawn along cell boundaries so that its pieces
can be hammered into matching holes. This package holds the algorithmic
core of the game:

- CoordSet polyominoes with rotation and texture-alignment bookkeeping
- Seeded hole and plank generation
- Path-based cutting with flood-fill connectivity analysis
- Linear undo/redo history over full game-state snapshots
- A difficulty estimate for ranking generated levels

Example Usage:
```python
from measureonce import LevelDef, GameSession

level = LevelDef(num_holes=3, total_blocks=15, seed=61).build()
session = GameSession(level)
print(level.planks[0][0])
```

Command-line Usage:
```bash
measureonce generate --holes 3 --blocks 15 --seed 61
measureonce levels easy
measureonce play --set classic
```
"""

from measureonce.core.config import Config, load_config, validate_config
from measureonce.game import (
    CoordSet,
    Hole,
    Plank,
    Holes,
    Level,
    LevelDef,
    LevelSet,
    GameSession,
    UndoBuffer,
)

__version__ = "0.1.0"

__all__ = [
    "Config",
    "load_config",
    "validate_config",
    "CoordSet",
    "Hole",
    "Plank",
    "Holes",
    "Level",
    "LevelDef",
    "LevelSet",
    "GameSession",
    "UndoBuffer",
]
