"""
Level difficulty estimate, used to rank candidate levels.
"""

import math


def hole_difficulty(hole_sizes) -> float:
    """1 plus a diminishing contribution per hole; small holes weigh more."""
    return 1.0 + sum(math.sqrt(1.0 / max(4, n)) for n in hole_sizes)


def plank_density(plank) -> float:
    """Filled fraction of the plank's bounding box."""
    width, height = plank.size()
    return plank.count() / float(width * height)


def level_difficulty(level) -> float:
    """
    Score a freshly generated level.

    Args:
        level: Level whose first plank is still the uncut plank

    Returns:
        hole difficulty * (1 + plank density)
    """
    plank = level.planks[0][0]
    density = plank_density(plank)
    holes = hole_difficulty(h.count() for h in level.holes.holes)
    return holes * (1.0 + density)
