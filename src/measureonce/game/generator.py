"""
Procedural hole and plank generation.

Every function takes the random generator explicitly so a level is a pure
function of its seed.
"""

import math
import random
from typing import List, Optional, Tuple

from measureonce.core.base import NEIGHBOURS, Vec2
from measureonce.game.coordset import Hole, Holes, Plank
from measureonce.utils.display import LiveLogger


# consecutive rejected samples before gen_hole picks from the frontier
HOLE_SAMPLE_LIMIT = 10000
TEXTURE_OFFSET_RANGE = 1000


def random_texture_offset(rng: random.Random) -> Vec2:
    return Vec2(rng.randrange(TEXTURE_OFFSET_RANGE), rng.randrange(TEXTURE_OFFSET_RANGE))


def _frontier(hole: Hole) -> List[Tuple[int, int]]:
    """Empty cells 4-adjacent to the hole, in a stable order."""
    frontier = {
        (x + dx, y + dy)
        for x, y in hole.cells
        for dx, dy in NEIGHBOURS
    }
    return sorted(frontier - hole.cells)


def gen_hole(size: int, rng: random.Random,
             sample_limit: int = HOLE_SAMPLE_LIMIT) -> Hole:
    """
    Grow a connected hole of exactly `size` cells from (0, 0).

    Each new cell is sampled uniformly from the current extents grown by one
    on every side and accepted when it is empty and touches the hole.

    Args:
        size: number of cells, at least 1
        rng: seeded random generator
        sample_limit: rejections in a row before sampling the frontier directly

    Returns:
        Hole (not normalized)
    """
    hole = Hole({(0, 0)}, texture_offset=random_texture_offset(rng))

    for _ in range(1, size):
        (min_x, max_x), (min_y, max_y) = hole.extents()

        rejected = 0
        while True:
            if rejected >= sample_limit:
                hole.cells.add(rng.choice(_frontier(hole)))
                break

            nxt = (
                rng.randint(min_x - 1, max_x + 1),
                rng.randint(min_y - 1, max_y + 1),
            )
            if nxt not in hole.cells:
                # valid coord, check if attached
                if any((nxt[0] + dx, nxt[1] + dy) in hole.cells for dx, dy in NEIGHBOURS):
                    hole.cells.add(nxt)
                    break
            rejected += 1

    return hole


def hole_size_bounds(count: int, total: int) -> Tuple[int, int]:
    """(smallest, largest) hole size allowed when splitting `total` cells `count` ways."""
    avg = total / count
    # widened to the integer average so `count` holes can always share `total`
    smallest = min(math.ceil(avg * 0.5), total // count)
    largest = max(math.floor(avg * 1.5), -(-total // count))
    return smallest, largest


def gen_holes(count: int, total: int, rng: random.Random,
              logger: Optional[LiveLogger] = None,
              sample_limit: int = HOLE_SAMPLE_LIMIT) -> Holes:
    """
    Split `total` cells into `count` normalized holes of bounded size.

    Sizes are drawn one hole at a time; each draw is clamped so the cells
    left over can still be shared out within the bounds.

    Args:
        count: number of holes, at least 1
        total: total number of cells, at least `count`
        rng: seeded random generator
        logger: optional logger for the size clamps

    Returns:
        Holes
    """
    remainder = total
    smallest, largest = hole_size_bounds(count, total)

    if logger:
        logger.log_debug(f"count: {count}, total: {total}, smallest: {smallest}, largest: {largest}")

    holes = []
    while count > 0:
        count -= 1
        small = max(smallest, remainder - min(count * largest, remainder))
        large = min(largest, remainder - min(count * smallest, remainder))
        size = rng.randint(small, large)
        if logger:
            logger.log_debug(f"remaining: {remainder}, piece: [{small},{large}] -> {size}")
        holes.append(gen_hole(size, rng, sample_limit).normalize())
        remainder -= size

    return Holes(holes)


def _attach_hole(plank: Plank, hole: Hole, rng: random.Random) -> Plank:
    """Weld a copy of `hole` onto the plank at the rightmost contact before overlap."""
    hole = hole.copy()
    for _ in range(rng.randrange(4)):
        hole.rotate()

    for _ in range(rng.randrange(4)):
        plank.rotate()

    (plank_min_x, _), (plank_min_y, plank_max_y) = plank.extents()
    (_, hole_max_x), (hole_min_y, hole_max_y) = hole.extents()

    y_shift = rng.randint(plank_min_y - hole_max_y, plank_max_y - hole_min_y)
    hole.shift((plank_min_x - hole_max_x - 1, y_shift))

    possible = []
    while True:
        if plank.touches(hole):
            possible.append(hole.copy())
        hole.shift((1, 0))
        if plank.overlaps(hole):
            break

    plank.cells.update(possible[-1].cells)
    return plank


def plank_from_holes(holes: Holes, rng: random.Random) -> Plank:
    """
    Assemble one connected plank containing a transformed copy of every hole.

    Args:
        holes: the holes to weld together, at least one
        rng: seeded random generator

    Returns:
        normalized Plank with a random texture offset
    """
    indexes = list(range(len(holes.holes)))
    rng.shuffle(indexes)

    plank = Plank(set(holes.holes[indexes[0]].cells))
    for _ in range(rng.randrange(4)):
        plank.rotate()

    for i in indexes[1:]:
        plank = _attach_hole(plank, holes.holes[i], rng)

    for _ in range(rng.randrange(4)):
        plank.rotate()

    plank.texture_offset = random_texture_offset(rng)
    return plank.normalize()


def arrange_holes(holes: Holes) -> Vec2:
    """
    Lay the holes out on the board in a grid, in place.

    Holes start at (1, 1) with one empty column and row between neighbours.

    Returns:
        size of the hole board (max corner plus a one cell margin)
    """
    count = len(holes.holes)
    grid_y = max(1, math.floor(math.sqrt(count / 2.0)))
    grid_x = math.ceil(count / grid_y)

    extents = Vec2(0, 0)
    grid_col = 0
    x_off = 1
    y_off = 1
    max_y_row = 0

    for hole in holes.holes:
        hole.shift((x_off, y_off))
        (_, hole_max_x), (_, hole_max_y) = hole.extents()
        max_y_row = max(max_y_row, hole_max_y)
        x_off = hole_max_x + 2
        extents = Vec2(max(extents.x, hole_max_x + 2), max(extents.y, hole_max_y + 2))
        grid_col += 1
        if grid_col == grid_x:
            grid_col = 0
            x_off = 1
            y_off = max_y_row + 2
            max_y_row = 0

    return extents


def build_level(level_def, logger: Optional[LiveLogger] = None,
                sample_limit: int = HOLE_SAMPLE_LIMIT):
    """
    Deterministically build a Level from a LevelDef.

    Args:
        level_def: LevelDef (num_holes, total_blocks, seed)
        logger: optional logger

    Returns:
        Level with setup=True and a single plank below the hole board
    """
    from measureonce.game.level import Level

    rng = random.Random(level_def.seed)
    holes = gen_holes(level_def.num_holes, level_def.total_blocks, rng, logger, sample_limit)
    holes.holes.sort(key=lambda h: h.size()[1], reverse=True)
    plank = plank_from_holes(holes, rng)

    extents = arrange_holes(holes)

    _, plank_height = plank.size()
    position = Vec2(0, -(plank_height + 1))

    if logger:
        logger.log_debug(f"uber hole: {Hole.merge(holes.holes).extents()}\n{Hole.merge(holes.holes)}")
        logger.log_debug(f"plank: {plank.extents()}\n{plank}")

    return Level(extents=extents, holes=holes, planks=[(plank, position)], setup=True)
