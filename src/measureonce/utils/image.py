"""
Mask images of coordinate sets, the input a renderer samples wood texture with.
"""

from typing import Iterable

import numpy as np
from PIL import Image

from measureonce.game.coordset import CoordSet


def coordset_array(coordsets: Iterable[CoordSet], margin: int = 1) -> np.ndarray:
    """
    Boolean occupancy grid of the merged cells.

    Row 0 is the lowest y. The grid is the merged shape's size plus
    `margin` cells on every side, aligned so the merged minimum corner
    lands at (margin, margin).
    """
    merged = CoordSet.merge(coordsets)
    width, height = merged.size()
    (min_x, _), (min_y, _) = merged.extents()

    grid = np.zeros((height + 2 * margin, width + 2 * margin), dtype=bool)
    for x, y in merged.cells:
        grid[y - min_y + margin, x - min_x + margin] = True
    return grid


def coordset_image(coordsets: Iterable[CoordSet], margin: int = 1) -> Image.Image:
    """
    8-bit mask image of the merged cells (255 = filled).

    The image is flipped vertically so that higher y is drawn further up.
    """
    grid = coordset_array(coordsets, margin)
    data = np.flipud(grid).astype(np.uint8) * 255
    return Image.fromarray(np.ascontiguousarray(data))
