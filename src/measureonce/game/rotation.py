"""
Quarter-turn rotation matrices for the integer lattice.
"""

import numpy as np
from typing import Iterable, List, Tuple


def generate_4_rotations() -> List[np.ndarray]:
    """
    Generate the four planar rotation matrices (the cyclic group C4).

    Index k rotates by k * 90 degrees counter-clockwise.
    """
    R90 = np.array([
        [0, -1],
        [1, 0]
    ], dtype=int)

    return [np.linalg.matrix_power(R90, i) for i in range(4)]


# precomputed, index = number of counter-clockwise quarter turns
ROTATION_MATRICES = generate_4_rotations()


def get_rotation_matrix(turns: int) -> np.ndarray:
    """
    Matrix for `turns` quarter turns; negative turns rotate clockwise.
    """
    return ROTATION_MATRICES[turns % 4]


def rotate_vector(vec: Tuple[int, int], turns: int) -> Tuple[int, int]:
    """Rotate a single lattice vector by `turns` quarter turns."""
    rotated = get_rotation_matrix(turns) @ np.array(vec, dtype=int)
    return (int(rotated[0]), int(rotated[1]))


def rotate_cells(cells: Iterable[Tuple[int, int]], turns: int) -> List[Tuple[int, int]]:
    """Rotate every cell about the origin."""
    cells = list(cells)
    if not cells:
        return []
    points = np.array(cells, dtype=int)
    rotated = points @ get_rotation_matrix(turns).T
    return [(int(x), int(y)) for x, y in rotated]
