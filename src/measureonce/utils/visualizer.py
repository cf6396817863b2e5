"""
Matplotlib views of a level: the hole board, the loose planks and the
planks already hammered home.
"""

import matplotlib
import matplotlib.pyplot as plt
from matplotlib.colors import to_rgba
from matplotlib.patches import Rectangle
from typing import List, Optional, Sequence, Tuple

from measureonce.core.base import Vec2
from measureonce.game.coordset import CoordSet
from measureonce.game.level import Level


PLANK_COLORS = [
    '#D9A066',  # pine
    '#B5835A',  # oak
    '#8F563B',  # walnut
    '#E3C08D',  # birch
    '#C68E5B',  # cedar
    '#A0522D',  # sienna
    '#DEB887',  # burlywood
    '#CD853F',  # peru
]

HOLE_COLOR = '#2D2D2D'
BOARD_COLOR = '#6B4F3A'
DONE_COLOR = '#9E9E9E'


def get_plank_color(index: int) -> str:
    return PLANK_COLORS[index % len(PLANK_COLORS)]


def draw_coordset(ax, coordset: CoordSet, offset: Vec2, color: str,
                  alpha: float = 1.0, edge_color: str = 'black', linewidth: float = 0.8):
    """
    Draw every cell of a coordinate set as a unit square.

    Args:
        ax: matplotlib axes
        coordset: cells to draw
        offset: board position of the set's origin
        color: face colour
    """
    for x, y in coordset.cells:
        ax.add_patch(Rectangle(
            (x + offset.x, y + offset.y), 1, 1,
            facecolor=to_rgba(color, alpha),
            edgecolor=edge_color,
            linewidth=linewidth,
        ))


def _frame(ax, points: List[Tuple[int, int]], margin: int = 1):
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    ax.set_xlim(min(xs) - margin, max(xs) + margin)
    ax.set_ylim(min(ys) - margin, max(ys) + margin)
    ax.set_aspect('equal')
    ax.set_xticks([])
    ax.set_yticks([])


def visualize_level(level: Level, done_planks: Optional[Sequence] = None,
                    cursor: Optional[Vec2] = None,
                    cut_segments: Optional[Sequence[Tuple[Vec2, Vec2]]] = None,
                    title: str = "Level") -> plt.Figure:
    """
    Draw the hole board with the planks at their board positions.

    Args:
        level: level to draw
        done_planks: (plank, position, nails) tuples already hammered in
        cursor: cursor cell to mark
        cut_segments: lattice segments of an in-progress cut
        title: figure title

    Returns:
        matplotlib Figure
    """
    fig, ax = plt.subplots(figsize=(8, 8))

    board = level.extents
    ax.add_patch(Rectangle((0, 0), board.x, board.y, facecolor=BOARD_COLOR, edgecolor='black'))
    points = [(0, 0), (board.x, board.y)]

    for hole in level.holes.holes:
        draw_coordset(ax, hole, Vec2(0, 0), HOLE_COLOR, edge_color=HOLE_COLOR)

    for plank, pos, nails in done_planks or []:
        draw_coordset(ax, plank, pos, DONE_COLOR)
        for nail in nails:
            ax.plot(nail.x + 0.5, nail.y + 0.5, 'o', color='#555555', markersize=4)

    for i, (plank, pos) in enumerate(level.planks):
        draw_coordset(ax, plank, pos, get_plank_color(i), alpha=0.95)
        (min_x, max_x), (min_y, max_y) = plank.extents()
        points.append((pos.x + min_x, pos.y + min_y))
        points.append((pos.x + max_x + 1, pos.y + max_y + 1))

    for start, end in cut_segments or []:
        ax.plot([start.x, end.x], [start.y, end.y], '-', color='white', linewidth=3)

    if cursor is not None:
        ax.plot(cursor.x + 0.5, cursor.y + 0.5, 'o', color='white',
                markeredgecolor='black', markersize=10)

    _frame(ax, points)
    ax.set_title(title, fontsize=14, fontweight='bold')
    return fig


def save_level_visualization(level: Level, filename: str, title: str = "Level",
                             dpi: int = 150, **kwargs) -> str:
    """Render a level to an image file and return the file name."""
    fig = visualize_level(level, title=title, **kwargs)
    fig.savefig(filename, dpi=dpi, bbox_inches='tight', facecolor='white')
    plt.close(fig)
    return filename


def use_headless_backend():
    """Switch matplotlib to the file-only Agg backend."""
    matplotlib.use('Agg')
