"""
Planar polyomino model: a set of lattice cells plus texture bookkeeping.

A CoordSet is the value type behind both the holes cut into the board and
the planks the player saws apart. Geometry lives in `cells`; `turns` and
`texture_offset` only exist so a painted wood texture stays aligned with the
shape while it is rotated and shifted around.
"""

from typing import Iterable, Iterator, List, Optional, Set, Tuple
from dataclasses import dataclass, field

from measureonce.core.base import Cell, NEIGHBOURS, Vec2, VecLike, as_cell, as_vec2
from measureonce.game.rotation import rotate_cells, rotate_vector


Extents = Tuple[Tuple[int, int], Tuple[int, int]]


@dataclass
class CoordSet:
    """Unordered set of unique integer cells with texture alignment state."""
    cells: Set[Cell] = field(default_factory=set)
    turns: int = 0
    texture_offset: Vec2 = field(default_factory=Vec2)

    def __post_init__(self):
        self.cells = {as_cell(c) for c in self.cells}
        self.turns %= 4
        self.texture_offset = as_vec2(self.texture_offset)

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, xy) -> bool:
        return self.contains(xy)

    def copy(self) -> "CoordSet":
        return CoordSet(set(self.cells), self.turns, self.texture_offset)

    def extents(self) -> Extents:
        """
        Inclusive bounding box ((min_x, max_x), (min_y, max_y)).

        The empty set reports ((0, 0), (0, 0)); use count() to detect emptiness.
        """
        if not self.cells:
            return ((0, 0), (0, 0))
        xs = [c[0] for c in self.cells]
        ys = [c[1] for c in self.cells]
        return ((min(xs), max(xs)), (min(ys), max(ys)))

    def size(self) -> Tuple[int, int]:
        (min_x, max_x), (min_y, max_y) = self.extents()
        return (max_x - min_x + 1, max_y - min_y + 1)

    def count(self) -> int:
        return len(self.cells)

    def contains(self, xy: VecLike) -> bool:
        return as_cell(xy) in self.cells

    def contains_xy(self, x: int, y: int) -> bool:
        return (x, y) in self.cells

    def touches(self, other: "CoordSet") -> bool:
        """True if a cell of self has a 4-connected neighbour in other."""
        return any(
            (x + dx, y + dy) in other.cells
            for x, y in self.cells
            for dx, dy in NEIGHBOURS
        )

    def overlaps(self, other: "CoordSet") -> bool:
        return not self.cells.isdisjoint(other.cells)

    def equals(self, other: "CoordSet") -> bool:
        """Exact cell-set equality, ignoring texture state."""
        return self.cells == other.cells

    def rotate(self):
        """Quarter turn counter-clockwise about the origin: (x, y) -> (-y, x)."""
        self.cells = set(rotate_cells(self.cells, 1))
        self.turns = (self.turns + 1) % 4

    def normalize(self) -> "CoordSet":
        """Translate so the bounding box starts at (0, 0) and forget the turns."""
        (min_x, _), (min_y, _) = self.extents()
        self.cells = {(x - min_x, y - min_y) for x, y in self.cells}
        self.turns = 0
        return self

    def shift(self, by: VecLike):
        """
        Translate every cell by `by`.

        texture_offset lives in the un-rotated frame of the shape, so the
        world-space shift is rotated back by `turns` quarter turns first.
        """
        dx, dy = as_cell(by)
        self.cells = {(x + dx, y + dy) for x, y in self.cells}
        self.texture_offset = self.texture_offset - rotate_vector((dx, dy), -self.turns)

    @staticmethod
    def merge(coordsets: Iterable["CoordSet"]) -> "CoordSet":
        """Union of the cells of all inputs, as a fresh shape."""
        cells: Set[Cell] = set()
        for coordset in coordsets:
            cells.update(coordset.cells)
        return CoordSet(cells)

    def components(self) -> List["CoordSet"]:
        """4-connected components, largest first."""
        remaining = set(self.cells)
        parts = []
        while remaining:
            start = remaining.pop()
            part = {start}
            to_check = [start]
            while to_check:
                x, y = to_check.pop()
                for dx, dy in NEIGHBOURS:
                    n = (x + dx, y + dy)
                    if n in remaining:
                        remaining.discard(n)
                        part.add(n)
                        to_check.append(n)
            parts.append(CoordSet(part, self.turns, self.texture_offset))
        parts.sort(key=lambda p: p.count(), reverse=True)
        return parts

    def is_connected(self) -> bool:
        return len(self.components()) <= 1

    def __str__(self) -> str:
        (min_x, max_x), (min_y, max_y) = self.extents()
        border = "|" + "-" * (max_x - min_x + 1) + "|\n"
        lines = [f"[{min_x},{max_x}]" + border]
        for row in range(min_y, max_y + 1):
            line = "".join(
                "#" if self.contains_xy(col, row) else " "
                for col in range(min_x, max_x + 1)
            )
            lines.append(f"|{line}|\n")
        lines.append(border)
        return "".join(lines)


Hole = CoordSet
Plank = CoordSet


@dataclass
class Holes:
    """Ordered list of holes, positioned in board space once a level is built."""
    holes: List[Hole] = field(default_factory=list)

    def __iter__(self) -> Iterator[Hole]:
        return iter(self.holes)

    def __len__(self) -> int:
        return len(self.holes)

    def copy(self) -> "Holes":
        return Holes([h.copy() for h in self.holes])

    def total_cells(self) -> int:
        return sum(h.count() for h in self.holes)

    def find_match(self, shape: CoordSet) -> Optional[int]:
        """Index of the hole exactly filled by `shape`, if any."""
        for i, hole in enumerate(self.holes):
            if shape.equals(hole):
                return i
        return None
