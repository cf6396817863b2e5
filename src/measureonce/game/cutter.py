"""
Interactive plank cutting.

The cutter walks the lattice points at cell corners (point p is the lower
left corner of cell p). Every unit step crosses the edge between two cells;
stepping along an edge with plank on both sides saws it, retracing a sawn
edge mends it. Once the sawn edges disconnect the plank the cut is finished
and can be committed, replacing the plank with its two pieces.
"""

from typing import List, Optional, Set, Tuple
from dataclasses import dataclass, field

from measureonce.core.base import NEIGHBOURS, ONE, Cell, CutStep, Vec2, VecLike, as_vec2
from measureonce.game.coordset import Plank


Edge = Tuple[Cell, Cell]

# the four cells around a lattice point p are p + offset - (1, 1)
CORNER_OFFSETS: Tuple[Vec2, ...] = (Vec2(0, 0), Vec2(1, 0), Vec2(0, 1), Vec2(1, 1))


def edge_key(a: Cell, b: Cell) -> Edge:
    """Order-independent key for the edge shared by two adjacent cells."""
    return (a, b) if a <= b else (b, a)


def cells_around(point: VecLike) -> List[Cell]:
    point = as_vec2(point)
    return [(point + offset - ONE).to_tuple() for offset in CORNER_OFFSETS]


def find_cut_start(plank: Plank, plank_pos: Vec2, cursor: Vec2) -> Optional[Vec2]:
    """
    Lattice point the cutter starts from, or None if no cut can begin here.

    The cursor has to be over a plank cell, and one of the corners of that
    cell has to sit on the plank boundary: 2 or 3 of its four surrounding
    cells belong to the plank.
    """
    if not plank.contains(cursor - plank_pos):
        return None

    for offset in CORNER_OFFSETS:
        base = cursor + offset - plank_pos
        count = sum(1 for cell in cells_around(base) if plank.contains(cell))
        if 1 < count < 4:
            return cursor + offset
    return None


def affected_cells(prev: Vec2, direction: Vec2) -> Optional[Tuple[Vec2, Vec2]]:
    """The two cells either side of the edge crossed moving `direction` from `prev`."""
    step = direction.to_tuple()
    if step == (1, 0):
        return (prev - (0, 1), prev)
    if step == (-1, 0):
        return (prev - ONE, prev - (1, 0))
    if step == (0, -1):
        return (prev - ONE, prev - (0, 1))
    if step == (0, 1):
        return (prev - (1, 0), prev)
    return None


@dataclass
class Cut:
    """Edges sawn so far in one cutting session."""
    visited: Set[Vec2] = field(default_factory=set)
    separated: Set[Edge] = field(default_factory=set)
    finished: bool = False

    def split(self, plank: Plank) -> Optional[List[Plank]]:
        """
        Split the plank along the separated edges.

        Flood fills from one side of an arbitrary sawn edge without crossing
        any sawn edge. If that reaches the whole plank the cut does not
        separate anything yet.

        Returns:
            [reached, rest] or None; both keep the plank's texture state
        """
        if not self.separated:
            return None

        first = next(iter(self.separated))[0]
        connected = {first}
        to_check = [first]

        while to_check:
            x, y = to_check.pop()
            for dx, dy in NEIGHBOURS:
                n = (x + dx, y + dy)
                if n in plank.cells and n not in connected and edge_key(n, (x, y)) not in self.separated:
                    connected.add(n)
                    to_check.append(n)

        if len(connected) == plank.count():
            return None

        second = plank.cells - connected
        return [
            Plank(connected, plank.turns, plank.texture_offset),
            Plank(second, plank.turns, plank.texture_offset),
        ]

    def is_finished(self, plank: Plank) -> bool:
        return self.split(plank) is not None


@dataclass
class CutSession:
    """The cutter while a cut is being traced across one plank."""
    plank: Plank
    plank_pos: Vec2
    position: Vec2
    prev: Vec2
    cut: Cut = field(default_factory=Cut)

    @classmethod
    def begin(cls, plank: Plank, plank_pos: Vec2, cursor: Vec2) -> Optional["CutSession"]:
        """Start cutting at the cursor, or None if there is no valid starting edge."""
        start = find_cut_start(plank, plank_pos, cursor)
        if start is None:
            return None
        return cls(plank=plank, plank_pos=plank_pos, position=start, prev=start)

    @property
    def finished(self) -> bool:
        return self.cut.finished

    def move(self, direction: VecLike) -> CutStep:
        return self.step(self.position + direction)

    def step(self, new_position: VecLike) -> CutStep:
        """
        Move the cutter to `new_position`.

        Rejected moves snap the cutter back to its previous position.
        """
        new_position = as_vec2(new_position)
        self.position = new_position
        if new_position == self.prev:
            return CutStep.SLIDE

        affected = affected_cells(self.prev, new_position - self.prev)
        if affected is None:
            self.position = self.prev
            return CutStep.WEIRD

        a = (affected[0] - self.plank_pos).to_tuple()
        b = (affected[1] - self.plank_pos).to_tuple()
        in_a, in_b = self.plank.contains(a), self.plank.contains(b)

        if not in_a and not in_b:
            self.position = self.prev
            return CutStep.AIR

        key = edge_key(a, b)
        if key in self.cut.separated:
            self.cut.separated.discard(key)
            self.cut.visited.discard(self.prev)
            self.prev = new_position
            self.cut.finished = self.cut.is_finished(self.plank)
            return CutStep.UNCUT

        if self.cut.finished:
            self.position = self.prev
            return CutStep.BLOCKED

        if in_a and in_b:
            self.cut.visited.add(self.prev)
            self.cut.visited.add(new_position)
            self.cut.separated.add(key)
            self.prev = new_position
            if self.cut.is_finished(self.plank):
                self.cut.finished = True
                return CutStep.FINISHED
            return CutStep.CUT

        self.prev = new_position
        return CutStep.SLIDE

    def commit(self) -> Optional[List[Tuple[Plank, Vec2]]]:
        """
        The two pieces, each normalized, with board positions compensated.

        Returns None while the cut does not separate the plank.
        """
        if not self.cut.finished:
            return None

        pieces = self.cut.split(self.plank)
        if pieces is None:
            return None

        result = []
        for piece in pieces:
            (min_x, _), (min_y, _) = piece.extents()
            shift = Vec2(-min_x, -min_y)
            piece.shift(shift)
            result.append((piece, self.plank_pos - shift))
        return result

    def sawn_segments(self) -> List[Tuple[Vec2, Vec2]]:
        """Board-space lattice segments of the sawn edges, for drawing."""
        segments = []
        for a, b in sorted(self.cut.separated):
            if a[0] == b[0]:
                # horizontal edge between vertically adjacent cells
                start = Vec2(a[0], b[1]) + self.plank_pos
                segments.append((start, start + (1, 0)))
            else:
                start = Vec2(b[0], a[1]) + self.plank_pos
                segments.append((start, start + (0, 1)))
        return segments
