"""
Base value types shared by the measureonce game core.

This module defines the small vocabulary every other module speaks:
lattice vectors, board positions, the camera, the per-plank interaction
state and the outcome codes of the cutting tool.
"""

from __future__ import annotations
from typing import Tuple, Union
from dataclasses import dataclass
from enum import Enum


Cell = Tuple[int, int]


@dataclass(frozen=True)
class Vec2:
    """Integer 2D lattice vector."""
    x: int = 0
    y: int = 0

    def __add__(self, other: "VecLike") -> "Vec2":
        other = as_vec2(other)
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "VecLike") -> "Vec2":
        other = as_vec2(other)
        return Vec2(self.x - other.x, self.y - other.y)

    def __neg__(self) -> "Vec2":
        return Vec2(-self.x, -self.y)

    def rot90(self) -> "Vec2":
        """Quarter turn counter-clockwise about the origin."""
        return Vec2(-self.y, self.x)

    def to_tuple(self) -> Cell:
        return (self.x, self.y)


VecLike = Union[Vec2, Cell]

ZERO = Vec2(0, 0)
ONE = Vec2(1, 1)

# 4-connected neighbour offsets
NEIGHBOURS: Tuple[Cell, ...] = ((1, 0), (0, 1), (-1, 0), (0, -1))


def as_vec2(value: VecLike) -> Vec2:
    """Accept either a Vec2 or a plain (x, y) tuple."""
    if isinstance(value, Vec2):
        return value
    return Vec2(int(value[0]), int(value[1]))


def as_cell(value: VecLike) -> Cell:
    if isinstance(value, Vec2):
        return value.to_tuple()
    return (int(value[0]), int(value[1]))


@dataclass(frozen=True)
class Camera:
    """Camera pan position and zoom height."""
    position: Vec2 = ZERO
    z: int = 20


class PlankState(Enum):
    """Interaction state of a plank on the board."""
    IDLE = "idle"
    TARGETED = "targeted"
    SELECTED = "selected"
    CUTTING = "cutting"


class CutStep(Enum):
    """Outcome of moving the cutter by one lattice step."""
    WEIRD = "WeirdMove"          # not a unit step, snapped back
    AIR = "AirMove"              # no plank cell on either side, snapped back
    BLOCKED = "FinishedBlock"    # cut already separates the plank, snapped back
    UNCUT = "UnCut"              # retraced an existing cut edge
    CUT = "Cut"                  # new edge cut, plank still connected
    FINISHED = "Finished"        # new edge cut, plank now separates
    SLIDE = "Slide"              # moved along the plank boundary

    @property
    def accepted(self) -> bool:
        return self not in (CutStep.WEIRD, CutStep.AIR, CutStep.BLOCKED)
