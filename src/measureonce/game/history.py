"""
Linear undo/redo history over full game-state snapshots.

Snapshots come in two kinds: view snapshots (cursor or camera moved) and
action snapshots (the world changed: a cut, a drop, a hammered plank).
Undoing across an action whose view differs from its neighbour first only
moves the view back, so the player sees what is about to be undone.
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass, field

from measureonce.core.base import Camera, Vec2
from measureonce.game.coordset import Plank
from measureonce.game.level import Level


# plank, board position, nail positions
DonePlank = Tuple[Plank, Vec2, List[Vec2]]


def copy_done_planks(done_planks: List[DonePlank]) -> List[DonePlank]:
    return [(plank.copy(), pos, list(nails)) for plank, pos, nails in done_planks]


@dataclass(frozen=True)
class UndoState:
    """Immutable snapshot of everything a time-travel has to restore."""
    is_action: bool
    level: Level
    done_planks: List[DonePlank] = field(default_factory=list)
    cursor: Vec2 = field(default_factory=Vec2)
    camera: Camera = field(default_factory=Camera)

    def same_view(self, other: "UndoState") -> bool:
        return self.cursor == other.cursor and self.camera == other.camera


@dataclass(frozen=True)
class UndoStep:
    """What the caller should restore for one undo or redo request."""
    state: UndoState
    restore_level: bool

    @property
    def cursor(self) -> Vec2:
        return self.state.cursor

    @property
    def camera(self) -> Camera:
        return self.state.camera

    def level(self) -> Level:
        """Fresh copy of the snapshot's level, so the history stays untouched."""
        return self.state.level.copy()

    def done_planks(self) -> List[DonePlank]:
        return copy_done_planks(self.state.done_planks)


class UndoBuffer:
    """
    Ordered snapshots plus a cursor index.

    Invariant: 0 <= pos < len(states) for any buffer built with a level.
    """

    def __init__(self, level: Optional[Level] = None):
        if level is None:
            self.states: List[UndoState] = []
            self.pos = -1
        else:
            self.states = [UndoState(is_action=False, level=level.copy())]
            self.pos = 0
        # -1 after a soft undo, +1 after a soft redo
        self._soft = 0

    @classmethod
    def invalid(cls) -> "UndoBuffer":
        """Placeholder before any level is set up; every request is a no-op."""
        return cls()

    def __len__(self) -> int:
        return len(self.states)

    @property
    def valid(self) -> bool:
        return bool(self.states)

    def push_state(self, is_action: bool, level: Level, done_planks: List[DonePlank],
                   cursor: Vec2, camera: Camera):
        """Append a snapshot, discarding any redo states past the cursor."""
        del self.states[self.pos + 1:]
        self.states.append(UndoState(
            is_action=is_action,
            level=level.copy(),
            done_planks=copy_done_planks(done_planks),
            cursor=cursor,
            camera=camera,
        ))
        self.pos = len(self.states) - 1
        self._soft = 0

    def _get_state(self, direction: int) -> UndoState:
        return self.states[self.pos + direction]

    def current_state(self) -> Optional[UndoState]:
        if not self.valid:
            return None
        return self._get_state(0)

    def prev(self) -> Optional[UndoState]:
        if not self.has_back():
            return None
        return self._get_state(-1)

    def next(self) -> Optional[UndoState]:
        if not self.has_forward():
            return None
        return self._get_state(1)

    def has_back(self) -> bool:
        return self.pos > 0

    def has_forward(self) -> bool:
        return self.valid and self.pos < len(self.states) - 1

    def move_back(self):
        if self.has_back():
            self.pos -= 1
        self._soft = 0

    def move_forward(self):
        if self.has_forward():
            self.pos += 1
        self._soft = 0

    def undo(self) -> Optional[UndoStep]:
        """
        One undo request under the two-tier policy.

        Returns:
            UndoStep to apply, or None when there is nothing to undo
        """
        if self._soft == 1:
            # back out of a soft redo: just return to the current view
            self._soft = 0
            return UndoStep(self.current_state(), restore_level=False)

        prev = self.prev()
        if prev is None:
            return None

        current = self.current_state()
        if self._soft == 0 and current.is_action and not current.same_view(prev):
            self._soft = -1
            return UndoStep(prev, restore_level=False)

        self.move_back()
        return UndoStep(self.current_state(), restore_level=True)

    def redo(self) -> Optional[UndoStep]:
        """
        One redo request under the two-tier policy.

        Returns:
            UndoStep to apply, or None when there is nothing to redo
        """
        if self._soft == -1:
            self._soft = 0
            return UndoStep(self.current_state(), restore_level=False)

        nxt = self.next()
        if nxt is None:
            return None

        current = self.current_state()
        if self._soft == 0 and nxt.is_action and not nxt.same_view(current):
            self._soft = 1
            return UndoStep(nxt, restore_level=False)

        self.move_forward()
        return UndoStep(self.current_state(), restore_level=True)
