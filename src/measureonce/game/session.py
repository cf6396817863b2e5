"""
Game session: the board, the cursor and the planks' interaction states.

Each plank carries an explicit PlankState. The session owns the transition
functions; callers only send intents (move, grab/drop, rotate, cut, undo).
"""

import random
from typing import Dict, List, Optional, Set

from measureonce.core.base import Camera, CutStep, PlankState, Vec2, VecLike, as_vec2
from measureonce.core.config import ControlsConfig
from measureonce.game.cutter import CutSession
from measureonce.game.history import DonePlank, UndoBuffer, UndoStep
from measureonce.game.level import Level
from measureonce.utils.display import LiveLogger


ALLOWED_TRANSITIONS: Dict[PlankState, Set[PlankState]] = {
    PlankState.IDLE: {PlankState.TARGETED},
    PlankState.TARGETED: {PlankState.IDLE, PlankState.SELECTED, PlankState.CUTTING},
    PlankState.SELECTED: {PlankState.TARGETED, PlankState.IDLE},
    PlankState.CUTTING: {PlankState.TARGETED, PlankState.IDLE},
}

ROTATE_LEFT = 1
ROTATE_RIGHT = 3


class GameSession:
    """
    One level being played.

    Args:
        level: freshly built level, kept as the restart base
        display_rng: random source for cosmetic choices (nail placement);
            kept apart from the seeded puzzle generator
        controls: zoom limits and defaults
        logger: optional LiveLogger
    """

    def __init__(self, level: Level, display_rng: Optional[random.Random] = None,
                 controls: Optional[ControlsConfig] = None,
                 logger: Optional[LiveLogger] = None):
        self.base = level.copy()
        self.controls = controls or ControlsConfig()
        self.display_rng = display_rng or random.Random()
        self.logger = logger
        self._setup(self.base)

    def _setup(self, level: Level):
        self.level = level.copy()
        self.level.setup = False
        self.done_planks: List[DonePlank] = []
        self.cursor = Vec2(0, 0)
        self.camera = Camera(Vec2(0, 0), self.controls.default_zoom)
        self.cutter: Optional[CutSession] = None
        self._reset_states()
        self.history = UndoBuffer(self.level)

    def _log(self, message: str):
        if self.logger:
            self.logger.log_debug(message)

    # plank state machine

    def _reset_states(self):
        self.plank_states: List[PlankState] = [PlankState.IDLE] * len(self.level.planks)
        self._update_target()

    def _transition(self, index: int, new_state: PlankState):
        old_state = self.plank_states[index]
        if old_state == new_state:
            return
        if new_state not in ALLOWED_TRANSITIONS[old_state]:
            raise ValueError(f"Plank {index}: invalid transition {old_state.value} -> {new_state.value}")
        self.plank_states[index] = new_state

    def _find(self, state: PlankState) -> Optional[int]:
        for i, s in enumerate(self.plank_states):
            if s == state:
                return i
        return None

    @property
    def target(self) -> Optional[int]:
        return self._find(PlankState.TARGETED)

    @property
    def selected(self) -> Optional[int]:
        return self._find(PlankState.SELECTED)

    @property
    def cutting(self) -> Optional[int]:
        return self._find(PlankState.CUTTING)

    def plank_at(self, point: VecLike) -> Optional[int]:
        point = as_vec2(point)
        for i, (plank, pos) in enumerate(self.level.planks):
            if plank.contains(point - pos):
                return i
        return None

    def _update_target(self):
        """Target the plank under the cursor, keeping the current one while it still is."""
        if self.selected is not None or self.cutting is not None:
            return

        current = self.target
        if current is not None:
            plank, pos = self.level.planks[current]
            if plank.contains(self.cursor - pos):
                return
            self._transition(current, PlankState.IDLE)

        found = self.plank_at(self.cursor)
        if found is not None:
            self._transition(found, PlankState.TARGETED)

    # intents

    def move_cursor(self, direction: VecLike) -> Optional[CutStep]:
        """
        Move the cursor one step, or the cutter while a cut is in progress.

        Returns:
            the CutStep outcome while cutting, otherwise None
        """
        direction = as_vec2(direction)
        if self.cutter is not None:
            step = self.cutter.move(direction)
            self._log(f"cut step {direction.to_tuple()}: {step.value}")
            return step

        self.cursor = self.cursor + direction
        selected = self.selected
        if selected is not None:
            plank, pos = self.level.planks[selected]
            self.level.planks[selected] = (plank, pos + direction)
        self._update_target()
        return None

    def grab_or_drop(self) -> bool:
        """Pick up the targeted plank, or put down the selected one."""
        if self.cutter is not None:
            return False

        selected = self.selected
        if selected is not None:
            self._log("drop")
            self._transition(selected, PlankState.TARGETED)
            self._update_target()
            self.hammer_home(push=False)
            self.push_action()
            return True

        target = self.target
        if target is not None:
            self._log("grab")
            self._transition(target, PlankState.SELECTED)
            return True
        return False

    def rotate_selected(self, turns: int = ROTATE_LEFT) -> bool:
        """Rotate the selected plank a quarter turn per step about the cursor cell."""
        selected = self.selected
        if selected is None:
            return False

        plank, pos = self.level.planks[selected]
        for _ in range(turns % 4):
            plank.rotate()
            offset = self.cursor - pos
            pos = pos + offset - offset.rot90()
        self.level.planks[selected] = (plank, pos)
        return True

    def begin_cut(self) -> bool:
        target = self.target
        if self.cutter is not None or target is None:
            return False

        plank, pos = self.level.planks[target]
        cutter = CutSession.begin(plank, pos, self.cursor)
        if cutter is None:
            return False

        self._log(f"begin cut at {cutter.position.to_tuple()}")
        self.cutter = cutter
        self._transition(target, PlankState.CUTTING)
        return True

    def cancel_cut(self) -> bool:
        index = self.cutting
        if self.cutter is None or index is None:
            return False

        self._log("cancel cut")
        self.cutter = None
        self._transition(index, PlankState.TARGETED)
        self._update_target()
        return True

    def finish_cut(self) -> bool:
        """Commit a finished cut: the plank is replaced by its two pieces."""
        index = self.cutting
        if self.cutter is None or index is None:
            return False

        pieces = self.cutter.commit()
        if pieces is None:
            return False

        self._log("finish cut")
        del self.level.planks[index]
        self.level.planks.extend(pieces)
        self.cutter = None
        self._reset_states()
        self.hammer_home(push=False)
        self.push_action()
        return True

    def hammer_home(self, push: bool = True) -> bool:
        """
        Hammer in the first loose plank that exactly fills a hole.

        The hole disappears and the plank joins the done planks with a few
        nails chosen by the display random source.
        """
        for i, (plank, pos) in enumerate(self.level.planks):
            if self.plank_states[i] in (PlankState.SELECTED, PlankState.CUTTING):
                continue

            shifted = plank.copy()
            shifted.shift(pos)
            hole_index = self.level.holes.find_match(shifted)
            if hole_index is None:
                continue

            self._log("hammer!")
            del self.level.holes.holes[hole_index]
            del self.level.planks[i]

            coords = sorted(shifted.cells)
            self.display_rng.shuffle(coords)
            most = max(1, shifted.count() // 2)
            nails = [Vec2(x, y) for x, y in coords[:self.display_rng.randint(1, most)]]
            self.done_planks.append((plank, pos, nails))

            self._reset_states()
            if push:
                self.push_action()
            return True
        return False

    def is_complete(self) -> bool:
        return self.level.is_complete()

    # camera

    def move_camera(self, delta: VecLike):
        self.camera = Camera(self.camera.position + delta, self.camera.z)

    def zoom(self, delta: int):
        z = min(self.controls.max_zoom, max(self.controls.min_zoom, self.camera.z + delta))
        self.camera = Camera(self.camera.position, z)

    def focus(self):
        """Centre the camera on the hole board and every loose plank."""
        points = [Vec2(0, 0), self.level.extents]
        for plank, pos in self.level.planks:
            (min_x, max_x), (min_y, max_y) = plank.extents()
            points.append(pos + (min_x, min_y))
            points.append(pos + (max_x + 1, max_y + 1))
        min_x = min(p.x for p in points)
        max_x = max(p.x for p in points)
        min_y = min(p.y for p in points)
        max_y = max(p.y for p in points)
        centre = Vec2((min_x + max_x) // 2, (min_y + max_y) // 2)
        self.camera = Camera(centre, self.camera.z)

    # history

    def push_action(self):
        self.history.push_state(True, self.level, self.done_planks, self.cursor, self.camera)

    def snapshot_view(self) -> bool:
        """Record a view-only snapshot if cursor or camera moved since the last one."""
        current = self.history.current_state()
        if current is not None and current.cursor == self.cursor and current.camera == self.camera:
            return False
        self.history.push_state(False, self.level, self.done_planks, self.cursor, self.camera)
        return True

    def _apply(self, step: Optional[UndoStep]) -> bool:
        if step is None:
            return False

        self.cutter = None
        self.cursor = step.cursor
        self.camera = step.camera
        if step.restore_level:
            self.level = step.level()
            self.done_planks = step.done_planks()
        self._reset_states()
        return True

    def undo(self) -> bool:
        return self._apply(self.history.undo())

    def redo(self) -> bool:
        return self._apply(self.history.redo())

    def restart(self):
        self._setup(self.base)
