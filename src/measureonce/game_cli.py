"""
Interactive text front end for playing a level set in the terminal.
"""

import random
from typing import Optional

from measureonce.core.base import CutStep, Vec2
from measureonce.core.config import Config
from measureonce.core.registry import get_level_set_builder
from measureonce.game.level import LevelDef, LevelSet, random_level_def
from measureonce.game.session import ROTATE_LEFT, ROTATE_RIGHT, GameSession
from measureonce.utils.display import LiveLogger


DIRECTIONS = {
    "w": Vec2(0, 1),
    "a": Vec2(-1, 0),
    "s": Vec2(0, -1),
    "d": Vec2(1, 0),
}


def render_board(session: GameSession) -> str:
    """
    Character picture of the board, highest row first.

      '.' board   ' ' hole   '0'-'9' loose plank   '=' done plank
      '@' cursor  '+' cutter
    """
    level = session.level
    grid = {}

    for x in range(level.extents.x):
        for y in range(level.extents.y):
            grid[(x, y)] = "."
    for hole in level.holes.holes:
        for cell in hole.cells:
            grid[cell] = " "
    for plank, pos, _ in session.done_planks:
        for x, y in plank.cells:
            grid[(x + pos.x, y + pos.y)] = "="
    for i, (plank, pos) in enumerate(level.planks):
        mark = str(i % 10)
        for x, y in plank.cells:
            grid[(x + pos.x, y + pos.y)] = mark
    grid[session.cursor.to_tuple()] = "@"
    if session.cutter is not None:
        grid[session.cutter.position.to_tuple()] = "+"

    xs = [c[0] for c in grid]
    ys = [c[1] for c in grid]
    rows = []
    for y in range(max(ys), min(ys) - 1, -1):
        rows.append("".join(grid.get((x, y), " ") for x in range(min(xs), max(xs) + 1)))
    return "\n".join(rows)


class MeasureOnceGame:
    """Terminal game: one level set, one session at a time."""

    def __init__(self, config: Optional[Config] = None, verbose: bool = False):
        self.config = config or Config()
        self.logger = LiveLogger(verbose=True, debug=verbose)
        self.rng = random.Random()
        self.level_set: Optional[LevelSet] = None
        self.level_def: Optional[LevelDef] = None
        self.session: Optional[GameSession] = None

    def load_set(self, kind: str) -> bool:
        """Build a registered level set and start its first level."""
        try:
            builder = get_level_set_builder(kind)
        except KeyError as e:
            print(e.args[0])
            return False

        self.logger.log_action("Building level set", kind)
        self.level_set = builder(self.config)
        print(f"\n=== {self.level_set.title} ({len(self.level_set)} levels) ===")
        return self.start_level(self.level_set.current())

    def start_level(self, level_def: Optional[LevelDef]) -> bool:
        if level_def is None:
            print("No level to start")
            return False

        self.level_def = level_def
        level = level_def.build(
            logger=self.logger,
            sample_limit=self.config.generator.hole_sample_limit,
        )
        self.session = GameSession(level, display_rng=self.rng,
                                   controls=self.config.controls, logger=self.logger)
        self.session.focus()
        print(f"\n=== Level: {level_def.num_holes} holes, {level_def.total_blocks} blocks, seed {level_def.seed} ===")
        print(f"Difficulty: {level.difficulty():.3f}")
        self.show_board()
        return True

    def next_level(self) -> bool:
        nxt = self.level_set.advance() if self.level_set else None
        if nxt is None:
            nxt = random_level_def(self.rng, self.config.generator)
            self.logger.log_info("Level set finished, here is a random level")
        return self.start_level(nxt)

    def show_board(self):
        if not self.session:
            print("No level loaded")
            return
        print()
        print(render_board(self.session))

    def show_state(self):
        """Show the planks, holes and history position."""
        if not self.session:
            print("No level loaded")
            return

        session = self.session
        print("\n=== Current State ===")
        print(f"Cursor: {session.cursor.to_tuple()}  Camera: {session.camera.position.to_tuple()} z={session.camera.z}")
        print(f"Holes left: {len(session.level.holes.holes)}")
        print(f"Done planks: {len(session.done_planks)}")
        for i, (plank, pos) in enumerate(session.level.planks):
            state = session.plank_states[i]
            print(f"  Plank {i}: {plank.count()} cells at {pos.to_tuple()} [{state.value}]")
        if session.cutter is not None:
            status = "finished" if session.cutter.finished else "in progress"
            print(f"Cut {status}: {len(session.cutter.cut.separated)} edges sawn")
        print(f"History: {session.history.pos + 1}/{len(session.history)}")

    def save_board(self, filename: str):
        """Save a matplotlib picture of the board, cut in progress included."""
        from measureonce.utils.visualizer import save_level_visualization, use_headless_backend
        use_headless_backend()

        session = self.session
        segments = session.cutter.sawn_segments() if session.cutter else None
        save_level_visualization(session.level, filename, title="Measure Once",
                                 done_planks=session.done_planks, cursor=session.cursor,
                                 cut_segments=segments)
        print(f"Saved {filename}")

    def move(self, key: str, count: int = 1):
        session = self.session
        for _ in range(count):
            step = session.move_cursor(DIRECTIONS[key])
            if step is not None and not step.accepted:
                print(f"✗ {step.value}")
                break
            if step == CutStep.FINISHED:
                print("✓ Cut separates the plank, 'finish' to saw it through")
        if session.cutter is None:
            session.snapshot_view()
        self.show_board()

    def after_drop(self):
        if self.session.is_complete():
            print("\n🎉 Nice one! Level complete. Type 'next' for the next level.")

    def run_cli(self):
        """Run the main command loop."""
        print("=== Measure Once ===")
        print("Type 'help' for commands")

        while True:
            try:
                cmd = input("\n> ").strip().lower()

                if not cmd:
                    continue

                parts = cmd.split()
                command = parts[0]

                if command == "help":
                    self.show_help()

                elif command == "set":
                    if len(parts) < 2:
                        print("Usage: set <classic|easy|medium|hard|daily>")
                    else:
                        self.load_set(parts[1])

                elif command == "new":
                    if len(parts) < 4:
                        print("Usage: new <holes> <blocks> <seed>")
                    else:
                        holes, blocks, seed = map(int, parts[1:4])
                        if holes < 1 or blocks < holes:
                            print("Need at least one hole and one block per hole")
                        else:
                            self.start_level(LevelDef(holes, blocks, seed))

                elif command == "quit" or command == "exit":
                    print("Goodbye!")
                    break

                elif not self.session:
                    print("No level loaded. Use 'set <name>' or 'new <holes> <blocks> <seed>'")

                elif command in DIRECTIONS:
                    count = int(parts[1]) if len(parts) > 1 else 1
                    self.move(command, count)

                elif command == "grab":
                    if self.session.grab_or_drop():
                        self.show_board()
                        self.after_drop()
                    else:
                        print("✗ Nothing to grab here")

                elif command in ("left", "right"):
                    turns = ROTATE_LEFT if command == "left" else ROTATE_RIGHT
                    if self.session.rotate_selected(turns):
                        self.show_board()
                    else:
                        print("✗ Grab a plank first")

                elif command == "cut":
                    if self.session.begin_cut():
                        print("✓ Cutter ready, steer it with w/a/s/d")
                        self.show_board()
                    else:
                        print("✗ No plank edge to start cutting from here")

                elif command == "finish":
                    if self.session.finish_cut():
                        print("✓ Sawn in two")
                        self.show_board()
                        self.after_drop()
                    else:
                        print("✗ The cut does not separate the plank yet")

                elif command == "cancel":
                    if self.session.cancel_cut():
                        self.show_board()

                elif command == "undo":
                    if self.session.undo():
                        self.show_board()
                    else:
                        print("Nothing to undo")

                elif command == "redo":
                    if self.session.redo():
                        self.show_board()
                    else:
                        print("Nothing to redo")

                elif command == "restart":
                    self.session.restart()
                    self.show_board()

                elif command == "next":
                    self.next_level()

                elif command == "view":
                    self.show_board()

                elif command == "save":
                    filename = parts[1] if len(parts) > 1 else "board.png"
                    self.save_board(filename)

                elif command == "state":
                    self.show_state()

                else:
                    print(f"Unknown command: {command}")
                    print("Type 'help' for commands")

            except KeyboardInterrupt:
                print("\nUse 'quit' to exit")
            except EOFError:
                print()
                break
            except ValueError as e:
                print(f"Error: {e}")

    def show_help(self):
        print("""
Available commands:
  help                    - Show this help
  set <name>              - Play a level set (classic, easy, medium, hard, daily)
  new <holes> <blocks> <seed> - Play a single generated level
  w/a/s/d [n]             - Move the cursor (or the cutter) n steps
  grab                    - Grab or drop the plank under the cursor
  left / right            - Rotate the grabbed plank about the cursor
  cut                     - Start cutting the plank under the cursor
  finish                  - Saw through a finished cut
  cancel                  - Put the saw away
  undo / redo             - Step through the history
  restart                 - Restart the level
  next                    - Next level of the set
  view                    - Show the board
  save [file]             - Save a picture of the board (default board.png)
  state                   - Show the planks and history
  quit/exit               - Exit the game
        """)


def main():
    game = MeasureOnceGame()
    game.run_cli()


if __name__ == "__main__":
    main()
