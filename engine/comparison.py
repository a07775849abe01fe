"""
comparison.py — Side-by-Side Comparison Controller
==================================================
Two PlaybackControllers (A and B) animated in lockstep.

  - Each side owns its own board copy, algorithm, log and index.  The two
    boards never share a Cell.
  - The sides never run their own timers.  This controller owns the one
    shared Interval and the one shared speed; every fire advances A and
    B by one step each (a side that has finished just stays put).
  - Playback self-pauses once BOTH sides have reached the end.

Layout edits apply to both boards so the comparison stays fair.  Picking
a new algorithm for either side resets both replays to index 0, keeping
the sides in step.
"""

import logging
import time
from typing import Callable, Optional, Union

from config import DEFAULT_SPEED
from grid import Grid, check_weight, create_grid
from algorithms import Algorithm, get_algorithm
from engine.playback import PlaybackBase, PlaybackController, ControllerState
from engine.recorder import ComparisonResult, compare


logger = logging.getLogger(__name__)

SIDES = ("a", "b")


class ComparisonController(PlaybackBase):
    """
    Attributes:
        a, b : The two PlaybackControllers.
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        algorithm_a: Union[str, Algorithm] = Algorithm.BFS,
        algorithm_b: Union[str, Algorithm] = Algorithm.DFS,
        speed: float = DEFAULT_SPEED,
        clock: Callable[[], float] = time.monotonic,
        grid_factory: Callable[[], Grid] = create_grid,
    ):
        super().__init__(speed=speed, clock=clock)
        self._grid_factory = grid_factory
        base = grid if grid is not None else grid_factory()
        self.a = PlaybackController(
            grid=base.snapshot(), algorithm=algorithm_a, speed=speed,
            clock=clock, grid_factory=grid_factory,
        )
        self.b = PlaybackController(
            grid=base.snapshot(), algorithm=algorithm_b, speed=speed,
            clock=clock, grid_factory=grid_factory,
        )
        self.a.grid.reset_annotations()
        self.b.grid.reset_annotations()

    def side(self, name: str) -> PlaybackController:
        if name not in SIDES:
            raise ValueError(f"Unknown comparison side: {name}")
        return self.a if name == "a" else self.b

    # ------------------------------------------------------------------
    # Log hooks
    # ------------------------------------------------------------------
    @property
    def has_log(self) -> bool:
        return self.a.has_log or self.b.has_log

    @property
    def at_end(self) -> bool:
        return self.a.at_end and self.b.at_end

    def ensure_log(self) -> None:
        # both boards are checked before either side builds: no half-built pair
        for side in (self.a, self.b):
            if not side.has_log:
                side.grid.validate()
        self.a.ensure_log()
        self.b.ensure_log()

    def advance(self) -> bool:
        moved_a = self.a.advance()
        moved_b = self.b.advance()
        return moved_a or moved_b

    def retreat(self) -> bool:
        moved_a = self.a.retreat()
        moved_b = self.b.retreat()
        return moved_a or moved_b

    def seek_to(self, index: int) -> int:
        return max(self.a.seek_to(index), self.b.seek_to(index))

    # ------------------------------------------------------------------
    # Loading / resets
    # ------------------------------------------------------------------
    def load_grid(self, grid: Grid) -> None:
        """Snapshot `grid` into both sides and clear both logs."""
        self._stop_timers()
        self.state = ControllerState.IDLE
        self.a.reset_grid(grid.snapshot())
        self.b.reset_grid(grid.snapshot())
        self.a.grid.reset_annotations()
        self.b.grid.reset_annotations()
        logger.info("Comparison loaded a %dx%d board", grid.rows, grid.cols)

    def reset_path(self) -> None:
        self._stop_timers()
        self.state = ControllerState.IDLE
        self.a.reset_path()
        self.b.reset_path()

    def reset_grid(self, grid: Optional[Grid] = None) -> None:
        self.load_grid(grid if grid is not None else self._grid_factory())

    # ------------------------------------------------------------------
    # Editing intents (mirrored onto both boards)
    # ------------------------------------------------------------------
    def toggle_wall(self, row: int, col: int) -> bool:
        self.a.grid.cell(row, col)
        self.reset_path()
        changed = self.a.toggle_wall(row, col)
        self.b.toggle_wall(row, col)
        return changed

    def move_start(self, row: int, col: int) -> bool:
        self.a.grid.cell(row, col)
        self.reset_path()
        changed = self.a.move_start(row, col)
        self.b.move_start(row, col)
        return changed

    def move_end(self, row: int, col: int) -> bool:
        self.a.grid.cell(row, col)
        self.reset_path()
        changed = self.a.move_end(row, col)
        self.b.move_end(row, col)
        return changed

    def set_weight(self, row: int, col: int, weight: float) -> None:
        check_weight(weight)
        self.a.grid.cell(row, col)
        self.reset_path()
        self.a.set_weight(row, col, weight)
        self.b.set_weight(row, col, weight)

    def select_algorithm(self, side: str, key: Union[str, Algorithm]) -> None:
        target = self.side(side)
        get_algorithm(key)
        self.reset_path()
        target.select_algorithm(key)

    def change_speed(self, speed: float) -> None:
        super().change_speed(speed)
        self.a.speed = self.speed
        self.b.speed = self.speed

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def statistics(self) -> dict:
        return {"a": self.a.statistics, "b": self.b.statistics}

    def comparison(self) -> ComparisonResult:
        return compare(self.a.stats, self.b.stats)

    def to_dict(self, include_grid: bool = True) -> dict:
        return {
            "state":      self.state.value,
            "speed":      self.speed,
            "is_playing": self.is_playing,
            "a":          self.a.to_dict(include_grid=include_grid),
            "b":          self.b.to_dict(include_grid=include_grid),
            "comparison": self.comparison().to_dict(),
        }
