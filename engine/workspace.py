"""
workspace.py — User-Intent Router
=================================
What the UI layer holds: one single-mode controller, an optional
comparison controller, and the global speed.  Every user intent goes
through here and lands on whichever controller is active.

    ws = Workspace()
    ws.toggle_wall(3, 7)
    ws.play()
    ...
    ws.tick()                      # from the event loop
    ws.set_comparison_mode(True)   # A / B copies of the current board

While comparison mode is on, the single controller is paused and never
ticked; its board and log are kept and come back when the mode is left.
"""

import logging
import time
from typing import Callable, Dict, Optional, Union

from config import DEFAULT_SPEED
from grid import Grid, create_grid, get_maze
from algorithms import Algorithm, get_algorithm
from engine.playback import PlaybackBase, PlaybackController, clamp_speed
from engine.comparison import ComparisonController, SIDES


logger = logging.getLogger(__name__)


class Workspace:
    """
    Attributes:
        single          : Single-mode PlaybackController.
        comparison      : ComparisonController while comparison mode is on, else None.
        speed           : Global raw speed shared by every controller.
        side_algorithms : Remembered A / B picks for comparison mode.
    """

    def __init__(
        self,
        algorithm: Union[str, Algorithm] = Algorithm.BFS,
        speed: float = DEFAULT_SPEED,
        clock: Callable[[], float] = time.monotonic,
        grid_factory: Callable[[], Grid] = create_grid,
    ):
        self._clock        = clock
        self._grid_factory = grid_factory
        self.speed: float  = clamp_speed(speed)
        self.single = PlaybackController(
            algorithm=algorithm, speed=self.speed, clock=clock, grid_factory=grid_factory,
        )
        self.comparison: Optional[ComparisonController] = None
        self.side_algorithms: Dict[str, Algorithm] = {
            "a": self.single.algorithm,
            "b": Algorithm.DFS,
        }

    # ------------------------------------------------------------------
    # Mode
    # ------------------------------------------------------------------
    @property
    def comparison_mode(self) -> bool:
        return self.comparison is not None

    @property
    def active(self) -> PlaybackBase:
        return self.comparison if self.comparison is not None else self.single

    def set_comparison_mode(self, enabled: bool) -> None:
        if enabled == self.comparison_mode:
            return
        if enabled:
            # suspend single mode before the copies are taken
            self.single.release()
            self.single.pause()
            self.comparison = ComparisonController(
                grid=self.single.grid,
                algorithm_a=self.side_algorithms["a"],
                algorithm_b=self.side_algorithms["b"],
                speed=self.speed,
                clock=self._clock,
                grid_factory=self._grid_factory,
            )
            logger.info(
                "Comparison mode on: %s vs %s",
                self.side_algorithms["a"].value, self.side_algorithms["b"].value,
            )
        else:
            self.comparison.release()
            self.comparison.pause()
            self.comparison = None
            logger.info("Comparison mode off")

    # ------------------------------------------------------------------
    # Board editing
    # ------------------------------------------------------------------
    def toggle_wall(self, row: int, col: int) -> bool:
        return self.active.toggle_wall(row, col)

    def move_start(self, row: int, col: int) -> bool:
        return self.active.move_start(row, col)

    def move_end(self, row: int, col: int) -> bool:
        return self.active.move_end(row, col)

    def set_weight(self, row: int, col: int, weight: float) -> None:
        self.active.set_weight(row, col, weight)

    def load_preset(self, name: str, seed: Optional[int] = None) -> Grid:
        """Replace the active board(s) with a maze / preset factory's output."""
        info = get_maze(name)
        current = self.comparison.a.grid if self.comparison else self.single.grid
        start, end = current.start, current.end
        kwargs = {"rows": current.rows, "cols": current.cols, "seed": seed}
        if start is not None and end is not None:
            kwargs.update(start=start.coord, end=end.coord)
        grid = info.fn(**kwargs)
        self.active.load_grid(grid)
        logger.info("Loaded preset %r (seed=%s)", name, seed)
        return grid

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def select_algorithm(self, key: Union[str, Algorithm], side: Optional[str] = None) -> None:
        info = get_algorithm(key)
        if side is None:
            self.single.select_algorithm(info.key)
            return
        if side not in SIDES:
            raise ValueError(f"Unknown comparison side: {side}")
        self.side_algorithms[side] = info.key
        if self.comparison is not None:
            self.comparison.select_algorithm(side, info.key)

    def change_speed(self, speed: float) -> None:
        self.speed = clamp_speed(speed)
        self.single.change_speed(self.speed)
        if self.comparison is not None:
            self.comparison.change_speed(self.speed)

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    def play(self) -> None:
        self.active.play()

    def pause(self) -> None:
        self.active.pause()

    def toggle_play(self) -> None:
        self.active.toggle_play()

    def step(self) -> bool:
        return self.active.step()

    def back(self) -> bool:
        return self.active.back()

    def seek(self, index: int) -> int:
        return self.active.seek(index)

    def press_step(self) -> None:
        self.active.press_step()

    def press_back(self) -> None:
        self.active.press_back()

    def release(self) -> None:
        self.active.release()

    def reset_grid(self) -> None:
        self.active.reset_grid()

    def reset_path(self) -> None:
        self.active.reset_path()

    def tick(self) -> int:
        return self.active.tick()

    # ------------------------------------------------------------------
    # Snapshot for the UI
    # ------------------------------------------------------------------
    def to_dict(self, include_grid: bool = True) -> dict:
        data = {
            "comparison_mode": self.comparison_mode,
            "speed":           self.speed,
            "delay_ms":        self.active.delay_ms,
            "is_playing":      self.active.is_playing,
            "side_algorithms": {k: v.value for k, v in self.side_algorithms.items()},
        }
        if self.comparison is not None:
            data["comparison"] = self.comparison.to_dict(include_grid=include_grid)
        else:
            data["single"] = self.single.to_dict(include_grid=include_grid)
        return data
