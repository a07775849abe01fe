"""
playback.py — Playback Controller
=================================
Drives a step log on a timer.  The controller is the ONLY object the UI
layer talks to while a run is on screen: it owns the board, the selected
algorithm, the log, the replay index and its timers.

State machine:
    IDLE    →  play()              →  RUNNING
    IDLE    →  step()              →  PAUSED     (log built lazily)
    RUNNING →  pause()             →  PAUSED
    PAUSED  →  play()              →  RUNNING
    RUNNING →  (log exhausted)     →  PAUSED
    any     →  reset / any edit    →  IDLE

Speed:
    The raw slider value maps to a delay with an inverted scale,
    delay_ms = SPEED_MAX + SPEED_MIN - speed, so moving the slider right
    always makes playback faster.

Ordering rule:
    Every transition that discards or swaps state cancels the timers FIRST.
    A tick from an old run can never land on a freshly reset board.

Thread safety:
    None.  Timers are polled from the owner's loop via tick(); between
    two ticks the controller is quiescent and safe to inspect.  Callers
    sharing a controller across threads serialise access themselves (the
    Flask app holds one lock per request).
"""

import logging
import time
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Callable, Optional, Union

from config import SPEED_MIN, SPEED_MAX, DEFAULT_SPEED
from grid import Grid, ConfigurationError, check_weight, create_grid
from algorithms import Algorithm, get_algorithm
from engine.recorder import Recording, RunStats, record
from engine.sequencer import Sequencer
from engine.timer import Interval


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class ControllerState(Enum):
    IDLE    = "idle"
    RUNNING = "running"
    PAUSED  = "paused"


@dataclass
class PlaybackState:
    step_index:  int   = 0
    total_steps: int   = 0
    speed:       float = DEFAULT_SPEED
    is_playing:  bool  = False

    @property
    def progress(self) -> float:
        return self.step_index / self.total_steps if self.total_steps else 0.0

    def to_dict(self) -> dict:
        data = asdict(self)
        data["progress"] = round(self.progress, 4)
        return data


# ---------------------------------------------------------------------------
# Speed
# ---------------------------------------------------------------------------
def clamp_speed(speed: float) -> float:
    return max(SPEED_MIN, min(SPEED_MAX, speed))


def speed_to_delay(speed: float) -> float:
    """Raw slider value → milliseconds between ticks (higher speed, shorter delay)."""
    return SPEED_MAX + SPEED_MIN - clamp_speed(speed)


# ---------------------------------------------------------------------------
# Shared transport: timers, play / pause, hold-to-repeat
# ---------------------------------------------------------------------------
class PlaybackBase:
    """
    Subclasses supply the log: `has_log`, `at_end`, `ensure_log()`,
    `advance()`, `retreat()` and `seek_to()`.  Everything time-related
    lives here so single mode and comparison mode behave identically.
    """

    def __init__(
        self,
        speed: float = DEFAULT_SPEED,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.speed:  float           = clamp_speed(speed)
        self.state:  ControllerState = ControllerState.IDLE
        self._clock: Callable[[], float] = clock
        self._interval = Interval(self._on_tick, clock=clock)
        self._hold     = Interval(self._on_hold, clock=clock)
        self._hold_direction: int = 0

    # ------------------------------------------------------------------
    # Log hooks
    # ------------------------------------------------------------------
    @property
    def has_log(self) -> bool:
        raise NotImplementedError

    @property
    def at_end(self) -> bool:
        raise NotImplementedError

    def ensure_log(self) -> None:
        raise NotImplementedError

    def advance(self) -> bool:
        raise NotImplementedError

    def retreat(self) -> bool:
        raise NotImplementedError

    def seek_to(self, index: int) -> int:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def delay_ms(self) -> float:
        return speed_to_delay(self.speed)

    @property
    def is_playing(self) -> bool:
        return self.state is ControllerState.RUNNING

    @property
    def is_holding(self) -> bool:
        return self._hold.active

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.is_playing:
            return
        self.ensure_log()
        if self.at_end:
            self.state = ControllerState.PAUSED
            return
        self._interval.start(self.delay_ms)
        self.state = ControllerState.RUNNING
        logger.info("Playback started at %.0f ms/step", self.delay_ms)

    def pause(self) -> None:
        if not self.is_playing:
            return
        # ticks that fell due before the pause still count
        self._interval.poll()
        self._interval.cancel()
        if self.state is ControllerState.RUNNING:
            self.state = ControllerState.PAUSED
        logger.info("Playback paused")

    def toggle_play(self) -> None:
        if self.is_playing:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Manual navigation
    # ------------------------------------------------------------------
    def step(self) -> bool:
        """One step forward, building the log first if needed."""
        self.ensure_log()
        if self.state is ControllerState.IDLE:
            self.state = ControllerState.PAUSED
        return self.advance()

    def back(self) -> bool:
        """One step backward; never builds a log."""
        if not self.has_log:
            return False
        return self.retreat()

    def seek(self, index: int) -> int:
        self.ensure_log()
        if self.state is ControllerState.IDLE:
            self.state = ControllerState.PAUSED
        return self.seek_to(index)

    # ------------------------------------------------------------------
    # Hold-to-repeat
    # ------------------------------------------------------------------
    def press_step(self) -> None:
        self.release()
        self.step()
        self._hold_direction = 1
        self._hold.start(self.delay_ms)

    def press_back(self) -> None:
        self.release()
        self.back()
        self._hold_direction = -1
        self._hold.start(self.delay_ms)

    def release(self) -> None:
        if not self._hold.active:
            return
        self._hold.poll()
        self._hold.cancel()
        self._hold_direction = 0

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def change_speed(self, speed: float) -> None:
        # ticks already due run at the old rate, then the new period starts now
        self.tick()
        self.speed = clamp_speed(speed)
        if self._interval.active:
            self._interval.restart(self.delay_ms)
        if self._hold.active:
            self._hold.restart(self.delay_ms)
        logger.debug("Speed set to %s (%.0f ms/step)", self.speed, self.delay_ms)

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop)
    # ------------------------------------------------------------------
    def tick(self) -> int:
        """Fire every due timer callback; returns how many fired."""
        return self._interval.poll() + self._hold.poll()

    def _on_tick(self) -> None:
        self.advance()
        if self.at_end:
            # natural completion: self-pause, no error
            self._interval.cancel()
            self.state = ControllerState.PAUSED
            logger.info("Playback finished")

    def _on_hold(self) -> None:
        if self._hold_direction > 0:
            moved = self.advance()
        elif self._hold_direction < 0:
            moved = self.retreat()
        else:
            moved = False
        # nothing left to repeat: stop instead of firing no-ops until release
        if not moved:
            self._hold.cancel()
            self._hold_direction = 0

    def _stop_timers(self) -> None:
        """Cancel without draining: pending ticks belong to the state being thrown away."""
        self._interval.cancel()
        self._hold.cancel()
        self._hold_direction = 0


# ---------------------------------------------------------------------------
# Single-board controller
# ---------------------------------------------------------------------------
class PlaybackController(PlaybackBase):
    """
    Attributes:
        grid       : The live board (replay marks land here).
        algorithm  : Selected Algorithm.
        recording  : Last Recording (result + log + stats), None until built.
        sequencer  : Replay cursor over recording.log, None until built.
    """

    def __init__(
        self,
        grid: Optional[Grid] = None,
        algorithm: Union[str, Algorithm] = Algorithm.BFS,
        speed: float = DEFAULT_SPEED,
        clock: Callable[[], float] = time.monotonic,
        grid_factory: Callable[[], Grid] = create_grid,
    ):
        super().__init__(speed=speed, clock=clock)
        self._grid_factory: Callable[[], Grid] = grid_factory
        self.grid:      Grid                = grid if grid is not None else grid_factory()
        self.algorithm: Algorithm           = get_algorithm(algorithm).key
        self.recording: Optional[Recording] = None
        self.sequencer: Optional[Sequencer] = None

    # ------------------------------------------------------------------
    # Log hooks
    # ------------------------------------------------------------------
    @property
    def has_log(self) -> bool:
        return self.sequencer is not None

    @property
    def at_end(self) -> bool:
        return self.sequencer is None or self.sequencer.at_end

    def ensure_log(self) -> None:
        if self.sequencer is None:
            self.build_log()

    def build_log(self) -> None:
        """Run the selected algorithm and load a fresh log at index 0."""
        self._stop_timers()
        # refused runs raise here, before the board is touched
        try:
            rec = record(self.algorithm, self.grid)
        except ConfigurationError as err:
            logger.warning("Refused %s run: %s", self.algorithm.value, err)
            raise
        self.grid.reset_annotations()
        self.recording = rec
        self.sequencer = Sequencer(self.grid, rec.log)
        self.state     = ControllerState.PAUSED
        logger.info(
            "Built %s log: %d steps, %s",
            self.algorithm.value, len(rec.log),
            "no path found" if rec.stats.no_path_found else f"path of {rec.stats.path_length} cells",
        )

    def advance(self) -> bool:
        seq = self.sequencer
        return seq.forward() if seq is not None else False

    def retreat(self) -> bool:
        seq = self.sequencer
        return seq.backward() if seq is not None else False

    def seek_to(self, index: int) -> int:
        seq = self.sequencer
        return seq.seek(index) if seq is not None else 0

    # ------------------------------------------------------------------
    # Resets
    # ------------------------------------------------------------------
    def reset_path(self) -> None:
        """Drop the log and replay marks; walls / start / end stay."""
        self._discard()
        self.grid.reset_annotations()
        logger.info("Path reset")

    def reset_grid(self, grid: Optional[Grid] = None) -> None:
        """Drop everything and load `grid`, or a fresh default board."""
        self._discard()
        self.grid = grid if grid is not None else self._grid_factory()
        logger.info("Grid reset (%dx%d)", self.grid.rows, self.grid.cols)

    def load_grid(self, grid: Grid) -> None:
        """Swap in a factory-built board (maze, preset)."""
        self.reset_grid(grid)

    def _discard(self) -> None:
        self._stop_timers()
        self.recording = None
        self.sequencer = None
        self.state     = ControllerState.IDLE

    # ------------------------------------------------------------------
    # Editing intents (each invalidates the current log)
    # ------------------------------------------------------------------
    def toggle_wall(self, row: int, col: int) -> bool:
        self.grid.cell(row, col)
        self.reset_path()
        return self.grid.toggle_wall(row, col)

    def move_start(self, row: int, col: int) -> bool:
        self.grid.cell(row, col)
        self.reset_path()
        return self.grid.move_start(row, col)

    def move_end(self, row: int, col: int) -> bool:
        self.grid.cell(row, col)
        self.reset_path()
        return self.grid.move_end(row, col)

    def set_weight(self, row: int, col: int, weight: float) -> None:
        check_weight(weight)
        self.grid.cell(row, col)
        self.reset_path()
        self.grid.set_weight(row, col, weight)

    def select_algorithm(self, key: Union[str, Algorithm]) -> None:
        info = get_algorithm(key)
        self.reset_path()
        self.algorithm = info.key

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def stats(self) -> RunStats:
        return self.recording.stats if self.recording else RunStats()

    @property
    def statistics(self) -> dict:
        stats = self.stats
        return {"visited_count": stats.visited_count, "path_length": stats.path_length}

    @property
    def no_path_found(self) -> bool:
        return self.stats.no_path_found

    @property
    def step_index(self) -> int:
        return self.sequencer.index if self.sequencer else 0

    @property
    def playback_state(self) -> PlaybackState:
        return PlaybackState(
            step_index=self.step_index,
            total_steps=len(self.sequencer) if self.sequencer else 0,
            speed=self.speed,
            is_playing=self.is_playing,
        )

    def to_dict(self, include_grid: bool = True) -> dict:
        data = {
            "state":         self.state.value,
            "algorithm":     self.algorithm.value,
            "playback":      self.playback_state.to_dict(),
            "statistics":    self.statistics,
            "no_path_found": self.no_path_found,
        }
        if include_grid:
            data["grid"] = self.grid.state_matrix()
        return data
