"""
sequencer.py — Step Log & Navigation
====================================
Flattens a SearchResult into one replayable log and moves through it
without ever re-running the search.

    log = build_log(result)            # visits first, then path marks
    seq = Sequencer(grid, log)
    seq.forward()                      # mark one more cell
    seq.backward()                     # unmark the most recent one
    seq.seek(120)                      # scrub

A Step is a SNAPSHOT of one event: a coordinate and what happened to it.
It holds no Cell reference, so the same log replays onto whichever grid
the caller owns (the live board, a comparison copy, a test fixture).

Index semantics: `index` is the next step to apply, always within
[0, len(log)].  index == len(log) means the replay is complete.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from grid import Grid, Coord
from algorithms import SearchResult


class StepKind(Enum):
    VISIT = "visit"
    PATH  = "path"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        row, col : Cell the event applies to.
        kind     : VISIT (exploration) or PATH (solution reveal).
    """

    row:  int
    col:  int
    kind: StepKind

    @property
    def coord(self) -> Coord:
        return (self.row, self.col)


# ---------------------------------------------------------------------------
# Functional core
# ---------------------------------------------------------------------------
def build_log(result: SearchResult) -> List[Step]:
    visits = [Step(c.row, c.col, StepKind.VISIT) for c in result.visited_order]
    marks  = [Step(c.row, c.col, StepKind.PATH)  for c in result.path]
    return visits + marks


def _mark(grid: Grid, step: Step, on: bool) -> None:
    cell = grid.at(step.coord)
    if step.kind is StepKind.VISIT:
        cell.visited = on
    else:
        cell.is_path = on


def clamp_index(log: List[Step], index: int) -> int:
    return max(0, min(index, len(log)))


def apply_forward(grid: Grid, log: List[Step], index: int) -> int:
    """Apply log[index] to `grid` and return the new index (no-op at the end)."""
    index = clamp_index(log, index)
    if index >= len(log):
        return index
    _mark(grid, log[index], True)
    return index + 1


def apply_backward(grid: Grid, log: List[Step], index: int) -> int:
    """Undo log[index - 1] on `grid` and return the new index (no-op at 0)."""
    index = clamp_index(log, index)
    if index <= 0:
        return 0
    _mark(grid, log[index - 1], False)
    return index - 1


# ---------------------------------------------------------------------------
# Sequencer
# ---------------------------------------------------------------------------
class Sequencer:
    """
    Attributes:
        grid  : Grid the log is replayed onto (mutated in place).
        log   : The immutable step list.
        index : Next step to apply.
    """

    def __init__(self, grid: Grid, log: List[Step]):
        self.grid:  Grid       = grid
        self.log:   List[Step] = list(log)
        self.index: int        = 0

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def forward(self) -> bool:
        """Apply one step.  Returns False if already at the end."""
        if self.at_end:
            return False
        self.index = apply_forward(self.grid, self.log, self.index)
        return True

    def backward(self) -> bool:
        """Undo one step.  Returns False if already at the start."""
        if self.index <= 0:
            return False
        self.index = apply_backward(self.grid, self.log, self.index)
        return True

    def seek(self, index: int) -> int:
        """Scrub to `index` (clamped) one step at a time; returns the new index."""
        target = clamp_index(self.log, index)
        while self.index < target:
            self.forward()
        while self.index > target:
            self.backward()
        return self.index

    def rewind(self) -> None:
        self.seek(0)

    def jump_to_end(self) -> None:
        self.seek(len(self.log))

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def at_end(self) -> bool:
        return self.index >= len(self.log)

    @property
    def current_step(self) -> Optional[Step]:
        """Most recently applied step."""
        return self.log[self.index - 1] if self.index > 0 else None

    @property
    def progress(self) -> float:
        return self.index / len(self.log) if self.log else 1.0

    def __len__(self) -> int:
        return len(self.log)
