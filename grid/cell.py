"""
cell.py — Grid Cell
===================
One position on the board.  Identity is the (row, col) pair; everything
else is either layout (start / end / wall / weight) or a transient
annotation written by a search run or by replay.

Design decisions:
  - `previous` is a (row, col) tuple, NOT a Cell reference.  Predecessor
    links stay valid when a grid is snapshotted and never keep a stale
    grid alive.
  - Layout flags and annotations live side by side so a renderer can read
    one object per square, but `reset_annotations()` only ever touches
    the annotations.
"""

from enum import Enum
from typing import Optional, Tuple, Dict, Any


INF = float("inf")

Coord = Tuple[int, int]


# ---------------------------------------------------------------------------
# Cell State Enum — what a renderer would colour this square as
# ---------------------------------------------------------------------------
class CellState(Enum):
    EMPTY   = "empty"
    WALL    = "wall"
    START   = "start"
    END     = "end"
    VISITED = "visited"
    PATH    = "path"


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------
class Cell:
    """
    Attributes:
        row, col  : Immutable grid coordinates.
        is_start  : Exactly one cell per grid carries this.
        is_end    : Exactly one cell per grid carries this.
        is_wall   : Never traversable; never start or end.
        weight    : Cost of entering this cell (>= 1, default 1).
        visited   : Search finalised this cell / replay has shown it.
        is_path   : Replay has revealed this cell as part of the solution.
        distance  : Dijkstra's cumulative cost from start.
        g, h, f   : A* scores.
        previous  : (row, col) of the cell that discovered this one.
    """

    __slots__ = (
        "_row", "_col", "is_start", "is_end", "is_wall", "weight",
        "visited", "is_path", "distance", "g", "h", "f", "previous",
    )

    def __init__(self, row: int, col: int, weight: float = 1):
        self._row: int          = row
        self._col: int          = col
        self.is_start: bool     = False
        self.is_end: bool       = False
        self.is_wall: bool      = False
        self.weight: float      = weight
        self.reset_annotations()

    @property
    def row(self) -> int:
        return self._row

    @property
    def col(self) -> int:
        return self._col

    @property
    def coord(self) -> Coord:
        return (self._row, self._col)

    # ------------------------------------------------------------------
    # Annotations
    # ------------------------------------------------------------------
    def reset_annotations(self) -> None:
        """Wipe search and replay state; layout is left alone."""
        self.visited: bool             = False
        self.is_path: bool             = False
        self.distance: float           = INF
        self.g: float                  = INF
        self.h: float                  = 0
        self.f: float                  = INF
        self.previous: Optional[Coord] = None

    @property
    def state(self) -> CellState:
        if self.is_start:
            return CellState.START
        if self.is_end:
            return CellState.END
        if self.is_wall:
            return CellState.WALL
        if self.is_path:
            return CellState.PATH
        if self.visited:
            return CellState.VISITED
        return CellState.EMPTY

    # ------------------------------------------------------------------
    # Copy / serialisation
    # ------------------------------------------------------------------
    def copy(self) -> "Cell":
        clone = Cell(self._row, self._col, self.weight)
        clone.is_start = self.is_start
        clone.is_end   = self.is_end
        clone.is_wall  = self.is_wall
        clone.visited  = self.visited
        clone.is_path  = self.is_path
        clone.distance = self.distance
        clone.g        = self.g
        clone.h        = self.h
        clone.f        = self.f
        clone.previous = self.previous
        return clone

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row":     self._row,
            "col":     self._col,
            "state":   self.state.value,
            "wall":    self.is_wall,
            "weight":  self.weight,
            "visited": self.visited,
            "path":    self.is_path,
        }

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Cell(row={self._row}, col={self._col}, state={self.state.value})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Cell) and self.coord == other.coord

    def __hash__(self) -> int:
        return hash(self.coord)
