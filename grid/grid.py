"""
grid.py — Grid Container
========================
Single source of truth for the board.  Search algorithms, the replay
engine and the HTTP layer all talk to this object.

Responsibilities:
  1. Own every Cell, indexed by (row, col)        (cell / neighbours)
  2. Layout editing                                (walls, start, end, weights)
  3. Keep the start / end invariants               (validate)
  4. Reset helpers                                 (wipe annotations, keep layout)
  5. Value-semantics copy                          (snapshot)
  6. Serialisation round-trip                      (to_dict / from_dict, text)

Design decisions:
  - Cells are stored row-major in a list of lists: the arena.  Nothing
    outside this module holds a Cell across grid replacements; the replay
    log and predecessor links only carry coordinates.
  - Editing never raises for "forbidden but harmless" requests (walling the
    start cell, moving start onto end).  It returns False so a UI can
    ignore the click.  Out-of-bounds coordinates are programming errors and
    raise IndexError.
"""

import logging
import math
from typing import Dict, List, Optional, Iterator, Any

from config import GRID_ROWS, GRID_COLS, START_NODE, END_NODE
from grid.cell import Cell, Coord


logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Start or end is missing, duplicated or walled; a search cannot run."""


def check_weight(weight: float) -> float:
    """Return `weight` if it is a finite number >= 1, else raise ValueError."""
    if not math.isfinite(weight) or weight < 1:
        raise ValueError(f"Cell weight must be a finite number >= 1, got {weight}")
    return weight


# Scan order matters: every algorithm inherits it.  up, right, down, left
DIRECTIONS = ((-1, 0), (0, 1), (1, 0), (0, -1))

# text form
_OPEN, _WALL, _START, _END = ".", "#", "S", "E"


class Grid:
    """
    Attributes:
        rows, cols : Fixed dimensions.
        cells      : [[Cell]] indexed cells[row][col].
    """

    def __init__(self, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        if rows <= 0 or cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.rows: int = rows
        self.cols: int = cols
        self.cells: List[List[Cell]] = [
            [Cell(r, c) for c in range(cols)] for r in range(rows)
        ]

    # ==================================================================
    # ACCESS
    # ==================================================================
    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def cell(self, row: int, col: int) -> Cell:
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside the {self.rows}x{self.cols} grid")
        return self.cells[row][col]

    def at(self, coord: Coord) -> Cell:
        return self.cell(coord[0], coord[1])

    def neighbours(self, cell: Cell) -> List[Cell]:
        """Orthogonal neighbours in scan order (up, right, down, left)."""
        result = []
        for dr, dc in DIRECTIONS:
            r, c = cell.row + dr, cell.col + dc
            if self.in_bounds(r, c):
                result.append(self.cells[r][c])
        return result

    @property
    def start(self) -> Optional[Cell]:
        return self._find("is_start")

    @property
    def end(self) -> Optional[Cell]:
        return self._find("is_end")

    def _find(self, flag: str) -> Optional[Cell]:
        for cell in self:
            if getattr(cell, flag):
                return cell
        return None

    # ==================================================================
    # LAYOUT EDITING
    # ==================================================================
    def toggle_wall(self, row: int, col: int) -> bool:
        """Flip the wall flag.  Start and end cells are left alone (False)."""
        cell = self.cell(row, col)
        if cell.is_start or cell.is_end:
            return False
        cell.is_wall = not cell.is_wall
        return True

    def move_start(self, row: int, col: int) -> bool:
        return self._move_flag("is_start", "is_end", row, col)

    def move_end(self, row: int, col: int) -> bool:
        return self._move_flag("is_end", "is_start", row, col)

    def _move_flag(self, flag: str, other: str, row: int, col: int) -> bool:
        target = self.cell(row, col)
        if getattr(target, other):
            return False
        for cell in self:
            setattr(cell, flag, False)
        setattr(target, flag, True)
        # a start / end cell is never also a wall
        target.is_wall = False
        return True

    def set_weight(self, row: int, col: int, weight: float) -> None:
        self.cell(row, col).weight = check_weight(weight)

    # ==================================================================
    # INVARIANTS
    # ==================================================================
    def validate(self) -> None:
        """Raise ConfigurationError unless exactly one start and one end exist."""
        starts = [c for c in self if c.is_start]
        ends   = [c for c in self if c.is_end]
        if len(starts) != 1:
            raise ConfigurationError(f"Grid needs exactly one start cell, found {len(starts)}")
        if len(ends) != 1:
            raise ConfigurationError(f"Grid needs exactly one end cell, found {len(ends)}")
        for c in starts + ends:
            if c.is_wall:
                raise ConfigurationError(f"Start/end cell {c.coord} is a wall")
        if starts[0] == ends[0]:
            raise ConfigurationError(f"Start and end share cell {starts[0].coord}")

    # ==================================================================
    # RESET / COPY
    # ==================================================================
    def reset_annotations(self) -> None:
        for cell in self:
            cell.reset_annotations()

    def snapshot(self) -> "Grid":
        """Independent copy: mutating the snapshot never touches this grid."""
        clone = Grid.__new__(Grid)
        clone.rows  = self.rows
        clone.cols  = self.cols
        clone.cells = [[cell.copy() for cell in row] for row in self.cells]
        return clone

    # ==================================================================
    # QUERIES
    # ==================================================================
    def walls(self) -> List[Coord]:
        return [c.coord for c in self if c.is_wall]

    def visited_cells(self) -> List[Coord]:
        return [c.coord for c in self if c.visited]

    def path_cells(self) -> List[Coord]:
        return [c.coord for c in self if c.is_path]

    def state_matrix(self) -> List[List[str]]:
        """Rows of CellState values, the shape a renderer wants."""
        return [[cell.state.value for cell in row] for row in self.cells]

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> Dict[str, Any]:
        start, end = self.start, self.end
        return {
            "rows":    self.rows,
            "cols":    self.cols,
            "start":   list(start.coord) if start else None,
            "end":     list(end.coord) if end else None,
            "walls":   [list(w) for w in self.walls()],
            "weights": [[c.row, c.col, c.weight] for c in self if c.weight != 1],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Grid":
        g = cls(rows=data["rows"], cols=data["cols"])
        for r, c in data.get("walls", []):
            g.cell(r, c).is_wall = True
        for r, c, w in data.get("weights", []):
            g.set_weight(r, c, w)
        if data.get("start") is not None:
            g.move_start(*data["start"])
        if data.get("end") is not None:
            g.move_end(*data["end"])
        return g

    def to_text(self) -> str:
        lines = []
        for row in self.cells:
            chars = []
            for cell in row:
                if cell.is_start:
                    chars.append(_START)
                elif cell.is_end:
                    chars.append(_END)
                elif cell.is_wall:
                    chars.append(_WALL)
                elif cell.weight != 1 and 2 <= cell.weight <= 9 and cell.weight == int(cell.weight):
                    chars.append(str(int(cell.weight)))
                else:
                    chars.append(_OPEN)
            lines.append("".join(chars))
        return "\n".join(lines)

    @classmethod
    def from_text(cls, text: str) -> "Grid":
        """
        Parse a drawn layout, one line per row:

            .  open cell           #  wall
            S  start               E  end
            2-9  open cell with that weight

        Blank lines are ignored; every row must have the same width.
        """
        lines = [line.strip() for line in text.strip().splitlines() if line.strip()]
        if not lines:
            raise ValueError("Empty grid text")
        width = len(lines[0])
        if any(len(line) != width for line in lines):
            raise ValueError("Grid text rows must all have the same width")

        g = cls(rows=len(lines), cols=width)
        for r, line in enumerate(lines):
            for c, ch in enumerate(line):
                cell = g.cells[r][c]
                if ch == _WALL:
                    cell.is_wall = True
                elif ch == _START:
                    cell.is_start = True
                elif ch == _END:
                    cell.is_end = True
                elif ch.isdigit() and ch not in "01":
                    cell.weight = int(ch)
                elif ch != _OPEN:
                    raise ValueError(f"Unknown grid character {ch!r} at ({r}, {c})")
        return g

    # ==================================================================
    # DUNDER
    # ==================================================================
    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def __len__(self) -> int:
        return self.rows * self.cols

    def __repr__(self) -> str:
        return f"Grid(rows={self.rows}, cols={self.cols}, walls={len(self.walls())})"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------
def create_grid(
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    start: Coord = START_NODE,
    end: Coord = END_NODE,
) -> Grid:
    """Blank grid: no walls, weight 1 everywhere, start and end flagged."""
    g = Grid(rows=rows, cols=cols)
    if not g.in_bounds(*start) or not g.in_bounds(*end):
        raise ValueError(f"Start {start} / end {end} outside the {rows}x{cols} grid")
    if tuple(start) == tuple(end):
        raise ValueError(f"Start and end must differ, both are {start}")
    g.cell(*start).is_start = True
    g.cell(*end).is_end     = True
    logger.debug("Created %dx%d grid, start=%s end=%s", rows, cols, start, end)
    return g
