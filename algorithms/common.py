"""
common.py — Shared Search Plumbing
==================================
The result type every algorithm returns, plus the three chores they all
share: validating the endpoints, wiping annotations before a run and
walking `previous` links back from the end cell.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from grid import Cell, Grid, ConfigurationError


@dataclass
class SearchResult:
    """
    Attributes:
        visited_order : Cells in the order they were finalised (popped).
        path          : start → end inclusive, or [] when end is unreachable.
    """

    visited_order: List[Cell] = field(default_factory=list)
    path:          List[Cell] = field(default_factory=list)

    @property
    def path_found(self) -> bool:
        return bool(self.path)

    @property
    def path_cost(self) -> float:
        """Sum of entered cells' weights (the start cell is not entered)."""
        return sum(c.weight for c in self.path[1:])


def prepare(grid: Grid, start: Optional[Cell], end: Optional[Cell]) -> None:
    """Refuse a run with missing endpoints, then wipe annotations."""
    if start is None or end is None:
        raise ConfigurationError("Both a start and an end cell are required")
    grid.reset_annotations()


def reconstruct_path(grid: Grid, start: Cell, end: Cell) -> List[Cell]:
    path = []
    cur: Optional[Cell] = end
    while cur is not None:
        path.append(cur)
        cur = grid.at(cur.previous) if cur.previous is not None else None
    path.reverse()
    # the walk must terminate at start, otherwise end was never reached
    if path[0] != start:
        return []
    return path
