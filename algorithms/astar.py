"""
astar.py — A* Search
=====================
Dijkstra with heuristic guidance: the heap is keyed by f = g + h where
h is the Manhattan distance to the end cell.

Manhattan distance is admissible and consistent here: moves are
orthogonal and every move costs at least 1, so h never overestimates.
Ties on f pop in insertion order.
"""

import heapq
import itertools
import logging
from typing import Callable, Dict, List, Tuple

from grid import Cell, Grid
from algorithms.common import SearchResult, prepare, reconstruct_path


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Heuristics
# ---------------------------------------------------------------------------
def manhattan(a: Cell, b: Cell) -> float:
    return abs(a.row - b.row) + abs(a.col - b.col)


def zero(a: Cell, b: Cell) -> float:
    """h=0 → A* degrades to Dijkstra."""
    return 0


HEURISTICS: Dict[str, Callable[[Cell, Cell], float]] = {
    "manhattan": manhattan,
    "zero":      zero,
}


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------
def astar(grid: Grid, start: Cell, end: Cell, heuristic: str = "manhattan") -> SearchResult:
    h_fn = HEURISTICS.get(heuristic)
    if h_fn is None:
        raise ValueError(f"Unknown heuristic: {heuristic}")
    prepare(grid, start, end)

    counter = itertools.count()
    visited_order: List[Cell] = []
    start.g = 0
    start.h = h_fn(start, end)
    start.f = start.h
    open_set: List[Tuple[float, int, int, int]] = [(start.f, next(counter), start.row, start.col)]

    while open_set:
        _, _, r, c = heapq.heappop(open_set)
        node = grid.cells[r][c]

        if node.visited:
            continue

        node.visited = True
        visited_order.append(node)

        if node == end:
            break

        for nbr in grid.neighbours(node):
            if nbr.visited or nbr.is_wall:
                continue
            tentative_g = node.g + nbr.weight
            if tentative_g < nbr.g:
                nbr.previous = node.coord
                nbr.g = tentative_g
                nbr.h = h_fn(nbr, end)
                nbr.f = nbr.g + nbr.h
                heapq.heappush(open_set, (nbr.f, next(counter), nbr.row, nbr.col))

    path = reconstruct_path(grid, start, end)
    logger.debug(
        "astar(%s): visited %d cells, path %d cells", heuristic, len(visited_order), len(path),
    )
    return SearchResult(visited_order=visited_order, path=path)
