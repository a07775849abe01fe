"""
dfs.py — Depth-First Search
=============================
Explicit stack, so no Python recursion limit issues on big boards.

Neighbours are pushed in reverse scan order so the first direction
(up, then right, down, left) is popped first: the walk hugs "up" and
only turns when it has to.  Cells are marked visited when pushed, which
means each cell enters the stack at most once and its predecessor is
the first cell that saw it.

Does NOT guarantee a shortest path; it demonstrates reachability and
backtracking.
"""

import logging
from typing import List

from grid import Cell, Grid
from algorithms.common import SearchResult, prepare, reconstruct_path


logger = logging.getLogger(__name__)


def dfs(grid: Grid, start: Cell, end: Cell) -> SearchResult:
    prepare(grid, start, end)

    visited_order: List[Cell] = []
    start.visited = True
    stack = [start]

    while stack:
        node = stack.pop()
        visited_order.append(node)

        if node == end:
            break

        fresh = [n for n in grid.neighbours(node) if not n.visited and not n.is_wall]
        for nbr in reversed(fresh):
            nbr.visited  = True
            nbr.previous = node.coord
            stack.append(nbr)

    path = reconstruct_path(grid, start, end)
    logger.debug("dfs: visited %d cells, path %d cells", len(visited_order), len(path))
    return SearchResult(visited_order=visited_order, path=path)
