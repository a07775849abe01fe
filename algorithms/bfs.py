"""
bfs.py — Breadth-First Search
==============================
FIFO frontier over the 4-connected grid.

  1. Enqueue start, mark it visited
  2. Dequeue a cell → append to visited_order
  3. Stop if it is the end cell
  4. Enqueue every unvisited, non-wall neighbour (up, right, down, left),
     marking it visited immediately so it is never queued twice

Finds the shortest path by hop count.  Weights are ignored.
"""

import logging
from collections import deque
from typing import List

from grid import Cell, Grid
from algorithms.common import SearchResult, prepare, reconstruct_path


logger = logging.getLogger(__name__)


def bfs(grid: Grid, start: Cell, end: Cell) -> SearchResult:
    prepare(grid, start, end)

    visited_order: List[Cell] = []
    start.visited = True
    queue = deque([start])

    while queue:
        node = queue.popleft()
        visited_order.append(node)

        if node == end:
            break

        for nbr in grid.neighbours(node):
            if nbr.visited or nbr.is_wall:
                continue
            nbr.visited  = True
            nbr.previous = node.coord
            queue.append(nbr)

    path = reconstruct_path(grid, start, end)
    logger.debug("bfs: visited %d cells, path %d cells", len(visited_order), len(path))
    return SearchResult(visited_order=visited_order, path=path)
