"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Binary heap (heapq) keyed by cumulative distance.

  1. distance[start] = 0, push start
  2. Pop the minimum; skip it if already finalised (lazy deletion)
  3. Finalise → append to visited_order; stop if it is the end cell
  4. Relax each non-wall neighbour: entering it costs its `weight`;
     update only on a strictly shorter distance

Heap entries are (distance, counter, row, col).  The counter breaks ties
in insertion order, so equal-distance cells pop first-in first-out and
runs are deterministic.

Correctness note: weights are >= 1 by construction, Dijkstra's
non-negativity requirement always holds.
"""

import heapq
import itertools
import logging
from typing import List, Tuple

from grid import Cell, Grid
from algorithms.common import SearchResult, prepare, reconstruct_path


logger = logging.getLogger(__name__)


def dijkstra(grid: Grid, start: Cell, end: Cell) -> SearchResult:
    prepare(grid, start, end)

    counter = itertools.count()
    visited_order: List[Cell] = []
    start.distance = 0
    pq: List[Tuple[float, int, int, int]] = [(0, next(counter), start.row, start.col)]

    while pq:
        _, _, r, c = heapq.heappop(pq)
        node = grid.cells[r][c]

        # stale entry
        if node.visited:
            continue

        node.visited = True
        visited_order.append(node)

        if node == end:
            break

        for nbr in grid.neighbours(node):
            if nbr.visited or nbr.is_wall:
                continue
            new_dist = node.distance + nbr.weight
            if new_dist < nbr.distance:
                nbr.distance = new_dist
                nbr.previous = node.coord
                heapq.heappush(pq, (new_dist, next(counter), nbr.row, nbr.col))

    path = reconstruct_path(grid, start, end)
    logger.debug(
        "dijkstra: visited %d cells, path %d cells, cost %s",
        len(visited_order), len(path), end.distance,
    )
    return SearchResult(visited_order=visited_order, path=path)
