"""
mazes.py — Grid Factories
=========================
Alternative starting boards.  Every factory returns a fresh, valid Grid
(one start, one end, neither walled) in which the end is reachable.

    empty               – no walls
    random              – independent walls at a given density
    recursive_division  – chambers split by walls with one gap each
    prims               – randomised Prim's spanning tree
    ellers              – Eller's row-by-row set merging
    small               – a hand-drawn 9x15 preset

The carved generators (Prim's, Eller's) work on a "room lattice": rooms
sit on odd (row, col) coordinates and the cells between two rooms are
opened to connect them.  Recursive division puts walls on even indices
and gaps on odd ones, so the same lattice stays connected.

Start / end can land on a lattice wall; `_finish` opens them and links
them to the nearest open cell, and `_ensure_route` carves an L-shaped
corridor as the last resort so every factory is solvable.
"""

import logging
import random
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Set

from config import GRID_ROWS, GRID_COLS, START_NODE, END_NODE
from grid.cell import Coord
from grid.grid import Grid, create_grid, DIRECTIONS


logger = logging.getLogger(__name__)


SMALL_MAZE = """
S...#.........#
.##.#.#####.#.#
.#..#.#...#.#..
.#.##.#.#.#.##.
.#....#.#...#..
.######.#####.#
...#....#.....#
.#.#.####.###.#
.#.....#....#.E
"""


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def empty_grid(
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    start: Coord = START_NODE,
    end: Coord = END_NODE,
    seed: Optional[int] = None,
) -> Grid:
    return create_grid(rows, cols, start, end)


def random_maze(
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    start: Coord = START_NODE,
    end: Coord = END_NODE,
    seed: Optional[int] = None,
    density: float = 0.3,
) -> Grid:
    """Each non-start/end cell becomes a wall with probability `density`."""
    rng = random.Random(seed)
    g = create_grid(rows, cols, start, end)
    for cell in g:
        if not (cell.is_start or cell.is_end) and rng.random() < density:
            cell.is_wall = True
    _ensure_route(g)
    return g


def recursive_division_maze(
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    start: Coord = START_NODE,
    end: Coord = END_NODE,
    seed: Optional[int] = None,
) -> Grid:
    rng = random.Random(seed)
    g = Grid(rows=rows, cols=cols)

    def divide(top: int, bottom: int, left: int, right: int) -> None:
        wall_rows = [r for r in range(top + 1, bottom) if r % 2 == 0]
        wall_cols = [c for c in range(left + 1, right) if c % 2 == 0]
        gap_cols  = [c for c in range(left, right + 1) if c % 2 == 1]
        gap_rows  = [r for r in range(top, bottom + 1) if r % 2 == 1]

        can_h = bool(wall_rows and gap_cols)
        can_v = bool(wall_cols and gap_rows)
        if not can_h and not can_v:
            return

        height, width = bottom - top + 1, right - left + 1
        if can_h and can_v:
            if height > width:
                horizontal = True
            elif width > height:
                horizontal = False
            else:
                horizontal = rng.random() < 0.5
        else:
            horizontal = can_h

        if horizontal:
            wr  = rng.choice(wall_rows)
            gap = rng.choice(gap_cols)
            for c in range(left, right + 1):
                if c != gap:
                    g.cells[wr][c].is_wall = True
            divide(top, wr - 1, left, right)
            divide(wr + 1, bottom, left, right)
        else:
            wc  = rng.choice(wall_cols)
            gap = rng.choice(gap_rows)
            for r in range(top, bottom + 1):
                if r != gap:
                    g.cells[r][wc].is_wall = True
            divide(top, bottom, left, wc - 1)
            divide(top, bottom, wc + 1, right)

    divide(0, rows - 1, 0, cols - 1)
    _finish(g, start, end)
    return g


def prims_maze(
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    start: Coord = START_NODE,
    end: Coord = END_NODE,
    seed: Optional[int] = None,
) -> Grid:
    rng = random.Random(seed)
    g = _walled(rows, cols)
    n_rows, n_cols = rows // 2, cols // 2
    if n_rows and n_cols:
        first = (rng.randrange(n_rows), rng.randrange(n_cols))
        in_tree: Set[Coord] = {first}
        _open_room(g, first)
        frontier = [(first, nbr) for nbr in _room_neighbours(first, n_rows, n_cols)]

        while frontier:
            idx = rng.randrange(len(frontier))
            frontier[idx], frontier[-1] = frontier[-1], frontier[idx]
            room, nbr = frontier.pop()
            if nbr in in_tree:
                continue
            in_tree.add(nbr)
            _open_room(g, nbr)
            _open_between(g, room, nbr)
            for nxt in _room_neighbours(nbr, n_rows, n_cols):
                if nxt not in in_tree:
                    frontier.append((nbr, nxt))

    _finish(g, start, end)
    return g


def ellers_maze(
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    start: Coord = START_NODE,
    end: Coord = END_NODE,
    seed: Optional[int] = None,
) -> Grid:
    rng = random.Random(seed)
    g = _walled(rows, cols)
    n_rows, n_cols = rows // 2, cols // 2
    if n_rows and n_cols:
        row_sets: List[Optional[int]] = [None] * n_cols
        next_set = 0
        for i in range(n_rows):
            for j in range(n_cols):
                _open_room(g, (i, j))
                if row_sets[j] is None:
                    row_sets[j] = next_set
                    next_set += 1

            last = i == n_rows - 1

            # join horizontal neighbours in different sets (always on the last row)
            for j in range(n_cols - 1):
                if row_sets[j] != row_sets[j + 1] and (last or rng.random() < 0.5):
                    absorbed = row_sets[j + 1]
                    row_sets = [row_sets[j] if s == absorbed else s for s in row_sets]
                    _open_between(g, (i, j), (i, j + 1))

            if last:
                break

            # every set drops at least one connection to the next row
            members: Dict[int, List[int]] = {}
            for j, s in enumerate(row_sets):
                members.setdefault(s, []).append(j)
            below: List[Optional[int]] = [None] * n_cols
            for s, js in members.items():
                rng.shuffle(js)
                for j in js[:rng.randint(1, len(js))]:
                    below[j] = s
                    _open_between(g, (i, j), (i + 1, j))
            row_sets = below

    _finish(g, start, end)
    return g


def small_maze(
    rows: int = GRID_ROWS,
    cols: int = GRID_COLS,
    start: Coord = START_NODE,
    end: Coord = END_NODE,
    seed: Optional[int] = None,
) -> Grid:
    """Fixed preset; the requested size and endpoints are ignored."""
    g = Grid.from_text(SMALL_MAZE)
    g.validate()
    return g


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------
@dataclass
class MazeInfo:
    key:         str
    label:       str
    fn:          Callable[..., Grid]
    description: str = ""
    tags:        List[str] = field(default_factory=list)


MAZES: Dict[str, MazeInfo] = {
    "empty": MazeInfo(
        key="empty", label="Empty Grid", fn=empty_grid,
        description="No walls at all.",
    ),
    "random": MazeInfo(
        key="random", label="Random Walls", fn=random_maze,
        tags=["seeded"],
        description="Roughly 30% of cells become walls. A corridor is carved if the route is blocked.",
    ),
    "recursive_division": MazeInfo(
        key="recursive_division", label="Recursive Division", fn=recursive_division_maze,
        tags=["seeded", "perfect"],
        description="Splits the board into chambers, leaving one gap in every dividing wall.",
    ),
    "prims": MazeInfo(
        key="prims", label="Prim's Algorithm", fn=prims_maze,
        tags=["seeded", "perfect"],
        description="Grows a random spanning tree outward from a single room.",
    ),
    "ellers": MazeInfo(
        key="ellers", label="Eller's Algorithm", fn=ellers_maze,
        tags=["seeded", "perfect"],
        description="Builds the maze one row at a time by merging sets of rooms.",
    ),
    "small": MazeInfo(
        key="small", label="Small Maze", fn=small_maze,
        tags=["preset"],
        description="A hand-drawn 9x15 maze for quick demos.",
    ),
}


def get_maze(key: str) -> MazeInfo:
    info = MAZES.get(key)
    if info is None:
        raise ValueError(f"Unknown maze: {key}")
    return info


def list_mazes() -> List[MazeInfo]:
    return list(MAZES.values())


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _walled(rows: int, cols: int) -> Grid:
    g = Grid(rows=rows, cols=cols)
    for cell in g:
        cell.is_wall = True
    return g


def _room_cell(room: Coord) -> Coord:
    return (2 * room[0] + 1, 2 * room[1] + 1)


def _open_room(g: Grid, room: Coord) -> None:
    r, c = _room_cell(room)
    g.cells[r][c].is_wall = False


def _open_between(g: Grid, a: Coord, b: Coord) -> None:
    (ar, ac), (br, bc) = _room_cell(a), _room_cell(b)
    g.cells[(ar + br) // 2][(ac + bc) // 2].is_wall = False


def _room_neighbours(room: Coord, n_rows: int, n_cols: int) -> List[Coord]:
    i, j = room
    return [
        (i + di, j + dj)
        for di, dj in DIRECTIONS
        if 0 <= i + di < n_rows and 0 <= j + dj < n_cols
    ]


def _finish(g: Grid, start: Coord, end: Coord) -> None:
    """Place start / end on a generated layout and make sure they connect."""
    if not g.in_bounds(*start) or not g.in_bounds(*end):
        raise ValueError(f"Start {start} / end {end} outside the {g.rows}x{g.cols} grid")
    if tuple(start) == tuple(end):
        raise ValueError(f"Start and end must differ, both are {start}")
    g.move_start(*start)
    g.move_end(*end)
    _link(g, start)
    _link(g, end)
    _ensure_route(g)


def _link(g: Grid, coord: Coord) -> None:
    """Open one neighbour if `coord` is boxed in by walls."""
    cell = g.at(coord)
    nbrs = g.neighbours(cell)
    if any(not n.is_wall for n in nbrs):
        return
    for n in nbrs:
        if any(not m.is_wall for m in g.neighbours(n) if m != cell):
            n.is_wall = False
            return


def _ensure_route(g: Grid) -> None:
    start, end = g.start, g.end
    if end.coord in _reachable(g, start.coord):
        return
    logger.debug("Carving fallback corridor %s -> %s", start.coord, end.coord)
    (sr, sc), (er, ec) = start.coord, end.coord
    step = 1 if ec >= sc else -1
    for c in range(sc, ec + step, step):
        g.cells[sr][c].is_wall = False
    step = 1 if er >= sr else -1
    for r in range(sr, er + step, step):
        g.cells[r][ec].is_wall = False


def _reachable(g: Grid, origin: Coord) -> Set[Coord]:
    seen = {origin}
    queue = deque([origin])
    while queue:
        for n in g.neighbours(g.at(queue.popleft())):
            if not n.is_wall and n.coord not in seen:
                seen.add(n.coord)
                queue.append(n.coord)
    return seen
