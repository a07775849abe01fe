"""
grid/
-----
Board data layer.  Public API:

    from grid import Grid, Cell, create_grid
    from grid import MAZES, get_maze
"""

from grid.cell  import Cell, CellState, Coord
from grid.grid  import Grid, ConfigurationError, check_weight, create_grid, DIRECTIONS
from grid.mazes import MAZES, MazeInfo, get_maze, list_mazes

__all__ = [
    "Cell",   "CellState", "Coord",
    "Grid",   "ConfigurationError", "check_weight", "create_grid", "DIRECTIONS",
    "MAZES",  "MazeInfo", "get_maze", "list_mazes",
]
