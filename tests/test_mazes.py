"""
Test suite for the maze / preset factories.

Every generated board must be valid and solvable, whatever the seed.
"""

import pytest

from grid import MAZES, Grid, get_maze, list_mazes
from grid.mazes import SMALL_MAZE, random_maze, small_maze
from algorithms import run_search


GENERATED = [key for key in MAZES if key != "small"]

SIZES = [
    (20, 50, (10, 5), (10, 45)),
    (11, 21, (1, 1), (9, 19)),
    (6, 9, (0, 0), (5, 8)),
]


class TestFactories:

    @pytest.mark.parametrize("seed", [0, 1, 7, 42])
    @pytest.mark.parametrize("key", GENERATED)
    def test_default_board_is_valid_and_solvable(self, key, seed):
        g = get_maze(key).fn(seed=seed)
        assert (g.rows, g.cols) == (20, 50)
        assert g.start.coord == (10, 5)
        assert g.end.coord == (10, 45)
        g.validate()
        assert run_search("bfs", g).path

    @pytest.mark.parametrize("rows,cols,start,end", SIZES)
    @pytest.mark.parametrize("key", GENERATED)
    def test_other_sizes(self, key, rows, cols, start, end):
        g = get_maze(key).fn(rows=rows, cols=cols, start=start, end=end, seed=3)
        assert (g.rows, g.cols) == (rows, cols)
        g.validate()
        assert run_search("bfs", g).path

    @pytest.mark.parametrize("key", GENERATED)
    def test_same_seed_same_layout(self, key):
        fn = get_maze(key).fn
        assert fn(seed=11).to_text() == fn(seed=11).to_text()

    @pytest.mark.parametrize("key", ["recursive_division", "prims", "ellers"])
    def test_generators_actually_build_walls(self, key):
        g = get_maze(key).fn(seed=5)
        assert len(g.walls()) > 100

    def test_dense_random_still_solvable(self):
        g = random_maze(seed=2, density=0.9)
        g.validate()
        assert run_search("bfs", g).path

    def test_empty_has_no_walls(self):
        assert get_maze("empty").fn().walls() == []


class TestSmallPreset:

    def test_fixed_size(self):
        g = small_maze(rows=40, cols=40)
        assert (g.rows, g.cols) == (9, 15)
        assert g.to_text() == Grid.from_text(SMALL_MAZE).to_text()

    def test_solvable(self):
        result = run_search("bfs", small_maze())
        assert result.path[0].coord == (0, 0)
        assert result.path[-1].coord == (8, 14)


class TestRegistry:

    def test_keys(self):
        assert [m.key for m in list_mazes()] == [
            "empty", "random", "recursive_division", "prims", "ellers", "small",
        ]

    def test_unknown(self):
        with pytest.raises(ValueError):
            get_maze("kruskal")
