"""
Test suite for the step log and the Sequencer.

Tests cover:
- Log construction order (visits, then path marks)
- Forward / backward no-ops at the boundaries
- Full round trip restores a clean board
- Seek clamping
"""

import pytest

from algorithms import run_search
from engine import Sequencer, Step, StepKind, build_log, apply_forward, apply_backward


@pytest.fixture
def tiny_run(tiny_grid):
    result = run_search("bfs", tiny_grid)
    return tiny_grid, result, build_log(result)


class TestBuildLog:

    def test_visits_then_path(self, tiny_run):
        _, result, log = tiny_run
        n_visits = len(result.visited_order)

        assert len(log) == n_visits + len(result.path)
        assert all(s.kind is StepKind.VISIT for s in log[:n_visits])
        assert all(s.kind is StepKind.PATH for s in log[n_visits:])
        assert [s.coord for s in log[:n_visits]] == [c.coord for c in result.visited_order]
        assert [s.coord for s in log[n_visits:]] == [c.coord for c in result.path]

    def test_steps_are_frozen(self):
        step = Step(1, 2, StepKind.VISIT)
        with pytest.raises(AttributeError):
            step.row = 3


class TestNavigation:

    def test_forward_marks_cells(self, tiny_run):
        grid, _, log = tiny_run
        seq = Sequencer(grid, log)

        assert seq.forward() is True
        assert seq.index == 1
        assert grid.at(log[0].coord).visited
        assert seq.current_step == log[0]

    def test_backward_at_zero_is_noop(self, tiny_run):
        grid, _, log = tiny_run
        seq = Sequencer(grid, log)
        assert seq.backward() is False
        assert seq.index == 0
        assert seq.current_step is None

    def test_forward_at_end_is_noop(self, tiny_run):
        grid, _, log = tiny_run
        seq = Sequencer(grid, log)
        seq.jump_to_end()
        before = grid.state_matrix()

        assert seq.at_end
        assert seq.forward() is False
        assert seq.index == len(log)
        assert grid.state_matrix() == before

    def test_full_round_trip_leaves_clean_board(self, tiny_run):
        grid, result, log = tiny_run
        seq = Sequencer(grid, log)

        while seq.forward():
            pass
        assert set(grid.visited_cells()) == {c.coord for c in result.visited_order}
        assert set(grid.path_cells()) == {c.coord for c in result.path}

        while seq.backward():
            pass
        assert grid.visited_cells() == []
        assert grid.path_cells() == []

    def test_rewind_clears_board(self, tiny_run):
        grid, _, log = tiny_run
        seq = Sequencer(grid, log)
        seq.seek(7)
        seq.rewind()
        assert seq.index == 0
        assert seq.progress == 0.0
        assert grid.visited_cells() == []

    def test_seek_clamps(self, tiny_run):
        grid, _, log = tiny_run
        seq = Sequencer(grid, log)

        assert seq.seek(10 ** 6) == len(log)
        assert seq.progress == 1.0
        assert seq.seek(-5) == 0
        assert grid.visited_cells() == []

    def test_seek_matches_stepping(self, tiny_run):
        grid, _, log = tiny_run
        stepped = grid.snapshot()
        seq = Sequencer(grid, log)
        seq.seek(5)

        index = 0
        for _ in range(5):
            index = apply_forward(stepped, log, index)
        assert grid.state_matrix() == stepped.state_matrix()

    def test_functional_helpers_clamp(self, tiny_run):
        grid, _, log = tiny_run
        assert apply_backward(grid, log, 0) == 0
        assert apply_forward(grid, log, len(log)) == len(log)
        assert apply_forward(grid, log, len(log) + 10) == len(log)
