"""
Test suite for the single-board PlaybackController.

Tests cover:
- Speed → delay mapping
- Play / pause and natural completion
- Manual step / back / seek
- Speed changes while running
- Resets and edits invalidating the log
- Statistics
- Hold-to-repeat
- Refused runs
"""

import pytest

from config import SPEED_MIN, SPEED_MAX
from grid import Grid, ConfigurationError, create_grid
from algorithms import Algorithm
from engine import PlaybackController, ControllerState, speed_to_delay, clamp_speed


def make(clock, grid=None, **kwargs):
    return PlaybackController(
        grid=grid if grid is not None else create_grid(), clock=clock, **kwargs
    )


class TestSpeed:

    def test_default_delay_is_160ms(self):
        assert speed_to_delay(50) == 160

    def test_bounds(self):
        assert speed_to_delay(SPEED_MIN) == SPEED_MAX
        assert speed_to_delay(SPEED_MAX) == SPEED_MIN

    def test_faster_slider_means_shorter_delay(self):
        delays = [speed_to_delay(s) for s in range(SPEED_MIN, SPEED_MAX + 1)]
        assert all(a > b for a, b in zip(delays, delays[1:]))

    def test_out_of_range_is_clamped(self):
        assert clamp_speed(5000) == SPEED_MAX
        assert clamp_speed(-3) == SPEED_MIN


class TestPlayPause:

    def test_play_builds_log_lazily(self, clock):
        ctrl = make(clock=clock)
        assert ctrl.sequencer is None
        assert ctrl.state is ControllerState.IDLE

        ctrl.play()
        assert ctrl.sequencer is not None
        assert ctrl.is_playing
        assert ctrl.step_index == 0

    def test_ticks_advance_once_per_delay(self, clock):
        ctrl = make(clock=clock)
        ctrl.play()
        clock.advance(ctrl.delay_ms * 3)
        assert ctrl.tick() == 3
        assert ctrl.step_index == 3

    def test_play_while_running_is_noop(self, clock):
        ctrl = make(clock=clock)
        ctrl.play()
        clock.advance(100)
        ctrl.play()
        clock.advance(60)
        ctrl.tick()
        # the schedule was not restarted by the second play()
        assert ctrl.step_index == 1

    def test_pause_stops_further_ticks(self, clock):
        ctrl = make(clock=clock)
        ctrl.play()
        clock.advance(ctrl.delay_ms * 2)
        ctrl.tick()
        ctrl.pause()

        assert ctrl.state is ControllerState.PAUSED
        clock.advance(ctrl.delay_ms * 10)
        assert ctrl.tick() == 0
        assert ctrl.step_index == 2

    def test_pause_keeps_ticks_already_due(self, clock):
        ctrl = make(clock=clock)
        ctrl.play()
        clock.advance(ctrl.delay_ms * 2)
        ctrl.pause()
        assert ctrl.step_index == 2

    def test_toggle_play(self, clock):
        ctrl = make(clock=clock)
        ctrl.toggle_play()
        assert ctrl.is_playing
        ctrl.toggle_play()
        assert not ctrl.is_playing

    def test_self_pauses_at_end(self, clock, tiny_grid):
        ctrl = make(grid=tiny_grid, clock=clock)
        ctrl.play()
        total = len(ctrl.sequencer)
        clock.advance(ctrl.delay_ms * (total + 5))
        assert ctrl.tick() == total

        assert ctrl.step_index == total
        assert ctrl.state is ControllerState.PAUSED
        assert not ctrl.is_playing

    def test_play_at_end_does_not_start_timer(self, clock, tiny_grid):
        ctrl = make(grid=tiny_grid, clock=clock)
        ctrl.seek(10 ** 6)
        ctrl.play()
        assert ctrl.state is ControllerState.PAUSED
        clock.advance(1000)
        assert ctrl.tick() == 0


class TestManualNavigation:

    def test_step_from_idle_builds_and_applies_one(self, clock):
        ctrl = make(clock=clock)
        assert ctrl.step() is True
        assert ctrl.step_index == 1
        assert ctrl.state is ControllerState.PAUSED
        assert ctrl.grid.visited_cells() == [(10, 5)]

    def test_back_without_log_does_nothing(self, clock):
        ctrl = make(clock=clock)
        assert ctrl.back() is False
        assert ctrl.sequencer is None
        assert ctrl.state is ControllerState.IDLE

    def test_back_undoes_last_step(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        ctrl.step()
        assert ctrl.back() is True
        assert ctrl.step_index == 1
        assert ctrl.back() is True
        assert ctrl.back() is False
        assert ctrl.grid.visited_cells() == []

    def test_seek(self, clock):
        ctrl = make(clock=clock)
        assert ctrl.seek(25) == 25
        assert len(ctrl.grid.visited_cells()) == 25
        assert ctrl.seek(3) == 3
        assert len(ctrl.grid.visited_cells()) == 3

    def test_full_replay_draws_path(self, clock):
        ctrl = make(clock=clock)
        ctrl.seek(10 ** 6)
        assert len(ctrl.grid.path_cells()) == 41


class TestChangeSpeed:

    def test_restarts_running_timer(self, clock):
        ctrl = make(clock=clock)
        ctrl.play()
        clock.advance(100)
        ctrl.change_speed(SPEED_MAX)
        assert ctrl.delay_ms == SPEED_MIN

        clock.advance(SPEED_MIN)
        assert ctrl.tick() == 1
        assert ctrl.step_index == 1

    def test_ticks_due_at_old_rate_still_fire(self, clock):
        ctrl = make(clock=clock)
        ctrl.play()
        clock.advance(ctrl.delay_ms * 2)
        ctrl.change_speed(SPEED_MIN)
        assert ctrl.step_index == 2

    def test_paused_controller_stays_paused(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        ctrl.change_speed(120)
        clock.advance(1000)
        assert ctrl.tick() == 0
        assert ctrl.speed == 120


class TestResetsAndEdits:

    def test_reset_path_cancels_pending_ticks(self, clock):
        ctrl = make(clock=clock)
        ctrl.play()
        clock.advance(500)
        ctrl.reset_path()

        assert ctrl.state is ControllerState.IDLE
        assert ctrl.sequencer is None
        assert ctrl.tick() == 0
        assert ctrl.grid.visited_cells() == []

    def test_reset_grid_gives_fresh_board(self, clock):
        ctrl = make(clock=clock)
        ctrl.toggle_wall(0, 0)
        ctrl.play()
        clock.advance(500)
        ctrl.reset_grid()

        assert ctrl.tick() == 0
        assert ctrl.grid.walls() == []
        assert ctrl.state is ControllerState.IDLE

    def test_load_grid_swaps_board(self, clock, tiny_grid):
        ctrl = make(clock=clock)
        ctrl.step()
        ctrl.load_grid(tiny_grid)
        assert ctrl.grid is tiny_grid
        assert ctrl.sequencer is None
        assert ctrl.state is ControllerState.IDLE

    def test_reset_grid_keeps_algorithm(self, clock):
        ctrl = make(clock=clock, algorithm="astar")
        ctrl.reset_grid()
        assert ctrl.algorithm is Algorithm.ASTAR

    def test_edit_invalidates_log(self, clock):
        ctrl = make(clock=clock)
        for _ in range(3):
            ctrl.step()
        assert ctrl.toggle_wall(0, 0) is True

        assert ctrl.sequencer is None
        assert ctrl.state is ControllerState.IDLE
        assert ctrl.grid.visited_cells() == []
        assert ctrl.grid.cell(0, 0).is_wall

    def test_next_step_uses_new_layout(self, clock):
        ctrl = make(clock=clock)
        ctrl.seek(10 ** 6)
        ctrl.move_end(10, 7)
        ctrl.seek(10 ** 6)
        assert ctrl.statistics["path_length"] == 3

    def test_refused_edit_still_returns_false(self, clock):
        ctrl = make(clock=clock)
        assert ctrl.toggle_wall(10, 5) is False

    def test_out_of_bounds_edit_keeps_log(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        with pytest.raises(IndexError):
            ctrl.toggle_wall(99, 99)
        assert ctrl.step_index == 1

    def test_non_finite_weight_keeps_log(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        with pytest.raises(ValueError):
            ctrl.set_weight(2, 2, float("nan"))
        assert ctrl.step_index == 1
        assert ctrl.grid.cell(2, 2).weight == 1

    def test_weighted_cell_still_on_shortest_route(self, clock):
        ctrl = make(clock=clock, grid=create_grid(1, 3, (0, 0), (0, 2)), algorithm="dijkstra")
        ctrl.set_weight(0, 1, 3)
        ctrl.seek(10 ** 6)
        assert ctrl.statistics["path_length"] == 3
        assert ctrl.stats.path_cost == 4

    def test_select_algorithm_resets(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        ctrl.select_algorithm("dijkstra")
        assert ctrl.algorithm is Algorithm.DIJKSTRA
        assert ctrl.sequencer is None

    def test_select_unknown_algorithm_keeps_state(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        with pytest.raises(ValueError):
            ctrl.select_algorithm("nope")
        assert ctrl.step_index == 1


class TestStatistics:

    def test_before_any_run(self, clock):
        ctrl = make(clock=clock)
        assert ctrl.statistics == {"visited_count": 0, "path_length": None}
        assert ctrl.no_path_found is False

    def test_after_run(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        assert ctrl.statistics["path_length"] == 41
        assert 0 < ctrl.statistics["visited_count"] <= 1000
        assert ctrl.no_path_found is False

    def test_no_path_found(self, clock, split_grid):
        ctrl = make(grid=split_grid, clock=clock)
        ctrl.step()
        assert ctrl.statistics["path_length"] == 0
        assert ctrl.no_path_found is True

    def test_to_dict(self, clock):
        ctrl = make(clock=clock)
        ctrl.step()
        data = ctrl.to_dict()
        assert data["state"] == "paused"
        assert data["algorithm"] == "bfs"
        assert data["playback"]["step_index"] == 1
        assert data["grid"][10][5] == "start"
        assert "grid" not in ctrl.to_dict(include_grid=False)


class TestHold:

    def test_hold_step_repeats_until_release(self, clock):
        ctrl = make(clock=clock)
        assert ctrl.delay_ms == 160

        ctrl.press_step()
        assert ctrl.step_index == 1
        clock.advance(530)
        ctrl.tick()
        assert ctrl.step_index >= 4

        ctrl.release()
        held = ctrl.step_index
        clock.advance(1000)
        assert ctrl.tick() == 0
        assert ctrl.step_index == held
        assert not ctrl.is_holding

    def test_hold_back(self, clock):
        ctrl = make(clock=clock)
        ctrl.seek(10)
        ctrl.press_back()
        assert ctrl.step_index == 9
        clock.advance(ctrl.delay_ms * 3)
        ctrl.tick()
        assert ctrl.step_index == 6
        ctrl.release()

    def test_hold_cancels_itself_at_the_end(self, clock, tiny_grid):
        ctrl = make(clock=clock, grid=tiny_grid)
        ctrl.seek(10 ** 6)
        ctrl.press_step()
        assert ctrl.is_holding
        clock.advance(ctrl.delay_ms)
        assert ctrl.tick() == 1
        assert not ctrl.is_holding
        clock.advance(ctrl.delay_ms * 50)
        assert ctrl.tick() == 0

    def test_hold_back_stops_at_zero(self, clock):
        ctrl = make(clock=clock)
        ctrl.seek(2)
        ctrl.press_back()
        clock.advance(ctrl.delay_ms * 10)
        ctrl.tick()
        assert ctrl.step_index == 0
        assert not ctrl.is_holding
        ctrl.release()


class TestRefusedRun:

    def test_missing_end_leaves_controller_idle(self, clock):
        ctrl = make(grid=Grid.from_text("S...."), clock=clock)
        with pytest.raises(ConfigurationError):
            ctrl.play()
        assert ctrl.sequencer is None
        assert ctrl.state is ControllerState.IDLE
        assert not ctrl.is_playing

    def test_step_refused_too(self, clock):
        ctrl = make(grid=Grid.from_text("S...."), clock=clock)
        with pytest.raises(ConfigurationError):
            ctrl.step()
        assert ctrl.state is ControllerState.IDLE
