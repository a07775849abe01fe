"""Test suite for the cooperative Interval timer."""

import pytest

from engine import Interval


class Counter:

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1


class TestInterval:

    def test_nothing_fires_before_due(self, clock):
        hits = Counter()
        iv = Interval(hits, clock=clock)
        iv.start(40)
        clock.advance(39)
        assert iv.poll() == 0
        assert hits.calls == 0

    def test_fires_once_per_elapsed_period(self, clock):
        hits = Counter()
        iv = Interval(hits, clock=clock)
        iv.start(40)
        clock.advance(140)
        assert iv.poll() == 3
        assert hits.calls == 3
        assert iv.fired == 3

        clock.advance(20)
        assert iv.poll() == 1

    def test_exact_deadline_fires(self, clock):
        hits = Counter()
        iv = Interval(hits, clock=clock)
        iv.start(160)
        for _ in range(4):
            clock.advance(160)
            iv.poll()
        assert hits.calls == 4

    def test_cancel_drops_pending(self, clock):
        hits = Counter()
        iv = Interval(hits, clock=clock)
        iv.start(40)
        clock.advance(400)
        iv.cancel()
        assert not iv.active
        assert iv.poll() == 0
        assert hits.calls == 0

    def test_restart_resets_phase(self, clock):
        hits = Counter()
        iv = Interval(hits, clock=clock)
        iv.start(100)
        clock.advance(90)
        iv.restart(50)
        clock.advance(20)
        assert iv.poll() == 0
        clock.advance(30)
        assert iv.poll() == 1
        assert iv.delay_ms == 50

    def test_callback_may_cancel(self, clock):
        iv = None

        def stop_after_two():
            stop_after_two.calls += 1
            if stop_after_two.calls == 2:
                iv.cancel()

        stop_after_two.calls = 0
        iv = Interval(stop_after_two, clock=clock)
        iv.start(10)
        clock.advance(100)
        assert iv.poll() == 2
        assert not iv.active

    def test_rejects_non_positive_delay(self, clock):
        iv = Interval(Counter(), clock=clock)
        with pytest.raises(ValueError):
            iv.start(0)

    def test_separate_intervals_are_independent(self, clock):
        first, second = Counter(), Counter()
        a = Interval(first, clock=clock)
        b = Interval(second, clock=clock)
        a.start(10)
        b.start(10)
        a.cancel()
        clock.advance(30)
        a.poll()
        b.poll()
        assert first.calls == 0
        assert second.calls == 3
