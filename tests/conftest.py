"""Shared fixtures: a controllable clock and a few small boards."""

import pytest

from grid import Grid, create_grid


class FakeClock:
    """Stands in for time.monotonic; only moves when told to."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def default_grid():
    return create_grid()


@pytest.fixture
def tiny_grid():
    # 3x4, short log: 12 cells at most
    return Grid.from_text(
        """
        S...
        .#..
        ...E
        """
    )


@pytest.fixture
def split_grid():
    # a full wall column between start and end
    return Grid.from_text(
        """
        ...#...
        S..#..E
        ...#...
        ...#...
        """
    )
