"""
timer.py — Owned Repeating Timer
================================
A cancellable interval that belongs to exactly one controller.  There is
no module-level handle: single mode and both comparison sides each own
their own Interval, so cancelling one can never stop another.

The timer is cooperative.  Nothing fires on its own; the owner's event
loop calls `poll()` (the Flask app does it on every request, tests do it
after advancing a fake clock) and every period that has elapsed since
the last poll fires the callback once, in order.

    iv = Interval(on_tick, clock=time.monotonic)
    iv.start(delay_ms=40)
    ...
    iv.poll()          # fires on_tick once per elapsed 40 ms
    iv.cancel()        # nothing pending survives this
"""

import time
from typing import Callable, Optional


# absorbs float drift when a fake clock lands exactly on a deadline
_EPSILON = 1e-9


class Interval:
    """
    Attributes:
        delay_ms : Current period, or None when never started.
        fired    : Number of callbacks fired since the last start().
    """

    def __init__(
        self,
        callback: Callable[[], None],
        clock: Callable[[], float] = time.monotonic,
    ):
        self._callback: Callable[[], None] = callback
        self._clock:    Callable[[], float] = clock
        self._next_due: Optional[float] = None
        self.delay_ms:  Optional[float] = None
        self.fired:     int             = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, delay_ms: float) -> None:
        if delay_ms <= 0:
            raise ValueError(f"Interval delay must be positive, got {delay_ms}")
        self.delay_ms  = delay_ms
        self.fired     = 0
        self._next_due = self._clock() + delay_ms / 1000.0

    def cancel(self) -> None:
        self._next_due = None

    def restart(self, delay_ms: float) -> None:
        self.cancel()
        self.start(delay_ms)

    @property
    def active(self) -> bool:
        return self._next_due is not None

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------
    def poll(self) -> int:
        """Fire the callback once per elapsed period; returns how many fired."""
        now = self._clock()
        count = 0
        # the callback may cancel (or restart) this interval mid-loop
        while self._next_due is not None and self._next_due <= now + _EPSILON:
            self._next_due += self.delay_ms / 1000.0
            self.fired += 1
            count += 1
            self._callback()
        return count
