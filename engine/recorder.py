"""
recorder.py — Run Recorder & Statistics
========================================
Runs one search to completion, turns it into a step log and computes the
statistics the UI shows next to the board.

Usage:
    rec = record("dijkstra", grid)     # grid is not mutated
    rec.log                            # replayable steps
    rec.stats.visited_count, rec.stats.path_length

Comparison Mode:
    Each side records its own run on its own copy of the board, then
    compare(a.stats, b.stats) → ComparisonResult.
"""

import logging
import time
from dataclasses import dataclass, field, asdict
from typing import List, Optional, Union

from grid import Grid
from algorithms import Algorithm, SearchResult, get_algorithm, run_search
from engine.sequencer import Step, build_log


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Statistics dataclass — what the info panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunStats:
    algo_key:      str           = ""
    algo_label:    str           = ""
    visited_count: int           = 0
    path_length:   Optional[int] = None     # cells on the path, None before any run
    path_cost:     float         = 0.0      # sum of entered cells' weights
    total_steps:   int           = 0        # length of the step log
    wall_time_ms:  float         = 0.0
    path_found:    bool          = False

    @property
    def no_path_found(self) -> bool:
        return self.path_length is not None and not self.path_found

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# ComparisonResult — side-by-side statistics
# ---------------------------------------------------------------------------
@dataclass
class ComparisonResult:
    left:           RunStats = field(default_factory=RunStats)
    right:          RunStats = field(default_factory=RunStats)
    winner_visited: str = ""    # which side finalised fewer cells
    winner_path:    str = ""    # which side found the cheaper path

    def to_dict(self) -> dict:
        return asdict(self)


# ---------------------------------------------------------------------------
# Recording
# ---------------------------------------------------------------------------
@dataclass
class Recording:
    result: SearchResult
    log:    List[Step]
    stats:  RunStats


def record(key: Union[str, Algorithm], grid: Grid) -> Recording:
    """Run `key` on a snapshot of `grid` and package log + statistics."""
    info = get_algorithm(key)

    started = time.monotonic()
    result  = run_search(info.key, grid)
    wall_ms = (time.monotonic() - started) * 1000

    log = build_log(result)
    stats = RunStats(
        algo_key=info.key.value,
        algo_label=info.label,
        visited_count=len(result.visited_order),
        path_length=len(result.path),
        path_cost=result.path_cost,
        total_steps=len(log),
        wall_time_ms=round(wall_ms, 2),
        path_found=result.path_found,
    )
    logger.debug(
        "Recorded %s: %d visited, path %d, %d steps in %.2f ms",
        stats.algo_key, stats.visited_count, stats.path_length, stats.total_steps, wall_ms,
    )
    return Recording(result=result, log=log, stats=stats)


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunStats, right: RunStats) -> ComparisonResult:
    """Given two sides' statistics, pick a winner per metric ("tie" if equal)."""

    def winner(l_val, r_val, l_key, r_key):
        if l_val == r_val:
            return "tie"
        return l_key if l_val < r_val else r_key

    l_key = f"A: {left.algo_label}"  if left.algo_label  else "A"
    r_key = f"B: {right.algo_label}" if right.algo_label else "B"

    # an unfound path always loses on path cost
    inf = float("inf")
    l_cost = left.path_cost  if left.path_found  else inf
    r_cost = right.path_cost if right.path_found else inf

    return ComparisonResult(
        left=left,
        right=right,
        winner_visited=winner(left.visited_count, right.visited_count, l_key, r_key),
        winner_path=winner(l_cost, r_cost, l_key, r_key),
    )
