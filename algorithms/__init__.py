"""
algorithms/__init__.py — Algorithm Registry
=============================================
Single source of truth for every search the visualizer knows about.

    from algorithms import Algorithm, REGISTRY, get_algorithm, run_search

`Algorithm` is a closed enum; REGISTRY maps every member to an AlgoInfo
card and the module refuses to import if a member has no entry.  Adding
an algorithm is: write the function, add an enum member, add one entry
here.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Union

from grid import Grid
from algorithms.common   import SearchResult, reconstruct_path
from algorithms.bfs      import bfs      as _bfs
from algorithms.dfs      import dfs      as _dfs
from algorithms.dijkstra import dijkstra as _dijkstra
from algorithms.astar    import astar    as _astar, manhattan


logger = logging.getLogger(__name__)


class Algorithm(Enum):
    BFS      = "bfs"
    DFS      = "dfs"
    DIJKSTRA = "dijkstra"
    ASTAR    = "astar"


# ---------------------------------------------------------------------------
# AlgoInfo — metadata card for each algorithm
# ---------------------------------------------------------------------------
@dataclass
class AlgoInfo:
    key:               Algorithm
    label:             str                                  # e.g. "Breadth-First Search"
    fn:                Callable[..., SearchResult]
    tags:              List[str] = field(default_factory=list)
    weighted:          bool     = False                     # honours Cell.weight?
    shortest:          bool     = False                     # guarantees an optimal path?
    complexity_time:   str      = ""
    complexity_space:  str      = ""
    description:       str      = ""

    def to_dict(self) -> dict:
        return {
            "key":              self.key.value,
            "label":            self.label,
            "tags":             list(self.tags),
            "weighted":         self.weighted,
            "shortest":         self.shortest,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, AlgoInfo] = {

    Algorithm.BFS: AlgoInfo(
        key=Algorithm.BFS, label="Breadth-First Search", fn=_bfs,
        tags=["unweighted", "shortest-path", "traversal"], shortest=True,
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Explores layer-by-layer. Finds shortest path by hop count.",
    ),

    Algorithm.DFS: AlgoInfo(
        key=Algorithm.DFS, label="Depth-First Search", fn=_dfs,
        tags=["unweighted", "traversal"],
        complexity_time="O(V + E)", complexity_space="O(V)",
        description="Dives deep before backtracking. Does NOT guarantee shortest path.",
    ),

    Algorithm.DIJKSTRA: AlgoInfo(
        key=Algorithm.DIJKSTRA, label="Dijkstra's Algorithm", fn=_dijkstra,
        tags=["weighted", "shortest-path"], weighted=True, shortest=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Greedily expands the closest cell. Optimal for cell weights >= 1.",
    ),

    Algorithm.ASTAR: AlgoInfo(
        key=Algorithm.ASTAR, label="A* Search", fn=_astar,
        tags=["weighted", "shortest-path", "heuristic"], weighted=True, shortest=True,
        complexity_time="O((V + E) log V)", complexity_space="O(V)",
        description="Dijkstra + Manhattan-distance guidance. Expands far fewer cells.",
    ),
}

_missing = set(Algorithm) - set(REGISTRY)
if _missing:
    raise RuntimeError(f"Algorithms without a registry entry: {sorted(a.value for a in _missing)}")


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def get_algorithm(key: Union[str, Algorithm]) -> AlgoInfo:
    """Return AlgoInfo by enum member or key string; ValueError if unknown."""
    try:
        algo = key if isinstance(key, Algorithm) else Algorithm(key)
    except ValueError:
        raise ValueError(f"Unknown algorithm: {key}") from None
    return REGISTRY[algo]


def list_algorithms() -> List[AlgoInfo]:
    """Return all registered algorithms in insertion order."""
    return list(REGISTRY.values())


def algorithms_by_tag(tag: str) -> List[AlgoInfo]:
    return [a for a in REGISTRY.values() if tag in a.tags]


def run_search(key: Union[str, Algorithm], grid: Grid) -> SearchResult:
    """
    Validate `grid`, then run the algorithm on a snapshot of it.

    The caller's grid is never mutated; the returned cells belong to the
    snapshot.  Raises ConfigurationError before doing any work if the
    grid has no valid start / end.
    """
    info = get_algorithm(key)
    grid.validate()
    work = grid.snapshot()
    return info.fn(work, work.start, work.end)


__all__ = [
    "Algorithm",
    "AlgoInfo",
    "REGISTRY",
    "SearchResult",
    "get_algorithm",
    "list_algorithms",
    "algorithms_by_tag",
    "run_search",
    "reconstruct_path",
    "manhattan",
]
