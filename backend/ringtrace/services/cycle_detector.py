"""
Cycle detection service for RingTrace.
"""

import logging
import time
from typing import Dict, List, Optional, Set, Tuple

from ringtrace import config


logger = logging.getLogger(__name__)

_EXHAUSTED = object()
_CLOCK_CHECK_INTERVAL = 1024


class CycleSearchLimitExceeded(Exception):
    """Raised when cycle enumeration runs past one of its configured bounds."""

    def __init__(self, reason: str, paths_explored: int, cycles_found: int):
        super().__init__(
            f"cycle search aborted ({reason}) after {paths_explored} paths, "
            f"{cycles_found} cycles"
        )
        self.reason = reason
        self.paths_explored = paths_explored
        self.cycles_found = cycles_found


def find_cycles(
    graph: Dict[str, List[str]],
    max_paths: Optional[int] = None,
    max_depth: Optional[int] = None,
    time_budget: Optional[float] = None,
) -> List[List[str]]:
    """
    Enumerate every simple cycle of length >= 3 with a DFS rooted at each key.

    Every member of a cycle roots its own search, so each cycle comes back
    once per rotation (and once per parallel edge along it). The explicit
    stack visits neighbors in adjacency order, which keeps discovery order
    identical to the recursive formulation.

    Cost grows with the number of simple paths, not edges, so the search is
    bounded: ``max_paths`` caps path extensions for the whole call,
    ``max_depth`` caps path length and ``time_budget`` caps elapsed seconds.
    A bound of None or 0 is unlimited. Crossing any bound raises
    CycleSearchLimitExceeded.
    """
    cycles: List[List[str]] = []
    explored = 0
    deadline = time.monotonic() + time_budget if time_budget else None

    for start in graph:
        path = [start]
        on_path: Set[str] = {start}
        stack = [iter(graph[start])]

        while stack:
            neighbor = next(stack[-1], _EXHAUSTED)
            if neighbor is _EXHAUSTED:
                stack.pop()
                on_path.discard(path.pop())
                continue

            if neighbor == start and len(path) >= config.CYCLE_MIN_LEN:
                cycles.append(list(path))
            if neighbor in on_path:
                continue

            explored += 1
            if max_paths and explored > max_paths:
                raise CycleSearchLimitExceeded("max_paths", explored, len(cycles))
            if max_depth and len(path) >= max_depth:
                raise CycleSearchLimitExceeded("max_depth", explored, len(cycles))
            if (
                deadline is not None
                and explored % _CLOCK_CHECK_INTERVAL == 0
                and time.monotonic() > deadline
            ):
                raise CycleSearchLimitExceeded("time_budget", explored, len(cycles))

            path.append(neighbor)
            on_path.add(neighbor)
            stack.append(iter(graph.get(neighbor, ())))

    logger.debug("Explored %d paths, found %d cycle occurrences.", explored, len(cycles))
    return cycles


def canonicalize_cycles(cycles: List[List[str]]) -> List[List[str]]:
    """
    Rotate each cycle to start at its smallest member and drop repeats.

    The first occurrence of each distinct cycle keeps its position.
    """
    unique_cycles: List[List[str]] = []
    seen: Set[Tuple[str, ...]] = set()
    for cycle in cycles:
        pivot = cycle.index(min(cycle))
        canonical = tuple(cycle[pivot:] + cycle[:pivot])
        if canonical not in seen:
            seen.add(canonical)
            unique_cycles.append(list(canonical))
    return unique_cycles
