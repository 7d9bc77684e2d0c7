from __future__ import annotations

import heapq
import itertools
import logging
from abc import ABC, abstractmethod
from typing import Dict, Generic, Hashable, Iterable, List, Optional, Set, Tuple, TypeVar

from ..dungeon.grid import Grid
from ..dungeon.tiles import Location, Terrain

logger = logging.getLogger(__name__)

N = TypeVar("N", bound=Hashable)


class SearchProblem(ABC, Generic[N]):
    """A best-first search problem over hashable nodes with integer edge costs."""

    @abstractmethod
    def start(self) -> N:
        raise NotImplementedError

    @abstractmethod
    def is_goal(self, node: N) -> bool:
        raise NotImplementedError

    @abstractmethod
    def heuristic(self, node: N) -> int:
        """Estimated remaining cost. Must not overestimate for optimal results."""
        raise NotImplementedError

    @abstractmethod
    def neighbors(self, node: N) -> Iterable[Tuple[N, int]]:
        """(neighbour, edge_cost) pairs reachable from `node`."""
        raise NotImplementedError


def astar(problem: SearchProblem[N]) -> Optional[List[N]]:
    """
    A* search. Returns the node sequence from start to goal inclusive, or None
    when the open set empties without reaching a goal.

    The open set is ordered by g + h; equal priorities pop in the order they
    were pushed (FIFO), so results are reproducible for a fixed neighbour order.
    """
    start = problem.start()
    counter = itertools.count()
    open_heap: List[Tuple[int, int, N]] = [(problem.heuristic(start), next(counter), start)]
    g_score: Dict[N, int] = {start: 0}
    came_from: Dict[N, N] = {}
    closed: Set[N] = set()

    while open_heap:
        _f, _order, node = heapq.heappop(open_heap)
        if node in closed:
            continue
        if problem.is_goal(node):
            path = _reconstruct(came_from, node)
            logger.debug("A* reached goal after closing %d nodes; path length %d", len(closed), len(path))
            return path
        closed.add(node)
        g = g_score[node]
        for neighbour, cost in problem.neighbors(node):
            if neighbour in closed:
                continue
            tentative = g + cost
            if tentative < g_score.get(neighbour, tentative + 1):
                g_score[neighbour] = tentative
                came_from[neighbour] = node
                heapq.heappush(open_heap, (tentative + problem.heuristic(neighbour), next(counter), neighbour))

    logger.debug("A* exhausted open set after closing %d nodes; no path", len(closed))
    return None


def _reconstruct(came_from: Dict[N, N], node: N) -> List[N]:
    path = [node]
    while node in came_from:
        node = came_from[node]
        path.append(node)
    path.reverse()
    return path


class ConnectLocations(SearchProblem[Location]):
    """Route between two locations through NOTHING terrain.

    Cardinal moves only, unit cost, Manhattan heuristic (admissible and
    consistent, so returned paths are shortest). Cells closer than `margin` to
    the grid edge are never entered. The start and goal cells themselves are
    expected to be NOTHING already (the caller carves them before searching).
    """

    def __init__(self, grid: Grid, start: Location, goal: Location, margin: int = 0) -> None:
        self.grid = grid
        self._start = start
        self.goal = goal
        self.margin = margin

    def start(self) -> Location:
        return self._start

    def is_goal(self, node: Location) -> bool:
        return node == self.goal

    def heuristic(self, node: Location) -> int:
        return node.manhattan(self.goal)

    def neighbors(self, node: Location) -> List[Tuple[Location, int]]:
        m = self.margin
        max_x = self.grid.width - 1 - m
        max_y = self.grid.height - 1 - m
        return [
            (n, 1)
            for n in self.grid.adjacent(node)
            if m <= n.x <= max_x and m <= n.y <= max_y and self.grid.get(n) is Terrain.NOTHING
        ]


__all__ = ["SearchProblem", "astar", "ConnectLocations"]
