from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional

from ..dungeon.grid import Grid
from ..dungeon.tiles import Location

logger = logging.getLogger(__name__)


class DistanceField:
    """
    Dijkstra map: distance from each reachable walkable tile to its nearest goal.

    Built by a layered multi-source expansion with unit-cost 8-connected steps.
    Layer 0 is the goal set; layer k+1 is every unvisited walkable neighbour of
    layer k. Expansion stops after `limit` layers or when a layer comes up
    empty. Tiles beyond the limit are absent rather than infinite.

    A field is a snapshot: it never mutates the grid and is not updated if the
    grid changes afterwards. Recompute it per query.
    """

    def __init__(self, grid: Grid, distances: Dict[Location, int], limit: int) -> None:
        self.grid = grid
        self.limit = limit
        self._distances = distances

    @classmethod
    def build(cls, grid: Grid, goals: Iterable[Location], limit: int) -> "DistanceField":
        goal_list = list(dict.fromkeys(goals))
        if not goal_list:
            raise ValueError("DistanceField requires at least one goal")
        if limit < 0:
            raise ValueError(f"DistanceField limit must be >= 0, got {limit}")
        for g in goal_list:
            if not grid.in_bounds(g):
                raise IndexError(f"Goal {g} is outside the {grid.width}x{grid.height} grid")

        distances: Dict[Location, int] = {g: 0 for g in goal_list}
        frontier = goal_list
        depth = 0
        while frontier and depth < limit:
            depth += 1
            next_frontier: List[Location] = []
            for loc in frontier:
                for n in grid.adjacent(loc, include_diagonals=True):
                    if n in distances or not grid.get(n).is_walkable:
                        continue
                    distances[n] = depth
                    next_frontier.append(n)
            frontier = next_frontier
        logger.debug(
            "DistanceField built from %d goals: %d tiles within %d steps", len(goal_list), len(distances), limit
        )
        return cls(grid, distances, limit)

    def distance(self, loc: Location) -> Optional[int]:
        return self._distances.get(loc)

    def sorted_neighbors(self, loc: Location) -> List[Location]:
        """8-connected neighbours present in the field, nearest-to-goal first.

        Ties keep Grid.adjacent order (N, E, S, W, NE, SE, SW, NW).
        """
        present = [n for n in self.grid.adjacent(loc, include_diagonals=True) if n in self._distances]
        return sorted(present, key=self._distances.__getitem__)

    def __contains__(self, loc: object) -> bool:
        return loc in self._distances

    def __getitem__(self, loc: Location) -> int:
        return self._distances[loc]

    def __len__(self) -> int:
        return len(self._distances)

    def __iter__(self) -> Iterator[Location]:
        return iter(self._distances)


def step_toward(grid: Grid, position: Location, goals: Iterable[Location], limit: int = 100) -> Optional[Location]:
    """Greedy navigation: the next tile to move to from `position` toward the nearest goal.

    Returns None when already on a goal or when no neighbour is closer to a goal
    than the current tile (no goal within `limit`, or boxed in).
    """
    field = DistanceField.build(grid, goals, limit)
    here = field.distance(position)
    if here == 0:
        return None
    neighbours = field.sorted_neighbors(position)
    if not neighbours:
        return None
    best = neighbours[0]
    if here is not None and field[best] >= here:
        return None
    return best


__all__ = ["DistanceField", "step_toward"]
