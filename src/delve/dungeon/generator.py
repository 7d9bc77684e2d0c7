from __future__ import annotations

import logging
import random
import secrets
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from ..config import GenerationSettings
from ..exceptions import GenerationError
from ..pathfinding.astar import ConnectLocations, astar
from .feature import Feature, HorizontalAlignment, VerticalAlignment
from .grid import CARDINAL_OFFSETS, Grid
from .random_table import WeightedTable
from .shapes import ShapeSpec, build_shape, default_shape_table
from .tiles import Location, Terrain

logger = logging.getLogger(__name__)

# Alignment of a feature hung off the end of a hallway travelling in (dx, dy):
# the feature's near edge sits on the attachment cell, centred across the hallway.
_ATTACH_ALIGNMENT = {
    (1, 0): (VerticalAlignment.CENTER, HorizontalAlignment.LEFT),
    (-1, 0): (VerticalAlignment.CENTER, HorizontalAlignment.RIGHT),
    (0, 1): (VerticalAlignment.TOP, HorizontalAlignment.CENTER),
    (0, -1): (VerticalAlignment.BOTTOM, HorizontalAlignment.CENTER),
}

# Alignment of a hallway whose first cell is the carved wall, extending in (dx, dy).
_HALLWAY_ALIGNMENT = {
    (1, 0): (VerticalAlignment.TOP, HorizontalAlignment.LEFT),
    (-1, 0): (VerticalAlignment.TOP, HorizontalAlignment.RIGHT),
    (0, 1): (VerticalAlignment.TOP, HorizontalAlignment.LEFT),
    (0, -1): (VerticalAlignment.BOTTOM, HorizontalAlignment.LEFT),
}


def fits(grid: Grid, feature: Feature, margin: int = 1) -> bool:
    """True if every tile lies at least `margin` cells inside the grid on unallocated terrain."""
    max_x = grid.width - 1 - margin
    max_y = grid.height - 1 - margin
    for tile in feature:
        loc = tile.loc
        if not (margin <= loc.x <= max_x and margin <= loc.y <= max_y):
            return False
        if grid.get(loc) is not Terrain.NOTHING:
            return False
    return True


def commit(grid: Grid, feature: Feature) -> None:
    for tile in feature:
        grid.set(tile.loc, tile.terrain)


def surround_floors_with_walls(grid: Grid, locations: Optional[Iterable[Location]] = None) -> int:
    """Turn every NOTHING tile 8-adjacent to a walkable tile into WALL.

    Scans the whole grid unless `locations` narrows the walkable tiles to
    consider. Returns the number of walls added.
    """
    if locations is None:
        candidates: Iterable[Location] = (loc for tile, loc in grid.iter() if tile.terrain.is_walkable)
    else:
        candidates = [loc for loc in locations if grid.get(loc).is_walkable]
    added = 0
    for loc in candidates:
        for n in grid.adjacent(loc, include_diagonals=True):
            if grid.get(n) is Terrain.NOTHING:
                grid.set(n, Terrain.WALL)
                added += 1
    return added


def remove_wall_slivers(grid: Grid) -> int:
    """Open up walls with three or more walkable cardinal neighbours.

    Candidates are collected before any change, so one conversion never
    triggers another within the same pass. Returns the number converted.
    """
    slivers: List[Location] = []
    for loc in grid.locations_of(Terrain.WALL):
        open_sides = sum(1 for n in grid.adjacent(loc) if grid.get(n).is_walkable)
        if open_sides >= 3:
            slivers.append(loc)
    for loc in slivers:
        grid.set(loc, Terrain.FLOOR)
    return len(slivers)


@dataclass
class GenerationStats:
    seed: int = 0
    seed_attempts: int = 0
    features_placed: int = 0
    growth_rejected: int = 0
    connections_carved: int = 0
    slivers_removed: int = 0


class LevelGenerator:
    """
    Hallway-growth level generator.

    Algorithm:
    - Drop a seed feature near the grid centre (bounded rejection sampling).
    - Repeatedly pick a random wall, grow a straight hallway out of it and hang
      a new feature off the far end. Attempts that do not fit are rolled back.
    - Carve a few extra A* connections between walls through unallocated space.
    - Open up single-cell wall slivers.
    - Start on a random floor tile of the seed feature.

    After every commit, walkable tiles are fenced in by walls, so no walkable
    tile ever touches NOTHING.
    """

    def __init__(
        self,
        settings: Optional[GenerationSettings] = None,
        table: Optional[WeightedTable[ShapeSpec]] = None,
    ) -> None:
        self.settings = settings or GenerationSettings()
        self.table = table or default_shape_table(self.settings)
        self.stats = GenerationStats()

    def generate(self, seed: Optional[int] = None) -> Tuple[Grid, Location]:
        """Build a level. Returns (grid, start_location) or raises GenerationError."""
        s = self.settings
        if seed is None:
            seed = s.seed
        if seed is None:
            seed = secrets.randbits(32)
            logger.info("No seed provided; generated random seed: %d", seed)
        rng = random.Random(seed)
        self.stats = GenerationStats(seed=seed)
        logger.debug("Generating level: seed=%s size=%dx%d", seed, s.width, s.height)

        grid = Grid(s.width, s.height)
        seed_feature = self._place_seed(grid, rng)
        commit(grid, seed_feature)
        surround_floors_with_walls(grid, seed_feature.locations())
        self.stats.features_placed = 1

        for _ in range(s.growth_attempts):
            if self._grow(grid, rng):
                self.stats.features_placed += 1
            else:
                self.stats.growth_rejected += 1

        for _ in range(s.extra_connections):
            if self._connect(grid, rng):
                self.stats.connections_carved += 1

        self.stats.slivers_removed = remove_wall_slivers(grid)

        floors = [loc for loc in seed_feature.floors() if grid.get(loc) is Terrain.FLOOR]
        if not floors:
            raise GenerationError("Seed feature has no floor to start on")
        start = rng.choice(floors)

        logger.info(
            "Generated %dx%d level (seed=%d): %d features, %d connections, %d slivers removed, start=%s",
            s.width,
            s.height,
            seed,
            self.stats.features_placed,
            self.stats.connections_carved,
            self.stats.slivers_removed,
            start,
        )
        return grid, start

    # ---- Phases ------------------------------------------------------------
    def _place_seed(self, grid: Grid, rng: random.Random) -> Feature:
        s = self.settings
        shape = build_shape(self.table.sample(rng), rng)
        cx, cy = grid.width // 2, grid.height // 2
        for attempt in range(1, s.max_seed_attempts + 1):
            anchor = Location(
                cx + rng.randint(-s.seed_jitter, s.seed_jitter),
                cy + rng.randint(-s.seed_jitter, s.seed_jitter),
            )
            feature = shape.place(VerticalAlignment.CENTER, HorizontalAlignment.CENTER, anchor)
            if fits(grid, feature):
                self.stats.seed_attempts = attempt
                logger.debug("Seed %r placed at %s after %d attempt(s)", feature, anchor, attempt)
                return feature
        raise GenerationError(
            f"Could not generate a valid map with the given parameters: seed feature "
            f"{shape.bounds().width}x{shape.bounds().height} did not fit a "
            f"{grid.width}x{grid.height} grid in {s.max_seed_attempts} attempts"
        )

    def _grow(self, grid: Grid, rng: random.Random) -> bool:
        s = self.settings
        walls = grid.locations_of(Terrain.WALL)
        if not walls:
            return False
        door = rng.choice(walls)
        grid.set(door, Terrain.NOTHING)

        length = rng.randrange(s.hallway_min_length, s.hallway_max_length)
        directions = list(CARDINAL_OFFSETS)
        rng.shuffle(directions)
        hallway: Optional[Feature] = None
        direction = (0, 0)
        for dx, dy in directions:
            # Hallways leave through a doorway: the tile behind the wall must be open.
            if not grid.is_walkable(door.offset(-dx, -dy)):
                continue
            vertical, horizontal = _HALLWAY_ALIGNMENT[(dx, dy)]
            candidate = Feature.hallway(length, horizontal=dx != 0).place(vertical, horizontal, door)
            if fits(grid, candidate):
                hallway = candidate
                direction = (dx, dy)
                break
        if hallway is None:
            grid.set(door, Terrain.WALL)
            logger.debug("No hallway of length %d fits at %s", length, door)
            return False

        commit(grid, hallway)
        dx, dy = direction
        attach = door.offset(dx * length, dy * length)
        attach_before = grid.get(attach)
        grid.set(attach, Terrain.NOTHING)

        vertical, horizontal = _ATTACH_ALIGNMENT[direction]
        feature = build_shape(self.table.sample(rng), rng).place(vertical, horizontal, attach)
        if not fits(grid, feature):
            for loc in hallway.locations():
                grid.set(loc, Terrain.NOTHING)
            grid.set(attach, attach_before)
            grid.set(door, Terrain.WALL)
            logger.debug("%r does not fit at %s; rolled back hallway from %s", feature, attach, door)
            return False

        commit(grid, feature)
        grid.set(attach, Terrain.FLOOR)
        surround_floors_with_walls(grid, hallway.locations() + feature.locations() + [attach])
        logger.debug("Grew hallway %s -> %s and placed %r", door, attach, feature)
        return True

    def _connect(self, grid: Grid, rng: random.Random) -> bool:
        """Try to join two walls with a shortest corridor through unallocated space."""
        s = self.settings
        candidates = [loc for loc in grid.locations_of(Terrain.WALL) if self._is_connectable(grid, loc)]
        if len(candidates) < 2:
            return False
        a, b = rng.sample(candidates, 2)
        if a.manhattan(b) < s.hallway_min_length:
            return False

        grid.set(a, Terrain.NOTHING)
        grid.set(b, Terrain.NOTHING)
        path = astar(ConnectLocations(grid, a, b, margin=1))
        if path is None:
            grid.set(a, Terrain.WALL)
            grid.set(b, Terrain.WALL)
            logger.debug("No connection from %s to %s", a, b)
            return False

        terrain = Terrain.DEBUG if s.mark_connections else Terrain.FLOOR
        for loc in path:
            grid.set(loc, terrain)
        surround_floors_with_walls(grid, path)
        logger.debug("Connected %s to %s with %d tiles", a, b, len(path))
        return True

    @staticmethod
    def _is_connectable(grid: Grid, loc: Location) -> bool:
        if not (1 <= loc.x <= grid.width - 2 and 1 <= loc.y <= grid.height - 2):
            return False
        sides = [grid.get(n) for n in grid.adjacent(loc)]
        return any(t.is_walkable for t in sides) and any(t is Terrain.NOTHING for t in sides)


def generate(
    seed: Optional[int],
    width: int,
    height: int,
    settings: Optional[GenerationSettings] = None,
) -> Tuple[Grid, Location]:
    """Generate a width x height level from `seed`. Returns (grid, start_location)."""
    base = settings or GenerationSettings()
    return LevelGenerator(base.replace(width=width, height=height, seed=seed)).generate()


__all__ = [
    "LevelGenerator",
    "GenerationStats",
    "generate",
    "fits",
    "commit",
    "surround_floors_with_walls",
    "remove_wall_slivers",
]
